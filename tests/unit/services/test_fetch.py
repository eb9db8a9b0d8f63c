"""HTTP text fetcher tests.

Uses ``httpx.MockTransport`` so success, non-2xx and transport failures are
exercised without network access.
"""

from __future__ import annotations

import unittest

import httpx

from vfsview.services import FetchError, HttpTextFetcher


class HttpTextFetcherTests(unittest.IsolatedAsyncioTestCase):
    async def test_returns_body_text(self) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, text="hello from server")

        fetcher = HttpTextFetcher("http://example.test", transport=httpx.MockTransport(handler))

        self.assertEqual(await fetcher.fetch(), "hello from server")
        self.assertEqual(str(requests[0].url), "http://example.test/assets/sample.txt")
        self.assertEqual(requests[0].method, "GET")

    async def test_non_success_status_is_fetch_error(self) -> None:
        fetcher = HttpTextFetcher(
            "http://example.test/",
            transport=httpx.MockTransport(lambda request: httpx.Response(404, text="nope")),
        )

        with self.assertRaises(FetchError) as ctx:
            await fetcher.fetch()
        self.assertIn("404", str(ctx.exception))

    async def test_transport_error_is_fetch_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        fetcher = HttpTextFetcher("http://example.test/", transport=httpx.MockTransport(handler))

        with self.assertRaises(FetchError) as ctx:
            await fetcher.fetch()
        self.assertIsInstance(ctx.exception.__cause__, httpx.ConnectError)

    def test_url_joins_base_and_resource_path(self) -> None:
        fetcher = HttpTextFetcher("http://example.test/app", resource_path="/data/text.txt")

        self.assertEqual(fetcher.url, "http://example.test/app/data/text.txt")


if __name__ == "__main__":
    unittest.main()
