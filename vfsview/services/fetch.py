"""HTTP text-fetch service."""

from __future__ import annotations

import logging

import httpx

from .base import FetchError, TextFetchService

logger = logging.getLogger(__name__)

DEFAULT_TEXT_BASE_URL = "http://127.0.0.1:8000/"
DEFAULT_TEXT_PATH = "assets/sample.txt"
DEFAULT_FETCH_TIMEOUT_SECONDS = 10.0


class HttpTextFetcher(TextFetchService):
    """GET one fixed resource relative to ``base_url`` and return its body.

    Attributes:
        base_url: Server root the resource path is resolved against.
        resource_path: Relative path of the text resource.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_TEXT_BASE_URL,
        resource_path: str = DEFAULT_TEXT_PATH,
        timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            base_url: Server root.
            resource_path: Resource to fetch, relative to ``base_url``.
            timeout: Request timeout in seconds.
            transport: Custom transport (e.g. ``httpx.MockTransport`` in tests).
        """
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self.resource_path = resource_path.lstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.resource_path}"

    async def fetch(self) -> str:
        """Return the response body as text.

        Raises:
            FetchError: On transport errors, non-2xx responses, or an
                undecodable body.
        """
        url = self.url
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url)
                response.raise_for_status()
                text = response.text
        except httpx.HTTPStatusError as exc:
            raise FetchError(f"{url} returned HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"request to {url} failed: {exc}") from exc
        except (UnicodeDecodeError, LookupError) as exc:
            raise FetchError(f"cannot decode response from {url}: {exc}") from exc
        logger.info("fetched %d characters from %s", len(text), url)
        return text


__all__ = [
    "DEFAULT_FETCH_TIMEOUT_SECONDS",
    "DEFAULT_TEXT_BASE_URL",
    "DEFAULT_TEXT_PATH",
    "HttpTextFetcher",
]
