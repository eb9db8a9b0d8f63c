"""CLI argument and config-merge behavior tests.

Verifies how ``vfsview.cli.main`` validates the target path, merges flags over
persisted config, and routes to ``--previews``, ``--save-config`` or the UI.
Prevents regressions in command-line entrypoint ergonomics.
"""

from __future__ import annotations

import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from vfsview import cli


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._config_dir = tempfile.TemporaryDirectory()
        self.config_path = Path(self._config_dir.name) / "config.json"
        patches = [
            mock.patch("vfsview.runtime.config.CONFIG_PATH", self.config_path),
            mock.patch("vfsview.cli.configure_logging"),
        ]
        for patcher in patches:
            patcher.start()
            self.addCleanup(patcher.stop)
        self.addCleanup(self._config_dir.cleanup)

    def _run(self, argv: list[str]) -> str:
        with mock.patch("sys.stdout", new_callable=io.StringIO) as stdout:
            cli.main(argv)
        return stdout.getvalue()

    def test_previews_prints_status_and_previews(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a.txt").write_text("hi", encoding="utf-8")
            (root / "b").mkdir()
            (root / "b" / "c.txt").write_text(
                "line1\nline2 with extra text beyond thirty chars",
                encoding="utf-8",
            )

            output = self._run([str(root), "--previews"])

        self.assertEqual(
            output,
            "Loaded 2 files. Press E to export.\n"
            "\n"
            "a.txt: hi\n"
            "b/c.txt: line1 line2 with extra text be\n",
        )

    def test_previews_failure_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for idx in range(3):
                (root / f"f{idx}.txt").write_text("x", encoding="utf-8")
            self.config_path.write_text('{"max_files": 2}', encoding="utf-8")

            with self.assertRaises(SystemExit) as ctx:
                self._run([str(root), "--previews"])

        self.assertIn("Failed to load crate", str(ctx.exception.code))

    def test_missing_directory_is_rejected(self) -> None:
        with mock.patch("sys.stderr", new_callable=io.StringIO):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["/definitely/not/here"])
        self.assertEqual(ctx.exception.code, 2)

    def test_save_config_persists_overrides(self) -> None:
        output = self._run(["--text-url", "http://example.test/", "--save-config"])

        self.assertIn(str(self.config_path), output)
        self.assertIn('"text_base_url": "http://example.test/"', self.config_path.read_text(encoding="utf-8"))

    def test_interactive_run_receives_merged_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmp, mock.patch("vfsview.runtime.run_app") as run_app:
            cli.main([tmp, "--no-color", "--show-hidden", "--style", "native"])

        root, config = run_app.call_args.args
        self.assertEqual(root, Path(tmp).resolve())
        self.assertTrue(config.show_hidden)
        self.assertEqual(config.style, "native")
        self.assertEqual(run_app.call_args.kwargs, {"no_color": True})


if __name__ == "__main__":
    unittest.main()
