"""Directory tree reading tests.

Verifies ordering, hidden-file and gitignore filtering, symlink handling and
the file-count limit.
"""

from __future__ import annotations

import shutil
import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from vfsview.services import PickError
from vfsview.services.tree_reader import IgnoredPaths, collect_file_entries, load_ignored_paths
from vfsview.vfs import FileEntry


def _write(root: Path, rel: str, data: bytes = b"x") -> None:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


class CollectFileEntriesTests(unittest.TestCase):
    def test_collects_relative_posix_paths_sorted(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _write(root, "src/main.rs", b"fn main() {}\n")
            _write(root, "Cargo.toml", b"[package]\n")
            _write(root, "src/bin/tool.rs", b"")

            entries = collect_file_entries(root, skip_gitignored=False)

        self.assertEqual(
            entries,
            [
                FileEntry(path="Cargo.toml", data=b"[package]\n"),
                FileEntry(path="src/bin/tool.rs", data=b""),
                FileEntry(path="src/main.rs", data=b"fn main() {}\n"),
            ],
        )

    def test_hidden_entries_skipped_unless_requested(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _write(root, ".env")
            _write(root, ".git/config")
            _write(root, "visible.txt")

            default = collect_file_entries(root, skip_gitignored=False)
            with_hidden = collect_file_entries(root, show_hidden=True, skip_gitignored=False)

        self.assertEqual([entry.path for entry in default], ["visible.txt"])
        self.assertEqual([entry.path for entry in with_hidden], [".env", ".git/config", "visible.txt"])

    def test_symlinks_are_not_followed(self) -> None:
        with tempfile.TemporaryDirectory() as tmp, tempfile.TemporaryDirectory() as outside:
            root = Path(tmp)
            _write(Path(outside), "secret.txt")
            _write(root, "real.txt")
            (root / "link").symlink_to(outside, target_is_directory=True)
            (root / "file_link").symlink_to(root / "real.txt")

            entries = collect_file_entries(root, skip_gitignored=False)

        self.assertEqual([entry.path for entry in entries], ["real.txt"])

    def test_too_many_files_is_a_pick_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for idx in range(4):
                _write(root, f"f{idx}.txt")

            with self.assertRaises(PickError):
                collect_file_entries(root, skip_gitignored=False, max_files=3)
            self.assertEqual(len(collect_file_entries(root, skip_gitignored=False, max_files=4)), 4)

    def test_missing_root_is_a_pick_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(PickError):
                collect_file_entries(Path(tmp) / "missing")

    def test_ignored_paths_are_skipped(self) -> None:
        ignored = IgnoredPaths(files=frozenset({"notes.log"}), dirs=frozenset({"target"}))
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _write(root, "notes.log")
            _write(root, "target/debug/app")
            _write(root, "src/lib.rs")
            with mock.patch("vfsview.services.tree_reader.load_ignored_paths", return_value=ignored):
                entries = collect_file_entries(root)

        self.assertEqual([entry.path for entry in entries], ["src/lib.rs"])


class IgnoredPathsTests(unittest.TestCase):
    def test_parent_directory_match_ignores_descendants(self) -> None:
        ignored = IgnoredPaths(files=frozenset({"a/b.txt"}), dirs=frozenset({"target", "x/y"}))

        self.assertTrue(ignored.is_ignored("target"))
        self.assertTrue(ignored.is_ignored("target/debug/app"))
        self.assertTrue(ignored.is_ignored("x/y/z.txt"))
        self.assertTrue(ignored.is_ignored("a/b.txt"))
        self.assertFalse(ignored.is_ignored("a/c.txt"))
        self.assertFalse(ignored.is_ignored("targets.txt"))

    def test_no_git_means_no_matcher(self) -> None:
        with mock.patch("vfsview.services.tree_reader.shutil.which", return_value=None):
            self.assertIsNone(load_ignored_paths(Path(".")))


@unittest.skipIf(shutil.which("git") is None, "git not installed")
class GitIgnoreIntegrationTests(unittest.TestCase):
    def test_gitignored_build_output_is_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            subprocess.run(["git", "init", "-q", str(root)], check=True)
            _write(root, ".gitignore", b"target/\n*.log\n")
            _write(root, "target/debug/app")
            _write(root, "build.log")
            _write(root, "src/lib.rs")

            entries = collect_file_entries(root)
            nested = load_ignored_paths(root / "src")

        self.assertEqual([entry.path for entry in entries], ["src/lib.rs"])
        self.assertIsNotNone(nested)


if __name__ == "__main__":
    unittest.main()
