"""Read a directory tree into ``FileEntry`` records.

Hidden entries are skipped unless requested, and when the tree lives inside a
git work tree the paths git reports as ignored are skipped too (build output
such as ``target/`` would otherwise swamp a package-sized mount).
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from ..vfs import FileEntry
from .base import PickError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IgnoredPaths:
    """Relative POSIX paths git reports as ignored under one root.

    Directory entries are stored without their trailing slash; a path is
    ignored when it or any of its parent directories is listed.
    """

    files: frozenset[str]
    dirs: frozenset[str]

    def is_ignored(self, rel_path: str) -> bool:
        if rel_path in self.files or rel_path in self.dirs:
            return True
        parts = rel_path.split("/")
        for idx in range(1, len(parts)):
            if "/".join(parts[:idx]) in self.dirs:
                return True
        return False


def load_ignored_paths(root: Path) -> IgnoredPaths | None:
    """Ask git which paths under ``root`` are ignored.

    Returns ``None`` when git is unavailable or ``root`` is not in a work tree.
    """
    if shutil.which("git") is None:
        return None
    try:
        proc = subprocess.run(
            [
                "git",
                "-C",
                str(root),
                "ls-files",
                "-z",
                "--others",
                "-i",
                "--exclude-standard",
                "--directory",
            ],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None

    files: set[str] = set()
    dirs: set[str] = set()
    for raw in proc.stdout.split(b"\x00"):
        if not raw:
            continue
        rel = raw.decode("utf-8", errors="replace")
        if rel.endswith("/"):
            dirs.add(rel.rstrip("/"))
        else:
            files.add(rel)
    return IgnoredPaths(files=frozenset(files), dirs=frozenset(dirs))


def collect_file_entries(
    root: Path,
    *,
    show_hidden: bool = False,
    skip_gitignored: bool = True,
    max_files: int = 2000,
) -> list[FileEntry]:
    """Walk ``root`` and return its regular files sorted by relative path.

    Symlinks are not followed. Raises ``PickError`` when ``root`` is not a
    readable directory or holds more than ``max_files`` files.
    """
    if not root.is_dir():
        raise PickError(f"not a directory: {root}")
    ignored = load_ignored_paths(root) if skip_gitignored else None

    entries: list[FileEntry] = []
    pending: list[tuple[Path, str]] = [(root, "")]
    while pending:
        directory, prefix = pending.pop()
        try:
            with os.scandir(directory) as scan:
                children = sorted(scan, key=lambda child: child.name)
        except OSError as exc:
            raise PickError(f"cannot read {directory}: {exc}") from exc

        for child in children:
            if not show_hidden and child.name.startswith("."):
                continue
            rel_path = f"{prefix}{child.name}"
            if ignored is not None and ignored.is_ignored(rel_path):
                continue
            if child.is_dir(follow_symlinks=False):
                pending.append((Path(child.path), f"{rel_path}/"))
                continue
            if not child.is_file(follow_symlinks=False):
                continue
            if len(entries) >= max_files:
                raise PickError(f"too many files (more than {max_files})")
            try:
                data = Path(child.path).read_bytes()
            except OSError as exc:
                raise PickError(f"cannot read {rel_path}: {exc}") from exc
            entries.append(FileEntry(path=rel_path, data=data))

    entries.sort(key=lambda entry: entry.path)
    logger.debug("collected %d files under %s", len(entries), root)
    return entries


__all__ = ["IgnoredPaths", "collect_file_entries", "load_ignored_paths"]
