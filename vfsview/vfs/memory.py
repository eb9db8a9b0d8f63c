"""Ordered in-memory VFS, the production ``Vfs`` implementation."""

from __future__ import annotations

import bisect
from collections.abc import Iterable

from .base import Vfs
from .types import FileEntry


class InMemoryVfs(Vfs):
    """Path -> bytes store with deterministic lexicographic ordering.

    Content lives in a dict; a parallel sorted key list keeps ``list()`` a
    plain copy. Written buffers are copied into immutable ``bytes`` so no
    caller can alias stored content.
    """

    def __init__(self) -> None:
        self._files: dict[str, bytes] = {}
        self._paths: list[str] = []

    @classmethod
    def from_entries(cls, entries: Iterable[FileEntry]) -> InMemoryVfs:
        """Build a VFS from picked entries; later duplicates overwrite earlier ones."""
        vfs = cls()
        for entry in entries:
            vfs.write(entry.path, entry.data)
        return vfs

    def list(self) -> list[str]:
        return list(self._paths)

    def read(self, path: str) -> bytes | None:
        return self._files.get(path)

    def write(self, path: str, data: bytes) -> None:
        if path not in self._files:
            bisect.insort(self._paths, path)
        self._files[path] = bytes(data)

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, path: object) -> bool:
        return path in self._files

    def __repr__(self) -> str:
        return f"InMemoryVfs(files={len(self._paths)})"


__all__ = ["InMemoryVfs"]
