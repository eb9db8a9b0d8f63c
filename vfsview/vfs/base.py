"""Capability interface for path-addressed byte stores."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .types import FileEntry


class Vfs(ABC):
    """Abstract virtual file system keyed by relative path."""

    @abstractmethod
    def list(self) -> list[str]:
        """Return every stored path in lexicographic order."""

    @abstractmethod
    def read(self, path: str) -> bytes | None:
        """Return stored bytes for ``path`` or ``None`` when unknown."""

    @abstractmethod
    def write(self, path: str, data: bytes) -> None:
        """Create ``path`` or fully replace its content."""

    def entries(self) -> list[FileEntry]:
        """Snapshot all files as ``FileEntry`` records in ``list()`` order."""
        out: list[FileEntry] = []
        for path in self.list():
            data = self.read(path)
            out.append(FileEntry(path=path, data=data if data is not None else b""))
        return out

    def __len__(self) -> int:
        return len(self.list())

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.read(path) is not None


__all__ = ["Vfs"]
