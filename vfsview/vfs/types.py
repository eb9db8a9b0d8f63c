"""Domain datatypes exchanged between the VFS and external services."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FileEntry:
    """One file of a picked or exported tree.

    ``path`` is relative and POSIX-separated (``"src/lib.rs"``).
    """

    path: str
    data: bytes


__all__ = ["FileEntry"]
