"""Contracts for the external I/O the UI depends on.

The key dispatcher only sees these abstract services, so tests drive it with
deterministic fakes instead of a live desktop, filesystem, or network.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from ..vfs import FileEntry


class ServiceError(Exception):
    """Base class for recoverable external-call failures."""


class PickError(ServiceError):
    """File picking failed or was cancelled."""


class ExportError(ServiceError):
    """Archive export failed."""


class FetchError(ServiceError):
    """Text fetch failed (transport, status, or decoding)."""


class FilePickService(ABC):
    @abstractmethod
    async def pick(self) -> list[FileEntry]:
        """Let the user choose a tree and return its files.

        Raises ``PickError`` on failure or cancellation.
        """


class ArchiveExportService(ABC):
    @abstractmethod
    def export(self, entries: Sequence[FileEntry]) -> Path:
        """Deliver ``entries`` as an archive and return where it was written.

        Raises ``ExportError`` on failure.
        """


class TextFetchService(ABC):
    @abstractmethod
    async def fetch(self) -> str:
        """Fetch the fixed text resource. Raises ``FetchError`` on failure."""


__all__ = [
    "ArchiveExportService",
    "ExportError",
    "FetchError",
    "FilePickService",
    "PickError",
    "ServiceError",
    "TextFetchService",
]
