"""Zip archive export of a VFS snapshot."""

from __future__ import annotations

import logging
import os
import tempfile
import zipfile
from collections.abc import Sequence
from pathlib import Path, PurePosixPath

from ..vfs import FileEntry
from .base import ArchiveExportService, ExportError

logger = logging.getLogger(__name__)

DEFAULT_ARCHIVE_NAME = "crate.zip"


def _check_member_path(path: str) -> None:
    """Reject archive member names that would escape the extraction root."""
    pure = PurePosixPath(path)
    if not path or pure.is_absolute() or ".." in pure.parts:
        raise ExportError(f"invalid archive path: {path!r}")


class ZipArchiveExporter(ArchiveExportService):
    """Write entries into ``export_dir / archive_name``.

    The archive is assembled in a temporary file in the same directory and
    renamed into place, so a failed export never leaves a truncated zip.
    """

    def __init__(self, export_dir: Path, archive_name: str = DEFAULT_ARCHIVE_NAME) -> None:
        self.export_dir = export_dir
        self.archive_name = archive_name

    @property
    def target_path(self) -> Path:
        return self.export_dir / self.archive_name

    def export(self, entries: Sequence[FileEntry]) -> Path:
        for entry in entries:
            _check_member_path(entry.path)

        target = self.target_path
        tmp_name: str | None = None
        try:
            self.export_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".vfsview-", suffix=".zip", dir=self.export_dir)
            with os.fdopen(fd, "wb") as handle:
                with zipfile.ZipFile(handle, "w", compression=zipfile.ZIP_DEFLATED) as archive:
                    for entry in entries:
                        archive.writestr(entry.path, entry.data)
            os.replace(tmp_name, target)
            tmp_name = None
        except OSError as exc:
            raise ExportError(str(exc)) from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass

        logger.info("exported %d files to %s", len(entries), target)
        return target


__all__ = ["DEFAULT_ARCHIVE_NAME", "ZipArchiveExporter"]
