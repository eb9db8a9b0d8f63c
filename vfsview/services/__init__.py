"""External I/O boundary: file picking, archive export, text fetch."""

from .archive import DEFAULT_ARCHIVE_NAME, ZipArchiveExporter
from .base import (
    ArchiveExportService,
    ExportError,
    FetchError,
    FilePickService,
    PickError,
    ServiceError,
    TextFetchService,
)
from .fetch import HttpTextFetcher
from .picker import DialogDirectoryPicker, HostFilePicker, PathDirectoryPicker, TreeReadOptions

__all__ = [
    "DEFAULT_ARCHIVE_NAME",
    "ArchiveExportService",
    "DialogDirectoryPicker",
    "ExportError",
    "FetchError",
    "FilePickService",
    "HostFilePicker",
    "HttpTextFetcher",
    "PathDirectoryPicker",
    "PickError",
    "ServiceError",
    "TextFetchService",
    "TreeReadOptions",
    "ZipArchiveExporter",
]
