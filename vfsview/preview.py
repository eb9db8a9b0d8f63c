"""Preview projection: bounded single-line summaries of mounted files.

Previews are always rebuilt from scratch from the VFS so the list shown in
the UI never mixes content from two different mounts.
"""

from __future__ import annotations

from dataclasses import dataclass

from .vfs import Vfs

PREVIEW_MAX_CHARS = 30


@dataclass(frozen=True)
class FilePreview:
    path: str
    preview: str


def preview_text(data: bytes, max_chars: int = PREVIEW_MAX_CHARS) -> str:
    """Decode ``data`` leniently, collapse newlines, and keep ``max_chars`` characters."""
    text = data.decode("utf-8", errors="replace").replace("\n", " ")
    return text[:max_chars]


def build_previews(vfs: Vfs, max_chars: int = PREVIEW_MAX_CHARS) -> tuple[FilePreview, ...]:
    """Project every file of ``vfs`` into a ``FilePreview`` in path order."""
    previews: list[FilePreview] = []
    for path in vfs.list():
        data = vfs.read(path)
        previews.append(FilePreview(path=path, preview=preview_text(data or b"", max_chars)))
    return tuple(previews)


def loaded_status(file_count: int) -> str:
    return f"Loaded {file_count} files. Press E to export."


__all__ = [
    "PREVIEW_MAX_CHARS",
    "FilePreview",
    "build_previews",
    "loaded_status",
    "preview_text",
]
