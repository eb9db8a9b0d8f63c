"""Deterministic test doubles for the VFS and external services."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from pathlib import Path

from vfsview.services import (
    ArchiveExportService,
    ExportError,
    FilePickService,
    PickError,
    TextFetchService,
)
from vfsview.vfs import FileEntry, Vfs


def make_entries(files: Mapping[str, bytes | str]) -> list[FileEntry]:
    out: list[FileEntry] = []
    for path, data in files.items():
        raw = data.encode("utf-8") if isinstance(data, str) else data
        out.append(FileEntry(path=path, data=raw))
    return out


class RecordingVfs(Vfs):
    """Plain-dict VFS that records every call made against it."""

    def __init__(self, files: Mapping[str, bytes] | None = None) -> None:
        self.files: dict[str, bytes] = dict(files or {})
        self.calls: list[tuple[str, str | None]] = []

    def list(self) -> list[str]:
        self.calls.append(("list", None))
        return sorted(self.files)

    def read(self, path: str) -> bytes | None:
        self.calls.append(("read", path))
        return self.files.get(path)

    def write(self, path: str, data: bytes) -> None:
        self.calls.append(("write", path))
        self.files[path] = bytes(data)


class FakePicker(FilePickService):
    """Return queued outcomes in order; exceptions are raised."""

    def __init__(self, *outcomes: Sequence[FileEntry] | PickError) -> None:
        self.outcomes = list(outcomes)
        self.calls = 0

    async def pick(self) -> list[FileEntry]:
        self.calls += 1
        outcome = self.outcomes.pop(0)
        await asyncio.sleep(0)
        if isinstance(outcome, Exception):
            raise outcome
        return list(outcome)


class GatedPicker(FilePickService):
    """Each ``pick`` waits on a future the test resolves explicitly."""

    def __init__(self) -> None:
        self.pending: list[asyncio.Future[list[FileEntry]]] = []

    async def pick(self) -> list[FileEntry]:
        future: asyncio.Future[list[FileEntry]] = asyncio.get_running_loop().create_future()
        self.pending.append(future)
        return await future


class FakeExporter(ArchiveExportService):
    def __init__(self, error: ExportError | None = None) -> None:
        self.error = error
        self.exports: list[list[FileEntry]] = []

    def export(self, entries: Sequence[FileEntry]) -> Path:
        self.exports.append(list(entries))
        if self.error is not None:
            raise self.error
        return Path("/tmp/crate.zip")


class FakeFetcher(TextFetchService):
    """Return ``text`` or raise ``error``; optionally wait on ``gate`` first."""

    def __init__(self, text: str = "sample text", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls = 0
        self.gate: asyncio.Event | None = None

    async def fetch(self) -> str:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self.text
