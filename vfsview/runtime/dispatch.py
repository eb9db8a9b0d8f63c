"""Keyboard-driven state machine.

``handle_key`` runs synchronously for each key. Keys that need external I/O
schedule an asyncio task and return at once; the task commits its result to
``AppState`` when the call completes, and the renderer keeps drawing the last
committed state in the meantime.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import Any

from ..services import (
    ArchiveExportService,
    ExportError,
    FetchError,
    FilePickService,
    PickError,
    TextFetchService,
)
from ..vfs import FileEntry, InMemoryVfs
from .state import AppState, saturating_add

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyDispatcherServices:
    """External collaborators used by key handlers."""

    picker: FilePickService
    exporter: ArchiveExportService
    fetcher: TextFetchService


class KeyDispatcher:
    """Map key tokens onto state mutations and scheduled external calls."""

    def __init__(self, state: AppState, services: KeyDispatcherServices) -> None:
        self.state = state
        self.services = services
        self._tasks: set[asyncio.Task[None]] = set()
        self._fetch_in_flight = False
        self._picks_in_flight = 0
        self._handlers: dict[str, Callable[[], None]] = {
            "LEFT": self.decrement_counter,
            "RIGHT": self.increment_counter,
            "l": self.load_text,
            "u": self.mount_picked_tree,
            "e": self.export_archive,
        }

    @property
    def pending(self) -> int:
        """Number of scheduled operations that have not completed yet."""
        return len(self._tasks)

    def handle_key(self, key: str) -> bool:
        """Handle one key token; return whether it was bound to an action."""
        handler = self._handlers.get(key)
        if handler is None:
            return False
        handler()
        return True

    def decrement_counter(self) -> None:
        self.state.counter.update(lambda value: saturating_add(value, -1))

    def increment_counter(self) -> None:
        self.state.counter.update(lambda value: saturating_add(value, 1))

    def load_text(self) -> None:
        if self.state.loaded_text.get() is not None or self._fetch_in_flight:
            return
        self._fetch_in_flight = True
        self._spawn(self._load_text(), "load-text")

    def mount_picked_tree(self) -> None:
        if self._picks_in_flight:
            # Both picks may complete; the last one to finish stays mounted.
            logger.warning("starting a pick while %d pick(s) are outstanding", self._picks_in_flight)
        self._picks_in_flight += 1
        self._spawn(self._mount_picked_tree(), "mount")

    def export_archive(self) -> None:
        vfs = self.state.vfs.get()
        if vfs is None:
            return
        self._spawn(self._export_archive(vfs.entries()), "export")

    async def _load_text(self) -> None:
        try:
            text = await self.services.fetcher.fetch()
        except FetchError as exc:
            logger.warning("text fetch failed: %s", exc)
            self.state.loaded_text.set(f"<fetch failed: {exc}>")
            self.state.status.set(f"Failed to load text: {exc}")
        else:
            self.state.loaded_text.set(text)
        finally:
            self._fetch_in_flight = False

    async def _mount_picked_tree(self) -> None:
        try:
            entries = await self.services.picker.pick()
        except PickError as exc:
            logger.warning("pick failed: %s", exc)
            self.state.status.set(f"Failed to load crate: {exc}")
            return
        finally:
            self._picks_in_flight -= 1
        self.state.mount(InMemoryVfs.from_entries(entries))
        logger.info("mounted %d files", len(entries))

    async def _export_archive(self, entries: list[FileEntry]) -> None:
        try:
            await asyncio.to_thread(self.services.exporter.export, entries)
        except ExportError as exc:
            logger.warning("export failed: %s", exc)
            self.state.status.set(f"Export failed: {exc}")

    def _spawn(self, coro: Coroutine[Any, Any, None], name: str) -> None:
        task = asyncio.get_running_loop().create_task(coro, name=f"vfsview-{name}")
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("%s failed unexpectedly", task.get_name(), exc_info=exc)
            self.state.status.set(f"Unexpected error: {exc}")

    async def drain(self) -> None:
        """Wait until every scheduled operation, including ones they start, finishes."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def shutdown(self) -> None:
        """Cancel outstanding operations; used when the application exits."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)


__all__ = ["KeyDispatcher", "KeyDispatcherServices"]
