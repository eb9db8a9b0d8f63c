"""Shared application state read by the renderer and written by key handlers.

Every field is an independent ``StateField`` so a pending async completion can
commit one field while the render path reads another. All access happens on
the asyncio loop thread; the guards catch re-entrant writes, not races between
threads.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from ..preview import FilePreview, build_previews, loaded_status
from ..vfs import InMemoryVfs

T = TypeVar("T")

COUNTER_MIN = 0
COUNTER_MAX = 255
INITIAL_STATUS = "Press U to upload a crate"


class BorrowError(RuntimeError):
    """Raised when a field is written while its write guard is already held."""


class StateField(Generic[T]):
    """One guarded slot of application state.

    Values are replaced wholesale; ``update`` holds the field's write guard
    for the duration of the update function.
    """

    def __init__(self, name: str, value: T, on_change: Callable[[], None] | None = None) -> None:
        self.name = name
        self._value = value
        self._on_change = on_change
        self._writing = False

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        """Replace the field value."""
        if self._writing:
            raise BorrowError(f"state field {self.name!r} is already being written")
        self._value = value
        if self._on_change is not None:
            self._on_change()

    def update(self, fn: Callable[[T], T]) -> T:
        """Replace the value with ``fn(current)`` and return the new value."""
        if self._writing:
            raise BorrowError(f"state field {self.name!r} is already being written")
        self._writing = True
        try:
            value = fn(self._value)
        finally:
            self._writing = False
        self.set(value)
        return value

    def __repr__(self) -> str:
        return f"StateField({self.name!r}, {self._value!r})"


def saturating_add(value: int, delta: int, low: int = COUNTER_MIN, high: int = COUNTER_MAX) -> int:
    """Add ``delta`` and clamp the result into ``[low, high]``."""
    return max(low, min(high, value + delta))


@dataclass(frozen=True)
class FrameView:
    """Consistent snapshot of everything the renderer draws."""

    counter: int
    loaded_text: str | None
    status: str
    previews: tuple[FilePreview, ...]


class AppState:
    """Container of independently guarded UI state fields."""

    def __init__(self, status: str = INITIAL_STATUS) -> None:
        self.dirty = True
        self.counter: StateField[int] = StateField("counter", COUNTER_MIN, self._mark_dirty)
        self.loaded_text: StateField[str | None] = StateField("loaded_text", None, self._mark_dirty)
        self.vfs: StateField[InMemoryVfs | None] = StateField("vfs", None, self._mark_dirty)
        self.previews: StateField[tuple[FilePreview, ...]] = StateField("previews", (), self._mark_dirty)
        self.status: StateField[str] = StateField("status", status, self._mark_dirty)

    def _mark_dirty(self) -> None:
        self.dirty = True

    def rebuild_previews(self) -> None:
        """Regenerate the preview list from the mounted VFS in one pass."""
        vfs = self.vfs.get()
        if vfs is None:
            self.previews.set(())
            return
        previews = build_previews(vfs)
        self.previews.set(previews)
        self.status.set(loaded_status(len(previews)))

    def mount(self, vfs: InMemoryVfs) -> None:
        """Replace the mounted VFS and project it before control is yielded."""
        self.vfs.set(vfs)
        self.rebuild_previews()

    def frame_view(self) -> FrameView:
        return FrameView(
            counter=self.counter.get(),
            loaded_text=self.loaded_text.get(),
            status=self.status.get(),
            previews=self.previews.get(),
        )


__all__ = [
    "COUNTER_MAX",
    "COUNTER_MIN",
    "INITIAL_STATUS",
    "AppState",
    "BorrowError",
    "FrameView",
    "StateField",
    "saturating_add",
]
