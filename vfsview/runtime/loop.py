"""Main interactive event loop for the terminal UI.

One asyncio task drives rendering and input. Each tick redraws when state is
dirty, then handles at most one key; idle ticks sleep, which lets scheduled
I/O operations run and commit their results.
"""

from __future__ import annotations

import asyncio
import shutil
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from ..input import read_key
from .state import AppState, FrameView
from .terminal import TerminalController

QUIT_KEYS = frozenset({"ESC", "CTRL_C"})


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    tick_seconds: float = 0.03


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    render_frame: Callable[[FrameView, int, int], str]
    handle_key: Callable[[str], bool]
    shutdown: Callable[[], Awaitable[None]]


async def run_main_loop(
    state: AppState,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
    callbacks: RuntimeLoopCallbacks,
) -> None:
    """Run the TUI until a quit key is read.

    Outstanding operations are cancelled through ``callbacks.shutdown`` before
    the terminal is restored.
    """
    last_size: tuple[int, int] | None = None
    with terminal.raw_mode():
        try:
            while True:
                term = shutil.get_terminal_size((80, 24))
                size = (term.columns, term.lines)
                if size != last_size:
                    last_size = size
                    state.dirty = True
                if state.dirty:
                    state.dirty = False
                    terminal.write_frame(callbacks.render_frame(state.frame_view(), *size))

                key = read_key(stdin_fd, timeout_ms=0)
                if key in QUIT_KEYS:
                    break
                if key:
                    callbacks.handle_key(key)
                    await asyncio.sleep(0)
                    continue
                await asyncio.sleep(timing.tick_seconds)
        finally:
            await callbacks.shutdown()


__all__ = ["QUIT_KEYS", "RuntimeLoopCallbacks", "RuntimeLoopTiming", "run_main_loop"]
