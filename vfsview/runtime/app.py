"""Composition root: wires config, services, state, and the main loop."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

from ..render import render_frame
from ..services import HostFilePicker, HttpTextFetcher, PathDirectoryPicker, TreeReadOptions, ZipArchiveExporter
from ..vfs import InMemoryVfs
from .config import AppConfig
from .dispatch import KeyDispatcher, KeyDispatcherServices
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from .state import AppState
from .terminal import TerminalController, TerminalUnavailableError

logger = logging.getLogger(__name__)


def tree_read_options(config: AppConfig) -> TreeReadOptions:
    return TreeReadOptions(
        show_hidden=config.show_hidden,
        skip_gitignored=config.skip_gitignored,
        max_files=config.max_files,
    )


def build_services(config: AppConfig, fallback_root: Path) -> KeyDispatcherServices:
    """Create the production pick/export/fetch services for ``config``."""
    return KeyDispatcherServices(
        picker=HostFilePicker(fallback_root, tree_read_options(config)),
        exporter=ZipArchiveExporter(config.export_path, config.archive_name),
        fetcher=HttpTextFetcher(
            base_url=config.text_base_url,
            resource_path=config.text_path,
            timeout=config.fetch_timeout_seconds,
        ),
    )


async def _run(terminal: TerminalController, dispatcher: KeyDispatcher, state: AppState, config: AppConfig, no_color: bool) -> None:
    callbacks = RuntimeLoopCallbacks(
        render_frame=lambda view, width, height: render_frame(
            view,
            width,
            height,
            no_color=no_color,
            style=config.style,
        ),
        handle_key=dispatcher.handle_key,
        shutdown=dispatcher.shutdown,
    )
    await run_main_loop(state, terminal, terminal.stdin_fd, RuntimeLoopTiming(), callbacks)


def run_app(root: Path, config: AppConfig, no_color: bool = False) -> None:
    """Run the interactive UI; exits with a message when no terminal is available."""
    try:
        terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())
    except TerminalUnavailableError as exc:
        raise SystemExit(f"vfsview: {exc}") from exc

    state = AppState()
    dispatcher = KeyDispatcher(state, build_services(config, root))
    logger.info("starting UI (fallback root %s)", root)
    asyncio.run(_run(terminal, dispatcher, state, config, no_color))
    logger.info("UI closed")


async def mount_once(root: Path, config: AppConfig) -> AppState:
    """Mount ``root`` into a fresh state without the UI."""
    state = AppState()
    entries = await PathDirectoryPicker(root, tree_read_options(config)).pick()
    state.mount(InMemoryVfs.from_entries(entries))
    return state


def describe_previews(root: Path, config: AppConfig) -> str:
    """Mount ``root`` and return the status line plus one line per preview."""
    state = asyncio.run(mount_once(root, config))
    lines = [state.status.get(), ""]
    lines.extend(f"{item.path}: {item.preview}" for item in state.previews.get())
    return "\n".join(lines) + "\n"


__all__ = ["build_services", "describe_previews", "mount_once", "run_app", "tree_read_options"]
