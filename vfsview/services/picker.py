"""File-pick services.

``HostFilePicker`` probes the host each time it is asked to pick: with a
native directory chooser and a display available it shows a dialog, otherwise
it falls back to the directory given on the command line. Both paths return
the same ``FileEntry`` list.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..vfs import FileEntry
from .base import FilePickService, PickError
from .tree_reader import collect_file_entries

logger = logging.getLogger(__name__)

DIALOG_TITLE = "Select a directory to mount"

# Chooser binaries in preference order, with the argv that prints one directory.
DIALOG_COMMANDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("zenity", ("--file-selection", "--directory", f"--title={DIALOG_TITLE}")),
    ("kdialog", ("--getexistingdirectory", ".", "--title", DIALOG_TITLE)),
)


@dataclass(frozen=True)
class TreeReadOptions:
    show_hidden: bool = False
    skip_gitignored: bool = True
    max_files: int = 2000


async def read_tree(root: Path, options: TreeReadOptions) -> list[FileEntry]:
    """Collect ``root`` off the event loop thread."""
    return await asyncio.to_thread(
        collect_file_entries,
        root,
        show_hidden=options.show_hidden,
        skip_gitignored=options.skip_gitignored,
        max_files=options.max_files,
    )


def find_dialog_command() -> tuple[str, ...] | None:
    """Return argv for an available directory chooser, or ``None``."""
    if not (os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY")):
        return None
    for binary, args in DIALOG_COMMANDS:
        path = shutil.which(binary)
        if path is not None:
            return (path, *args)
    return None


class DialogDirectoryPicker(FilePickService):
    """Ask a native dialog for a directory, then read it."""

    def __init__(self, command: tuple[str, ...], options: TreeReadOptions) -> None:
        self.command = command
        self.options = options

    async def pick(self) -> list[FileEntry]:
        try:
            proc = await asyncio.create_subprocess_exec(
                *self.command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as exc:
            raise PickError(f"cannot launch directory chooser: {exc}") from exc
        try:
            stdout, _ = await proc.communicate()
        except asyncio.CancelledError:
            # Close the chooser window along with the pick.
            if proc.returncode is None:
                proc.kill()
                await proc.wait()
            raise
        if proc.returncode != 0:
            raise PickError("no directory selected")
        chosen = stdout.decode("utf-8", errors="replace").strip()
        if not chosen:
            raise PickError("no directory selected")
        logger.info("directory chosen via dialog: %s", chosen)
        return await read_tree(Path(chosen), self.options)


class PathDirectoryPicker(FilePickService):
    """Read a fixed directory, used when no chooser dialog is available."""

    def __init__(self, root: Path, options: TreeReadOptions) -> None:
        self.root = root
        self.options = options

    async def pick(self) -> list[FileEntry]:
        return await read_tree(self.root, self.options)


class HostFilePicker(FilePickService):
    """Choose between dialog and fixed-path picking at call time."""

    def __init__(
        self,
        fallback_root: Path,
        options: TreeReadOptions,
        probe: Callable[[], tuple[str, ...] | None] = find_dialog_command,
    ) -> None:
        self.fallback_root = fallback_root
        self.options = options
        self._probe = probe

    def select(self) -> FilePickService:
        command = self._probe()
        if command is not None:
            return DialogDirectoryPicker(command, self.options)
        return PathDirectoryPicker(self.fallback_root, self.options)

    async def pick(self) -> list[FileEntry]:
        picker = self.select()
        logger.debug("picking with %s", type(picker).__name__)
        return await picker.pick()


__all__ = [
    "DialogDirectoryPicker",
    "HostFilePicker",
    "PathDirectoryPicker",
    "TreeReadOptions",
    "find_dialog_command",
    "read_tree",
]
