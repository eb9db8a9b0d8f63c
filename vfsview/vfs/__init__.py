"""Virtual file system: capability interface plus in-memory implementation."""

from .base import Vfs
from .memory import InMemoryVfs
from .types import FileEntry

__all__ = ["FileEntry", "InMemoryVfs", "Vfs"]
