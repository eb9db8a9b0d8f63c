"""Persistent JSON config helpers.

Stores the text-fetch endpoint, export location, and tree-reading limits.
All access is defensive: malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, replace
from pathlib import Path

from platformdirs import user_config_dir, user_downloads_dir

from ..highlight import DEFAULT_STYLE
from ..services.archive import DEFAULT_ARCHIVE_NAME
from ..services.fetch import DEFAULT_FETCH_TIMEOUT_SECONDS, DEFAULT_TEXT_BASE_URL, DEFAULT_TEXT_PATH

logger = logging.getLogger(__name__)

APP_NAME = "vfsview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_MAX_FILES = 2000


@dataclass(frozen=True)
class AppConfig:
    """Effective settings for one session."""

    text_base_url: str = DEFAULT_TEXT_BASE_URL
    text_path: str = DEFAULT_TEXT_PATH
    fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS
    export_dir: str = ""
    archive_name: str = DEFAULT_ARCHIVE_NAME
    show_hidden: bool = False
    skip_gitignored: bool = True
    max_files: int = DEFAULT_MAX_FILES
    style: str = DEFAULT_STYLE

    @property
    def export_path(self) -> Path:
        """Directory archives are written to; the user downloads dir when unset."""
        if self.export_dir:
            return Path(self.export_dir).expanduser()
        return Path(user_downloads_dir())

    def with_overrides(self, **overrides: object) -> AppConfig:
        """Return a copy with every non-``None`` override applied."""
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> bool:
    """Persist config data as pretty-printed JSON; return whether it was written."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("cannot write config %s: %s", CONFIG_PATH, exc)
        return False
    return True


def _nonempty_str(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _positive_number(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value) if value > 0 else None


def _positive_int(value: object) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value >= 1 else None


def _bool(value: object) -> bool | None:
    return value if isinstance(value, bool) else None


def _archive_name(value: object) -> str | None:
    name = _nonempty_str(value)
    if name is None or "/" in name or not name.endswith(".zip"):
        return None
    return name


def load_app_config() -> AppConfig:
    """Build ``AppConfig`` from persisted values; invalid keys keep defaults."""
    data = load_config()
    return AppConfig().with_overrides(
        text_base_url=_nonempty_str(data.get("text_base_url")),
        text_path=_nonempty_str(data.get("text_path")),
        fetch_timeout_seconds=_positive_number(data.get("fetch_timeout_seconds")),
        export_dir=_nonempty_str(data.get("export_dir")),
        archive_name=_archive_name(data.get("archive_name")),
        show_hidden=_bool(data.get("show_hidden")),
        skip_gitignored=_bool(data.get("skip_gitignored")),
        max_files=_positive_int(data.get("max_files")),
        style=_nonempty_str(data.get("style")),
    )


def save_app_config(config: AppConfig) -> bool:
    """Merge ``config`` into the persisted object, keeping unrelated keys."""
    data = load_config()
    data.update(config.to_dict())
    return save_config(data)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "AppConfig",
    "load_app_config",
    "load_config",
    "save_app_config",
    "save_config",
]
