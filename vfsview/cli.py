"""Command-line front door for vfsview.

Parses CLI options, merges them over the persisted config, and either prints
a one-shot preview listing or launches the interactive UI.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .log import configure_logging
from .runtime import config as app_config
from .services import PickError


def _existing_directory(value: str) -> Path:
    """argparse type for an existing directory."""
    path = Path(value).expanduser()
    if not path.is_dir():
        raise argparse.ArgumentTypeError(f"not a directory: {value!r}")
    return path.resolve()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vfsview",
        description="Mount a directory into an in-memory file system, preview it, and export it as a zip.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        type=_existing_directory,
        default=None,
        help="Directory mounted by U when no chooser dialog is available. Defaults to the current directory.",
    )
    parser.add_argument("--text-url", default=None, help="Base URL the sample text is fetched from.")
    parser.add_argument("--export-dir", default=None, help="Directory exported archives are written to.")
    parser.add_argument("--style", default=None, help="Pygments style name for preview coloring.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--show-hidden", action="store_true", help="Include hidden files when mounting.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs to this file.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument("--save-config", action="store_true", help="Persist the effective settings and exit.")
    parser.add_argument("--previews", action="store_true", help="Print previews for PATH and exit.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and run vfsview."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, debug=args.debug)

    config = app_config.load_app_config().with_overrides(
        text_base_url=args.text_url,
        export_dir=args.export_dir,
        style=args.style,
        show_hidden=True if args.show_hidden else None,
    )
    root = args.path if args.path is not None else Path.cwd()

    if args.save_config:
        if not app_config.save_app_config(config):
            raise SystemExit(f"Cannot write config: {app_config.CONFIG_PATH}")
        sys.stdout.write(f"Saved {app_config.CONFIG_PATH}\n")
        return

    if args.previews:
        from .runtime.app import describe_previews

        try:
            sys.stdout.write(describe_previews(root, config))
        except PickError as exc:
            raise SystemExit(f"Failed to load crate: {exc}") from exc
        return

    from .runtime import run_app

    run_app(root, config, no_color=args.no_color)


if __name__ == "__main__":
    main()
