"""Pull-based three-pane renderer.

``render_frame`` turns a ``FrameView`` snapshot into one full-screen ANSI
string: the counter pane, the loaded-text pane, and the mounted-tree pane with
the status line and file previews.
"""

from __future__ import annotations

from .ansi import RESET, clip_ansi_line, display_width, pad_to_width, wrap_plain_line
from .highlight import DEFAULT_STYLE, highlight_snippet, sanitize_terminal_text
from .runtime.state import FrameView

COUNTER_PANE_ROWS = 10
TEXT_PANE_ROWS = 10

APP_TITLE = "vfsview"
TEXT_PANE_TITLE = "loaded-text"
FILES_PANE_TITLE = "Uploaded Crate"

BORDER_COLOR = "\033[38;5;45m"
TITLE_COLOR = "\033[1;38;5;81m"
PATH_COLOR = "\033[38;5;229m"

ROUNDED = ("╭", "╮", "╰", "╯")
SQUARE = ("┌", "┐", "└", "┘")


def counter_pane_lines(counter: int) -> list[str]:
    return [
        "Browse a directory as an in-memory file system.",
        "Press left and right to decrement and increment the counter.",
        f"Counter: {counter}",
        "",
        "L load text   U upload a directory   E export zip   Esc quit",
    ]


def _center(text: str, width: int) -> str:
    visible = display_width(text)
    if visible >= width:
        return clip_ansi_line(text, width)
    left = (width - visible) // 2
    return " " * left + text


def _top_border(title: str, width: int, corners: tuple[str, str, str, str], color: bool) -> str:
    inner = max(0, width - 2)
    label = f" {title} " if title and inner >= len(title) + 2 else ""
    left = (inner - len(label)) // 2
    right = inner - len(label) - left
    if not color:
        return f"{corners[0]}{'─' * left}{label}{'─' * right}{corners[1]}"
    styled_label = f"{TITLE_COLOR}{label}{BORDER_COLOR}" if label else ""
    return f"{BORDER_COLOR}{corners[0]}{'─' * left}{styled_label}{'─' * right}{corners[1]}{RESET}"


def _bottom_border(width: int, corners: tuple[str, str, str, str], color: bool) -> str:
    line = f"{corners[2]}{'─' * max(0, width - 2)}{corners[3]}"
    return f"{BORDER_COLOR}{line}{RESET}" if color else line


def draw_box(
    title: str,
    body: list[str],
    width: int,
    height: int,
    *,
    rounded: bool = True,
    centered: bool = False,
    color: bool = True,
) -> list[str]:
    """Draw ``body`` rows inside a titled border of exactly ``height`` rows."""
    if height <= 0 or width <= 0:
        return []
    if width < 2 or height < 2:
        return [" " * width for _ in range(height)]
    corners = ROUNDED if rounded else SQUARE
    inner_w = width - 2
    side = f"{BORDER_COLOR}│{RESET}" if color else "│"

    rows = [_top_border(title, width, corners, color)]
    for idx in range(height - 2):
        text = body[idx] if idx < len(body) else ""
        text = _center(text, inner_w) if centered else clip_ansi_line(text, inner_w)
        if "\033" in text:
            text += RESET
        rows.append(f"{side}{pad_to_width(text, inner_w)}{side}")
    rows.append(_bottom_border(width, corners, color))
    return rows


def preview_rows(
    view: FrameView,
    width: int,
    *,
    color: bool = True,
    style: str = DEFAULT_STYLE,
    max_rows: int | None = None,
) -> list[str]:
    """Body rows of the mounted-tree pane, wrapped to ``width`` columns.

    When ``max_rows`` is given, previews past the last visible row are neither
    wrapped nor highlighted.
    """
    rows = wrap_plain_line(sanitize_terminal_text(view.status), width)
    rows.append("")
    for item in view.previews:
        if max_rows is not None and len(rows) >= max_rows:
            break
        path = sanitize_terminal_text(item.path)
        snippet = sanitize_terminal_text(item.preview)
        plain = f"{path}: {snippet}"
        if display_width(plain) > width or not color:
            rows.extend(wrap_plain_line(plain, width))
            continue
        rows.append(f"{PATH_COLOR}{path}{RESET}: {highlight_snippet(item.path, snippet, style)}")
    return rows if max_rows is None else rows[:max_rows]


def render_frame(
    view: FrameView,
    width: int,
    height: int,
    *,
    no_color: bool = False,
    style: str = DEFAULT_STYLE,
) -> str:
    """Render the whole screen for ``view`` at ``width`` x ``height`` cells."""
    color = not no_color
    counter_h = min(COUNTER_PANE_ROWS, height)
    text_h = min(TEXT_PANE_ROWS, height - counter_h)
    files_h = max(0, height - counter_h - text_h)

    loaded = view.loaded_text if view.loaded_text is not None else ""
    text_body = [sanitize_terminal_text(line) for line in loaded.splitlines()]

    rows: list[str] = []
    rows.extend(draw_box(APP_TITLE, counter_pane_lines(view.counter), width, counter_h, centered=True, color=color))
    rows.extend(draw_box(TEXT_PANE_TITLE, text_body, width, text_h, centered=True, color=color))
    rows.extend(
        draw_box(
            FILES_PANE_TITLE,
            preview_rows(view, max(1, width - 2), color=color, style=style, max_rows=max(0, files_h - 2)),
            width,
            files_h,
            rounded=False,
            color=color,
        )
    )
    return "\033[H" + "\033[K\r\n".join(rows) + "\033[K\033[J"


__all__ = [
    "COUNTER_PANE_ROWS",
    "TEXT_PANE_ROWS",
    "counter_pane_lines",
    "draw_box",
    "preview_rows",
    "render_frame",
]
