"""ANSI-aware text measurement used when laying out panes.

Escape sequences are preserved but take no columns; wide characters take two.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
RESET = "\033[0m"


def char_display_width(ch: str) -> int:
    """Return terminal columns used by one character."""
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Visible width of ``text`` with escape sequences stripped."""
    plain = ANSI_ESCAPE_RE.sub("", text)
    return sum(char_display_width(ch) for ch in plain)


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    Escape sequences are kept verbatim so styling survives clipping.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
        i += 1

    return "".join(out)


def wrap_plain_line(text: str, width: int) -> list[str]:
    """Wrap unstyled ``text`` into chunks of at most ``width`` columns.

    Leading and trailing spaces of each chunk are trimmed.
    """
    if width <= 0:
        return [""]
    rows: list[str] = []
    chunk: list[str] = []
    col = 0
    for ch in text:
        w = char_display_width(ch)
        if col + w > width:
            rows.append("".join(chunk).strip())
            chunk = []
            col = 0
        chunk.append(ch)
        col += w
    rows.append("".join(chunk).strip())
    return rows


def pad_to_width(text: str, width: int) -> str:
    """Right-pad a styled line with spaces up to ``width`` columns."""
    missing = width - display_width(text)
    return text + " " * missing if missing > 0 else text


__all__ = [
    "ANSI_ESCAPE_RE",
    "RESET",
    "char_display_width",
    "clip_ansi_line",
    "display_width",
    "pad_to_width",
    "wrap_plain_line",
]
