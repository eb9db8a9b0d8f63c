"""Terminal-safe preview text and Pygments coloring.

Preview snippets come from arbitrary files, so control bytes are escaped
before anything reaches the terminal.
"""

from __future__ import annotations

import re
from functools import lru_cache

from pygments import highlight as pygments_highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")


def sanitize_terminal_text(text: str) -> str:
    """Escape control characters so a snippet cannot move the cursor or ring the bell.

    Tabs become a single space; everything else in C0/DEL/C1 is shown as ``\\xNN``.
    """
    if _CONTROL_RE.search(text) is None:
        return text

    out: list[str] = []
    for ch in text:
        code = ord(ch)
        if ch == "\t":
            out.append(" ")
        elif code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
        else:
            out.append(ch)
    return "".join(out)


@lru_cache(maxsize=8)
def _formatter(style: str) -> Terminal256Formatter:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        style = DEFAULT_STYLE
    return Terminal256Formatter(style=style)


def highlight_snippet(path: str, text: str, style: str = DEFAULT_STYLE) -> str:
    """Color ``text`` with the lexer Pygments picks for ``path``.

    Unknown file types come back unchanged.
    """
    if not text:
        return text
    try:
        lexer = get_lexer_for_filename(path, stripnl=False, ensurenl=False)
    except ClassNotFound:
        return text
    return pygments_highlight(text, lexer, _formatter(style)).rstrip("\n")


__all__ = ["DEFAULT_STYLE", "highlight_snippet", "sanitize_terminal_text"]
