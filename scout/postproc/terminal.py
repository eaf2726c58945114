"""ANSI formatting for generated summaries shown in a terminal."""

from __future__ import annotations

import re

RESET = "\033[0m"
BOLD = "\033[1m"
CYAN = "\033[36m"

_HEADING_PATTERN = re.compile(r"^###\s*(.*)$", re.MULTILINE)
_BOLD_PATTERN = re.compile(r"\*\*(.*?)\*\*")


def format_for_terminal(text: str, *, color: bool = True) -> str:
    """Render ``###`` headings in bold cyan and ``**text**`` in bold.

    With ``color=False`` the text is returned unchanged, which is what file
    output wants.
    """
    if not color:
        return text
    text = _HEADING_PATTERN.sub(lambda match: f"{CYAN}{BOLD}{match.group(1)}{RESET}", text)
    return _BOLD_PATTERN.sub(lambda match: f"{BOLD}{match.group(1)}{RESET}", text)


__all__ = ["BOLD", "CYAN", "RESET", "format_for_terminal"]
