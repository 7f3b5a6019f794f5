"""Terminal colouring for output text."""

from __future__ import annotations

import os
import sys
from typing import TextIO

_ATTRIBUTES = {
    "bold": "1",
    "dimmed": "2",
    "italic": "3",
    "underline": "4",
}

_COLORS = {
    "black": "30",
    "red": "31",
    "green": "32",
    "yellow": "33",
    "blue": "34",
    "magenta": "35",
    "cyan": "36",
    "white": "37",
}

_RESET = "\x1b[0m"


def colors_enabled(stream: TextIO) -> bool:
    """Decide whether coloured output should be written to ``stream``.

    CLICOLOR_FORCE wins over everything, then NO_COLOR and CLICOLOR=0 turn
    colour off; otherwise colour is used when the stream is a terminal.
    """
    force = os.environ.get("CLICOLOR_FORCE")
    if force is not None and force != "0":
        return True
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("CLICOLOR") == "0":
        return False
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (ValueError, OSError):
        return False


def style(text: str, *args: str) -> str:
    """Wrap ``text`` in ANSI codes for the named colours and attributes.

    Known names: bold, dimmed, italic, underline and the eight basic colours.
    Codes are only added when colour output to stdout is enabled.
    """
    codes = []
    for name in args:
        if name in _ATTRIBUTES:
            codes.append((0, _ATTRIBUTES[name]))
        elif name in _COLORS:
            codes.append((1, _COLORS[name]))
        else:
            raise ValueError(f"unknown style: {name!r}")
    if not codes or not colors_enabled(sys.stdout):
        return text
    codes.sort(key=lambda item: item[0])
    sequence = ";".join(code for _, code in codes)
    return f"\x1b[{sequence}m{text}{_RESET}"