"""Terminal styling for the text formatter.

AnsiStyle wraps text in ANSI escape codes; PlainStyle returns it unchanged
(used for --no-color, non-TTY output and tests).
"""
from __future__ import annotations

import os
import sys

_RESET = "\033[0m"


class PlainStyle:
    """No-op styling."""

    def bold_cyan(self, text: str) -> str:
        return text

    def magenta(self, text: str) -> str:
        return text

    def green(self, text: str) -> str:
        return text

    def yellow(self, text: str) -> str:
        return text

    def dim(self, text: str) -> str:
        return text


class AnsiStyle(PlainStyle):
    """ANSI escape code styling."""

    @staticmethod
    def _wrap(code: str, text: str) -> str:
        return f"\033[{code}m{text}{_RESET}"

    def bold_cyan(self, text: str) -> str:
        return self._wrap("1;36", text)

    def magenta(self, text: str) -> str:
        return self._wrap("35", text)

    def green(self, text: str) -> str:
        return self._wrap("32", text)

    def yellow(self, text: str) -> str:
        return self._wrap("33", text)

    def dim(self, text: str) -> str:
        return self._wrap("2", text)


def detect_style(no_color: bool = False) -> PlainStyle:
    """Pick ANSI styling only for an interactive stdout without NO_COLOR."""
    if no_color or os.environ.get("NO_COLOR") or not sys.stdout.isatty():
        return PlainStyle()
    return AnsiStyle()
