"""ANSI SGR styling for terminal output."""
import re
from enum import IntEnum
from typing import Optional

ESCAPE = '\x1b'
ANSI_PATTERN = re.compile('\x1b\\[[0-9;]*m')


class Style(IntEnum):
    RESET = 0
    BOLD = 1


class Color(IntEnum):
    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36
    WHITE = 37


def colorize(text: str, style: Style = Style.RESET, color: Optional[Color] = None) -> str:
    """
    Wrap text in an SGR sequence.

    The opening sequence is ``ESC[<style>m`` or ``ESC[<style>;<color>m``;
    the closing sequence is always a single ``ESC[0m``.
    """
    params = str(int(style))
    if color is not None:
        params += f";{int(color)}"
    return f"{ESCAPE}[{params}m{text}{ESCAPE}[{int(Style.RESET)}m"


def strip_ansi(text: str) -> str:
    return ANSI_PATTERN.sub('', text)


def bold(text: str) -> str:
    return colorize(text, Style.BOLD)


def green_bold(text: str) -> str:
    return colorize(text, Style.BOLD, Color.GREEN)


def green(text: str) -> str:
    return colorize(text, Style.RESET, Color.GREEN)


def yellow_bold(text: str) -> str:
    return colorize(text, Style.BOLD, Color.YELLOW)


def yellow(text: str) -> str:
    return colorize(text, Style.RESET, Color.YELLOW)


def cyan(text: str) -> str:
    return colorize(text, Style.RESET, Color.CYAN)
