"""Small text helpers used by the shell: splitting, number parsing, line reading."""

from __future__ import annotations

from itertools import takewhile
from typing import Iterable, TextIO

INT_MAX = 2**31 - 1
_DIGITS = "0123456789"


def _wrap32(value: int) -> int:
    """Wrap an integer to a signed 32-bit value."""
    value &= 0xFFFFFFFF
    return value - 0x1_0000_0000 if value > INT_MAX else value


def split(text: str, separator: str) -> list[str]:
    """Split text on the separator and on newlines, keeping empty fields.

    An empty string gives an empty list.
    """
    if not text:
        return []
    return text.replace("\n", separator).split(separator)


def count_until_semicolon(items: Iterable[str]) -> int:
    """Count the leading items that do not start with ';'."""
    return sum(1 for _ in takewhile(lambda item: not item.startswith(";"), items))


def get_number(text: str) -> int:
    """Read the first run of digits in text as a signed 32-bit integer.

    A '-' right before the run makes it negative. A value that would grow
    past the 32-bit limit by another digit gives 0.
    """
    result = 0
    negative = False
    found = False
    for index, char in enumerate(text):
        if char in _DIGITS:
            found = True
            if result == 0 and index > 0 and text[index - 1] == "-":
                negative = True
            if result * 10 > INT_MAX:
                result = 0
                break
            result = _wrap32(result * 10 + int(char))
        elif found:
            break
    return _wrap32(-result) if negative else result


def str_to_int(text: str) -> int:
    """Convert the characters before the first space to an integer.

    No validation is done: every character counts as its offset from '0'.
    """
    result = 0
    for char in takewhile(lambda c: c != " ", text):
        result = _wrap32(result * 10 + ord(char) - ord("0"))
    return result


def read_line(stream: TextIO) -> str | None:
    """Read one newline-terminated line from stream, without the newline.

    Returns None at end of input, including when the last line has no
    terminating newline.
    """
    chars: list[str] = []
    while True:
        char = stream.read(1)
        if not char:
            return None
        if char == "\n":
            return "".join(chars)
        chars.append(char)