"""A small INI parser that reports each name/value pair to a callback.

Sections are written ``[section]``. Pairs are ``name=value`` or ``name:value``,
with surrounding whitespace stripped. Whole-line comments start with ``;`` or
``#``. An inline comment starts with ``;`` after a whitespace character. An
indented line continues the value of the previous name. Parsing does not stop
at a bad line: every line is read, and the number of the first bad line is
reported once the input is exhausted.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from os import PathLike
from typing import TextIO

__all__ = ["IniParseError", "parse_lines", "parse_string", "parse_file", "parse"]

Handler = Callable[[str, str, str], object]

_WHITESPACE = " \t\n\v\f\r"
_MAX_LINE = 200
_MAX_SECTION = 50
_MAX_NAME = 50
_INLINE_COMMENT_PREFIXES = ";"
_BOMS = ("\ufeff", "\xef\xbb\xbf")


class IniParseError(ValueError):
    """Raised when a line cannot be parsed or a handler rejects a pair."""

    def __init__(self, lineno: int) -> None:
        super().__init__(f"INI parse error on line {lineno}")
        self.lineno = lineno


def _physical_lines(lines: Iterable[str]) -> Iterator[str]:
    """Yield the input in pieces no longer than one line buffer."""
    limit = _MAX_LINE - 1
    for line in lines:
        while len(line) > limit:
            yield line[:limit]
            line = line[limit:]
        if line:
            yield line


def _find_chars_or_comment(text: str, chars: str | None) -> int:
    """Index of the first char in ``chars`` or of an inline comment."""
    was_space = False
    for index, char in enumerate(text):
        if chars and char in chars:
            return index
        if was_space and char in _INLINE_COMMENT_PREFIXES:
            return index
        was_space = char in _WHITESPACE
    return len(text)


def parse_lines(lines: Iterable[str], handler: Handler) -> None:
    """Parse INI lines, calling ``handler(section, name, value)`` per pair.

    A handler that returns ``False`` rejects the pair; any other return value
    accepts it. Raises :class:`IniParseError` carrying the first bad line.
    """
    section = ""
    prev_name = ""
    error = 0

    for lineno, raw in enumerate(_physical_lines(lines), start=1):
        line = raw.split("\0", 1)[0]
        skipped_bom = False
        if lineno == 1:
            for bom in _BOMS:
                if line.startswith(bom):
                    line = line[len(bom):]
                    skipped_bom = True
                    break

        body = line.rstrip(_WHITESPACE)
        start = body.lstrip(_WHITESPACE)
        indented = skipped_bom or len(start) < len(body)

        if start[:1] in (";", "#"):
            continue
        if prev_name and start and indented:
            if handler(section, prev_name, start) is False and not error:
                error = lineno
        elif start.startswith("["):
            rest = start[1:]
            end = _find_chars_or_comment(rest, "]")
            if end < len(rest) and rest[end] == "]":
                section = rest[:end][: _MAX_SECTION - 1]
                prev_name = ""
            elif not error:
                error = lineno
        elif start:
            end = _find_chars_or_comment(start, "=:")
            if end < len(start) and start[end] in "=:":
                name = start[:end].rstrip(_WHITESPACE)
                value = start[end + 1:]
                value = value[: _find_chars_or_comment(value, None)]
                value = value.strip(_WHITESPACE)
                prev_name = name[: _MAX_NAME - 1]
                if handler(section, name, value) is False and not error:
                    error = lineno
            elif not error:
                error = lineno

    if error:
        raise IniParseError(error)


def parse_string(text: str, handler: Handler) -> None:
    """Parse INI data held in a string."""
    parse_lines(text.split("\n") and _split_keep_newlines(text), handler)


def _split_keep_newlines(text: str) -> list[str]:
    pieces = text.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]]
    if pieces[-1]:
        lines.append(pieces[-1])
    return lines


def parse_file(file: TextIO, handler: Handler) -> None:
    """Parse INI data from an open text file; the file is left open."""
    parse_lines(file, handler)


def parse(path: str | PathLike[str], handler: Handler) -> None:
    """Parse the INI file at ``path``; raises ``OSError`` if it cannot be opened."""
    with open(path, encoding="utf-8", newline="\n") as file:
        parse_file(file, handler)