"""
Path notation for configuration lookups.

A path such as ``server/port`` or ``server.port`` is split on unescaped
delimiter characters. A delimiter preceded by a backslash is kept as a
literal character of the segment and the backslash is dropped:

    >>> PathNotation().parse("app/name")
    ('app', 'name')
    >>> PathNotation().parse("hosts/example\\.com")
    ('hosts', 'example.com')
    >>> PathNotation(delimiters="/").parse("hosts/example.com")
    ('hosts', 'example.com')

Brackets and quotes are not special. An empty path is a single empty
segment and a trailing delimiter yields a trailing empty segment.
"""

from __future__ import annotations

import collections.abc as _abc
import re as _re
import typing as _typing

import confstrata.constants as constants
import confstrata.utils.deep as deep


class PathNotation:
    """
    Parser for delimiter-separated lookup paths.

    Args:
        delimiters: Characters that end a segment. Defaults to slash and dot.

    Raises:
        ValueError: If delimiters is empty or contains the escape character.
    """

    __slots__ = ("_delimiters", "_split", "_unescape")

    def __init__(self, delimiters: str = constants.DEFAULT_DELIMITERS) -> None:
        if not delimiters:
            raise ValueError("At least one path delimiter is required")
        if constants.ESCAPE_CHAR in delimiters:
            raise ValueError("The escape character cannot be used as a path delimiter")

        self._delimiters = delimiters
        char_class = "[" + "".join(_re.escape(char) for char in delimiters) + "]"
        escape = _re.escape(constants.ESCAPE_CHAR)
        self._split = _re.compile(rf"(?<!{escape}){char_class}")
        self._unescape = _re.compile(rf"{escape}({char_class})")

    @property
    def delimiters(self) -> str:
        """The delimiter characters this parser splits on."""
        return self._delimiters

    def parse(self, path: str) -> deep.Segments:
        """Split a path into unescaped key segments."""
        return tuple(
            self._unescape.sub(r"\1", segment) for segment in self._split.split(path)
        )

    def escape(self, key: str) -> str:
        """Escape delimiter characters so key is read back as one segment."""
        for char in self._delimiters:
            key = key.replace(char, constants.ESCAPE_CHAR + char)
        return key

    def join(self, segments: _abc.Iterable[str]) -> str:
        """Build a path string from raw segments (inverse of parse)."""
        return self._delimiters[0].join(self.escape(segment) for segment in segments)

    def __repr__(self) -> str:
        return f"PathNotation(delimiters={self._delimiters!r})"


def traverse(tree: _typing.Any, segments: _abc.Iterable[str]) -> _typing.Any:
    """
    Walk segments through a nested tree.

    Mappings are indexed by key. Sequences are indexed by segments that
    are non-negative decimal integers. Any other step short-circuits.

    Returns:
        The value at the path, or deep.MISSING if any step is absent.
    """
    current = tree
    for segment in segments:
        if deep.is_mapping(current):
            if segment not in current:
                return deep.MISSING
            current = current[segment]
        elif deep.is_sequence(current) and segment.isascii() and segment.isdigit():
            index = int(segment)
            if index >= len(current):
                return deep.MISSING
            current = current[index]
        else:
            return deep.MISSING
    return current
