"""
Sentinel and type aliases for deep tree helpers.

- MISSING: marks "no value at this path", distinct from an explicit None
- Tree: a configuration mapping
- Segments: tuple of unescaped path keys
"""

from __future__ import annotations

import typing as _typing

# A configuration tree: string keys to scalars, sequences or nested trees
Tree: _typing.TypeAlias = dict[str, _typing.Any]

# Unescaped path segments, e.g. ("server", "port")
Segments: _typing.TypeAlias = tuple[str, ...]


# Helper function to reconstruct MISSING singleton during unpickle
def _get_missing_singleton() -> MissingType:
    """Return the MISSING singleton. Called by pickle to reconstruct."""
    return MISSING


class MissingType:
    """Sentinel type marking an absent value."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<MISSING>"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple[_typing.Callable[[], MissingType], tuple[()]]:
        """Pickle support: ensure singleton is preserved."""
        return (_get_missing_singleton, ())


MISSING = MissingType()
