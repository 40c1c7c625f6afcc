"""
Immutable configuration values.

freeze() converts a tree into immutable containers in one recursive pass:

- Mapping → FrozenMapping
- non-string Sequence (lists and tuples) → FrozenSequence
- anything else → returned as-is

The containers copy their input while being built, so a frozen value never
shares state with the object it was made from. Values that are already
frozen are reused without copying.
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing


class FrozenMapping(_abc.Mapping[str, _typing.Any]):
    """
    Immutable mapping with frozen values.

    Example:
        >>> frozen = FrozenMapping({"a": {"b": [1, 2, 3]}})
        >>> frozen["a"]["b"][0]
        1
        >>> frozen["a"]["b"][0] = 99  # TypeError: immutable
    """

    __slots__ = ("_items",)

    def __init__(self, data: _abc.Mapping[str, _typing.Any]) -> None:
        self._items: dict[str, _typing.Any] = {key: freeze(value) for key, value in data.items()}

    def __getitem__(self, key: str) -> _typing.Any:
        return self._items[key]

    def __iter__(self) -> _typing.Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _abc.Mapping):
            return NotImplemented
        return self._items == dict(other.items())

    # Equal to plain dicts, so unhashable like them
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"FrozenMapping({self._items!r})"


class FrozenSequence(_abc.Sequence[_typing.Any]):
    """Immutable sequence with frozen items. Slicing returns a FrozenSequence."""

    __slots__ = ("_items",)

    def __init__(self, data: _abc.Iterable[_typing.Any] = ()) -> None:
        self._items: tuple[_typing.Any, ...] = tuple(freeze(item) for item in data)

    @_typing.overload
    def __getitem__(self, index: int) -> _typing.Any: ...

    @_typing.overload
    def __getitem__(self, index: slice) -> FrozenSequence: ...

    def __getitem__(self, index: int | slice) -> _typing.Any:
        if isinstance(index, slice):
            return FrozenSequence(self._items[index])
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (str, bytes)) or not isinstance(other, _abc.Sequence):
            return NotImplemented
        return len(self) == len(other) and all(a == b for a, b in zip(self._items, other))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"FrozenSequence({list(self._items)!r})"


def freeze(value: _typing.Any) -> _typing.Any:
    """
    Return an immutable copy of value.

    Example:
        >>> data = {"a": [1]}
        >>> frozen = freeze(data)
        >>> data["a"].append(2)
        >>> list(frozen["a"])
        [1]
    """
    if isinstance(value, (FrozenMapping, FrozenSequence)):
        return value
    if isinstance(value, _abc.Mapping):
        return FrozenMapping(value)
    if isinstance(value, _abc.Sequence) and not isinstance(value, (str, bytes)):
        return FrozenSequence(value)
    return value
