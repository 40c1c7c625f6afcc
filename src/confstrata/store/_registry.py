"""
Layer registry: every configuration fragment, keyed by origin.

Layers keep two orders:

- insertion order (forward): the slot an identifier was first recorded in.
  Re-recording an identifier replaces its tree but keeps this slot.
- recency order (reverse): the most recently recorded identifier first.
  Re-recording an identifier moves it to the front.

Example:
    >>> registry = LayerRegistry()
    >>> registry.record("/a", {"x": 1})
    >>> registry.record("/b", {"x": 2})
    >>> registry.record("/a", {"x": 3})
    >>> [identifier for identifier, _ in registry.entries_forward()]
    ['/a', '/b']
    >>> [identifier for identifier, _ in registry.entries_reverse()]
    ['/a', '/b']
"""

from __future__ import annotations

import logging as _logging
import typing as _typing

import confstrata.utils.deep as deep

_logger = _logging.getLogger(__name__)

Entry: _typing.TypeAlias = tuple[str, _typing.Any]


class LayerRegistry:
    """
    Ordered record of (identifier, tree) layers.

    Trees are stored as given; the store hands in private clones. Once
    frozen, trees are replaced by read-only snapshots and further record()
    calls raise RuntimeError (the store checks its own flag first).

    Thread safety: NOT thread-safe for concurrent writes.
    """

    __slots__ = ("_layers", "_recency", "_frozen")

    def __init__(self) -> None:
        self._layers: dict[str, _typing.Any] = {}
        # Identifiers from least to most recently recorded
        self._recency: list[str] = []
        self._frozen = False

    def record(self, identifier: str, tree: _typing.Any) -> None:
        """
        Store or replace the layer for identifier.

        Raises:
            RuntimeError: If the registry has been frozen.
        """
        if self._frozen:
            raise RuntimeError("Cannot record a layer in a frozen registry")

        if identifier in self._layers:
            self._recency.remove(identifier)
            _logger.debug("Replacing layer %r", identifier)
        else:
            _logger.debug("Recording layer %r", identifier)

        self._layers[identifier] = tree
        self._recency.append(identifier)

    def entries_forward(self) -> _typing.Iterator[Entry]:
        """Yield (identifier, tree) in original insertion order."""
        yield from self._layers.items()

    def entries_reverse(self) -> _typing.Iterator[Entry]:
        """Yield (identifier, tree), most recently recorded first."""
        for identifier in reversed(self._recency):
            yield identifier, self._layers[identifier]

    def has(self, identifier: str) -> bool:
        """Check if a layer was recorded under identifier."""
        return identifier in self._layers

    def get(self, identifier: str) -> _typing.Any:
        """
        Get the tree recorded under identifier.

        Raises:
            KeyError: If no such layer exists.
        """
        return self._layers[identifier]

    def identifiers(self) -> list[str]:
        """Identifiers in insertion order."""
        return list(self._layers)

    def freeze(self) -> None:
        """Replace every tree with a read-only snapshot and reject new layers."""
        if self._frozen:
            return
        self._layers = {
            identifier: deep.freeze(tree) for identifier, tree in self._layers.items()
        }
        self._frozen = True

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._layers

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> _typing.Iterator[str]:
        return iter(self._layers)

    def __repr__(self) -> str:
        return f"LayerRegistry({self.identifiers()!r})"
