"""
Config: the layered configuration store.

The store owns one merged tree and a registry of the layers that built it.

- assign() deep-clones a tree, merges it into the merged tree (later values
  win, mappings merge recursively, lists and scalars replace) and records
  the clone as a layer under its identifier.
- find() parses a path, walks the merged tree and applies a fallback.
- Provenance queries walk each layer's own tree, never the merged one.
- freeze() makes the merged tree and every layer read-only for good.

Read semantics:
- Dicts: returned as FrozenMapping (immutable copy)
- Lists: returned as FrozenSequence
- Scalars: returned directly
Use to_dict() for a mutable copy.

Thread safety: NOT thread-safe for concurrent writes. Read-only
concurrent access is safe once frozen.
"""

from __future__ import annotations

import logging as _logging
import os as _os
import typing as _typing

import confstrata.config as config
import confstrata.constants as constants
import confstrata.errors as errors
import confstrata.resolver as resolver
import confstrata.store._path as _path
import confstrata.store._registry as _registry
import confstrata.utils.deep as deep

_logger = _logging.getLogger(__name__)


class Config:
    """
    A layered configuration store.

    Example:
        >>> store = Config()
        >>> store.assign({"server": {"port": 3000}}, "/etc/app/config.yaml")
        >>> store.assign({"server": {"host": "0.0.0.0"}}, "/etc/app/config-dev.yaml")
        >>> store.find("server/port")
        3000
        >>> store.find_layer_by_path("server.host")
        '/etc/app/config-dev.yaml'

    Args:
        notation: Path parser. Defaults to slash and dot delimiters.
        path_resolver: Resolver used by add(). Defaults to PathResolver().
    """

    def __init__(
        self,
        *,
        notation: _path.PathNotation | None = None,
        path_resolver: resolver.PathResolver | None = None,
    ) -> None:
        self._notation = notation if notation is not None else _path.PathNotation()
        self._resolver = path_resolver if path_resolver is not None else resolver.PathResolver()
        self._tree: _typing.Any = {}
        self._layers = _registry.LayerRegistry()
        self._frozen = False

    @classmethod
    def from_settings(cls, settings: config.Settings | None = None) -> Config:
        """Build a store whose parser and resolver follow the given settings."""
        if settings is None:
            settings = config.Settings()
        return cls(
            notation=_path.PathNotation(settings.delimiters),
            path_resolver=resolver.PathResolver(
                extensions=settings.extensions,
                file_stem=settings.file_stem,
            ),
        )

    @property
    def is_frozen(self) -> bool:
        """True once freeze() has been called. Never resets."""
        return self._frozen

    @property
    def notation(self) -> _path.PathNotation:
        return self._notation

    @property
    def path_resolver(self) -> resolver.PathResolver:
        return self._resolver

    @property
    def layers(self) -> list[tuple[str, _typing.Any]]:
        """(identifier, read-only tree) for every layer, in insertion order."""
        return [
            (identifier, deep.freeze(tree))
            for identifier, tree in self._layers.entries_forward()
        ]

    # =========================================================================
    # Queries
    # =========================================================================

    def find(self, path: str, fallback: _typing.Any = None) -> _typing.Any:
        """
        Look up a value in the merged tree.

        Args:
            path: Slash/dot separated path. Escape a literal delimiter with
                a backslash ("hosts/example\\.com").
            fallback: Returned when nothing is found. When both the found
                value and the fallback are mappings (or both lists), the
                fallback fills in whatever the found value lacks.

        Returns:
            The (defaulted) value, or fallback (None by default) if absent.
        """
        found = _path.traverse(self._tree, self._notation.parse(path))
        if found is deep.MISSING:
            return fallback
        return deep.freeze(deep.merge_defaults(fallback, found))

    def to_dict(self) -> deep.Tree:
        """Return a mutable deep copy of the merged tree."""
        return _typing.cast(deep.Tree, deep.clone(self._tree))

    # =========================================================================
    # Mutation & lifecycle
    # =========================================================================

    def assign(
        self,
        tree: _typing.Mapping[str, _typing.Any],
        identifier: str = constants.ANONYMOUS_LAYER,
    ) -> None:
        """
        Merge a tree into the store and record it as a layer.

        The tree is deep-cloned first; later changes to the caller's object
        do not reach the store.

        Raises:
            FrozenStateError: If the store is frozen.
            TypeError: If tree is not a mapping.
        """
        if self._frozen:
            raise errors.FrozenStateError()
        if not deep.is_mapping(tree):
            raise TypeError(f"Config tree must be a mapping, got {type(tree).__name__}")

        snapshot = deep.clone(tree)
        self._tree = deep.merge(self._tree, snapshot)
        self._layers.record(identifier, snapshot)
        _logger.debug("Assigned layer %r (%d top-level keys)", identifier, len(snapshot))

    def freeze(self) -> None:
        """Make the merged tree and all layers permanently read-only."""
        if self._frozen:
            return
        self._tree = deep.freeze(self._tree)
        self._layers.freeze()
        self._frozen = True
        _logger.debug("Config frozen with %d layers", len(self._layers))

    async def add(
        self,
        path: str | _os.PathLike[str],
        branch: str | None = None,
    ) -> resolver.Source:
        """
        Resolve a file or directory and assign its content.

        The resolved file's absolute path becomes the layer identifier.

        Returns:
            The resolved source.

        Raises:
            FrozenStateError: If the store is frozen (checked before resolving).
            ResolveError: If resolution failed. The cause is chained and
                available as ``error.cause``.
        """
        if self._frozen:
            raise errors.FrozenStateError()

        try:
            source = await self._resolver.resolve(path, branch)
        except Exception as e:
            raise errors.ResolveError(path, branch, e) from e

        self.assign(source.tree, source.identifier)
        return source

    # =========================================================================
    # Provenance
    # =========================================================================

    def find_layer_by_path(self, path: str) -> str | None:
        """
        Identifier of the most recently added layer that defines path.

        An explicit null in a layer counts as defining the path.
        """
        segments = self._notation.parse(path)
        for identifier, tree in self._layers.entries_reverse():
            if _path.traverse(tree, segments) is not deep.MISSING:
                return identifier
        return None

    def find_layer_by_path_and_value(
        self,
        path: str,
        value: _typing.Any,
    ) -> str | None:
        """
        Identifier of the most recent layer whose value at path matches value.

        Matching is partial: a list matches when it contains every expected
        element, a mapping when it holds every expected key with an equal
        value. A re-assigned identifier counts as most recent, as in
        find_layer_by_path().
        """
        segments = self._notation.parse(path)
        for identifier, tree in self._layers.entries_reverse():
            found = _path.traverse(tree, segments)
            if found is not deep.MISSING and deep.matches(value, found):
                return identifier
        return None

    def list_layers_by_path(self, path: str) -> list[tuple[str, _typing.Any]]:
        """
        Every layer that defines path, with its own value.

        Returns:
            List of (identifier, value), most recently added layer first.
        """
        segments = self._notation.parse(path)
        entries: list[tuple[str, _typing.Any]] = []
        for identifier, tree in self._layers.entries_reverse():
            found = _path.traverse(tree, segments)
            if found is not deep.MISSING:
                entries.append((identifier, deep.freeze(found)))
        return entries

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "mutable"
        return f"Config({state}, layers={self._layers.identifiers()!r})"
