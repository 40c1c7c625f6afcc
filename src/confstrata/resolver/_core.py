"""
Path resolver: turns a file or directory into a configuration source.

Given a directory and an optional branch, the resolver looks for these
names, first match wins:

    config[-branch].<ext>, .config[-branch].<ext>   for each extension
    config[-branch].json,  .config[-branch].json    JSON fallback

A file path resolves through its containing directory, so pointing at any
file next to the configuration is equivalent to pointing at the directory.

Only resolve() suspends: directory listing and file reads run in a worker
thread.
"""

from __future__ import annotations

import asyncio as _asyncio
import collections.abc as _abc
import dataclasses as _dataclasses
import logging as _logging
import os as _os
import pathlib as _pathlib

import confstrata.constants as constants
import confstrata.errors as errors
import confstrata.resolver._loaders as _loaders
import confstrata.utils.deep as deep

_logger = _logging.getLogger(__name__)


@_dataclasses.dataclass(frozen=True, slots=True)
class Source:
    """A resolved configuration source."""

    identifier: str
    """Absolute path of the file that was loaded."""

    tree: deep.Tree
    """Parsed file content."""


class PathResolver:
    """
    Discovers and loads configuration files by naming convention.

    Args:
        extensions: Extensions tried in priority order before the JSON
            fallback. Each must have a registered loader.
        file_stem: Base file name, "config" by default.

    Raises:
        ValueError: If an extension has no registered loader.
    """

    def __init__(
        self,
        *,
        extensions: _abc.Iterable[str] = constants.DEFAULT_EXTENSIONS,
        file_stem: str = constants.DEFAULT_FILE_STEM,
    ) -> None:
        normalized: list[str] = []
        for extension in extensions:
            extension = extension.lstrip(".").lower()
            if _loaders.get_loader(extension) is None:
                raise ValueError(
                    f"No loader registered for extension {extension!r} "
                    f"(supported: {', '.join(_loaders.supported_extensions())})"
                )
            if extension != constants.FALLBACK_EXTENSION and extension not in normalized:
                normalized.append(extension)

        self._extensions = tuple(normalized)
        self._file_stem = file_stem

    @property
    def extensions(self) -> tuple[str, ...]:
        """Extensions in priority order, excluding the JSON fallback."""
        return self._extensions

    def candidates(self, branch: str | None = None) -> list[str]:
        """
        File names tried for a branch, in priority order.

        Example:
            >>> PathResolver(extensions=["yaml"]).candidates("dev")
            ['config-dev.yaml', '.config-dev.yaml', 'config-dev.json', '.config-dev.json']
        """
        suffix = f"{constants.BRANCH_SEPARATOR}{branch}" if branch else ""
        names: list[str] = []
        for extension in (*self._extensions, constants.FALLBACK_EXTENSION):
            name = f"{self._file_stem}{suffix}.{extension}"
            names.append(name)
            names.append(f".{name}")
        return names

    async def resolve(
        self,
        start_path: str | _os.PathLike[str],
        branch: str | None = None,
    ) -> Source:
        """
        Resolve a file or directory to a loaded configuration source.

        Raises:
            PathNotFoundError: If start_path does not exist.
            NotFoundError: If no candidate file exists in the directory.
            ConfigFileError: If the matched file cannot be read or parsed.
        """
        return await _asyncio.to_thread(self.resolve_sync, start_path, branch)

    def resolve_sync(
        self,
        start_path: str | _os.PathLike[str],
        branch: str | None = None,
    ) -> Source:
        """Blocking variant of resolve()."""
        path = _pathlib.Path(start_path).expanduser().resolve()
        if not path.exists():
            raise errors.PathNotFoundError(path)

        directory = path if path.is_dir() else path.parent

        try:
            entries = {entry.name for entry in directory.iterdir() if entry.is_file()}
        except OSError as e:
            raise errors.ConfigFileError(directory, f"cannot list directory: {e}") from e

        candidates = self.candidates(branch)
        for name in candidates:
            if name in entries:
                file_path = directory / name
                _logger.debug("Resolved %s (branch=%r) to %s", start_path, branch, file_path)
                return Source(str(file_path), _loaders.load_file(file_path))

        _logger.debug("No config file in %s (branch=%r)", directory, branch)
        raise errors.NotFoundError(directory, candidates)

    def __repr__(self) -> str:
        return f"PathResolver(extensions={self._extensions!r}, file_stem={self._file_stem!r})"
