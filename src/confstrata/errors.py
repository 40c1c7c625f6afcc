"""
Exception hierarchy for Confstrata.

Every error carries a stable ``code`` so callers can branch on the kind of
failure without matching on message text:

- FrozenStateError (E_CONFIG_FROZEN): mutation attempted after freeze()
- NotFoundError (E_CONFIG_NOT_FOUND): no file matched the naming convention
- PathNotFoundError (E_RESOLVE_PATH): the start path does not exist
- ConfigFileError (E_CONFIG_FILE): a matched file could not be read or parsed
- ResolveError (E_CONFIG_ADD): Config.add() failed; the cause is chained
"""

from __future__ import annotations

import pathlib as _pathlib


class ConfigError(Exception):
    """Base class for all Confstrata errors."""

    code = "E_CONFIG"


class FrozenStateError(ConfigError):
    """Raised when a mutating operation is invoked on a frozen store."""

    code = "E_CONFIG_FROZEN"

    def __init__(self, message: str = "The config instance is in a frozen state") -> None:
        super().__init__(message)


class NotFoundError(ConfigError):
    """Resolution finished but no configuration file matched."""

    code = "E_CONFIG_NOT_FOUND"

    def __init__(self, directory: _pathlib.Path, candidates: list[str]) -> None:
        self.directory = directory
        self.candidates = candidates
        super().__init__(
            f"Could not find config file in {directory} "
            f"(tried: {', '.join(candidates)})"
        )


class PathNotFoundError(ConfigError):
    """The path handed to the resolver does not exist."""

    code = "E_RESOLVE_PATH"

    def __init__(self, path: _pathlib.Path) -> None:
        self.path = path
        super().__init__(f"Path does not exist: {path}")


class ConfigFileError(ConfigError):
    """Error loading or parsing a configuration file."""

    code = "E_CONFIG_FILE"

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in config file {path}: {message}")


class ResolveError(ConfigError):
    """
    Config.add() could not resolve a configuration source.

    The underlying failure is chained as ``__cause__`` and also exposed as
    ``cause`` so callers can tell "nothing matched" (NotFoundError) apart
    from I/O and parse failures.
    """

    code = "E_CONFIG_ADD"

    def __init__(
        self,
        path: str | _pathlib.Path,
        branch: str | None,
        cause: BaseException,
    ) -> None:
        self.path = path
        self.branch = branch
        self.cause = cause
        if branch:
            message = f'Could not add config "{path}" using branch "{branch}"'
        else:
            message = f'Could not add config "{path}"'
        super().__init__(message)
