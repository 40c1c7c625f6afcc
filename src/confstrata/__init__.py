"""
Confstrata - layered configuration store

Loads configuration fragments from files or directories, merges them into
a single tree, answers path queries and reports which layer a value came from.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("confstrata")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "Confstrata Contributors"

from confstrata.errors import (  # noqa: E402
    ConfigError,
    ConfigFileError,
    FrozenStateError,
    NotFoundError,
    PathNotFoundError,
    ResolveError,
)
from confstrata.resolver import PathResolver, Source  # noqa: E402
from confstrata.store import Config  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "Config",
    "ConfigError",
    "ConfigFileError",
    "FrozenStateError",
    "NotFoundError",
    "PathNotFoundError",
    "PathResolver",
    "ResolveError",
    "Source",
]
