"""
Configuration source resolution.

Finds configuration files by naming convention and parses them into trees.
"""

from confstrata.resolver._core import PathResolver, Source
from confstrata.resolver._loaders import (
    Loader,
    get_loader,
    load_file,
    register_loader,
    supported_extensions,
)

__all__ = [
    "Loader",
    "PathResolver",
    "Source",
    "get_loader",
    "load_file",
    "register_loader",
    "supported_extensions",
]
