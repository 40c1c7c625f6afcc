"""
File-format loaders for configuration sources.

Each loader turns file text into a parsed tree. The table is keyed by file
extension (without the dot); register_loader() adds or replaces entries.

Built-in formats:
- yaml / yml: PyYAML safe loader
- toml: tomllib
- json: json
"""

from __future__ import annotations

import json as _json
import pathlib as _pathlib
import tomllib as _tomllib
import typing as _typing

import yaml as _yaml

import confstrata.errors as errors
import confstrata.utils.deep as deep

# Parses file text; raises ValueError (or a subclass) on malformed content
Loader: _typing.TypeAlias = _typing.Callable[[str], _typing.Any]


def _load_yaml(content: str) -> _typing.Any:
    try:
        return _yaml.safe_load(content)
    except _yaml.YAMLError as e:
        raise ValueError(f"invalid YAML: {e}") from e


def _load_toml(content: str) -> _typing.Any:
    try:
        return _tomllib.loads(content)
    except _tomllib.TOMLDecodeError as e:
        raise ValueError(f"invalid TOML: {e}") from e


def _load_json(content: str) -> _typing.Any:
    # Whitespace-only JSON files are treated like empty YAML files
    if not content.strip():
        return None
    try:
        return _json.loads(content)
    except _json.JSONDecodeError as e:
        raise ValueError(f"invalid JSON: {e}") from e


_LOADERS: dict[str, Loader] = {
    "yaml": _load_yaml,
    "yml": _load_yaml,
    "toml": _load_toml,
    "json": _load_json,
}


def register_loader(extension: str, loader: Loader) -> None:
    """
    Register a parser for files with the given extension.

    Args:
        extension: File extension, with or without the leading dot.
        loader: Callable taking file text and returning the parsed tree.
            Malformed input should raise ValueError.
    """
    _LOADERS[extension.lstrip(".").lower()] = loader


def get_loader(extension: str) -> Loader | None:
    """Get the loader for an extension, or None if unsupported."""
    return _LOADERS.get(extension.lstrip(".").lower())


def supported_extensions() -> list[str]:
    """Extensions with a registered loader."""
    return sorted(_LOADERS)


def _key_to_str(key: _typing.Any) -> str:
    # JSON spelling for bool and null keys
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    return str(key)


def _stringify_keys(value: _typing.Any, path: _pathlib.Path) -> _typing.Any:
    """
    Convert every mapping key below value to a string.

    YAML turns keys such as `404` or `yes` into int and bool, which no path
    segment could ever match.

    Raises:
        ConfigFileError: If two keys of one mapping become the same string.
    """
    if isinstance(value, dict):
        result: dict[str, _typing.Any] = {}
        for key, item in value.items():
            name = _key_to_str(key)
            if name in result:
                raise errors.ConfigFileError(
                    path, f"duplicate key after conversion to string: {name!r}"
                )
            result[name] = _stringify_keys(item, path)
        return result
    if isinstance(value, list):
        return [_stringify_keys(item, path) for item in value]
    return value


def load_file(path: _pathlib.Path) -> deep.Tree:
    """
    Read and parse a configuration file.

    Empty files load as an empty tree. Non-string mapping keys are converted
    to strings (`404` becomes "404", `true` becomes "true").

    Raises:
        ConfigFileError: If the file cannot be read, is malformed, has no
            loader for its extension, its top level is not a mapping, or two
            keys of one mapping convert to the same string.
    """
    loader = get_loader(path.suffix)
    if loader is None:
        raise errors.ConfigFileError(path, f"unsupported format: {path.suffix or '(none)'}")

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise errors.ConfigFileError(path, f"permission denied: {e}") from e
    except OSError as e:
        raise errors.ConfigFileError(path, f"cannot read file: {e}") from e
    except UnicodeDecodeError as e:
        raise errors.ConfigFileError(path, f"not valid UTF-8: {e}") from e

    try:
        parsed = loader(content)
    except ValueError as e:
        raise errors.ConfigFileError(path, str(e)) from e

    if parsed is None:
        return {}

    if not isinstance(parsed, dict):
        type_name = type(parsed).__name__
        raise errors.ConfigFileError(path, f"config must be a mapping (dict), got {type_name}")

    return _typing.cast(deep.Tree, _stringify_keys(parsed, path))
