"""
Clone and merge primitives for configuration trees.

Merge policy:
- mapping + mapping → recursive merge by key
- sequence → replaced wholesale (no element-wise merge)
- scalar → replaced
- type mismatch → right side wins

All functions are pure: inputs are never mutated, and every container in
the result is a fresh dict/list owned by the caller.
"""

from __future__ import annotations

import copy as _copy
import typing as _typing

import confstrata.utils.deep._compare as _compare
import confstrata.utils.deep._types as _types


def clone(value: _typing.Any) -> _typing.Any:
    """
    Deep copy a value into plain dicts and lists.

    Any Mapping (including frozen values) becomes a dict and any non-string
    Sequence (including tuples) becomes a list. Other values are deep
    copied, so immutable scalars come back as-is.
    """
    if _compare.is_mapping(value):
        return {key: clone(item) for key, item in value.items()}
    if _compare.is_sequence(value):
        return [clone(item) for item in value]
    return _copy.deepcopy(value)


def merge(base: _typing.Any, override: _typing.Any) -> _typing.Any:
    """
    Deep merge override into base, override winning on collisions.

    Example:
        >>> merge({"a": {"x": 1, "y": [1]}}, {"a": {"y": [2]}})
        {'a': {'x': 1, 'y': [2]}}

    Returns:
        A new tree. If either side is not a mapping, a clone of override.
    """
    if not (_compare.is_mapping(base) and _compare.is_mapping(override)):
        return clone(override)
    return _merge_into(clone(base), override)


def _merge_into(
    target: dict[str, _typing.Any],
    override: _typing.Mapping[str, _typing.Any],
) -> dict[str, _typing.Any]:
    """Merge override into target in place. target must be caller-owned."""
    for key, value in override.items():
        existing = target.get(key, _types.MISSING)
        if isinstance(existing, dict) and _compare.is_mapping(value):
            _merge_into(existing, value)
        else:
            target[key] = clone(value)
    return target


def merge_defaults(fallback: _typing.Any, found: _typing.Any) -> _typing.Any:
    """
    Combine a looked-up value with a fallback template.

    - found is MISSING → fallback, unchanged
    - both mappings → recursive merge; found keys win, fallback fills gaps
    - both sequences → fallback items followed by found items not already
      present
    - otherwise → found, unchanged (a scalar found value ignores fallback)

    Example:
        >>> merge_defaults({"name": False, "extra": "Y"}, {"name": "X"})
        {'name': 'X', 'extra': 'Y'}
    """
    if found is _types.MISSING:
        return fallback

    if _compare.is_mapping(fallback) and _compare.is_mapping(found):
        result = clone(fallback)
        for key, value in found.items():
            if key in result:
                result[key] = merge_defaults(result[key], value)
            else:
                result[key] = clone(value)
        return result

    if _compare.is_sequence(fallback) and _compare.is_sequence(found):
        result_list = clone(fallback)
        for item in found:
            if not any(_compare.strict_equal(item, existing) for existing in result_list):
                result_list.append(clone(item))
        return result_list

    return found
