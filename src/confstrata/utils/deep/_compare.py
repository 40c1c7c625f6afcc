"""
Equality helpers for configuration values.

strict_equal() compares by value like ``==`` but never treats a boolean as
equal to a number (True vs 1). matches() implements partial-match equality:
sequences match when every expected element appears in the actual sequence,
mappings match when every expected key is present with an equal value.
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing


def is_mapping(value: _typing.Any) -> bool:
    """Check if a value is a mapping container."""
    return isinstance(value, _abc.Mapping)


def is_sequence(value: _typing.Any) -> bool:
    """Check if a value is a sequence container (str/bytes excluded)."""
    return isinstance(value, _abc.Sequence) and not isinstance(value, (str, bytes))


def strict_equal(left: _typing.Any, right: _typing.Any) -> bool:
    """
    Compare two values structurally without bool/number coercion.

    Mappings compare key by key and sequences element by element, so a
    frozen value equals the plain container it was built from.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right

    if is_mapping(left) and is_mapping(right):
        if len(left) != len(right):
            return False
        return all(
            key in right and strict_equal(value, right[key])
            for key, value in left.items()
        )

    if is_sequence(left) and is_sequence(right):
        if len(left) != len(right):
            return False
        return all(strict_equal(a, b) for a, b in zip(left, right))

    if is_mapping(left) or is_mapping(right) or is_sequence(left) or is_sequence(right):
        return False

    return bool(left == right)


def matches(expected: _typing.Any, actual: _typing.Any) -> bool:
    """
    Partial-match equality used by provenance-by-value queries.

    - both sequences: every element of expected is contained in actual
      (order irrelevant, each duplicate checked on its own)
    - both mappings: every key of expected exists in actual with a
      strictly equal value
    - mixed container kinds: no match
    - otherwise: strict equality

    Example:
        >>> matches(["bar"], ["bar", "baz"])
        True
        >>> matches(["bar", "qux"], ["bar", "baz"])
        False
        >>> matches({"port": 80}, {"port": 80, "host": "a"})
        True
    """
    if is_sequence(expected) and is_sequence(actual):
        return all(
            any(strict_equal(item, candidate) for candidate in actual)
            for item in expected
        )

    if is_mapping(expected) and is_mapping(actual):
        return all(
            key in actual and strict_equal(value, actual[key])
            for key, value in expected.items()
        )

    if (is_mapping(expected) or is_sequence(expected)) and (
        is_mapping(actual) or is_sequence(actual)
    ):
        return False

    return strict_equal(expected, actual)
