"""
Deep structural helpers for JSON-like trees.

Trees are built from mappings, sequences and scalars. This package provides:

- clone: independent mutable copy (also unwraps frozen values)
- merge: right-overtakes-left deep merge (mappings recurse, the rest replaces)
- merge_defaults: fallback merge used by lookups (found value wins)
- freeze: immutable FrozenMapping / FrozenSequence copies
- matches / strict_equal: partial-match and strict equality

Example:
    >>> from confstrata.utils import deep
    >>> deep.merge({"db": {"host": "a", "port": 1}}, {"db": {"port": 2}})
    {'db': {'host': 'a', 'port': 2}}
"""

from confstrata.utils.deep._compare import is_mapping, is_sequence, matches, strict_equal
from confstrata.utils.deep._frozen import FrozenMapping, FrozenSequence, freeze
from confstrata.utils.deep._merge import clone, merge, merge_defaults
from confstrata.utils.deep._types import MISSING, MissingType, Segments, Tree

__all__ = [
    "MISSING",
    "FrozenMapping",
    "FrozenSequence",
    "MissingType",
    "Segments",
    "Tree",
    "clone",
    "freeze",
    "is_mapping",
    "is_sequence",
    "matches",
    "merge",
    "merge_defaults",
    "strict_equal",
]
