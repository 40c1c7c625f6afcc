"""
Layered configuration store.

Config merges configuration layers, answers path lookups and provenance
queries, and can be frozen against further mutation.
"""

from confstrata.store._core import Config
from confstrata.store._path import PathNotation, traverse
from confstrata.store._registry import LayerRegistry

__all__ = ["Config", "LayerRegistry", "PathNotation", "traverse"]
