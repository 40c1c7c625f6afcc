"""
Utility classes and functions for Confstrata.

General-purpose utilities that don't belong to a specific domain.
"""

import confstrata.utils.deep as deep

__all__ = ["deep"]
