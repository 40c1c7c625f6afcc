"""
CLI module for Confstrata.

Provides the command-line interface using Click.
"""

from confstrata.cli.main import cli, main

__all__ = ["main", "cli"]
