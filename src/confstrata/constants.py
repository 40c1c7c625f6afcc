"""
Shared constants for Confstrata.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

# Path notation defaults
DEFAULT_DELIMITERS = "/."
"""Characters that split a lookup path into segments (slash and dot)."""

ESCAPE_CHAR = "\\"
"""A delimiter preceded by this character is taken literally."""

# Resolver defaults
DEFAULT_FILE_STEM = "config"
"""Base name of configuration files (config.yaml, config-dev.yaml, ...)."""

DEFAULT_EXTENSIONS: tuple[str, ...] = ("yaml", "yml", "toml")
"""Extensions tried in priority order before the JSON fallback."""

FALLBACK_EXTENSION = "json"
"""Extension tried last, after every entry of DEFAULT_EXTENSIONS."""

BRANCH_SEPARATOR = "-"
"""Joins the file stem and the branch name (config-dev.yaml)."""

# Layer identifiers
ANONYMOUS_LAYER = ""
"""Identifier recorded for trees assigned without an explicit origin."""

# Environment
ENV_PREFIX = "CONFSTRATA_"
"""Prefix for environment variables read by confstrata.config.Settings."""
