"""
Configuration module for Confstrata.

Uses pydantic-settings for environment variable loading.
"""

from confstrata.config.settings import Settings

__all__ = ["Settings"]
