"""
Settings for Confstrata itself, using pydantic-settings.

Loads from:
1. Constructor arguments (highest precedence)
2. Environment variables with CONFSTRATA_ prefix
3. Field defaults

List values are read from the environment as JSON:
  CONFSTRATA_EXTENSIONS='["toml", "yaml"]'
  CONFSTRATA_DELIMITERS=/
"""

import logging as _logging
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import confstrata.constants as constants


class Settings(_pydantic_settings.BaseSettings):
    """
    Confstrata configuration settings.

    All settings can be overridden via environment variables with the
    CONFSTRATA_ prefix.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix=constants.ENV_PREFIX,
        extra="ignore",
    )

    delimiters: str = _pydantic.Field(
        default=constants.DEFAULT_DELIMITERS,
        description="Characters that split lookup paths into segments",
    )
    branch: str | None = _pydantic.Field(
        default=None,
        description="Branch overlay loaded on top of each source (config-<branch>.*)",
    )
    extensions: list[str] = _pydantic.Field(
        default_factory=lambda: list(constants.DEFAULT_EXTENSIONS),
        description="File extensions in resolver priority order (JSON is always last)",
    )
    file_stem: str = _pydantic.Field(
        default=constants.DEFAULT_FILE_STEM,
        description="Base name of configuration files",
    )
    log_level: str = _pydantic.Field(
        default="WARNING",
        description="Logging level for the confstrata CLI",
    )

    @_pydantic.field_validator("delimiters")
    @classmethod
    def _check_delimiters(cls, value: str) -> str:
        if not value:
            raise ValueError("at least one delimiter is required")
        if constants.ESCAPE_CHAR in value:
            raise ValueError("the escape character cannot be a delimiter")
        return value

    @_pydantic.field_validator("extensions")
    @classmethod
    def _normalize_extensions(cls, value: list[str]) -> list[str]:
        normalized: list[str] = []
        for extension in value:
            extension = extension.strip().lstrip(".").lower()
            if (
                extension
                and extension != constants.FALLBACK_EXTENSION
                and extension not in normalized
            ):
                normalized.append(extension)
        return normalized

    @_pydantic.field_validator("branch")
    @classmethod
    def _empty_branch_is_none(cls, value: str | None) -> str | None:
        return value or None

    @_pydantic.field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(_logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level

    def log_level_value(self) -> int:
        """The log level as a logging module constant."""
        return _typing.cast(int, _logging.getLevelName(self.log_level))
