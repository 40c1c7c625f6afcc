"""
Shared pytest fixtures for Confstrata tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import click.testing as _click_testing
import pytest as _pytest

import confstrata.constants as constants
import confstrata.store as store

# =============================================================================
# Environment Isolation
# =============================================================================


@_pytest.fixture(autouse=True)
def clean_env(monkeypatch: _pytest.MonkeyPatch) -> None:
    """Remove CONFSTRATA_* variables so tests see field defaults."""
    for key in list(_os.environ):
        if key.startswith(constants.ENV_PREFIX):
            monkeypatch.delenv(key)


# =============================================================================
# Store & Files
# =============================================================================


@_pytest.fixture
def config_store() -> store.Config:
    """A fresh, empty store with default settings."""
    return store.Config()


@_pytest.fixture
def write_file(tmp_path: _pathlib.Path) -> _typing.Callable[[str, str], _pathlib.Path]:
    """Return a helper that writes text to tmp_path/<relative> and returns the path."""

    def _write(relative: str, content: str) -> _pathlib.Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@_pytest.fixture
def app_dir(tmp_path: _pathlib.Path) -> _pathlib.Path:
    """
    A directory with a base config and a "dev" branch overlay.

    config.yaml:      app/name, server/port, server/host, tags
    config-dev.yaml:  server/port override, debug flag
    """
    directory = tmp_path / "app"
    directory.mkdir()
    (directory / "config.yaml").write_text(
        "app:\n"
        "  name: demo\n"
        "server:\n"
        "  host: localhost\n"
        "  port: 3000\n"
        "tags:\n"
        "  - base\n",
        encoding="utf-8",
    )
    (directory / "config-dev.yaml").write_text(
        "server:\n"
        "  port: 4000\n"
        "debug: true\n",
        encoding="utf-8",
    )
    return directory


# =============================================================================
# CLI
# =============================================================================


@_pytest.fixture
def cli_runner() -> _click_testing.CliRunner:
    """Return a Click CLI test runner."""
    return _click_testing.CliRunner()
