"""
Tests that enforce coding standards.

These tests verify that the codebase follows our import and logging
conventions:

- modules use 'import X as _x' (external) or 'import X as x' (internal);
  'from X import Y' is reserved for __init__.py re-exports
- modules that log use a module-level '_logger = _logging.getLogger(__name__)'
"""

import ast as _ast
import pathlib as _pathlib

import pytest as _pytest

# Directories to check
SRC_DIR = _pathlib.Path(__file__).parent.parent / "src" / "confstrata"
TESTS_DIR = _pathlib.Path(__file__).parent.parent / "tests"


def _python_files(directory: _pathlib.Path) -> list[_pathlib.Path]:
    """All non-__init__ Python files below directory."""
    return sorted(path for path in directory.rglob("*.py") if path.name != "__init__.py")


def _is_type_checking_block(node: _ast.AST) -> bool:
    if not isinstance(node, _ast.If):
        return False
    test = node.test
    if isinstance(test, _ast.Name):
        return test.id == "TYPE_CHECKING"
    return isinstance(test, _ast.Attribute) and test.attr == "TYPE_CHECKING"


def _from_imports(source: str) -> list[tuple[int, str]]:
    """
    Find 'from X import Y' statements in source.

    Returns list of (line_number, module) tuples.
    Excludes:
    - 'from __future__ import' (allowed)
    - imports inside TYPE_CHECKING blocks (allowed)
    """
    tree = _ast.parse(source)
    skipped: set[int] = set()
    for node in _ast.walk(tree):
        if _is_type_checking_block(node):
            skipped.update(id(child) for child in _ast.walk(node))

    found: list[tuple[int, str]] = []
    for node in _ast.walk(tree):
        if not isinstance(node, _ast.ImportFrom) or id(node) in skipped:
            continue
        if node.module == "__future__":
            continue
        found.append((node.lineno, "." * node.level + (node.module or "")))
    return sorted(found)


def _violations(paths: list[_pathlib.Path]) -> list[str]:
    violations: list[str] = []
    for path in paths:
        for line_num, module in _from_imports(path.read_text(encoding="utf-8")):
            violations.append(f"{path}:{line_num}: from {module} import ...")
    return violations


class TestImportStyle:
    """Tests for import style compliance."""

    def test_src_no_from_imports(self) -> None:
        """Source files should not use 'from X import Y' pattern."""
        violations = _violations(_python_files(SRC_DIR))

        if violations:
            _pytest.fail(
                "Found forbidden 'from X import Y' imports:\n"
                + "\n".join(f"  {v}" for v in violations)
                + "\n\nUse 'import X as _x' (external) or 'import X as x' (internal) instead."
            )

    def test_tests_no_from_imports(self) -> None:
        """Test files should not use 'from X import Y' pattern."""
        violations = _violations(_python_files(TESTS_DIR))

        if violations:
            _pytest.fail(
                "Found forbidden 'from X import Y' imports:\n"
                + "\n".join(f"  {v}" for v in violations)
            )


class TestLoggingStyle:
    """Modules that log do it through a module-level logger."""

    def test_no_root_logger_calls(self) -> None:
        """Source files call _logger.x(), never _logging.x() directly."""
        offenders: list[str] = []
        for path in _python_files(SRC_DIR):
            for node in _ast.walk(_ast.parse(path.read_text(encoding="utf-8"))):
                if (
                    isinstance(node, _ast.Call)
                    and isinstance(node.func, _ast.Attribute)
                    and isinstance(node.func.value, _ast.Name)
                    and node.func.value.id == "_logging"
                    and node.func.attr in {"debug", "info", "warning", "error", "exception"}
                ):
                    offenders.append(f"{path}:{node.lineno}")

        assert offenders == []

    def test_logger_named_after_module(self) -> None:
        for path in _python_files(SRC_DIR):
            source = path.read_text(encoding="utf-8")
            if "_logger." in source:
                assert "_logger = _logging.getLogger(__name__)" in source, path


class TestImportDetection:
    """Tests for the import detection logic itself."""

    def test_detects_from_import(self) -> None:
        assert _from_imports("from pathlib import Path") == [(1, "pathlib")]

    def test_detects_relative_import(self) -> None:
        assert _from_imports("from . import sibling") == [(1, ".")]

    def test_allows_future_imports(self) -> None:
        assert _from_imports("from __future__ import annotations") == []

    def test_ignores_type_checking_block(self) -> None:
        source = """
import typing as _typing

if _typing.TYPE_CHECKING:
    from some_module import SomeType

from forbidden import Other
"""
        assert _from_imports(source) == [(7, "forbidden")]

    def test_plain_import_allowed(self) -> None:
        assert _from_imports("import os as _os") == []
