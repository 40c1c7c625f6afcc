"""Tests for path notation parsing and tree traversal."""

import pytest as _pytest

import confstrata.store as store
import confstrata.utils.deep as deep


class TestParse:
    """Tests for PathNotation.parse()."""

    @_pytest.mark.parametrize(
        ("path", "segments"),
        [
            ("app/name", ("app", "name")),
            ("app.name", ("app", "name")),
            ("a/b.c", ("a", "b", "c")),
            ("single", ("single",)),
        ],
    )
    def test_default_delimiters(self, path: str, segments: tuple[str, ...]) -> None:
        """Slash and dot both split by default."""
        assert store.PathNotation().parse(path) == segments

    def test_escaped_delimiter_is_literal(self) -> None:
        """A backslash keeps the delimiter and is itself dropped."""
        notation = store.PathNotation()

        assert notation.parse("hosts/example\\.com") == ("hosts", "example.com")
        assert notation.parse("routes/\\/api") == ("routes", "/api")

    def test_backslash_before_other_char_kept(self) -> None:
        assert store.PathNotation().parse("a\\b") == ("a\\b",)

    def test_brackets_and_quotes_not_special(self) -> None:
        assert store.PathNotation().parse('a["b"]') == ('a["b"]',)

    def test_empty_path_is_single_empty_segment(self) -> None:
        assert store.PathNotation().parse("") == ("",)

    def test_trailing_delimiter_yields_empty_segment(self) -> None:
        assert store.PathNotation().parse("a/") == ("a", "")

    def test_custom_delimiters(self) -> None:
        """With only slash configured, dots stay inside segments."""
        notation = store.PathNotation(delimiters="/")

        assert notation.parse("hosts/example.com") == ("hosts", "example.com")
        assert notation.delimiters == "/"

    def test_regex_metacharacter_delimiter(self) -> None:
        assert store.PathNotation(delimiters="|").parse("a|b") == ("a", "b")

    @_pytest.mark.parametrize("delimiters", ["", "\\", "/\\"])
    def test_invalid_delimiters(self, delimiters: str) -> None:
        with _pytest.raises(ValueError):
            store.PathNotation(delimiters=delimiters)


class TestEscapeAndJoin:
    """Tests for PathNotation.escape() and join()."""

    def test_escape(self) -> None:
        assert store.PathNotation().escape("example.com") == "example\\.com"

    def test_join_is_inverse_of_parse(self) -> None:
        notation = store.PathNotation()
        segments = ("hosts", "example.com", "a/b")

        joined = notation.join(segments)

        assert joined == "hosts/example\\.com/a\\/b"
        assert notation.parse(joined) == segments


class TestTraverse:
    """Tests for traverse()."""

    def test_nested_mapping(self) -> None:
        tree = {"server": {"port": 3000}}
        assert store.traverse(tree, ("server", "port")) == 3000

    def test_missing_key(self) -> None:
        assert store.traverse({"a": {}}, ("a", "b")) is deep.MISSING

    def test_through_scalar_short_circuits(self) -> None:
        assert store.traverse({"a": 5}, ("a", "b")) is deep.MISSING

    def test_explicit_null_is_found(self) -> None:
        assert store.traverse({"a": None}, ("a",)) is None

    def test_list_index(self) -> None:
        tree = {"servers": [{"name": "a"}, {"name": "b"}]}

        assert store.traverse(tree, ("servers", "1", "name")) == "b"

    @_pytest.mark.parametrize("segment", ["2", "-1", "x", "1.0", "١"])
    def test_invalid_list_index(self, segment: str) -> None:
        """Out of range, negative and non-decimal segments are absent."""
        assert store.traverse({"items": [1, 2]}, ("items", segment)) is deep.MISSING

    def test_no_segments_returns_tree(self) -> None:
        tree = {"a": 1}
        assert store.traverse(tree, ()) is tree

    def test_frozen_values(self) -> None:
        tree = deep.freeze({"a": [{"b": 1}]})
        assert store.traverse(tree, ("a", "0", "b")) == 1
