"""Tests for domain/model/tag.py."""

import pytest

from structfilter.domain.model.tag import Tag


class TestTagLookup:
    """Tests for Tag.lookup / get / has."""

    def test_single_entry(self) -> None:
        tag = Tag('json:"name"')

        assert tag.lookup("json") == ("name", True)
        assert tag.get("json") == "name"
        assert tag.has("json") is True

    def test_multiple_entries(self) -> None:
        tag = Tag('json:"name,omitempty" db:"user_name"')

        assert tag.get("json") == "name,omitempty"
        assert tag.get("db") == "user_name"

    def test_missing_key(self) -> None:
        tag = Tag('json:"name"')

        assert tag.lookup("yaml") == ("", False)
        assert tag.get("yaml") == ""
        assert tag.has("yaml") is False

    def test_empty_value_is_present(self) -> None:
        """Empty value differs from missing entry."""
        tag = Tag('json:""')

        assert tag.lookup("json") == ("", True)

    def test_escaped_quote(self) -> None:
        tag = Tag(r'note:"say \"hi\"" json:"x"')

        assert tag.get("note") == 'say "hi"'
        assert tag.get("json") == "x"

    def test_empty_tag(self) -> None:
        assert list(Tag("").entries()) == []

    def test_malformed_tail_ignored(self) -> None:
        """Parsing stops at the first malformed entry."""
        tag = Tag('json:"name" broken db:"x"')

        assert list(tag.entries()) == [("json", "name")]
        assert tag.has("db") is False

    def test_is_str(self) -> None:
        tag = Tag('json:"name"')

        assert isinstance(tag, str)
        assert tag == 'json:"name"'


class TestTagEntry:
    """Tests for Tag.entry validation."""

    def test_valid_entry(self) -> None:
        assert Tag.entry('test:"inserted"') == ("test", "inserted")

    @pytest.mark.parametrize(
        "text",
        ["badtag", 'json:"a" db:"b"', 'json:"unterminated', ":\"x\"", ' json:"x"', ""],
    )
    def test_malformed_entry_raises(self, text: str) -> None:
        with pytest.raises(ValueError, match="malformed tag entry"):
            Tag.entry(text)
