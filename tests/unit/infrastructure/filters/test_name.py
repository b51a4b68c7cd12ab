"""Tests for name-based rules."""

import re

import pytest

from structfilter.domain.model.field import Field
from structfilter.infrastructure.filters.composite import compose
from structfilter.infrastructure.filters.name import (
    as_matcher,
    insert_tag,
    keep_fields,
    remove_fields,
)


class TestAsMatcher:
    """Tests for as_matcher."""

    def test_none(self) -> None:
        assert as_matcher(None) is None

    def test_pattern_is_searched(self) -> None:
        match = as_matcher(re.compile("word"))

        assert match is not None
        assert match("Password") is True
        assert match("Name") is False

    def test_callable_passthrough(self) -> None:
        def starts_with_x(name: str) -> bool:
            return name.startswith("X")

        assert as_matcher(starts_with_x) is starts_with_x

    def test_invalid_raises(self) -> None:
        with pytest.raises(TypeError, match="matcher must be callable"):
            as_matcher(42)  # type: ignore[arg-type]


class TestRemoveFields:
    """Tests for remove_fields."""

    def test_removes_matching(self) -> None:
        rule = remove_fields(re.compile("^Remove.*$"))
        removed, kept = Field("Remove1"), Field("Keep1")
        rule(removed)
        rule(kept)

        assert removed.kept is False
        assert kept.kept is True

    def test_none_matcher_is_noop(self) -> None:
        field = Field("Remove1")
        remove_fields(None)(field)

        assert field.kept is True


class TestKeepFields:
    """Tests for keep_fields."""

    def test_countermands_remove(self) -> None:
        rule = compose(remove_fields(re.compile(".")), keep_fields(lambda name: name == "Id"))
        identifier, other = Field("Id"), Field("Other")
        rule(identifier)
        rule(other)

        assert identifier.kept is True
        assert other.kept is False

    def test_none_matcher_is_noop(self) -> None:
        field = Field("Name")
        field.remove()
        keep_fields(None)(field)

        assert field.kept is False


class TestInsertTag:
    """Tests for insert_tag."""

    def test_inserts_into_empty_tag(self) -> None:
        field = Field("TagMe")
        insert_tag(re.compile("^TagMe"), 'test:"inserted"')(field)

        assert field.tag == 'test:"inserted"'

    def test_prepends_to_existing_tag(self) -> None:
        field = Field("TagMe", 'json:"tag_me"')
        insert_tag(re.compile("^TagMe"), 'test:"inserted"')(field)

        assert field.tag == 'test:"inserted" json:"tag_me"'
        assert field.tag.get("json") == "tag_me"

    def test_existing_key_not_overwritten(self) -> None:
        field = Field("TagMeNotAgain", 'test:"alreadypresent"')
        insert_tag(re.compile("^TagMe"), 'test:"inserted"')(field)

        assert field.tag.get("test") == "alreadypresent"

    def test_non_matching_untouched(self) -> None:
        field = Field("NoThanks")
        insert_tag(re.compile("^TagMe"), 'test:"inserted"')(field)

        assert field.tag == ""

    def test_none_matcher_is_noop(self) -> None:
        field = Field("TagMe")
        insert_tag(None, 'test:"foo"')(field)

        assert field.tag == ""

    def test_bad_entry_raises_at_construction(self) -> None:
        with pytest.raises(ValueError, match="malformed tag entry"):
            insert_tag(re.compile("^TagMe"), "badtag")
