"""Tests for domain/model/field.py."""

import pytest

from structfilter.domain.model.field import Field
from structfilter.domain.model.tag import Tag


class TestField:
    """Tests for Field descriptor."""

    def test_defaults(self) -> None:
        field = Field("Name")

        assert field.name == "Name"
        assert field.tag == ""
        assert isinstance(field.tag, Tag)
        assert field.kept is True

    def test_remove_then_keep(self) -> None:
        """keep() countermands an earlier remove()."""
        field = Field("Name")
        field.remove()
        assert field.kept is False

        field.keep()
        assert field.kept is True

    def test_keep_then_remove(self) -> None:
        field = Field("Name")
        field.keep()
        field.remove()

        assert field.kept is False

    def test_tag_assignment_coerces(self) -> None:
        field = Field("Name", 'json:"a"')
        field.tag = 'json:"b"'

        assert isinstance(field.tag, Tag)
        assert field.tag.get("json") == "b"

    def test_tag_must_be_str(self) -> None:
        field = Field("Name")

        with pytest.raises(TypeError, match="tag must be str"):
            field.tag = 42  # type: ignore[assignment]

    def test_name_is_read_only(self) -> None:
        field = Field("Name")

        with pytest.raises(AttributeError):
            field.name = "Other"  # type: ignore[misc]

    def test_empty_name_raises(self) -> None:
        with pytest.raises(ValueError, match="name must not be empty"):
            Field("")

    def test_repr(self) -> None:
        assert repr(Field("Name", 'json:"n"')) == "Field(name='Name', tag='json:\"n\"', kept=True)"
