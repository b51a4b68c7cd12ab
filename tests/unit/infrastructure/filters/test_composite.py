"""Tests for composite rules.

Tests:
- compose: order of application, override semantics, failure index
"""

import pytest

from structfilter.domain.exceptions import FilterChainError
from structfilter.domain.model.field import Field
from structfilter.infrastructure.filters.composite import compose
from tests.factories import FilterTestError, failing_rule, keep_all, nop_rule, remove_all


class TestCompose:
    """Tests for compose."""

    def test_empty_is_noop(self) -> None:
        field = Field("Name", 'json:"n"')
        compose()(field)

        assert field.kept is True
        assert field.tag == 'json:"n"'

    def test_single_is_identity(self) -> None:
        assert compose(remove_all) is remove_all

    def test_remove_then_keep_keeps(self) -> None:
        """Last rule wins: no sticky remove."""
        field = Field("Name")
        compose(remove_all, keep_all)(field)

        assert field.kept is True

    def test_keep_then_remove_drops(self) -> None:
        field = Field("Name")
        compose(keep_all, remove_all)(field)

        assert field.kept is False

    def test_rules_see_earlier_edits(self) -> None:
        seen: list[str] = []

        def set_tag(field: Field) -> None:
            field.tag = 'json:"x"'

        def record(field: Field) -> None:
            seen.append(field.tag)

        compose(set_tag, record)(Field("Name"))

        assert seen == ['json:"x"']

    def test_failure_carries_index(self) -> None:
        with pytest.raises(FilterChainError, match=r"filter\[1\]: test filter error") as exc_info:
            compose(nop_rule, failing_rule)(Field("Name"))

        assert exc_info.value.index == 1
        assert isinstance(exc_info.value.cause, FilterTestError)

    def test_failure_stops_chain(self) -> None:
        calls: list[str] = []

        def tail(field: Field) -> None:
            calls.append(field.name)

        with pytest.raises(FilterChainError):
            compose(failing_rule, tail)(Field("Name"))

        assert calls == []
