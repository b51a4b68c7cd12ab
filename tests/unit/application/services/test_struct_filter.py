"""Tests for StructFilter facade.

Tests:
- exemptions: registration, passthrough, sharing
- explain() and derived_shapes
- end-to-end: user database serialized without passwords
"""

import dataclasses
import re

import pytest

from structfilter.application.services.struct_filter import StructFilter
from structfilter.domain.model.configuration import FilterConfig
from structfilter.domain.model.field import Field
from structfilter.domain.model.tag import Tag
from structfilter.infrastructure.filters.name import remove_fields
from tests.factories import (
    Holder,
    Inner,
    KeepRemove,
    RecursiveRecord,
    SafeRecord,
    SimpleRecord,
    Stamp,
    User,
)


class TestExemptions:
    """Tests for register_exempt and passthrough."""

    def test_exempt_record_shared(self) -> None:
        sf = StructFilter(remove_fields(re.compile("^Secret$")))
        sf.register_exempt(Stamp)

        stamp = Stamp(Seconds=5, Secret="kept")
        converted = sf.convert(SafeRecord(SafeField=stamp, Secret="dropped"))

        assert converted.SafeField is stamp  # type: ignore[attr-defined]
        assert not hasattr(converted, "Secret")

    def test_exempt_record_derives_to_itself(self) -> None:
        sf = StructFilter()
        sf.register_exempt(Stamp)

        assert sf.derive_type(Stamp) is Stamp
        assert sf.convert(Stamp(1, "s")) == Stamp(1, "s")

    def test_exempt_inside_dynamic_slot(self) -> None:
        sf = StructFilter(remove_fields(re.compile("^Secret$")))
        sf.register_exempt(Stamp)
        stamp = Stamp()

        assert sf.convert(Holder(Payload=stamp)).Payload is stamp  # type: ignore[attr-defined]

    def test_register_optional(self) -> None:
        sf = StructFilter()
        sf.register_exempt(Stamp | None)

        assert sf.exempt_shapes == frozenset({Stamp})

    def test_register_exempt_of(self) -> None:
        sf = StructFilter()
        sf.register_exempt_of(Stamp())
        sf.register_exempt_of(None)

        assert sf.exempt_shapes == frozenset({Stamp})

    @pytest.mark.parametrize("shape", [None, int, list[Stamp], dict[str, int]])
    def test_non_records_ignored(self, shape: object) -> None:
        sf = StructFilter()
        sf.register_exempt(shape)

        assert sf.exempt_shapes == frozenset()

    def test_explain_exempt_raises(self) -> None:
        sf = StructFilter()
        sf.register_exempt(Stamp)

        with pytest.raises(ValueError, match="exempt"):
            sf.explain(Stamp)


class TestIntrospection:
    """Tests for explain() and derived_shapes."""

    def test_explain(self) -> None:
        sf = StructFilter(remove_fields(re.compile("^Remove")))
        plan = sf.explain(KeepRemove)

        assert plan.original is KeepRemove
        assert plan.filtered is sf.derive_type(KeepRemove)
        assert [f.name for f in plan.fields] == ["Keep1", "Keep2"]
        assert plan.removed == ("Remove1", "Remove2")

    def test_derived_shapes(self) -> None:
        sf = StructFilter()
        sf.derive_type(SimpleRecord)
        sf.convert(Inner())

        assert set(sf.derived_shapes) == {SimpleRecord, Inner}
        assert sf.derived_shapes[Inner] is sf.derive_type(Inner)

    def test_derived_shapes_is_snapshot(self) -> None:
        sf = StructFilter()
        shapes = sf.derived_shapes
        sf.derive_type(RecursiveRecord)

        assert RecursiveRecord not in shapes

    def test_default_config(self) -> None:
        assert StructFilter().config == FilterConfig()

    def test_custom_config(self) -> None:
        config = FilterConfig(tag_key="meta")

        assert StructFilter(config=config).config is config


def _to_json_ready(value: object) -> object:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            Tag(f.metadata.get("tag", "")).get("json") or f.name: _to_json_ready(
                getattr(value, f.name)
            )
            for f in dataclasses.fields(value)
        }
    if isinstance(value, list):
        return [_to_json_ready(item) for item in value]
    return value


class TestEndToEnd:
    """User database dumped without credentials."""

    USERS = [
        User("alice", "123456", "", 1),
        User("bob", "qwerty", "AdminPassword", 2),
    ]

    def test_passwords_removed_names_lowercased(self) -> None:
        def lowercase_json_name(field: Field) -> None:
            field.tag = f'json:"{field.name.lower()}"'

        sf = StructFilter(remove_fields(re.compile("^Password.*$")), lowercase_json_name)
        converted = sf.convert(self.USERS, list[User])

        assert _to_json_ready(converted) == [
            {"name": "alice", "logintime": 1},
            {"name": "bob", "logintime": 2},
        ]

    def test_originals_untouched(self) -> None:
        StructFilter(remove_fields(re.compile("^Password"))).convert(self.USERS)

        assert self.USERS[1].PasswordAdmin == "AdminPassword"
