"""Record plan: how one record was filtered."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PlannedField:
    """One field of a filtered record.

    Attributes:
        name: Field name (same in original and filtered record)
        tag: Tag after all rules ran
        original: Annotation of the original field
        filtered: Annotation of the filtered field
        placeholder: True if the field was downgraded to typing.Any
            because its shape refers back to a record still being derived
        compare, hash, repr: dataclasses.field() flags copied from the
            original field
    """

    name: str
    tag: str
    original: object
    filtered: object
    placeholder: bool = False
    compare: bool = True
    hash: bool | None = None
    repr: bool = True

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")


@dataclass(frozen=True, slots=True)
class RecordPlan:
    """Derivation result for one original record.

    Attributes:
        original: Original dataclass
        filtered: Generated dataclass
        fields: Surviving fields in declaration order
        removed: Names of fields removed by rules
        hidden: Names of hidden fields (never shown to rules)
    """

    original: type
    filtered: type
    fields: tuple[PlannedField, ...]
    removed: tuple[str, ...] = ()
    hidden: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.original is None:
            raise TypeError("original must not be None")
        if self.filtered is None:
            raise TypeError("filtered must not be None")
        names = [f.name for f in self.fields]
        if len(names) != len(set(names)):
            raise ValueError(f"duplicate field names: {names}")
