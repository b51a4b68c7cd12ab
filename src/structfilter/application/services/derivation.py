"""Type derivation: original shape → filtered shape.

Records (dataclasses) are rebuilt field by field through the rule chain;
containers are rebuilt over their mapped element shapes; everything else
maps to itself.

Memo states per original record:
  absent        not seen yet
  None          derivation in progress
  type          resolved to that filtered dataclass

Re-entering a record that is in progress is a cycle. The shape that
re-entered becomes unresolvable, and so does every container around it,
up to the enclosing field, which is then typed as typing.Any. A failed
derivation removes its record from the memo so a retry starts clean.
"""

from __future__ import annotations

import dataclasses
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import structlog

from structfilter.domain.exceptions import (
    IndirectionDepthError,
    RuleError,
    ShapeError,
    ShapeKindError,
    StructFilterError,
)
from structfilter.domain.exceptions.shape import shape_name
from structfilter.domain.model.field import Field
from structfilter.domain.model.plan import PlannedField, RecordPlan
from structfilter.infrastructure.safe_call import RuleBoundary
from structfilter.infrastructure.shapes import (
    ShapeKind,
    dataclass_params,
    elements,
    kind_of,
    rebuild,
    record_fields,
    strip_optional,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Set

    from structfilter.domain.model.configuration import FilterConfig
    from structfilter.infrastructure.filters.types import FilterFunc

logger = structlog.get_logger(__name__)


class TypeDeriver:
    """Derives and memoizes filtered records.

    Not safe for concurrent use. Owned by exactly one StructFilter.
    """

    __slots__ = ("_boundary", "_config", "_exempt", "_plans", "_types")

    def __init__(self, rule: FilterFunc, config: FilterConfig, exempt: Set[type]) -> None:
        """Initialize deriver.

        Args:
            rule: Composed rule chain, run once per candidate field.
            config: Filter configuration.
            exempt: Records returned unchanged. Read live, never modified here.
        """
        self._boundary = RuleBoundary(rule)
        self._config = config
        self._exempt = exempt
        self._types: dict[type, type | None] = {}
        self._plans: dict[type, RecordPlan] = {}

    @property
    def resolved(self) -> Mapping[type, type]:
        """Read-only snapshot: original record → filtered record."""
        return MappingProxyType({k: v for k, v in self._types.items() if v is not None})

    def derive(self, shape: object) -> type:
        """Filtered record for a record shape.

        Args:
            shape: Dataclass, optionally wrapped in one optional level
                (R | None) and/or Annotated.

        Returns:
            Filtered dataclass (never the optional wrapper). Exempt records
            are returned unchanged.

        Raises:
            ShapeError: shape is None, or the record cannot be built.
            ShapeKindError: shape is not a record.
            IndirectionDepthError: More than one optional level.
            RuleError: A rule failed; names the field.
        """
        if shape is None:
            raise ShapeError("shape is None")
        record, depth = strip_optional(shape)
        if kind_of(record) is not ShapeKind.RECORD:
            raise ShapeKindError(shape)
        if depth > 1:
            raise IndirectionDepthError(shape, depth)

        filtered = self._record(record)
        if filtered is None:
            raise ShapeError(f"derivation of {shape_name(record)} is already in progress")
        return filtered

    def map_shape(self, shape: object) -> object | None:
        """Map any shape to its filtered counterpart.

        Returns:
            Mapped shape, the shape itself if nothing inside it changes,
            or None if it refers to a record whose derivation is in progress.

        Raises:
            RuleError: A rule failed while deriving a nested record.
            ShapeError: A nested record cannot be built.
        """
        kind = kind_of(shape)
        if kind is ShapeKind.RECORD:
            return self._record(shape)
        if kind in (ShapeKind.ANY, ShapeKind.LEAF):
            return shape

        originals = elements(shape, kind)
        mapped: list[object] = []
        for element in originals:
            result = self.map_shape(element)
            if result is None:
                return None
            mapped.append(result)

        # Unchanged elements: share the original container shape
        if all(m is o for m, o in zip(mapped, originals, strict=True)):
            return shape
        return rebuild(shape, kind, tuple(mapped))

    def plan(self, filtered: type) -> RecordPlan:
        """Plan of a record produced by this deriver.

        Raises:
            KeyError: If filtered was not produced by this deriver.
        """
        return self._plans[filtered]

    def _record(self, record: type) -> type | None:
        if record in self._exempt:
            return record
        if record in self._types:
            filtered = self._types[record]
            if filtered is None:
                logger.debug("cycle_placeholder", shape=shape_name(record))
            return filtered
        return self._derive_record(record)

    def _derive_record(self, record: type) -> type:
        self._types[record] = None  # in progress
        try:
            plan = self._build(record)
        except StructFilterError as exc:
            self._evict(record, exc)
            raise
        except Exception as exc:
            self._evict(record, exc)
            raise ShapeError(f"cannot derive {shape_name(record)}: {exc}") from exc

        self._types[record] = plan.filtered
        self._plans[plan.filtered] = plan
        logger.debug(
            "shape_derived",
            shape=shape_name(record),
            kept=[f.name for f in plan.fields],
            removed=list(plan.removed),
            hidden=list(plan.hidden),
        )
        return plan.filtered

    def _evict(self, record: type, exc: BaseException) -> None:
        del self._types[record]
        logger.debug("shape_evicted", shape=shape_name(record), reason=str(exc))

    def _build(self, record: type) -> RecordPlan:
        tag_key = self._config.tag_key
        planned: list[PlannedField] = []
        removed: list[str] = []
        hidden: list[str] = []

        for original, annotation in record_fields(record):
            if self._config.is_hidden(original.name):
                hidden.append(original.name)
                continue

            field = Field(original.name, str(original.metadata.get(tag_key, "")))
            self._boundary.apply(field)
            if not field.kept:
                removed.append(field.name)
                continue

            try:
                mapped = self.map_shape(annotation)
            except RuleError as exc:
                raise exc.within(field.name) from exc
            planned.append(
                PlannedField(
                    name=field.name,
                    tag=str(field.tag),
                    original=annotation,
                    filtered=Any if mapped is None else mapped,
                    placeholder=mapped is None,
                    compare=original.compare,
                    hash=original.hash,
                    repr=original.repr,
                )
            )

        params = dataclass_params(record) if self._config.copy_dataclass_params else {}
        filtered = dataclasses.make_dataclass(
            record.__name__,
            [
                (
                    f.name,
                    f.filtered,
                    dataclasses.field(
                        compare=f.compare,
                        hash=f.hash,
                        repr=f.repr,
                        metadata={tag_key: f.tag},
                    ),
                )
                for f in planned
            ],
            **params,
        )
        return RecordPlan(
            original=record,
            filtered=filtered,
            fields=tuple(planned),
            removed=tuple(removed),
            hidden=tuple(hidden),
        )
