"""StructFilter: facade over derivation, conversion and exemptions.

Usage:
    sf = StructFilter(
        remove_fields(re.compile("^Password")),
        insert_tag(None, 'json:"-"'),
    )
    safe = sf.convert(user)           # by the value's runtime type
    safe = sf.convert(users, list[User])  # by a declared shape
    Safe = sf.derive_type(User)       # shape only
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from structfilter.application.services.conversion import ValueConverter
from structfilter.application.services.derivation import TypeDeriver
from structfilter.domain.exceptions.shape import shape_name
from structfilter.domain.model.configuration import FilterConfig
from structfilter.infrastructure.filters.composite import compose
from structfilter.infrastructure.shapes import ShapeKind, kind_of, strip_optional

if TYPE_CHECKING:
    from collections.abc import Mapping

    from structfilter.domain.model.plan import RecordPlan
    from structfilter.infrastructure.filters.types import FilterFunc

logger = structlog.get_logger(__name__)


class StructFilter:
    """Derives filtered records and converts values into them.

    Rules run in the given order for every candidate field, once per
    record; results are memoized for the lifetime of the instance.

    Not safe for concurrent use: serialize access externally or use one
    instance per thread (construction is cheap).
    """

    __slots__ = ("_config", "_deriver", "_exempt")

    def __init__(self, *filters: FilterFunc, config: FilterConfig | None = None) -> None:
        """Initialize filter.

        Args:
            *filters: Rules, applied in order.
            config: Filter configuration. Uses defaults if None.
        """
        self._config = config or FilterConfig()
        self._exempt: set[type] = set()
        self._deriver = TypeDeriver(compose(*filters), self._config, self._exempt)

    @property
    def config(self) -> FilterConfig:
        """Active configuration."""
        return self._config

    @property
    def exempt_shapes(self) -> frozenset[type]:
        """Records registered as exempt."""
        return frozenset(self._exempt)

    @property
    def derived_shapes(self) -> Mapping[type, type]:
        """Original record → filtered record, for every resolved derivation."""
        return self._deriver.resolved

    def derive_type(self, shape: object) -> type:
        """Filtered record for a record shape.

        Args:
            shape: Dataclass, or R | None for a dataclass R.

        Returns:
            Filtered dataclass. The same object on every call for the
            same record.

        Raises:
            ShapeError: shape is None or the record cannot be built.
            ShapeKindError: shape is not a dataclass.
            IndirectionDepthError: More than one optional level.
            RuleError: A rule failed; the message names the field.
        """
        return self._deriver.derive(shape)

    def explain(self, shape: object) -> RecordPlan:
        """Derivation details for a record shape (see derive_type)."""
        filtered = self.derive_type(shape)
        if filtered in self._exempt:
            raise ValueError(f"{shape_name(filtered)} is exempt and has no plan")
        return self._deriver.plan(filtered)

    def convert(self, value: object, shape: object = None) -> object:
        """Convert value into its filtered counterpart.

        Args:
            value: Value to convert. None converts to None.
            shape: Declared shape of value (e.g. list[User]). None = use
                the value's runtime type.

        Returns:
            Filtered value. Shared and cyclic structure in value is
            reproduced; sub-values whose shape does not change are shared
            with the original.

        Raises:
            RuleError: Derivation of the value's own record failed.
            ConversionError: Conversion failed at a nested position.
            StructFilterError: shape contains a record that cannot be built.
        """
        if value is None:
            return None
        converter = ValueConverter(self._deriver)
        if shape is None:
            return converter.convert_dynamic(value)
        filtered = self._deriver.map_shape(shape)
        return converter.convert(value, shape, Any if filtered is None else filtered)

    def register_exempt(self, shape: object) -> None:
        """Let a record pass through unfiltered.

        Values of the record are shared by reference, never rebuilt. Only
        the exact record is exempt, not records nested in it.

        Args:
            shape: Dataclass, or R | None. Anything else (None, leaves,
                containers, self-referential aliases) is ignored.
        """
        if shape is None:
            return
        record, _ = strip_optional(shape)
        if kind_of(record) is not ShapeKind.RECORD:
            return
        self._exempt.add(record)  # type: ignore[arg-type]
        logger.debug("exempt_registered", shape=shape_name(record))

    def register_exempt_of(self, value: object) -> None:
        """Let the record type of value pass through unfiltered."""
        if value is None:
            return
        self.register_exempt(type(value))
