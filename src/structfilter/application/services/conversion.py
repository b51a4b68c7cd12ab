"""Value conversion: original value → value of the filtered shape.

One ValueConverter per convert() call. It walks the original value
alongside the original and filtered annotations produced by TypeDeriver,
so every produced value satisfies the produced shape.

Identity cache:
  Mutable reference-like originals (records, lists, dicts, sets) are
  registered with their (still empty) filtered counterpart BEFORE their
  contents are converted. A second path to the same original, including
  a back-edge of a cycle, gets the same filtered object. Immutable
  containers (tuples, frozensets) are registered after they are built.
  Originals are kept alive for the duration of the call so that ids are
  not recycled.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any

from structfilter.domain.exceptions import ConversionError, StructFilterError
from structfilter.infrastructure.shapes import (
    NoneType,
    ShapeKind,
    elements,
    has_dynamic,
    is_named_tuple,
    kind_of,
    runtime_class,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from structfilter.application.services.derivation import TypeDeriver


class ValueConverter:
    """Converts one value graph. Discard after use."""

    __slots__ = ("_deriver", "_keepalive", "_seen")

    def __init__(self, deriver: TypeDeriver) -> None:
        self._deriver = deriver
        self._seen: dict[int, object] = {}
        self._keepalive: list[object] = []

    def convert(self, value: object, original: object, filtered: object) -> object:
        """Convert value declared as original into filtered.

        Args:
            value: Original value.
            original: Annotation value was declared with.
            filtered: TypeDeriver.map_shape(original), Any if unresolvable.

        Returns:
            Filtered value. Shares value itself when nothing inside changes.

        Raises:
            RuleError: Just-in-time derivation of the root record failed.
            ConversionError: Conversion failed below the root.
        """
        if value is None:
            return None
        kind = kind_of(filtered)
        if kind is ShapeKind.ANY:
            return self.convert_dynamic(value)
        if original is filtered and not has_dynamic(original):
            return value

        if kind is ShapeKind.ANNOTATED:
            return self.convert(
                value, elements(original, kind)[0], elements(filtered, kind)[0]
            )
        if kind is ShapeKind.UNION:
            return self._convert_union(value, original)

        expected = runtime_class(original)
        if expected is not None and not isinstance(value, expected):
            # Annotations are not enforced at runtime; follow the value
            return self.convert_dynamic(value)
        if id(value) in self._seen:
            return self._seen[id(value)]

        match kind:
            case ShapeKind.RECORD:
                return self._convert_record(value, filtered)
            case ShapeKind.ARRAY:
                (orig_elem,), (filt_elem,) = elements(original, kind), elements(filtered, kind)
                return self._convert_tuple(
                    value, [(orig_elem, filt_elem)] * len(value)  # type: ignore[arg-type]
                )
            case ShapeKind.FIXED_ARRAY:
                origs, filts = elements(original, kind), elements(filtered, kind)
                if len(value) != len(origs):  # type: ignore[arg-type]
                    return self.convert_dynamic(value)
                return self._convert_tuple(value, list(zip(origs, filts, strict=True)))
            case ShapeKind.SEQUENCE:
                (orig_elem,), (filt_elem,) = elements(original, kind), elements(filtered, kind)
                if isinstance(value, tuple):
                    return self._convert_tuple(value, [(orig_elem, filt_elem)] * len(value))
                return self._convert_list(value, orig_elem, filt_elem)
            case ShapeKind.MAPPING:
                return self._convert_mapping(
                    value, elements(original, kind), elements(filtered, kind)
                )
            case ShapeKind.SET:
                (orig_elem,), (filt_elem,) = elements(original, kind), elements(filtered, kind)
                return self._convert_set(value, orig_elem, filt_elem)
            case _:
                if has_dynamic(filtered):
                    return self.convert_dynamic(value)
                return value

    def convert_dynamic(self, value: object) -> object:
        """Convert value by its runtime type alone.

        Records convert through their derived record; lists, tuples, dicts,
        sets and frozensets are rebuilt with every element converted
        dynamically; named tuples keep their class. Anything else is
        returned unchanged.

        Raises:
            RuleError: Derivation of the value's own record failed.
            ConversionError: Conversion failed below value.
        """
        if value is None:
            return None
        if id(value) in self._seen:
            return self._seen[id(value)]

        cls = type(value)
        if dataclasses.is_dataclass(cls):
            return self.convert(value, cls, self._deriver.derive(cls))
        if isinstance(value, list):
            return self._convert_list(value, Any, Any)
        if isinstance(value, tuple):
            return self._convert_tuple(
                value,
                [(Any, Any)] * len(value),
                cls._make if is_named_tuple(cls) else tuple,  # type: ignore[attr-defined]
            )
        if isinstance(value, dict):
            return self._convert_mapping(value, (Any, Any), (Any, Any))
        if isinstance(value, (set, frozenset)):
            return self._convert_set(value, Any, Any)
        return value

    def _remember(self, original: object, filtered: object) -> None:
        self._seen[id(original)] = filtered
        self._keepalive.append(original)

    def _descend(self, segment: str, value: object, original: object, filtered: object) -> object:
        try:
            return self.convert(value, original, filtered)
        except ConversionError as exc:
            raise exc.within(segment) from exc.cause
        except StructFilterError as exc:
            raise ConversionError((segment,), exc) from exc

    def _convert_union(self, value: object, original: object) -> object:
        for member in elements(original, ShapeKind.UNION):
            cls = runtime_class(member)
            if cls is None or cls is NoneType or not isinstance(value, cls):
                continue
            mapped = self._deriver.map_shape(member)
            return self.convert(value, member, Any if mapped is None else mapped)
        return self.convert_dynamic(value)

    def _convert_record(self, value: object, filtered: type) -> object:
        plan = self._deriver.plan(filtered)
        result = object.__new__(filtered)
        self._remember(value, result)
        for field in plan.fields:
            item = self._descend(
                f".{field.name}", getattr(value, field.name), field.original, field.filtered
            )
            # Generated records may be frozen
            object.__setattr__(result, field.name, item)
        return result

    def _convert_list(self, value: Any, original: object, filtered: object) -> list[object]:
        result: list[object] = []
        self._remember(value, result)
        for index, item in enumerate(value):
            result.append(self._descend(f"[{index}]", item, original, filtered))
        return result

    def _convert_tuple(
        self,
        value: Any,
        slots: list[tuple[object, object]],
        factory: Callable[[Iterable[object]], tuple[object, ...]] = tuple,
    ) -> tuple[object, ...]:
        result = factory(
            self._descend(f"[{index}]", item, original, filtered)
            for index, (item, (original, filtered)) in enumerate(zip(value, slots, strict=True))
        )
        self._remember(value, result)
        return result

    def _convert_mapping(
        self,
        value: Any,
        original: tuple[object, ...],
        filtered: tuple[object, ...],
    ) -> dict[object, object]:
        (orig_key, orig_value), (filt_key, filt_value) = original, filtered
        result: dict[object, object] = {}
        self._remember(value, result)
        for key, item in value.items():
            new_key = self._descend(f"[{key!r}] key", key, orig_key, filt_key)
            result[new_key] = self._descend(f"[{key!r}]", item, orig_value, filt_value)
        return result

    def _convert_set(self, value: Any, original: object, filtered: object) -> object:
        if isinstance(value, frozenset):
            frozen = frozenset(
                self._descend(f"[{item!r}]", item, original, filtered) for item in value
            )
            self._remember(value, frozen)
            return frozen
        result: set[object] = set()
        self._remember(value, result)
        for item in value:
            result.add(self._descend(f"[{item!r}]", item, original, filtered))
        return result
