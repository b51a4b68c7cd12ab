"""Shape introspection over Python type annotations.

A shape is anything that can appear as a dataclass field annotation.
This module classifies shapes, takes container shapes apart and puts
them back together, and resolves the field annotations of records.
It holds no state; the derivation engine decides what to do per kind.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import types
import typing
from enum import Enum, auto
from typing import Annotated, Any, Union, get_args, get_origin

NoneType = type(None)

SEQUENCE_ORIGINS: frozenset[object] = frozenset(
    {list, collections.abc.Sequence, collections.abc.MutableSequence}
)
MAPPING_ORIGINS: frozenset[object] = frozenset(
    {dict, collections.abc.Mapping, collections.abc.MutableMapping}
)
SET_ORIGINS: frozenset[object] = frozenset(
    {set, frozenset, collections.abc.Set, collections.abc.MutableSet}
)


class ShapeKind(Enum):
    """How the engine treats a shape."""

    RECORD = auto()  # dataclass type
    ANNOTATED = auto()  # Annotated[X, *metadata]
    UNION = auto()  # X | Y, Optional[X]
    ARRAY = auto()  # tuple[X, ...]
    FIXED_ARRAY = auto()  # tuple[A, B, C]
    SEQUENCE = auto()  # list[X], Sequence[X]
    MAPPING = auto()  # dict[K, V], Mapping[K, V]
    SET = auto()  # set[X], frozenset[X]
    ANY = auto()  # typing.Any, the opaque placeholder
    LEAF = auto()  # everything else, maps to itself


def kind_of(shape: object) -> ShapeKind:
    """Classify shape.

    Bare containers (list, dict without arguments) and generic aliases of
    non-container classes are leaves.
    """
    if shape is Any:
        return ShapeKind.ANY
    if isinstance(shape, type) and dataclasses.is_dataclass(shape):
        return ShapeKind.RECORD

    origin = get_origin(shape)
    if origin is Annotated:
        return ShapeKind.ANNOTATED
    if origin is Union or origin is types.UnionType:
        return ShapeKind.UNION

    args = get_args(shape)
    if not args:
        return ShapeKind.LEAF
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return ShapeKind.ARRAY
        return ShapeKind.FIXED_ARRAY
    if origin in SEQUENCE_ORIGINS and len(args) == 1:
        return ShapeKind.SEQUENCE
    if origin in MAPPING_ORIGINS and len(args) == 2:
        return ShapeKind.MAPPING
    if origin in SET_ORIGINS and len(args) == 1:
        return ShapeKind.SET
    return ShapeKind.LEAF


def elements(shape: object, kind: ShapeKind) -> tuple[object, ...]:
    """Element shapes the engine maps for a container shape.

    Annotated: (inner,). Array: (element,). Mapping: (key, value).
    Union: members in declaration order. Fixed array: one per position.
    """
    args = get_args(shape)
    if kind in (ShapeKind.ANNOTATED, ShapeKind.ARRAY):
        return args[:1]
    return args


def rebuild(shape: object, kind: ShapeKind, mapped: tuple[object, ...]) -> object:
    """Same container as shape, over mapped element shapes.

    Args:
        shape: Original container shape.
        kind: kind_of(shape).
        mapped: Mapped element shapes, in elements() order.

    Returns:
        New shape; the container origin is preserved
        (Sequence stays Sequence, frozenset stays frozenset).
    """
    match kind:
        case ShapeKind.ANNOTATED:
            return Annotated[(mapped[0], *get_args(shape)[1:])]
        case ShapeKind.UNION:
            return Union[mapped]  # noqa: UP007
        case ShapeKind.ARRAY:
            return tuple[mapped[0], ...]
        case ShapeKind.FIXED_ARRAY:
            return tuple[mapped]
        case _:
            return get_origin(shape)[mapped]


def strip_optional(shape: object) -> tuple[object, int]:
    """Remove Annotated wrappers and optional-reference levels.

    Args:
        shape: Shape as passed by the caller.

    Returns:
        (inner shape, number of optional levels removed).
        Optional[Optional[X]] collapses to one level in typing itself;
        several levels only survive through Annotated, e.g.
        Optional[Annotated[Optional[X], ...]].
    """
    depth = 0
    while True:
        kind = kind_of(shape)
        if kind is ShapeKind.ANNOTATED:
            shape = get_args(shape)[0]
            continue
        if kind is ShapeKind.UNION:
            args = get_args(shape)
            members = [m for m in args if m is not NoneType]
            if len(members) == 1 and len(members) < len(args):
                depth += 1
                shape = members[0]
                continue
        return shape, depth


def runtime_class(shape: object) -> type | None:
    """Class that values of shape are instances of, None if not checkable.

    Used to pick the union member a value belongs to.
    """
    while kind_of(shape) is ShapeKind.ANNOTATED:
        shape = get_args(shape)[0]
    if kind_of(shape) is ShapeKind.ANY:
        # typing.Any is a class since 3.11 but rejects isinstance()
        return None
    if shape is None:
        return NoneType
    if isinstance(shape, type):
        return shape
    origin = get_origin(shape)
    if isinstance(origin, type):
        return origin
    return None


def record_fields(record: type) -> list[tuple[dataclasses.Field[Any], object]]:
    """Dataclass fields of record with their resolved annotations.

    String annotations (PEP 563, forward references) are resolved against
    the record's module, Annotated metadata is kept.

    Raises:
        NameError: If a forward reference cannot be resolved.
    """
    hints = typing.get_type_hints(record, include_extras=True)
    return [(f, hints.get(f.name, f.type)) for f in dataclasses.fields(record)]


def dataclass_params(record: type) -> dict[str, bool]:
    """Comparison, hashing and mutability parameters of a dataclass."""
    params = getattr(record, "__dataclass_params__", None)
    if params is None:
        return {}
    return {
        "eq": params.eq,
        "order": params.order,
        "frozen": params.frozen,
        "unsafe_hash": params.unsafe_hash,
    }


def is_named_tuple(shape: object) -> bool:
    """Check if shape is a named tuple class (collections or typing)."""
    return isinstance(shape, type) and issubclass(shape, tuple) and hasattr(shape, "_fields")


def has_dynamic(shape: object) -> bool:
    """True if an Any slot occurs in shape outside nested records.

    Values in such slots are converted by their runtime type, so a shape
    that maps to itself still needs walking when it holds one. Named
    tuples count as dynamic: their classes cannot be rebuilt over filtered
    field types, so their items are converted by runtime type instead.
    """
    kind = kind_of(shape)
    if kind is ShapeKind.ANY:
        return True
    if kind is ShapeKind.LEAF:
        return is_named_tuple(shape)
    if kind is ShapeKind.RECORD:
        return False
    return any(has_dynamic(element) for element in elements(shape, kind))
