"""Domain exceptions."""

from structfilter.domain.exceptions.base import StructFilterError
from structfilter.domain.exceptions.conversion import ConversionError
from structfilter.domain.exceptions.rule import FilterChainError, RuleError
from structfilter.domain.exceptions.shape import (
    IndirectionDepthError,
    ShapeError,
    ShapeKindError,
)

__all__ = [
    "StructFilterError",
    "ShapeError",
    "ShapeKindError",
    "IndirectionDepthError",
    "FilterChainError",
    "RuleError",
    "ConversionError",
]
