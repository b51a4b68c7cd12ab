"""structfilter - derive filtered dataclasses and convert values into them."""

__version__ = "0.1.0"

from structfilter.application.reporters import ReporterConfig, ShapeReporter
from structfilter.application.services import StructFilter
from structfilter.domain.exceptions import (
    ConversionError,
    FilterChainError,
    IndirectionDepthError,
    RuleError,
    ShapeError,
    ShapeKindError,
    StructFilterError,
)
from structfilter.domain.model import Field, FilterConfig, PlannedField, RecordPlan, Tag
from structfilter.infrastructure.filters import (
    FilterFunc,
    Matcher,
    compose,
    insert_tag,
    keep_fields,
    remove_fields,
)

__all__ = [
    "ConversionError",
    "Field",
    "FilterChainError",
    "FilterConfig",
    "FilterFunc",
    "IndirectionDepthError",
    "Matcher",
    "PlannedField",
    "RecordPlan",
    "ReporterConfig",
    "RuleError",
    "ShapeError",
    "ShapeKindError",
    "ShapeReporter",
    "StructFilter",
    "StructFilterError",
    "Tag",
    "__version__",
    "compose",
    "insert_tag",
    "keep_fields",
    "remove_fields",
]
