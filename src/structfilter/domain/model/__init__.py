"""Domain model: value objects handed to rules and configuration."""

from structfilter.domain.model.configuration import FilterConfig
from structfilter.domain.model.field import Field
from structfilter.domain.model.plan import PlannedField, RecordPlan
from structfilter.domain.model.tag import Tag

__all__ = [
    "Field",
    "FilterConfig",
    "PlannedField",
    "RecordPlan",
    "Tag",
]
