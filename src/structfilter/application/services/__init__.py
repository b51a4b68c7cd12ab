"""Application services."""

from structfilter.application.services.conversion import ValueConverter
from structfilter.application.services.derivation import TypeDeriver
from structfilter.application.services.struct_filter import StructFilter

__all__ = [
    "StructFilter",
    "TypeDeriver",
    "ValueConverter",
]
