"""Reporters: derivation results → human-readable text."""

from structfilter.application.reporters.console import ReporterConfig, ShapeReporter, format_shape

__all__ = [
    "ReporterConfig",
    "ShapeReporter",
    "format_shape",
]
