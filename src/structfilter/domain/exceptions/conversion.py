"""Conversion exceptions."""

from __future__ import annotations

from structfilter.domain.exceptions.base import StructFilterError


class ConversionError(StructFilterError):
    """Value conversion failed at a nested position.

    The whole conversion is aborted; partial results are discarded.

    Attributes:
        path: Breadcrumbs from the converted root to the failing position,
            e.g. (".Users", "[1]", ".Profile")
        cause: Underlying exception
    """

    def __init__(self, path: tuple[str, ...], cause: BaseException) -> None:
        # FAIL-FIRST validation
        if not path:
            raise ValueError("path must not be empty")
        if cause is None:
            raise TypeError("cause must not be None")

        self.path = path
        self.cause = cause
        super().__init__(f"{''.join(path)}: {cause}")

    def within(self, segment: str) -> ConversionError:
        """Same failure, seen from one level further up."""
        return ConversionError((segment, *self.path), self.cause)
