"""Rule exceptions: failures reported by filter functions."""

from __future__ import annotations

from structfilter.domain.exceptions.base import StructFilterError


class FilterChainError(StructFilterError):
    """One filter function of a composed chain failed.

    The chain stops at the first failure.

    Attributes:
        index: Position of the failing function in the chain (>= 0)
        cause: Exception raised by that function
    """

    def __init__(self, index: int, cause: BaseException) -> None:
        # FAIL-FIRST validation
        if index < 0:
            raise ValueError(f"index must be >= 0, got {index}")
        if cause is None:
            raise TypeError("cause must not be None")

        self.index = index
        self.cause = cause
        super().__init__(f"filter[{index}]: {cause}")


class RuleError(StructFilterError):
    """Rule failure while deriving a record, named after the field.

    Failures inside nested records are re-wrapped by every enclosing
    record, so path lists the field names from the outermost record
    down to the field whose rule failed.

    Attributes:
        path: Field names, outermost first (never empty)
        cause: Underlying exception
    """

    def __init__(self, path: str | tuple[str, ...], cause: BaseException) -> None:
        if isinstance(path, str):
            path = (path,)
        # FAIL-FIRST validation
        if not path or not all(path):
            raise ValueError("path must contain non-empty field names")
        if cause is None:
            raise TypeError("cause must not be None")

        self.path = path
        self.cause = cause
        super().__init__(f"{'.'.join(path)}: {cause}")

    @property
    def field_name(self) -> str:
        """Name of the field whose rule failed."""
        return self.path[-1]

    def within(self, field_name: str) -> RuleError:
        """Same failure, seen from the record enclosing field_name."""
        return RuleError((field_name, *self.path), self.cause)
