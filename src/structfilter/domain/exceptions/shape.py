"""Shape exceptions: invalid input to type derivation."""

from __future__ import annotations

from structfilter.domain.exceptions.base import StructFilterError


def shape_name(shape: object) -> str:
    """Readable name of a type or annotation for error messages."""
    if isinstance(shape, type):
        return shape.__qualname__
    return repr(shape)


class ShapeError(StructFilterError, ValueError):
    """Shape cannot be derived.

    Raised for an absent shape or a record that cannot be built.
    No partial derivation is retained.

    Attributes:
        reason: Why the shape was rejected
    """

    def __init__(self, reason: str) -> None:
        # FAIL-FIRST validation
        if not reason:
            raise ValueError("reason must not be empty")

        self.reason = reason
        super().__init__(reason)


class ShapeKindError(ShapeError):
    """Shape is not a record (dataclass).

    Attributes:
        shape: Rejected shape
    """

    def __init__(self, shape: object) -> None:
        self.shape = shape
        super().__init__(f"not a dataclass type: {shape_name(shape)}")


class IndirectionDepthError(ShapeError):
    """Shape wraps its record in more than one optional reference.

    Attributes:
        shape: Rejected shape
        depth: Number of optional levels found (always > 1)
    """

    def __init__(self, shape: object, depth: int) -> None:
        if depth <= 1:
            raise ValueError(f"depth must be > 1, got {depth}")

        self.shape = shape
        self.depth = depth
        super().__init__(
            f"at most one optional indirection allowed, got {depth} in {shape_name(shape)}"
        )
