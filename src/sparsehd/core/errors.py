"""
Errors raised by the sparse vector core.

Every error subclasses both SparseVectorError and the closest builtin, so
callers can catch either the library-wide base or the familiar builtin.
"""


class SparseVectorError(Exception):
    """Base class for all sparse vector errors."""


class IndexRangeError(SparseVectorError, IndexError):
    """An index fell outside [0, size)."""

    def __init__(self, index: int, size: int):
        super().__init__(
            f"Index {index} is outside the bounds of this vector [0, {size})"
        )
        self.index = index
        self.size = size


class SizeMismatchError(SparseVectorError, ValueError):
    """Binary operation on vectors of different sizes."""


class CapacityError(SparseVectorError, ValueError):
    """More distinct indices were requested than the dimensionality holds."""


class ParseError(SparseVectorError, ValueError):
    """Malformed plain-text vector."""


class ImmutableOperationError(SparseVectorError, TypeError):
    """Destructive operation invoked on an immutable vector."""


class CoordinateRangeError(SparseVectorError, ValueError):
    """Coordinate cannot be placed on the Hilbert curve."""
