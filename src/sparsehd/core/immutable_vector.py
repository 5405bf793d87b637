"""
ImmutableSparseVector: read-only variant of SparseVector.

Safe operations return new immutable vectors. Destructive operations and
put() raise ImmutableOperationError. Immutable vectors are hashable and may
be shared across threads without locking.
"""

from sparsehd.core.errors import ImmutableOperationError
from sparsehd.core.sparse_vector import SparseVector


def _refuse(name: str):
    def method(self, *args, **kwargs):
        raise ImmutableOperationError(
            f"{name}() is not available on {type(self).__name__}"
        )

    method.__name__ = name
    method.__doc__ = "Always raises ImmutableOperationError."
    return method


class ImmutableSparseVector(SparseVector):
    """
    Sparse vector whose entries never change after construction.

    Example:
        >>> v = ImmutableSparseVector(10, [1], [2.0])
        >>> v.add(v).get(1)
        4.0
        >>> v.destructive_add(v)
        Traceback (most recent call last):
        ...
        ImmutableOperationError: destructive_add() is not available on ImmutableSparseVector
    """

    __slots__ = ("_hash",)

    def __init__(self, size, indices=(), values=()):
        super().__init__(size, indices, values)
        self._hash = None

    def copy(self) -> "ImmutableSparseVector":
        # Nothing can change, so sharing is safe
        return self

    def _rebuild(self, result: SparseVector) -> "ImmutableSparseVector":
        return ImmutableSparseVector.from_vector(result)

    def to_immutable(self) -> "ImmutableSparseVector":
        return self

    def to_mutable(self) -> SparseVector:
        """Independent mutable copy."""
        return SparseVector.copy(self)

    put = _refuse("put")
    destructive_add = _refuse("destructive_add")
    destructive_subtract = _refuse("destructive_subtract")
    destructive_multiply = _refuse("destructive_multiply")
    destructive_divide = _refuse("destructive_divide")
    destructive_remove_zeros = _refuse("destructive_remove_zeros")

    def __hash__(self) -> int:
        # Values compare with a tolerance, so only size and indices are hashed
        if self._hash is None:
            self._hash = hash((self._size, tuple(self.keys())))
        return self._hash
