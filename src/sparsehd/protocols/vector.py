"""
SparseVectorLike Protocol: Abstract interface for sparse vector backends.

Defines the contract every sparse vector implementation must follow.
Enables swapping between different backends (dictionary, immutable arrays,
sparse-matrix libraries) without changing calling code. The label
generator, similarity functions, and Hilbert codec only depend on this
protocol.
"""

from typing import Iterator, List, Protocol, Tuple, runtime_checkable

import torch


@runtime_checkable
class SparseVectorLike(Protocol):
    """
    Abstract protocol for sparse vectors over [0, size).

    Implementations must:
    1. Never expose an index outside [0, size)
    2. Return 0.0 for absent indices
    3. Return pruned results (no stored zeros) from every safe operation
    4. Leave their receiver untouched in safe operations

    Destructive operations (destructive_*) mutate and return the receiver.
    They skip size validation and do not prune; immutable implementations
    raise ImmutableOperationError instead.
    """

    @property
    def size(self) -> int:
        """Dimensionality of the vector."""
        ...

    def get(self, index: int) -> float:
        """
        Value at index, 0.0 when absent.

        Raises:
            IndexRangeError: If index is outside [0, size)
        """
        ...

    def put(self, index: int, value: float) -> float:
        """Set the value at index and return the previous value."""
        ...

    def count(self) -> int:
        """Number of stored entries."""
        ...

    def items(self) -> Iterator[Tuple[int, float]]:
        """Stored (index, value) pairs in ascending index order."""
        ...

    def keys(self) -> List[int]:
        """Stored indices in ascending order."""
        ...

    def add(self, *others: "SparseVectorLike") -> "SparseVectorLike":
        ...

    def subtract(self, *others: "SparseVectorLike") -> "SparseVectorLike":
        ...

    def multiply(self, scalar: float) -> "SparseVectorLike":
        ...

    def divide(self, scalar: float) -> "SparseVectorLike":
        ...

    def destructive_add(self, *others: "SparseVectorLike") -> "SparseVectorLike":
        ...

    def destructive_subtract(self, *others: "SparseVectorLike") -> "SparseVectorLike":
        ...

    def magnitude(self) -> float:
        ...

    def similarity_to(self, other: "SparseVectorLike") -> float:
        ...

    def permute(self, permutations, times: int) -> "SparseVectorLike":
        """Rotate stored indices; times == 0 returns the vector itself."""
        ...

    def to_dense(self) -> torch.Tensor:
        """Dense float64 tensor of shape (size,)."""
        ...
