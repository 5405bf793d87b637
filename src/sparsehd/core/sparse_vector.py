"""
SparseVector: dictionary-backed sparse vector over [0, size).

The vector exposes two explicit operation sets:

- Safe operations (add, subtract, multiply, divide, normalize, permute,
  remove_zeros) validate sizes, copy the receiver, and always return a
  pruned result. The receiver is never modified.
- Destructive operations (destructive_*) mutate the receiver in place and
  return it for chaining. They exist for accumulation loops.

Destructive operations DO NOT check that operand sizes match and DO NOT
prune zeros. Combining vectors of different sizes destructively is
undefined and may store indices outside [0, size). Call
destructive_remove_zeros() once the accumulation is finished if a canonical
form is needed.

Good: accumulate many labels into a fresh vector

    total = SparseVector.empty(size)
    for label in labels:
        total.destructive_add(label)
    total.destructive_remove_zeros()

Bad: destructive arithmetic on a vector that is referenced later

    if a.destructive_add(b) == c:   # a has been modified
        ...
"""

import math
from typing import Dict, Iterable, Iterator, List, Tuple

import torch

from sparsehd.config.constants import ROUNDING_ERROR
from sparsehd.core.errors import IndexRangeError, ParseError
from sparsehd.core.similarity import Similarity, check_sizes
from sparsehd.core.vector_element import VectorElement
from sparsehd.protocols.vector import SparseVectorLike


class SparseVector:
    """
    Mutable sparse vector with a fixed size.

    Stores non-zero entries in a dict keyed by index. The size never changes
    after construction.

    Attributes:
        _size: Dimensionality
        _data: Mapping of index to value

    Example:
        >>> a = SparseVector(10, [4, 6], [1.0, -1.0])
        >>> b = SparseVector(10, [4], [1.0])
        >>> str(a.add(b))
        '4|2.000000 6|-1.000000 10'
        >>> str(a.subtract(a))
        '10'
    """

    __slots__ = ("_size", "_data")

    def __init__(
        self,
        size: int,
        indices: Iterable[int] = (),
        values: Iterable[float] = (),
    ):
        """
        Build a vector from parallel index and value sequences.

        Zero values are dropped. A repeated index keeps its last value.

        Args:
            size: Dimensionality, must be positive
            indices: Indices in [0, size)
            values: Values, one per index

        Raises:
            ValueError: If size is not positive or the sequences differ in length
            IndexRangeError: If an index is outside [0, size)
        """
        if size <= 0:
            raise ValueError(f"Size must be positive, got {size}")
        indices = list(indices)
        values = list(values)
        if len(indices) != len(values):
            raise ValueError(
                f"Different quantity of indices ({len(indices)}) "
                f"than values ({len(values)})"
            )
        self._size = int(size)
        self._data: Dict[int, float] = {}
        for index, value in zip(indices, values):
            index = int(index)
            self._check_index(index)
            self._data[index] = float(value)
        # Prune after the last write so a trailing zero clears its slot
        self._data = {i: v for i, v in self._data.items() if v != 0}

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def empty(cls, size: int) -> "SparseVector":
        """Vector with no entries."""
        return cls(size)

    @classmethod
    def from_points(cls, points: Iterable[VectorElement], size: int) -> "SparseVector":
        points = list(points)
        return cls(size, [p.index for p in points], [p.value for p in points])

    @classmethod
    def from_vector(cls, vector: SparseVectorLike) -> "SparseVector":
        """Deep copy of any SparseVectorLike into this backend."""
        pairs = list(vector.items())
        return cls(vector.size, [i for i, _ in pairs], [v for _, v in pairs])

    @classmethod
    def from_dense(cls, dense: torch.Tensor) -> "SparseVector":
        """
        Build a vector from a 1D dense tensor.

        Raises:
            ValueError: If the tensor is not one-dimensional
        """
        if dense.dim() != 1:
            raise ValueError(f"Vector must be 1D, got shape {tuple(dense.shape)}")
        nonzero = torch.nonzero(dense, as_tuple=True)[0]
        return cls(
            dense.shape[0],
            nonzero.tolist(),
            dense[nonzero].to(torch.float64).tolist(),
        )

    @classmethod
    def from_string(cls, text: str) -> "SparseVector":
        """
        Parse the plain-text form "I|V I|V ... SIZE".

        Zero-valued points are dropped.

        Raises:
            ParseError: If the text is empty, the size is not an integer, or
                a point is malformed
            IndexRangeError: If a point lies outside [0, size)

        Example:
            >>> SparseVector.from_string("0|1.000000 4|-1.000000 1600").count()
            2
        """
        tokens = text.split()
        if not tokens:
            raise ParseError("Cannot parse a vector from empty text")
        try:
            size = int(tokens[-1])
        except ValueError as e:
            raise ParseError(f"Malformed size {tokens[-1]!r}") from e
        return cls.from_points(
            (VectorElement.from_string(token) for token in tokens[:-1]), size
        )

    def copy(self) -> "SparseVector":
        clone = SparseVector.__new__(SparseVector)
        clone._size = self._size
        clone._data = dict(self._data)
        return clone

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return self._size

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= self._size:
            raise IndexRangeError(index, self._size)

    def get(self, index: int) -> float:
        """
        Value at index, 0.0 when absent.

        Raises:
            IndexRangeError: If index is outside [0, size)
        """
        self._check_index(index)
        return self._data.get(index, 0.0)

    def put(self, index: int, value: float) -> float:
        """
        Set the value at index and return the previous value.

        Storing 0.0 keeps the slot; use destructive_remove_zeros() to prune.

        Raises:
            IndexRangeError: If index is outside [0, size)
        """
        self._check_index(index)
        previous = self._data.get(index, 0.0)
        self._data[index] = float(value)
        return previous

    def contains(self, index: int) -> bool:
        """True if the index has a stored entry."""
        self._check_index(index)
        return index in self._data

    def count(self) -> int:
        return len(self._data)

    def saturation(self) -> float:
        """Fraction of the dimensionality that holds entries."""
        return self.count() / self._size

    def keys(self) -> List[int]:
        return sorted(self._data)

    def values(self) -> List[float]:
        """Stored values in ascending index order."""
        return [self._data[i] for i in self.keys()]

    def items(self) -> Iterator[Tuple[int, float]]:
        return ((i, self._data[i]) for i in self.keys())

    def points(self) -> List[VectorElement]:
        return [VectorElement(i, v) for i, v in self.items()]

    def __getitem__(self, index: int) -> float:
        return self.get(index)

    def __setitem__(self, index: int, value: float) -> None:
        self.put(index, value)

    def __iter__(self) -> Iterator[VectorElement]:
        return iter(self.points())

    # ------------------------------------------------------------------
    # Destructive operations: mutate and return self, no size check, no pruning
    # ------------------------------------------------------------------

    def destructive_add(self, *others: SparseVectorLike) -> "SparseVector":
        data = self._data
        for other in others:
            for index, value in other.items():
                data[index] = data.get(index, 0.0) + value
        return self

    def destructive_subtract(self, *others: SparseVectorLike) -> "SparseVector":
        data = self._data
        for other in others:
            for index, value in other.items():
                data[index] = data.get(index, 0.0) - value
        return self

    def destructive_multiply(self, scalar: float) -> "SparseVector":
        return self._scale(lambda values: values * scalar)

    def destructive_divide(self, scalar: float) -> "SparseVector":
        """Divide in place. Division by zero yields inf/nan entries."""
        return self._scale(lambda values: values / scalar)

    def destructive_remove_zeros(self) -> "SparseVector":
        for index in [i for i, v in self._data.items() if v == 0]:
            del self._data[index]
        return self

    def _scale(self, operation) -> "SparseVector":
        if not self._data:
            return self
        # torch follows IEEE-754 for x/0 where plain floats raise
        values = torch.tensor(list(self._data.values()), dtype=torch.float64)
        self._data = dict(zip(self._data.keys(), operation(values).tolist()))
        return self

    # ------------------------------------------------------------------
    # Safe operations: validated, copied, pruned
    # ------------------------------------------------------------------

    def _scratch(self) -> "SparseVector":
        """Mutable working copy used by the safe operations."""
        return SparseVector.copy(self)

    def _rebuild(self, result: "SparseVector") -> "SparseVector":
        """Wrap a finished working copy in the receiver's backend."""
        return result

    def add(self, *others: SparseVectorLike) -> "SparseVector":
        """
        Entrywise sum of self and every operand.

        Raises:
            SizeMismatchError: If any operand differs in size
        """
        check_sizes(self, *others)
        return self._rebuild(
            self._scratch().destructive_add(*others).destructive_remove_zeros()
        )

    def subtract(self, *others: SparseVectorLike) -> "SparseVector":
        """
        Entrywise difference of self and every operand.

        Raises:
            SizeMismatchError: If any operand differs in size
        """
        check_sizes(self, *others)
        return self._rebuild(
            self._scratch().destructive_subtract(*others).destructive_remove_zeros()
        )

    def multiply(self, scalar: float) -> "SparseVector":
        return self._rebuild(
            self._scratch().destructive_multiply(scalar).destructive_remove_zeros()
        )

    def divide(self, scalar: float) -> "SparseVector":
        """Entrywise division. Division by zero yields inf/nan, not an error."""
        return self._rebuild(
            self._scratch().destructive_divide(scalar).destructive_remove_zeros()
        )

    def remove_zeros(self) -> "SparseVector":
        return self._rebuild(self._scratch().destructive_remove_zeros())

    def negate(self) -> "SparseVector":
        return self.multiply(-1.0)

    def magnitude(self) -> float:
        """Euclidean length: sqrt of the sum of squared values."""
        return math.sqrt(math.fsum(v * v for v in self._data.values()))

    def normalize(self) -> "SparseVector":
        """
        Same direction, unit magnitude.

        A zero-magnitude vector has no entries, so dividing it by zero
        returns it unchanged rather than raising.
        """
        return self.divide(self.magnitude())

    def dot(self, other: SparseVectorLike) -> float:
        return Similarity.dot(self, other)

    def similarity_to(self, other: SparseVectorLike) -> float:
        """Cosine similarity; 0.0 if either vector has zero magnitude."""
        return Similarity.cosine(self, other)

    def permute(self, permutations, times: int = 1) -> "SparseVector":
        """
        Rotate stored indices through a permutation pair.

        Args:
            permutations: Permutations for this size
            times: Positive applies the forward map, negative the inverse;
                0 returns self

        Raises:
            IndexRangeError: If an index falls outside the permutation domain
        """
        if times == 0:
            return self
        pairs = list(self._data.items())
        keys = permutations.apply([i for i, _ in pairs], times)
        result = SparseVector(self._size, keys, [v for _, v in pairs])
        return self._rebuild(result)

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def to_dense(self) -> torch.Tensor:
        """Dense float64 tensor of shape (size,)."""
        dense = torch.zeros(self._size, dtype=torch.float64)
        if self._data:
            dense[torch.tensor(list(self._data.keys()), dtype=torch.long)] = torch.tensor(
                list(self._data.values()), dtype=torch.float64
            )
        return dense

    def to_immutable(self) -> "SparseVector":
        from sparsehd.core.immutable_vector import ImmutableSparseVector

        return ImmutableSparseVector.from_vector(self)

    def to_string(self) -> str:
        """
        Plain-text form: ascending "index|value" points followed by the size.

        Example:
            >>> SparseVector(1600, [9, 0], [2.5, 1.0]).to_string()
            '0|1.000000 9|2.500000 1600'
        """
        return " ".join([str(p) for p in self.points()] + [str(self._size)])

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparseVectorLike):
            return NotImplemented
        if self.size != other.size or self.count() != other.count():
            return False
        return all(
            other_index == index
            and math.isclose(value, other_value, rel_tol=0.0, abs_tol=ROUNDING_ERROR)
            for (index, value), (other_index, other_value) in zip(
                self.items(), other.items()
            )
        )

    # Mutable: not hashable
    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: SparseVectorLike) -> "SparseVector":
        return self.add(other)

    def __sub__(self, other: SparseVectorLike) -> "SparseVector":
        return self.subtract(other)

    def __mul__(self, scalar: float) -> "SparseVector":
        return self.multiply(scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "SparseVector":
        return self.divide(scalar)

    def __neg__(self) -> "SparseVector":
        return self.negate()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self._size}, count={self.count()})"
