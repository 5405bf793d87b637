"""
Similarity: Functions for measuring agreement between sparse vectors.

Cosine similarity is the primary metric. All sums go through math.fsum so
results do not depend on iteration order, which keeps the similarity of a
vector with itself at exactly 1.0.
"""

import math
from typing import List, Sequence, Tuple

import torch

from sparsehd.core.errors import SizeMismatchError
from sparsehd.protocols.vector import SparseVectorLike


def check_sizes(vector: SparseVectorLike, *others: SparseVectorLike) -> None:
    """
    Raise SizeMismatchError unless all vectors share one size.

    Used by every safe binary operation.
    """
    for other in others:
        if other.size != vector.size:
            raise SizeMismatchError(
                f"Cannot combine vectors of size {vector.size} and {other.size}"
            )


class Similarity:
    """
    Similarity functions over SparseVectorLike operands.

    All methods are static - this is a stateless utility class.
    """

    @staticmethod
    def dot(a: SparseVectorLike, b: SparseVectorLike) -> float:
        """
        Dot product over the indices both vectors store.

        Indices present in only one operand contribute 0.

        Raises:
            SizeMismatchError: If the vectors differ in size

        Example:
            >>> a = SparseVector.from_string("4|1.0 6|-1.0 10")
            >>> b = SparseVector.from_string("3|1.0 7|-1.0 10")
            >>> Similarity.dot(a, b)
            0.0
        """
        check_sizes(a, b)
        return _dot(a, b)

    @staticmethod
    def cosine(a: SparseVectorLike, b: SparseVectorLike) -> float:
        """
        Cosine similarity between two vectors.

        Returns value in [-1, 1]. Returns exactly 0.0 when either vector has
        zero magnitude rather than dividing by zero.

        Args:
            a: First vector
            b: Second vector

        Returns:
            Cosine similarity in range [-1, 1]

        Raises:
            SizeMismatchError: If the vectors differ in size
        """
        check_sizes(a, b)
        aa = _dot(a, a)
        bb = _dot(b, b)
        if aa == 0.0 or bb == 0.0:
            return 0.0
        # sqrt(x * x) == x exactly, so a vector against itself yields 1.0
        cos = _dot(a, b) / math.sqrt(aa * bb)
        return max(-1.0, min(1.0, cos))

    @staticmethod
    def matching_keys(a: SparseVectorLike, b: SparseVectorLike) -> List[int]:
        """Indices stored by both vectors, ascending."""
        other = set(b.keys())
        return [i for i in a.keys() if i in other]

    @staticmethod
    def matching_values(
        a: SparseVectorLike, b: SparseVectorLike
    ) -> List[Tuple[float, float]]:
        """(a_i, b_i) pairs for every index stored by both vectors."""
        return [(a.get(i), b.get(i)) for i in Similarity.matching_keys(a, b)]

    @staticmethod
    def cosine_batch(
        query: SparseVectorLike,
        candidates: Sequence[SparseVectorLike],
    ) -> torch.Tensor:
        """
        Batch cosine similarity against multiple candidates.

        Densifies the operands and computes all similarities in one matrix
        product. Zero-magnitude rows score 0.0.

        Args:
            query: Single query vector
            candidates: Vectors of the same size as query

        Returns:
            Tensor of shape (len(candidates),) with similarity scores
        """
        check_sizes(query, *candidates)
        if not candidates:
            return torch.zeros(0, dtype=torch.float64)
        matrix = torch.stack([c.to_dense() for c in candidates])
        q = query.to_dense()
        norms = torch.linalg.vector_norm(matrix, dim=1) * torch.linalg.vector_norm(q)
        dots = matrix @ q
        scores = torch.where(norms > 0, dots / torch.where(norms > 0, norms, 1.0), 0.0)
        return scores.clamp(-1.0, 1.0)

    @staticmethod
    def above_threshold(similarity: float, threshold: float) -> bool:
        """
        Check if similarity reaches a threshold.

        Example:
            >>> Similarity.above_threshold(0.85, threshold=0.6)
            True
        """
        return similarity >= threshold

    @staticmethod
    def euclidean_distance(a: SparseVectorLike, b: SparseVectorLike) -> float:
        """
        Euclidean (L2) distance between vectors.

        Only the union of stored indices is visited.
        """
        check_sizes(a, b)
        indices = set(a.keys()) | set(b.keys())
        return math.sqrt(math.fsum((a.get(i) - b.get(i)) ** 2 for i in indices))


def _dot(a: SparseVectorLike, b: SparseVectorLike) -> float:
    if b.count() < a.count():
        a, b = b, a
    return math.fsum(value * b.get(index) for index, value in a.items())
