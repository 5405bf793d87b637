"""
Operations: combining labels into larger representations.

Bundling (summation) turns token labels into document vectors; permutation
gives labels positional roles before they are summed; cleanup snaps a
query to its nearest known vector.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from sparsehd.config.constants import DEFAULT_WORKERS
from sparsehd.core.permutations import Permutations
from sparsehd.core.similarity import Similarity, check_sizes
from sparsehd.core.sparse_vector import SparseVector
from sparsehd.protocols.vector import SparseVectorLike

logger = logging.getLogger(__name__)


class Operations:
    """
    Stateless helpers over SparseVectorLike operands.

    All methods are static - this is a stateless utility class.
    """

    @staticmethod
    def bundle(*vectors: SparseVectorLike) -> SparseVector:
        """
        Sum of all vectors, pruned.

        Accumulates into one private vector, so the inputs are never
        modified and may be immutable.

        Raises:
            ValueError: If no vectors are given
            SizeMismatchError: If the vectors differ in size
        """
        if len(vectors) == 0:
            raise ValueError("Cannot bundle zero vectors")
        check_sizes(*vectors)
        total = SparseVector.empty(vectors[0].size)
        return total.destructive_add(*vectors).destructive_remove_zeros()

    @staticmethod
    def bundle_parallel(
        vectors: Sequence[SparseVectorLike],
        workers: int = DEFAULT_WORKERS,
        chunk_size: Optional[int] = None,
    ) -> SparseVector:
        """
        Sum of all vectors using a fan-in reduction over a thread pool.

        Each worker accumulates its own chunk into a private vector; the
        partial sums are merged afterwards. No vector is written by more
        than one thread.

        Args:
            vectors: Vectors of one size
            workers: Thread count
            chunk_size: Vectors per task (default: spread evenly over workers)
        """
        if len(vectors) == 0:
            raise ValueError("Cannot bundle zero vectors")
        check_sizes(*vectors)
        if chunk_size is None:
            chunk_size = max(1, -(-len(vectors) // workers))
        chunks = [vectors[i:i + chunk_size] for i in range(0, len(vectors), chunk_size)]
        size = vectors[0].size

        def accumulate(chunk: Sequence[SparseVectorLike]) -> SparseVector:
            return SparseVector.empty(size).destructive_add(*chunk)

        with ThreadPoolExecutor(max_workers=workers) as pool:
            partials = list(pool.map(accumulate, chunks))
        logger.debug(
            "Merged %d partial sums of %d vectors", len(partials), len(vectors)
        )
        return SparseVector.empty(size).destructive_add(*partials).destructive_remove_zeros()

    @staticmethod
    def permute(
        vector: SparseVectorLike, permutations: Permutations, times: int
    ) -> SparseVectorLike:
        """Rotate a vector's indices; see SparseVector.permute."""
        return vector.permute(permutations, times)

    @staticmethod
    def sequence(
        vectors: Sequence[SparseVectorLike],
        permutations: Permutations,
        start: int = 0,
    ) -> SparseVector:
        """
        Order-aware sum: vector i is rotated (start + i) times before summing.

        Used for n-gram style encodings where the same token must
        contribute differently depending on its position.

        Example:
            >>> ab = Operations.sequence([a, b], perms)
            >>> ba = Operations.sequence([b, a], perms)
            >>> ab == ba
            False
        """
        if len(vectors) == 0:
            raise ValueError("Cannot encode an empty sequence")
        rotated = [v.permute(permutations, start + i) for i, v in enumerate(vectors)]
        return Operations.bundle(*rotated)

    @staticmethod
    def cleanup(query: SparseVectorLike, candidates: Sequence[SparseVectorLike]) -> int:
        """
        Index of the candidate most similar to query.

        Ties resolve to the earliest candidate.

        Raises:
            ValueError: If there are no candidates
        """
        if len(candidates) == 0:
            raise ValueError("Cannot clean up against zero candidates")
        scores: List[float] = [Similarity.cosine(query, c) for c in candidates]
        return max(range(len(scores)), key=scores.__getitem__)
