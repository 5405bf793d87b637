"""
Permutations: positional rotation of sparse vector coordinates.

A Permutations object holds a random bijection over [0, size) and its exact
inverse. Rotating a label n times forward gives it a distinct "role" (for
example one slot left of a target word vs. two slots left), and rotating it
back n times recovers the original label.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Sequence

import torch

from sparsehd.config.constants import PERMUTATION_SEED
from sparsehd.core.errors import IndexRangeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Permutations:
    """
    Immutable pair of permutation tensors, each the inverse of the other.

    Attributes:
        forward: Long tensor mapping index -> rotated index
        inverse: Long tensor with inverse[forward[i]] == i

    Example:
        >>> perms = Permutations.generate(1000)
        >>> keys = perms.apply([1, 2, 3], times=2)
        >>> perms.apply(keys, times=-2)
        [1, 2, 3]
    """

    forward: torch.Tensor
    inverse: torch.Tensor

    def __post_init__(self) -> None:
        """Validate that the two maps are mutual inverses."""
        if self.forward.dim() != 1 or self.forward.shape != self.inverse.shape:
            raise ValueError(
                f"Permutation shapes differ: {tuple(self.forward.shape)} "
                f"vs {tuple(self.inverse.shape)}"
            )
        identity = torch.arange(self.forward.shape[0], dtype=torch.long)
        if not torch.equal(self.inverse[self.forward], identity):
            raise ValueError("inverse is not the inverse of forward")

    @property
    def size(self) -> int:
        return int(self.forward.shape[0])

    @classmethod
    def generate(cls, size: int, seed: int = PERMUTATION_SEED) -> "Permutations":
        """
        Create a permutation pair for vectors of a given size.

        Same (size, seed) always produces the same pair.

        Args:
            size: Dimensionality of the vectors to rotate
            seed: Seed for the generator

        Returns:
            Permutations whose inverse is computed by inverting forward
        """
        if size <= 0:
            raise ValueError(f"Size must be positive, got {size}")
        gen = torch.Generator().manual_seed(seed)
        forward = torch.randperm(size, generator=gen)
        inverse = torch.empty_like(forward)
        inverse[forward] = torch.arange(size, dtype=forward.dtype)
        logger.debug("Generated permutations for size=%d seed=%d", size, seed)
        return cls(forward, inverse)

    def apply(self, keys: Sequence[int], times: int) -> List[int]:
        """
        Rotate indices |times| times.

        Args:
            keys: Indices in [0, size)
            times: Positive uses forward, negative uses inverse, 0 is identity

        Returns:
            Rotated indices, in the same order as keys

        Raises:
            IndexRangeError: If a key is outside [0, size)
        """
        if times == 0:
            return list(keys)
        index = torch.tensor(list(keys), dtype=torch.long)
        if index.numel():
            bad = index[(index < 0) | (index >= self.size)]
            if bad.numel():
                raise IndexRangeError(int(bad[0]), self.size)
        mapping = self.forward if times > 0 else self.inverse
        for _ in range(abs(times)):
            index = mapping[index]
        return index.tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Permutations):
            return NotImplemented
        return torch.equal(self.forward, other.forward)

    def __hash__(self) -> int:
        return hash((self.size, tuple(self.forward[:16].tolist())))

    def __repr__(self) -> str:
        return f"Permutations(size={self.size})"


@lru_cache(maxsize=None)
def cached_permutations(size: int, seed: int = PERMUTATION_SEED) -> Permutations:
    """
    Create-once, read-many permutation pair for a (size, seed).

    The pair is immutable, so one instance may be shared across threads.
    """
    logger.debug("Permutation cache miss for size=%d seed=%d", size, seed)
    return Permutations.generate(size, seed)
