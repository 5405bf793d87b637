"""
Labels: deterministic sparse index vectors for tokens.

Maps a token to a reproducible sparse label: k distinct indices drawn from
[0, size) with k/2 entries of +1 and k/2 entries of -1. The mapping is a
pure function of (size, nnz, token). Every random draw comes from a
sha256 stream keyed by the token seed, so there is no shared RNG state and
the same token gives the same label in every process and on every
platform or library version.
"""

import hashlib
import logging
from typing import Callable, List, Set

from sparsehd.core.errors import CapacityError
from sparsehd.core.sparse_vector import SparseVector

logger = logging.getLogger(__name__)

_MASK_64 = (1 << 64) - 1
_SIGN_64 = 1 << 63

VectorFactory = Callable[[int, List[int], List[float]], SparseVector]
"""Backend constructor taking (size, indices, values)."""


def make_seed(token: str) -> int:
    """
    Convert a token to a signed 64-bit seed.

    Each character contributes ord(char) * 10^position (1-indexed position),
    summed with 64-bit wraparound.

    Example:
        >>> make_seed("seed")
        1112250
    """
    seed = 0
    for position, char in enumerate(token, start=1):
        seed = (seed + ord(char) * 10 ** position) & _MASK_64
    return seed - (1 << 64) if seed & _SIGN_64 else seed


def _draw(seed: int, stream: str, counter: int) -> int:
    """32-bit value number `counter` of a named stream keyed by seed."""
    return int(hashlib.sha256(f"{seed}:{stream}:{counter}".encode()).hexdigest()[:8], 16)


def round_up_even(nnz: int) -> int:
    return nnz + (nnz % 2)


def make_indices(size: int, count: int, seed: int) -> List[int]:
    """
    Draw count distinct indices uniformly from [0, size), in draw order.

    Raises:
        CapacityError: If count > size
    """
    if count > size:
        raise CapacityError(
            f"Cannot draw {count} distinct indices from a space of size {size}"
        )
    drawn: List[int] = []
    seen: Set[int] = set()
    counter = 0
    while len(drawn) < count:
        index = _draw(seed, "index", counter) % size
        counter += 1
        if index not in seen:
            seen.add(index)
            drawn.append(index)
    return drawn


def make_values(count: int, seed: int) -> List[float]:
    """
    count/2 entries of +1.0 and count/2 entries of -1.0, shuffled by seed.

    Args:
        count: Even number of values
        seed: Same seed used for the indices
    """
    half = count // 2
    values = [1.0] * half + [-1.0] * half
    # Fisher-Yates, back to front
    for i in range(count - 1, 0, -1):
        j = _draw(seed, "value", i) % (i + 1)
        values[i], values[j] = values[j], values[i]
    return values


def generate_label(
    size: int,
    nnz: int,
    token: str,
    factory: VectorFactory = SparseVector,
) -> SparseVector:
    """
    Generate the sparse label for a token.

    Args:
        size: Dimensionality of the label
        nnz: Requested non-zero count, rounded up to even
        token: Text to encode
        factory: Backend constructor (default: SparseVector)

    Returns:
        Label with exactly round_up_even(nnz) entries

    Raises:
        CapacityError: If size cannot hold that many distinct indices
        ValueError: If nnz is negative

    Example:
        >>> label = generate_label(16000, 48, "seed")
        >>> label.count()
        48
    """
    if nnz < 0:
        raise ValueError(f"nnz must be non-negative, got {nnz}")
    k = round_up_even(nnz)
    seed = make_seed(token)
    indices = make_indices(size, k, seed)
    values = make_values(k, seed)
    logger.debug("Generated label for %r: size=%d k=%d seed=%d", token, size, k, seed)
    return factory(size, indices, values)


def window(text: str, start: int, width: int) -> str:
    """Substring text[start:start + width] clamped to [0, len(text))."""
    begin = max(0, start)
    end = min(len(text), start + width)
    return text[begin:end] if end > begin else ""


def generate_window_label(
    size: int,
    nnz: int,
    text: str,
    start: int,
    width: int,
    factory: VectorFactory = SparseVector,
) -> SparseVector:
    """Label for the clamped window of text, as used for shingles."""
    return generate_label(size, nnz, window(text, start, width), factory)


class LabelGenerator:
    """
    Label generation bound to a size, nnz, and backend.

    Example:
        >>> gen = LabelGenerator(size=16000, nnz=48)
        >>> gen("apple") == gen("apple")
        True
        >>> gen.window("the quick fox", 4, 5) == gen("quick")
        True
    """

    def __init__(
        self,
        size: int,
        nnz: int,
        factory: VectorFactory = SparseVector,
    ):
        if round_up_even(nnz) > size:
            raise CapacityError(
                f"nnz={nnz} needs {round_up_even(nnz)} distinct indices, "
                f"but size is only {size}"
            )
        self.size = size
        self.nnz = nnz
        self.factory = factory

    @property
    def k(self) -> int:
        """Entries per label after rounding nnz up to even."""
        return round_up_even(self.nnz)

    def generate(self, token: str) -> SparseVector:
        return generate_label(self.size, self.nnz, token, self.factory)

    __call__ = generate

    def window(self, text: str, start: int, width: int) -> SparseVector:
        return generate_window_label(
            self.size, self.nnz, text, start, width, self.factory
        )

    def __repr__(self) -> str:
        return f"LabelGenerator(size={self.size}, nnz={self.nnz})"
