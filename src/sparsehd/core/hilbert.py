"""
Hilbert: space-filling-curve keys for sparse vectors.

Encodes a vector's coordinates as a single integer position along an
n-dimensional Hilbert curve of a given order, so that vectors close in the
integer lattice tend to get close keys. Sorting by key gives an approximate
spatial bucketing without pairwise comparison.

Notation, per bit-level i (most significant first), n = dimensions:
    alpha   n bits: bit i of every coordinate, coordinate j in bit j
    omega   accumulated reflection (XOR of rotated entry points so far)
    shift   accumulated rotation (sum of J + 1 so far, mod n)
    sigma   Gray-code reflection of the sub-cube index
    rho     sub-cube index along the curve, n bits of the key
    tau     entry point of sub-cube rho
    J       principal direction of sub-cube rho

    alpha = omega XOR rotate_left(sigma, shift + 1)
    sigma = gray(rho)

Encoding solves for rho at each level; decoding recovers alpha. Both then
advance omega and shift identically, which makes decode an exact inverse.

Coordinates are rounded half-up to integers and must lie in [0, 2^order).
By default an out-of-range coordinate is masked to its low `order` bits, a
lossy projection; strict codecs reject it instead.

A key holds order * dimensions bits. Large dimensions make keys large and
encoding slow; this is a scaling limit of the approach.
"""

import logging
import math
from typing import List, Sequence

import torch

from sparsehd.config.constants import HILBERT_ORDER, HILBERT_STRICT
from sparsehd.core.errors import CoordinateRangeError
from sparsehd.protocols.vector import SparseVectorLike

logger = logging.getLogger(__name__)


def gray(x: int) -> int:
    return x ^ (x >> 1)


def gray_inverse(g: int) -> int:
    # Prefix XOR by doubling: log2(width) steps instead of width steps
    x = g
    width = g.bit_length()
    shift = 1
    while shift < width:
        x ^= x >> shift
        shift <<= 1
    return x


def rotate_left(x: int, r: int, n: int) -> int:
    r %= n
    if r == 0:
        return x
    return ((x << r) | (x >> (n - r))) & ((1 << n) - 1)


def rotate_right(x: int, r: int, n: int) -> int:
    r %= n
    if r == 0:
        return x
    return ((x >> r) | (x << (n - r))) & ((1 << n) - 1)


def trailing_set_bits(x: int) -> int:
    return (~x & (x + 1)).bit_length() - 1


def entry_point(rho: int) -> int:
    """tau: the corner at which sub-cube rho is entered."""
    if rho == 0:
        return 0
    return gray(2 * ((rho - 1) // 2))


def principal_direction(rho: int, n: int) -> int:
    """J: the axis along which sub-cube rho is traversed."""
    if rho == 0:
        return 0
    if rho % 2 == 0:
        return trailing_set_bits(rho - 1) % n
    return trailing_set_bits(rho) % n


def _gather_bits(coords: Sequence[int], level: int) -> int:
    """alpha: bit `level` of every coordinate, coordinate j in bit j."""
    bits = "".join("1" if (c >> level) & 1 else "0" for c in reversed(coords))
    return int(bits, 2)


def _scatter_bits(coords: List[int], alpha: int, level: int) -> None:
    n = len(coords)
    bits = format(alpha, f"0{n}b")
    bit = 1 << level
    for j, flag in enumerate(reversed(bits)):
        if flag == "1":
            coords[j] |= bit


class HilbertCodec:
    """
    Hilbert curve encoder/decoder of a fixed order.

    Attributes:
        order: Bits per coordinate
        strict: Reject out-of-range coordinates instead of masking them

    Example:
        >>> codec = HilbertCodec(order=2)
        >>> codec.encode_coordinates([0, 0])
        0
        >>> codec.decode_coordinates(codec.encode_coordinates([3, 1]), 2)
        [3, 1]
    """

    def __init__(self, order: int = HILBERT_ORDER, strict: bool = HILBERT_STRICT):
        if order <= 0:
            raise ValueError(f"Order must be positive, got {order}")
        self.order = order
        self.strict = strict
        self._mask = (1 << order) - 1

    # ------------------------------------------------------------------
    # Coordinates
    # ------------------------------------------------------------------

    def coordinates(self, vector: SparseVectorLike) -> List[int]:
        """
        Round every coordinate half-up and project it onto [0, 2^order).

        Raises:
            CoordinateRangeError: On non-finite values, or on out-of-range
                values when strict
        """
        coords = []
        truncated = 0
        for value in vector.to_dense().tolist():
            if not math.isfinite(value):
                raise CoordinateRangeError(f"Cannot place {value} on a Hilbert curve")
            c = math.floor(value + 0.5)
            if c < 0 or c > self._mask:
                if self.strict:
                    raise CoordinateRangeError(
                        f"Coordinate {c} is outside [0, 2^{self.order})"
                    )
                truncated += 1
                c &= self._mask
            coords.append(c)
        if truncated:
            logger.debug(
                "Masked %d of %d coordinates to %d bits", truncated, len(coords), self.order
            )
        return coords

    def _check_key(self, key: int, dimensions: int) -> None:
        if dimensions <= 0:
            raise ValueError(f"Dimensions must be positive, got {dimensions}")
        if key < 0 or key.bit_length() > self.order * dimensions:
            raise ValueError(
                f"Key does not fit in {self.order * dimensions} bits"
            )

    # ------------------------------------------------------------------
    # Hilbert keys
    # ------------------------------------------------------------------

    def encode(self, vector: SparseVectorLike) -> int:
        """Hilbert key of a vector's rounded coordinates."""
        return self.encode_coordinates(self.coordinates(vector))

    def encode_coordinates(self, coords: Sequence[int]) -> int:
        """
        Hilbert key of integer coordinates in [0, 2^order).

        Raises:
            ValueError: If coords is empty
        """
        n = len(coords)
        if n == 0:
            raise ValueError("Cannot encode a point with no coordinates")
        key = 0
        omega = 0
        shift = 0
        for level in reversed(range(self.order)):
            alpha = _gather_bits(coords, level)
            sigma = rotate_right(alpha ^ omega, shift + 1, n)
            rho = gray_inverse(sigma)
            key = (key << n) | rho
            omega ^= rotate_left(entry_point(rho), shift + 1, n)
            shift = (shift + principal_direction(rho, n) + 1) % n
        return key

    def decode(self, key: int, dimensions: int) -> torch.Tensor:
        """
        Dense float64 coordinates of a Hilbert key.

        Args:
            key: Key produced by encode()
            dimensions: Number of coordinates (the vector size)

        Returns:
            Tensor of shape (dimensions,)
        """
        return torch.tensor(self.decode_coordinates(key, dimensions), dtype=torch.float64)

    def decode_coordinates(self, key: int, dimensions: int) -> List[int]:
        """
        Integer coordinates of a Hilbert key.

        Raises:
            ValueError: If the key is negative or wider than order * dimensions bits
        """
        self._check_key(key, dimensions)
        n = dimensions
        section = (1 << n) - 1
        coords = [0] * n
        omega = 0
        shift = 0
        # Most significant level first: a level's omega/shift come from its parents
        for level in reversed(range(self.order)):
            rho = (key >> (level * n)) & section
            sigma = gray(rho)
            alpha = omega ^ rotate_left(sigma, shift + 1, n)
            _scatter_bits(coords, alpha, level)
            omega ^= rotate_left(entry_point(rho), shift + 1, n)
            shift = (shift + principal_direction(rho, n) + 1) % n
        return coords

    # ------------------------------------------------------------------
    # Hilbilly keys: plain concatenation, no locality
    # ------------------------------------------------------------------

    def encode_hilbilly(self, vector: SparseVectorLike) -> int:
        """
        Concatenate the rounded coordinates into one integer.

        Coordinate j occupies bits [j * order, (j + 1) * order). Cheap, but
        does not preserve locality the way the Hilbert key does.
        """
        coords = self.coordinates(vector)
        return int("".join(format(c, f"0{self.order}b") for c in reversed(coords)), 2)

    def decode_hilbilly(self, key: int, dimensions: int) -> torch.Tensor:
        self._check_key(key, dimensions)
        coords = [(key >> (j * self.order)) & self._mask for j in range(dimensions)]
        return torch.tensor(coords, dtype=torch.float64)

    def __repr__(self) -> str:
        return f"HilbertCodec(order={self.order}, strict={self.strict})"
