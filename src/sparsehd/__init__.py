"""
sparsehd: Sparse high-dimensional vectors for Random Indexing.

Each token is mapped to a deterministic sparse label (a few ±1 entries at
seeded pseudo-random coordinates of a large space). Summing labels builds
vectors for documents and topics; permutations give labels positional
roles; Hilbert curve keys order finished vectors for bucketing.

The package includes:
- Sparse vector arithmetic with exact zero-pruning (SparseVector,
  ImmutableSparseVector)
- Deterministic label generation (LabelGenerator, LabelCodebook)
- Positional rotation (Permutations)
- Hilbert and Hilbilly ordering keys (HilbertCodec)
"""

__version__ = "0.1.0"

from sparsehd.container import SparseHDContainer
from sparsehd.core import (
    CapacityError,
    CoordinateRangeError,
    HilbertCodec,
    ImmutableOperationError,
    ImmutableSparseVector,
    IndexRangeError,
    LabelCodebook,
    LabelGenerator,
    Operations,
    ParseError,
    Permutations,
    Similarity,
    SizeMismatchError,
    SparseVector,
    SparseVectorError,
    VectorElement,
    cached_permutations,
    generate_label,
    make_seed,
)
from sparsehd.protocols.vector import SparseVectorLike

__all__ = [
    "SparseHDContainer",
    "SparseVectorLike",
    "VectorElement",
    "SparseVector",
    "ImmutableSparseVector",
    "LabelGenerator",
    "LabelCodebook",
    "generate_label",
    "make_seed",
    "Permutations",
    "cached_permutations",
    "HilbertCodec",
    "Operations",
    "Similarity",
    "SparseVectorError",
    "IndexRangeError",
    "SizeMismatchError",
    "CapacityError",
    "ParseError",
    "ImmutableOperationError",
    "CoordinateRangeError",
]
