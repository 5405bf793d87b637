"""Core sparse vector primitives."""

from sparsehd.core.codebook import LabelCodebook
from sparsehd.core.errors import (
    CapacityError,
    CoordinateRangeError,
    ImmutableOperationError,
    IndexRangeError,
    ParseError,
    SizeMismatchError,
    SparseVectorError,
)
from sparsehd.core.hilbert import HilbertCodec
from sparsehd.core.immutable_vector import ImmutableSparseVector
from sparsehd.core.labels import LabelGenerator, generate_label, make_seed
from sparsehd.core.operations import Operations
from sparsehd.core.permutations import Permutations, cached_permutations
from sparsehd.core.similarity import Similarity
from sparsehd.core.sparse_vector import SparseVector
from sparsehd.core.vector_element import VectorElement

__all__ = [
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
