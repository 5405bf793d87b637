"""
Dependency Injection Container for sparsehd.

Manages shared dependencies and ensures all components use the same size,
label density, permutation pair, and curve order.
"""

import logging
from typing import Optional

from sparsehd.config.settings import Settings
from sparsehd.core.codebook import LabelCodebook
from sparsehd.core.hilbert import HilbertCodec
from sparsehd.core.labels import LabelGenerator
from sparsehd.core.operations import Operations
from sparsehd.core.permutations import Permutations, cached_permutations
from sparsehd.core.sparse_vector import SparseVector

logger = logging.getLogger(__name__)


class SparseHDContainer:
    """
    Dependency injection container for sparsehd.

    Manages shared singletons (LabelGenerator, LabelCodebook, HilbertCodec)
    and provides factories for components that depend on them. The
    permutation pair is built lazily on first use.

    Attributes:
        _settings: Runtime configuration
        _generator: Shared label generator
        _codebook: Shared label cache
        _codec: Shared Hilbert codec

    Example:
        >>> container = SparseHDContainer(Settings(size=8000, nnz=16))
        >>> doc = container.codebook.encode_tokens(["red", "apple"])
        >>> key = container.hilbert.encode_hilbilly(doc)
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize container with shared dependencies.

        Args:
            settings: Configuration (default: read from SPARSEHD_* environment)
        """
        self._settings = settings or Settings()
        if self._settings.debug:
            logging.getLogger("sparsehd").setLevel(logging.DEBUG)

        self._generator = LabelGenerator(self._settings.size, self._settings.nnz)
        self._codebook = LabelCodebook(self._generator)
        self._codec = HilbertCodec(
            order=self._settings.hilbert_order,
            strict=self._settings.hilbert_strict,
        )
        logger.debug(
            "Container ready: size=%d nnz=%d order=%d",
            self._settings.size,
            self._settings.nnz,
            self._settings.hilbert_order,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def size(self) -> int:
        return self._settings.size

    @property
    def generator(self) -> LabelGenerator:
        """Get the shared LabelGenerator instance."""
        return self._generator

    @property
    def codebook(self) -> LabelCodebook:
        """Get the shared LabelCodebook instance."""
        return self._codebook

    @property
    def hilbert(self) -> HilbertCodec:
        """Get the shared HilbertCodec instance."""
        return self._codec

    @property
    def permutations(self) -> Permutations:
        """Shared permutation pair for this size and seed."""
        return cached_permutations(self._settings.size, self._settings.permutation_seed)

    def create_accumulator(self) -> SparseVector:
        """Empty mutable vector for destructive summation."""
        return SparseVector.empty(self._settings.size)

    def encode_document(self, tokens, parallel: bool = False) -> SparseVector:
        """
        Document vector: the sum of the labels of its tokens.

        Args:
            tokens: Iterable of token strings
            parallel: Sum with a fan-in over settings.workers threads
        """
        labels = self._codebook.encode_batch(tokens)
        if not labels:
            return self.create_accumulator()
        if parallel:
            return Operations.bundle_parallel(labels, workers=self._settings.workers)
        return Operations.bundle(*labels)

    def encode_context(self, tokens, start: int = 0) -> SparseVector:
        """Order-aware context vector using the shared permutation pair."""
        labels = self._codebook.encode_batch(tokens)
        if not labels:
            return self.create_accumulator()
        return Operations.sequence(labels, self.permutations, start=start)

    def __repr__(self) -> str:
        return (
            f"SparseHDContainer(size={self._settings.size}, "
            f"nnz={self._settings.nnz}, order={self._settings.hilbert_order})"
        )
