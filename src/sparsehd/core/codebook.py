"""
LabelCodebook: cached label lookup for tokens.

Maps tokens to their labels and memoizes the result. Cached labels are
immutable, so one codebook can serve many threads that only read from it.
"""

import threading
from typing import Dict, Iterable, List

from sparsehd.core.immutable_vector import ImmutableSparseVector
from sparsehd.core.labels import LabelGenerator, window
from sparsehd.core.operations import Operations
from sparsehd.core.sparse_vector import SparseVector


class LabelCodebook:
    """
    Deterministic, memoized token -> label mapping.

    The same token always maps to the same label; a cleared cache is
    regenerated identically.

    Attributes:
        _generator: LabelGenerator producing immutable labels
        _cache: Memoization cache for generated labels

    Example:
        >>> codebook = LabelCodebook(LabelGenerator(size=16000, nnz=48))
        >>> codebook.encode("apple") is codebook.encode("apple")
        True
        >>> codebook.encode("apple").similarity_to(codebook.encode("pear")) < 0.2
        True
    """

    def __init__(self, generator: LabelGenerator):
        self._generator = LabelGenerator(
            generator.size, generator.nnz, ImmutableSparseVector
        )
        self._cache: Dict[str, ImmutableSparseVector] = {}
        self._lock = threading.Lock()

    @property
    def size(self) -> int:
        return self._generator.size

    def encode(self, token: str) -> ImmutableSparseVector:
        """Label for token, generated on first use."""
        label = self._cache.get(token)
        if label is None:
            label = self._generator(token)
            with self._lock:
                label = self._cache.setdefault(token, label)
        return label

    def encode_batch(self, tokens: Iterable[str]) -> List[ImmutableSparseVector]:
        return [self.encode(token) for token in tokens]

    def encode_tokens(self, tokens: Iterable[str]) -> SparseVector:
        """
        Sum of the labels of all tokens.

        Returns an empty vector when tokens is empty.
        """
        labels = self.encode_batch(tokens)
        if not labels:
            return SparseVector.empty(self.size)
        return Operations.bundle(*labels)

    def encode_window(self, text: str, start: int, width: int) -> ImmutableSparseVector:
        """Label of the clamped window text[start:start + width]."""
        return self.encode(window(text, start, width))

    def clear_cache(self) -> None:
        """
        Clear the memoization cache.

        Cleared labels can be regenerated deterministically.
        """
        with self._lock:
            self._cache.clear()

    def cache_size(self) -> int:
        return len(self._cache)

    def __repr__(self) -> str:
        return f"LabelCodebook(size={self.size}, cached={self.cache_size()})"
