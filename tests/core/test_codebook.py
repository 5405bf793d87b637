"""Tests for LabelCodebook."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from sparsehd.core.codebook import LabelCodebook
from sparsehd.core.immutable_vector import ImmutableSparseVector
from sparsehd.core.labels import generate_label
from sparsehd.core.sparse_vector import SparseVector


@pytest.fixture
def codebook(generator):
    return LabelCodebook(generator)


class TestLabelCodebookCaching:
    """Test codebook caching behavior."""

    def test_cache_hit(self, codebook):
        """Same token returns the cached label."""
        assert codebook.encode("apple") is codebook.encode("apple")
        assert codebook.cache_size() == 1

    def test_labels_are_immutable(self, codebook):
        assert isinstance(codebook.encode("apple"), ImmutableSparseVector)

    def test_matches_generator(self, codebook, size, nnz):
        assert codebook.encode("apple") == generate_label(size, nnz, "apple")

    def test_clear_cache_regenerates_identically(self, codebook):
        first = codebook.encode("apple")
        codebook.clear_cache()
        assert codebook.cache_size() == 0
        second = codebook.encode("apple")
        assert second is not first
        assert second == first

    def test_concurrent_encode(self, codebook):
        tokens = [f"t{i % 10}" for i in range(200)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            labels = list(pool.map(codebook.encode, tokens))
        assert codebook.cache_size() == 10
        for token, label in zip(tokens, labels):
            assert label == codebook.encode(token)


class TestLabelCodebookEncoding:
    """Token sequences and windows."""

    def test_encode_batch(self, codebook):
        batch = codebook.encode_batch(["a", "b", "a"])
        assert batch[0] is batch[2]

    def test_encode_tokens(self, codebook):
        total = codebook.encode_tokens(["red", "apple"])
        assert type(total) is SparseVector
        assert total == codebook.encode("red").add(codebook.encode("apple"))

    def test_encode_tokens_empty(self, codebook, size):
        assert codebook.encode_tokens([]) == SparseVector.empty(size)

    def test_encode_window(self, codebook):
        assert codebook.encode_window("the quick fox", 4, 5) is codebook.encode("quick")

    def test_repr(self, codebook):
        codebook.encode("x")
        assert repr(codebook) == "LabelCodebook(size=1600, cached=1)"
