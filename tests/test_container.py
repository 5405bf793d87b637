"""Tests for SparseHDContainer."""

import logging

import pytest

from sparsehd import SparseHDContainer
from sparsehd.config.settings import Settings
from sparsehd.core.operations import Operations
from sparsehd.core.sparse_vector import SparseVector


@pytest.fixture
def container():
    return SparseHDContainer(Settings(size=2000, nnz=16, hilbert_order=8, workers=3))


class TestWiring:
    """Shared components use the configured parameters."""

    def test_components(self, container):
        assert container.size == 2000
        assert container.generator.size == 2000
        assert container.generator.nnz == 16
        assert container.codebook.size == 2000
        assert container.hilbert.order == 8

    def test_permutations_shared(self, container):
        assert container.permutations is container.permutations
        assert container.permutations.size == 2000

    def test_accumulator(self, container):
        acc = container.create_accumulator()
        assert acc.size == 2000
        assert acc.count() == 0

    def test_repr(self, container):
        assert repr(container) == "SparseHDContainer(size=2000, nnz=16, order=8)"


class TestEncoding:
    """Document and context vectors."""

    def test_document(self, container):
        doc = container.encode_document(["red", "apple", "red"])
        red = container.codebook.encode("red")
        apple = container.codebook.encode("apple")
        assert doc == red.add(red, apple)

    def test_document_parallel(self, container):
        tokens = [f"w{i}" for i in range(40)]
        assert container.encode_document(tokens, parallel=True) == container.encode_document(
            tokens
        )

    def test_empty_document(self, container):
        assert container.encode_document([]) == SparseVector.empty(2000)

    def test_context(self, container):
        context = container.encode_context(["a", "b"], start=1)
        expected = Operations.sequence(
            container.codebook.encode_batch(["a", "b"]), container.permutations, start=1
        )
        assert context == expected

    def test_empty_context(self, container):
        assert container.encode_context([]).count() == 0

    def test_hilbilly_key_of_document(self):
        c = SparseHDContainer(Settings(size=8, nnz=2, hilbert_order=4))
        doc = c.encode_document(["x"])
        key = c.hilbert.encode_hilbilly(doc)
        assert 0 < key < 1 << 32
        assert c.hilbert.encode(doc) == c.hilbert.encode(c.encode_document(["x"]))


class TestDebug:
    """Debug flag raises package log level."""

    def test_debug_logging(self):
        package_logger = logging.getLogger("sparsehd")
        previous = package_logger.level
        try:
            SparseHDContainer(Settings(size=100, nnz=4, debug=True))
            assert package_logger.level == logging.DEBUG
        finally:
            package_logger.setLevel(previous)
