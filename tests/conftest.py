"""
Shared fixtures for sparsehd tests.

Provides common test fixtures to avoid duplication across test files.
"""

import pytest

from sparsehd.core.labels import LabelGenerator
from sparsehd.core.permutations import Permutations
from sparsehd.core.sparse_vector import SparseVector


# =============================================================================
# Core Component Fixtures
# =============================================================================

@pytest.fixture
def size():
    """Standard test dimensionality (smaller for faster tests)."""
    return 1600


@pytest.fixture
def nnz():
    return 48


@pytest.fixture
def generator(size, nnz):
    return LabelGenerator(size=size, nnz=nnz)


@pytest.fixture
def permutations(size):
    return Permutations.generate(size)


@pytest.fixture
def default_text(size):
    """48 alternating +1/-1 points at indices 0..47."""
    points = " ".join(
        f"{i}|{1.0 if i % 2 == 0 else -1.0:f}" for i in range(48)
    )
    return f"{points} {size}"


@pytest.fixture
def default_vector(default_text):
    return SparseVector.from_string(default_text)


@pytest.fixture
def vector_a():
    return SparseVector.from_string("4|1.0 6|-1.0 10")


@pytest.fixture
def vector_b():
    return SparseVector.from_string("3|1.0 7|-1.0 10")
