"""Tests for deterministic label generation."""

import pytest

from sparsehd.core.errors import CapacityError
from sparsehd.core.immutable_vector import ImmutableSparseVector
from sparsehd.core.labels import (
    LabelGenerator,
    generate_label,
    generate_window_label,
    make_indices,
    make_seed,
    make_values,
    round_up_even,
    window,
)

# Label of "seed" at size=16000, nnz=48: sorted (index, value) pairs
SEED_LABEL = [
    (223, 1.0), (561, 1.0), (716, 1.0), (773, -1.0),
    (1347, -1.0), (1820, 1.0), (2014, -1.0), (2627, -1.0),
    (3020, -1.0), (3123, 1.0), (3467, -1.0), (3657, -1.0),
    (4141, -1.0), (4543, 1.0), (4717, -1.0), (5355, -1.0),
    (5522, -1.0), (5540, -1.0), (5633, 1.0), (5692, -1.0),
    (5766, 1.0), (5871, 1.0), (5881, 1.0), (6235, 1.0),
    (6974, -1.0), (7488, 1.0), (7565, 1.0), (7974, -1.0),
    (8105, 1.0), (8507, 1.0), (9044, 1.0), (9228, -1.0),
    (9265, -1.0), (9289, 1.0), (10777, 1.0), (10939, 1.0),
    (12194, -1.0), (12371, -1.0), (12481, 1.0), (12761, -1.0),
    (12826, 1.0), (13001, 1.0), (13667, 1.0), (13778, 1.0),
    (15234, -1.0), (15319, -1.0), (15461, -1.0), (15884, -1.0),
]

# Indices of that label in draw order
SEED_DRAW_ORDER = [
    561, 5522, 7565, 10777, 12761, 4717, 773, 13778,
    5633, 5540, 3020, 12826, 12371, 223, 15234, 15884,
    6235, 5766, 3467, 1820, 12481, 15461, 8507, 5871,
    2014, 9265, 9289, 9044, 15319, 13667, 7488, 1347,
    10939, 3657, 716, 2627, 9228, 6974, 13001, 5881,
    3123, 8105, 12194, 7974, 4141, 5692, 4543, 5355,
]


class TestMakeSeed:
    """Token to seed conversion."""

    def test_known_seed(self):
        # 's'*10 + 'e'*100 + 'e'*1000 + 'd'*10000
        assert make_seed("seed") == 1112250

    def test_single_char(self):
        assert make_seed("a") == 970

    def test_empty_token(self):
        assert make_seed("") == 0

    def test_long_token_stays_signed_64_bit(self):
        for token in ("x" * 19, "x" * 20, "x" * 64, "long token " * 10):
            seed = make_seed(token)
            assert -(2 ** 63) <= seed < 2 ** 63

    def test_position_matters(self):
        assert make_seed("ab") != make_seed("ba")


class TestLabelShape:
    """Every label has k distinct, balanced entries."""

    def test_count(self):
        assert generate_label(16000, 48, "apple").count() == 48

    def test_odd_nnz_rounds_up(self):
        assert round_up_even(5) == 6
        assert round_up_even(6) == 6
        label = generate_label(1000, 5, "apple")
        assert label.count() == 6

    def test_balanced_values(self):
        values = generate_label(16000, 48, "apple").values()
        assert values.count(1.0) == 24
        assert values.count(-1.0) == 24

    def test_indices_in_range(self):
        label = generate_label(100, 20, "apple")
        assert all(0 <= i < 100 for i in label.keys())

    def test_zero_nnz(self):
        assert generate_label(100, 0, "apple").count() == 0

    def test_negative_nnz_raises(self):
        with pytest.raises(ValueError):
            generate_label(100, -2, "apple")

    def test_capacity_exact(self):
        label = generate_label(6, 5, "apple")
        assert label.keys() == [0, 1, 2, 3, 4, 5]

    def test_capacity_exceeded(self):
        with pytest.raises(CapacityError):
            generate_label(4, 6, "apple")

    def test_capacity_error_is_value_error(self):
        with pytest.raises(ValueError):
            generate_label(4, 5, "apple")


class TestDeterminism:
    """Labels are a pure function of (size, nnz, token)."""

    def test_same_token_same_label(self):
        assert generate_label(16000, 48, "apple") == generate_label(16000, 48, "apple")

    def test_different_tokens_differ(self):
        assert generate_label(16000, 48, "apple") != generate_label(16000, 48, "orange")

    def test_seed_regression(self):
        """Label for "seed" (seed 1112250) is fixed across releases."""
        label = generate_label(16000, 48, "seed")
        assert make_seed("seed") == 1112250
        assert list(label.items()) == SEED_LABEL

    def test_seed_draw_order(self):
        assert make_indices(16000, 48, 1112250) == SEED_DRAW_ORDER

    def test_seed_label_balanced(self):
        values = [value for _, value in SEED_LABEL]
        assert values.count(1.0) == 24
        assert values.count(-1.0) == 24
        assert len({index for index, _ in SEED_LABEL}) == 48

    def test_indices_distinct_in_draw_order(self):
        drawn = make_indices(1000, 100, 42)
        assert len(set(drawn)) == 100
        assert drawn == make_indices(1000, 100, 42)

    def test_values_deterministic(self):
        assert make_values(10, 7) == make_values(10, 7)
        assert sorted(make_values(10, 7)) == [-1.0] * 5 + [1.0] * 5

    def test_make_indices_capacity(self):
        with pytest.raises(CapacityError):
            make_indices(3, 4, 0)

    def test_near_orthogonal(self):
        a = generate_label(16000, 48, "apple")
        b = generate_label(16000, 48, "orange")
        assert abs(a.similarity_to(b)) < 0.2


class TestWindow:
    """Clamped substring windows."""

    @pytest.mark.parametrize(
        "start,width,expected",
        [
            (0, 5, "hello"),
            (1, 3, "ell"),
            (-2, 4, "he"),
            (3, 10, "lo"),
            (10, 2, ""),
            (-5, 2, ""),
        ],
    )
    def test_window(self, start, width, expected):
        assert window("hello", start, width) == expected

    def test_window_label(self):
        assert generate_window_label(1000, 8, "the quick fox", 4, 5) == generate_label(
            1000, 8, "quick"
        )


class TestLabelGenerator:
    """Bound generator."""

    def test_call_matches_function(self, generator, size, nnz):
        assert generator("apple") == generate_label(size, nnz, "apple")
        assert generator.generate("apple") == generator("apple")

    def test_k(self):
        assert LabelGenerator(100, 7).k == 8

    def test_capacity_checked_at_construction(self):
        with pytest.raises(CapacityError):
            LabelGenerator(10, 11)

    def test_factory(self):
        gen = LabelGenerator(100, 4, ImmutableSparseVector)
        assert isinstance(gen("x"), ImmutableSparseVector)

    def test_window(self, generator):
        assert generator.window("the quick fox", 4, 5) == generator("quick")

    def test_repr(self):
        assert repr(LabelGenerator(100, 4)) == "LabelGenerator(size=100, nnz=4)"
