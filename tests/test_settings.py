"""Tests for runtime settings."""

import pytest
from pydantic import ValidationError

from sparsehd.config import constants
from sparsehd.config.settings import Settings


class TestDefaults:
    """Defaults come from constants."""

    def test_defaults(self, monkeypatch):
        for name in ("SIZE", "NNZ", "HILBERT_ORDER", "DEBUG"):
            monkeypatch.delenv(f"SPARSEHD_{name}", raising=False)
        s = Settings()
        assert s.size == constants.DEFAULT_SIZE
        assert s.nnz == constants.DEFAULT_NNZ
        assert s.hilbert_order == constants.HILBERT_ORDER
        assert s.debug is False


class TestEnvironment:
    """SPARSEHD_* environment overrides."""

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SPARSEHD_SIZE", "2000")
        monkeypatch.setenv("SPARSEHD_HILBERT_STRICT", "true")
        s = Settings()
        assert s.size == 2000
        assert s.hilbert_strict is True

    def test_invalid_env(self, monkeypatch):
        monkeypatch.setenv("SPARSEHD_SIZE", "0")
        with pytest.raises(ValidationError):
            Settings()


class TestValidation:
    """Field constraints."""

    def test_nnz_must_fit(self):
        with pytest.raises(ValidationError):
            Settings(size=100, nnz=101)

    def test_nnz_at_capacity(self):
        assert Settings(size=100, nnz=99).nnz == 99

    def test_odd_nnz_rounded_against_size(self):
        with pytest.raises(ValidationError):
            Settings(size=5, nnz=5)

    @pytest.mark.parametrize(
        "field,value",
        [("size", 0), ("nnz", -1), ("hilbert_order", 0), ("hilbert_order", 65), ("workers", 0)],
    )
    def test_bounds(self, field, value):
        with pytest.raises(ValidationError):
            Settings(**{field: value})
