"""
Application settings using Pydantic.

This module provides runtime configuration with environment variable support.
"""

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sparsehd.config.constants import (
    DEFAULT_NNZ,
    DEFAULT_SIZE,
    DEFAULT_WORKERS,
    HILBERT_ORDER,
    HILBERT_STRICT,
    MAX_SIZE,
    MIN_SIZE,
    PERMUTATION_SEED,
)


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Settings can be overridden via environment variables prefixed with SPARSEHD_
    For example: SPARSEHD_SIZE=8000
    """

    model_config = SettingsConfigDict(
        env_prefix="SPARSEHD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Allow other env vars without error
        validate_default=True,
    )

    # Vector Space
    size: int = Field(
        default=DEFAULT_SIZE,
        description="Label dimensionality",
        ge=MIN_SIZE,
        le=MAX_SIZE,
    )

    nnz: int = Field(
        default=DEFAULT_NNZ,
        description="Non-zero entries per label (rounded up to even)",
        ge=0,
    )

    # Permutations
    permutation_seed: int = Field(
        default=PERMUTATION_SEED,
        description="Seed for the positional permutation pair",
        ge=0,
    )

    # Hilbert Curve
    hilbert_order: int = Field(
        default=HILBERT_ORDER,
        description="Bits per coordinate on the Hilbert curve",
        ge=1,
        le=64,
    )

    hilbert_strict: bool = Field(
        default=HILBERT_STRICT,
        description="Reject out-of-range coordinates instead of masking",
    )

    # Parallel accumulation
    workers: int = Field(
        default=DEFAULT_WORKERS,
        description="Threads used for fan-in summation",
        ge=1,
        le=256,
    )

    # Runtime
    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    @field_validator("nnz")
    @classmethod
    def nnz_fits_size(cls, value: int, info: ValidationInfo) -> int:
        size = info.data.get("size")
        if size is not None and value + (value % 2) > size:
            raise ValueError(
                f"nnz={value} needs {value + value % 2} distinct indices, "
                f"but size is only {size}"
            )
        return value


# Global settings instance (can be overridden for testing)
settings = Settings()
