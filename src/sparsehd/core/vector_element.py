"""
VectorElement: a single (index, value) slot of a sparse vector.

Elements sort by index only. Two elements with the same index occupy the
same slot whatever their values; equality additionally compares values
within ROUNDING_ERROR.
"""

import math
from dataclasses import dataclass
from functools import total_ordering
from typing import Union

import torch

from sparsehd.config.constants import POINT_SEPARATOR, ROUNDING_ERROR, VALUE_FORMAT
from sparsehd.core.errors import ParseError


@total_ordering
@dataclass(frozen=True, eq=False)
class VectorElement:
    """
    Immutable (index, value) pair.

    Arithmetic returns a new element; the receiver is never modified.

    Example:
        >>> a = VectorElement(3, 1.5)
        >>> a.add(0.5)
        VectorElement(index=3, value=2.0)
        >>> str(a)
        '3|1.500000'
    """

    index: int
    value: float = 0.0

    def same_slot(self, other: "VectorElement") -> bool:
        """True if both elements refer to the same index."""
        return self.index == other.index

    def add(self, other: Union["VectorElement", float]) -> "VectorElement":
        return VectorElement(self.index, self.value + self._operand(other))

    def subtract(self, other: Union["VectorElement", float]) -> "VectorElement":
        return VectorElement(self.index, self.value - self._operand(other))

    def multiply(self, scalar: float) -> "VectorElement":
        return VectorElement(self.index, self.value * scalar)

    def divide(self, scalar: float) -> "VectorElement":
        """Division by zero yields inf/nan, as in SparseVector.divide."""
        quotient = torch.tensor(self.value, dtype=torch.float64) / scalar
        return VectorElement(self.index, quotient.item())

    def _operand(self, other: Union["VectorElement", float]) -> float:
        if isinstance(other, VectorElement):
            if not self.same_slot(other):
                raise ValueError(f"Point indices do not match! {self} != {other}")
            return other.value
        return float(other)

    def __lt__(self, other: "VectorElement") -> bool:
        if not isinstance(other, VectorElement):
            return NotImplemented
        return self.index < other.index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VectorElement):
            return NotImplemented
        return self.index == other.index and math.isclose(
            self.value, other.value, rel_tol=0.0, abs_tol=ROUNDING_ERROR
        )

    def __hash__(self) -> int:
        return hash(self.index)

    def __str__(self) -> str:
        return f"{self.index}{POINT_SEPARATOR}{VALUE_FORMAT % self.value}"

    @classmethod
    def from_string(cls, text: str) -> "VectorElement":
        """
        Parse an "index|value" token.

        Raises:
            ParseError: If the token does not have exactly two numeric fields.
        """
        fields = text.split(POINT_SEPARATOR)
        if len(fields) != 2:
            raise ParseError(f"Wrong number of partitions: {text!r}")
        try:
            return cls(int(fields[0]), float(fields[1]))
        except ValueError as e:
            raise ParseError(f"Malformed point {text!r}: {e}") from e
