"""Two-dimensional tensor of doubles used throughout the network code."""

from __future__ import annotations

from numbers import Real
from typing import Iterable, Sequence

import numpy as np

_DIVISION_EPSILON = 1e-10
_rng = np.random.default_rng()


class Tensor:
    """A dense matrix of floats with shape-checked arithmetic."""

    __slots__ = ("_data",)

    def __init__(self, data: Iterable[Iterable[float]] | np.ndarray | None = None) -> None:
        if data is None:
            self._data = np.zeros((0, 0), dtype=float)
            return
        array = np.array(data, dtype=float)
        if array.ndim != 2:
            raise ValueError("Tensor data must be two-dimensional")
        self._data = array

    @classmethod
    def zeros(cls, rows: int, cols: int) -> Tensor:
        """Create a tensor of the given shape filled with zeros."""
        if rows < 0 or cols < 0:
            raise ValueError("Tensor dimensions must be non-negative")
        return cls(np.zeros((rows, cols), dtype=float))

    @classmethod
    def from_list(cls, values: Sequence[float], rows: int, cols: int) -> Tensor:
        """Build a tensor from a flat row-major sequence of values."""
        if len(values) != rows * cols:
            raise ValueError("Vector size doesn't match tensor dimensions")
        return cls(np.asarray(values, dtype=float).reshape(rows, cols))

    @property
    def rows(self) -> int:
        return int(self._data.shape[0])

    @property
    def cols(self) -> int:
        return int(self._data.shape[1])

    @property
    def size(self) -> int:
        return int(self._data.size)

    @property
    def data(self) -> np.ndarray:
        """The underlying array; changes to it change the tensor."""
        return self._data

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return float(self._data[row, col])

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        row, col = index
        self._data[row, col] = value

    def _require_same_shape(self, other: Tensor, operation: str) -> None:
        if self.shape != other.shape:
            raise ValueError(f"Tensor dimensions must match for {operation}")

    def __add__(self, other: Tensor) -> Tensor:
        if not isinstance(other, Tensor):
            return NotImplemented
        self._require_same_shape(other, "addition")
        return Tensor(self._data + other._data)

    def __sub__(self, other: Tensor) -> Tensor:
        if not isinstance(other, Tensor):
            return NotImplemented
        self._require_same_shape(other, "subtraction")
        return Tensor(self._data - other._data)

    def __matmul__(self, other: Tensor) -> Tensor:
        if not isinstance(other, Tensor):
            return NotImplemented
        if self.cols != other.rows:
            raise ValueError("Invalid dimensions for matrix multiplication")
        return Tensor(self._data @ other._data)

    def __iadd__(self, other: Tensor) -> Tensor:
        if not isinstance(other, Tensor):
            return NotImplemented
        self._require_same_shape(other, "addition")
        self._data += other._data
        return self

    def __isub__(self, other: Tensor) -> Tensor:
        if not isinstance(other, Tensor):
            return NotImplemented
        self._require_same_shape(other, "subtraction")
        self._data -= other._data
        return self

    def __mul__(self, scalar: float) -> Tensor:
        if not isinstance(scalar, Real):
            return NotImplemented
        return Tensor(self._data * float(scalar))

    def __rmul__(self, scalar: float) -> Tensor:
        return self.__mul__(scalar)

    @staticmethod
    def _check_divisor(scalar: float) -> None:
        if abs(scalar) < _DIVISION_EPSILON:
            raise ZeroDivisionError("Division by zero")

    def __truediv__(self, scalar: float) -> Tensor:
        if not isinstance(scalar, Real):
            return NotImplemented
        self._check_divisor(scalar)
        return Tensor(self._data / float(scalar))

    def __imul__(self, scalar: float) -> Tensor:
        if not isinstance(scalar, Real):
            return NotImplemented
        self._data *= float(scalar)
        return self

    def __itruediv__(self, scalar: float) -> Tensor:
        if not isinstance(scalar, Real):
            return NotImplemented
        self._check_divisor(scalar)
        self._data /= float(scalar)
        return self

    def zero(self) -> None:
        """Set every element to zero."""
        self._data.fill(0.0)

    def random(self, low: float = -1.0, high: float = 1.0) -> None:
        """Fill with values drawn uniformly from [low, high)."""
        self._data[...] = _rng.uniform(low, high, size=self._data.shape)

    def fill(self, value: float) -> None:
        self._data.fill(value)

    def mean(self) -> float:
        return float(self._data.mean())

    def sum(self) -> float:
        return float(self._data.sum())

    def norm(self) -> float:
        """Frobenius norm."""
        return float(np.linalg.norm(self._data))

    def transpose(self) -> Tensor:
        return Tensor(self._data.T)

    def resize(self, rows: int, cols: int) -> None:
        """Change the shape; contents are kept only when the size is unchanged."""
        if rows < 0 or cols < 0:
            raise ValueError("Tensor dimensions must be non-negative")
        if (rows, cols) == self.shape:
            return
        if rows * cols == self.size:
            self._data = self._data.reshape((rows, cols), order="F").copy()
        else:
            self._data = np.zeros((rows, cols), dtype=float)

    def to_list(self) -> list[float]:
        """Flatten to a list in column-major order."""
        return self._data.flatten(order="F").tolist()

    def __repr__(self) -> str:
        return f"Tensor({self._data.tolist()!r})"