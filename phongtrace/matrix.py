"""
Square matrices (2x2, 3x3, 4x4) and the affine transforms built on them.

Transforms compose right to left: in `T * R * S * p` the point is scaled
first, then rotated, then translated. Scene descriptions rely on this
ordering, so it must not change.

Determinants and inverses use cofactor expansion rather than an LU
factorization.
"""

from __future__ import annotations
import math
from enum import Enum
from typing import Sequence, Tuple, Union
import numpy as np

from .tuples import _Tuple
from .utils import EPSILON, fuzzy_ne


class NotInvertibleError(ValueError):
    """Raised when inverting a singular matrix."""
    pass


class Rotation(Enum):
    """Axis for Matrix.rotate."""
    X = 'x'
    Y = 'y'
    Z = 'z'


class Matrix:
    """An immutable N x N matrix of floats, N in {2, 3, 4}."""

    __slots__ = ('_data',)

    __array_ufunc__ = None

    SIZES = (2, 3, 4)

    def __init__(self, rows: Sequence[Sequence[float]]):
        """Create a matrix from a sequence of rows.

        Args:
            rows: N rows of N values each

        Raises:
            ValueError: if the data is not square or N is not 2, 3 or 4
        """
        data = np.array(rows, dtype=np.float64)
        if data.ndim != 2 or data.shape[0] != data.shape[1]:
            raise ValueError(f"Matrix must be square, got shape {data.shape}")
        if data.shape[0] not in self.SIZES:
            raise ValueError(f"Matrix size must be one of {self.SIZES}, got {data.shape[0]}")
        data.flags.writeable = False
        self._data = data

    @classmethod
    def _wrap(cls, data: np.ndarray) -> Matrix:
        m = cls.__new__(cls)
        data.flags.writeable = False
        m._data = data
        return m

    @classmethod
    def identity(cls, size: int = 4) -> Matrix:
        if size not in cls.SIZES:
            raise ValueError(f"Matrix size must be one of {cls.SIZES}, got {size}")
        return cls._wrap(np.identity(size, dtype=np.float64))

    @property
    def size(self) -> int:
        return self._data.shape[0]

    def __getitem__(self, index: Union[int, Tuple[int, int]]):
        """m[row, col] returns a float; m[row] returns the row as a tuple."""
        if isinstance(index, tuple):
            return float(self._data[index])
        return tuple(float(v) for v in self._data[index])

    def __repr__(self) -> str:
        rows = ", ".join(
            "[" + ", ".join(f"{v:.5f}" for v in row) + "]" for row in self._data
        )
        return f"Matrix([{rows}])"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.size != other.size:
            return False
        return bool(np.all(np.abs(self._data - other._data) < EPSILON))

    __hash__ = None

    def fuzzy_eq(self, other: Matrix) -> bool:
        return self == other

    def __mul__(self, other):
        """Multiply by another matrix or transform a Point/Vector.

        A transformed tuple keeps its kind: the homogeneous coordinate of the
        product is dropped and taken from the operand again.
        """
        if isinstance(other, Matrix):
            if other.size != self.size:
                raise ValueError(
                    f"Cannot multiply {self.size}x{self.size} by {other.size}x{other.size} matrix"
                )
            return Matrix._wrap(self._data @ other._data)
        if isinstance(other, _Tuple):
            if self.size != 4:
                raise ValueError(f"Only 4x4 matrices transform tuples, got {self.size}x{self.size}")
            return type(other).from_array(self._data @ other._data)
        return NotImplemented

    def transpose(self) -> Matrix:
        return Matrix._wrap(self._data.T.copy())

    def submatrix(self, row: int, col: int) -> Matrix:
        """Remove one row and one column, keeping the rest in order."""
        if self.size == 2:
            raise ValueError("A 2x2 matrix has no submatrix")
        data = np.delete(np.delete(self._data, row, axis=0), col, axis=1)
        return Matrix._wrap(data)

    def minor(self, row: int, col: int) -> float:
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        minor = self.minor(row, col)
        return minor if (row + col) % 2 == 0 else -minor

    def determinant(self) -> float:
        """Determinant by cofactor expansion along the first row."""
        if self.size == 2:
            d = self._data
            return float(d[0, 0] * d[1, 1] - d[0, 1] * d[1, 0])
        return sum(float(self._data[0, col]) * self.cofactor(0, col) for col in range(self.size))

    def is_invertible(self) -> bool:
        return fuzzy_ne(self.determinant(), 0.0)

    def inverse(self) -> Matrix:
        """Return the inverse matrix.

        Raises:
            NotInvertibleError: if the determinant is (fuzzily) zero
        """
        det = self.determinant()
        if not fuzzy_ne(det, 0.0):
            raise NotInvertibleError(f"Matrix is not invertible: {self!r}")

        size = self.size
        result = np.empty((size, size), dtype=np.float64)
        for row in range(size):
            for col in range(size):
                # transposed while filling in
                result[col, row] = self.cofactor(row, col) / det
        return Matrix._wrap(result)

    def to_array(self) -> np.ndarray:
        return self._data.copy()

    # Transform constructors (all 4x4)

    @classmethod
    def translate(cls, x: float, y: float, z: float) -> Matrix:
        m = np.identity(4, dtype=np.float64)
        m[0, 3] = x
        m[1, 3] = y
        m[2, 3] = z
        return cls._wrap(m)

    @classmethod
    def scale(cls, x: float, y: float, z: float) -> Matrix:
        return cls._wrap(np.diag([x, y, z, 1.0]).astype(np.float64))

    @classmethod
    def rotate(cls, axis: Rotation, radians: float) -> Matrix:
        """Right-handed rotation about a coordinate axis."""
        c = math.cos(radians)
        s = math.sin(radians)
        if axis is Rotation.X:
            rows = [
                [1.0, 0.0, 0.0, 0.0],
                [0.0, c, -s, 0.0],
                [0.0, s, c, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ]
        elif axis is Rotation.Y:
            rows = [
                [c, 0.0, s, 0.0],
                [0.0, 1.0, 0.0, 0.0],
                [-s, 0.0, c, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ]
        elif axis is Rotation.Z:
            rows = [
                [c, -s, 0.0, 0.0],
                [s, c, 0.0, 0.0],
                [0.0, 0.0, 1.0, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ]
        else:
            raise ValueError(f"Unknown rotation axis: {axis}")
        return cls(rows)

    @classmethod
    def shear(cls, xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
        """Shear transform; `xy` moves x in proportion to y, and so on."""
        return cls([
            [1.0, xy, xz, 0.0],
            [yx, 1.0, yz, 0.0],
            [zx, zy, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ])
