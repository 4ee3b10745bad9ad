"""
Homogeneous 4-component tuples: Vector (w=0) and Point (w=1).

These are the building blocks of every transform in the ray tracer:
- Points locate things in space (ray origins, hit positions, lights)
- Vectors describe directions (ray directions, normals, eye vectors)

Only geometrically meaningful combinations are allowed:
    Point - Point  -> Vector
    Point + Vector -> Point
    Point - Vector -> Point
    Vector +/- Vector -> Vector
Anything else (e.g. Point + Point) raises TypeError.
"""

from __future__ import annotations
import math
from numbers import Real
from typing import Iterator, Sequence
import numpy as np

from .utils import EPSILON


class ZeroVectorError(ValueError):
    """Raised when a zero-length vector is normalized."""
    pass


class _Tuple:
    """Shared storage and arithmetic for Vector and Point.

    Components live in a read-only numpy array of length 4. The homogeneous
    coordinate is fixed by the subclass and never taken from input data.
    """

    __slots__ = ('_data',)

    _w = 0.0

    # Keep numpy scalars from treating tuples as sequences in `2.0 * v`
    __array_ufunc__ = None

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self._data = self._freeze(np.array([x, y, z, self._w], dtype=np.float64))

    @classmethod
    def from_array(cls, arr: Sequence[float]):
        """Create a tuple from the first three entries of an array.

        Any fourth entry is ignored; w always comes from the tuple kind.
        """
        data = np.empty(4, dtype=np.float64)
        data[:3] = np.asarray(arr, dtype=np.float64)[:3]
        data[3] = cls._w
        t = cls.__new__(cls)
        t._data = cls._freeze(data)
        return t

    @staticmethod
    def _freeze(data: np.ndarray) -> np.ndarray:
        data.flags.writeable = False
        return data

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    @property
    def w(self) -> float:
        return float(self._data[3])

    @property
    def xyz(self) -> np.ndarray:
        """The spatial part as a new (writable) array."""
        return self._data[:3].copy()

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def __iter__(self) -> Iterator[float]:
        return (float(c) for c in self._data)

    def __len__(self) -> int:
        return 4

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.x:.5f}, {self.y:.5f}, {self.z:.5f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _Tuple):
            return NotImplemented
        if type(self) is not type(other):
            return False
        return bool(np.all(np.abs(self._data - other._data) < EPSILON))

    __hash__ = None

    def fuzzy_eq(self, other: _Tuple) -> bool:
        """Componentwise equality within EPSILON."""
        return self == other

    def __neg__(self):
        return type(self).from_array(-self._data)

    def __mul__(self, other: float):
        if not isinstance(other, Real):
            return NotImplemented
        return type(self).from_array(self._data * other)

    def __rmul__(self, other: float):
        return self.__mul__(other)

    def __truediv__(self, other: float):
        if not isinstance(other, Real):
            return NotImplemented
        return type(self).from_array(self._data / other)

    def to_array(self) -> np.ndarray:
        """Return all four components as a new array."""
        return self._data.copy()


class Vector(_Tuple):
    """A direction in space (w = 0)."""

    __slots__ = ()

    _w = 0.0

    def __add__(self, other: _Tuple) -> _Tuple:
        if isinstance(other, Vector):
            return Vector.from_array(self._data + other._data)
        if isinstance(other, Point):
            return Point.from_array(self._data + other._data)
        return NotImplemented

    def __sub__(self, other: Vector) -> Vector:
        if isinstance(other, Vector):
            return Vector.from_array(self._data - other._data)
        return NotImplemented

    def dot(self, other: _Tuple) -> float:
        """Dot product over all four components."""
        return float(np.dot(self._data, other._data))

    def cross(self, other: Vector) -> Vector:
        """Cross product of the spatial parts (w is ignored)."""
        return Vector.from_array(np.cross(self._data[:3], other._data[:3]))

    def magnitude(self) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self) -> Vector:
        """Return a unit vector in the same direction.

        Raises:
            ZeroVectorError: if the vector has zero length
        """
        length = self.magnitude()
        if length == 0:
            raise ZeroVectorError(f"Cannot normalize zero-length vector {self!r}")
        return Vector.from_array(self._data / length)

    def reflect(self, normal: Vector) -> Vector:
        """Reflect this vector around the given normal."""
        return self - normal * 2 * self.dot(normal)


class Point(_Tuple):
    """A position in space (w = 1).

    Scaling and negation act on x, y and z only; w stays 1.
    """

    __slots__ = ()

    _w = 1.0

    def __add__(self, other: Vector) -> Point:
        if isinstance(other, Vector):
            return Point.from_array(self._data + other._data)
        return NotImplemented

    def __sub__(self, other: _Tuple) -> _Tuple:
        if isinstance(other, Point):
            return Vector.from_array(self._data - other._data)
        if isinstance(other, Vector):
            return Point.from_array(self._data - other._data)
        return NotImplemented

    @classmethod
    def origin(cls) -> Point:
        return cls(0.0, 0.0, 0.0)
