"""
RGB color values.

Colors carry light intensity and surface reflectance. Channels are nominally
in [0, 1] but are left unclamped through the whole shading pipeline; clamping
only happens when converting to 8-bit channel values for output.
"""

from __future__ import annotations
from numbers import Real
from typing import Iterator, Tuple, Union
import numpy as np

from .utils import EPSILON


class Color:
    """An RGB color with float channels."""

    __slots__ = ('_data',)

    __array_ufunc__ = None

    def __init__(self, r: float = 0.0, g: float = 0.0, b: float = 0.0):
        self._data = np.array([r, g, b], dtype=np.float64)
        self._data.flags.writeable = False

    @classmethod
    def from_array(cls, arr) -> Color:
        """Create a Color from the first three entries of an array."""
        c = cls.__new__(cls)
        c._data = np.array(arr, dtype=np.float64)[:3]
        c._data.flags.writeable = False
        return c

    @classmethod
    def black(cls) -> Color:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def white(cls) -> Color:
        return cls(1.0, 1.0, 1.0)

    @property
    def r(self) -> float:
        return float(self._data[0])

    @property
    def g(self) -> float:
        return float(self._data[1])

    @property
    def b(self) -> float:
        return float(self._data[2])

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def __iter__(self) -> Iterator[float]:
        return (float(c) for c in self._data)

    def __len__(self) -> int:
        return 3

    def __repr__(self) -> str:
        return f"Color({self.r:.5f}, {self.g:.5f}, {self.b:.5f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return bool(np.all(np.abs(self._data - other._data) < EPSILON))

    __hash__ = None

    def fuzzy_eq(self, other: Color) -> bool:
        return self == other

    def __add__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color.from_array(self._data + other._data)

    def __sub__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color.from_array(self._data - other._data)

    def __mul__(self, other: Union[Color, float]) -> Color:
        """Scale by a scalar, or blend with another color (Hadamard product)."""
        if isinstance(other, Color):
            return Color.from_array(self._data * other._data)
        if isinstance(other, Real):
            return Color.from_array(self._data * other)
        return NotImplemented

    def __rmul__(self, other: float) -> Color:
        if isinstance(other, Real):
            return Color.from_array(other * self._data)
        return NotImplemented

    def __truediv__(self, other: float) -> Color:
        if not isinstance(other, Real):
            return NotImplemented
        return Color.from_array(self._data / other)

    def clamp(self, min_val: float = 0.0, max_val: float = 1.0) -> Color:
        """Clamp all channels to the given range."""
        return Color.from_array(np.clip(self._data, min_val, max_val))

    def to_bytes(self) -> Tuple[int, int, int]:
        """Convert to 8-bit channel values.

        Each channel is clamped to [0, 1], scaled to [0, 255] and rounded
        half up, so 0.5 maps to 128.
        """
        scaled = np.floor(np.clip(self._data, 0.0, 1.0) * 255.0 + 0.5)
        return int(scaled[0]), int(scaled[1]), int(scaled[2])

    def to_array(self) -> np.ndarray:
        """Return the underlying channels as a new array."""
        return self._data.copy()
