"""
Ray class for representing rays in 3D space.

A ray is defined by an origin point and a direction vector.
Ray(t) = origin + t * direction
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .tuples import Point, Vector

if TYPE_CHECKING:
    from .matrix import Matrix


class Ray:
    """A ray with origin and direction.

    The parametric form is: P(t) = origin + t * direction
    Rays are never mutated; transform() returns a new ray.
    """

    __slots__ = ('origin', 'direction')

    def __init__(self, origin: Point, direction: Vector):
        """Create a ray with given origin and direction.

        Args:
            origin: The starting point of the ray
            direction: The direction vector (not required to be unit length)
        """
        if not isinstance(origin, Point):
            raise TypeError(f"Ray origin must be a Point, got {type(origin).__name__}")
        if not isinstance(direction, Vector):
            raise TypeError(f"Ray direction must be a Vector, got {type(direction).__name__}")
        self.origin = origin
        self.direction = direction

    def position(self, t: float) -> Point:
        """Get the point along the ray at parameter t.

        Args:
            t: The parameter value (distance if direction is normalized)

        Returns:
            The point at origin + direction * t
        """
        return self.origin + self.direction * t

    def transform(self, m: Matrix) -> Ray:
        """Return this ray with both origin and direction transformed by m.

        The direction has w = 0, so translations leave it unchanged.
        """
        return Ray(m * self.origin, m * self.direction)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ray):
            return NotImplemented
        return self.origin == other.origin and self.direction == other.direction

    __hash__ = None

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction})"
