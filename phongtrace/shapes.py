"""
Geometric shapes for the ray tracer.

Every shape is defined in its own object space and placed in the world by
an affine transform. The Shape base class handles the world/object space
conversions; each concrete kind only implements `local_intersect` and
`local_normal_at` in object space.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional
import math

from .intersection import Intersection, Intersections
from .materials import Material, Phong
from .matrix import Matrix
from .ray import Ray
from .tuples import Point, Vector


class Shape(ABC):
    """Abstract base class for all bodies that can be hit by rays."""

    def __init__(self, transform: Optional[Matrix] = None, material: Optional[Material] = None):
        """Create a shape.

        Args:
            transform: Object-to-world transform (identity if None)
            material: Material for shading (default Phong if None)

        Raises:
            NotInvertibleError: if the transform is singular
        """
        self._transform = transform if transform is not None else Matrix.identity()
        self._inverse = self._transform.inverse()
        self._material = material if material is not None else Phong()

    @property
    def transform(self) -> Matrix:
        return self._transform

    @property
    def material(self) -> Material:
        return self._material

    def with_transform(self, transform: Matrix) -> Shape:
        """Return a copy of this shape with a different transform."""
        return type(self)(transform, self._material)

    def with_material(self, material: Material) -> Shape:
        """Return a copy of this shape with a different material."""
        return type(self)(self._transform, material)

    def intersect(self, ray: Ray) -> Intersections:
        """Intersect a world-space ray with this shape.

        Returns:
            All intersections, sorted by t (possibly empty)
        """
        local_ray = ray.transform(self._inverse)
        return Intersections(Intersection(t, ray, self) for t in self.local_intersect(local_ray))

    def normal_at(self, point: Point) -> Vector:
        """Get the unit surface normal at a world-space point."""
        object_point = self._inverse * point
        object_normal = self.local_normal_at(object_point)
        # Inverse transpose keeps the normal perpendicular under non-uniform
        # scaling; the product's w is dropped when it is turned back into a Vector.
        world_normal = self._inverse.transpose() * object_normal
        return world_normal.normalize()

    @abstractmethod
    def local_intersect(self, ray: Ray) -> List[float]:
        """Return the t values where an object-space ray meets the shape."""
        pass

    @abstractmethod
    def local_normal_at(self, point: Point) -> Vector:
        """Return the normal at an object-space point."""
        pass

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Shape):
            return NotImplemented
        return (
            type(self) is type(other)
            and self._transform == other._transform
            and self._material == other._material
        )

    __hash__ = None

    def fuzzy_eq(self, other: Shape) -> bool:
        return self == other

    def __repr__(self) -> str:
        return f"{type(self).__name__}(transform={self._transform!r})"


class Sphere(Shape):
    """The unit sphere centered at the object-space origin.

    World-space size, position and orientation come entirely from the
    transform.
    """

    def local_intersect(self, ray: Ray) -> List[float]:
        """Solve |O + tD|^2 = 1 for t.

        A tangent ray yields the same root twice; both are returned so that
        callers always see either zero or two intersections.
        """
        sphere_to_ray = ray.origin - Point.origin()
        a = ray.direction.dot(ray.direction)
        b = 2.0 * ray.direction.dot(sphere_to_ray)
        c = sphere_to_ray.dot(sphere_to_ray) - 1.0

        discriminant = b * b - 4.0 * a * c
        if discriminant < 0:
            return []

        sqrtd = math.sqrt(discriminant)
        t1 = (-b - sqrtd) / (2.0 * a)
        t2 = (-b + sqrtd) / (2.0 * a)
        return [t1, t2]

    def local_normal_at(self, point: Point) -> Vector:
        return point - Point.origin()
