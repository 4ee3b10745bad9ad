"""
Ray-body intersection records.

An Intersection remembers the ray that produced it, so the shading
geometry (position, eye, normal) can be recomputed on demand with
`Intersection.computed()`.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from collections.abc import Sequence
from operator import attrgetter
from typing import Iterable, Iterator, Optional, TYPE_CHECKING, Union

from .ray import Ray
from .tuples import Point, Vector
from .utils import EPSILON, fuzzy_eq

if TYPE_CHECKING:
    from .shapes import Shape


class Orientation(Enum):
    """Which side of the surface the ray came from."""
    INSIDE = 'inside'
    OUTSIDE = 'outside'


@dataclass(frozen=True)
class ComputedIntersection:
    """Shading geometry derived from an Intersection.

    Attributes:
        intersection: The intersection this was computed from
        position: The hit point in world space
        over_point: The hit point nudged along the normal by EPSILON, used as
            the origin of secondary rays so they do not re-hit the surface
        normal: Unit surface normal, flipped to face the eye
        eye: Unit vector from the hit point back along the ray
        orientation: INSIDE if the ray started inside the body
    """
    intersection: Intersection
    position: Point
    over_point: Point
    normal: Vector
    eye: Vector
    orientation: Orientation

    @property
    def inside(self) -> bool:
        return self.orientation is Orientation.INSIDE


@dataclass(frozen=True, eq=False)
class Intersection:
    """A hit at parameter t along a ray.

    Attributes:
        t: The ray parameter at the hit
        ray: The world-space ray that produced the hit
        body: The shape that was hit
    """
    t: float
    ray: Ray
    body: Shape

    def computed(self) -> ComputedIntersection:
        """Compute the shading geometry for this intersection."""
        position = self.ray.position(self.t)
        normal = self.body.normal_at(position)
        eye = -self.ray.direction

        if normal.dot(eye) < 0:
            normal = -normal
            orientation = Orientation.INSIDE
        else:
            orientation = Orientation.OUTSIDE

        over_point = position + normal * EPSILON

        return ComputedIntersection(
            intersection=self,
            position=position,
            over_point=over_point,
            normal=normal,
            eye=eye,
            orientation=orientation
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Intersection):
            return NotImplemented
        return fuzzy_eq(self.t, other.t) and self.body == other.body

    __hash__ = None

    def __repr__(self) -> str:
        return f"Intersection(t={self.t:.5f}, body={self.body!r})"


class Intersections(Sequence):
    """An immutable collection of intersections, sorted by ascending t.

    The input order does not matter; the collection always sorts itself.
    """

    __slots__ = ('_items',)

    def __init__(self, intersections: Iterable[Intersection] = ()):
        self._items = tuple(sorted(intersections, key=attrgetter('t')))

    def __getitem__(self, index: Union[int, slice]):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Intersection]:
        return iter(self._items)

    def __add__(self, other: Iterable[Intersection]) -> Intersections:
        """Merge two collections into a new sorted collection."""
        if not isinstance(other, Intersections):
            return NotImplemented
        return Intersections(self._items + other._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Intersections):
            return NotImplemented
        return self._items == other._items

    __hash__ = None

    def hit(self) -> Optional[Intersection]:
        """Return the nearest intersection with t > 0, or None.

        A t of exactly zero is not a hit: it is the ray's own origin.
        """
        for intersection in self._items:
            if intersection.t > 0:
                return intersection
        return None

    def __repr__(self) -> str:
        return f"Intersections({list(self._items)!r})"
