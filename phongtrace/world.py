"""
World: the bodies and lights that make up a scene.

The world is read-only once built, so `color_at` can be called from many
render threads at once without locking.
"""

from __future__ import annotations
from typing import Iterable, Tuple

from .color import Color
from .intersection import ComputedIntersection, Intersections
from .lights import PointLight
from .materials import ShadowState
from .ray import Ray
from .shapes import Shape
from .tuples import Point


class World:
    """A collection of bodies lit by point lights.

    Attributes:
        bodies: The shapes in the scene
        lights: The light sources; contributions from all of them are summed
        shadows: If True, cast a shadow ray from each hit towards each light
    """

    def __init__(
        self,
        bodies: Iterable[Shape] = (),
        lights: Iterable[PointLight] = (),
        shadows: bool = False
    ):
        self.bodies: Tuple[Shape, ...] = tuple(bodies)
        self.lights: Tuple[PointLight, ...] = tuple(lights)
        self.shadows = shadows

    def intersect(self, ray: Ray) -> Intersections:
        """Intersect a ray with every body.

        Returns:
            All intersections from all bodies, sorted by t
        """
        return Intersections(
            intersection
            for body in self.bodies
            for intersection in body.intersect(ray)
        )

    def color_at(self, ray: Ray) -> Color:
        """Compute the color seen along a ray (black if it hits nothing)."""
        hit = self.intersect(ray).hit()
        if hit is None:
            return Color.black()
        return self.shade_hit(hit.computed())

    def shade_hit(self, comps: ComputedIntersection) -> Color:
        """Shade a precomputed hit, summing the contribution of every light."""
        material = comps.intersection.body.material
        color = Color.black()
        for light in self.lights:
            shadow_state = ShadowState.CLEAR
            if self.shadows and self.is_shadowed(comps.over_point, light):
                shadow_state = ShadowState.SHADOW
            color = color + material.lighting(
                light, comps.position, comps.eye, comps.normal, shadow_state
            )
        return color

    def is_shadowed(self, point: Point, light: PointLight) -> bool:
        """Return True if a body lies between the point and the light."""
        to_light = light.position - point
        distance = to_light.magnitude()
        if distance == 0:
            return False
        hit = self.intersect(Ray(point, to_light.normalize())).hit()
        return hit is not None and hit.t < distance

    def __repr__(self) -> str:
        return f"World(bodies={len(self.bodies)}, lights={len(self.lights)})"
