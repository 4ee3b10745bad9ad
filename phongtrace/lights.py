"""
Light sources for the ray tracer.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .tuples import Point
from .color import Color


@dataclass(frozen=True, eq=False)
class PointLight:
    """A point light source.

    Point lights emit light equally in all directions from a single point
    with no falloff. They produce hard shadows.

    Attributes:
        position: Position of the light in world space
        intensity: Color and brightness of the light
    """
    position: Point
    intensity: Color = field(default_factory=Color.white)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PointLight):
            return NotImplemented
        return self.position == other.position and self.intensity == other.intensity

    __hash__ = None
