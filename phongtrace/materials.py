"""
Surface materials for the ray tracer.

Implements the Phong reflection model for a single point light:
    result = ambient + diffuse + specular

The result is not clamped; channel values above 1 are expected for
bright highlights and are only clamped when the image is encoded.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from .color import Color
from .utils import fuzzy_eq

if TYPE_CHECKING:
    from .lights import PointLight
    from .tuples import Point, Vector


class ShadowState(Enum):
    """Whether a shaded point can see the light."""
    SHADOW = 'shadow'
    CLEAR = 'clear'


class Material(ABC):
    """Abstract base class for materials."""

    @abstractmethod
    def lighting(
        self,
        light: PointLight,
        position: Point,
        eye: Vector,
        normal: Vector,
        shadow_state: ShadowState = ShadowState.CLEAR
    ) -> Color:
        """Compute the color of a surface point lit by one light.

        Args:
            light: The light source
            position: The point being shaded (world space)
            eye: Unit vector from the point towards the eye
            normal: Unit surface normal, facing the eye
            shadow_state: SHADOW if the light is blocked from the point

        Returns:
            The reflected color
        """
        pass


@dataclass(frozen=True, eq=False)
class Phong(Material):
    """Phong material.

    Attributes:
        color: Surface color
        ambient: Fraction of light reflected regardless of geometry
        diffuse: Lambertian reflectance
        specular: Strength of the highlight
        shininess: Highlight exponent; larger values give a smaller highlight
    """
    color: Color = field(default_factory=Color.white)
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0

    def lighting(
        self,
        light: PointLight,
        position: Point,
        eye: Vector,
        normal: Vector,
        shadow_state: ShadowState = ShadowState.CLEAR
    ) -> Color:
        effective_color = self.color * light.intensity
        ambient = effective_color * self.ambient

        if shadow_state is ShadowState.SHADOW:
            return ambient

        light_vector = (light.position - position).normalize()
        light_dot_normal = light_vector.dot(normal)

        if light_dot_normal < 0:
            # Light is on the other side of the surface
            diffuse = Color.black()
            specular = Color.black()
        else:
            diffuse = effective_color * self.diffuse * light_dot_normal

            reflect_vector = (-light_vector).reflect(normal)
            reflect_dot_eye = reflect_vector.dot(eye)
            if reflect_dot_eye <= 0:
                specular = Color.black()
            else:
                factor = reflect_dot_eye ** self.shininess
                specular = light.intensity * self.specular * factor

        return ambient + diffuse + specular

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Phong):
            return NotImplemented
        return (
            self.color == other.color
            and fuzzy_eq(self.ambient, other.ambient)
            and fuzzy_eq(self.diffuse, other.diffuse)
            and fuzzy_eq(self.specular, other.specular)
            and fuzzy_eq(self.shininess, other.shininess)
        )

    __hash__ = None

    def fuzzy_eq(self, other: Phong) -> bool:
        return self == other
