"""
Camera module for generating primary rays.

The camera sits at the origin of camera space looking down -z, with the
canvas one unit in front of it. A view transform maps world space into
camera space; its inverse maps pixel positions back into the world.
"""

from __future__ import annotations
import math
from typing import Optional

from .matrix import Matrix
from .ray import Ray
from .tuples import Point, Vector


def view_transform(from_: Point, to: Point, up: Vector) -> Matrix:
    """Build the transform for an eye at `from_` looking at `to`.

    Args:
        from_: Eye position in world space
        to: Point the eye is looking at
        up: Approximate up direction (need not be exactly perpendicular)

    Returns:
        The world-to-camera matrix
    """
    forward = (to - from_).normalize()
    left = forward.cross(up.normalize())
    true_up = left.cross(forward)

    orientation = Matrix([
        [left.x, left.y, left.z, 0.0],
        [true_up.x, true_up.y, true_up.z, 0.0],
        [-forward.x, -forward.y, -forward.z, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])
    return orientation * Matrix.translate(-from_.x, -from_.y, -from_.z)


class Camera:
    """A pinhole camera mapping pixels to world-space rays."""

    def __init__(
        self,
        hsize: int,
        vsize: int,
        field_of_view: float,
        transform: Optional[Matrix] = None
    ):
        """Create a camera.

        Args:
            hsize: Canvas width in pixels
            vsize: Canvas height in pixels
            field_of_view: Angle covered by the wider canvas side, in radians
            transform: View transform (identity if None)

        Raises:
            ValueError: if either canvas dimension is not positive
            NotInvertibleError: if the view transform is singular
        """
        if hsize <= 0 or vsize <= 0:
            raise ValueError(f"Camera size must be positive, got {hsize}x{vsize}")

        self.hsize = hsize
        self.vsize = vsize
        self.field_of_view = field_of_view
        self.transform = transform if transform is not None else Matrix.identity()
        self._inverse_transform = self.transform.inverse()

        half_view = math.tan(field_of_view / 2)
        aspect_ratio = hsize / vsize

        if aspect_ratio >= 1:
            self.half_width = half_view
            self.half_height = half_view / aspect_ratio
        else:
            self.half_width = half_view * aspect_ratio
            self.half_height = half_view

        self.pixel_size = self.half_width * 2 / hsize

    def with_transform(self, transform: Matrix) -> Camera:
        """Return a copy of this camera using the given view transform."""
        return Camera(self.hsize, self.vsize, self.field_of_view, transform)

    def look_at_from_position(self, from_: Point, to: Point, up: Vector) -> Camera:
        """Return a copy of this camera placed at `from_` looking at `to`."""
        return self.with_transform(view_transform(from_, to, up))

    def ray_for_pixel(self, x: int, y: int) -> Ray:
        """Generate the ray through the center of pixel (x, y).

        Pixel (0, 0) is the top-left corner of the canvas.
        """
        x_offset = (0.5 + x) * self.pixel_size
        y_offset = (0.5 + y) * self.pixel_size

        # The camera looks toward -z, so +x is to the left
        world_x = self.half_width - x_offset
        world_y = self.half_height - y_offset

        pixel = self._inverse_transform * Point(world_x, world_y, -1.0)
        origin = self._inverse_transform * Point.origin()
        direction = (pixel - origin).normalize()

        return Ray(origin, direction)

    def __repr__(self) -> str:
        return (
            f"Camera(hsize={self.hsize}, vsize={self.vsize}, "
            f"field_of_view={self.field_of_view:.4f})"
        )
