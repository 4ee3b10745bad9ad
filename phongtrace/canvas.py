"""
Canvas: the pixel buffer a render is written into.

Pixels are stored as float RGB (unclamped) and converted to 8-bit values
only on output:
- PPM (plain "P3" text, lines wrapped at 70 characters)
- PNG or any other format Pillow can write (8-bit RGBA)
"""

from __future__ import annotations
import threading
from pathlib import Path
from typing import List, Union
import numpy as np

from .color import Color

PPM_MAX_LINE_LENGTH = 70


class Canvas:
    """A width x height grid of colors, initially black.

    `write_pixel` is safe to call from several threads at once.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.float64)
        self._lock = threading.Lock()

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) outside canvas of size {self.width}x{self.height}"
            )

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        self._check_bounds(x, y)
        with self._lock:
            self._pixels[y, x] = color.to_array()

    def read_pixel(self, x: int, y: int) -> Color:
        self._check_bounds(x, y)
        return Color.from_array(self._pixels[y, x])

    def to_array(self) -> np.ndarray:
        """Return the float pixels as a (height, width, 3) array copy."""
        return self._pixels.copy()

    def _to_8bit(self) -> np.ndarray:
        """Clamp to [0, 1], scale to [0, 255] and round half up."""
        return np.floor(np.clip(self._pixels, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)

    def to_rgba(self) -> bytes:
        """Return the pixels as 8-bit RGBA bytes in row-major order."""
        rgb = self._to_8bit()
        alpha = np.full((self.height, self.width, 1), 255, dtype=np.uint8)
        return np.concatenate([rgb, alpha], axis=2).tobytes()

    def to_ppm(self) -> bytes:
        """Encode the canvas as a plain-text (P3) PPM file.

        Each pixel row starts on a new line, and no line is longer than
        70 characters.
        """
        lines = [
            "P3",
            f"{self.width} {self.height}",
            "255",
        ]
        for row in self._to_8bit():
            lines.extend(_wrap_values([str(v) for v in row.flatten()]))
        return ("\n".join(lines) + "\n").encode('ascii')

    def to_image(self):
        """Return the canvas as a Pillow RGBA image."""
        from PIL import Image as PILImage

        rgb = self._to_8bit()
        alpha = np.full((self.height, self.width, 1), 255, dtype=np.uint8)
        return PILImage.fromarray(np.concatenate([rgb, alpha], axis=2))

    def save(self, filename: Union[str, Path]) -> None:
        """Save the canvas to a file.

        Args:
            filename: Output filename (extension determines format; `.ppm`
                is written as plain text, anything else through Pillow,
                and a name without an extension is written as PNG)

        Raises:
            ValueError: if Pillow does not know the extension
        """
        path = Path(filename)
        suffix = path.suffix.lower()

        if suffix == '.ppm':
            path.write_bytes(self.to_ppm())
            return

        image = self.to_image()
        if suffix in ('.jpg', '.jpeg'):
            # JPEG has no alpha channel
            image = image.convert('RGB')
        if not suffix:
            image.save(path, format='PNG')
        else:
            image.save(path)

    def __repr__(self) -> str:
        return f"Canvas({self.width}x{self.height})"


def _wrap_values(values: List[str], limit: int = PPM_MAX_LINE_LENGTH) -> List[str]:
    """Greedily pack space-separated values into lines of at most `limit` chars."""
    lines = []
    current = ""
    for value in values:
        if not current:
            current = value
        elif len(current) + 1 + len(value) > limit:
            lines.append(current)
            current = value
        else:
            current = f"{current} {value}"
    if current:
        lines.append(current)
    return lines
