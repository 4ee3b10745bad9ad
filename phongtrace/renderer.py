"""
Renderer module - drives the per-pixel loop.

For every pixel (x, y) the camera produces a ray and the world produces a
color. Pixels are independent, so the image is split into tiles that are
rendered on a thread pool and written into a shared Canvas.
"""

from __future__ import annotations
import os
import platform
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .camera import Camera
from .canvas import Canvas
from .world import World

Tile = Tuple[int, int, int, int]


@dataclass
class RenderSettings:
    """Configuration for the renderer.

    Image size and field of view belong to the Camera; these settings only
    control how the work is scheduled.
    """
    num_threads: int = 0  # 0 = auto-detect
    tile_size: int = 32

    def __post_init__(self):
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4
        if self.num_threads < 0:
            raise ValueError(f"num_threads must be >= 0, got {self.num_threads}")
        if self.tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {self.tile_size}")


class Renderer:
    """Tile-based, multi-threaded renderer."""

    def __init__(self, settings: Optional[RenderSettings] = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, world: World, camera: Camera) -> Canvas:
        """Render the world as seen by the camera.

        Args:
            world: The scene to render
            camera: The camera to render from (its hsize/vsize set the image size)

        Returns:
            A Canvas holding one color per pixel
        """
        canvas = Canvas(camera.hsize, camera.vsize)

        tiles = self._generate_tiles(camera.hsize, camera.vsize)
        total_tiles = len(tiles)
        completed_tiles = [0]  # Use list for mutable in closure
        progress_lock = threading.Lock()

        def render_tile(tile: Tile) -> None:
            x0, y0, x1, y1 = tile
            for y in range(y0, y1):
                for x in range(x0, x1):
                    ray = camera.ray_for_pixel(x, y)
                    canvas.write_pixel(x, y, world.color_at(ray))

            with progress_lock:
                completed_tiles[0] += 1
                progress = completed_tiles[0] / total_tiles
            if self._progress_callback:
                self._progress_callback(progress)

        if self.settings.num_threads > 1:
            with ThreadPoolExecutor(max_workers=self.settings.num_threads) as executor:
                # list() re-raises any exception from a worker
                list(executor.map(render_tile, tiles))
        else:
            for tile in tiles:
                render_tile(tile)

        return canvas

    def _generate_tiles(self, width: int, height: int) -> List[Tile]:
        """Generate tiles for parallel rendering.

        Args:
            width: Image width
            height: Image height

        Returns:
            List of tiles as (x0, y0, x1, y1) tuples
        """
        tile_size = self.settings.tile_size
        tiles = []

        for y in range(0, height, tile_size):
            for x in range(0, width, tile_size):
                x1 = min(x + tile_size, width)
                y1 = min(y + tile_size, height)
                tiles.append((x, y, x1, y1))

        return tiles


def get_platform_info() -> dict:
    """Get information about the current platform.

    Returns:
        Dictionary with platform details
    """
    return {
        'system': platform.system(),
        'machine': platform.machine(),
        'python_version': platform.python_version(),
        'cpu_count': os.cpu_count(),
    }
