"""Tests for the renderer."""

import math
import os
import pytest

from phongtrace.camera import Camera, view_transform
from phongtrace.color import Color
from phongtrace.lights import PointLight
from phongtrace.materials import Phong
from phongtrace.renderer import Renderer, RenderSettings, get_platform_info
from phongtrace.shapes import Sphere
from phongtrace.tuples import Point, Vector
from phongtrace.world import World


def simple_scene(width=16, height=12):
    world = World(
        [Sphere(material=Phong(color=Color(1, 0.2, 1)))],
        [PointLight(Point(-10, 10, -10), Color(1, 1, 1))]
    )
    camera = Camera(width, height, math.pi / 3, view_transform(
        Point(0, 0, -5), Point(0, 0, 0), Vector(0, 1, 0)
    ))
    return world, camera


class TestRenderSettings:
    """Test RenderSettings."""

    def test_auto_threads(self):
        settings = RenderSettings()
        assert settings.num_threads == (os.cpu_count() or 4)
        assert settings.tile_size == 32

    def test_explicit_threads(self):
        assert RenderSettings(num_threads=3).num_threads == 3

    def test_negative_threads(self):
        with pytest.raises(ValueError):
            RenderSettings(num_threads=-1)

    def test_invalid_tile_size(self):
        with pytest.raises(ValueError):
            RenderSettings(tile_size=0)


class TestRenderer:
    """Test Renderer.render()."""

    def test_canvas_matches_camera(self):
        world, camera = simple_scene(16, 12)
        canvas = Renderer(RenderSettings(num_threads=1)).render(world, camera)
        assert canvas.width == 16
        assert canvas.height == 12

    def test_center_hits_sphere(self):
        world, camera = simple_scene(16, 12)
        canvas = Renderer(RenderSettings(num_threads=1)).render(world, camera)
        assert canvas.read_pixel(8, 6) != Color(0, 0, 0)
        assert canvas.read_pixel(0, 0) == Color(0, 0, 0)

    def test_threaded_matches_serial(self):
        world, camera = simple_scene(20, 15)
        serial = Renderer(RenderSettings(num_threads=1, tile_size=4)).render(world, camera)
        threaded = Renderer(RenderSettings(num_threads=4, tile_size=4)).render(world, camera)
        assert (serial.to_array() == threaded.to_array()).all()

    def test_every_pixel_matches_color_at(self):
        world, camera = simple_scene(8, 6)
        canvas = Renderer(RenderSettings(num_threads=2, tile_size=3)).render(world, camera)
        for y in range(camera.vsize):
            for x in range(camera.hsize):
                assert canvas.read_pixel(x, y) == world.color_at(camera.ray_for_pixel(x, y))

    def test_progress_callback(self):
        world, camera = simple_scene(10, 10)
        renderer = Renderer(RenderSettings(num_threads=2, tile_size=4))
        reports = []
        renderer.set_progress_callback(reports.append)
        renderer.render(world, camera)
        # 3 x 3 tiles
        assert len(reports) == 9
        assert max(reports) == pytest.approx(1.0)

    def test_generate_tiles_cover_image(self):
        renderer = Renderer(RenderSettings(num_threads=1, tile_size=4))
        tiles = renderer._generate_tiles(10, 6)
        covered = set()
        for x0, y0, x1, y1 in tiles:
            for y in range(y0, y1):
                for x in range(x0, x1):
                    assert (x, y) not in covered
                    covered.add((x, y))
        assert len(covered) == 60


class TestPlatformInfo:
    """Test get_platform_info()."""

    def test_keys(self):
        info = get_platform_info()
        for key in ('system', 'machine', 'python_version', 'cpu_count'):
            assert key in info
