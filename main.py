#!/usr/bin/env python3
"""
PhongTrace - A Python Ray Tracer

Main entry point for rendering scenes and animations.
"""

import argparse
import math
import sys
import time
from pathlib import Path

from phongtrace.animator import Animator, Frame
from phongtrace.camera import Camera
from phongtrace.color import Color
from phongtrace.lights import PointLight
from phongtrace.materials import Phong
from phongtrace.matrix import Matrix, Rotation
from phongtrace.renderer import Renderer, RenderSettings, get_platform_info
from phongtrace.scene_parser import SceneParseError, load_scene
from phongtrace.shapes import Sphere
from phongtrace.tuples import Point, Vector
from phongtrace.world import World


def create_demo_world(light_angle: float = 0.0, left_size: float = 0.33, shadows: bool = False) -> World:
    """Create the demo room: three spheres in a corner made of squashed spheres.

    Args:
        light_angle: Rotation of the light about the y axis, in radians
        left_size: Radius of the small sphere on the left
        shadows: Whether to cast shadow rays
    """
    wall_material = Phong(color=Color(0.5, 0.45, 0.45), specular=0.0)
    flat = Matrix.scale(10.0, 0.01, 10.0)

    floor = Sphere(flat, wall_material)
    left_wall = Sphere(
        Matrix.translate(0.0, 0.0, 5.0)
        * Matrix.rotate(Rotation.Y, -math.pi / 4)
        * Matrix.rotate(Rotation.X, math.pi / 2)
        * flat,
        wall_material
    )
    right_wall = Sphere(
        Matrix.translate(0.0, 0.0, 5.0)
        * Matrix.rotate(Rotation.Y, math.pi / 4)
        * Matrix.rotate(Rotation.X, math.pi / 2)
        * flat,
        wall_material
    )

    middle = Sphere(
        Matrix.translate(-0.5, 1.0, 0.5),
        Phong(color=Color(0.1, 1.0, 0.5), diffuse=0.7, specular=0.3)
    )
    right = Sphere(
        Matrix.translate(1.5, 0.5, -0.5) * Matrix.scale(0.5, 0.5, 0.5),
        Phong(color=Color(0.5, 1.0, 0.1), diffuse=0.7, specular=0.3)
    )
    left = Sphere(
        Matrix.translate(-1.5, left_size, -0.75) * Matrix.scale(left_size, left_size, left_size),
        Phong(color=Color(1.0, 0.8, 0.1), diffuse=0.7, specular=0.3)
    )

    light_position = Matrix.rotate(Rotation.Y, light_angle) * Point(-10.0, 10.0, -10.0)
    light = PointLight(light_position, Color(1.0, 1.0, 1.0))

    return World([floor, left_wall, right_wall, middle, right, left], [light], shadows=shadows)


def create_demo_camera(width: int, height: int) -> Camera:
    return Camera(width, height, math.pi / 3).look_at_from_position(
        Point(0.0, 1.5, -5.0),
        Point(0.0, 1.0, 0.0),
        Vector(0.0, 1.0, 0.0)
    )


def make_progress_callback():
    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    return progress_callback


def render_animation(args, settings: RenderSettings) -> None:
    """Render the demo room with an orbiting light, one file per frame."""
    output_path = Path(args.output)
    output_dir = output_path.parent
    output_dir.mkdir(parents=True, exist_ok=True)
    camera = create_demo_camera(args.width, args.height)

    def render_frame(frame: Frame) -> None:
        light_angle = frame.linear_scale().with_breakpoints([0.0, 2 * math.pi]).scale(frame.current)
        left_size = frame.linear_scale().with_breakpoints([0.33, 0.5, 0.33]).scale(frame.current)
        world = create_demo_world(light_angle, left_size, shadows=args.shadows)

        renderer = Renderer(settings)
        canvas = renderer.render(world, camera)

        filename = frame.filename(str(output_dir), output_path.stem, output_path.suffix)
        print(f"Saving {filename} ({frame.current + 1}/{frame.count})")
        canvas.save(filename)

    Animator(args.frames).animate(render_frame)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='PhongTrace - A Python Ray Tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --output render.png
  python main.py --width 1920 --height 1080 --shadows --output hd_render.png
  python main.py --scene scenes/room.yaml --output room.ppm
  python main.py --frames 125 --width 320 --height 180 --output frames/room.png
        '''
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument('--scene', type=str, default=None,
                        help='Scene file (YAML or JSON)')
    source.add_argument('--demo', action='store_true',
                        help='Render the built-in demo room (default)')
    parser.add_argument('--width', type=int, default=None,
                        help='Image width (default: 800, or the scene camera width)')
    parser.add_argument('--height', type=int, default=None,
                        help='Image height (default: 450, or the scene camera height)')
    parser.add_argument('--threads', type=int, default=None, help='Number of threads (0=auto)')
    parser.add_argument('--shadows', action='store_true', help='Cast shadow rays')
    parser.add_argument('--frames', type=int, default=0,
                        help='Render an animation of the demo room with this many frames')
    parser.add_argument('--output', type=str, default='output/render.png',
                        help='Output filename (.ppm, .png, ...)')
    parser.add_argument('--info', action='store_true', help='Show platform info and exit')

    args = parser.parse_args()

    if args.info:
        info = get_platform_info()
        print("PhongTrace Platform Info:")
        print(f"  System: {info['system']}")
        print(f"  Machine: {info['machine']}")
        print(f"  Python: {info['python_version']}")
        print(f"  CPU Cores: {info['cpu_count']}")
        return 0

    print("=" * 60)
    print("PhongTrace Ray Tracer")
    print("=" * 60)

    if args.scene:
        print(f"\nLoading scene: {args.scene}")
        try:
            world, camera, settings = load_scene(args.scene)
        except SceneParseError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        if args.width or args.height:
            camera = Camera(
                args.width or camera.hsize,
                args.height or camera.vsize,
                camera.field_of_view,
                camera.transform
            )
        if args.shadows:
            world.shadows = True
    else:
        args.width = args.width or 800
        args.height = args.height or 450
        settings = RenderSettings()
        world = create_demo_world(shadows=args.shadows)
        camera = create_demo_camera(args.width, args.height)

    if args.threads is not None:
        settings = RenderSettings(num_threads=args.threads, tile_size=settings.tile_size)

    print(f"\nRender Settings:")
    print(f"  Resolution: {camera.hsize}x{camera.vsize}")
    print(f"  Threads: {settings.num_threads}")
    print(f"  Shadows: {world.shadows}")
    print(f"  Bodies in scene: {len(world.bodies)}")
    print(f"  Lights in scene: {len(world.lights)}")

    if args.frames > 0:
        if args.scene:
            print("Error: --frames only animates the demo room", file=sys.stderr)
            return 1
        start_time = time.perf_counter()
        try:
            render_animation(args, settings)
        except (ValueError, OSError) as e:
            print(f"\nError: cannot save frame: {e}", file=sys.stderr)
            return 1
        print(f"\nAnimation completed in {time.perf_counter() - start_time:.2f} seconds")
        return 0

    renderer = Renderer(settings)
    renderer.set_progress_callback(make_progress_callback())

    print("\nRendering...")
    start_time = time.perf_counter()

    canvas = renderer.render(world, camera)

    elapsed = time.perf_counter() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")
    if elapsed > 0:
        print(f"  Rays per second: {(camera.hsize * camera.vsize) / elapsed:.0f}")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    print(f"\nSaving to: {args.output}")
    try:
        canvas.save(output_path)
    except (ValueError, OSError) as e:
        print(f"Error: cannot save {args.output}: {e}", file=sys.stderr)
        return 1

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
