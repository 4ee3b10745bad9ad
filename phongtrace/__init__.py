"""
PhongTrace - A Python Ray Tracer

A ray tracer built on homogeneous-coordinate transforms:
- Vector/Point/Matrix algebra with cofactor inversion
- Transformed unit spheres
- Phong illumination from point lights (optional hard shadows)
- Pinhole camera with look-at view transforms
- Multi-threaded tile rendering to PPM/PNG
- YAML/JSON scene files and animation helpers
"""

__version__ = "0.1.0"
__author__ = "PhongTrace Team"

from .utils import EPSILON, fuzzy_eq
from .tuples import Vector, Point, ZeroVectorError
from .color import Color
from .matrix import Matrix, Rotation, NotInvertibleError
from .ray import Ray
from .materials import Material, Phong, ShadowState
from .lights import PointLight
from .intersection import Intersection, Intersections, ComputedIntersection, Orientation
from .shapes import Shape, Sphere
from .camera import Camera, view_transform
from .world import World
from .canvas import Canvas
from .renderer import Renderer, RenderSettings, get_platform_info
from .animator import Animator, Frame, LinearScale
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
