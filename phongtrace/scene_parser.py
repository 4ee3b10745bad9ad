"""
Scene description language parser.

Supports a YAML-based (or JSON) scene description format with:
- Camera configuration
- Render settings
- Materials library
- Objects (spheres with transforms and materials)
- Lights

Example scene file:
```yaml
camera:
  width: 400
  height: 200
  field_of_view: 60        # degrees
  from: [0, 1.5, -5]
  to: [0, 1, 0]
  up: [0, 1, 0]

render:
  threads: 0               # 0 = one per CPU
  tile_size: 32
  shadows: true

materials:
  green:
    type: phong
    color: [0.1, 1, 0.5]
    diffuse: 0.7
    specular: 0.3

objects:
  - type: sphere
    material: green
    transform:             # applied top to bottom
      - scale: 0.5
      - translate: [1.5, 0.5, -0.5]

lights:
  - type: point
    position: [-10, 10, -10]
    intensity: [1, 1, 1]
```
"""

from __future__ import annotations
import json
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Type, Union

from .camera import Camera, view_transform
from .color import Color
from .lights import PointLight
from .materials import Material, Phong
from .matrix import Matrix, NotInvertibleError, Rotation
from .renderer import RenderSettings
from .shapes import Shape, Sphere
from .tuples import Point, Vector
from .world import World

# Every body kind a scene file can name
SHAPE_TYPES: Dict[str, Type[Shape]] = {
    'sphere': Sphere,
}

SceneTuple = Tuple[World, Camera, RenderSettings]


class SceneParseError(Exception):
    """Error during scene parsing."""
    pass


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}
        self.bodies: List[Shape] = []
        self.lights: List[PointLight] = []
        self.camera: Optional[Camera] = None
        self.settings: Optional[RenderSettings] = None
        self.shadows = False

    def parse_file(self, filepath: Union[str, Path]) -> SceneTuple:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (world, camera, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()

        if path.suffix in ('.yaml', '.yml'):
            try:
                import yaml
            except ImportError:
                raise SceneParseError("PyYAML not installed. Install with: pip install pyyaml")
            try:
                data = yaml.safe_load(content)
            except yaml.YAMLError as e:
                raise SceneParseError(f"Invalid YAML in {filepath}: {e}") from e
        elif path.suffix == '.json':
            try:
                data = json.loads(content)
            except json.JSONDecodeError as e:
                raise SceneParseError(f"Invalid JSON in {filepath}: {e}") from e
        else:
            raise SceneParseError(f"Unsupported scene file type: {path.suffix!r}")

        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> SceneTuple:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (world, camera, settings)
        """
        if not isinstance(data, dict):
            raise SceneParseError(f"Scene must be a mapping, got {type(data).__name__}")

        # Each call starts from an empty scene
        self.materials = {}
        self.bodies = []
        self.lights = []
        self.camera = None
        self.settings = None
        self.shadows = False

        # Parse materials first (objects reference them)
        if 'materials' in data:
            self._parse_materials(data['materials'])

        if 'objects' in data:
            self._parse_objects(data['objects'])

        if 'lights' in data:
            self._parse_lights(data['lights'])
        if not self.lights:
            print("Warning: scene has no lights, every body will render black")

        # Render settings carry the shadow flag the world needs
        self._parse_settings(data.get('render', {}))

        self._parse_camera(data.get('camera', {}))

        world = World(self.bodies, self.lights, shadows=self.shadows)
        return world, self.camera, self.settings

    def _parse_float(self, data: Any, what: str) -> float:
        try:
            return float(data)
        except (TypeError, ValueError):
            raise SceneParseError(f"{what} must be a number, got {data!r}")

    def _parse_int(self, data: Any, what: str) -> int:
        """Parse a whole number; floats are accepted only if integral."""
        if isinstance(data, bool):
            raise SceneParseError(f"{what} must be an integer, got {data!r}")
        if isinstance(data, int):
            return data
        value = self._parse_float(data, what)
        if not value.is_integer():
            raise SceneParseError(f"{what} must be an integer, got {data!r}")
        return int(value)

    def _parse_bool(self, data: Any, what: str) -> bool:
        if not isinstance(data, bool):
            raise SceneParseError(f"{what} must be true or false, got {data!r}")
        return data

    def _parse_triple(self, data: Any, what: str) -> Tuple[float, float, float]:
        """Parse three numbers from a list or an x/y/z mapping."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"{what} must have 3 components, got {len(data)}")
            return tuple(self._parse_float(v, what) for v in data)
        elif isinstance(data, dict):
            return (
                self._parse_float(data.get('x', 0), what),
                self._parse_float(data.get('y', 0), what),
                self._parse_float(data.get('z', 0), what)
            )
        else:
            raise SceneParseError(f"Cannot parse {what} from: {data!r}")

    def _parse_point(self, data: Any) -> Point:
        return Point(*self._parse_triple(data, 'Point'))

    def _parse_vector(self, data: Any) -> Vector:
        return Vector(*self._parse_triple(data, 'Vector'))

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from various formats."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Color must have 3 components, got {len(data)}")
            return Color(*(self._parse_float(v, 'Color') for v in data))
        elif isinstance(data, dict):
            return Color(
                self._parse_float(data.get('r', 0), 'Color'),
                self._parse_float(data.get('g', 0), 'Color'),
                self._parse_float(data.get('b', 0), 'Color')
            )
        elif isinstance(data, str):
            # Handle hex colors
            if data.startswith('#') and len(data) == 7:
                try:
                    r = int(data[1:3], 16) / 255.0
                    g = int(data[3:5], 16) / 255.0
                    b = int(data[5:7], 16) / 255.0
                except ValueError:
                    raise SceneParseError(f"Cannot parse color from string: {data}")
                return Color(r, g, b)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        else:
            raise SceneParseError(f"Cannot parse Color from: {data!r}")

    def _parse_material(self, mat_data: Dict[str, Any]) -> Material:
        if not isinstance(mat_data, dict):
            raise SceneParseError(f"Material must be a mapping, got {mat_data!r}")
        mat_type = str(mat_data.get('type', 'phong')).lower()

        if mat_type == 'phong':
            defaults = Phong()
            return Phong(
                color=self._parse_color(mat_data['color']) if 'color' in mat_data else defaults.color,
                ambient=self._parse_float(mat_data.get('ambient', defaults.ambient), 'ambient'),
                diffuse=self._parse_float(mat_data.get('diffuse', defaults.diffuse), 'diffuse'),
                specular=self._parse_float(mat_data.get('specular', defaults.specular), 'specular'),
                shininess=self._parse_float(mat_data.get('shininess', defaults.shininess), 'shininess')
            )

        raise SceneParseError(f"Unknown material type: {mat_type}")

    def _parse_materials(self, materials_data: Dict[str, Any]) -> None:
        """Parse materials section."""
        if not isinstance(materials_data, dict):
            raise SceneParseError("'materials' must be a mapping of name to material")
        for name, mat_data in materials_data.items():
            self.materials[name] = self._parse_material(mat_data)

    def _get_material(self, mat_ref: Any) -> Optional[Material]:
        """Get a material by name or inline definition."""
        if mat_ref is None:
            return None
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        elif isinstance(mat_ref, dict):
            return self._parse_material(mat_ref)
        else:
            raise SceneParseError(f"Invalid material reference: {mat_ref!r}")

    def _parse_transform(self, steps: Any) -> Matrix:
        """Compose a list of transform steps.

        Steps apply in the order listed, so the first entry acts on the
        object first: [scale, translate] gives translate * scale.
        """
        if steps is None:
            return Matrix.identity()
        if not isinstance(steps, list):
            raise SceneParseError(f"Transform must be a list of steps, got {steps!r}")

        transform = Matrix.identity()
        for step in steps:
            if not isinstance(step, dict) or len(step) != 1:
                raise SceneParseError(f"Transform step must have exactly one key, got {step!r}")
            (op, args), = step.items()
            transform = self._transform_step(op, args) * transform
        return transform

    def _transform_step(self, op: str, args: Any) -> Matrix:
        rotations: Dict[str, Rotation] = {
            'rotate_x': Rotation.X,
            'rotate_y': Rotation.Y,
            'rotate_z': Rotation.Z,
        }

        if op == 'translate':
            return Matrix.translate(*self._parse_triple(args, 'translate'))
        elif op == 'scale':
            if isinstance(args, (int, float)):
                factor = float(args)
                return Matrix.scale(factor, factor, factor)
            return Matrix.scale(*self._parse_triple(args, 'scale'))
        elif op in rotations:
            degrees = self._parse_float(args, op)
            return Matrix.rotate(rotations[op], math.radians(degrees))
        elif op == 'shear':
            if not isinstance(args, (list, tuple)) or len(args) != 6:
                raise SceneParseError(f"shear needs 6 coefficients, got {args!r}")
            return Matrix.shear(*(self._parse_float(v, 'shear') for v in args))
        else:
            raise SceneParseError(f"Unknown transform: {op}")

    def _parse_objects(self, objects_data: list) -> None:
        """Parse objects section."""
        if not isinstance(objects_data, list):
            raise SceneParseError("'objects' must be a list")
        for obj_data in objects_data:
            if not isinstance(obj_data, dict):
                raise SceneParseError(f"Object must be a mapping, got {obj_data!r}")
            obj_type = str(obj_data.get('type', 'sphere')).lower()
            if obj_type not in SHAPE_TYPES:
                raise SceneParseError(f"Unknown object type: {obj_type}")

            material = self._get_material(obj_data.get('material'))
            transform = self._parse_transform(obj_data.get('transform'))
            try:
                self.bodies.append(SHAPE_TYPES[obj_type](transform, material))
            except NotInvertibleError as e:
                raise SceneParseError(f"Object transform is not invertible: {e}") from e

    def _parse_lights(self, lights_data: list) -> None:
        """Parse lights section."""
        if not isinstance(lights_data, list):
            raise SceneParseError("'lights' must be a list")
        for light_data in lights_data:
            if not isinstance(light_data, dict):
                raise SceneParseError(f"Light must be a mapping, got {light_data!r}")
            light_type = str(light_data.get('type', 'point')).lower()

            if light_type == 'point':
                position = self._parse_point(light_data.get('position', [-10, 10, -10]))
                intensity = self._parse_color(light_data.get('intensity', [1, 1, 1]))
                self.lights.append(PointLight(position, intensity))
            else:
                raise SceneParseError(f"Unknown light type: {light_type}")

    def _parse_camera(self, camera_data: Dict[str, Any]) -> None:
        """Parse camera section."""
        if not isinstance(camera_data, dict):
            raise SceneParseError("'camera' must be a mapping")
        width = self._parse_int(camera_data.get('width', 400), 'width')
        height = self._parse_int(camera_data.get('height', 200), 'height')
        fov = self._parse_float(camera_data.get('field_of_view', 60), 'field_of_view')
        from_ = self._parse_point(camera_data.get('from', [0, 0, -5]))
        to = self._parse_point(camera_data.get('to', [0, 0, 0]))
        up = self._parse_vector(camera_data.get('up', [0, 1, 0]))

        try:
            self.camera = Camera(width, height, math.radians(fov), view_transform(from_, to, up))
        except ValueError as e:
            raise SceneParseError(f"Invalid camera: {e}") from e

    def _parse_settings(self, settings_data: Dict[str, Any]) -> None:
        """Parse render settings section."""
        if not isinstance(settings_data, dict):
            raise SceneParseError("'render' must be a mapping")
        self.shadows = self._parse_bool(settings_data.get('shadows', False), 'shadows')
        try:
            self.settings = RenderSettings(
                num_threads=self._parse_int(settings_data.get('threads', 0), 'threads'),
                tile_size=self._parse_int(settings_data.get('tile_size', 32), 'tile_size')
            )
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Invalid render settings: {e}") from e


def load_scene(filepath: Union[str, Path]) -> SceneTuple:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (world, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> SceneTuple:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        Tuple of (world, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_dict(data)
