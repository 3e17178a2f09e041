"""Scene description: lights, camera, viewport, materials and objects."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from .color import Color
from .linalg import Matrix4, Vec

WINDOW_WIDTH = 1920
WINDOW_HEIGHT = 1080

_WORLD_UP = Vec.direction(0.0, 1.0, 0.0)
_LEADING_INT = re.compile(r"[\t\n\v\f\r ]*([+-]?\d+)")


class MaterialType(Enum):
    """Surface finish of an object."""

    MATTE = 0
    PLASTIC = 1
    METAL = 2


_COEFFICIENTS = {
    MaterialType.METAL: (0.9, 200.0),
    MaterialType.PLASTIC: (0.5, 40.0),
    MaterialType.MATTE: (0.1, 1.0),
}


@dataclass(frozen=True)
class Material:
    """Specular reflection coefficient ``k_s`` and shininess exponent ``n_s``."""

    kind: MaterialType
    k_s: float
    n_s: float

    @classmethod
    def of(cls, kind: MaterialType) -> "Material":
        k_s, n_s = _COEFFICIENTS[kind]
        return cls(kind, k_s, n_s)

    @classmethod
    def from_token(cls, token: Optional[str]) -> "Material":
        """Read an optional material code (0, 1 or 2); anything else is matte."""
        if token is None:
            return cls.of(MaterialType.MATTE)
        match = _LEADING_INT.match(token)
        code = int(match.group(1)) if match else 0
        try:
            kind = MaterialType(code)
        except ValueError:
            kind = MaterialType.MATTE
        return cls.of(kind)


@dataclass
class Sphere:
    center: Vec
    radius: float


@dataclass
class Plane:
    point: Vec
    normal: Vec


@dataclass
class Cylinder:
    """A finite open cylinder; ``base`` is the centre of its bottom end."""

    center: Vec
    base: Vec
    axis: Vec
    radius: float
    height: float


@dataclass
class Disc:
    """A flat circular cap closing one end of a cylinder."""

    center: Vec
    normal: Vec
    radius: float


Shape = Union[Sphere, Plane, Cylinder, Disc]


@dataclass
class SceneObject:
    """A shape with its colour, material and optional object-to-world transform."""

    shape: Shape
    color: Color
    material: Material = field(default_factory=lambda: Material.of(MaterialType.MATTE))
    m: Optional[Matrix4] = None
    inv_m: Optional[Matrix4] = None

    @property
    def is_transformed(self) -> bool:
        return self.m is not None

    def transform(self, m: Matrix4) -> None:
        """Apply ``m`` after the current transform and refresh the inverse."""
        self.m = m if self.m is None else m @ self.m
        self.inv_m = self.m.inverse()


@dataclass
class AmbientLight:
    ratio: float = 0.0
    color: Color = field(default_factory=lambda: Color(0.0, 0.0, 0.0))


@dataclass
class Camera:
    position: Vec = field(default_factory=lambda: Vec.point(0.0, 0.0, 0.0))
    direction: Vec = field(default_factory=lambda: Vec.direction(0.0, 0.0, 1.0))
    fov: float = 0.0


@dataclass
class Light:
    position: Vec = field(default_factory=lambda: Vec.point(0.0, 0.0, 0.0))
    ratio: float = 0.0
    color: Color = field(default_factory=lambda: Color(0.0, 0.0, 0.0))
    stored_color: Color = field(default_factory=lambda: Color(0.0, 0.0, 0.0))


@dataclass
class Viewport:
    """The image plane one unit in front of the camera; ``origin`` is its top-left corner."""

    front: Vec
    right: Vec
    up: Vec
    origin: Vec
    px_space: float

    @classmethod
    def from_camera(cls, camera: Camera) -> "Viewport":
        right = camera.direction.cross(_WORLD_UP).unit()
        up = right.cross(camera.direction).unit()
        front = camera.direction.unit()
        half_w = math.tan(camera.fov / 2.0)
        half_h = WINDOW_HEIGHT * half_w / WINDOW_WIDTH
        px_space = 2.0 * half_w / WINDOW_WIDTH
        origin = camera.position + front + right * (-half_w) + up * half_h
        return cls(front, right, up, origin, px_space)


@dataclass
class Scene:
    ambient: AmbientLight = field(default_factory=AmbientLight)
    camera: Camera = field(default_factory=Camera)
    light: Light = field(default_factory=Light)
    objects: List[SceneObject] = field(default_factory=list)
    viewport: Optional[Viewport] = None
    selected_object: int = -1
    light_selected: bool = False
    enclosed_light: bool = False
    select_width: bool = False
    select_height: bool = False

    def create_viewport(self) -> Viewport:
        self.viewport = Viewport.from_camera(self.camera)
        return self.viewport

    def owner_index(self, index: int) -> int:
        """Index of the object that owns ``index``: a cap belongs to its cylinder."""
        owner = index
        while isinstance(self.objects[owner].shape, Disc):
            owner -= 1
            if owner < 0:
                raise ValueError(f"cap at index {index} has no cylinder")
        return owner