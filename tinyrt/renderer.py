"""Ray casting, shading and the frame buffer the image is drawn into."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .color import Color
from .geometry import Ray, contains_point, intersect, surface_normal
from .linalg import Vec
from .scene import WINDOW_HEIGHT, WINDOW_WIDTH, Cylinder, Disc, Scene

_SHADOW_BIAS = 0.001
_SHADOW_TOLERANCE = 0.1
_HIGHLIGHT = 0.2
_BLACK = Color(0.0, 0.0, 0.0, 0.0)


@dataclass
class Hit:
    """The nearest intersection of a ray; ``p`` is in the object's space."""

    p: Vec
    obj_id: int
    dist: float
    real_p: Optional[Vec] = None
    normal: Optional[Vec] = None
    light_dist: float = 0.0


class FrameBuffer:
    """A grid of packed 32-bit ARGB pixels."""

    def __init__(self, width: int = WINDOW_WIDTH, height: int = WINDOW_HEIGHT):
        if width <= 0 or height <= 0:
            raise ValueError("frame buffer dimensions must be positive")
        self._pixels = np.zeros((height, width), dtype=np.uint32)

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    def put(self, x: int, y: int, color: int, x_step: int = 1, y_step: int = 1) -> None:
        """Fill the ``x_step`` by ``y_step`` block at (x, y), clipped to the buffer."""
        x_end = min(x + x_step, self.width)
        y_end = min(y + y_step, self.height)
        if x >= x_end or y >= y_end:
            return
        if x < 0 or y < 0:
            raise IndexError("Points out of bounds")
        self._pixels[y:y_end, x:x_end] = color & 0xFFFFFFFF

    def get(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError("Points out of bounds")
        return int(self._pixels[y, x])

    def to_ppm(self) -> bytes:
        """Encode the buffer as a binary PPM image, dropping alpha."""
        px = self._pixels
        rgb = np.stack([(px >> 16) & 0xFF, (px >> 8) & 0xFF, px & 0xFF], axis=-1)
        header = f"P6\n{self.width} {self.height}\n255\n".encode("ascii")
        return header + rgb.astype(np.uint8).tobytes()


def check_enclosed_light(scene: Scene) -> bool:
    """Record and return whether the light sits inside some object."""
    scene.enclosed_light = any(
        contains_point(obj, scene.light.position) for obj in scene.objects
    )
    return scene.enclosed_light


def cast_ray(scene: Scene, row: int, col: int) -> Ray:
    """Primary ray from the camera through the centre of pixel (row, col)."""
    vp = scene.viewport
    if vp is None:
        raise ValueError("scene has no viewport")
    target = (
        vp.origin
        + vp.right * ((col + 0.5) * vp.px_space)
        + vp.up * (-(row + 0.5) * vp.px_space)
    )
    direction = (target - scene.camera.position).unit()
    return Ray(scene.camera.position, direction, Color(1.0, 1.0, 1.0, 0.0))


def find_hit(scene: Scene, ray: Ray, skip: int = -1) -> Optional[Hit]:
    """Nearest hit of ``ray`` among the scene objects, ignoring index ``skip``."""
    best: Optional[Hit] = None
    for index, obj in enumerate(scene.objects):
        if index == skip:
            continue
        local = ray.transformed(obj.inv_m) if obj.is_transformed else ray
        t = intersect(local, obj)
        if t is not None and (best is None or best.dist > t):
            best = Hit(p=local.at(t), obj_id=index, dist=t)
    return best


def phong(scene: Scene, hit: Hit, ray: Ray, cos: float) -> Color:
    """Ambient, diffuse and specular light at a hit; ``ray`` points at the light."""
    obj = scene.objects[hit.obj_id]
    amb = scene.ambient
    color = obj.color * ((obj.color * amb.color) * amb.ratio)
    if cos > 0:
        light = scene.light
        color = obj.color * (light.color * (light.ratio * cos)) + color
        cos2 = (-ray.direction).reflect(hit.normal).unit().dot(
            (scene.camera.position - ray.origin).unit()
        )
        if cos2 > 0:
            mat = obj.material
            color = light.color * (light.ratio * mat.k_s * cos2 ** mat.n_s) + color
    return color


def _with_selection(scene: Scene, hit_id: int, color: Color) -> Color:
    owner = hit_id
    if isinstance(scene.objects[hit_id].shape, Disc) and not scene.select_height:
        owner = scene.owner_index(hit_id)
    hit_is_body = isinstance(scene.objects[hit_id].shape, Cylinder)
    if owner == scene.selected_object and (not hit_is_body or not scene.select_width):
        color = color + Color(1.0, 1.0, 1.0, 0.0) * _HIGHLIGHT
    return color


def shade(scene: Scene, hit: Hit, ray: Ray) -> Color:
    """Colour seen along ``ray`` at ``hit``, with shadows and selection highlight."""
    obj = scene.objects[hit.obj_id]
    hit.real_p = obj.m.apply_point(hit.p) if obj.is_transformed else hit.p
    hit.normal = surface_normal(obj, hit.p, hit.real_p, scene.camera.position)
    origin = hit.real_p + hit.normal * _SHADOW_BIAS
    to_light = scene.light.position - origin
    hit.light_dist = to_light.length()
    shadow_ray = Ray(origin, to_light / hit.light_dist, ray.color)
    cos = 0.0
    if not scene.enclosed_light:
        blocker = find_hit(scene, shadow_ray, hit.obj_id)
        if blocker is None or blocker.dist > hit.light_dist + _SHADOW_TOLERANCE:
            cos = shadow_ray.direction.dot(hit.normal)
    color = phong(scene, hit, shadow_ray, cos)
    return _with_selection(scene, hit.obj_id, color)


def resolution_steps(
    res: int, width: int = WINDOW_WIDTH, height: int = WINDOW_HEIGHT
) -> Tuple[int, int]:
    """Pixel block size for a resolution given as a percentage."""
    cols = width * res // 100
    rows = height * res // 100
    if cols <= 0 or rows <= 0:
        raise ValueError(f"resolution {res}% is too low")
    x_step, y_step = width // cols, height // rows
    if x_step <= 0 or y_step <= 0:
        raise ValueError(f"resolution {res}% is too high")
    return x_step, y_step


def render(scene: Scene, framebuffer: FrameBuffer, res: int = 100) -> FrameBuffer:
    """Trace the scene into ``framebuffer`` at ``res`` percent resolution."""
    if scene.viewport is None:
        scene.create_viewport()
    check_enclosed_light(scene)
    x_step, y_step = resolution_steps(res, framebuffer.width, framebuffer.height)
    for row in range(0, framebuffer.height, y_step):
        for col in range(0, framebuffer.width, x_step):
            ray = cast_ray(scene, row, col)
            hit = find_hit(scene, ray)
            color = shade(scene, hit, ray) if hit is not None else _BLACK
            framebuffer.put(col, row, color.to_argb(), x_step, y_step)
    return framebuffer