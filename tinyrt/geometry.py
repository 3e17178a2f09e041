"""Ray intersection, point containment and surface normals for scene shapes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Union

from .color import Color
from .linalg import Matrix4, Vec
from .scene import Cylinder, Disc, Plane, SceneObject, Shape, Sphere


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point, a direction and the colour it carries."""

    origin: Vec
    direction: Vec
    color: Color = field(default_factory=lambda: Color(1.0, 1.0, 1.0, 0.0))

    def transformed(self, m: Matrix4) -> "Ray":
        """Return the ray with its origin and direction mapped through ``m``."""
        return Ray(m.apply_point(self.origin), m.apply_vector(self.direction), self.color)

    def at(self, t: float) -> Vec:
        return self.origin + self.direction * t


def _shape_of(obj: Union[SceneObject, Shape]) -> Shape:
    return obj.shape if isinstance(obj, SceneObject) else obj


def _hit_sphere(ray: Ray, sph: Sphere) -> Optional[float]:
    v2 = sph.center - ray.origin
    a = ray.direction.dot(ray.direction)
    h = ray.direction.dot(v2)
    c = v2.dot(v2) - sph.radius ** 2
    root = h * h - a * c
    if root < 0 or a == 0:
        return None
    s = math.sqrt(root)
    near = (h - s) / a
    if near > 0:
        return near
    far = (h + s) / a
    if root > 0 and far > 0:
        return far
    return None


def _hit_plane(ray: Ray, pl: Plane) -> Optional[float]:
    cos_theta = pl.normal.dot(ray.direction)
    if cos_theta == 0:
        return None
    dist = pl.normal.dot(pl.point - ray.origin) / cos_theta
    return dist if dist > 0 else None


def _hit_cylinder(ray: Ray, cyl: Cylinder) -> Optional[float]:
    axis = cyl.axis
    d = ray.direction
    if axis.dot(d) == 0:
        return None
    v2 = cyl.base - ray.origin
    dxa = d.cross(axis)
    dd = dxa.dot(dxa)
    root = dd * cyl.radius ** 2 - v2.dot(dxa) ** 2
    if dd == 0 or root < 0:
        return None
    mid = dxa.dot(v2.cross(axis))
    s = math.sqrt(root)
    dist = (mid - s) / dd
    t = axis.dot(d * dist - v2)
    if dist < 0 or t > cyl.height or t < 0:
        dist = (mid + s) / dd
        t = axis.dot(d * dist - v2)
    if 0 <= t <= cyl.height and dist > 0:
        return dist
    return None


def _hit_disc(ray: Ray, cir: Disc) -> Optional[float]:
    denom = cir.normal.dot(ray.direction)
    if denom == 0:
        return None
    dist = cir.normal.dot(cir.center - ray.origin) / denom
    pc = ray.at(dist) - cir.center
    if pc.dot(pc) < cir.radius ** 2 and dist > 0:
        return dist
    return None


def intersect(ray: Ray, obj: Union[SceneObject, Shape]) -> Optional[float]:
    """Positive distance along ``ray`` to the shape, or None on a miss.

    The ray must already be expressed in the object's own space.
    """
    shape = _shape_of(obj)
    if isinstance(shape, Sphere):
        return _hit_sphere(ray, shape)
    if isinstance(shape, Plane):
        return _hit_plane(ray, shape)
    if isinstance(shape, Cylinder):
        return _hit_cylinder(ray, shape)
    if isinstance(shape, Disc):
        return _hit_disc(ray, shape)
    raise TypeError(f"unknown shape {type(shape).__name__}")


def _inside_cylinder(p: Vec, cyl: Cylinder) -> bool:
    b_p = p - cyl.base
    cos = b_p.unit().dot(cyl.axis)
    dist = b_p.length()
    if cos * dist > cyl.height:
        return False
    sin = math.sqrt(max(0.0, 1.0 - cos * cos))
    return sin * dist <= cyl.radius


def contains_point(obj: SceneObject, p: Vec) -> bool:
    """True when the world-space point ``p`` lies inside a sphere or cylinder."""
    if obj.is_transformed:
        p = obj.inv_m.apply_point(p)
    shape = obj.shape
    if isinstance(shape, Sphere):
        return (p - shape.center).length() <= shape.radius
    if isinstance(shape, Cylinder):
        return _inside_cylinder(p, shape)
    return False


def _to_world(obj: SceneObject, n: Vec) -> Vec:
    if obj.is_transformed:
        return obj.m.apply_vector(n).unit()
    return n


def surface_normal(obj: SceneObject, local_p: Vec, real_p: Vec, camera_pos: Vec) -> Vec:
    """Normal at a hit point; flat shapes get the side facing the camera.

    ``local_p`` is the hit point in object space, ``real_p`` in world space.
    """
    shape = obj.shape
    if isinstance(shape, Sphere):
        return _to_world(obj, (local_p - shape.center) / shape.radius)
    if isinstance(shape, Cylinder):
        tangent = (local_p - shape.base).cross(shape.axis)
        return _to_world(obj, shape.axis.cross(tangent).unit())
    if isinstance(shape, Plane):
        n = _to_world(obj, shape.normal)
        if (camera_pos - real_p).dot(n) < 0:
            n = -n
        return n
    if isinstance(shape, Disc):
        n = _to_world(obj, shape.normal)
        if (camera_pos - real_p).dot(n) < 0:
            n = -shape.normal
        return n
    raise TypeError(f"unknown shape {type(shape).__name__}")