"""Interactive edits of a scene: moving, rotating and scaling its elements."""

from __future__ import annotations

from typing import Sequence, Tuple

from .linalg import Matrix4, Vec
from .scene import Cylinder, Disc, Light, Plane, Scene, SceneObject, Shape, Sphere, Viewport


def _object(objects: Sequence[SceneObject], index: int) -> SceneObject:
    if not 0 <= index < len(objects):
        raise IndexError(f"no object at index {index}")
    return objects[index]


def _cylinder_parts(
    objects: Sequence[SceneObject], index: int
) -> Tuple[SceneObject, SceneObject, SceneObject]:
    """The cylinder body at ``index`` with its bottom and top caps."""
    body = _object(objects, index)
    if not isinstance(body.shape, Cylinder):
        raise ValueError(f"object at index {index} is not a cylinder")
    if index + 2 >= len(objects):
        raise ValueError(f"cylinder at index {index} is missing its caps")
    bottom, top = objects[index + 1], objects[index + 2]
    if not (isinstance(bottom.shape, Disc) and isinstance(top.shape, Disc)):
        raise ValueError(f"cylinder at index {index} is missing its caps")
    return body, bottom, top


def _caps(objects: Sequence[SceneObject], index: int) -> Tuple[SceneObject, ...]:
    if isinstance(objects[index].shape, Cylinder):
        return _cylinder_parts(objects, index)[1:]
    return ()


def _anchor(shape: Shape) -> Vec:
    if isinstance(shape, Sphere):
        return shape.center
    if isinstance(shape, Plane):
        return shape.point
    if isinstance(shape, (Cylinder, Disc)):
        return shape.center
    raise TypeError(f"unknown shape {type(shape).__name__}")


def _world(obj: SceneObject, v: Vec) -> Vec:
    """Map ``v`` through the object's transform, honouring its own ``w``."""
    return obj.m.apply_vector(v) if obj.is_transformed else v


def _about(ref: Vec, m: Matrix4) -> Matrix4:
    """``m`` applied with ``ref`` as the fixed point."""
    return Matrix4.translation(ref) @ m @ Matrix4.translation(-ref)


def _viewport(scene: Scene) -> Viewport:
    return scene.viewport if scene.viewport is not None else scene.create_viewport()


def translate_object(objects: Sequence[SceneObject], index: int, t: Vec) -> None:
    """Move the object at ``index`` (and a cylinder's caps) by ``t``."""
    obj = _object(objects, index)
    t_m = Matrix4.translation(t)
    obj.transform(t_m)
    for cap in _caps(objects, index):
        cap.transform(t_m)


def rotate_object(
    objects: Sequence[SceneObject], index: int, angle: float, axis: Vec
) -> None:
    """Rotate the object at ``index`` about ``axis`` through its reference point."""
    obj = _object(objects, index)
    ref = _world(obj, _anchor(obj.shape))
    rot_m = _about(ref, Matrix4.rotation(angle, axis))
    obj.transform(rot_m)
    for cap in _caps(objects, index):
        cap.transform(rot_m)


def scale_object(objects: Sequence[SceneObject], index: int, factor: float) -> None:
    """Scale the object at ``index`` uniformly about its centre; planes are left alone."""
    obj = _object(objects, index)
    if isinstance(obj.shape, Plane):
        return
    ref = _world(obj, _anchor(obj.shape))
    sc_m = Matrix4.scaling(factor, factor, factor)
    obj.transform(_about(ref, sc_m))
    if isinstance(obj.shape, Cylinder):
        _, bottom, top = _cylinder_parts(objects, index)
        cyl = obj.shape
        ends = (cyl.base, cyl.base + cyl.axis * cyl.height)
        for cap, end in zip((bottom, top), ends):
            ref_cap = _world(cap, cap.shape.center)
            back = _world(obj, end)
            cap.transform(Matrix4.translation(back) @ sc_m @ Matrix4.translation(-ref_cap))


def scale_cylinder_height(objects: Sequence[SceneObject], index: int, s: float) -> None:
    """Scale a cylinder's height by ``s`` keeping its centre; the caps follow."""
    body, bottom, top = _cylinder_parts(objects, index)
    cyl = body.shape
    reloc = cyl.axis * ((1 - s) * cyl.height / 2)
    cyl.height = s * cyl.height
    cyl.base = cyl.base + reloc
    bottom.shape.center = bottom.shape.center + reloc
    top.shape.center = top.shape.center - reloc


def scale_cylinder_width(objects: Sequence[SceneObject], index: int, s: float) -> None:
    """Scale a cylinder's radius by ``s``; the caps follow."""
    body, bottom, top = _cylinder_parts(objects, index)
    body.shape.radius = s * body.shape.radius
    bottom.shape.radius = body.shape.radius
    top.shape.radius = body.shape.radius


def translate_camera(scene: Scene, t: Vec) -> None:
    """Move the camera and its viewport by ``t``."""
    vp = _viewport(scene)
    scene.camera.position = scene.camera.position + t
    vp.origin = vp.origin + t


def rotate_camera(scene: Scene, angle: float, axis: Vec) -> None:
    """Turn the camera and its viewport about ``axis`` through the camera position."""
    vp = _viewport(scene)
    cam = scene.camera
    rot = Matrix4.rotation(angle, axis)
    cam.direction = rot.apply_vector(cam.direction)
    vp.right = rot.apply_vector(vp.right).unit()
    vp.up = rot.apply_vector(vp.up).unit()
    vp.front = rot.apply_vector(vp.front).unit()
    offset = rot.apply_vector(vp.origin - cam.position)
    vp.origin = cam.position + offset


def roll_viewport(scene: Scene, angle: float, axis: Vec) -> None:
    """Rotate the viewport about ``axis`` through the camera, leaving the camera as is."""
    vp = _viewport(scene)
    ref = scene.camera.position
    rot = Matrix4.rotation(angle, axis)
    vp.right = rot.apply_vector(vp.right)
    vp.up = rot.apply_vector(vp.up)
    vp.origin = _about(ref, rot).apply_point(vp.origin)


def translate_light(light: Light, t: Vec) -> None:
    """Move the light by ``t``."""
    light.position = Matrix4.translation(t).apply_point(light.position)


def scale_ratio(ratio: float, factor: float) -> float:
    """Return ``ratio * factor`` clamped to [0, 1]."""
    value = ratio * factor
    if value < 0:
        value = 0.0
    if value > 1:
        value = 1.0
    return value