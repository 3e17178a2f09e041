import math

import pytest

from tinyrt.edits import (
    roll_viewport,
    rotate_camera,
    rotate_object,
    scale_cylinder_height,
    scale_cylinder_width,
    scale_object,
    scale_ratio,
    translate_camera,
    translate_light,
    translate_object,
)
from tinyrt.linalg import Matrix4, Vec
from tinyrt.parser import parse_lines
from tinyrt.scene import Light, Viewport


def _close(a, b, tol=1e-9):
    return all(math.isclose(x, y, abs_tol=tol) for x, y in zip(a.xyz, b.xyz))


def _sphere_objects():
    return parse_lines(["sp 1,2,3 4 255,0,0"]).objects


def _cylinder_objects():
    return parse_lines(["cy 1,0,0 0,1,0 2 4 0,0,255"]).objects


def _camera_scene():
    scene = parse_lines(["C 0,0,0 0,0,1 70"])
    scene.create_viewport()
    return scene


def test_translate_sphere_moves_centre():
    objects = _sphere_objects()
    t = Vec.direction(1.0, -2.0, 0.5)
    translate_object(objects, 0, t)
    obj = objects[0]
    assert obj.m == Matrix4.translation(t)
    assert _close(obj.m.apply_point(obj.shape.center), obj.shape.center + t)
    assert (obj.inv_m @ obj.m).allclose(Matrix4.identity())


def test_translate_cylinder_moves_caps_too():
    objects = _cylinder_objects()
    t = Vec.direction(0.0, 3.0, 0.0)
    translate_object(objects, 0, t)
    assert objects[1].m == objects[0].m
    assert objects[2].m == objects[0].m


def test_translate_out_of_range():
    with pytest.raises(IndexError):
        translate_object(_sphere_objects(), 5, Vec.direction(1, 0, 0))


def test_rotate_sphere_keeps_centre_fixed():
    objects = _sphere_objects()
    rotate_object(objects, 0, 0.7, Vec.direction(0.0, 0.0, 1.0))
    obj = objects[0]
    moved = obj.m.apply_point(obj.shape.center)
    assert moved.xyz == pytest.approx((1.0, 2.0, 3.0), abs=1e-9)


def test_rotate_plane_keeps_point_fixed():
    objects = parse_lines(["pl 0,-1,2 0,1,0 255,255,0"]).objects
    rotate_object(objects, 0, 1.1, Vec.direction(1.0, 0.0, 0.0))
    plane = objects[0]
    moved = plane.m.apply_point(plane.shape.point)
    assert moved.xyz == pytest.approx((0.0, -1.0, 2.0), abs=1e-9)


def test_rotate_cylinder_round_trip_and_caps_follow():
    objects = _cylinder_objects()
    axis = Vec.direction(0.0, 0.0, 1.0)
    rotate_object(objects, 0, 0.4, axis)
    assert objects[1].m.allclose(objects[0].m)
    assert objects[2].m.allclose(objects[0].m)
    rotate_object(objects, 0, -0.4, axis)
    assert objects[0].m.allclose(Matrix4.identity())


def test_scale_sphere_about_centre():
    objects = _sphere_objects()
    scale_object(objects, 0, 1.5)
    obj = objects[0]
    c = obj.shape.center
    assert _close(obj.m.apply_point(c), c)
    moved = obj.m.apply_point(c + Vec.direction(1.0, 0.0, 0.0))
    assert (moved - c).length() == pytest.approx(1.5)


def test_scale_plane_is_ignored():
    objects = parse_lines(["pl 0,0,0 0,1,0 255,255,0"]).objects
    scale_object(objects, 0, 2.0)
    assert objects[0].m is None


def test_scale_cylinder_caps_land_on_ends():
    objects = _cylinder_objects()
    translate_object(objects, 0, Vec.direction(0.5, 0.0, -1.0))
    scale_object(objects, 0, 1.2)
    body, bottom, top = objects
    cyl = body.shape
    bottom_real = bottom.m.apply_point(bottom.shape.center)
    base_real = body.m.apply_point(cyl.base)
    assert bottom_real.xyz == pytest.approx(base_real.xyz, abs=1e-9)
    top_end = cyl.base + cyl.axis * cyl.height
    top_real = top.m.apply_point(top.shape.center)
    end_real = body.m.apply_point(top_end)
    assert top_real.xyz == pytest.approx(end_real.xyz, abs=1e-9)


def test_scale_cylinder_height_keeps_centre():
    objects = _cylinder_objects()
    old_height = objects[0].shape.height
    scale_cylinder_height(objects, 0, 1.2)
    body, bottom, top = objects
    cyl = body.shape
    assert cyl.height == pytest.approx(old_height * 1.2)
    assert _close(cyl.base + cyl.axis * (cyl.height / 2), cyl.center)
    assert _close(bottom.shape.center, cyl.base)
    assert _close(top.shape.center, cyl.base + cyl.axis * cyl.height)


def test_scale_cylinder_width_updates_caps():
    objects = _cylinder_objects()
    old_radius = objects[0].shape.radius
    scale_cylinder_width(objects, 0, 1.2)
    assert objects[0].shape.radius == pytest.approx(old_radius * 1.2)
    assert objects[1].shape.radius == objects[0].shape.radius
    assert objects[2].shape.radius == objects[0].shape.radius


def test_cylinder_scaling_rejects_other_shapes():
    with pytest.raises(ValueError):
        scale_cylinder_height(_sphere_objects(), 0, 1.2)
    with pytest.raises(ValueError):
        scale_cylinder_width(_sphere_objects(), 0, 1.2)


def test_translate_camera_moves_viewport():
    scene = _camera_scene()
    before = scene.viewport.origin
    t = Vec.direction(1.0, 2.0, 3.0)
    translate_camera(scene, t)
    assert scene.viewport.origin.xyz == pytest.approx((before + t).xyz, abs=1e-9)
    assert scene.camera.position.xyz == pytest.approx((1.0, 2.0, 3.0), abs=1e-9)
    rebuilt = Viewport.from_camera(scene.camera)
    assert scene.viewport.origin.xyz == pytest.approx(rebuilt.origin.xyz, abs=1e-9)


def test_rotate_camera_matches_rebuilt_viewport():
    scene = _camera_scene()
    rotate_camera(scene, 0.3, scene.viewport.up)
    rebuilt = Viewport.from_camera(scene.camera)
    vp = scene.viewport
    assert vp.right.xyz == pytest.approx(rebuilt.right.xyz, abs=1e-9)
    assert vp.up.xyz == pytest.approx(rebuilt.up.xyz, abs=1e-9)
    assert vp.front.xyz == pytest.approx(rebuilt.front.xyz, abs=1e-9)
    assert vp.origin.xyz == pytest.approx(rebuilt.origin.xyz, abs=1e-9)


def test_roll_viewport_round_trip():
    scene = _camera_scene()
    vp = scene.viewport
    origin = vp.origin
    front = vp.front
    dist = (origin - scene.camera.position).length()
    roll_viewport(scene, 0.5, front)
    assert vp.front == front
    assert (vp.origin - scene.camera.position).length() == pytest.approx(dist)
    assert vp.right.dot(vp.up) == pytest.approx(0.0, abs=1e-9)
    roll_viewport(scene, -0.5, front)
    assert _close(vp.origin, origin)


def test_translate_light():
    light = Light(position=Vec.point(1.0, 1.0, 1.0))
    t = Vec.direction(-1.0, 0.0, 2.0)
    translate_light(light, t)
    assert _close(light.position, Vec.point(1.0, 1.0, 1.0) + t)
    assert light.position.w == 1.0


def test_scale_ratio_clamps():
    assert scale_ratio(0.9, 2.0) == 1.0
    assert scale_ratio(0.5, -1.0) == 0.0
    assert scale_ratio(0.5, 1.0) == 0.5