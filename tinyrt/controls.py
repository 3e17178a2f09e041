"""Keyboard and mouse controls that edit a scene and re-render it."""

from __future__ import annotations

import math
import os
import sys
from enum import IntEnum
from typing import Dict, Optional, Tuple, Union

from .color import Color
from .edits import (
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
from .linalg import Vec, to_rad
from .parser import parse_scene
from .renderer import FrameBuffer, cast_ray, find_hit, render
from .scene import Cylinder, Scene, Viewport

TRANSL = 1.0
ROT = 5.0
ZOOM = 15.0
SCALE = 1.2
ILLUM = 1.1

LOW_RES = 10
HIGH_RES = 100

LEFT_CLICK = 1

_SELECTED_LIGHT = Color(0.0, 0.0, 1.0, 0.0)


class Key(IntEnum):
    """Key codes (and scroll buttons) understood by the controller."""

    A = 0
    S = 1
    D = 2
    SCROLL_DOWN = 4
    SCROLL_UP = 5
    Q = 12
    W = 13
    E = 14
    L = 37
    S_LEFT = 43
    S_RIGHT = 47
    SPACE = 49
    ESC = 53
    WIDTH = 67
    PLUS = 69
    HEIGHT = 75
    MINUS = 78
    REVERT = 82
    LEFT = 123
    RIGHT = 124
    DOWN = 125
    UP = 126


_MOVE_KEYS = frozenset({Key.W, Key.A, Key.S, Key.D, Key.Q, Key.E})
_ROTATE_KEYS = frozenset(
    {Key.LEFT, Key.RIGHT, Key.DOWN, Key.UP, Key.S_LEFT, Key.S_RIGHT}
)
_GROW_KEYS = frozenset({Key.PLUS, Key.SCROLL_UP})
_SHRINK_KEYS = frozenset({Key.MINUS, Key.SCROLL_DOWN})


def _offsets(vp: Viewport, forward_sign: float) -> Dict[Key, Vec]:
    """Translation for each movement key; ``forward_sign`` orients Q and E."""
    return {
        Key.W: vp.up * TRANSL,
        Key.A: vp.right * -TRANSL,
        Key.S: vp.up * -TRANSL,
        Key.D: vp.right * TRANSL,
        Key.Q: vp.front * (forward_sign * TRANSL),
        Key.E: vp.front * (-forward_sign * TRANSL),
    }


def _factor(key: int, step: float) -> Optional[float]:
    if key in _GROW_KEYS:
        return step
    if key in _SHRINK_KEYS:
        return 1.0 / step
    return None


class Controller:
    """Routes input events to scene edits and keeps the frame buffer up to date."""

    def __init__(
        self,
        scene: Scene,
        scene_file: Optional[Union[str, "os.PathLike[str]"]] = None,
        framebuffer: Optional[FrameBuffer] = None,
    ):
        self.scene = scene
        self.scene_file = scene_file
        self.framebuffer = framebuffer if framebuffer is not None else FrameBuffer()
        self.resolution = HIGH_RES
        self.closed = False
        self.exit_message: Optional[str] = None
        if scene.viewport is None:
            scene.create_viewport()

    def _viewport(self) -> Viewport:
        vp = self.scene.viewport
        return vp if vp is not None else self.scene.create_viewport()

    def _close(self, message: str) -> None:
        self.closed = True
        self.exit_message = message

    def _deselect_light(self) -> None:
        scene = self.scene
        if scene.light_selected:
            scene.light_selected = False
            scene.light.color = scene.light.stored_color

    def key_action(self, key: int) -> None:
        """Handle a key press."""
        if key == Key.ESC:
            self._close("Exit with keyboard ESC!")
        elif key == Key.SPACE:
            self.high_quality_render()
        elif key == Key.L:
            self.select_light()
        elif key in (Key.WIDTH, Key.HEIGHT):
            self.select_param(key)
        elif key in _MOVE_KEYS:
            self.move(key)
        elif key in _ROTATE_KEYS:
            self.rotate(key)
        elif key in (Key.PLUS, Key.MINUS):
            self.scale(key)
        elif key == Key.REVERT:
            self.revert()

    def mouse_button(self, button: int, x: int, y: int) -> None:
        """Handle a mouse button: scrolling scales, a left click selects."""
        if button in (Key.SCROLL_UP, Key.SCROLL_DOWN):
            self.scale(button)
        elif button == LEFT_CLICK and y >= 0:
            self.select_object(x, y)

    def select_object(self, x: int, y: int) -> None:
        """Toggle selection of the object seen at window pixel (x, y)."""
        scene = self.scene
        self._viewport()
        hit = find_hit(scene, cast_ray(scene, y, x))
        if hit is not None:
            owner = scene.owner_index(hit.obj_id)
            scene.selected_object = -1 if scene.selected_object == owner else owner
            self._deselect_light()
        else:
            scene.selected_object = -1
        self.low_quality_render(False)

    def select_light(self) -> None:
        """Toggle light selection; a selected light is drawn in a marker colour."""
        scene = self.scene
        light = scene.light
        if scene.light_selected:
            self._deselect_light()
        else:
            scene.light_selected = True
            scene.selected_object = -1
            light.stored_color = light.color
            if not light.color.is_white():
                light.color = light.color.complementary()
            else:
                light.color = _SELECTED_LIGHT
        self.low_quality_render(False)

    def select_param(self, key: int) -> None:
        """Toggle width or height editing of a selected cylinder."""
        scene = self.scene
        sel = scene.selected_object
        if sel != -1 and isinstance(scene.objects[sel].shape, Cylinder):
            if key == Key.WIDTH:
                if not scene.select_width:
                    scene.select_width = True
                    scene.select_height = False
                else:
                    scene.select_width = False
            if key == Key.HEIGHT:
                if not scene.select_height:
                    scene.select_height = True
                    scene.select_width = False
                else:
                    scene.select_height = False
        self.low_quality_render(False)

    def move(self, key: int) -> None:
        """Move the selected object, the selected light, or else the camera."""
        scene = self.scene
        vp = self._viewport()
        if scene.selected_object >= 0:
            offset = _offsets(vp, -1.0).get(key)
            if offset is not None:
                translate_object(scene.objects, scene.selected_object, offset)
        elif scene.light_selected:
            offset = _offsets(vp, 1.0).get(key)
            if offset is not None:
                translate_light(scene.light, offset)
        else:
            offset = _offsets(vp, 1.0).get(key)
            if offset is not None:
                translate_camera(scene, offset)
        self.low_quality_render(False)

    def rotate(self, key: int) -> None:
        """Rotate the selected object or else the camera; a light cannot rotate."""
        scene = self.scene
        vp = self._viewport()
        rad = to_rad(ROT)
        if scene.selected_object >= 0:
            moves: Dict[int, Tuple[float, Vec]] = {
                Key.LEFT: (rad, vp.up),
                Key.RIGHT: (-rad, vp.up),
                Key.DOWN: (rad, vp.right),
                Key.UP: (-rad, vp.right),
                Key.S_LEFT: (-rad, vp.front),
                Key.S_RIGHT: (rad, vp.front),
            }
            if key in moves:
                angle, axis = moves[key]
                rotate_object(scene.objects, scene.selected_object, angle, axis)
        elif scene.light_selected:
            return
        else:
            turns: Dict[int, Tuple[float, Vec]] = {
                Key.LEFT: (rad, vp.up),
                Key.RIGHT: (-rad, vp.up),
                Key.DOWN: (-rad, vp.right),
                Key.UP: (rad, vp.right),
            }
            if key in turns:
                angle, axis = turns[key]
                rotate_camera(scene, angle, axis)
            elif key == Key.S_LEFT:
                roll_viewport(scene, rad, vp.front)
            elif key == Key.S_RIGHT:
                roll_viewport(scene, -rad, vp.front)
        self.low_quality_render(False)

    def scale(self, key: int) -> None:
        """Scale the selection, the light's brightness, zoom, or the ambient light."""
        scene = self.scene
        if scene.selected_object >= 0:
            self._scale_object(key)
        elif scene.light_selected:
            factor = _factor(key, ILLUM)
            if factor is not None:
                scene.light.ratio = scale_ratio(scene.light.ratio, factor)
            self.low_quality_render(False)
        elif key in (Key.SCROLL_DOWN, Key.SCROLL_UP):
            self.zoom(key)
        elif key in (Key.PLUS, Key.MINUS):
            factor = _factor(key, ILLUM)
            scene.ambient.ratio = scale_ratio(scene.ambient.ratio, factor)
            self.low_quality_render(False)

    def _scale_object(self, key: int) -> None:
        scene = self.scene
        index = scene.selected_object
        obj = scene.objects[index]
        factor = _factor(key, SCALE)
        if isinstance(obj.shape, Cylinder) and (
            scene.select_height or scene.select_width
        ):
            if factor is not None:
                if scene.select_height:
                    scale_cylinder_height(scene.objects, index, factor)
                elif scene.select_width:
                    scale_cylinder_width(scene.objects, index, factor)
        elif factor is not None:
            scale_object(scene.objects, index, factor)
        self.low_quality_render(False)

    def zoom(self, key: int) -> None:
        """Narrow (scroll up) or widen (scroll down) the field of view."""
        cam = self.scene.camera
        rad = to_rad(ZOOM)
        if key == Key.SCROLL_UP:
            if cam.fov - rad <= 0:
                return
            cam.fov -= rad
        elif key == Key.SCROLL_DOWN:
            if cam.fov + rad >= math.pi:
                return
            cam.fov += rad
        self.low_quality_render(True)

    def low_quality_render(self, rebuild_viewport: bool) -> FrameBuffer:
        """Quick preview render, optionally rebuilding the viewport first."""
        if rebuild_viewport:
            self.scene.create_viewport()
        self.resolution = LOW_RES
        return render(self.scene, self.framebuffer, LOW_RES)

    def high_quality_render(self) -> FrameBuffer:
        """Clear selections and render at full resolution."""
        self.scene.selected_object = -1
        self._deselect_light()
        self.resolution = HIGH_RES
        return render(self.scene, self.framebuffer, HIGH_RES)

    def revert(self) -> bool:
        """Reload the scene from its file; False when there is no file to reload."""
        if not self.scene_file:
            print(
                "Error:\nCannot find rt file, nothing to revert! Exit!",
                file=sys.stderr,
            )
            return False
        print("Re-parsing and low quality re-rendering called!")
        self.scene = parse_scene(self.scene_file)
        self.low_quality_render(True)
        return True