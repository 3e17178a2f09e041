"""Turning the lines of a ``.rt`` scene file into a :class:`Scene`."""

from __future__ import annotations

import math
import os
from typing import Callable, Dict, List, Optional, Sequence, Union

from .fields import in_unit_range, normalize_direction, parse_color, parse_vector
from .lexing import (
    ParseError,
    check_duplicates,
    check_param_count,
    parse_float,
    read_scene_file,
    split_tokens,
)
from .linalg import Vec
from .scene import (
    AmbientLight,
    Camera,
    Cylinder,
    Disc,
    Light,
    Material,
    Plane,
    Scene,
    SceneObject,
    Sphere,
)


def _optional(tokens: Sequence[str], index: int) -> Optional[str]:
    return tokens[index] if index < len(tokens) else None


def _unit_direction(token: str, what: str) -> Vec:
    v = parse_vector(token, "v")
    if not in_unit_range(v):
        raise ParseError(
            f"{what} orientation vector out of range! Must be within [-1,1]."
        )
    return normalize_direction(v)


def parse_ambient(tokens: Sequence[str]) -> AmbientLight:
    """Parse ``A ratio R,G,B``."""
    check_param_count(tokens, "a")
    ratio = parse_float(tokens[1])
    if not 0.0 <= ratio <= 1.0:
        raise ParseError("Invalid ambient light value! Must be within [0.0-1.0]!")
    return AmbientLight(ratio=ratio, color=parse_color(tokens[2]))


def parse_camera(tokens: Sequence[str]) -> Camera:
    """Parse ``C x,y,z dx,dy,dz fov``; the field of view is stored in radians."""
    check_param_count(tokens, "c")
    position = parse_vector(tokens[1], "p")
    direction = _unit_direction(tokens[2], "Camera")
    degree = parse_float(tokens[3])
    if degree <= 0.0 or degree > 180.0:
        raise ParseError("Invalid degree of FOV! Must be within [0-180].")
    return Camera(position=position, direction=direction, fov=degree * math.pi / 180.0)


def parse_light(tokens: Sequence[str]) -> Light:
    """Parse ``L x,y,z ratio R,G,B``."""
    check_param_count(tokens, "l")
    position = parse_vector(tokens[1], "p")
    ratio = parse_float(tokens[2])
    if not 0.0 <= ratio <= 1.0:
        raise ParseError(
            "Invalid value for brightness ratio! Must be within [0.0-1.0]."
        )
    return Light(position=position, ratio=ratio, color=parse_color(tokens[3]))


def parse_sphere(tokens: Sequence[str]) -> List[SceneObject]:
    """Parse ``sp x,y,z diameter R,G,B [material]``."""
    check_param_count(tokens, "s")
    color = parse_color(tokens[3])
    center = parse_vector(tokens[1], "p")
    radius = parse_float(tokens[2]) / 2.0
    if radius < 0.0:
        raise ParseError("Sphere diameter must be positive number!")
    material = Material.from_token(_optional(tokens, 4))
    return [SceneObject(Sphere(center, radius), color, material)]


def parse_plane(tokens: Sequence[str]) -> List[SceneObject]:
    """Parse ``pl x,y,z nx,ny,nz R,G,B [material]``."""
    check_param_count(tokens, "p")
    color = parse_color(tokens[3])
    point = parse_vector(tokens[1], "p")
    normal = _unit_direction(tokens[2], "Plane")
    material = Material.from_token(_optional(tokens, 4))
    return [SceneObject(Plane(point, normal), color, material)]


def parse_cylinder(tokens: Sequence[str]) -> List[SceneObject]:
    """Parse ``cy x,y,z ax,ay,az diameter height R,G,B [material]``.

    Returns the open body followed by its bottom and top caps.
    """
    check_param_count(tokens, "y")
    color = parse_color(tokens[5])
    center = parse_vector(tokens[1], "p")
    axis = _unit_direction(tokens[2], "Cylinder")
    radius = parse_float(tokens[3]) / 2.0
    height = parse_float(tokens[4])
    if radius < 0.0 or height < 0.0:
        raise ParseError("Diameter and Height must be positive numbers!")
    base = center - axis * (height / 2.0)
    material = Material.from_token(_optional(tokens, 6))
    body = SceneObject(Cylinder(center, base, axis, radius, height), color, material)
    bottom = SceneObject(
        Disc(base, normalize_direction(-axis), radius), color, material
    )
    top = SceneObject(
        Disc(base + axis * height, normalize_direction(axis), radius), color, material
    )
    return [body, bottom, top]


_OBJECT_PARSERS: Dict[str, Callable[[Sequence[str]], List[SceneObject]]] = {
    "pl": parse_plane,
    "sp": parse_sphere,
    "cy": parse_cylinder,
}


def parse_lines(lines: Sequence[str]) -> Scene:
    """Build a scene from the non-empty lines of a scene description."""
    scene = Scene()
    for line in lines:
        tokens = split_tokens(line, " ")
        if not tokens:
            raise ParseError("Empty scene line!")
        ident = tokens[0]
        if ident == "A":
            scene.ambient = parse_ambient(tokens)
        elif ident == "C":
            scene.camera = parse_camera(tokens)
        elif ident == "L":
            scene.light = parse_light(tokens)
        elif ident in _OBJECT_PARSERS:
            scene.objects.extend(_OBJECT_PARSERS[ident](tokens))
        else:
            raise ParseError("Invalid identifier passed!")
    return scene


def parse_scene(filename: Union[str, "os.PathLike[str]"]) -> Scene:
    """Read and parse a ``.rt`` scene file."""
    lines = read_scene_file(filename)
    scene = parse_lines(lines)
    check_duplicates(lines)
    scene.selected_object = -1
    scene.light_selected = False
    scene.select_width = False
    scene.select_height = False
    return scene