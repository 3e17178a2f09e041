"""Parsing colour and vector fields of scene lines."""

from __future__ import annotations

from typing import List

from .color import Color
from .lexing import ParseError, parse_float
from .linalg import Vec


def _split_commas(token: str) -> List[str]:
    return [part for part in token.split(",") if part]


def parse_color(token: str) -> Color:
    """Parse ``R,G,B[,A]`` with components in 0..255 into a [0, 1] colour."""
    parts = _split_commas(token)
    if len(parts) not in (3, 4):
        raise ParseError("Invalid parameter number for color!")
    r, g, b = (parse_float(p) / 255.0 for p in parts[:3])
    a = parse_float(parts[3]) / 255.0 if len(parts) == 4 else 0.0
    color = Color(r, g, b, a)
    if not all(0.0 <= c <= 1.0 for c in color.rgba):
        raise ParseError("Invalid color value! Must be within [0-255]!")
    return color


def parse_vector(token: str, key: str) -> Vec:
    """Parse ``x,y,z`` as a point (``key='p'``) or a direction (``key='v'``)."""
    if key not in ("p", "v"):
        raise ValueError(f"unknown vector kind {key!r}")
    parts = _split_commas(token)
    if len(parts) < 3:
        raise ParseError("Invalid vector! Must be the format of (x, y, z).")
    x, y, z = (parse_float(p) for p in parts[:3])
    return Vec.point(x, y, z) if key == "p" else Vec.direction(x, y, z)


def normalize_direction(v: Vec) -> Vec:
    """Return ``v`` as a unit direction; a zero vector is an error."""
    d = Vec.direction(v.x, v.y, v.z)
    length = d.length()
    if length == 0:
        raise ParseError("Invalid vector orientation!")
    return d / length


def in_unit_range(v: Vec) -> bool:
    """True when every component lies within [-1, 1]."""
    return all(-1.0 <= c <= 1.0 for c in v.xyz)