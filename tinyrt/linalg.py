"""Homogeneous vectors and 4x4 affine matrices used by the renderer."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Iterable, Tuple

import numpy as np


@dataclass(frozen=True)
class Vec:
    """A homogeneous 3D vector: ``w`` is 1 for points and 0 for directions."""

    x: float
    y: float
    z: float
    w: float = 0.0

    @classmethod
    def point(cls, x: float, y: float, z: float) -> "Vec":
        return cls(float(x), float(y), float(z), 1.0)

    @classmethod
    def direction(cls, x: float, y: float, z: float) -> "Vec":
        return cls(float(x), float(y), float(z), 0.0)

    @property
    def xyz(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __add__(self, other: "Vec") -> "Vec":
        if not isinstance(other, Vec):
            return NotImplemented
        w = 1.0 if (self.w or other.w) else 0.0
        return Vec(self.x + other.x, self.y + other.y, self.z + other.z, w)

    def __sub__(self, other: "Vec") -> "Vec":
        if not isinstance(other, Vec):
            return NotImplemented
        w = 1.0 if (self.w and not other.w) else 0.0
        return Vec(self.x - other.x, self.y - other.y, self.z - other.z, w)

    def __mul__(self, scalar: float) -> "Vec":
        if not isinstance(scalar, Real):
            return NotImplemented
        return Vec(self.x * scalar, self.y * scalar, self.z * scalar, self.w)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Vec":
        if not isinstance(scalar, Real):
            return NotImplemented
        return Vec(self.x / scalar, self.y / scalar, self.z / scalar, self.w)

    def __neg__(self) -> "Vec":
        return Vec(-self.x, -self.y, -self.z, self.w)

    def dot(self, other: "Vec") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vec") -> "Vec":
        return Vec(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
            0.0,
        )

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def unit(self) -> "Vec":
        """Return the vector scaled to length 1; a zero vector is returned as is."""
        n = self.length()
        if n == 0.0:
            return self
        return self / n

    def reflect(self, normal: "Vec") -> "Vec":
        """Reflect this vector about ``normal`` (assumed to be a unit vector)."""
        return self - normal * (2.0 * self.dot(normal))


class Matrix4:
    """An immutable 4x4 matrix acting on homogeneous vectors."""

    __slots__ = ("_m",)

    def __init__(self, rows: Iterable[Iterable[float]]):
        arr = np.array(rows, dtype=float)
        if arr.shape != (4, 4):
            raise ValueError(f"expected a 4x4 matrix, got shape {arr.shape}")
        arr.setflags(write=False)
        self._m = arr

    @property
    def rows(self) -> Tuple[Tuple[float, ...], ...]:
        return tuple(tuple(float(v) for v in row) for row in self._m)

    def __getitem__(self, index: Tuple[int, int]) -> float:
        return float(self._m[index])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix4):
            return NotImplemented
        return bool(np.array_equal(self._m, other._m))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix4({self.rows!r})"

    def allclose(self, other: "Matrix4", tol: float = 1e-9) -> bool:
        return bool(np.allclose(self._m, other._m, atol=tol))

    @classmethod
    def identity(cls) -> "Matrix4":
        return cls(np.eye(4))

    @classmethod
    def translation(cls, t: Vec) -> "Matrix4":
        m = np.eye(4)
        m[0, 3], m[1, 3], m[2, 3] = t.x, t.y, t.z
        return cls(m)

    @classmethod
    def rotation(cls, angle: float, axis: Vec) -> "Matrix4":
        """Rotation by ``angle`` radians about the unit ``axis``."""
        c = math.cos(angle)
        s = math.sin(angle)
        k = 1.0 - c
        x, y, z = axis.x, axis.y, axis.z
        return cls(
            [
                [x * x * k + c, y * x * k - z * s, z * x * k + y * s, 0.0],
                [x * y * k + z * s, y * y * k + c, z * y * k - x * s, 0.0],
                [x * z * k - y * s, y * z * k + x * s, z * z * k + c, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ]
        )

    @classmethod
    def scaling(cls, sx: float, sy: float, sz: float) -> "Matrix4":
        return cls(np.diag([sx, sy, sz, 1.0]))

    def __matmul__(self, other: "Matrix4") -> "Matrix4":
        if not isinstance(other, Matrix4):
            return NotImplemented
        return Matrix4(self._m @ other._m)

    def inverse(self) -> "Matrix4":
        try:
            inv = np.linalg.inv(self._m)
        except np.linalg.LinAlgError as exc:
            raise ValueError("matrix is singular") from exc
        if not np.all(np.isfinite(inv)):
            raise ValueError("matrix is singular")
        return Matrix4(inv)

    def _apply(self, v: Vec, w_out: float) -> Vec:
        x, y, z = self._m[:3] @ np.array([v.x, v.y, v.z, v.w])
        return Vec(float(x), float(y), float(z), w_out)

    def apply_point(self, v: Vec) -> Vec:
        """Transform ``v`` using its own ``w`` and mark the result as a point."""
        return self._apply(v, 1.0)

    def apply_vector(self, v: Vec) -> Vec:
        """Transform ``v`` using its own ``w`` and mark the result as a direction."""
        return self._apply(v, 0.0)


def to_rad(deg: float) -> float:
    return deg * math.pi / 180.0