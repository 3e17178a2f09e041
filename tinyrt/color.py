"""RGBA colours with components in the range [0, 1]."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import Tuple, Union

_WHITE_THRESHOLD = 0.8


def _clamp(v: float) -> float:
    if v > 1.0:
        return 1.0
    if v < 0.0:
        return 0.0
    return v


@dataclass(frozen=True)
class Color:
    r: float
    g: float
    b: float
    a: float = 0.0

    @property
    def rgba(self) -> Tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    def clamped(self) -> "Color":
        return Color(*(_clamp(c) for c in self.rgba))

    def __add__(self, other: "Color") -> "Color":
        if not isinstance(other, Color):
            return NotImplemented
        return Color(*(x + y for x, y in zip(self.rgba, other.rgba))).clamped()

    def __mul__(self, other: Union["Color", float]) -> "Color":
        """Component-wise product with a colour, or scaling by a number; clamped."""
        if isinstance(other, Color):
            return Color(*(x * y for x, y in zip(self.rgba, other.rgba))).clamped()
        if isinstance(other, Real):
            return Color(*(other * c for c in self.rgba)).clamped()
        return NotImplemented

    __rmul__ = __mul__

    def is_white(self) -> bool:
        return (
            self.r > _WHITE_THRESHOLD
            and self.g > _WHITE_THRESHOLD
            and self.b > _WHITE_THRESHOLD
        )

    def complementary(self) -> "Color":
        return Color(1.0 - self.r, 1.0 - self.g, 1.0 - self.b, self.a)

    def to_argb(self) -> int:
        """Pack the clamped colour as a 32-bit ARGB integer."""
        c = self.clamped()
        return (
            (int(c.a * 255.0) << 24)
            | (int(c.r * 255.0) << 16)
            | (int(c.g * 255.0) << 8)
            | int(c.b * 255.0)
        )