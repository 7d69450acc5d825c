"""Two-dimensional vector maths used by the game engine."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Union

_Number = Union[int, float]


@dataclass(frozen=True)
class Vec2:
    """An immutable 2D vector with component-wise arithmetic.

    Arithmetic accepts another vector or a plain number, in which case the
    number is applied to both components.
    """

    x: float = 0.0
    y: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    @staticmethod
    def _parts(other: object) -> tuple[float, float] | None:
        if isinstance(other, Vec2):
            return other.x, other.y
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return other, other
        return None

    def __add__(self, other: Vec2 | _Number) -> Vec2:
        parts = self._parts(other)
        if parts is None:
            return NotImplemented
        return Vec2(self.x + parts[0], self.y + parts[1])

    __radd__ = __add__

    def __sub__(self, other: Vec2 | _Number) -> Vec2:
        parts = self._parts(other)
        if parts is None:
            return NotImplemented
        return Vec2(self.x - parts[0], self.y - parts[1])

    def __rsub__(self, other: _Number) -> Vec2:
        parts = self._parts(other)
        if parts is None:
            return NotImplemented
        return Vec2(parts[0] - self.x, parts[1] - self.y)

    def __mul__(self, other: Vec2 | _Number) -> Vec2:
        parts = self._parts(other)
        if parts is None:
            return NotImplemented
        return Vec2(self.x * parts[0], self.y * parts[1])

    __rmul__ = __mul__

    def __truediv__(self, other: Vec2 | _Number) -> Vec2:
        parts = self._parts(other)
        if parts is None:
            return NotImplemented
        return Vec2(self.x / parts[0], self.y / parts[1])

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __abs__(self) -> Vec2:
        """Component-wise absolute value."""
        return Vec2(abs(self.x), abs(self.y))

    def length(self) -> float:
        """Euclidean length."""
        return math.hypot(self.x, self.y)

    def dot(self, other: Vec2) -> float:
        """Dot product with another vector."""
        return self.x * other.x + self.y * other.y

    def distance(self, other: Vec2) -> float:
        """Euclidean distance to another vector."""
        return (self - other).length()

    def rotated_about(self, center: Vec2, degrees: float) -> Vec2:
        """Rotate this point around ``center`` by ``degrees``.

        Positive angles turn +x towards +y, which on a y-down screen is
        clockwise.
        """
        radians = math.radians(degrees)
        cos, sin = math.cos(radians), math.sin(radians)
        dx, dy = self.x - center.x, self.y - center.y
        return Vec2(center.x + dx * cos - dy * sin, center.y + dx * sin + dy * cos)