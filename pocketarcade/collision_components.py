"""Collision shapes that can be attached to game objects."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import ClassVar, Iterable, Sequence

from pocketarcade.geometry import Vec2


class CollisionType(enum.Enum):
    """Kind of collision shape."""

    CIRCLE = "circle"
    RECT = "rect"
    POLYGON = "polygon"


class CollisionComponent:
    """Base class of all collision shapes; ``type`` names the shape."""

    type: ClassVar[CollisionType]


@dataclass
class CircleCC(CollisionComponent):
    """A circle of ``radius`` whose centre is ``offset`` from the object position."""

    type: ClassVar[CollisionType] = CollisionType.CIRCLE

    radius: float
    offset: Vec2 = field(default_factory=Vec2)


@dataclass
class RectCC(CollisionComponent):
    """An axis-aligned rectangle of size ``dim`` anchored at the object position."""

    type: ClassVar[CollisionType] = CollisionType.RECT

    dim: Vec2


def check_convexity(points: Sequence[Vec2]) -> bool:
    """Return whether the polygon made of ``points`` is convex.

    Fewer than three points never form a convex polygon. Each cross product is
    truncated to an integer before its sign is compared.
    """
    if len(points) < 3:
        return False

    count = len(points)
    direction = 0
    for i, p in enumerate(points):
        nxt = points[(i + 1) % count]
        u = points[(i + 2) % count]
        vx, vy = nxt.x - p.x, nxt.y - p.y
        cross = int(u.x * vy - u.y * vx + vx * p.y - vy * p.x)
        if i == 0:
            direction = cross
        elif (cross > 0 and direction < 0) or (cross < 0 and direction > 0):
            return False
    return True


def polygon_center(points: Iterable[Vec2]) -> Vec2:
    """Half the extent of the bounding box that also contains the origin."""
    left = right = top = bottom = 0.0
    for point in points:
        left = min(left, point.x)
        right = max(right, point.x)
        top = min(top, point.y)
        bottom = max(bottom, point.y)
    return Vec2((right - left) / 2, (bottom - top) / 2)


class PolygonCC(CollisionComponent):
    """A polygon relative to the object position.

    ``pivot`` is the point, relative to the polygon, that rotation turns
    around; without one, :func:`polygon_center` of the points is used.
    """

    type: ClassVar[CollisionType] = CollisionType.POLYGON

    def __init__(self, points: Iterable[Vec2 | tuple[float, float]], pivot: Vec2 | None = None):
        self._points = tuple(Vec2(*point) for point in points)
        self._convex = check_convexity(self._points)
        self._center = Vec2(*pivot) if pivot is not None else polygon_center(self._points)

    @property
    def points(self) -> tuple[Vec2, ...]:
        return self._points

    @property
    def convex(self) -> bool:
        return self._convex

    @property
    def center(self) -> Vec2:
        return self._center

    def __repr__(self) -> str:
        return f"PolygonCC(points={self._points!r}, pivot={self._center!r})"