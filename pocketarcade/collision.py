"""Pairwise collision detection between game objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from pocketarcade.collision_components import CollisionType, RectCC
from pocketarcade.game_object import GameObject
from pocketarcade.game_system import GameSystem
from pocketarcade.geometry import Vec2
from pocketarcade.rendering import Canvas

Handler = Callable[[], None]

DEBUG_COLLIDING = 0x07E0
DEBUG_SEPARATE = 0xF800

SCREEN_WIDTH = 160
SCREEN_HEIGHT = 128
_WALL_THICKNESS = 100


@dataclass(eq=False)
class _Pair:
    first: GameObject
    second: GameObject
    handler: Handler
    colliding: bool = False

    def matches(self, first: GameObject, second: GameObject) -> bool:
        return (self.first is first and self.second is second) or (
            self.first is second and self.second is first
        )

    def involves(self, obj: GameObject) -> bool:
        return self.first is obj or self.second is obj


@dataclass(frozen=True)
class Walls:
    """Rectangles just outside each edge of the screen."""

    top: GameObject
    bot: GameObject
    left: GameObject
    right: GameObject


def _make_walls() -> Walls:
    def wall(width: float, height: float, x: float, y: float) -> GameObject:
        return GameObject(None, RectCC(Vec2(width, height)), pos=(x, y))

    return Walls(
        top=wall(SCREEN_WIDTH, _WALL_THICKNESS, 0, -_WALL_THICKNESS),
        bot=wall(SCREEN_WIDTH, _WALL_THICKNESS, 0, SCREEN_HEIGHT),
        left=wall(_WALL_THICKNESS, SCREEN_HEIGHT, -_WALL_THICKNESS, 0),
        right=wall(_WALL_THICKNESS, SCREEN_HEIGHT, SCREEN_WIDTH, 0),
    )


def rect_rect(first: GameObject, second: GameObject) -> bool:
    """Overlap of two rectangles, each grown by half a pixel on every side."""
    pos1 = first.pos - 0.5
    pos2 = second.pos - 0.5
    dim1 = first.collision_component.dim + 1.0
    dim2 = second.collision_component.dim + 1.0
    return (pos1.x <= pos2.x + dim2.x and pos1.x + dim1.x >= pos2.x) and (
        pos1.y <= pos2.y + dim2.y and pos1.y + dim1.y >= pos2.y
    )


def circle_circle(first: GameObject, second: GameObject) -> bool:
    c1 = first.collision_component
    c2 = second.collision_component
    pos1 = first.pos + c1.offset
    pos2 = second.pos + c2.offset
    return pos1.distance(pos2) <= c1.radius + c2.radius


def rect_circle(rect: GameObject, circle: GameObject) -> bool:
    circle_cc = circle.collision_component
    center = circle.pos + circle_cc.offset
    radius = circle_cc.radius
    dim = rect.collision_component.dim
    rect_center = rect.pos + dim * 0.5

    distance = abs(center - rect_center)
    if distance.x > dim.x / 2 + radius:
        return False
    if distance.y > dim.y / 2 + radius:
        return False
    if distance.x <= dim.x / 2:
        return True
    if distance.y <= dim.y / 2:
        return True
    return distance.distance(dim * 0.5) <= radius


def poly_poly(first: GameObject, second: GameObject) -> bool:
    """True when a vertex of ``second`` lies inside ``first``; both must be convex."""
    if not first.collision_component.convex or not second.collision_component.convex:
        return False
    points1 = rotated_translated_poly(first)
    return any(poly_contains_point(points1, point) for point in rotated_translated_poly(second))


def poly_rect(poly: GameObject, rect: GameObject) -> bool:
    """True when a vertex of the (convex) polygon lies inside the rectangle."""
    if not poly.collision_component.convex:
        return False
    dim = rect.collision_component.dim
    pos = rect.pos
    rect_points = (pos, Vec2(pos.x + dim.x, pos.y), pos + dim, Vec2(pos.x, pos.y + dim.y))
    return any(poly_contains_point(rect_points, point) for point in rotated_translated_poly(poly))


def _segment_touches_circle(start: Vec2, end: Vec2, center: Vec2, radius: float) -> bool:
    line = end - start
    to_center = center - start
    length = line.length()
    u = to_center.dot(line)
    if u <= 0:
        closest = start
    elif u >= length:
        closest = end
    else:
        closest = line * u + start
    return (center - closest).length() <= radius


def poly_circle(poly: GameObject, circle: GameObject) -> bool:
    if not poly.collision_component.convex:
        return False
    circle_cc = circle.collision_component
    points = rotated_translated_poly(poly)
    center = circle.pos + circle_cc.offset
    count = len(points)
    for i, start in enumerate(points):
        if _segment_touches_circle(start, points[(i + 1) % count], center, circle_cc.radius):
            return True
    return poly_contains_point(points, center)


def poly_contains_point(polygon: Sequence[Vec2], point: Vec2) -> bool:
    """Even-odd ray casting test of ``point`` against ``polygon``."""
    count = len(polygon)
    intersects = 0
    for i, p1 in enumerate(polygon):
        p2 = polygon[(i + 1) % count]
        between = (p2.y < point.y <= p1.y) or (p1.y < point.y <= p2.y)
        if between and point.x < (p2.x - p1.x) / (p2.y - p1.y) * (point.y - p1.y) + p1.x:
            intersects += 1
    return intersects % 2 == 1


def rotated_translated_poly(obj: GameObject) -> list[Vec2]:
    """The object's polygon in world space, rotated about its pivot by ``obj.rot``."""
    polygon = obj.collision_component
    translated = [point + obj.pos for point in polygon.points]
    if obj.rot == 0:
        return translated
    center = obj.pos + polygon.center
    return [point.rotated_about(center, obj.rot) for point in translated]


_CHECKS: dict[tuple[CollisionType, CollisionType], Callable[[GameObject, GameObject], bool]] = {
    (CollisionType.CIRCLE, CollisionType.CIRCLE): circle_circle,
    (CollisionType.RECT, CollisionType.RECT): rect_rect,
    (CollisionType.RECT, CollisionType.CIRCLE): rect_circle,
    (CollisionType.CIRCLE, CollisionType.RECT): lambda c, r: rect_circle(r, c),
    (CollisionType.POLYGON, CollisionType.POLYGON): poly_poly,
    (CollisionType.POLYGON, CollisionType.RECT): poly_rect,
    (CollisionType.RECT, CollisionType.POLYGON): lambda r, p: poly_rect(p, r),
    (CollisionType.POLYGON, CollisionType.CIRCLE): poly_circle,
    (CollisionType.CIRCLE, CollisionType.POLYGON): lambda c, p: poly_circle(p, c),
}


class CollisionSystem(GameSystem):
    """Watches registered object pairs and calls a handler when a pair starts to overlap.

    Additions and removals take effect at the end of the next :meth:`update`,
    so handlers may change the registered pairs safely.
    """

    def __init__(self, game: Any = None):
        super().__init__(game)
        self._walls = _make_walls()
        self._pairs: list[_Pair] = []
        self._removed: list[_Pair] = []
        self._added: list[_Pair] = []

    @property
    def walls(self) -> Walls:
        return self._walls

    @property
    def pairs(self) -> tuple[tuple[GameObject, GameObject], ...]:
        """The object pairs currently being checked."""
        return tuple((pair.first, pair.second) for pair in self._pairs)

    def _is_removed(self, pair: _Pair) -> bool:
        return any(removed.matches(pair.first, pair.second) for removed in self._removed)

    def update(self, delta_micros: int) -> None:
        for pair in self._pairs:
            if self._is_removed(pair):
                continue
            types = (pair.first.collision_component.type, pair.second.collision_component.type)
            overlap = _CHECKS[types](pair.first, pair.second)
            if overlap and not pair.colliding:
                pair.handler()
            pair.colliding = overlap

        for removed in self._removed:
            self._pairs = [p for p in self._pairs if not p.matches(removed.first, removed.second)]
        self._pairs.extend(self._added)
        self._added.clear()
        self._removed.clear()

    def add_pair(self, first: GameObject, second: GameObject, handler: Handler) -> None:
        if first is second:
            return
        if first.collision_component is None or second.collision_component is None:
            return
        self._added.append(_Pair(first, second, handler))
        self._removed = [p for p in self._removed if not p.matches(first, second)]

    def remove_pair(self, first: GameObject, second: GameObject) -> None:
        self._removed.extend(p for p in self._pairs if p.matches(first, second))
        self._added = [p for p in self._added if not p.matches(first, second)]

    def remove_object(self, obj: GameObject) -> None:
        self._removed.extend(p for p in self._pairs if p.involves(obj))
        self._added = [p for p in self._added if not p.involves(obj)]

    def _wall(self, obj: GameObject, wall: GameObject, handler: Optional[Handler]) -> None:
        if handler is not None:
            self.add_pair(obj, wall, handler)
        else:
            self.remove_pair(obj, wall)

    def wall_top(self, obj: GameObject, handler: Optional[Handler]) -> None:
        self._wall(obj, self._walls.top, handler)

    def wall_bot(self, obj: GameObject, handler: Optional[Handler]) -> None:
        self._wall(obj, self._walls.bot, handler)

    def wall_left(self, obj: GameObject, handler: Optional[Handler]) -> None:
        self._wall(obj, self._walls.left, handler)

    def wall_right(self, obj: GameObject, handler: Optional[Handler]) -> None:
        self._wall(obj, self._walls.right, handler)

    def walls_vertical(self, obj: GameObject, handler: Optional[Handler]) -> None:
        self.wall_left(obj, handler)
        self.wall_right(obj, handler)

    def walls_horizontal(self, obj: GameObject, handler: Optional[Handler]) -> None:
        self.wall_top(obj, handler)
        self.wall_bot(obj, handler)

    def walls_all(self, obj: GameObject, handler: Optional[Handler]) -> None:
        self.wall_left(obj, handler)
        self.wall_right(obj, handler)
        self.wall_top(obj, handler)
        self.wall_bot(obj, handler)

    def draw_debug(self, canvas: Canvas) -> None:
        """Outline every paired shape: green when colliding, red otherwise."""
        drawn: set[GameObject] = set()

        def draw(color: int, obj: GameObject) -> None:
            if obj in drawn and color != DEBUG_COLLIDING:
                return
            drawn.add(obj)
            shape = obj.collision_component
            if shape.type is CollisionType.RECT:
                canvas.draw_rect(obj.pos.x, obj.pos.y, shape.dim.x, shape.dim.y, color)
            elif shape.type is CollisionType.CIRCLE:
                canvas.draw_circle(obj.pos.x + shape.offset.x, obj.pos.y + shape.offset.y,
                                   shape.radius, color)
            elif shape.type is CollisionType.POLYGON:
                _draw_polygon(obj, canvas, color)

        for pair in self._pairs:
            color = DEBUG_COLLIDING if pair.colliding else DEBUG_SEPARATE
            draw(color, pair.first)
            draw(color, pair.second)


def _draw_polygon(obj: GameObject, canvas: Canvas, color: int) -> None:
    points = obj.collision_component.points
    if not points:
        return
    if len(points) == 1:
        canvas.draw_pixel(points[0].x, points[0].y, color)
        return
    world = rotated_translated_poly(obj)
    count = len(world)
    for i, p1 in enumerate(world):
        p2 = world[(i + 1) % count]
        canvas.draw_line(p1.x, p1.y, p2.x, p2.y, color)