import pytest

from pocketarcade.collision import (
    DEBUG_COLLIDING,
    DEBUG_SEPARATE,
    CollisionSystem,
    circle_circle,
    poly_circle,
    poly_contains_point,
    poly_poly,
    poly_rect,
    rect_circle,
    rect_rect,
    rotated_translated_poly,
)
from pocketarcade.collision_components import CircleCC, PolygonCC, RectCC
from pocketarcade.game_object import GameObject
from pocketarcade.geometry import Vec2
from pocketarcade.rendering import Canvas

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]


def circle(x, y, radius=2):
    return GameObject(None, CircleCC(radius), pos=(x, y))


def rect(x, y, w=10, h=10):
    return GameObject(None, RectCC(Vec2(w, h)), pos=(x, y))


def poly(x, y, points=SQUARE, rot=0):
    return GameObject(None, PolygonCC(points), pos=(x, y), rot=rot)


class Counter:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


def test_circle_circle_touching_and_apart():
    assert circle_circle(circle(0, 0), circle(4, 0))
    assert not circle_circle(circle(0, 0), circle(5, 0))


def test_rect_rect():
    assert rect_rect(rect(0, 0), rect(5, 5))
    assert not rect_rect(rect(0, 0), rect(20, 0))
    assert rect_rect(rect(0, 0), rect(5, 5)) == rect_rect(rect(5, 5), rect(0, 0))


def test_rect_circle():
    assert rect_circle(rect(0, 0), circle(5, 5))
    assert not rect_circle(rect(0, 0), circle(20, 20))
    assert rect_circle(rect(0, 0), circle(11, 11))
    assert not rect_circle(rect(0, 0), circle(12, 12))


def test_poly_contains_point():
    square = [Vec2(*p) for p in SQUARE]
    assert poly_contains_point(square, Vec2(5, 5))
    assert not poly_contains_point(square, Vec2(15, 5))


def test_poly_poly():
    assert poly_poly(poly(0, 0), poly(5, 5))
    assert not poly_poly(poly(0, 0), poly(50, 50))


def test_poly_poly_concave_never_collides():
    concave = [(0, 0), (10, 0), (5, 5), (10, 10), (0, 10)]
    assert not poly_poly(poly(0, 0, concave), poly(1, 1))


def test_poly_rect():
    assert poly_rect(poly(5, 5), rect(0, 0))
    assert not poly_rect(poly(50, 50), rect(0, 0))


def test_poly_circle():
    assert poly_circle(poly(0, 0), circle(5, 5, 1))
    assert poly_circle(poly(0, 0), circle(-1, 0, 2))
    assert not poly_circle(poly(0, 0), circle(50, 50, 1))


def test_rotated_translated_poly_translation_only():
    points = rotated_translated_poly(poly(3, 4))
    assert points == [Vec2(x + 3, y + 4) for x, y in SQUARE]


def test_rotated_square_by_quarter_turn_keeps_vertex_set():
    square = [(0, 0), (2, 0), (2, 2), (0, 2)]
    moved = rotated_translated_poly(poly(10, 10, square))
    turned = rotated_translated_poly(poly(10, 10, square, rot=90))
    key = lambda p: (round(p.x, 6), round(p.y, 6))
    assert sorted(map(key, turned)) == sorted(map(key, moved))
    assert [key(p) for p in turned] != [key(p) for p in moved]


def test_handler_called_on_entering_overlap_only():
    system = CollisionSystem()
    a, b = circle(0, 0), circle(100, 0)
    counter = Counter()
    system.add_pair(a, b, counter)
    system.update(0)  # pair becomes active
    system.update(0)
    assert counter.calls == 0
    b.pos = Vec2(3, 0)
    system.update(0)
    system.update(0)
    assert counter.calls == 1
    b.pos = Vec2(100, 0)
    system.update(0)
    b.pos = Vec2(3, 0)
    system.update(0)
    assert counter.calls == 2


def test_pair_is_checked_from_the_next_update():
    system = CollisionSystem()
    a, b = circle(0, 0), circle(1, 0)
    counter = Counter()
    system.add_pair(a, b, counter)
    assert system.pairs == ()
    system.update(0)
    assert counter.calls == 0
    assert system.pairs == ((a, b),)
    system.update(0)
    assert counter.calls == 1


def test_add_pair_ignores_self_and_missing_components():
    system = CollisionSystem()
    a = circle(0, 0)
    bare = GameObject()
    system.add_pair(a, a, Counter())
    system.add_pair(a, bare, Counter())
    system.update(0)
    assert system.pairs == ()


def test_remove_pair_in_either_order():
    system = CollisionSystem()
    a, b = circle(0, 0), circle(1, 0)
    counter = Counter()
    system.add_pair(a, b, counter)
    system.update(0)
    system.remove_pair(b, a)
    system.update(0)
    assert counter.calls == 0
    assert system.pairs == ()


def test_remove_pending_pair_cancels_it():
    system = CollisionSystem()
    a, b = circle(0, 0), circle(1, 0)
    system.add_pair(a, b, Counter())
    system.remove_pair(a, b)
    system.update(0)
    assert system.pairs == ()


def test_add_after_remove_cancels_removal():
    system = CollisionSystem()
    a, b = circle(0, 0), circle(1, 0)
    counter = Counter()
    system.add_pair(a, b, counter)
    system.update(0)
    system.remove_pair(a, b)
    system.add_pair(a, b, counter)
    system.update(0)
    assert counter.calls == 1
    assert len(system.pairs) == 2


def test_remove_object_drops_all_its_pairs():
    system = CollisionSystem()
    a, b, c = circle(0, 0), circle(1, 0), circle(50, 50)
    system.add_pair(a, b, Counter())
    system.add_pair(b, c, Counter())
    system.add_pair(a, c, Counter())
    system.update(0)
    system.remove_object(b)
    system.update(0)
    assert system.pairs == ((a, c),)


def test_handler_may_remove_its_own_pair():
    system = CollisionSystem()
    a, b = circle(0, 0), circle(1, 0)
    hits = []

    def handler():
        hits.append(1)
        system.remove_pair(a, b)

    system.add_pair(a, b, handler)
    system.update(0)
    system.update(0)
    system.update(0)
    assert hits == [1]
    assert system.pairs == ()


def test_wall_top_hit():
    system = CollisionSystem()
    ball = circle(50, 50)
    counter = Counter()
    system.wall_top(ball, counter)
    system.update(0)
    system.update(0)
    assert counter.calls == 0
    ball.pos = Vec2(50, -5)
    system.update(0)
    assert counter.calls == 1


def test_walls_all_and_removal_with_none():
    system = CollisionSystem()
    ball = circle(50, 50)
    system.walls_all(ball, Counter())
    system.update(0)
    walls = system.walls
    assert {second for _, second in system.pairs} == {walls.top, walls.bot, walls.left, walls.right}
    system.walls_vertical(ball, None)
    system.update(0)
    assert {second for _, second in system.pairs} == {walls.top, walls.bot}
    system.walls_horizontal(ball, None)
    system.update(0)
    assert system.pairs == ()


@pytest.mark.parametrize(
    "register, wall_name, position",
    [
        ("wall_left", "left", (-5, 50)),
        ("wall_right", "right", (165, 50)),
        ("wall_bot", "bot", (50, 133)),
    ],
)
def test_each_wall_detects_object_beyond_its_edge(register, wall_name, position):
    system = CollisionSystem()
    ball = circle(50, 50)
    counter = Counter()
    getattr(system, register)(ball, counter)
    system.update(0)
    assert system.pairs == ((ball, getattr(system.walls, wall_name)),)
    ball.pos = Vec2(*position)
    system.update(0)
    assert counter.calls == 1


def test_draw_debug_colours():
    system = CollisionSystem()
    a, b = circle(20, 20, 3), circle(60, 60, 3)
    system.add_pair(a, b, Counter())
    system.update(0)
    canvas = Canvas(100, 100)
    system.draw_debug(canvas)
    assert canvas.pixel(23, 20) == DEBUG_SEPARATE
    b.pos = Vec2(22, 20)
    system.update(0)
    canvas.clear()
    system.draw_debug(canvas)
    assert canvas.pixel(17, 20) == DEBUG_COLLIDING


def test_draw_debug_rect_and_polygon_outline():
    system = CollisionSystem()
    box, shape = rect(10, 10), poly(50, 50)
    system.add_pair(box, shape, Counter())
    system.update(0)
    canvas = Canvas(100, 100)
    system.draw_debug(canvas)
    assert canvas.pixel(10, 10) == DEBUG_SEPARATE
    assert canvas.pixel(55, 50) == DEBUG_SEPARATE
    assert canvas.pixel(55, 55) == 0