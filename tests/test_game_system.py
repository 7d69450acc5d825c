import pytest

from pocketarcade.game_object import GameObject
from pocketarcade.game_system import GameSystem


class FakeGame:
    def __init__(self):
        self.objects = set()


class CountingSystem(GameSystem):
    def __init__(self, game):
        super().__init__(game)
        self.seen = []

    def update(self, delta_micros):
        self.seen.append((delta_micros, len(self.objects())))


def test_objects_reflect_game():
    game = FakeGame()
    a, b = GameObject(), GameObject()
    game.objects.update({a, b})
    system = CountingSystem(game)
    assert set(system.objects()) == {a, b}
    assert system.game is game


def test_objects_is_a_snapshot():
    game = FakeGame()
    game.objects.add(GameObject())
    system = CountingSystem(game)
    snapshot = system.objects()
    game.objects.add(GameObject())
    assert len(snapshot) == 1
    assert len(system.objects()) == 2


def test_update_sees_current_objects():
    game = FakeGame()
    system = CountingSystem(game)
    system.update(100)
    game.objects.add(GameObject())
    system.update(200)
    assert system.seen == [(100, 0), (200, 1)]


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        GameSystem(FakeGame())