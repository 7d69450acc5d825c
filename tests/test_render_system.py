from types import SimpleNamespace

from pocketarcade.game_object import GameObject
from pocketarcade.render_system import RenderSystem
from pocketarcade.rendering import Canvas, RenderComponent, SpriteRC


class Recorder(RenderComponent):
    def __init__(self, name, log, layer=0):
        super().__init__()
        self.name = name
        self.log = log
        self.layer = layer

    def push(self, canvas, pos, rot):
        self.log.append((self.name, tuple(pos), rot))


def make_system(objects, canvas=None):
    game = SimpleNamespace(objects=list(objects))
    return RenderSystem(game, canvas if canvas is not None else Canvas(16, 16))


def test_layers_drawn_in_ascending_order():
    log = []
    objects = [
        GameObject(Recorder("top", log, layer=10)),
        GameObject(Recorder("bg", log, layer=-1)),
        GameObject(Recorder("mid", log, layer=0)),
    ]
    make_system(objects).update(0)
    assert [name for name, _, _ in log] == ["bg", "mid", "top"]


def test_invisible_and_componentless_objects_skipped():
    log = []
    hidden = Recorder("hidden", log)
    hidden.visible = False
    objects = [GameObject(hidden), GameObject(), GameObject(Recorder("shown", log))]
    make_system(objects).update(0)
    assert [name for name, _, _ in log] == ["shown"]


def test_position_rounded_half_away_from_zero_and_rotation_passed():
    log = []
    obj = GameObject(Recorder("a", log), pos=(1.5, -2.5), rot=30.0)
    make_system([obj]).update(0)
    assert log == [("a", (2, -3), 30.0)]


def test_whole_positions_unchanged():
    log = []
    obj = GameObject(Recorder("a", log), pos=(4.0, 7.0))
    make_system([obj]).update(0)
    assert log[0][1] == (4, 7)


def test_sprite_drawn_onto_canvas():
    component = SpriteRC((2, 2))
    component.sprite.clear(0xFFFF)
    canvas = Canvas(8, 8)
    make_system([GameObject(component, pos=(3, 4))], canvas).update(0)
    assert canvas.pixel(3, 4) == 0xFFFF
    assert canvas.pixel(4, 5) == 0xFFFF
    assert canvas.pixel(5, 4) == 0
    assert canvas.pixel(2, 4) == 0


def test_higher_layer_paints_over_lower():
    low = SpriteRC((2, 2))
    low.sprite.clear(0x1111)
    low.layer = 0
    high = SpriteRC((2, 2))
    high.sprite.clear(0x2222)
    high.layer = 5
    canvas = Canvas(4, 4)
    objects = [GameObject(high, pos=(0, 0)), GameObject(low, pos=(0, 0))]
    system = make_system(objects, canvas)
    system.update(0)
    assert canvas.pixel(0, 0) == 0x2222
    assert system.canvas is canvas