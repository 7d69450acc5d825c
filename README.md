# pocketarcade

A small 2D game engine for a 160×128 pixel screen, and three games built
on it. It has no dependencies outside the standard library.

## Modules

- `pocketarcade.geometry`: `Vec2` is an immutable 2D vector. It supports
  component-wise arithmetic with vectors or plain numbers, and has
  `length()`, `dot()`, `distance()` and `rotated_about(center, degrees)`.
- `pocketarcade.collision_components`: the collision shapes `CircleCC`,
  `RectCC` and `PolygonCC`, the `CollisionType` enum, and the helpers
  `check_convexity` and `polygon_center`.
- `pocketarcade.rendering`:
  - `Canvas` is a grid of 16-bit colours. It draws pixels, rectangles,
    lines, circles and raw RGB565 icons, and copies one canvas onto another,
    either plainly or rotated.
  - The render components are `SpriteRC` (an owned sprite canvas),
    `StaticRC` (a raw RGB565 image read from bytes or a binary file) and
    `AnimRC` (wraps an animation object that you supply).
- `pocketarcade.game_object`: `GameObject` has a position, a rotation, an
  optional render component and an optional collision component. Objects
  compare by identity.
- `pocketarcade.game_system`: `GameSystem` is the base class for per-frame
  systems.
- `pocketarcade.collision`:
  - `CollisionSystem` checks registered pairs of objects. It calls a handler
    when a pair starts to overlap.
  - It provides walls just outside each screen edge, through `wall_top`,
    `wall_bot`, `wall_left`, `wall_right`, `walls_vertical`,
    `walls_horizontal` and `walls_all`.
  - `draw_debug` outlines the shapes.
  - The shape tests can also be called on their own: `rect_rect`,
    `circle_circle`, `rect_circle`, `poly_poly`, `poly_rect`, `poly_circle`
    and `poly_contains_point`.
- `pocketarcade.render_system`: `RenderSystem` pushes every visible object
  onto a canvas, lowest layer first.
- `pocketarcade.highscore`:
  - `Highscore` keeps up to five `Score` entries, best first.
  - It saves them as JSON in any mutable mapping you pass in. This is a
    plain `dict` by default, so nothing persists unless you supply a store.
- `pocketarcade.text_input`: `TextInput` does multi-tap keypad text entry.
  `Button` enumerates the device buttons.
- `pocketarcade.resources`:
  - `ResourceManager` opens resource files below a root directory. It can
    read them into memory, and it hands them out rewound to the start.
  - Compressed resources need a decompressor function, which you supply.
- `pocketarcade.game`: `Game` is the base class for games. It handles
  resource loading, the object set, and the per-frame `loop(micros)`, which
  runs collision, then `on_loop`, then rendering, then `on_render`.
- `pocketarcade.pics`: `Pic` names a profile picture. `PICS` lists the
  eight built-in ones.
- `pocketarcade.hud`: `Hearts` is a lives display and `ScoreDisplay` is a
  score display. Both are sprite-based.

## Games

- `pocketarcade.pong.Bonk`: paddle game against the computer. It has title,
  match and pause states, and the first to three points wins.
- `pocketarcade.space_rocks.SpaceRocks`: turn a ship in place and shoot
  asteroids. Large asteroids split when hit, and there are four waves.
- `pocketarcade.snake.Snake`: snake, with a wall or free-wrap mode, a
  speed setting, and a highscore table with initials entry.

A host program drives a game like this:

1. Call `load()`, then `start()`.
2. Call `loop(micros)` once per frame.
3. Forward presses to `button_pressed(Button.X)`. `Bonk` and `SpaceRocks`
   also take `button_released`.

Each game takes an optional `random.Random` as `rng=`, which makes tests
repeatable.

## Example

```python
from pocketarcade.collision import CollisionSystem
from pocketarcade.collision_components import CircleCC
from pocketarcade.game_object import GameObject
from pocketarcade.geometry import Vec2

hits = []
a = GameObject(None, CircleCC(5, Vec2(5, 5)), pos=(0, 0))
b = GameObject(None, CircleCC(5, Vec2(5, 5)), pos=(6, 0))

system = CollisionSystem()
system.add_pair(a, b, lambda: hits.append("hit"))
system.update(16_000)   # the new pair is registered at the end of this update
system.update(16_000)   # the overlap is detected and the handler runs once
assert hits == ["hit"]
```

## What it does not do

The package has no window or display output. Games draw into an in-memory
`Canvas` and never show it.

The canvas has no fonts. The games record on-screen text as `Label`
entries in a `labels` list, not as pixels.

There is no sound. Games pass tone sequences to an `audio` object, and the
default one plays nothing.

There is no input hardware handling and no GIF decoder. The player ship in
`SpaceRocks` is drawn only if you pass an `animation_factory`.

There are no commands to run.

## Running the tests

```
pip install -e .[test]
pytest
```