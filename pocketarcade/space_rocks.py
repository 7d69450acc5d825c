"""Space Rocks: turn a ship in place and shoot the asteroids drifting past."""

from __future__ import annotations

import enum
import math
import random
from dataclasses import dataclass
from typing import Any, BinaryIO, Callable, Optional, Sequence

from pocketarcade.collision import Walls
from pocketarcade.collision_components import CircleCC, PolygonCC, RectCC
from pocketarcade.game import Game
from pocketarcade.game_object import GameObject
from pocketarcade.geometry import Vec2
from pocketarcade.hud import Hearts, ScoreDisplay
from pocketarcade.rendering import AnimRC, Canvas, SpriteRC, StaticRC
from pocketarcade.resources import FILE_GOBLET, FILE_HEART, RES_GOBLET, RES_HEART, ResDescriptor
from pocketarcade.text_input import Button

Sound = Sequence[tuple[int, int, int]]

WHITE = 0xFFFF

CANCEL_SOUND: Sound = ((400, 350, 50),)
SHOOT_SOUND: Sound = ((450, 300, 100),)
HIT_SOUND: Sound = ((100, 100, 50),)
PLAYER_HIT_SOUND: Sound = ((300, 300, 50), (0, 0, 50), (300, 300, 50))
LOSE_SOUND: Sound = (
    (400, 300, 200),
    (0, 0, 50),
    (300, 200, 200),
    (0, 0, 50),
    (200, 50, 400),
)
WIN_SOUND: Sound = ((600, 400, 200), (400, 1000, 200))

SCREEN_WIDTH = 160.0
SCREEN_HEIGHT = 128.0

ROT_SPEED = 140.0
INTRO_TIME = 1.5
DEATH_PAUSE_TIME = 3.0
WIN_TIME = 3.0
WIN_ACCELERATION = 40.0
START_POSITION = Vec2(70, 42)
LAST_LEVEL = 4

INVINCIBILITY_DURATION = 2.0
INVINCIBILITY_BLINK = 0.2
PLAYER_HITBOX = (Vec2(2, 32), Vec2(0, 24), Vec2(9, 0), Vec2(18, 24), Vec2(16, 32))
PLAYER_PIVOT = Vec2(19 / 2, 44 / 2)

BULLET_SPEED = 80.0
MAX_BULLETS = 12

ROOT = "/Games/Space"


class AsteroidSize(enum.IntEnum):
    SMALL = 0
    MEDIUM = 1
    LARGE = 2


ASTEROID_SPEED = (25.0, 20.0, 12.0)
ASTEROID_RADIUS = (7.5, 10.0, 15.0)
ASTEROID_ICONS = (
    ("/asteroidS.raw", (15, 14)),
    ("/asteroidM.raw", (20, 21)),
    ("/asteroidL.raw", (31, 30)),
)

_LARGE_DIAMETER = 2 * ASTEROID_RADIUS[AsteroidSize.LARGE]
WRAP_WALLS_SIZE = Vec2(SCREEN_WIDTH + 2 * _LARGE_DIAMETER + 2,
                       SCREEN_HEIGHT + 2 * _LARGE_DIAMETER + 2)

RESOURCES = (
    ResDescriptor("/bg.raw", in_ram=True),
    ResDescriptor(ASTEROID_ICONS[0][0], in_ram=True),
    ResDescriptor(ASTEROID_ICONS[1][0], in_ram=True),
    ResDescriptor(ASTEROID_ICONS[2][0], in_ram=True),
    ResDescriptor("/player.gif", in_ram=False),
    RES_HEART,
    RES_GOBLET,
)

AnimationFactory = Callable[[Optional[BinaryIO]], Any]


class SpaceRocksState(enum.Enum):
    INTRO = "intro"
    RUNNING = "running"
    DEATH_ANIM = "death_anim"
    DEATH_PAUSE = "death_pause"
    WIN = "win"


class Player:
    """The ship's heading in degrees, mirrored onto its game object's rotation."""

    def __init__(self, obj: Optional[GameObject] = None):
        self.obj = obj
        self._angle = 0.0

    @property
    def angle(self) -> float:
        return self._angle

    def _turn(self, amount: float) -> None:
        self._angle = math.fmod(self._angle + amount, 360.0)
        if self.obj is not None:
            self.obj.rot = self._angle

    def left_turn(self, delta: float) -> None:
        self._turn(-delta * ROT_SPEED)

    def right_turn(self, delta: float) -> None:
        self._turn(delta * ROT_SPEED)


@dataclass(eq=False)
class _Bullet:
    obj: GameObject
    velocity: Vec2


@dataclass(eq=False)
class _Asteroid:
    obj: GameObject
    velocity: Vec2
    size: AsteroidSize


def _heading(angle: float) -> Vec2:
    radians = math.pi * (angle - 90.0) / 180.0
    return Vec2(math.cos(radians), math.sin(radians))


def _make_wrap_walls() -> Walls:
    margin = _LARGE_DIAMETER + 1

    def wall(width: float, height: float, pos: Vec2) -> GameObject:
        return GameObject(None, RectCC(Vec2(width, height)), pos=(pos.x, pos.y))

    return Walls(
        top=wall(WRAP_WALLS_SIZE.x, 100, Vec2(0, -100) - margin),
        bot=wall(WRAP_WALLS_SIZE.x, 100, Vec2(-margin, SCREEN_HEIGHT + margin)),
        left=wall(100, WRAP_WALLS_SIZE.y, Vec2(-100, 0) - margin),
        right=wall(100, WRAP_WALLS_SIZE.y, Vec2(SCREEN_WIDTH + margin, -margin)),
    )


class SpaceRocks(Game):
    """Clear four waves of asteroids; large ones split in two when hit.

    ``animation_factory`` turns the loaded player animation file into an
    animation object for :class:`AnimRC`; without one the ship is not drawn.
    """

    def __init__(self, games_screen: Any = None, *, rng: Optional[random.Random] = None,
                 animation_factory: Optional[AnimationFactory] = None, **kwargs: Any):
        super().__init__(games_screen, ROOT, RESOURCES, **kwargs)
        self._rng = rng or random.Random()
        self._animation_factory = animation_factory
        self._wrap_walls = _make_wrap_walls()

        self.state = SpaceRocksState.INTRO
        self.score = 0
        self.level = 0
        self.lives = 3
        self.player = Player()
        self.player_anim: Optional[AnimRC] = None
        self.hearts: Optional[Hearts] = None
        self.score_display: Optional[ScoreDisplay] = None

        self.invincible = False
        self._invincibility_time = 0.0
        self._intro_timer = 0.0
        self._death_timer = 0.0
        self._win_timer = 0.0
        self._left_hold = False
        self._right_hold = False
        self._listening = False

        self._bullets: list[_Bullet] = []
        self._asteroids: list[_Asteroid] = []

    @property
    def wrap_walls(self) -> Walls:
        return self._wrap_walls

    @property
    def listening(self) -> bool:
        return self._listening

    @property
    def bullets(self) -> tuple[GameObject, ...]:
        return tuple(bullet.obj for bullet in self._bullets)

    @property
    def asteroids(self) -> tuple[tuple[GameObject, AsteroidSize], ...]:
        return tuple((asteroid.obj, asteroid.size) for asteroid in self._asteroids)

    def on_load(self) -> None:
        gif = self.get_file("/player.gif")
        animation = self._animation_factory(gif) if self._animation_factory else None
        self.player_anim = AnimRC(animation)
        ship = GameObject(self.player_anim, PolygonCC(PLAYER_HITBOX, PLAYER_PIVOT))
        self.add_object(ship)
        self.player.obj = ship
        ship.pos = Vec2(START_POSITION.x, 0)

        background = GameObject(StaticRC(self.get_file("/bg.raw"),
                                         (SCREEN_WIDTH, SCREEN_HEIGHT)), None)
        background.render_component.layer = -1
        self.add_object(background)

        self.hearts = Hearts(self.get_file(FILE_HEART))
        self.hearts.go.pos = Vec2(2, 2)
        self.add_object(self.hearts.go)

        self.score_display = ScoreDisplay(self.get_file(FILE_GOBLET))
        self.score_display.go.pos = Vec2(SCREEN_WIDTH - 2 - 28, 2)
        self.add_object(self.score_display.go)

    def on_loop(self, delta_time: float) -> None:
        state = self.state
        if state is SpaceRocksState.INTRO:
            self._intro_timer += delta_time
            progress = self._intro_timer / INTRO_TIME
            if progress >= 1.0:
                self.player.obj.pos = START_POSITION
                self.state = SpaceRocksState.RUNNING
                self.next_level()
            progress = math.sin(progress * math.pi / 2)
            y = SCREEN_HEIGHT - progress * (SCREEN_HEIGHT - START_POSITION.y)
            self.player.obj.pos = Vec2(START_POSITION.x, y)

        elif state is SpaceRocksState.RUNNING:
            if self._left_hold and not self._right_hold:
                self.player.left_turn(delta_time)
            elif self._right_hold and not self._left_hold:
                self.player.right_turn(delta_time)

            self._update_invincibility(delta_time)
            self._update_bullets(delta_time)
            self._update_asteroids(delta_time)

            if not self._asteroids:
                if self.level == LAST_LEVEL:
                    self.state = SpaceRocksState.WIN
                    self.audio.play(WIN_SOUND)
                    self._listening = False
                    return
                self.next_level()

        elif state is SpaceRocksState.DEATH_ANIM:
            self._update_asteroids(delta_time)
            self._update_bullets(delta_time)

        elif state is SpaceRocksState.DEATH_PAUSE:
            self._update_asteroids(delta_time)
            self._update_bullets(delta_time)
            self._death_timer += delta_time
            if self._death_timer >= DEATH_PAUSE_TIME:
                self.pop()

        elif state is SpaceRocksState.WIN:
            self._update_bullets(delta_time)
            direction = _heading(self.player.angle)
            self._win_timer += delta_time
            if self._win_timer > 1.0:
                ship = self.player.obj
                ship.pos = ship.pos + direction * WIN_ACCELERATION * (self._win_timer - 1.0) ** 2
            if self._win_timer >= WIN_TIME:
                self.pop()

    def on_render(self, canvas: Canvas) -> None:
        pass

    def on_start(self) -> None:
        self._listening = True
        if self.player_anim is not None:
            self.player_anim.start()

    def on_stop(self) -> None:
        self._listening = False
        if self.player_anim is not None:
            self.player_anim.stop()

    def button_pressed(self, button: Button) -> None:
        if not self._listening:
            return
        if button is Button.BACK:
            self.audio.play(CANCEL_SOUND)
            self.pop()
        elif button is Button.LEFT:
            self._left_hold = True
        elif button is Button.RIGHT:
            self._right_hold = True
        elif button is Button.ENTER:
            if self.state is SpaceRocksState.RUNNING:
                self.shoot_bullet()

    def button_released(self, button: Button) -> None:
        if not self._listening:
            return
        if button is Button.LEFT:
            self._left_hold = False
        elif button is Button.RIGHT:
            self._right_hold = False

    def _update_bullets(self, delta_time: float) -> None:
        for bullet in self._bullets:
            bullet.obj.pos = bullet.obj.pos + bullet.velocity * delta_time

    def _update_asteroids(self, delta_time: float) -> None:
        for asteroid in self._asteroids:
            asteroid.obj.pos = asteroid.obj.pos + asteroid.velocity * delta_time

    def _discard_bullet(self, bullet: _Bullet) -> None:
        self._bullets = [b for b in self._bullets if b is not bullet]
        self.remove_object(bullet.obj)

    def _bullet_asteroid_handler(self, bullet: _Bullet, asteroid: _Asteroid,
                                 scores: bool) -> Callable[[], None]:
        def handler() -> None:
            self._discard_bullet(bullet)
            self._asteroid_hit(asteroid)
            if scores:
                self.score += 1
                self.score_display.set_score(self.score)

        return handler

    def shoot_bullet(self) -> None:
        if len(self._bullets) >= MAX_BULLETS:
            oldest = self._bullets.pop(0)
            self.remove_object(oldest.obj)

        self.audio.play(SHOOT_SOUND)

        sprite_rc = SpriteRC((4, 4))
        sprite_rc.sprite.clear(Canvas.TRANSPARENT)
        sprite_rc.sprite.fill_rect(0, 0, 4, 4, WHITE)
        obj = GameObject(sprite_rc, CircleCC(2, Vec2(2, 2)))
        self.add_object(obj)

        center = self.player.obj.pos + Vec2(8, 44 // 2)
        direction = _heading(self.player.angle)
        obj.pos = direction * float(44 // 2) + center

        bullet = _Bullet(obj, direction * BULLET_SPEED)
        self._bullets.append(bullet)

        for asteroid in self._asteroids:
            self.collision.add_pair(asteroid.obj, obj,
                                    self._bullet_asteroid_handler(bullet, asteroid, True))

        self.collision.walls_all(obj, lambda: self._discard_bullet(bullet))

    def create_asteroid(self, size: AsteroidSize, pos: Vec2) -> None:
        size = AsteroidSize(size)
        path, dim = ASTEROID_ICONS[size]
        radius = ASTEROID_RADIUS[size]
        obj = GameObject(StaticRC(self.get_file(path), dim),
                         CircleCC(radius, Vec2(radius, radius)))
        self.add_object(obj)
        obj.pos = Vec2(*pos)

        # Right angles would keep an asteroid off-screen for a long time.
        angle = self._rng.random() * 360.0
        right_angle_offset = 15.0
        if math.fmod(angle, 90) <= right_angle_offset:
            angle += right_angle_offset
        elif math.fmod(angle, 90) >= 90 - right_angle_offset:
            angle -= right_angle_offset

        direction = Vec2(math.cos(math.radians(angle)), math.sin(math.radians(angle)))
        asteroid = _Asteroid(obj, direction * ASTEROID_SPEED[size], size)
        self._asteroids.append(asteroid)

        for bullet in self._bullets:
            self.collision.add_pair(obj, bullet.obj,
                                    self._bullet_asteroid_handler(bullet, asteroid, False))

        def player_collision() -> None:
            if self.invincible:
                return
            self._asteroid_hit(asteroid)
            self._player_hit()

        self.collision.add_pair(obj, self.player.obj, player_collision)

        walls = self._wrap_walls
        self.collision.add_pair(obj, walls.top,
                                lambda: setattr(obj, "pos", Vec2(obj.pos.x, SCREEN_HEIGHT)))
        self.collision.add_pair(obj, walls.bot,
                                lambda: setattr(obj, "pos", Vec2(obj.pos.x, -_LARGE_DIAMETER)))
        self.collision.add_pair(obj, walls.left,
                                lambda: setattr(obj, "pos", Vec2(SCREEN_WIDTH, obj.pos.y)))
        self.collision.add_pair(obj, walls.right,
                                lambda: setattr(obj, "pos", Vec2(-_LARGE_DIAMETER, obj.pos.y)))

    def _asteroid_hit(self, asteroid: _Asteroid) -> None:
        self.audio.play(HIT_SOUND)

        if asteroid.size is not AsteroidSize.SMALL:
            smaller = AsteroidSize(asteroid.size - 1)
            offset = ASTEROID_RADIUS[asteroid.size] - ASTEROID_RADIUS[smaller]
            for _ in range(2):
                self.create_asteroid(smaller, asteroid.obj.pos + offset)

        self._asteroids = [a for a in self._asteroids if a is not asteroid]
        self.remove_object(asteroid.obj)

    def _update_invincibility(self, delta: float) -> None:
        if not self.invincible:
            return
        self._invincibility_time += delta
        component = self.player.obj.render_component
        component.visible = int(self._invincibility_time / INVINCIBILITY_BLINK) % 2 != 0
        if self._invincibility_time >= INVINCIBILITY_DURATION:
            self._invincibility_time = 0.0
            self.invincible = False
            component.visible = True

    def _player_hit(self) -> None:
        self.lives -= 1
        self.hearts.set_lives(self.lives)
        if self.lives == 0:
            self.audio.play(LOSE_SOUND)
            self._game_over()
            return
        self.audio.play(PLAYER_HIT_SOUND)
        self.invincible = True

    def next_level(self) -> None:
        self.level += 1
        for _ in range(self.level):
            self._spawn_random_asteroid()

    def _spawn_random_asteroid(self) -> None:
        # Spawn just outside the screen, on a rectangle grown by one large diameter.
        top_left = Vec2(-_LARGE_DIAMETER, -_LARGE_DIAMETER)
        side = self._rng.randrange(4)
        if side in (0, 1):
            xpos = self._rng.random() * (SCREEN_WIDTH - top_left.x)
            y = top_left.y if side == 0 else SCREEN_HEIGHT
            pos = Vec2(top_left.x + xpos, y)
        else:
            ypos = self._rng.random() * (SCREEN_HEIGHT - top_left.y)
            x = top_left.x if side == 2 else SCREEN_WIDTH
            pos = Vec2(x, top_left.y + ypos)
        self.create_asteroid(AsteroidSize.LARGE, pos)

    def _game_over(self) -> None:
        self._listening = False
        for asteroid in self._asteroids:
            self.collision.remove_pair(asteroid.obj, self.player.obj)
            for bullet in self._bullets:
                self.collision.remove_pair(asteroid.obj, bullet.obj)

        self.state = SpaceRocksState.DEATH_PAUSE
        if self.player_anim is not None:
            self.player_anim.stop()
            self.player_anim.set_anim(None)