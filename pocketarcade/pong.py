"""Bonk: a one-player paddle game against a computer opponent."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Any, NamedTuple, Optional, Sequence

from pocketarcade.game import Game
from pocketarcade.rendering import Canvas
from pocketarcade.text_input import Button

BLACK = 0x0000
WHITE = 0xFFFF
RED = 0xF800
BLUE = 0x001F
DARK_GREY = 0x7BEF

Sound = Sequence[tuple[int, int, int]]

CONFIRM_SOUND: Sound = ((500, 700, 50),)
CANCEL_SOUND: Sound = ((400, 350, 50),)
MOVE_SOUND: Sound = ((500, 500, 50),)
HIT_SOUND: Sound = ((100, 100, 50),)
CPU_POINT_SOUND: Sound = ((600, 200, 200),)
PLAYER_POINT_SOUND: Sound = ((200, 600, 200),)
LOSE_SOUND: Sound = (
    (400, 300, 200),
    (0, 0, 50),
    (300, 200, 200),
    (0, 0, 50),
    (200, 50, 400),
)
WIN_SOUND: Sound = ((600, 400, 200), (400, 1000, 200))

WINNING_SCORE = 3
WIN_SCREEN_MICROS = 2_000_000
BLINK_MICROS = 200_000

TITLE_WIDTH = 51
TITLE_HEIGHT = 28
TITLE_BITMAP = bytes((
    0xff, 0x80, 0x00, 0x00, 0x03, 0x80, 0x60, 0xff, 0xc0, 0x00, 0x00, 0x03, 0x80, 0x60, 0xff, 0xe0,
    0x00, 0x00, 0x03, 0x80, 0xe0, 0xf0, 0xf0, 0x00, 0x00, 0x03, 0x80, 0xc0, 0xe0, 0x70, 0x00, 0x00,
    0x03, 0x81, 0xc0, 0xe0, 0x38, 0x00, 0x00, 0x03, 0x81, 0x80, 0xe0, 0x18, 0x00, 0x00, 0x03, 0x83,
    0x80, 0xe0, 0x18, 0x00, 0x00, 0x03, 0x83, 0x00, 0xe0, 0x18, 0x00, 0x00, 0x03, 0x87, 0x00, 0xe0,
    0x18, 0x00, 0x00, 0x03, 0x86, 0x00, 0xe0, 0x38, 0x00, 0x00, 0x03, 0x8e, 0x00, 0xe0, 0x78, 0x00,
    0x00, 0x03, 0x8c, 0x00, 0xff, 0xf0, 0x00, 0x00, 0x03, 0x9c, 0x00, 0xff, 0xf8, 0x00, 0x00, 0x03,
    0x98, 0x00, 0xe0, 0x3c, 0x00, 0x00, 0x03, 0xb8, 0x00, 0xe0, 0x1c, 0x7f, 0x00, 0x03, 0xb0, 0x00,
    0xe0, 0x0c, 0xff, 0x9d, 0xe3, 0xf0, 0x00, 0xe0, 0x0c, 0xf1, 0x9f, 0xf3, 0xe0, 0x00, 0xe0, 0x0c,
    0xe1, 0x9f, 0x73, 0xe0, 0x00, 0xe0, 0x0c, 0xe1, 0x9e, 0x33, 0xf0, 0x00, 0xe0, 0x0c, 0xe1, 0x9c,
    0x33, 0xb8, 0x00, 0xe0, 0x0c, 0xe1, 0x9c, 0x33, 0x9c, 0x00, 0xe0, 0x0c, 0xe1, 0x9c, 0x33, 0x8e,
    0x00, 0xe0, 0x1c, 0xe1, 0x9c, 0x33, 0x87, 0x00, 0xe0, 0x3c, 0xe1, 0x9c, 0x33, 0x83, 0x80, 0xff,
    0xf8, 0xe1, 0x9c, 0x33, 0x81, 0xc0, 0xff, 0xf0, 0xff, 0x9c, 0x33, 0x80, 0xe0, 0xff, 0xe0, 0x7f,
    0x1c, 0x33, 0x80, 0x60,
))


class Label(NamedTuple):
    """A piece of text placed on the screen, centred on (x, y)."""

    text: str
    x: float
    y: float


def rect_rect(x1: float, y1: float, w1: float, h1: float,
              x2: float, y2: float, w2: float, h2: float) -> bool:
    """Whether two rectangles overlap or touch."""
    return x1 + w1 >= x2 and x1 <= x2 + w2 and y1 + h1 >= y2 and y1 <= y2 + h2


def _draw_bitmap(canvas: Canvas, x: int, y: int, bitmap: bytes, width: int, height: int,
                 color: int, scale: int = 1) -> None:
    """Draw a 1-bit, most-significant-bit-first bitmap, each bit a scale x scale block."""
    row_bytes = (width + 7) // 8
    for row in range(height):
        for col in range(width):
            byte = bitmap[row * row_bytes + col // 8]
            if byte & (0x80 >> (col % 8)):
                canvas.fill_rect(x + col * scale, y + row * scale, scale, scale, color)


class State(ABC):
    """One screen of the game; receives button events only while started."""

    def __init__(self, canvas: Canvas):
        self.canvas = canvas
        self.game: Optional[Bonk] = None
        self.active = False
        self.labels: list[Label] = []

    def start(self, game: Bonk) -> None:
        self.game = game
        self.active = True

    @abstractmethod
    def update(self, micros: float, game: Bonk) -> None:
        """Advance by ``micros`` microseconds."""

    @abstractmethod
    def draw(self) -> None:
        """Paint this screen onto the canvas."""

    def stop(self) -> None:
        self.active = False

    def button_pressed(self, button: Button) -> None:
        pass

    def button_released(self, button: Button) -> None:
        pass

    def _label(self, text: str, x: float, y: float) -> None:
        self.labels.append(Label(text, x, y))


class TitleState(State):
    """Title menu with START and QUIT entries and a blinking cursor."""

    def __init__(self, canvas: Canvas):
        super().__init__(canvas)
        self.title_cursor = 0
        self.blink_state = False
        self.blink_micros = 0.0

    def button_pressed(self, button: Button) -> None:
        if not self.active or self.game is None:
            return
        game = self.game
        if button is Button.A:
            if self.title_cursor == 0:
                game.play(CONFIRM_SOUND)
                game.new_game()
            elif self.title_cursor == 1:
                game.play(CANCEL_SOUND)
                game.pop()
        elif button is Button.UP:
            if self.title_cursor > 0:
                self.title_cursor -= 1
                game.play(MOVE_SOUND)
        elif button is Button.DOWN:
            if self.title_cursor < 1:
                self.title_cursor += 1
                game.play(MOVE_SOUND)
        elif button is Button.B:
            game.play(CANCEL_SOUND)
            game.pop()

    def draw(self) -> None:
        canvas = self.canvas
        self.labels = []
        canvas.clear(BLACK)
        _draw_bitmap(canvas, 29, 8, TITLE_BITMAP, TITLE_WIDTH, TITLE_HEIGHT, DARK_GREY, 2)
        _draw_bitmap(canvas, 27, 6, TITLE_BITMAP, TITLE_WIDTH, TITLE_HEIGHT, WHITE, 2)
        self._label("START", canvas.width / 2, 75)
        self._label("QUIT", canvas.width / 2, 99)
        color = RED if self.blink_state else BLACK
        canvas.draw_rect(30, 72 + self.title_cursor * 24, 100, 22, color)
        canvas.draw_rect(31, 73 + self.title_cursor * 24, 98, 20, color)

    def update(self, micros: float, game: Bonk) -> None:
        self.blink_micros += micros
        if self.blink_micros > BLINK_MICROS:
            self.blink_state = not self.blink_state
            self.blink_micros = 0


class GameState(State):
    """The match itself: the player's paddle on the left, the computer's on the right."""

    def __init__(self, canvas: Canvas, rng: Optional[random.Random] = None):
        super().__init__(canvas)
        self._rng = rng or random.Random()
        width, height = canvas.width, canvas.height

        self.player_score = 0
        self.player_height = 32.0
        self.player_width = 6.0
        self.player_x = 5.0
        self.player_y = (height - self.player_height) / 2
        self.player_speed_y = 60.0

        self.opponent_score = 0
        self.opponent_height = 32.0
        self.opponent_width = 6.0
        self.opponent_x = width - self.opponent_width - 5
        self.opponent_y = (height - self.opponent_height) / 2
        self.opponent_speed_y = 60.0

        self.ball_size = 12.0
        self.ball_x = width - self.ball_size - self.opponent_width - 1
        self.ball_y = (height - self.ball_size) / 2
        self.ball_speed_x = 90.0
        self.ball_speed_y = 90.0

        self.player_up = False
        self.player_down = False
        self.win_condition = False
        self.win_notified = False
        self.death_timer = 0.0

    def button_pressed(self, button: Button) -> None:
        if not self.active:
            return
        if button is Button.UP:
            self.player_up = True
        elif button is Button.DOWN:
            self.player_down = True
        elif button is Button.B and self.game is not None:
            self.game.pause_game()

    def button_released(self, button: Button) -> None:
        if not self.active:
            return
        if button is Button.UP:
            self.player_up = False
        elif button is Button.DOWN:
            self.player_down = False

    def draw(self) -> None:
        canvas = self.canvas
        self.labels = []
        canvas.clear(BLACK)

        if self.win_condition:
            if self.player_score >= WINNING_SCORE:
                self._label("PLAYER", canvas.width / 2, 30)
            elif self.opponent_score >= WINNING_SCORE:
                self._label("CPU", canvas.width / 2, 30)
            self._label("WINS", canvas.width / 2, 60)
            if self.death_timer >= WIN_SCREEN_MICROS and self.game is not None:
                self.game.quit_game()
            return

        self._label(f"{self.player_score}      {self.opponent_score}", canvas.width / 2, 32)
        canvas.fill_rect(self.ball_x, self.ball_y, self.ball_size, self.ball_size, WHITE)
        canvas.fill_rect(self.player_x, self.player_y, self.player_width, self.player_height, RED)
        canvas.fill_rect(self.opponent_x, self.opponent_y, self.opponent_width,
                         self.opponent_height, BLUE)

    def update(self, micros: float, game: Bonk) -> None:
        dt = micros / 1_000_000
        width, height = self.canvas.width, self.canvas.height

        if self.player_score == WINNING_SCORE or self.opponent_score == WINNING_SCORE:
            self.win_condition = True
            if not self.win_notified:
                self.win_notified = True
                game.play(LOSE_SOUND if self.opponent_score == WINNING_SCORE else WIN_SOUND)
        if self.win_condition:
            self.death_timer += micros
            return

        if self.opponent_y + self.opponent_height / 2 < self.ball_y + self.ball_size / 2:
            self.opponent_y += self.opponent_speed_y * dt
            self.opponent_y = min(height - self.opponent_height, self.opponent_y)
        else:
            self.opponent_y -= self.opponent_speed_y * dt
            self.opponent_y = max(0.0, self.opponent_y)

        if self.player_up and not self.player_down:
            self.player_y -= self.player_speed_y * dt
            self.player_y = max(0.0, self.player_y)
        elif self.player_down and not self.player_up:
            self.player_y += self.player_speed_y * dt
            self.player_y = min(height - self.player_height, self.player_y)

        self.ball_x += self.ball_speed_x * dt
        self.ball_y += self.ball_speed_y * dt

        if self.ball_y < 0:
            self.ball_y = 0.0
            self.ball_speed_y = -self.ball_speed_y
        if self.ball_y + self.ball_size > height:
            self.ball_y = height - self.ball_size
            self.ball_speed_y = -self.ball_speed_y

        if rect_rect(self.ball_x, self.ball_y, self.ball_size, self.ball_size,
                     self.player_x, self.player_y, self.player_width, self.player_height):
            self.ball_x = self.player_x + self.player_width
            self.ball_speed_x = -self.ball_speed_x
            game.play(HIT_SOUND)
        if rect_rect(self.ball_x, self.ball_y, self.ball_size, self.ball_size,
                     self.opponent_x, self.opponent_y, self.opponent_width,
                     self.opponent_height):
            self.ball_x = self.opponent_x - self.ball_size
            self.ball_speed_x = -self.ball_speed_x
            game.play(HIT_SOUND)

        if self.ball_x < 0:
            self.opponent_score += 1
            self.ball_x = width - self.ball_size - self.opponent_width - 1
            self.ball_speed_x = -abs(self.ball_speed_x)
            self.ball_y = float(self._rng.randrange(0, int(height - self.ball_size)))
            game.play(CPU_POINT_SOUND)
        if self.ball_x + self.ball_size > width:
            self.player_score += 1
            self.ball_x = width - self.ball_size - self.opponent_width - 16
            self.ball_speed_x = -abs(self.ball_speed_x)
            self.ball_y = float(self._rng.randrange(0, int(height - self.ball_size)))
            game.play(PLAYER_POINT_SOUND)


class PauseState(State):
    """Pause screen: A resumes the match, B quits to the title."""

    def button_pressed(self, button: Button) -> None:
        if not self.active or self.game is None:
            return
        if button is Button.A:
            self.game.resume_game()
        elif button is Button.B:
            self.game.quit_game()

    def draw(self) -> None:
        canvas = self.canvas
        self.labels = []
        canvas.clear(BLACK)
        self._label("Paused", canvas.width / 2, canvas.height / 2 - 30)
        self._label("ENTER: Resume", canvas.width / 2, canvas.height / 2 + 10)
        self._label("BACK: Quit", canvas.width / 2, canvas.height / 2 + 26)

    def update(self, micros: float, game: Bonk) -> None:
        pass


class Bonk(Game):
    """The paddle game, switching between title, match and pause screens."""

    def __init__(self, games_screen: Any = None, *, rng: Optional[random.Random] = None,
                 **kwargs: Any):
        super().__init__(games_screen, "", (), **kwargs)
        self._rng = rng or random.Random()
        self.state: State = TitleState(self.canvas)
        self.paused_state: Optional[State] = None

    def _switch(self, state: State) -> None:
        self.state = state
        state.start(self)

    def on_start(self) -> None:
        self.state.start(self)

    def on_stop(self) -> None:
        self.state.stop()

    def on_loop(self, delta_time: float) -> None:
        self.state.update(delta_time * 1_000_000, self)
        self.state.draw()

    def new_game(self) -> None:
        self.state.stop()
        self._switch(GameState(self.canvas, self._rng))

    def pause_game(self) -> None:
        self.state.stop()
        self.paused_state = self.state
        self._switch(PauseState(self.canvas))

    def resume_game(self) -> None:
        if self.paused_state is None:
            return
        self.state.stop()
        paused, self.paused_state = self.paused_state, None
        self._switch(paused)

    def quit_game(self) -> None:
        self.paused_state = None
        self.state.stop()
        self._switch(TitleState(self.canvas))

    def play(self, sound: Sound) -> None:
        self.audio.play(tuple(tuple(chirp) for chirp in sound))

    def button_pressed(self, button: Button) -> None:
        self.state.button_pressed(button)

    def button_released(self, button: Button) -> None:
        self.state.button_released(button)