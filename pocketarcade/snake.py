"""Snake: steer a growing snake to the food with the number keys."""

from __future__ import annotations

import random
import time
from typing import Any, Callable, MutableMapping, Optional, Sequence

from pocketarcade.game import Game
from pocketarcade.highscore import Highscore, Score
from pocketarcade.pong import Label
from pocketarcade.text_input import Button, TextInput

Sound = Sequence[tuple[int, int, int]]

BLACK = 0x0000
WHITE = 0xFFFF
RED = 0xF800
GREEN = 0x07E0
DARK_GREEN = 0x03E0
YELLOW = 0xFFE0
EYE_COLOR = 0x0000

MAX_SNAKE_LENGTH = 500
TILE_SIZE = 5
FOOD_SIZE = 4
GROWTH = 6
MENU_ENTRIES = 4

DEAD_SHOW_GAME_MICROS = 500_000
DEAD_SCREEN_MICROS = 2_500_000
CURSOR_BLINK_MS = 350
HIGHSCORE_BLINK_MS = 1000

CONFIRM_SOUND: Sound = ((500, 700, 50),)
CANCEL_SOUND: Sound = ((400, 350, 50),)
MOVE_SOUND: Sound = ((500, 500, 50),)
EAT_SOUND: Sound = ((450, 300, 100),)
LOSE_SOUND: Sound = (
    (400, 300, 200),
    (0, 0, 50),
    (300, 200, 200),
    (0, 0, 50),
    (200, 50, 400),
)

TITLE = "title"
NEW_GAME = "newgame"
OLD_GAME = "oldgame"
DEAD = "dead"
PAUSED = "paused"
ERASE_DATA = "eraseData"
DATA_DISPLAY = "dataDisplay"
ENTER_INITIALS = "enterInitials"


def _millis() -> float:
    return time.monotonic() * 1000.0


class Snake(Game):
    """The snake game with a title menu, pause screen and a high-score table.

    ``clock`` returns the current time in milliseconds; ``highscore_store``
    is the key-value store the score table is saved in.
    """

    def __init__(self, games_screen: Any = None, *, rng: Optional[random.Random] = None,
                 clock: Optional[Callable[[], float]] = None,
                 highscore_store: Optional[MutableMapping[str, str]] = None,
                 **kwargs: Any):
        super().__init__(games_screen, "", (), **kwargs)
        self._rng = rng or random.Random()
        self._clock = clock or _millis
        self._handlers: dict[Button, Callable[[], None]] = {}
        self._input: Optional[TextInput] = None

        self.status = TITLE
        self.prev_status = ""
        self.screen_change = False
        self.labels: list[Label] = []

        self.menu_signal = 0
        self.border_flag = True
        self.speed = 1
        self.dir_x = 0
        self.dir_y = 0
        self.snake_x = [0] * MAX_SNAKE_LENGTH
        self.snake_y = [0] * MAX_SNAKE_LENGTH
        self.snake_length = 0
        self.food_x = 0
        self.food_y = 0
        self.eaten = False
        self.bigger = False
        self.h_score = 0
        self.dead_time = 0.0

        self.temp_score = 0
        self.name = list("AAA")
        self.char_cursor = 0
        self.elapsed_millis = self._clock()
        self.hiscore_millis = self._clock()
        self.hiscore_blink = False
        self.blink_state = False

        self.highscore = Highscore(highscore_store)
        self.highscore.begin("Snake")

    # ----- drawing helpers -------------------------------------------------

    def _fill(self, x: float, y: float, w: float, h: float, color: int) -> None:
        canvas = self.canvas
        x0, y0 = max(0, int(x)), max(0, int(y))
        x1 = min(canvas.width, int(x) + int(w))
        y1 = min(canvas.height, int(y) + int(h))
        if x1 > x0 and y1 > y0:
            canvas.fill_rect(x0, y0, x1 - x0, y1 - y0, color)

    def _outline(self, x: float, y: float, w: float, h: float, color: int) -> None:
        self._fill(x, y, w, 1, color)
        self._fill(x, y + h - 1, w, 1, color)
        self._fill(x, y, 1, h, color)
        self._fill(x + w - 1, y, 1, h, color)

    def _pixel(self, x: float, y: float, color: int) -> None:
        if 0 <= x < self.canvas.width and 0 <= y < self.canvas.height:
            self.canvas.draw_pixel(int(x), int(y), color)

    def _label(self, text: str, x: float, y: float) -> None:
        self.labels.append(Label(text, x, y))

    # ----- input -------------------------------------------------------------

    def _on(self, button: Button, handler: Callable[[], None]) -> None:
        self._handlers[button] = handler

    def _clear_button_callbacks(self) -> None:
        self._handlers.clear()

    def button_pressed(self, button: Button) -> None:
        if self._input is not None:
            self._input.button_pressed(button)
        handler = self._handlers.get(button)
        if handler is not None:
            handler()

    # ----- game lifecycle ----------------------------------------------------

    def on_start(self) -> None:
        self.prev_status = ""
        self._draw()

    def on_stop(self) -> None:
        self._clear_button_callbacks()
        self._drop_input()

    def _drop_input(self) -> None:
        if self._input is not None:
            self._input.stop()
            self._input = None

    def on_loop(self, delta_time: float) -> None:
        if self._input is not None:
            self._input.loop(int(delta_time * 1_000_000))

        if self.status != self.prev_status:
            self.screen_change = True
            self.prev_status = self.status
        else:
            self.screen_change = False

        if self.status == TITLE:
            if self.screen_change:
                self._title_setup()
            self._title_screen()
            self.control()
            self.snake_menu_control()
        if self.status == NEW_GAME:
            if self.screen_change:
                self.new_game_setup()
            self.status = OLD_GAME
        if self.status == PAUSED:
            if self.screen_change:
                self._paused_setup()
            self._paused()
        if self.status == OLD_GAME:
            if self.screen_change:
                self._set_button_callbacks_game()
            self.control()
            self.crash()
            if self.eaten:
                self._draw_food()
            self.food_check()
        if self.status == DEAD:
            if self.screen_change:
                self._clear_button_callbacks()
            self.dead_time += delta_time * 1_000_000
            self._dead()
        if self.status == ERASE_DATA:
            if self.screen_change:
                self._erase_data_setup()
            self._erase_data_update()
        if self.status == DATA_DISPLAY:
            if self.screen_change:
                self._data_display_setup()
        if self.status == ENTER_INITIALS:
            if self.screen_change:
                self._enter_initials_setup()
            self._enter_initials_update()
        self._draw()

    def _draw(self) -> None:
        status = self.status
        if status == TITLE:
            self._title_screen()
            self._draw_snake()
        elif status in (NEW_GAME, OLD_GAME):
            self._old_game()
        elif status == DEAD:
            if self.dead_time <= DEAD_SHOW_GAME_MICROS:
                self._old_game()
            else:
                self._draw_dead()
        elif status == PAUSED:
            self._paused()
        elif status == ERASE_DATA:
            self._erase_data_draw()
        elif status == DATA_DISPLAY:
            self._data_display()
        elif status == ENTER_INITIALS:
            self._enter_initials_draw()

    # ----- title -------------------------------------------------------------

    def _title_screen(self) -> None:
        self.labels = []
        self.canvas.clear(BLACK)
        mid = self.canvas.width / 2
        self._label("SNAKE", mid, 8)
        self._label("WALL  FREE", 25, 30)
        self._label(f"SPEED: {self.speed}", mid, 52)
        self._label("SCORES", mid, 73)
        self._label("EXIT", mid, 95)

    def _snake_menu(self) -> None:
        self.snake_x = [0] * MAX_SNAKE_LENGTH
        self.snake_y = [0] * MAX_SNAKE_LENGTH
        self.dir_x = 1
        self.dir_y = 0
        self.snake_length = 30

    def _title_setup(self) -> None:
        self.menu_signal = 0
        self._clear_button_callbacks()
        self._snake_menu()

        def set_speed(value: int) -> Callable[[], None]:
            def handler() -> None:
                if self.menu_signal != 1:
                    return
                self.audio.play(MOVE_SOUND)
                self.speed = value
            return handler

        self._on(Button.NUM_1, set_speed(1))
        self._on(Button.NUM_2, set_speed(2))
        self._on(Button.NUM_3, set_speed(3))

        def right() -> None:
            self.audio.play(MOVE_SOUND)
            if self.menu_signal == 0:
                if self.border_flag:
                    self.border_flag = False
                    return
                self.menu_signal += 1
            else:
                self.menu_signal = (self.menu_signal + 1) % MENU_ENTRIES
                if self.menu_signal == 0:
                    self.border_flag = True

        def left() -> None:
            self.audio.play(MOVE_SOUND)
            if self.menu_signal == 0:
                if not self.border_flag:
                    self.border_flag = True
                    return
                self.menu_signal = MENU_ENTRIES - 1
            else:
                self.menu_signal -= 1
                if self.menu_signal == 0:
                    self.border_flag = False

        def select() -> None:
            if self.status != TITLE:
                return
            if self.menu_signal == 0:
                self.audio.play(CONFIRM_SOUND)
                self.status = NEW_GAME
                self.screen_change = True
            elif self.menu_signal == 1:
                self.audio.play(MOVE_SOUND)
                self.speed = self.speed % 3 + 1
            elif self.menu_signal == 2:
                self.audio.play(CONFIRM_SOUND)
                self.status = DATA_DISPLAY
            elif self.menu_signal == 3:
                self.audio.play(CANCEL_SOUND)
                self.pop()

        def back() -> None:
            self.audio.play(CANCEL_SOUND)
            self.pop()

        self._on(Button.RIGHT, right)
        self._on(Button.LEFT, left)
        self._on(Button.A, select)
        self._on(Button.B, back)

    def snake_menu_control(self) -> None:
        """Steer the title-screen snake clockwise around the screen edge."""
        width, height = self.canvas.width, self.canvas.height
        x, y = self.snake_x[0], self.snake_y[0]
        if x < width - 7 and y <= 1:
            self.dir_x, self.dir_y = self.speed, 0
        elif x >= width - 7 and y < height - 7:
            self.dir_x, self.dir_y = 0, self.speed
        elif x > 3 and y >= height - 7:
            self.dir_x, self.dir_y = -self.speed, 0
        elif x <= 1 and y > 3:
            self.dir_x, self.dir_y = 0, -self.speed

    # ----- snake movement ------------------------------------------------------

    def control(self) -> None:
        """Shift every segment one place back and move the head."""
        xs, ys, length = self.snake_x, self.snake_y, self.snake_length
        if self.bigger:
            xs[1:length - 5] = xs[0:length - 6]
            ys[1:length - 5] = ys[0:length - 6]
            tail_x, tail_y = xs[length - 7], ys[length - 7]
            xs[length - 5:length + 1] = [tail_x] * GROWTH
            ys[length - 5:length + 1] = [tail_y] * GROWTH
            self.bigger = False
        else:
            xs[1:length + 1] = xs[0:length]
            ys[1:length + 1] = ys[0:length]
        xs[0] += self.dir_x
        ys[0] += self.dir_y

    def _set_button_callbacks_game(self) -> None:
        self._clear_button_callbacks()

        def up() -> None:
            if self.dir_y == 0:
                self.dir_x, self.dir_y = 0, -self.speed

        def down() -> None:
            if self.dir_y == 0:
                self.dir_x, self.dir_y = 0, self.speed

        def right() -> None:
            if self.dir_x == 0:
                self.dir_x, self.dir_y = self.speed, 0

        def left() -> None:
            if self.dir_x == 0:
                self.dir_x, self.dir_y = -self.speed, 0

        def pause() -> None:
            self.status = PAUSED

        self._on(Button.NUM_2, up)
        self._on(Button.NUM_8, down)
        self._on(Button.NUM_6, right)
        self._on(Button.NUM_4, left)
        self._on(Button.B, pause)

    def new_game_setup(self) -> None:
        """Reset the snake, food and score for a new round."""
        width, height = self.canvas.width, self.canvas.height
        self.dead_time = 0.0
        self._set_button_callbacks_game()
        self.snake_x[1:401] = [width] * 400
        self.snake_y[1:401] = [height] * 400
        self.snake_x[0] = 10
        self.snake_y[0] = 63
        self.food_x = self._rng.randrange(3, width - 6)
        self.food_y = self._rng.randrange(3, height - 6)
        self.dir_x = int(1.3 * self.speed)
        self.dir_y = 0
        self.snake_length = 12
        self.h_score = 0
        self.status = OLD_GAME

    def crash(self) -> None:
        """End the round on a wall or self hit; without walls, wrap around."""
        width, height = self.canvas.width, self.canvas.height
        xs, ys = self.snake_x, self.snake_y
        if self.border_flag:
            if xs[0] <= 1 or ys[0] <= 1 or xs[0] >= width - 4 or ys[0] >= height - 4:
                self.status = DEAD
                self._clear_button_callbacks()
                self.audio.play(LOSE_SOUND)
        else:
            for i in range(self.snake_length):
                xs[i] = self._wrap(xs[i], width)
                ys[i] = self._wrap(ys[i], height)

        hx, hy = xs[0], ys[0]
        for i in range(1, self.snake_length):
            j = i + 10
            if j >= MAX_SNAKE_LENGTH:
                break
            bx, by = xs[j], ys[j]
            if ((hx in (bx, bx + 4) and hy in (by, by + 4))
                    or (hx + 4 in (bx, bx + 4) and hy + 4 in (by, by + 4))):
                self.status = DEAD
                self.audio.play(LOSE_SOUND)

    @staticmethod
    def _wrap(value: int, size: int) -> int:
        if -8 < value <= 0 or value < -5:
            return size - 1
        return value % size

    # ----- food ------------------------------------------------------------------

    def _pixel_free(self, px: int, py: int) -> bool:
        width, height = self.canvas.width, self.canvas.height
        if self.border_flag and (px in (0, width - 1) or py in (0, height - 1)):
            return False
        for sx, sy in zip(self.snake_x[:self.snake_length], self.snake_y[:self.snake_length]):
            if sx <= px < sx + TILE_SIZE and sy <= py < sy + TILE_SIZE:
                return False
        return True

    def _draw_food(self) -> None:
        width, height = self.canvas.width, self.canvas.height
        while True:
            fx = self._rng.randrange(3, width - 6)
            fy = self._rng.randrange(3, height - 6)
            if all(self._pixel_free(fx + dx, fy + dy)
                   for dx in range(FOOD_SIZE) for dy in range(FOOD_SIZE)):
                break
        self.food_x, self.food_y = fx, fy
        self.eaten = False

    def _is_food(self, px: int, py: int) -> bool:
        if not (0 <= px < self.canvas.width and 0 <= py < self.canvas.height):
            return False
        return (self.food_x <= px < self.food_x + FOOD_SIZE
                and self.food_y <= py < self.food_y + FOOD_SIZE)

    def food_check(self) -> None:
        """Grow the snake when a corner of its head touches the food."""
        hx, hy = self.snake_x[0], self.snake_y[0]
        corners = ((hx, hy), (hx + 4, hy), (hx, hy + 4), (hx + 4, hy + 4))
        self.eaten = any(self._is_food(px, py) for px, py in corners)
        if self.eaten:
            self.snake_length = min(self.snake_length + GROWTH, MAX_SNAKE_LENGTH - 11)
            self.h_score += self.speed
            self.audio.play(EAT_SOUND)
            self.bigger = True

    # ----- game screens ----------------------------------------------------------

    def _draw_head(self) -> None:
        x, y = self.snake_x[0], self.snake_y[0]
        if self.dir_x > 0:
            self._outline(x + 3, y + 1, 2, 3, RED)
            self._pixel(x, y + 1, EYE_COLOR)
            self._pixel(x + 1, y + 1, BLACK)
            self._pixel(x, y + 3, BLACK)
            self._pixel(x + 1, y + 3, BLACK)
        elif self.dir_x < 0:
            self._fill(x, y + 1, 2, 3, RED)
            self._pixel(x + 3, y + 1, BLACK)
            self._pixel(x + 3, y + 3, BLACK)
            self._pixel(x + 4, y + 1, BLACK)
            self._pixel(x + 4, y + 3, BLACK)
        elif self.dir_y > 0:
            self._fill(x + 1, y + 3, 3, 2, RED)
            self._pixel(x + 1, y, BLACK)
            self._pixel(x + 3, y, BLACK)
            self._pixel(x + 1, y + 1, BLACK)
            self._pixel(x + 3, y + 1, BLACK)
        elif self.dir_y < 0:
            self._fill(x + 1, y, 3, 2, RED)
            self._pixel(x + 1, y + 3, BLACK)
            self._pixel(x + 3, y + 3, BLACK)
            self._pixel(x + 1, y + 4, BLACK)
            self._pixel(x + 3, y + 4, BLACK)

    def _draw_snake(self) -> None:
        length = self.snake_length
        if length == 0:
            return
        for i in range(length - 1, -1, -1):
            color = DARK_GREEN if i > length - 10 else GREEN
            self._fill(self.snake_x[i], self.snake_y[i], TILE_SIZE, TILE_SIZE, color)
        self._draw_head()

    def _old_game(self) -> None:
        canvas = self.canvas
        self.labels = []
        canvas.clear(BLACK)
        if self.border_flag:
            self._outline(0, 0, canvas.width, canvas.height, WHITE)
        if self.eaten:
            self._fill(self.food_x, self.food_y, FOOD_SIZE, FOOD_SIZE, BLACK)
        self._draw_snake()
        if self.eaten:
            self._draw_food()
        self._fill(self.food_x, self.food_y, FOOD_SIZE, FOOD_SIZE, YELLOW)
        self._label(f"SCORE:{self.h_score}", 6, canvas.height - 15)

    def _dead(self) -> None:
        if self.dead_time > DEAD_SCREEN_MICROS:
            self.screen_change = True
            self.status = ENTER_INITIALS

    def _draw_dead(self) -> None:
        self.labels = []
        self.canvas.clear(BLACK)
        mid = self.canvas.width / 2
        self._label("GAME OVER", mid, 5)
        self._label("Your score:", mid, 48)
        self._label(str(self.h_score), mid, 62)

    def _paused_setup(self) -> None:
        self._clear_button_callbacks()
        self._on(Button.B, lambda: setattr(self, "status", TITLE))
        self._on(Button.A, lambda: setattr(self, "status", OLD_GAME))

    def _paused(self) -> None:
        canvas = self.canvas
        self.labels = []
        canvas.clear(BLACK)
        self._draw_snake()
        self._fill(self.food_x, self.food_y, FOOD_SIZE, FOOD_SIZE, YELLOW)
        if self.border_flag:
            self._outline(0, 0, canvas.width, canvas.height, WHITE)
        mid = canvas.width / 2
        self._label(f"SCORE:{self.h_score}", 6, canvas.width - 18)
        self._label("PAUSED", mid, 35)
        self._label("Press ENTER to play", mid, 65)
        self._label("Press BACK to exit", mid, 80)

    # ----- high scores -------------------------------------------------------------

    def _enter_initials_setup(self) -> None:
        self.temp_score = self.highscore.get(0).score if self.highscore.count() else 0
        self.name = list("AAA")
        self.char_cursor = 0
        self.elapsed_millis = self._clock()
        self.hiscore_millis = self._clock()
        self.blink_state = True
        self.hiscore_blink = False
        self._clear_button_callbacks()

        if self._input is None:
            def next_char() -> None:
                if self.char_cursor < 2:
                    self.char_cursor += 1
                self._restart_blink()

            def prev_char() -> None:
                if self.char_cursor > 0:
                    self.char_cursor -= 1
                self._restart_blink()

            def set_char(char: str) -> None:
                self._restart_blink()
                self.name[self.char_cursor] = char.upper()

            self._input = TextInput(clock=self._clock)
            self._input.set_callbacks(next_char, prev_char, set_char)
            self._input.start()

        def confirm() -> None:
            self.highscore.add(Score("".join(self.name), self.h_score))
            self.status = DATA_DISPLAY
            self._drop_input()
            self.audio.play(CONFIRM_SOUND)

        self._on(Button.A, confirm)

    def _restart_blink(self) -> None:
        self.blink_state = True
        self.elapsed_millis = self._clock()

    def _enter_initials_update(self) -> None:
        now = self._clock()
        if now - self.elapsed_millis >= CURSOR_BLINK_MS:
            self.elapsed_millis = now
            self.blink_state = not self.blink_state
        if now - self.hiscore_millis >= HIGHSCORE_BLINK_MS:
            self.hiscore_millis = now
            self.hiscore_blink = not self.hiscore_blink

    def _enter_initials_draw(self) -> None:
        self.labels = []
        self.canvas.clear(BLACK)
        mid = self.canvas.width / 2
        self._label("ENTER NAME", mid, 8)
        if self.hiscore_blink and self.h_score > self.temp_score:
            self._label("NEW HIGH!", mid, 80)
        else:
            self._label(f"SCORE: {self.h_score:04d}", 39, 80)
        for i, char in enumerate(self.name):
            self._label(char, 66 + 15 * i, 40)
        if self.blink_state:
            self._fill(63 + 15 * self.char_cursor, 54, 12, 1, WHITE)

    def _data_display_setup(self) -> None:
        self._clear_button_callbacks()

        def leave() -> None:
            self.audio.play(CANCEL_SOUND)
            self.status = TITLE

        self._on(Button.UP, lambda: setattr(self, "status", ERASE_DATA))
        self._on(Button.A, leave)
        self._on(Button.B, leave)

    def _data_display(self) -> None:
        self.labels = []
        self.canvas.clear(BLACK)
        mid = self.canvas.width / 2
        self._label("HIGHSCORES", mid, -2)
        for i in range(1, 6):
            if i <= self.highscore.count():
                entry = self.highscore.get(i - 1)
                text = f"{i}.   {entry.name:.3}    {entry.score:04d}"
            else:
                text = f"{i}.    ---   ----"
            self._label(text, 22, 2 + i * 16)
        self._label("Press LEFT to erase", mid, 105)

    def _erase_data_setup(self) -> None:
        self.elapsed_millis = self._clock()
        self.blink_state = True
        self._clear_button_callbacks()

        def erase() -> None:
            self.highscore.clear()
            self.status = TITLE

        self._on(Button.B, lambda: setattr(self, "status", DATA_DISPLAY))
        self._on(Button.A, erase)

    def _erase_data_draw(self) -> None:
        self.labels = []
        self.canvas.clear(BLACK)
        mid = self.canvas.width / 2
        self._label("ARE YOU SURE?", mid, 17)
        self._label("This cannot be reverted!", mid, 37)
        self._label("BACK: Cancel", mid, 105)
        self._label("ENTER:", 25, 81)
        if self.blink_state:
            self._outline(72, 64, 60, 18, RED)
        else:
            self._fill(72, 64, 60, 18, RED)
        self._label("DELETE", 79, 81)

    def _erase_data_update(self) -> None:
        now = self._clock()
        if now - self.elapsed_millis >= CURSOR_BLINK_MS:
            self.elapsed_millis = now
            self.blink_state = not self.blink_state