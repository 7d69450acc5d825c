"""Multi-tap text entry on a numeric keypad."""

from __future__ import annotations

import enum
import time
from typing import Callable, Optional


class Button(enum.Enum):
    """Device buttons; A, B, UP and DOWN are aliases of ENTER, BACK, LEFT and RIGHT."""

    NUM_1 = 1
    NUM_2 = 2
    NUM_3 = 3
    NUM_4 = 4
    NUM_5 = 5
    NUM_6 = 6
    NUM_7 = 7
    NUM_8 = 8
    NUM_9 = 9
    NUM_0 = 10
    L = 11
    R = 12
    LEFT = 13
    RIGHT = 14
    ENTER = 15
    BACK = 16
    A = 15
    B = 16
    UP = 13
    DOWN = 14


CHARACTERS = (
    ".,?!+-:()*1",
    "abc2",
    "def3",
    "ghi4",
    "jkl5",
    "mno6",
    "pqrs7",
    "tuv8",
    "wxyz9",
    " 0",
)

KEY_MAP = {
    Button.NUM_1: 0,
    Button.NUM_2: 1,
    Button.NUM_3: 2,
    Button.NUM_4: 3,
    Button.NUM_5: 4,
    Button.NUM_6: 5,
    Button.NUM_7: 6,
    Button.NUM_8: 7,
    Button.NUM_9: 8,
    Button.NUM_0: 9,
}

COMMIT_DELAY_MS = 1000


def _millis() -> float:
    return time.monotonic() * 1000.0


class TextInput:
    """Turns key presses into set/next/previous character events.

    Pressing a number key repeatedly within :data:`COMMIT_DELAY_MS` cycles
    through its letters; waiting longer moves on to the next character.
    ``clock`` returns the current time in milliseconds.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or _millis
        self._on_next_char: Callable[[], None] = lambda: None
        self._on_prev_char: Callable[[], None] = lambda: None
        self._on_set_char: Callable[[str], None] = lambda char: None
        self._listening = False
        self._waiting = False
        self._current_key: Optional[int] = None
        self._index = 0
        self._key_time: Optional[float] = None

    @property
    def listening(self) -> bool:
        return self._listening

    def set_callbacks(
        self,
        on_next_char: Callable[[], None],
        on_prev_char: Callable[[], None],
        on_set_char: Callable[[str], None],
    ) -> None:
        self._on_next_char = on_next_char
        self._on_prev_char = on_prev_char
        self._on_set_char = on_set_char

    def start(self) -> None:
        self._listening = True

    def stop(self) -> None:
        self._listening = False
        self._reset()

    def _reset(self) -> None:
        self._key_time = None
        self._current_key = None
        self._waiting = False

    def button_pressed(self, button: Button) -> None:
        if not self._listening:
            return

        if button in (Button.LEFT, Button.RIGHT):
            self._reset()
            if button is Button.RIGHT:
                self._on_next_char()
            else:
                self._on_prev_char()
            return

        if button in (Button.ENTER, Button.BACK, Button.R):
            return

        self._key_press(button)

    def _key_press(self, button: Button) -> None:
        if button is Button.L:
            self._reset()
            self._on_set_char(" ")
            self._on_prev_char()
            return

        key = KEY_MAP.get(button)
        if key is None:
            return
        chars = CHARACTERS[key]

        if key == self._current_key and self._key_time is not None:
            self._index = (self._index + 1) % len(chars)
        else:
            if self._current_key is not None:
                self._on_next_char()
            self._current_key = key
            self._index = 0
        self._on_set_char(chars[self._index])

        self._waiting = True
        self._key_time = self._clock()

    def loop(self, micros: int) -> None:
        """Commit the pending character once the key has been idle long enough."""
        if not self._waiting or self._key_time is None:
            return
        if self._clock() - self._key_time < COMMIT_DELAY_MS:
            return
        self._reset()
        self._on_next_char()