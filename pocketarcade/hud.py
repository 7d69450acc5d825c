"""On-screen lives and score counters shared by the games."""

from __future__ import annotations

from typing import BinaryIO, Optional, Union

from pocketarcade.game_object import GameObject
from pocketarcade.rendering import Canvas, SpriteRC

IconFile = Union[bytes, bytearray, memoryview, BinaryIO, None]

HUD_LAYER = 10
HEARTS_DIM = (25, 6)
HEART_WIDTH = 7
HEART_HEIGHT = 6
HEART_SPACING = 9
SCORE_DIM = (28, 8)
GOBLET_SIZE = 7


def _read_icon(file: IconFile) -> Optional[bytes]:
    """The raw bytes of an icon given as bytes or as an open binary file."""
    if file is None:
        return None
    if isinstance(file, (bytes, bytearray, memoryview)):
        return bytes(file)
    if getattr(file, "closed", False):
        return None
    file.seek(0)
    return file.read()


class Hearts:
    """A row of heart icons showing the remaining lives; starts with three."""

    def __init__(self, heart: IconFile):
        self._heart = heart
        self._component = SpriteRC(HEARTS_DIM)
        self._component.layer = HUD_LAYER
        self._go = GameObject(self._component, None)
        self._lives = 0
        self.set_lives(3)

    @property
    def go(self) -> GameObject:
        return self._go

    @property
    def sprite(self) -> Canvas:
        return self._component.sprite

    @property
    def lives(self) -> int:
        return self._lives

    def set_lives(self, lives: int) -> None:
        self._lives = lives
        sprite = self.sprite
        sprite.clear(Canvas.TRANSPARENT)
        data = _read_icon(self._heart)
        if data is None:
            return
        for i in range(lives):
            sprite.draw_icon(data, i * HEART_SPACING, 0, HEART_WIDTH, HEART_HEIGHT,
                             Canvas.TRANSPARENT)


class ScoreDisplay:
    """A score counter with an icon at its right edge; starts at zero.

    The canvas has no font, so the right-aligned number is kept in ``text``.
    """

    def __init__(self, icon: IconFile):
        self._icon = icon
        self._component = SpriteRC(SCORE_DIM)
        self._component.layer = HUD_LAYER
        self._go = GameObject(self._component, None)
        self.score = 0
        self.text = ""
        self.set_score(0)

    @property
    def go(self) -> GameObject:
        return self._go

    @property
    def sprite(self) -> Canvas:
        return self._component.sprite

    def set_score(self, score: int) -> None:
        self.score = score
        self.text = f"{score:3d}"
        sprite = self.sprite
        sprite.clear(Canvas.TRANSPARENT)
        data = _read_icon(self._icon)
        if data is not None:
            sprite.draw_icon(data, SCORE_DIM[0] - GOBLET_SIZE, 0, GOBLET_SIZE, GOBLET_SIZE,
                             Canvas.TRANSPARENT)