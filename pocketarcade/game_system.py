"""Base class for systems that run over every object of a game."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pocketarcade.game_object import GameObject


class GameSystem(ABC):
    """A per-frame system bound to a game.

    The game must expose its objects as an iterable ``objects`` attribute.
    """

    def __init__(self, game: Any):
        self._game = game

    @property
    def game(self) -> Any:
        return self._game

    def objects(self) -> tuple[GameObject, ...]:
        """A snapshot of the game's current objects."""
        return tuple(self._game.objects)

    @abstractmethod
    def update(self, delta_micros: int) -> None:
        """Advance the system by ``delta_micros`` microseconds."""