"""Draws every visible object of a game, layer by layer."""

from __future__ import annotations

import math
from collections import defaultdict
from typing import Any

from pocketarcade.game_object import GameObject
from pocketarcade.game_system import GameSystem
from pocketarcade.rendering import Canvas


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class RenderSystem(GameSystem):
    """Pushes each visible render component onto ``canvas``, lowest layer first."""

    def __init__(self, game: Any, canvas: Canvas):
        super().__init__(game)
        self._canvas = canvas

    @property
    def canvas(self) -> Canvas:
        return self._canvas

    def update(self, delta_micros: int) -> None:
        layers: dict[int, list[GameObject]] = defaultdict(list)
        for obj in self.objects():
            component = obj.render_component
            if component is None or not component.visible:
                continue
            layers[component.layer].append(obj)

        for layer in sorted(layers):
            for obj in layers[layer]:
                pos = (_round_half_away(obj.pos.x), _round_half_away(obj.pos.y))
                obj.render_component.push(self._canvas, pos, obj.rot)