"""Game objects: a position and rotation with optional render and collision parts."""

from __future__ import annotations

from typing import Iterable, Optional

from pocketarcade.collision_components import CollisionComponent
from pocketarcade.geometry import Vec2
from pocketarcade.rendering import RenderComponent


class GameObject:
    """An entity placed in the game world.

    Objects compare and hash by identity, so they can be kept in sets and
    used as keys even when two share the same position.
    """

    def __init__(
        self,
        render_component: Optional[RenderComponent] = None,
        collision_component: Optional[CollisionComponent] = None,
        pos: Iterable[float] = (0.0, 0.0),
        rot: float = 0.0,
    ):
        self._render_component = render_component
        self._collision_component = collision_component
        self.pos = Vec2(*pos)
        self.rot = float(rot)

    @property
    def render_component(self) -> Optional[RenderComponent]:
        return self._render_component

    @property
    def collision_component(self) -> Optional[CollisionComponent]:
        return self._collision_component

    def __repr__(self) -> str:
        return f"GameObject(pos={self.pos!r}, rot={self.rot!r})"