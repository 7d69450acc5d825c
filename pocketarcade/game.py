"""Base class for games: resources, objects, collision and rendering per frame."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, BinaryIO, Callable, Iterable, Optional, Sequence, Union

from pocketarcade.collision import SCREEN_HEIGHT, SCREEN_WIDTH, CollisionSystem
from pocketarcade.game_object import GameObject
from pocketarcade.render_system import RenderSystem
from pocketarcade.rendering import Canvas
from pocketarcade.resources import Decompressor, ResDescriptor, ResourceManager

logger = logging.getLogger(__name__)

Sound = Sequence[tuple[int, int, int]]


class _SilentAudio:
    """Audio sink that plays nothing."""

    def play(self, sound: Sound) -> None:
        pass

    def stop(self) -> None:
        pass


class Game:
    """A game driven by repeated :meth:`loop` calls from its host.

    Subclasses override the ``on_*`` hooks. After :meth:`pop` the game stops
    at the end of the current frame, closes its resources and starts
    ``games_screen`` again, if one was given.
    """

    def __init__(
        self,
        games_screen: Any = None,
        root: str = "",
        resources: Iterable[ResDescriptor] = (),
        *,
        canvas: Optional[Canvas] = None,
        base_dir: Union[str, Path] = ".",
        audio: Any = None,
        commit: Optional[Callable[[], None]] = None,
        decompressor: Optional[Decompressor] = None,
    ):
        self._games_screen = games_screen
        self._resource_list = tuple(resources)
        self._res_man = ResourceManager(root, base_dir, decompressor)
        self.canvas = canvas if canvas is not None else Canvas(SCREEN_WIDTH, SCREEN_HEIGHT)
        self.audio = audio if audio is not None else _SilentAudio()
        self._commit = commit
        self._objects: dict[GameObject, None] = {}
        self.collision = CollisionSystem(self)
        self._render = RenderSystem(self, self.canvas)
        self._loaded = False
        self._loading = False
        self._started = False
        self._popped = False

    @property
    def games_screen(self) -> Any:
        return self._games_screen

    @property
    def objects(self) -> tuple[GameObject, ...]:
        return tuple(self._objects)

    @property
    def started(self) -> bool:
        return self._started

    @property
    def popped(self) -> bool:
        return self._popped

    def load(self) -> None:
        """Load the resources and run :meth:`on_load`, once."""
        if self._loaded or self._loading:
            return
        self._loading = True
        try:
            self._res_man.load(self._resource_list)
            self.on_load()
            self._loaded = True
        finally:
            self._loading = False

    def is_loaded(self) -> bool:
        return self._loaded

    def start(self) -> None:
        if self._started:
            return
        if not self._loaded:
            logger.error("Game: attempting to start a game that wasn't loaded")
            return
        self._started = True
        self.on_start()

    def stop(self) -> None:
        if not self._started:
            return
        self.on_stop()
        self._started = False

    def pop(self) -> None:
        """Leave the game at the end of the current frame."""
        self._popped = True

    def get_file(self, path: str) -> Optional[BinaryIO]:
        return self._res_man.get_resource(path)

    def add_object(self, obj: GameObject) -> None:
        self._objects[obj] = None

    def remove_object(self, obj: GameObject) -> None:
        self.collision.remove_object(obj)
        self._objects.pop(obj, None)

    def loop(self, micros: int) -> None:
        """Run one frame of ``micros`` microseconds."""
        if not self._started:
            return

        if not self._popped:
            self.collision.update(micros)
            self.on_loop(micros / 1_000_000)
        if not self._popped:
            self._render.update(micros)
            self.on_render(self.canvas)
        if not self._popped:
            if self._commit is not None:
                self._commit()
            return

        self._exit()

    def _exit(self) -> None:
        self.stop()
        self.audio.stop()
        self._res_man.close()
        if self._games_screen is not None:
            self._games_screen.start()

    def on_start(self) -> None:
        pass

    def on_stop(self) -> None:
        pass

    def on_load(self) -> None:
        pass

    def on_loop(self, delta_time: float) -> None:
        pass

    def on_render(self, canvas: Canvas) -> None:
        pass