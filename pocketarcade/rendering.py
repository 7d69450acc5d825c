"""Pixel canvas and the render components that draw game objects onto it."""

from __future__ import annotations

import logging
import math
import struct
from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Callable, Iterable, Optional, Protocol, Union

from pocketarcade.geometry import Vec2

logger = logging.getLogger(__name__)

_INFINITE = "infinite"

IconSource = Union[bytes, bytearray, memoryview, BinaryIO, None]


class Canvas:
    """A rectangular grid of 16-bit colour values with clipped drawing."""

    TRANSPARENT = 0x0120

    def __init__(self, width: int, height: int, color: int = 0):
        if width < 0 or height < 0:
            raise ValueError("canvas size must not be negative")
        self.width = int(width)
        self.height = int(height)
        self._rows = [[color] * self.width for _ in range(self.height)]

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def pixel(self, x: int, y: int) -> int:
        """Colour at (x, y); raises IndexError outside the canvas."""
        x, y = int(x), int(y)
        if not self._inside(x, y):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} canvas")
        return self._rows[y][x]

    def clear(self, color: int = 0) -> None:
        for row in self._rows:
            row[:] = [color] * self.width

    def draw_pixel(self, x: int, y: int, color: int) -> None:
        x, y = int(x), int(y)
        if self._inside(x, y):
            self._rows[y][x] = color

    def fill_rect(self, x: int, y: int, w: int, h: int, color: int) -> None:
        x, y, w, h = int(x), int(y), int(w), int(h)
        x0, x1 = max(x, 0), min(x + w, self.width)
        y0, y1 = max(y, 0), min(y + h, self.height)
        if x0 >= x1 or y0 >= y1:
            return
        for row in self._rows[y0:y1]:
            row[x0:x1] = [color] * (x1 - x0)

    def draw_line(self, x0: int, y0: int, x1: int, y1: int, color: int) -> None:
        x0, y0, x1, y1 = int(x0), int(y0), int(x1), int(y1)
        dx, sx = abs(x1 - x0), (1 if x0 < x1 else -1)
        dy, sy = -abs(y1 - y0), (1 if y0 < y1 else -1)
        err = dx + dy
        while True:
            self.draw_pixel(x0, y0, color)
            if x0 == x1 and y0 == y1:
                return
            e2 = 2 * err
            if e2 >= dy:
                err += dy
                x0 += sx
            if e2 <= dx:
                err += dx
                y0 += sy

    def draw_rect(self, x: int, y: int, w: int, h: int, color: int) -> None:
        x, y, w, h = int(x), int(y), int(w), int(h)
        if w <= 0 or h <= 0:
            return
        right, bottom = x + w - 1, y + h - 1
        self.draw_line(x, y, right, y, color)
        self.draw_line(x, bottom, right, bottom, color)
        self.draw_line(x, y, x, bottom, color)
        self.draw_line(right, y, right, bottom, color)

    def draw_circle(self, cx: float, cy: float, radius: float, color: int) -> None:
        cx, cy, r = int(cx), int(cy), int(round(radius))
        if r < 0:
            return
        x, y, err = r, 0, 1 - r
        while x >= y:
            for px, py in ((x, y), (y, x), (-y, x), (-x, y), (-x, -y), (-y, -x), (y, -x), (x, -y)):
                self.draw_pixel(cx + px, cy + py, color)
            y += 1
            if err < 0:
                err += 2 * y + 1
            else:
                x -= 1
                err += 2 * (y - x) + 1

    def draw_icon(self, data: bytes, x: int, y: int, w: int, h: int,
                  transparent: Optional[int] = None) -> None:
        """Draw raw little-endian RGB565 pixels of a ``w`` x ``h`` image."""
        x, y, w, h = int(x), int(y), int(w), int(h)
        if w <= 0 or h <= 0:
            return
        count = min(w * h, len(data) // 2)
        for i, color in enumerate(struct.unpack_from(f"<{count}H", data)):
            if color == transparent:
                continue
            row, col = divmod(i, w)
            self.draw_pixel(x + col, y + row, color)

    def push(self, parent: Canvas, x: int, y: int, transparent: Optional[int] = None) -> None:
        """Copy this canvas onto ``parent`` with its top-left at (x, y)."""
        x, y = int(x), int(y)
        for row_index, row in enumerate(self._rows):
            for col_index, color in enumerate(row):
                if color != transparent:
                    parent.draw_pixel(x + col_index, y + row_index, color)

    def push_rotated(self, parent: Canvas, cx: float, cy: float, degrees: float,
                     transparent: Optional[int] = None) -> None:
        """Copy this canvas onto ``parent`` rotated by ``degrees`` around (cx, cy).

        The centre of this canvas lands on (cx, cy); sampling is nearest-neighbour.
        """
        radians = math.radians(degrees)
        cos, sin = math.cos(radians), math.sin(radians)
        reach = math.hypot(self.width, self.height) / 2
        half_w, half_h = self.width / 2, self.height / 2
        for dy in range(math.floor(cy - reach), math.ceil(cy + reach) + 1):
            for dx in range(math.floor(cx - reach), math.ceil(cx + reach) + 1):
                rx, ry = dx + 0.5 - cx, dy + 0.5 - cy
                sx = math.floor(rx * cos + ry * sin + half_w)
                sy = math.floor(-rx * sin + ry * cos + half_h)
                if not self._inside(sx, sy):
                    continue
                color = self._rows[sy][sx]
                if color != transparent:
                    parent.draw_pixel(dx, dy, color)


class RenderComponent(ABC):
    """Something that draws a game object; lower layers are drawn first."""

    def __init__(self) -> None:
        self.layer = 0
        self.visible = True

    @abstractmethod
    def push(self, canvas: Canvas, pos: Iterable[int], rot: float) -> None:
        """Draw onto ``canvas`` at ``pos`` (top-left), rotated by ``rot`` degrees."""


class SpriteRC(RenderComponent):
    """Draws an owned sprite canvas that callers paint on freely."""

    def __init__(self, dim: Iterable[float]):
        super().__init__()
        width, height = (int(v) for v in dim)
        self._sprite = Canvas(width, height)

    @property
    def sprite(self) -> Canvas:
        return self._sprite

    def push(self, canvas: Canvas, pos: Iterable[int], rot: float) -> None:
        x, y = (int(v) for v in pos)
        if rot == 0:
            self._sprite.push(canvas, x, y, Canvas.TRANSPARENT)
        else:
            self._sprite.push_rotated(canvas, x + self._sprite.width // 2,
                                      y + self._sprite.height // 2, rot, Canvas.TRANSPARENT)


def _icon_bytes(file: IconSource) -> Optional[bytes]:
    if file is None:
        return None
    if isinstance(file, (bytes, bytearray, memoryview)):
        return bytes(file)
    if getattr(file, "closed", False):
        return None
    file.seek(0)
    return file.read()


class StaticRC(RenderComponent):
    """Draws a raw RGB565 image of size ``dim`` read from bytes or a binary file."""

    def __init__(self, file: IconSource, dim: Iterable[float]):
        super().__init__()
        self.file = file
        self.dim = Vec2(*dim)

    def set_file(self, file: IconSource, dim: Optional[Iterable[float]] = None) -> None:
        """Replace the image, and its size when ``dim`` is given."""
        self.file = file
        if dim is not None:
            self.dim = Vec2(*dim)

    def push(self, canvas: Canvas, pos: Iterable[int], rot: float) -> None:
        data = _icon_bytes(self.file)
        if data is None:
            logger.error("StaticRC: pushing closed file")
            return

        x, y = (int(v) for v in pos)
        w, h = int(self.dim.x), int(self.dim.y)
        if rot == 0:
            canvas.draw_icon(data, x, y, w, h, Canvas.TRANSPARENT)
        else:
            rotated = Canvas(w, h, Canvas.TRANSPARENT)
            rotated.draw_icon(data, 0, 0, w, h, Canvas.TRANSPARENT)
            rotated.push_rotated(canvas, x + w // 2, y + h // 2, rot, Canvas.TRANSPARENT)


class _Animation(Protocol):
    def start(self) -> None: ...
    def stop(self) -> None: ...
    def reset(self) -> None: ...
    def set_loop_mode(self, mode: Any) -> None: ...
    def set_loop_done_callback(self, callback: Optional[Callable[[int], None]]) -> None: ...
    def push(self, canvas: Canvas, x: int, y: int) -> None: ...
    def push_rotated(self, canvas: Canvas, x: int, y: int, degrees: float) -> None: ...


class AnimRC(RenderComponent):
    """Draws a playing animation; the animation may be replaced while running."""

    def __init__(self, animation: Optional[_Animation], loop_mode: Any = _INFINITE):
        super().__init__()
        self._animation = animation
        self._playing = False
        self._loop_mode = loop_mode
        if animation is not None:
            animation.set_loop_mode(loop_mode)

    @property
    def animation(self) -> Optional[_Animation]:
        return self._animation

    @property
    def playing(self) -> bool:
        return self._playing

    @property
    def loop_mode(self) -> Any:
        return self._loop_mode

    def set_anim(self, animation: Optional[_Animation]) -> None:
        """Swap the animation, carrying over the loop mode and playing state."""
        if self._animation is not None:
            self._animation.stop()
        self._animation = animation
        if animation is None:
            return
        animation.set_loop_mode(self._loop_mode)
        if self._playing:
            animation.start()

    def set_loop_done_callback(self, callback: Optional[Callable[[int], None]]) -> None:
        """Call ``callback`` whenever the animation loops; ``None`` clears it."""
        if self._animation is not None:
            self._animation.set_loop_done_callback(callback)

    def set_loop_mode(self, mode: Any) -> None:
        self._loop_mode = mode
        if self._animation is not None:
            self._animation.set_loop_mode(mode)

    def start(self) -> None:
        if self._playing:
            return
        if self._animation is not None:
            self._animation.start()
        self._playing = True

    def stop(self) -> None:
        if not self._playing:
            return
        if self._animation is not None:
            self._animation.stop()
        self._playing = False

    def reset(self) -> None:
        if self._animation is not None:
            self._animation.reset()

    def push(self, canvas: Canvas, pos: Iterable[int], rot: float) -> None:
        if self._animation is None:
            return
        x, y = (int(v) for v in pos)
        if rot == 0:
            self._animation.push(canvas, x, y)
        else:
            self._animation.push_rotated(canvas, x, y, rot)