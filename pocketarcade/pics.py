"""Profile pictures stored on the device filesystem."""

from __future__ import annotations

from dataclasses import dataclass

PICS_DIR = "S:/Pics/"


@dataclass(frozen=True)
class Pic:
    """A picture file by name."""

    name: str

    def is_gif(self) -> bool:
        return self.name.lower().endswith(".gif")

    def path(self) -> str:
        return PICS_DIR + self.name


PICS = tuple(Pic(f"{i}.bin") for i in range(8))