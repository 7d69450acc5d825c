"""Loading of game resource files, optionally into memory and decompressed."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Optional, Union

logger = logging.getLogger(__name__)

COMMON_ROOT = "/Games/Common"


@dataclass(frozen=True)
class CompParams:
    """Compression parameters; true only when both are set."""

    lookahead: int = 0
    expansion: int = 0

    def __bool__(self) -> bool:
        return bool(self.lookahead and self.expansion)


@dataclass(frozen=True)
class ResDescriptor:
    """A resource to load.

    A path starting with ``c`` names a file in the shared common directory;
    the leading ``c`` is dropped to form the lookup key.
    """

    path: str
    comp_params: CompParams = field(default_factory=CompParams)
    in_ram: bool = False


RES_HEART = ResDescriptor("c/heart.raw", in_ram=True)
RES_GOBLET = ResDescriptor("c/goblet.raw", in_ram=True)
FILE_HEART = "/heart.raw"
FILE_GOBLET = "/goblet.raw"

Decompressor = Callable[[bytes, CompParams], bytes]


class ResourceManager:
    """Opens resources below ``root`` inside ``base_dir`` and hands them out by path."""

    def __init__(self, root: str, base_dir: Union[str, Path] = ".",
                 decompressor: Optional[Decompressor] = None):
        self._root = root
        self._base = Path(base_dir)
        self._decompressor = decompressor
        self._resources: dict[str, BinaryIO] = {}

    def load(self, descriptors: Iterable[ResDescriptor]) -> None:
        """Open every descriptor; missing files are logged and skipped."""
        for descriptor in descriptors:
            key = descriptor.path
            if key.startswith("c"):
                key = key[1:]
                full = COMMON_ROOT + key
            else:
                full = self._root + key

            location = self._base / full.lstrip("/")
            try:
                original = open(location, "rb")
            except OSError:
                logger.error("ResMan: failed to load resource %s", full)
                continue

            if not descriptor.in_ram:
                self._put(key, original)
                continue

            with original:
                data = original.read()
            if descriptor.comp_params:
                if self._decompressor is None:
                    raise ValueError(f"no decompressor for compressed resource {full}")
                data = self._decompressor(data, descriptor.comp_params)
            self._put(key, io.BytesIO(data))

    def _put(self, key: str, file: BinaryIO) -> None:
        previous = self._resources.get(key)
        if previous is not None and previous is not file:
            previous.close()
        self._resources[key] = file

    def get_resource(self, path: str) -> Optional[BinaryIO]:
        """The resource rewound to its start, or ``None`` if it was not loaded."""
        file = self._resources.get(path)
        if file is None:
            return None
        file.seek(0)
        return file

    def __contains__(self, path: object) -> bool:
        return path in self._resources

    def close(self) -> None:
        for file in self._resources.values():
            file.close()
        self._resources.clear()

    def __enter__(self) -> ResourceManager:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()