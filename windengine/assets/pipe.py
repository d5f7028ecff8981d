"""Asset pipe base class, asset identifiers and the pipe register."""

from __future__ import annotations

import logging
import struct
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, BinaryIO, Iterable, Iterator

logger = logging.getLogger(__name__)

ASSET_ID = struct.Struct("<I")

_FNV_OFFSET = 0x811C9DC5
_FNV_PRIME = 0x01000193


def asset_hash(text: str) -> int:
    """Return the 32-bit asset identifier of ``text`` (FNV-1a over UTF-8)."""
    value = _FNV_OFFSET
    for byte in text.encode("utf-8"):
        value ^= byte
        value = (value * _FNV_PRIME) & 0xFFFFFFFF
    return value


class AssetPipe(ABC):
    """Compiles a source file into a cache file and loads it back."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.id = asset_hash(name)
        self.options: Any = None

    def configure(self, config: Any) -> None:
        """Keep the export options for the next compilation."""
        self.options = config

    @abstractmethod
    def compile(self, source: str | Path, destination: str | Path) -> None:
        """Write the compiled form of ``source`` to ``destination``."""

    @abstractmethod
    def load(self, stream: BinaryIO) -> Any:
        """Read an asset positioned just after its pipe identifier."""


class PipeRegister:
    """Looks pipes up by identifier."""

    def __init__(self, pipes: Iterable[AssetPipe] = ()) -> None:
        self._pipes = list(pipes)

    def get_pipe(self, pipe_id: int) -> AssetPipe | None:
        return next((pipe for pipe in self._pipes if pipe.id == pipe_id), None)

    def register(self, pipe: AssetPipe) -> None:
        self._pipes.append(pipe)
        logger.debug("PipeRegister: registered new pipe: %d", pipe.id)

    def __iter__(self) -> Iterator[AssetPipe]:
        return iter(self._pipes)

    def __len__(self) -> int:
        return len(self._pipes)