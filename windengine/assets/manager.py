"""Loading assets out of linked bundle files."""

from __future__ import annotations

import io
import logging
import struct
from pathlib import Path
from typing import Any, BinaryIO

from windengine.assets.pipe import ASSET_ID, PipeRegister, asset_hash

logger = logging.getLogger(__name__)

_ENTRY = struct.Struct("<II")
# Size of the pipe id and the two size fields that precede compressed data.
_PAYLOAD_HEADER = 12


def _unpack(stream: BinaryIO, layout: struct.Struct) -> tuple:
    data = stream.read(layout.size)
    if len(data) != layout.size:
        raise ValueError("Unexpected end of bundle data")
    return layout.unpack(data)


class Bundle:
    """An open bundle file with its table of asset offsets."""

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream
        stream.seek(0, io.SEEK_END)
        self.file_size = stream.tell()
        stream.seek(0)

        (header_size,) = _unpack(stream, ASSET_ID)
        count = (header_size - ASSET_ID.size) // _ENTRY.size
        logger.debug("Load header. Header size: %d, count: %d", header_size, count)

        entries = [_unpack(stream, _ENTRY) for _ in range(max(count, 0))]
        for asset_id, offset in entries:
            logger.debug("Load meta-resource. id: %d, offset: %d", asset_id, offset)

        offsets = [offset for _, offset in entries]
        ends = offsets[1:] + [self.file_size]
        self._entries: dict[int, tuple[int, int]] = {}
        for (asset_id, offset), end in zip(entries, ends):
            self._entries.setdefault(asset_id, (offset, end - _PAYLOAD_HEADER))

    def find(self, asset_id: int) -> tuple[int, int] | None:
        """Return ``(offset, end)`` of an asset, or None if it is not here."""
        return self._entries.get(asset_id)

    def determine_pipe(self, offset: int, size: int) -> int | None:
        """Read the pipe identifier stored at ``offset``."""
        if size > self.file_size:
            return None
        try:
            self.stream.seek(offset)
            (pipe_id,) = _unpack(self.stream, ASSET_ID)
        except (OSError, ValueError):
            logger.error("Fail readBytes from bundle. Offset: %d, Size: %d", offset, size)
            return None
        return pipe_id

    def close(self) -> None:
        self.stream.close()


class AssetManager:
    """Finds assets by name across the loaded bundles."""

    def __init__(self, register: PipeRegister) -> None:
        self.register = register
        self.bundles: list[Bundle] = []
        self._preloads: dict[int, Any] = {}

    def _load_asset(self, asset_id: int, bundle: Bundle) -> Any:
        found = bundle.find(asset_id)
        if found is None:
            return None
        begin, end = found
        size = end - begin
        logger.debug("Load asset by id %d. begin: %d, end: %d, size: %d", asset_id, begin, end, size)

        pipe_id = bundle.determine_pipe(begin, size)
        if pipe_id is None:
            return None
        pipe = self.register.get_pipe(pipe_id)
        if pipe is None:
            logger.error("Failed load asset. unknow pipe:  %d. asset id: %d", pipe_id, asset_id)
            return None
        try:
            return pipe.load(bundle.stream)
        except Exception as exc:
            logger.error("Failed load asset by id %d by pipe %d: %s", asset_id, pipe_id, exc)
            return None

    def load_bundle(self, path: str | Path) -> None:
        try:
            stream = open(path, "rb")
        except OSError:
            logger.error("Fail load bundle: fail open file by path: %s", path)
            return
        try:
            self.bundles.append(Bundle(stream))
        except ValueError as exc:
            stream.close()
            logger.error("Fail load bundle %s: %s", path, exc)

    def unload_bundles(self) -> None:
        for bundle in self.bundles:
            bundle.close()
        self.bundles.clear()

    def preload(self, key: str) -> None:
        asset_id = asset_hash(key)
        if asset_id in self._preloads:
            return
        self._preloads[asset_id] = self.get_asset(key)

    def get_asset(self, key: str) -> Any:
        asset_id = asset_hash(key)
        if asset_id in self._preloads:
            return self._preloads[asset_id]
        for bundle in self.bundles:
            asset = self._load_asset(asset_id, bundle)
            if asset is not None:
                return asset
        logger.error("Failed get asset. name: '%s', hash: %d", key, asset_id)
        return None

    def exists(self, key: str) -> bool:
        asset_id = asset_hash(key)
        return any(bundle.find(asset_id) is not None for bundle in self.bundles)