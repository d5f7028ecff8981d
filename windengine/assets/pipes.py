"""Concrete asset pipes: copy, default (zlib), image and shader."""

from __future__ import annotations

import logging
import re
import shutil
import struct
import xml.etree.ElementTree as ET
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from PIL import Image as PILImage

from windengine.assets.pipe import ASSET_ID, AssetPipe, PipeRegister

logger = logging.getLogger(__name__)

_DEFAULT_HEADER = struct.Struct("<II")
_IMAGE_HEADER = struct.Struct("<iiiQ")
_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise ValueError("Unexpected end of asset data")
    return data


def _decompress(data: bytes) -> bytes:
    try:
        return zlib.decompress(data)
    except zlib.error as exc:
        raise ValueError(f"Failed uncompress data: {exc}") from exc


@dataclass
class Image:
    """Decoded pixels of an image asset."""

    pixels: bytes
    size: tuple[int, int]
    channels: int


class CopyPipe(AssetPipe):
    """Copies the source file unchanged."""

    def __init__(self) -> None:
        super().__init__("copy")

    def compile(self, source, destination) -> None:
        try:
            shutil.copyfile(source, destination)
        except OSError as exc:
            logger.error("Failed copy file from %s to %s because: %s", source, destination, exc)

    def load(self, stream: BinaryIO) -> None:
        logger.warning("AssetManager can't load raw resource data!")
        return None


class DefaultPipe(AssetPipe):
    """Stores the file contents compressed with zlib."""

    def __init__(self) -> None:
        super().__init__("default")

    def compile(self, source, destination) -> None:
        try:
            content = Path(source).read_bytes()
        except OSError:
            logger.error("Cannot open source file: %s", source)
            return
        zipped = zlib.compress(content)
        try:
            with open(destination, "wb") as output:
                output.write(ASSET_ID.pack(self.id))
                output.write(_DEFAULT_HEADER.pack(len(content), len(zipped)))
                output.write(zipped)
        except OSError:
            logger.error("Cannot open destination file: %s", destination)

    def load(self, stream: BinaryIO) -> bytes:
        original_size, zipped_size = _DEFAULT_HEADER.unpack(_read_exact(stream, _DEFAULT_HEADER.size))
        data = _decompress(_read_exact(stream, zipped_size))
        if len(data) > original_size:
            raise ValueError("Failed uncompress data: buffer error")
        return data


def _normalise(img: PILImage.Image) -> PILImage.Image:
    if img.mode in ("L", "LA", "RGB", "RGBA"):
        return img
    if img.mode == "P":
        return img.convert("RGBA" if "transparency" in img.info else "RGB")
    if img.mode in ("1", "I", "I;16", "F"):
        return img.convert("L")
    return img.convert("RGBA")


class ImagePipe(AssetPipe):
    """Stores decoded 8-bit pixels compressed with zlib."""

    def __init__(self) -> None:
        super().__init__("image")

    def compile(self, source, destination) -> None:
        try:
            with PILImage.open(source) as opened:
                opened.load()
                img = _normalise(opened)
                width, height = img.size
                channels = len(img.getbands())
                raw = img.tobytes() + b"\0"
        except OSError:
            logger.error("Cannot load image by path %s", source)
            return
        zipped = zlib.compress(raw)
        try:
            with open(destination, "wb") as output:
                output.write(ASSET_ID.pack(self.id))
                output.write(_IMAGE_HEADER.pack(width, height, channels, len(zipped)))
                output.write(zipped)
        except OSError:
            logger.error("Cannot create output file: %s", destination)

    def load(self, stream: BinaryIO) -> Image:
        width, height, channels, zipped_size = _IMAGE_HEADER.unpack(
            _read_exact(stream, _IMAGE_HEADER.size)
        )
        expected = width * height * channels
        data = _decompress(_read_exact(stream, zipped_size))
        if len(data) > expected + 1:
            raise ValueError("Failed uncompress data: buffer error")
        return Image(pixels=data[:expected], size=(width, height), channels=channels)


class ShaderPipe(AssetPipe):
    """Stores the vertex and fragment sources of an XML shader file."""

    def __init__(self) -> None:
        super().__init__("shader")

    def compile(self, source, destination) -> None:
        try:
            text = Path(source).read_text(encoding="utf-8")
        except OSError:
            logger.error("Cannot open source file: %s", source)
            return

        body = _XML_DECLARATION.sub("", text, count=1)
        try:
            root = ET.fromstring(f"<shader>{body}</shader>")
        except ET.ParseError as exc:
            logger.error("%s parsed with errors! %s", source, exc)
            return

        vertex = root.find("vtx")
        if vertex is None:
            logger.error("Cannot find vertex shader in %s", source)
            return
        fragment = root.find("fgt")
        if fragment is None:
            logger.error("Cannot find fragment shader in %s", source)
            return

        payload = bytearray(ASSET_ID.pack(self.id))
        for element in (vertex, fragment):
            zipped = zlib.compress((element.text or "").encode("utf-8") + b"\0")
            payload += str(len(zipped)).encode("ascii")
            payload += zipped

        try:
            Path(destination).write_bytes(bytes(payload))
        except OSError:
            logger.error("Cannot open destination file: %s", destination)

    def load(self, stream: BinaryIO) -> None:
        return None


def bundler_register() -> PipeRegister:
    """Pipes available when building bundles."""
    return PipeRegister([ShaderPipe(), ImagePipe(), DefaultPipe(), CopyPipe()])


def manager_register() -> PipeRegister:
    """Pipes available when loading bundles."""
    return PipeRegister([ShaderPipe(), ImagePipe(), DefaultPipe()])