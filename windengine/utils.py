"""Small helpers shared by the engine tools."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def replace_all(text: str, searched: str, replacement: str) -> str:
    """Replace every occurrence of ``searched`` in ``text``, scanning left to right."""
    if not searched:
        raise ValueError("searched substring must not be empty")
    return text.replace(searched, replacement)


def remove_first_directory(path: str | Path) -> Path:
    """Drop the first component of ``path``."""
    return Path(*Path(path).parts[1:])


def _mark_text(node: Any) -> str:
    mark = getattr(node, "start_mark", None)
    line = getattr(mark, "line", -1)
    column = getattr(mark, "column", -1)
    return f" line: {line}, column: {column}"


def _yaml_message(message: str, node: Any, args: tuple) -> str:
    return f"{message.format(*args)}, {_mark_text(node)}"


def yaml_error(message: str, node: Any, *args: Any) -> str:
    """Log an error about a YAML node, with its position; return the logged text."""
    text = _yaml_message(message, node, args)
    logger.error(text)
    return text


def yaml_warn(message: str, node: Any, *args: Any) -> str:
    """Log a warning about a YAML node, with its position; return the logged text."""
    text = _yaml_message(message, node, args)
    logger.warning(text)
    return text


class Stopwatch:
    """Context manager that logs how long its block took."""

    def __init__(self, message: str) -> None:
        self.message = message
        self.elapsed_ms = 0
        self._start = time.perf_counter()

    def __enter__(self) -> "Stopwatch":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args: Any) -> bool:
        self.elapsed_ms = int((time.perf_counter() - self._start) * 1000)
        logger.info("%s took %d milliseconds", self.message, self.elapsed_ms)
        return False