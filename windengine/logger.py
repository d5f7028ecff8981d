"""A small formatting logger writing to a pluggable stream."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class LoggerStream(ABC):
    """Destination of formatted log lines."""

    @abstractmethod
    def log(self, text: str) -> None:
        """Write one line."""


class ConsoleStream(LoggerStream):
    """Writes lines to standard output."""

    def log(self, text: str) -> None:
        print(text)


class Logger:
    """Formats messages with ``str.format`` and hands them to a stream."""

    def __init__(self, stream: LoggerStream | None = None) -> None:
        self.stream = stream if stream is not None else ConsoleStream()

    def text(self, message: str, *args: Any) -> None:
        self.stream.log(message.format(*args))

    def error(self, message: str, *args: Any) -> None:
        self.text(f"[ERROR] {message}", *args)

    def info(self, message: str, *args: Any) -> None:
        self.text(f"[INFO] {message}", *args)