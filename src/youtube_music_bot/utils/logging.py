"""Console log formatting with ANSI level colors."""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, TextIO

LEVEL_COLORS: dict[int, str] = {
    logging.DEBUG: "\033[2;36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;41;97m",
}
RESET = "\033[0m"
DIM = "\033[2m"


class ColoredFormatter(logging.Formatter):
    """Colors the level name and dims the logger name.

    Color is off when ``NO_COLOR`` is set or the target stream is not a TTY.
    Pass ``use_color`` to force it either way.
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        *,
        stream: TextIO | None = None,
        use_color: bool | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(fmt, datefmt, **kwargs)
        self._stream = stream
        self._forced = use_color

    def use_color(self) -> bool:
        if self._forced is not None:
            return self._forced
        if "NO_COLOR" in os.environ:
            return False
        stream = self._stream or sys.stderr
        isatty = getattr(stream, "isatty", None)
        return bool(isatty and isatty())

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_color():
            return super().format(record)

        colored = logging.makeLogRecord(record.__dict__)
        color = LEVEL_COLORS.get(record.levelno, "")
        colored.levelname = f"{color}{record.levelname}{RESET}"
        colored.name = f"{DIM}{record.name}{RESET}"
        return super().format(colored)
