"""axsnap structured logging on top of loguru."""

from __future__ import annotations

import os
import sys
from typing import Any

from loguru import logger

from .config import config

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level:<8}</level> | "
    "<magenta>{extra[component]}</magenta> | "
    "<cyan>{module}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {extra[component]} | {module}:{function}:{line} - {message}"


class Logger:
    """Structured logging for traversals, diffs and orchestration.

    Console output goes to *stderr*, so JSON written to stdout by the command
    line stays machine readable. File sinks are only installed when
    ``config.log_to_file`` is set.
    """

    def __init__(self, component: str = "axsnap") -> None:
        self.component = component
        self._logger = logger.bind(component=component)
        self._configure_sinks()

    def _configure_sinks(self) -> None:
        logger.remove()
        logger.configure(extra={"component": "-"})
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=config.log_level.upper(), colorize=True)

        if not config.log_to_file:
            return

        logs_dir = config.get_log_path()
        os.makedirs(logs_dir, exist_ok=True)
        # (file name pattern, minimum level, retention)
        for pattern, level, retention in (
            ("axsnap_{time:YYYY-MM-DD}.log", "DEBUG", "14 days"),
            ("axsnap_errors_{time:YYYY-MM-DD}.log", "ERROR", "60 days"),
        ):
            logger.add(
                os.path.join(logs_dir, pattern),
                format=FILE_FORMAT,
                level=level,
                rotation="00:00",
                retention=retention,
                compression="zip",
                enqueue=True,
            )

    def _emit(self, level: str, message: str, **kwargs: Any) -> None:
        # depth=2 attributes the record to the caller of info()/debug()/...
        self._logger.opt(depth=2).log(level, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._emit("INFO", message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._emit("DEBUG", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._emit("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._emit("ERROR", message, **kwargs)

    def success(self, message: str, **kwargs: Any) -> None:
        self._emit("SUCCESS", message, **kwargs)

    def log_step(self, step: str, duration_s: float) -> None:
        """Timed step of a larger operation."""
        self.info(f"STEP: '{step}' took {duration_s:.3f}s")

    def log_traversal(self, label: str, element_count: int, excluded_count: int, duration_s: float) -> None:
        """Outcome of one element tree traversal."""
        self.info(
            f"TRAVERSAL: '{label}' collected {element_count} elements "
            f"({excluded_count} excluded) in {duration_s:.2f}s"
        )

    def log_diff(self, mode: str, added: int, removed: int, modified: int) -> None:
        """Diff counts, at debug level."""
        self.debug(f"DIFF [{mode}]: added={added}, removed={removed}, modified={modified}")


# Global logger instance
log = Logger()
