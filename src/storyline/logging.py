"""Logging helpers used by the STORYLINE CLI and application.

This module configures console logging with Rich and an in-memory "flight
recorder" that buffers log records and writes them to disk on flush. Records
from loggers outside the project (for example a user's fixtures module) get a
short bracketed prefix on the console.
"""

from __future__ import annotations

import logging
import os
import platform
from dataclasses import dataclass, field
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "storyline"
ENV_PREFIX = "STORYLINE_"


class ThirdPartyPrefixFilter(logging.Filter):
    """Annotate records from non-project loggers with a short prefix.

    Sets `record.prefix` to e.g. ``"[shop_fixtures]"`` for foreign loggers and
    to ``""`` for STORYLINE's own. Never filters a record out.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not record.name.startswith(PROJECT_PREFIX):
            record.prefix = f"[{record.name.split('.')[0]}]"
        else:
            record.prefix = ""
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Configure and return a RichHandler writing to stderr.

    Args:
        level: Minimum level for console output (DEBUG in debug mode).
        debug_mode: Show timestamps, logger names and source locations.
        color: Enable color output when True.

    Returns:
        RichHandler: Handler suitable for the root logger.
    """

    # keep in step with click-extra's --color / --no-color
    ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]
    color_system: ColorSystem | None = "auto" if color else None

    console = Console(color_system=color_system, stderr=True)

    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )

    fmt = (
        "%(prefix)s %(message)s"
        if not debug_mode
        else "%(asctime)s %(name)s [%(threadName)s]: %(message)s"
    )
    handler.setFormatter(logging.Formatter(fmt=fmt))

    if not debug_mode:
        handler.addFilter(ThirdPartyPrefixFilter())

    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Configure and return an in-memory flight recorder backed by a file.

    Buffers up to `capacity` records and flushes them to `path` when a record
    at `flush_level` or above arrives (or on close if `flush_on_close`).

    Args:
        path: Destination file for flushed records.
        capacity: Number of records to buffer in memory.
        flush_level: Level at or above which the buffer is flushed.
        flush_on_close: Flush the buffer when the handler is closed.

    Returns:
        MemoryHandler: A memory-backed handler with a FileHandler target.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8", delay=True)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(process)d:%(threadName)s] %(levelname)s %(name)s:%(lineno)d: %(message)s"
        )
    )

    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


@dataclass(frozen=True)
class LoggingSetup:
    """What the CLI configured, as reported by `log_startup`."""

    console_level: int
    handlers: tuple[logging.Handler, ...]
    log_path: Path | None = None
    flight_capacity: int | None = None
    flush_on_close: bool = False
    logger_levels: dict[str, int] = field(default_factory=dict)

    @property
    def flight_recorder(self) -> bool:
        return any(isinstance(h, MemoryHandler) for h in self.handlers)


def storyline_environment() -> dict[str, str]:
    """Return the ``STORYLINE_*`` variables set in the environment, sorted."""
    return {
        name: value
        for name, value in sorted(os.environ.items())
        if name.startswith(ENV_PREFIX)
    }


def log_startup(logger: Logger, app_version: str, setup: LoggingSetup) -> None:
    """Log a one-line banner at INFO, then diagnostics at DEBUG.

    The DEBUG lines land in the flight recorder even when the console is
    quiet, so a dumped log always says how the process was started.
    """
    logger.info(
        "storyline %s (console %s, flight recorder %s)",
        app_version,
        logging.getLevelName(setup.console_level),
        "on" if setup.flight_recorder else "off",
    )

    logger.debug(
        "Running on Python %s, %s %s, pid %d",
        platform.python_version(),
        platform.system(),
        platform.release(),
        os.getpid(),
    )
    logger.debug("Working directory: %s", Path.cwd())
    if setup.flight_recorder:
        logger.debug(
            "Recording to %s (capacity %s%s)",
            setup.log_path,
            setup.flight_capacity,
            ", flushed on exit" if setup.flush_on_close else "",
        )
    for name, lvl in setup.logger_levels.items():
        logger.debug("Logger %r pinned at %s", name, logging.getLevelName(lvl))
    for name, value in storyline_environment().items():
        logger.debug("Environment: %s=%s", name, value)
