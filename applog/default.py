"""
Process-wide logger.

A GlobalLogger handle is created once per process. Module-level functions
resolve the current handle and lazily initialize it with the configured
defaults ("un-configured", "info") if nothing called init first.
"""

from __future__ import annotations

import threading
from typing import IO, Any

from applog import stdlib
from applog.config import get_settings
from applog.logger import Logger, create


class GlobalLogger:
    """
    Holds one Logger, created exactly once.

    init() is gated so concurrent first calls create a single Logger and
    later calls are ignored. get() auto-initializes under a separate lock.
    """

    def __init__(self) -> None:
        self._logger: Logger | None = None
        self._done = False
        self._once = threading.Lock()
        self._mu = threading.Lock()

    @property
    def is_initialized(self) -> bool:
        return self._done

    def init(self, app_name: str, level: str) -> None:
        """Create the Logger and redirect stdlib logging to it. Runs once."""
        if self._done:
            return
        with self._once:
            if self._done:
                return
            logger = create(app_name, level)
            stdlib.redirect(logger)
            self._logger = logger
            self._done = True

    def get(self) -> Logger:
        """Return the Logger, initializing with defaults if needed."""
        with self._mu:
            if self._logger is None:
                settings = get_settings()
                self.init(settings.default_app_name, settings.default_level)
            return self._logger


_handle = GlobalLogger()


def get_handle() -> GlobalLogger:
    return _handle


def set_handle(handle: GlobalLogger) -> GlobalLogger:
    """Install `handle` as the process logger. Returns the previous one."""
    global _handle
    previous = _handle
    _handle = handle
    return previous


def init_global_logger(app_name: str, level: str) -> None:
    """
    Create the process logger with `app_name` and `level`.

    Call before any log function; later calls have no effect.
    """
    get_handle().init(app_name, level)


def get_logger() -> Logger:
    return get_handle().get()


def trace(fmt: Any, *args: Any) -> None:
    get_logger().trace(fmt, *args)


def debug(fmt: Any, *args: Any) -> None:
    get_logger().debug(fmt, *args)


def info(fmt: Any, *args: Any) -> None:
    get_logger().info(fmt, *args)


def warn(fmt: Any, *args: Any) -> None:
    get_logger().warn(fmt, *args)


def error(fmt: Any, *args: Any) -> None:
    get_logger().error(fmt, *args)


def panic(fmt: Any, *args: Any) -> None:
    """Log at panic level, then raise LogPanic."""
    get_logger().panic(fmt, *args)


def fatal(fmt: Any, *args: Any) -> None:
    """Log at fatal level, then exit with status 1."""
    get_logger().fatal(fmt, *args)


def set_output(output: IO[str]) -> None:
    get_logger().set_output(output)


def with_fields(*key_values: Any) -> Logger:
    """Fork the process logger. The process logger itself is unchanged."""
    return get_logger().with_fields(*key_values)
