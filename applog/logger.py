"""
Logger core.

Binds an application name, a minimum level, an output stream and a set of
baseline fields to a structlog logger. Forking with extra fields returns a
fully independent Logger; swapping the output only affects the Logger it is
called on.
"""

from __future__ import annotations

import os
import sys
import threading
from collections.abc import Mapping
from typing import IO, Any, Protocol

import structlog

from applog import stdlib
from applog.config import debug_flag
from applog.errors import LogPanic
from applog.levels import Level, parse_level
from applog.processors import APP_NAME_KEY, LEVEL_KEY, build_processors


class LoggerProtocol(Protocol):
    """Capabilities the global facade relies on."""

    @property
    def base_logger(self) -> structlog.BoundLogger: ...

    def set_output(self, output: IO[str]) -> None: ...

    def trace(self, fmt: str, *args: Any) -> None: ...

    def debug(self, fmt: str, *args: Any) -> None: ...

    def info(self, fmt: str, *args: Any) -> None: ...

    def warn(self, fmt: str, *args: Any) -> None: ...

    def error(self, fmt: str, *args: Any) -> None: ...

    def panic(self, fmt: str, *args: Any) -> None: ...

    def fatal(self, fmt: str, *args: Any) -> None: ...

    def with_fields(self, *key_values: Any) -> LoggerProtocol: ...


def format_message(fmt: Any, args: tuple) -> str:
    """
    printf-style formatting that never raises.

    The format is always applied, so "50%% done" with no arguments gives
    "50% done".

    A single non-empty mapping argument is used for %(name)s lookups, as the
    stdlib logging module does. On a format/argument mismatch the message
    degrades to the format string followed by the arguments.
    """
    fmt = str(fmt)
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        args = args[0]
    try:
        return fmt % args
    except (TypeError, ValueError, KeyError, OverflowError):
        values = args.values() if isinstance(args, Mapping) else args
        return " ".join([fmt, *(str(v) for v in values)])


def to_fields(key_values: tuple) -> dict[str, Any]:
    """Pair up name/value arguments. An odd count yields no fields."""
    if len(key_values) % 2 != 0:
        return {}
    return {str(key_values[i]): key_values[i + 1] for i in range(0, len(key_values), 2)}


def _wrap(output: IO[str], fields: dict[str, Any]) -> structlog.BoundLogger:
    return structlog.BoundLogger(
        structlog.PrintLogger(file=output),
        processors=build_processors(),
        context=dict(fields),
    )


class Logger:
    """
    A structured logger binding.

    Records below `level` are dropped before formatting. Panic and fatal
    records are always written.
    """

    def __init__(
        self,
        app_name: str,
        level: Level,
        output: IO[str],
        fields: dict[str, Any] | None = None,
    ) -> None:
        self.app_name = app_name
        self.level = level
        self._mu = threading.Lock()
        self._output = output
        self._fields: dict[str, Any] = (
            {APP_NAME_KEY: app_name} if fields is None else dict(fields)
        )
        self._logger = _wrap(output, self._fields)

    @property
    def base_logger(self) -> structlog.BoundLogger:
        """The underlying structlog logger for the current output."""
        return self._logger

    @property
    def fields(self) -> dict[str, Any]:
        return dict(self._fields)

    @property
    def output(self) -> IO[str]:
        return self._output

    def enabled(self, level: Level) -> bool:
        return level >= Level.PANIC or level >= self.level

    def set_output(self, output: IO[str]) -> None:
        """
        Write subsequent records to `output`.

        Also points stdlib `logging` redirection at this logger. That is
        process-wide: the root logger's handlers are replaced by the redirect
        handler and its level is set to this logger's level, even when this
        logger is a fork. Loggers forked earlier keep their own output.
        """
        with self._mu:
            self._output = output
            self._logger = _wrap(output, self._fields)
            stdlib.redirect(self)

    def log(self, level: Level, fmt: Any, *args: Any) -> None:
        """Emit at `level`. Panic and fatal levels raise or exit afterwards."""
        if level == Level.PANIC:
            self.panic(fmt, *args)
        elif level == Level.FATAL:
            self.fatal(fmt, *args)
        else:
            self._emit(level, fmt, args)

    def _emit(self, level: Level, fmt: Any, args: tuple) -> str | None:
        if not self.enabled(level):
            return None
        message = format_message(fmt, args)
        self._logger.msg(message, **{LEVEL_KEY: level.label})
        return message

    def trace(self, fmt: Any, *args: Any) -> None:
        self._emit(Level.TRACE, fmt, args)

    def debug(self, fmt: Any, *args: Any) -> None:
        self._emit(Level.DEBUG, fmt, args)

    def info(self, fmt: Any, *args: Any) -> None:
        self._emit(Level.INFO, fmt, args)

    def warn(self, fmt: Any, *args: Any) -> None:
        self._emit(Level.WARN, fmt, args)

    def error(self, fmt: Any, *args: Any) -> None:
        self._emit(Level.ERROR, fmt, args)

    def panic(self, fmt: Any, *args: Any) -> None:
        """Write a panic record, then raise LogPanic with the message."""
        message = self._emit(Level.PANIC, fmt, args)
        raise LogPanic(message)

    def fatal(self, fmt: Any, *args: Any) -> None:
        """
        Write a fatal record, then exit the process with status 1.

        On the main thread this raises SystemExit. Elsewhere SystemExit would
        only end the calling thread, so the process is ended with os._exit
        once the output is flushed.
        """
        self._emit(Level.FATAL, fmt, args)
        if threading.current_thread() is threading.main_thread():
            sys.exit(1)
        self._flush_output()
        os._exit(1)

    def _flush_output(self) -> None:
        for stream in (self._output, sys.stdout, sys.stderr):
            try:
                if stream is not None:
                    stream.flush()
            except (OSError, ValueError):
                # closed or detached stream
                pass

    def with_fields(self, *key_values: Any) -> Logger:
        """
        Return a new Logger with extra name/value fields.

        Same-named parent fields are overridden. The child starts on the
        parent's current output and shares no mutable state with it.
        """
        extra = to_fields(key_values)
        with self._mu:
            fields = {**self._fields, **extra}
            output = self._output
        return Logger(self.app_name, self.level, output, fields)

    def __repr__(self) -> str:
        return f"Logger(app_name={self.app_name!r}, level={self.level.label!r})"


def create(
    app_name: str,
    level: Any = "info",
    *,
    debug: bool | None = None,
    output: IO[str] | None = None,
) -> Logger:
    """
    Build a Logger writing to stderr.

    An unknown `level` means info. When the debug override is on, the
    minimum level is debug whatever was requested. `debug=None` reads the
    --debug flag and APPLOG_DEBUG.
    """
    min_level = parse_level(level)
    if debug is None:
        debug = debug_flag()
    if debug:
        min_level = Level.DEBUG
    return Logger(app_name, min_level, output if output is not None else sys.stderr)
