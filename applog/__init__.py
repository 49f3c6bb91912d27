"""
Structured JSON logging with a lazily initialized process-wide logger.

    import applog

    applog.init_global_logger("billing", "debug")
    applog.info("charged %s", customer_id)
    req_log = applog.with_fields("request_id", rid)
"""

from applog.default import (
    GlobalLogger,
    debug,
    error,
    fatal,
    get_handle,
    get_logger,
    info,
    init_global_logger,
    panic,
    set_handle,
    set_output,
    trace,
    warn,
    with_fields,
)
from applog.errors import LogPanic
from applog.levels import Level, parse_level
from applog.logger import Logger, LoggerProtocol, create

__version__ = "0.1.0"

__all__ = [
    "GlobalLogger",
    "Level",
    "LogPanic",
    "Logger",
    "LoggerProtocol",
    "create",
    "debug",
    "error",
    "fatal",
    "get_handle",
    "get_logger",
    "info",
    "init_global_logger",
    "panic",
    "parse_level",
    "set_handle",
    "set_output",
    "trace",
    "warn",
    "with_fields",
]
