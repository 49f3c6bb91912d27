"""
Redirect stdlib `logging` records into a Logger.

The root logger's handlers are replaced by one redirect handler, so stdlib
records are written once. Redirecting again only changes which Logger it
forwards to. uninstall() puts the replaced handlers back.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from applog.levels import Level

if TYPE_CHECKING:
    from applog.logger import Logger


class RedirectHandler(logging.Handler):
    """Forward stdlib logging records to a Logger."""

    def __init__(self, target: Logger) -> None:
        super().__init__()
        self.target = target

    def emit(self, record: logging.LogRecord) -> None:
        try:
            # Default formatter: message plus any exception text
            msg = self.format(record)
            self.target.log(Level.from_stdlib(record.levelno), "%s", msg)
        except Exception:
            self.handleError(record)


_handler: RedirectHandler | None = None
_replaced: list[logging.Handler] = []
_lock = threading.Lock()


def redirect(target: Logger) -> RedirectHandler:
    """Point stdlib logging at `target`, installing the handler if needed."""
    global _handler
    root = logging.getLogger()
    with _lock:
        if _handler is None:
            _handler = RedirectHandler(target)
            _replaced[:] = root.handlers
            for existing in _replaced:
                root.removeHandler(existing)
            root.addHandler(_handler)
        else:
            _handler.acquire()
            try:
                _handler.target = target
            finally:
                _handler.release()
        root.setLevel(target.level.to_stdlib())
        return _handler


def current_target() -> Logger | None:
    with _lock:
        return _handler.target if _handler is not None else None


def uninstall() -> None:
    """Remove the handler and restore the root handlers it replaced."""
    global _handler
    root = logging.getLogger()
    with _lock:
        if _handler is not None:
            root.removeHandler(_handler)
            _handler = None
        for existing in _replaced:
            root.addHandler(existing)
        _replaced.clear()
