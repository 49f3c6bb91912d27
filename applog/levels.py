"""
Ordered severity levels.

trace < debug < info < warn < error < panic < fatal.
Unknown level strings fall back to info without raising.
"""

from __future__ import annotations

import logging
from enum import IntEnum


class Level(IntEnum):
    """Severity threshold. Higher is more severe."""
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    PANIC = 50
    FATAL = 60

    @property
    def label(self) -> str:
        """Lowercase name written under the level key."""
        return self.name.lower()

    def to_stdlib(self) -> int:
        """Closest `logging` level number."""
        if self <= Level.DEBUG:
            return logging.DEBUG
        if self == Level.INFO:
            return logging.INFO
        if self == Level.WARN:
            return logging.WARNING
        if self == Level.ERROR:
            return logging.ERROR
        return logging.CRITICAL

    @classmethod
    def from_stdlib(cls, levelno: int) -> Level:
        """
        Map a `logging` level number onto a Level.

        CRITICAL maps to error: a stdlib record never panics or exits.
        """
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARN
        if levelno >= logging.INFO:
            return cls.INFO
        if levelno >= logging.DEBUG:
            return cls.DEBUG
        return cls.TRACE


_BY_LABEL: dict[str, Level] = {lvl.label: lvl for lvl in Level}


def parse_level(text: object) -> Level:
    """Parse a case-sensitive level name. Anything unrecognized is info."""
    if isinstance(text, Level):
        return text
    if not isinstance(text, str):
        return Level.INFO
    return _BY_LABEL.get(text, Level.INFO)
