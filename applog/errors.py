"""Faults raised by the logger."""

from __future__ import annotations


class LogPanic(RuntimeError):
    """Raised after a panic-level record has been written."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
