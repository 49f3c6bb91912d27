"""
structlog processor chain for the wire record.

Every record is one JSON line with:
  l — lowercase level name
  m — formatted message
  t — integer seconds since epoch
  a — application name
plus any fields bound by forking.
"""

from __future__ import annotations

import time

import structlog
from structlog.typing import EventDict, WrappedLogger

LEVEL_KEY = "l"
MESSAGE_KEY = "m"
TIMESTAMP_KEY = "t"
APP_NAME_KEY = "a"


def add_unix_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp the record at emission time, not at logger construction."""
    event_dict[TIMESTAMP_KEY] = int(time.time())
    return event_dict


def build_processors() -> list:
    return [
        add_unix_timestamp,
        structlog.processors.EventRenamer(MESSAGE_KEY),
        structlog.processors.JSONRenderer(),
    ]
