"""Shared fixtures: isolated argv/env, a fresh process handle, clean stdlib logging."""

from __future__ import annotations

import io
import json
import logging
import sys

import pytest

from applog import stdlib
from applog.default import GlobalLogger, set_handle


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["applog-tests"])
    for name in ("APPLOG_DEBUG", "APPLOG_DEFAULT_APP_NAME", "APPLOG_DEFAULT_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    root = logging.getLogger()
    root_level = root.level
    yield
    # keep only handlers live for this phase; uninstall re-adds replaced ones
    live = [h for h in root.handlers if not isinstance(h, stdlib.RedirectHandler)]
    stdlib.uninstall()
    root.handlers[:] = live
    root.setLevel(root_level)


@pytest.fixture
def handle():
    """A fresh process handle, swapped back out after the test."""
    fresh = GlobalLogger()
    previous = set_handle(fresh)
    yield fresh
    set_handle(previous)


@pytest.fixture
def sink():
    return io.StringIO()


@pytest.fixture
def records():
    def _parse(buf: io.StringIO) -> list[dict]:
        return [json.loads(line) for line in buf.getvalue().splitlines() if line]
    return _parse
