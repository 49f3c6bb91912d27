"""
Configuration loader.

Settings come from APPLOG_* environment variables via Pydantic BaseSettings.
The debug override can also be switched on with a --debug command-line flag.
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

DEBUG_FLAG = "--debug"
DEBUG_FLAG_HELP = "debug mode"


class Settings(BaseSettings):
    """Logger settings loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="APPLOG_",
        extra="ignore",
    )

    # Forces the minimum level to debug when true
    debug: bool = Field(default=False)

    # Used when the first log call happens before explicit initialization
    default_app_name: str = Field(default="un-configured")
    default_level: str = Field(default="info")


def get_settings() -> Settings:
    """
    Read settings fresh so environment changes before init are seen.

    Invalid environment values fall back to the field defaults.
    """
    try:
        return Settings()
    except ValidationError:
        return Settings.model_construct()


def register_debug_flag(parser: argparse.ArgumentParser) -> None:
    """Add --debug to a host parser unless the host already defines it."""
    try:
        parser.add_argument(DEBUG_FLAG, action="store_true", default=False, help=DEBUG_FLAG_HELP)
    except argparse.ArgumentError:
        # Host registration wins; both read the same argv token.
        pass


def _cli_debug(argv: Sequence[str]) -> bool:
    parser = argparse.ArgumentParser(add_help=False, allow_abbrev=False, exit_on_error=False)
    register_debug_flag(parser)
    try:
        known, _ = parser.parse_known_args(list(argv))
    except argparse.ArgumentError:
        return False
    return bool(known.debug)


def debug_flag(argv: Sequence[str] | None = None) -> bool:
    """True if --debug is on the command line or APPLOG_DEBUG is set."""
    if argv is None:
        argv = sys.argv[1:]
    return _cli_debug(argv) or get_settings().debug
