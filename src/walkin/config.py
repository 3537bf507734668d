# src/walkin/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    # Clinic timezone; used for the "now" defaults of the date/time inputs.
    timezone: str = "UTC"

    def now(self) -> datetime:
        return datetime.now(ZoneInfo(self.timezone))


def _log_level_from_env() -> str:
    level = os.getenv("WALKIN_LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if not isinstance(logging.getLevelName(level), int):
        raise RuntimeError(
            f"Invalid WALKIN_LOG_LEVEL '{level}'. "
            "Use one of DEBUG, INFO, WARNING, ERROR, CRITICAL."
        )
    return level


def _timezone_from_env() -> str:
    """
    Optional WALKIN_TIMEZONE, an IANA name.
    Example: WALKIN_TIMEZONE = America/Chicago
    """
    name = os.getenv("WALKIN_TIMEZONE", "UTC").strip() or "UTC"
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise RuntimeError(f"Unknown WALKIN_TIMEZONE '{name}'.") from None
    return name


def load_settings() -> Settings:
    return Settings(log_level=_log_level_from_env(), timezone=_timezone_from_env())


__all__ = ["Settings", "load_settings"]
