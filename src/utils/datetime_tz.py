from __future__ import annotations

from datetime import datetime
from functools import lru_cache

from zoneinfo import ZoneInfo

# Default farm timezone; rebound from settings.timezone_name at app start
DEFAULT_TIMEZONE_NAME = "Europe/Moscow"

_farm_timezone_name = DEFAULT_TIMEZONE_NAME


@lru_cache(maxsize=8)
def _zone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def set_farm_timezone(name: str | None) -> ZoneInfo:
    """Bind the zone used when no explicit zone is passed."""
    global _farm_timezone_name
    zone = _zone(name or DEFAULT_TIMEZONE_NAME)
    _farm_timezone_name = zone.key
    return zone


def get_farm_tz(name: str | None = None) -> ZoneInfo:
    return _zone(name or _farm_timezone_name)


def to_local_naive(dt: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Express `dt` as naive farm-local wall time.

    Naive values are assumed to already be local and returned unchanged.
    Aware values are converted to `tz` and stripped of tzinfo.
    """
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        return dt
    return dt.astimezone(tz or get_farm_tz()).replace(tzinfo=None)


def local_now(tz: ZoneInfo | None = None) -> datetime:
    """Current naive wall time on the farm."""
    return datetime.now(tz or get_farm_tz()).replace(tzinfo=None)
