"""
Accessors over assembled API dicts.

A missing stats row reads as 0 calls; uptime falls back to a caller-chosen
default (0 for sorting, 99.9 for display).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

DEFAULT_DISPLAY_UPTIME = 99.9


def total_calls(api: dict[str, Any]) -> int:
    stats = api.get("stats")
    if not stats:
        return 0
    return int(stats.get("total_calls") or 0)


def uptime(api: dict[str, Any], *, default: float) -> float:
    stats = api.get("stats")
    if not stats or stats.get("uptime") is None:
        return default
    return float(stats["uptime"])


def as_utc(value: datetime | str) -> datetime:
    """
    Timestamps may arrive as datetimes (asyncpg) or ISO strings (JSON).
    Naive values are read as UTC.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def created_at(api: dict[str, Any]) -> datetime:
    return as_utc(api["created_at"])
