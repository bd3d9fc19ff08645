"""
Dashboard summary over the assembled catalog.

Pure and deterministic: the evaluation instant is passed in, never read
from the clock here.

`apiCallsOverTime` is a placeholder. The store keeps only a running total
per API, so there is no history to chart; the points carry `calls: None`
until a real time-series source exists.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from . import records

DEFAULT_NEW_API_WINDOW_DAYS = 30
DEFAULT_TOP_CATEGORIES = 5
DEFAULT_TOP_APIS = 3
DEFAULT_TIMESERIES_MONTHS = 6


def percentage(count: int, total: int) -> int:
    """
    round(100 * count / total), halves rounded up.
    """
    if total <= 0:
        return 0
    value = Decimal(100 * count) / Decimal(total)
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def count_new_apis(apis: list[dict[str, Any]], *, now: datetime, window_days: int) -> int:
    cutoff = records.as_utc(now) - timedelta(days=window_days)
    return sum(1 for api in apis if records.created_at(api) > cutoff)


def popular_categories(apis: list[dict[str, Any]], *, limit: int) -> list[dict[str, Any]]:
    # Insertion order doubles as the tie-breaker (first appearance wins).
    counts: dict[str, dict[str, Any]] = {}
    for api in apis:
        category = api.get("category")
        if not category:
            continue
        entry = counts.setdefault(category["id"], {"name": category["name"], "count": 0})
        entry["count"] += 1

    ranked = sorted(counts.values(), key=lambda entry: entry["count"], reverse=True)[:limit]
    return [
        {"name": entry["name"], "percentage": percentage(entry["count"], len(apis))}
        for entry in ranked
    ]


def top_apis(apis: list[dict[str, Any]], *, limit: int) -> list[dict[str, Any]]:
    ranked = sorted(apis, key=records.total_calls, reverse=True)[:limit]
    return [
        {
            "id": api["id"],
            "name": api["name"],
            "calls": records.total_calls(api),
            "uptime": records.uptime(api, default=records.DEFAULT_DISPLAY_UPTIME),
        }
        for api in ranked
    ]


def _month_labels(now: datetime, months: int) -> list[str]:
    labels: list[str] = []
    year, month = now.year, now.month
    for _ in range(months):
        labels.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(labels))


def calls_over_time_placeholder(*, now: datetime, months: int) -> dict[str, Any]:
    return {
        "source": "placeholder",
        "points": [{"month": label, "calls": None} for label in _month_labels(now, months)],
    }


def dashboard_summary(
    apis: list[dict[str, Any]],
    *,
    now: datetime,
    window_days: int = DEFAULT_NEW_API_WINDOW_DAYS,
    category_limit: int = DEFAULT_TOP_CATEGORIES,
    top_api_limit: int = DEFAULT_TOP_APIS,
    timeseries_months: int = DEFAULT_TIMESERIES_MONTHS,
) -> dict[str, Any]:
    return {
        "totalApis": len(apis),
        "totalApiCalls": sum(records.total_calls(api) for api in apis),
        "newApisLastMonth": count_new_apis(apis, now=now, window_days=window_days),
        "popularCategories": popular_categories(apis, limit=category_limit),
        "topApis": top_apis(apis, limit=top_api_limit),
        "apiCallsOverTime": calls_over_time_placeholder(now=now, months=timeseries_months),
        "error": None,
    }


def empty_summary(*, now: datetime, error: str, timeseries_months: int = DEFAULT_TIMESERIES_MONTHS) -> dict[str, Any]:
    summary = dashboard_summary([], now=now, timeseries_months=timeseries_months)
    summary["error"] = error
    return summary
