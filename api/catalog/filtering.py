"""
Search/filter/sort over the assembled catalog.

`filter_apis` is a pure function: the caller owns the criteria and the full
list and calls it again whenever either changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from . import records

ALL = "all"

SortKey = Literal["name", "date", "popularity", "rating"]
AuthFilter = Literal["apiKey", "oauth2", "none", "all"]

SORT_KEYS: tuple[str, ...] = ("name", "date", "popularity", "rating")
DEFAULT_SORT: SortKey = "popularity"


@dataclass(frozen=True)
class FilterCriteria:
    query: str = ""
    category: str = ALL
    auth_type: AuthFilter = ALL
    sort_by: SortKey = DEFAULT_SORT


def matches_query(api: dict[str, Any], query: str) -> bool:
    needle = query.strip().lower()
    if not needle:
        return True
    if needle in str(api.get("name") or "").lower():
        return True
    if needle in str(api.get("description") or "").lower():
        return True
    return any(needle in str(tag).lower() for tag in api.get("tags") or [])


def _matches(api: dict[str, Any], criteria: FilterCriteria) -> bool:
    if criteria.category != ALL and api.get("category_id") != criteria.category:
        return False
    if criteria.auth_type != ALL and api.get("auth_type") != criteria.auth_type:
        return False
    return matches_query(api, criteria.query)


def sort_apis(apis: list[dict[str, Any]], sort_by: str) -> list[dict[str, Any]]:
    """
    Stable sort; equal keys keep their input order.
    """
    if sort_by == "name":
        return sorted(apis, key=lambda api: str(api.get("name") or "").casefold())
    if sort_by == "date":
        return sorted(apis, key=records.created_at, reverse=True)
    if sort_by == "popularity":
        return sorted(apis, key=records.total_calls, reverse=True)
    if sort_by == "rating":
        return sorted(apis, key=lambda api: records.uptime(api, default=0.0), reverse=True)
    raise ValueError(f"Unknown sort key '{sort_by}'. Allowed: {list(SORT_KEYS)}")


def filter_apis(apis: list[dict[str, Any]], criteria: FilterCriteria) -> list[dict[str, Any]]:
    results = [api for api in apis if _matches(api, criteria)]
    return sort_apis(results, criteria.sort_by)
