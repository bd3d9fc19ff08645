"""
In-memory join of the four catalog collections.

Rows come straight from the repository (plain dicts). The result is one
dict per API with `category`, `stats` and `endpoints` attached. Input rows
are never mutated.

This is a full-table join done in Python; it is fine for a catalog of a few
thousand listings. Past that it belongs in SQL.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

AUTH_TYPES = ("apiKey", "oauth2", "none")
DEFAULT_AUTH_TYPE = "none"


def normalize_auth_type(value: Any) -> str:
    return value if value in AUTH_TYPES else DEFAULT_AUTH_TYPE


def index_by(rows: Iterable[dict[str, Any]], key: str) -> dict[str, dict[str, Any]]:
    """
    Map `row[key]` -> row. Later rows win on duplicate keys.
    """
    return {row[key]: row for row in rows}


def group_by(rows: Iterable[dict[str, Any]], key: str) -> dict[str, list[dict[str, Any]]]:
    grouped: dict[str, list[dict[str, Any]]] = {}
    for row in rows:
        grouped.setdefault(row[key], []).append(row)
    return grouped


def assemble_api(
    api: dict[str, Any],
    *,
    category: dict[str, Any] | None,
    stats: dict[str, Any] | None,
    endpoints: list[dict[str, Any]] | None,
) -> dict[str, Any]:
    return {
        **api,
        "tags": list(api.get("tags") or []),
        "auth_type": normalize_auth_type(api.get("auth_type")),
        "category": category,
        "stats": stats,
        "endpoints": list(endpoints or []),
    }


def assemble_apis(
    apis: list[dict[str, Any]],
    *,
    categories: list[dict[str, Any]],
    stats: list[dict[str, Any]],
    endpoints: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    categories_by_id = index_by(categories, "id")
    stats_by_api = index_by(stats, "api_id")
    endpoints_by_api = group_by(endpoints, "api_id")

    return [
        assemble_api(
            api,
            category=categories_by_id.get(api.get("category_id")),
            stats=stats_by_api.get(api["id"]),
            endpoints=endpoints_by_api.get(api["id"]),
        )
        for api in apis
    ]
