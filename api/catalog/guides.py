"""
Human-facing helpers: authentication guidance for a listing and labels for
the filters currently applied to a search.
"""

from __future__ import annotations

from typing import Any

from .assembly import normalize_auth_type
from .filtering import ALL, FilterCriteria

AUTH_LABELS = {
    "apiKey": "API Key",
    "oauth2": "OAuth 2.0",
    "none": "No authentication",
}


def auth_guide(api: dict[str, Any]) -> dict[str, Any]:
    auth_type = normalize_auth_type(api.get("auth_type"))
    base_url = str(api.get("base_url") or "").rstrip("/")

    if auth_type == "none":
        description = "This API does not require authentication."
        example = None
    else:
        description = (api.get("auth_description") or "").strip() or (
            f"This API uses {AUTH_LABELS[auth_type]} for authentication. "
            "See the official documentation for details."
        )
        if auth_type == "apiKey":
            header = "X-API-Key: your_api_key_here"
        else:
            header = "Authorization: Bearer your_access_token"
        example = f'curl -H "{header}" {base_url}/endpoint'

    return {
        "auth_type": auth_type,
        "label": AUTH_LABELS[auth_type],
        "description": description,
        "example": example,
    }


def active_filter_labels(criteria: FilterCriteria, categories: list[dict[str, Any]]) -> list[str]:
    labels: list[str] = []
    if criteria.category != ALL:
        # Unknown category ids get no label.
        names = {category["id"]: category["name"] for category in categories}
        if criteria.category in names:
            labels.append(f"Category: {names[criteria.category]}")
    if criteria.auth_type != ALL:
        labels.append(f"Auth: {AUTH_LABELS[criteria.auth_type]}")
    return labels
