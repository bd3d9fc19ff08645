"""
Catalog persistence (raw SQL).

Four collections: apis, api_categories, api_stats, api_endpoints.
Ids are returned as text so the in-memory join compares plain strings.
"""

from __future__ import annotations

from typing import Any

from core import db

API_COLUMNS = """
    id::text AS id, name, description, version, owner, base_url,
    documentation_url, category_id::text AS category_id, tags,
    auth_type, auth_description, created_at, updated_at
"""

CATEGORY_COLUMNS = "id::text AS id, name, color"

STATS_COLUMNS = """
    id::text AS id, api_id::text AS api_id, total_calls, last_week_calls,
    uptime, response_time, updated_at
"""

ENDPOINT_COLUMNS = """
    id::text AS id, api_id::text AS api_id, method, path, description, created_at
"""


async def list_apis() -> list[dict[str, Any]]:
    return await db.fetch_all(f"SELECT {API_COLUMNS} FROM apis")


async def list_categories() -> list[dict[str, Any]]:
    return await db.fetch_all(f"SELECT {CATEGORY_COLUMNS} FROM api_categories")


async def list_stats() -> list[dict[str, Any]]:
    # Oldest first, so the in-memory join keeps the newest row per API.
    return await db.fetch_all(f"SELECT {STATS_COLUMNS} FROM api_stats ORDER BY updated_at ASC")


async def list_endpoints() -> list[dict[str, Any]]:
    return await db.fetch_all(f"SELECT {ENDPOINT_COLUMNS} FROM api_endpoints")


async def get_api(api_id: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {API_COLUMNS}
        FROM apis
        WHERE id = $1::uuid
        """,
        api_id,
    )


async def get_category(category_id: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {CATEGORY_COLUMNS}
        FROM api_categories
        WHERE id = $1::uuid
        """,
        category_id,
    )


async def get_stats_for_api(api_id: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {STATS_COLUMNS}
        FROM api_stats
        WHERE api_id = $1::uuid
        ORDER BY updated_at DESC
        LIMIT 1
        """,
        api_id,
    )


async def list_endpoints_for_api(api_id: str) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {ENDPOINT_COLUMNS}
        FROM api_endpoints
        WHERE api_id = $1::uuid
        """,
        api_id,
    )


async def insert_api(
    *,
    name: str,
    description: str,
    base_url: str,
    version: str,
    documentation_url: str | None,
    owner: str,
    category_id: str,
    tags: list[str],
    auth_type: str,
    auth_description: str | None,
) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO apis (
            name, description, base_url, version, documentation_url,
            owner, category_id, tags, auth_type, auth_description
        )
        VALUES ($1, $2, $3, $4, $5, $6, $7::uuid, $8, $9, $10)
        RETURNING {API_COLUMNS}
        """,
        name,
        description,
        base_url,
        version,
        documentation_url,
        owner,
        category_id,
        tags,
        auth_type,
        auth_description,
    )
    if row is None:
        raise db.StoreError("Failed to insert API.")
    return row


async def insert_stats(
    api_id: str,
    *,
    total_calls: int,
    last_week_calls: int,
    uptime: float,
    response_time: float,
) -> None:
    await db.execute(
        """
        INSERT INTO api_stats (api_id, total_calls, last_week_calls, uptime, response_time)
        VALUES ($1::uuid, $2, $3, $4, $5)
        """,
        api_id,
        total_calls,
        last_week_calls,
        uptime,
        response_time,
    )


async def insert_default_stats(api_id: str) -> None:
    # Counters and uptime come from the column defaults.
    await db.execute(
        "INSERT INTO api_stats (api_id) VALUES ($1::uuid)",
        api_id,
    )


async def insert_endpoints(api_id: str, endpoints: list[dict[str, str]]) -> None:
    records = [
        (api_id, endpoint["path"], endpoint["method"], endpoint["description"])
        for endpoint in endpoints
    ]
    await db.execute_many(
        """
        INSERT INTO api_endpoints (api_id, path, method, description)
        VALUES ($1::uuid, $2, $3, $4)
        """,
        records,
    )
