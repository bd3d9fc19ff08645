"""
Catalog orchestration.

Read policy:
- the primary `apis` fetch is fatal to the read (CatalogUnavailableError)
- categories/stats/endpoints are fetched concurrently; a failed fetch
  degrades to an empty collection and adds a notice for the client

Create flow (no transaction):
0) check the category exists (CatalogValidationError otherwise)
1) insert API row
2) insert supplied or default stats row
3) insert endpoint rows
The first failing step aborts with CatalogWriteError. Rows written by
earlier steps stay in place.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, TypeVar

from core import db, settings

from . import assembly, filtering, guides, metrics, repository, schemas

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CatalogUnavailableError(RuntimeError):
    pass


class CatalogWriteError(RuntimeError):
    pass


class CatalogValidationError(ValueError):
    pass


@dataclass(frozen=True)
class CatalogSnapshot:
    apis: list[dict[str, Any]]
    categories: list[dict[str, Any]] = field(default_factory=list)
    notices: list[str] = field(default_factory=list)


def new_api_window_days() -> int:
    return settings.env_int("DASHBOARD_NEW_API_WINDOW_DAYS", metrics.DEFAULT_NEW_API_WINDOW_DAYS)


def top_categories_limit() -> int:
    return settings.env_int("DASHBOARD_TOP_CATEGORIES", metrics.DEFAULT_TOP_CATEGORIES)


def top_apis_limit() -> int:
    return settings.env_int("DASHBOARD_TOP_APIS", metrics.DEFAULT_TOP_APIS)


def timeseries_months() -> int:
    return settings.env_int("DASHBOARD_TIMESERIES_MONTHS", metrics.DEFAULT_TIMESERIES_MONTHS)


async def _or_default(collection: str, pending: Awaitable[T], default: T) -> tuple[T, str | None]:
    try:
        return await pending, None
    except db.StoreError:
        logger.exception("catalog_fetch_failed collection=%s", collection)
        return default, f"Failed to fetch {collection}."


async def list_categories() -> tuple[list[dict[str, Any]], list[str]]:
    categories, notice = await _or_default("api_categories", repository.list_categories(), [])
    return categories, [notice] if notice else []


async def load_catalog() -> CatalogSnapshot:
    try:
        apis = await repository.list_apis()
    except db.StoreError as exc:
        logger.exception("catalog_fetch_failed collection=apis")
        raise CatalogUnavailableError("Failed to fetch APIs.") from exc

    if not apis:
        return CatalogSnapshot(apis=[])

    (categories, categories_notice), (stats, stats_notice), (endpoints, endpoints_notice) = (
        await asyncio.gather(
            _or_default("api_categories", repository.list_categories(), []),
            _or_default("api_stats", repository.list_stats(), []),
            _or_default("api_endpoints", repository.list_endpoints(), []),
        )
    )
    notices = [n for n in (categories_notice, stats_notice, endpoints_notice) if n]

    return CatalogSnapshot(
        apis=assembly.assemble_apis(apis, categories=categories, stats=stats, endpoints=endpoints),
        categories=categories,
        notices=notices,
    )


async def search_apis(criteria: filtering.FilterCriteria) -> dict[str, Any]:
    snapshot = await load_catalog()
    results = filtering.filter_apis(snapshot.apis, criteria)

    categories, notices = snapshot.categories, snapshot.notices
    if not snapshot.apis and criteria.category != filtering.ALL:
        # An empty catalog skips the join, but the category label still needs names.
        categories, notices = await list_categories()

    return {
        "apis": results,
        "count": len(results),
        "total": len(snapshot.apis),
        "filters": {
            "query": criteria.query,
            "category": criteria.category,
            "auth_type": criteria.auth_type,
            "sort_by": criteria.sort_by,
        },
        "active_filters": guides.active_filter_labels(criteria, categories),
        "notices": notices,
    }


async def get_api(api_id: str) -> tuple[dict[str, Any] | None, list[str]]:
    """
    Return (enriched API or None, notices).
    """
    api_id = schemas.canonical_uuid(api_id)
    if api_id is None:
        return None, []

    try:
        api = await repository.get_api(api_id)
    except db.StoreError as exc:
        logger.exception("catalog_fetch_failed collection=apis api_id=%s", api_id)
        raise CatalogUnavailableError(f"Failed to fetch API with id {api_id}.") from exc

    if api is None:
        return None, []

    (category, category_notice), (stats, stats_notice), (endpoints, endpoints_notice) = (
        await asyncio.gather(
            _or_default("api_categories", repository.get_category(api["category_id"]), None),
            _or_default("api_stats", repository.get_stats_for_api(api_id), None),
            _or_default("api_endpoints", repository.list_endpoints_for_api(api_id), []),
        )
    )
    notices = [n for n in (category_notice, stats_notice, endpoints_notice) if n]
    return assembly.assemble_api(api, category=category, stats=stats, endpoints=endpoints), notices


async def _write_step(step: str, pending: Awaitable[T]) -> T:
    try:
        return await pending
    except db.StoreError as exc:
        logger.exception("create_api_failed step=%s", step)
        raise CatalogWriteError("Failed to create API.") from exc


async def create_api(payload: schemas.CreateApiRequest) -> tuple[dict[str, Any], list[str]]:
    category = await _write_step("category", repository.get_category(payload.category_id))
    if category is None:
        raise CatalogValidationError(f"Unknown category_id {payload.category_id}.")

    row = await _write_step(
        "api",
        repository.insert_api(
            name=payload.name,
            description=payload.description,
            base_url=payload.base_url,
            version=payload.version,
            documentation_url=payload.documentation_url,
            owner=payload.owner,
            category_id=payload.category_id,
            tags=payload.tags,
            auth_type=payload.auth_type,
            auth_description=payload.auth_description,
        ),
    )
    api_id = str(row["id"])

    if payload.stats is not None:
        await _write_step(
            "stats",
            repository.insert_stats(
                api_id,
                total_calls=payload.stats.total_calls,
                last_week_calls=payload.stats.last_week_calls,
                uptime=payload.stats.uptime,
                response_time=payload.stats.response_time,
            ),
        )
    else:
        await _write_step("stats", repository.insert_default_stats(api_id))

    if payload.endpoints:
        await _write_step(
            "endpoints",
            repository.insert_endpoints(api_id, [endpoint.model_dump() for endpoint in payload.endpoints]),
        )

    logger.info("api_created api_id=%s endpoints=%s", api_id, len(payload.endpoints))

    try:
        api, notices = await get_api(api_id)
    except CatalogUnavailableError as exc:
        raise CatalogWriteError(f"API {api_id} was created but could not be read back.") from exc
    if api is None:
        raise CatalogWriteError(f"API {api_id} was created but could not be read back.")
    return api, notices


async def dashboard(now: datetime | None = None) -> dict[str, Any]:
    """
    Dashboard summary. Store failures never propagate: the neutral summary
    comes back with `error` set instead.
    """
    now = now or datetime.now(timezone.utc)
    try:
        snapshot = await load_catalog()
    except CatalogUnavailableError as exc:
        summary = metrics.empty_summary(now=now, error=str(exc), timeseries_months=timeseries_months())
        summary["notices"] = []
        return summary

    summary = metrics.dashboard_summary(
        snapshot.apis,
        now=now,
        window_days=new_api_window_days(),
        category_limit=top_categories_limit(),
        top_api_limit=top_apis_limit(),
        timeseries_months=timeseries_months(),
    )
    summary["notices"] = snapshot.notices
    return summary
