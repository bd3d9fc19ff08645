from __future__ import annotations

import asyncio
import re
from datetime import timedelta
from pathlib import Path

from catalog import assembly, repository
from core import db

MIGRATIONS = Path(__file__).resolve().parents[1] / "db" / "migrations"


def _table_body(sql: str, table: str) -> str:
    match = re.search(rf"CREATE TABLE {table} \((.*?)\n\);", sql, re.S)
    assert match, f"{table} not found"
    return match.group(1)


def test_one_stats_row_per_api():
    sql = "\n".join(path.read_text() for path in sorted(MIGRATIONS.glob("*.sql")))

    api_id = next(line for line in _table_body(sql, "api_stats").splitlines() if line.strip().startswith("api_id "))
    assert "UNIQUE" in api_id


def test_list_stats_is_ordered_oldest_first(monkeypatch):
    seen = []

    async def fake_fetch_all(query, *args):
        seen.append(query)
        return []

    monkeypatch.setattr(db, "fetch_all", fake_fetch_all)

    asyncio.run(repository.list_stats())

    assert "ORDER BY updated_at ASC" in seen[0]


def test_list_join_keeps_the_row_the_detail_view_reads(make_api, make_stats, now):
    api = make_api("Payment API")
    older = make_stats(api["id"], total_calls=1, updated_at=now - timedelta(days=1))
    newer = make_stats(api["id"], total_calls=2, updated_at=now)

    # list_stats order: oldest first. get_stats_for_api: newest only.
    [record] = assembly.assemble_apis([api], categories=[], stats=[older, newer], endpoints=[])

    assert record["stats"]["total_calls"] == 2
