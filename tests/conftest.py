"""Pytest configuration and fixtures."""

from __future__ import annotations

import itertools
import uuid
from datetime import datetime, timezone

import pytest

from catalog import repository
from core import db

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_api():
    """Build a raw `apis` row; stats/category/endpoints are attached separately."""
    counter = itertools.count(1)

    def _make(name="Sample API", **overrides):
        n = next(counter)
        row = {
            "id": str(uuid.UUID(int=n)),
            "name": name,
            "description": f"{name} description",
            "version": "v1.0",
            "owner": "Example Org",
            "base_url": "https://api.example.com",
            "documentation_url": None,
            "category_id": "cat-a",
            "tags": [],
            "auth_type": "none",
            "auth_description": None,
            "created_at": datetime(2026, 1, 1, tzinfo=timezone.utc),
            "updated_at": datetime(2026, 1, 1, tzinfo=timezone.utc),
        }
        row.update(overrides)
        return row

    return _make


@pytest.fixture
def make_stats():
    def _make(api_id, total_calls=0, uptime=99.9, **overrides):
        row = {
            "id": f"stats-{api_id}",
            "api_id": api_id,
            "total_calls": total_calls,
            "last_week_calls": 0,
            "uptime": uptime,
            "response_time": 120.0,
            "updated_at": NOW,
        }
        row.update(overrides)
        return row

    return _make


class FakeStore:
    """In-memory stand-in for `catalog.repository`, one list per collection."""

    def __init__(self):
        self.apis = []
        self.categories = []
        self.stats = []
        self.endpoints = []
        self.failing = set()
        self.calls = []

    def _check(self, name):
        self.calls.append(name)
        if name in self.failing:
            raise db.StoreError(f"{name} unavailable")

    async def list_apis(self):
        self._check("list_apis")
        return list(self.apis)

    async def list_categories(self):
        self._check("list_categories")
        return list(self.categories)

    async def list_stats(self):
        self._check("list_stats")
        return list(self.stats)

    async def list_endpoints(self):
        self._check("list_endpoints")
        return list(self.endpoints)

    async def get_api(self, api_id):
        self._check("get_api")
        return next((row for row in self.apis if row["id"] == api_id), None)

    async def get_category(self, category_id):
        self._check("get_category")
        return next((row for row in self.categories if row["id"] == category_id), None)

    async def get_stats_for_api(self, api_id):
        self._check("get_stats_for_api")
        return next((row for row in self.stats if row["api_id"] == api_id), None)

    async def list_endpoints_for_api(self, api_id):
        self._check("list_endpoints_for_api")
        return [row for row in self.endpoints if row["api_id"] == api_id]

    async def insert_api(self, **fields):
        self._check("insert_api")
        row = {
            "id": str(uuid.uuid4()),
            **fields,
            "created_at": NOW,
            "updated_at": NOW,
        }
        self.apis.append(row)
        return row

    async def insert_stats(self, api_id, **fields):
        self._check("insert_stats")
        self.stats.append({"id": f"stats-{api_id}", "api_id": api_id, **fields, "updated_at": NOW})

    async def insert_default_stats(self, api_id):
        self._check("insert_default_stats")
        self.stats.append(
            {
                "id": f"stats-{api_id}",
                "api_id": api_id,
                "total_calls": 0,
                "last_week_calls": 0,
                "uptime": 99.9,
                "response_time": 0.0,
                "updated_at": NOW,
            }
        )

    async def insert_endpoints(self, api_id, endpoints):
        self._check("insert_endpoints")
        for i, endpoint in enumerate(endpoints):
            self.endpoints.append({"id": f"ep-{api_id}-{i}", "api_id": api_id, **endpoint, "created_at": NOW})


@pytest.fixture
def store(monkeypatch):
    fake = FakeStore()
    for name in (
        "list_apis",
        "list_categories",
        "list_stats",
        "list_endpoints",
        "get_api",
        "get_category",
        "get_stats_for_api",
        "list_endpoints_for_api",
        "insert_api",
        "insert_stats",
        "insert_default_stats",
        "insert_endpoints",
    ):
        monkeypatch.setattr(repository, name, getattr(fake, name))
    return fake
