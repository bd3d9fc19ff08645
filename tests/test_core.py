from __future__ import annotations

import asyncio
import json
import logging

import pytest

import core
from core import db, logs, settings


def test_env_helpers_fall_back_on_bad_values(monkeypatch):
    monkeypatch.setenv("CATALOG_TEST_INT", "abc")
    monkeypatch.setenv("CATALOG_TEST_FLOAT", "1.5")
    monkeypatch.setenv("CATALOG_TEST_LIST", " a, ,b ")
    monkeypatch.delenv("CATALOG_TEST_MISSING", raising=False)

    assert settings.env_int("CATALOG_TEST_INT", 7) == 7
    assert settings.env_float("CATALOG_TEST_FLOAT", 0.0) == 1.5
    assert settings.env_list("CATALOG_TEST_LIST", []) == ["a", "b"]
    assert settings.env_list("CATALOG_TEST_MISSING", ["x"]) == ["x"]
    assert settings.env_str("CATALOG_TEST_MISSING", "fallback") == "fallback"


def test_database_url_strips_sslmode(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/catalog?sslmode=require&application_name=api")

    assert db.database_url() == "postgresql://u:p@db:5432/catalog?application_name=api"


def test_database_url_required(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)

    with pytest.raises(db.StoreError):
        db.database_url()


def test_queries_without_pool_raise_store_error():
    with pytest.raises(db.StoreError):
        asyncio.run(db.fetch_all("SELECT 1"))


def test_execute_many_with_no_records_is_a_no_op():
    asyncio.run(db.execute_many("INSERT INTO api_endpoints VALUES ($1)", []))


def test_json_formatter_emits_one_object_per_record():
    record = logging.LogRecord("catalog.service", logging.INFO, __file__, 1, "api_created api_id=%s", ("x",), None)

    payload = json.loads(logs.JsonFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "catalog.service"
    assert payload["message"] == "api_created api_id=x"


def test_configure_logging_sets_level(monkeypatch):
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    monkeypatch.setenv("LOG_LEVEL", "warning")
    try:
        logs.configure_logging(format_type="json")
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, logs.JsonFormatter)
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)


def test_package_docstring_lists_its_modules():
    for name in ("db", "settings", "logs"):
        assert f"`{name}`" in core.__doc__
