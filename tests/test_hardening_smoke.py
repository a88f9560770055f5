# File: tests/test_hardening_smoke.py | Version: 2.0 | Title: Logging, sentry, health and structured error handlers
import json
import logging
import sys
import types

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from docview.core.error_handlers import register_engine_handlers, register_exception_handlers
from docview.core.errors import ConflictError, ForbiddenError
from docview.core.logging import JsonConsole, configure_logging
from docview.db import Base
from docview.observability.sentry import init_sentry_if_configured
from docview.routers import health


def test_configure_logging_plain_and_json(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_JSON", "false")
    configure_logging()
    logging.getLogger("docview.tests").debug("plain-log")

    monkeypatch.setenv("LOG_JSON", "true")
    configure_logging()
    logging.getLogger("docview.tests").info("json-log")

    record = logging.LogRecord("docview.engine", logging.WARNING, __file__, 1, "missing %s", ("x",), None)
    assert json.loads(JsonConsole().format(record)) == {
        "level": "WARNING",
        "logger": "docview.engine",
        "message": "missing x",
    }
    record.module_id = "tasks"
    record.view_id = "all-tasks"
    payload = json.loads(JsonConsole().format(record))
    assert payload["module_id"] == "tasks"
    assert payload["view_id"] == "all-tasks"
    assert "owner_id" not in payload


def test_sentry_init_disabled_then_enabled(monkeypatch):
    monkeypatch.delenv("SENTRY_DSN", raising=False)
    assert init_sentry_if_configured() is False

    calls = {}
    sentry_pkg = types.ModuleType("sentry_sdk")
    sentry_pkg.init = lambda **kwargs: calls.update(kwargs)  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "sentry_sdk", sentry_pkg)

    monkeypatch.setenv("SENTRY_DSN", "https://dummy-public@o0.ingest.sentry.io/0")
    monkeypatch.setenv("SENTRY_TRACES_SAMPLE_RATE", "0.05")
    assert init_sentry_if_configured() is True
    assert calls["traces_sample_rate"] == 0.05
    assert calls["send_default_pii"] is False


def test_health_endpoints(client, monkeypatch):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert r.json()["modules"] == 7

    # Fresh in-memory database: reachable but not migrated yet
    fresh = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    monkeypatch.setattr(health, "engine", fresh)
    r = client.get("/readyz")
    assert r.status_code == 503
    assert r.json()["missingTables"] == ["document_views", "module_properties", "module_records"]

    Base.metadata.create_all(bind=fresh)
    r = client.get("/readyz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "db": "ok"}


def test_openapi_has_view_engine_routes(client):
    paths = client.get("/openapi.json").json()["paths"]
    expected = {
        "/modules": ["get"],
        "/modules/{module_id}/frozen-config": ["get"],
        "/modules/{module_id}/properties": ["get", "post"],
        "/modules/{module_id}/properties/{property_id}": ["patch", "delete"],
        "/modules/{module_id}/views": ["get", "post"],
        "/modules/{module_id}/views/{view_id}": ["get", "patch", "delete"],
        "/modules/{module_id}/views/{view_id}/duplicate": ["post"],
        "/modules/{module_id}/views/{view_id}/default": ["post"],
        "/modules/{module_id}/records": ["get", "post"],
    }
    missing = []
    for p, methods in expected.items():
        present = {m.lower() for m in paths.get(p, {})}
        missing.extend(f"{p} {m.upper()}" for m in methods if m not in present)
    assert not missing, "Missing routes: " + ", ".join(missing)


def _error_app() -> FastAPI:
    app = FastAPI()
    register_engine_handlers(app)
    register_exception_handlers(app)

    @app.get("/forbidden")
    def forbidden():
        raise ForbiddenError("View 'all-tasks' is frozen")

    @app.get("/conflict")
    def conflict():
        raise ConflictError("Property 'title' already exists", details={"propertyId": "title"})

    @app.get("/boom")
    def boom():
        raise RuntimeError("internal detail")

    @app.get("/typed/{n}")
    def typed(n: int):
        return {"n": n}

    return app


def test_structured_error_responses():
    client = TestClient(_error_app(), raise_server_exceptions=False)

    r = client.get("/forbidden")
    assert r.status_code == 403
    assert r.json() == {
        "error": {"code": "FORBIDDEN", "message": "View 'all-tasks' is frozen", "kind": "forbidden"}
    }

    r = client.get("/conflict")
    assert r.status_code == 409
    assert r.json()["error"]["details"] == {"propertyId": "title"}

    r = client.get("/missing")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND"

    r = client.get("/typed/abc")
    assert r.status_code == 422
    assert r.json()["error"]["message"] == "Validation error"

    r = client.get("/boom")
    assert r.status_code == 500
    assert "internal detail" not in r.text
