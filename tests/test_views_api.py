# File: /tests/test_views_api.py | Version: 1.0 | Title: Views & modules API (owner-scoped, structured errors)
from __future__ import annotations

from typing import Any, Dict


def test_requires_bearer_token(client):
    r = client.get("/modules")
    assert r.status_code == 401
    r = client.get("/modules", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401


def test_list_modules_and_frozen_config(client, headers):
    r = client.get("/modules", headers=headers)
    assert r.status_code == 200, r.text
    assert [m["id"] for m in r.json()][:2] == ["tasks", "goals"]
    assert r.json()[0]["displayNamePlural"] == "Tasks"

    r = client.get("/modules/tasks/frozen-config", headers=headers)
    assert r.status_code == 200
    assert r.json()["frozenViews"] == ["all-tasks"]

    r = client.get("/modules/nope/frozen-config", headers=headers)
    assert r.status_code == 404
    assert r.json()["error"]["kind"] == "not_found"


def test_views_crud_lifecycle(client, headers):
    # --- Seeded list ---
    r = client.get("/modules/tasks/views", headers=headers)
    assert r.status_code == 200, r.text
    listing = r.json()
    assert [v["id"] for v in listing] == ["all-tasks", "active-tasks", "kanban-board", "calendar-view"]
    assert listing[0]["isDefault"] is True
    assert listing[0]["frozen"] is True

    # --- Create ---
    payload: Dict[str, Any] = {
        "name": "Open work",
        "type": "TABLE",
        "visibleProperties": ["title", "status", "dueDate"],
        "filters": [{"propertyId": "status", "operator": "not_equals", "value": "done", "order": 0}],
        "sorts": [{"propertyId": "dueDate", "direction": "asc", "config": {"nullsFirst": False}}],
    }
    r = client.post("/modules/tasks/views", json=payload, headers=headers)
    assert r.status_code == 201, r.text
    created = r.json()
    view_id = created["id"]
    assert created["sorts"][0]["direction"] == "ASC"
    assert created["filters"][0]["logic"] == "AND"

    # --- Get one ---
    r = client.get(f"/modules/tasks/views/{view_id}", headers=headers)
    assert r.status_code == 200
    assert r.json() == created

    # --- Update ---
    r = client.patch(
        f"/modules/tasks/views/{view_id}",
        json={"name": "Renamed", "groupBy": "priority"},
        headers=headers,
    )
    assert r.status_code == 200, r.text
    assert r.json()["name"] == "Renamed"
    assert r.json()["groupBy"] == "priority"
    assert r.json()["filters"] == created["filters"]

    # --- Make default ---
    r = client.post(f"/modules/tasks/views/{view_id}/default", headers=headers)
    assert r.status_code == 200
    defaults = [v["id"] for v in client.get("/modules/tasks/views", headers=headers).json() if v["isDefault"]]
    assert defaults == [view_id]

    # --- Delete the default: first remaining view is promoted ---
    r = client.delete(f"/modules/tasks/views/{view_id}", headers=headers)
    assert r.status_code == 200
    assert r.json()["detail"] == "View deleted"
    r = client.get(f"/modules/tasks/views/{view_id}", headers=headers)
    assert r.status_code == 404
    defaults = [v["id"] for v in client.get("/modules/tasks/views", headers=headers).json() if v["isDefault"]]
    assert defaults == ["all-tasks"]


def test_views_are_owner_scoped(client, headers, other_headers):
    r = client.post("/modules/tasks/views", json={"name": "Private"}, headers=headers)
    view_id = r.json()["id"]
    r = client.get(f"/modules/tasks/views/{view_id}", headers=other_headers)
    assert r.status_code == 404
    assert len(client.get("/modules/tasks/views", headers=other_headers).json()) == 4


def test_frozen_view_errors(client, headers):
    r = client.delete("/modules/tasks/views/all-tasks", headers=headers)
    assert r.status_code == 403
    body = r.json()["error"]
    assert body["code"] == "FORBIDDEN"
    assert body["kind"] == "forbidden"

    r = client.patch("/modules/tasks/views/all-tasks", json={"name": "Everything"}, headers=headers)
    assert r.status_code == 403
    assert client.get("/modules/tasks/views/all-tasks", headers=headers).json()["name"] == "All Tasks"

    # Filters on a frozen view stay editable
    r = client.patch(
        "/modules/tasks/views/all-tasks",
        json={"filters": [{"propertyId": "priority", "operator": "equals", "value": "high"}]},
        headers=headers,
    )
    assert r.status_code == 200, r.text


def test_unsetting_default_is_rejected(client, headers):
    r = client.patch("/modules/tasks/views/all-tasks", json={"isDefault": False}, headers=headers)
    assert r.status_code == 422
    assert r.json()["error"]["kind"] == "validation"


def test_invalid_filter_is_rejected_at_write_time(client, headers):
    bad = {"name": "Bad", "filters": [{"propertyId": "status", "operator": "greater_than", "value": 3}]}
    r = client.post("/modules/tasks/views", json=bad, headers=headers)
    assert r.status_code == 422
    assert r.json()["error"]["details"]["operator"] == "greater_than"

    ghost = {"name": "Ghost", "sorts": [{"propertyId": "ghost"}]}
    r = client.post("/modules/tasks/views", json=ghost, headers=headers)
    assert r.status_code == 404


def test_duplicate_view_endpoint(client, headers):
    r = client.post("/modules/tasks/views/kanban-board/duplicate", headers=headers)
    assert r.status_code == 201, r.text
    assert r.json()["name"] == "Kanban Board (Copy)"
    assert r.json()["isDefault"] is False

    r = client.post("/modules/tasks/views/kanban-board/duplicate", json={"name": "Team board"}, headers=headers)
    assert r.status_code == 201
    assert r.json()["name"] == "Team board"
    assert r.json()["groupBy"] == "status"
