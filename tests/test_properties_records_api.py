# File: /tests/test_properties_records_api.py | Version: 1.0 | Title: Property Schema & record projection API
from __future__ import annotations


def _create(client, headers, **data):
    r = client.post("/modules/tasks/records", json={"data": data}, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def test_property_schema_endpoints(client, headers):
    r = client.get("/modules/tasks/properties", headers=headers)
    assert r.status_code == 200, r.text
    props = r.json()
    assert props[0]["id"] == "title"
    assert props[0]["frozen"] is True

    r = client.post(
        "/modules/tasks/properties",
        json={
            "id": "effort",
            "name": "Effort",
            "type": "select",
            "options": [{"id": "s", "name": "Small"}, {"id": "l", "name": "Large"}],
        },
        headers=headers,
    )
    assert r.status_code == 201, r.text
    assert r.json()["order"] == props[-1]["order"] + 1

    r = client.post("/modules/tasks/properties", json={"id": "effort", "name": "Again", "type": "text"}, headers=headers)
    assert r.status_code == 409
    assert r.json()["error"]["kind"] == "conflict"

    r = client.patch("/modules/tasks/properties/effort", json={"name": "Size"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["name"] == "Size"

    r = client.delete("/modules/tasks/properties/effort", headers=headers)
    assert r.status_code == 200
    assert r.json()["detail"] == "Property deleted"


def test_frozen_property_endpoints(client, headers):
    r = client.delete("/modules/tasks/properties/title", headers=headers)
    assert r.status_code == 403
    r = client.patch("/modules/tasks/properties/status", json={"type": "text"}, headers=headers)
    assert r.status_code == 403
    r = client.patch("/modules/tasks/properties/ghost", json={"name": "x"}, headers=headers)
    assert r.status_code == 404
    r = client.post("/modules/journals/properties", json={"name": "Weather", "type": "text"}, headers=headers)
    assert r.status_code == 403


def test_deleting_property_strips_it_from_views(client, headers):
    r = client.post(
        "/modules/tasks/views",
        json={
            "name": "Assigned",
            "visibleProperties": ["title", "assignee"],
            "filters": [{"propertyId": "assignee", "operator": "is_not_empty"}],
        },
        headers=headers,
    )
    view_id = r.json()["id"]
    assert client.delete("/modules/tasks/properties/assignee", headers=headers).status_code == 200
    view = client.get(f"/modules/tasks/views/{view_id}", headers=headers).json()
    assert view["visibleProperties"] == ["title"]
    assert view["filters"] == []


def test_record_creation_validates_required_and_stamps_timestamps(client, headers):
    r = client.post("/modules/tasks/records", json={"data": {"title": "No status"}}, headers=headers)
    assert r.status_code == 422
    assert set(r.json()["error"]["details"]["missing"]) == {"status", "priority"}

    rec = _create(client, headers, title="Stamped", status="todo", priority="low")
    assert rec["data"]["createdAt"]
    assert rec["data"]["updatedAt"] == rec["data"]["createdAt"]

    r = client.post(
        "/modules/tasks/records",
        json={"id": rec["id"], "data": {"title": "Dup", "status": "todo", "priority": "low"}},
        headers=headers,
    )
    assert r.status_code == 409


def test_end_to_end_projection(client, headers):
    seed = [
        ("A", "todo", "2024-05-20"),
        ("B", "done", "2024-05-01"),
        ("C", "todo", "2024-05-18"),
        ("D", "todo", None),
        ("E", "todo", "2024-05-18"),
    ]
    for title, status, due in seed:
        data = {"title": title, "status": status, "priority": "medium"}
        if due:
            data["dueDate"] = due
        _create(client, headers, **data)

    r = client.post(
        "/modules/tasks/views",
        json={
            "name": "Todo by due",
            "visibleProperties": ["title", "dueDate"],
            "filters": [{"propertyId": "status", "operator": "equals", "value": "todo"}],
            "sorts": [{"propertyId": "dueDate", "direction": "ASC"}],
        },
        headers=headers,
    )
    view_id = r.json()["id"]

    r = client.get("/modules/tasks/records", params={"viewId": view_id}, headers=headers)
    assert r.status_code == 200, r.text
    body = r.json()
    assert [rec["title"] for rec in body["records"]] == ["C", "E", "A", "D"]
    assert set(body["records"][0]) == {"id", "title", "dueDate"}
    assert body["pagination"]["total"] == 4
    assert body["view"]["id"] == view_id

    # Reloading the stored view and re-applying it gives the same output
    again = client.get("/modules/tasks/records", params={"viewId": view_id}, headers=headers).json()
    assert again == body

    page = client.get(
        "/modules/tasks/records", params={"viewId": view_id, "page": 2, "perPage": 3}, headers=headers
    ).json()
    assert [rec["title"] for rec in page["records"]] == ["D"]
    assert page["pagination"]["hasPrev"] is True

    board = client.get("/modules/tasks/records", params={"viewId": "kanban-board"}, headers=headers).json()
    assert [(g["key"], g["count"]) for g in board["groups"]] == [("todo", 4), ("done", 1)]


def test_records_are_owner_scoped(client, headers, other_headers):
    _create(client, headers, title="Mine", status="todo", priority="low")
    mine = client.get("/modules/tasks/records", headers=headers).json()
    theirs = client.get("/modules/tasks/records", headers=other_headers).json()
    assert mine["pagination"]["total"] == 1
    assert theirs["pagination"]["total"] == 0


def test_records_unknown_view(client, headers):
    r = client.get("/modules/tasks/records", params={"viewId": "ghost"}, headers=headers)
    assert r.status_code == 404
    r = client.get("/modules/tasks/records", params={"perPage": 0}, headers=headers)
    assert r.status_code == 422


def test_record_ids_are_scoped_per_owner(client, headers, other_headers):
    body = {"id": "shared-id", "data": {"title": "Mine", "status": "todo", "priority": "low"}}
    assert client.post("/modules/tasks/records", json=body, headers=headers).status_code == 201
    r = client.post("/modules/tasks/records", json=body, headers=other_headers)
    assert r.status_code == 201, r.text
    assert r.json()["id"] == "shared-id"

    r = client.post("/modules/tasks/records", json=body, headers=other_headers)
    assert r.status_code == 409
    assert r.json()["error"]["kind"] == "conflict"
