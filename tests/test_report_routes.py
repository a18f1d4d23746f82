from __future__ import annotations

from fastapi.testclient import TestClient

from models.enums import ReportStatus
from routes import report_routes


def _create(client: TestClient, headers: dict, **overrides) -> dict:
    payload = {"title": "Pothole", "description": "Large pothole", "category": "roads"}
    payload.update(overrides)
    response = client.post("/reports/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_report_as_citizen(client: TestClient, citizen_headers: dict) -> None:
    data = _create(client, citizen_headers, location={"lat": 13.08, "lng": 80.27}, locationName="Adyar, Chennai")

    assert data["status"] == "in_progress"
    assert data["priority"] == "low"
    assert data["upvotes"] == 0
    assert data["upvotedBy"] == []
    assert data["createdByUserId"] == "2"
    assert data["createdByUsername"] == "user"
    assert data["locationName"] == "Adyar, Chennai"
    assert "createdAt" in data


def test_create_backfills_location_name(client: TestClient, citizen_headers: dict, monkeypatch) -> None:
    monkeypatch.setattr(report_routes, "reverse_geocode", lambda lat, lng: "Baner, Pune")

    data = _create(client, citizen_headers, location={"lat": 18.52, "lng": 73.85})
    assert data["locationName"] == "Baner, Pune"


def test_create_keeps_going_when_geocoding_fails(client: TestClient, citizen_headers: dict) -> None:
    data = _create(client, citizen_headers, location={"lat": 18.52, "lng": 73.85})
    assert data["locationName"] is None
    assert data["location"] == {"lat": 18.52, "lng": 73.85}


def test_create_rejects_empty_title(client: TestClient, citizen_headers: dict) -> None:
    response = client.post("/reports/", json={"title": "", "description": "x"}, headers=citizen_headers)
    assert response.status_code == 422


def test_create_rejects_bad_coordinates(client: TestClient, citizen_headers: dict) -> None:
    response = client.post(
        "/reports/",
        json={"title": "t", "description": "d", "location": {"lat": 95, "lng": 0}},
        headers=citizen_headers,
    )
    assert response.status_code == 422


def test_admin_cannot_create(client: TestClient, admin_headers: dict) -> None:
    response = client.post("/reports/", json={"title": "t", "description": "d"}, headers=admin_headers)
    assert response.status_code == 403


def test_missing_or_invalid_token_is_rejected(client: TestClient) -> None:
    assert client.get("/reports/mine").status_code in (401, 403)
    response = client.get("/reports/mine", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401


def test_test_create_is_public(client: TestClient) -> None:
    response = client.post("/reports/test-create", json={"title": "t", "description": "d"})
    assert response.status_code == 201
    data = response.json()
    assert data["createdByUserId"] == "test-user"
    assert data["category"] == "other"


def test_admin_list_filters(client: TestClient, citizen_headers: dict, admin_headers: dict) -> None:
    _create(client, citizen_headers, category="roads", locationName="T. Nagar, Chennai")
    _create(client, citizen_headers, category="waste", locationName="Andheri, Mumbai")

    roads = client.get("/reports/", params={"category": "roads"}, headers=admin_headers).json()
    assert [r["category"] for r in roads] == ["roads"]

    chennai = client.get("/reports/", params={"q": "chennai"}, headers=admin_headers).json()
    assert [r["locationName"] for r in chennai] == ["T. Nagar, Chennai"]

    everything = client.get("/reports/", headers=admin_headers).json()
    assert len(everything) == 2


def test_citizen_cannot_list_all(client: TestClient, citizen_headers: dict) -> None:
    assert client.get("/reports/", headers=citizen_headers).status_code == 403


def test_community_radius(client: TestClient, citizen_headers: dict) -> None:
    _create(client, citizen_headers, title="far", location={"lat": 1, "lng": 1})
    _create(client, citizen_headers, title="near", location={"lat": 0.001, "lng": 0.001})
    _create(client, citizen_headers, title="nowhere")

    nearby = client.get("/reports/community", params={"lat": 0, "lng": 0}, headers=citizen_headers).json()
    assert [r["title"] for r in nearby] == ["near"]

    wide = client.get(
        "/reports/community", params={"lat": 0, "lng": 0, "radius_km": 500}, headers=citizen_headers
    ).json()
    assert {r["title"] for r in wide} == {"near", "far"}

    located = client.get("/reports/community", headers=citizen_headers).json()
    assert {r["title"] for r in located} == {"near", "far"}


def test_mine_lists_only_own_reports(client: TestClient, citizen_headers: dict, store, make_input) -> None:
    store.create(make_input(created_by_user_id="someone-else"))
    _create(client, citizen_headers)

    mine = client.get("/reports/mine", headers=citizen_headers).json()
    assert len(mine) == 1
    assert mine[0]["createdByUserId"] == "2"


def test_upvote_flow(client: TestClient, citizen_headers: dict, store) -> None:
    report = _create(client, citizen_headers)
    for voter in ("a", "b"):
        store.upvote(report["id"], voter)

    response = client.post(f"/reports/{report['id']}/upvote", headers=citizen_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["upvotes"] == 3
    assert data["priority"] == "medium"
    assert data["priorityScore"] == 3

    again = client.post(f"/reports/{report['id']}/upvote", headers=citizen_headers).json()
    assert again["upvotes"] == 3


def test_upvote_unknown_report(client: TestClient, citizen_headers: dict) -> None:
    assert client.post("/reports/999/upvote", headers=citizen_headers).status_code == 404


def test_admin_update_and_notification(
    client: TestClient, citizen_headers: dict, admin_headers: dict, notifications
) -> None:
    report = _create(client, citizen_headers, title="Pothole")

    response = client.patch(f"/reports/{report['id']}", json={"priority": "high"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["priority"] == "high"
    assert response.json()["status"] == "in_progress"

    response = client.patch(f"/reports/{report['id']}", json={"status": "finished"}, headers=admin_headers)
    assert response.json()["status"] == ReportStatus.FINISHED.value

    items = notifications.list_for_user("2")
    assert len(items) == 1
    assert "Pothole" in items[0].message


def test_update_unknown_report(client: TestClient, admin_headers: dict) -> None:
    response = client.patch("/reports/404", json={"status": "accepted"}, headers=admin_headers)
    assert response.status_code == 404


def test_update_rejects_unknown_status(client: TestClient, admin_headers: dict, store, make_input) -> None:
    report = store.create(make_input())
    response = client.patch(f"/reports/{report.id}", json={"status": "closed"}, headers=admin_headers)
    assert response.status_code == 422


def test_get_report(client: TestClient, admin_headers: dict, store, make_input) -> None:
    report = store.create(make_input())
    assert client.get(f"/reports/{report.id}", headers=admin_headers).json()["title"] == "Pothole"
    assert client.get("/reports/77", headers=admin_headers).status_code == 404


def test_test_seed(client: TestClient, store) -> None:
    response = client.post("/reports/test-seed")
    assert response.status_code == 200
    assert response.json() == {"message": "Test reports added", "count": 7}
    assert store.count() == 7
