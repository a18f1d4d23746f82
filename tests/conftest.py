from __future__ import annotations

import os
import tempfile
from typing import Iterator

import pytest

# Keep the app quiet and self-contained during tests.
os.environ.setdefault("SEED_SAMPLE_COUNT", "0")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="civicpulse-uploads-"))

from fastapi.testclient import TestClient  # noqa: E402

from main import app  # noqa: E402
from models.enums import ReportCategory  # noqa: E402
from models.report import GeoPoint, ReportInput  # noqa: E402
from routes import report_routes  # noqa: E402
from routes.auth_routes import USERS, create_jwt  # noqa: E402
from services.dependencies import get_notification_store, get_report_store  # noqa: E402
from services.geocoding import geocode_cache  # noqa: E402
from services.notification_store import NotificationStore  # noqa: E402
from services.report_store import InMemoryReportStore  # noqa: E402


@pytest.fixture(autouse=True)
def no_network_geocoding(monkeypatch):
    """Routers never hit a real geocoder in tests."""
    monkeypatch.setattr(report_routes, "reverse_geocode", lambda lat, lng: None)
    geocode_cache.clear()
    yield
    geocode_cache.clear()


@pytest.fixture
def notifications() -> NotificationStore:
    return NotificationStore()


@pytest.fixture
def store(notifications: NotificationStore) -> InMemoryReportStore:
    return InMemoryReportStore(notifications)


@pytest.fixture
def make_input():
    def _make(**overrides) -> ReportInput:
        data = {
            "title": "Pothole",
            "description": "Large pothole",
            "category": ReportCategory.ROADS,
            "created_by_user_id": "owner-1",
            "created_by_username": "Owner",
        }
        data.update(overrides)
        return ReportInput(**data)

    return _make


@pytest.fixture
def located(make_input):
    def _make(lat: float, lng: float, **overrides) -> ReportInput:
        return make_input(location=GeoPoint(lat=lat, lng=lng), **overrides)

    return _make


@pytest.fixture
def client(store: InMemoryReportStore, notifications: NotificationStore) -> Iterator[TestClient]:
    app.dependency_overrides[get_report_store] = lambda: store
    app.dependency_overrides[get_notification_store] = lambda: notifications
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict:
    return {"Authorization": f"Bearer {create_jwt(USERS['1'])}"}


@pytest.fixture
def citizen_headers() -> dict:
    return {"Authorization": f"Bearer {create_jwt(USERS['2'])}"}
