# report_routes.py
from fastapi import APIRouter, HTTPException, Depends, Query, status
from typing import List, Optional
import logging

from models.report import Report, ReportCreate, ReportInput, ReportUpdate, GeoPoint
from models.enums import ReportCategory, UserRole
from models.user import UserPublic
from routes.auth_routes import get_current_user, require_role
from services.dependencies import get_report_store
from services.geocoding import reverse_geocode
from services.report_store import ReportStore
from services.seed import add_test_reports
import config

logger = logging.getLogger(__name__)

# Router configuration
router = APIRouter(tags=["Reports"])


# Builds the store input, filling locationName from coordinates when missing
def build_report_input(body: ReportCreate, user_id: str, username: Optional[str]) -> ReportInput:
    location_name = body.location_name
    if not location_name and body.location is not None:
        location_name = reverse_geocode(body.location.lat, body.location.lng)

    return ReportInput(
        title=body.title,
        description=body.description,
        category=body.category,
        attachments=body.attachments,
        location=body.location,
        location_name=location_name,
        created_by_user_id=user_id,
        created_by_username=username,
    )


def not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Report not found")


# -------------------- Public test routes -------------------- #
@router.post("/test-create", response_model=Report, status_code=status.HTTP_201_CREATED)
def test_create_report(body: ReportCreate, store: ReportStore = Depends(get_report_store)):
    return store.create(build_report_input(body, "test-user", "Test User"))


@router.post("/test-seed")
def test_seed(store: ReportStore = Depends(get_report_store)):
    count = add_test_reports(store)
    return {"message": "Test reports added", "count": count}


# -------------------- Citizen routes -------------------- #
@router.post("/", response_model=Report, status_code=status.HTTP_201_CREATED)
def create_report(
    body: ReportCreate,
    current_user: UserPublic = Depends(require_role(UserRole.CITIZEN)),
    store: ReportStore = Depends(get_report_store),
):
    return store.create(build_report_input(body, current_user.id, current_user.username))


@router.get("/community", response_model=List[Report])
def list_community(
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    radius_km: float = Query(config.DEFAULT_RADIUS_KM, gt=0),
    current_user: UserPublic = Depends(require_role(UserRole.CITIZEN)),
    store: ReportStore = Depends(get_report_store),
):
    # Both coordinates are needed to filter by distance
    user_location = GeoPoint(lat=lat, lng=lng) if lat is not None and lng is not None else None
    return store.list_by_area(user_location, radius_km)


@router.get("/mine", response_model=List[Report])
def list_mine(
    current_user: UserPublic = Depends(require_role(UserRole.CITIZEN)),
    store: ReportStore = Depends(get_report_store),
):
    return store.list_by_user(current_user.id)


@router.post("/{report_id}/upvote", response_model=Report)
def upvote_report(
    report_id: str,
    current_user: UserPublic = Depends(require_role(UserRole.CITIZEN)),
    store: ReportStore = Depends(get_report_store),
):
    report = store.upvote(report_id, current_user.id)
    if report is None:
        raise not_found()
    return report


# -------------------- Admin routes -------------------- #
@router.get("/", response_model=List[Report])
def list_reports(
    category: Optional[ReportCategory] = Query(None),
    q: Optional[str] = Query(None, description="Case-insensitive match on the location name"),
    current_user: UserPublic = Depends(require_role(UserRole.ADMIN)),
    store: ReportStore = Depends(get_report_store),
):
    return store.list(category=category, location_query=q)


@router.patch("/{report_id}", response_model=Report)
def update_report(
    report_id: str,
    body: ReportUpdate,
    current_user: UserPublic = Depends(require_role(UserRole.ADMIN)),
    store: ReportStore = Depends(get_report_store),
):
    report = store.update(report_id, status=body.status, priority=body.priority)
    if report is None:
        raise not_found()
    logger.info("Admin %s updated report %s", current_user.username, report_id)
    return report


# -------------------- Shared routes -------------------- #
@router.get("/{report_id}", response_model=Report)
def get_report(
    report_id: str,
    current_user: UserPublic = Depends(get_current_user),
    store: ReportStore = Depends(get_report_store),
):
    report = store.get(report_id)
    if report is None:
        raise not_found()
    return report
