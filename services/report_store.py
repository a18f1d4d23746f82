"""
Report store and scoring engine.

Holds every report in memory, derives priority from upvotes and emits a
notification to the owner whenever a report is marked as finished.
"""
import abc
import logging
import threading
from typing import Any, Dict, List, Optional

from models.enums import ReportCategory, ReportPriority, ReportStatus
from models.report import GeoPoint, Report, ReportInput
from services.geo import distance_km
from services.notification_store import NotificationStore

logger = logging.getLogger(__name__)

MEDIUM_PRIORITY_UPVOTES = 3
HIGH_PRIORITY_UPVOTES = 6
DEFAULT_RADIUS_KM = 10.0


def priority_for(upvotes: int) -> ReportPriority:
    if upvotes >= HIGH_PRIORITY_UPVOTES:
        return ReportPriority.HIGH
    if upvotes >= MEDIUM_PRIORITY_UPVOTES:
        return ReportPriority.MEDIUM
    return ReportPriority.LOW


def finished_message(title: str) -> str:
    return f'Your report "{title}" has been marked as finished.'


class ReportStore(abc.ABC):
    """Storage contract used by the routers. ``None`` means "no such id"."""

    @abc.abstractmethod
    def create(self, data: ReportInput) -> Report: ...

    @abc.abstractmethod
    def get(self, report_id: str) -> Optional[Report]: ...

    @abc.abstractmethod
    def list(
        self,
        category: Optional[ReportCategory] = None,
        location_query: Optional[str] = None,
    ) -> List[Report]: ...

    @abc.abstractmethod
    def list_by_user(self, user_id: str) -> List[Report]: ...

    @abc.abstractmethod
    def list_by_area(
        self, user_location: Optional[GeoPoint] = None, radius_km: float = DEFAULT_RADIUS_KM
    ) -> List[Report]: ...

    @abc.abstractmethod
    def update(
        self,
        report_id: str,
        status: Optional[ReportStatus] = None,
        priority: Optional[ReportPriority] = None,
    ) -> Optional[Report]: ...

    @abc.abstractmethod
    def upvote(self, report_id: str, user_id: str) -> Optional[Report]: ...

    @abc.abstractmethod
    def import_report(self, data: Dict[str, Any]) -> Report: ...

    @abc.abstractmethod
    def count(self) -> int: ...


class InMemoryReportStore(ReportStore):
    """
    Single-process store. Every operation runs under one lock and reads
    hand out deep copies, so callers always see a consistent snapshot and
    cannot mutate stored reports behind the store's back.
    """

    def __init__(self, notifications: NotificationStore):
        self._notifications = notifications
        self._reports: List[Report] = []
        self._lock = threading.RLock()

    # -------------------- Internal helpers -------------------- #
    def _next_id(self) -> str:
        # Ids are never reused because reports are never removed
        return str(len(self._reports) + 1)

    def _find_index(self, report_id: str) -> int:
        for idx, report in enumerate(self._reports):
            if report.id == report_id:
                return idx
        return -1

    def _snapshot(self, reports) -> List[Report]:
        return [r.model_copy(deep=True) for r in reports]

    # -------------------- Writes -------------------- #
    def create(self, data: ReportInput) -> Report:
        with self._lock:
            report = Report(
                id=self._next_id(),
                title=data.title,
                description=data.description,
                category=data.category or ReportCategory.OTHER,
                created_by_user_id=data.created_by_user_id,
                created_by_username=data.created_by_username,
                attachments=list(data.attachments) if data.attachments is not None else None,
                location=data.location,
                location_name=data.location_name,
            )
            self._reports.insert(0, report)
            logger.info("Report %s created by %s", report.id, report.created_by_user_id)
            return report.model_copy(deep=True)

    def import_report(self, data: Dict[str, Any]) -> Report:
        with self._lock:
            voters = list(dict.fromkeys(data.get("upvoted_by") or []))
            # The voter list is authoritative; any "upvotes" in data is ignored
            upvotes = len(voters)
            fields = dict(data)
            fields.update(
                id=self._next_id(),
                upvoted_by=voters,
                upvotes=upvotes,
                priority=priority_for(upvotes),
                priority_score=upvotes,
            )
            report = Report(**fields)
            self._reports.insert(0, report)
            return report.model_copy(deep=True)

    def update(
        self,
        report_id: str,
        status: Optional[ReportStatus] = None,
        priority: Optional[ReportPriority] = None,
    ) -> Optional[Report]:
        with self._lock:
            idx = self._find_index(report_id)
            if idx == -1:
                return None
            current = self._reports[idx]
            patch = {}
            if status is not None:
                patch["status"] = status
            if priority is not None:
                patch["priority"] = priority
            updated = current.model_copy(update=patch, deep=True)
            self._reports[idx] = updated

            if status == ReportStatus.FINISHED:
                self._notifications.add_notification(
                    current.created_by_user_id, finished_message(current.title)
                )
                logger.info("Report %s finished, owner %s notified", report_id, current.created_by_user_id)
            return updated.model_copy(deep=True)

    def upvote(self, report_id: str, user_id: str) -> Optional[Report]:
        with self._lock:
            idx = self._find_index(report_id)
            if idx == -1:
                return None
            current = self._reports[idx]

            # One vote per user, repeated votes return the report unchanged
            if user_id in current.upvoted_by:
                return current.model_copy(deep=True)

            upvotes = current.upvotes + 1
            updated = current.model_copy(
                update={
                    "upvotes": upvotes,
                    "upvoted_by": current.upvoted_by + [user_id],
                    "priority": priority_for(upvotes),
                    "priority_score": upvotes,
                },
                deep=True,
            )
            self._reports[idx] = updated
            return updated.model_copy(deep=True)

    # -------------------- Reads -------------------- #
    def get(self, report_id: str) -> Optional[Report]:
        with self._lock:
            idx = self._find_index(report_id)
            if idx == -1:
                return None
            return self._reports[idx].model_copy(deep=True)

    def list(
        self,
        category: Optional[ReportCategory] = None,
        location_query: Optional[str] = None,
    ) -> List[Report]:
        with self._lock:
            out = self._reports
            if category:
                out = [r for r in out if r.category == category]
            if location_query:
                q = location_query.lower()
                out = [r for r in out if q in (r.location_name or "").lower()]
            return self._snapshot(out)

    def list_by_user(self, user_id: str) -> List[Report]:
        with self._lock:
            return self._snapshot(r for r in self._reports if r.created_by_user_id == user_id)

    def list_by_area(
        self, user_location: Optional[GeoPoint] = None, radius_km: float = DEFAULT_RADIUS_KM
    ) -> List[Report]:
        with self._lock:
            located = [r for r in self._reports if r.location is not None]
            if user_location is None:
                # No caller position: nothing to filter by, return every locatable report
                logger.debug("Area query without location, %d located reports", len(located))
                return self._snapshot(located)

            nearby = [r for r in located if distance_km(user_location, r.location) <= radius_km]
            logger.debug("Area query: %d of %d reports within %skm", len(nearby), len(located), radius_km)
            return self._snapshot(nearby)

    def count(self) -> int:
        with self._lock:
            return len(self._reports)
