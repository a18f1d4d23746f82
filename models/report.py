from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime, timezone
from models.enums import ReportStatus, ReportPriority, ReportCategory


# Shared config: snake_case in Python, camelCase on the wire
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GeoPoint(CamelModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

# What the frontend sends
class ReportCreate(CamelModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    category: ReportCategory = ReportCategory.OTHER
    attachments: Optional[List[str]] = None
    location: Optional[GeoPoint] = None
    location_name: Optional[str] = None

# Input handed to the store (adds owner identity resolved by the router)
class ReportInput(ReportCreate):
    created_by_user_id: str
    created_by_username: Optional[str] = None

# Operator edit, only supplied fields are applied
class ReportUpdate(CamelModel):
    status: Optional[ReportStatus] = None
    priority: Optional[ReportPriority] = None

# Stored report
class Report(CamelModel):
    id: str
    title: str
    description: str
    category: ReportCategory = ReportCategory.OTHER
    priority: ReportPriority = ReportPriority.LOW
    priority_score: int = 0
    upvotes: int = Field(0, ge=0)
    upvoted_by: List[str] = Field(default_factory=list)
    status: ReportStatus = ReportStatus.IN_PROGRESS
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    created_by_user_id: str
    created_by_username: Optional[str] = None
    attachments: Optional[List[str]] = None
    location: Optional[GeoPoint] = None
    location_name: Optional[str] = None
