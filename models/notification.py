from pydantic import Field
from datetime import datetime, timezone
from models.report import CamelModel

# Per-user notification, append-only
class NotificationItem(CamelModel):
    id: str
    user_id: str
    message: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    read: bool = False

# Response for the unread counter
class UnreadCount(CamelModel):
    user_id: str
    unread_count: int
