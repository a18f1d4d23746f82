# notification_routes.py
from fastapi import APIRouter, Depends
from typing import List

from models.notification import NotificationItem, UnreadCount
from models.user import UserPublic
from routes.auth_routes import get_current_user
from services.dependencies import get_notification_store
from services.notification_store import NotificationStore

router = APIRouter(tags=["Notifications"])


# -------------------- List notifications -------------------- #
@router.get("/", response_model=List[NotificationItem])
def list_notifications(
    current_user: UserPublic = Depends(get_current_user),
    notifications: NotificationStore = Depends(get_notification_store),
):
    """
    Lists the authenticated user's notifications, newest first.
    Each user only ever sees their own.
    """
    return notifications.list_for_user(current_user.id)


# -------------------- Mark all as read -------------------- #
@router.post("/read-all")
def mark_all_as_read(
    current_user: UserPublic = Depends(get_current_user),
    notifications: NotificationStore = Depends(get_notification_store),
):
    notifications.mark_all_read(current_user.id)
    return {"ok": True}


# -------------------- Count unread -------------------- #
@router.get("/unread/count", response_model=UnreadCount)
def count_unread_notifications(
    current_user: UserPublic = Depends(get_current_user),
    notifications: NotificationStore = Depends(get_notification_store),
):
    return UnreadCount(user_id=current_user.id, unread_count=notifications.unread_count(current_user.id))
