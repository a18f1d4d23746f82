import logging
import threading
from typing import List

from models.notification import NotificationItem

logger = logging.getLogger(__name__)


class NotificationStore:
    """
    Append-only, per-user notification log held in memory.

    Items are kept most-recent-first. Nothing is ever deleted; the only
    mutation is flipping ``read`` through ``mark_all_read``.
    """

    def __init__(self):
        self._items: List[NotificationItem] = []
        self._next_id = 1
        self._lock = threading.RLock()

    def add_notification(self, user_id: str, message: str) -> NotificationItem:
        with self._lock:
            item = NotificationItem(id=str(self._next_id), user_id=user_id, message=message)
            self._next_id += 1
            self._items.insert(0, item)
            logger.debug("Notification %s queued for user %s", item.id, user_id)
            return item.model_copy()

    def list_for_user(self, user_id: str) -> List[NotificationItem]:
        with self._lock:
            return [n.model_copy() for n in self._items if n.user_id == user_id]

    def mark_all_read(self, user_id: str) -> None:
        with self._lock:
            for n in self._items:
                if n.user_id == user_id:
                    n.read = True

    def unread_count(self, user_id: str) -> int:
        with self._lock:
            return sum(1 for n in self._items if n.user_id == user_id and not n.read)
