"""Local notification log.

Notifications are kept newest first and persisted as a whole after every
change. The log grows without bound unless a history limit is configured.
"""

from typing import Any

from src.pulse.config.logging import get_logger
from src.pulse.config.settings import get_settings
from src.pulse.errors import StorageError
from src.pulse.models.notification import AppNotification, NotificationType
from src.pulse.storage.notification_store import NotificationStore

logger = get_logger(__name__)


class NotificationService:
    """In-memory notification log backed by a ``NotificationStore``."""

    def __init__(
        self,
        store: NotificationStore | None = None,
        history_limit: int | None = None,
    ) -> None:
        """Initialize the service and load the stored log.

        A missing or unreadable log is logged and replaced by an empty one.

        Args:
            store: Persistence for the log. If None, uses the settings path.
            history_limit: Keep at most this many notifications. If None, loads
                from settings (whose default keeps the full history).
        """
        if history_limit is None:
            history_limit = get_settings().notification_history_limit
        if history_limit is not None and history_limit < 1:
            raise ValueError(f"history_limit must be at least 1, got {history_limit}")

        self._store = store or NotificationStore()
        self._history_limit = history_limit
        self._notifications: list[AppNotification] = []

        try:
            self._notifications = self._store.load()
        except StorageError as e:
            logger.warning("notification_log_load_failed", error_code=e.error_code.name)

    @property
    def notifications(self) -> list[AppNotification]:
        """Notifications, newest first."""
        return list(self._notifications)

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self._notifications if not n.is_read)

    def _commit(self, notifications: list[AppNotification]) -> None:
        """Persist a new log, keeping the in-memory log in step with the store.

        The in-memory log is only replaced once the save succeeds.
        """
        self._store.save(notifications)
        self._notifications = notifications

    def add_notification(self, notification: AppNotification) -> None:
        """Insert a notification at the top of the log.

        Raises:
            StorageSaveError: If the log cannot be persisted
        """
        notifications = [notification, *self._notifications]
        if self._history_limit is not None and len(notifications) > self._history_limit:
            dropped = len(notifications) - self._history_limit
            notifications = notifications[: self._history_limit]
            logger.debug("notification_history_trimmed", dropped=dropped)
        self._commit(notifications)
        logger.info(
            "notification_added",
            notification_id=notification.id,
            type=notification.type.value,
        )

    def handle_push_payload(
        self,
        title: str,
        body: str,
        user_info: dict[str, Any] | None = None,
    ) -> AppNotification:
        """Record a received push notification.

        Args:
            title: Alert title
            body: Alert body
            user_info: Push payload; ``type`` and ``endpointId`` are read when present

        Returns:
            The stored notification
        """
        user_info = user_info or {}
        try:
            notification_type = NotificationType(user_info.get("type", "system"))
        except ValueError:
            notification_type = NotificationType.SYSTEM

        endpoint_id = user_info.get("endpointId") or user_info.get("endpoint_id")
        notification = AppNotification(
            title=title,
            body=body,
            type=notification_type,
            endpoint_id=endpoint_id if isinstance(endpoint_id, str) else None,
        )
        self.add_notification(notification)
        return notification

    def add_test_notification(self) -> AppNotification:
        notification = AppNotification(
            title="High Latency Detected",
            body="Endpoint 'Checkout API' is experiencing high latency (850ms).",
            type=NotificationType.DEGRADATION,
        )
        self.add_notification(notification)
        return notification

    def mark_as_read(self, notification_id: str) -> None:
        """Mark one notification read; unknown ids are ignored."""
        if not any(n.id == notification_id and not n.is_read for n in self._notifications):
            return
        self._commit(
            [
                n.model_copy(update={"is_read": True}) if n.id == notification_id else n
                for n in self._notifications
            ]
        )

    def mark_all_as_read(self) -> None:
        self._commit([n.model_copy(update={"is_read": True}) for n in self._notifications])

    def delete(self, notification_id: str) -> None:
        self._commit([n for n in self._notifications if n.id != notification_id])

    def clear_all(self) -> None:
        self._commit([])
        logger.info("notifications_cleared")
