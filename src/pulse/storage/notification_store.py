"""Persistence for the local notification log.

The whole log is stored as one JSON array and rewritten on every save.
"""

from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from src.pulse.config.logging import get_logger
from src.pulse.config.settings import get_settings
from src.pulse.errors import StorageCorruptedError, StorageLoadError, StorageSaveError
from src.pulse.models.notification import AppNotification

logger = get_logger(__name__)

_NOTIFICATIONS = TypeAdapter(list[AppNotification])


class NotificationStore:
    """Single-blob store for ``AppNotification`` records."""

    def __init__(self, path: Path | None = None) -> None:
        """Initialize the store.

        Args:
            path: File holding the serialized log. If None, loads from settings.
        """
        self._path = Path(path) if path is not None else get_settings().notification_store_path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[AppNotification]:
        """Load the stored log.

        Returns:
            Stored notifications, empty when nothing has been saved yet

        Raises:
            StorageLoadError: If the file cannot be read
            StorageCorruptedError: If the file does not hold a valid log
        """
        if not self._path.exists():
            return []
        try:
            raw = self._path.read_bytes()
        except OSError as e:
            raise StorageLoadError(
                "notifications", details={"path": str(self._path), "error": str(e)}
            ) from e
        try:
            notifications = _NOTIFICATIONS.validate_json(raw)
        except ValidationError as e:
            raise StorageCorruptedError(
                details={"path": str(self._path), "error_count": e.error_count()}
            ) from e
        logger.debug("notifications_loaded", count=len(notifications))
        return notifications

    def save(self, notifications: list[AppNotification]) -> None:
        """Replace the stored log.

        Raises:
            StorageSaveError: If the file cannot be written
        """
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_bytes(_NOTIFICATIONS.dump_json(notifications))
        except OSError as e:
            raise StorageSaveError(
                "notifications", details={"path": str(self._path), "error": str(e)}
            ) from e
