"""Unit tests for the notification service."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from src.pulse.errors import StorageLoadError, StorageSaveError
from src.pulse.models import AppNotification, NotificationType
from src.pulse.services import NotificationService
from src.pulse.storage import NotificationStore


@pytest.fixture
def store(tmp_path: Path) -> NotificationStore:
    return NotificationStore(tmp_path / "notifications.json")


def note(title: str) -> AppNotification:
    return AppNotification(title=title, body=f"{title} body")


class TestNotificationService:
    """Test suite for NotificationService."""

    def test_newest_first_and_persisted(self, store: NotificationStore) -> None:
        """Test notifications are inserted at the top and saved."""
        service = NotificationService(store)

        service.add_notification(note("first"))
        service.add_notification(note("second"))

        assert [n.title for n in service.notifications] == ["second", "first"]
        assert [n.title for n in store.load()] == ["second", "first"]

    def test_reload_from_store(self, store: NotificationStore) -> None:
        """Test a new service loads the saved log."""
        NotificationService(store).add_notification(note("kept"))

        assert [n.title for n in NotificationService(store).notifications] == ["kept"]

    def test_unread_count_and_mark_as_read(self, store: NotificationStore) -> None:
        """Test marking one and all notifications read."""
        service = NotificationService(store)
        first, second = note("first"), note("second")
        service.add_notification(first)
        service.add_notification(second)
        assert service.unread_count == 2

        service.mark_as_read(first.id)
        assert service.unread_count == 1
        assert [n.is_read for n in store.load()] == [False, True]

        service.mark_as_read("unknown")
        assert service.unread_count == 1

        service.mark_all_as_read()
        assert service.unread_count == 0

    def test_delete_and_clear(self, store: NotificationStore) -> None:
        """Test deleting one and clearing all."""
        service = NotificationService(store)
        keep, drop = note("keep"), note("drop")
        service.add_notification(keep)
        service.add_notification(drop)

        service.delete(drop.id)
        assert [n.id for n in service.notifications] == [keep.id]

        service.clear_all()
        assert service.notifications == []
        assert store.load() == []

    def test_handle_push_payload(self, store: NotificationStore) -> None:
        """Test push payloads carry their type and endpoint."""
        service = NotificationService(store)

        incident = service.handle_push_payload(
            "Down", "Checkout API is down", {"type": "incident", "endpointId": "ep-1"}
        )
        unknown = service.handle_push_payload("Hello", "Welcome", {"type": "marketing"})
        bare = service.handle_push_payload("Hi", "There")

        assert incident.type is NotificationType.INCIDENT
        assert incident.endpoint_id == "ep-1"
        assert unknown.type is NotificationType.SYSTEM
        assert bare.type is NotificationType.SYSTEM
        assert bare.endpoint_id is None
        assert service.unread_count == 3

    def test_add_test_notification(self, store: NotificationStore) -> None:
        """Test the sample degradation alert."""
        service = NotificationService(store)

        notification = service.add_test_notification()

        assert notification.title == "High Latency Detected"
        assert notification.type is NotificationType.DEGRADATION
        assert service.notifications[0].id == notification.id

    def test_history_limit(self, store: NotificationStore) -> None:
        """Test the optional bound drops the oldest notifications."""
        service = NotificationService(store, history_limit=2)

        for title in ("a", "b", "c"):
            service.add_notification(note(title))

        assert [n.title for n in service.notifications] == ["c", "b"]

    def test_invalid_history_limit(self, store: NotificationStore) -> None:
        """Test the bound must be positive."""
        with pytest.raises(ValueError):
            NotificationService(store, history_limit=0)

    def test_corrupted_log_starts_empty(self, tmp_path: Path) -> None:
        """Test a corrupted blob is tolerated at start-up."""
        path = tmp_path / "notifications.json"
        path.write_text("not json")

        service = NotificationService(NotificationStore(path))

        assert service.notifications == []

    def test_load_error_starts_empty(self) -> None:
        """Test an unreadable store is tolerated at start-up."""
        store = MagicMock(spec=NotificationStore)
        store.load.side_effect = StorageLoadError("notifications")

        assert NotificationService(store).notifications == []

    def test_save_errors_propagate(self) -> None:
        """Test save failures surface to the caller and leave the log unchanged."""
        existing = note("existing")
        store = MagicMock(spec=NotificationStore)
        store.load.return_value = [existing]
        store.save.side_effect = StorageSaveError("notifications")
        service = NotificationService(store)

        with pytest.raises(StorageSaveError):
            service.add_notification(note("x"))
        with pytest.raises(StorageSaveError):
            service.mark_as_read(existing.id)
        with pytest.raises(StorageSaveError):
            service.mark_all_as_read()
        with pytest.raises(StorageSaveError):
            service.delete(existing.id)
        with pytest.raises(StorageSaveError):
            service.clear_all()

        assert [n.id for n in service.notifications] == [existing.id]
        assert service.unread_count == 1

    def test_failed_save_is_not_written_later(self, store: NotificationStore) -> None:
        """Test a notification whose save failed is not persisted by the next save."""
        service = NotificationService(store)
        service.add_notification(note("kept"))

        with patch.object(store, "save", side_effect=StorageSaveError("notifications")):
            with pytest.raises(StorageSaveError):
                service.add_notification(note("lost"))

        service.add_notification(note("next"))

        assert [n.title for n in store.load()] == ["next", "kept"]

    def test_defaults_from_settings(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test store path and history limit fall back to settings."""
        path = tmp_path / "alerts" / "log.json"
        monkeypatch.setenv("NOTIFICATION_STORE_PATH", str(path))
        monkeypatch.setenv("NOTIFICATION_HISTORY_LIMIT", "1")

        service = NotificationService()
        service.add_notification(note("old"))
        service.add_notification(note("new"))

        assert [n.title for n in service.notifications] == ["new"]
        assert path.exists()
