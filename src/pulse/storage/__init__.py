"""Local persistence: credentials and the notification log."""

from src.pulse.storage.credentials import (
    CredentialKeys,
    CredentialStore,
    FileCredentialStore,
    InMemoryCredentialStore,
)
from src.pulse.storage.notification_store import NotificationStore

__all__ = [
    "CredentialKeys",
    "CredentialStore",
    "InMemoryCredentialStore",
    "FileCredentialStore",
    "NotificationStore",
]
