"""Client-side services: session lifecycle and the notification log."""

from src.pulse.services.auth import AuthManager
from src.pulse.services.notifications import NotificationService

__all__ = ["AuthManager", "NotificationService"]
