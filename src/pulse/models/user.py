"""Signed-in user profile."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class User:
    """Backend account for the current session."""

    id: str
    email: str
    subscription_status: str
    created_at: datetime
    subscription_expires_at: datetime | None = None
    endpoint_count: int | None = None
