"""Locally owned notification record.

Unlike the server-sourced entities, notifications live only on the client
and are persisted as a single serialized list.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class NotificationType(Enum):
    """Kind of alert delivered to the user."""

    INCIDENT = "incident"
    RECOVERY = "recovery"
    DEGRADATION = "degradation"
    SYSTEM = "system"


class AppNotification(BaseModel):
    """A delivered alert kept in the local notification log."""

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Notification ID")
    title: str = Field(..., description="Alert title")
    body: str = Field(..., description="Alert body text")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the alert was received",
    )
    type: NotificationType = Field(default=NotificationType.SYSTEM, description="Alert kind")
    endpoint_id: str | None = Field(None, description="Related endpoint, if any")
    is_read: bool = Field(default=False, description="Whether the user has seen it")
