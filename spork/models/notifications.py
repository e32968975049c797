"""Notification event model — what the dispatcher hands to every channel."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class NotificationEvent(BaseModel):
    """A fire-and-forget record of one environment upload.

    ``paste_url`` is filled in by the dispatcher once the paste channel has
    published the change text, so later channels can reference it.
    """

    model_config = ConfigDict(frozen=True)

    environment: str
    user: str
    changes_text: str = ""
    timestamp_utc: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    paste_url: str | None = None

    @property
    def unix_timestamp(self) -> int:
        return int(self.timestamp_utc.timestamp())
