"""Sink protocol for Spork notification channels.

All sinks implement ``BaseSink``: a ``sink_name`` property and an
``accept(event)`` method.  The dispatcher calls ``accept`` on every
registered sink for every upload event.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from spork.models.notifications import NotificationEvent


@runtime_checkable
class BaseSink(Protocol):
    """Protocol that every notification channel must implement.

    Attributes
    ----------
    sink_name : str
        A unique human-readable identifier (``"gist"``, ``"irccat"``, ...).
    """

    @property
    def sink_name(self) -> str:
        """Return the unique name of this sink."""
        ...

    def accept(self, event: NotificationEvent) -> str | None:
        """Deliver the event.

        Returns an optional reference to what was published (the paste
        URL) for later channels to mention.  Raise
        ``NotificationChannelFailure`` on delivery failure; the dispatcher
        logs it and continues with the next sink.
        """
        ...
