"""NotificationDispatcher — routes upload events to the enabled channels.

Every event is offered to every registered sink in registration order.
Sink failures are logged and never propagate: an unreachable channel
must not fail a promotion that has already been uploaded.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from spork.core.differ import render_changes
from spork.models.config import SporkConfig
from spork.models.environment import ChangeRecord
from spork.models.notifications import NotificationEvent

if TYPE_CHECKING:
    from spork.routing.sinks import BaseSink

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Routes upload events to ALL registered channels.

    A sink may return a reference (the paste URL); it is attached to the
    event handed to the sinks that follow.

    Usage
    -----
    >>> dispatcher = NotificationDispatcher.from_config(config)
    >>> dispatcher.dispatch("production", changes, user="deploy")
    """

    def __init__(self) -> None:
        self._sinks: list[BaseSink] = []

    @classmethod
    def from_config(cls, config: SporkConfig) -> NotificationDispatcher:
        """Register the channels enabled in *config*: paste, chat, metrics."""
        from spork.routing.sinks.gist import GistSink
        from spork.routing.sinks.graphite import GraphiteSink
        from spork.routing.sinks.irccat import IrccatSink

        dispatcher = cls()
        timeout = config.network_timeout
        if config.gist.enabled:
            dispatcher.register_sink(GistSink(config.gist, timeout=timeout))
        if config.irccat.enabled:
            dispatcher.register_sink(IrccatSink(config.irccat, timeout=timeout))
        if config.graphite.enabled:
            dispatcher.register_sink(GraphiteSink(config.graphite, timeout=timeout))
        return dispatcher

    # ------------------------------------------------------------------
    # Sink management
    # ------------------------------------------------------------------

    def register_sink(self, sink: BaseSink) -> None:
        """Register a sink.  Duplicate registration is silently ignored."""
        if sink not in self._sinks:
            self._sinks.append(sink)
            logger.debug("Registered notification channel: %s", sink.sink_name)

    @property
    def registered_sinks(self) -> list[BaseSink]:
        """Return a copy of the registered sink list."""
        return list(self._sinks)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(
        self,
        environment: str,
        changes: Sequence[ChangeRecord],
        user: str,
    ) -> list[str]:
        """Notify every channel that *environment* was uploaded.

        Returns the names of the channels that succeeded.  Never raises.
        """
        event = NotificationEvent(
            environment=environment,
            user=user,
            changes_text=render_changes(changes),
        )
        return self.dispatch_event(event)

    def dispatch_event(self, event: NotificationEvent) -> list[str]:
        """Offer a prepared event to every sink, isolating failures."""
        if not self._sinks:
            logger.debug("No notification channels enabled for %s", event.environment)
            return []

        succeeded: list[str] = []
        failed: list[str] = []

        for sink in self._sinks:
            try:
                reference = sink.accept(event)
            except Exception as exc:  # noqa: BLE001
                logger.warning(
                    "Notification channel %s failed for %s: %s",
                    sink.sink_name,
                    event.environment,
                    exc,
                )
                failed.append(sink.sink_name)
                continue
            succeeded.append(sink.sink_name)
            if reference:
                event = event.model_copy(update={"paste_url": reference})

        if failed:
            logger.warning(
                "Environment %s: %d/%d notification channels succeeded",
                event.environment,
                len(succeeded),
                len(self._sinks),
            )
        return succeeded
