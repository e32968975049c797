"""Metrics channel — a deploy counter on a graphite plaintext listener."""

from __future__ import annotations

from spork.models.config import GraphiteConfig
from spork.models.notifications import NotificationEvent
from spork.routing.sinks._formatting import format_metric_line
from spork.routing.sinks._tcp import send_line


class GraphiteSink:
    def __init__(self, config: GraphiteConfig, timeout: float = 10.0) -> None:
        self._config = config
        self._timeout = timeout

    @property
    def sink_name(self) -> str:
        return "graphite"

    def accept(self, event: NotificationEvent) -> None:
        message = format_metric_line(event, self._config.namespace)
        send_line(
            self._config.server, self._config.port, message, timeout=self._timeout
        )
