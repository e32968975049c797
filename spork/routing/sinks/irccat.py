"""Chat channel — one line of text to an irccat listener."""

from __future__ import annotations

from spork.models.config import IrccatConfig
from spork.models.notifications import NotificationEvent
from spork.routing.sinks._formatting import format_chat_line
from spork.routing.sinks._tcp import send_line


class IrccatSink:
    def __init__(self, config: IrccatConfig, timeout: float = 10.0) -> None:
        self._config = config
        self._timeout = timeout

    @property
    def sink_name(self) -> str:
        return "irccat"

    def accept(self, event: NotificationEvent) -> None:
        message = format_chat_line(event, self._config.channel)
        send_line(
            self._config.server, self._config.port, message, timeout=self._timeout
        )
