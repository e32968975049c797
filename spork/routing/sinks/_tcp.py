"""Write-once TCP delivery shared by the chat and metrics channels."""

from __future__ import annotations

import logging
import socket

from spork.core.errors import NotificationChannelFailure

logger = logging.getLogger(__name__)


def send_line(host: str, port: int, message: str, *, timeout: float) -> None:
    """Open a connection, write *message*, close.

    Raises ``NotificationChannelFailure`` on connection errors and timeouts.
    """
    try:
        with socket.create_connection((host, port), timeout=timeout) as sock:
            sock.sendall(message.encode("utf-8"))
    except OSError as exc:
        raise NotificationChannelFailure(
            f"Could not deliver to {host}:{port}: {exc}"
        ) from exc
    logger.debug("Delivered %d bytes to %s:%s", len(message), host, port)
