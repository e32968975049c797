"""Shared message builders for the notification channels."""

from __future__ import annotations

from spork.models.notifications import NotificationEvent


def format_paste_text(event: NotificationEvent) -> str:
    """Multi-line paste body: header, then one line per changed constraint."""
    timestamp = event.timestamp_utc.strftime("%Y-%m-%d %H:%M:%S UTC")
    return (
        f"Environment {event.environment} uploaded at {timestamp} by {event.user}\n"
        "\n"
        "Constraints updated on server in this version:\n"
        "\n"
        f"{event.changes_text}"
    )


def format_chat_line(event: NotificationEvent, channel: str) -> str:
    """Single chat line; mentions the paste URL when one was published."""
    line = f"{channel} CHEF: {event.user} uploaded environment {event.environment}"
    if event.paste_url:
        line = f"{line} {event.paste_url}"
    return line


def format_metric_line(event: NotificationEvent, namespace: str) -> str:
    """Graphite plaintext protocol: ``deploys.<ns>.<env> 1 <unix_ts>\\n``."""
    return f"deploys.{namespace}.{event.environment} 1 {event.unix_timestamp}\n"
