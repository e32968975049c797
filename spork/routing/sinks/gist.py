"""Paste channel — publishes the change list through a ``gist`` command.

The configured executable receives the rendered text on stdin and prints
the URL of the new paste, which later channels reference.
"""

from __future__ import annotations

import logging
import subprocess

from spork.core.errors import NotificationChannelFailure
from spork.models.config import GistConfig
from spork.models.notifications import NotificationEvent
from spork.routing.sinks._formatting import format_paste_text

logger = logging.getLogger(__name__)


class GistSink:
    """Runs the gist executable with the paste text on stdin."""

    def __init__(self, config: GistConfig, timeout: float = 10.0) -> None:
        self._config = config
        self._timeout = timeout

    @property
    def sink_name(self) -> str:
        return "gist"

    @property
    def executable(self) -> str:
        return self._config.executable

    def accept(self, event: NotificationEvent) -> str | None:
        text = format_paste_text(event)
        try:
            result = subprocess.run(
                [self.executable],
                input=text,
                capture_output=True,
                text=True,
                timeout=self._timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise NotificationChannelFailure(
                f"{self.executable} timed out after {self._timeout}s"
            ) from exc
        except OSError as exc:
            raise NotificationChannelFailure(
                f"Could not run {self.executable}: {exc}"
            ) from exc

        if result.returncode != 0:
            raise NotificationChannelFailure(
                f"{self.executable} exited {result.returncode}: {result.stderr.strip()}"
            )
        url = result.stdout.strip()
        logger.debug("GistSink: published %s", url or "(no url)")
        return url or None
