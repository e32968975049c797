"""Remote environment store — the chef server, reached through ``knife``.

``knife`` already owns server credentials and request signing, so this
adapter shells out to it with a bounded timeout rather than talking to
the server API directly.
"""

from __future__ import annotations

import json
import logging
import subprocess
import tempfile
from pathlib import Path

from spork.core.errors import EnvironmentNotFound, RemoteStoreError
from spork.models.environment import Environment
from spork.store.environments import render_manifest

logger = logging.getLogger(__name__)

_NOT_FOUND_MARKERS = ("404", "not found", "object not found")


class KnifeRemoteStore:
    """Load and upload environments via the ``knife`` executable.

    Parameters
    ----------
    knife_path:
        The ``knife`` executable.  Defaults to ``knife`` on PATH.
    timeout:
        Seconds allowed per ``knife`` invocation.
    """

    def __init__(self, knife_path: str = "knife", timeout: float = 30.0) -> None:
        self._knife = knife_path
        self._timeout = timeout

    def _run(self, *args: str) -> subprocess.CompletedProcess[str]:
        cmd = [self._knife, *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self._timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise RemoteStoreError(
                f"knife timed out after {self._timeout}s: {' '.join(cmd)}"
            ) from exc
        except OSError as exc:
            raise RemoteStoreError(f"Could not run {self._knife}: {exc}") from exc

    def load(self, name: str) -> Environment:
        """Fetch the server's copy of environment *name*."""
        result = self._run("environment", "show", name, "-F", "json")
        if result.returncode != 0:
            output = f"{result.stdout}\n{result.stderr}".lower()
            if any(marker in output for marker in _NOT_FOUND_MARKERS):
                raise EnvironmentNotFound(
                    f"The environment {name} does not exist on the server, aborting."
                )
            raise RemoteStoreError(
                f"knife environment show {name} failed: {result.stderr.strip()}"
            )
        try:
            return Environment.from_manifest(json.loads(result.stdout))
        except ValueError as exc:
            raise RemoteStoreError(
                f"Unreadable environment {name} from server: {exc}"
            ) from exc

    def save(self, environment: Environment, name: str | None = None) -> None:
        """Upload *environment* to the server as *name* (default: its own name)."""
        name = name or environment.name
        with tempfile.TemporaryDirectory(prefix="spork-") as tmp:
            path = Path(tmp) / f"{name}.json"
            # knife keys the upload on the manifest name, not the file name
            manifest = environment.model_copy(update={"name": name})
            path.write_text(render_manifest(manifest), encoding="utf-8")
            result = self._run("environment", "from", "file", str(path))
        if result.returncode != 0:
            raise RemoteStoreError(
                f"Uploading {name} failed: {result.stderr.strip()}"
            )
        logger.info("Uploaded environment %s", name)
