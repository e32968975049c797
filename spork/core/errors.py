"""Error taxonomy for promotion runs.

Fatal errors derive from ``SporkError`` and are reported by the CLI with
exit code 1.  ``InvalidVersionFormat`` is caught per cookbook by the
orchestrator; ``NotificationChannelFailure`` is caught per channel by the
dispatcher.
"""

from __future__ import annotations


class SporkError(RuntimeError):
    """Base class for every error a promotion run reports to the operator."""


class UsageError(SporkError):
    """Required arguments are missing; nothing has been processed."""


class InvalidVersionFormat(SporkError, ValueError):
    """An explicit version is not ``MAJOR.MINOR.PATCH``."""


class CookbookNotFound(SporkError, LookupError):
    """The cookbook source has no cookbook by that name."""


class EnvironmentNotFound(SporkError, LookupError):
    """No manifest exists for the environment (locally or on the server)."""


class AmbiguousPersistenceTarget(SporkError):
    """More than one cookbook path is configured, so the save target is unknown.

    Carries the rendered manifest so the caller can print it instead.
    """

    def __init__(self, environment: str, manifest_json: str) -> None:
        super().__init__(
            f"Multiple cookbook paths configured; not sure where to save {environment}.json"
        )
        self.environment = environment
        self.manifest_json = manifest_json


class RemoteStoreError(SporkError):
    """Loading or uploading an environment on the server failed."""


class NotificationChannelFailure(SporkError):
    """A notification channel could not deliver its message."""


class MalformedManifest(SporkError, ValueError):
    """An environment manifest or cookbook metadata file cannot be read."""
