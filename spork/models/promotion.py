"""Promotion request and result models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from spork.models.environment import ChangeRecord


class PromotionRequest(BaseModel):
    """What the operator asked for on the command line.

    ``environments=None`` means "use the configured default list".
    ``cookbook`` may be the literal ``"all"``.
    """

    model_config = ConfigDict(frozen=True)

    cookbook: str
    environments: list[str] | None = None
    version: str | None = None
    remote: bool = False


class EnvironmentResult(BaseModel):
    """Outcome of promoting into one environment."""

    model_config = ConfigDict(frozen=True)

    environment: str
    promoted: dict[str, str] = {}
    skipped: list[str] = []
    changes: list[ChangeRecord] = []
    manifest_json: str = ""
    saved_path: Path | None = None
    uploaded: bool = False
    remote_changes: list[ChangeRecord] = []
    notified_channels: list[str] = []

    @property
    def saved_locally(self) -> bool:
        return self.saved_path is not None


class PromotionResult(BaseModel):
    """Outcome of a whole run, one entry per environment in input order."""

    model_config = ConfigDict(frozen=True)

    environments: list[EnvironmentResult] = []

    @property
    def skipped(self) -> list[str]:
        return [c for env in self.environments for c in env.skipped]
