"""Spork data models — all Pydantic v2, all frozen (immutable)."""

from spork.models.config import (
    GistConfig,
    GitConfig,
    GraphiteConfig,
    IrccatConfig,
    SporkConfig,
)
from spork.models.environment import ChangeRecord, Environment
from spork.models.notifications import NotificationEvent
from spork.models.promotion import EnvironmentResult, PromotionRequest, PromotionResult
from spork.models.versioning import Version, VersionConstraint

__all__ = [
    # versioning
    "Version",
    "VersionConstraint",
    # environments
    "Environment",
    "ChangeRecord",
    # notifications
    "NotificationEvent",
    # config
    "SporkConfig",
    "GitConfig",
    "GistConfig",
    "IrccatConfig",
    "GraphiteConfig",
    # promotion
    "PromotionRequest",
    "EnvironmentResult",
    "PromotionResult",
]
