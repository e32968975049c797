"""Promotion orchestrator — the central coordinator for a promotion run.

The PromotionOrchestrator wires together the cookbook source, the local
and remote environment stores, the source sync step and the
NotificationDispatcher.  Per environment it loads a snapshot, promotes
each cookbook, diffs the result, persists it and, for remote runs,
uploads and notifies.

Environments are processed one at a time in input order.  A failure
other than an invalid explicit version aborts the remaining
environments.
"""

from __future__ import annotations

import getpass
import logging
from pathlib import Path
from typing import Protocol

from spork.core.constraints import apply_constraint
from spork.core.differ import diff_tables
from spork.core.errors import AmbiguousPersistenceTarget, InvalidVersionFormat, UsageError
from spork.core.resolver import resolve_version
from spork.core.source_sync import git_pull_if_repo, is_git_available
from spork.models.config import SporkConfig
from spork.models.environment import Environment
from spork.models.promotion import EnvironmentResult, PromotionRequest, PromotionResult
from spork.routing.dispatcher import NotificationDispatcher
from spork.store.environments import render_manifest

logger = logging.getLogger(__name__)

ALL_COOKBOOKS = "all"


class CookbookSourceLike(Protocol):
    def list_cookbooks(self) -> list[str]: ...

    def get_version(self, cookbook: str) -> str: ...


class EnvironmentStoreLike(Protocol):
    def load(self, name: str) -> Environment: ...

    def save(
        self, environment: Environment, name: str | None = None
    ) -> Path | None: ...


class PromotionOrchestrator:
    """Sequences a promotion run across environments and cookbooks.

    Parameters
    ----------
    config:
        Merged file configuration; never read from a global.
    cookbook_source:
        Enumerates cookbooks and reports their versions.
    local_store:
        Loads and saves environment manifests in the chef repository.
    remote_store:
        The server.  Only touched when a request sets ``remote``.
    dispatcher:
        Notification channels.  Built from *config* if not provided.
    repo_roots:
        Chef repository roots for source sync.
    git_available:
        Capability flag for source sync; defaults to whether GitPython
        imported.
    user:
        Acting operator named in notifications.
    """

    def __init__(
        self,
        config: SporkConfig,
        cookbook_source: CookbookSourceLike,
        local_store: EnvironmentStoreLike,
        remote_store: EnvironmentStoreLike | None = None,
        *,
        dispatcher: NotificationDispatcher | None = None,
        repo_roots: list[Path] | None = None,
        git_available: bool | None = None,
        user: str | None = None,
    ) -> None:
        self.config = config
        self.cookbook_source = cookbook_source
        self.local_store = local_store
        self.remote_store = remote_store
        self.dispatcher = dispatcher or NotificationDispatcher.from_config(config)
        self.repo_roots = repo_roots or []
        self.git_available = is_git_available() if git_available is None else git_available
        self.user = user or getpass.getuser()

    # ------------------------------------------------------------------
    # Run lifecycle
    # ------------------------------------------------------------------

    def resolve_environments(self, request: PromotionRequest) -> list[str]:
        """Return the explicit environment list or the configured defaults."""
        if request.environments:
            return list(request.environments)
        if self.config.default_environments:
            return list(self.config.default_environments)
        raise UsageError("You must specify a cookbook name and an environment")

    def resolve_cookbooks(self, cookbook: str) -> list[str]:
        """Expand the ``all`` sentinel into every known cookbook."""
        if cookbook == ALL_COOKBOOKS:
            return self.cookbook_source.list_cookbooks()
        return [cookbook]

    def promote(self, request: PromotionRequest) -> PromotionResult:
        """Promote ``request.cookbook`` into every target environment.

        Raises
        ------
        UsageError
            If no environment is given and none are configured.  Raised
            before anything is loaded or written.
        """
        if not request.cookbook:
            raise UsageError("You must specify a cookbook name")
        environments = self.resolve_environments(request)

        if request.remote and self.remote_store is None:
            raise UsageError("Remote save requested but no remote store is configured")

        if self.config.git.enabled:
            git_pull_if_repo(self.repo_roots, available=self.git_available)

        results = [self.promote_environment(name, request) for name in environments]
        return PromotionResult(environments=results)

    def promote_environment(self, name: str, request: PromotionRequest) -> EnvironmentResult:
        """Resolve, apply, diff, persist and (for remote runs) notify."""
        logger.info("Environment: %s", name)
        original = self.local_store.load(name)
        environment = original

        cookbooks = self.resolve_cookbooks(request.cookbook)
        if request.cookbook == ALL_COOKBOOKS:
            logger.info("Promoting ALL cookbooks to environment %s", name)

        promoted: dict[str, str] = {}
        skipped: list[str] = []
        for cookbook in cookbooks:
            try:
                environment = self.promote_cookbook(environment, cookbook, request.version)
            except InvalidVersionFormat as exc:
                logger.error("%s", exc)
                skipped.append(cookbook)
                continue
            promoted[cookbook] = environment.cookbook_versions[cookbook]

        changes = diff_tables(original.cookbook_versions, environment.cookbook_versions)
        manifest_json = render_manifest(environment)

        saved_path: Path | None = None
        try:
            saved_path = self.local_store.save(environment, name)
            logger.info("Saved changes into %s", saved_path)
        except AmbiguousPersistenceTarget as exc:
            logger.warning("%s", exc)
            manifest_json = exc.manifest_json

        result = EnvironmentResult(
            environment=name,
            promoted=promoted,
            skipped=skipped,
            changes=changes,
            manifest_json=manifest_json,
            saved_path=saved_path,
        )
        if request.remote:
            result = self._upload(name, environment, result)
        return result

    def promote_cookbook(
        self, environment: Environment, cookbook: str, explicit_version: str | None
    ) -> Environment:
        """One Resolve -> Validate -> Apply step; returns the new snapshot."""
        version = resolve_version(explicit_version, self.cookbook_source, cookbook)
        logger.info("Adding version constraint %s = %s", cookbook, version)
        return apply_constraint(environment, cookbook, version)

    # ------------------------------------------------------------------
    # Remote persistence
    # ------------------------------------------------------------------

    def _upload(
        self, name: str, environment: Environment, result: EnvironmentResult
    ) -> EnvironmentResult:
        """Upload to the server, then notify with the server-side diff."""
        remote_store = self.remote_store
        if remote_store is None:
            raise UsageError("Remote save requested but no remote store is configured")
        logger.info("Uploading %s to server", name)
        server_copy = remote_store.load(name)
        remote_changes = diff_tables(
            server_copy.cookbook_versions, environment.cookbook_versions
        )
        remote_store.save(environment, name)

        notified = self.dispatcher.dispatch(name, remote_changes, self.user)
        return result.model_copy(
            update={
                "uploaded": True,
                "remote_changes": remote_changes,
                "notified_channels": notified,
            }
        )
