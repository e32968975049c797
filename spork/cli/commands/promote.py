"""``spork promote [ENVIRONMENT] COOKBOOK`` — pin a cookbook version.

Resolves the version to pin (``--version`` or the cookbook's metadata),
rewrites each target environment's constraint, saves the manifest
locally and, with ``--remote``, uploads it and notifies the configured
channels.  ``COOKBOOK`` may be ``all``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from pydantic_settings import SettingsError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from spork.config import SporkSettings, load_config
from spork.core.errors import SporkError
from spork.core.orchestrator import PromotionOrchestrator
from spork.core.source_sync import is_git_available
from spork.core.versions import is_valid_version
from spork.models.config import SporkConfig
from spork.models.promotion import EnvironmentResult, PromotionRequest
from spork.store import CookbookSource, KnifeRemoteStore, LocalEnvironmentStore

console = Console()
err_console = Console(stderr=True)

USAGE = "spork promote ENVIRONMENT COOKBOOK [--version VERSION] [--remote]"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[dim]USAGE: {USAGE}[/dim]")
    err_console.print(f"[bold red]ERROR:[/bold red] {escape(message)}")
    return typer.Exit(code=1)


def parse_targets(
    args: list[str], config: SporkConfig
) -> tuple[list[str] | None, str]:
    """Split the positionals into (environments, cookbook).

    ``None`` environments means "use ``default_environments``".
    """
    has_defaults = bool(config.default_environments)
    if not args:
        if has_defaults:
            raise _fail(
                "Default environments loaded from config, but you must specify a cookbook name"
            )
        raise _fail("You must specify a cookbook name and an environment")
    if len(args) == 2:
        return [args[0]], args[1]
    if len(args) == 1 and has_defaults:
        return None, args[0]
    raise _fail("You must specify a cookbook name and an environment")


def _report(result: EnvironmentResult, remote: bool) -> None:
    console.print()
    console.print(f"[bold]Environment:[/bold] {result.environment}")
    for cookbook, constraint in result.promoted.items():
        console.print(f"  Adding version constraint {cookbook} {constraint}")
    for cookbook in result.skipped:
        console.print(f"  [yellow]Skipped {cookbook}[/yellow]")

    if result.changes:
        console.print("[bold]Constraints changed:[/bold]")
        for change in result.changes:
            console.print(f"  {change.render()}", highlight=False)
    else:
        console.print("[dim]No constraint changes.[/dim]")

    if not result.saved_locally:
        console.print(
            f"[yellow]Multiple cookbook paths defined; here's the JSON to paste "
            f"into {result.environment}.json in the environments directory you "
            f"wish to use.[/yellow]"
        )
        console.print(result.manifest_json, highlight=False, markup=False)

    if result.skipped:
        console.print(
            f"[bold red]Promotion incomplete:[/bold red] skipped "
            f"{', '.join(result.skipped)} in {result.environment}."
        )
    elif remote and result.uploaded:
        console.print(
            "[bold green]Promotion complete, saved locally and uploaded.[/bold green]"
        )
        if result.notified_channels:
            console.print(
                f"[dim]Notified: {', '.join(result.notified_channels)}[/dim]"
            )
    else:
        console.print(
            "[bold green]Promotion complete, saved locally![/bold green] "
            f"Please remember to upload your changed {result.environment}.json "
            "to the Chef Server."
        )


def promote_cmd(
    args: list[str] = typer.Argument(
        None,
        metavar="[ENVIRONMENT] COOKBOOK",
        help="Target environment and cookbook name (or 'all').",
        show_default=False,
    ),
    version: str = typer.Option(
        None,
        "--version",
        "-v",
        help="Set the environment's version constraint to the specified version.",
    ),
    remote: bool = typer.Option(
        False,
        "--remote",
        help="Save the environment to the chef server in addition to the local JSON file.",
    ),
    cookbook_path: list[Path] = typer.Option(
        None,
        "--cookbook-path",
        "-o",
        help="Cookbook directory; repeat for several.  Defaults to SPORK_COOKBOOK_PATH.",
    ),
) -> None:
    """Promote a cookbook version into one or more environments.

    With ``default_environments`` configured, ``spork promote COOKBOOK``
    targets every default environment.
    """
    try:
        settings = SporkSettings()
    except (ValidationError, SettingsError) as exc:
        raise _fail(f"Invalid SPORK_* settings: {exc}")
    _configure_logging(settings.log_level)
    if cookbook_path:
        settings = settings.model_copy(update={"cookbook_path": list(cookbook_path)})

    try:
        config = load_config(settings.repo_roots[0] if settings.repo_roots else None)
    except SporkError as exc:
        raise _fail(str(exc))

    environments, cookbook = parse_targets(list(args or []), config)

    if version is not None and not is_valid_version(version):
        raise _fail(f"{version} isn't a valid version number.")

    orchestrator = PromotionOrchestrator(
        config,
        CookbookSource(settings.cookbook_path),
        LocalEnvironmentStore(settings.cookbook_path),
        KnifeRemoteStore(settings.knife_path, timeout=settings.knife_timeout),
        repo_roots=settings.repo_roots,
        git_available=is_git_available(),
        user=settings.user,
    )
    request = PromotionRequest(
        cookbook=cookbook,
        environments=environments,
        version=version,
        remote=remote,
    )

    try:
        result = orchestrator.promote(request)
    except SporkError as exc:
        err_console.print(f"[bold red]ERROR:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    for env_result in result.environments:
        _report(env_result, remote)

    if result.skipped:
        err_console.print(
            f"[bold red]ERROR:[/bold red] {len(result.skipped)} cookbook "
            f"promotion(s) skipped: {', '.join(result.skipped)}"
        )
        raise typer.Exit(code=1)
