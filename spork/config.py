"""Configuration — env-driven process settings plus cascading YAML files.

``SporkSettings`` uses pydantic-settings: every field can be overridden
with a ``SPORK_*`` environment variable or a ``.env`` file.

``load_config()`` merges up to three ``spork-config.yml`` files, later
files overriding earlier ones key by key:

1. ``<repo_root>/config/spork-config.yml``
2. ``/etc/spork-config.yml``
3. ``~/.chef/spork-config.yml``

Both are read once at the CLI boundary and passed down explicitly.
"""

from __future__ import annotations

import getpass
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from spork.core.errors import SporkError
from spork.models.config import SporkConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "spork-config.yml"
SYSTEM_CONFIG = Path("/etc") / CONFIG_FILENAME
USER_CONFIG = Path("~/.chef") / CONFIG_FILENAME


class SporkSettings(BaseSettings):
    """Process settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export SPORK_LOG_LEVEL=DEBUG
        export SPORK_COOKBOOK_PATH='["/srv/chef/cookbooks"]'
        export SPORK_KNIFE_PATH=/opt/chef/bin/knife
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SPORK_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    cookbook_path: list[Path] = Field(default_factory=lambda: [Path("cookbooks")])
    knife_path: str = "knife"
    knife_timeout: float = 60.0
    user: str = Field(default_factory=getpass.getuser)

    @property
    def repo_roots(self) -> list[Path]:
        """Chef repository roots: the parent of each cookbook path."""
        return [p.parent for p in self.cookbook_path]


def config_search_paths(repo_root: Path | None) -> list[Path]:
    """Return the candidate config files in increasing precedence."""
    paths: list[Path] = []
    if repo_root is not None:
        paths.append(repo_root / "config" / CONFIG_FILENAME)
    paths.append(SYSTEM_CONFIG)
    paths.append(USER_CONFIG.expanduser())
    return paths


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge *override* onto *base*; nested mappings merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse one YAML config file.  An empty file yields ``{}``."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise SporkError(f"Could not parse config file {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SporkError(f"Config file {path} must contain a mapping")
    return data


def load_config(
    repo_root: Path | None = None,
    *,
    paths: Iterable[Path] | None = None,
) -> SporkConfig:
    """Load and merge the cascading config files into a ``SporkConfig``.

    Missing files are skipped.  Pass *paths* to override the search list.
    """
    merged: dict[str, Any] = {}
    for path in paths if paths is not None else config_search_paths(repo_root):
        if not path.is_file():
            continue
        merged = deep_merge(merged, read_config_file(path))
        logger.info("Loaded config file %s", path)
    try:
        return SporkConfig.model_validate(merged)
    except ValidationError as exc:
        raise SporkError(f"Invalid spork configuration: {exc}") from exc
