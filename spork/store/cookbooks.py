"""Cookbook source — enumerate cookbooks and read their versions from disk.

Layout: ``{cookbook_path}/{name}/metadata.json`` or
``{cookbook_path}/{name}/metadata.rb``.  With several cookbook paths the
first path containing a cookbook wins.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from spork.core.errors import CookbookNotFound, MalformedManifest

logger = logging.getLogger(__name__)

_METADATA_FILES = ("metadata.json", "metadata.rb")
_RB_VERSION_RE = re.compile(r"""^\s*version\s+['"]([^'"]+)['"]""", re.MULTILINE)


class CookbookSource:
    """Reads cookbook names and versions from one or more cookbook paths."""

    def __init__(self, cookbook_paths: list[Path] | list[str]) -> None:
        self._paths = [Path(p) for p in cookbook_paths]

    @property
    def cookbook_paths(self) -> list[Path]:
        return list(self._paths)

    def _cookbook_dir(self, name: str) -> Path | None:
        for base in self._paths:
            candidate = base / name
            if any((candidate / f).is_file() for f in _METADATA_FILES):
                return candidate
        return None

    def list_cookbooks(self) -> list[str]:
        """Return every cookbook name, path order first, then by name."""
        names: list[str] = []
        for base in self._paths:
            if not base.is_dir():
                logger.debug("Cookbook path %s does not exist", base)
                continue
            for child in sorted(base.iterdir()):
                if child.name in names or not child.is_dir():
                    continue
                if any((child / f).is_file() for f in _METADATA_FILES):
                    names.append(child.name)
        return names

    def get_version(self, cookbook: str) -> str:
        """Return the version string declared in the cookbook's metadata."""
        cookbook_dir = self._cookbook_dir(cookbook)
        if cookbook_dir is None:
            raise CookbookNotFound(
                f"Cannot find a cookbook named {cookbook} in "
                + ", ".join(str(p) for p in self._paths)
            )

        json_file = cookbook_dir / "metadata.json"
        if json_file.is_file():
            try:
                metadata = json.loads(json_file.read_text(encoding="utf-8"))
            except ValueError as exc:
                raise MalformedManifest(
                    f"Cookbook metadata {json_file} is not valid JSON: {exc}"
                ) from exc
            if not isinstance(metadata, dict):
                raise MalformedManifest(f"Cookbook metadata {json_file} must be an object")
            version = metadata.get("version")
            if version:
                return str(version)

        rb_file = cookbook_dir / "metadata.rb"
        if rb_file.is_file():
            match = _RB_VERSION_RE.search(rb_file.read_text(encoding="utf-8"))
            if match:
                return match.group(1)

        # chef's default for metadata without an explicit version
        return "0.0.0"
