"""Local environment manifests — ``environments/{name}.json`` in the chef repo.

The environments directory is the sibling of the cookbooks directory:
``/repo/cookbooks`` -> ``/repo/environments``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from spork.core.errors import (
    AmbiguousPersistenceTarget,
    EnvironmentNotFound,
    MalformedManifest,
)
from spork.models.environment import Environment

logger = logging.getLogger(__name__)


def environments_dir_for(cookbook_path: Path | str) -> Path:
    """Map a cookbook path to the environments directory beside it."""
    path = Path(cookbook_path)
    return path.parent / "environments"


def render_manifest(environment: Environment) -> str:
    """Pretty-print a snapshot as the manifest JSON written to disk."""
    return json.dumps(environment.to_manifest(), indent=2) + "\n"


class LocalEnvironmentStore:
    """Loads and saves environment manifests next to the cookbook paths."""

    def __init__(self, cookbook_paths: list[Path] | list[str]) -> None:
        self._cookbook_paths = [Path(p) for p in cookbook_paths]

    @property
    def environment_dirs(self) -> list[Path]:
        return [environments_dir_for(p) for p in self._cookbook_paths]

    def load(self, name: str) -> Environment:
        """Load ``{name}.json`` from the first environments dir that has it.

        Raises
        ------
        EnvironmentNotFound
            If no environments dir has the file.
        MalformedManifest
            If the file is not valid JSON or not a valid manifest.
        """
        for directory in self.environment_dirs:
            path = directory / f"{name}.json"
            if path.is_file():
                logger.debug("Loading environment %s from %s", name, path)
                try:
                    return Environment.from_manifest(
                        json.loads(path.read_text(encoding="utf-8"))
                    )
                except ValueError as exc:
                    raise MalformedManifest(
                        f"Environment file {path} is not a valid manifest: {exc}"
                    ) from exc
        raise EnvironmentNotFound(
            f"Cannot find environment {name}.json in "
            + ", ".join(str(d) for d in self.environment_dirs)
        )

    def save(self, environment: Environment, name: str | None = None) -> Path:
        """Write the snapshot to ``{environments_dir}/{name}.json``.

        *name* is the file the snapshot was loaded from; it defaults to
        the manifest's own ``name`` field.

        Raises
        ------
        AmbiguousPersistenceTarget
            If more than one cookbook path is configured.  Nothing is
            written; the exception carries the rendered manifest.
        """
        name = name or environment.name
        manifest_json = render_manifest(environment)
        if len(self._cookbook_paths) != 1:
            raise AmbiguousPersistenceTarget(name, manifest_json)

        path = self.environment_dirs[0] / f"{name}.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fh:
            fh.write(manifest_json)
        logger.debug("Saved environment %s to %s", name, path)
        return path
