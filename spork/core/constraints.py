"""Apply a resolved version to an environment's constraint table."""

from __future__ import annotations

from spork.models.environment import Environment
from spork.models.versioning import Version, VersionConstraint


def apply_constraint(environment: Environment, cookbook: str, version: Version) -> Environment:
    """Return a new snapshot pinning *cookbook* to ``= version``.

    The input snapshot is left untouched.  No validation happens here;
    *version* is already a parsed ``Version``.
    """
    return environment.with_constraint(cookbook, VersionConstraint.pin(version).render())
