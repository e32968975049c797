"""Decide which version a cookbook is promoted to."""

from __future__ import annotations

from typing import Protocol

from spork.core.versions import parse_version
from spork.models.versioning import Version


class CookbookVersionSource(Protocol):
    """Anything that can report a cookbook's current version string."""

    def get_version(self, cookbook: str) -> str:
        ...


def resolve_version(
    explicit_version: str | None,
    cookbook_source: CookbookVersionSource,
    cookbook: str,
) -> Version:
    """Return the operator's version if given, else the cookbook's own.

    An explicit version always wins.  It must be valid; an invalid one
    raises ``InvalidVersionFormat`` without consulting the source.
    ``CookbookNotFound`` propagates from the source.
    """
    if explicit_version is not None:
        return parse_version(explicit_version)
    return parse_version(cookbook_source.get_version(cookbook))
