"""Version string validation and parsing."""

from __future__ import annotations

import re

from spork.core.errors import InvalidVersionFormat
from spork.models.versioning import Version

_INTEGER_RE = re.compile(r"^[-+]?[0-9]+$")


def is_integer_string(value: str) -> bool:
    """Return ``True`` for an optionally signed run of ASCII digits."""
    return _INTEGER_RE.fullmatch(value) is not None


def is_valid_version(value: str) -> bool:
    """Return ``True`` when *value* has exactly three integer components.

    >>> is_valid_version("1.2.3")
    True
    >>> is_valid_version("1.2")
    False
    >>> is_valid_version("1.2.x")
    False
    """
    components = value.split(".")
    if len(components) != 3:
        return False
    return all(is_integer_string(c) for c in components)


def parse_version(value: str) -> Version:
    """Parse *value* into a ``Version``.

    Raises
    ------
    InvalidVersionFormat
        If *value* fails ``is_valid_version`` or carries a negative
        component.
    """
    if not is_valid_version(value):
        raise InvalidVersionFormat(f"{value} isn't a valid version number.")
    major, minor, patch = (int(c) for c in value.split("."))
    if min(major, minor, patch) < 0:
        raise InvalidVersionFormat(f"{value} has a negative version component.")
    return Version(major=major, minor=minor, patch=patch)
