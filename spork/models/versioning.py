"""Version and constraint models — the values pinned into environments."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Version(BaseModel):
    """A three-component numeric cookbook version.

    No operators, no pre-release or build metadata.  ``str(version)``
    returns the canonical ``"major.minor.patch"`` form.
    """

    model_config = ConfigDict(frozen=True)

    major: int = Field(ge=0)
    minor: int = Field(ge=0)
    patch: int = Field(ge=0)

    @classmethod
    def parse(cls, value: str) -> Version:
        """Parse ``"major.minor.patch"``; see ``spork.core.versions``."""
        from spork.core.versions import parse_version

        return parse_version(value)

    def canonical(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def __str__(self) -> str:
        return self.canonical()


class VersionConstraint(BaseModel):
    """An equality-pinned version requirement, serialized as ``"= 1.2.3"``."""

    model_config = ConfigDict(frozen=True)

    operator: str = "="
    version: Version

    @classmethod
    def pin(cls, version: Version) -> VersionConstraint:
        return cls(version=version)

    @classmethod
    def parse(cls, value: str) -> VersionConstraint:
        """Parse a constraint string of the exact form ``"= MAJOR.MINOR.PATCH"``."""
        operator, _, version = value.strip().partition(" ")
        if operator != "=":
            from spork.core.errors import InvalidVersionFormat

            raise InvalidVersionFormat(f"{value!r} isn't an equality constraint.")
        return cls(operator=operator, version=Version.parse(version.strip()))

    def render(self) -> str:
        return f"{self.operator} {self.version.canonical()}"

    def __str__(self) -> str:
        return self.render()
