"""Environment manifest snapshots and the change records between them."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Environment(BaseModel):
    """An immutable snapshot of one environment manifest.

    Only ``name`` and ``cookbook_versions`` are interpreted.  Every other
    manifest field (``description``, ``json_class``, ``chef_type``,
    attribute maps, ...) is kept as a pydantic extra and written back
    verbatim by ``to_manifest()``.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str
    cookbook_versions: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_manifest(cls, data: dict[str, Any]) -> Environment:
        return cls.model_validate(data)

    def to_manifest(self) -> dict[str, Any]:
        """Return the JSON document for this snapshot, field order preserved."""
        return self.model_dump(mode="json")

    def with_constraint(self, cookbook: str, constraint: str) -> Environment:
        """Return a new snapshot with one constraint entry replaced."""
        table = dict(self.cookbook_versions)
        table[cookbook] = constraint
        return self.model_copy(update={"cookbook_versions": table})


class ChangeRecord(BaseModel):
    """One constraint that differs between two snapshots.

    ``new`` is ``None`` when the cookbook is absent from the newer table.
    """

    model_config = ConfigDict(frozen=True)

    cookbook: str
    old: str
    new: str | None = None

    def render(self) -> str:
        return f"{self.cookbook}: {self.old} changed to {self.new or ''}".rstrip()
