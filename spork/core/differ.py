"""Flat constraint-table diff between two environment snapshots.

Only keys of the *old* table are inspected: a key present in the new
table alone is never reported, while a key missing from the new table is
reported as changed to absent.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from spork.models.environment import ChangeRecord


def diff_tables(old: Mapping[str, str], new: Mapping[str, str]) -> list[ChangeRecord]:
    """Return a ``ChangeRecord`` per key of *old* whose value differs in *new*.

    Records follow the insertion order of *old*.
    """
    return [
        ChangeRecord(cookbook=key, old=old_value, new=new.get(key))
        for key, old_value in old.items()
        if new.get(key) != old_value
    ]


def render_changes(records: Iterable[ChangeRecord]) -> str:
    """One ``"<cookbook>: <old> changed to <new>"`` line per record."""
    return "".join(f"{record.render()}\n" for record in records)
