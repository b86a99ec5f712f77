# Overview: Tagged variants for unit access and active unit selection.

"""
Unit scope and active selection values.

Storage and the JSON API keep the historical sentinels: a user's
accessible_unit_ids may be ["*"] (every unit, including ones created
later) and a session's active unit may be "all" (global view). Those
strings are parsed here, once, into small immutable variants so that the
resolvers never compare against sentinel strings.

    UnitScope       = AllUnits | SpecificUnits(unit_ids)
    ActiveSelection = Unset | Global | Specific(unit_id)
"""

from __future__ import annotations

from dataclasses import dataclass


ALL_UNITS_SENTINEL = "*"
GLOBAL_SELECTION_SENTINEL = "all"


@dataclass(frozen=True)
class AllUnits:
    """Access to every business unit, including future ones."""

    def includes(self, unit_id: str) -> bool:
        return True

    def to_list(self) -> list[str]:
        return [ALL_UNITS_SENTINEL]


@dataclass(frozen=True)
class SpecificUnits:
    """Access to an explicit, ordered set of unit ids."""
    unit_ids: tuple[str, ...] = ()

    def includes(self, unit_id: str) -> bool:
        return unit_id in self.unit_ids

    def to_list(self) -> list[str]:
        return list(self.unit_ids)


def parse_unit_scope(unit_ids) -> AllUnits | SpecificUnits:
    """
    Parse a stored accessible_unit_ids list.

    Only the exact single-element list ["*"] means every unit. A "*" mixed
    with concrete ids is not a super-admin marker; it is kept as an
    unmatchable id so that nothing is granted by accident.
    """
    ids = list(unit_ids or [])
    if ids == [ALL_UNITS_SENTINEL]:
        return AllUnits()
    return SpecificUnits(tuple(ids))


@dataclass(frozen=True)
class Unset:
    """No unit chosen yet: the session is awaiting a selection."""

    def to_value(self) -> str | None:
        return None


@dataclass(frozen=True)
class Global:
    """Global view across the user's accessible units."""

    def to_value(self) -> str | None:
        return GLOBAL_SELECTION_SENTINEL


@dataclass(frozen=True)
class Specific:
    """A single concrete business unit."""
    unit_id: str

    def to_value(self) -> str | None:
        return self.unit_id


UNSET = Unset()
GLOBAL = Global()


def parse_selection(value) -> Unset | Global | Specific:
    """Parse an active unit value as sent by clients ("all", a unit id, or null)."""
    if value is None or value == "":
        return UNSET
    if value == GLOBAL_SELECTION_SENTINEL:
        return GLOBAL
    return Specific(str(value))
