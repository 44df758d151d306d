"""In-memory store of enumeration-unit records.

The store holds one mapping per level (``tract`` and ``county``) from GeoId
to a record of field identity → value. The module-level helpers work on
plain mappings so staged copies can be merged and classified exactly like
the live store.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from pysolap.ingestion.normalize import safe_float
from pysolap.models.requests import EnumUnitLevel
from pysolap.state.aggregate import aggregate_to_county

_logger = logging.getLogger(__name__)

UnitRecords = dict[str, dict[str, Any]]


def merge_records(target: UnitRecords, incoming: Mapping[str, Mapping[str, Any]]) -> None:
    """Merge *incoming* into *target* in place.

    Keys in an incoming record overwrite; existing keys it does not carry
    are kept.
    """
    for geo_id, record in incoming.items():
        existing = target.get(geo_id)
        if existing is None:
            existing = {}
            target[geo_id] = existing
        existing.update(copy.deepcopy(dict(record)))


def collect_values(records: Mapping[str, Mapping[str, Any]], field_id: str) -> list[float]:
    """Numeric values of *field_id* across all records that carry it."""
    values: list[float] = []
    for record in records.values():
        if field_id not in record:
            continue
        value = safe_float(record[field_id])
        if value is not None:
            values.append(value)
    return values


def paired_values(
    records: Mapping[str, Mapping[str, Any]],
    field_id1: str,
    field_id2: str,
) -> tuple[list[float], list[float]]:
    """Parallel value sequences for units carrying numeric values for both fields."""
    values1: list[float] = []
    values2: list[float] = []
    for record in records.values():
        first = safe_float(record.get(field_id1))
        second = safe_float(record.get(field_id2))
        if first is None or second is None:
            continue
        values1.append(first)
        values2.append(second)
    return values1, values2


class EnumUnitStore:
    """Per-session store for tract and county records."""

    def __init__(self) -> None:
        self.tract: UnitRecords = {}
        self.county: UnitRecords = {}

    def level(self, level: EnumUnitLevel | str) -> UnitRecords:
        unit_level = EnumUnitLevel.parse(level)
        return self.tract if unit_level is EnumUnitLevel.TRACT else self.county

    def __getitem__(self, level: EnumUnitLevel | str) -> UnitRecords:
        return self.level(level)

    def merge(self, level: EnumUnitLevel | str, incoming: Mapping[str, Mapping[str, Any]]) -> None:
        merge_records(self.level(level), incoming)

    def field_exists(self, level: EnumUnitLevel | str, field_id: str) -> bool:
        """Whether any unit at *level* carries *field_id*."""
        return any(field_id in record for record in self.level(level).values())

    def values(self, level: EnumUnitLevel | str, field_id: str) -> list[float]:
        return collect_values(self.level(level), field_id)

    def paired_values(self, level: EnumUnitLevel | str, field_id1: str, field_id2: str) -> tuple[list[float], list[float]]:
        return paired_values(self.level(level), field_id1, field_id2)

    def snapshot(self, level: EnumUnitLevel | str) -> UnitRecords:
        """Deep copy of the records at *level*."""
        return copy.deepcopy(self.level(level))

    def roll_up(self, field_id: str) -> dict[str, float]:
        """Sum *field_id* from tracts into counties and merge the totals.

        Counties already in the store with no contributing tract get ``0``.
        """
        totals = aggregate_to_county(self.tract, field_id)
        for county in self.county:
            totals.setdefault(county, 0)
        self.merge(EnumUnitLevel.COUNTY, {county: {field_id: total} for county, total in totals.items()})
        _logger.info("Rolled up %s into %d counties", field_id, len(totals))
        return totals

    def reset(self, level: EnumUnitLevel | str | None = None) -> None:
        """Drop all records, or only those at *level*."""
        if level is None:
            self.tract.clear()
            self.county.clear()
            return
        self.level(level).clear()
