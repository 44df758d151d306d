"""Tract to county roll-up."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pysolap._constants import COUNTY_GEOID_LENGTH
from pysolap.ingestion.normalize import safe_float


def county_geo_id(tract_geo_id: str) -> str:
    """Return the county GeoId a tract belongs to."""
    return tract_geo_id[:COUNTY_GEOID_LENGTH]


def aggregate_to_county(tracts: Mapping[str, Mapping[str, Any]], field_id: str) -> dict[str, float]:
    """Sum *field_id* over tracts, grouped by county.

    Every county with at least one tract carrying a numeric value for the
    field starts at zero. Tracts without the field (or with a non-numeric
    value) contribute neither to a sum nor to the set of counties.
    """
    totals: dict[str, float] = {}
    for geo_id, record in tracts.items():
        if field_id not in record:
            continue
        value = safe_float(record[field_id])
        if value is None:
            continue
        county = county_geo_id(geo_id)
        totals[county] = totals.get(county, 0) + value
    return totals
