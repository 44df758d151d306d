"""Seed the store from an already-loaded GeoJSON feature collection.

Useful for putting base attributes (names, population) in place from the
same features that draw the map, before any parameterized request.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pysolap.exceptions import InvalidRequestError
from pysolap.ingestion.normalize import normalize_geo_id
from pysolap.models.requests import EnumUnitLevel
from pysolap.state.store import EnumUnitStore

_logger = logging.getLogger(__name__)


def _iter_features(features: Mapping[str, Any] | Iterable[Mapping[str, Any]]) -> Iterable[Mapping[str, Any]]:
    if isinstance(features, Mapping):
        items = features.get("features")
        if not isinstance(items, list):
            raise InvalidRequestError("feature collection has no 'features' list")
        return items
    return features


def seed_from_features(
    store: EnumUnitStore,
    level: EnumUnitLevel | str,
    features: Mapping[str, Any] | Iterable[Mapping[str, Any]],
    *,
    geo_id_key: str = "geoid",
) -> int:
    """Merge feature properties into ``store[level]`` keyed on *geo_id_key*.

    Properties keep their raw names; geometry is discarded. Returns the
    number of features ingested.
    """
    unit_level = EnumUnitLevel.parse(level)
    records: dict[str, dict[str, Any]] = {}
    skipped = 0
    for feature in _iter_features(features):
        props = feature.get("properties", feature)
        if not isinstance(props, Mapping):
            skipped += 1
            continue
        geo_id = normalize_geo_id(props.get(geo_id_key))
        if geo_id is None:
            skipped += 1
            continue
        record = {key: value for key, value in props.items() if key != "geometry"}
        records.setdefault(geo_id, {}).update(record)

    if skipped:
        _logger.debug("Skipped %d features without %r", skipped, geo_id_key)
    store.merge(unit_level, records)
    return len(records)
