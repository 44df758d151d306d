"""Rename raw feature properties to their field identities."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pysolap.models.features import FeatureRecord

_logger = logging.getLogger(__name__)


def rekey_records(
    records: Iterable[FeatureRecord],
    field_ids: Mapping[str, str],
    geo_id_field: str,
) -> dict[str, dict[str, Any]]:
    """Return ``{geo_id: {field_identity: value}}`` for *records*.

    *field_ids* maps each requested property name to its identity. The
    join-key property and anything that was not requested are dropped.
    When a GeoId appears more than once, later records win.
    """
    result: dict[str, dict[str, Any]] = {}
    for record in records:
        rekeyed: dict[str, Any] = {}
        for original, identity in field_ids.items():
            if original == geo_id_field:
                continue
            if original in record.fields:
                rekeyed[identity] = record.fields[original]
        existing = result.get(record.geo_id)
        if existing is None:
            result[record.geo_id] = rekeyed
        else:
            existing.update(rekeyed)
    _logger.debug("Rekeyed %d records onto %d field identities", len(result), len(field_ids))
    return result
