"""Fetch, merge and classify enumeration-unit data for symbolization."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pysolap._constants import DEFAULT_CLASS_COUNT, QUANTILE
from pysolap._transport import FeatureClient
from pysolap.classify import class_breaks, validate_classification
from pysolap.exceptions import InvalidRequestError
from pysolap.fields import normalize_field_name
from pysolap.ingestion.rekey import rekey_records
from pysolap.models.classes import ClassBreakResult
from pysolap.models.features import FeatureRecord
from pysolap.models.requests import EnumUnitLevel, FieldOption, GroupOptions
from pysolap.query import build_query, coerce_field_options, shared_parameters
from pysolap.state.aggregate import county_geo_id
from pysolap.state.store import EnumUnitStore, collect_values, merge_records, paired_values

_logger = logging.getLogger(__name__)


def field_identities(group: GroupOptions, fields: list[FieldOption]) -> dict[str, str]:
    """Map each requested property name to its identity under the shared parameters."""
    params = shared_parameters(fields)
    return {
        option.property_name: normalize_field_name(group.workspace, group.layer, option.property_name, params)
        for option in fields
    }


class EnumUnitData:
    """Keeps tract/county attribute data and turns it into class breaks.

    Usage::

        data = EnumUnitData(transport)
        breaks = await data.update_viz("tract", group, [{"propertyName": "total"}])

    Calls for the same level are serialized: each one fetches, merges and
    classifies before the next starts, so the most recently started call
    is the last writer.
    """

    def __init__(self, client: FeatureClient, store: EnumUnitStore | None = None) -> None:
        self._client = client
        self.store = store if store is not None else EnumUnitStore()
        self._locks: dict[EnumUnitLevel, asyncio.Lock] = {level: asyncio.Lock() for level in EnumUnitLevel}

    async def get_features(
        self,
        group_options: GroupOptions | Mapping[str, Any],
        field_options: Iterable[FieldOption | Mapping[str, Any]],
    ) -> list[FeatureRecord]:
        """Fetch raw feature records without touching the store."""
        descriptor = build_query(group_options, field_options)
        return await self._client.fetch_features(descriptor)

    async def update_viz(
        self,
        level: EnumUnitLevel | str,
        group_options: GroupOptions | Mapping[str, Any],
        field_options: Iterable[FieldOption | Mapping[str, Any]],
        class_count: int = DEFAULT_CLASS_COUNT,
        class_method: str = QUANTILE,
        *,
        roll_up: bool = False,
    ) -> list[ClassBreakResult]:
        """Retrieve fields for *level*, merge them into the store, and compute breaks.

        The first field is symbolized; when a second field is given the
        result is bivariate (two 3-class results). Breaks are computed on a
        staged copy of the level, so a failure leaves the store unchanged.
        With ``roll_up=True`` (tract level only) the fields are also summed
        into counties.
        """
        unit_level = EnumUnitLevel.parse(level)
        validate_classification(class_count, class_method)
        group = GroupOptions.coerce(group_options)
        fields = coerce_field_options(field_options, geo_id_field=group.geo_id_field)
        if roll_up and unit_level is not EnumUnitLevel.TRACT:
            raise InvalidRequestError("roll_up is only supported for tract-level requests")

        field_ids = field_identities(group, fields)
        descriptor = build_query(group, fields)
        symbolized = [field_ids[option.property_name] for option in fields[:2]]

        async with self._locks[unit_level]:
            features = await self._client.fetch_features(descriptor)
            incoming = rekey_records(features, field_ids, group.geo_id_field)

            staged = self.store.snapshot(unit_level)
            merge_records(staged, incoming)
            if len(symbolized) > 1:
                values1, values2 = paired_values(staged, symbolized[0], symbolized[1])
                results = class_breaks(class_count, class_method, values1, values2)
            else:
                results = class_breaks(class_count, class_method, collect_values(staged, symbolized[0]))

            self.store.merge(unit_level, incoming)

            if roll_up:
                # Under the tract lock so a queued tract call cannot land in these totals.
                async with self._locks[EnumUnitLevel.COUNTY]:
                    for identity in dict.fromkeys(field_ids.values()):
                        self.store.roll_up(identity)

        if unit_level is EnumUnitLevel.TRACT:
            _logger.info(
                "Retrieved attributes for %d tracts in %d counties",
                len(incoming),
                len({county_geo_id(geo_id) for geo_id in incoming}),
            )
        else:
            _logger.info("Retrieved attributes for %d counties", len(incoming))
        _logger.debug("Class breaks for %s: %s", symbolized, results)

        return results

    async def roll_up(self, field_id: str) -> dict[str, float]:
        """Sum a tract field into counties (see :meth:`EnumUnitStore.roll_up`)."""
        async with self._locks[EnumUnitLevel.COUNTY]:
            return self.store.roll_up(field_id)

    def field_exists(self, level: EnumUnitLevel | str, field_id: str) -> bool:
        return self.store.field_exists(level, field_id)
