"""WFS transport: serialize a query descriptor and parse GeoJSON features."""

from __future__ import annotations

import asyncio
import json
import logging
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pysolap._constants import WFS_NAMESPACE, WFS_VERSION
from pysolap._redact import redact_for_log
from pysolap.config import SolapConfig
from pysolap.exceptions import TransportError
from pysolap.ingestion.normalize import normalize_geo_id
from pysolap.models.features import FeatureRecord
from pysolap.models.requests import QueryDescriptor

_logger = logging.getLogger(__name__)

ET.register_namespace("wfs", WFS_NAMESPACE)


class FeatureClient(Protocol):
    """Structural interface for anything that can answer a feature query.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`WfsTransport`) concrete.
    """

    async def fetch_features(self, descriptor: QueryDescriptor) -> list[FeatureRecord]:
        ...


def _wfs(tag: str) -> str:
    return f"{{{WFS_NAMESPACE}}}{tag}"


def build_get_feature_xml(descriptor: QueryDescriptor, *, srs_name: str | None = None) -> str:
    """Write a WFS 1.1.0 ``GetFeature`` request body for *descriptor*."""
    root = ET.Element(
        _wfs("GetFeature"),
        {
            "service": "WFS",
            "version": WFS_VERSION,
            "outputFormat": descriptor.output_format,
        },
    )
    if descriptor.view_params:
        root.set("viewParams", descriptor.view_params)

    for feature_type in descriptor.feature_types:
        type_name = f"{descriptor.feature_prefix}:{feature_type}" if descriptor.feature_prefix else feature_type
        query = ET.SubElement(root, _wfs("Query"), {"typeName": type_name})
        if srs_name:
            query.set("srsName", srs_name)
        for name in descriptor.property_names:
            ET.SubElement(query, _wfs("PropertyName")).text = name

    return ET.tostring(root, encoding="unicode")


def parse_feature_collection(payload: Any, geo_id_field: str) -> list[FeatureRecord]:
    """Turn a GeoJSON feature collection into :class:`FeatureRecord` objects.

    Geometry is dropped. Features without a GeoId are skipped.
    """
    if not isinstance(payload, Mapping) or not isinstance(payload.get("features"), list):
        raise TransportError("Feature response has no 'features' list")

    records: list[FeatureRecord] = []
    skipped = 0
    for feature in payload["features"]:
        props = feature.get("properties") if isinstance(feature, Mapping) else None
        if not isinstance(props, Mapping):
            skipped += 1
            continue
        geo_id = normalize_geo_id(props.get(geo_id_field))
        if geo_id is None:
            skipped += 1
            continue
        fields = {key: value for key, value in props.items() if key != "geometry"}
        records.append(FeatureRecord(geo_id=geo_id, fields=fields))

    if skipped:
        _logger.debug("Skipped %d features without %r", skipped, geo_id_field)
    return records


class WfsTransport:
    """POSTs ``GetFeature`` requests to a WFS and parses the GeoJSON reply."""

    def __init__(self, http_session: aiohttp.ClientSession, config: SolapConfig | None = None) -> None:
        self._http = http_session
        self._config = config or SolapConfig()

    async def fetch_features(self, descriptor: QueryDescriptor) -> list[FeatureRecord]:
        url = descriptor.service_url
        body = build_get_feature_xml(descriptor, srs_name=self._config.srs_name)
        headers = {"content-type": "text/xml; charset=UTF-8", "accept": "application/json"}
        timeout = aiohttp.ClientTimeout(total=self._config.request_timeout)

        _logger.debug("POST %s typeNames=%s", url, descriptor.feature_types)
        if self._config.api_trace_enabled:
            _logger.debug("GetFeature body: %s", redact_for_log(body))

        try:
            async with self._http.post(url, data=body, headers=headers, timeout=timeout) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise TransportError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                        url=url,
                    )
        except TransportError:
            raise
        except asyncio.TimeoutError as exc:
            raise TransportError(f"Request to {url} timed out", url=url) from exc
        except aiohttp.ClientError as exc:
            raise TransportError(f"Request to {url} failed: {exc}", url=url) from exc

        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            # GeoServer answers view-param and typeName errors with an XML exception report.
            raise TransportError(f"Invalid JSON from {url}: {text[:200]}", url=url) from exc

        if self._config.api_trace_enabled:
            _logger.debug("GetFeature response: %s", redact_for_log(payload))

        try:
            return parse_feature_collection(payload, descriptor.geo_id_field)
        except TransportError as exc:
            exc.url = url
            raise
