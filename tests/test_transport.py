from __future__ import annotations

import asyncio
import json
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any

import aiohttp
import pytest

from pysolap._constants import WFS_NAMESPACE
from pysolap._transport import WfsTransport, build_get_feature_xml, parse_feature_collection
from pysolap.config import SolapConfig
from pysolap.exceptions import TransportError
from pysolap.query import build_query

GROUP = {
    "serviceUrl": "http://example.test/geoserver/wfs",
    "workspace": "solap",
    "layer": "caces_pollutants",
    "geoIdField": "tract_geoid",
}
FIELDS = [{"propertyName": "data_value", "parameters": {"pollutant": "so2", "year": 2005}}]


@dataclass
class FakeResponse:
    status: int
    body: str

    async def text(self) -> str:
        return self.body

    async def __aenter__(self) -> FakeResponse:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None


@dataclass
class FakeHttpSession:
    response: FakeResponse | None = None
    error: BaseException | None = None
    calls: list[dict[str, Any]] = field(default_factory=list)

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


def _collection(*features: dict[str, Any]) -> str:
    return json.dumps({"type": "FeatureCollection", "features": list(features)})


def test_get_feature_xml() -> None:
    body = build_get_feature_xml(build_query(GROUP, FIELDS), srs_name="EPSG:3857")
    root = ET.fromstring(body)

    assert root.tag == f"{{{WFS_NAMESPACE}}}GetFeature"
    assert root.get("version") == "1.1.0"
    assert root.get("outputFormat") == "application/json"
    assert root.get("viewParams") == "pollutant:so2;year:2005"
    query = root.find(f"{{{WFS_NAMESPACE}}}Query")
    assert query is not None
    assert query.get("typeName") == "solap:caces_pollutants"
    assert query.get("srsName") == "EPSG:3857"
    names = [el.text for el in query.findall(f"{{{WFS_NAMESPACE}}}PropertyName")]
    assert names == ["data_value", "tract_geoid"]


def test_get_feature_xml_omits_empty_view_params() -> None:
    root = ET.fromstring(build_get_feature_xml(build_query(GROUP, [{"propertyName": "total"}])))

    assert root.get("viewParams") is None


def test_parse_feature_collection_discards_geometry_and_idless_features() -> None:
    payload = {
        "type": "FeatureCollection",
        "features": [
            {"geometry": {"type": "Point"}, "properties": {"tract_geoid": "27001010100", "data_value": 1.5}},
            {"geometry": None, "properties": {"data_value": 2}},
            {"geometry": None, "properties": None},
        ],
    }

    records = parse_feature_collection(payload, "tract_geoid")

    assert len(records) == 1
    assert records[0].geo_id == "27001010100"
    assert records[0].fields == {"tract_geoid": "27001010100", "data_value": 1.5}


def test_parse_feature_collection_requires_features() -> None:
    with pytest.raises(TransportError):
        parse_feature_collection({"type": "FeatureCollection"}, "tract_geoid")


@pytest.mark.asyncio
async def test_fetch_features_posts_xml_and_parses() -> None:
    http = FakeHttpSession(
        response=FakeResponse(200, _collection({"properties": {"tract_geoid": "27001010100", "data_value": 3}}))
    )
    transport = WfsTransport(http, SolapConfig(request_timeout=5))  # type: ignore[arg-type]

    records = await transport.fetch_features(build_query(GROUP, FIELDS))

    assert [r.geo_id for r in records] == ["27001010100"]
    call = http.calls[0]
    assert call["url"] == GROUP["serviceUrl"]
    assert "viewParams=\"pollutant:so2;year:2005\"" in call["data"]
    assert call["headers"]["content-type"].startswith("text/xml")
    assert call["timeout"].total == 5


@pytest.mark.asyncio
async def test_fetch_features_non_200() -> None:
    transport = WfsTransport(FakeHttpSession(response=FakeResponse(500, "boom")))  # type: ignore[arg-type]

    with pytest.raises(TransportError) as excinfo:
        await transport.fetch_features(build_query(GROUP, FIELDS))

    assert excinfo.value.status_code == 500
    assert excinfo.value.url == GROUP["serviceUrl"]


@pytest.mark.asyncio
async def test_fetch_features_invalid_json() -> None:
    body = "<ows:ExceptionReport>bad viewParams</ows:ExceptionReport>"
    transport = WfsTransport(FakeHttpSession(response=FakeResponse(200, body)))  # type: ignore[arg-type]

    with pytest.raises(TransportError, match="Invalid JSON"):
        await transport.fetch_features(build_query(GROUP, FIELDS))


@pytest.mark.asyncio
async def test_fetch_features_missing_features_sets_url() -> None:
    transport = WfsTransport(FakeHttpSession(response=FakeResponse(200, "{}")))  # type: ignore[arg-type]

    with pytest.raises(TransportError) as excinfo:
        await transport.fetch_features(build_query(GROUP, FIELDS))

    assert excinfo.value.url == GROUP["serviceUrl"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [aiohttp.ClientConnectionError("refused"), asyncio.TimeoutError()],
)
async def test_fetch_features_network_errors(error: BaseException) -> None:
    transport = WfsTransport(FakeHttpSession(error=error))  # type: ignore[arg-type]

    with pytest.raises(TransportError):
        await transport.fetch_features(build_query(GROUP, FIELDS))
