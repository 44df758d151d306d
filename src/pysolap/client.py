"""High-level async client: one per dashboard session."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

import aiohttp

from pysolap._constants import DEFAULT_CLASS_COUNT, QUANTILE
from pysolap._transport import FeatureClient, WfsTransport
from pysolap.config import SolapConfig
from pysolap.exceptions import SolapError
from pysolap.models.classes import ClassBreakResult
from pysolap.models.features import FeatureRecord
from pysolap.models.requests import EnumUnitLevel, FieldOption, GroupOptions
from pysolap.state.store import EnumUnitStore
from pysolap.viz import EnumUnitData

_logger = logging.getLogger(__name__)


class SolapClient:
    """Async client for a WFS-backed enumeration-unit dashboard.

    Owns the HTTP session, the transport and the session's
    :class:`EnumUnitStore`. Usage::

        async with SolapClient(SolapConfig.from_env()) as client:
            group = client.config.group("demographics")
            breaks = await client.update_viz("tract", group, [FieldOption(property_name="total")])
    """

    def __init__(
        self,
        config: SolapConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: FeatureClient | None = None,
        store: EnumUnitStore | None = None,
    ) -> None:
        self._config = config or SolapConfig()
        self._external_session = session is not None
        self._http_session = session
        self._injected_transport = transport
        self._store = store if store is not None else EnumUnitStore()
        self._data: EnumUnitData | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> SolapClient:
        transport = self._injected_transport
        if transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            transport = WfsTransport(self._http_session, self._config)
        self._data = EnumUnitData(transport, self._store)
        _logger.debug("Client opened for %s", self._config.service_url)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._data = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> SolapConfig:
        return self._config

    @property
    def store(self) -> EnumUnitStore:
        return self._store

    @property
    def data(self) -> EnumUnitData:
        if self._data is None:
            raise SolapError("Client not initialized. Use 'async with SolapClient(...) as client:'")
        return self._data

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def fetch_features(
        self,
        group_options: GroupOptions | Mapping[str, Any],
        field_options: Iterable[FieldOption | Mapping[str, Any]],
    ) -> list[FeatureRecord]:
        return await self.data.get_features(group_options, field_options)

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
        return await self.data.update_viz(
            level,
            group_options,
            field_options,
            class_count,
            class_method,
            roll_up=roll_up,
        )

    async def roll_up(self, field_id: str) -> dict[str, float]:
        return await self.data.roll_up(field_id)
