"""Feature records returned by the feature service."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from pysolap.models._base import SolapBaseModel


class FeatureRecord(SolapBaseModel):
    """Properties of one feature keyed by its GeoId. Geometry is never kept."""

    geo_id: str
    fields: dict[str, Any] = Field(default_factory=dict)
