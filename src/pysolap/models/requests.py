"""Pydantic request models for the feature pipeline.

These models provide a consistent "validate → normalize → execute" flow.
They replace the loosely-typed option objects of the web dashboard with
explicit structures whose defaults are stated here.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import AliasChoices, Field, ValidationInfo, field_validator

from pysolap._constants import OUTPUT_FORMAT
from pysolap.exceptions import InvalidRequestError
from pysolap.models._base import SolapBaseModel

ParamValue = bool | int | float | str


class EnumUnitLevel(StrEnum):
    TRACT = "tract"
    COUNTY = "county"

    @classmethod
    def parse(cls, value: str | EnumUnitLevel) -> EnumUnitLevel:
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidRequestError(f"level must be 'county' or 'tract', got {value!r}") from exc


def _non_empty(value: str, name: str) -> str:
    text = value.strip()
    if not text:
        raise ValueError(f"{name} must be non-empty")
    return text


class GroupOptions(SolapBaseModel):
    """Where a group of fields lives: service, workspace, layer, and join key."""

    service_url: str
    workspace: str
    layer: str
    geo_id_field: str

    @field_validator("service_url", "workspace", "layer", "geo_id_field")
    @classmethod
    def _required(cls, value: str, info: ValidationInfo) -> str:
        return _non_empty(value, info.field_name or "value")


class FieldOption(SolapBaseModel):
    """A single attribute to retrieve, with optional view parameters."""

    property_name: str
    parameters: dict[str, ParamValue] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("parameters", "viewParams"),
    )

    @field_validator("property_name")
    @classmethod
    def _name_non_empty(cls, value: str) -> str:
        return _non_empty(value, "property_name")


class QueryDescriptor(SolapBaseModel):
    """Transport-agnostic description of a feature request.

    Serialized with ``by_alias=True`` this is the
    ``{propertyNames, featurePrefix, featureTypes, viewParams, outputFormat}``
    object the WFS writer expects.
    """

    service_url: str
    property_names: list[str]
    feature_prefix: str
    feature_types: list[str]
    view_params: str = ""
    output_format: str = OUTPUT_FORMAT

    @property
    def geo_id_field(self) -> str:
        """The join key, always the last requested property."""
        return self.property_names[-1]
