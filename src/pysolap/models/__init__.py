"""Data models for pysolap requests and results."""

from pysolap.models._base import SolapBaseModel
from pysolap.models.classes import ClassBreakResult
from pysolap.models.features import FeatureRecord
from pysolap.models.requests import EnumUnitLevel, FieldOption, GroupOptions, ParamValue, QueryDescriptor

__all__ = [
    "ClassBreakResult",
    "EnumUnitLevel",
    "FeatureRecord",
    "FieldOption",
    "GroupOptions",
    "ParamValue",
    "QueryDescriptor",
    "SolapBaseModel",
]
