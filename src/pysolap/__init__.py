"""pysolap - Async client and classification engine for enumeration-unit choropleth data."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pysolap")
except PackageNotFoundError:
    __version__ = "0+local"
from pysolap._transport import FeatureClient, WfsTransport
from pysolap.classify import bivariate_class, class_breaks, classify_value
from pysolap.client import SolapClient
from pysolap.config import SolapConfig
from pysolap.exceptions import (
    ClassificationError,
    InsufficientDataError,
    InvalidRequestError,
    SolapConfigError,
    SolapError,
    TransportError,
    UnsupportedClassificationError,
)
from pysolap.fields import normalize_field_name
from pysolap.ingestion.seed import seed_from_features
from pysolap.models import (
    ClassBreakResult,
    EnumUnitLevel,
    FeatureRecord,
    FieldOption,
    GroupOptions,
    QueryDescriptor,
)
from pysolap.query import build_query
from pysolap.state import EnumUnitStore, aggregate_to_county
from pysolap.viz import EnumUnitData

__all__ = [
    "__version__",
    "ClassBreakResult",
    "ClassificationError",
    "EnumUnitData",
    "EnumUnitLevel",
    "EnumUnitStore",
    "FeatureClient",
    "FeatureRecord",
    "FieldOption",
    "GroupOptions",
    "InsufficientDataError",
    "InvalidRequestError",
    "QueryDescriptor",
    "SolapClient",
    "SolapConfig",
    "SolapConfigError",
    "SolapError",
    "TransportError",
    "UnsupportedClassificationError",
    "WfsTransport",
    "aggregate_to_county",
    "bivariate_class",
    "build_query",
    "class_breaks",
    "classify_value",
    "normalize_field_name",
    "seed_from_features",
]
