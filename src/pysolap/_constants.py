"""Internal constants shared across the library."""

DEFAULT_SERVICE_URL = "http://149.165.157.200:8080/geoserver/wfs"
DEFAULT_WORKSPACE = "solap"
DEFAULT_GEO_ID_FIELD = "tract_geoid"

OUTPUT_FORMAT = "application/json"
WFS_VERSION = "1.1.0"
WFS_NAMESPACE = "http://www.opengis.net/wfs"

# A tract GeoId (11 chars) starts with its county GeoId (5 chars).
COUNTY_GEOID_LENGTH = 5

QUANTILE = "quantile"
SUPPORTED_CLASS_METHODS: frozenset[str] = frozenset({QUANTILE})
MIN_CLASS_COUNT = 3
MAX_CLASS_COUNT = 9
BIVARIATE_CLASS_COUNT = 3
DEFAULT_CLASS_COUNT = 5
