"""Normalization helpers.

Feature services return numbers as JSON numbers, numeric strings, or
placeholders; these helpers decide what counts as a usable value.
"""

from __future__ import annotations

import math
from typing import Any


def safe_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool) or value == "" or value == "--":
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def normalize_geo_id(value: Any) -> str | None:
    """Return a GeoId as a stripped string, or ``None`` if absent."""
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    return text if text else None
