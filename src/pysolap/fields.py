"""Canonical field identities.

Attributes retrieved with different view parameters (e.g. the same
``data_value`` column for two pollutants) would overwrite one another if
stored under their raw names, so every retrieved field is renamed to a
collision-free identity before it is merged into the store::

    workspace|layer|field|paramA:valueA|paramB:valueB
"""

from __future__ import annotations

from collections.abc import Mapping

from pysolap.models.requests import ParamValue

FIELD_SEPARATOR = "|"
PARAM_SEPARATOR = ":"


def format_param_value(value: ParamValue) -> str:
    """Render a parameter value the way it is sent in ``viewParams``."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def normalize_field_name(
    workspace: str,
    layer: str,
    field: str,
    params: Mapping[str, ParamValue] | None = None,
) -> str:
    """Return the canonical identity for a field and its parameter set.

    Parameter names are sorted so logically identical requests always
    produce byte-identical identities.
    """
    values = params or {}
    parts = [workspace, layer, field]
    for name in sorted(values):
        parts.append(f"{name}{PARAM_SEPARATOR}{format_param_value(values[name])}")
    return FIELD_SEPARATOR.join(parts)
