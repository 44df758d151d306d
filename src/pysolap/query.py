"""Translate group/field options into a :class:`QueryDescriptor`.

All fields in one request share a single set of view parameters. The
parameters are taken from the first field; later fields may omit them
(they inherit the shared set) but may not declare a different set.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pysolap._constants import OUTPUT_FORMAT
from pysolap.exceptions import InvalidRequestError
from pysolap.fields import PARAM_SEPARATOR, format_param_value
from pysolap.models.requests import FieldOption, GroupOptions, ParamValue, QueryDescriptor

VIEW_PARAM_DELIMITER = ";"


def coerce_field_options(
    field_options: Iterable[FieldOption | Mapping[str, Any]] | None,
    *,
    geo_id_field: str | None = None,
) -> list[FieldOption]:
    if field_options is None:
        raise InvalidRequestError("at least one field option is required")
    if isinstance(field_options, (FieldOption, Mapping)):
        raise InvalidRequestError("field options must be a sequence of field options")
    options = [FieldOption.coerce(item) for item in field_options]
    if not options:
        raise InvalidRequestError("at least one field option is required")
    if geo_id_field is not None:
        for option in options:
            if option.property_name == geo_id_field:
                raise InvalidRequestError(f"{geo_id_field!r} is the join key and cannot be requested as a field")
    return options


def shared_parameters(field_options: Sequence[FieldOption]) -> dict[str, ParamValue]:
    """Return the parameter set shared by every field in a request."""
    if not field_options:
        raise InvalidRequestError("at least one field option is required")
    shared = dict(field_options[0].parameters)
    for option in field_options[1:]:
        if option.parameters and option.parameters != shared:
            raise InvalidRequestError(
                f"field {option.property_name!r} declares parameters {option.parameters!r}; "
                f"all fields in one request must share {shared!r}"
            )
    return shared


def encode_view_params(params: Mapping[str, ParamValue]) -> str:
    """Encode parameters as semicolon-delimited ``key:value`` pairs."""
    return VIEW_PARAM_DELIMITER.join(
        f"{name}{PARAM_SEPARATOR}{format_param_value(value)}" for name, value in params.items()
    )


def build_query(
    group_options: GroupOptions | Mapping[str, Any],
    field_options: Iterable[FieldOption | Mapping[str, Any]],
) -> QueryDescriptor:
    """Build the descriptor for retrieving *field_options* from a layer.

    The group's GeoId field is always appended to the property names so
    results can be joined back to enumeration units.
    """
    group = GroupOptions.coerce(group_options)
    fields = coerce_field_options(field_options, geo_id_field=group.geo_id_field)
    params = shared_parameters(fields)

    property_names: list[str] = []
    for option in fields:
        if option.property_name not in property_names:
            property_names.append(option.property_name)
    property_names.append(group.geo_id_field)

    return QueryDescriptor(
        service_url=group.service_url,
        property_names=property_names,
        feature_prefix=group.workspace,
        feature_types=[group.layer],
        view_params=encode_view_params(params),
        output_format=OUTPUT_FORMAT,
    )
