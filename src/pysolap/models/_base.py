"""Base model for pysolap request/response objects.

Every model inherits from :class:`SolapBaseModel` which provides:

* ``alias_generator=to_camel`` so the camelCase option objects used by
  the web dashboard (``propertyName``, ``geoIdField``) validate into
  snake_case fields, while keyword construction by field name still works.
* :meth:`SolapBaseModel.coerce`, which accepts either an instance or a
  plain mapping and turns pydantic validation failures into
  :class:`~pysolap.exceptions.InvalidRequestError`.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from pysolap.exceptions import InvalidRequestError

TModel = TypeVar("TModel", bound="SolapBaseModel")


class SolapBaseModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
        str_strip_whitespace=True,
    )

    @classmethod
    def coerce(cls: type[TModel], value: Any) -> TModel:
        """Return *value* as an instance of this model.

        Raises :class:`InvalidRequestError` if *value* does not validate.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls.model_validate(value)
        except ValidationError as exc:
            raise InvalidRequestError(f"invalid {cls.__name__}: {exc}") from exc
