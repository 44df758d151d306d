"""Client configuration for pysolap."""

from __future__ import annotations

import dataclasses
import os
from typing import TYPE_CHECKING, Any

from pysolap._constants import DEFAULT_GEO_ID_FIELD, DEFAULT_SERVICE_URL, DEFAULT_WORKSPACE
from pysolap.exceptions import SolapConfigError

if TYPE_CHECKING:
    from pysolap.models.requests import GroupOptions


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class SolapConfig:
    """Client configuration.

    Parameters
    ----------
    service_url : str
        WFS endpoint that accepts ``GetFeature`` POST requests.
    workspace : str
        GeoServer workspace, used as the feature prefix.
    geo_id_field : str
        Attribute carrying the GeoId of each feature (the join key).
    request_timeout : float
        Total timeout in seconds for a single feature request.
    srs_name : str or None
        Optional ``srsName`` sent with the request.
    api_trace_enabled : bool
        Log redacted request/response bodies at DEBUG level.
    """

    service_url: str = DEFAULT_SERVICE_URL
    workspace: str = DEFAULT_WORKSPACE
    geo_id_field: str = DEFAULT_GEO_ID_FIELD
    request_timeout: float = 30.0
    srs_name: str | None = None
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        if not self.service_url:
            raise SolapConfigError("service_url must be non-empty")
        if self.request_timeout <= 0:
            raise SolapConfigError(f"request_timeout must be positive, got {self.request_timeout}")

    def group(self, layer: str, **overrides: Any) -> GroupOptions:
        """Build :class:`GroupOptions` for *layer* using this config's defaults."""
        from pysolap.models.requests import GroupOptions

        values: dict[str, Any] = {
            "service_url": self.service_url,
            "workspace": self.workspace,
            "layer": layer,
            "geo_id_field": self.geo_id_field,
        }
        values.update(overrides)
        return GroupOptions.coerce(values)

    @classmethod
    def from_env(cls, **overrides: Any) -> SolapConfig:
        """Create configuration from ``SOLAP_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "SOLAP_SERVICE_URL": "service_url",
            "SOLAP_WORKSPACE": "workspace",
            "SOLAP_GEO_ID_FIELD": "geo_id_field",
            "SOLAP_SRS_NAME": "srs_name",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        timeout_env = env.get("SOLAP_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise SolapConfigError(f"SOLAP_REQUEST_TIMEOUT is not a number: {timeout_env!r}") from exc

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(
                env.get("SOLAP_API_TRACE_ENABLED"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
