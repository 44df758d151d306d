"""Custom exception hierarchy for pysolap."""

from __future__ import annotations


class SolapError(Exception):
    """Base exception for all pysolap errors."""


class SolapConfigError(SolapError):
    """Invalid or missing configuration."""


class InvalidRequestError(SolapError):
    """Malformed group options, field options, or enumeration level."""


class TransportError(SolapError):
    """Feature service failure (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class ClassificationError(SolapError):
    """Class breaks could not be computed."""


class UnsupportedClassificationError(ClassificationError):
    """Unknown classification method or class count outside 3-9."""


class InsufficientDataError(ClassificationError):
    """No values available to compute class breaks from."""
