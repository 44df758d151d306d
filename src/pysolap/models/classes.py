"""Classification results."""

from __future__ import annotations

from pydantic import field_validator

from pysolap.models._base import SolapBaseModel


class ClassBreakResult(SolapBaseModel):
    """Lowest value and inclusive upper limits for each class."""

    min_val: float
    breaks: list[float]

    @field_validator("breaks")
    @classmethod
    def _non_decreasing(cls, value: list[float]) -> list[float]:
        if any(b < a for a, b in zip(value, value[1:])):
            raise ValueError("breaks must be non-decreasing")
        return value

    @property
    def class_count(self) -> int:
        return len(self.breaks)
