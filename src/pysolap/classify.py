"""Quantile class breaks for univariate and bivariate symbolization.

Breaks are inclusive upper limits: a value belongs to the smallest class
whose break is greater than or equal to it. The last break is always the
maximum observed value.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from pysolap._constants import (
    BIVARIATE_CLASS_COUNT,
    MAX_CLASS_COUNT,
    MIN_CLASS_COUNT,
    SUPPORTED_CLASS_METHODS,
)
from pysolap.exceptions import InsufficientDataError, UnsupportedClassificationError
from pysolap.models.classes import ClassBreakResult

_logger = logging.getLogger(__name__)


def validate_classification(class_count: int, method: str) -> None:
    """Raise :class:`UnsupportedClassificationError` for unsupported settings."""
    if method not in SUPPORTED_CLASS_METHODS:
        raise UnsupportedClassificationError(f"only quantile breaks are supported, got {method!r}")
    if isinstance(class_count, bool) or not isinstance(class_count, int):
        raise UnsupportedClassificationError(f"class_count must be an integer, got {class_count!r}")
    if not MIN_CLASS_COUNT <= class_count <= MAX_CLASS_COUNT:
        raise UnsupportedClassificationError(
            f"only {MIN_CLASS_COUNT}-{MAX_CLASS_COUNT} classes are supported, got {class_count}"
        )


def quantile_breaks(values: Sequence[float], class_count: int) -> ClassBreakResult:
    if len(values) == 0:
        raise InsufficientDataError("cannot compute class breaks from an empty sequence")
    data = np.asarray(values, dtype=float)
    qs = np.linspace(0, 1, class_count + 1)[1:]
    breaks = np.quantile(data, qs)
    # Interpolation can wobble by an ulp between equal neighbours.
    breaks = np.maximum.accumulate(breaks)
    return ClassBreakResult(min_val=float(data.min()), breaks=[float(b) for b in breaks])


def class_breaks(
    class_count: int,
    method: str,
    values1: Sequence[float],
    values2: Sequence[float] | None = None,
) -> list[ClassBreakResult]:
    """Compute class breaks for one variable, or for a pair of variables.

    Bivariate symbolization always uses three classes per variable (a 3x3
    matrix), whatever *class_count* is.
    """
    validate_classification(class_count, method)

    if values2 is None:
        return [quantile_breaks(values1, class_count)]

    if len(values2) == 0:
        raise InsufficientDataError("cannot compute bivariate class breaks without second values")
    if class_count != BIVARIATE_CLASS_COUNT:
        _logger.debug("Bivariate breaks ignore class_count=%d; using %d", class_count, BIVARIATE_CLASS_COUNT)
    return [
        quantile_breaks(values1, BIVARIATE_CLASS_COUNT),
        quantile_breaks(values2, BIVARIATE_CLASS_COUNT),
    ]


def classify_value(value: float, result: ClassBreakResult) -> int:
    """Return the zero-based class index for *value*.

    Values above the last break fall into the last class.
    """
    for index, upper in enumerate(result.breaks):
        if value <= upper:
            return index
    return len(result.breaks) - 1


def bivariate_class(value1: float, value2: float, results: Sequence[ClassBreakResult]) -> tuple[int, int]:
    """Return the (row, column) cell of a bivariate matrix."""
    if len(results) != 2:
        raise ValueError(f"bivariate classification needs two results, got {len(results)}")
    return classify_value(value1, results[0]), classify_value(value2, results[1])
