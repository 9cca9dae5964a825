"""
Pearson correlation between paired samples.

Notes
- A series with zero variance has no defined correlation; pearson() returns exactly 0.0
  in that case rather than NaN.
- Results are clamped to [-1, 1] to absorb floating-point overshoot.
"""

from __future__ import annotations

import math
from collections.abc import Mapping

from daokpi.core.constants import MODERATE_CORRELATION_BELOW, WEAK_CORRELATION_BELOW
from daokpi.core.errors import InvalidParameterError
from daokpi.core.grammar import CorrelationStrength
from daokpi.core.schema import CorrelationResult
from daokpi.core.typing import Sample

from ._sample import as_series, check_finite, is_constant

__all__ = [
    "pearson",
    "correlation_strength",
    "correlate",
    "correlation_matrix",
]


def pearson(x: Sample, y: Sample) -> float:
    """
    Pearson product-moment correlation coefficient.

    Args:
        x (Sample): First series.
        y (Sample): Second series, same length as x.

    Returns:
        float: r in [-1, 1]; 0.0 when either series is constant.

    Raises:
        EmptyInputError: If either series is empty.
        InvalidParameterError: If the lengths differ.

    Examples:
        >>> pearson([1, 1, 1], [5, 5, 5])
        0.0
        >>> pearson([1, 2, 3], [2, 4, 6])
        1.0
    """
    xs = as_series(x, name="x")
    ys = as_series(y, name="y")
    if xs.len() != ys.len():
        raise InvalidParameterError(f"x and y must have equal length (got {xs.len()} and {ys.len()})")
    if is_constant(xs) or is_constant(ys):
        return 0.0
    dx = xs - xs.mean()
    dy = ys - ys.mean()
    num = float((dx * dy).sum())
    den = math.sqrt(float((dx * dx).sum()) * float((dy * dy).sum()))
    if den == 0.0:
        return 0.0
    return max(-1.0, min(1.0, num / den))


def correlation_strength(r: float) -> CorrelationStrength:
    """Label |r|: weak below 0.3, moderate below 0.7, strong otherwise."""
    a = abs(check_finite(r, "r"))
    if a < WEAK_CORRELATION_BELOW:
        return CorrelationStrength.WEAK
    if a < MODERATE_CORRELATION_BELOW:
        return CorrelationStrength.MODERATE
    return CorrelationStrength.STRONG


def correlate(x: Sample, y: Sample) -> CorrelationResult:
    r = pearson(x, y)
    return CorrelationResult(coefficient=r, strength=correlation_strength(r), n=len(x))


def correlation_matrix(columns: Mapping[str, Sample]) -> dict[str, dict[str, float]]:
    """
    Pairwise Pearson coefficients between named samples of equal length.

    Returns:
        dict[str, dict[str, float]]: matrix[a][b] == pearson(columns[a], columns[b]); the
        diagonal is 1.0 for non-constant columns and 0.0 for constant ones.
    """
    names = list(columns)
    out: dict[str, dict[str, float]] = {a: {} for a in names}
    for i, a in enumerate(names):
        for b in names[i:]:
            r = pearson(columns[a], columns[b])
            out[a][b] = r
            out[b][a] = r
    return out
