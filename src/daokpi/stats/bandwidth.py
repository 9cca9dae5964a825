"""
Kernel bandwidth selection rules.

All rules share the form h = coefficient * scale * n ** (-1/5):

- silverman: coefficient 1.06, scale = std
- scott:     coefficient 1.059, scale = std
- robust:    coefficient 1.06, scale = min(std, IQR / 1.34)

The two std-based rules are kept as distinct named strategies even though their
coefficients are close, so figures computed with either one stay reproducible.

Degenerate samples (n <= 1 or zero spread) return the caller-supplied fallback, so a
bandwidth is always a finite positive number.
"""

from __future__ import annotations

import math

import polars as pl

from daokpi.core.constants import (
    BANDWIDTH_EXPONENT,
    DEFAULT_FALLBACK_BANDWIDTH,
    IQR_NORMAL_SCALE,
    ROBUST_COEFFICIENT,
    SCOTT_COEFFICIENT,
    SILVERMAN_COEFFICIENT,
)
from daokpi.core.grammar import BandwidthRule, QuantileMethod, bandwidth_rule_from_value
from daokpi.core.typing import Sample

from ._sample import as_series, check_finite, is_constant
from .descriptive import _quantile_sorted

__all__ = [
    "silverman_bandwidth",
    "scott_bandwidth",
    "robust_bandwidth",
    "bandwidth",
]

_COEFFICIENTS: dict[BandwidthRule, float] = {
    BandwidthRule.SILVERMAN: SILVERMAN_COEFFICIENT,
    BandwidthRule.SCOTT: SCOTT_COEFFICIENT,
    BandwidthRule.ROBUST: ROBUST_COEFFICIENT,
}


def _scale(s: pl.Series, rule: BandwidthRule) -> float:
    sd = float(s.std(ddof=1))  # type: ignore[arg-type]
    if rule is not BandwidthRule.ROBUST:
        return sd
    srt = s.sort()
    spread = _quantile_sorted(srt, 0.75, QuantileMethod.INTERPOLATED) - _quantile_sorted(
        srt, 0.25, QuantileMethod.INTERPOLATED
    )
    # IQR == 0 with std > 0 (heavy ties): fall back to std.
    if spread <= 0.0:
        return sd
    return min(sd, spread / IQR_NORMAL_SCALE)


def bandwidth(
    sample: Sample,
    rule: BandwidthRule | str = BandwidthRule.SILVERMAN,
    *,
    fallback: float = DEFAULT_FALLBACK_BANDWIDTH,
) -> float:
    """
    Bandwidth for a Gaussian KDE under a named rule.

    Args:
        sample (Sample): Finite values (n >= 1).
        rule (BandwidthRule | str): "silverman" (default), "scott" or "robust".
        fallback (float): Returned when n <= 1 or the sample is constant; must be finite and > 0.

    Returns:
        float: A finite bandwidth > 0.

    Raises:
        EmptyInputError: If the sample is empty.
        InvalidParameterError: If fallback is not finite and positive.
        GrammarError: If rule is not a known bandwidth rule.

    Examples:
        >>> bandwidth([5.0])
        1.0
        >>> round(bandwidth([1, 2, 3, 4, 5], "silverman"), 4)
        1.2147
    """
    r = bandwidth_rule_from_value(rule)
    fb = check_finite(fallback, "fallback", positive=True)
    s = as_series(sample)
    n = s.len()
    if n <= 1 or is_constant(s):
        return fb
    h = _COEFFICIENTS[r] * _scale(s, r) * n**BANDWIDTH_EXPONENT
    if not math.isfinite(h) or h <= 0.0:
        return fb
    return h


def silverman_bandwidth(sample: Sample, *, fallback: float = DEFAULT_FALLBACK_BANDWIDTH) -> float:
    """Silverman's rule of thumb: 1.06 * std * n^(-1/5)."""
    return bandwidth(sample, BandwidthRule.SILVERMAN, fallback=fallback)


def scott_bandwidth(sample: Sample, *, fallback: float = DEFAULT_FALLBACK_BANDWIDTH) -> float:
    """Scott's rule: 1.059 * std * n^(-1/5)."""
    return bandwidth(sample, BandwidthRule.SCOTT, fallback=fallback)


def robust_bandwidth(sample: Sample, *, fallback: float = DEFAULT_FALLBACK_BANDWIDTH) -> float:
    """Robust rule: 1.06 * min(std, IQR / 1.34) * n^(-1/5); uses std alone when IQR is 0."""
    return bandwidth(sample, BandwidthRule.ROBUST, fallback=fallback)
