"""
Descriptive statistics for one-dimensional samples.

Responsibilities
- Quantiles with an explicit estimator (interpolated R-7 by default, nearest-rank on request).
- Five-number summary, min/max, mean, variance/std with a named denominator.
- Standardized third and fourth moments (skewness, excess kurtosis).
- Approximate (binned) mode.

Policy
- Every function validates its input through daokpi.stats._sample.as_series; inputs are never
  mutated and results are plain floats or frozen models.
- Size requirements are explicit: n >= 1 for location statistics and quantiles, n >= 2 for
  sample variance and the moment coefficients.
- A constant sample has zero spread, so skewness and kurtosis return the sentinel 0.0 instead
  of dividing by zero.

Examples
--------
>>> from daokpi.stats.descriptive import quantile_summary
>>> qs = quantile_summary([10, 20, 30, 40, 50, 60, 70, 80, 90, 100])
>>> (qs.q1, qs.median, qs.q3, qs.iqr)
(32.5, 55.0, 77.5, 45.0)
"""

from __future__ import annotations

import math

import polars as pl

from daokpi.core.constants import DEFAULT_MODE_BINS
from daokpi.core.errors import InvalidParameterError
from daokpi.core.grammar import (
    QuantileMethod,
    VarianceMode,
    quantile_method_from_value,
    variance_mode_from_value,
)
from daokpi.core.schema import MomentSummary, QuantileSummary
from daokpi.core.typing import Sample

from ._sample import as_series, is_constant, require_size

__all__ = [
    "quantile",
    "quantile_summary",
    "iqr",
    "minimum",
    "maximum",
    "mean",
    "variance",
    "std",
    "skewness",
    "kurtosis",
    "moment_summary",
    "binned_mode",
]


def _check_q(q: float) -> float:
    try:
        qf = float(q)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"q must be a number in [0, 1] (got {q!r})") from exc
    if not 0.0 <= qf <= 1.0:
        raise InvalidParameterError(f"q must be in [0, 1] (got {q!r})")
    return qf


def _quantile_sorted(srt: pl.Series, q: float, method: QuantileMethod) -> float:
    n = srt.len()
    if method is QuantileMethod.NEAREST_RANK:
        return float(srt[min(math.floor(q * n), n - 1)])
    pos = (n - 1) * q
    base = math.floor(pos)
    frac = pos - base
    lo = float(srt[base])
    if base + 1 < n:
        return lo + frac * (float(srt[base + 1]) - lo)
    return lo


def quantile(
    sample: Sample,
    q: float,
    *,
    method: QuantileMethod | str = QuantileMethod.INTERPOLATED,
) -> float:
    """
    Quantile of a sample.

    Args:
        sample (Sample): Finite values (n >= 1).
        q (float): Probability in [0, 1].
        method (QuantileMethod | str): "interpolated" (R-7, default) or "nearest_rank".

    Returns:
        float: The q-quantile. quantile(s, 0) == min(s) and quantile(s, 1) == max(s).

    Raises:
        EmptyInputError: If the sample is empty.
        InvalidParameterError: If q is outside [0, 1].
        GrammarError: If method is not a known estimator.

    Examples:
        >>> quantile([1, 2, 3, 4], 0.5)
        2.5
        >>> quantile([1, 2, 3, 4], 0.5, method="nearest_rank")
        3.0
    """
    m = quantile_method_from_value(method)
    qf = _check_q(q)
    srt = as_series(sample).sort()
    return _quantile_sorted(srt, qf, m)


def quantile_summary(sample: Sample) -> QuantileSummary:
    """
    Interpolated five-number summary plus IQR.

    Raises:
        EmptyInputError: If the sample is empty. A single value yields a summary where every
            field equals that value and iqr == 0.
    """
    srt = as_series(sample).sort()
    m = QuantileMethod.INTERPOLATED
    q1 = _quantile_sorted(srt, 0.25, m)
    q3 = _quantile_sorted(srt, 0.75, m)
    return QuantileSummary(
        min=float(srt[0]),
        q1=q1,
        median=_quantile_sorted(srt, 0.5, m),
        q3=q3,
        max=float(srt[-1]),
        iqr=max(0.0, q3 - q1),
    )


def iqr(sample: Sample) -> float:
    """Interquartile range q3 - q1 (interpolated quartiles)."""
    return quantile_summary(sample).iqr


def minimum(sample: Sample) -> float:
    return float(as_series(sample).min())  # type: ignore[arg-type]


def maximum(sample: Sample) -> float:
    return float(as_series(sample).max())  # type: ignore[arg-type]


def mean(sample: Sample) -> float:
    """Arithmetic mean. Raises EmptyInputError on an empty sample."""
    return float(as_series(sample).mean())  # type: ignore[arg-type]


def _variance_of(s: pl.Series, mode: VarianceMode) -> float:
    if mode is VarianceMode.SAMPLE:
        require_size(s, 2, "sample variance")
        ddof = 1
    else:
        ddof = 0
    if is_constant(s):
        return 0.0
    return max(0.0, float(s.var(ddof=ddof)))  # type: ignore[arg-type]


def variance(sample: Sample, *, mode: VarianceMode | str = VarianceMode.SAMPLE) -> float:
    """
    Variance with an explicit denominator.

    Args:
        sample (Sample): Finite values.
        mode (VarianceMode | str): "sample" divides by n - 1 (requires n >= 2);
            "population" divides by n (n == 1 gives 0.0).

    Returns:
        float: Non-negative variance; exactly 0.0 for a constant sample.

    Raises:
        EmptyInputError: If the sample is empty.
        InsufficientDataError: If mode is "sample" and n < 2.
    """
    return _variance_of(as_series(sample), variance_mode_from_value(mode))


def std(sample: Sample, *, mode: VarianceMode | str = VarianceMode.SAMPLE) -> float:
    """Standard deviation, sqrt(variance(sample, mode=mode))."""
    return math.sqrt(variance(sample, mode=mode))


def _standardized_moment(s: pl.Series, power: int) -> float:
    require_size(s, 2, "moment coefficients")
    if is_constant(s):
        return 0.0
    sd = math.sqrt(_variance_of(s, VarianceMode.SAMPLE))
    if sd == 0.0:
        return 0.0
    z = (s - s.mean()) / sd
    return float((z**power).mean())  # type: ignore[arg-type]


def skewness(sample: Sample) -> float:
    """
    Moment coefficient of skewness, mean(((x - mean) / std) ** 3), using the unbiased std.

    Returns:
        float: Skewness; the sentinel 0.0 when the sample is constant.

    Raises:
        EmptyInputError: If the sample is empty.
        InsufficientDataError: If n < 2.
    """
    return _standardized_moment(as_series(sample), 3)


def kurtosis(sample: Sample) -> float:
    """
    Excess kurtosis, mean(((x - mean) / std) ** 4) - 3, using the unbiased std.

    Returns:
        float: Excess kurtosis; the sentinel 0.0 when the sample is constant.

    Raises:
        EmptyInputError: If the sample is empty.
        InsufficientDataError: If n < 2.
    """
    s = as_series(sample)
    require_size(s, 2, "moment coefficients")
    if is_constant(s):
        return 0.0
    return _standardized_moment(s, 4) - 3.0


def moment_summary(sample: Sample) -> MomentSummary:
    """Mean, sample variance/std, skewness and excess kurtosis (n >= 2)."""
    s = as_series(sample)
    require_size(s, 2, "moment summary")
    var = _variance_of(s, VarianceMode.SAMPLE)
    constant = is_constant(s)
    return MomentSummary(
        mean=float(s.mean()),  # type: ignore[arg-type]
        variance=var,
        std=math.sqrt(var),
        skewness=0.0 if constant else _standardized_moment(s, 3),
        kurtosis=0.0 if constant else _standardized_moment(s, 4) - 3.0,
    )


def binned_mode(sample: Sample, bins: int = DEFAULT_MODE_BINS) -> float:
    """
    Approximate mode: midpoint of the most populated bin of an equal-width partition.

    Args:
        sample (Sample): Finite values (n >= 1).
        bins (int): Number of equal-width bins over [min, max] (>= 1).

    Returns:
        float: Midpoint of the highest-count bin (ties resolve to the lowest bin);
        min when the sample is constant.

    Raises:
        EmptyInputError: If the sample is empty.
        InvalidParameterError: If bins < 1.

    Notes:
        The last bin includes max. The result is an approximation whose precision is the bin
        width, not the exact most frequent value.
    """
    if isinstance(bins, bool) or not isinstance(bins, int) or bins < 1:
        raise InvalidParameterError(f"bins must be an integer >= 1 (got {bins!r})")
    s = as_series(sample)
    lo = float(s.min())  # type: ignore[arg-type]
    hi = float(s.max())  # type: ignore[arg-type]
    if lo == hi:
        return lo
    width = (hi - lo) / bins
    idx = ((s - lo) / width).floor().cast(pl.Int64).clip(0, bins - 1)
    counts = [int((idx == i).sum()) for i in range(bins)]
    best = max(range(bins), key=lambda i: (counts[i], -i))
    return lo + (best + 0.5) * width
