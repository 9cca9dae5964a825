"""
Moment-matched reference distributions and shape heuristics.

Responsibilities
- Evaluate normal, log-normal and uniform densities whose parameters are matched to a
  sample's moments/range, on a grid over [min, max].
- Score how well each family matches from skewness and excess kurtosis alone
  (fit_metrics), pick the best family, and turn the numbers into a short description.

Notes
- The fit scores are heuristics for labelling charts, not likelihood fits or tests.
- Log-normal parameters: sigma^2 = ln(1 + (std / mean)^2), mu = ln(mean) - sigma^2 / 2,
  which requires mean > 0. The density is 0 for x <= 0.
"""

from __future__ import annotations

import math

from daokpi.core.constants import DEFAULT_KDE_POINTS, SHAPE_CUTOFF
from daokpi.core.errors import DegenerateDistributionError, InvalidParameterError
from daokpi.core.grammar import DistributionKind, distribution_kind_from_value
from daokpi.core.schema import DensityCurve, DensityPoint, FitMetrics
from daokpi.core.typing import Sample

from ._sample import as_series, check_finite, is_constant, require_size
from .density import evaluation_grid

__all__ = [
    "normal_pdf_curve",
    "log_normal_pdf_curve",
    "uniform_pdf_curve",
    "fitted_curve",
    "fit_metrics",
    "best_fit",
    "normality_index",
    "describe_shape",
]

_SQRT_2PI = math.sqrt(2.0 * math.pi)


def _range_and_moments(sample: Sample, what: str) -> tuple[float, float, float, float]:
    s = as_series(sample)
    require_size(s, 2, what)
    if is_constant(s):
        raise DegenerateDistributionError(f"{what} is undefined for a constant sample")
    return (
        float(s.min()),  # type: ignore[arg-type]
        float(s.max()),  # type: ignore[arg-type]
        float(s.mean()),  # type: ignore[arg-type]
        float(s.std(ddof=1)),  # type: ignore[arg-type]
    )


def normal_pdf_curve(sample: Sample, num: int = DEFAULT_KDE_POINTS) -> DensityCurve:
    """
    Normal density with the sample mean and std, evaluated on [min, max].

    Raises:
        InsufficientDataError: If n < 2.
        DegenerateDistributionError: If the sample is constant.
    """
    lo, hi, mu, sd = _range_and_moments(sample, "normal fit")
    pts = []
    for x in evaluation_grid(lo, hi, num):
        z = (x - mu) / sd
        pts.append(DensityPoint(x=x, density=math.exp(-0.5 * z * z) / (sd * _SQRT_2PI)))
    return DensityCurve(points=tuple(pts))


def log_normal_pdf_curve(sample: Sample, num: int = DEFAULT_KDE_POINTS) -> DensityCurve:
    """
    Log-normal density moment-matched to the sample, evaluated on [min, max].

    Raises:
        InsufficientDataError: If n < 2.
        DegenerateDistributionError: If the sample is constant.
        InvalidParameterError: If the sample mean is not positive.
    """
    lo, hi, mu, sd = _range_and_moments(sample, "log-normal fit")
    if mu <= 0.0:
        raise InvalidParameterError(f"log-normal fit requires a positive mean (got {mu})")
    sigma2 = math.log(1.0 + (sd / mu) ** 2)
    sigma = math.sqrt(sigma2)
    mu_log = math.log(mu) - sigma2 / 2.0
    pts = []
    for x in evaluation_grid(lo, hi, num):
        if x <= 0.0:
            d = 0.0
        else:
            z = (math.log(x) - mu_log) / sigma
            d = math.exp(-0.5 * z * z) / (x * sigma * _SQRT_2PI)
        pts.append(DensityPoint(x=x, density=d))
    return DensityCurve(points=tuple(pts))


def uniform_pdf_curve(sample: Sample, num: int = DEFAULT_KDE_POINTS) -> DensityCurve:
    """Uniform density 1 / (max - min) on [min, max]."""
    lo, hi, _, _ = _range_and_moments(sample, "uniform fit")
    d = 1.0 / (hi - lo)
    return DensityCurve(
        points=tuple(DensityPoint(x=x, density=d) for x in evaluation_grid(lo, hi, num))
    )


_CURVES = {
    DistributionKind.NORMAL: normal_pdf_curve,
    DistributionKind.LOG_NORMAL: log_normal_pdf_curve,
    DistributionKind.UNIFORM: uniform_pdf_curve,
}


def fitted_curve(
    sample: Sample,
    kind: DistributionKind | str,
    num: int = DEFAULT_KDE_POINTS,
) -> DensityCurve:
    """Dispatch to the pdf curve of a named family."""
    return _CURVES[distribution_kind_from_value(kind)](sample, num)


def fit_metrics(skewness: float, kurtosis: float) -> FitMetrics:
    """
    Heuristic fit scores from skewness and excess kurtosis (higher is better).

    - normal     = 1 - min(1, |s| + |k| / 2)
    - log_normal = 1 - min(1, |s - 0.6| / 2) if s > 0.5, else 0.5 - s
    - uniform    = 1 - min(1, |s| + |k + 1.2|)

    Examples:
        >>> fit_metrics(0.0, 0.0).normal
        1.0
    """
    s = check_finite(skewness, "skewness")
    k = check_finite(kurtosis, "kurtosis")
    log_normal = 1.0 - min(1.0, abs(s - 0.6) / 2.0) if s > 0.5 else 0.5 - s
    return FitMetrics(
        normal=1.0 - min(1.0, abs(s) + abs(k) / 2.0),
        log_normal=log_normal,
        uniform=1.0 - min(1.0, abs(s) + abs(k + 1.2)),
    )


def best_fit(metrics: FitMetrics) -> DistributionKind:
    """Family with the highest score; ties prefer normal, then log_normal, then uniform."""
    scores = metrics.as_dict()
    return max(scores, key=lambda kind: scores[kind])


def normality_index(skewness: float, kurtosis: float) -> float:
    """1 / (1 + |s| + |k| / 2), in (0, 1]; 1 for a perfectly normal shape."""
    s = check_finite(skewness, "skewness")
    k = check_finite(kurtosis, "kurtosis")
    return 1.0 / (1.0 + abs(s) + abs(k) / 2.0)


_FAMILY_NAMES = {
    DistributionKind.NORMAL: "normal",
    DistributionKind.LOG_NORMAL: "log-normal",
    DistributionKind.UNIFORM: "uniform",
}


def describe_shape(
    skewness: float,
    kurtosis: float,
    index: float,
    fit: DistributionKind | str,
) -> str:
    """
    One-sentence description of a distribution's shape.

    Examples:
        >>> describe_shape(0.1, 0.2, 0.95, "normal")
        'approximately symmetric, mesokurtic (normal tails), and closely follows a normal distribution'
    """
    if abs(skewness) < SHAPE_CUTOFF:
        shape = "approximately symmetric"
    elif skewness > 0:
        shape = "positively skewed (right-tailed)"
    else:
        shape = "negatively skewed (left-tailed)"

    if abs(kurtosis) < SHAPE_CUTOFF:
        tails = "mesokurtic (normal tails)"
    elif kurtosis > 0:
        tails = "leptokurtic (heavy-tailed)"
    else:
        tails = "platykurtic (light-tailed)"

    if index >= 0.9:
        closeness = "closely follows a"
    elif index >= 0.7:
        closeness = "moderately approximates a"
    else:
        closeness = "deviates significantly from a"

    family = _FAMILY_NAMES[distribution_kind_from_value(fit)]
    return f"{shape}, {tails}, and {closeness} {family} distribution"
