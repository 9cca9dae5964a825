"""
Gaussian kernel density estimation.

density(x) = (1 / (n * h)) * sum_i exp(-(x - x_i)^2 / (2 h^2)) / sqrt(2 * pi)

Notes
- Evaluation is exact and O(n * m) for n sample values and m evaluation points; there is
  no tree or FFT acceleration, so very large samples evaluated on dense grids are slow.
- Points are evaluated in the order given and may be a regular grid or arbitrary values.
- The sample is vectorized once as a polars Series; each point is one vector pass.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from daokpi.core.constants import DEFAULT_FALLBACK_BANDWIDTH, DEFAULT_KDE_POINTS
from daokpi.core.errors import InvalidParameterError
from daokpi.core.grammar import BandwidthRule
from daokpi.core.schema import DensityCurve, DensityPoint, HistogramBin
from daokpi.core.typing import Sample

from ._sample import as_series, check_finite, finite_points
from .bandwidth import bandwidth as select_bandwidth

__all__ = [
    "gaussian_kde",
    "evaluation_grid",
    "kde_curve",
    "trapezoid_area",
    "scale_density",
    "histogram_overlay",
]

_SQRT_2PI = math.sqrt(2.0 * math.pi)


def evaluation_grid(start: float, stop: float, num: int = DEFAULT_KDE_POINTS) -> list[float]:
    """
    Evenly spaced grid of `num` points from start to stop (both included).

    Raises:
        InvalidParameterError: If num < 2, an endpoint is not finite or stop < start.
    """
    if isinstance(num, bool) or not isinstance(num, int) or num < 2:
        raise InvalidParameterError(f"num must be an integer >= 2 (got {num!r})")
    a = check_finite(start, "start")
    b = check_finite(stop, "stop")
    if b < a:
        raise InvalidParameterError(f"stop must be >= start (got {start!r}, {stop!r})")
    step = (b - a) / (num - 1)
    grid = [a + i * step for i in range(num)]
    grid[-1] = b
    return grid


def gaussian_kde(sample: Sample, points: Iterable[float], bandwidth: float) -> DensityCurve:
    """
    Evaluate a Gaussian KDE at the given points.

    Args:
        sample (Sample): Finite values (n >= 1).
        points (Iterable[float]): Evaluation points (grid or ad hoc), kept in order.
        bandwidth (float): Kernel bandwidth h > 0.

    Returns:
        DensityCurve: One DensityPoint per evaluation point, carrying `bandwidth`.

    Raises:
        EmptyInputError: If the sample is empty.
        InvalidParameterError: If bandwidth is not finite and positive, or a point is not finite.

    Examples:
        >>> c = gaussian_kde([0.0], [0.0], 1.0)
        >>> round(c.densities[0], 6)
        0.398942
    """
    h = check_finite(bandwidth, "bandwidth", positive=True)
    s = as_series(sample)
    xs = finite_points(points)
    norm = 1.0 / (s.len() * h * _SQRT_2PI)
    two_h2 = 2.0 * h * h
    out: list[DensityPoint] = []
    for x in xs:
        total = float((-((x - s) ** 2) / two_h2).exp().sum())
        out.append(DensityPoint(x=x, density=total * norm))
    return DensityCurve(points=tuple(out), bandwidth=h)


def kde_curve(
    sample: Sample,
    *,
    num: int = DEFAULT_KDE_POINTS,
    rule: BandwidthRule | str = BandwidthRule.SILVERMAN,
    fallback: float = DEFAULT_FALLBACK_BANDWIDTH,
    padding: float = 0.0,
) -> DensityCurve:
    """
    KDE on a regular grid with a rule-derived bandwidth.

    Args:
        sample (Sample): Finite values.
        num (int): Number of grid points (>= 2).
        rule (BandwidthRule | str): Bandwidth rule.
        fallback (float): Bandwidth used for degenerate samples.
        padding (float): Extend the grid by padding * h beyond [min, max] on each side (>= 0).

    Returns:
        DensityCurve: Densities over [min - padding*h, max + padding*h].

    Notes:
        A constant sample with padding 0 has an empty range, so the grid is widened to
        [min - h, max + h].
    """
    pad = check_finite(padding, "padding")
    if pad < 0.0:
        raise InvalidParameterError(f"padding must be >= 0 (got {padding!r})")
    s = as_series(sample)
    h = select_bandwidth(s, rule, fallback=fallback)
    lo = float(s.min()) - pad * h  # type: ignore[arg-type]
    hi = float(s.max()) + pad * h  # type: ignore[arg-type]
    if lo == hi:
        lo, hi = lo - h, hi + h
    return gaussian_kde(s, evaluation_grid(lo, hi, num), h)


def trapezoid_area(curve: DensityCurve) -> float:
    """
    Trapezoidal integral of a curve over its x values (assumed ascending).

    Returns 0.0 for curves with fewer than two points.
    """
    pts = curve.points
    area = 0.0
    for a, b in zip(pts, pts[1:]):
        area += (b.x - a.x) * (a.density + b.density) / 2.0
    return area


def scale_density(curve: DensityCurve, factor: float) -> DensityCurve:
    """Multiply every density by a positive factor (e.g., 100 * bin width for percent overlays)."""
    f = check_finite(factor, "factor", positive=True)
    return DensityCurve(
        points=tuple(DensityPoint(x=p.x, density=p.density * f) for p in curve.points),
        bandwidth=curve.bandwidth,
    )


def histogram_overlay(
    sample: Sample,
    bins: Sequence[HistogramBin],
    bandwidth: float,
) -> DensityCurve:
    """
    KDE evaluated at bin midpoints and scaled to the histogram's percent-per-bin units.

    Each density is multiplied by 100 * bin width, so the curve can be drawn on the same
    axis as HistogramBin.relative_frequency_percent.
    """
    if not bins:
        return DensityCurve(bandwidth=check_finite(bandwidth, "bandwidth", positive=True))
    curve = gaussian_kde(sample, [b.midpoint for b in bins], bandwidth)
    return DensityCurve(
        points=tuple(
            DensityPoint(x=p.x, density=p.density * 100.0 * b.width)
            for p, b in zip(curve.points, bins)
        ),
        bandwidth=curve.bandwidth,
    )
