"""
Two-sample comparison through empirical CDFs.

ks_two_sample() reports the largest vertical gap between two empirical CDFs and compares it
with the large-sample alpha = 0.05 critical value c * sqrt((n_a + n_b) / (n_a * n_b)),
c = 1.36. It is a descriptive "is there a visible difference" signal; p-values and small
sample corrections are not computed.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

import polars as pl

from daokpi.core.constants import KS_ALPHA_05_COEFFICIENT
from daokpi.core.schema import EcdfComparison
from daokpi.core.typing import Sample

from ._sample import as_series, check_finite, finite_points

__all__ = ["ecdf", "ks_two_sample"]


def _ecdf_series(srt: pl.Series, points: pl.Series) -> pl.Series:
    return srt.search_sorted(points, side="right").cast(pl.Float64) / srt.len()


def ecdf(sample: Sample, points: Iterable[float]) -> list[float]:
    """
    Empirical CDF, the fraction of sample values <= x, at each point.

    Examples:
        >>> ecdf([1, 2, 2, 4], [0, 2, 3, 4])
        [0.0, 0.75, 0.75, 1.0]
    """
    srt = as_series(sample).sort()
    pts = pl.Series("points", finite_points(points), dtype=pl.Float64)
    if pts.len() == 0:
        return []
    return _ecdf_series(srt, pts).to_list()


def ks_two_sample(
    a: Sample,
    b: Sample,
    *,
    coefficient: float = KS_ALPHA_05_COEFFICIENT,
) -> EcdfComparison:
    """
    Largest absolute ECDF difference between two samples.

    Args:
        a (Sample): First sample (n_a >= 1).
        b (Sample): Second sample (n_b >= 1).
        coefficient (float): Critical-value coefficient (1.36 for alpha = 0.05).

    Returns:
        EcdfComparison: statistic, critical value, significance flag and both means.

    Raises:
        EmptyInputError: If either sample is empty.
        InvalidParameterError: If coefficient is not finite and positive.
    """
    c = check_finite(coefficient, "coefficient", positive=True)
    sa = as_series(a, name="a")
    sb = as_series(b, name="b")
    grid = pl.concat([sa.alias("x"), sb.alias("x")]).unique().sort()
    fa = _ecdf_series(sa.sort(), grid)
    fb = _ecdf_series(sb.sort(), grid)
    statistic = min(1.0, float((fa - fb).abs().max()))  # type: ignore[arg-type]
    n_a, n_b = sa.len(), sb.len()
    critical = c * math.sqrt((n_a + n_b) / (n_a * n_b))
    mean_a = float(sa.mean())  # type: ignore[arg-type]
    mean_b = float(sb.mean())  # type: ignore[arg-type]
    return EcdfComparison(
        statistic=statistic,
        critical_value=critical,
        significant=statistic > critical,
        mean_a=mean_a,
        mean_b=mean_b,
        mean_difference=mean_a - mean_b,
        n_a=n_a,
        n_b=n_b,
    )
