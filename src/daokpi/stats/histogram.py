"""
Histogram binning.

Responsibilities
- Partition a sample into bins given explicit edges (possibly non-uniform), a uniform
  width, or a Freedman–Diaconis width derived from the data.
- Report counts and relative frequency percentages per bin.

Binning rules
- Every bin is [lower, upper) except the final bin, which is [lower, upper].
- Percentages are 100 * count / n where n is the full sample size, so with explicit edges
  that do not cover the sample the out-of-range values are dropped from the counts but still
  weigh in the denominator.
- Zero IQR (heavy ties) makes the Freedman–Diaconis width zero; the histogram then uses a
  single bin [min, max], widened symmetrically when min == max.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import polars as pl

from daokpi.core.constants import DEGENERATE_BIN_HALF_WIDTH, FREEDMAN_DIACONIS_FACTOR
from daokpi.core.errors import DegenerateDistributionError, InvalidParameterError
from daokpi.core.grammar import QuantileMethod
from daokpi.core.schema import HistogramBin
from daokpi.core.typing import Sample

from ._sample import as_series, check_finite
from .descriptive import _quantile_sorted

__all__ = [
    "DECENTRALIZATION_EDGES",
    "MAX_BINS",
    "freedman_diaconis_width",
    "uniform_edges",
    "histogram",
]

# Largest-holder percentage buckets used by the decentralization chart.
DECENTRALIZATION_EDGES: tuple[float, ...] = (
    0.0, 10.0, 20.0, 30.0, 33.0, 40.0, 50.0, 60.0, 66.0, 75.0, 85.0, 100.0,
)  # fmt: skip

MAX_BINS: int = 10_000


def freedman_diaconis_width(sample: Sample) -> float:
    """
    Freedman–Diaconis bin width 2 * IQR * n^(-1/3).

    Raises:
        EmptyInputError: If the sample is empty.
        DegenerateDistributionError: If the IQR is zero (the width would be zero).
    """
    s = as_series(sample)
    srt = s.sort()
    m = QuantileMethod.INTERPOLATED
    spread = _quantile_sorted(srt, 0.75, m) - _quantile_sorted(srt, 0.25, m)
    if spread <= 0.0:
        raise DegenerateDistributionError("IQR is zero; Freedman–Diaconis width is undefined")
    return FREEDMAN_DIACONIS_FACTOR * spread * s.len() ** (-1.0 / 3.0)


def uniform_edges(lo: float, hi: float, width: float) -> list[float]:
    """
    Edges lo, lo + w, lo + 2w, ... covering [lo, hi]; the last edge is at least hi.

    Raises:
        InvalidParameterError: If width <= 0, hi < lo, the partition would exceed MAX_BINS,
            or consecutive edges collapse to the same float.
    """
    a = check_finite(lo, "lo")
    b = check_finite(hi, "hi")
    w = check_finite(width, "width", positive=True)
    if b < a:
        raise InvalidParameterError(f"hi must be >= lo (got {lo!r}, {hi!r})")
    k = max(1, math.ceil((b - a) / w))
    if k > MAX_BINS:
        raise InvalidParameterError(f"width {w!r} yields {k} bins (max {MAX_BINS})")
    edges = [a + i * w for i in range(k + 1)]
    edges[-1] = max(edges[-1], b)
    if any(q <= p for p, q in zip(edges, edges[1:])):
        raise InvalidParameterError(f"width {w!r} is below the float resolution near {a!r}")
    return edges


def _check_edges(edges: Sequence[float]) -> list[float]:
    es = [check_finite(e, "edge") for e in edges]
    if len(es) < 2:
        raise InvalidParameterError(f"edges must have at least 2 entries (got {len(es)})")
    if any(b <= a for a, b in zip(es, es[1:])):
        raise InvalidParameterError("edges must be strictly increasing")
    return es


def _degenerate_edges(lo: float, hi: float) -> list[float]:
    if lo < hi:
        return [lo, hi]
    eps = DEGENERATE_BIN_HALF_WIDTH * max(1.0, abs(lo))
    return [lo - eps, lo + eps]


def _count(s: pl.Series, edges: list[float]) -> list[int]:
    last = len(edges) - 2
    counts: list[int] = []
    for i, (a, b) in enumerate(zip(edges, edges[1:])):
        upper = s <= b if i == last else s < b
        counts.append(int(((s >= a) & upper).sum()))
    return counts


def histogram(
    sample: Sample,
    *,
    edges: Sequence[float] | None = None,
    width: float | None = None,
) -> list[HistogramBin]:
    """
    Bin a sample.

    Args:
        sample (Sample): Finite values (n >= 1).
        edges (Sequence[float] | None): Strictly increasing bin edges (>= 2 entries).
        width (float | None): Uniform bin width over [min, max]. When neither edges nor width
            is given the Freedman–Diaconis width is used.

    Returns:
        list[HistogramBin]: Bins in ascending order.

    Raises:
        EmptyInputError: If the sample is empty.
        InvalidParameterError: If both edges and width are given, width <= 0, or edges are not
            strictly increasing.

    Examples:
        >>> bins = histogram([5, 15, 25, 35, 45], edges=[0, 10, 20, 30, 40, 50])
        >>> [(b.count, b.relative_frequency_percent) for b in bins][:2]
        [(1, 20.0), (1, 20.0)]
    """
    if edges is not None and width is not None:
        raise InvalidParameterError("pass either edges or width, not both")
    if edges is not None:
        es = _check_edges(edges)
        s = as_series(sample)
    else:
        s = as_series(sample)
        lo = float(s.min())  # type: ignore[arg-type]
        hi = float(s.max())  # type: ignore[arg-type]
        if width is None:
            try:
                w = freedman_diaconis_width(s)
            except DegenerateDistributionError:
                w = None
        else:
            w = check_finite(width, "width", positive=True)
        es = _degenerate_edges(lo, hi) if w is None or lo == hi else uniform_edges(lo, hi, w)

    n = s.len()
    return [
        HistogramBin(
            lower_bound=a,
            upper_bound=b,
            count=c,
            relative_frequency_percent=100.0 * c / n,
        )
        for (a, b), c in zip(zip(es, es[1:]), _count(s, es))
    ]
