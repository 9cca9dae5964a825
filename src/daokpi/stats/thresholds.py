"""
Threshold categorization, natural-break classification and one-dimensional clustering.

Responsibilities
- Count sample values per category delimited by threshold cuts (categorize).
- Measure how evenly a categorization spreads the sample (entropy, imbalance) and compare
  two threshold sets (compare_thresholds).
- Derive data-driven cuts: Fisher–Jenks natural breaks, 1-D k-means, interpolated quantiles,
  and a weighted blend of these (blend_thresholds).
- Score a 1-D partition with standard cluster validity indices (cluster_quality).

Notes
- Categories are open-ended at both ends: with cuts c_0 < ... < c_{k-1} there are k + 1
  categories. `closed` decides which category a value equal to a cut falls into.
- jenks_breaks is O(classes * n^2) in time and O(classes * n) in memory; intended for the
  few hundred values a DAO dataset holds.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

import polars as pl

from daokpi.core.errors import InsufficientDataError, InvalidParameterError
from daokpi.core.grammar import IntervalClosed, QuantileMethod, interval_closed_from_value
from daokpi.core.schema import CategoryCount, ClusterQuality, ClusterResult, ThresholdComparison
from daokpi.core.typing import Sample

from ._sample import as_series, check_finite, is_constant
from .descriptive import _quantile_sorted

__all__ = [
    "BLEND_WEIGHTS",
    "categorize",
    "empirical_cuts",
    "category_entropy",
    "category_imbalance",
    "compare_thresholds",
    "jenks_breaks",
    "kmeans_1d",
    "cluster_quality",
    "blend_thresholds",
]

# Relative weight of each method in blend_thresholds.
BLEND_WEIGHTS: dict[str, float] = {
    "jenks": 0.4,
    "kmeans": 0.3,
    "quantile": 0.2,
    "std": 0.1,
}


def _check_cuts(cuts: Sequence[float]) -> list[float]:
    cs = [check_finite(c, "cut") for c in cuts]
    if not cs:
        raise InvalidParameterError("cuts must not be empty")
    if any(b <= a for a, b in zip(cs, cs[1:])):
        raise InvalidParameterError("cuts must be strictly increasing")
    return cs


def _default_labels(k: int) -> list[str]:
    return [f"category_{i}" for i in range(k)]


def categorize(
    sample: Sample,
    cuts: Sequence[float],
    labels: Sequence[str] | None = None,
    *,
    closed: IntervalClosed | str = IntervalClosed.RIGHT,
) -> list[CategoryCount]:
    """
    Count values per threshold-delimited category.

    Args:
        sample (Sample): Finite values (n >= 1).
        cuts (Sequence[float]): Strictly increasing cut points (>= 1).
        labels (Sequence[str] | None): One label per category (len(cuts) + 1); defaults to
            "category_0", "category_1", ...
        closed (IntervalClosed | str): "right" puts a value equal to a cut in the lower
            category, "left" in the upper one. "both" closes the middle categories at both
            ends; with a single cut it behaves like "right".

    Returns:
        list[CategoryCount]: Categories in ascending order; counts sum to n.

    Raises:
        EmptyInputError: If the sample is empty.
        InvalidParameterError: If cuts are empty or not increasing, or the label count is wrong.

    Examples:
        >>> [c.count for c in categorize([5, 10, 20, 40, 50], [10, 40], ["low", "medium", "high"])]
        [2, 2, 1]
    """
    cs = _check_cuts(cuts)
    k = len(cs) + 1
    names = list(labels) if labels is not None else _default_labels(k)
    if len(names) != k:
        raise InvalidParameterError(f"expected {k} labels for {len(cs)} cuts (got {len(names)})")
    mode = interval_closed_from_value(closed)
    side = "right" if mode is IntervalClosed.LEFT else "left"
    s = as_series(sample)
    idx = pl.Series("cuts", cs, dtype=pl.Float64).search_sorted(s, side=side)
    if mode is IntervalClosed.BOTH and k > 2:
        ones = pl.Series("idx", [1] * s.len(), dtype=idx.dtype)
        idx = idx.zip_with(s != cs[0], ones)
    n = s.len()
    out: list[CategoryCount] = []
    for i, name in enumerate(names):
        c = int((idx == i).sum())
        out.append(
            CategoryCount(
                label=name,
                lower=cs[i - 1] if i > 0 else None,
                upper=cs[i] if i < k - 1 else None,
                count=c,
                percent=100.0 * c / n,
            )
        )
    return out


def empirical_cuts(sample: Sample) -> tuple[float, float]:
    """Interpolated (q1, q3), the data-driven low/high cuts."""
    srt = as_series(sample).sort()
    m = QuantileMethod.INTERPOLATED
    return _quantile_sorted(srt, 0.25, m), _quantile_sorted(srt, 0.75, m)


def _check_counts(counts: Sequence[int]) -> tuple[list[int], int]:
    cs = [int(c) for c in counts]
    if not cs:
        raise InvalidParameterError("counts must not be empty")
    if any(c < 0 for c in cs):
        raise InvalidParameterError("counts must be >= 0")
    total = sum(cs)
    if total == 0:
        raise InvalidParameterError("counts must not all be zero")
    return cs, total


def category_entropy(counts: Sequence[int]) -> float:
    """Shannon entropy (natural log) of the category proportions; ln(k) for an even split."""
    cs, total = _check_counts(counts)
    h = 0.0
    for c in cs:
        if c:
            p = c / total
            h -= p * math.log(p)
    return h


def category_imbalance(counts: Sequence[int]) -> float:
    """
    RMS deviation of counts from a perfectly even split, divided by the even count.

    0.0 for an even split; larger is more lopsided.
    """
    cs, total = _check_counts(counts)
    k = len(cs)
    even = total / k
    return math.sqrt(sum((c - even) ** 2 for c in cs) / k) / even


def _pct_change(new: float, old: float) -> float:
    return 0.0 if old == 0.0 else (new - old) / old * 100.0


def compare_thresholds(
    sample: Sample,
    current: Sequence[float],
    proposed: Sequence[float],
    labels: Sequence[str] | None = None,
    *,
    closed: IntervalClosed | str = IntervalClosed.RIGHT,
) -> ThresholdComparison:
    """
    Compare how evenly two threshold sets split the same sample.

    Returns:
        ThresholdComparison: entropy_improvement is the percent entropy gain of `proposed`,
        balance_improvement the percent imbalance reduction, and overall_improvement
        0.6 * balance + 0.4 * entropy. A zero baseline yields 0.0 instead of dividing by zero.

    Raises:
        InvalidParameterError: If the two cut sets differ in length.
    """
    if len(current) != len(proposed):
        raise InvalidParameterError("current and proposed cuts must have the same length")
    cur = categorize(sample, current, labels, closed=closed)
    new = categorize(sample, proposed, labels, closed=closed)
    cur_counts = [c.count for c in cur]
    new_counts = [c.count for c in new]
    entropy = _pct_change(category_entropy(new_counts), category_entropy(cur_counts))
    cur_imb = category_imbalance(cur_counts)
    new_imb = category_imbalance(new_counts)
    balance = 0.0 if cur_imb == 0.0 else (cur_imb - new_imb) / cur_imb * 100.0
    return ThresholdComparison(
        current=tuple(cur),
        proposed=tuple(new),
        entropy_improvement=entropy,
        balance_improvement=balance,
        overall_improvement=0.6 * balance + 0.4 * entropy,
    )


def _check_classes(classes: int, what: str = "classes") -> int:
    if isinstance(classes, bool) or not isinstance(classes, int) or classes < 1:
        raise InvalidParameterError(f"{what} must be an integer >= 1 (got {classes!r})")
    return classes


def jenks_breaks(sample: Sample, classes: int) -> tuple[float, ...]:
    """
    Fisher–Jenks natural breaks.

    Finds the partition of the sorted sample into `classes` contiguous groups that minimizes
    the total within-group squared deviation.

    Args:
        sample (Sample): Finite values.
        classes (int): Number of groups (>= 1).

    Returns:
        tuple[float, ...]: classes + 1 values: the sample minimum followed by the upper bound
        (largest member) of each group.

    Raises:
        InvalidParameterError: If classes < 1.
        InsufficientDataError: If the sample has fewer distinct values than classes.

    Examples:
        >>> jenks_breaks([1, 2, 3, 10, 11, 12], 2)
        (1.0, 3.0, 12.0)
    """
    k = _check_classes(classes)
    s = as_series(sample)
    if s.n_unique() < k:
        raise InsufficientDataError(f"need at least {k} distinct values (got {s.n_unique()})")
    data = s.sort().to_list()
    n = len(data)

    # lower[l][j]: 1-based index where class j starts in the best split of data[:l].
    lower = [[0] * (k + 1) for _ in range(n + 1)]
    cost = [[math.inf] * (k + 1) for _ in range(n + 1)]
    for j in range(1, k + 1):
        lower[1][j] = 1
        cost[1][j] = 0.0

    for ell in range(2, n + 1):
        s1 = s2 = 0.0
        w = 0
        v = 0.0
        for m in range(1, ell + 1):
            i3 = ell - m + 1
            val = data[i3 - 1]
            s1 += val
            s2 += val * val
            w += 1
            v = s2 - (s1 * s1) / w
            i4 = i3 - 1
            if i4 != 0:
                for j in range(2, k + 1):
                    if cost[ell][j] >= v + cost[i4][j - 1]:
                        lower[ell][j] = i3
                        cost[ell][j] = v + cost[i4][j - 1]
        lower[ell][1] = 1
        cost[ell][1] = v

    breaks = [0.0] * (k + 1)
    breaks[0] = data[0]
    breaks[k] = data[-1]
    pos = n
    for j in range(k, 1, -1):
        start = lower[pos][j]
        breaks[j - 1] = data[start - 2]
        pos = start - 1
    return tuple(breaks)


def kmeans_1d(sample: Sample, k: int, max_iter: int = 100) -> ClusterResult:
    """
    Lloyd's k-means on a line.

    Centroids start evenly spaced on [min, max]; each iteration assigns every value to the
    nearest centroid (ties go to the lower index) and moves each non-empty cluster's centroid
    to its mean. Stops when assignments no longer change or after max_iter iterations.

    Returns:
        ClusterResult: Centroids sorted ascending with assignments re-indexed to match.

    Raises:
        EmptyInputError: If the sample is empty.
        InvalidParameterError: If k < 1 or max_iter < 1.
    """
    _check_classes(k, "k")
    _check_classes(max_iter, "max_iter")
    values = as_series(sample).to_list()
    lo, hi = min(values), max(values)
    if k == 1:
        centroids = [sum(values) / len(values)]
    else:
        centroids = [lo + (hi - lo) * i / (k - 1) for i in range(k)]

    assignments: list[int] = []
    iterations = 0
    for _ in range(max_iter):
        iterations += 1
        new = [min(range(k), key=lambda c: (abs(x - centroids[c]), c)) for x in values]
        for c in range(k):
            members = [x for x, a in zip(values, new) if a == c]
            if members:
                centroids[c] = sum(members) / len(members)
        if new == assignments:
            break
        assignments = new

    order = sorted(range(k), key=lambda c: centroids[c])
    remap = {old: pos for pos, old in enumerate(order)}
    return ClusterResult(
        centroids=tuple(centroids[c] for c in order),
        assignments=tuple(remap[a] for a in assignments),
        iterations=iterations,
    )


def cluster_quality(
    sample: Sample,
    centroids: Sequence[float],
    assignments: Sequence[int],
) -> ClusterQuality:
    """
    Validity indices for a 1-D partition.

    - wcss: sum of squared distances to the assigned centroid.
    - bcss: sum over clusters of size * (centroid - mean)^2.
    - silhouette: mean over points in clusters of size > 1 of (b - a) / max(a, b).
    - davies_bouldin: mean over non-empty clusters of the worst (d_i + d_j) / |c_i - c_j|.
    - calinski_harabasz: (bcss / (k - 1)) / (wcss / (n - k)).

    Undefined indices (single cluster, n <= k, zero wcss) are 0.0.

    Raises:
        InvalidParameterError: If assignments and sample differ in length or an assignment
            does not index a centroid.
    """
    values = as_series(sample).to_list()
    cents = [check_finite(c, "centroid") for c in centroids]
    assign = [int(a) for a in assignments]
    k = len(cents)
    n = len(values)
    if len(assign) != n:
        raise InvalidParameterError(f"expected {n} assignments (got {len(assign)})")
    if any(a < 0 or a >= k for a in assign):
        raise InvalidParameterError(f"assignments must index centroids in [0, {k})")

    members: list[list[float]] = [[] for _ in range(k)]
    for x, a in zip(values, assign):
        members[a].append(x)
    grand = sum(values) / n

    wcss = sum((x - cents[a]) ** 2 for x, a in zip(values, assign))
    bcss = sum(len(members[c]) * (cents[c] - grand) ** 2 for c in range(k))

    occupied = [c for c in range(k) if members[c]]
    spread = {c: math.sqrt(sum((x - cents[c]) ** 2 for x in members[c]) / len(members[c])) for c in occupied}
    db_total = 0.0
    for i in occupied:
        worst = 0.0
        for j in occupied:
            dist = abs(cents[i] - cents[j])
            if i != j and dist > 0.0:
                worst = max(worst, (spread[i] + spread[j]) / dist)
        db_total += worst
    davies = db_total / len(occupied) if len(occupied) > 1 else 0.0

    sil_total = 0.0
    sil_n = 0
    for x, a in zip(values, assign):
        own = members[a]
        if len(own) <= 1:
            continue
        a_dist = sum(abs(x - y) for y in own) / (len(own) - 1)
        b_dist = min(
            (sum(abs(x - y) for y in members[c]) / len(members[c]) for c in occupied if c != a),
            default=None,
        )
        if b_dist is None:
            continue
        denom = max(a_dist, b_dist)
        sil_total += (b_dist - a_dist) / denom if denom > 0.0 else 0.0
        sil_n += 1
    silhouette = max(-1.0, min(1.0, sil_total / sil_n)) if sil_n else 0.0

    if k > 1 and n > k and wcss > 0.0:
        ch = (bcss / (k - 1)) / (wcss / (n - k))
    else:
        ch = 0.0

    return ClusterQuality(
        wcss=wcss,
        bcss=bcss,
        silhouette=silhouette,
        davies_bouldin=davies,
        calinski_harabasz=ch,
    )


def _std_cuts(s: pl.Series, count: int) -> list[float]:
    mu = float(s.mean())  # type: ignore[arg-type]
    sd = 0.0 if is_constant(s) else float(s.std(ddof=1))  # type: ignore[arg-type]
    if count == 1:
        return [mu]
    return [mu + sd * (-1.0 + 2.0 * i / (count - 1)) for i in range(count)]


def blend_thresholds(
    sample: Sample,
    classes: int = 4,
    weights: Mapping[str, float] | None = None,
) -> tuple[float, ...]:
    """
    Weighted blend of four cut-finding methods.

    Each method proposes classes - 1 ascending cuts:
    - jenks: the inner Jenks breaks.
    - kmeans: midpoints between consecutive k-means centroids.
    - quantile: interpolated quantiles at i / classes.
    - std: mean + z * std with z evenly spaced on [-1, 1] (just the mean for one cut).

    Args:
        sample (Sample): Finite values with at least `classes` distinct values.
        classes (int): Number of categories (>= 2).
        weights (Mapping[str, float] | None): Non-negative weights keyed by method name;
            defaults to BLEND_WEIGHTS. Normalized to sum to 1.

    Returns:
        tuple[float, ...]: classes - 1 cuts in ascending order.

    Raises:
        InvalidParameterError: If classes < 2, or weights have unknown keys, negative values or
            a zero sum.
        InsufficientDataError: If the sample has fewer distinct values than classes.
    """
    k = _check_classes(classes)
    if k < 2:
        raise InvalidParameterError(f"classes must be >= 2 (got {classes!r})")
    w = dict(BLEND_WEIGHTS if weights is None else weights)
    unknown = set(w) - set(BLEND_WEIGHTS)
    if unknown:
        raise InvalidParameterError(f"unknown blend methods: {sorted(unknown)}")
    if any(check_finite(v, "weight") < 0.0 for v in w.values()):
        raise InvalidParameterError("weights must be >= 0")
    total = sum(w.values())
    if total <= 0.0:
        raise InvalidParameterError("weights must not sum to zero")

    s = as_series(sample)
    srt = s.sort()
    count = k - 1
    centroids = kmeans_1d(s, k).centroids
    proposals = {
        "jenks": list(jenks_breaks(s, k)[1:-1]),
        "kmeans": [(a + b) / 2.0 for a, b in zip(centroids, centroids[1:])],
        "quantile": [
            _quantile_sorted(srt, i / k, QuantileMethod.INTERPOLATED) for i in range(1, k)
        ],
        "std": _std_cuts(s, count),
    }
    blended = [
        sum(w.get(name, 0.0) * proposals[name][i] for name in proposals) / total
        for i in range(count)
    ]
    return tuple(sorted(blended))
