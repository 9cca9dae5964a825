"""
Pydantic v2 models for the immutable results returned by daokpi.stats and daokpi.dao.

Responsibilities
- Define the canonical result snapshots: quantile and moment summaries, histogram bins,
  density curves, correlation and two-sample comparison results, distribution-fit
  heuristics, threshold categories, clustering output and sustainability scores.
- Normalize enum-like strings to lower_snake via grammar helpers.
- Enforce value ranges and ordering (e.g., min <= q1 <= median <= q3 <= max).

Style
- Zero-IO (stdlib + pydantic only).
- Every model is frozen and rejects unknown fields and NaN/Infinity, so a result that
  validates is a real statistic and never an indeterminate placeholder.
- JSON round-trips through `model_dump_json` / `model_validate_json` (see daokpi.core.serde).

References
- grammar: src/daokpi/core/grammar.py (enums, normalization helpers)
- errors: src/daokpi/core/errors.py (SchemaError, GrammarError)
- tests: tests/core/*
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import SchemaError
from .grammar import (
    BandwidthRule,
    CorrelationStrength,
    DistributionKind,
    SustainabilityLevel,
    bandwidth_rule_from_value,
    distribution_kind_from_value,
)

__all__ = [
    # Summaries
    "QuantileSummary",
    "MomentSummary",
    "FitMetrics",
    "DescriptiveSummary",
    # Derived series
    "HistogramBin",
    "DensityPoint",
    "DensityCurve",
    # Relationships
    "CorrelationResult",
    "EcdfComparison",
    # Thresholds / clustering
    "CategoryCount",
    "ThresholdComparison",
    "ClusterResult",
    "ClusterQuality",
    # DAO scoring
    "SustainabilityScore",
]

_FROZEN = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

# ============================================================================
# Summaries
# ============================================================================


class QuantileSummary(BaseModel):
    """
    Five-number summary plus IQR, computed with the interpolated (R-7) estimator.

    Attributes:
        min (float): Smallest value (quantile 0).
        q1 (float): First quartile (quantile 0.25).
        median (float): Quantile 0.5.
        q3 (float): Third quartile (quantile 0.75).
        max (float): Largest value (quantile 1).
        iqr (float): q3 - q1.

    Raises:
        pydantic.ValidationError: If the quantiles are not non-decreasing or iqr < 0.

    Examples:
        >>> from daokpi.core.schema import QuantileSummary
        >>> QuantileSummary(min=10, q1=32.5, median=55, q3=77.5, max=100, iqr=45).iqr
        45.0
    """

    model_config = _FROZEN

    min: float
    q1: float
    median: float
    q3: float
    max: float
    iqr: float = Field(..., ge=0.0)

    @model_validator(mode="after")
    def _check_order(self) -> QuantileSummary:
        ordered = [self.min, self.q1, self.median, self.q3, self.max]
        if any(a > b for a, b in zip(ordered, ordered[1:])):
            raise SchemaError(f"quantiles must be non-decreasing (got {ordered})")
        return self


class MomentSummary(BaseModel):
    """
    Moment-based summary of a sample.

    Attributes:
        mean (float): Arithmetic mean.
        variance (float): Unbiased (n - 1) variance unless computed in population mode.
        std (float): sqrt(variance).
        skewness (float): Fisher moment coefficient; 0.0 for a constant sample.
        kurtosis (float): Excess kurtosis (fourth standardized moment minus 3); 0.0 for a
            constant sample.
    """

    model_config = _FROZEN

    mean: float
    variance: float = Field(..., ge=0.0)
    std: float = Field(..., ge=0.0)
    skewness: float
    kurtosis: float


class FitMetrics(BaseModel):
    """
    Heuristic goodness-of-fit scores derived from skewness and excess kurtosis.

    Notes:
        Higher is better. These are descriptive heuristics, not likelihood-based fits;
        see daokpi.stats.fitting.fit_metrics for the formulas.
    """

    model_config = _FROZEN

    normal: float
    log_normal: float
    uniform: float

    def as_dict(self) -> dict[DistributionKind, float]:
        return {
            DistributionKind.NORMAL: self.normal,
            DistributionKind.LOG_NORMAL: self.log_normal,
            DistributionKind.UNIFORM: self.uniform,
        }


class DescriptiveSummary(BaseModel):
    """
    Everything a distribution chart needs about one metric, computed in one call.

    Attributes:
        n (int): Sample size (>= 2).
        quantiles (QuantileSummary): Interpolated five-number summary.
        moments (MomentSummary): Mean/variance/std/skewness/kurtosis.
        mode (float): Approximate (binned) mode.
        bandwidth (float): KDE bandwidth under `bandwidth_rule`.
        bandwidth_rule (BandwidthRule): Rule used for `bandwidth`.
        normality_index (float): 1 / (1 + |skewness| + |kurtosis| / 2), in (0, 1].
        fit_metrics (FitMetrics): Heuristic fit scores.
        best_fit (DistributionKind): Family with the highest fit score.
        shape (str): Plain-language description of the distribution shape.
    """

    model_config = _FROZEN

    n: int = Field(..., ge=2)
    quantiles: QuantileSummary
    moments: MomentSummary
    mode: float
    bandwidth: float = Field(..., gt=0.0)
    bandwidth_rule: BandwidthRule
    normality_index: float = Field(..., gt=0.0, le=1.0)
    fit_metrics: FitMetrics
    best_fit: DistributionKind
    shape: str

    @field_validator("bandwidth_rule", mode="before")
    @classmethod
    def _normalize_rule(cls, v: Any) -> Any:
        return bandwidth_rule_from_value(v)

    @field_validator("best_fit", mode="before")
    @classmethod
    def _normalize_best_fit(cls, v: Any) -> Any:
        return distribution_kind_from_value(v)


# ============================================================================
# Derived series
# ============================================================================


class HistogramBin(BaseModel):
    """
    One bin of a histogram partition.

    Attributes:
        lower_bound (float): Inclusive lower edge.
        upper_bound (float): Exclusive upper edge (inclusive for the final bin).
        count (int): Number of sample values in the bin.
        relative_frequency_percent (float): 100 * count / n.

    Raises:
        pydantic.ValidationError: If lower_bound >= upper_bound or the percentage is
            outside [0, 100].
    """

    model_config = _FROZEN

    lower_bound: float
    upper_bound: float
    count: int = Field(..., ge=0)
    relative_frequency_percent: float = Field(..., ge=0.0, le=100.0)

    @model_validator(mode="after")
    def _check_edges(self) -> HistogramBin:
        if not self.lower_bound < self.upper_bound:
            raise SchemaError(
                f"lower_bound must be < upper_bound (got {self.lower_bound}, {self.upper_bound})"
            )
        return self

    @property
    def midpoint(self) -> float:
        return (self.lower_bound + self.upper_bound) / 2.0

    @property
    def width(self) -> float:
        return self.upper_bound - self.lower_bound


class DensityPoint(BaseModel):
    """A single (x, density) evaluation of a density estimate."""

    model_config = _FROZEN

    x: float
    density: float = Field(..., ge=0.0)


class DensityCurve(BaseModel):
    """
    Ordered density evaluations.

    Attributes:
        points (tuple[DensityPoint, ...]): Evaluations in the order requested.
        bandwidth (float | None): Kernel bandwidth for KDE curves; None for fitted
            parametric curves.

    Examples:
        >>> from daokpi.core.schema import DensityCurve, DensityPoint
        >>> c = DensityCurve(points=(DensityPoint(x=0.0, density=0.4),), bandwidth=1.0)
        >>> c.xs, c.densities
        ([0.0], [0.4])
    """

    model_config = _FROZEN

    points: tuple[DensityPoint, ...] = ()
    bandwidth: float | None = Field(default=None, gt=0.0)

    @property
    def xs(self) -> list[float]:
        return [p.x for p in self.points]

    @property
    def densities(self) -> list[float]:
        return [p.density for p in self.points]

    def __len__(self) -> int:
        return len(self.points)


# ============================================================================
# Relationships
# ============================================================================


class CorrelationResult(BaseModel):
    """
    Pearson correlation with its interpretation label.

    Attributes:
        coefficient (float): r in [-1, 1]; exactly 0.0 when either series is constant.
        strength (CorrelationStrength): weak (|r| < 0.3), moderate (< 0.7) or strong.
        n (int): Number of pairs.
    """

    model_config = _FROZEN

    coefficient: float = Field(..., ge=-1.0, le=1.0)
    strength: CorrelationStrength
    n: int = Field(..., ge=1)


class EcdfComparison(BaseModel):
    """
    Two-sample empirical CDF comparison (KS-like statistic).

    Attributes:
        statistic (float): max |F_a(x) - F_b(x)| over the union of unique values.
        critical_value (float): coefficient * sqrt((n_a + n_b) / (n_a * n_b)).
        significant (bool): statistic > critical_value.
        mean_a (float): Mean of sample A.
        mean_b (float): Mean of sample B.
        mean_difference (float): mean_a - mean_b.
        n_a (int): Size of sample A.
        n_b (int): Size of sample B.

    Notes:
        Descriptive "is there a visible difference" reporting only; not an exact KS test.
    """

    model_config = _FROZEN

    statistic: float = Field(..., ge=0.0, le=1.0)
    critical_value: float = Field(..., gt=0.0)
    significant: bool
    mean_a: float
    mean_b: float
    mean_difference: float
    n_a: int = Field(..., ge=1)
    n_b: int = Field(..., ge=1)


# ============================================================================
# Thresholds / clustering
# ============================================================================


class CategoryCount(BaseModel):
    """
    Count of sample values falling into one threshold-delimited category.

    Attributes:
        label (str): Category label (e.g., "low").
        lower (float | None): Lower cut (None for the open-ended first category).
        upper (float | None): Upper cut (None for the open-ended last category).
        count (int): Values in the category.
        percent (float): 100 * count / n.
    """

    model_config = _FROZEN

    label: str
    lower: float | None = None
    upper: float | None = None
    count: int = Field(..., ge=0)
    percent: float = Field(..., ge=0.0, le=100.0)


class ThresholdComparison(BaseModel):
    """
    Category distributions under two threshold sets and the improvement of `proposed`.

    Attributes:
        current (tuple[CategoryCount, ...]): Categories under the current cuts.
        proposed (tuple[CategoryCount, ...]): Categories under the proposed cuts.
        entropy_improvement (float): Percent change in Shannon entropy (higher = more even).
        balance_improvement (float): Percent reduction in imbalance.
        overall_improvement (float): 0.6 * balance + 0.4 * entropy.
    """

    model_config = _FROZEN

    current: tuple[CategoryCount, ...]
    proposed: tuple[CategoryCount, ...]
    entropy_improvement: float
    balance_improvement: float
    overall_improvement: float


class ClusterResult(BaseModel):
    """
    One-dimensional k-means output.

    Attributes:
        centroids (tuple[float, ...]): Cluster centres in ascending order.
        assignments (tuple[int, ...]): Cluster index per input value (input order).
        iterations (int): Lloyd iterations performed.
    """

    model_config = _FROZEN

    centroids: tuple[float, ...]
    assignments: tuple[int, ...]
    iterations: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _check_assignments(self) -> ClusterResult:
        k = len(self.centroids)
        if any(a < 0 or a >= k for a in self.assignments):
            raise SchemaError(f"assignments must index centroids in [0, {k})")
        return self


class ClusterQuality(BaseModel):
    """
    Cluster validity indices for a one-dimensional partition.

    Attributes:
        wcss (float): Within-cluster sum of squares.
        bcss (float): Between-cluster sum of squares.
        silhouette (float): Mean silhouette over points in clusters of size > 1.
        davies_bouldin (float): Davies–Bouldin index (lower is better).
        calinski_harabasz (float): Variance ratio criterion (higher is better).

    Notes:
        Indices that are undefined for the given partition are reported as 0.0.
    """

    model_config = _FROZEN

    wcss: float = Field(..., ge=0.0)
    bcss: float = Field(..., ge=0.0)
    silhouette: float = Field(..., ge=-1.0, le=1.0)
    davies_bouldin: float = Field(..., ge=0.0)
    calinski_harabasz: float = Field(..., ge=0.0)


# ============================================================================
# DAO scoring
# ============================================================================


class SustainabilityScore(BaseModel):
    """
    Per-DAO KPI scores and the derived sustainability level.

    Attributes:
        dao_name (str): DAO display name.
        participation (float): Network participation score (1 | 2 | 3).
        funds (float): Accumulated funds score (0.75 | 1.5 | 2.25 | 3).
        voting (float): Voting efficiency score (1 | 2 | 3).
        decentralization (float): Decentralization score (0.6 | 1.2 | 1.8 | 2.4 | 3).
        total (float): Sum of the four scores.
        level (SustainabilityLevel): high (>= 9), medium (>= 6) or low.
    """

    model_config = _FROZEN

    dao_name: str
    participation: float = Field(..., gt=0.0, le=3.0)
    funds: float = Field(..., gt=0.0, le=3.0)
    voting: float = Field(..., gt=0.0, le=3.0)
    decentralization: float = Field(..., gt=0.0, le=3.0)
    total: float = Field(..., gt=0.0, le=12.0)
    level: SustainabilityLevel
