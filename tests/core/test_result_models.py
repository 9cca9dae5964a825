import math

import pytest
from pydantic import ValidationError

from daokpi.core.grammar import BandwidthRule, DistributionKind
from daokpi.core.schema import (
    ClusterResult,
    DensityCurve,
    DensityPoint,
    DescriptiveSummary,
    FitMetrics,
    HistogramBin,
    MomentSummary,
    QuantileSummary,
)


def test_quantile_summary_requires_non_decreasing_order() -> None:
    QuantileSummary(min=1, q1=2, median=3, q3=4, max=5, iqr=2)
    with pytest.raises(ValidationError):
        QuantileSummary(min=1, q1=3, median=2, q3=4, max=5, iqr=1)


def test_histogram_bin_edges_and_percent_bounds() -> None:
    b = HistogramBin(lower_bound=0, upper_bound=10, count=1, relative_frequency_percent=20.0)
    assert b.midpoint == 5.0
    assert b.width == 10.0
    with pytest.raises(ValidationError):
        HistogramBin(lower_bound=10, upper_bound=10, count=0, relative_frequency_percent=0.0)
    with pytest.raises(ValidationError):
        HistogramBin(lower_bound=0, upper_bound=1, count=1, relative_frequency_percent=120.0)


def test_models_reject_nan_and_infinity() -> None:
    with pytest.raises(ValidationError):
        DensityPoint(x=math.nan, density=0.1)
    with pytest.raises(ValidationError):
        MomentSummary(mean=math.inf, variance=1, std=1, skewness=0, kurtosis=0)


def test_models_are_frozen_and_forbid_extra_fields() -> None:
    p = DensityPoint(x=0.0, density=0.1)
    with pytest.raises(ValidationError):
        p.x = 1.0  # type: ignore[misc]
    with pytest.raises(ValidationError):
        DensityPoint(x=0.0, density=0.1, label="peak")  # type: ignore[call-arg]


def test_density_curve_accessors() -> None:
    c = DensityCurve(
        points=(DensityPoint(x=0.0, density=0.4), DensityPoint(x=1.0, density=0.2)),
        bandwidth=1.0,
    )
    assert c.xs == [0.0, 1.0]
    assert c.densities == [0.4, 0.2]
    assert len(c) == 2
    with pytest.raises(ValidationError):
        DensityCurve(bandwidth=0.0)


def test_cluster_result_assignments_must_index_centroids() -> None:
    ClusterResult(centroids=(1.0, 2.0), assignments=(0, 1, 1), iterations=1)
    with pytest.raises(ValidationError):
        ClusterResult(centroids=(1.0,), assignments=(0, 1), iterations=1)


def test_descriptive_summary_normalizes_enum_strings() -> None:
    d = DescriptiveSummary(
        n=2,
        quantiles=QuantileSummary(min=1, q1=1.25, median=1.5, q3=1.75, max=2, iqr=0.5),
        moments=MomentSummary(mean=1.5, variance=0.5, std=math.sqrt(0.5), skewness=0, kurtosis=0),
        mode=1.5,
        bandwidth=0.65,
        bandwidth_rule="Robust",
        normality_index=1.0,
        fit_metrics=FitMetrics(normal=1.0, log_normal=0.5, uniform=0.0),
        best_fit="normal",
        shape="approximately symmetric",
    )
    assert d.bandwidth_rule is BandwidthRule.ROBUST
    assert d.best_fit is DistributionKind.NORMAL
