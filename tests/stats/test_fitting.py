import math

import pytest

from daokpi.core.errors import DegenerateDistributionError, InsufficientDataError, InvalidParameterError
from daokpi.core.grammar import DistributionKind
from daokpi.core.schema import FitMetrics
from daokpi.stats.density import trapezoid_area
from daokpi.stats.fitting import (
    best_fit,
    describe_shape,
    fit_metrics,
    fitted_curve,
    log_normal_pdf_curve,
    normal_pdf_curve,
    normality_index,
    uniform_pdf_curve,
)


def test_fit_metrics_favour_the_matching_family() -> None:
    assert best_fit(fit_metrics(0.0, 0.0)) is DistributionKind.NORMAL
    m = fit_metrics(1.0, 0.5)
    assert m.log_normal == pytest.approx(0.8)
    assert best_fit(m) is DistributionKind.LOG_NORMAL
    assert best_fit(fit_metrics(0.0, -1.2)) is DistributionKind.UNIFORM


def test_best_fit_ties_prefer_normal() -> None:
    assert best_fit(FitMetrics(normal=0.5, log_normal=0.5, uniform=0.5)) is DistributionKind.NORMAL
    assert best_fit(FitMetrics(normal=0.1, log_normal=0.5, uniform=0.5)) is DistributionKind.LOG_NORMAL


def test_normality_index() -> None:
    assert normality_index(0.0, 0.0) == 1.0
    assert normality_index(1.0, -2.0) == pytest.approx(1 / 3)
    with pytest.raises(InvalidParameterError):
        normality_index(math.nan, 0.0)


def test_describe_shape() -> None:
    text = describe_shape(1.2, 3.0, 0.4, "log_normal")
    assert text == (
        "positively skewed (right-tailed), leptokurtic (heavy-tailed), "
        "and deviates significantly from a log-normal distribution"
    )
    assert "moderately approximates a uniform" in describe_shape(-0.8, -1.0, 0.75, "uniform")
    assert "negatively skewed" in describe_shape(-0.8, -1.0, 0.75, "uniform")
    assert "platykurtic" in describe_shape(-0.8, -1.0, 0.75, "uniform")


def test_normal_curve_peaks_at_mean() -> None:
    c = normal_pdf_curve([1, 2, 3, 4, 5], num=5)
    assert c.xs == [1.0, 2.0, 3.0, 4.0, 5.0]
    d = c.densities
    assert d[2] == pytest.approx(1 / (math.sqrt(2.5) * math.sqrt(2 * math.pi)))
    assert d[0] == pytest.approx(d[4])
    assert c.bandwidth is None


def test_uniform_curve_is_flat_and_integrates_to_one() -> None:
    c = uniform_pdf_curve([2.0, 4.0, 6.0], num=9)
    assert set(c.densities) == {0.25}
    assert trapezoid_area(c) == pytest.approx(1.0)


def test_log_normal_curve() -> None:
    c = log_normal_pdf_curve([1.0, 2.0, 4.0, 8.0], num=20)
    assert len(c) == 20
    assert all(d > 0 for d in c.densities)
    zero = log_normal_pdf_curve([0.0, 10.0], num=3)
    assert zero.densities[0] == 0.0
    with pytest.raises(InvalidParameterError):
        log_normal_pdf_curve([-5.0, 1.0])


def test_fitted_curve_dispatch_and_degenerate_samples() -> None:
    assert fitted_curve([1, 2, 3], "uniform", 3).densities == [0.5, 0.5, 0.5]
    with pytest.raises(DegenerateDistributionError):
        fitted_curve([2.0, 2.0], DistributionKind.NORMAL)
    with pytest.raises(InsufficientDataError):
        normal_pdf_curve([1.0])
