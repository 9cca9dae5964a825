import math

import pytest

from daokpi.core.errors import EmptyInputError, InvalidParameterError
from daokpi.stats.density import (
    evaluation_grid,
    gaussian_kde,
    histogram_overlay,
    kde_curve,
    scale_density,
    trapezoid_area,
)
from daokpi.stats.histogram import histogram

TENS = [10, 20, 30, 40, 50, 60, 70, 80, 90, 100]


def test_single_point_kernel_peak() -> None:
    c = gaussian_kde([0.0], [0.0], 1.0)
    assert c.densities[0] == pytest.approx(1.0 / math.sqrt(2.0 * math.pi))
    assert c.bandwidth == 1.0


def test_kde_integrates_to_one_on_a_wide_grid() -> None:
    curve = kde_curve(TENS, num=2000, padding=5.0)
    assert trapezoid_area(curve) == pytest.approx(1.0, abs=0.05)


def test_densities_are_non_negative_and_symmetric() -> None:
    c = gaussian_kde([-1.0, 1.0], [-2.0, -0.5, 0.5, 2.0], 0.8)
    d = c.densities
    assert all(v >= 0 for v in d)
    assert d[0] == pytest.approx(d[3])
    assert d[1] == pytest.approx(d[2])


def test_ad_hoc_points_keep_their_order() -> None:
    c = gaussian_kde(TENS, [70.0, 10.0, 40.0], 5.0)
    assert c.xs == [70.0, 10.0, 40.0]


def test_invalid_bandwidth_and_sample() -> None:
    with pytest.raises(InvalidParameterError):
        gaussian_kde([1, 2], [0.0], 0.0)
    with pytest.raises(InvalidParameterError):
        gaussian_kde([1, 2], [0.0], -1.0)
    with pytest.raises(InvalidParameterError):
        gaussian_kde([1, 2], [0.0], math.inf)
    with pytest.raises(EmptyInputError):
        gaussian_kde([], [0.0], 1.0)


def test_evaluation_grid() -> None:
    assert evaluation_grid(0.0, 1.0, 5) == [0.0, 0.25, 0.5, 0.75, 1.0]
    with pytest.raises(InvalidParameterError):
        evaluation_grid(0.0, 1.0, 1)
    with pytest.raises(InvalidParameterError):
        evaluation_grid(1.0, 0.0, 5)


def test_kde_curve_spans_sample_range() -> None:
    c = kde_curve(TENS, num=50)
    assert len(c) == 50
    assert c.xs[0] == 10.0
    assert c.xs[-1] == 100.0


def test_kde_curve_of_constant_sample_uses_fallback_width() -> None:
    c = kde_curve([3.0, 3.0, 3.0], num=11)
    assert c.bandwidth == 1.0
    assert c.xs[0] == pytest.approx(2.0)
    assert c.xs[-1] == pytest.approx(4.0)
    assert max(c.densities) == pytest.approx(1.0 / math.sqrt(2.0 * math.pi))


def test_scale_density() -> None:
    c = gaussian_kde([0.0], [0.0, 1.0], 1.0)
    scaled = scale_density(c, 100.0)
    assert scaled.densities == pytest.approx([100.0 * d for d in c.densities])
    with pytest.raises(InvalidParameterError):
        scale_density(c, 0.0)


def test_histogram_overlay_matches_percent_units() -> None:
    bins = histogram(TENS, edges=[0, 50, 100])
    overlay = histogram_overlay(TENS, bins, 10.0)
    raw = gaussian_kde(TENS, [25.0, 75.0], 10.0)
    assert overlay.xs == [25.0, 75.0]
    assert overlay.densities == pytest.approx([d * 100.0 * 50.0 for d in raw.densities])
