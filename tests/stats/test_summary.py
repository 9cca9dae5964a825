import pytest

from daokpi.core.errors import InsufficientDataError
from daokpi.core.grammar import BandwidthRule, DistributionKind
from daokpi.core.schema import DescriptiveSummary
from daokpi.core.serde import model_from_json, model_to_json
from daokpi.stats import bandwidth, describe

TENS = [10, 20, 30, 40, 50, 60, 70, 80, 90, 100]


def test_describe_bundles_the_chart_statistics() -> None:
    d = describe(TENS)
    assert d.n == 10
    assert d.quantiles.median == pytest.approx(55.0)
    assert d.moments.mean == pytest.approx(55.0)
    assert d.moments.std == pytest.approx(30.277, abs=1e-3)
    assert d.moments.skewness == pytest.approx(0.0, abs=1e-12)
    assert d.bandwidth_rule is BandwidthRule.ROBUST
    assert d.bandwidth == pytest.approx(bandwidth(TENS, "robust"))
    # every bin holds one value, so the lowest bin wins
    assert d.mode == pytest.approx(12.25)


def test_evenly_spread_sample_reads_as_uniform() -> None:
    d = describe(TENS)
    assert d.moments.kurtosis < -1.2
    assert d.best_fit is DistributionKind.UNIFORM
    assert d.shape.startswith("approximately symmetric, platykurtic")
    assert 0.0 < d.normality_index < 1.0


def test_describe_options() -> None:
    d = describe(TENS, rule="scott", mode_bins=3)
    assert d.bandwidth_rule is BandwidthRule.SCOTT
    assert d.mode == pytest.approx(85.0)


def test_constant_sample_uses_fallback_bandwidth() -> None:
    d = describe([2.0, 2.0, 2.0], fallback_bandwidth=0.5)
    assert d.bandwidth == 0.5
    assert d.moments.std == 0.0
    assert d.normality_index == 1.0
    assert d.mode == 2.0


def test_describe_requires_two_values() -> None:
    with pytest.raises(InsufficientDataError):
        describe([1.0])


def test_summary_survives_json() -> None:
    d = describe([1.5, 2.25, 3.125, 10.0, 0.1, 7.7])
    assert model_from_json(DescriptiveSummary, model_to_json(d)) == d
