import pytest

from daokpi.core.errors import GrammarError
from daokpi.core.grammar import MetricName
from daokpi.core.metrics import METRICS, get_metric, list_metrics


def test_every_metric_name_has_a_descriptor() -> None:
    assert set(METRICS) == set(MetricName)
    for name, desc in METRICS.items():
        assert desc.name is name
        assert desc.column == name.value
        assert desc.path[-1] == name.value
        assert desc.dtype in {"f64", "str"}


def test_percent_metrics_are_bounded() -> None:
    d = get_metric("participation_rate")
    assert d.path == ("network_participation", "participation_rate")
    assert (d.lower, d.upper) == (0.0, 100.0)
    assert d.in_range(0.0) and d.in_range(100.0)
    assert not d.in_range(100.5)
    assert not d.in_range(-1.0)


def test_amounts_are_unbounded_above() -> None:
    d = get_metric(MetricName.TREASURY_VALUE_USD)
    assert d.upper is None
    assert d.in_range(1e12)


def test_list_metrics_filters_by_dtype() -> None:
    assert [d.column for d in list_metrics("str")] == ["on_chain_automation"]
    assert len(list_metrics("f64")) == len(METRICS) - 1


def test_unknown_metric_raises() -> None:
    with pytest.raises(GrammarError):
        get_metric("market_cap")
