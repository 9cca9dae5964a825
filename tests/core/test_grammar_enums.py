import pytest

from daokpi.core.errors import GrammarError, InvalidParameterError
from daokpi.core.grammar import (
    BandwidthRule,
    CorrelationStrength,
    DistributionKind,
    IntervalClosed,
    MetricName,
    QuantileMethod,
    SustainabilityLevel,
    VarianceMode,
    bandwidth_rule_from_value,
    distribution_kind_from_value,
    ensure_all_enum_values_lower_snake,
    interval_closed_from_value,
    metric_name_from_value,
    quantile_method_from_value,
    variance_mode_from_value,
)


def test_all_enum_values_are_lower_snake() -> None:
    ensure_all_enum_values_lower_snake(
        [
            QuantileMethod,
            VarianceMode,
            BandwidthRule,
            DistributionKind,
            IntervalClosed,
            CorrelationStrength,
            SustainabilityLevel,
            MetricName,
        ]
    )


def test_normalizers_accept_case_and_dashes() -> None:
    assert bandwidth_rule_from_value("Scott") is BandwidthRule.SCOTT
    assert quantile_method_from_value("Nearest-Rank") is QuantileMethod.NEAREST_RANK
    assert variance_mode_from_value("population") is VarianceMode.POPULATION
    assert distribution_kind_from_value("LOG_NORMAL") is DistributionKind.LOG_NORMAL
    assert interval_closed_from_value(" left ") is IntervalClosed.LEFT
    assert interval_closed_from_value("BOTH") is IntervalClosed.BOTH
    assert metric_name_from_value("largest-holder-percent") is MetricName.LARGEST_HOLDER_PERCENT


def test_normalizers_pass_enums_through() -> None:
    assert bandwidth_rule_from_value(BandwidthRule.ROBUST) is BandwidthRule.ROBUST


def test_unknown_value_raises_grammar_error() -> None:
    with pytest.raises(GrammarError):
        bandwidth_rule_from_value("gaussian")
    with pytest.raises(GrammarError):
        quantile_method_from_value("")


def test_grammar_error_is_an_invalid_parameter_error() -> None:
    with pytest.raises(InvalidParameterError):
        metric_name_from_value("not_a_metric")
