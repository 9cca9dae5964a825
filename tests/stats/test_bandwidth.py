import math

import pytest

from daokpi.core.errors import EmptyInputError, GrammarError, InvalidParameterError
from daokpi.stats.bandwidth import bandwidth, robust_bandwidth, scott_bandwidth, silverman_bandwidth
from daokpi.stats.descriptive import std

TENS = [10, 20, 30, 40, 50, 60, 70, 80, 90, 100]


def test_silverman_and_scott_are_distinct_rules() -> None:
    expected = 1.06 * std(TENS) * 10 ** (-0.2)
    assert silverman_bandwidth(TENS) == pytest.approx(expected)
    assert scott_bandwidth(TENS) == pytest.approx(1.059 * std(TENS) * 10 ** (-0.2))
    assert silverman_bandwidth(TENS) != scott_bandwidth(TENS)


def test_robust_uses_iqr_when_smaller() -> None:
    data = [1, 2, 3, 4, 100]
    # q1 = 2, q3 = 4 -> IQR / 1.34 is far below std
    assert robust_bandwidth(data) == pytest.approx(1.06 * (2 / 1.34) * 5 ** (-0.2))


def test_robust_falls_back_to_std_when_iqr_is_zero() -> None:
    data = [1, 1, 1, 1, 1, 1, 10]
    assert robust_bandwidth(data) == pytest.approx(silverman_bandwidth(data))
    assert robust_bandwidth(data) > 0


def test_degenerate_samples_return_fallback() -> None:
    assert bandwidth([5.0]) == 1.0
    assert bandwidth([3.0, 3.0, 3.0], "robust") == 1.0
    assert bandwidth([3.0, 3.0], fallback=0.25) == 0.25


def test_bandwidth_is_always_finite_and_positive() -> None:
    for data in ([0.0, 1e-12], [1e9, 2e9, 3e9], [1, 2]):
        for rule in ("silverman", "scott", "robust"):
            h = bandwidth(data, rule)
            assert math.isfinite(h) and h > 0


def test_invalid_arguments() -> None:
    with pytest.raises(EmptyInputError):
        bandwidth([])
    with pytest.raises(InvalidParameterError):
        bandwidth([1, 2, 3], fallback=0.0)
    with pytest.raises(InvalidParameterError):
        bandwidth([1, 2, 3], fallback=math.nan)
    with pytest.raises(GrammarError):
        bandwidth([1, 2, 3], "epanechnikov")
