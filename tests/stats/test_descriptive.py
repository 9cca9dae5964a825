import math
import statistics

import polars as pl
import pytest

from daokpi.core.errors import (
    EmptyInputError,
    GrammarError,
    InsufficientDataError,
    InvalidParameterError,
)
from daokpi.stats.descriptive import (
    binned_mode,
    iqr,
    kurtosis,
    maximum,
    mean,
    minimum,
    moment_summary,
    quantile,
    quantile_summary,
    skewness,
    std,
    variance,
)

TENS = [10, 20, 30, 40, 50, 60, 70, 80, 90, 100]


def test_quantile_summary_of_tens() -> None:
    qs = quantile_summary(TENS)
    assert qs.min == 10.0
    assert qs.q1 == pytest.approx(32.5)
    assert qs.median == pytest.approx(55.0)
    assert qs.q3 == pytest.approx(77.5)
    assert qs.max == 100.0
    assert qs.iqr == pytest.approx(45.0)
    assert iqr(TENS) == pytest.approx(45.0)


def test_mean_and_std_of_tens() -> None:
    assert mean(TENS) == pytest.approx(55.0)
    assert std(TENS) == pytest.approx(30.277, abs=1e-3)
    assert variance(TENS) == pytest.approx(8250 / 9)


def test_quantile_endpoints_are_min_and_max() -> None:
    data = [3.2, -1.0, 7.5, 0.0, 2.2]
    assert quantile(data, 0.0) == min(data)
    assert quantile(data, 1.0) == max(data)


def test_quantile_interpolates_between_order_statistics() -> None:
    assert quantile([1, 2, 3, 4], 0.5) == pytest.approx(2.5)
    assert quantile([4, 1, 3, 2], 0.25) == pytest.approx(1.75)


def test_nearest_rank_is_an_explicit_strategy() -> None:
    assert quantile([1, 2, 3, 4], 0.5, method="nearest_rank") == 3.0
    assert quantile([1, 2, 3, 4], 1.0, method="nearest_rank") == 4.0
    with pytest.raises(GrammarError):
        quantile([1, 2, 3], 0.5, method="midpoint")


def test_single_value_sample() -> None:
    assert quantile([7.0], 0.3) == 7.0
    assert minimum([7.0]) == 7.0
    assert maximum([7.0]) == 7.0
    qs = quantile_summary([7.0])
    assert (qs.min, qs.median, qs.max, qs.iqr) == (7.0, 7.0, 7.0, 0.0)
    with pytest.raises(InsufficientDataError):
        variance([7.0])
    assert variance([7.0], mode="population") == 0.0


def test_invalid_inputs() -> None:
    with pytest.raises(EmptyInputError):
        mean([])
    with pytest.raises(EmptyInputError):
        quantile(None, 0.5)  # type: ignore[arg-type]
    with pytest.raises(InvalidParameterError):
        quantile([1, 2], 1.5)
    with pytest.raises(InvalidParameterError):
        quantile([1, 2], -0.1)
    with pytest.raises(InvalidParameterError):
        mean([1.0, math.nan])
    with pytest.raises(InvalidParameterError):
        mean([1.0, math.inf])


def test_inputs_are_not_mutated() -> None:
    data = [3.0, 1.0, 2.0]
    quantile_summary(data)
    assert data == [3.0, 1.0, 2.0]


def test_polars_series_input() -> None:
    assert mean(pl.Series([1, 2, 3])) == pytest.approx(2.0)


def test_population_variance_uses_n() -> None:
    assert variance([1, 2, 3, 4], mode="population") == pytest.approx(1.25)
    assert variance([1, 2, 3, 4]) == pytest.approx(5 / 3)


def test_variance_is_translation_invariant_and_scales_quadratically() -> None:
    data = [2.0, 3.5, 7.25, 1.0, 9.0, 4.4]
    base = variance(data)
    assert variance([x + 1000.0 for x in data]) == pytest.approx(base, rel=1e-9)
    assert variance([3.0 * x for x in data]) == pytest.approx(9.0 * base, rel=1e-9)


def test_symmetric_sample_has_zero_skewness() -> None:
    assert skewness([1, 2, 3, 4, 5]) == pytest.approx(0.0, abs=1e-12)
    assert skewness([-3, -1, 0, 1, 3]) == pytest.approx(0.0, abs=1e-12)


def test_right_tail_has_positive_skewness() -> None:
    assert skewness([1, 1, 1, 2, 10]) > 0
    assert skewness([-10, -2, -1, -1, -1]) < 0


def test_excess_kurtosis_uses_unbiased_std() -> None:
    # z = (x - 3) / sqrt(2.5); mean(z**4) = 1.088
    assert kurtosis([1, 2, 3, 4, 5]) == pytest.approx(1.088 - 3.0)


def test_constant_sample_moment_sentinels() -> None:
    assert skewness([4, 4, 4]) == 0.0
    assert kurtosis([4, 4, 4]) == 0.0
    assert variance([0.1, 0.1, 0.1]) == 0.0
    m = moment_summary([0.1, 0.1, 0.1])
    assert (m.variance, m.std, m.skewness, m.kurtosis) == (0.0, 0.0, 0.0, 0.0)


def test_moments_require_two_values() -> None:
    with pytest.raises(InsufficientDataError):
        skewness([1.0])
    with pytest.raises(InsufficientDataError):
        kurtosis([1.0])
    with pytest.raises(InsufficientDataError):
        moment_summary([1.0])


def test_binned_mode() -> None:
    # bins [1, 4), [4, 7), [7, 10] hold 5, 0 and 2 values
    assert binned_mode([1, 2, 2, 2, 3, 9, 10], bins=3) == pytest.approx(2.5)
    assert binned_mode([5.0, 5.0]) == 5.0
    # tie between the two bins resolves to the lower one
    assert binned_mode([0.0, 1.0], bins=2) == pytest.approx(0.25)
    with pytest.raises(InvalidParameterError):
        binned_mode([1, 2], bins=0)


@pytest.mark.parametrize(
    "data",
    [
        [4.0, 1.0, 9.0],
        [2.5, -3.0, 8.0, 0.5, 11.0],
        [7.0, 3.0, 1.0, 5.0],
        [1.5, 1.5, 2.0, 9.0, -4.0, 6.25],
        [float(v) for v in range(1, 102, 3)],
    ],
)
def test_median_matches_statistics_median(data) -> None:
    assert quantile(data, 0.5) == pytest.approx(statistics.median(data))
    assert quantile_summary(data).median == pytest.approx(statistics.median(data))
