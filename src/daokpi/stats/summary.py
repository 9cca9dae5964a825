"""
One-call descriptive summary of a metric.

describe() bundles what a distribution chart needs: quantiles, moments, binned mode,
a KDE bandwidth, the normality index and the distribution-fit heuristics.
"""

from __future__ import annotations

from daokpi.core.constants import DEFAULT_FALLBACK_BANDWIDTH, DEFAULT_MODE_BINS
from daokpi.core.grammar import BandwidthRule, bandwidth_rule_from_value
from daokpi.core.schema import DescriptiveSummary
from daokpi.core.typing import Sample

from ._sample import as_series, require_size
from .bandwidth import bandwidth
from .descriptive import binned_mode, moment_summary, quantile_summary
from .fitting import best_fit, describe_shape, fit_metrics, normality_index

__all__ = ["describe"]


def describe(
    sample: Sample,
    *,
    rule: BandwidthRule | str = BandwidthRule.ROBUST,
    mode_bins: int = DEFAULT_MODE_BINS,
    fallback_bandwidth: float = DEFAULT_FALLBACK_BANDWIDTH,
) -> DescriptiveSummary:
    """
    Summarize a sample.

    Args:
        sample (Sample): Finite values (n >= 2).
        rule (BandwidthRule | str): Bandwidth rule reported in the summary (robust by default).
        mode_bins (int): Bins used for the approximate mode.
        fallback_bandwidth (float): Bandwidth for degenerate samples.

    Returns:
        DescriptiveSummary

    Raises:
        EmptyInputError: If the sample is empty.
        InsufficientDataError: If n < 2.

    Examples:
        >>> d = describe([10, 20, 30, 40, 50, 60, 70, 80, 90, 100])
        >>> d.quantiles.median, d.moments.mean
        (55.0, 55.0)
    """
    r = bandwidth_rule_from_value(rule)
    s = as_series(sample)
    n = require_size(s, 2, "describe")
    moments = moment_summary(s)
    metrics = fit_metrics(moments.skewness, moments.kurtosis)
    index = normality_index(moments.skewness, moments.kurtosis)
    fit = best_fit(metrics)
    return DescriptiveSummary(
        n=n,
        quantiles=quantile_summary(s),
        moments=moments,
        mode=binned_mode(s, mode_bins),
        bandwidth=bandwidth(s, r, fallback=fallback_bandwidth),
        bandwidth_rule=r,
        normality_index=index,
        fit_metrics=metrics,
        best_fit=fit,
        shape=describe_shape(moments.skewness, moments.kurtosis, index, fit),
    )
