"""
Threshold presets used to categorize KPI metrics.

Each preset fixes the metric, the cut points, the category labels and which side of each
interval is closed, so a categorization is reproducible from the preset name alone.
"""

from __future__ import annotations

from dataclasses import dataclass

import polars as pl

from daokpi.core.errors import GrammarError
from daokpi.core.grammar import IntervalClosed, MetricName, assert_lower_snake
from daokpi.core.schema import CategoryCount
from daokpi.io.validate import metric_sample
from daokpi.stats.thresholds import categorize

__all__ = ["ThresholdPreset", "PRESETS", "get_preset", "apply_preset"]


@dataclass(frozen=True)
class ThresholdPreset:
    """
    Named threshold set for one metric.

    Attributes:
        name (str): lower_snake preset name.
        metric (MetricName): Metric the cuts apply to.
        cuts (tuple[float, ...]): Strictly increasing cut points.
        labels (tuple[str, ...]): len(cuts) + 1 category labels, lowest first.
        closed (IntervalClosed): Side on which intervals are closed.
    """

    name: str
    metric: MetricName
    cuts: tuple[float, ...]
    labels: tuple[str, ...]
    closed: IntervalClosed = IntervalClosed.RIGHT


PRESETS: dict[str, ThresholdPreset] = {
    p.name: p
    for p in (
        # < 10 low, 10 to 40 inclusive medium, above 40 high
        ThresholdPreset(
            "participation",
            MetricName.PARTICIPATION_RATE,
            (10.0, 40.0),
            ("low", "medium", "high"),
            IntervalClosed.BOTH,
        ),
        # < $100M low, $100M to $1B inclusive medium, above $1B high
        ThresholdPreset(
            "treasury",
            MetricName.TREASURY_VALUE_USD,
            (1e8, 1e9),
            ("low", "medium", "high"),
            IntervalClosed.BOTH,
        ),
        # largest holder share: <= 10 high decentralization ... > 66 low
        ThresholdPreset(
            "largest_holder",
            MetricName.LARGEST_HOLDER_PERCENT,
            (10.0, 33.0, 66.0),
            ("high", "medium", "medium_low", "low"),
            IntervalClosed.RIGHT,
        ),
        ThresholdPreset(
            "approval_rate",
            MetricName.APPROVAL_RATE,
            (30.0, 70.0),
            ("low", "medium", "high"),
            IntervalClosed.BOTH,
        ),
    )
}


def get_preset(name: str) -> ThresholdPreset:
    """
    Resolve a preset by name.

    Raises:
        GrammarError: If name is not a known preset.
    """
    token = (name or "").strip().lower().replace("-", "_")
    assert_lower_snake(token, "preset")
    if token not in PRESETS:
        raise GrammarError(f"preset must be one of {sorted(PRESETS)} (got {name!r})")
    return PRESETS[token]


def apply_preset(df: pl.DataFrame, name: str) -> list[CategoryCount]:
    """Categorize the preset's metric column of a records frame."""
    preset = get_preset(name)
    sample = metric_sample(df, preset.metric)
    return categorize(sample, preset.cuts, preset.labels, closed=preset.closed)
