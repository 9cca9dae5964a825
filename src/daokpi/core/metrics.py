"""
Frozen descriptors for the KPI metrics carried by a DAO record.

A DAO record is a JSON object with a `dao_name` and four nested sections
(network_participation, accumulated_funds, voting_efficiency, decentralisation). Each
descriptor names one metric, the dotted path to it inside a record, its dtype and the
range of values that are meaningful for it.

Notes:
    - Core is zero-IO (stdlib only); daokpi.io reads records and applies these descriptors.
    - Metric names are lower_snake and match daokpi.core.grammar.MetricName.
    - Percent metrics are bounded to [0, 100]; counts and amounts to [0, inf).

Examples:
    >>> from daokpi.core.metrics import get_metric
    >>> get_metric("participation_rate").path
    ('network_participation', 'participation_rate')
"""

from __future__ import annotations

from dataclasses import dataclass

from .grammar import MetricName, metric_name_from_value

__all__ = [
    "DAO_NAME_FIELD",
    "MetricDescriptor",
    "METRICS",
    "get_metric",
    "list_metrics",
]

DAO_NAME_FIELD = "dao_name"


@dataclass(frozen=True)
class MetricDescriptor:
    """
    Frozen descriptor for one KPI metric.

    Attributes:
        name (MetricName): Canonical metric identifier.
        path (tuple[str, ...]): Keys leading to the value inside a DAO record.
        dtype (str): "f64" for numeric metrics, "str" for categorical ones.
        lower (float | None): Smallest meaningful value (inclusive), None when unbounded.
        upper (float | None): Largest meaningful value (inclusive), None when unbounded.
    """

    name: MetricName
    path: tuple[str, ...]
    dtype: str  # "f64" | "str"
    lower: float | None = None
    upper: float | None = None

    @property
    def column(self) -> str:
        return self.name.value

    def in_range(self, value: float) -> bool:
        if self.lower is not None and value < self.lower:
            return False
        if self.upper is not None and value > self.upper:
            return False
        return True


def _percent(name: MetricName, section: str) -> MetricDescriptor:
    return MetricDescriptor(name, (section, name.value), "f64", 0.0, 100.0)


def _non_negative(name: MetricName, section: str) -> MetricDescriptor:
    return MetricDescriptor(name, (section, name.value), "f64", 0.0, None)


_NP = "network_participation"
_AF = "accumulated_funds"
_VE = "voting_efficiency"
_DC = "decentralisation"

METRICS: dict[MetricName, MetricDescriptor] = {
    d.name: d
    for d in (
        _percent(MetricName.PARTICIPATION_RATE, _NP),
        _non_negative(MetricName.TOTAL_MEMBERS, _NP),
        _non_negative(MetricName.NUM_DISTINCT_VOTERS, _NP),
        _non_negative(MetricName.UNIQUE_PROPOSERS, _NP),
        _non_negative(MetricName.TREASURY_VALUE_USD, _AF),
        _percent(MetricName.CIRCULATING_TOKEN_PERCENTAGE, _AF),
        _non_negative(MetricName.TOTAL_SUPPLY, _AF),
        _non_negative(MetricName.TOKEN_VELOCITY, _AF),
        _percent(MetricName.APPROVAL_RATE, _VE),
        _non_negative(MetricName.AVG_VOTING_DURATION_DAYS, _VE),
        _non_negative(MetricName.TOTAL_PROPOSALS, _VE),
        _non_negative(MetricName.APPROVED_PROPOSALS, _VE),
        _percent(MetricName.LARGEST_HOLDER_PERCENT, _DC),
        _percent(MetricName.PROPOSER_CONCENTRATION, _DC),
        MetricDescriptor(
            MetricName.ON_CHAIN_AUTOMATION, (_DC, MetricName.ON_CHAIN_AUTOMATION.value), "str"
        ),
    )
}


def get_metric(name: MetricName | str) -> MetricDescriptor:
    """
    Resolve a metric descriptor by name.

    Raises:
        GrammarError: If name is not a known metric.
    """
    return METRICS[metric_name_from_value(name)]


def list_metrics(dtype: str | None = None) -> list[MetricDescriptor]:
    """All descriptors in declaration order, optionally filtered by dtype."""
    return [d for d in METRICS.values() if dtype is None or d.dtype == dtype]
