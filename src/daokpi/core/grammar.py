"""
Canonical daokpi grammar and helpers.

Defines the named strategies and labels used across the statistics library:
quantile methods, variance modes, bandwidth rules, fitted distribution kinds,
interval closure for threshold categories, correlation strengths, and
sustainability levels. Includes zero-IO validators/helpers used across the stack.

Responsibilities
- Define enums whose serialized values are lower_snake.
- Provide normalization helpers that turn caller strings (CLI flags, TOML values)
  into enums, raising GrammarError on unknown values.

Design principles
-----------------
1) One naming standard:
   - Enum classes: PascalCase
   - Enum member names: UPPER_SNAKE (Python constants)
   - Enum serialized values (JSON/CLI/TOML): lower_snake

2) Explicit strategies:
   - Statistics that the dashboard code computed inconsistently (quantiles,
     bandwidths, variance) take a named strategy rather than an implicit one.
     Defaults are QuantileMethod.INTERPOLATED, VarianceMode.SAMPLE and
     BandwidthRule.SILVERMAN.

Examples
--------
>>> from daokpi.core.grammar import bandwidth_rule_from_value, BandwidthRule
>>> bandwidth_rule_from_value("Scott") == BandwidthRule.SCOTT
True
>>> quantile_method_from_value("interpolated").value
'interpolated'
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum
from typing import TypeVar

from .errors import GrammarError

__all__ = [
    "QuantileMethod",
    "VarianceMode",
    "BandwidthRule",
    "DistributionKind",
    "IntervalClosed",
    "CorrelationStrength",
    "SustainabilityLevel",
    "MetricName",
    # helpers/validators
    "is_lower_snake",
    "assert_lower_snake",
    "quantile_method_from_value",
    "variance_mode_from_value",
    "bandwidth_rule_from_value",
    "distribution_kind_from_value",
    "interval_closed_from_value",
    "metric_name_from_value",
    "ensure_all_enum_values_lower_snake",
]

_LOWER_SNAKE_RE = re.compile(r"^[a-z][a-z0-9_]*$")

E = TypeVar("E", bound=Enum)


class QuantileMethod(Enum):
    """
    Quantile estimator.

    INTERPOLATED is the continuous R-7 ("linear") estimator and the default everywhere.
    NEAREST_RANK (sorted[floor(q * n)]) is kept only as an explicit, named strategy for
    reproducing figures that used it.
    """

    INTERPOLATED = "interpolated"
    NEAREST_RANK = "nearest_rank"


class VarianceMode(Enum):
    """Variance denominator: SAMPLE uses n - 1 (Bessel), POPULATION uses n."""

    SAMPLE = "sample"
    POPULATION = "population"


class BandwidthRule(Enum):
    """
    Kernel bandwidth rule.

    SILVERMAN: 1.06 * std * n^(-1/5)
    SCOTT:     1.059 * std * n^(-1/5)
    ROBUST:    1.06 * min(std, IQR / 1.34) * n^(-1/5)
    """

    SILVERMAN = "silverman"
    SCOTT = "scott"
    ROBUST = "robust"


class DistributionKind(Enum):
    """Parametric families used for fitted-distribution curves."""

    NORMAL = "normal"
    LOG_NORMAL = "log_normal"
    UNIFORM = "uniform"


class IntervalClosed(Enum):
    """
    Which side of a threshold interval is closed.

    RIGHT: (c[i-1], c[i]] so a value equal to a cut falls in the lower category.
    LEFT:  [c[i-1], c[i]) so a value equal to a cut falls in the upper category.
    BOTH:  the outer categories are open, so a value equal to the first cut falls in the
           category above it and a value equal to any other cut in the category below it
           (low: v < a, medium: a <= v <= b, high: v > b).
    """

    LEFT = "left"
    RIGHT = "right"
    BOTH = "both"


class CorrelationStrength(Enum):
    """Interpretation label for |r|."""

    WEAK = "weak"
    MODERATE = "moderate"
    STRONG = "strong"


class SustainabilityLevel(Enum):
    """Overall DAO sustainability level derived from the summed KPI score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MetricName(Enum):
    """
    Canonical KPI metric names extracted from a DAO record.

    Descriptors (record path, dtype, valid range) live in daokpi.core.metrics.
    """

    # network participation
    PARTICIPATION_RATE = "participation_rate"
    TOTAL_MEMBERS = "total_members"
    NUM_DISTINCT_VOTERS = "num_distinct_voters"
    UNIQUE_PROPOSERS = "unique_proposers"
    # accumulated funds
    TREASURY_VALUE_USD = "treasury_value_usd"
    CIRCULATING_TOKEN_PERCENTAGE = "circulating_token_percentage"
    TOTAL_SUPPLY = "total_supply"
    TOKEN_VELOCITY = "token_velocity"
    # voting efficiency
    APPROVAL_RATE = "approval_rate"
    AVG_VOTING_DURATION_DAYS = "avg_voting_duration_days"
    TOTAL_PROPOSALS = "total_proposals"
    APPROVED_PROPOSALS = "approved_proposals"
    # decentralisation
    LARGEST_HOLDER_PERCENT = "largest_holder_percent"
    PROPOSER_CONCENTRATION = "proposer_concentration"
    ON_CHAIN_AUTOMATION = "on_chain_automation"


def is_lower_snake(value: str) -> bool:
    """
    Check whether a string is lower_snake.

    Args:
      value (str): Candidate string to validate.

    Returns:
      bool: True if value matches lower_snake (e.g., "log_normal"), False otherwise.

    Examples:
      >>> is_lower_snake("log_normal")
      True
      >>> is_lower_snake("LogNormal")
      False
    """
    return bool(_LOWER_SNAKE_RE.match(value or ""))


def assert_lower_snake(value: str, what: str = "value") -> None:
    """
    Validate that a string is lower_snake.

    Args:
      value (str): Candidate string to validate.
      what (str): Human-friendly label used in the error message.

    Raises:
      GrammarError: If value is not lower_snake.
    """
    if not is_lower_snake(value):
        raise GrammarError(f"{what} must be lower_snake (got: {value!r})")


def _enum_from_value(enum_cls: type[E], s: str | E, what: str) -> E:
    if isinstance(s, enum_cls):
        return s
    token = (str(s) if s is not None else "").strip().lower().replace("-", "_")
    assert_lower_snake(token, what)
    allowed = [m.value for m in enum_cls]
    if token not in allowed:
        raise GrammarError(f"{what} must be one of {allowed} (got {s!r})")
    return enum_cls(token)


def quantile_method_from_value(s: str | QuantileMethod) -> QuantileMethod:
    """
    Parse a quantile method string into a QuantileMethod.

    Args:
      s (str | QuantileMethod): Method name (case-insensitive; '-' treated as '_') or enum.

    Returns:
      QuantileMethod: Parsed method.

    Raises:
      GrammarError: If s is not a known method.
    """
    return _enum_from_value(QuantileMethod, s, "quantile_method")


def variance_mode_from_value(s: str | VarianceMode) -> VarianceMode:
    """Parse a variance mode string ("sample" | "population")."""
    return _enum_from_value(VarianceMode, s, "variance_mode")


def bandwidth_rule_from_value(s: str | BandwidthRule) -> BandwidthRule:
    """
    Parse a bandwidth rule string into a BandwidthRule.

    Args:
      s (str | BandwidthRule): Rule name (case-insensitive) or enum.

    Returns:
      BandwidthRule: Parsed rule.

    Raises:
      GrammarError: If s is not one of silverman, scott, robust.
    """
    return _enum_from_value(BandwidthRule, s, "bandwidth_rule")


def distribution_kind_from_value(s: str | DistributionKind) -> DistributionKind:
    """Parse a fitted-distribution name ("normal" | "log_normal" | "uniform")."""
    return _enum_from_value(DistributionKind, s, "distribution")


def interval_closed_from_value(s: str | IntervalClosed) -> IntervalClosed:
    """Parse an interval closure name ("left" | "right")."""
    return _enum_from_value(IntervalClosed, s, "closed")


def metric_name_from_value(s: str | MetricName) -> MetricName:
    """Parse a KPI metric name (e.g., "participation_rate", "Largest-Holder-Percent")."""
    return _enum_from_value(MetricName, s, "metric")


def ensure_all_enum_values_lower_snake(enums: Iterable[type[Enum]]) -> None:
    """
    Assert that every enum member's value is lower_snake.

    Args:
      enums (Iterable[type[Enum]]): Iterable of Enum classes to inspect.

    Raises:
      AssertionError: If any enum member has a non-lower_snake value.

    Examples:
      >>> ensure_all_enum_values_lower_snake([
      ...     QuantileMethod, VarianceMode, BandwidthRule, DistributionKind,
      ...     IntervalClosed, CorrelationStrength, SustainabilityLevel,
      ... ])
    """
    for enum_cls in enums:
        for m in enum_cls:
            if not is_lower_snake(m.value):
                raise AssertionError(
                    f"{enum_cls.__name__}.{m.name} has non-lower_snake value: {m.value!r}"
                )
