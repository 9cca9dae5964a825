"""
Core exception types raised by the statistics library and grammar normalizers.

Provides typed exceptions for statistic-level failures:
- EmptyInputError when a sample has zero elements where at least one is required.
- InsufficientDataError when a sample is smaller than the statistic requires (e.g., n < 2 for variance).
- DegenerateDistributionError for zero-variance/zero-IQR cases where a function raises instead of
  returning its documented sentinel.
- InvalidParameterError for out-of-range parameters (q outside [0, 1], non-positive widths,
  mismatched paired-sample lengths, non-finite values).
- GrammarError for enum-like strings that do not name a known strategy.
- SchemaError for result-model constraints (raised inside pydantic validators).

Notes:
    - This module uses only the Python standard library and has no side effects.
    - All errors derive from StatsError (a ValueError), so callers may catch the whole family.
    - The library never substitutes NaN/Infinity into a returned result; indeterminate
      computations surface as one of these errors or as a sentinel documented per function.

Examples:
    Catch an empty-sample failure.

    >>> from daokpi.core.errors import EmptyInputError, StatsError
    >>> def first(values: list[float]) -> float:
    ...     if not values:
    ...         raise EmptyInputError("sample is empty")
    ...     return values[0]
    >>> try:
    ...     first([])
    ... except StatsError as e:
    ...     msg = str(e)
    >>> "empty" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "StatsError",
    "SchemaError",
    "EmptyInputError",
    "InsufficientDataError",
    "DegenerateDistributionError",
    "InvalidParameterError",
    "GrammarError",
]


class StatsError(ValueError):
    """Base class for statistic-level failures."""


class SchemaError(ValueError):
    """Result-model constraint violated (bounds, ordering, cross-field rules)."""


class EmptyInputError(StatsError):
    """Sample has zero elements where at least one is required."""


class InsufficientDataError(StatsError):
    """Sample has fewer elements than the statistic requires."""


class DegenerateDistributionError(StatsError):
    """Zero variance or zero IQR where the statistic has no defined value or sentinel."""


class InvalidParameterError(StatsError):
    """Parameter outside its domain (q not in [0, 1], width <= 0, length mismatch, non-finite)."""


class GrammarError(InvalidParameterError):
    """Enum-like string does not normalize to a known lower_snake value."""
