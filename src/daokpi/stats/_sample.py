"""
Sample coercion and guards shared by daokpi.stats modules.

Every public statistic funnels its input through `as_series`, so the empty/None/non-finite
policy is applied in exactly one place.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

import polars as pl

from daokpi.core.errors import EmptyInputError, InsufficientDataError, InvalidParameterError
from daokpi.core.typing import Sample


def as_series(sample: Sample | pl.Series | None, *, name: str = "sample") -> pl.Series:
    """
    Coerce a sample to a non-empty Float64 Series of finite values.

    Args:
        sample (Sample | pl.Series | None): Input values.
        name (str): Label used in error messages.

    Returns:
        pl.Series: Float64 series (a new object; the input is not mutated).

    Raises:
        EmptyInputError: If sample is None or has zero elements.
        InvalidParameterError: If any value is missing, NaN, infinite or non-numeric.
    """
    if sample is None:
        raise EmptyInputError(f"{name} is None")
    try:
        if isinstance(sample, pl.Series):
            s = sample.cast(pl.Float64, strict=True).alias(name)
        else:
            s = pl.Series(name, list(sample), dtype=pl.Float64, strict=True)
    except (TypeError, ValueError, pl.exceptions.PolarsError) as exc:
        raise InvalidParameterError(f"{name} must contain only real numbers: {exc}") from exc
    if s.len() == 0:
        raise EmptyInputError(f"{name} is empty")
    if s.null_count() > 0:
        raise InvalidParameterError(f"{name} contains missing values")
    if not bool(s.is_finite().all()):
        raise InvalidParameterError(f"{name} contains NaN or infinite values")
    return s


def require_size(s: pl.Series, n_min: int, what: str) -> int:
    """Return len(s), raising InsufficientDataError when it is below n_min."""
    n = s.len()
    if n < n_min:
        raise InsufficientDataError(f"{what} requires at least {n_min} values (got {n})")
    return n


def is_constant(s: pl.Series) -> bool:
    """True when every value is identical (zero variance, zero IQR)."""
    return s.min() == s.max()


def check_finite(value: float, what: str, *, positive: bool = False) -> float:
    """Validate a scalar parameter; returns it as float."""
    try:
        v = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"{what} must be a real number (got {value!r})") from exc
    if not math.isfinite(v):
        raise InvalidParameterError(f"{what} must be finite (got {value!r})")
    if positive and v <= 0.0:
        raise InvalidParameterError(f"{what} must be > 0 (got {value!r})")
    return v


def finite_points(points: Iterable[float], what: str = "points") -> list[float]:
    """Validate evaluation points (may be empty)."""
    return [check_finite(p, what) for p in points]
