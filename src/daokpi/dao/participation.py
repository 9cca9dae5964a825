"""
Network-participation derivations.

participation_points() turns a records frame into the coordinates of the participation
scatter: members and voters on a log10 scale against the participation rate.
"""

from __future__ import annotations

import polars as pl

from daokpi.core.constants import DEFAULT_LOG_EPSILON
from daokpi.core.metrics import DAO_NAME_FIELD
from daokpi.core.typing import Sample
from daokpi.io.errors import IoSchemaError
from daokpi.io.validate import validate_frame
from daokpi.stats import as_series
from daokpi.stats._sample import check_finite

__all__ = ["participation_points", "log10_values"]

_MEMBERS = "total_members"
_VOTERS = "num_distinct_voters"
_RATE = "participation_rate"


def _log10_floor_one(col: str, offset: float = 0.0) -> pl.Expr:
    c = pl.col(col) + offset
    return pl.when(pl.col(col).is_null()).then(None).otherwise(pl.max_horizontal(c, pl.lit(1.0)).log10())


def participation_points(df: pl.DataFrame) -> pl.DataFrame:
    """
    Scatter coordinates for network participation.

    Columns of the result:
        dao_name, x = log10(max(1, total_members)), y = participation_rate,
        z = log10(max(1, num_distinct_voters + 1)), total_members, num_distinct_voters.

    Rows with a missing participation rate are dropped; a missing member or voter count
    leaves x or z null.

    Raises:
        IoSchemaError: If a required column is missing.
    """
    df = validate_frame(df)
    missing = [c for c in (_MEMBERS, _VOTERS, _RATE) if c not in df.columns]
    if missing:
        raise IoSchemaError(f"missing participation columns: {missing!r}")
    return (
        df.filter(pl.col(_RATE).is_not_null() & pl.col(_RATE).is_finite())
        .select(
            pl.col(DAO_NAME_FIELD),
            _log10_floor_one(_MEMBERS).alias("x"),
            pl.col(_RATE).alias("y"),
            _log10_floor_one(_VOTERS, 1.0).alias("z"),
            pl.col(_MEMBERS),
            pl.col(_VOTERS),
        )
    )


def log10_values(sample: Sample, epsilon: float = DEFAULT_LOG_EPSILON) -> list[float]:
    """
    log10(max(epsilon, v)) for each value; used for treasury values spanning many decades.

    Raises:
        EmptyInputError: If the sample is empty.
        InvalidParameterError: If epsilon is not finite and positive.

    Examples:
        >>> log10_values([1, 10, 1000])
        [0.0, 1.0, 3.0]
    """
    eps = check_finite(epsilon, "epsilon", positive=True)
    return as_series(sample).clip(lower_bound=eps).log10().to_list()
