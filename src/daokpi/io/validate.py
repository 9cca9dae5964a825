"""
Validation and sample extraction for DAO record frames.

Purpose
- Validate polars DataFrames against the metric descriptors in daokpi.core.metrics.
- Extract clean numeric samples (and paired samples) ready for daokpi.stats.

Checks performed
- `dao_name` is present.
- Every metric column that is present has its descriptor dtype; scalar columns are safely
  cast (non-strict, so unparseable values become null).
- When strict=True, every descriptor column must be present.

Sample extraction
- Nulls are dropped.
- Values outside a descriptor's range (e.g., a participation rate of 140) are dropped by
  default and counted in a log record.
"""

from __future__ import annotations

import logging

import polars as pl

from daokpi.core.grammar import MetricName
from daokpi.core.metrics import DAO_NAME_FIELD, METRICS, MetricDescriptor, get_metric

from .errors import IoSchemaError

logger = logging.getLogger(__name__)

__all__ = ["validate_frame", "metric_sample", "paired_sample"]

_DTYPE_MAP: dict[str, object] = {
    "f64": pl.Float64,
    "str": pl.Utf8,
}


def _safe_cast(df: pl.DataFrame, col: str, target: object) -> pl.DataFrame:
    try:
        return df.with_columns(pl.col(col).cast(target, strict=False))  # type: ignore[arg-type]
    except pl.exceptions.PolarsError as exc:
        raise IoSchemaError(f"failed to cast column {col!r} to {target}: {exc}") from exc


def validate_frame(df: pl.DataFrame, *, strict: bool = False) -> pl.DataFrame:
    """
    Validate a records frame against the metric descriptors.

    Args:
        df (pl.DataFrame): Frame produced by daokpi.io.read.records_frame or equivalent.
        strict (bool): Require every descriptor column when True.

    Returns:
        pl.DataFrame: Possibly with safe casts applied.

    Raises:
        IoSchemaError: If `dao_name` (or, under strict, any metric column) is missing.
    """
    if DAO_NAME_FIELD not in df.columns:
        raise IoSchemaError(f"missing required column {DAO_NAME_FIELD!r}")
    if strict:
        missing = [d.column for d in METRICS.values() if d.column not in df.columns]
        if missing:
            raise IoSchemaError(f"missing metric columns: {missing!r}")
    for desc in METRICS.values():
        if desc.column not in df.columns:
            continue
        expected = _DTYPE_MAP[desc.dtype]
        if df.schema[desc.column] != expected:
            df = _safe_cast(df, desc.column, expected)
    return df


def _numeric(name: MetricName | str) -> MetricDescriptor:
    desc = get_metric(name)
    if desc.dtype != "f64":
        raise IoSchemaError(f"metric {desc.column!r} is not numeric")
    return desc


def _range_expr(desc: MetricDescriptor) -> pl.Expr:
    col = pl.col(desc.column)
    expr = col.is_not_null() & col.is_finite()
    if desc.lower is not None:
        expr = expr & (col >= desc.lower)
    if desc.upper is not None:
        expr = expr & (col <= desc.upper)
    return expr


def metric_sample(
    df: pl.DataFrame,
    metric: MetricName | str,
    *,
    drop_out_of_range: bool = True,
) -> list[float]:
    """
    Non-null values of one numeric metric, in row order.

    Args:
        df (pl.DataFrame): Records frame.
        metric (MetricName | str): Numeric metric name.
        drop_out_of_range (bool): Drop values outside the descriptor's range.

    Returns:
        list[float]: Possibly empty sample.

    Raises:
        GrammarError: If metric is unknown.
        IoSchemaError: If the metric is not numeric or its column is missing.
    """
    desc = _numeric(metric)
    df = validate_frame(df)
    if desc.column not in df.columns:
        raise IoSchemaError(f"missing metric column {desc.column!r}")
    col = pl.col(desc.column)
    keep = _range_expr(desc) if drop_out_of_range else col.is_not_null() & col.is_finite()
    out = df.filter(keep).get_column(desc.column)
    dropped = df.height - out.len()
    if dropped:
        logger.info("%s: dropped %d of %d rows (missing or out of range)", desc.column, dropped, df.height)
    return out.to_list()


def paired_sample(
    df: pl.DataFrame,
    x: MetricName | str,
    y: MetricName | str,
    *,
    drop_out_of_range: bool = True,
) -> tuple[list[float], list[float]]:
    """
    Two numeric metrics over the rows where both are usable (same length, same row order).

    Raises:
        GrammarError: If a metric is unknown.
        IoSchemaError: If a metric is not numeric or its column is missing.
    """
    dx, dy = _numeric(x), _numeric(y)
    df = validate_frame(df)
    for d in (dx, dy):
        if d.column not in df.columns:
            raise IoSchemaError(f"missing metric column {d.column!r}")
    if drop_out_of_range:
        keep = _range_expr(dx) & _range_expr(dy)
    else:
        keep = pl.all_horizontal(
            [pl.col(d.column).is_not_null() & pl.col(d.column).is_finite() for d in (dx, dy)]
        )
    sub = df.filter(keep)
    dropped = df.height - sub.height
    if dropped:
        logger.info("%s/%s: dropped %d of %d rows", dx.column, dy.column, dropped, df.height)
    return sub.get_column(dx.column).to_list(), sub.get_column(dy.column).to_list()
