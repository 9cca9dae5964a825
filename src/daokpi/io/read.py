"""
Read DAO records into a polars DataFrame.

Overview
- read_records(): Decode a JSON file holding an array of DAO record objects.
- records_frame(): Flatten records into one column per KPI metric plus `dao_name`.
- load_frame(): read_records() + records_frame() for a path.

Source of truth
- Metric names, record paths and dtypes come from daokpi.core.metrics.
- Range checks and sample extraction live in daokpi.io.validate.

Flattening rules
- A missing section or key yields null for that row.
- Numeric metrics accept JSON numbers and numeric strings; anything else becomes null.
  Booleans are not numbers here.
- Categorical metrics keep strings as-is; other values are stringified.

Import DAG discipline
- Depends on stdlib, polars and daokpi.core; does not import higher layers (dao, cli).
"""

from __future__ import annotations

import json
import logging
import math
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import polars as pl

from daokpi.core.metrics import DAO_NAME_FIELD, METRICS, MetricDescriptor

from .errors import IoReadError

logger = logging.getLogger(__name__)

__all__ = ["read_records", "records_frame", "load_frame", "lookup_path"]


def read_records(path: str | os.PathLike[str]) -> list[dict[str, Any]]:
    """
    Decode a JSON array of DAO record objects.

    Args:
        path (str | os.PathLike[str]): JSON file path.

    Returns:
        list[dict[str, Any]]: Records in file order.

    Raises:
        IoReadError: If the file is missing or unreadable, is not valid JSON, or is not an
            array of objects.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise IoReadError(f"cannot read records file {str(p)!r}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise IoReadError(f"records file {str(p)!r} is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise IoReadError(f"records file {str(p)!r} must hold a JSON array (got {type(data).__name__})")
    bad = [i for i, rec in enumerate(data) if not isinstance(rec, dict)]
    if bad:
        raise IoReadError(f"records file {str(p)!r} has non-object entries at {bad[:5]}")
    logger.info("read %d records from %s", len(data), p)
    return data


def lookup_path(record: Mapping[str, Any], path: Iterable[str]) -> Any:
    """Follow keys into nested mappings; None when any step is missing."""
    cur: Any = record
    for key in path:
        if not isinstance(cur, Mapping) or key not in cur:
            return None
        cur = cur[key]
    return cur


def _as_float(v: Any) -> float | None:
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        f = float(v)
    elif isinstance(v, str):
        try:
            f = float(v.strip())
        except ValueError:
            return None
    else:
        return None
    return f if math.isfinite(f) else None


def _as_str(v: Any) -> str | None:
    if v is None:
        return None
    return v if isinstance(v, str) else str(v)


def _column(records: list[dict[str, Any]], desc: MetricDescriptor) -> pl.Series:
    raw = [lookup_path(rec, desc.path) for rec in records]
    if desc.dtype == "f64":
        return pl.Series(desc.column, [_as_float(v) for v in raw], dtype=pl.Float64)
    return pl.Series(desc.column, [_as_str(v) for v in raw], dtype=pl.Utf8)


def records_frame(
    records: list[dict[str, Any]],
    metrics: Iterable[MetricDescriptor] | None = None,
) -> pl.DataFrame:
    """
    Flatten records to a DataFrame with `dao_name` and one column per metric.

    Args:
        records (list[dict[str, Any]]): Decoded DAO records.
        metrics (Iterable[MetricDescriptor] | None): Metrics to extract (default: all).

    Returns:
        pl.DataFrame: One row per record; nulls where a value is missing or unusable.
    """
    descs = list(METRICS.values()) if metrics is None else list(metrics)
    names = [_as_str(rec.get(DAO_NAME_FIELD)) for rec in records]
    cols = [pl.Series(DAO_NAME_FIELD, names, dtype=pl.Utf8)]
    cols.extend(_column(records, d) for d in descs)
    df = pl.DataFrame(cols)
    logger.debug("flattened %d records into %d columns", df.height, df.width)
    return df


def load_frame(path: str | os.PathLike[str]) -> pl.DataFrame:
    """Read a records file and flatten it (see records_frame)."""
    return records_frame(read_records(path))
