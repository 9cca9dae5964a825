"""
daokpi.io — settings and DAO record loading.

Public API
- StatsSettings: frozen runtime settings (env > TOML > defaults).
- read_records / records_frame / load_frame: JSON records to a polars DataFrame.
- validate_frame / metric_sample / paired_sample: descriptor checks and clean samples.
- Errors: IoError, IoConfigError, IoReadError, IoSchemaError.
"""

from __future__ import annotations

from .config import StatsSettings
from .errors import IoConfigError, IoError, IoReadError, IoSchemaError
from .read import load_frame, lookup_path, read_records, records_frame
from .validate import metric_sample, paired_sample, validate_frame

__all__ = [
    "StatsSettings",
    "IoError",
    "IoConfigError",
    "IoReadError",
    "IoSchemaError",
    "read_records",
    "records_frame",
    "load_frame",
    "lookup_path",
    "validate_frame",
    "metric_sample",
    "paired_sample",
]
