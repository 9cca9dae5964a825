"""
Custom exceptions for the daokpi.io module.

Purpose
- Provide IO-layer specific error types that map cleanly to responsibilities in daokpi.io.
- Keep daokpi.core as the source of truth for statistic and grammar errors (see
  daokpi.core.errors).

Source of truth and boundaries
- daokpi.core.errors.StatsError subclasses are raised by the statistics library.
- daokpi.io raises Io* errors for configuration and record-loading concerns:
  - IoConfigError: invalid settings values.
  - IoReadError: the records file is missing, unreadable, or not a JSON array of objects.
  - IoSchemaError: a records frame lacks a required column or a column cannot be cast.

Notes
- These exceptions do not perform any IO and are stdlib-only.
"""

from __future__ import annotations


class IoError(Exception):
    """
    Base class for IO-related errors in daokpi.io.

    Notes:
        Use this as a catch-all for IO-layer failures, distinct from daokpi.core errors.
    """


class IoConfigError(IoError):
    """
    Raised when settings are invalid.

    Examples:
        - Unknown bandwidth rule
        - Non-positive fallback bandwidth or KDE point count below 2
    """


class IoReadError(IoError):
    """Raised when the DAO records file cannot be read or decoded."""


class IoSchemaError(IoError):
    """
    Raised when a records frame fails validation against daokpi.core.metrics descriptors.

    Notes:
        Numeric metric columns are safely cast to Float64 before this is raised.
    """
