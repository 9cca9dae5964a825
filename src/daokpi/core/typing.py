"""
Lightweight typing aliases used across the statistics library and its models.

Provides minimal aliases to improve readability and static checks. This module
contains no runtime logic and is zero-IO.

Notes:
    - Sample is any ordered sequence of finite reals; functions never mutate it.
    - PairedSample is a pair of equal-length Samples indexed correspondingly.

Examples:
    Use aliases in annotations.

    >>> from daokpi.core.typing import Sample, JsonDict
    >>> def total(xs: Sample) -> float:
    ...     return float(sum(xs))
    >>> total([1.0, 2.5])
    3.5
    >>> def payload() -> JsonDict:
    ...     return {"a": 1}
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

__all__ = [
    "Sample",
    "PairedSample",
    "JsonDict",
]

Sample = Sequence[float]
PairedSample = tuple[Sample, Sample]

# Convenient JSON-like mapping alias. Kept intentionally broad for serde boundaries.
JsonDict = dict[str, Any]
