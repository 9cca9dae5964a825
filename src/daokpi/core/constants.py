"""
daokpi core numeric defaults.

Defines the rule coefficients and defaults consumed by daokpi.stats and the
settings layer. This module is zero-IO and uses only the Python standard library.

Notes:
    - Bandwidth rules: h = coefficient * scale * n ** BANDWIDTH_EXPONENT.
    - Silverman and Scott coefficients differ (1.06 vs 1.059); both are exposed as
      distinct named strategies.
    - daokpi.io.config.StatsSettings consumes these values as its defaults.
"""

from __future__ import annotations

__all__ = [
    "SILVERMAN_COEFFICIENT",
    "SCOTT_COEFFICIENT",
    "ROBUST_COEFFICIENT",
    "IQR_NORMAL_SCALE",
    "BANDWIDTH_EXPONENT",
    "DEFAULT_FALLBACK_BANDWIDTH",
    "FREEDMAN_DIACONIS_FACTOR",
    "DEGENERATE_BIN_HALF_WIDTH",
    "KS_ALPHA_05_COEFFICIENT",
    "DEFAULT_KDE_POINTS",
    "DEFAULT_MODE_BINS",
    "DEFAULT_LOG_EPSILON",
    "WEAK_CORRELATION_BELOW",
    "MODERATE_CORRELATION_BELOW",
    "SHAPE_CUTOFF",
]

# Kernel bandwidth rule coefficients.
SILVERMAN_COEFFICIENT: float = 1.06
SCOTT_COEFFICIENT: float = 1.059
ROBUST_COEFFICIENT: float = 1.06

# IQR of a standard normal distribution; IQR / 1.34 estimates sigma.
IQR_NORMAL_SCALE: float = 1.34

BANDWIDTH_EXPONENT: float = -1.0 / 5.0

# Returned by bandwidth rules when n <= 1 or the spread is zero.
DEFAULT_FALLBACK_BANDWIDTH: float = 1.0

# Freedman–Diaconis: width = 2 * IQR * n ** (-1/3).
FREEDMAN_DIACONIS_FACTOR: float = 2.0

# Half-width of the single bin used when every value is identical.
DEGENERATE_BIN_HALF_WIDTH: float = 0.5

# Asymptotic two-sample Kolmogorov–Smirnov critical coefficient at alpha ~ 0.05.
KS_ALPHA_05_COEFFICIENT: float = 1.36

DEFAULT_KDE_POINTS: int = 100
DEFAULT_MODE_BINS: int = 20

# Floor applied before log10 so zero-valued metrics stay finite.
DEFAULT_LOG_EPSILON: float = 1e-6

# |r| cutoffs for weak / moderate / strong correlation labels.
WEAK_CORRELATION_BELOW: float = 0.3
MODERATE_CORRELATION_BELOW: float = 0.7

# |skewness| and |excess kurtosis| at or above this are reported as non-normal shape.
SHAPE_CUTOFF: float = 0.5
