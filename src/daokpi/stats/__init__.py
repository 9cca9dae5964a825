"""
daokpi.stats — descriptive statistics and density estimation for 1-D samples.

Public API
- Input: as_series (validated Float64 Series; shared empty/non-finite policy).
- Descriptive: quantile, quantile_summary, iqr, minimum, maximum, mean, variance, std,
  skewness, kurtosis, moment_summary, binned_mode, describe.
- Bandwidth: bandwidth, silverman_bandwidth, scott_bandwidth, robust_bandwidth.
- Density: gaussian_kde, evaluation_grid, kde_curve, trapezoid_area, scale_density,
  histogram_overlay.
- Histogram: histogram, freedman_diaconis_width, uniform_edges, DECENTRALIZATION_EDGES.
- Correlation: pearson, correlation_strength, correlate, correlation_matrix.
- Comparison: ecdf, ks_two_sample.
- Fitting: normal/log_normal/uniform pdf curves, fit_metrics, best_fit, normality_index,
  describe_shape.
- Thresholds: categorize, empirical_cuts, category_entropy, category_imbalance,
  compare_thresholds, jenks_breaks, kmeans_1d, cluster_quality, blend_thresholds.

Notes
- Pure functions over polars Series; no IO and no logging.
- Failures raise daokpi.core.errors (EmptyInputError, InsufficientDataError,
  DegenerateDistributionError, InvalidParameterError).
"""

from __future__ import annotations

from ._sample import as_series
from .bandwidth import bandwidth, robust_bandwidth, scott_bandwidth, silverman_bandwidth
from .comparison import ecdf, ks_two_sample
from .correlation import correlate, correlation_matrix, correlation_strength, pearson
from .density import (
    evaluation_grid,
    gaussian_kde,
    histogram_overlay,
    kde_curve,
    scale_density,
    trapezoid_area,
)
from .descriptive import (
    binned_mode,
    iqr,
    kurtosis,
    maximum,
    mean,
    minimum,
    moment_summary,
    quantile,
    quantile_summary,
    skewness,
    std,
    variance,
)
from .fitting import (
    best_fit,
    describe_shape,
    fit_metrics,
    fitted_curve,
    log_normal_pdf_curve,
    normal_pdf_curve,
    normality_index,
    uniform_pdf_curve,
)
from .histogram import DECENTRALIZATION_EDGES, freedman_diaconis_width, histogram, uniform_edges
from .summary import describe
from .thresholds import (
    blend_thresholds,
    categorize,
    category_entropy,
    category_imbalance,
    cluster_quality,
    compare_thresholds,
    empirical_cuts,
    jenks_breaks,
    kmeans_1d,
)

__all__ = [
    "as_series",
    "quantile",
    "quantile_summary",
    "iqr",
    "minimum",
    "maximum",
    "mean",
    "variance",
    "std",
    "skewness",
    "kurtosis",
    "moment_summary",
    "binned_mode",
    "describe",
    "bandwidth",
    "silverman_bandwidth",
    "scott_bandwidth",
    "robust_bandwidth",
    "gaussian_kde",
    "evaluation_grid",
    "kde_curve",
    "trapezoid_area",
    "scale_density",
    "histogram_overlay",
    "histogram",
    "freedman_diaconis_width",
    "uniform_edges",
    "DECENTRALIZATION_EDGES",
    "pearson",
    "correlation_strength",
    "correlate",
    "correlation_matrix",
    "ecdf",
    "ks_two_sample",
    "normal_pdf_curve",
    "log_normal_pdf_curve",
    "uniform_pdf_curve",
    "fitted_curve",
    "fit_metrics",
    "best_fit",
    "normality_index",
    "describe_shape",
    "categorize",
    "empirical_cuts",
    "category_entropy",
    "category_imbalance",
    "compare_thresholds",
    "jenks_breaks",
    "kmeans_1d",
    "cluster_quality",
    "blend_thresholds",
]
