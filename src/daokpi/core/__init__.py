"""
Core package aggregator for daokpi contracts (grammar, errors, constants, result models, serde).

## Contracts (single source of truth)
- Grammar — named strategies (quantile method, variance mode, bandwidth rule, ...) and normalizers.
- Errors — typed failures (EmptyInputError, InsufficientDataError, InvalidParameterError, ...).
- Constants — rule coefficients and defaults.
- Schemas — frozen pydantic result models (QuantileSummary, MomentSummary, HistogramBin, DensityCurve, ...).
- Serde — canonical JSON for results.

## Notes
- Zero‑IO policy: stdlib + pydantic only; no file/network IO.
- Naming policy: enum `.value` and field names are lower_snake.
- Result models reject NaN/Infinity, so indeterminate statistics surface as errors, not values.

## Downstream usage
- daokpi.stats — computes results and returns the models defined here.
- daokpi.io — reads settings and records; raises Io* errors at the IO boundary.
- daokpi.dao — scores DAOs into SustainabilityScore rows.
- daokpi.cli — prints models via serde.model_to_json.

## Examples
```python
from daokpi.core.grammar import bandwidth_rule_from_value, BandwidthRule
bandwidth_rule_from_value("robust") == BandwidthRule.ROBUST  # True

from daokpi.core.schema import HistogramBin
HistogramBin(lower_bound=0, upper_bound=10, count=1, relative_frequency_percent=20.0)
```
"""
