from daokpi.core.schema import CorrelationResult, DescriptiveSummary, HistogramBin
from daokpi.core.serde import (
    json_dumps_canonical,
    json_loads,
    model_from_json,
    model_to_json,
    models_to_json,
)
from daokpi.stats.correlation import correlate
from daokpi.stats.histogram import histogram
from daokpi.stats.summary import describe


def test_json_dumps_canonical_sorted_and_unicode() -> None:
    s1 = json_dumps_canonical({"b": 2, "a": 1, "name": "Ωmega"})
    s2 = json_dumps_canonical({"name": "Ωmega", "a": 1, "b": 2})
    assert s1 == s2
    assert s1 == '{"a":1,"b":2,"name":"Ωmega"}'


def test_histogram_bin_roundtrip() -> None:
    b = HistogramBin(lower_bound=0.0, upper_bound=10.0, count=3, relative_frequency_percent=30.0)
    assert model_from_json(HistogramBin, model_to_json(b)) == b


def test_describe_roundtrip_preserves_numeric_fields() -> None:
    d = describe([1.5, 2.25, 3.125, 10.0, 0.1, 7.7])
    back = model_from_json(DescriptiveSummary, model_to_json(d))
    assert back == d
    assert back.moments.std == d.moments.std
    assert back.bandwidth == d.bandwidth


def test_enums_serialize_to_values() -> None:
    r = correlate([1, 2, 3], [2, 4, 7])
    payload = json_loads(model_to_json(r))
    assert payload["strength"] == "strong"
    assert model_from_json(CorrelationResult, model_to_json(r)) == r


def test_models_to_json_is_an_array() -> None:
    bins = histogram([5, 15, 25], edges=[0, 10, 20, 30])
    payload = json_loads(models_to_json(bins))
    assert [b["count"] for b in payload] == [1, 1, 1]
