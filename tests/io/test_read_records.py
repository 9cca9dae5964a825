from __future__ import annotations

import json
import logging
from pathlib import Path

import polars as pl
import pytest

from daokpi.core.metrics import METRICS, get_metric
from daokpi.io.errors import IoReadError
from daokpi.io.read import load_frame, lookup_path, read_records, records_frame


def test_read_records_round_trips_the_file(records_path: Path, dao_records, caplog) -> None:
    caplog.set_level(logging.INFO, logger="daokpi.io.read")
    assert read_records(records_path) == dao_records
    assert "read 7 records" in caplog.text


@pytest.mark.parametrize(
    "content",
    ["{not json", '{"dao_name": "solo"}', '[{"dao_name": "a"}, 3]'],
)
def test_read_records_rejects_malformed_files(tmp_path: Path, content: str) -> None:
    p = tmp_path / "bad.json"
    p.write_text(content)
    with pytest.raises(IoReadError):
        read_records(p)


def test_read_records_missing_file(tmp_path: Path) -> None:
    with pytest.raises(IoReadError):
        read_records(tmp_path / "absent.json")


def test_lookup_path() -> None:
    rec = {"a": {"b": {"c": 1}}, "x": 2}
    assert lookup_path(rec, ("a", "b", "c")) == 1
    assert lookup_path(rec, ("a", "z")) is None
    assert lookup_path(rec, ("x", "y")) is None


def test_records_frame_has_one_typed_column_per_metric(dao_records) -> None:
    df = records_frame(dao_records)
    assert df.height == 7
    assert df.columns[0] == "dao_name"
    assert set(df.columns[1:]) == {d.column for d in METRICS.values()}
    assert df.schema["participation_rate"] == pl.Float64
    assert df.schema["on_chain_automation"] == pl.Utf8


def test_records_frame_coerces_loose_values(dao_records) -> None:
    df = records_frame(dao_records)
    rates = df.get_column("participation_rate").to_list()
    # "n/a" and a missing section are null; "12.5" parses
    assert rates == [45.0, 5.0, 25.0, None, 12.5, None, 150.0]
    assert df.get_column("dao_name").to_list()[5] == "Foxtrot"


def test_records_frame_rejects_booleans_and_non_finite() -> None:
    recs = [
        {"dao_name": "a", "network_participation": {"participation_rate": True}},
        {"dao_name": "b", "network_participation": {"participation_rate": float("inf")}},
        {"dao_name": "c", "network_participation": {"participation_rate": [1]}},
    ]
    df = records_frame(recs, [get_metric("participation_rate")])
    assert df.columns == ["dao_name", "participation_rate"]
    assert df.get_column("participation_rate").null_count() == 3


def test_load_frame(records_path: Path) -> None:
    df = load_frame(records_path)
    assert df.height == 7
    assert df.get_column("on_chain_automation").to_list()[:2] == ["Yes", "No"]


def test_empty_array_gives_empty_frame(tmp_path: Path) -> None:
    p = tmp_path / "empty.json"
    p.write_text(json.dumps([]))
    df = load_frame(p)
    assert df.height == 0
    assert "participation_rate" in df.columns
