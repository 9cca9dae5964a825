from __future__ import annotations

import logging

import polars as pl
import pytest

from daokpi.core.grammar import SustainabilityLevel
from daokpi.dao.scoring import (
    average_scores,
    decentralization_score,
    funds_score,
    level_counts,
    participation_score,
    score_dao,
    score_frame,
    sustainability_level,
    voting_score,
)
from daokpi.io.errors import IoSchemaError
from daokpi.io.read import records_frame


def test_participation_score_boundaries() -> None:
    assert participation_score(9.99) == 1.0
    assert participation_score(10) == 2.0
    assert participation_score(40) == 2.0
    assert participation_score(40.01) == 3.0


def test_funds_score() -> None:
    assert funds_score(5e7, 90) == 0.75
    assert funds_score(1e8, 49) == 1.5
    assert funds_score(1e9, 50) == 2.25
    assert funds_score(1.1e9, 0) == 3.0


def test_voting_score() -> None:
    assert voting_score(29, 7) == 1.0
    assert voting_score(80, 1.5) == 1.0
    assert voting_score(70, 3) == 2.0
    assert voting_score(71, 14) == 3.0
    # two-day votes and votes longer than two weeks fall through to the lowest score
    assert voting_score(80, 2.5) == 1.0
    assert voting_score(80, 15) == 1.0


def test_decentralization_score() -> None:
    assert decentralization_score(67, 50, "Yes") == 0.6
    assert decentralization_score(34, 50, "Yes") == 1.2
    assert decentralization_score(20, 10, "Yes") == 2.4
    assert decentralization_score(20, 9, "Yes") == 1.8
    assert decentralization_score(20, 50, "No") == 1.8
    assert decentralization_score(20, 50, None) == 1.8
    assert decentralization_score(10, 0, None) == 3.0


def test_sustainability_level() -> None:
    assert sustainability_level(9) is SustainabilityLevel.HIGH
    assert sustainability_level(8.99) is SustainabilityLevel.MEDIUM
    assert sustainability_level(6) is SustainabilityLevel.MEDIUM
    assert sustainability_level(5.95) is SustainabilityLevel.LOW


def test_score_dao_top_marks() -> None:
    s = score_dao(
        "Alpha",
        participation_rate=45,
        treasury_value_usd=2e9,
        circulating_token_percentage=60,
        approval_rate=80,
        avg_voting_duration_days=7,
        largest_holder_percent=5,
        on_chain_automation="Yes",
    )
    assert (s.participation, s.funds, s.voting, s.decentralization) == (3.0, 3.0, 3.0, 3.0)
    assert s.total == 12.0
    assert s.level is SustainabilityLevel.HIGH


def test_score_frame_skips_rows_missing_inputs(dao_records, caplog) -> None:
    caplog.set_level(logging.WARNING, logger="daokpi.dao.scoring")
    scores = score_frame(records_frame(dao_records))
    by_name = {s.dao_name: s for s in scores}
    assert list(by_name) == ["Alpha", "Bravo", "Charlie", "Echo", "Golf"]
    assert by_name["Alpha"].total == pytest.approx(12.0)
    assert by_name["Bravo"].total == pytest.approx(3.35)
    assert by_name["Charlie"].total == pytest.approx(7.9)
    assert by_name["Echo"].total == pytest.approx(10.25)
    assert by_name["Golf"].total == pytest.approx(5.95)
    assert by_name["Charlie"].level is SustainabilityLevel.MEDIUM
    assert "skipped 2 of 7" in caplog.text


def test_score_frame_without_automation_column_counts_as_no() -> None:
    df = pl.DataFrame(
        {
            "dao_name": ["x"],
            "participation_rate": [25.0],
            "treasury_value_usd": [5e8],
            "circulating_token_percentage": [40.0],
            "approval_rate": [60.0],
            "avg_voting_duration_days": [5.0],
            "largest_holder_percent": [20.0],
        }
    )
    (s,) = score_frame(df)
    assert s.decentralization == 1.8


def test_score_frame_missing_column() -> None:
    with pytest.raises(IoSchemaError):
        score_frame(pl.DataFrame({"dao_name": ["x"], "participation_rate": [1.0]}))


def test_level_counts_and_averages(dao_records) -> None:
    scores = score_frame(records_frame(dao_records))
    assert level_counts(scores) == {"high": 2, "medium": 1, "low": 2}
    avg = average_scores(scores)
    assert avg["total"] == pytest.approx((12.0 + 3.35 + 7.9 + 10.25 + 5.95) / 5)
    assert avg["participation"] == pytest.approx((3 + 1 + 2 + 2 + 3) / 5)
    assert level_counts([]) == {"high": 0, "medium": 0, "low": 0}
    assert average_scores([]) == {}
