from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest


def _record(
    name: str,
    *,
    rate: Any,
    members: Any,
    voters: Any,
    treasury: Any,
    circulating: Any,
    approval: Any,
    duration: Any,
    largest: Any,
    automation: Any,
) -> dict[str, Any]:
    return {
        "dao_name": name,
        "network_participation": {
            "participation_rate": rate,
            "total_members": members,
            "num_distinct_voters": voters,
            "unique_proposers": 3,
        },
        "accumulated_funds": {
            "treasury_value_usd": treasury,
            "circulating_token_percentage": circulating,
            "total_supply": 1_000_000,
            "token_velocity": 0.5,
        },
        "voting_efficiency": {
            "approval_rate": approval,
            "avg_voting_duration_days": duration,
            "total_proposals": 10,
            "approved_proposals": 6,
        },
        "decentralisation": {
            "largest_holder_percent": largest,
            "proposer_concentration": 25,
            "on_chain_automation": automation,
        },
    }


@pytest.fixture
def dao_records() -> list[dict[str, Any]]:
    """Seven DAOs: five scorable, one with an unparseable rate, one without participation."""
    no_participation = _record(
        "Foxtrot", rate=None, members=None, voters=None, treasury=3e8, circulating=45,
        approval=65, duration=4, largest=15, automation="Yes",
    )
    del no_participation["network_participation"]
    return [
        _record(
            "Alpha", rate=45, members=1000, voters=99, treasury=2e9, circulating=60,
            approval=80, duration=7, largest=5, automation="Yes",
        ),
        _record(
            "Bravo", rate=5, members=50, voters=2, treasury=5e7, circulating=30,
            approval=20, duration=1, largest=70, automation="No",
        ),
        _record(
            "Charlie", rate=25, members=500, voters=124, treasury=5e8, circulating=40,
            approval=60, duration=5, largest=20, automation="Yes",
        ),
        _record(
            "Delta", rate="n/a", members=80, voters=4, treasury=1e7, circulating=90,
            approval=50, duration=3, largest=12, automation="No",
        ),
        _record(
            "Echo", rate="12.5", members=200, voters=24, treasury=1.5e8, circulating=55,
            approval=75, duration=10, largest=8, automation="Yes",
        ),
        no_participation,
        _record(
            "Golf", rate=150, members=10, voters=1, treasury=1e6, circulating=10,
            approval=50, duration=20, largest=40, automation="No",
        ),
    ]  # fmt: skip


@pytest.fixture
def records_path(tmp_path: Path, dao_records: list[dict[str, Any]]) -> Path:
    p = tmp_path / "dao-metrics.json"
    p.write_text(json.dumps(dao_records))
    return p
