"""
DAO sustainability scoring.

Each DAO gets four KPI scores (each at most 3) whose sum decides the sustainability level.

Scoring rules
- Network participation (rate %):  < 10 -> 1, <= 40 -> 2, otherwise 3.
- Accumulated funds (treasury USD, circulating %):
  < 1e8 -> 0.75; <= 1e9 -> 1.5 when circulating < 50 else 2.25; otherwise 3.
- Voting efficiency (approval %, avg duration days):
  approval < 30 or duration < 2 -> 1; 3 <= duration <= 14 -> 2 when approval <= 70,
  3 when approval > 70; anything else -> 1.
- Decentralization (largest holder %, participation %, on-chain automation):
  > 66 -> 0.6; > 33 -> 1.2; > 10 -> 2.4 when participation >= 10 and automation is "Yes",
  else 1.8; otherwise 3.
- Level: total >= 9 high, >= 6 medium, otherwise low.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import polars as pl

from daokpi.core.grammar import SustainabilityLevel
from daokpi.core.metrics import DAO_NAME_FIELD
from daokpi.core.schema import SustainabilityScore
from daokpi.io.errors import IoSchemaError
from daokpi.io.validate import validate_frame

logger = logging.getLogger(__name__)

__all__ = [
    "SCORING_COLUMNS",
    "participation_score",
    "funds_score",
    "voting_score",
    "decentralization_score",
    "sustainability_level",
    "score_dao",
    "score_frame",
    "level_counts",
    "average_scores",
]

SCORING_COLUMNS: tuple[str, ...] = (
    "participation_rate",
    "treasury_value_usd",
    "circulating_token_percentage",
    "approval_rate",
    "avg_voting_duration_days",
    "largest_holder_percent",
)


def participation_score(rate: float) -> float:
    if rate < 10:
        return 1.0
    if rate <= 40:
        return 2.0
    return 3.0


def funds_score(treasury_usd: float, circulating_percent: float) -> float:
    if treasury_usd < 1e8:
        return 0.75
    if treasury_usd <= 1e9:
        return 1.5 if circulating_percent < 50 else 2.25
    return 3.0


def voting_score(approval_rate: float, duration_days: float) -> float:
    if approval_rate < 30 or duration_days < 2:
        return 1.0
    if 3 <= duration_days <= 14:
        return 2.0 if approval_rate <= 70 else 3.0
    return 1.0


def decentralization_score(
    largest_holder_percent: float,
    participation_rate: float,
    on_chain_automation: str | None,
) -> float:
    if largest_holder_percent > 66:
        return 0.6
    if largest_holder_percent > 33:
        return 1.2
    if largest_holder_percent > 10:
        if participation_rate >= 10 and on_chain_automation == "Yes":
            return 2.4
        return 1.8
    return 3.0


def sustainability_level(total: float) -> SustainabilityLevel:
    if total >= 9:
        return SustainabilityLevel.HIGH
    if total >= 6:
        return SustainabilityLevel.MEDIUM
    return SustainabilityLevel.LOW


def score_dao(
    dao_name: str,
    *,
    participation_rate: float,
    treasury_value_usd: float,
    circulating_token_percentage: float,
    approval_rate: float,
    avg_voting_duration_days: float,
    largest_holder_percent: float,
    on_chain_automation: str | None = None,
) -> SustainabilityScore:
    """
    Score one DAO from its KPI values.

    Examples:
        >>> s = score_dao(
        ...     "example",
        ...     participation_rate=45, treasury_value_usd=2e9, circulating_token_percentage=60,
        ...     approval_rate=80, avg_voting_duration_days=7, largest_holder_percent=5,
        ... )
        >>> s.total, s.level.value
        (12.0, 'high')
    """
    p = participation_score(participation_rate)
    f = funds_score(treasury_value_usd, circulating_token_percentage)
    v = voting_score(approval_rate, avg_voting_duration_days)
    d = decentralization_score(largest_holder_percent, participation_rate, on_chain_automation)
    total = p + f + v + d
    return SustainabilityScore(
        dao_name=dao_name,
        participation=p,
        funds=f,
        voting=v,
        decentralization=d,
        total=total,
        level=sustainability_level(total),
    )


def score_frame(df: pl.DataFrame) -> list[SustainabilityScore]:
    """
    Score every DAO in a records frame.

    Rows missing any scoring input are skipped (and counted in a log record) rather than
    scored with a guessed value. A missing on_chain_automation counts as "No".

    Raises:
        IoSchemaError: If a scoring column is missing from the frame.
    """
    df = validate_frame(df)
    missing = [c for c in SCORING_COLUMNS if c not in df.columns]
    if missing:
        raise IoSchemaError(f"missing scoring columns: {missing!r}")
    automation = "on_chain_automation"
    cols = [DAO_NAME_FIELD, *SCORING_COLUMNS]
    if automation in df.columns:
        cols.append(automation)
    usable = df.select(cols).drop_nulls(subset=list(SCORING_COLUMNS))
    skipped = df.height - usable.height
    if skipped:
        logger.warning("skipped %d of %d DAOs with missing scoring inputs", skipped, df.height)
    out: list[SustainabilityScore] = []
    for row in usable.iter_rows(named=True):
        out.append(
            score_dao(
                row[DAO_NAME_FIELD] or "",
                participation_rate=row["participation_rate"],
                treasury_value_usd=row["treasury_value_usd"],
                circulating_token_percentage=row["circulating_token_percentage"],
                approval_rate=row["approval_rate"],
                avg_voting_duration_days=row["avg_voting_duration_days"],
                largest_holder_percent=row["largest_holder_percent"],
                on_chain_automation=row.get(automation),
            )
        )
    return out


def level_counts(scores: Sequence[SustainabilityScore]) -> dict[str, int]:
    """Number of DAOs per sustainability level (every level present, possibly 0)."""
    counts = {level.value: 0 for level in SustainabilityLevel}
    for s in scores:
        counts[s.level.value] += 1
    return counts


def average_scores(scores: Sequence[SustainabilityScore]) -> dict[str, float]:
    """Mean of each KPI score and of the total; empty input gives an empty dict."""
    if not scores:
        return {}
    n = len(scores)
    return {
        "participation": sum(s.participation for s in scores) / n,
        "funds": sum(s.funds for s in scores) / n,
        "voting": sum(s.voting for s in scores) / n,
        "decentralization": sum(s.decentralization for s in scores) / n,
        "total": sum(s.total for s in scores) / n,
    }
