"""
daokpi.dao — DAO-domain derivations on top of daokpi.io and daokpi.stats.

Public API
- participation_points, log10_values: participation scatter coordinates and log scaling.
- ThresholdPreset, PRESETS, get_preset, apply_preset: fixed KPI categorizations.
- Scoring: participation/funds/voting/decentralization scores, sustainability_level,
  score_dao, score_frame, level_counts, average_scores.
"""

from __future__ import annotations

from .participation import log10_values, participation_points
from .presets import PRESETS, ThresholdPreset, apply_preset, get_preset
from .scoring import (
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

__all__ = [
    "participation_points",
    "log10_values",
    "ThresholdPreset",
    "PRESETS",
    "get_preset",
    "apply_preset",
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
