"""
Configuration for daokpi.

Defines StatsSettings, a frozen dataclass carrying runtime configuration for the command line
and for callers that want the same defaults. Defaults are sourced from daokpi.core.constants
(the single source of truth).

Source of truth
- daokpi.core.constants.DEFAULT_FALLBACK_BANDWIDTH, DEFAULT_KDE_POINTS, DEFAULT_MODE_BINS,
  KS_ALPHA_05_COEFFICIENT
- Bandwidth rule names from daokpi.core.grammar.BandwidthRule

Import DAG discipline
- Depends only on stdlib and daokpi.core.
- Does not import higher layers (dao, cli).

Notes
- Precedence: environment (DAOKPI_*) > TOML > defaults.
- Loose sources (env/TOML) silently ignore values that do not parse; explicit construction
  is checked by StatsSettings.validate().
"""

from __future__ import annotations

import logging
import math
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from daokpi.core.constants import (
    DEFAULT_FALLBACK_BANDWIDTH,
    DEFAULT_KDE_POINTS,
    DEFAULT_MODE_BINS,
    KS_ALPHA_05_COEFFICIENT,
)
from daokpi.core.errors import GrammarError
from daokpi.core.grammar import bandwidth_rule_from_value

from .errors import IoConfigError

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class StatsSettings:
    """
    Runtime settings for daokpi.

    Attributes:
        data_path (str): JSON file holding an array of DAO records.
        bandwidth_rule (str): Default KDE bandwidth rule ("silverman" | "scott" | "robust").
        fallback_bandwidth (float): Bandwidth used for degenerate samples (> 0).
        kde_points (int): Grid size for KDE curves (>= 2).
        mode_bins (int): Bins used for the approximate mode (>= 1).
        ks_coefficient (float): Critical-value coefficient for two-sample comparisons (> 0).
        log_level (str): Root logging level name for the command line.

    Examples:
        >>> from daokpi.io import StatsSettings
        >>> StatsSettings(bandwidth_rule="robust", kde_points=200)  # doctest: +ELLIPSIS
        StatsSettings(...)
    """

    data_path: str = "data/dao-metrics.json"
    bandwidth_rule: str = "silverman"
    fallback_bandwidth: float = DEFAULT_FALLBACK_BANDWIDTH
    kde_points: int = DEFAULT_KDE_POINTS
    mode_bins: int = DEFAULT_MODE_BINS
    ks_coefficient: float = KS_ALPHA_05_COEFFICIENT
    log_level: str = "WARNING"

    def validate(self) -> StatsSettings:
        """
        Check every field, returning self.

        Raises:
            IoConfigError: If any value is out of range or unknown.
        """
        try:
            bandwidth_rule_from_value(self.bandwidth_rule)
        except GrammarError as exc:
            raise IoConfigError(str(exc)) from exc
        for name in ("fallback_bandwidth", "ks_coefficient"):
            v = getattr(self, name)
            if not isinstance(v, (int, float)) or not math.isfinite(v) or v <= 0:
                raise IoConfigError(f"{name} must be a finite number > 0 (got {v!r})")
        if not isinstance(self.kde_points, int) or self.kde_points < 2:
            raise IoConfigError(f"kde_points must be an integer >= 2 (got {self.kde_points!r})")
        if not isinstance(self.mode_bins, int) or self.mode_bins < 1:
            raise IoConfigError(f"mode_bins must be an integer >= 1 (got {self.mode_bins!r})")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise IoConfigError(f"log_level must be one of {list(_LOG_LEVELS)} (got {self.log_level!r})")
        if not self.data_path:
            raise IoConfigError("data_path must not be empty")
        return self

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: StatsSettings, cfg: dict[str, Any] | None) -> StatsSettings:
        """Apply a loose config mapping onto StatsSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        if "data_path" in cfg and isinstance(cfg["data_path"], str) and cfg["data_path"]:
            s = replace(s, data_path=cfg["data_path"])

        if "bandwidth_rule" in cfg and isinstance(cfg["bandwidth_rule"], str):
            try:
                s = replace(s, bandwidth_rule=bandwidth_rule_from_value(cfg["bandwidth_rule"]).value)
            except GrammarError:
                logger.warning("ignoring unknown bandwidth_rule %r", cfg["bandwidth_rule"])

        for key in ("fallback_bandwidth", "ks_coefficient"):
            if key in cfg:
                try:
                    v = float(cfg[key])
                except (TypeError, ValueError):
                    continue
                if math.isfinite(v) and v > 0:
                    s = replace(s, **{key: v})

        if "kde_points" in cfg:
            try:
                v = int(cfg["kde_points"])
            except (TypeError, ValueError):
                v = 0
            if v >= 2:
                s = replace(s, kde_points=v)

        if "mode_bins" in cfg:
            try:
                v = int(cfg["mode_bins"])
            except (TypeError, ValueError):
                v = 0
            if v >= 1:
                s = replace(s, mode_bins=v)

        if "log_level" in cfg and isinstance(cfg["log_level"], str):
            level = cfg["log_level"].strip().upper()
            if level in _LOG_LEVELS:
                s = replace(s, log_level=level)

        return s

    @classmethod
    def from_env(cls, base: StatsSettings | None = None, prefix: str = "DAOKPI_") -> StatsSettings:
        """
        Build StatsSettings from environment variables. Precedence is env > base (if provided) > defaults.

        Recognized variables:
            - DAOKPI_DATA_PATH
            - DAOKPI_BANDWIDTH_RULE ("silverman" | "scott" | "robust")
            - DAOKPI_FALLBACK_BANDWIDTH
            - DAOKPI_KDE_POINTS
            - DAOKPI_MODE_BINS
            - DAOKPI_KS_COEFFICIENT
            - DAOKPI_LOG_LEVEL
        """
        s = base or cls()
        mapping: dict[str, Any] = {}
        for key in (
            "data_path",
            "bandwidth_rule",
            "fallback_bandwidth",
            "kde_points",
            "mode_bins",
            "ks_coefficient",
            "log_level",
        ):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> StatsSettings:
        """
        Build StatsSettings from a TOML file.

        Search order when `path` is None:
            1) ./daokpi.toml (with either a [stats] table or direct keys)
            2) ./pyproject.toml under [tool.daokpi.stats]

        Returns defaults if no file is present or none of them parses.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                logger.warning("could not read settings from %s: %s", p, exc)
                return None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "daokpi.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                cfg = data.get("tool")
                for key in ("daokpi", "stats"):
                    cfg = cfg.get(key) if isinstance(cfg, dict) else None
                if not isinstance(cfg, dict):
                    cfg = None
            else:
                if "stats" in data and isinstance(data["stats"], dict):
                    cfg = data["stats"]
                else:
                    cfg = data
            if cfg:
                logger.debug("loaded settings from %s", p)
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> StatsSettings:
        """
        Load StatsSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (daokpi.toml, pyproject.toml).

        Returns:
            StatsSettings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
