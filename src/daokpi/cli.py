from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

import polars as pl

from daokpi.core.errors import StatsError
from daokpi.core.metrics import get_metric
from daokpi.core.serde import json_dumps_canonical, model_to_dict, model_to_json, models_to_json
from daokpi.dao.presets import get_preset
from daokpi.dao.scoring import average_scores, level_counts, score_frame
from daokpi.io.config import StatsSettings
from daokpi.io.errors import IoError, IoSchemaError
from daokpi.io.read import load_frame
from daokpi.io.validate import metric_sample, paired_sample, validate_frame
from daokpi.stats.comparison import ks_two_sample
from daokpi.stats.correlation import correlate
from daokpi.stats.density import kde_curve
from daokpi.stats.histogram import DECENTRALIZATION_EDGES, histogram
from daokpi.stats.summary import describe
from daokpi.stats.thresholds import blend_thresholds, categorize, compare_thresholds

logger = logging.getLogger(__name__)

_EDGE_PRESETS: dict[str, tuple[float, ...]] = {"decentralization": DECENTRALIZATION_EDGES}


def _float_list(text: str) -> list[float]:
    """Parse "1,2.5,10" into floats (argparse type)."""
    try:
        return [float(t) for t in text.split(",") if t.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected comma-separated numbers, got {text!r}") from exc


def _str_list(text: str) -> list[str]:
    return [t.strip() for t in text.split(",") if t.strip()]


def _parser(prog: str, description: str) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=prog, description=description)
    p.add_argument("--data", type=str, default="", help="DAO records JSON (default from settings).")
    p.add_argument("--config", type=str, default=None, help="Settings TOML (default: search).")
    p.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level.")
    return p


def _settings(args: argparse.Namespace) -> StatsSettings:
    s = StatsSettings.load(args.config).validate()
    level = logging.DEBUG if args.verbose else getattr(logging, s.log_level.upper())
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(level)
    return s


def _frame(args: argparse.Namespace, settings: StatsSettings) -> pl.DataFrame:
    path = args.data or settings.data_path
    logger.debug("loading records from %s", path)
    return validate_frame(load_frame(path))


def _cmd_describe(argv: list[str]) -> int:
    p = _parser("describe", "Descriptive summary of one metric.")
    p.add_argument("--metric", type=str, required=True, help="Metric name, e.g. participation_rate.")
    p.add_argument("--rule", type=str, default="", help="Bandwidth rule (default from settings).")
    args = p.parse_args(argv)

    s = _settings(args)
    sample = metric_sample(_frame(args, s), args.metric)
    summary = describe(
        sample,
        rule=args.rule or s.bandwidth_rule,
        mode_bins=s.mode_bins,
        fallback_bandwidth=s.fallback_bandwidth,
    )
    print(model_to_json(summary))
    return 0


def _cmd_histogram(argv: list[str]) -> int:
    p = _parser("histogram", "Histogram of one metric.")
    p.add_argument("--metric", type=str, required=True, help="Metric name.")
    g = p.add_mutually_exclusive_group()
    g.add_argument("--edges", type=_float_list, default=None, help="Comma-separated bin edges.")
    g.add_argument("--width", type=float, default=None, help="Uniform bin width.")
    g.add_argument(
        "--edge-preset",
        choices=sorted(_EDGE_PRESETS),
        default=None,
        help="Named bin edges.",
    )
    args = p.parse_args(argv)

    s = _settings(args)
    sample = metric_sample(_frame(args, s), args.metric)
    edges = _EDGE_PRESETS[args.edge_preset] if args.edge_preset else args.edges
    print(models_to_json(histogram(sample, edges=edges, width=args.width)))
    return 0


def _cmd_kde(argv: list[str]) -> int:
    p = _parser("kde", "Gaussian KDE curve of one metric.")
    p.add_argument("--metric", type=str, required=True, help="Metric name.")
    p.add_argument("--rule", type=str, default="", help="Bandwidth rule (default from settings).")
    p.add_argument("--points", type=int, default=0, help="Grid size (default from settings).")
    p.add_argument("--padding", type=float, default=0.0, help="Grid padding in bandwidths.")
    args = p.parse_args(argv)

    s = _settings(args)
    sample = metric_sample(_frame(args, s), args.metric)
    curve = kde_curve(
        sample,
        num=args.points or s.kde_points,
        rule=args.rule or s.bandwidth_rule,
        fallback=s.fallback_bandwidth,
        padding=args.padding,
    )
    print(model_to_json(curve))
    return 0


def _cmd_correlate(argv: list[str]) -> int:
    p = _parser("correlate", "Pearson correlation between two metrics.")
    p.add_argument("--x", type=str, required=True, help="First metric.")
    p.add_argument("--y", type=str, required=True, help="Second metric.")
    args = p.parse_args(argv)

    s = _settings(args)
    xs, ys = paired_sample(_frame(args, s), args.x, args.y)
    print(model_to_json(correlate(xs, ys)))
    return 0


def _cmd_compare(argv: list[str]) -> int:
    p = _parser("compare", "Compare a metric between two groups of DAOs (ECDF statistic).")
    p.add_argument("--metric", type=str, required=True, help="Metric to compare.")
    p.add_argument(
        "--by",
        type=str,
        default="on_chain_automation",
        help="Grouping metric (group A: rows where it equals --value).",
    )
    p.add_argument("--value", type=str, default="Yes", help="Value selecting group A.")
    args = p.parse_args(argv)

    s = _settings(args)
    df = _frame(args, s)
    by = get_metric(args.by).column
    if by not in df.columns:
        raise IoSchemaError(f"missing grouping column {by!r}")
    in_a = pl.col(by).cast(pl.Utf8) == args.value
    a = metric_sample(df.filter(in_a), args.metric)
    b = metric_sample(df.filter(~in_a | pl.col(by).is_null()), args.metric)
    print(model_to_json(ks_two_sample(a, b, coefficient=s.ks_coefficient)))
    return 0


def _cmd_thresholds(argv: list[str]) -> int:
    p = _parser("thresholds", "Categorize a metric by a threshold preset.")
    p.add_argument("--preset", type=str, required=True, help="Preset name, e.g. participation.")
    g = p.add_mutually_exclusive_group()
    g.add_argument("--proposed", type=_float_list, default=None, help="Cuts to compare with.")
    g.add_argument(
        "--optimize",
        action="store_true",
        help="Compare with cuts blended from Jenks, k-means, quantile and std methods.",
    )
    args = p.parse_args(argv)

    s = _settings(args)
    preset = get_preset(args.preset)
    sample = metric_sample(_frame(args, s), preset.metric)
    proposed = args.proposed
    if args.optimize:
        proposed = list(blend_thresholds(sample, classes=len(preset.labels)))
    if proposed is None:
        print(models_to_json(categorize(sample, preset.cuts, preset.labels, closed=preset.closed)))
    else:
        result = compare_thresholds(
            sample, preset.cuts, proposed, preset.labels, closed=preset.closed
        )
        print(model_to_json(result))
    return 0


def _cmd_score(argv: list[str]) -> int:
    p = _parser("score", "Sustainability scores for every DAO.")
    args = p.parse_args(argv)

    s = _settings(args)
    scores = score_frame(_frame(args, s))
    payload: dict[str, Any] = {
        "scores": [model_to_dict(x) for x in scores],
        "levels": level_counts(scores),
        "averages": average_scores(scores),
    }
    print(json_dumps_canonical(payload))
    return 0


_COMMANDS = {
    "describe": _cmd_describe,
    "histogram": _cmd_histogram,
    "kde": _cmd_kde,
    "correlate": _cmd_correlate,
    "compare": _cmd_compare,
    "thresholds": _cmd_thresholds,
    "score": _cmd_score,
}


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="daokpi", description="DAO KPI statistics CLI.")
    sub = p.add_subparsers(dest="cmd", required=True)
    for name in _COMMANDS:
        sub.add_parser(name)
    return p


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        build_argparser().print_help()
        return
    cmd, rest = argv[0], argv[1:]
    handler = _COMMANDS.get(cmd)
    if handler is None:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        code = 2
    else:
        try:
            code = handler(rest)
        except (StatsError, IoError) as exc:
            logger.error("%s failed: %s", cmd, exc)
            code = 1
    raise SystemExit(code)


if __name__ == "__main__":
    main()
