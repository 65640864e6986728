from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import polars as pl

from bayesviz.core.errors import BayesvizError
from bayesviz.core.grammar import RootogramStyle
from bayesviz.io.config import VizSettings
from bayesviz.io.read import read_matrix, read_vector
from bayesviz.transforms.discrete import ppc_bars_data
from bayesviz.viz.ppc import ppc_bars, ppc_bars_grouped, ppc_rootogram
from bayesviz.viz.save import output_kind, save

logger = logging.getLogger("bayesviz.cli")

_COMMANDS = ("bars", "rootogram", "summary")


def _add_data_args(p: argparse.ArgumentParser, *, grouped: bool = True) -> None:
    p.add_argument("--y", type=str, required=True, help="Observed outcomes (parquet/csv/arrow).")
    p.add_argument("--y-column", type=str, default=None, help="Column of --y (default: first).")
    p.add_argument(
        "--yrep",
        type=str,
        required=True,
        help="Replicated outcomes: one draw per row, one observation per column.",
    )
    if grouped:
        p.add_argument("--group", type=str, default=None, help="Group labels (parquet/csv/arrow).")
        p.add_argument(
            "--group-column", type=str, default=None, help="Column of --group (default: first)."
        )
    p.add_argument("--prob", type=float, default=None, help="Central interval mass in [0, 1].")
    p.add_argument("--config", type=str, default=None, help="Path to a bayesviz TOML file.")
    p.add_argument("--verbose", action="store_true", help="Log debug messages to stderr.")


def _setup(args: argparse.Namespace) -> VizSettings:
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    return VizSettings.load(args.config)


def _write(chart, out: str) -> None:
    kind = output_kind(out)
    paths = save(chart, **{f"out_{kind}": out})
    for p in paths:
        print(f"[INFO] Wrote {kind} to {p}")


def _cmd_bars(argv: list[str]) -> int:
    p = argparse.ArgumentParser(
        prog="bayesviz bars", description="Bar plot of y with yrep medians and intervals."
    )
    _add_data_args(p)
    p.add_argument("--proportion", action="store_true", help="Plot proportions instead of counts.")
    p.add_argument("--out", type=str, required=True, help="Output file (.html, .png, .svg).")
    args = p.parse_args(argv)
    config = _setup(args)

    y = read_vector(args.y, args.y_column)
    yrep = read_matrix(args.yrep)
    freq = not args.proportion
    if args.group:
        group = read_vector(args.group, args.group_column)
        chart = ppc_bars_grouped(y, yrep, group, prob=args.prob, freq=freq, config=config)
    else:
        chart = ppc_bars(y, yrep, prob=args.prob, freq=freq, config=config)
    _write(chart, args.out)
    return 0


def _cmd_rootogram(argv: list[str]) -> int:
    p = argparse.ArgumentParser(
        prog="bayesviz rootogram", description="Rootogram of observed vs expected counts."
    )
    _add_data_args(p, grouped=False)
    p.add_argument(
        "--style",
        type=str,
        default=RootogramStyle.STANDING.value,
        choices=[s.value for s in RootogramStyle],
        help="Rootogram style.",
    )
    p.add_argument("--out", type=str, required=True, help="Output file (.html, .png, .svg).")
    args = p.parse_args(argv)
    config = _setup(args)

    y = read_vector(args.y, args.y_column)
    yrep = read_matrix(args.yrep)
    chart = ppc_rootogram(y, yrep, style=args.style, prob=args.prob, config=config)
    _write(chart, args.out)
    return 0


def _cmd_summary(argv: list[str]) -> int:
    p = argparse.ArgumentParser(
        prog="bayesviz summary", description="Print (or write) the discrete-outcome summary table."
    )
    _add_data_args(p)
    p.add_argument("--proportion", action="store_true", help="Summarize proportions.")
    p.add_argument("--out", type=str, default=None, help="Optional .parquet or .csv output.")
    args = p.parse_args(argv)
    config = _setup(args)

    y = read_vector(args.y, args.y_column)
    yrep = read_matrix(args.yrep)
    group = read_vector(args.group, args.group_column) if args.group else None
    table = ppc_bars_data(
        y,
        yrep,
        group=group,
        prob=config.prob if args.prob is None else args.prob,
        freq=not args.proportion,
    )
    if args.out:
        out = Path(args.out)
        if out.suffix.lower() == ".csv":
            table.write_csv(out)
        else:
            table.write_parquet(out)
        print(f"[INFO] Wrote summary to {out}")
    with pl.Config(tbl_rows=-1):
        print(table)
    return 0


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bayesviz", description="Posterior predictive check plots from tabular files."
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("bars")
    sub.add_parser("rootogram")
    sub.add_parser("summary")
    return p


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        build_argparser().print_help()
        return
    cmd, rest = argv[0], argv[1:]
    handlers = {"bars": _cmd_bars, "rootogram": _cmd_rootogram, "summary": _cmd_summary}
    if cmd not in handlers:
        print(f"Unknown command: {cmd} (expected one of {', '.join(_COMMANDS)})", file=sys.stderr)
        raise SystemExit(2)
    try:
        code = handlers[cmd](rest)
    except BayesvizError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        code = 2
    raise SystemExit(code)


if __name__ == "__main__":
    main()
