# cutstock_solver/cli.py
# Command line runner with solver mode switch.
#
# Modes:
#   --mode exact     : branch-and-bound search (FFD seed, time/iteration budgets)
#   --mode heuristic : best of hybrid / FFD / BFD by waste
#   --mode cpsat     : OR-Tools CP-SAT reference model
#
# Usage:
#   python -m cutstock_solver --job job.json
#   python -m cutstock_solver --stock 6000x10 --orders 2500x4,1200x6 --kerf 3
#   python -m cutstock_solver --stock stock.csv --orders orders.csv --mode heuristic
#
# Exports:
#   python -m cutstock_solver --job job.json --out out/ --png plan.png
#
# Exit code is 1 when the order could not be fulfilled.

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional, Tuple

from .config import DEFAULTS, parse_pairs_text
from .debug import print_result
from .io_csv import export_all, read_specs_csv
from .io_json import load_job_json, save_result_json
from .logger import EventRecorder, get_logger, logger_sink, tee
from .plotting import PlotStyle, save_result_png
from .run import MODES, solve_job
from .types import JobSpec, OrderSpec, StockSpec


def _parse_specs(text: str, kind: str) -> Tuple:
    """'6000x4,3000x2' or a path to a length,count CSV."""
    if text.lower().endswith(".csv"):
        return tuple(read_specs_csv(Path(text), kind=kind))
    cls = StockSpec if kind == "stock" else OrderSpec
    return tuple(cls(length=L, count=n) for L, n in parse_pairs_text(text))


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="1D cutting-stock solver (bars, profiles, pipes).")
    p.add_argument("--job", type=str, default="", help="Path to job JSON (stock/orders/settings)")
    p.add_argument("--stock", type=str, default="", help="Stock as '6000x4,3000x2' or a CSV path")
    p.add_argument("--orders", type=str, default="", help="Orders as '2500x3,1200x5' or a CSV path")
    p.add_argument("--kerf", type=float, default=-1.0, help="Saw kerf. -1 = use JSON settings (or 0)")

    p.add_argument("--mode", type=str, default="exact", choices=list(MODES), help="Solver mode")
    p.add_argument("--time_ms", type=float, default=float(DEFAULTS.default_time_limit_ms), help="Time budget (ms)")
    p.add_argument("--max_iter", type=int, default=DEFAULTS.default_max_iterations, help="Exact: node budget")

    p.add_argument("--out", type=str, default="", help="Output directory for CSV + JSON exports (optional)")
    p.add_argument("--prefix", type=str, default="result", help="Export filename prefix")
    p.add_argument("--png", type=str, default="", help="Save plot as PNG file (optional)")
    p.add_argument("--no_labels", action="store_true", help="Hide piece labels in plot")
    p.add_argument("--verbose", action="store_true", help="Print solver events")
    return p


def load_job(args: argparse.Namespace) -> JobSpec:
    if args.job.strip():
        job_path = Path(args.job)
        if not job_path.exists():
            raise SystemExit(f"Job JSON not found: {job_path}")
        job = load_job_json(job_path)
    else:
        if not (args.stock.strip() and args.orders.strip()):
            raise SystemExit("Give --job, or both --stock and --orders.")
        job = JobSpec(stock=_parse_specs(args.stock, "stock"), orders=_parse_specs(args.orders, "order"))

    if args.kerf >= 0:
        job = JobSpec(stock=job.stock, orders=job.orders, kerf=float(args.kerf))
    return job


def main(argv: Optional[List[str]] = None) -> int:
    args = build_argparser().parse_args(argv)
    log = get_logger()

    try:
        job = load_job(args)
    except ValueError as e:
        raise SystemExit(f"Invalid input: {e}")

    recorder = EventRecorder()
    sink = tee(recorder, logger_sink(log) if args.verbose else None)

    result = solve_job(job, args.mode, time_limit_ms=args.time_ms, max_iterations=args.max_iter, sink=sink)

    print(f"Mode: {args.mode}")
    print(f"Kerf: {job.kerf:g}")
    print_result(result)

    term = recorder.last("terminated")
    if term is not None:
        print(f"Search stopped: {term.data.get('reason')}")

    if args.out.strip():
        outp = Path(args.out.strip())
        outp.mkdir(parents=True, exist_ok=True)
        export_all(result, out_dir=outp, prefix=args.prefix)
        save_result_json(result, outp / f"{args.prefix}.json")
        print(f"Exported CSV + JSON to: {outp}")

    if args.png.strip():
        if result.plans:
            save_result_png(result, args.png.strip(), style=PlotStyle(show_labels=not args.no_labels))
            print(f"Cutting plan saved to: {args.png.strip()}")
        else:
            log.warn("Nothing to plot: result has no plans")

    return 0 if result.summary.is_order_fulfilled else 1


if __name__ == "__main__":
    raise SystemExit(main())
