# cutstock_solver/io_csv.py
# CSV import/export helpers:
# - read stock / order lists (length,count)
# - export cutting plans (one row per pattern)
# - export the one-row summary
#
# (Plotting is handled in plotting.py.)

from __future__ import annotations

import csv
from pathlib import Path
from typing import List

from .types import CutResult, OrderSpec, StockSpec


def read_specs_csv(path: str | Path, kind: str = "stock") -> list:
    """
    Read 'length,count' rows into StockSpec (kind="stock") or OrderSpec.
    Header required; "count" may be missing (defaults to 1). Blank rows are skipped.
    """
    path = Path(path)
    cls = StockSpec if kind == "stock" else OrderSpec
    specs: List = []
    with path.open("r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        if "length" not in set(reader.fieldnames or []):
            raise ValueError(f"CSV must contain a 'length' column: {path}")
        for row in reader:
            raw = (row.get("length") or "").strip()
            if not raw:
                continue
            count = int(float(row.get("count", "1") or "1"))
            specs.append(cls(length=float(raw), count=count))
    return specs


def export_plans_csv(result: CutResult, path: str | Path) -> None:
    """
    Write one row per cutting pattern.
    Cuts are written as 'length x count' pairs separated by ';'.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = [
        "plan_index",
        "stock_length",
        "cuts",
        "pieces_per_bar",
        "count",
        "total_waste",
        "avg_waste",
    ]

    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for i, plan in enumerate(result.plans):
            w.writerow(
                {
                    "plan_index": i,
                    "stock_length": plan.stock_length,
                    "cuts": ";".join(f"{l:g}x{c}" for l, c in zip(plan.cut_lengths, plan.cut_counts)),
                    "pieces_per_bar": plan.pieces_per_bar,
                    "count": plan.count,
                    "total_waste": plan.total_waste,
                    "avg_waste": plan.avg_waste,
                }
            )


def export_summary_csv(result: CutResult, path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    s = result.summary
    fieldnames = [
        "total_stock_used",
        "total_cut_loss",
        "total_waste",
        "is_order_fulfilled",
        "num_plans",
    ]

    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        w.writerow(
            {
                "total_stock_used": s.total_stock_used,
                "total_cut_loss": s.total_cut_loss,
                "total_waste": s.total_waste,
                "is_order_fulfilled": int(bool(s.is_order_fulfilled)),
                "num_plans": len(result.plans),
            }
        )


def export_all(result: CutResult, out_dir: str | Path, prefix: str = "result") -> None:
    """
    Export plans and summary into out_dir.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    export_plans_csv(result, out_dir / f"{prefix}_plans.csv")
    export_summary_csv(result, out_dir / f"{prefix}_summary.csv")
