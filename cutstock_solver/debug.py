# cutstock_solver/debug.py
# Debug / inspection helpers:
# - pretty-print cutting plans
# - one-screen text report of a CutResult

from __future__ import annotations

from typing import List

from .types import CuttingPlan, CutResult


def format_plan(plan: CuttingPlan, index: int = 0) -> str:
    cuts = " + ".join(f"{l:g}x{c}" for l, c in zip(plan.cut_lengths, plan.cut_counts))
    return (
        f"[P{index}] stock={plan.stock_length:g}  x{plan.count:<3d} "
        f"cuts: {cuts}  waste/bar={plan.avg_waste:g}  waste={plan.total_waste:g}"
    )


def format_result(result: CutResult) -> str:
    s = result.summary
    lines: List[str] = [
        f"Bars used: {s.total_stock_used}",
        f"Total waste: {s.total_waste:g}",
        f"Kerf loss: {s.total_cut_loss:g}",
        f"Order fulfilled: {'yes' if s.is_order_fulfilled else 'NO'}",
    ]
    if result.plans:
        lines.append("-- Plans --")
        lines.extend(format_plan(p, i) for i, p in enumerate(result.plans))
    return "\n".join(lines)


def print_result(result: CutResult) -> None:
    print(format_result(result))
