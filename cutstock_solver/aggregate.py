# cutstock_solver/aggregate.py
# Group consumed bars into canonical cutting patterns.
#
# Pattern key = (stock_length, ((cut_length, count), ...)) with cut lengths
# descending. Output order is the order in which each pattern first appears.

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Tuple

from .types import BarUsage, CuttingPlan, Solution

PatternKey = Tuple[float, Tuple[Tuple[float, int], ...]]


def pattern_key(bar: BarUsage) -> PatternKey:
    counts = Counter(bar.cuts)
    return bar.stock_length, tuple(sorted(counts.items(), key=lambda kv: -kv[0]))


def aggregate_plans(solution: Solution | Iterable[BarUsage]) -> List[CuttingPlan]:
    """Build CuttingPlan rows from a final solution (read-only)."""
    bars = solution.bars if isinstance(solution, Solution) else solution

    grouped: Dict[PatternKey, List[float]] = {}  # key -> [count, total_waste]
    for bar in bars:
        key = pattern_key(bar)
        acc = grouped.get(key)
        if acc is None:
            grouped[key] = [1, bar.waste]
        else:
            acc[0] += 1
            acc[1] += bar.waste

    plans: List[CuttingPlan] = []
    for (stock_length, cuts), (count, total_waste) in grouped.items():
        plans.append(
            CuttingPlan(
                stock_length=stock_length,
                cut_lengths=tuple(length for length, _ in cuts),
                cut_counts=tuple(n for _, n in cuts),
                count=int(count),
                total_waste=total_waste,
                avg_waste=total_waste / count,
            )
        )
    return plans
