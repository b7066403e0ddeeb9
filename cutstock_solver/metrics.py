# cutstock_solver/metrics.py
# Metrics for 1D cutting:
# - kerf loss (one kerf per cut beyond the first piece of a bar)
# - bar utilization
# - solution totals
#
# These metrics are solver-agnostic: they work for any bar list.

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .types import BarUsage, Solution


@dataclass(frozen=True)
class Metrics:
    bars: int
    stock_length: float
    used_length: float
    cut_loss: float
    waste: float

    @property
    def utilization(self) -> float:
        return self.used_length / self.stock_length if self.stock_length > 0 else 0.0


def kerf_loss(cuts: Sequence[float], kerf: float) -> float:
    return max(0, len(cuts) - 1) * kerf


def bar_utilization(bar: BarUsage) -> float:
    """(stock - waste) / stock; a zero-length bar counts as fully used."""
    if bar.stock_length <= 0:
        return 1.0
    return (bar.stock_length - bar.waste) / bar.stock_length


def compute_bar_metrics(bar: BarUsage, kerf: float) -> Metrics:
    return Metrics(
        bars=1,
        stock_length=bar.stock_length,
        used_length=sum(bar.cuts),
        cut_loss=kerf_loss(bar.cuts, kerf),
        waste=bar.waste,
    )


def compute_solution_metrics(solution: Solution | Iterable[BarUsage], kerf: float) -> Metrics:
    """
    Aggregate metrics across bars.
    Returns totals (sum).
    """
    bars = solution.bars if isinstance(solution, Solution) else list(solution)
    n = 0
    stock = used = loss = waste = 0.0
    for b in bars:
        m = compute_bar_metrics(b, kerf)
        n += 1
        stock += m.stock_length
        used += m.used_length
        loss += m.cut_loss
        waste += m.waste
    return Metrics(bars=n, stock_length=stock, used_length=used, cut_loss=loss, waste=waste)
