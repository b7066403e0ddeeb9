# cutstock_solver/solver_heuristic.py
# Heuristic engine: run hybrid, FFD and BFD to completion and keep the
# solution with the least total waste. Ties go to the earlier strategy in
# that order. Bar count is deliberately not part of the selection.

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .logger import EventSink, emit
from .solver_greedy import best_fit_decreasing, first_fit_decreasing
from .solver_hybrid import hybrid_optimized
from .types import Solution, SupplyInsufficientError


@dataclass(frozen=True)
class HeuristicParams:
    kerf: float = 0.0


def _strategies(sink: Optional[EventSink]) -> List[Tuple[str, Callable[..., Solution]]]:
    return [
        ("hybrid", lambda s, o, k: hybrid_optimized(s, o, k, sink=sink)),
        ("ffd", first_fit_decreasing),
        ("bfd", best_fit_decreasing),
    ]


def solve_heuristic_pools(
    stock: Sequence[float],
    orders: Sequence[float],
    params: Optional[HeuristicParams] = None,
    sink: Optional[EventSink] = None,
) -> Solution:
    """
    Best of three packers over expanded pools.
    Raises SupplyInsufficientError if the stock pool cannot hold the orders.
    """
    params = params or HeuristicParams()

    best: Optional[Solution] = None
    best_name = ""
    failure: Optional[SupplyInsufficientError] = None
    for name, run in _strategies(sink):
        try:
            sol = run(list(stock), list(orders), params.kerf)
        except SupplyInsufficientError as e:
            emit(sink, "strategy", "heuristic", name=name, failed=str(e))
            failure = e
            continue
        emit(sink, "strategy", "heuristic", name=name, bars=sol.total_stocks_used, waste=sol.total_waste)
        if best is None or sol.total_waste < best.total_waste:
            best, best_name = sol, name

    if best is None:
        raise failure or SupplyInsufficientError("No heuristic strategy placed all pieces")

    emit(sink, "selected", "heuristic", name=best_name, bars=best.total_stocks_used, waste=best.total_waste)
    return best
