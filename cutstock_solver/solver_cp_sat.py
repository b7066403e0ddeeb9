# cutstock_solver/solver_cp_sat.py
# Reference CP-SAT model (OR-Tools) of the same 1D cutting-stock problem.
#
# Used to cross-check the DFS engine on small jobs and exposed as the CLI's
# "cpsat" mode. Assignment formulation:
#   x[i][j] = piece i is cut from stock unit j
#   y[j]    = stock unit j is used
# Kerf is folded into capacity: n pieces fit a bar of length L iff
#   sum(len) + kerf*(n-1) <= L   <=>   sum(len + kerf) <= L + kerf
# Lengths are scaled to integers (DEFAULTS.cp_sat_scale). Pieces and kerf
# round up, stock rounds down, so every packing the model accepts also fits
# in real lengths.
#
# Objective: bars first, then waste. Since
#   waste = sum(L_j * y_j) - sum(len) - kerf*(n - bars)
# minimizing BIG*bars + kerf*bars + sum(L_j * y_j) is equivalent.

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ortools.sat.python import cp_model

from .config import DEFAULTS
from .logger import EventSink, emit
from .types import BarUsage, Solution, SupplyInsufficientError

_ROUND_EPS = 1e-9


@dataclass(frozen=True)
class CpSatParams:
    kerf: float = 0.0
    time_limit_s: float = DEFAULTS.cp_sat_time_limit_s
    scale: int = DEFAULTS.cp_sat_scale
    num_workers: int = DEFAULTS.cp_sat_workers


def scale_up(v: float, scale: int) -> int:
    return int(math.ceil(v * scale - _ROUND_EPS))


def scale_down(v: float, scale: int) -> int:
    return int(math.floor(v * scale + _ROUND_EPS))


def _candidate_units(stock: Sequence[float], n_pieces: int) -> List[float]:
    """No job needs more bars of one length than it has pieces."""
    per_length: Dict[float, int] = {}
    units: List[float] = []
    for length in sorted(stock, reverse=True):
        if per_length.get(length, 0) < n_pieces:
            per_length[length] = per_length.get(length, 0) + 1
            units.append(length)
    return units


def solve_cp_sat_pools(
    stock: Sequence[float],
    orders: Sequence[float],
    params: Optional[CpSatParams] = None,
    sink: Optional[EventSink] = None,
) -> Optional[Solution]:
    """
    Solve with CP-SAT.
    Returns None if the time limit expires before any solution is found.
    Raises SupplyInsufficientError if the model is proven infeasible.
    """
    params = params or CpSatParams()
    pieces = sorted(orders, reverse=True)
    units = _candidate_units(stock, len(pieces))
    n, m = len(pieces), len(units)

    kerf_s = scale_up(params.kerf, params.scale)
    piece_s = [scale_up(p, params.scale) for p in pieces]
    unit_s = [scale_down(u, params.scale) for u in units]

    model = cp_model.CpModel()

    x = [[model.NewBoolVar(f"x[{i},{j}]") for j in range(m)] for i in range(n)]
    y = [model.NewBoolVar(f"y[{j}]") for j in range(m)]

    for i in range(n):
        model.AddExactlyOne(x[i])

    for j in range(m):
        model.Add(
            sum((piece_s[i] + kerf_s) * x[i][j] for i in range(n)) <= (unit_s[j] + kerf_s) * y[j]
        )

    # Symmetry break: among equal-length units, use the earlier ones first
    for j in range(m - 1):
        if units[j] == units[j + 1]:
            model.Add(y[j] >= y[j + 1])

    big = sum(unit_s) + kerf_s * m + 1
    model.Minimize(sum((big + kerf_s + unit_s[j]) * y[j] for j in range(m)))

    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = float(params.time_limit_s)
    solver.parameters.num_search_workers = int(params.num_workers)

    status = solver.Solve(model)
    emit(sink, "terminated", "cpsat", reason=solver.StatusName(status), elapsed_s=round(solver.WallTime(), 3))

    if status == cp_model.INFEASIBLE:
        raise SupplyInsufficientError("CP-SAT proved the stock cannot hold every piece")
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        return None

    bars: List[BarUsage] = []
    for j in range(m):
        cuts = [pieces[i] for i in range(n) if solver.Value(x[i][j])]
        if not cuts:
            continue
        waste = units[j] - sum(cuts) - params.kerf * (len(cuts) - 1)
        bars.append(BarUsage(stock_length=units[j], cuts=cuts, waste=waste))

    return Solution(bars=bars)
