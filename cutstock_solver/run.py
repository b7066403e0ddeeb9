# cutstock_solver/run.py
# Public entry points. Each one ties together:
# - pool expansion
# - an engine (exact DFS, heuristic trio, or the CP-SAT reference)
# - validation + verification
# - plan aggregation
#
# No solver failure escapes from here: callers always get a CutResult and
# read `summary.is_order_fulfilled` to know whether the job was solved.
#
# Example:
#   from cutstock_solver import solve_exact
#   res = solve_exact([6000], [10], [2500, 1200], [4, 6], cut_width=3)

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from .aggregate import aggregate_plans
from .config import DEFAULTS
from .logger import EventSink, emit
from .solver_dfs import SearchParams, solve_dfs_pools
from .solver_heuristic import HeuristicParams, solve_heuristic_pools
from .types import (
    CutResult,
    CutSummary,
    InvariantViolationError,
    JobSpec,
    Solution,
    SupplyInsufficientError,
    empty_result,
    expand_orders,
    expand_stock,
    make_specs,
)
from .validate import raise_on_errors, validate_solution, verify_solution

MODES = ("exact", "heuristic", "cpsat")


def expand_arrays(
    stock_lengths: Sequence[float],
    stock_counts: Sequence[int],
    order_lengths: Sequence[float],
    order_counts: Sequence[int],
) -> Tuple[List[float], List[float]]:
    """Parallel length/count arrays -> (stock pool, order pool), longest first."""
    stock = expand_stock(make_specs(stock_lengths, stock_counts, "stock"))
    orders = expand_orders(make_specs(order_lengths, order_counts, "order"))
    return stock, orders


def build_result(
    solution: Solution,
    orders: Sequence[float],
    kerf: float,
    validate: bool = True,
) -> CutResult:
    """Verify a final solution and aggregate it into plans."""
    if validate:
        raise_on_errors(validate_solution(solution, orders, kerf))
    verification = verify_solution(solution, orders, kerf)
    summary = CutSummary(
        total_stock_used=solution.total_stocks_used,
        total_cut_loss=verification.total_cut_waste,
        total_waste=solution.total_waste,
        is_order_fulfilled=verification.is_valid,
    )
    return CutResult(plans=tuple(aggregate_plans(solution)), summary=summary)


def _guarded(
    engine: str,
    solve: Callable[[List[float], List[float]], Optional[Solution]],
    stock: List[float],
    orders: List[float],
    kerf: float,
    sink: Optional[EventSink],
    validate: bool,
) -> CutResult:
    if not stock or not orders:
        emit(sink, "empty_input", engine, stock=len(stock), orders=len(orders))
        return empty_result()
    try:
        sol = solve(stock, orders)
        if sol is None:
            return empty_result()
        return build_result(sol, orders, kerf, validate=validate)
    except SupplyInsufficientError as e:
        emit(sink, "supply_insufficient", engine, message=str(e))
    except InvariantViolationError as e:
        emit(sink, "invariant_violation", engine, message=str(e))
    return empty_result()


def solve_exact(
    stock_lengths: Sequence[float],
    stock_counts: Sequence[int],
    order_lengths: Sequence[float],
    order_counts: Sequence[int],
    cut_width: float = DEFAULTS.default_kerf,
    time_limit_ms: float = DEFAULTS.default_time_limit_ms,
    max_iterations: int = DEFAULTS.default_max_iterations,
    *,
    sink: Optional[EventSink] = None,
    validate: bool = True,
) -> CutResult:
    """Branch-and-bound search within the given budgets."""
    stock, orders = expand_arrays(stock_lengths, stock_counts, order_lengths, order_counts)
    params = SearchParams(
        kerf=float(cut_width),
        time_limit_ms=float(time_limit_ms),
        max_iterations=int(max_iterations),
    )
    return _guarded(
        "dfs",
        lambda s, o: solve_dfs_pools(s, o, params=params, sink=sink),
        stock,
        orders,
        params.kerf,
        sink,
        validate,
    )


def solve_heuristic(
    stock_lengths: Sequence[float],
    stock_counts: Sequence[int],
    order_lengths: Sequence[float],
    order_counts: Sequence[int],
    cut_width: float = DEFAULTS.default_kerf,
    *,
    sink: Optional[EventSink] = None,
    validate: bool = True,
) -> CutResult:
    """Best of hybrid / FFD / BFD by total waste."""
    stock, orders = expand_arrays(stock_lengths, stock_counts, order_lengths, order_counts)
    params = HeuristicParams(kerf=float(cut_width))
    return _guarded(
        "heuristic",
        lambda s, o: solve_heuristic_pools(s, o, params=params, sink=sink),
        stock,
        orders,
        params.kerf,
        sink,
        validate,
    )


def solve_reference(
    stock_lengths: Sequence[float],
    stock_counts: Sequence[int],
    order_lengths: Sequence[float],
    order_counts: Sequence[int],
    cut_width: float = DEFAULTS.default_kerf,
    time_limit_s: float = DEFAULTS.cp_sat_time_limit_s,
    *,
    sink: Optional[EventSink] = None,
    validate: bool = True,
) -> CutResult:
    """CP-SAT reference optimum (OR-Tools)."""
    from .solver_cp_sat import CpSatParams, solve_cp_sat_pools

    stock, orders = expand_arrays(stock_lengths, stock_counts, order_lengths, order_counts)
    params = CpSatParams(kerf=float(cut_width), time_limit_s=float(time_limit_s))
    return _guarded(
        "cpsat",
        lambda s, o: solve_cp_sat_pools(s, o, params=params, sink=sink),
        stock,
        orders,
        params.kerf,
        sink,
        validate,
    )


def solve_job(
    job: JobSpec,
    mode: str = "exact",
    *,
    time_limit_ms: float = DEFAULTS.default_time_limit_ms,
    max_iterations: int = DEFAULTS.default_max_iterations,
    sink: Optional[EventSink] = None,
) -> CutResult:
    """Dispatch a JobSpec to one of the entry points."""
    sl, sc, ol, oc = job.arrays()
    if mode == "exact":
        return solve_exact(sl, sc, ol, oc, job.kerf, time_limit_ms, max_iterations, sink=sink)
    if mode == "heuristic":
        return solve_heuristic(sl, sc, ol, oc, job.kerf, sink=sink)
    if mode == "cpsat":
        return solve_reference(sl, sc, ol, oc, job.kerf, time_limit_ms / 1000.0, sink=sink)
    raise ValueError(f"Unknown mode {mode!r}; expected one of {MODES}")
