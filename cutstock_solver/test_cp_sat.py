# cutstock_solver/test_cp_sat.py
# Cross-check the exact search against the OR-Tools CP-SAT reference model.

from __future__ import annotations

from collections import Counter

import pytest

pytest.importorskip("ortools")

from cutstock_solver.logger import EventRecorder  # noqa: E402
from cutstock_solver.run import solve_exact, solve_reference  # noqa: E402
from cutstock_solver.solver_cp_sat import (  # noqa: E402
    CpSatParams,
    _candidate_units,
    scale_down,
    scale_up,
    solve_cp_sat_pools,
)
from cutstock_solver.solver_dfs import solve_dfs_pools  # noqa: E402
from cutstock_solver.types import SupplyInsufficientError  # noqa: E402
from cutstock_solver.validate import raise_on_errors, validate_solution  # noqa: E402


def test_candidate_units_capped_by_piece_count() -> None:
    assert _candidate_units([100] * 10 + [60] * 2, 3) == [100, 100, 100, 60, 60]


@pytest.mark.parametrize(
    "stock, orders, kerf, bars, waste",
    [
        ([10] * 6, [4, 4, 3, 3, 3, 3], 0.0, 2, 0.0),
        ([100] * 5, [33] * 9, 1.0, 5, 199.0),
    ],
)
def test_reference_optimum(stock, orders, kerf, bars, waste) -> None:
    sol = solve_cp_sat_pools(stock, orders, CpSatParams(kerf=kerf, time_limit_s=10.0))
    assert sol is not None
    raise_on_errors(validate_solution(sol, orders, kerf))
    assert sol.total_stocks_used == bars
    assert sol.total_waste == pytest.approx(waste)


def test_reference_prefers_shorter_stock() -> None:
    sol = solve_cp_sat_pools([100, 60], [55], CpSatParams())
    assert [b.stock_length for b in sol.bars] == [60]
    assert sol.total_waste == pytest.approx(5)


def test_reference_infeasible() -> None:
    with pytest.raises(SupplyInsufficientError):
        solve_cp_sat_pools([100], [60, 60], CpSatParams(time_limit_s=5.0))


def test_exact_matches_reference() -> None:
    args = ([10], [6], [4, 3], [2, 4], 0)
    ex = solve_exact(*args)
    ref = solve_reference(*args)
    assert ex.summary.total_stock_used == ref.summary.total_stock_used
    assert ex.summary.total_waste == pytest.approx(ref.summary.total_waste)
    assert ref.summary.is_order_fulfilled

    pieces = Counter()
    for p in ref.plans:
        for l, c in zip(p.cut_lengths, p.cut_counts):
            pieces[l] += c * p.count
    assert pieces == Counter([4, 4, 3, 3, 3, 3])


def test_scaling_rounds_toward_feasibility() -> None:
    assert scale_up(33.3334, 1000) == 33334
    assert scale_up(4.35, 1000) == 4350
    assert scale_down(99.9999, 1000) == 99999
    assert scale_down(4.35, 1000) == 4350


def test_fractional_lengths_never_overfill_a_bar() -> None:
    # 3 x 33.3334 = 100.0002 does not fit 100
    sol = solve_cp_sat_pools([100, 100], [33.3334] * 3, CpSatParams())
    assert sol is not None
    raise_on_errors(validate_solution(sol, [33.3334] * 3, 0.0))
    assert sol.total_stocks_used == 2
    assert all(b.waste >= 0 for b in sol.bars)

    ref = solve_reference([100], [2], [33.3334], [3], 0)
    ex = solve_exact([100], [2], [33.3334], [3], 0)
    assert ref.summary.is_order_fulfilled
    assert ref.summary.total_stock_used == ex.summary.total_stock_used == 2


def test_bound_pruning_keeps_reference_optimum() -> None:
    rec = EventRecorder()
    stock, orders = [10] * 6, [3] * 6
    sol = solve_dfs_pools(stock, orders, sink=rec)
    ref = solve_cp_sat_pools(stock, orders, CpSatParams())

    assert rec.last("terminated").data["pruned_bound"] > 0
    assert sol.rank() == pytest.approx(ref.rank())
