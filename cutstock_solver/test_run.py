# cutstock_solver/test_run.py
# Public entry points: reference scenarios, sentinel handling, and
# whole-result properties over random jobs.

from __future__ import annotations

from collections import Counter

import pytest

from cutstock_solver.logger import EventRecorder
from cutstock_solver.run import solve_exact, solve_heuristic, solve_job
from cutstock_solver.sample_data import RandomJobConfig, generate_random_jobs
from cutstock_solver.types import CutResult, empty_result, expand_orders

ENTRY_POINTS = [solve_exact, solve_heuristic]


def _check_result(result: CutResult, orders, kerf: float) -> None:
    """Per-pattern mass balance, non-negative waste and coverage."""
    covered: Counter = Counter()
    for plan in result.plans:
        pieces = sum(plan.cut_counts)
        length = sum(l * c for l, c in zip(plan.cut_lengths, plan.cut_counts))
        assert plan.avg_waste >= -1e-6
        assert abs(length + kerf * (pieces - 1) + plan.avg_waste - plan.stock_length) < 1e-6
        for l, c in zip(plan.cut_lengths, plan.cut_counts):
            covered[l] += c * plan.count
    assert covered == Counter(orders)
    assert result.summary.total_stock_used == sum(p.count for p in result.plans)


@pytest.mark.parametrize("solve", ENTRY_POINTS)
def test_single_bar_exact_fit(solve) -> None:
    res = solve([100], [2], [60, 40], [1, 1], 0)

    assert len(res.plans) == 1
    plan = res.plans[0]
    assert plan.stock_length == 100
    assert plan.cut_lengths == (60, 40)
    assert plan.cut_counts == (1, 1)
    assert plan.count == 1
    assert plan.total_waste == 0
    assert res.summary.total_stock_used == 1
    assert res.summary.total_waste == 0
    assert res.summary.is_order_fulfilled


@pytest.mark.parametrize("solve", ENTRY_POINTS)
def test_supply_insufficient_returns_sentinel(solve) -> None:
    rec = EventRecorder()
    res = solve([100], [1], [60], [2], 0, sink=rec)
    assert res == empty_result()
    assert rec.last("supply_insufficient") is not None


@pytest.mark.parametrize("solve", ENTRY_POINTS)
def test_kerf_limits_pieces_per_bar(solve) -> None:
    # 3 x 33 + 2 kerf = 101 > 100, so 9 pieces need 5 bars
    assert solve([100], [3], [33], [9], 1) == empty_result()

    res = solve([100], [5], [33], [9], 1)
    assert res.summary.is_order_fulfilled
    assert res.summary.total_stock_used == 5
    assert res.summary.total_cut_loss == pytest.approx(4)
    _check_result(res, [33] * 9, 1.0)


def test_exact_not_worse_than_heuristic_on_bars() -> None:
    ex = solve_exact([100], [5], [33], [9], 1)
    he = solve_heuristic([100], [5], [33], [9], 1)
    assert ex.summary.total_stock_used <= he.summary.total_stock_used


@pytest.mark.parametrize("solve", ENTRY_POINTS)
def test_empty_input(solve) -> None:
    rec = EventRecorder()
    assert solve([100], [2], [], [], 0, sink=rec) == empty_result()
    assert solve([], [], [60], [1], 0) == empty_result()
    assert solve([100], [0], [60], [1], 0) == empty_result()
    assert rec.last("empty_input") is not None


@pytest.mark.parametrize("solve", ENTRY_POINTS)
def test_mismatched_arrays_raise(solve) -> None:
    with pytest.raises(ValueError):
        solve([100, 200], [1], [60], [1], 0)
    with pytest.raises(ValueError):
        solve([100], [1], [60], [1, 2], 0)


def test_exact_budget_degrades_gracefully() -> None:
    rec = EventRecorder()
    res = solve_exact([10], [6], [4, 3], [2, 4], 0, time_limit_ms=10_000, max_iterations=1, sink=rec)
    assert res.summary.is_order_fulfilled
    assert res.summary.total_stock_used == 3
    assert rec.last("terminated").data["reason"] == "iteration_limit"


def test_exact_finds_optimum() -> None:
    res = solve_exact([10], [6], [4, 3], [2, 4], 0)
    assert res.summary.total_stock_used == 2
    assert len(res.plans) == 1
    assert res.plans[0].count == 2
    assert res.plans[0].cut_lengths == (4, 3)
    assert res.plans[0].cut_counts == (1, 2)


def test_result_to_dict() -> None:
    d = solve_heuristic([100], [2], [60, 40], [1, 1], 0).to_dict()
    assert d["plans"] == [
        {
            "stockLength": 100,
            "cutLengths": [60, 40],
            "cutCounts": [1, 1],
            "count": 1,
            "totalWaste": 0,
            "avgWaste": 0,
        }
    ]
    assert d["summary"]["isOrderFulfilled"] is True


def test_solve_job_unknown_mode() -> None:
    job = generate_random_jobs(1)[0]
    with pytest.raises(ValueError):
        solve_job(job, mode="simplex")


@pytest.mark.parametrize("job", generate_random_jobs(10, RandomJobConfig(seed=2024)))
def test_random_jobs_properties(job) -> None:
    orders = expand_orders(job.orders)
    for mode in ("exact", "heuristic"):
        res = solve_job(job, mode, time_limit_ms=2000, max_iterations=20_000)
        assert res.summary.is_order_fulfilled, mode
        assert res.summary.total_waste >= -1e-6
        _check_result(res, orders, job.kerf)
        assert _distinct_patterns(res)


def _distinct_patterns(res: CutResult) -> bool:
    keys = [(p.stock_length, p.cut_lengths, p.cut_counts) for p in res.plans]
    return len(keys) == len(set(keys))
