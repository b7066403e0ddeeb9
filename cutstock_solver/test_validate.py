# cutstock_solver/test_validate.py
# Validation, verification, metrics and plan aggregation.

from __future__ import annotations

import pytest

from cutstock_solver.aggregate import aggregate_plans, pattern_key
from cutstock_solver.metrics import bar_utilization, compute_solution_metrics, kerf_loss
from cutstock_solver.types import BarUsage, InvariantViolationError, Solution
from cutstock_solver.validate import (
    raise_on_errors,
    validate_bars,
    validate_coverage,
    validate_solution,
    verify_solution,
)


def _sol() -> Solution:
    return Solution(
        bars=[
            BarUsage(100, [60, 38], 0),
            BarUsage(100, [50], 50),
        ]
    )


def test_verify_valid_solution() -> None:
    sol = _sol()
    v = verify_solution(sol, [60, 50, 38], kerf=2.0)
    assert v.is_valid
    assert v.total_order_length == 148
    assert v.total_cut_waste == 2
    assert v.total_stock_length == 200
    assert v.difference == pytest.approx(0)


def test_verify_detects_tampering_without_mutating() -> None:
    sol = _sol()
    sol.bars[1].waste = 45
    v = verify_solution(sol, [60, 50, 38], kerf=2.0)
    assert not v.is_valid
    assert v.difference == pytest.approx(5)
    assert sol.bars[1].waste == 45


def test_verify_detects_missing_piece() -> None:
    v = verify_solution(_sol(), [60, 50, 38, 10], kerf=2.0)
    assert not v.is_valid


def test_validation_issues() -> None:
    sol = _sol()
    assert validate_solution(sol, [60, 50, 38], 2.0) == []

    issues = validate_coverage(sol.bars, [60, 50, 50])
    assert [i.level for i in issues] == ["ERROR", "ERROR"]
    with pytest.raises(InvariantViolationError):
        raise_on_errors(issues)

    warn_only = validate_bars([BarUsage(100, [], 100)], 0.0)
    assert [i.level for i in warn_only] == ["WARN"]
    raise_on_errors(warn_only)

    bad = validate_bars([BarUsage(100, [60, 50], -10)], 0.0)
    assert [i.level for i in bad] == ["ERROR"]
    assert bad[0].bar_index == 0


def test_metrics() -> None:
    assert kerf_loss([10, 20, 30], 2.5) == 5.0
    assert kerf_loss([], 3.0) == 0
    assert bar_utilization(BarUsage(100, [75], 25)) == 0.75
    assert bar_utilization(BarUsage(0, [], 0)) == 1.0

    m = compute_solution_metrics(_sol(), kerf=2.0)
    assert (m.bars, m.stock_length, m.used_length, m.cut_loss, m.waste) == (2, 200, 148, 2, 50)
    assert m.utilization == pytest.approx(0.74)


def test_aggregate_groups_in_first_seen_order() -> None:
    bars = [
        BarUsage(100, [30, 60, 30], 0),
        BarUsage(80, [50], 30),
        BarUsage(100, [60, 30, 30], 0),
        BarUsage(100, [30, 30, 60], 0),
    ]
    plans = aggregate_plans(bars)

    assert [p.stock_length for p in plans] == [100, 80]
    first = plans[0]
    assert first.cut_lengths == (60, 30)
    assert first.cut_counts == (1, 2)
    assert first.count == 3
    assert first.pieces_per_bar == 3
    assert first.total_waste == 0
    assert plans[1].avg_waste == 30

    assert pattern_key(bars[0]) == pattern_key(bars[2])
    assert aggregate_plans(bars) == plans


def test_aggregate_accumulates_waste() -> None:
    bars = [BarUsage(100, [40], 60), BarUsage(100, [40], 60), BarUsage(100, [40], 60)]
    (plan,) = aggregate_plans(Solution(bars=bars))
    assert plan.count == 3
    assert plan.total_waste == 180
    assert plan.avg_waste == 60
    assert plan.to_dict()["cutLengths"] == [40]
