# cutstock_solver/test_heuristic.py
# Heuristic engine: strategy selection by waste, tie order, failure handling.

from __future__ import annotations

from collections import Counter

import pytest

from cutstock_solver.logger import EventRecorder
from cutstock_solver.solver_heuristic import HeuristicParams, solve_heuristic_pools
from cutstock_solver.types import SupplyInsufficientError


def test_ties_go_to_hybrid() -> None:
    rec = EventRecorder()
    sol = solve_heuristic_pools([100, 100], [60, 40], sink=rec)

    assert sol.total_stocks_used == 1
    assert [e.data["name"] for e in rec.of_kind("strategy")] == ["hybrid", "ffd", "bfd"]
    assert rec.last("selected").data["name"] == "hybrid"


def test_selects_least_waste() -> None:
    rec = EventRecorder()
    stock = [120, 100, 100, 80, 80, 60]
    orders = [55, 50, 45, 40, 35, 30, 25, 20]
    sol = solve_heuristic_pools(stock, orders, HeuristicParams(kerf=2.0), sink=rec)

    wastes = [e.data["waste"] for e in rec.of_kind("strategy")]
    assert sol.total_waste == pytest.approx(min(wastes))
    assert Counter(sol.all_cuts()) == Counter(orders)


def test_all_strategies_fail() -> None:
    rec = EventRecorder()
    with pytest.raises(SupplyInsufficientError):
        solve_heuristic_pools([100], [60, 60], sink=rec)
    failed = [e for e in rec.of_kind("strategy") if "failed" in e.data]
    assert len(failed) == 3
    assert rec.last("selected") is None
