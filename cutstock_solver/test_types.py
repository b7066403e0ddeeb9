# cutstock_solver/test_types.py
# Data model: spec validation, pool expansion, bar bookkeeping, result shape.
#   python -m pytest cutstock_solver

from __future__ import annotations

import pytest

from cutstock_solver.types import (
    BarUsage,
    InvariantViolationError,
    JobSpec,
    OrderSpec,
    Solution,
    StockSpec,
    empty_result,
    expand_orders,
    expand_stock,
    make_specs,
)


def test_specs_reject_negative_values() -> None:
    with pytest.raises(ValueError):
        StockSpec(length=-1, count=1)
    with pytest.raises(ValueError):
        OrderSpec(length=10, count=-2)
    with pytest.raises(ValueError):
        JobSpec(stock=(), orders=(), kerf=-0.5)


def test_make_specs_size_mismatch() -> None:
    with pytest.raises(ValueError):
        make_specs([100, 200], [1], "stock")


def test_expand_sorts_descending() -> None:
    stock = expand_stock([StockSpec(100, 2), StockSpec(200, 1), StockSpec(150, 0)])
    assert stock == [200.0, 100.0, 100.0]

    orders = expand_orders(make_specs([30, 60], [2, 1], "order"))
    assert orders == [60.0, 30.0, 30.0]


def test_bar_place_and_kerf() -> None:
    bar = BarUsage.open(100, 60)
    assert bar.waste == 40
    assert bar.fits(40, 0.0)
    assert not bar.fits(40, 1.0)

    used = bar.place(30, 1.0)
    assert used == 31
    assert bar.cuts == [60, 30]
    assert bar.waste == pytest.approx(9)
    bar.check(kerf=1.0)


def test_bar_check_detects_broken_balance() -> None:
    with pytest.raises(InvariantViolationError):
        BarUsage(stock_length=100, cuts=[60], waste=30).check(kerf=0.0)
    with pytest.raises(InvariantViolationError):
        BarUsage(stock_length=100, cuts=[60, 50], waste=-10).check(kerf=0.0)


def test_solution_rank_and_copy() -> None:
    sol = Solution(bars=[BarUsage.open(100, 60), BarUsage.open(100, 90)])
    assert sol.rank() == (2, 50)
    assert sorted(sol.all_cuts()) == [60, 90]

    clone = sol.copy()
    clone.bars[0].place(20, 0.0)
    assert sol.bars[0].cuts == [60]


def test_job_arrays() -> None:
    job = JobSpec(stock=(StockSpec(6000, 4),), orders=(OrderSpec(2500, 3), OrderSpec(1200, 1)), kerf=3)
    assert job.arrays() == ([6000], [4], [2500, 1200], [3, 1])


def test_empty_result_shape() -> None:
    d = empty_result().to_dict()
    assert d == {
        "plans": [],
        "summary": {
            "totalStockUsed": 0,
            "totalCutLoss": 0.0,
            "totalWaste": 0.0,
            "isOrderFulfilled": False,
        },
    }
