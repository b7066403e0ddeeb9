# cutstock_solver/solver_greedy.py
# Greedy decreasing packers for 1D cutting stock:
# - first-fit decreasing (FFD): first open bar with room, in creation order
# - best-fit decreasing (BFD): open bar left with the least room after the cut
#
# Both consume the stock pool longest-first and open a new bar only when no
# open bar can take the piece. Running out of stock raises
# SupplyInsufficientError; there are no partial results.

from __future__ import annotations

from typing import List, Optional, Sequence

from .types import BarUsage, Solution, SupplyInsufficientError


class StockFeed:
    """Hands out stock units longest-first."""

    def __init__(self, stock: Sequence[float]) -> None:
        self._pool = sorted(stock, reverse=True)
        self._next = 0

    @property
    def remaining(self) -> int:
        return len(self._pool) - self._next

    def open_bar(self, piece: float) -> BarUsage:
        if self._next >= len(self._pool):
            raise SupplyInsufficientError(f"Stock exhausted while placing piece {piece}")
        length = self._pool[self._next]
        if piece > length:
            # pool is descending, nothing later can hold it either
            raise SupplyInsufficientError(f"No remaining stock can hold piece {piece} (next={length})")
        self._next += 1
        return BarUsage.open(length, piece)


def first_fit_index(bars: List[BarUsage], piece: float, kerf: float) -> Optional[int]:
    for i, bar in enumerate(bars):
        if bar.fits(piece, kerf):
            return i
    return None


def best_fit_index(bars: List[BarUsage], piece: float, kerf: float) -> Optional[int]:
    best: Optional[int] = None
    best_left = float("inf")
    for i, bar in enumerate(bars):
        need = bar.required(piece, kerf)
        if need <= bar.waste:
            left = bar.waste - need
            if left < best_left:
                best_left = left
                best = i
    return best


def _pack(stock: Sequence[float], orders: Sequence[float], kerf: float, choose) -> Solution:
    feed = StockFeed(stock)
    bars: List[BarUsage] = []
    for piece in sorted(orders, reverse=True):
        idx = choose(bars, piece, kerf)
        if idx is None:
            bars.append(feed.open_bar(piece))
        else:
            bars[idx].place(piece, kerf)
    return Solution(bars=bars)


def first_fit_decreasing(stock: Sequence[float], orders: Sequence[float], kerf: float = 0.0) -> Solution:
    """FFD over expanded stock/order pools."""
    return _pack(stock, orders, kerf, first_fit_index)


def best_fit_decreasing(stock: Sequence[float], orders: Sequence[float], kerf: float = 0.0) -> Solution:
    """BFD over expanded stock/order pools."""
    return _pack(stock, orders, kerf, best_fit_index)
