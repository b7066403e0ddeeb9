# cutstock_solver/solver_dfs.py
# Exact branch-and-bound depth-first search for 1D cutting stock.
#
# Objective (lexicographic): fewest bars, then least total waste.
#
# Search node = (pieces not yet placed, open bars). Pieces are processed
# longest-first, so "not yet placed" is just a depth index into the sorted
# order pool. At each node the longest remaining piece either
#   - goes into the open bar it best-fits (one branch), or
#   - opens a new bar of each distinct stock length that can hold it and
#     still has supply (one branch per length, longest first).
#
# Pruning at node entry: revisited canonical state, open bars already at the
# best bar count, and a capacity lower bound on the bars still to open.
#
# The search runs on an explicit stack of frames and mutates a single working
# bar list; every applied move records what it needs to be undone.
#
# Budgets: wall-clock (ms) and node count. Either one stops the search and the
# best solution found so far is kept; the first-fit-decreasing seed is always
# a valid fallback.

from __future__ import annotations

import math
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set, Tuple

from .config import DEFAULTS
from .logger import EventSink, emit
from .solver_greedy import best_fit_index, first_fit_decreasing
from .types import BarUsage, Solution

EXTEND = "extend"
OPEN = "open"

Move = Tuple[str, float]           # (EXTEND, bar index) or (OPEN, stock length)
Undo = Tuple[str, int, float]      # (EXTEND, bar index, waste before) or (OPEN, -1, stock length)
StateKey = Tuple[int, Tuple[Tuple[float, Tuple[float, ...]], ...]]


@dataclass(frozen=True)
class SearchParams:
    kerf: float = 0.0
    time_limit_ms: float = DEFAULTS.default_time_limit_ms
    max_iterations: int = DEFAULTS.default_max_iterations


@dataclass
class SearchStats:
    iterations: int = 0
    improvements: int = 0
    pruned_revisit: int = 0
    pruned_dominance: int = 0
    pruned_bound: int = 0
    elapsed_ms: float = 0.0
    reason: str = "exhausted"   # "exhausted", "time_limit", "iteration_limit"


@dataclass
class _Frame:
    depth: int
    moves: List[Move]
    cursor: int = 0
    undo: Optional[Undo] = None


@dataclass
class DFSSolver:
    stock: Sequence[float]
    orders: Sequence[float]
    params: SearchParams = field(default_factory=SearchParams)
    sink: Optional[EventSink] = None

    def __post_init__(self) -> None:
        self.stock = sorted(self.stock, reverse=True)
        self.orders = sorted(self.orders, reverse=True)
        self.kerf = float(self.params.kerf)

        self._lengths = sorted(set(self.stock), reverse=True)
        self._supply = Counter(self.stock)
        self._bars: List[BarUsage] = []
        self._visited: Set[StateKey] = set()

        # _suffix[d] = total length of orders[d:]
        self._suffix = [0.0] * (len(self.orders) + 1)
        for i in range(len(self.orders) - 1, -1, -1):
            self._suffix[i] = self._suffix[i + 1] + self.orders[i]

        self.seed: Optional[Solution] = None
        self.best: Optional[Solution] = None
        self.stats = SearchStats()
        self._stopped = False
        self._t0 = 0.0

    # ---- public ----

    def solve(self) -> Solution:
        """
        Seed with FFD, then search. Raises SupplyInsufficientError only when
        the seed cannot be built.
        """
        self.seed = first_fit_decreasing(self.stock, self.orders, self.kerf)
        self.best = self.seed.copy()
        emit(self.sink, "seed", "dfs", bars=self.seed.total_stocks_used, waste=self.seed.total_waste)

        self._t0 = time.perf_counter()
        self._search()
        self.stats.elapsed_ms = (time.perf_counter() - self._t0) * 1000.0

        emit(
            self.sink,
            "terminated",
            "dfs",
            reason=self.stats.reason,
            iterations=self.stats.iterations,
            elapsed_ms=round(self.stats.elapsed_ms, 3),
            visited=len(self._visited),
            pruned_revisit=self.stats.pruned_revisit,
            pruned_dominance=self.stats.pruned_dominance,
            pruned_bound=self.stats.pruned_bound,
            bars=self.best.total_stocks_used,
            waste=self.best.total_waste,
        )
        return self.best

    # ---- search loop ----

    def _search(self) -> None:
        root = self._enter(0)
        if root is None:
            return
        stack: List[_Frame] = [root]
        while stack:
            frame = stack[-1]
            if frame.undo is not None:
                self._undo(frame.undo)
                frame.undo = None
            if self._stopped or frame.cursor >= len(frame.moves):
                stack.pop()
                continue
            move = frame.moves[frame.cursor]
            frame.cursor += 1
            frame.undo = self._apply(move, self.orders[frame.depth])
            child = self._enter(frame.depth + 1)
            if child is not None:
                stack.append(child)

    def _enter(self, depth: int) -> Optional[_Frame]:
        """Node entry: budgets, acceptance, pruning, then branch generation."""
        if self._should_terminate():
            return None

        if depth == len(self.orders):
            self._consider()
            return None

        if self._should_prune(depth):
            return None

        return _Frame(depth=depth, moves=self._moves(self.orders[depth]))

    def _should_terminate(self) -> bool:
        if self._stopped:
            return True
        elapsed_ms = (time.perf_counter() - self._t0) * 1000.0
        if elapsed_ms > self.params.time_limit_ms:
            self._stop("time_limit")
            return True
        self.stats.iterations += 1
        if self.stats.iterations > self.params.max_iterations:
            self._stop("iteration_limit")
            return True
        return False

    def _stop(self, reason: str) -> None:
        self._stopped = True
        self.stats.reason = reason

    def _consider(self) -> None:
        bars = len(self._bars)
        waste = sum(b.waste for b in self._bars)
        if (bars, waste) < self.best.rank():
            self.best = Solution(bars=[b.copy() for b in self._bars])
            self.stats.improvements += 1
            emit(self.sink, "improved", "dfs", bars=bars, waste=waste, iterations=self.stats.iterations)

    # ---- pruning ----

    def _state_key(self, depth: int) -> StateKey:
        # remaining pieces are orders[depth:], so depth identifies the multiset
        return depth, tuple(sorted(b.signature() for b in self._bars))

    def _should_prune(self, depth: int) -> bool:
        key = self._state_key(depth)
        if key in self._visited:
            self.stats.pruned_revisit += 1
            return True
        self._visited.add(key)

        best_bars = self.best.total_stocks_used
        open_bars = len(self._bars)
        if open_bars >= best_bars:
            self.stats.pruned_dominance += 1
            return True

        if open_bars + self._lower_bound(depth) >= best_bars:
            self.stats.pruned_bound += 1
            return True
        return False

    def _lower_bound(self, depth: int) -> float:
        """
        Minimum number of new bars for orders[depth:].
        With m new bars of length <= L the pieces consume
        S + kerf*(n - m) <= free + m*L, so m >= (S + kerf*n - free) / (L + kerf).
        """
        n = len(self.orders) - depth
        free = sum(b.waste for b in self._bars)
        need = self._suffix[depth] + n * self.kerf - free
        if need <= DEFAULTS.bar_eps:
            return 0
        longest = next((L for L in self._lengths if self._supply[L] > 0), None)
        if longest is None or longest + self.kerf <= 0:
            return math.inf
        return math.ceil(need / (longest + self.kerf) - DEFAULTS.bar_eps)

    # ---- branching ----

    def _moves(self, piece: float) -> List[Move]:
        moves: List[Move] = []
        idx = best_fit_index(self._bars, piece, self.kerf)
        if idx is not None:
            moves.append((EXTEND, idx))
        for length in self._lengths:
            if self._supply[length] > 0 and piece <= length:
                moves.append((OPEN, length))
        return moves

    def _apply(self, move: Move, piece: float) -> Undo:
        kind, arg = move
        if kind == EXTEND:
            bar = self._bars[int(arg)]
            before = bar.waste
            bar.place(piece, self.kerf)
            return EXTEND, int(arg), before
        self._supply[arg] -= 1
        self._bars.append(BarUsage.open(arg, piece))
        return OPEN, -1, arg

    def _undo(self, undo: Undo) -> None:
        kind, idx, value = undo
        if kind == EXTEND:
            bar = self._bars[idx]
            bar.cuts.pop()
            bar.waste = value
        else:
            self._bars.pop()
            self._supply[value] += 1


def solve_dfs_pools(
    stock: Sequence[float],
    orders: Sequence[float],
    params: Optional[SearchParams] = None,
    sink: Optional[EventSink] = None,
) -> Solution:
    """Run the exact search over expanded pools and return the best solution."""
    solver = DFSSolver(stock=list(stock), orders=list(orders), params=params or SearchParams(), sink=sink)
    return solver.solve()
