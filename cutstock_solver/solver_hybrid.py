# cutstock_solver/solver_hybrid.py
# Hybrid local search on top of best-fit decreasing:
#   1) BFD seed
#   2) pairwise piece swaps between bars while a swap lowers the pair's waste
#   3) repack: walk bars from least to most utilized and try to move every
#      piece of a bar into bars already kept (first fit). A bar disappears
#      only when all of its pieces moved; otherwise nothing moves.

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .config import DEFAULTS
from .logger import EventSink, emit
from .metrics import bar_utilization, kerf_loss
from .solver_greedy import best_fit_decreasing, first_fit_index
from .types import BarUsage, Solution


def _waste_with(bar: BarUsage, out_piece: float, in_piece: float, kerf: float) -> float:
    """Waste of `bar` if out_piece were replaced by in_piece (cut count unchanged)."""
    used = sum(bar.cuts) - out_piece + in_piece
    return bar.stock_length - used - kerf_loss(bar.cuts, kerf)


def swap_pass(bars: List[BarUsage], kerf: float, eps: float = DEFAULTS.bar_eps) -> int:
    """One full pass over every bar pair and piece pair; returns swaps applied."""
    swaps = 0
    for i in range(len(bars)):
        for j in range(i + 1, len(bars)):
            a, b = bars[i], bars[j]
            for ci in range(len(a.cuts)):
                for cj in range(len(b.cuts)):
                    before = a.waste + b.waste
                    pa, pb = a.cuts[ci], b.cuts[cj]
                    wa = _waste_with(a, pa, pb, kerf)
                    wb = _waste_with(b, pb, pa, kerf)
                    if wa >= 0 and wb >= 0 and wa + wb < before - eps:
                        a.cuts[ci], b.cuts[cj] = pb, pa
                        a.waste, b.waste = wa, wb
                        swaps += 1
    return swaps


def local_swap_search(bars: List[BarUsage], kerf: float, max_passes: int = DEFAULTS.max_swap_passes) -> Tuple[int, int]:
    """Repeat swap passes until one applies nothing. Returns (passes, swaps)."""
    passes = swaps = 0
    while passes < max_passes:
        passes += 1
        n = swap_pass(bars, kerf)
        swaps += n
        if n == 0:
            break
    return passes, swaps


def _try_relocate(bar: BarUsage, kept: List[BarUsage], kerf: float) -> bool:
    """Move all pieces of `bar` into `kept` or roll every move back."""
    moved: List[Tuple[int, float]] = []  # (kept index, waste before)
    for piece in sorted(bar.cuts, reverse=True):
        idx = first_fit_index(kept, piece, kerf)
        if idx is None:
            for k, prev in reversed(moved):
                kept[k].cuts.pop()
                kept[k].waste = prev
            return False
        moved.append((idx, kept[idx].waste))
        kept[idx].place(piece, kerf)
    return True


def repack_low_utilization(bars: List[BarUsage], kerf: float) -> List[BarUsage]:
    kept: List[BarUsage] = []
    for bar in sorted(bars, key=bar_utilization):
        if not bar.cuts:
            continue
        if not _try_relocate(bar, kept, kerf):
            kept.append(bar.copy())
    return kept


def hybrid_optimized(
    stock: Sequence[float],
    orders: Sequence[float],
    kerf: float = 0.0,
    *,
    max_passes: int = DEFAULTS.max_swap_passes,
    sink: Optional[EventSink] = None,
) -> Solution:
    seed = best_fit_decreasing(stock, orders, kerf)
    bars = [b.copy() for b in seed.bars]

    passes, swaps = local_swap_search(bars, kerf, max_passes=max_passes)
    final = repack_low_utilization(bars, kerf)

    emit(
        sink,
        "local_search",
        "heuristic",
        passes=passes,
        swaps=swaps,
        bars_before=len(bars),
        bars_after=len(final),
    )
    return Solution(bars=final)
