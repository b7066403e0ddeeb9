# cutstock_solver/plotting.py
# Minimal matplotlib visualization: one horizontal bar per cutting pattern.
# Each bar shows the cut pieces left to right, the kerf gaps between them
# and the trailing waste.

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from .types import CutResult, CuttingPlan


@dataclass(frozen=True)
class PlotStyle:
    show_labels: bool = True
    show_waste: bool = True
    show_grid: bool = False
    font_size: int = 7
    bar_height: float = 0.6
    waste_color: str = "#d9d9d9"
    kerf_color: str = "black"


def _hash_color(key: str) -> Tuple[float, float, float]:
    """Deterministic pastel-ish color from a string."""
    h = 2166136261
    for ch in key.encode("utf-8"):
        h ^= ch
        h *= 16777619
        h &= 0xFFFFFFFF
    r = 0.3 + ((h >> 0) & 0xFF) / 255 * 0.6
    g = 0.3 + ((h >> 8) & 0xFF) / 255 * 0.6
    b = 0.3 + ((h >> 16) & 0xFF) / 255 * 0.6
    return (r, g, b)


def _plan_pieces(plan: CuttingPlan) -> List[float]:
    out: List[float] = []
    for length, count in zip(plan.cut_lengths, plan.cut_counts):
        out.extend([length] * count)
    return out


def _kerf_gap(plan: CuttingPlan, pieces: List[float]) -> float:
    # every bar of a pattern carries the same waste, so the gap is recoverable
    if len(pieces) < 2:
        return 0.0
    return max(0.0, (plan.stock_length - sum(pieces) - plan.avg_waste) / (len(pieces) - 1))


def _plan_label(plan: CuttingPlan) -> str:
    return f"{plan.stock_length:g} x{plan.count}"


def plot_result(
    result: CutResult,
    style: Optional[PlotStyle] = None,
    figsize: Optional[Tuple[float, float]] = None,
) -> plt.Figure:
    """
    Draw every plan as a horizontal bar in one figure (top = first plan).
    """
    style = style or PlotStyle()

    n = len(result.plans)
    if n == 0:
        raise ValueError("Result has no plans to plot")

    longest = max(p.stock_length for p in result.plans)
    if figsize is None:
        figsize = (10, 0.6 * n + 1.2)

    fig, ax = plt.subplots(figsize=figsize)

    for row, plan in enumerate(result.plans):
        y = n - 1 - row
        y0 = y - style.bar_height / 2
        pieces = _plan_pieces(plan)
        gap = _kerf_gap(plan, pieces)

        ax.add_patch(Rectangle((0, y0), plan.stock_length, style.bar_height, fill=False, linewidth=1.0))

        x = 0.0
        for i, piece in enumerate(pieces):
            if i > 0 and gap > 0:
                ax.add_patch(Rectangle((x, y0), gap, style.bar_height, facecolor=style.kerf_color, linewidth=0))
                x += gap
            rect = Rectangle(
                (x, y0), piece, style.bar_height,
                facecolor=_hash_color(f"{piece:g}"), edgecolor="black", linewidth=0.6,
            )
            ax.add_patch(rect)
            if style.show_labels:
                ax.text(x + piece / 2, y, f"{piece:g}", ha="center", va="center", fontsize=style.font_size)
            x += piece

        if style.show_waste and plan.avg_waste > 0:
            ax.add_patch(
                Rectangle((x, y0), plan.avg_waste, style.bar_height, facecolor=style.waste_color, hatch="//", linewidth=0)
            )
            if style.show_labels:
                ax.text(
                    x + plan.avg_waste / 2, y, f"waste {plan.avg_waste:g}",
                    ha="center", va="center", fontsize=style.font_size,
                )

    s = result.summary
    ax.set_title(
        f"Bars {s.total_stock_used} | waste {s.total_waste:g} | kerf loss {s.total_cut_loss:g}"
        + ("" if s.is_order_fulfilled else " | NOT FULFILLED"),
        fontsize=10,
    )
    ax.set_yticks(list(range(n)))
    ax.set_yticklabels([_plan_label(p) for p in reversed(result.plans)], fontsize=style.font_size + 1)
    ax.set_xlim(0, longest * 1.02)
    ax.set_ylim(-1, n)
    if style.show_grid:
        ax.grid(True, axis="x", linewidth=0.3)
    else:
        ax.grid(False)

    fig.tight_layout()
    return fig


def show_result(result: CutResult, style: Optional[PlotStyle] = None) -> None:
    """Convenience wrapper: plot and show."""
    plot_result(result, style=style)
    plt.show()


def save_result_png(
    result: CutResult,
    path: str,
    style: Optional[PlotStyle] = None,
    dpi: int = 200,
) -> None:
    fig = plot_result(result, style=style)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
