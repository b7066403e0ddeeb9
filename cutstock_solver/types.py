# cutstock_solver/types.py
# Core data structures for 1D cutting-stock planning.
# Keep this file dependency-light so it can be imported everywhere.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence, Tuple


class SupplyInsufficientError(ValueError):
    """The stock pool cannot hold every order piece."""


class InvariantViolationError(ValueError):
    """A bar or solution broke mass balance / non-negative waste."""


# ----------------------------
# Inputs
# ----------------------------

@dataclass(frozen=True)
class StockSpec:
    """Available raw bars of one length."""
    length: float
    count: int = 1

    def __post_init__(self):
        if self.length < 0:
            raise ValueError(f"Invalid stock length: {self.length}")
        if self.count < 0:
            raise ValueError(f"Stock count must be >= 0 (length={self.length})")


@dataclass(frozen=True)
class OrderSpec:
    """Required pieces of one length."""
    length: float
    count: int = 1

    def __post_init__(self):
        if self.length < 0:
            raise ValueError(f"Invalid order length: {self.length}")
        if self.count < 0:
            raise ValueError(f"Order count must be >= 0 (length={self.length})")


def make_specs(lengths: Sequence[float], counts: Sequence[int], kind: str = "stock") -> list:
    """Zip parallel length/count arrays into StockSpec or OrderSpec objects."""
    if len(lengths) != len(counts):
        raise ValueError(
            f"{kind} lengths and counts differ in size: {len(lengths)} != {len(counts)}"
        )
    cls = StockSpec if kind == "stock" else OrderSpec
    return [cls(length=float(l), count=int(c)) for l, c in zip(lengths, counts)]


@dataclass(frozen=True)
class JobSpec:
    """A complete cutting job: stock on hand, pieces required, saw kerf."""
    stock: Tuple[StockSpec, ...]
    orders: Tuple[OrderSpec, ...]
    kerf: float = 0.0

    def __post_init__(self):
        if self.kerf < 0:
            raise ValueError(f"kerf must be >= 0, got {self.kerf}")

    def arrays(self) -> Tuple[List[float], List[int], List[float], List[int]]:
        """(stock_lengths, stock_counts, order_lengths, order_counts)"""
        return (
            [s.length for s in self.stock],
            [s.count for s in self.stock],
            [o.length for o in self.orders],
            [o.count for o in self.orders],
        )


def _expand(specs: Iterable[StockSpec | OrderSpec]) -> List[float]:
    out: List[float] = []
    for s in specs:
        out.extend([float(s.length)] * int(s.count))
    return out


def expand_stock(specs: Iterable[StockSpec]) -> List[float]:
    """Expand counts into individual stock units, sorted longest first."""
    return sorted(_expand(specs), reverse=True)


def expand_orders(specs: Iterable[OrderSpec]) -> List[float]:
    """Expand counts into individual order pieces, sorted longest first."""
    return sorted(_expand(specs), reverse=True)


# ----------------------------
# Working / solution objects
# ----------------------------

@dataclass
class BarUsage:
    """One consumed stock unit: the pieces cut from it and what is left."""
    stock_length: float
    cuts: List[float] = field(default_factory=list)
    waste: float = 0.0

    @classmethod
    def open(cls, stock_length: float, first_cut: float) -> "BarUsage":
        return cls(stock_length=stock_length, cuts=[first_cut], waste=stock_length - first_cut)

    def required(self, length: float, kerf: float) -> float:
        """Length consumed by adding one more piece (first piece costs no kerf)."""
        return length + kerf if self.cuts else length

    def fits(self, length: float, kerf: float) -> bool:
        return self.required(length, kerf) <= self.waste

    def place(self, length: float, kerf: float) -> float:
        """Append a piece; returns the length consumed."""
        need = self.required(length, kerf)
        self.cuts.append(length)
        self.waste -= need
        return need

    def copy(self) -> "BarUsage":
        return BarUsage(stock_length=self.stock_length, cuts=list(self.cuts), waste=self.waste)

    def signature(self) -> Tuple[float, Tuple[float, ...]]:
        return self.stock_length, tuple(sorted(self.cuts, reverse=True))

    def check(self, kerf: float, eps: float = 1e-6) -> None:
        """Raise if mass balance or non-negative waste is broken."""
        if self.waste < -eps:
            raise InvariantViolationError(f"Negative waste {self.waste} on bar {self.signature()}")
        used = sum(self.cuts) + kerf * max(0, len(self.cuts) - 1) + self.waste
        if abs(used - self.stock_length) > eps:
            raise InvariantViolationError(
                f"Mass balance broken on bar {self.signature()}: "
                f"cuts+kerf+waste={used} != stock={self.stock_length}"
            )


@dataclass
class Solution:
    """A list of consumed bars; totals are derived."""
    bars: List[BarUsage] = field(default_factory=list)

    @property
    def total_waste(self) -> float:
        return sum(b.waste for b in self.bars)

    @property
    def total_stocks_used(self) -> int:
        return len(self.bars)

    def rank(self) -> Tuple[int, float]:
        """Lexicographic key: fewer bars first, then less waste."""
        return self.total_stocks_used, self.total_waste

    def all_cuts(self) -> List[float]:
        out: List[float] = []
        for b in self.bars:
            out.extend(b.cuts)
        return out

    def copy(self) -> "Solution":
        return Solution(bars=[b.copy() for b in self.bars])


# ----------------------------
# Aggregated output
# ----------------------------

@dataclass(frozen=True)
class CuttingPlan:
    """One cutting pattern and how many bars share it."""
    stock_length: float
    cut_lengths: Tuple[float, ...]
    cut_counts: Tuple[int, ...]
    count: int
    total_waste: float
    avg_waste: float

    @property
    def pieces_per_bar(self) -> int:
        return sum(self.cut_counts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stockLength": self.stock_length,
            "cutLengths": list(self.cut_lengths),
            "cutCounts": list(self.cut_counts),
            "count": self.count,
            "totalWaste": self.total_waste,
            "avgWaste": self.avg_waste,
        }


@dataclass(frozen=True)
class CutSummary:
    total_stock_used: int = 0
    total_cut_loss: float = 0.0
    total_waste: float = 0.0
    is_order_fulfilled: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalStockUsed": self.total_stock_used,
            "totalCutLoss": self.total_cut_loss,
            "totalWaste": self.total_waste,
            "isOrderFulfilled": self.is_order_fulfilled,
        }


@dataclass(frozen=True)
class CutResult:
    plans: Tuple[CuttingPlan, ...] = ()
    summary: CutSummary = field(default_factory=CutSummary)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "plans": [p.to_dict() for p in self.plans],
            "summary": self.summary.to_dict(),
        }


def empty_result() -> CutResult:
    """Sentinel for empty input or an unsolvable job."""
    return CutResult(plans=(), summary=CutSummary())
