# cutstock_solver/validate.py
# Validation utilities:
# - per-bar mass balance and non-negative waste
# - coverage: every order piece cut exactly once
# - verify_solution(): the summary check used to decide "order fulfilled"
#
# Useful both during development and to sanity-check solver output.

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .config import DEFAULTS
from .metrics import kerf_loss
from .types import BarUsage, InvariantViolationError, Solution


@dataclass(frozen=True)
class ValidationIssue:
    level: str   # "ERROR" or "WARN"
    message: str
    bar_index: Optional[int] = None


@dataclass(frozen=True)
class Verification:
    is_valid: bool
    total_order_length: float
    total_cut_waste: float
    total_stock_length: float
    calculated_total: float
    difference: float


def validate_bars(bars: Iterable[BarUsage], kerf: float, eps: float = DEFAULTS.bar_eps) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for i, bar in enumerate(bars):
        if not bar.cuts:
            issues.append(ValidationIssue(level="WARN", message="Bar has no cuts", bar_index=i))
        if bar.waste < -eps:
            issues.append(
                ValidationIssue(level="ERROR", message=f"Negative waste: {bar.waste}", bar_index=i)
            )
        balance = sum(bar.cuts) + kerf_loss(bar.cuts, kerf) + bar.waste
        if abs(balance - bar.stock_length) > eps:
            issues.append(
                ValidationIssue(
                    level="ERROR",
                    message=(
                        f"Mass balance broken: cuts={sum(bar.cuts)} kerf={kerf_loss(bar.cuts, kerf)} "
                        f"waste={bar.waste} stock={bar.stock_length}"
                    ),
                    bar_index=i,
                )
            )
    return issues


def validate_coverage(bars: Iterable[BarUsage], orders: Sequence[float]) -> List[ValidationIssue]:
    """Multiset of all cuts must equal the expanded order pool."""
    cut = Counter()
    for bar in bars:
        cut.update(bar.cuts)
    want = Counter(orders)
    issues: List[ValidationIssue] = []
    missing = want - cut
    extra = cut - want
    if missing:
        issues.append(ValidationIssue(level="ERROR", message=f"Missing pieces: {dict(missing)}"))
    if extra:
        issues.append(ValidationIssue(level="ERROR", message=f"Extra pieces: {dict(extra)}"))
    return issues


def validate_solution(sol: Solution, orders: Sequence[float], kerf: float) -> List[ValidationIssue]:
    """
    Validate a complete solution.
    Returns a list of issues (empty if OK).
    """
    issues = validate_bars(sol.bars, kerf)
    issues.extend(validate_coverage(sol.bars, orders))
    if not sol.bars:
        issues.append(ValidationIssue(level="WARN", message="Solution has 0 bars."))
    return issues


def raise_on_errors(issues: List[ValidationIssue]) -> None:
    errs = [i for i in issues if i.level.upper() == "ERROR"]
    if errs:
        msg = "\n".join(f"[{e.level}] bar={e.bar_index} :: {e.message}" for e in errs)
        raise InvariantViolationError("Validation failed:\n" + msg)


def verify_solution(
    sol: Solution,
    orders: Sequence[float],
    kerf: float,
    eps: float = DEFAULTS.mass_balance_eps,
) -> Verification:
    """
    Recompute totals from the cut lists alone.
    Valid iff stock length matches orders + kerf loss + waste, and the covered
    order length matches the expanded order pool. Never mutates `sol`.
    """
    total_order = sum(sum(b.cuts) for b in sol.bars)
    total_kerf = sum(kerf_loss(b.cuts, kerf) for b in sol.bars)
    total_stock = sum(b.stock_length for b in sol.bars)
    total_waste = sum(b.waste for b in sol.bars)

    calculated = total_order + total_kerf + total_waste
    diff = total_stock - calculated
    is_valid = abs(diff) < eps and abs(total_order - sum(orders)) < eps

    return Verification(
        is_valid=is_valid,
        total_order_length=total_order,
        total_cut_waste=total_kerf,
        total_stock_length=total_stock,
        calculated_total=calculated,
        difference=diff,
    )
