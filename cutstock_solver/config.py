# cutstock_solver/config.py
# Centralized defaults and configuration helpers.
# Keeps "magic numbers" (kerf, budgets, tolerances) in one place.

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class Defaults:
    # Typical band/circular saw kerf for profile cutting (mm)
    default_kerf: float = 0.0

    # Exact search budgets
    default_time_limit_ms: int = 10_000
    default_max_iterations: int = 1_000_000

    # Verifier tolerance on |stock - (orders + kerf loss + waste)|
    mass_balance_eps: float = 0.001
    # Per-bar tolerance used by validation / invariant checks
    bar_eps: float = 1e-6

    # Hybrid local search
    max_swap_passes: int = 100

    # CP-SAT reference model: lengths are scaled to integers by this factor
    cp_sat_scale: int = 1000
    cp_sat_time_limit_s: float = 10.0
    cp_sat_workers: int = 2


DEFAULTS = Defaults()


def _num(text: str, what: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"Invalid {what}: {text!r}") from None


def parse_pairs_text(text: str) -> List[Tuple[float, int]]:
    """
    Parse '6000x4,3000x2' -> [(6000.0, 4), (3000.0, 2)]
    A bare length ('6000') means count 1.
    """
    out: List[Tuple[float, int]] = []
    for chunk in text.replace(" ", "").split(","):
        if not chunk:
            continue
        if "x" in chunk.lower():
            a, b = chunk.lower().split("x", 1)
            out.append((_num(a, "length"), int(_num(b, "count"))))
        else:
            out.append((_num(chunk, "length"), 1))
    if not out:
        raise ValueError("pairs must be like '6000x4,3000x2'")
    return out


def parse_lengths_text(text: str) -> List[float]:
    """
    Parse '1200,800,800' -> [1200.0, 800.0, 800.0]
    """
    vals = [v.strip() for v in text.split(",") if v.strip() != ""]
    if not vals:
        raise ValueError("lengths must be like '1200,800,800'")
    return [_num(v, "length") for v in vals]


def split_pairs(pairs: List[Tuple[float, int]]) -> Tuple[List[float], List[int]]:
    """[(L, n), ...] -> ([L, ...], [n, ...]) for the array-style entry points."""
    return [p[0] for p in pairs], [p[1] for p in pairs]
