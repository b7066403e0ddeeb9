# cutstock_solver/sample_data.py
# Utilities to generate sample / random cutting jobs for quick benchmarking
# and property tests.

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import List, Tuple

from .types import JobSpec, OrderSpec, StockSpec


@dataclass(frozen=True)
class RandomJobConfig:
    seed: int = 123

    # distinct stock lengths and their sizes (mm)
    n_stock_lengths: Tuple[int, int] = (1, 3)
    stock_length_range: Tuple[int, int] = (3000, 6000)
    stock_count_range: Tuple[int, int] = (1, 6)

    # distinct order lengths, as a fraction of the shortest stock length
    n_order_lengths: Tuple[int, int] = (2, 6)
    order_fraction_range: Tuple[float, float] = (0.08, 0.6)
    order_count_range: Tuple[int, int] = (1, 4)

    kerf_choices: Tuple[float, ...] = (0.0, 2.0, 3.0, 5.0)

    # top up stock counts so one bar per piece is always available
    ensure_supply: bool = True


def generate_random_job(cfg: RandomJobConfig) -> JobSpec:
    """
    Generate a JobSpec. Every order piece is no longer than the shortest stock
    length, so with ensure_supply=True any packer that opens one bar per
    piece in the worst case can always complete the job.
    """
    rnd = random.Random(cfg.seed)

    n_stock = rnd.randint(*cfg.n_stock_lengths)
    stock_lengths = sorted({rnd.randint(*cfg.stock_length_range) for _ in range(n_stock)}, reverse=True)
    stock_counts = [rnd.randint(*cfg.stock_count_range) for _ in stock_lengths]

    shortest = min(stock_lengths)
    n_orders = rnd.randint(*cfg.n_order_lengths)
    orders: List[OrderSpec] = []
    for _ in range(n_orders):
        frac = rnd.uniform(*cfg.order_fraction_range)
        length = max(1, int(round(shortest * frac)))
        orders.append(OrderSpec(length=float(length), count=rnd.randint(*cfg.order_count_range)))

    if cfg.ensure_supply:
        n_pieces = sum(o.count for o in orders)
        missing = n_pieces - sum(stock_counts)
        if missing > 0:
            stock_counts[-1] += missing

    stock = tuple(StockSpec(length=float(L), count=c) for L, c in zip(stock_lengths, stock_counts))
    return JobSpec(stock=stock, orders=tuple(orders), kerf=float(rnd.choice(cfg.kerf_choices)))


def generate_random_jobs(n: int, base: RandomJobConfig = RandomJobConfig()) -> List[JobSpec]:
    """n jobs with consecutive seeds starting at base.seed."""
    out: List[JobSpec] = []
    for i in range(n):
        cfg = replace(base, seed=base.seed + i)
        out.append(generate_random_job(cfg))
    return out
