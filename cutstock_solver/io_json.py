# cutstock_solver/io_json.py
# Load a cutting job from JSON and save results back to JSON.
#
# Expected job shape:
# {
#   "stock":  [{"length": 6000, "count": 4}, ...],
#   "orders": [{"length": 2500, "count": 3}, ...],
#   "settings": {"kerf": 3}
# }
#
# Result JSON is CutResult.to_dict() (camelCase keys, stable for front ends).

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from .types import CutResult, JobSpec, OrderSpec, StockSpec


def _read_entries(data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    entries = data.get(key)
    if entries is None:
        raise ValueError(f"JSON missing '{key}'.")
    if not isinstance(entries, list):
        raise ValueError(f"'{key}' must be a list of {{length, count}} objects.")
    return entries


def job_from_dict(data: Dict[str, Any]) -> JobSpec:
    """
    Convert a parsed job document to a JobSpec.
    - "count" defaults to 1 ("qty" is accepted as an alias)
    - "settings.kerf" defaults to 0
    """
    stock: List[StockSpec] = []
    for it in _read_entries(data, "stock"):
        if "length" not in it:
            raise ValueError(f"Stock entry missing length: {it}")
        stock.append(StockSpec(length=float(it["length"]), count=int(it.get("count", it.get("qty", 1)))))

    orders: List[OrderSpec] = []
    for it in _read_entries(data, "orders"):
        if "length" not in it:
            raise ValueError(f"Order entry missing length: {it}")
        orders.append(OrderSpec(length=float(it["length"]), count=int(it.get("count", it.get("qty", 1)))))

    settings = data.get("settings") or {}
    kerf = float(settings.get("kerf", 0.0))

    return JobSpec(stock=tuple(stock), orders=tuple(orders), kerf=kerf)


def load_job_json(path: str | Path) -> JobSpec:
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    return job_from_dict(data)


def job_to_dict(job: JobSpec) -> Dict[str, Any]:
    return {
        "stock": [{"length": s.length, "count": s.count} for s in job.stock],
        "orders": [{"length": o.length, "count": o.count} for o in job.orders],
        "settings": {"kerf": job.kerf},
    }


def save_job_json(job: JobSpec, path: str | Path, *, indent: int = 2) -> None:
    """Write a job in the same shape load_job_json reads (handy for sample data)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(job_to_dict(job), f, ensure_ascii=False, indent=indent)


def save_result_json(result: CutResult, path: str | Path, *, indent: int = 2) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, ensure_ascii=False, indent=indent)
