# cutstock_solver/__main__.py
# Package entrypoint so you can run:
#   python -m cutstock_solver --help
#
# Examples:
#   python -m cutstock_solver --job job.json
#   python -m cutstock_solver --stock 6000x10 --orders 2500x4,1200x6 --kerf 3 --mode heuristic

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
