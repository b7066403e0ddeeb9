# cutstock_solver/__init__.py
"""
Cutstock Solver package (1D bars / profiles / pipes).

Current state:
- Exact branch-and-bound search (lexicographic: fewest bars, then least waste)
  - first-fit-decreasing seed, so a valid plan always exists when supply allows
  - revisit, dominance and capacity-bound pruning
  - wall-clock and node budgets with graceful degrade
- Heuristic engine: best of hybrid (BFD + swap search + repack), FFD and BFD
- Solution verifier and cutting-plan aggregation
- OR-Tools CP-SAT reference model for cross-checking small jobs
- matplotlib visualization of all cutting patterns in one figure
"""

from .types import (
    StockSpec,
    OrderSpec,
    JobSpec,
    BarUsage,
    Solution,
    CuttingPlan,
    CutSummary,
    CutResult,
    SupplyInsufficientError,
    InvariantViolationError,
    make_specs,
    expand_stock,
    expand_orders,
    empty_result,
)

from .logger import (
    SolveEvent,
    EventRecorder,
    logger_sink,
)

from .metrics import (
    Metrics,
    kerf_loss,
    bar_utilization,
    compute_solution_metrics,
)

from .validate import (
    ValidationIssue,
    Verification,
    validate_solution,
    verify_solution,
)

from .aggregate import aggregate_plans

from .plotting import (
    PlotStyle,
    plot_result,
    show_result,
    save_result_png,
)

from .run import (
    solve_exact,
    solve_heuristic,
    solve_reference,
    solve_job,
)

__all__ = [
    # types
    "StockSpec",
    "OrderSpec",
    "JobSpec",
    "BarUsage",
    "Solution",
    "CuttingPlan",
    "CutSummary",
    "CutResult",
    "SupplyInsufficientError",
    "InvariantViolationError",
    "make_specs",
    "expand_stock",
    "expand_orders",
    "empty_result",
    # events
    "SolveEvent",
    "EventRecorder",
    "logger_sink",
    # metrics
    "Metrics",
    "kerf_loss",
    "bar_utilization",
    "compute_solution_metrics",
    # validation
    "ValidationIssue",
    "Verification",
    "validate_solution",
    "verify_solution",
    "aggregate_plans",
    # plotting
    "PlotStyle",
    "plot_result",
    "show_result",
    "save_result_png",
    # entry points
    "solve_exact",
    "solve_heuristic",
    "solve_reference",
    "solve_job",
]
