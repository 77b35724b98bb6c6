"""
Analysis and orchestration package for the N-Queens solvers.

This package contains:
- settings: global knobs, default parameters and time limits
- stats: typed summaries and aggregation helpers
- experiments: seeded batch runners (sequential and process-parallel)
- reporting: CSV exports, step-trace frames and text boards
- plots: board, score-trace and comparison charts
- cli: subcommands and argument parser of the ``queensteps`` script
"""

from . import settings as settings  # re-export for convenience
from .stats import (
    StatsSummary,
    RunRecord,
    AlgorithmResultEntry,
    ExperimentResults,
    compute_detailed_statistics,
    compute_grouped_statistics,
    ProgressPrinter,
)

__all__ = [
    # types
    "StatsSummary",
    "RunRecord",
    "AlgorithmResultEntry",
    "ExperimentResults",
    # utils
    "compute_detailed_statistics",
    "compute_grouped_statistics",
    "ProgressPrinter",
    # settings module
    "settings",
]
