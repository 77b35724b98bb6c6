"""Typed result shapes and statistics helpers for the analysis pipeline.

Defines ``TypedDict`` structures for experiment outputs and provides utilities
to compute aggregate statistics across batches of solver runs.
"""
from __future__ import annotations

import statistics
from typing import Any, Dict, List, Optional, TypedDict

# Per-run metrics summarized by compute_grouped_statistics
METRICS = ("time", "iterations", "steps", "evals", "score")


class StatsSummary(TypedDict, total=False):
    count: int
    mean: Optional[float]
    median: Optional[float]
    std: Optional[float]
    min: Optional[float]
    max: Optional[float]
    q25: Optional[float]
    q75: Optional[float]
    range: Optional[float]


class RunRecord(TypedDict):
    success: bool
    iterations: int
    steps: int
    time: float
    evals: int
    score: int
    timeout: bool
    seed: int
    rows: List[int]


class AlgorithmResultEntry(TypedDict, total=False):
    success_rate: float
    timeout_rate: float
    failure_rate: float
    total_runs: int
    successes: int
    failures: int
    timeouts: int
    all_time: StatsSummary
    all_iterations: StatsSummary
    all_steps: StatsSummary
    all_evals: StatsSummary
    all_score: StatsSummary
    success_time: StatsSummary
    success_iterations: StatsSummary
    failure_score: StatsSummary
    timeout_score: StatsSummary
    params: Dict[str, Any]
    raw_runs: List[RunRecord]


# results[algorithm name][N] -> aggregated entry
ExperimentResults = Dict[str, Dict[int, AlgorithmResultEntry]]


class ProgressPrinter:
    """Minimal, stdout-only progress reporter for long-running loops.

    Parameters
    ----------
    total : int
        Total number of steps/items expected. Values <= 0 are coerced to 1 to
        avoid division by zero when reporting percentages.
    label : str
        Short label printed in front of the progress counters.
    """

    def __init__(self, total: int, label: str):
        self.total = max(1, total)
        self.label = label

    def update(self, index: int, detail: str = "") -> None:
        """Print a single-line progress update to stdout."""
        percent = (index / self.total) * 100
        suffix = f" - {detail}" if detail else ""
        print(f"[{self.label}] {index}/{self.total} ({percent:.0f}%)" + suffix)


def compute_detailed_statistics(values: List[float]) -> StatsSummary:
    """Compute summary statistics for a numeric sequence.

    Returns count, mean, median, population std, min, max, lower/upper
    quartiles (nearest-rank on the sorted values) and range. When ``values`` is
    empty, all numeric fields are ``None`` and ``count`` is 0 to keep CSV/plot
    generation consistent.
    """
    if not values:
        return {
            "count": 0,
            "mean": None,
            "median": None,
            "std": None,
            "min": None,
            "max": None,
            "q25": None,
            "q75": None,
            "range": None,
        }

    ordered = sorted(float(v) for v in values)
    count = len(ordered)
    low, high = ordered[0], ordered[-1]
    return {
        "count": count,
        "mean": statistics.fmean(ordered),
        "median": statistics.median(ordered),
        "std": statistics.pstdev(ordered) if count > 1 else 0.0,
        "min": low,
        "max": high,
        "q25": ordered[count // 4] if count >= 4 else low,
        "q75": ordered[(3 * count) // 4] if count >= 4 else high,
        "range": high - low,
    }


def compute_grouped_statistics(runs: List[RunRecord]) -> AlgorithmResultEntry:
    """Aggregate run metrics by outcome group (success, failure, timeout).

    A run is a success when it ends with zero conflicts, a timeout when the
    time limit or stop signal ended it first, and a failure otherwise (a local
    optimum or an exhausted budget).

    Returns
    -------
    AlgorithmResultEntry
        Rates and counters, plus ``<group>_<metric>`` summaries for every group
        in ``all``, ``success``, ``failure``, ``timeout`` that has runs.
    """
    groups: Dict[str, List[RunRecord]] = {
        "all": runs,
        "success": [r for r in runs if r["success"]],
        "timeout": [r for r in runs if r["timeout"] and not r["success"]],
        "failure": [r for r in runs if not r["success"] and not r["timeout"]],
    }
    total = len(runs)
    stats: Dict[str, Any] = {
        "total_runs": total,
        "successes": len(groups["success"]),
        "failures": len(groups["failure"]),
        "timeouts": len(groups["timeout"]),
        "success_rate": len(groups["success"]) / total if total else 0.0,
        "timeout_rate": len(groups["timeout"]) / total if total else 0.0,
        "failure_rate": len(groups["failure"]) / total if total else 0.0,
    }

    for group, members in groups.items():
        if not members:
            continue
        for metric in METRICS:
            stats[f"{group}_{metric}"] = compute_detailed_statistics([r[metric] for r in members])

    return stats  # type: ignore[return-value]
