"""CSV export utilities for experiment outputs and solver traces.

These helpers materialize concise per-N CSV summaries, full per-run raw data,
and step traces (one row per reported step) for downstream analysis or
spreadsheet inspection. A plain-text board renderer is included for terminal
output.
"""
from __future__ import annotations

import csv
import os
from typing import List, Optional, Sequence

import pandas as pd

from . import settings
from .stats import ExperimentResults
from queensteps.steps import Step


def build_suffix() -> str:
    """Build an optional filename suffix from ``RUN_TAG`` and ``RUN_ID``.

    Returns an empty string if no suffixing is configured.
    """
    parts: List[str] = []
    if settings.RUN_TAG:
        parts.append(str(settings.RUN_TAG))
    if settings.DATE_IN_FILENAMES and settings.RUN_ID:
        parts.append(settings.RUN_ID)
    return ("_" + "_".join(parts)) if parts else ""


def _stat(entry: dict, key: str, field: str = "mean") -> Optional[float]:
    return entry.get(key, {}).get(field)


def save_results_to_csv(results: ExperimentResults, N_values: List[int], out_dir: str) -> str:
    """Write compact per-(algorithm, N) aggregate metrics to CSV.

    Column names follow lowercase snake_case. Returns the path written.
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"results{build_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "algorithm",
            "n",
            "total_runs",
            "success_rate",
            "timeout_rate",
            "failure_rate",
            "successes",
            "failures",
            "timeouts",
            "time_mean",
            "time_median",
            "success_time_mean",
            "iterations_mean",
            "iterations_median",
            "steps_mean",
            "evals_mean",
            "score_mean",
            "score_min",
            "failure_score_mean",
        ])
        for name, per_n in results.items():
            for N in N_values:
                entry = per_n.get(N)
                if not entry:
                    continue
                writer.writerow([
                    name,
                    N,
                    entry.get("total_runs", 0),
                    entry.get("success_rate", 0.0),
                    entry.get("timeout_rate", 0.0),
                    entry.get("failure_rate", 0.0),
                    entry.get("successes", 0),
                    entry.get("failures", 0),
                    entry.get("timeouts", 0),
                    _stat(entry, "all_time"),
                    _stat(entry, "all_time", "median"),
                    _stat(entry, "success_time"),
                    _stat(entry, "all_iterations"),
                    _stat(entry, "all_iterations", "median"),
                    _stat(entry, "all_steps"),
                    _stat(entry, "all_evals"),
                    _stat(entry, "all_score"),
                    _stat(entry, "all_score", "min"),
                    _stat(entry, "failure_score"),
                ])

    print(f"Results CSV saved: {filename}")
    return filename


def save_raw_data_to_csv(results: ExperimentResults, N_values: List[int], out_dir: str) -> str:
    """Write full per-run raw data for every algorithm to a single CSV file."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"raw_data{build_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "algorithm",
            "n",
            "run_id",
            "seed",
            "success",
            "timeout",
            "score",
            "iterations",
            "steps",
            "evaluations",
            "time_seconds",
            "rows",
        ])
        for name, per_n in results.items():
            for N in N_values:
                entry = per_n.get(N)
                if not entry:
                    continue
                for run_id, run in enumerate(entry.get("raw_runs", [])):
                    writer.writerow([
                        name,
                        N,
                        run_id,
                        run["seed"],
                        run["success"],
                        run["timeout"],
                        run["score"],
                        run["iterations"],
                        run["steps"],
                        run["evals"],
                        run["time"],
                        " ".join(str(r) for r in run["rows"]),
                    ])

    print(f"Raw data CSV saved: {filename}")
    return filename


def trace_to_frame(steps: Sequence[Step]) -> pd.DataFrame:
    """Return a step trace as a DataFrame with columns step, score, state."""
    return pd.DataFrame(
        {
            "step": range(1, len(steps) + 1),
            "score": [step.score for step in steps],
            "state": [" ".join(str(r) for r in step.state) for step in steps],
        },
        columns=["step", "score", "state"],
    )


def save_trace_to_csv(steps: Sequence[Step], path: str) -> str:
    """Write a step trace to ``path`` (parent directories are created)."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    trace_to_frame(steps).to_csv(path, index=False)
    print(f"Step trace saved: {path}")
    return path


def format_board(rows: Sequence[int], size: Optional[int] = None) -> str:
    """Render a board as text, one line per row, ``Q`` marking queens.

    ``rows`` may be a partial assignment (fewer entries than ``size``); the
    remaining columns are drawn empty.
    """
    size = len(rows) if size is None else size
    lines = []
    for row in range(size):
        cells = ["Q" if column < len(rows) and rows[column] == row else "." for column in range(size)]
        lines.append(" ".join(cells))
    return "\n".join(lines)
