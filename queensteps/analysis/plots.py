"""Visualization utilities for solver traces and experiment results.

Overview
--------
This module is the presentation side of the step-reporting contract: it
renders boards and score traces produced by the solvers, and summary charts
produced by the analysis pipeline. Nothing here influences search correctness.

Outputs and naming
------------------
Charts are written as PNG files into ``out_dir``. Filenames are prefixed by a
two-digit index where applicable for stable ordering and include the optional
suffix from ``queensteps.analysis.settings`` (run tag and date stamp).

Chart map
---------
- 01_success_rate_vs_N.png: Success rate vs N
    - X: N (board size). Y: successes / total_runs per algorithm.
- 02_time_vs_N_log_scale.png: Mean time over all runs vs N (log scale)
    - X: N. Y: wall-clock time [s].
- 03_final_score_vs_N.png: Mean final score vs N
    - What: Solution quality, 0 conflicts is optimal.
- board_<label>.png: An N×N checkerboard with the queens highlighted.
- trace_<label>.png: Score per reported step for a single run.
"""
from __future__ import annotations

import os
from typing import Dict, List, Optional, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import seaborn as sns  # noqa: E402

from .reporting import build_suffix, trace_to_frame  # noqa: E402
from .stats import ExperimentResults  # noqa: E402
from queensteps.steps import Step  # noqa: E402

MARKERS = {
    "hill_climbing": "o",
    "simulated_annealing": "s",
    "local_beam_search": "D",
    "genetic": "^",
    "constraint_propagation": "v",
}


def checkerboard(size: int) -> np.ndarray:
    """Return a ``size`` x ``size`` array of 0/1 cells, 1 on dark squares."""
    rows, columns = np.indices((size, size))
    return (rows + columns) % 2


def plot_board(rows: Sequence[int], size: Optional[int] = None, title: str = "", out_path: Optional[str] = None):
    """Draw a board with its queens; save it when ``out_path`` is given.

    ``rows`` may be a partial assignment shorter than ``size``. Queens under
    attack are drawn in red, safe queens in green.

    Returns
    -------
    matplotlib.figure.Figure
        The figure, left open when not saved so callers can compose it further.
    """
    size = len(rows) if size is None else size
    fig, ax = plt.subplots(figsize=(max(3, size * 0.5), max(3, size * 0.5)))
    if size:
        ax.imshow(checkerboard(size), cmap="Greys", vmin=0, vmax=3, origin="upper")

    for column, row in enumerate(rows):
        attacked = any(
            other == row or abs(other - row) == abs(other_column - column)
            for other_column, other in enumerate(rows)
            if other_column != column
        )
        ax.scatter([column], [row], s=max(40, 2400 / max(size, 1)), marker="*",
                   color="tab:red" if attacked else "tab:green", zorder=3)

    ax.set_xticks(range(size))
    ax.set_yticks(range(size))
    ax.set_xlim(-0.5, size - 0.5)
    ax.set_ylim(size - 0.5, -0.5)
    ax.set_title(title or f"N = {size}")

    if out_path:
        parent = os.path.dirname(out_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        fig.savefig(out_path, bbox_inches="tight", dpi=150)
        plt.close(fig)
        print(f"Saved board image: {out_path}")
    return fig


def plot_score_trace(steps: Sequence[Step], title: str, out_path: str) -> None:
    """Plot the score of every reported step of one run."""
    frame = trace_to_frame(steps)
    parent = os.path.dirname(out_path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    sns.set_theme(style="whitegrid")
    fig, ax = plt.subplots(figsize=(10, 5))
    sns.lineplot(data=frame, x="step", y="score", ax=ax, drawstyle="steps-post")
    ax.set_xlabel("Step", fontsize=12)
    ax.set_ylabel("Score (attacking pairs)", fontsize=12)
    ax.set_title(title, fontsize=14)
    ax.set_ylim(bottom=0)
    fig.savefig(out_path, bbox_inches="tight", dpi=150)
    plt.close(fig)
    print(f"Saved score trace: {out_path}")


def _series(results: ExperimentResults, name: str, N_values: List[int], key: str, field: str = "mean") -> List[float]:
    values = []
    for N in N_values:
        entry: Dict = results[name].get(N, {})
        if field:
            value = entry.get(key, {}).get(field)
        else:
            value = entry.get(key)
        values.append(float(value) if value is not None else np.nan)
    return values


def plot_and_save(results: ExperimentResults, N_values: List[int], out_dir: str) -> None:
    """Generate the comparison charts for every algorithm present in ``results``."""
    os.makedirs(out_dir, exist_ok=True)
    suffix = build_suffix()
    sns.set_theme(style="whitegrid")

    charts = [
        ("success_rate", None, "Success rate", "Success Rate vs Problem Size", "01_success_rate_vs_N", False),
        ("all_time", "mean", "Average time [s] (log scale)", "Execution Time vs Problem Size", "02_time_vs_N_log_scale", True),
        ("all_score", "mean", "Average final score", "Final Score vs Problem Size\n(0 conflicts is optimal)", "03_final_score_vs_N", False),
    ]

    for key, field, ylabel, title, stem, log_scale in charts:
        fig, ax = plt.subplots(figsize=(12, 8))
        for name in results:
            values = _series(results, name, N_values, key, field)
            if log_scale:
                values = [max(v, 1e-6) for v in values]
            ax.plot(N_values, values, marker=MARKERS.get(name, "o"), linewidth=2, markersize=8, label=name)
        if log_scale:
            ax.set_yscale("log")
        if key == "success_rate":
            ax.set_ylim(-0.05, 1.05)
        ax.set_xlabel("N (board size)", fontsize=12)
        ax.set_ylabel(ylabel, fontsize=12)
        ax.set_title(title, fontsize=14)
        ax.set_xticks(N_values)
        ax.legend(fontsize=11)

        fname = os.path.join(out_dir, f"{stem}{suffix}.png")
        fig.savefig(fname, bbox_inches="tight", dpi=150)
        plt.close(fig)
        print(f"Saved chart: {fname}")
