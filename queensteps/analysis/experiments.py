"""Batch experiment runners for the five strategies (sequential and parallel).

These routines execute repeatable batches of independent, seeded runs for each
selected algorithm and board size. Outputs are structured dictionaries
suitable for CSV export and plotting. Validation hooks optionally check
solution correctness and consistency of reported metrics.
"""
from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
from typing import Any, Dict, List, Optional, Tuple

from . import settings
from .stats import (
    ExperimentResults,
    ProgressPrinter,
    RunRecord,
    compute_grouped_statistics,
)
from queensteps.strategies import algorithm_from_name, canonical_name, solve
from queensteps.utils import conflicts, is_valid_solution

# (algorithm name, N, parameters, seed, time limit)
RunSpec = Tuple[str, int, Dict[str, Any], int, Optional[float]]


def run_single_experiment(spec: RunSpec) -> RunRecord:
    """Worker wrapper to invoke a single seeded run (for parallel mapping)."""
    name, N, params, seed, time_limit = spec
    algorithm = algorithm_from_name(name, **params)
    solution = solve(N, algorithm, seed=seed, time_limit=time_limit)
    return {
        "success": solution.solved,
        "iterations": solution.iterations,
        "steps": solution.steps,
        "time": solution.elapsed,
        "evals": solution.evaluations,
        "score": solution.score,
        "timeout": solution.timeout,
        "seed": seed,
        "rows": list(solution.rows),
    }


def build_run_specs(
    name: str,
    N: int,
    runs: int,
    params: Dict[str, Any],
    base_seed: int,
    time_limit: Optional[float],
) -> List[RunSpec]:
    """Return ``runs`` run descriptions with consecutive seeds."""
    return [(name, N, dict(params), base_seed + i, time_limit) for i in range(runs)]


def _validate_runs(name: str, N: int, runs: List[RunRecord]) -> None:
    """Check that reported outcomes agree with the boards returned."""
    for idx, run in enumerate(runs):
        rows = run["rows"]
        if len(rows) != N:
            raise AssertionError(f"{name} validation failed for N={N}, run {idx}: board has {len(rows)} columns")
        if conflicts(rows) != run["score"]:
            raise AssertionError(
                f"{name} validation failed for N={N}, run {idx}: reported score {run['score']} "
                f"differs from {conflicts(rows)}"
            )
        if run["success"] and not is_valid_solution(rows):
            raise AssertionError(f"{name} validation failed for N={N}, run {idx}: success on an invalid board")


def run_experiments(
    N_values: List[int],
    algorithms: Optional[List[str]] = None,
    runs: Optional[int] = None,
    params: Optional[Dict[str, Dict[str, Any]]] = None,
    base_seed: Optional[int] = None,
    progress_label: Optional[str] = None,
    validate: bool = False,
    parallel: bool = False,
) -> ExperimentResults:
    """Run every selected algorithm ``runs`` times for each N.

    Parameters
    ----------
    N_values : List[int]
        Board sizes to evaluate.
    algorithms : List[str] | None
        Canonical algorithm names; defaults to ``settings.ALGORITHMS``.
    runs : int | None
        Runs per (algorithm, N); defaults to ``settings.RUNS``. Constraint
        propagation always uses ``settings.RUNS_CP`` since it is deterministic.
    params : dict | None
        Per-algorithm keyword parameters; defaults to ``settings.ALGORITHM_PARAMS``.
    base_seed : int | None
        Seed of the first run; defaults to ``settings.BASE_SEED``.
    progress_label : str | None
        When set, a ``ProgressPrinter`` reports progress per N.
    validate : bool
        Re-check every returned board against its reported score.
    parallel : bool
        Distribute runs across ``settings.NUM_PROCESSES`` worker processes.

    Returns
    -------
    ExperimentResults
        ``results[name][N]`` with grouped statistics, parameters and raw runs.
    """
    algorithms = [canonical_name(name) for name in (algorithms or settings.ALGORITHMS)]
    runs = settings.RUNS if runs is None else runs
    params = params if params is not None else settings.ALGORITHM_PARAMS
    base_seed = settings.BASE_SEED if base_seed is None else base_seed

    results: ExperimentResults = {name: {} for name in algorithms}
    progress = ProgressPrinter(len(N_values), progress_label) if progress_label else None

    executor = ProcessPoolExecutor(max_workers=settings.NUM_PROCESSES) if parallel else None
    try:
        for index, N in enumerate(N_values, start=1):
            if progress:
                progress.update(index, f"N={N}")
            print(f"=== N = {N}, {'+'.join(algorithms)} ===")

            for name in algorithms:
                count = settings.RUNS_CP if name == "constraint_propagation" else runs
                alg_params = params.get(name, {})
                specs = build_run_specs(name, N, count, alg_params, base_seed, settings.TIME_LIMITS.get(name))
                print(f"  Running {name} ({count} runs)...")

                if executor is not None:
                    raw_runs = list(executor.map(run_single_experiment, specs))
                else:
                    raw_runs = [run_single_experiment(spec) for spec in specs]

                if validate:
                    _validate_runs(name, N, raw_runs)

                entry = compute_grouped_statistics(raw_runs)
                entry["params"] = dict(alg_params)
                entry["raw_runs"] = raw_runs
                results[name][N] = entry
                print(
                    f"  {name}: success rate {entry['success_rate'] * 100:.1f}%"
                    f" ({entry['successes']}/{entry['total_runs']}), timeouts {entry['timeouts']}"
                )
    finally:
        if executor is not None:
            executor.shutdown()

    return results
