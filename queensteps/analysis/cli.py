"""Command-line interface and high-level pipelines for the N-Queens solvers.

Three subcommands are exposed through the ``queensteps`` console script:

- ``solve``: run one strategy on one board, optionally printing every reported
  step (with a delay for animation) and saving the trace as CSV and PNG.
- ``experiment``: load ``config.json``, run seeded batches for the selected
  algorithms and export CSV summaries and comparison charts.
- ``quick-test``: deterministic regression checks over all five strategies.

I/O, argument parsing and progress reporting live here so the solvers stay
silent and easy to test programmatically.
"""
from __future__ import annotations

import argparse
import json
import os
import tempfile
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from . import settings
from .experiments import run_experiments
from .plots import plot_and_save, plot_board, plot_score_trace
from .reporting import format_board, save_raw_data_to_csv, save_results_to_csv, save_trace_to_csv
from config_manager import ConfigManager
from queensteps.errors import QueensError
from queensteps.steps import StepRecorder
from queensteps.strategies import ALGORITHMS, algorithm_from_name, canonical_name, solve
from queensteps.utils import conflicts, is_valid_solution

QUICK_TEST_SEEDS = (42, 43, 44, 45, 46)


# ------------- Utils --------------------------------------------------------

def parse_algorithm_filters(alg_args: Optional[List[str]]):
    """Normalize algorithm filter CLI inputs into a list of canonical names.

    Accepts repeated flags (``-a HC -a SA``), comma-separated lists
    (``-a HC,GA``) and either short aliases or canonical names. Returns None
    when no filter is provided (meaning all configured algorithms run).
    """
    if not alg_args:
        return None
    selected: List[str] = []
    for entry in alg_args:
        for token in entry.split(","):
            token = token.strip()
            if token:
                selected.append(canonical_name(token))
    unique = list(dict.fromkeys(selected))
    return unique or None


def parse_parameters(param_args: Optional[List[str]]) -> Dict[str, Any]:
    """Turn ``key=value`` pairs into keyword parameters.

    Values are decoded as JSON when possible (``10``, ``0.5``, ``true``) and
    kept as plain strings otherwise.
    """
    params: Dict[str, Any] = {}
    for entry in param_args or []:
        key, sep, raw = entry.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Malformed parameter '{entry}', expected key=value")
        try:
            params[key] = json.loads(raw)
        except json.JSONDecodeError:
            params[key] = raw.strip()
    return params


def apply_configuration(
    config_path: str, algorithm_filter: Optional[List[str]] = None
) -> Tuple[ConfigManager, List[str]]:
    """Load configuration and apply optional algorithm filtering.

    Updates the global ``settings`` module in place with the values found in
    ``config.json`` (or a user-specified path) and returns the
    ``ConfigManager`` used together with the selected algorithm names.
    """
    config_mgr = ConfigManager(config_path)

    experiment_settings = config_mgr.get_experiment_settings()
    if experiment_settings:
        settings.N_VALUES = [int(n) for n in experiment_settings.get("N_values", settings.N_VALUES)]
        settings.RUNS = int(experiment_settings.get("runs", settings.RUNS))
        settings.RUNS_CP = int(experiment_settings.get("runs_cp", settings.RUNS_CP))
        settings.BASE_SEED = int(experiment_settings.get("base_seed", settings.BASE_SEED))
        settings.OUT_DIR = experiment_settings.get("output_dir", settings.OUT_DIR)
        if any(n < 0 for n in settings.N_VALUES):
            raise ValueError(f"Board sizes must be non-negative: {settings.N_VALUES}")
        if settings.RUNS < 1 or settings.RUNS_CP < 1:
            raise ValueError("Run counts must be at least 1")

    time_limits = config_mgr.get_time_limits()
    if time_limits:
        settings.set_time_limits({canonical_name(name): seconds for name, seconds in time_limits.items()})

    for name, params in config_mgr.get_algorithm_parameters().items():
        name = canonical_name(name)
        # An empty board still validates every parameter.
        solve(0, algorithm_from_name(name, **params))
        settings.ALGORITHM_PARAMS[name] = dict(params)

    selected = algorithm_filter or list(settings.ALGORITHMS)
    if not selected:
        raise ValueError("No algorithms selected after applying filters.")
    return config_mgr, selected


def _live_reporter(recorder: StepRecorder, size: int, show_board: bool, delay: float):
    """Wrap ``recorder`` so every step is also printed as it arrives."""

    def report(state, score):
        recorder(state, score)
        print(f"step {len(recorder):>6}  score {score:>4}  {list(state)}")
        if show_board:
            print(format_board(state, size))
            print()
        if delay > 0:
            time.sleep(delay)

    return report


# ------------- Subcommands --------------------------------------------------

def run_solve(args) -> None:
    """Run a single strategy and print (and optionally save) its trace."""
    params = parse_parameters(args.param)
    algorithm = algorithm_from_name(args.alg, **params)
    recorder = StepRecorder()
    reporter = recorder
    if args.show_steps:
        reporter = _live_reporter(recorder, args.size, args.show_board, args.delay)

    print(f"Solving N={args.size} with {algorithm.name} {algorithm.parameters()}")
    solution = solve(args.size, algorithm, reporter=reporter, seed=args.seed, time_limit=args.time_limit)

    status = "solved" if solution.solved else ("timeout" if solution.timeout else "not solved")
    print(f"\nResult: {status}")
    print(f"  score:       {solution.score}")
    print(f"  iterations:  {solution.iterations}")
    print(f"  evaluations: {solution.evaluations}")
    print(f"  steps:       {solution.steps}")
    print(f"  time:        {solution.elapsed:.4f}s")
    print(f"  rows:        {list(solution.rows)}")
    if solution.rows:
        print()
        print(format_board(solution.rows, args.size))

    label = f"{algorithm.name}_N{args.size}"
    if args.trace_csv:
        save_trace_to_csv(recorder.steps, args.trace_csv)
    if args.plot_dir:
        plot_board(solution.rows, args.size, title=f"{algorithm.name}, N = {args.size}, score = {solution.score}",
                   out_path=os.path.join(args.plot_dir, f"board_{label}.png"))
        plot_score_trace(recorder.steps, f"Score per step: {algorithm.name}, N = {args.size}",
                         os.path.join(args.plot_dir, f"trace_{label}.png"))


def run_experiment_pipeline(
    algorithms: List[str],
    parallel: bool = False,
    validate: bool = False,
    make_plots: bool = True,
) -> None:
    """Run the configured experiment batch and write CSV files and charts."""
    os.makedirs(settings.OUT_DIR, exist_ok=True)
    print("\n============================================")
    print(f"EXPERIMENTS: {', '.join(algorithms)}")
    print("============================================")
    if parallel:
        print(f"Using {settings.NUM_PROCESSES} worker processes (available CPU cores: {os.cpu_count()})")

    results = run_experiments(
        settings.N_VALUES,
        algorithms=algorithms,
        progress_label="Experiments",
        validate=validate,
        parallel=parallel,
    )

    save_results_to_csv(results, settings.N_VALUES, settings.OUT_DIR)
    save_raw_data_to_csv(results, settings.N_VALUES, settings.OUT_DIR)
    if make_plots:
        plot_and_save(results, settings.N_VALUES, settings.OUT_DIR)
    print("\nExperiment pipeline completed.")


def run_quick_regression_tests() -> None:
    """Execute a fast, deterministic smoke test for all strategies at N=8.

    Verifies that:
    - Constraint propagation, hill climbing with restarts, simulated annealing,
      local beam search and the genetic algorithm solve N=8 within a short fixed list of seeds.
    - Every reported score matches a full recomputation of its board.
    - The experiment pipeline produces a non-empty CSV in a temporary folder.
    """
    print("Running quick regression tests (N=8) across all algorithms...")

    cases = [
        ("constraint_propagation", {}),
        ("hill_climbing", {"restarts": 50}),
        ("simulated_annealing", {"initial_temperature": 1.0, "cooling_factor": 0.999, "max_iter": 20_000}),
        ("local_beam_search", {"state_count": 8, "max_stagnation": 100}),
        ("genetic", {"generation_size": 80, "generation_count": 400, "mutation": 0.1, "stop_on_solution": True}),
    ]

    for name, params in cases:
        for seed in QUICK_TEST_SEEDS:
            recorder = StepRecorder()
            solution = solve(8, algorithm_from_name(name, **params), reporter=recorder, seed=seed, time_limit=10.0)
            if solution.solved:
                break
        if not solution.solved or not is_valid_solution(solution.rows):
            raise AssertionError(f"{name} did not solve N=8 with seeds {QUICK_TEST_SEEDS}: {solution}")
        if solution.steps != len(recorder):
            raise AssertionError(f"{name} reported {len(recorder)} steps but counted {solution.steps}")
        if name != "constraint_propagation":
            for state, score in recorder.steps:
                if conflicts(state) != score:
                    raise AssertionError(f"{name} reported score {score} for {state}")
        print(f"  {name}: seed {seed}, solved in {solution.elapsed:.4f}s, {solution.steps} steps")

    results = run_experiments(
        [8],
        algorithms=[name for name, _ in cases],
        runs=2,
        params={name: params for name, params in cases},
        base_seed=42,
        progress_label="Quick regression experiments",
        validate=True,
    )

    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(save_results_to_csv(results, [8], tmpdir))
        if not csv_path.exists() or csv_path.stat().st_size == 0:
            raise AssertionError("Results CSV was not generated successfully during quick tests.")

    print("Quick regression tests passed.")


# ------------- CLI wiring --------------------------------------------------

def build_arg_parser():
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(description="Solve N-Queens step by step and run comparison experiments.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    solve_parser = subparsers.add_parser("solve", help="Run one strategy on one board.")
    solve_parser.add_argument("size", type=int, help="Board size N.")
    solve_parser.add_argument(
        "--alg",
        "-a",
        default="constraint_propagation",
        help=f"Algorithm name or alias ({', '.join(ALGORITHMS)}; HC, SA, LBS, GA, CP).",
    )
    solve_parser.add_argument(
        "--param",
        "-p",
        action="append",
        help="Strategy parameter as key=value (repeatable), e.g. -p state_count=8.",
    )
    solve_parser.add_argument("--seed", type=int, default=None, help="Seed of the run's random source.")
    solve_parser.add_argument("--time-limit", type=float, default=None, help="Wall-clock limit in seconds.")
    solve_parser.add_argument("--show-steps", action="store_true", help="Print every reported step.")
    solve_parser.add_argument("--show-board", action="store_true", help="With --show-steps, also draw each board.")
    solve_parser.add_argument("--delay", type=float, default=0.0, help="Pause in seconds after each printed step.")
    solve_parser.add_argument("--trace-csv", default=None, help="Write the step trace to this CSV file.")
    solve_parser.add_argument("--plot-dir", default=None, help="Save board and score-trace images in this folder.")

    exp_parser = subparsers.add_parser("experiment", help="Run the configured experiment batch.")
    exp_parser.add_argument("--config", default="config.json", help="Path to configuration file (default: config.json).")
    exp_parser.add_argument(
        "--alg",
        "-a",
        action="append",
        help="Filter algorithms to execute (comma-separated or multiple flags). Default: all.",
    )
    exp_parser.add_argument("--parallel", action="store_true", help="Distribute runs across worker processes.")
    exp_parser.add_argument("--validate", action="store_true", help="Re-check every returned board against its score.")
    exp_parser.add_argument("--no-plots", action="store_true", help="Skip chart generation.")

    subparsers.add_parser("quick-test", help="Run quick regression tests (N=8) and exit.")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: parse arguments and dispatch to the chosen subcommand."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.command == "quick-test":
        run_quick_regression_tests()
        return

    try:
        if args.command == "solve":
            run_solve(args)
            return

        alg_filter = parse_algorithm_filters(args.alg)
        try:
            _, selected = apply_configuration(args.config, alg_filter)
        except FileNotFoundError as exc:
            print(f"Configuration file not found: {exc}")
            raise SystemExit(1) from exc
        print(f"Selected algorithms: {selected}")
        run_experiment_pipeline(selected, parallel=args.parallel, validate=args.validate, make_plots=not args.no_plots)
    except KeyboardInterrupt:
        print("\nExecution interrupted by user. Cleaning up workers...")
        raise SystemExit(130) from None
    except (QueensError, ValueError) as exc:
        print(f"Execution error: {exc}")
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
