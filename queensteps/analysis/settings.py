"""Global settings and time limits for the N-Queens analysis pipeline.

Every constant below is a default for the experiment pipeline and the CLI;
`config.json` values are layered on top at runtime by
`queensteps.analysis.cli.apply_configuration`.
"""
from __future__ import annotations

import multiprocessing
from datetime import datetime
from typing import Any, Dict, List, Optional

# Board sizes compared in experiments, ascending
N_VALUES: List[int] = [4, 8, 12, 16, 24]

# Number of independent runs per algorithm and N (CP is deterministic, one run is enough)
RUNS: int = 20
RUNS_CP: int = 1

# Seed of the first run; run i uses BASE_SEED + i so batches are reproducible
BASE_SEED: int = 1234

# Algorithms executed by default, in reporting order
ALGORITHMS: List[str] = [
    "hill_climbing",
    "simulated_annealing",
    "local_beam_search",
    "genetic",
    "constraint_propagation",
]

# Per-algorithm time limits in seconds (None = no limit)
TIME_LIMITS: Dict[str, Optional[float]] = {
    "hill_climbing": 30.0,
    "simulated_annealing": 30.0,
    "local_beam_search": 60.0,
    "genetic": 60.0,
    "constraint_propagation": 120.0,
}

# Default parameters per algorithm (keyword arguments of the strategy dataclasses)
ALGORITHM_PARAMS: Dict[str, Dict[str, Any]] = {
    "hill_climbing": {"restarts": 0},
    "simulated_annealing": {"initial_temperature": 1.0, "cooling_factor": 0.999, "max_iter": 100_000},
    "local_beam_search": {"state_count": 4, "max_stagnation": 50, "max_iter": 10_000},
    "genetic": {
        "generation_size": 100,
        "elitism": 0.1,
        "crossover": 0.8,
        "mutation": 0.05,
        "generation_count": 300,
        "tournament_size": 3,
        "stop_on_solution": True,
    },
    "constraint_propagation": {},
}

# Where CSV files and charts are written
OUT_DIR: str = "results_queensteps"

# Worker processes for parallel batches, one core is left free
NUM_PROCESSES: int = max(1, multiprocessing.cpu_count() - 1)

# Artifact naming ----------------------------------------------------------------

# Append the run timestamp (e.g. _20260301-101500) to every CSV and chart of a run
DATE_IN_FILENAMES: bool = True

# Timestamp of this process, fixed at import so all artifacts share it
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")

# Optional label prepended to the timestamp suffix
RUN_TAG: Optional[str] = None


def set_time_limits(limits: Dict[str, Optional[float]]) -> None:
    """Configure per-algorithm time limits.

    Parameters
    - limits: mapping algorithm name -> seconds (None disables the limit).
      Algorithms missing from the mapping keep their current limit.

    Side effects
    - Updates ``TIME_LIMITS`` in place and prints a concise summary to stdout
      to make the active limits explicit at run start.
    """
    for name, seconds in limits.items():
        if name not in TIME_LIMITS:
            raise ValueError(f"Unknown algorithm in time limits: {name}")
        TIME_LIMITS[name] = None if seconds is None else float(seconds)

    print("Time limits configured:")
    for name, seconds in TIME_LIMITS.items():
        print(f"   - {name}: {seconds}s" if seconds else f"   - {name}: unlimited")
