"""Simulated Annealing solver for the N-Queens problem.

This module implements a standard Simulated Annealing (SA) approach to search
for a conflict-free placement of N queens. The configuration is a length-N list
``board[col] = row``. At each step, a random column is selected and moved to a
different random row. The move is accepted if it does not worsen the objective,
or with Metropolis probability otherwise.

Contract (public API)
---------------------
- Input: problem size ``size >= 0`` and SA hyperparameters: initial
  temperature ``T0 > 0``, cooling factor ``alpha`` in [0, 1] and an iteration
  guard ``max_iter``.
- Output: a ``Solution`` holding the best board seen during the run.

Termination
-----------
The run ends when the temperature drops below ``MIN_TEMPERATURE``, when a
conflict-free board is reached, when ``max_iter`` iterations have been executed
(needed for ``alpha == 1``), or on time limit / stop signal.

Determinism
-----------
SA is stochastic. All draws come from the injected ``rng``; pass a seeded
``random.Random`` for reproducible step sequences.
"""

from __future__ import annotations

import math
import random
from typing import Optional

from .board import BoardState
from .neighbors import random_move
from .steps import Solution, StepEmitter, StepReporter, StopSignal, trivial_solution
from .utils import check_count, check_positive, check_probability, check_size

# Temperature below which the schedule is considered frozen.
MIN_TEMPERATURE = 1e-4


def sa_nqueens(
    size: int,
    T0: float = 1.0,
    alpha: float = 0.999,
    max_iter: int = 100_000,
    reporter: Optional[StepReporter] = None,
    rng: Optional[random.Random] = None,
    time_limit: Optional[float] = None,
    should_stop: Optional[StopSignal] = None,
) -> Solution:
    """Run Simulated Annealing to minimize conflicts in the N-Queens problem.

    Parameters
    ----------
    size : int
        Board dimension N.
    T0 : float, default 1.0
        Initial temperature (> 0).
    alpha : float, default 0.999
        Geometric cooling factor; temperature is updated as ``T *= alpha``.
    max_iter : int, default 100000
        Maximum number of iterations.
    reporter : callable | None
        Step sink; receives the starting board, then the current board after
        every iteration (unchanged when the move was rejected).
    rng : random.Random | None
        Source of randomness.
    time_limit : float | None
        Optional wall-clock time limit in seconds.
    should_stop : callable | None
        Optional early-termination signal checked once per iteration.

    Returns
    -------
    Solution
        Best (lowest conflict) board observed, not necessarily the last one.

    Notes
    -----
    - Acceptance: ``delta <= 0`` always, otherwise with probability
      ``exp(-delta / T)``. A rejection still counts as an iteration.
    - Scores are updated incrementally; each proposal costs O(N).
    """
    check_size(size)
    check_positive("T0", T0)
    check_probability("alpha", alpha)
    check_count("max_iter", max_iter)
    rng = rng if rng is not None else random.Random()
    emitter = StepEmitter(reporter, time_limit, should_stop)
    if size < 2:
        return trivial_solution(size, emitter)

    state = BoardState.random(size, rng)
    best = state.copy()
    evaluations = 1
    emitter.emit(state.rows, state.score)

    temperature = float(T0)
    iteration = 0
    while state.score > 0 and temperature >= MIN_TEMPERATURE and iteration < max_iter:
        if emitter.expired():
            return emitter.finish(best.rows, best.score, iteration, evaluations, timeout=True)
        iteration += 1

        column, row = random_move(state.rows, rng)
        candidate = state.score_if_moved(column, row)
        evaluations += 1
        delta = candidate - state.score

        if delta <= 0 or rng.random() < math.exp(-delta / temperature):
            state.move(column, row)
            if state.score < best.score:
                best = state.copy()

        emitter.emit(state.rows, state.score)

        # Geometric cooling schedule
        temperature *= alpha

    return emitter.finish(best.rows, best.score, iteration, evaluations)
