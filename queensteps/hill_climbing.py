"""Steepest-ascent Hill Climbing for the N-Queens problem.

Each iteration scans all ``N * (N - 1)`` single-column neighbors of the current
board and moves to the best one, provided it strictly lowers the number of
conflicts. The search stops at the first local optimum, which may or may not
be a solution.

Determinism
-----------
The starting board is drawn from the injected ``rng``; for a fixed seed the
whole trajectory is reproducible. Ties between equally good neighbors are
broken by generation order (first column, then first row).
"""

from __future__ import annotations

import random
from typing import Optional

from .board import BoardState
from .neighbors import iter_moves
from .steps import Solution, StepEmitter, StepReporter, StopSignal, trivial_solution
from .utils import check_count, check_size


def hc_nqueens(
    size: int,
    restarts: int = 0,
    reporter: Optional[StepReporter] = None,
    rng: Optional[random.Random] = None,
    time_limit: Optional[float] = None,
    should_stop: Optional[StopSignal] = None,
) -> Solution:
    """Run Hill Climbing to minimize conflicts in the N-Queens problem.

    Parameters
    ----------
    size : int
        Board dimension N (N >= 0).
    restarts : int, default 0
        Extra climbs from fresh random boards while no solution is found.
    reporter : callable | None
        Step sink; receives the starting board and every board moved to.
    rng : random.Random | None
        Source of randomness for starting boards.
    time_limit : float | None
        Optional wall-clock time limit in seconds.
    should_stop : callable | None
        Optional early-termination signal checked once per iteration.

    Returns
    -------
    Solution
        The best board over all climbs. ``iterations`` counts moves made.

    Notes
    -----
    - Within one climb the reported scores never increase.
    - A non-zero final score means a local optimum was reached; it is a normal
      outcome, not an error.
    """
    check_size(size)
    check_count("restarts", restarts, minimum=0)
    rng = rng if rng is not None else random.Random()
    emitter = StepEmitter(reporter, time_limit, should_stop)
    if size < 2:
        return trivial_solution(size, emitter)

    best: Optional[BoardState] = None
    moves = 0
    evaluations = 0

    for _ in range(restarts + 1):
        state = BoardState.random(size, rng)
        evaluations += 1
        emitter.emit(state.rows, state.score)

        while state.score > 0:
            if emitter.expired():
                if best is None or state.score < best.score:
                    best = state
                return emitter.finish(best.rows, best.score, moves, evaluations, timeout=True)

            best_move = None
            best_score = state.score
            for column, row in iter_moves(state.rows):
                candidate = state.score_if_moved(column, row)
                evaluations += 1
                if candidate < best_score:
                    best_score = candidate
                    best_move = (column, row)

            if best_move is None:
                # Local optimum: no neighbor is strictly better.
                break

            state.move(*best_move)
            moves += 1
            emitter.emit(state.rows, state.score)

        if best is None or state.score < best.score:
            best = state
        if best.score == 0:
            break

    assert best is not None
    return emitter.finish(best.rows, best.score, moves, evaluations)
