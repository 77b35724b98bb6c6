"""Local Beam Search for the N-Queens problem.

The search keeps ``k`` boards (the beam). Every iteration expands all
single-column neighbors of every beam member, and the ``k`` distinct boards
with the fewest conflicts among that union become the next beam. Only the best
member of each beam is reported, which is what a visualization displays.

Termination
-----------
- a conflict-free board enters the beam;
- ``max_stagnation`` consecutive iterations pass without improving the best
  score seen so far;
- ``max_iter`` iterations have been executed, or time limit / stop signal.

Complexity
----------
Each iteration scores ``k * N * (N - 1)`` neighbors incrementally, i.e.
``O(k * N^3)`` work.
"""

from __future__ import annotations

import heapq
import random
from typing import Dict, List, Optional, Tuple

from .board import BoardState
from .neighbors import neighbors
from .steps import Solution, StepEmitter, StepReporter, StopSignal, trivial_solution
from .utils import check_count, check_size

Beam = List[BoardState]


def _next_beam(beam: Beam, k: int) -> Tuple[Beam, int]:
    """Return the ``k`` best distinct neighbors of the beam and the count scored."""
    candidates: Dict[Tuple[int, ...], int] = {}
    scored = 0
    for state in beam:
        for rows, score in neighbors(state):
            scored += 1
            # Dicts keep first-insertion order, which is the tie-break order.
            if rows not in candidates:
                candidates[rows] = score
    best = heapq.nsmallest(k, candidates.items(), key=lambda item: item[1])
    return [BoardState(rows) for rows, _ in best], scored


def lbs_nqueens(
    size: int,
    k: int = 4,
    max_stagnation: int = 50,
    max_iter: int = 10_000,
    reporter: Optional[StepReporter] = None,
    rng: Optional[random.Random] = None,
    time_limit: Optional[float] = None,
    should_stop: Optional[StopSignal] = None,
) -> Solution:
    """Run Local Beam Search with ``k`` states.

    Parameters
    ----------
    size : int
        Board dimension N.
    k : int, default 4
        Number of boards kept between iterations (>= 1).
    max_stagnation : int, default 50
        Iterations without improvement of the best score before giving up.
    max_iter : int, default 10000
        Hard cap on iterations.
    reporter : callable | None
        Step sink; receives the best board of the initial beam and of each
        subsequent beam.
    rng : random.Random | None
        Source of randomness for the initial beam.
    time_limit : float | None
        Optional wall-clock time limit in seconds.
    should_stop : callable | None
        Optional early-termination signal checked once per iteration.

    Returns
    -------
    Solution
        Best board ever held in the beam. ``iterations`` counts beam updates.
    """
    check_size(size)
    check_count("k", k)
    check_count("max_stagnation", max_stagnation)
    check_count("max_iter", max_iter)
    rng = rng if rng is not None else random.Random()
    emitter = StepEmitter(reporter, time_limit, should_stop)
    if size < 2:
        return trivial_solution(size, emitter)

    beam: Beam = [BoardState.random(size, rng) for _ in range(k)]
    evaluations = k
    # min() returns the first minimum, keeping ties in beam order.
    best = min(beam, key=lambda state: state.score).copy()
    emitter.emit(best.rows, best.score)

    iteration = 0
    stagnation = 0
    while best.score > 0 and stagnation < max_stagnation and iteration < max_iter:
        if emitter.expired():
            return emitter.finish(best.rows, best.score, iteration, evaluations, timeout=True)
        iteration += 1

        beam, scored = _next_beam(beam, k)
        evaluations += scored
        leader = beam[0]
        emitter.emit(leader.rows, leader.score)

        if leader.score < best.score:
            best = leader.copy()
            stagnation = 0
        else:
            stagnation += 1

    return emitter.finish(best.rows, best.score, iteration, evaluations)
