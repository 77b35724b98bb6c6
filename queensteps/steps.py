"""Step reporting and run bookkeeping shared by every strategy.

Contract (reporter)
-------------------
A reporter is any callable ``reporter(state, score)`` where ``state`` is an
immutable ``tuple`` snapshot of ``board[col] = row`` and ``score`` an int. It is
invoked synchronously, in emission order, and never after the solver returns.
Pacing (e.g. delays for animation) is the caller's concern; the solvers never
sleep.

Contract (result)
-----------------
Every solver returns a :class:`Solution`:
    (rows, score, iterations, evaluations, steps, elapsed, timeout)

Where:
- rows: final board as a tuple of length N.
- score: conflicts of ``rows``; 0 means solved.
- iterations: algorithm-specific logical cost (moves, iterations, generations,
  explored nodes).
- evaluations: number of objective evaluations, full or incremental.
- steps: number of reporter invocations.
- elapsed: wall time measured via ``perf_counter()``.
- timeout: True when the run ended because of ``time_limit`` or ``should_stop``.
"""

from __future__ import annotations

from time import perf_counter
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple

StepReporter = Callable[[Tuple[int, ...], int], None]
StopSignal = Callable[[], bool]


class Step(NamedTuple):
    state: Tuple[int, ...]
    score: int


class Solution(NamedTuple):
    rows: Tuple[int, ...]
    score: int
    iterations: int
    evaluations: int
    steps: int
    elapsed: float
    timeout: bool

    @property
    def solved(self) -> bool:
        """True when the final board has no attacking pair."""
        return self.score == 0


class StepRecorder:
    """Reporter that keeps every emitted step in memory, in order."""

    def __init__(self) -> None:
        self.steps: List[Step] = []

    def __call__(self, state: Tuple[int, ...], score: int) -> None:
        self.steps.append(Step(state, score))

    @property
    def scores(self) -> List[int]:
        return [step.score for step in self.steps]

    def __len__(self) -> int:
        return len(self.steps)


class StepEmitter:
    """Per-run helper: forwards snapshots, counts steps and checks the stop signal.

    Parameters
    ----------
    reporter : callable | None
        Sink receiving ``(state, score)``; ``None`` discards steps.
    time_limit : float | None
        Optional wall-clock limit in seconds, measured from construction.
    should_stop : callable | None
        Optional zero-argument callable; a truthy return ends the run early.
    """

    def __init__(
        self,
        reporter: Optional[StepReporter] = None,
        time_limit: Optional[float] = None,
        should_stop: Optional[StopSignal] = None,
    ):
        self.reporter = reporter
        self.time_limit = time_limit
        self.should_stop = should_stop
        self.count = 0
        self.start = perf_counter()

    def emit(self, rows: Sequence[int], score: int) -> None:
        self.count += 1
        if self.reporter is not None:
            self.reporter(tuple(rows), score)

    def expired(self) -> bool:
        """Return True once the time limit has passed or the stop signal fired."""
        if self.time_limit is not None and (perf_counter() - self.start) > self.time_limit:
            return True
        return self.should_stop is not None and bool(self.should_stop())

    def finish(
        self,
        rows: Sequence[int],
        score: int,
        iterations: int,
        evaluations: int,
        timeout: bool = False,
    ) -> Solution:
        return Solution(
            tuple(rows),
            score,
            iterations,
            evaluations,
            self.count,
            perf_counter() - self.start,
            timeout,
        )


def trivial_solution(size: int, emitter: StepEmitter) -> Solution:
    """Solve boards with fewer than two columns, where no move exists.

    ``N = 0`` yields the empty board and ``N = 1`` the single placement ``(0,)``;
    both are reported once and scored 0.
    """
    rows = tuple(range(size))
    emitter.emit(rows, 0)
    return emitter.finish(rows, 0, iterations=0, evaluations=1)
