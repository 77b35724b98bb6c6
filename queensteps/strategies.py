"""Algorithm selection for the N-Queens solvers.

Each strategy is a small frozen dataclass carrying its own parameters. They all
share the :class:`Algorithm` interface, so callers pick a variant once and run
it through :func:`solve` without any string-based dispatch or positional
argument marshalling:

>>> solution = solve(8, ConstraintPropagation())
>>> solution.solved
True

Names are only needed at the edges (CLI, configuration files); for those,
:func:`algorithm_from_name` maps the canonical names and their short aliases
to a variant.
"""

from __future__ import annotations

import abc
import random
from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Dict, Optional, Type

from .backtracking import cp_nqueens
from .beam_search import lbs_nqueens
from .errors import InvalidParameterError
from .genetic import ga_nqueens
from .hill_climbing import hc_nqueens
from .simulated_annealing import sa_nqueens
from .steps import Solution, StepReporter, StopSignal
from .utils import check_size


class Algorithm(abc.ABC):
    """Common interface of the five strategies."""

    name: ClassVar[str]
    label: ClassVar[str]

    @abc.abstractmethod
    def run(
        self,
        size: int,
        reporter: Optional[StepReporter],
        rng: random.Random,
        time_limit: Optional[float] = None,
        should_stop: Optional[StopSignal] = None,
    ) -> Solution:
        """Solve a board of ``size`` columns, reporting steps to ``reporter``."""

    def parameters(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class HillClimbing(Algorithm):
    restarts: int = 0

    name: ClassVar[str] = "hill_climbing"
    label: ClassVar[str] = "HC"

    def run(self, size, reporter, rng, time_limit=None, should_stop=None):
        return hc_nqueens(
            size,
            restarts=self.restarts,
            reporter=reporter,
            rng=rng,
            time_limit=time_limit,
            should_stop=should_stop,
        )


@dataclass(frozen=True)
class SimulatedAnnealing(Algorithm):
    initial_temperature: float = 1.0
    cooling_factor: float = 0.999
    max_iter: int = 100_000

    name: ClassVar[str] = "simulated_annealing"
    label: ClassVar[str] = "SA"

    def run(self, size, reporter, rng, time_limit=None, should_stop=None):
        return sa_nqueens(
            size,
            T0=self.initial_temperature,
            alpha=self.cooling_factor,
            max_iter=self.max_iter,
            reporter=reporter,
            rng=rng,
            time_limit=time_limit,
            should_stop=should_stop,
        )


@dataclass(frozen=True)
class LocalBeamSearch(Algorithm):
    state_count: int = 4
    max_stagnation: int = 50
    max_iter: int = 10_000

    name: ClassVar[str] = "local_beam_search"
    label: ClassVar[str] = "LBS"

    def run(self, size, reporter, rng, time_limit=None, should_stop=None):
        return lbs_nqueens(
            size,
            k=self.state_count,
            max_stagnation=self.max_stagnation,
            max_iter=self.max_iter,
            reporter=reporter,
            rng=rng,
            time_limit=time_limit,
            should_stop=should_stop,
        )


@dataclass(frozen=True)
class Genetic(Algorithm):
    generation_size: int = 100
    elitism: float = 0.1
    crossover: float = 0.8
    mutation: float = 0.05
    generation_count: int = 500
    tournament_size: int = 3
    stop_on_solution: bool = False

    name: ClassVar[str] = "genetic"
    label: ClassVar[str] = "GA"

    def run(self, size, reporter, rng, time_limit=None, should_stop=None):
        return ga_nqueens(
            size,
            pop_size=self.generation_size,
            elitism=self.elitism,
            pc=self.crossover,
            pm=self.mutation,
            max_gen=self.generation_count,
            tournament_size=self.tournament_size,
            stop_on_solution=self.stop_on_solution,
            reporter=reporter,
            rng=rng,
            time_limit=time_limit,
            should_stop=should_stop,
        )


@dataclass(frozen=True)
class ConstraintPropagation(Algorithm):
    name: ClassVar[str] = "constraint_propagation"
    label: ClassVar[str] = "CP"

    def run(self, size, reporter, rng, time_limit=None, should_stop=None):
        # Deterministic: the random source is not consulted.
        return cp_nqueens(size, reporter=reporter, time_limit=time_limit, should_stop=should_stop)


ALGORITHMS: Dict[str, Type[Algorithm]] = {
    cls.name: cls
    for cls in (HillClimbing, SimulatedAnnealing, LocalBeamSearch, Genetic, ConstraintPropagation)
}
ALIASES: Dict[str, str] = {cls.label: name for name, cls in ALGORITHMS.items()}


def canonical_name(name: str) -> str:
    """Resolve a canonical name or short alias (case-insensitive)."""
    key = name.strip()
    if key.lower() in ALGORITHMS:
        return key.lower()
    if key.upper() in ALIASES:
        return ALIASES[key.upper()]
    allowed = ", ".join(list(ALGORITHMS) + list(ALIASES))
    raise InvalidParameterError(f"Unknown algorithm '{name}'. Allowed: {allowed}")


def algorithm_from_name(name: str, **params: Any) -> Algorithm:
    """Build a strategy variant from its name and keyword parameters."""
    cls = ALGORITHMS[canonical_name(name)]
    try:
        return cls(**params)
    except TypeError as exc:
        raise InvalidParameterError(f"Invalid parameters for {cls.name}: {exc}") from exc


def solve(
    size: int,
    algorithm: Algorithm,
    reporter: Optional[StepReporter] = None,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    time_limit: Optional[float] = None,
    should_stop: Optional[StopSignal] = None,
) -> Solution:
    """Run ``algorithm`` on a ``size`` x ``size`` board.

    Parameters
    ----------
    size : int
        Board dimension N; negative values are rejected before any search.
    algorithm : Algorithm
        One of the strategy variants, carrying its parameters.
    reporter : callable | None
        Step sink invoked synchronously with ``(state, score)``.
    seed : int | None
        Seed for the run's private ``random.Random``; ignored when ``rng`` is given.
    rng : random.Random | None
        Explicit random source for the run.
    time_limit : float | None
        Optional wall-clock time limit in seconds.
    should_stop : callable | None
        Optional early-termination signal checked once per iteration.

    Raises
    ------
    InvalidParameterError
        On a negative size, a malformed parameter or a non-strategy argument.
    """
    check_size(size)
    if not isinstance(algorithm, Algorithm):
        raise InvalidParameterError(f"Expected an Algorithm variant, got {algorithm!r}")
    if rng is None:
        rng = random.Random(seed)
    return algorithm.run(size, reporter, rng, time_limit=time_limit, should_stop=should_stop)
