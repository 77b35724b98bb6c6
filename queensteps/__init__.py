"""N-Queens local-search and metaheuristic solvers with step reporting."""

from .backtracking import cp_nqueens
from .beam_search import lbs_nqueens
from .board import BoardState
from .errors import InvalidParameterError, InvariantViolation, QueensError
from .genetic import ga_nqueens
from .hill_climbing import hc_nqueens
from .neighbors import iter_moves, neighbors, random_move, random_neighbor
from .simulated_annealing import sa_nqueens
from .steps import Solution, Step, StepRecorder
from .strategies import (
    ALGORITHMS,
    Algorithm,
    ConstraintPropagation,
    Genetic,
    HillClimbing,
    LocalBeamSearch,
    SimulatedAnnealing,
    algorithm_from_name,
    solve,
)
from .utils import conflicts, conflicts_after_move, conflicts_on2, is_valid_solution

__all__ = [
    "hc_nqueens",
    "sa_nqueens",
    "lbs_nqueens",
    "ga_nqueens",
    "cp_nqueens",
    "ALGORITHMS",
    "Algorithm",
    "HillClimbing",
    "SimulatedAnnealing",
    "LocalBeamSearch",
    "Genetic",
    "ConstraintPropagation",
    "algorithm_from_name",
    "solve",
    "BoardState",
    "Solution",
    "Step",
    "StepRecorder",
    "iter_moves",
    "neighbors",
    "random_move",
    "random_neighbor",
    "conflicts",
    "conflicts_on2",
    "conflicts_after_move",
    "is_valid_solution",
    "QueensError",
    "InvalidParameterError",
    "InvariantViolation",
]
