"""Genetic Algorithm solver for the N-Queens problem.

This module implements a generational Genetic Algorithm (GA) with elitism to
search for valid N-Queens configurations. The representation is a length-N list
where ``board[col] = row``. A configuration is a solution when no pairs of
queens attack each other.

Contract (public API)
---------------------
- Input: problem size ``size >= 0`` and GA hyperparameters: population size,
  elitism fraction, crossover and mutation probabilities, number of
  generations and tournament size.
- Output: a ``Solution`` holding the best individual observed across the
  initial population and every generation.

Generation cycle
----------------
1. Sort the population by ascending conflicts (lower is better).
2. Copy the top ``floor(elitism * pop_size)`` individuals unchanged.
3. Fill the remainder with children of tournament-selected parents:
   single-point crossover with probability ``pc`` (otherwise a copy of the
   parents), then each column mutates to a uniformly random row with
   probability ``pm``.
4. Report the best individual of the new generation.

The run lasts exactly ``max_gen`` generations unless ``stop_on_solution`` is
set, in which case it ends at the first conflict-free individual.

Determinism
-----------
The algorithm is stochastic. All draws come from the injected ``rng``.
"""

from __future__ import annotations

import math
import random
from typing import List, Optional, Tuple

from .steps import Solution, StepEmitter, StepReporter, StopSignal, trivial_solution
from .utils import (
    check_count,
    check_probability,
    check_size,
    conflicts,
    random_rows,
)

Individual = Tuple[List[int], int]


def ga_nqueens(
    size: int,
    pop_size: int = 100,
    elitism: float = 0.1,
    pc: float = 0.8,
    pm: float = 0.05,
    max_gen: int = 500,
    tournament_size: int = 3,
    stop_on_solution: bool = False,
    reporter: Optional[StepReporter] = None,
    rng: Optional[random.Random] = None,
    time_limit: Optional[float] = None,
    should_stop: Optional[StopSignal] = None,
) -> Solution:
    """Run a Genetic Algorithm search for an N-Queens solution.

    Parameters
    ----------
    size : int
        Board dimension N.
    pop_size : int, default 100
        Number of individuals per generation (>= 1).
    elitism : float, default 0.1
        Fraction of the best individuals copied unchanged to the next generation.
    pc : float, default 0.8
        Crossover probability. Single-point crossover is used.
    pm : float, default 0.05
        Per-column mutation probability.
    max_gen : int, default 500
        Number of generations (>= 0).
    tournament_size : int, default 3
        Tournament selection size; the entrant with fewer conflicts wins.
    stop_on_solution : bool, default False
        End the run as soon as a conflict-free individual appears.
    reporter : callable | None
        Step sink; receives the best individual of each generation.
    rng : random.Random | None
        Source of randomness.
    time_limit : float | None
        Optional wall-clock time limit in seconds.
    should_stop : callable | None
        Optional early-termination signal checked once per generation.

    Returns
    -------
    Solution
        Best individual ever observed. ``iterations`` counts generations.

    Notes
    -----
    - Multiple queens may share rows; the conflict count directs the search.
    - Evaluations count one conflict evaluation per individual created.
    """
    check_size(size)
    check_count("pop_size", pop_size)
    check_probability("elitism", elitism)
    check_probability("pc", pc)
    check_probability("pm", pm)
    check_count("max_gen", max_gen, minimum=0)
    check_count("tournament_size", tournament_size)
    rng = rng if rng is not None else random.Random()
    emitter = StepEmitter(reporter, time_limit, should_stop)
    if size < 2:
        return trivial_solution(size, emitter)

    population: List[Individual] = []
    for _ in range(pop_size):
        individual = random_rows(size, rng)
        population.append((individual, conflicts(individual)))
    evaluations = pop_size

    best_individual, best_conflicts = min(population, key=lambda ind: ind[1])
    best_individual = best_individual[:]
    elite_count = math.floor(elitism * pop_size)

    def tournament() -> List[int]:
        """Return the rows of the winner of a tournament selection."""
        winner = population[rng.randrange(pop_size)]
        for _ in range(tournament_size - 1):
            candidate = population[rng.randrange(pop_size)]
            if candidate[1] < winner[1]:
                winner = candidate
        return winner[0]

    def mutate(individual: List[int]) -> None:
        """Reassign each column to a random row with probability pm."""
        for column in range(size):
            if rng.random() < pm:
                individual[column] = rng.randrange(size)

    generation = 0
    while generation < max_gen:
        if stop_on_solution and best_conflicts == 0:
            break
        if emitter.expired():
            return emitter.finish(best_individual, best_conflicts, generation, evaluations, timeout=True)

        generation += 1
        population.sort(key=lambda ind: ind[1])
        new_population: List[Individual] = [(rows[:], score) for rows, score in population[:elite_count]]

        while len(new_population) < pop_size:
            parent1 = tournament()
            parent2 = tournament()

            if rng.random() < pc:
                # Single-point crossover
                cut = rng.randrange(1, size)
                child1 = parent1[:cut] + parent2[cut:]
                child2 = parent2[:cut] + parent1[cut:]
            else:
                child1 = parent1[:]
                child2 = parent2[:]

            for child in (child1, child2):
                if len(new_population) == pop_size:
                    break
                mutate(child)
                new_population.append((child, conflicts(child)))
                evaluations += 1

        population = new_population
        leader_rows, leader_conflicts = min(population, key=lambda ind: ind[1])
        emitter.emit(leader_rows, leader_conflicts)

        if leader_conflicts < best_conflicts:
            best_conflicts = leader_conflicts
            best_individual = leader_rows[:]

    return emitter.finish(best_individual, best_conflicts, generation, evaluations)
