"""Tests for strategy dispatch and the shared run contract."""

from pathlib import Path
import random
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from queensteps.errors import InvalidParameterError
from queensteps.steps import StepRecorder
from queensteps.strategies import (
    ALGORITHMS,
    ConstraintPropagation,
    Genetic,
    HillClimbing,
    LocalBeamSearch,
    SimulatedAnnealing,
    algorithm_from_name,
    canonical_name,
    solve,
)
from queensteps.utils import conflicts

FAST_VARIANTS = (
    HillClimbing(),
    SimulatedAnnealing(max_iter=2000),
    LocalBeamSearch(state_count=3, max_iter=200),
    Genetic(generation_size=20, generation_count=30),
    ConstraintPropagation(),
)


class DegenerateSizeTests(unittest.TestCase):
    """N = 0 and N = 1 have a defined result for every strategy."""

    def test_single_queen(self):
        for algorithm in FAST_VARIANTS:
            recorder = StepRecorder()
            solution = solve(1, algorithm, reporter=recorder, seed=0)
            self.assertEqual(solution.rows, (0,), algorithm.name)
            self.assertEqual(solution.score, 0, algorithm.name)
            self.assertLessEqual(len(recorder), 1, algorithm.name)
            self.assertEqual(solution.steps, len(recorder))

    def test_empty_board(self):
        for algorithm in FAST_VARIANTS:
            solution = solve(0, algorithm, seed=0)
            self.assertEqual(solution.rows, (), algorithm.name)
            self.assertTrue(solution.solved, algorithm.name)

    def test_negative_size_is_rejected_before_search(self):
        for algorithm in FAST_VARIANTS:
            recorder = StepRecorder()
            with self.assertRaises(InvalidParameterError):
                solve(-1, algorithm, reporter=recorder)
            self.assertEqual(len(recorder), 0)


class RunContractTests(unittest.TestCase):
    """Every strategy returns a full board scored consistently."""

    def test_final_board_and_step_count(self):
        for algorithm in FAST_VARIANTS:
            recorder = StepRecorder()
            solution = solve(8, algorithm, reporter=recorder, seed=5)
            self.assertEqual(len(solution.rows), 8, algorithm.name)
            self.assertEqual(solution.score, conflicts(solution.rows), algorithm.name)
            self.assertEqual(solution.steps, len(recorder), algorithm.name)
            self.assertTrue(all(isinstance(state, tuple) for state, _ in recorder.steps))

    def test_seeded_runs_have_identical_traces(self):
        for algorithm in FAST_VARIANTS:
            first, second = StepRecorder(), StepRecorder()
            solve(10, algorithm, reporter=first, seed=123)
            solve(10, algorithm, reporter=second, seed=123)
            self.assertEqual(first.steps, second.steps, algorithm.name)

    def test_explicit_rng_is_used(self):
        first, second = StepRecorder(), StepRecorder()
        solve(10, HillClimbing(), reporter=first, rng=random.Random(4))
        solve(10, HillClimbing(), reporter=second, seed=4)
        self.assertEqual(first.steps, second.steps)

    def test_stop_signal_ends_every_strategy(self):
        for algorithm in FAST_VARIANTS:
            solution = solve(12, algorithm, seed=1, should_stop=lambda: True)
            self.assertTrue(solution.timeout, algorithm.name)
            self.assertEqual(len(solution.rows), 12, algorithm.name)
            self.assertEqual(solution.score, conflicts(solution.rows), algorithm.name)

    def test_time_limit_is_honoured(self):
        solution = solve(200, SimulatedAnnealing(cooling_factor=1.0, max_iter=10**9), seed=0, time_limit=0.05)
        self.assertTrue(solution.timeout or solution.solved)
        self.assertLess(solution.elapsed, 5.0)


class DispatchTests(unittest.TestCase):
    """Names and aliases resolve to variants carrying their parameters."""

    def test_aliases(self):
        self.assertEqual(canonical_name("HC"), "hill_climbing")
        self.assertEqual(canonical_name("sa"), "simulated_annealing")
        self.assertEqual(canonical_name("LBS"), "local_beam_search")
        self.assertEqual(canonical_name("ga"), "genetic")
        self.assertEqual(canonical_name("Constraint_Propagation"), "constraint_propagation")
        self.assertEqual(set(ALGORITHMS), {
            "hill_climbing",
            "simulated_annealing",
            "local_beam_search",
            "genetic",
            "constraint_propagation",
        })

    def test_algorithm_from_name_builds_variant(self):
        algorithm = algorithm_from_name("LBS", state_count=7)
        self.assertIsInstance(algorithm, LocalBeamSearch)
        self.assertEqual(algorithm.parameters()["state_count"], 7)

    def test_unknown_name_and_parameter(self):
        with self.assertRaises(InvalidParameterError):
            algorithm_from_name("tabu")
        with self.assertRaises(InvalidParameterError):
            algorithm_from_name("genetic", population=10)

    def test_malformed_parameters_rejected_before_search(self):
        bad = (
            LocalBeamSearch(state_count=0),
            Genetic(generation_size=-1),
            Genetic(mutation=1.5),
            SimulatedAnnealing(initial_temperature=0.0),
            HillClimbing(restarts=-2),
        )
        for algorithm in bad:
            recorder = StepRecorder()
            with self.assertRaises(InvalidParameterError):
                solve(8, algorithm, reporter=recorder)
            self.assertEqual(len(recorder), 0)

    def test_non_variant_is_rejected(self):
        with self.assertRaises(InvalidParameterError):
            solve(8, "hill_climbing")


if __name__ == "__main__":
    unittest.main()
