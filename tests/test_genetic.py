"""Tests for the generational genetic algorithm."""

from pathlib import Path
import random
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from queensteps.errors import InvalidParameterError
from queensteps.genetic import ga_nqueens
from queensteps.steps import StepRecorder
from queensteps.utils import conflicts, is_valid_solution


class GeneticAlgorithmTests(unittest.TestCase):
    """Generation count, elitism and non-regression of the best individual."""

    def test_final_score_not_worse_than_first_generation(self):
        for seed in range(5):
            recorder = StepRecorder()
            solution = ga_nqueens(10, pop_size=30, max_gen=40, reporter=recorder, rng=random.Random(seed))
            self.assertLessEqual(solution.score, recorder.scores[0])
            self.assertLessEqual(solution.score, min(recorder.scores))
            self.assertEqual(solution.score, conflicts(solution.rows))

    def test_runs_exactly_max_gen_generations(self):
        recorder = StepRecorder()
        solution = ga_nqueens(8, pop_size=20, max_gen=25, reporter=recorder, rng=random.Random(1))
        self.assertEqual(len(recorder), 25)
        self.assertEqual(solution.steps, 25)
        self.assertEqual(solution.iterations, 25)
        self.assertFalse(solution.timeout)

    def test_zero_generations_returns_initial_best(self):
        recorder = StepRecorder()
        solution = ga_nqueens(8, pop_size=15, max_gen=0, reporter=recorder, rng=random.Random(2))
        self.assertEqual(len(recorder), 0)
        self.assertEqual(solution.iterations, 0)
        self.assertEqual(solution.evaluations, 15)
        self.assertEqual(len(solution.rows), 8)
        self.assertEqual(solution.score, conflicts(solution.rows))

    def test_full_elitism_keeps_the_population(self):
        recorder = StepRecorder()
        ga_nqueens(9, pop_size=12, elitism=1.0, pm=1.0, max_gen=10, reporter=recorder, rng=random.Random(3))
        self.assertEqual(len(set(recorder.scores)), 1)

    def test_stop_on_solution(self):
        recorder = StepRecorder()
        solution = ga_nqueens(
            6, pop_size=60, pm=0.1, max_gen=2000, stop_on_solution=True, reporter=recorder, rng=random.Random(5)
        )
        if solution.solved:
            self.assertTrue(is_valid_solution(solution.rows))
            self.assertEqual(recorder.scores.count(0), 1 if recorder.scores else 0)
        self.assertLessEqual(solution.iterations, 2000)

    def test_seeded_runs_are_reproducible(self):
        first, second = StepRecorder(), StepRecorder()
        ga_nqueens(8, pop_size=20, max_gen=15, reporter=first, rng=random.Random(77))
        ga_nqueens(8, pop_size=20, max_gen=15, reporter=second, rng=random.Random(77))
        self.assertEqual(first.steps, second.steps)

    def test_invalid_parameters(self):
        bad = (
            {"pop_size": 0},
            {"pc": 1.5},
            {"pm": -0.2},
            {"elitism": 2.0},
            {"max_gen": -1},
            {"tournament_size": 0},
        )
        for kwargs in bad:
            with self.assertRaises(InvalidParameterError):
                ga_nqueens(8, **kwargs)


if __name__ == "__main__":
    unittest.main()
