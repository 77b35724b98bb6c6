"""Tests for local beam search."""

from pathlib import Path
import random
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from queensteps.beam_search import _next_beam, lbs_nqueens
from queensteps.board import BoardState
from queensteps.errors import InvalidParameterError
from queensteps.neighbors import neighbors
from queensteps.steps import StepRecorder
from queensteps.utils import conflicts, is_valid_solution


class NextBeamTests(unittest.TestCase):
    """The next beam holds the k best distinct neighbors."""

    def test_beam_members_are_distinct_and_best(self):
        beam = [BoardState([0, 0, 0, 0, 0]), BoardState([0, 0, 0, 0, 1])]
        next_beam, scored = _next_beam(beam, 3)
        self.assertEqual(scored, 2 * 5 * 4)
        self.assertEqual(len(next_beam), 3)
        self.assertEqual(len({tuple(s.rows) for s in next_beam}), 3)
        union = {rows: score for state in beam for rows, score in neighbors(state)}
        cutoff = sorted(union.values())[2]
        for state in next_beam:
            self.assertLessEqual(state.score, cutoff)
            state.verify()

    def test_beam_is_sorted_by_score(self):
        beam = [BoardState.random(6, random.Random(seed)) for seed in range(4)]
        next_beam, _ = _next_beam(beam, 4)
        scores = [state.score for state in next_beam]
        self.assertEqual(scores, sorted(scores))


class LocalBeamSearchTests(unittest.TestCase):
    """Reported leaders only go up when no improving neighbor existed."""

    def test_leader_does_not_regress_while_an_improving_neighbor_exists(self):
        for seed in range(5):
            recorder = StepRecorder()
            lbs_nqueens(10, k=4, reporter=recorder, rng=random.Random(seed))
            for (state, score), (_, next_score) in zip(recorder.steps, recorder.steps[1:]):
                improving = any(s < score for _, s in neighbors(BoardState(state)))
                if improving:
                    self.assertLessEqual(next_score, score)

    def test_successful_run_trace(self):
        recorder = StepRecorder()
        solution = lbs_nqueens(8, k=10, max_stagnation=100, reporter=recorder, rng=random.Random(3))
        self.assertEqual(solution.score, min(recorder.scores))
        self.assertEqual(solution.steps, solution.iterations + 1)
        for state, score in recorder.steps:
            self.assertEqual(conflicts(state), score)
        if solution.solved:
            self.assertTrue(is_valid_solution(solution.rows))
            self.assertEqual(recorder.scores[-1], 0)

    def test_stagnation_ends_the_search(self):
        solution = lbs_nqueens(20, k=1, max_stagnation=1, rng=random.Random(0))
        self.assertLessEqual(solution.iterations, 10_000)
        self.assertFalse(solution.timeout)

    def test_max_iter_caps_iterations(self):
        solution = lbs_nqueens(16, k=2, max_stagnation=1000, max_iter=3, rng=random.Random(0))
        self.assertLessEqual(solution.iterations, 3)

    def test_invalid_parameters(self):
        for kwargs in ({"k": 0}, {"k": -2}, {"max_stagnation": 0}, {"max_iter": 0}):
            with self.assertRaises(InvalidParameterError):
                lbs_nqueens(8, **kwargs)


if __name__ == "__main__":
    unittest.main()
