"""Tests for the constraint-propagation (backtracking) solver."""

from pathlib import Path
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from queensteps.backtracking import complete_greedily, cp_nqueens
from queensteps.steps import StepRecorder
from queensteps.utils import conflicts, is_valid_solution


class ConstraintPropagationTests(unittest.TestCase):
    """Solutions for N >= 4, explicit no-solution for N = 2 and 3."""

    def test_valid_solutions_for_small_boards(self):
        for size in range(4, 19):
            solution = cp_nqueens(size)
            self.assertTrue(solution.solved, size)
            self.assertEqual(len(solution.rows), size)
            self.assertTrue(is_valid_solution(solution.rows), size)
            self.assertFalse(solution.timeout)

    def test_eight_queens_is_a_permutation(self):
        solution = cp_nqueens(8)
        self.assertEqual(sorted(solution.rows), list(range(8)))
        self.assertEqual(solution.rows, (0, 4, 7, 5, 2, 6, 1, 3))
        self.assertEqual(solution.score, 0)

    def test_no_solution_for_two_and_three(self):
        for size in (2, 3):
            solution = cp_nqueens(size)
            self.assertFalse(solution.solved)
            self.assertGreater(solution.score, 0)
            self.assertEqual(len(solution.rows), size)
            self.assertEqual(solution.score, conflicts(solution.rows))

    def test_trivial_sizes(self):
        recorder = StepRecorder()
        empty = cp_nqueens(0, reporter=recorder)
        self.assertEqual(empty.rows, ())
        self.assertEqual(empty.score, 0)
        self.assertEqual(len(recorder), 0)

        recorder = StepRecorder()
        single = cp_nqueens(1, reporter=recorder)
        self.assertEqual(single.rows, (0,))
        self.assertEqual(single.score, 0)
        self.assertEqual(recorder.steps, [((0,), 0)])

    def test_step_stream_tracks_placements_and_backtracks(self):
        recorder = StepRecorder()
        solution = cp_nqueens(6, reporter=recorder)
        self.assertEqual(solution.steps, len(recorder))
        previous_depth = 0
        for state, score in recorder.steps:
            self.assertEqual(score, 6 - len(state))
            self.assertEqual(abs(len(state) - previous_depth), 1)
            self.assertEqual(conflicts(state), 0)
            previous_depth = len(state)
        self.assertEqual(recorder.steps[-1], (solution.rows, 0))

    def test_stop_signal_returns_a_full_board(self):
        solution = cp_nqueens(30, should_stop=lambda: True)
        self.assertTrue(solution.timeout)
        self.assertEqual(len(solution.rows), 30)
        self.assertEqual(solution.score, conflicts(solution.rows))

    def test_complete_greedily(self):
        self.assertEqual(complete_greedily([], 1), [0])
        board = complete_greedily([0], 4)
        self.assertEqual(board[0], 0)
        self.assertEqual(len(board), 4)
        self.assertEqual(board[1], 2)


if __name__ == "__main__":
    unittest.main()
