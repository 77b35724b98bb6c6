"""Tests for the conflict evaluators and argument validation helpers."""

from pathlib import Path
import random
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from queensteps.errors import InvalidParameterError
from queensteps.utils import (
    check_count,
    check_positive,
    check_probability,
    check_size,
    conflicts,
    conflicts_after_move,
    conflicts_on2,
    is_valid_solution,
    queen_conflicts,
    random_rows,
)


class ConflictCountingTests(unittest.TestCase):
    """Full, pairwise and incremental conflict counts must agree."""

    def test_known_boards(self):
        self.assertEqual(conflicts([0, 0, 0, 0]), 6)
        self.assertEqual(conflicts([0, 1, 2, 3]), 6)
        self.assertEqual(conflicts([1, 3, 0, 2]), 0)
        self.assertEqual(conflicts([0, 4, 7, 5, 2, 6, 1, 3]), 0)
        self.assertEqual(conflicts([0, 2]), 0)
        self.assertEqual(conflicts([0, 1]), 1)

    def test_empty_and_single_boards(self):
        self.assertEqual(conflicts([]), 0)
        self.assertEqual(conflicts([0]), 0)
        self.assertTrue(is_valid_solution([]))
        self.assertTrue(is_valid_solution([0]))

    def test_linear_and_quadratic_counts_agree(self):
        rng = random.Random(7)
        for _ in range(300):
            size = rng.randrange(0, 15)
            board = random_rows(size, rng)
            self.assertEqual(conflicts(board), conflicts_on2(board), board)

    def test_score_is_zero_iff_valid(self):
        rng = random.Random(11)
        for _ in range(300):
            size = rng.randrange(1, 8)
            board = random_rows(size, rng)
            score = conflicts(board)
            self.assertGreaterEqual(score, 0)
            no_attack = all(
                board[i] != board[j] and abs(board[i] - board[j]) != j - i
                for i in range(size)
                for j in range(i + 1, size)
            )
            self.assertEqual(score == 0, no_attack, board)

    def test_incremental_rescoring_matches_full_recomputation(self):
        rng = random.Random(2024)
        for _ in range(500):
            size = rng.randrange(1, 13)
            board = random_rows(size, rng)
            score = conflicts(board)
            column = rng.randrange(size)
            new_row = rng.randrange(size)
            moved = list(board)
            moved[column] = new_row
            self.assertEqual(conflicts_after_move(board, score, column, new_row), conflicts(moved))
            self.assertEqual(conflicts(board), score, "the evaluated board must stay untouched")

    def test_queen_conflicts_counts_attackers_of_one_column(self):
        board = [0, 0, 2, 1]
        # Column 0 shares row 0 with column 1 and a diagonal with column 2.
        self.assertEqual(queen_conflicts(board, 0), 2)
        self.assertEqual(queen_conflicts(board, 0, row=1), queen_conflicts([1, 0, 2, 1], 0))


class ValidSolutionTests(unittest.TestCase):
    """is_valid_solution rejects out-of-range and non-integer rows."""

    def test_rejects_bad_rows(self):
        self.assertFalse(is_valid_solution([0, 4, 7, 5, 2, 6, 1, 8]))
        self.assertFalse(is_valid_solution([-1, 1]))
        self.assertFalse(is_valid_solution([True, 3, 0, 2]))
        self.assertFalse(is_valid_solution([0, 1, 2, 3]))

    def test_accepts_solution(self):
        self.assertTrue(is_valid_solution((1, 3, 0, 2)))


class ValidationHelperTests(unittest.TestCase):
    """Parameter checks raise InvalidParameterError (a ValueError)."""

    def test_check_size(self):
        check_size(0)
        check_size(12)
        for bad in (-1, 2.0, True, "8", None):
            with self.assertRaises(InvalidParameterError):
                check_size(bad)

    def test_check_positive(self):
        check_positive("T0", 0.5)
        check_positive("delay", 0, allow_zero=True)
        for bad in (0, -1.0, float("inf"), float("nan"), "1"):
            with self.assertRaises(InvalidParameterError):
                check_positive("T0", bad)

    def test_check_count(self):
        check_count("k", 1)
        check_count("max_gen", 0, minimum=0)
        for bad in (0, 1.5, False):
            with self.assertRaises(InvalidParameterError):
                check_count("k", bad)

    def test_check_probability(self):
        for good in (0, 0.0, 0.3, 1):
            check_probability("pm", good)
        for bad in (-0.1, 1.01, None):
            with self.assertRaises(InvalidParameterError):
                check_probability("pm", bad)

    def test_invalid_parameter_is_value_error(self):
        with self.assertRaises(ValueError):
            check_size(-3)


if __name__ == "__main__":
    unittest.main()
