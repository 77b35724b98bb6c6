"""Utility helpers for the N-Queens solvers.

This module provides the low-level primitives every strategy depends upon:
conflict counting (full, pairwise reference and incremental), argument
validation and random state construction.

Representation
--------------
Boards are encoded as a 1D sequence where ``board[col] = row``. Column
uniqueness is structural; two queens may share a row, which counts as a
conflict rather than an invalid board.
"""

from __future__ import annotations

import math
import random
from collections import Counter
from typing import List, Optional, Sequence

from .errors import InvalidParameterError


def conflicts(board: Sequence[int]) -> int:
    """Count attacking queen pairs in O(N).

    Queens are bucketed by row, by ``row - column`` and by ``row + column``;
    each bucket of ``k`` queens contributes ``k * (k - 1) / 2`` pairs.
    """
    row_count: Counter[int] = Counter()
    diag1: Counter[int] = Counter()
    diag2: Counter[int] = Counter()

    for column, row in enumerate(board):
        row_count[row] += 1
        diag1[row - column] += 1
        diag2[row + column] += 1

    def _pairs(counter: Counter[int]) -> int:
        total = 0
        for count in counter.values():
            if count > 1:
                total += count * (count - 1) // 2
        return total

    return _pairs(row_count) + _pairs(diag1) + _pairs(diag2)


def conflicts_on2(board: Sequence[int]) -> int:
    """Count attacking queen pairs by checking every column pair, O(N^2).

    Reference implementation for validation: for every column pair ``i < j``
    count a conflict when the rows match or ``|rows[i] - rows[j]| == j - i``.
    """
    n = len(board)
    conflicts_count = 0
    for i in range(n):
        for j in range(i + 1, n):
            if board[i] == board[j] or abs(board[i] - board[j]) == j - i:
                conflicts_count += 1
    return conflicts_count


def queen_conflicts(board: Sequence[int], column: int, row: Optional[int] = None) -> int:
    """Count the queens attacking the queen of ``column`` in O(N).

    When ``row`` is given, the queen of ``column`` is assumed to sit on ``row``
    instead of ``board[column]``; the board itself is not modified.
    """
    if row is None:
        row = board[column]
    count = 0
    for other_column, other_row in enumerate(board):
        if other_column == column:
            continue
        if other_row == row or abs(other_row - row) == abs(other_column - column):
            count += 1
    return count


def conflicts_after_move(board: Sequence[int], score: int, column: int, new_row: int) -> int:
    """Return the conflict count of ``board`` once ``column`` moves to ``new_row``.

    Parameters
    ----------
    board : Sequence[int]
        Current configuration (left untouched).
    score : int
        ``conflicts(board)``; only the pairs involving ``column`` are recomputed.
    column, new_row : int
        The single-column reassignment to evaluate.

    Returns
    -------
    int
        Exactly ``conflicts(board')`` where ``board'`` is the moved board.
    """
    if board[column] == new_row:
        return score
    return score - queen_conflicts(board, column) + queen_conflicts(board, column, new_row)


def is_valid_solution(board: Sequence[int]) -> bool:
    """Return True when ``board`` places N non-attacking queens on an N x N board.

    Every row must be an int in ``[0, N)``; the empty board is trivially solved.
    """
    n = len(board)
    for row in board:
        if not isinstance(row, int) or isinstance(row, bool):
            return False
        if row < 0 or row >= n:
            return False
    return conflicts(board) == 0


def random_rows(size: int, rng: random.Random) -> List[int]:
    """Return a uniformly random configuration drawn from ``rng``."""
    return [rng.randrange(size) for _ in range(size)]


# Argument validation ---------------------------------------------------------

def check_size(size: int) -> None:
    """Reject board sizes that are not non-negative integers."""
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidParameterError(f"Board size must be an integer, got {size!r}")
    if size < 0:
        raise InvalidParameterError(f"Board size must be non-negative, got {size}")


def check_positive(name: str, value: float, allow_zero: bool = False) -> None:
    """Reject a numeric parameter that is not strictly positive (or >= 0)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameterError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value) or value < 0 or (value == 0 and not allow_zero):
        bound = ">= 0" if allow_zero else "> 0"
        raise InvalidParameterError(f"{name} must be {bound}, got {value}")


def check_count(name: str, value: int, minimum: int = 1) -> None:
    """Reject an integer parameter below ``minimum``."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidParameterError(f"{name} must be >= {minimum}, got {value}")


def check_probability(name: str, value: float) -> None:
    """Reject a probability outside the closed interval [0, 1]."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameterError(f"{name} must be a number, got {value!r}")
    if not 0.0 <= value <= 1.0:
        raise InvalidParameterError(f"{name} must be within [0, 1], got {value}")
