"""Successor generation for local search over N-Queens boards.

A neighbor differs from its parent in exactly one column's row. Exhaustive
generation yields the ``N * (N - 1)`` neighbors in a fixed order (columns left
to right, rows top to bottom, skipping the current row); randomized generation
draws one neighbor uniformly from that set.
"""

from __future__ import annotations

import random
from typing import Iterator, Sequence, Tuple

from .board import BoardState
from .errors import InvalidParameterError

Move = Tuple[int, int]


def iter_moves(board: Sequence[int]) -> Iterator[Move]:
    """Yield every ``(column, row)`` single-column reassignment of ``board``."""
    size = len(board)
    for column, current in enumerate(board):
        for row in range(size):
            if row != current:
                yield column, row


def neighbors(state: BoardState) -> Iterator[Tuple[Tuple[int, ...], int]]:
    """Yield ``(rows, score)`` for every neighbor of ``state`` in move order.

    Scores are computed incrementally from ``state.score``; the state itself is
    never modified.
    """
    base = state.rows
    for column, row in iter_moves(base):
        score = state.score_if_moved(column, row)
        moved = list(base)
        moved[column] = row
        yield tuple(moved), score


def random_move(board: Sequence[int], rng: random.Random) -> Move:
    """Pick a uniformly random column and a uniformly random different row."""
    size = len(board)
    if size < 2:
        raise InvalidParameterError(f"A board of size {size} has no neighbors")
    column = rng.randrange(size)
    # Map [0, size - 1) onto the rows other than the current one.
    row = rng.randrange(size - 1)
    if row >= board[column]:
        row += 1
    return column, row


def random_neighbor(state: BoardState, rng: random.Random) -> BoardState:
    """Return a copy of ``state`` with one random move applied."""
    column, row = random_move(state.rows, rng)
    neighbor = state.copy()
    neighbor.move(column, row)
    return neighbor
