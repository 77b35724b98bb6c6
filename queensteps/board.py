"""Mutable board state with an incrementally maintained conflict score."""

from __future__ import annotations

import random
from typing import Iterable, List, Tuple

from .errors import InvariantViolation
from .utils import conflicts, conflicts_after_move, random_rows


class BoardState:
    """A column-indexed queen placement together with its conflict score.

    ``rows[column] = row`` for every column. The score is computed once on
    construction and then kept current by :meth:`move`, which only re-evaluates
    the pairs involving the moved column.
    """

    __slots__ = ("rows", "score", "size")

    def __init__(self, rows: Iterable[int]):
        self.rows: List[int] = list(rows)
        self.size = len(self.rows)
        self.score = conflicts(self.rows)

    @classmethod
    def random(cls, size: int, rng: random.Random) -> "BoardState":
        return cls(random_rows(size, rng))

    def score_if_moved(self, column: int, row: int) -> int:
        """Return the score the board would have with ``column`` on ``row``."""
        return conflicts_after_move(self.rows, self.score, column, row)

    def move(self, column: int, row: int) -> int:
        """Place the queen of ``column`` on ``row`` and return the new score."""
        self.score = conflicts_after_move(self.rows, self.score, column, row)
        self.rows[column] = row
        if len(self.rows) != self.size:
            raise InvariantViolation(
                f"Board length changed from {self.size} to {len(self.rows)} after moving column {column}"
            )
        return self.score

    def verify(self) -> None:
        """Check the cached score against a full recomputation."""
        if len(self.rows) != self.size:
            raise InvariantViolation(f"Board length {len(self.rows)} differs from size {self.size}")
        expected = conflicts(self.rows)
        if expected != self.score:
            raise InvariantViolation(f"Cached score {self.score} differs from recomputed score {expected}")

    def copy(self) -> "BoardState":
        clone = BoardState.__new__(BoardState)
        clone.rows = self.rows[:]
        clone.size = self.size
        clone.score = self.score
        return clone

    def snapshot(self) -> Tuple[int, ...]:
        """Return an immutable copy of the rows, as handed to step reporters."""
        return tuple(self.rows)

    def __len__(self) -> int:
        return self.size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return self.rows == other.rows

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"BoardState(rows={self.rows!r}, score={self.score})"
