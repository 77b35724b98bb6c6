"""Constraint-propagation (depth-first backtracking) solver for N-Queens.

The board is built column by column. For each column the rows are tried
top-to-bottom and any row already attacked by a placed queen is pruned, so
only consistent partial assignments are ever extended. When a column has no
remaining row, the previous queen is lifted and moved further down.

Implementation overview
-----------------------
- State representation: ``positions`` holds the rows of the queens placed so
  far, one per column, left to right.
- Constraint tracking: three boolean arrays give O(1) checks for row and
  diagonal availability: ``row_used[r]``, ``diag1_used[r-c+offset]`` and
  ``diag2_used[r+c]``, where ``offset = size - 1`` maps negative indices to [0..].
- Search strategy: depth-first search implemented iteratively, avoiding Python
  recursion limits for large boards.

Step stream
-----------
One step per placement and one per backtrack. The reported state is the
placed prefix and the score is the number of columns still unassigned, so a
complete assignment is reported with score 0.

Outcomes
--------
- ``N >= 4`` and ``N == 1``: the lexicographically first solution.
- ``N == 0``: the empty board, no steps.
- ``N in {2, 3}``: no solution exists. The deepest partial assignment reached is
  completed with least-conflict rows and returned with its (positive) score.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .steps import Solution, StepEmitter, StepReporter, StopSignal
from .utils import check_size, conflicts, queen_conflicts


def complete_greedily(prefix: Sequence[int], size: int) -> List[int]:
    """Extend a partial assignment to ``size`` columns with least-conflict rows.

    Each remaining column, left to right, takes the first row that is attacked
    by the fewest queens already on the board.
    """
    board = list(prefix)
    for column in range(len(board), size):
        board.append(0)
        best_row = min(range(size), key=lambda row: queen_conflicts(board, column, row))
        board[column] = best_row
    return board


def cp_nqueens(
    size: int,
    reporter: Optional[StepReporter] = None,
    time_limit: Optional[float] = None,
    should_stop: Optional[StopSignal] = None,
) -> Solution:
    """Find the first solution via iterative backtracking with conflict pruning.

    Parameters
    ----------
    size : int
        Board dimension N (N >= 0).
    reporter : callable | None
        Step sink; receives the placed prefix after every placement and
        every backtrack.
    time_limit : float | None
        Optional wall-clock time limit in seconds.
    should_stop : callable | None
        Optional early-termination signal checked once per column visit.

    Returns
    -------
    Solution
        ``iterations`` counts candidate rows examined (nodes explored);
        ``evaluations`` counts the O(1) constraint checks that accepted a row.

    Determinism and ordering
    ------------------------
    - Columns are assigned in natural order 0..N-1.
    - Within a column, rows are tried top-to-bottom 0..N-1.
    - As a result, this returns the lexicographically first solution.
    """
    check_size(size)
    emitter = StepEmitter(reporter, time_limit, should_stop)

    positions: List[int] = []
    deepest: List[int] = []
    row_used = [False] * size
    diag1_used = [False] * max(0, 2 * size - 1)
    diag2_used = [False] * max(0, 2 * size - 1)
    offset = size - 1

    row = 0
    explored = 0
    accepted = 0

    while len(positions) < size:
        if emitter.expired():
            board = complete_greedily(deepest, size)
            return emitter.finish(board, conflicts(board), explored, accepted, timeout=True)

        column = len(positions)
        placed = False
        while row < size:
            explored += 1
            diag1_index = row - column + offset
            diag2_index = row + column
            if not row_used[row] and not diag1_used[diag1_index] and not diag2_used[diag2_index]:
                # Place the queen and mark the corresponding constraints.
                positions.append(row)
                row_used[row] = True
                diag1_used[diag1_index] = True
                diag2_used[diag2_index] = True
                accepted += 1
                placed = True
                if len(positions) > len(deepest):
                    deepest = positions[:]
                emitter.emit(positions, size - len(positions))
                row = 0
                break
            row += 1

        if placed:
            continue

        if not positions:
            # Every row of the first column failed: the board has no solution.
            board = complete_greedily(deepest, size)
            return emitter.finish(board, conflicts(board), explored, accepted)

        # Exhausted all rows in this column; undo the previous decision.
        previous_row = positions.pop()
        previous_column = len(positions)
        row_used[previous_row] = False
        diag1_used[previous_row - previous_column + offset] = False
        diag2_used[previous_row + previous_column] = False
        emitter.emit(positions, size - len(positions))
        row = previous_row + 1

    return emitter.finish(positions, 0, explored, accepted)
