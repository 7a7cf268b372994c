"""
Sequence Diff - LCS edit script shared by line and character comparisons
"""

from __future__ import annotations

import logging
import operator
from typing import Callable, Optional, Sequence, TypeVar

from models.diff import DiffKind

logger = logging.getLogger(__name__)

T = TypeVar("T")

# (kind, left index, right index), 0-indexed; the index of the side an op
# does not touch is None
DiffStep = tuple[DiffKind, Optional[int], Optional[int]]


class DiffTooLargeError(ValueError):
    """Raised when an LCS table would exceed the configured cell limit"""

    def __init__(self, left_size: int, right_size: int, max_cells: int):
        self.left_size = left_size
        self.right_size = right_size
        self.cells = left_size * right_size
        self.max_cells = max_cells
        super().__init__(
            f"Input too large to compare: {left_size} x {right_size} = {self.cells} cells "
            f"(limit {max_cells})"
        )


def check_size(left_size: int, right_size: int, max_cells: int | None) -> None:
    """Raise DiffTooLargeError if left_size * right_size exceeds max_cells"""
    if max_cells is not None and left_size * right_size > max_cells:
        logger.warning(
            "Rejected diff of %d x %d elements (limit %d cells)", left_size, right_size, max_cells
        )
        raise DiffTooLargeError(left_size, right_size, max_cells)


def build_lcs_table(
    left: Sequence[T],
    right: Sequence[T],
    eq: Callable[[T, T], bool] = operator.eq,
) -> list[list[int]]:
    """Build the (n+1) x (m+1) LCS length table"""
    n, m = len(left), len(right)
    dp = [[0] * (m + 1) for _ in range(n + 1)]

    for i in range(1, n + 1):
        item = left[i - 1]
        prev, row = dp[i - 1], dp[i]
        for j in range(1, m + 1):
            if eq(item, right[j - 1]):
                row[j] = prev[j - 1] + 1
            else:
                row[j] = max(prev[j], row[j - 1])

    return dp


def diff_sequences(
    left: Sequence[T],
    right: Sequence[T],
    eq: Callable[[T, T], bool] = operator.eq,
    max_cells: int | None = None,
) -> list[DiffStep]:
    """
    Compute a minimal edit script turning ``left`` into ``right``.

    Backtracks the LCS table from the bottom-right corner. When skipping a
    right element and skipping a left element score the same, the insert is
    taken first, which puts deletes ahead of inserts in the final order.
    Runs in O(n*m) time and memory.
    """
    n, m = len(left), len(right)
    check_size(n, m, max_cells)
    logger.debug("Building LCS table of %d x %d", n, m)

    dp = build_lcs_table(left, right, eq)

    steps: list[DiffStep] = []
    i, j = n, m
    while i > 0 or j > 0:
        if i > 0 and j > 0 and eq(left[i - 1], right[j - 1]):
            steps.append((DiffKind.EQUAL, i - 1, j - 1))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or dp[i][j - 1] >= dp[i - 1][j]):
            steps.append((DiffKind.INSERT, None, j - 1))
            j -= 1
        else:
            steps.append((DiffKind.DELETE, i - 1, None))
            i -= 1

    steps.reverse()
    return steps
