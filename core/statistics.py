# core/statistics.py

"""
Reduces an ordered result set to its class average and pass percentage.

Two eligibility conventions are in use:
- Sequence results count every student, including those with a zero average.
- Term and annual results only count students with a positive average; a zero average
  there means nothing was entered for the student, and they are left out of both the
  class average and the pass percentage.

Every empty case resolves to 0 rather than failing.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

from models.schedule import PASSING_MARK


class ClassStatistics(NamedTuple):
    class_average: float
    pass_percentage: float


def calculate_statistics(
    averages: Iterable[float],
    positive_only: bool = False,
    passing_mark: float = PASSING_MARK,
) -> ClassStatistics:
    """
    Computes the class average and the percentage of students at or above the passing mark.

    Args:
        averages (Iterable[float]): One average per student.
        positive_only (bool): If True, averages of zero or less are excluded before computing.
        passing_mark (float): The minimum average counted as a pass.

    Returns:
        ClassStatistics: The class average and pass percentage, both 0 when no averages are eligible.
    """
    eligible = [a for a in averages if a > 0] if positive_only else list(averages)

    if not eligible:
        return ClassStatistics(0.0, 0.0)

    class_average = sum(eligible) / len(eligible)
    pass_count = sum(1 for a in eligible if a >= passing_mark)
    pass_percentage = pass_count / len(eligible) * 100

    return ClassStatistics(class_average, pass_percentage)


def summarize_rows(
    rows: Iterable,
    positive_only: bool = False,
    passing_mark: float = PASSING_MARK,
) -> ClassStatistics:
    # annual rows expose their final average as `average`
    return calculate_statistics(
        (row.average for row in rows),
        positive_only=positive_only,
        passing_mark=passing_mark,
    )
