# core/ranking.py

"""
Shared ordering rule for every result set.

Rows are ordered by average, highest first, using Python's stable `sorted()`: students with
equal averages keep their relative order from the input roster. Ranks are then assigned by
position, 1..N, with no tie-sharing.
"""

from collections.abc import Callable, Iterable
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")


def order_by_average(rows: Iterable[T], key: Callable[[T], float]) -> list[T]:
    # reverse=True preserves stability for equal keys
    return sorted(rows, key=key, reverse=True)


def rank_rows(
    rows: Iterable[T],
    key: Callable[[T], float],
    build: Callable[[T, int], R],
) -> list[R]:
    """
    Orders unranked rows by average and builds a ranked row for each position.

    Args:
        rows (Iterable[T]): Unranked rows in roster order.
        key (Callable[[T], float]): Extracts the average to order by.
        build (Callable[[T, int], R]): Builds the final row from an unranked row and its rank.

    Returns:
        The ranked rows, ordered by descending average. Ranks form the exact sequence 1..N.
    """
    return [
        build(row, position + 1)
        for position, row in enumerate(order_by_average(rows, key))
    ]
