# core/annual_aggregator.py

"""
Combines the three term results into the year's ranked annual results.

A student's term averages are looked up by display name in each term's rows, defaulting to
zero when the student has no row. The final average is the mean of the term averages that
are greater than zero, so a term with nothing entered does not pull the average down.

Annual statistics only consider students with a positive final average.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from core.ranking import rank_rows
from core.statistics import summarize_rows
from models.results import AnnualResult, ResultSet, TermResult
from models.schedule import PASSING_MARK, TERM_SEQUENCES, Term
from models.student import Student

logger = logging.getLogger(__name__)


def term_average_for(
    name: str,
    term_rows: ResultSet[TermResult] | Iterable[TermResult] | None,
) -> float:
    if term_rows is None:
        return 0.0

    if not isinstance(term_rows, ResultSet):
        term_rows = ResultSet(list(term_rows))

    return term_rows.average_for(name)


def final_average(term_averages: Iterable[float]) -> float:
    valid_terms = [average for average in term_averages if average > 0]

    return sum(valid_terms) / len(valid_terms) if valid_terms else 0.0


def compute_annual_results(
    students: list[Student],
    term_results: Mapping[Term, ResultSet[TermResult] | Iterable[TermResult]],
    passing_mark: float = PASSING_MARK,
) -> ResultSet[AnnualResult]:
    """
    Computes the ranked annual results from the three term result sets.

    Args:
        students (list[Student]): The class roster, in display order.
        term_results (Mapping[Term, ResultSet | Iterable[TermResult]]): Each term's result set
            (or ordered rows). A missing term is treated as having no rows.
        passing_mark (float): The minimum average counted as a pass.

    Returns:
        ResultSet[AnnualResult]: One row per student, ordered by descending final average with
        ranks 1..N. The class average and pass percentage only count students with a positive
        final average.

    Notes:
        - Students are matched to their term rows by display name, not by ID. Two students
          sharing a name will both read the first matching row.
    """
    unranked = []

    for student in students:
        averages = tuple(
            term_average_for(student.name, term_results.get(term))
            for term in TERM_SEQUENCES
        )
        unranked.append((student.name, averages, final_average(averages)))

    rows = rank_rows(
        unranked,
        key=lambda row: row[2],
        build=lambda row, rank: AnnualResult(row[0], *row[1], row[2], rank),
    )

    stats = summarize_rows(rows, positive_only=True, passing_mark=passing_mark)

    logger.debug(
        "Computed annual results for %d students (class average %.2f, pass %.1f%%).",
        len(rows),
        stats.class_average,
        stats.pass_percentage,
    )

    return ResultSet(rows, stats.class_average, stats.pass_percentage)
