# core/term_aggregator.py

"""
Combines a term's two sequences into ranked term results.

Each of the term's sequences is summed with the same per-subject rule as a single sequence.
A sequence only counts toward the term when it was entered for the student, and "entered"
means its summed marks are greater than zero. A sequence whose every mark is zero is
indistinguishable from one with no marks, and contributes nothing to either the marks or
the possible marks.

Term statistics only consider students with a positive term average.
"""

from __future__ import annotations

import logging

from core.ranking import rank_rows
from core.sequence_aggregator import MarkIndex, index_marks, scale_average, sum_sequence_marks
from core.statistics import summarize_rows
from models.mark import Mark
from models.results import ResultSet, TermResult
from models.schedule import PASSING_MARK, TERM_SEQUENCES, Term
from models.student import Student
from models.subject import Subject

logger = logging.getLogger(__name__)


def _sum_term_marks(
    student: Student,
    term: Term,
    subjects: list[Subject],
    mark_index: MarkIndex,
) -> tuple[float, float, int]:
    total_marks = 0.0
    total_possible = 0.0
    sequence_count = 0

    for sequence in TERM_SEQUENCES[term]:
        sequence_marks, sequence_possible = sum_sequence_marks(
            student.id, sequence, subjects, mark_index
        )

        if sequence_marks > 0:
            total_marks += sequence_marks
            total_possible += sequence_possible
            sequence_count += 1

    return total_marks, total_possible, sequence_count


def _rank_term(
    term: Term,
    students: list[Student],
    subjects: list[Subject],
    mark_index: MarkIndex,
    passing_mark: float,
) -> ResultSet[TermResult]:
    unranked = []

    for student in students:
        total_marks, total_possible, sequence_count = _sum_term_marks(
            student, term, subjects, mark_index
        )
        average = scale_average(total_marks, total_possible) if sequence_count else 0.0
        unranked.append((student.name, total_marks, average))

    rows = rank_rows(
        unranked,
        key=lambda row: row[2],
        build=lambda row, rank: TermResult(row[0], row[1], row[2], rank),
    )

    stats = summarize_rows(rows, positive_only=True, passing_mark=passing_mark)

    logger.debug(
        "Computed %s results for %d students (class average %.2f, pass %.1f%%).",
        term.value,
        len(rows),
        stats.class_average,
        stats.pass_percentage,
    )

    return ResultSet(rows, stats.class_average, stats.pass_percentage)


def compute_term_result(
    term: Term | str,
    students: list[Student],
    subjects: list[Subject],
    marks: list[Mark],
    passing_mark: float = PASSING_MARK,
) -> ResultSet[TermResult]:
    """
    Computes the ranked results for a single term.

    Args:
        term (Term | str): The term to compute; its sequences come from `TERM_SEQUENCES`.
        students (list[Student]): The class roster, in display order.
        subjects (list[Subject]): Every subject taught.
        marks (list[Mark]): Every recorded mark.
        passing_mark (float): The minimum average counted as a pass.

    Returns:
        ResultSet[TermResult]: One row per student, ordered by descending average with ranks 1..N.
        The class average and pass percentage only count students with a positive average.

    Raises:
        ValueError: If `term` is not a valid term label.
    """
    term = term if isinstance(term, Term) else Term(term)

    return _rank_term(term, students, subjects, index_marks(marks), passing_mark)


def compute_term_results(
    students: list[Student],
    subjects: list[Subject],
    marks: list[Mark],
    passing_mark: float = PASSING_MARK,
) -> dict[Term, ResultSet[TermResult]]:
    """
    Computes the ranked results for all three terms.

    Returns:
        dict[Term, ResultSet[TermResult]]: Each term's ordered rows, class average, and pass
        percentage, keyed in schedule order.
    """
    mark_index = index_marks(marks)

    return {
        term: _rank_term(term, students, subjects, mark_index, passing_mark)
        for term in TERM_SEQUENCES
    }
