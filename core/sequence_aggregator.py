# core/sequence_aggregator.py

"""
Computes one grading sequence's ranked results and class statistics.

For each student, every subject counts toward the possible marks, whether or not a mark was
entered; a missing or cleared mark contributes zero. The average is scaled to 20.

Also exposes the per-subject summation rule (`sum_sequence_marks`), which the term
aggregator reuses for each of a term's two sequences.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from core.ranking import rank_rows
from core.statistics import calculate_statistics
from models.mark import Mark
from models.results import ResultSet, SequenceResult
from models.schedule import MAX_AVERAGE, PASSING_MARK, Sequence, to_sequence
from models.student import Student
from models.subject import Subject

logger = logging.getLogger(__name__)

MarkIndex = dict[tuple[str, str, Sequence], Mark]


def index_marks(marks: Iterable[Mark]) -> MarkIndex:
    """
    Indexes marks by their (student id, subject id, sequence) triple.

    If the snapshot holds more than one mark for a triple, the first one wins.
    """
    index: MarkIndex = {}

    for mark in marks:
        index.setdefault((mark.student_id, mark.subject_id, mark.sequence), mark)

    return index


def sum_sequence_marks(
    student_id: str,
    sequence: Sequence,
    subjects: list[Subject],
    mark_index: MarkIndex,
) -> tuple[float, float]:
    """
    Sums one student's marks for one sequence across all subjects.

    Returns:
        A `(sequence_marks, sequence_possible)` tuple. `sequence_possible` is the sum of every
        subject total, independent of which marks exist.
    """
    sequence_marks = 0.0
    sequence_possible = 0.0

    for subject in subjects:
        mark = mark_index.get((student_id, subject.id, sequence))
        sequence_marks += mark.points if mark is not None else 0.0
        sequence_possible += subject.total

    return sequence_marks, sequence_possible


def scale_average(total_marks: float, total_possible: float) -> float:
    return total_marks / total_possible * MAX_AVERAGE if total_possible > 0 else 0.0


def compute_sequence_results(
    sequence: Sequence | str,
    students: list[Student],
    subjects: list[Subject],
    marks: list[Mark],
    passing_mark: float = PASSING_MARK,
) -> ResultSet[SequenceResult]:
    """
    Computes the ranked results for a single sequence.

    Args:
        sequence (Sequence | str): The sequence to compute.
        students (list[Student]): The class roster, in display order.
        subjects (list[Subject]): Every subject taught.
        marks (list[Mark]): Every recorded mark; marks for other sequences are ignored.
        passing_mark (float): The minimum average counted as a pass.

    Returns:
        ResultSet[SequenceResult]: One row per student, ordered by descending average with ranks 1..N,
        plus the class average and pass percentage over all N students.

    Raises:
        ValueError: If `sequence` is not a valid sequence label.

    Notes:
        - This function is pure; calling it twice on the same snapshot yields identical results.
    """
    sequence = to_sequence(sequence)
    mark_index = index_marks(marks)

    unranked = []
    for student in students:
        total_marks, total_possible = sum_sequence_marks(
            student.id, sequence, subjects, mark_index
        )
        unranked.append(
            (student.name, total_marks, scale_average(total_marks, total_possible))
        )

    rows = rank_rows(
        unranked,
        key=lambda row: row[2],
        build=lambda row, rank: SequenceResult(row[0], row[1], row[2], rank),
    )

    # statistics follow roster order, not ranked order
    stats = calculate_statistics(
        (average for _, _, average in unranked), passing_mark=passing_mark
    )

    logger.debug(
        "Computed %s results for %d students (class average %.2f, pass %.1f%%).",
        sequence.value,
        len(rows),
        stats.class_average,
        stats.pass_percentage,
    )

    return ResultSet(rows, stats.class_average, stats.pass_percentage)
