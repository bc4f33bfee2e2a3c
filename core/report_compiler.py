# core/report_compiler.py

"""
Projects one student's marks, comments, and computed results into a `StudentReport`.

The marks map always carries a key for each of the six sequences, but a subject only appears
under a sequence when a `Mark` record exists for it; nothing is zero-filled. Term and annual
rows are matched to the student by display name.

Lookup misses are skipped silently: a mark for an unknown subject writes no entry, a student
with no matching result row gets None for that row, and an unknown student ID yields no report.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from models.mark import Mark
from models.report import SequenceMarks, StudentReport
from models.results import AnnualResult, ResultSet, TermResult
from models.schedule import TERM_SEQUENCES, ResultView, Sequence, Term, to_sequence
from models.student import Student
from models.subject import Subject
from models.types import CommentMap

logger = logging.getLogger(__name__)


def _find_row(name: str, rows: ResultSet | Iterable | None):
    if rows is None:
        return None

    if isinstance(rows, ResultSet):
        return rows.find_by_student_name(name)

    return next((row for row in rows if row.student == name), None)


def collect_student_marks(
    student_id: str,
    subjects: list[Subject],
    marks: list[Mark],
) -> SequenceMarks:
    """
    Builds the sparse `sequence -> subject name -> mark value` map for one student.
    """
    subjects_by_id = {}
    for subject in subjects:
        subjects_by_id.setdefault(subject.id, subject)

    student_marks: SequenceMarks = {sequence.value: {} for sequence in Sequence}

    for mark in marks:
        if mark.student_id != student_id:
            continue

        subject = subjects_by_id.get(mark.subject_id)
        if subject is None:
            continue

        student_marks[mark.sequence.value][subject.name] = mark.value

    return student_marks


def compile_student_report(
    student_id: str,
    students: list[Student],
    subjects: list[Subject],
    marks: list[Mark],
    comments: CommentMap,
    selected_sequence: Sequence | str,
    selected_view: ResultView | str,
    term_results: Mapping[Term, ResultSet[TermResult] | Iterable[TermResult]],
    annual_results: ResultSet[AnnualResult] | Iterable[AnnualResult] | None,
) -> StudentReport | None:
    """
    Compiles the report data for a single student.

    Args:
        student_id (str): The unique ID of the student.
        students (list[Student]): The class roster, used to resolve the student's display name.
        subjects (list[Subject]): Every subject taught.
        marks (list[Mark]): Every recorded mark; other students' marks are ignored.
        comments (CommentMap): Comments for the whole class; only this student's sub-map is used.
        selected_sequence (Sequence | str): The sequence currently selected by the caller.
        selected_view (ResultView | str): The result view currently selected by the caller.
        term_results (Mapping[Term, ResultSet | Iterable[TermResult]]): Already-computed term results.
        annual_results (ResultSet | Iterable[AnnualResult] | None): Already-computed annual results.

    Returns:
        The compiled `StudentReport`, or None if no student with `student_id` is on the roster.

    Notes:
        - This function is read-only; the report holds copies of the comment sub-map and marks.
    """
    student = next((s for s in students if s.id == student_id), None)

    if student is None:
        logger.debug("No student found for report: %s.", student_id)
        return None

    return StudentReport(
        student_id=student.id,
        student_name=student.name,
        subjects=subjects,
        marks=collect_student_marks(student.id, subjects, marks),
        comments=dict(comments.get(student.id, {})),
        selected_sequence=to_sequence(selected_sequence),
        selected_view=ResultView(selected_view),
        term_results={
            term: _find_row(student.name, term_results.get(term))
            for term in TERM_SEQUENCES
        },
        annual_result=_find_row(student.name, annual_results),
    )


def compile_all_reports(
    students: list[Student],
    subjects: list[Subject],
    marks: list[Mark],
    comments: CommentMap,
    selected_sequence: Sequence | str,
    selected_view: ResultView | str,
    term_results: Mapping[Term, ResultSet[TermResult] | Iterable[TermResult]],
    annual_results: ResultSet[AnnualResult] | Iterable[AnnualResult] | None,
) -> list[StudentReport]:
    """
    Compiles one report per student, in roster order.
    """
    if annual_results is not None and not isinstance(annual_results, ResultSet):
        annual_results = list(annual_results)

    reports = []

    for student in students:
        report = compile_student_report(
            student.id,
            students,
            subjects,
            marks,
            comments,
            selected_sequence,
            selected_view,
            term_results,
            annual_results,
        )
        if report is not None:
            reports.append(report)

    return reports
