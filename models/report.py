# models/report.py

"""
Represents the data behind a single student's report card.

A `StudentReport` is a read-only projection handed to an external document generator. It
gathers the student's marks for every sequence, their comments, and the term and annual
rows that match them. It performs no formatting or layout of its own.
"""

from __future__ import annotations

from models.results import AnnualResult, TermResult
from models.schedule import ResultView, Sequence, Term
from models.subject import Subject

# sequence value -> subject name -> mark value (None for a cleared mark)
SequenceMarks = dict[str, dict[str, float | None]]


class StudentReport:

    def __init__(
        self,
        student_id: str,
        student_name: str,
        subjects: list[Subject],
        marks: SequenceMarks,
        comments: dict[str, str],
        selected_sequence: Sequence,
        selected_view: ResultView,
        term_results: dict[Term, TermResult | None],
        annual_result: AnnualResult | None,
    ):
        self._student_id = student_id
        self._student_name = student_name
        self._subjects = list(subjects)
        self._marks = marks
        self._comments = comments
        self._selected_sequence = selected_sequence
        self._selected_view = selected_view
        self._term_results = term_results
        self._annual_result = annual_result

    # === properties ===

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def student_name(self) -> str:
        return self._student_name

    @property
    def subjects(self) -> list[Subject]:
        return list(self._subjects)

    @property
    def marks(self) -> SequenceMarks:
        return {sequence: dict(entries) for sequence, entries in self._marks.items()}

    @property
    def comments(self) -> dict[str, str]:
        return dict(self._comments)

    @property
    def selected_sequence(self) -> Sequence:
        return self._selected_sequence

    @property
    def selected_view(self) -> ResultView:
        return self._selected_view

    @property
    def term_results(self) -> dict[Term, TermResult | None]:
        return dict(self._term_results)

    @property
    def annual_result(self) -> AnnualResult | None:
        return self._annual_result

    # === data accessors ===

    def marks_for(self, sequence: Sequence) -> dict[str, float | None]:
        return dict(self._marks.get(sequence.value, {}))

    def comment_for(self, label: Sequence | ResultView | str) -> str | None:
        key = label.value if isinstance(label, (Sequence, ResultView)) else label
        return self._comments.get(key)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "student_id": self._student_id,
            "student_name": self._student_name,
            "subjects": [subject.to_dict() for subject in self._subjects],
            "marks": self.marks,
            "comments": self.comments,
            "selected_sequence": self._selected_sequence.value,
            "selected_view": self._selected_view.value,
            "term_results": {
                term.value: row.to_dict() if row is not None else None
                for term, row in self._term_results.items()
            },
            "annual_result": (
                self._annual_result.to_dict() if self._annual_result is not None else None
            ),
        }

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"StudentReport({self._student_id}, {self._student_name}, {self._selected_sequence.value}, {self._selected_view.value})"

    def __str__(self) -> str:
        return f"REPORT: student: {self._student_name}, id: {self._student_id}"
