# models/results.py

"""
Represents the ranked rows produced by the aggregation engine.

A `SequenceResult` or `TermResult` holds one student's total marks, average (out of 20),
and rank for a single sequence or term. An `AnnualResult` holds the three term averages
and the final average for the year.

Rows identify the student by display name, matching how term and annual results are
joined downstream. Rows are read-only: every recompute produces a brand-new `ResultSet`
that replaces the previous one wholesale.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, TypeVar

import core.formatters as formatters


class SequenceResult:

    def __init__(self, student: str, total_marks: float, average: float, rank: int):
        self._student = student
        self._total_marks = total_marks
        self._average = average
        self._rank = rank

    # === properties ===

    @property
    def student(self) -> str:
        return self._student

    @property
    def total_marks(self) -> float:
        return self._total_marks

    @property
    def average(self) -> float:
        return self._average

    @property
    def rank(self) -> int:
        return self._rank

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "student": self._student,
            "total_marks": self._total_marks,
            "average": self._average,
            "rank": self._rank,
        }

    @classmethod
    def from_dict(cls, data: dict) -> SequenceResult:
        return cls(
            student=data["student"],
            total_marks=data["total_marks"],
            average=data["average"],
            rank=data["rank"],
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._student}, {self._total_marks}, {self._average}, {self._rank})"

    def __str__(self) -> str:
        return f"#{self._rank:<3} {self._student:<20} | {formatters.format_average(self._average)}"


class TermResult(SequenceResult):
    """Same shape as `SequenceResult`; `total_marks` only sums the sequences that were entered."""


class AnnualResult:

    def __init__(
        self,
        student: str,
        first_term_average: float,
        second_term_average: float,
        third_term_average: float,
        final_average: float,
        rank: int,
    ):
        self._student = student
        self._first_term_average = first_term_average
        self._second_term_average = second_term_average
        self._third_term_average = third_term_average
        self._final_average = final_average
        self._rank = rank

    # === properties ===

    @property
    def student(self) -> str:
        return self._student

    @property
    def first_term_average(self) -> float:
        return self._first_term_average

    @property
    def second_term_average(self) -> float:
        return self._second_term_average

    @property
    def third_term_average(self) -> float:
        return self._third_term_average

    @property
    def term_averages(self) -> tuple[float, float, float]:
        return (
            self._first_term_average,
            self._second_term_average,
            self._third_term_average,
        )

    @property
    def final_average(self) -> float:
        return self._final_average

    @property
    def average(self) -> float:
        # alias so statistics and ranking treat every row type alike
        return self._final_average

    @property
    def rank(self) -> int:
        return self._rank

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "student": self._student,
            "first_term_average": self._first_term_average,
            "second_term_average": self._second_term_average,
            "third_term_average": self._third_term_average,
            "final_average": self._final_average,
            "rank": self._rank,
        }

    @classmethod
    def from_dict(cls, data: dict) -> AnnualResult:
        return cls(
            student=data["student"],
            first_term_average=data["first_term_average"],
            second_term_average=data["second_term_average"],
            third_term_average=data["third_term_average"],
            final_average=data["final_average"],
            rank=data["rank"],
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnnualResult):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"AnnualResult({self._student}, {self._first_term_average}, {self._second_term_average}, {self._third_term_average}, {self._final_average}, {self._rank})"

    def __str__(self) -> str:
        return f"#{self._rank:<3} {self._student:<20} | {formatters.format_average(self._final_average)}"


RowType = TypeVar("RowType", SequenceResult, TermResult, AnnualResult)


class ResultSet(Generic[RowType]):
    """
    An ordered, ranked collection of result rows together with its class statistics.

    Unpacks as `(rows, class_average, pass_percentage)`.
    """

    def __init__(
        self,
        rows: list[RowType],
        class_average: float = 0.0,
        pass_percentage: float = 0.0,
    ):
        self._rows: tuple[RowType, ...] = tuple(rows)
        self._class_average = class_average
        self._pass_percentage = pass_percentage

    # === properties ===

    @property
    def rows(self) -> list[RowType]:
        return list(self._rows)

    @property
    def class_average(self) -> float:
        return self._class_average

    @property
    def pass_percentage(self) -> float:
        return self._pass_percentage

    # === data accessors ===

    def find_by_student_name(self, name: str) -> RowType | None:
        """
        Returns the first row whose display name matches `name`, or None if there is no match.
        """
        return next((row for row in self._rows if row.student == name), None)

    def average_for(self, name: str) -> float:
        row = self.find_by_student_name(name)
        return row.average if row is not None else 0.0

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "rows": [row.to_dict() for row in self._rows],
            "class_average": self._class_average,
            "pass_percentage": self._pass_percentage,
        }

    # === dunder methods ===

    def __iter__(self) -> Iterator:
        return iter((self.rows, self._class_average, self._pass_percentage))

    def __len__(self) -> int:
        return len(self._rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResultSet):
            return NotImplemented
        return (
            self._rows == other._rows
            and self._class_average == other._class_average
            and self._pass_percentage == other._pass_percentage
        )

    def __repr__(self) -> str:
        return f"ResultSet({len(self._rows)} rows, {self._class_average}, {self._pass_percentage})"

    def __str__(self) -> str:
        return (
            f"RESULTS: students: {len(self._rows)}, "
            f"class average: {formatters.format_average(self._class_average)}, "
            f"pass percentage: {formatters.format_percentage(self._pass_percentage)}"
        )
