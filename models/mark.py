# models/mark.py

"""
Represents a student's mark in one subject for one grading sequence.

Each `Mark` records the student's ID, the subject ID, the sequence it belongs to, and the
mark value. At most one `Mark` exists per (student, subject, sequence) triple; the
`Gradebook` upserts rather than duplicating.

Notes:
- A `value` of None represents a cleared mark: the record exists but holds no number.
  Aggregators read a cleared mark as zero.
- Range validation against the subject total is handled by `validate_value_input()`,
  since a `Mark` does not hold a reference to its `Subject`.
"""

from __future__ import annotations

import math
from typing import Any

from models.schedule import Sequence, to_sequence


class Mark:

    def __init__(
        self,
        id: str,
        student_id: str,
        subject_id: str,
        sequence: Sequence | str,
        value: float | None,
    ):
        self._id = id
        self._student_id = student_id
        self._subject_id = subject_id
        self._sequence = to_sequence(sequence)
        self._value = value

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def subject_id(self) -> str:
        return self._subject_id

    @property
    def sequence(self) -> Sequence:
        return self._sequence

    @property
    def value(self) -> float | None:
        return self._value

    @value.setter
    def value(self, value: float | None) -> None:
        self._value = value

    @property
    def is_cleared(self) -> bool:
        return self._value is None

    @property
    def points(self) -> float:
        return 0.0 if self._value is None else float(self._value)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "student_id": self._student_id,
            "subject_id": self._subject_id,
            "sequence": self._sequence.value,
            "value": self._value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Mark:
        return cls(
            id=data["id"],
            student_id=data["student_id"],
            subject_id=data["subject_id"],
            sequence=data["sequence"],
            value=data.get("value"),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Mark({self._id}, {self._student_id}, {self._subject_id}, {self._sequence.value}, {self._value})"

    def __str__(self) -> str:
        return f"MARK: id: {self._id}, student id: {self._student_id}, subject id: {self._subject_id}, sequence: {self._sequence.value}"

    # === data validators ===

    @staticmethod
    def is_empty_input(value: Any) -> bool:
        return value is None or (isinstance(value, str) and not value.strip())

    @staticmethod
    def validate_value_input(value: Any, total: float) -> float:
        """
        Validates and normalizes a proposed mark value against its subject total.

        Accepts any input, and then:
            - Casts to float.
            - Ensures the number is finite.
            - Ensures it lies between 0 and `total`, inclusive.

        Args:
            value (Any): The input value to validate.
            total (float): The maximum attainable mark for the subject.

        Returns:
            The normalized mark value (float).

        Raises:
            TypeError: If the input cannot be cast to float.
            ValueError: If the input is non-finite or out of bounds.
        """
        if isinstance(value, bool):
            raise TypeError("Invalid input. Mark value must be a number.")

        try:
            value = float(value)

        except (TypeError, ValueError):
            raise TypeError("Invalid input. Mark value must be a number.") from None

        if not math.isfinite(value):
            raise ValueError("Invalid input. Mark value must be a finite number.")

        if value < 0 or value > total:
            raise ValueError(f"Invalid input. Mark value must be between 0 and {total}.")

        return value
