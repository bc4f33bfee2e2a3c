# models/subject.py

"""
Represents a subject taught to the class.

Each `Subject` carries a `total`, the maximum attainable mark for that subject. Every
subject total counts toward a student's possible marks for a sequence, whether or not a
mark was entered for it.

Notes:
- `total` must be strictly positive; validation is enforced via the setter and `validate_total_input()`.
"""

from __future__ import annotations

import math
from typing import Any


class Subject:

    def __init__(self, id: str, name: str, total: float):
        self._id = id
        self._name = name
        self._total = total

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = Subject.validate_name_input(name)

    @property
    def total(self) -> float:
        return self._total

    @total.setter
    def total(self, total: float) -> None:
        self._total = Subject.validate_total_input(total)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "total": self._total,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Subject:
        return cls(
            id=data["id"],
            name=Subject.validate_name_input(data["name"]),
            total=Subject.validate_total_input(data["total"]),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Subject({self._id}, {self._name}, {self._total})"

    def __str__(self) -> str:
        return f"SUBJECT: name: {self._name}, total: {self._total}, id: {self._id}"

    # === data validators ===

    @staticmethod
    def validate_name_input(name: Any) -> str:
        if not isinstance(name, str):
            raise TypeError("Invalid input. Subject name must be a string.")

        name = name.strip()

        if not name:
            raise ValueError("Invalid input. Subject name cannot be empty.")

        return name

    @staticmethod
    def validate_total_input(total: Any) -> float:
        """
        Validates and normalizes input for a `Subject` total.

        Accepts any input, and then:
            - Casts to float.
            - Ensures the number is finite.
            - Ensures it is greater than zero.

        Args:
            total (Any): The input value to validate.

        Returns:
            The normalized total value (float).

        Raises:
            TypeError: If the input cannot be cast to float.
            ValueError: If the input is non-finite or not greater than zero.
        """
        try:
            total = float(total)

        except (TypeError, ValueError):
            raise TypeError("Invalid input. Subject total must be a number.") from None

        if not math.isfinite(total):
            raise ValueError("Invalid input. Subject total must be a finite number.")

        if total <= 0:
            raise ValueError("Invalid input. Subject total must be greater than zero.")

        return total
