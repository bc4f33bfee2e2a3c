# models/student.py

"""
Represents a student enrolled in the class.

A `Student` is identified by its unique ID. The display name is also used downstream to
match a student to their term and annual result rows, so two students sharing a name
will share those rows.
"""

from __future__ import annotations

from typing import Any


class Student:

    def __init__(self, id: str, name: str):
        self._id: str = id
        self._name: str = name

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = Student.validate_name_input(name)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Student:
        return cls(
            id=data["id"],
            name=data["name"],
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Student({self._id}, {self._name})"

    def __str__(self) -> str:
        return f"STUDENT: name: {self._name}, id: {self._id}"

    # === data validators ===

    @staticmethod
    def validate_name_input(name: Any) -> str:
        """
        Validates and normalizes a student display name.

        Args:
            name (Any): The input value to validate.

        Returns:
            The name with leading and trailing whitespace stripped.

        Raises:
            TypeError: If the input is not a string.
            ValueError: If the input is empty after stripping.
        """
        if not isinstance(name, str):
            raise TypeError("Invalid input. Student name must be a string.")

        name = name.strip()

        if not name:
            raise ValueError("Invalid input. Student name cannot be empty.")

        return name
