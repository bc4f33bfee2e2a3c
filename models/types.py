# models/types.py

"""
Holds TypeVar and alias definitions for simplifying type checks.
"""

from typing import TypeVar

from .mark import Mark
from .student import Student
from .subject import Subject

RecordType = TypeVar("RecordType", Mark, Student, Subject)

# student id -> label (sequence or result view value) -> free text
CommentMap = dict[str, dict[str, str]]
