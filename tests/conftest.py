# tests/conftest.py

import pytest

from models.gradebook import Gradebook
from models.mark import Mark
from models.schedule import Sequence
from models.student import Student
from models.subject import Subject


@pytest.fixture
def sample_student():
    return Student("s001", "Ada Mbarga")


@pytest.fixture
def sample_subject():
    return Subject("sub001", "Mathematics", 20.0)


@pytest.fixture
def sample_mark():
    return Mark(
        id="m001",
        student_id="s001",
        subject_id="sub001",
        sequence=Sequence.FIRST,
        value=18.0,
    )


@pytest.fixture
def students():
    return [Student("s001", "A"), Student("s002", "B")]


@pytest.fixture
def subjects():
    return [Subject("sub001", "Mathematics", 20), Subject("sub002", "English", 20)]


@pytest.fixture
def first_sequence_marks():
    return [
        Mark("m001", "s001", "sub001", Sequence.FIRST, 18),
        Mark("m002", "s001", "sub002", Sequence.FIRST, 16),
        Mark("m003", "s002", "sub001", Sequence.FIRST, 10),
        Mark("m004", "s002", "sub002", Sequence.FIRST, 8),
    ]


@pytest.fixture
def sample_gradebook():
    return Gradebook()


@pytest.fixture
def populated_gradebook(students, subjects, first_sequence_marks):
    gradebook = Gradebook()

    for student in students:
        gradebook.add_student(student)

    for subject in subjects:
        gradebook.add_subject(subject)

    for mark in first_sequence_marks:
        gradebook.add_mark(mark)

    return gradebook
