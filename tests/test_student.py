# tests/test_student.py

import pytest

from models.student import Student


def test_student_to_dict(sample_student):
    assert sample_student.to_dict() == {
        "id": "s001",
        "name": "Ada Mbarga",
    }


def test_student_from_dict():
    student = Student.from_dict(
        {
            "id": "s001",
            "name": "Ada Mbarga",
        }
    )

    assert student.id == "s001"
    assert student.name == "Ada Mbarga"


def test_student_to_str(sample_student):
    assert sample_student.__str__() == "STUDENT: name: Ada Mbarga, id: s001"


def test_student_name_setter_strips_whitespace(sample_student):
    sample_student.name = "  Ben Fotso "
    assert sample_student.name == "Ben Fotso"


def test_student_name_setter_rejects_empty(sample_student):
    with pytest.raises(ValueError):
        sample_student.name = "   "

    with pytest.raises(TypeError):
        sample_student.name = 42

    assert sample_student.name == "Ada Mbarga"
