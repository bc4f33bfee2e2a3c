# tests/test_gradebook.py

import pytest

from core.report_compiler import compile_student_report
from core.response import ErrorCode
from models.gradebook import Gradebook
from models.mark import Mark
from models.schedule import ResultView, Sequence, Term
from models.student import Student
from models.subject import Subject


# === data accessors ===


def test_find_student_by_uuid(populated_gradebook):
    response = populated_gradebook.find_student_by_uuid("s001")
    assert response.success
    assert response.data["record"].name == "A"


def test_find_student_by_uuid_not_found(sample_gradebook):
    response = sample_gradebook.find_student_by_uuid("missing")
    assert not response.success
    assert response.error is ErrorCode.NOT_FOUND
    assert response.status_code == 404


def test_find_mark(populated_gradebook):
    response = populated_gradebook.find_mark("s002", "sub002", "firstSequence")
    assert response.success
    assert response.data["record"].value == 8


def test_find_mark_invalid_sequence(populated_gradebook):
    response = populated_gradebook.find_mark("s002", "sub002", "ninthSequence")
    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE


def test_get_records_with_predicate(populated_gradebook):
    response = populated_gradebook.get_records(
        populated_gradebook.marks, lambda m: m.student_id == "s001"
    )
    assert response.success
    assert {m.id for m in response.data["records"]} == {"m001", "m002"}


# --- student methods ---


def test_add_student(sample_gradebook, sample_student):
    response = sample_gradebook.add_student(sample_student)
    assert response.success
    assert sample_student in sample_gradebook.students.values()


def test_add_duplicate_student_id_fails(sample_gradebook, sample_student):
    sample_gradebook.add_student(sample_student)

    response = sample_gradebook.add_student(Student("s001", "Someone Else"))
    assert not response.success
    assert response.error is ErrorCode.VALIDATION_FAILED


def test_create_student(sample_gradebook):
    response = sample_gradebook.create_student("  Ngono Paul ")
    assert response.success

    student = response.data["record"]
    assert student.name == "Ngono Paul"
    assert student.id in sample_gradebook.students


def test_create_student_rejects_empty_name(sample_gradebook):
    response = sample_gradebook.create_student("   ")
    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE
    assert sample_gradebook.students == {}


def test_remove_student_cascades(populated_gradebook):
    gb = populated_gradebook
    gb.set_comment("s001", Sequence.FIRST, "Excellent work")
    student = gb.students["s001"]

    response = gb.remove_student(student)
    assert response.success
    assert "s001" not in gb.students
    assert all(m.student_id != "s001" for m in gb.marks.values())
    assert len(gb.marks) == 2
    assert "s001" not in gb.comments


def test_remove_missing_student(sample_gradebook, sample_student):
    response = sample_gradebook.remove_student(sample_student)
    assert not response.success
    assert response.status_code == 404


def test_update_student_name(populated_gradebook):
    student = populated_gradebook.students["s001"]

    response = populated_gradebook.update_student_name(student, "Amina")
    assert response.success
    assert student.name == "Amina"


def test_update_student_name_rejects_invalid(populated_gradebook):
    student = populated_gradebook.students["s001"]

    response = populated_gradebook.update_student_name(student, "")
    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE
    assert student.name == "A"


# --- subject methods ---


def test_create_subject(sample_gradebook):
    response = sample_gradebook.create_subject("Chemistry", "40")
    assert response.success
    assert response.data["record"].total == 40.0


@pytest.mark.parametrize("total", [0, -5, "abc"])
def test_create_subject_rejects_invalid_total(sample_gradebook, total):
    response = sample_gradebook.create_subject("Chemistry", total)
    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE


def test_remove_subject_cascades(populated_gradebook):
    gb = populated_gradebook
    subject = gb.subjects["sub001"]

    response = gb.remove_subject(subject)
    assert response.success
    assert "sub001" not in gb.subjects
    assert {m.id for m in gb.marks.values()} == {"m002", "m004"}


def test_update_subject(populated_gradebook):
    subject = populated_gradebook.subjects["sub002"]

    response = populated_gradebook.update_subject(subject, "French", 30)
    assert response.success
    assert subject.name == "French"
    assert subject.total == 30.0


def test_update_subject_rejects_invalid_total(populated_gradebook):
    subject = populated_gradebook.subjects["sub002"]

    response = populated_gradebook.update_subject(subject, "French", 0)
    assert not response.success
    assert subject.name == "English"
    assert subject.total == 20


# --- mark methods ---


def test_add_mark_requires_linked_records(sample_gradebook, sample_mark):
    response = sample_gradebook.add_mark(sample_mark)
    assert not response.success
    assert response.error is ErrorCode.NOT_FOUND


def test_add_mark_rejects_duplicate_triple(populated_gradebook):
    duplicate = Mark("m999", "s001", "sub001", Sequence.FIRST, 5)

    response = populated_gradebook.add_mark(duplicate)
    assert not response.success
    assert response.error is ErrorCode.VALIDATION_FAILED
    assert "m999" not in populated_gradebook.marks


def test_add_mark_rejects_value_above_total(populated_gradebook):
    response = populated_gradebook.add_mark(
        Mark("m999", "s001", "sub001", Sequence.SECOND, 25)
    )
    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE


def test_record_mark_creates_new_mark(populated_gradebook):
    response = populated_gradebook.record_mark("s001", "sub001", "secondSequence", "15.5")
    assert response.success

    mark = response.data["record"]
    assert mark.sequence is Sequence.SECOND
    assert mark.value == 15.5
    assert len(populated_gradebook.marks) == 5


def test_record_mark_updates_existing_mark(populated_gradebook):
    response = populated_gradebook.record_mark("s001", "sub001", Sequence.FIRST, 12)
    assert response.success
    assert response.data["record"].id == "m001"
    assert populated_gradebook.marks["m001"].value == 12.0
    assert len(populated_gradebook.marks) == 4


def test_record_mark_clears_with_empty_string(populated_gradebook):
    response = populated_gradebook.record_mark("s001", "sub001", Sequence.FIRST, "")
    assert response.success

    mark = populated_gradebook.marks["m001"]
    assert mark.is_cleared
    assert mark.value is None


def test_record_mark_clear_without_existing_mark_is_noop(populated_gradebook):
    response = populated_gradebook.record_mark("s001", "sub001", Sequence.SIXTH, None)
    assert response.success
    assert response.data["record"] is None
    assert len(populated_gradebook.marks) == 4


@pytest.mark.parametrize("value", [-1, 21, "twelve", float("nan")])
def test_record_mark_rejects_invalid_value(populated_gradebook, value):
    response = populated_gradebook.record_mark("s001", "sub001", Sequence.FIRST, value)
    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE
    assert populated_gradebook.marks["m001"].value == 18


def test_record_mark_accepts_bounds(populated_gradebook):
    assert populated_gradebook.record_mark("s001", "sub001", Sequence.THIRD, 0).success
    assert populated_gradebook.record_mark("s001", "sub002", Sequence.THIRD, 20).success


def test_record_mark_unknown_subject(populated_gradebook):
    response = populated_gradebook.record_mark("s001", "nope", Sequence.FIRST, 10)
    assert not response.success
    assert response.status_code == 404


def test_record_mark_invalid_sequence(populated_gradebook):
    response = populated_gradebook.record_mark("s001", "sub001", "term", 10)
    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE


def test_batch_record_marks(populated_gradebook):
    entries = [
        ("s001", "sub001", Sequence.SECOND, 14),
        ("s002", "sub001", Sequence.SECOND, 30),
        ("s002", "sub002", Sequence.SECOND, "11"),
    ]

    response = populated_gradebook.batch_record_marks(entries)
    assert not response.success
    assert response.error is ErrorCode.VALIDATION_FAILED
    assert response.data["recorded"] == [entries[0], entries[2]]
    assert response.data["skipped"] == [entries[1]]
    assert len(populated_gradebook.marks) == 6


def test_batch_record_marks_all_valid(populated_gradebook):
    entries = [("s001", "sub001", Sequence.SECOND, 14)]

    response = populated_gradebook.batch_record_marks(entries)
    assert response.success
    assert response.data["skipped"] == []


def test_has_marks(sample_gradebook, populated_gradebook):
    assert not sample_gradebook.has_marks
    assert populated_gradebook.has_marks


# --- comment methods ---


def test_set_comment_merges(populated_gradebook):
    gb = populated_gradebook
    gb.set_comment("s001", Sequence.FIRST, "Good start")

    response = gb.set_comment("s001", "annual", "Promoted")
    assert response.success
    assert response.data["comments"] == {
        "firstSequence": "Good start",
        "annual": "Promoted",
    }


def test_set_comment_unknown_student(populated_gradebook):
    response = populated_gradebook.set_comment("nobody", Sequence.FIRST, "Hello")
    assert not response.success
    assert response.error is ErrorCode.NOT_FOUND
    assert populated_gradebook.comments == {}


# --- results ---


def test_calculate_sequence_results(populated_gradebook):
    response = populated_gradebook.calculate_sequence_results("firstSequence")
    assert response.success

    results = response.data["results"]
    assert [row.student for row in results.rows] == ["A", "B"]
    assert results.class_average == pytest.approx(13.0)


def test_calculate_sequence_results_invalid(populated_gradebook):
    response = populated_gradebook.calculate_sequence_results("bogus")
    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE


def test_calculate_term_results(populated_gradebook):
    response = populated_gradebook.calculate_term_results()
    assert response.success

    term_results = response.data["term_results"]
    annual_results = response.data["annual_results"]

    assert term_results[Term.FIRST].find_by_student_name("A").average == pytest.approx(17.0)
    assert [row.final_average for row in annual_results.rows] == pytest.approx([17.0, 9.0])
    assert annual_results.class_average == pytest.approx(13.0)


def test_results_reflect_later_edits(populated_gradebook):
    before = populated_gradebook.calculate_sequence_results(Sequence.FIRST).data["results"]

    populated_gradebook.record_mark("s002", "sub001", Sequence.FIRST, 20)
    after = populated_gradebook.calculate_sequence_results(Sequence.FIRST).data["results"]

    assert before.average_for("B") == pytest.approx(9.0)
    assert after.average_for("B") == pytest.approx(14.0)


# --- gradebook methods ---


def test_snapshot_is_detached(populated_gradebook):
    snapshot = populated_gradebook.snapshot()

    populated_gradebook.create_student("C")

    assert len(snapshot.students) == 2
    assert len(populated_gradebook.students) == 3


def test_reset(populated_gradebook):
    populated_gradebook.set_comment("s001", Sequence.FIRST, "Good")

    response = populated_gradebook.reset()
    assert response.success
    assert populated_gradebook.students == {}
    assert populated_gradebook.subjects == {}
    assert populated_gradebook.marks == {}
    assert populated_gradebook.comments == {}


# === persistence and import ===


def test_to_dict_from_dict(populated_gradebook):
    populated_gradebook.set_comment("s002", Sequence.FIRST, "Needs effort")
    populated_gradebook.record_mark("s002", "sub002", Sequence.FIRST, "")

    response = Gradebook.from_dict(populated_gradebook.to_dict())
    assert response.success

    restored = response.data["gradebook"]
    assert restored.to_dict() == populated_gradebook.to_dict()
    assert restored.marks["m004"].is_cleared


def test_from_dict_missing_key():
    response = Gradebook.from_dict({"students": []})
    assert not response.success
    assert response.error is ErrorCode.MISSING_REQUIRED_FIELD


def test_from_dict_invalid_total():
    data = {
        "students": [],
        "subjects": [{"id": "x", "name": "Physics", "total": 0}],
        "marks": [],
    }

    response = Gradebook.from_dict(data)
    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE


def test_from_dict_rejects_mark_for_unknown_student():
    data = {
        "students": [],
        "subjects": [{"id": "x", "name": "Physics", "total": 20}],
        "marks": [
            {
                "id": "m1",
                "student_id": "ghost",
                "subject_id": "x",
                "sequence": "firstSequence",
                "value": 10,
            }
        ],
    }

    response = Gradebook.from_dict(data)
    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE


def test_repr(populated_gradebook):
    assert repr(populated_gradebook) == "Gradebook(2 students, 2 subjects, 4 marks)"


def test_set_comment_with_result_view_uses_its_value(populated_gradebook):
    gb = populated_gradebook

    response = gb.set_comment("s001", ResultView.ANNUAL, "Promoted")
    assert response.success
    assert response.data["comments"] == {"annual": "Promoted"}

    snapshot = gb.snapshot()
    report = compile_student_report(
        "s001",
        snapshot.students,
        snapshot.subjects,
        snapshot.marks,
        snapshot.comments,
        Sequence.FIRST,
        ResultView.ANNUAL,
        {},
        None,
    )
    assert report.comment_for(ResultView.ANNUAL) == "Promoted"


def test_from_dict_normalizes_mark_values():
    data = {
        "students": [{"id": "s1", "name": "A"}],
        "subjects": [{"id": "x", "name": "Physics", "total": 20}],
        "marks": [
            {
                "id": "m1",
                "student_id": "s1",
                "subject_id": "x",
                "sequence": "firstSequence",
                "value": "12",
            }
        ],
    }

    response = Gradebook.from_dict(data)
    assert response.success

    value = response.data["gradebook"].marks["m1"].value
    assert isinstance(value, float)
    assert value == 12.0


def test_create_subject_rejects_empty_name(sample_gradebook):
    response = sample_gradebook.create_subject("  ", 20)
    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE
    assert sample_gradebook.subjects == {}


def test_update_subject_rejects_missing_name(populated_gradebook):
    subject = populated_gradebook.subjects["sub002"]

    response = populated_gradebook.update_subject(subject, None, 30)
    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE
    assert subject.name == "English"
    assert subject.total == 20


def test_from_dict_rejects_empty_subject_name():
    data = {
        "students": [],
        "subjects": [{"id": "x", "name": "", "total": 20}],
        "marks": [],
    }

    response = Gradebook.from_dict(data)
    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE
