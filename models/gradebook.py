# models/gradebook.py

"""
The Gradebook model holds the in-memory records for one class and builds the snapshots the aggregation engine reads.

Linked Students, Subjects, and Marks are stored in dictionaries keyed by ID, in insertion order, alongside a comment map
keyed by student ID. The Gradebook performs no disk or network I/O; durable storage belongs to the host application.

Provides functions for adding, removing, updating, and finding records, upserting marks with boundary validation,
and triggering an explicit recompute of sequence, term, and annual results over a fresh snapshot.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, NamedTuple

from core.annual_aggregator import compute_annual_results
from core.response import ErrorCode, Response
from core.sequence_aggregator import compute_sequence_results
from core.term_aggregator import compute_term_results
from core.utils import generate_uuid
from models.mark import Mark
from models.schedule import ResultView, Sequence, to_sequence
from models.student import Student
from models.subject import Subject
from models.types import CommentMap, RecordType

logger = logging.getLogger(__name__)


class Snapshot(NamedTuple):
    students: list[Student]
    subjects: list[Subject]
    marks: list[Mark]
    comments: CommentMap


class Gradebook:

    def __init__(self):
        self._students: dict[str, Student] = {}
        self._subjects: dict[str, Subject] = {}
        self._marks: dict[str, Mark] = {}
        self._comments: CommentMap = {}

    # === properties ===

    # --- core data structures ---

    @property
    def students(self) -> dict[str, Student]:
        return self._students

    @property
    def subjects(self) -> dict[str, Subject]:
        return self._subjects

    @property
    def marks(self) -> dict[str, Mark]:
        return self._marks

    @property
    def comments(self) -> CommentMap:
        return self._comments

    # --- status markers ---

    @property
    def has_marks(self) -> bool:
        return any(not mark.is_cleared for mark in self._marks.values())

    # === persistence and import ===

    def snapshot(self) -> Snapshot:
        """
        Returns a consistent copy of the current records for the aggregation engine.

        Notes:
            - The lists and comment map are copies; later Gradebook mutations do not affect a snapshot already taken.
        """
        return Snapshot(
            students=list(self._students.values()),
            subjects=list(self._subjects.values()),
            marks=list(self._marks.values()),
            comments={
                student_id: dict(entries)
                for student_id, entries in self._comments.items()
            },
        )

    def to_dict(self) -> dict:
        return {
            "students": [s.to_dict() for s in self._students.values()],
            "subjects": [s.to_dict() for s in self._subjects.values()],
            "marks": [m.to_dict() for m in self._marks.values()],
            "comments": {
                student_id: dict(entries)
                for student_id, entries in self._comments.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> Response:
        """
        Builds a `Gradebook` from plain data, failing fast on the first malformed record.

        Args:
            data (dict): A dictionary with "students", "subjects", "marks", and optional "comments" keys.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if every record was imported.
                    - False if a record is malformed or missing fields.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, None.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_FIELD_VALUE` if ValueError raised.
                    - `ErrorCode.MISSING_REQUIRED_FIELD` if KeyError or TypeError raised.
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "gradebook" (Gradebook): The newly built `Gradebook` object.
                    - On failure:
                        - None
        """
        try:
            gradebook = cls()

            gradebook._import_records(
                data["students"], Student.from_dict, gradebook.add_student, "student"
            )
            gradebook._import_records(
                data["subjects"], Subject.from_dict, gradebook.add_subject, "subject"
            )
            gradebook._import_records(
                data["marks"], Mark.from_dict, gradebook.add_mark, "mark"
            )

            comments = data.get("comments", {})
            if not isinstance(comments, dict):
                raise ValueError("comments must contain a dictionary.")

            for student_id, entries in comments.items():
                gradebook._comments[student_id] = dict(entries)

        except ValueError as e:
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except (KeyError, TypeError) as e:
            return Response.fail(
                detail=f"Missing required field: {e}",
                error=ErrorCode.MISSING_REQUIRED_FIELD,
            )

        except Exception as e:
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        else:
            return Response.succeed(
                data={
                    "gradebook": gradebook,
                },
            )

    def _import_records(
        self,
        data: list[dict[str, Any]],
        from_dict_fn: Callable[[dict[str, Any]], RecordType],
        add_fn: Callable[[RecordType], Response],
        record_name: str,
    ) -> None:
        """
        Deserializes and imports a list of records, failing fast on error.

        Raises:
            - ValueError:
                - If a record dictionary is malformed or fails validation.
            - RuntimeError:
                - If an internal error occurs during the add operation.
        """
        for record_dict in data:
            try:
                record = from_dict_fn(record_dict)
            except (ValueError, TypeError) as e:
                raise ValueError(
                    f"Failed to deserialize {record_name}: {record_dict} - {e}"
                )

            response = add_fn(record)

            if not response.success:
                message = (
                    f"Failed to import {record_name}: {record_dict} - {response.detail}"
                )
                match response.error:
                    case ErrorCode.INTERNAL_ERROR:
                        raise RuntimeError(message)
                    case _:
                        raise ValueError(message)

    # === data accessors ===

    def get_records(
        self,
        dictionary: dict[str, RecordType],
        predicate: Callable[[RecordType], bool] | None = None,
    ) -> Response:
        """
        Fetches records from a dictionary, optionally filtered by a predicate.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): Always True, even if no records were found.
                - data (dict): Payload with the following keys:
                    - "records" (list[RecordType]): The list of matching records (may be empty).

        Notes:
            - This method is read-only and never raises.
        """
        if predicate:
            records = list(filter(predicate, dictionary.values()))
        else:
            records = list(dictionary.values())

        return Response.succeed(
            data={
                "records": records,
            }
        )

    # --- find record by uuid ---

    def find_record_by_uuid(
        self,
        uuid: str,
        dictionary: dict[str, RecordType],
    ) -> Response:
        """
        Finds a record by UUID within a given dictionary.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the record was found.
                - error (ErrorCode | str | None): `ErrorCode.NOT_FOUND` if no match is found.
                - status_code (int | None):
                    - 200 on success
                    - 404 if not found
                - data (dict): Payload with the following keys:
                    - On success:
                        - "record" (RecordType): The matched record object.

        Notes:
            - This method is read-only and does not raise.
        """
        record = dictionary.get(uuid)

        if record is None:
            return Response.fail(
                detail=f"No matching record found for {uuid}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        return Response.succeed(
            data={
                "record": record,
            },
        )

    def find_student_by_uuid(self, uuid: str) -> Response:
        return self.find_record_by_uuid(uuid, self._students)

    def find_subject_by_uuid(self, uuid: str) -> Response:
        return self.find_record_by_uuid(uuid, self._subjects)

    def find_mark(
        self, student_id: str, subject_id: str, sequence: Sequence | str
    ) -> Response:
        """
        Finds the `Mark` recorded for a student, subject, and sequence.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if a matching `Mark` exists.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if no mark exists for the triple.
                    - `ErrorCode.INVALID_FIELD_VALUE` if the sequence label is not valid.
                - status_code (int | None):
                    - 200 on success
                    - 404 if no match is found
                    - 400 for an invalid sequence
                - data (dict): Payload with the following keys:
                    - On success:
                        - "record" (Mark): The matched `Mark` object.

        Notes:
            - This method is read-only and does not raise.
        """
        try:
            sequence = to_sequence(sequence)

        except ValueError as e:
            return Response.fail(
                detail=f"Invalid sequence: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        for mark in self._marks.values():
            if (
                mark.student_id == student_id
                and mark.subject_id == subject_id
                and mark.sequence is sequence
            ):
                return Response.succeed(
                    data={
                        "record": mark,
                    },
                )

        return Response.fail(
            detail=f"No mark recorded: student id {student_id}, subject id {subject_id}, {sequence.value}.",
            error=ErrorCode.NOT_FOUND,
            status_code=404,
        )

    # === data manipulators ===

    # --- generalized record operations ---

    def _add_record(self, record: RecordType, dictionary: dict) -> Response:
        """
        Adds a `RecordType` object to a given `Gradebook` attribute dictionary.

        Notes:
            - This method is private and should only be called by `Gradebook`-level wrappers.
        """
        if record.id in dictionary:
            return Response.fail(
                detail=f"A record with the id '{record.id}' already exists.",
                error=ErrorCode.VALIDATION_FAILED,
            )

        dictionary[record.id] = record

        return Response.succeed(
            detail="Record successfully added to dictionary.",
            data={
                "record": record,
            },
        )

    def _remove_record(self, record: RecordType, dictionary: dict) -> Response:
        """
        Removes a `RecordType` object from a given `Gradebook` attribute dictionary.

        Notes:
            - This method is private and should only be called by `Gradebook`-level wrappers.
        """
        try:
            del dictionary[record.id]

        except KeyError:
            return Response.fail(
                detail=f"No matching record could be found for deletion: {record}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        return Response.succeed(
            detail="Record successfully removed from the gradebook.",
        )

    # --- student manipulation ---

    def create_student(self, name: str) -> Response:
        """
        Creates a `Student` with a generated ID and adds it to the gradebook.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the student was created and added.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_FIELD_VALUE` if the name fails validation.
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Student): The added `Student` object.
        """
        try:
            name = Student.validate_name_input(name)

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Input validation failed: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        return self.add_student(Student(generate_uuid(), name))

    def add_student(self, student: Student) -> Response:
        """
        Adds a `Student` object to the `gradebook.students` dictionary.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the `Student` object was successfully added.
                    - False if a student with the same ID already exists.
                - error (ErrorCode | str | None):
                    - `ErrorCode.VALIDATION_FAILED` if the ID is not unique.
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Student): The added `Student` object.

        Notes:
            - Display names are not required to be unique, although term and annual results are matched by name.
        """
        add_response = self._add_record(student, self._students)

        if not add_response.success:
            return Response.fail(
                detail=f"Failed to add student: {add_response.detail}",
                error=add_response.error,
                status_code=add_response.status_code,
            )

        return Response.succeed(
            detail="Student successfully added to the gradebook.",
            data=add_response.data,
        )

    def remove_student(self, student: Student) -> Response:
        """
        Removes a `Student` object and all linked `Mark` objects and comments from the gradebook.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the student and linked records were removed.
                - error (ErrorCode | str | None): `ErrorCode.NOT_FOUND` if the student cannot be found.
                - status_code (int | None):
                    - 200 on success
                    - 404 if the student cannot be found
        """
        remove_response = self._remove_record(student, self._students)

        if not remove_response.success:
            return Response.fail(
                detail=f"Failed to remove student: {remove_response.detail}",
                error=remove_response.error,
                status_code=remove_response.status_code,
            )

        linked_marks = self.get_records(
            self._marks, lambda m: m.student_id == student.id
        ).data["records"]
        for mark in linked_marks:
            del self._marks[mark.id]

        self._comments.pop(student.id, None)

        return Response.succeed(
            detail=f"{student.name} and {len(linked_marks)} linked marks successfully removed from the gradebook.",
        )

    def update_student_name(self, student: Student, name: str) -> Response:
        """
        Updates the display name of a given `Student` object.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the name was updated or no-op.
                - error (ErrorCode | str | None): `ErrorCode.INVALID_FIELD_VALUE` if the name fails validation.
                - data (dict | None):
                    - On success:
                        - "record" (Student): The updated `Student` object.
        """
        if student.name == name:
            return Response.succeed(
                detail="The name provided matches the current name. No changes made.",
                data={
                    "record": student,
                },
            )

        try:
            student.name = name

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Input validation failed: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        return Response.succeed(
            detail=f"Student name successfully updated to: {student.name}.",
            data={
                "record": student,
            },
        )

    # --- subject manipulation ---

    def create_subject(self, name: str, total: Any) -> Response:
        """
        Creates a `Subject` with a generated ID and adds it to the gradebook.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the subject was created and added.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_FIELD_VALUE` if the name or total fails validation.
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Subject): The added `Subject` object.
        """
        try:
            name = Subject.validate_name_input(name)
            total = Subject.validate_total_input(total)

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Input validation failed: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        return self.add_subject(Subject(generate_uuid(), name, total))

    def add_subject(self, subject: Subject) -> Response:
        add_response = self._add_record(subject, self._subjects)

        if not add_response.success:
            return Response.fail(
                detail=f"Failed to add subject: {add_response.detail}",
                error=add_response.error,
                status_code=add_response.status_code,
            )

        return Response.succeed(
            detail="Subject successfully added to the gradebook.",
            data=add_response.data,
        )

    def remove_subject(self, subject: Subject) -> Response:
        """
        Removes a `Subject` object and all linked `Mark` objects from the gradebook.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the subject and linked marks were removed.
                - error (ErrorCode | str | None): `ErrorCode.NOT_FOUND` if the subject cannot be found.
                - status_code (int | None):
                    - 200 on success
                    - 404 if the subject cannot be found
        """
        remove_response = self._remove_record(subject, self._subjects)

        if not remove_response.success:
            return Response.fail(
                detail=f"Failed to remove subject: {remove_response.detail}",
                error=remove_response.error,
                status_code=remove_response.status_code,
            )

        linked_marks = self.get_records(
            self._marks, lambda m: m.subject_id == subject.id
        ).data["records"]
        for mark in linked_marks:
            del self._marks[mark.id]

        return Response.succeed(
            detail=f"{subject.name} and {len(linked_marks)} linked marks successfully removed from the gradebook.",
        )

    def update_subject(self, subject: Subject, name: str, total: Any) -> Response:
        """
        Updates the name and total of a given `Subject` object.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the subject was updated.
                - error (ErrorCode | str | None): `ErrorCode.INVALID_FIELD_VALUE` if the name or total fails validation.
                - data (dict | None):
                    - On success:
                        - "record" (Subject): The updated `Subject` object.

        Notes:
            - Existing marks are not revalidated against a lowered total.
        """
        try:
            name = Subject.validate_name_input(name)
            total = Subject.validate_total_input(total)

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Input validation failed: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        subject.name = name
        subject.total = total

        return Response.succeed(
            detail=f"Subject successfully updated to: {subject.name} ({subject.total:g}).",
            data={
                "record": subject,
            },
        )

    # --- mark manipulation ---

    def add_mark(self, mark: Mark) -> Response:
        """
        Adds a `Mark` object to the `gradebook.marks` dictionary.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the `Mark` object was successfully added.
                    - False if a linked record is missing or a mark already exists for the triple.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if either the linked student or subject cannot be found.
                    - `ErrorCode.INVALID_FIELD_VALUE` if the value is outside [0, subject total].
                    - `ErrorCode.VALIDATION_FAILED` if the (student, subject, sequence) triple is not unique.
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Mark): The added `Mark` object.
        """
        student_response = self.find_student_by_uuid(mark.student_id)

        if not student_response.success:
            return Response.fail(
                detail=f"Could not resolve student for mark: {student_response.detail}",
                error=student_response.error,
                status_code=student_response.status_code,
            )

        subject_response = self.find_subject_by_uuid(mark.subject_id)

        if not subject_response.success:
            return Response.fail(
                detail=f"Could not resolve subject for mark: {subject_response.detail}",
                error=subject_response.error,
                status_code=subject_response.status_code,
            )

        subject = subject_response.data["record"]

        try:
            if not mark.is_cleared:
                mark.value = Mark.validate_value_input(mark.value, subject.total)

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Input validation failed: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        try:
            self.require_unique_mark(mark.student_id, mark.subject_id, mark.sequence)

        except ValueError as e:
            return Response.fail(
                detail=f"Unique record validation failed: {e}",
                error=ErrorCode.VALIDATION_FAILED,
            )

        return self._add_record(mark, self._marks)

    def record_mark(
        self,
        student_id: str,
        subject_id: str,
        sequence: Sequence | str,
        value: Any,
    ) -> Response:
        """
        Records a mark for a student, subject, and sequence, updating the existing mark if there is one.

        Args:
            student_id (str): The unique ID of the student.
            subject_id (str): The unique ID of the subject.
            sequence (Sequence | str): The sequence the mark belongs to.
            value (Any): The proposed mark value. None or an empty string clears the mark.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the mark was created, updated, cleared, or the write was a no-op.
                    - False if validation fails or a linked record cannot be found.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, a simple confirmation message.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if the student or subject cannot be found.
                    - `ErrorCode.INVALID_FIELD_VALUE` if the value is not a number in [0, subject total] or the sequence is invalid.
                - status_code (int | None):
                    - 200 on success
                    - 404 if a linked record cannot be found
                    - 400 on failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Mark | None): The created or updated `Mark`, or None for a no-op clear.

        Notes:
            - A rejected value is never written; the previous mark (if any) is left untouched.
            - Clearing a mark that does not exist is a no-op and creates no record.
        """
        try:
            sequence = to_sequence(sequence)

        except ValueError as e:
            return Response.fail(
                detail=f"Invalid sequence: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        if student_id not in self._students:
            return Response.fail(
                detail=f"No student found for {student_id}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        subject = self._subjects.get(subject_id)

        if subject is None:
            return Response.fail(
                detail=f"No subject found for {subject_id}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        if Mark.is_empty_input(value):
            value = None
        else:
            try:
                value = Mark.validate_value_input(value, subject.total)

            except (TypeError, ValueError) as e:
                logger.info("Rejected mark for %s in %s: %s", student_id, subject.name, e)
                return Response.fail(
                    detail=f"Input validation failed: {e}",
                    error=ErrorCode.INVALID_FIELD_VALUE,
                )

        existing_response = self.find_mark(student_id, subject_id, sequence)

        if existing_response.success:
            mark = existing_response.data["record"]
            mark.value = value

            return Response.succeed(
                detail=f"Mark successfully updated for {sequence.value}.",
                data={
                    "record": mark,
                },
            )

        if value is None:
            return Response.succeed(
                detail="No mark recorded and no value provided. No changes made.",
                data={
                    "record": None,
                },
            )

        mark = Mark(generate_uuid(), student_id, subject_id, sequence, value)
        self._marks[mark.id] = mark

        return Response.succeed(
            detail=f"Mark successfully recorded for {sequence.value}.",
            data={
                "record": mark,
            },
        )

    def batch_record_marks(
        self, entries: list[tuple[str, str, Sequence | str, Any]]
    ) -> Response:
        """
        Records multiple marks, as in bulk mark entry.

        Attempts to record each `(student_id, subject_id, sequence, value)` entry individually with `record_mark()`.
        This method is not transactional; some marks may be recorded even if others are rejected.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if every entry was recorded.
                    - False if one or more entries were rejected.
                - error (ErrorCode | str | None):
                    - `ErrorCode.VALIDATION_FAILED` if one or more entries were skipped.
                - data (dict | None):
                    - "recorded" (list[tuple]): Entries that were recorded.
                    - "skipped" (list[tuple]): Entries that were rejected.
        """
        recorded = []
        skipped = []

        for entry in entries:
            record_response = self.record_mark(*entry)

            if record_response.success:
                recorded.append(entry)
            else:
                skipped.append(entry)

        data = {
            "recorded": recorded,
            "skipped": skipped,
        }

        if skipped:
            return Response.fail(
                detail=f"{len(skipped)} of {len(entries)} marks could not be recorded.",
                error=ErrorCode.VALIDATION_FAILED,
                data=data,
            )

        return Response.succeed(
            detail="All marks successfully recorded.",
            data=data,
        )

    # --- comment manipulation ---

    def set_comment(
        self, student_id: str, label: Sequence | ResultView | str, text: str
    ) -> Response:
        """
        Sets a student's comment for a sequence or result view, merging into their existing comments.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the comment was stored.
                - error (ErrorCode | str | None): `ErrorCode.NOT_FOUND` if the student cannot be found.
                - data (dict | None):
                    - On success:
                        - "comments" (dict[str, str]): The student's updated comment map.
        """
        if student_id not in self._students:
            return Response.fail(
                detail=f"No student found for {student_id}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        key = label.value if isinstance(label, Enum) else str(label)
        self._comments.setdefault(student_id, {})[key] = text

        return Response.succeed(
            detail="Comment successfully saved.",
            data={
                "comments": dict(self._comments[student_id]),
            },
        )

    # --- results ---

    def calculate_sequence_results(self, sequence: Sequence | str) -> Response:
        """
        Recomputes the ranked results for one sequence over a fresh snapshot.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True unless the sequence label is invalid.
                - error (ErrorCode | str | None): `ErrorCode.INVALID_FIELD_VALUE` for an invalid sequence.
                - data (dict | None):
                    - On success:
                        - "results" (ResultSet[SequenceResult]): The ordered rows and class statistics.
        """
        try:
            sequence = to_sequence(sequence)

        except ValueError as e:
            return Response.fail(
                detail=f"Invalid sequence: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        snapshot = self.snapshot()

        return Response.succeed(
            data={
                "results": compute_sequence_results(
                    sequence, snapshot.students, snapshot.subjects, snapshot.marks
                ),
            },
        )

    def calculate_term_results(self) -> Response:
        """
        Recomputes all three term results and the annual results over a fresh snapshot.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): Always True.
                - data (dict):
                    - "term_results" (dict[Term, ResultSet[TermResult]]): Each term's ordered rows and statistics.
                    - "annual_results" (ResultSet[AnnualResult]): The ordered annual rows and statistics.
        """
        snapshot = self.snapshot()
        term_results = compute_term_results(
            snapshot.students, snapshot.subjects, snapshot.marks
        )

        return Response.succeed(
            data={
                "term_results": term_results,
                "annual_results": compute_annual_results(snapshot.students, term_results),
            },
        )

    # --- gradebook methods ---

    def reset(self) -> Response:
        """
        Removes every student, subject, mark, and comment from the gradebook.
        """
        self._students.clear()
        self._subjects.clear()
        self._marks.clear()
        self._comments.clear()

        return Response.succeed(detail="All gradebook data successfully reset.")

    # === data validators ===

    def require_unique_mark(
        self, student_id: str, subject_id: str, sequence: Sequence
    ) -> None:
        """
        Validates that no mark already exists for the given student, subject, and sequence.

        Raises:
            ValueError: If a mark already exists for the triple.
        """
        if self.find_mark(student_id, subject_id, sequence).success:
            raise ValueError(
                "A mark with the same linked student, subject, and sequence already exists."
            )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Gradebook({len(self._students)} students, {len(self._subjects)} subjects, {len(self._marks)} marks)"
