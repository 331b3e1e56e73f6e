# models/gradebook.py

"""
The Gradebook model is the central data object of the program and represents the "source of truth" for all records.

Subjects and Students are held in two ordered, capacity-bounded registries whose marks matrix is kept consistent
as subjects come and go. Every structural change and every marks change is flushed to disk immediately, rewriting
the affected file(s) in full.

Provides functions for loading a Gradebook from disk, managing subjects and students, entering marks, viewing a
student's full result, running the subject-wise analysis, and maintaining graduation details.

Persistence failures never undo an in-memory change: the operation still succeeds, logs a warning, and reports
`data["saved"] = False`.
"""

from __future__ import annotations

import logging
import os
from typing import Callable

import core.grading as grading
import core.persistence as persistence
from core.analysis import analyze_by_subject
from core.config import (
    DATA_DIR,
    MAX_STUDENTS,
    MAX_SUBJECTS,
    STUDENTS_FILENAME,
    SUBJECTS_FILENAME,
)
from core.response import ErrorCode, Response
from models.student import Student
from models.student_registry import StudentRegistry
from models.subject import Subject
from models.subject_registry import SubjectRegistry

logger = logging.getLogger(__name__)


class Gradebook:

    def __init__(
        self,
        data_dir: str | None = None,
        max_students: int = MAX_STUDENTS,
        max_subjects: int = MAX_SUBJECTS,
    ):
        self._students = StudentRegistry(max_students)
        self._subjects = SubjectRegistry(max_subjects, self._students)
        self._data_dir: str = data_dir if data_dir is not None else DATA_DIR

    # === properties ===

    @property
    def students(self) -> StudentRegistry:
        return self._students

    @property
    def subjects(self) -> SubjectRegistry:
        return self._subjects

    @property
    def data_dir(self) -> str:
        return self._data_dir

    @property
    def subjects_path(self) -> str:
        return os.path.join(self._data_dir, SUBJECTS_FILENAME)

    @property
    def students_path(self) -> str:
        return os.path.join(self._data_dir, STUDENTS_FILENAME)

    # === public classmethods ===

    @classmethod
    def load(
        cls,
        data_dir: str | None = None,
        max_students: int = MAX_STUDENTS,
        max_subjects: int = MAX_SUBJECTS,
    ) -> Response:
        """
        Creates a `Gradebook` and populates it from the subjects and students files.

        Args:
            data_dir (str | None): The directory holding the data files. Defaults to `config.DATA_DIR`.
            max_students (int): Student registry capacity.
            max_subjects (int): Subject registry capacity.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - Always True; a missing or unreadable file leaves that registry empty.
                - detail (str | None):
                    - A summary of what was loaded, including a warning if a file could not be read.
                - data (dict): Payload with the following keys:
                    - "gradebook" (Gradebook): The loaded `Gradebook` object.
                    - "loaded" (bool): False if either file existed but could not be read.

        Notes:
            - Subjects load first, so the students file is parsed against the loaded subject count.
            - Malformed lines are skipped individually and logged.
            - Cached grades are recomputed for every loaded student.
        """
        gradebook = cls(data_dir, max_students, max_subjects)
        warnings = []

        try:
            gradebook.import_subjects()
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s: %s", gradebook.subjects_path, e)
            warnings.append(f"subjects file not loaded: {e}")

        try:
            gradebook.import_students()
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s: %s", gradebook.students_path, e)
            warnings.append(f"students file not loaded: {e}")

        detail = (
            f"Loaded {len(gradebook.subjects)} subject(s) and "
            f"{len(gradebook.students)} student(s)."
        )
        if warnings:
            detail += " Warning: " + "; ".join(warnings) + "."

        logger.info(detail)

        return Response.succeed(
            detail=detail,
            data={
                "gradebook": gradebook,
                "loaded": not warnings,
            },
        )

    # === persistence and import ===

    def import_subjects(self) -> None:
        """
        Replaces the subject registry with the contents of the subjects file.

        Raises:
            OSError: If the file exists but cannot be read.
        """
        skipped = self._subjects.replace_all(
            persistence.load_subjects(self.subjects_path)
        )
        for subject in skipped:
            logger.warning("Skipping subject on load (duplicate or over capacity): %s", subject)
        grading.recompute_all(self._students, self._subjects.list())

    def import_students(self) -> None:
        """
        Replaces the student registry with the contents of the students file.

        Raises:
            OSError: If the file exists but cannot be read.
        """
        loaded = persistence.load_students(
            self.students_path, self._students.subject_count
        )
        skipped = self._students.replace_all(loaded)
        for student in skipped:
            logger.warning("Skipping student on load (duplicate or over capacity): %r", student)
        grading.recompute_all(self._students, self._subjects.list())

    def save_subjects(self) -> Response:
        return self._save(
            "subjects",
            lambda: persistence.save_subjects(self.subjects_path, self._subjects),
        )

    def save_students(self) -> Response:
        return self._save(
            "students",
            lambda: persistence.save_students(self.students_path, self._students),
        )

    def save_all(self) -> Response:
        """
        Writes both files, e.g. before the program exits.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if both files were written.
                - error (ErrorCode | str | None): `ErrorCode.PERSISTENCE_FAILED` if either write failed.

        Notes:
            - Both writes are attempted even if the first one fails. This method never raises.
        """
        subjects_response = self.save_subjects()
        students_response = self.save_students()

        if subjects_response.success and students_response.success:
            return Response.succeed(detail="Subjects and students saved to disk.")

        failures = [r.detail for r in (subjects_response, students_response) if not r.success]

        return Response.fail(
            detail=" ".join(d for d in failures if d),
            error=ErrorCode.PERSISTENCE_FAILED,
        )

    def _save(self, record_name: str, write_fn: Callable[[], None]) -> Response:
        try:
            write_fn()

        except OSError as e:
            logger.warning("Could not save %s to disk: %s", record_name, e)
            return Response.fail(
                detail=f"Could not save {record_name} to disk: {e}",
                error=ErrorCode.PERSISTENCE_FAILED,
                status_code=500,
            )

        else:
            return Response.succeed(detail=f"{record_name.capitalize()} saved to disk.")

    def _succeed_and_report_saves(
        self, detail: str, data: dict, *save_responses: Response
    ) -> Response:
        """
        Builds the success response for a mutation that has already been applied in memory.

        Notes:
            - A failed save is reported as a warning in `detail` and `data["saved"]`; it does not
              turn the operation into a failure.
        """
        failed = [r for r in save_responses if not r.success]

        if failed:
            detail += " Warning: " + " ".join(r.detail or "" for r in failed)

        return Response.succeed(
            detail=detail,
            data={
                **data,
                "saved": not failed,
            },
        )

    # === data accessors ===

    # --- subject methods ---

    def list_subjects(self) -> Response:
        return Response.succeed(
            data={
                "records": self._subjects.list(),
            },
        )

    def find_subject(self, name: str) -> Response:
        return self._subjects.find_by_name(name)

    # --- student methods ---

    def find_student(self, id: int) -> Response:
        return self._students.find_by_id(id)

    def list_students(self) -> Response:
        """
        Lists every student in registry order.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): Always True.
                - data (dict): Payload with the following keys:
                    - "records" (list[Student]): The stored students (may be empty).
                    - "rows" (list[tuple[int, str, str]]): (id, name, cached grade) per student.

        Notes:
            - This method is read-only. Grades are the cached values, not recomputed here.
        """
        students = self._students.list()

        return Response.succeed(
            data={
                "records": students,
                "rows": [(s.id, s.name, s.grade) for s in students],
            },
        )

    def get_student_details(self, id: int) -> Response:
        """
        Builds the full result view for one student.

        Args:
            id (int): The student's id.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the student was found.
                    - False if no student has that id.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if no student has that id.
                - status_code (int | None):
                    - 200 on success
                    - 404 if not found
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "student" (Student): The student.
                        - "rows" (list[tuple[Subject, float | None]]): Each subject with the student's mark.
                        - "total_obtained" (float): Sum of entered marks.
                        - "total_max" (int): Sum of every subject's max marks.
                        - "percentage" (float): total_obtained as a percent of total_max, 0.0 without subjects.
                        - "grade" (str): The freshly computed letter grade.
                        - "passed" (bool): The freshly computed pass/fail result.

        Notes:
            - Recomputes and caches the student's grade and pass/fail as a side effect; nothing is written to disk.
        """
        find_response = self._students.find_by_id(id)
        if not find_response.success:
            return find_response

        student: Student = find_response.data["record"]
        subjects = self._subjects.list()

        rows = [(subject, student.mark_at(i)) for i, subject in enumerate(subjects)]
        total_obtained = sum(mark for _, mark in rows if mark is not None)
        total_max = sum(subject.max_marks for subject in subjects)
        percentage = 0.0 if total_max == 0 else total_obtained * 100.0 / total_max

        grading.recompute(student, subjects)

        return Response.succeed(
            data={
                "student": student,
                "rows": rows,
                "total_obtained": total_obtained,
                "total_max": total_max,
                "percentage": percentage,
                "grade": student.grade,
                "passed": student.passed,
            },
        )

    # --- analysis ---

    def run_subject_analysis(self) -> Response:
        """
        Computes subject-wise statistics over every stored student.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): Always True.
                - detail (str | None): A note when there are no subjects or no students to analyze.
                - data (dict): Payload with the following keys:
                    - "report" (AnalysisReport): Per-subject stats plus the best and toughest subjects.

        Notes:
            - This method is read-only.
        """
        detail = None
        if len(self._subjects) == 0:
            detail = "No subjects configured."
        elif len(self._students) == 0:
            detail = "No students available for analysis."

        return Response.succeed(
            detail=detail,
            data={
                "report": analyze_by_subject(
                    self._subjects.list(), self._students.list()
                ),
            },
        )

    # === data manipulators ===

    # --- subject manipulation ---

    def add_subject(self, subject: Subject) -> Response:
        """
        Adds a `Subject` and opens a marks column for it on every student.

        Args:
            subject (Subject): The subject to add.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the subject was added.
                    - False if the registry is full or the name is already taken.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, a confirmation message, plus a warning if saving failed.
                - error (ErrorCode | str | None):
                    - `ErrorCode.CAPACITY_EXCEEDED` if the subject registry is full.
                    - `ErrorCode.DUPLICATE_RECORD` if a subject with the same name exists.
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Subject): The added subject.
                        - "index" (int): The subject's column index.
                        - "saved" (bool): Whether both files were written.

        Notes:
            - Recomputes every student's cached grade, then rewrites the subjects and students files.
        """
        add_response = self._subjects.add(subject)
        if not add_response.success:
            return add_response

        grading.recompute_all(self._students, self._subjects.list())

        return self._succeed_and_report_saves(
            f"Subject added: {subject}.",
            add_response.data,
            self.save_subjects(),
            self.save_students(),
        )

    def remove_subject(self, name: str) -> Response:
        """
        Removes a `Subject` by name and drops its marks column from every student.

        Args:
            name (str): The subject name, matched case-insensitively after trimming.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the subject was removed.
                    - False if no subject matches.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if no subject matches.
                - status_code (int | None):
                    - 200 on success
                    - 404 if not found
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Subject): The removed subject.
                        - "index" (int): The column index it occupied.
                        - "saved" (bool): Whether both files were written.

        Notes:
            - Recomputes every student's cached grade, then rewrites the subjects and students files.
        """
        remove_response = self._subjects.remove(name)
        if not remove_response.success:
            return remove_response

        grading.recompute_all(self._students, self._subjects.list())

        return self._succeed_and_report_saves(
            f"Subject removed: {remove_response.data['record'].name}.",
            remove_response.data,
            self.save_subjects(),
            self.save_students(),
        )

    def update_subject_max_marks(self, name: str, max_marks: int) -> Response:
        """
        Changes the maximum marks of an existing subject.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the value was updated or already matched.
                    - False if no subject matches or the value is not a positive whole number.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if no subject matches.
                    - `ErrorCode.INVALID_FIELD_VALUE` if the value fails validation.
                - data (dict | None):
                    - On success, "record" (Subject) and, if changed, "saved" (bool).

        Notes:
            - Marks already entered are left as they are, even if they exceed the new maximum.
            - Recomputes every student's cached grade, then rewrites the subjects file.
        """
        find_response = self._subjects.find_by_name(name)
        if not find_response.success:
            return find_response

        subject: Subject = find_response.data["record"]

        if subject.max_marks == max_marks:
            return Response.succeed(
                detail="The max marks provided match the current value. No changes made.",
                data={
                    "record": subject,
                },
            )

        try:
            subject.max_marks = max_marks

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Input validation failed: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        grading.recompute_all(self._students, self._subjects.list())

        return self._succeed_and_report_saves(
            f"Max marks for {subject.name} updated to: {subject.max_marks}.",
            {"record": subject},
            self.save_subjects(),
        )

    # --- student manipulation ---

    def add_student(self, student: Student) -> Response:
        """
        Adds a `Student` (regular or graduating) to the registry.

        Args:
            student (Student): The student to add.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the student was added.
                    - False if the registry is full or the id is already taken.
                - error (ErrorCode | str | None):
                    - `ErrorCode.CAPACITY_EXCEEDED` if the student registry is full.
                    - `ErrorCode.DUPLICATE_RECORD` if the id is already stored.
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Student): The added student.
                        - "saved" (bool): Whether the students file was written.

        Notes:
            - A marks vector of the wrong length is replaced with one empty slot per subject.
            - Computes the student's cached grade, then rewrites the students file.
        """
        add_response = self._students.add(student)
        if not add_response.success:
            return add_response

        grading.recompute(student, self._subjects.list())

        return self._succeed_and_report_saves(
            "Student successfully added.",
            add_response.data,
            self.save_students(),
        )

    def update_student_name(self, id: int, name: str) -> Response:
        update_response = self._students.update_name(id, name)
        if not update_response.success:
            return update_response

        return self._succeed_and_report_saves(
            update_response.detail or "Student name updated.",
            update_response.data,
            self.save_students(),
        )

    def delete_student(self, id: int) -> Response:
        delete_response = self._students.delete(id)
        if not delete_response.success:
            return delete_response

        return self._succeed_and_report_saves(
            "Student successfully deleted.",
            delete_response.data,
            self.save_students(),
        )

    # --- marks manipulation ---

    def update_mark(self, student_id: int, subject_name: str, value: float) -> Response:
        """
        Sets one student's mark for one subject.

        Args:
            student_id (int): The student's id.
            subject_name (str): The subject name, matched case-insensitively after trimming.
            value (float): The mark, between 0 and the subject's max marks inclusive.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the mark was stored.
                    - False if the student or subject is unknown, or the mark is out of range.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if the student or subject cannot be found.
                    - `ErrorCode.INVALID_FIELD_VALUE` if the mark fails validation.
                - status_code (int | None):
                    - 200 on success
                    - 404 if not found
                    - 400 on validation failure
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Student): The updated student.
                        - "saved" (bool): Whether the students file was written.

        Notes:
            - Recomputes the student's cached grade, then rewrites the students file.
        """
        student_response = self._students.find_by_id(student_id)
        if not student_response.success:
            return student_response

        subject_response = self._subjects.find_by_name(subject_name)
        if not subject_response.success:
            return subject_response

        subject: Subject = subject_response.data["record"]

        try:
            mark = subject.validate_mark_input(value)

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Input validation failed: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        set_response = self._students.set_mark_at(
            student_id, subject_response.data["index"], mark
        )
        if not set_response.success:
            return set_response

        student: Student = student_response.data["record"]
        grading.recompute(student, self._subjects.list())

        return self._succeed_and_report_saves(
            f"{subject.name} mark for {student.name} updated to: {mark:g} / {subject.max_marks}.",
            {"record": student},
            self.save_students(),
        )

    # --- graduation manipulation ---

    def _find_graduating_student(self, id: int) -> Response:
        find_response = self._students.find_by_id(id)
        if not find_response.success:
            return find_response

        student: Student = find_response.data["record"]

        if not student.is_graduating:
            return Response.fail(
                detail=f"Student {id} is not a graduating student.",
                error=ErrorCode.INVALID_RECORD_KIND,
            )

        return find_response

    def update_transcript(self, id: int, transcript: str) -> Response:
        find_response = self._find_graduating_student(id)
        if not find_response.success:
            return find_response

        student: Student = find_response.data["record"]
        student.graduation.transcript = transcript

        return Response.succeed(
            detail=f"Transcript updated for {student.name}.",
            data={
                "record": student,
            },
        )

    def update_graduation_status(self, id: int, graduated: bool) -> Response:
        find_response = self._find_graduating_student(id)
        if not find_response.success:
            return find_response

        student: Student = find_response.data["record"]
        student.graduation.graduation_status = graduated

        return Response.succeed(
            detail=f"Graduation status for {student.name} set to: {student.graduation.status_label}.",
            data={
                "record": student,
            },
        )

    def update_graduation_details(
        self, id: int, transcript: str | None, graduated: bool
    ) -> Response:
        """
        Updates transcript text and graduation status of a graduating student in one step.

        Args:
            id (int): The student's id.
            transcript (str | None): New transcript text; None or blank keeps the current text.
            graduated (bool): The new graduation status.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the details were updated.
                    - False if the student is unknown or is not a graduating student.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NOT_FOUND` if no student has that id.
                    - `ErrorCode.INVALID_RECORD_KIND` if the student is a regular student.
                - data (dict | None):
                    - On success, "record" (Student).

        Notes:
            - Graduation details are not part of the students file, so nothing is written to disk.
        """
        find_response = self._find_graduating_student(id)
        if not find_response.success:
            return find_response

        student: Student = find_response.data["record"]

        if transcript is not None and transcript.strip():
            student.graduation.transcript = transcript.strip()
        student.graduation.graduation_status = graduated

        return Response.succeed(
            detail=f"Graduation info updated for {student.name}.",
            data={
                "record": student,
            },
        )

    def get_transcript(self, id: int) -> Response:
        find_response = self._find_graduating_student(id)
        if not find_response.success:
            return find_response

        student: Student = find_response.data["record"]
        transcript = student.generate_transcript()

        return Response.succeed(
            detail=transcript,
            data={
                "record": student,
                "transcript": transcript,
            },
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return (
            f"Gradebook({self._data_dir}, subjects={len(self._subjects)}, "
            f"students={len(self._students)})"
        )
