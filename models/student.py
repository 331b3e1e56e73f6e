# models/student.py

"""
Represents a student whose marks are tracked against the configured subjects.

Stores core identifying information such as id, name, and age, alongside a marks vector
that runs parallel to the subject registry: the mark at index `i` belongs to the subject
at index `i`. A mark of `None` means the mark has not been entered yet.

The `grade` and `passed` fields are caches written by `core.grading.recompute()`; they are
only meaningful after the most recent recompute.

A graduating student is the same record carrying an optional `GraduationDetails` payload.
The only behavioral differences are the summary it produces and the transcript it can generate.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from core.config import FIELD_DELIMITER


class StudentKind(str, Enum):
    REGULAR = "Regular"
    GRADUATING = "Graduating"


class GraduationDetails:

    def __init__(self, transcript: str = "", graduation_status: bool = False):
        self.transcript = transcript
        self.graduation_status = graduation_status

    @property
    def status_label(self) -> str:
        return "Graduated" if self.graduation_status else "Pending"

    def __repr__(self) -> str:
        return f"GraduationDetails({self.transcript!r}, {self.graduation_status})"


class Student:

    def __init__(
        self,
        id: int,
        name: str,
        age: int,
        marks: list[float | None] | None = None,
        graduation: GraduationDetails | None = None,
    ):
        self._id: int = Student.validate_id_input(id)
        # name and age use property setters
        self.name = name
        self.age = age
        self._marks: list[float | None] = list(marks) if marks is not None else []
        self._graduation: GraduationDetails | None = graduation
        self.grade: str = "N/A"
        self.passed: bool = False

    @classmethod
    def graduating(
        cls,
        id: int,
        name: str,
        age: int,
        transcript: str = "",
        graduation_status: bool = False,
        marks: list[float | None] | None = None,
    ) -> Student:
        return cls(
            id=id,
            name=name,
            age=age,
            marks=marks,
            graduation=GraduationDetails(transcript, graduation_status),
        )

    # === properties ===

    @property
    def id(self) -> int:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = Student.validate_name_input(name)

    @property
    def age(self) -> int:
        return self._age

    @age.setter
    def age(self, age: int) -> None:
        self._age = Student.validate_age_input(age)

    @property
    def marks(self) -> list[float | None]:
        return self._marks.copy()

    @marks.setter
    def marks(self, marks: list[float | None]) -> None:
        self._marks = list(marks)

    @property
    def kind(self) -> StudentKind:
        return (
            StudentKind.GRADUATING
            if self._graduation is not None
            else StudentKind.REGULAR
        )

    @property
    def is_graduating(self) -> bool:
        return self._graduation is not None

    @property
    def graduation(self) -> GraduationDetails | None:
        return self._graduation

    # === data accessors ===

    def mark_at(self, index: int) -> float | None:
        if 0 <= index < len(self._marks):
            return self._marks[index]
        return None

    def summary(self) -> str:
        return _SUMMARY_FORMATTERS[self.kind](self)

    def generate_transcript(self) -> str:
        if self._graduation is None:
            raise TypeError(f"Student {self._id} is not a graduating student.")

        transcript = self._graduation.transcript
        if not transcript or not transcript.strip():
            return f"Transcript not available for {self._name}"
        return f"Transcript for {self._name}: {transcript}"

    # === data manipulators ===

    def set_mark_at(self, index: int, value: float | None) -> None:
        # out-of-range indices are ignored
        if 0 <= index < len(self._marks):
            self._marks[index] = value

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Student({self._id}, {self._name}, {self._age}, {self.kind.value})"

    def __str__(self) -> str:
        return self.summary()

    # === data validators ===

    @staticmethod
    def validate_id_input(id: Any) -> int:
        """
        Validates a Student id.

        Raises:
            TypeError: If the input is not an integer.
            ValueError: If the id is zero or negative.
        """
        if isinstance(id, bool) or not isinstance(id, int):
            raise TypeError("Invalid input. Student id must be an integer.")
        if id <= 0:
            raise ValueError("Invalid input. Student id must be greater than zero.")
        return id

    @staticmethod
    def validate_name_input(name: Any) -> str:
        """
        Validates and normalizes a Student name.

        Normalizes the input by stripping whitespace. Ensures the name:
            - Is not blank
            - Does not contain the field delimiter used by the students file

        Raises:
            TypeError: If the input is not a string.
            ValueError: If the name is blank or contains the delimiter.
        """
        if not isinstance(name, str):
            raise TypeError("Invalid input. Student name must be a string.")

        name = name.strip()
        if not name:
            raise ValueError("Invalid input. Student name cannot be blank.")

        if FIELD_DELIMITER in name:
            raise ValueError(
                f"Invalid input. Student name cannot contain '{FIELD_DELIMITER}'."
            )

        if len(name.splitlines()) > 1:
            raise ValueError("Invalid input. Student name must fit on a single line.")

        return name

    @staticmethod
    def validate_age_input(age: Any) -> int:
        if isinstance(age, bool) or not isinstance(age, int):
            raise TypeError("Invalid input. Age must be an integer.")
        if age <= 0:
            raise ValueError("Invalid input. Age must be greater than zero.")
        return age


def _regular_summary(student: Student) -> str:
    return f"Student: {student.name} (ID: {student.id})"


def _graduating_summary(student: Student) -> str:
    status = student.graduation.status_label if student.graduation else "Pending"
    return f"Graduating Student: {student.name} (ID: {student.id}) | Status: {status}"


_SUMMARY_FORMATTERS: dict[StudentKind, Callable[[Student], str]] = {
    StudentKind.REGULAR: _regular_summary,
    StudentKind.GRADUATING: _graduating_summary,
}
