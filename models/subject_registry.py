# models/subject_registry.py

"""
The SubjectRegistry holds the ordered, capacity-bounded collection of subjects.

The registry owns the number of graded columns. Adding or removing a subject adds or drops
the matching marks column on every student of the linked `StudentRegistry`, so the two stay
consistent: every check runs before either registry is changed.
"""

from __future__ import annotations

from core.response import ErrorCode, Response
from models.registry import OrderedRegistry
from models.student_registry import StudentRegistry
from models.subject import Subject


class SubjectRegistry(OrderedRegistry[Subject]):

    def __init__(self, capacity: int, students: StudentRegistry):
        super().__init__(capacity)
        self._students: StudentRegistry = students
        # a new registry has no subjects, so no student can hold any marks columns
        self._students.reshape(0)

    # === data accessors ===

    def index_of(self, name: str | None) -> int:
        if name is None:
            return -1
        return self._index_where(lambda s: s.matches(name))

    def find_by_name(self, name: str | None) -> Response:
        """
        Finds a `Subject` by case-insensitive, trimmed name.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if a matching subject is stored.
                - error (ErrorCode | str | None): `ErrorCode.NOT_FOUND` if no match is found.
                - status_code (int | None): 200 on success, 404 if not found.
                - data (dict): On success, "record" (Subject) and "index" (int).

        Notes:
            - This method is read-only and does not raise.
        """
        index = self.index_of(name)

        if index == -1:
            return Response.not_found(f"No subject found with name '{name}'.")

        return Response.succeed(
            data={
                "record": self._records[index],
                "index": index,
            },
        )

    # === data manipulators ===

    def add(self, subject: Subject) -> Response:
        """
        Appends a `Subject` and opens a matching marks column on every student.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the subject was appended.
                - error (ErrorCode | str | None):
                    - `ErrorCode.CAPACITY_EXCEEDED` if the registry is full.
                    - `ErrorCode.DUPLICATE_RECORD` if a subject with the same name exists.
                - data (dict): On success, "record" (Subject) and "index" (int).

        Notes:
            - Existing marks keep their indices; the new slot is not entered for every student.
            - On failure neither registry is changed.
        """
        capacity_failure = self._require_capacity("subjects")
        if capacity_failure is not None:
            return capacity_failure

        if self.index_of(subject.name) != -1:
            return Response.fail(
                detail=f"Subject already exists: {subject.name}.",
                error=ErrorCode.DUPLICATE_RECORD,
            )

        self._students.append_column()
        self._records.append(subject)

        return Response.succeed(
            detail="Subject successfully added.",
            data={
                "record": subject,
                "index": len(self._records) - 1,
            },
        )

    def remove(self, name: str | None) -> Response:
        """
        Removes the `Subject` matching `name` and drops its marks column from every student.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the subject was removed.
                - error (ErrorCode | str | None): `ErrorCode.NOT_FOUND` if no subject matches.
                - status_code (int | None): 200 on success, 404 if not found.
                - data (dict): On success, "record" (Subject) and "index" (int).

        Notes:
            - Later subjects and later marks columns shift left by one, keeping their order.
        """
        index = self.index_of(name)

        if index == -1:
            return Response.not_found(f"No subject found with name '{name}'.")

        self._students.drop_column(index)
        subject = self._remove_at(index)

        return Response.succeed(
            detail="Subject successfully removed.",
            data={
                "record": subject,
                "index": index,
            },
        )

    def replace_all(self, subjects: list[Subject]) -> list[Subject]:
        """
        Replaces the stored subjects, e.g. with the contents of the subjects file.

        Duplicated names and entries beyond capacity are skipped. Every student's marks vector
        is reshaped to the new subject count.

        Returns:
            The list of skipped subjects.
        """
        kept: list[Subject] = []
        skipped: list[Subject] = []

        for subject in subjects:
            duplicate = any(k.matches(subject.name) for k in kept)
            if duplicate or len(kept) >= self._capacity:
                skipped.append(subject)
            else:
                kept.append(subject)

        self._students.reshape(len(kept))
        self._records = kept

        return skipped
