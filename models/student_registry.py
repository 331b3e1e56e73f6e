# models/student_registry.py

"""
The StudentRegistry holds the ordered, capacity-bounded collection of students.

Every stored student carries a marks vector whose length equals `subject_count`. The
`SubjectRegistry` keeps that count in step through `append_column()`, `drop_column()`, and
`reshape()`; nothing else should change it.
"""

from __future__ import annotations

from core.response import ErrorCode, Response
from models.registry import OrderedRegistry
from models.student import Student


class StudentRegistry(OrderedRegistry[Student]):

    def __init__(self, capacity: int, subject_count: int = 0):
        super().__init__(capacity)
        self._subject_count: int = max(subject_count, 0)

    @property
    def subject_count(self) -> int:
        return self._subject_count

    # === data accessors ===

    def index_of(self, id: int) -> int:
        return self._index_where(lambda s: s.id == id)

    def find_by_id(self, id: int) -> Response:
        """
        Finds a `Student` by id.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if a student with the id is stored.
                - error (ErrorCode | str | None): `ErrorCode.NOT_FOUND` if no match is found.
                - status_code (int | None): 200 on success, 404 if not found.
                - data (dict): On success, "record" (Student) and "index" (int).

        Notes:
            - This method is read-only and does not raise.
        """
        index = self.index_of(id)

        if index == -1:
            return Response.not_found(f"No student found with ID {id}.")

        return Response.succeed(
            data={
                "record": self._records[index],
                "index": index,
            },
        )

    # === data manipulators ===

    def add(self, student: Student) -> Response:
        """
        Appends a `Student` to the registry.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the student was appended.
                - error (ErrorCode | str | None):
                    - `ErrorCode.CAPACITY_EXCEEDED` if the registry is full.
                    - `ErrorCode.DUPLICATE_RECORD` if the id is already stored.
                - data (dict): On success, "record" (Student).

        Notes:
            - A marks vector whose length differs from `subject_count` is replaced by a fresh vector
              of that length with every slot not entered.
            - On failure the registry is unchanged.
        """
        capacity_failure = self._require_capacity("students")
        if capacity_failure is not None:
            return capacity_failure

        if self.index_of(student.id) != -1:
            return Response.fail(
                detail=f"A student with ID {student.id} already exists.",
                error=ErrorCode.DUPLICATE_RECORD,
            )

        if len(student.marks) != self._subject_count:
            student.marks = [None] * self._subject_count

        self._records.append(student)

        return Response.succeed(
            detail="Student successfully added.",
            data={
                "record": student,
            },
        )

    def update_name(self, id: int, new_name: str) -> Response:
        find_response = self.find_by_id(id)
        if not find_response.success:
            return find_response

        student: Student = find_response.data["record"]

        try:
            student.name = new_name

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

    def delete(self, id: int) -> Response:
        index = self.index_of(id)

        if index == -1:
            return Response.not_found(f"No student found with ID {id}.")

        student = self._remove_at(index)

        return Response.succeed(
            detail="Student successfully deleted.",
            data={
                "record": student,
            },
        )

    def set_mark_at(self, id: int, subject_index: int, value: float | None) -> Response:
        """
        Writes one mark into a student's marks vector.

        Notes:
            - An unknown id fails with `ErrorCode.NOT_FOUND`.
            - An out-of-range `subject_index` is a silent no-op and still reports success;
              callers validate the index before getting here.
            - Cached grade fields are not recomputed here.
        """
        find_response = self.find_by_id(id)
        if not find_response.success:
            return find_response

        student: Student = find_response.data["record"]
        student.set_mark_at(subject_index, value)

        return Response.succeed(
            data={
                "record": student,
            },
        )

    def replace_all(self, students: list[Student]) -> list[Student]:
        """
        Replaces the stored students, e.g. with the contents of the students file.

        Duplicated ids and entries beyond capacity are skipped. Marks vectors are normalized
        to the current subject count.

        Returns:
            The list of skipped students.
        """
        self._records = []
        skipped = []

        for student in students:
            if not self.add(student).success:
                skipped.append(student)

        return skipped

    # --- marks columns ---

    def append_column(self) -> None:
        self._commit_columns(
            [student.marks + [None] for student in self._records],
            self._subject_count + 1,
        )

    def drop_column(self, index: int) -> None:
        if not 0 <= index < self._subject_count:
            raise IndexError(f"No marks column at index {index}.")

        self._commit_columns(
            [
                student.marks[:index] + student.marks[index + 1 :]
                for student in self._records
            ],
            self._subject_count - 1,
        )

    def reshape(self, subject_count: int) -> None:
        """
        Truncates or pads every marks vector to `subject_count` slots.
        """
        subject_count = max(subject_count, 0)
        vectors = []

        for student in self._records:
            marks = student.marks[:subject_count]
            marks.extend([None] * (subject_count - len(marks)))
            vectors.append(marks)

        self._commit_columns(vectors, subject_count)

    def _commit_columns(
        self, vectors: list[list[float | None]], subject_count: int
    ) -> None:
        # new vectors are built in full before any student is touched
        for student, marks in zip(self._records, vectors):
            student.marks = marks
        self._subject_count = subject_count
