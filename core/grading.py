# core/grading.py

"""
Pure grading functions computed from a student's marks and the current subject list.

The average used for the letter grade runs over every subject slot: a mark that has not been
entered adds 0 to the total but still counts in the denominator. Passing requires every mark
to be entered and at least PASS_PERCENT of that subject's maximum.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from core.config import PASS_PERCENT
from models.student import Student
from models.subject import Subject

# lower bound of each letter grade, evaluated highest-first
GRADE_THRESHOLDS: list[tuple[float, str]] = [
    (90, "A+"),
    (80, "A"),
    (70, "B"),
    (60, "C"),
    (50, "D"),
]

FAILING_GRADE = "F"
UNGRADED = "N/A"


def pass_threshold(subject: Subject) -> float:
    return subject.max_marks * PASS_PERCENT / 100


def average_marks(student: Student, subjects: Sequence[Subject]) -> float:
    count = len(subjects)
    if count == 0:
        return 0.0

    total = 0.0
    for index in range(count):
        mark = student.mark_at(index)
        total += max(mark, 0) if mark is not None else 0

    return total / count


def letter_grade(average: float) -> str:
    for lower_bound, grade in GRADE_THRESHOLDS:
        if average >= lower_bound:
            return grade
    return FAILING_GRADE


def calculate_grade(
    student: Student | None, subjects: Sequence[Subject] | None
) -> str:
    """
    Returns the letter grade for a student's average mark across all subject slots.

    Args:
        student (Student | None): The student being graded.
        subjects (Sequence[Subject] | None): The current subject list, in registry order.

    Returns:
        One of "A+", "A", "B", "C", "D", "F", or "N/A" when there is no student or no subjects.
    """
    if student is None or not subjects:
        return UNGRADED

    return letter_grade(average_marks(student, subjects))


def check_pass(student: Student, subjects: Sequence[Subject]) -> bool:
    """
    Returns True only if every subject has an entered mark of at least its pass threshold.

    Notes:
        - A single mark that has not been entered fails the student, whatever the other marks are.
        - With zero subjects the result is vacuously True; callers should treat that as unconfigured.
    """
    for index, subject in enumerate(subjects):
        mark = student.mark_at(index)

        if mark is None:
            return False

        if mark < pass_threshold(subject):
            return False

    return True


def recompute(student: Student, subjects: Sequence[Subject]) -> Student:
    student.grade = calculate_grade(student, subjects)
    student.passed = check_pass(student, subjects)
    return student


def recompute_all(students: Iterable[Student], subjects: Sequence[Subject]) -> None:
    for student in students:
        recompute(student, subjects)
