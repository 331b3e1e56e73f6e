# core/analysis.py

"""
Subject-wise statistics aggregated across all students.

Only entered marks take part: a mark that has not been entered is neither a pass nor a fail
for its subject, and does not affect the average, highest, or lowest mark.
"""

from __future__ import annotations

from typing import Sequence

from core.grading import pass_threshold
from models.student import Student
from models.subject import Subject


class SubjectStats:

    def __init__(self, subject: Subject):
        self.subject: Subject = subject
        self.entered_count: int = 0
        self.total: float = 0.0
        self.highest: float | None = None
        self.lowest: float | None = None
        self.topper_name: str | None = None
        self.pass_count: int = 0
        self.fail_count: int = 0

    @property
    def average_of_entered(self) -> float:
        if self.entered_count == 0:
            return 0.0
        return self.total / self.entered_count

    @property
    def has_entries(self) -> bool:
        return self.entered_count > 0

    def record(self, student: Student, mark: float) -> None:
        self.entered_count += 1
        self.total += mark

        # strict comparison keeps the first student seen on a tie
        if self.highest is None or mark > self.highest:
            self.highest = mark
            self.topper_name = student.name

        if self.lowest is None or mark < self.lowest:
            self.lowest = mark

        if mark >= pass_threshold(self.subject):
            self.pass_count += 1
        else:
            self.fail_count += 1

    def __repr__(self) -> str:
        return (
            f"SubjectStats({self.subject.name}, avg={self.average_of_entered:.2f}, "
            f"high={self.highest}, low={self.lowest}, topper={self.topper_name})"
        )


class AnalysisReport:

    def __init__(
        self,
        subjects: list[SubjectStats],
        best_subject: Subject | None,
        toughest_subject: Subject | None,
        student_count: int,
    ):
        self.subjects = subjects
        self.best_subject = best_subject
        self.toughest_subject = toughest_subject
        self.student_count = student_count

    def stats_for(self, name: str) -> SubjectStats | None:
        for stats in self.subjects:
            if stats.subject.matches(name):
                return stats
        return None


def analyze_by_subject(
    subjects: Sequence[Subject], students: Sequence[Student]
) -> AnalysisReport:
    """
    Builds per-subject statistics in subject order, plus the best and toughest subjects.

    Args:
        subjects (Sequence[Subject]): The configured subjects, in registry order.
        students (Sequence[Student]): The stored students, in registry order.

    Returns:
        AnalysisReport: Per-subject `SubjectStats` and the best/toughest subjects by average of
        entered marks. Only subjects with at least one entered mark are ranked; ties keep the
        first subject encountered, and both are None when no marks have been entered at all.
    """
    all_stats: list[SubjectStats] = []
    best: SubjectStats | None = None
    toughest: SubjectStats | None = None

    for index, subject in enumerate(subjects):
        stats = SubjectStats(subject)

        for student in students:
            mark = student.mark_at(index)
            if mark is not None:
                stats.record(student, mark)

        all_stats.append(stats)

        if not stats.has_entries:
            continue

        if best is None or stats.average_of_entered > best.average_of_entered:
            best = stats
        if toughest is None or stats.average_of_entered < toughest.average_of_entered:
            toughest = stats

    return AnalysisReport(
        subjects=all_stats,
        best_subject=best.subject if best else None,
        toughest_subject=toughest.subject if toughest else None,
        student_count=len(students),
    )
