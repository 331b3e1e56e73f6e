# core/persistence.py

"""
Reads and writes the subjects and students files.

Both files are line-oriented plain text, one record per line, in registry order:

    subjects file:  name|max_marks
    students file:  id|name|age|m1,m2,...,mN

Marks are written as truncated integers and a mark that has not been entered is written as
-1. Saving always rewrites the whole file. Loading is lenient: a malformed line is logged and
skipped without aborting the rest of the load, and a missing file loads as empty.
"""

from __future__ import annotations

import logging
import math
import os
import tempfile
from typing import Iterable

from core.config import (
    DEFAULT_MAX_MARKS,
    FIELD_DELIMITER,
    MARKS_DELIMITER,
    NOT_ENTERED_TOKEN,
)
from models.student import Student
from models.subject import Subject

logger = logging.getLogger(__name__)


# === line codec ===

# --- subjects ---


def format_subject_line(subject: Subject) -> str:
    return f"{subject.name}{FIELD_DELIMITER}{subject.max_marks}"


def parse_subject_line(line: str) -> Subject:
    """
    Parses one `name|max_marks` line.

    A missing, non-numeric, or non-positive max_marks field falls back to DEFAULT_MAX_MARKS.

    Raises:
        ValueError: If the name field is blank or otherwise invalid.
    """
    parts = line.split(FIELD_DELIMITER)
    name = parts[0].strip()

    max_marks = DEFAULT_MAX_MARKS
    if len(parts) >= 2:
        try:
            max_marks = int(parts[1].strip())
        except ValueError:
            max_marks = DEFAULT_MAX_MARKS
        if max_marks <= 0:
            max_marks = DEFAULT_MAX_MARKS

    return Subject(name, max_marks)


# --- students ---


def format_mark(mark: float | None) -> str:
    if mark is None:
        return str(NOT_ENTERED_TOKEN)
    return str(int(mark))


def format_student_line(student: Student) -> str:
    marks = MARKS_DELIMITER.join(format_mark(m) for m in student.marks)
    return FIELD_DELIMITER.join(
        [str(student.id), student.name, str(student.age), marks]
    )


def parse_mark(token: str) -> float | None:
    try:
        value = float(token.strip())
    except ValueError:
        return None

    if not math.isfinite(value) or value < 0:
        return None
    return value


def parse_marks_field(marks_field: str, subject_count: int) -> list[float | None]:
    """
    Parses a comma-separated marks field into exactly `subject_count` slots.

    Extra values are ignored; missing, non-numeric, or negative values are not entered.
    """
    marks: list[float | None] = [None] * subject_count
    marks_field = marks_field.strip()
    if not marks_field:
        return marks

    tokens = marks_field.split(MARKS_DELIMITER)
    for index, token in enumerate(tokens[:subject_count]):
        marks[index] = parse_mark(token)

    return marks


def parse_student_line(line: str, subject_count: int) -> Student:
    """
    Parses one `id|name|age|marks` line into a `Student` with `subject_count` mark slots.

    Raises:
        ValueError: If the line has fewer than four fields, or the id, name, or age is invalid.
    """
    parts = line.split(FIELD_DELIMITER)
    if len(parts) < 4:
        raise ValueError(f"Expected 4 fields, found {len(parts)}.")

    try:
        id = int(parts[0].strip())
        age = int(parts[2].strip())
        return Student(
            id=id,
            name=parts[1],
            age=age,
            marks=parse_marks_field(parts[3], subject_count),
        )

    except TypeError as e:
        raise ValueError(str(e))


# === file I/O ===


def _write_lines(path: str, lines: Iterable[str]) -> None:
    """
    Overwrites `path` with `lines`, one per line.

    Writes to a temporary file in the same directory first and then renames it over the target,
    so a failed write never leaves a half-written file behind.

    Raises:
        OSError: If the directory is not writable or the rename fails.
    """
    directory = os.path.dirname(os.path.abspath(path))
    fd, temp_path = tempfile.mkstemp(dir=directory, prefix=".tmp-", suffix=".txt")

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")
        os.replace(temp_path, path)

    except BaseException:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise


def _read_lines(path: str) -> list[bytes]:
    """
    Reads the raw lines of `path`; each line is decoded by the caller so a bad byte only costs that line.
    """
    if not os.path.exists(path):
        logger.info("No data file at %s; starting empty.", path)
        return []

    with open(path, "rb") as f:
        return f.read().split(b"\n")


def _decode_line(raw: bytes) -> str:
    # UnicodeDecodeError is a ValueError, so undecodable lines are skipped like malformed ones
    return raw.decode("utf-8").rstrip("\r")


def save_subjects(path: str, subjects: Iterable[Subject]) -> None:
    _write_lines(path, [format_subject_line(s) for s in subjects])
    logger.debug("Saved subjects to %s.", path)


def save_students(path: str, students: Iterable[Student]) -> None:
    _write_lines(path, [format_student_line(s) for s in students])
    logger.debug("Saved students to %s.", path)


def load_subjects(path: str) -> list[Subject]:
    """
    Loads every well-formed subject line from `path`.

    Returns:
        The parsed subjects in file order, or an empty list if the file does not exist.

    Raises:
        OSError: If the file exists but cannot be read.
    """
    subjects = []

    for line_number, raw in enumerate(_read_lines(path), start=1):
        if not raw.strip():
            continue
        try:
            subjects.append(parse_subject_line(_decode_line(raw)))
        except (TypeError, ValueError) as e:
            logger.warning("Skipping subject line %d in %s: %s", line_number, path, e)

    return subjects


def load_students(path: str, subject_count: int) -> list[Student]:
    """
    Loads every well-formed student line from `path`, sizing marks to `subject_count`.

    Returns:
        The parsed students in file order, or an empty list if the file does not exist.

    Raises:
        OSError: If the file exists but cannot be read.
    """
    students = []

    for line_number, raw in enumerate(_read_lines(path), start=1):
        if not raw.strip():
            continue
        try:
            students.append(parse_student_line(_decode_line(raw), subject_count))
        except ValueError as e:
            logger.warning("Skipping student line %d in %s: %s", line_number, path, e)

    return students
