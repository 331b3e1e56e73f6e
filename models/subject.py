# models/subject.py

"""
The Subject model represents a graded subject and the maximum marks it is scored out of.
"""

from __future__ import annotations

import math
from typing import Any

from core.config import FIELD_DELIMITER


class Subject:

    def __init__(self, name: str, max_marks: int):
        # name and max_marks use setter methods for defensive validation
        self.name = name
        self.max_marks = max_marks

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = Subject.validate_name_input(name)

    @property
    def max_marks(self) -> int:
        return self._max_marks

    @max_marks.setter
    def max_marks(self, max_marks: int) -> None:
        self._max_marks = Subject.validate_max_marks_input(max_marks)

    def matches(self, name: str) -> bool:
        return self._name.lower() == name.strip().lower()

    def __repr__(self) -> str:
        return f"Subject({self._name}, {self._max_marks})"

    def __str__(self) -> str:
        return f"{self._name} (Max: {self._max_marks})"

    def validate_mark_input(self, mark: Any) -> float:
        """
        Validates a mark entered for this subject.

        Raises:
            TypeError: If the input is not a number.
            ValueError: If the mark is non-finite, negative, or above this subject's max marks.
        """
        if isinstance(mark, bool) or not isinstance(mark, (int, float)):
            raise TypeError("Invalid input. Marks must be a number.")

        mark = float(mark)
        if not math.isfinite(mark):
            raise ValueError("Invalid input. Marks must be a finite number.")

        if mark < 0 or mark > self._max_marks:
            raise ValueError(f"Marks must be between 0 and {self._max_marks}.")

        return mark

    # === data validators ===

    @staticmethod
    def validate_name_input(name: Any) -> str:
        """
        Validates and normalizes a Subject name.

        Raises:
            TypeError: If the input is not a string.
            ValueError: If the trimmed name is empty or contains the field delimiter.
        """
        if not isinstance(name, str):
            raise TypeError("Invalid input. Subject name must be a string.")

        name = name.strip()
        if not name:
            raise ValueError("Invalid input. Subject name cannot be blank.")

        if FIELD_DELIMITER in name:
            raise ValueError(
                f"Invalid input. Subject name cannot contain '{FIELD_DELIMITER}'."
            )

        if len(name.splitlines()) > 1:
            raise ValueError("Invalid input. Subject name must fit on a single line.")

        return name

    @staticmethod
    def validate_max_marks_input(max_marks: Any) -> int:
        """
        Validates input for a Subject max_marks value.

        Accepts ints, or anything whose int() conversion is lossless, and then ensures it is positive.

        Raises:
            TypeError: If the input cannot be cast to int.
            ValueError: If the value is zero or negative.
        """
        if isinstance(max_marks, bool):
            raise TypeError("Invalid input. Max marks must be a whole number.")

        try:
            value = int(max_marks)
        except (TypeError, ValueError):
            raise TypeError("Invalid input. Max marks must be a whole number.")

        if value != max_marks and not isinstance(max_marks, str):
            raise TypeError("Invalid input. Max marks must be a whole number.")

        if value <= 0:
            raise ValueError("Invalid input. Max marks must be greater than zero.")

        return value
