# models/types.py

"""
Holds TypeVar definition for simplifying type checks.
"""

from typing import TypeVar

from .student import Student
from .subject import Subject

RecordType = TypeVar("RecordType", Student, Subject)
