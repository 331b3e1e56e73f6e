# tests/conftest.py

import pytest

from models.gradebook import Gradebook
from models.student import Student
from models.student_registry import StudentRegistry
from models.subject import Subject
from models.subject_registry import SubjectRegistry


@pytest.fixture
def sample_gradebook(tmp_path):
    return Gradebook(str(tmp_path), max_students=10, max_subjects=5)


@pytest.fixture
def populated_gradebook(sample_gradebook):
    gb = sample_gradebook
    gb.add_subject(Subject("Math", 100))
    gb.add_subject(Subject("English", 50))
    gb.add_student(Student(1, "Ada", 17))
    gb.add_student(Student(2, "Grace", 18))
    return gb


@pytest.fixture
def student_registry():
    return StudentRegistry(capacity=3)


@pytest.fixture
def subject_registry(student_registry):
    return SubjectRegistry(capacity=3, students=student_registry)


@pytest.fixture
def sample_subjects():
    return [Subject("Math", 100), Subject("English", 50)]


@pytest.fixture
def sample_student():
    return Student(1, "Ada", 17)


@pytest.fixture
def sample_graduating_student():
    return Student.graduating(7, "Alan", 21, transcript="Honours in logic")
