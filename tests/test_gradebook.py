# tests/test_gradebook.py

import os

import pytest

import core.persistence as persistence
from core.response import ErrorCode
from models.gradebook import Gradebook
from models.student import Student
from models.subject import Subject


def read_lines(path):
    with open(path) as f:
        return f.read().splitlines()


# === persistence and import ===


def test_load_from_empty_directory(tmp_path):
    response = Gradebook.load(str(tmp_path))

    assert response.success
    assert response.data["loaded"]
    gb = response.data["gradebook"]
    assert len(gb.subjects) == 0
    assert len(gb.students) == 0


def test_load_recomputes_grades(tmp_path):
    (tmp_path / "subjects.txt").write_text("Math|100\nEnglish|50\n")
    (tmp_path / "students.txt").write_text("1|Ada|17|95,45,99\n2|Grace|18|95\n")

    gb = Gradebook.load(str(tmp_path)).data["gradebook"]

    ada, grace = gb.students.list()
    assert ada.marks == [95, 45]
    assert ada.grade == "B"
    assert ada.passed
    assert grace.marks == [95, None]
    assert not grace.passed


def test_load_skips_duplicate_ids_and_overflow(tmp_path):
    (tmp_path / "subjects.txt").write_text("Math|100\n")
    (tmp_path / "students.txt").write_text("1|Ada|17|50\n1|Twin|17|60\n2|Grace|18|70\n3|Alan|19|80\n")

    gb = Gradebook.load(str(tmp_path), max_students=2).data["gradebook"]

    assert [s.name for s in gb.students] == ["Ada", "Grace"]


def test_load_skips_undecodable_lines(tmp_path):
    (tmp_path / "subjects.txt").write_bytes(b"Math|100\n\xffArt|50\n")
    (tmp_path / "students.txt").write_bytes(b"1|Ada|17|80\n2|\xff\xfeBad|18|70\n3|Grace|18|60\n")

    response = Gradebook.load(str(tmp_path))

    assert response.success
    assert response.data["loaded"]
    gb = response.data["gradebook"]
    assert [s.name for s in gb.subjects.list()] == ["Math"]
    assert [s.id for s in gb.students] == [1, 3]


def test_save_then_load_round_trip(populated_gradebook):
    gb = populated_gradebook
    gb.update_mark(1, "Math", 72.8)
    gb.update_mark(2, "English", 33)

    reloaded = Gradebook.load(gb.data_dir).data["gradebook"]

    assert [(s.id, s.name, s.age) for s in reloaded.students] == [
        (1, "Ada", 17),
        (2, "Grace", 18),
    ]
    assert [s.marks for s in reloaded.students] == [[72, None], [None, 33]]
    assert [str(s) for s in reloaded.subjects.list()] == [
        "Math (Max: 100)",
        "English (Max: 50)",
    ]


def test_unwritable_directory_keeps_memory_state(tmp_path):
    gb = Gradebook(str(tmp_path / "missing"))

    response = gb.add_subject(Subject("Math", 100))

    assert response.success
    assert not response.data["saved"]
    assert "Warning" in response.detail
    assert len(gb.subjects) == 1

    save_response = gb.save_all()
    assert not save_response.success
    assert save_response.error == ErrorCode.PERSISTENCE_FAILED


def test_save_all(populated_gradebook):
    assert populated_gradebook.save_all().success


# === subjects ===


def test_add_subject_saves_both_files(populated_gradebook):
    gb = populated_gradebook
    gb.update_mark(1, "Math", 80)

    response = gb.add_subject(Subject("Physics", 100))

    assert response.success
    assert response.data["saved"]
    assert read_lines(gb.subjects_path) == ["Math|100", "English|50", "Physics|100"]
    assert read_lines(gb.students_path) == ["1|Ada|17|80,-1,-1", "2|Grace|18|-1,-1,-1"]


def test_add_duplicate_subject(populated_gradebook):
    response = populated_gradebook.add_subject(Subject("math", 10))

    assert not response.success
    assert response.error == ErrorCode.DUPLICATE_RECORD


def test_add_subject_refreshes_cached_grades(populated_gradebook):
    gb = populated_gradebook
    gb.update_mark(1, "Math", 100)
    gb.update_mark(1, "English", 50)
    ada = gb.find_student(1).data["record"]
    assert ada.passed

    gb.add_subject(Subject("Physics", 100))

    assert not ada.passed
    assert ada.grade == "D"


def test_remove_subject_drops_column_and_saves(populated_gradebook):
    gb = populated_gradebook
    gb.update_mark(1, "Math", 30)
    gb.update_mark(1, "English", 50)

    response = gb.remove_subject(" MATH ")

    assert response.success
    ada = gb.find_student(1).data["record"]
    assert ada.marks == [50]
    assert ada.passed
    assert read_lines(gb.subjects_path) == ["English|50"]
    assert read_lines(gb.students_path)[0] == "1|Ada|17|50"


def test_removing_only_subject_passes_vacuously(sample_gradebook):
    gb = sample_gradebook
    gb.add_subject(Subject("Math", 100))
    gb.add_student(Student(1, "Ada", 17))

    gb.remove_subject("Math")

    ada = gb.find_student(1).data["record"]
    assert ada.marks == []
    assert ada.passed
    assert ada.grade == "N/A"


def test_remove_unknown_subject(populated_gradebook):
    response = populated_gradebook.remove_subject("Latin")

    assert not response.success
    assert response.status_code == 404


def test_update_subject_max_marks(populated_gradebook):
    gb = populated_gradebook
    gb.update_mark(1, "Math", 50)
    gb.update_mark(1, "English", 30)
    ada = gb.find_student(1).data["record"]
    assert ada.passed

    response = gb.update_subject_max_marks("Math", 200)

    assert response.success
    assert not ada.passed
    assert read_lines(gb.subjects_path)[0] == "Math|200"

    response = gb.update_subject_max_marks("Math", 0)
    assert response.error == ErrorCode.INVALID_FIELD_VALUE
    assert gb.find_subject("Math").data["record"].max_marks == 200


def test_list_subjects(populated_gradebook):
    response = populated_gradebook.list_subjects()

    assert [s.name for s in response.data["records"]] == ["Math", "English"]


# === students ===


def test_add_student_saves_and_sizes_marks(populated_gradebook):
    gb = populated_gradebook
    student = Student(3, "Alan", 19, marks=[1, 2, 3])

    response = gb.add_student(student)

    assert response.success
    assert student.marks == [None, None]
    assert student.grade == "F"
    assert read_lines(gb.students_path)[-1] == "3|Alan|19|-1,-1"


def test_add_duplicate_student(populated_gradebook):
    response = populated_gradebook.add_student(Student(1, "Impostor", 40))

    assert not response.success
    assert response.error == ErrorCode.DUPLICATE_RECORD
    assert len(populated_gradebook.students) == 2


def test_update_student_name(populated_gradebook):
    gb = populated_gradebook

    assert gb.update_student_name(2, "Grace Hopper").success
    assert read_lines(gb.students_path)[1].startswith("2|Grace Hopper|18|")

    assert gb.update_student_name(2, " ").error == ErrorCode.INVALID_FIELD_VALUE
    assert gb.update_student_name(9, "Nobody").error == ErrorCode.NOT_FOUND


def test_multiline_student_name_is_rejected(populated_gradebook):
    gb = populated_gradebook

    with pytest.raises(ValueError):
        Student(3, "Alan\nTuring", 19)

    response = gb.update_student_name(1, "Ada\nLovelace")
    assert response.error == ErrorCode.INVALID_FIELD_VALUE

    reloaded = Gradebook.load(gb.data_dir).data["gradebook"]
    assert [(s.id, s.name) for s in reloaded.students] == [(1, "Ada"), (2, "Grace")]


def test_delete_student(populated_gradebook):
    gb = populated_gradebook

    assert gb.delete_student(1).success
    assert read_lines(gb.students_path) == ["2|Grace|18|-1,-1"]
    assert gb.delete_student(1).error == ErrorCode.NOT_FOUND


def test_list_students(populated_gradebook):
    gb = populated_gradebook
    gb.update_mark(1, "Math", 100)
    gb.update_mark(1, "English", 50)

    response = gb.list_students()

    assert response.data["rows"] == [(1, "Ada", "B"), (2, "Grace", "F")]


# === marks ===


def test_update_mark(populated_gradebook):
    gb = populated_gradebook

    response = gb.update_mark(2, "english", 45)

    assert response.success
    grace = response.data["record"]
    assert grace.marks == [None, 45]
    assert grace.grade == "F"
    assert not grace.passed
    assert read_lines(gb.students_path)[1] == "2|Grace|18|-1,45"


@pytest.mark.parametrize("value", [-1, 51, "ten"])
def test_update_mark_rejects_out_of_range(populated_gradebook, value):
    response = populated_gradebook.update_mark(1, "English", value)

    assert not response.success
    assert response.error == ErrorCode.INVALID_FIELD_VALUE


def test_update_mark_unknown_records(populated_gradebook):
    assert populated_gradebook.update_mark(9, "Math", 10).error == ErrorCode.NOT_FOUND
    assert populated_gradebook.update_mark(1, "Art", 10).error == ErrorCode.NOT_FOUND


def test_get_student_details(populated_gradebook):
    gb = populated_gradebook
    gb.update_mark(1, "Math", 90)
    gb.update_mark(1, "English", 30)

    response = gb.get_student_details(1)

    assert response.success
    data = response.data
    assert [(s.name, m) for s, m in data["rows"]] == [("Math", 90), ("English", 30)]
    assert data["total_obtained"] == 120
    assert data["total_max"] == 150
    assert data["percentage"] == pytest.approx(80.0)
    assert data["grade"] == "C"
    assert data["passed"]


def test_get_student_details_refreshes_stale_cache(populated_gradebook):
    gb = populated_gradebook
    ada = gb.find_student(1).data["record"]
    ada.set_mark_at(0, 95)
    ada.set_mark_at(1, 95)

    gb.get_student_details(1)

    assert ada.grade == "A+"


def test_get_student_details_without_subjects(sample_gradebook):
    sample_gradebook.add_student(Student(1, "Ada", 17))

    data = sample_gradebook.get_student_details(1).data

    assert data["rows"] == []
    assert data["percentage"] == 0.0
    assert data["grade"] == "N/A"


def test_get_student_details_unknown(populated_gradebook):
    assert populated_gradebook.get_student_details(42).error == ErrorCode.NOT_FOUND


# === analysis ===


def test_run_subject_analysis(populated_gradebook):
    gb = populated_gradebook
    gb.update_mark(1, "Math", 70)
    gb.update_mark(2, "Math", 70)
    gb.update_mark(2, "English", 10)

    report = gb.run_subject_analysis().data["report"]

    assert report.subjects[0].topper_name == "Ada"
    assert report.best_subject.name == "Math"
    assert report.toughest_subject.name == "English"


def test_run_subject_analysis_without_subjects(sample_gradebook):
    response = sample_gradebook.run_subject_analysis()

    assert response.success
    assert response.detail == "No subjects configured."


# === graduation ===


def test_graduation_updates(populated_gradebook):
    gb = populated_gradebook
    gb.add_student(Student.graduating(7, "Alan", 21))

    assert gb.update_transcript(7, "Distinction").success
    assert gb.update_graduation_status(7, True).success

    response = gb.get_transcript(7)
    assert response.data["transcript"] == "Transcript for Alan: Distinction"
    assert gb.find_student(7).data["record"].summary().endswith("Status: Graduated")


def test_update_graduation_details_keeps_blank_transcript(populated_gradebook):
    gb = populated_gradebook
    gb.add_student(Student.graduating(7, "Alan", 21, transcript="Honours"))

    response = gb.update_graduation_details(7, "   ", True)

    alan = response.data["record"]
    assert alan.graduation.transcript == "Honours"
    assert alan.graduation.graduation_status


def test_graduation_update_on_regular_student(populated_gradebook):
    response = populated_gradebook.update_transcript(1, "Nope")

    assert not response.success
    assert response.error == ErrorCode.INVALID_RECORD_KIND
    assert populated_gradebook.update_graduation_status(99, True).error == ErrorCode.NOT_FOUND


def test_graduating_student_saved_as_plain_line(populated_gradebook):
    gb = populated_gradebook
    gb.add_student(Student.graduating(7, "Alan", 21, transcript="Honours"))

    assert read_lines(gb.students_path)[-1] == "7|Alan|21|-1,-1"
    assert os.path.exists(gb.subjects_path)
    assert persistence.load_students(gb.students_path, 2)[-1].kind.value == "Regular"
