# tests/test_analysis.py

from core.analysis import analyze_by_subject
from models.student import Student
from models.subject import Subject


def test_stats_use_entered_marks_only(sample_subjects):
    students = [
        Student(1, "Ada", 17, marks=[80, None]),
        Student(2, "Grace", 18, marks=[30, 25]),
        Student(3, "Alan", 19, marks=[None, 10]),
    ]

    report = analyze_by_subject(sample_subjects, students)
    math, english = report.subjects

    assert math.entered_count == 2
    assert math.average_of_entered == 55.0
    assert math.highest == 80
    assert math.lowest == 30
    assert math.topper_name == "Ada"
    assert (math.pass_count, math.fail_count) == (1, 1)

    assert english.average_of_entered == 17.5
    assert english.highest == 25
    assert english.lowest == 10
    assert english.topper_name == "Grace"
    assert (english.pass_count, english.fail_count) == (1, 1)


def test_subject_without_entries_is_not_available(sample_subjects):
    students = [Student(1, "Ada", 17, marks=[70, None])]

    report = analyze_by_subject(sample_subjects, students)
    english = report.stats_for("english")

    assert english.average_of_entered == 0.0
    assert english.highest is None
    assert english.lowest is None
    assert english.topper_name is None
    assert (english.pass_count, english.fail_count) == (0, 0)


def test_topper_tie_goes_to_first_student():
    subjects = [Subject("Math", 100)]
    students = [
        Student(1, "A", 17, marks=[100]),
        Student(2, "B", 17, marks=[100]),
    ]

    report = analyze_by_subject(subjects, students)

    assert report.subjects[0].topper_name == "A"


def test_best_and_toughest_subjects():
    subjects = [Subject("Math", 100), Subject("English", 100), Subject("Art", 100)]
    students = [
        Student(1, "Ada", 17, marks=[60, 90, None]),
        Student(2, "Grace", 18, marks=[40, 70, None]),
    ]

    report = analyze_by_subject(subjects, students)

    assert report.best_subject.name == "English"
    assert report.toughest_subject.name == "Math"


def test_ranking_ties_keep_first_subject():
    subjects = [Subject("Math", 100), Subject("English", 100)]
    students = [Student(1, "Ada", 17, marks=[50, 50])]

    report = analyze_by_subject(subjects, students)

    assert report.best_subject.name == "Math"
    assert report.toughest_subject.name == "Math"


def test_no_entered_marks_means_no_ranking(sample_subjects):
    students = [Student(1, "Ada", 17, marks=[None, None])]

    report = analyze_by_subject(sample_subjects, students)

    assert report.best_subject is None
    assert report.toughest_subject is None


def test_no_subjects():
    report = analyze_by_subject([], [Student(1, "Ada", 17)])

    assert report.subjects == []
    assert report.best_subject is None
    assert report.student_count == 1
