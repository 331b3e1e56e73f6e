# cli/model_formatters.py

# anything that renders domain objects for the console layer
from textwrap import dedent

import core.formatters as formatters
from core.analysis import AnalysisReport, SubjectStats
from models.student import Student
from models.subject import Subject

# === subject formatters ===


def format_subject_list(subjects: list[Subject]) -> str:
    if not subjects:
        return "No subjects configured yet."

    lines = ["Configured subjects:"]
    for index, subject in enumerate(subjects, start=1):
        lines.append(f"{index}. {subject}")

    return "\n".join(lines)


# === student formatters ===


def format_student_oneline(student: Student) -> str:
    return f"{student.id:<6} {student.name:<20} {student.grade:<6}"


def format_student_table(students: list[Student]) -> str:
    if not students:
        return "No students available."

    header = f"{'ID':<6} {'Name':<20} {'Grade':<6}"
    lines = [header, formatters.format_rule(34)]
    lines.extend(format_student_oneline(s) for s in students)

    return "\n".join(lines)


def format_student_multiline(student: Student) -> str:
    return dedent(
        f"""\
        {student.summary()}
        ... ID: {student.id}
        ... Name: {student.name}
        ... Age: {student.age}"""
    )


def format_student_details(details: dict) -> str:
    """
    Renders the payload of `Gradebook.get_student_details()` as a result sheet.
    """
    student: Student = details["student"]

    lines = [format_student_multiline(student), "Marks:"]
    for subject, mark in details["rows"]:
        lines.append(
            f"  {subject.name:<15} : {formatters.format_mark_out_of(mark, subject.max_marks)}"
        )

    lines.append(formatters.format_rule(24))
    lines.append(
        f"Total Marks : {int(details['total_obtained'])} / {int(details['total_max'])}"
    )
    lines.append(f"Percentage  : {formatters.format_percentage(details['percentage'])}")
    lines.append(f"Grade       : {details['grade']}")
    lines.append(f"Result      : {formatters.format_pass_fail(details['passed'])}")

    return "\n".join(lines)


# === analysis formatters ===


def format_subject_stats_row(stats: SubjectStats) -> str:
    return (
        f"{stats.subject.name:<12} | {stats.average_of_entered:9.2f} | "
        f"{formatters.format_mark(stats.highest):>7} | "
        f"{formatters.format_mark(stats.lowest):>6} | "
        f"{stats.pass_count:4d} | {stats.fail_count:4d} | "
        f"{stats.topper_name or formatters.NOT_AVAILABLE:<15}"
    )


def format_analysis_report(report: AnalysisReport) -> str:
    if not report.subjects:
        return "No subjects configured."
    if report.student_count == 0:
        return "No students available for analysis."

    rule = formatters.format_rule()
    header = (
        f"{'Subject':<12} | {'Avg Marks':<9} | {'Highest':<7} | {'Lowest':<6} | "
        f"{'Pass':<4} | {'Fail':<4} | {'Topper':<15}"
    )

    lines = [rule, header, rule]
    lines.extend(format_subject_stats_row(stats) for stats in report.subjects)
    lines.append(rule)

    if report.best_subject:
        lines.append(f"Best Performing Subject : {report.best_subject.name}")
    else:
        lines.append("Best Performing Subject : N/A (no marks entered)")

    if report.toughest_subject:
        lines.append(f"Toughest Subject : {report.toughest_subject.name}")
    else:
        lines.append("Toughest Subject : N/A (no marks entered)")

    return "\n".join(lines)
