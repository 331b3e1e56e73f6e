# core/formatters.py

# all pure text utilities
# must never import from models!

from core.config import DEFAULT_MAX_MARKS

NOT_AVAILABLE = "N/A"

# === generic text formatters ===


def format_rule(width: int = 62) -> str:
    return "-" * width


# === marks formatters ===


def format_mark(mark: float | None) -> str:
    # marks display as whole numbers
    return NOT_AVAILABLE if mark is None else str(int(mark))


def format_mark_out_of(mark: float | None, max_marks: int = DEFAULT_MAX_MARKS) -> str:
    return f"{format_mark(mark):>6} / {max_marks}"


def format_percentage(percent: float) -> str:
    return f"{percent:.2f}%"


def format_pass_fail(passed: bool) -> str:
    return "PASS" if passed else "FAIL"
