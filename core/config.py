# core/config.py

"""
Central registry for program-wide constants and file locations.

Values that a deployment may reasonably change (capacities, data directory) can be
overridden through environment variables; everything else is fixed by the file format.
"""

import os

# === grading ===

# percent of a subject's maximum marks required to pass that subject
PASS_PERCENT = 40

DEFAULT_MAX_MARKS = 100

# === line format ===

FIELD_DELIMITER = "|"
MARKS_DELIMITER = ","

# on-disk token for a mark that has not been entered yet
NOT_ENTERED_TOKEN = -1

# === capacities ===

MAX_STUDENTS = int(os.getenv("RESULTS_MAX_STUDENTS", "200"))
MAX_SUBJECTS = int(os.getenv("RESULTS_MAX_SUBJECTS", "5"))

# === storage ===

DATA_DIR = os.path.expanduser(os.getenv("RESULTS_DATA_DIR", "."))
SUBJECTS_FILENAME = "subjects.txt"
STUDENTS_FILENAME = "students.txt"
