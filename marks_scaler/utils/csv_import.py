"""CSV import of student lists."""

import csv
import io
from pathlib import Path

from ..models import Student


def parse_csv(csv_text: str) -> list[Student]:
    """
    Parse `StudentID, StudentName` lines into students with no marks.

    Fields are trimmed and stripped of surrounding quotes. Lines without
    both an id and a name are skipped.
    """
    students = []

    for row in csv.reader(io.StringIO(csv_text.strip()), skipinitialspace=True):
        parts = [part.strip().strip("\"'") for part in row]
        if len(parts) < 2:
            continue

        student_id, name = parts[0], parts[1]
        if student_id and name:
            students.append(Student(id=student_id, name=name))

    return students


def read_students_csv(path: Path) -> list[Student]:
    """Read a student list from a CSV file."""
    with path.open("r", encoding="utf-8") as f:
        return parse_csv(f.read())
