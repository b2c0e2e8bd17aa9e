"""CSV export of raw, scaled and rounded marks."""

import csv
import io
from pathlib import Path
from typing import Sequence

from ..config import CSV_COLUMN_SUFFIXES, CSV_ID_HEADER, CSV_NAME_HEADER
from ..models import Exam, Student


def generate_csv(students: Sequence[Student], exams: Sequence[Exam]) -> str:
    """
    Build the marks report as CSV text.

    Each exam contributes Raw, Scaled and Rounded columns. Missing marks are
    empty cells.
    """
    fieldnames = [CSV_ID_HEADER, CSV_NAME_HEADER]
    for exam in exams:
        fieldnames.extend(f"{exam.name} ({suffix})" for suffix in CSV_COLUMN_SUFFIXES)

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(fieldnames)
    for student in students:
        writer.writerow(_student_to_row(student, exams))

    return buffer.getvalue()


def _student_to_row(student: Student, exams: Sequence[Exam]) -> list:
    """Convert a student to a CSV row."""
    row = [student.id, student.name]
    for exam in exams:
        record = student.marks.get(exam.id)
        if record is None:
            row.extend(["", "", ""])
            continue
        row.append(record.raw)
        row.append(record.scaled if record.scaled is not None else "")
        row.append(record.rounded if record.rounded is not None else "")
    return row


def export_to_csv(students: Sequence[Student], exams: Sequence[Exam], output_path: str) -> None:
    """
    Write the marks report to a CSV file.

    Args:
        students: Students in display order.
        exams: Exams to include as column groups.
        output_path: Path to output CSV file.
    """
    path = Path(output_path)
    with path.open("w", newline="", encoding="utf-8") as f:
        f.write(generate_csv(students, exams))
