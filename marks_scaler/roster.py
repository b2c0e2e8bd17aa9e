"""Roster-level operations: exams, marks, scaling and rounding."""

import logging
import math
import time
from typing import Iterable

from .config import DEFAULT_SCALING_METHOD
from .models import Exam, MarkRecord, Roster, Student
from .scaling import apply_rounding, apply_scaling
from .scaling.errors import NonFiniteMarkError

logger = logging.getLogger(__name__)


class RosterError(ValueError):
    """Base class for roster operation failures."""


class RosterLookupError(RosterError):
    """A referenced student or exam does not exist."""


class InvalidExamError(RosterError):
    """Exam settings are missing or not positive numbers."""


def find_exam(roster: Roster, exam_id: str) -> Exam:
    """Return the exam with this id or raise RosterLookupError."""
    exam = roster.exam(exam_id)
    if exam is None:
        raise RosterLookupError(f"Exam not found: {exam_id}")
    return exam


def find_student(roster: Roster, student_id: str) -> Student:
    """Return the student with this id or raise RosterLookupError."""
    student = roster.student(student_id)
    if student is None:
        raise RosterLookupError(f"Student not found: {student_id}")
    return student


def add_exam(
    roster: Roster,
    name: str,
    total_marks: float,
    scaling_value: float,
    exam_id: str | None = None,
) -> tuple[Roster, Exam]:
    """
    Define a new exam.

    The id defaults to the current time in milliseconds and the scaling
    method defaults to the bell curve.

    Returns:
        The updated roster and the new exam.
    """
    if not name or not name.strip():
        raise InvalidExamError("Exam name is required")
    for label, value in (("total marks", total_marks), ("scaling value", scaling_value)):
        if not math.isfinite(value) or value <= 0:
            raise InvalidExamError(f"Invalid {label}: {value}")

    exam_id = exam_id or str(int(time.time() * 1000))
    if roster.exam(exam_id) is not None:
        raise InvalidExamError(f"Exam id already exists: {exam_id}")

    exam = Exam(
        id=exam_id,
        name=name.strip(),
        total_marks=total_marks,
        scaling_value=scaling_value,
        scaling_method=DEFAULT_SCALING_METHOD,
    )
    logger.debug("Added exam %s (%s)", exam.id, exam.name)
    return roster.with_exams([*roster.exams, exam]), exam


def set_mark(roster: Roster, student_id: str, exam_id: str, mark: float) -> Roster:
    """
    Add or edit a student's raw mark.

    A new raw mark replaces the whole record for the exam, so scaled and
    rounded values computed from the old mark are dropped.
    """
    find_exam(roster, exam_id)
    student = find_student(roster, student_id)
    if not math.isfinite(mark):
        raise NonFiniteMarkError(student_id, exam_id, mark)

    updated = student.with_record(exam_id, MarkRecord(raw=mark))
    return roster.with_students(updated if s.id == student_id else s for s in roster.students)


def replace_students(roster: Roster, students: Iterable[Student]) -> Roster:
    """Swap in an imported student list, keeping the exams."""
    return roster.with_students(students)


def scale_exam(roster: Roster, exam_id: str, method: str) -> Roster:
    """Apply a scaling method to an exam and record it as the exam's method."""
    exam = find_exam(roster, exam_id)
    students = apply_scaling(roster.students, exam, method)
    return roster.with_students(students).with_scaling_method(exam_id, method)


def round_exam(roster: Roster, exam_id: str) -> Roster:
    """Round every scaled mark on an exam."""
    find_exam(roster, exam_id)
    return roster.with_students(apply_rounding(roster.students, exam_id, True))


def search_students(roster: Roster, query: str) -> list[Student]:
    """Case-insensitive substring match on student id or name."""
    needle = query.strip().lower()
    return [
        s for s in roster.students
        if needle in s.id.lower() or needle in s.name.lower()
    ]
