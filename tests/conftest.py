"""Pytest configuration and fixtures."""

import pytest

from marks_scaler.models import Exam, MarkRecord, Roster, Student


@pytest.fixture
def exam():
    """Exam marked out of 100 and scaled to 50."""
    return Exam(id="E1", name="Midterm", total_marks=100, scaling_value=50)


@pytest.fixture
def other_exam():
    """A second exam whose marks must never change when E1 is scaled."""
    return Exam(id="E2", name="Final", total_marks=40, scaling_value=20)


@pytest.fixture
def students():
    """Three students with raw marks on E1."""
    return [
        Student(id="S1", name="Alice", marks={"E1": MarkRecord(raw=80)}),
        Student(id="S2", name="Bob", marks={"E1": MarkRecord(raw=60)}),
        Student(id="S3", name="Chitra", marks={"E1": MarkRecord(raw=100)}),
    ]


@pytest.fixture
def roster(students, exam, other_exam):
    """Roster with a student who sat only E2."""
    absent = Student(
        id="S4",
        name="Dev",
        marks={"E2": MarkRecord(raw=30, scaled=15.0, rounded=15)},
    )
    return Roster(students=tuple(students) + (absent,), exams=(exam, other_exam))
