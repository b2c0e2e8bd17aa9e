"""Roster value types and their JSON-compatible dict form."""

from dataclasses import dataclass, field, replace
from typing import Any, Mapping


def _to_number(value: Any) -> float:
    """Accept ints and floats as-is, coerce numeric strings."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid mark value: {value!r}")
    if isinstance(value, (int, float)):
        return value
    return float(value)


@dataclass(frozen=True)
class Exam:
    """An exam definition with its raw ceiling and scaling target."""

    id: str
    name: str
    total_marks: float
    scaling_value: float
    scaling_method: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "totalMarks": self.total_marks,
            "scalingValue": self.scaling_value,
            "scalingMethod": self.scaling_method,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Exam":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", data["id"])),
            total_marks=_to_number(data["totalMarks"]),
            scaling_value=_to_number(data["scalingValue"]),
            scaling_method=data.get("scalingMethod"),
        )


@dataclass(frozen=True)
class MarkRecord:
    """Raw, scaled and rounded marks a student holds for one exam."""

    raw: float
    scaled: float | None = None
    rounded: int | None = None

    def __post_init__(self):
        if self.rounded is not None and self.scaled is None:
            raise ValueError("A rounded mark requires a scaled mark")


@dataclass(frozen=True)
class Student:
    """A student and their sparse per-exam mark records."""

    id: str
    name: str
    marks: Mapping[str, MarkRecord] = field(default_factory=dict)

    def raw_mark(self, exam_id: str) -> float | None:
        record = self.marks.get(exam_id)
        return record.raw if record else None

    def scaled_mark(self, exam_id: str) -> float | None:
        record = self.marks.get(exam_id)
        return record.scaled if record else None

    def rounded_mark(self, exam_id: str) -> int | None:
        record = self.marks.get(exam_id)
        return record.rounded if record else None

    def with_record(self, exam_id: str, record: MarkRecord) -> "Student":
        """Return a copy with one exam's record replaced."""
        return replace(self, marks={**self.marks, exam_id: record})

    def to_dict(self, include_derived: bool = True) -> dict:
        """
        Convert to the roster JSON shape.

        Args:
            include_derived: Include scaledMarks and roundedMarks maps.
        """
        data = {
            "id": self.id,
            "name": self.name,
            "marks": {exam_id: r.raw for exam_id, r in self.marks.items()},
        }
        if include_derived:
            data["scaledMarks"] = {
                exam_id: r.scaled for exam_id, r in self.marks.items() if r.scaled is not None
            }
            data["roundedMarks"] = {
                exam_id: r.rounded for exam_id, r in self.marks.items() if r.rounded is not None
            }
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Student":
        """
        Build a student from the roster JSON shape.

        Scaled or rounded entries without a raw mark for the same exam are
        dropped, as are rounded entries without a scaled one.
        """
        raw_marks = data.get("marks") or {}
        scaled_marks = data.get("scaledMarks") or {}
        rounded_marks = data.get("roundedMarks") or {}

        marks = {}
        for exam_id, raw in raw_marks.items():
            if raw is None:
                continue
            scaled = scaled_marks.get(exam_id)
            rounded = rounded_marks.get(exam_id) if scaled is not None else None
            marks[exam_id] = MarkRecord(
                raw=_to_number(raw),
                scaled=_to_number(scaled) if scaled is not None else None,
                rounded=int(rounded) if rounded is not None else None,
            )

        return cls(id=str(data["id"]), name=str(data.get("name", "")), marks=marks)


@dataclass(frozen=True)
class Roster:
    """Ordered students plus the exams they are marked on."""

    students: tuple[Student, ...] = ()
    exams: tuple[Exam, ...] = ()

    def exam(self, exam_id: str) -> Exam | None:
        for exam in self.exams:
            if exam.id == exam_id:
                return exam
        return None

    def student(self, student_id: str) -> Student | None:
        for student in self.students:
            if student.id == student_id:
                return student
        return None

    def with_students(self, students) -> "Roster":
        return replace(self, students=tuple(students))

    def with_exams(self, exams) -> "Roster":
        return replace(self, exams=tuple(exams))

    def with_scaling_method(self, exam_id: str, method: str) -> "Roster":
        """Record the scaling method last applied to an exam."""
        return self.with_exams(
            replace(e, scaling_method=method) if e.id == exam_id else e
            for e in self.exams
        )

    def is_empty(self) -> bool:
        return not self.students and not self.exams

    def to_dict(self, include_derived: bool = True) -> dict:
        return {
            "students": [s.to_dict(include_derived) for s in self.students],
            "exams": [e.to_dict() for e in self.exams],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Roster":
        return cls(
            students=tuple(Student.from_dict(s) for s in data.get("students") or []),
            exams=tuple(Exam.from_dict(e) for e in data.get("exams") or []),
        )
