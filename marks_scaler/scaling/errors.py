"""Errors raised by the scaling engine and rounder."""


class ScalingError(ValueError):
    """Base class for scaling and rounding failures."""


class ConfigurationError(ScalingError):
    """Exam settings make the requested method undefined."""


class NonFiniteMarkError(ScalingError):
    """A raw or scaled mark is NaN or infinite."""

    def __init__(self, student_id: str, exam_id: str, value: float):
        self.student_id = student_id
        self.exam_id = exam_id
        self.value = value
        super().__init__(
            f"Non-finite mark {value!r} for student {student_id} on exam {exam_id}"
        )


class UnknownScalingMethodError(ScalingError):
    """The method tag is not one of the supported scaling methods."""
