"""Scaling engine: turn a cohort's raw marks into scaled marks."""

import logging
import math
from dataclasses import replace
from typing import Callable, Sequence

from ..config import (
    BELL_CURVE,
    LINEAR_NORMALIZATION,
    MIN_MAX_NORMALIZATION,
    PERCENTILE,
    SCALING_METHODS,
)
from ..models import Exam, MarkRecord, Student
from .errors import ConfigurationError, NonFiniteMarkError, UnknownScalingMethodError
from .statistics import descending_ranks, mean, min_max, population_stddev, relative_positions, z_scores

logger = logging.getLogger(__name__)


def bell_curve(raw_marks: Sequence[float], exam: Exam) -> list[float]:
    """
    Z-score scaling centred on half the scaling value.

    One standard deviation maps to scaling_value / 6, so roughly +/-3 sigma
    spans [0, scaling_value]. Results are not clamped.
    """
    centre = exam.scaling_value / 2
    spread = exam.scaling_value / 6
    logger.debug(
        "bell curve for %s: mean=%s stddev=%s",
        exam.id, mean(raw_marks), population_stddev(raw_marks),
    )

    # Identical marks have zero spread and all score z = 0
    return [centre + z * spread for z in z_scores(raw_marks)]


def linear_normalization(raw_marks: Sequence[float], exam: Exam) -> list[float]:
    """Proportional scaling from total_marks to scaling_value."""
    if exam.total_marks <= 0:
        raise ConfigurationError(
            f"Exam {exam.id} has total marks {exam.total_marks}; "
            "linear normalization needs a positive total"
        )
    return [(raw / exam.total_marks) * exam.scaling_value for raw in raw_marks]


def min_max_normalization(raw_marks: Sequence[float], exam: Exam) -> list[float]:
    """Map the cohort's lowest mark to 0 and its highest to scaling_value."""
    low, high = min_max(raw_marks)
    logger.debug("min-max for %s: min=%s max=%s", exam.id, low, high)

    # Identical marks: everyone gets full credit
    return [p * exam.scaling_value for p in relative_positions(raw_marks)]


def percentile(raw_marks: Sequence[float], exam: Exam) -> list[float]:
    """
    Scale by descending rank position.

    Rank 0 (the highest mark) receives scaling_value and rank n - 1 receives
    0. Tied marks share the rank of their first occurrence, so tied students
    always receive the same scaled mark.
    """
    n = len(raw_marks)
    if n == 1:
        return [exam.scaling_value]

    ranks = descending_ranks(raw_marks)
    return [((n - 1 - rank) / (n - 1)) * exam.scaling_value for rank in ranks]


SCALERS: dict[str, Callable[[Sequence[float], Exam], list[float]]] = {
    BELL_CURVE: bell_curve,
    LINEAR_NORMALIZATION: linear_normalization,
    MIN_MAX_NORMALIZATION: min_max_normalization,
    PERCENTILE: percentile,
}


def _check_exam(exam: Exam) -> None:
    if not math.isfinite(exam.scaling_value) or exam.scaling_value <= 0:
        raise ConfigurationError(
            f"Exam {exam.id} has scaling value {exam.scaling_value}; "
            "a positive finite value is required"
        )


def apply_scaling(students: Sequence[Student], exam: Exam, method: str) -> list[Student]:
    """
    Compute scaled marks for one exam across the roster.

    Only students holding a raw mark for the exam form the cohort. Their
    record for this exam gets a fresh scaled value; any rounded value for it
    is carried over untouched. Students outside the cohort are returned as
    the same objects, and other exams' records are never touched.

    Args:
        students: Full roster, in display order.
        exam: Exam being scaled.
        method: One of the SCALING_METHODS tags.

    Returns:
        New list of students in the same order.

    Raises:
        UnknownScalingMethodError: method is not a supported tag.
        ConfigurationError: exam settings make the method undefined.
        NonFiniteMarkError: a cohort raw mark, or the scaled mark computed
            from it, is NaN or infinite.
    """
    scaler = SCALERS.get(method)
    if scaler is None:
        raise UnknownScalingMethodError(
            f"Unknown scaling method: {method}. Available: {', '.join(SCALING_METHODS)}"
        )
    _check_exam(exam)

    cohort = [i for i, s in enumerate(students) if exam.id in s.marks]
    if not cohort:
        logger.info("No students have a raw mark for exam %s; nothing to scale", exam.id)
        return list(students)

    raw_marks = []
    for i in cohort:
        raw = students[i].marks[exam.id].raw
        if not math.isfinite(raw):
            raise NonFiniteMarkError(students[i].id, exam.id, raw)
        raw_marks.append(raw)

    scaled_marks = scaler(raw_marks, exam)
    for i, scaled in zip(cohort, scaled_marks):
        if not math.isfinite(scaled):
            raise NonFiniteMarkError(students[i].id, exam.id, scaled)

    updated = list(students)
    for i, scaled in zip(cohort, scaled_marks):
        student = students[i]
        record = replace(student.marks[exam.id], scaled=scaled)
        updated[i] = student.with_record(exam.id, record)

    logger.debug("Scaled %d students on exam %s with %s", len(cohort), exam.id, method)
    return updated
