"""Round scaled marks to whole numbers."""

import logging
import math
from dataclasses import replace
from typing import Sequence

from ..models import Student
from .errors import ConfigurationError, NonFiniteMarkError

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (12.5 -> 13, -0.5 -> -1)."""
    magnitude = abs(value)
    whole = math.floor(magnitude)
    # magnitude - whole is exact; adding 0.5 first is not
    if magnitude - whole >= 0.5:
        whole += 1
    return -whole if value < 0 else whole


def apply_rounding(
    students: Sequence[Student],
    exam_id: str,
    use_scaled_source: bool = True,
) -> list[Student]:
    """
    Set the rounded mark for every student with a scaled mark on the exam.

    Students without a scaled mark for the exam are returned unchanged.

    Args:
        students: Full roster.
        exam_id: Exam whose scaled marks are rounded.
        use_scaled_source: Round from scaled marks. Scaled marks are the only
            defined source, so False is rejected.

    Returns:
        New list of students in the same order.
    """
    if not use_scaled_source:
        raise ConfigurationError("Rounding is only defined over scaled marks")

    for student in students:
        scaled = student.scaled_mark(exam_id)
        if scaled is not None and not math.isfinite(scaled):
            raise NonFiniteMarkError(student.id, exam_id, scaled)

    updated = []
    count = 0
    for student in students:
        record = student.marks.get(exam_id)
        if record is None or record.scaled is None:
            updated.append(student)
            continue
        updated.append(
            student.with_record(exam_id, replace(record, rounded=round_half_up(record.scaled)))
        )
        count += 1

    if count == 0:
        logger.info("No scaled marks on exam %s; nothing to round", exam_id)
    else:
        logger.debug("Rounded %d scaled marks on exam %s", count, exam_id)
    return updated
