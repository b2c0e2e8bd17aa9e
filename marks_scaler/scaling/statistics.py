"""Cohort statistics used by the scaling methods."""

import math
from typing import Sequence


def _power_of_two_scale(values: Sequence[float]) -> float:
    """
    Power of two within a factor of two of the largest magnitude.

    Dividing by it is exact and keeps sums and squares of the scaled values
    far from overflow.
    """
    largest = max(abs(v) for v in values)
    if largest == 0:
        return 1.0
    _, exponent = math.frexp(largest)
    return math.ldexp(1.0, exponent - 1)


def is_uniform(values: Sequence[float]) -> bool:
    """True when every value is identical."""
    return min(values) == max(values)


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean of a non-empty sequence."""
    if is_uniform(values):
        return values[0]
    scale = _power_of_two_scale(values)
    return math.fsum(v / scale for v in values) / len(values) * scale


def population_stddev(values: Sequence[float]) -> float:
    """Population standard deviation (divides by n, not n - 1)."""
    if is_uniform(values):
        return 0.0
    scale = _power_of_two_scale(values)
    scaled = [v / scale for v in values]
    mu = math.fsum(scaled) / len(scaled)
    return math.sqrt(math.fsum((v - mu) ** 2 for v in scaled) / len(scaled)) * scale


def z_scores(values: Sequence[float]) -> list[float]:
    """
    Standard scores of each value against the whole sequence.

    Identical values all score 0.
    """
    if is_uniform(values):
        return [0.0 for _ in values]
    scale = _power_of_two_scale(values)
    scaled = [v / scale for v in values]
    mu = math.fsum(scaled) / len(scaled)
    sigma = math.sqrt(math.fsum((v - mu) ** 2 for v in scaled) / len(scaled))
    return [(v - mu) / sigma for v in scaled]


def min_max(values: Sequence[float]) -> tuple[float, float]:
    """Smallest and largest value of a non-empty sequence."""
    return min(values), max(values)


def relative_positions(values: Sequence[float]) -> list[float]:
    """
    Place each value on [0, 1] between the minimum and the maximum.

    Identical values all get 1.
    """
    if is_uniform(values):
        return [1.0 for _ in values]
    scale = _power_of_two_scale(values)
    low, high = (v / scale for v in min_max(values))
    return [(v / scale - low) / (high - low) for v in values]


def descending_ranks(values: Sequence[float]) -> list[int]:
    """
    Rank values from highest to lowest.

    The highest value gets rank 0. Equal values share the rank of the first
    of them in descending order, so [90, 80, 90, 70] ranks as [0, 2, 0, 3].

    Returns:
        Ranks aligned with the input positions.
    """
    ordered = sorted(values, reverse=True)
    first_position = {}
    for position, value in enumerate(ordered):
        first_position.setdefault(value, position)
    return [first_position[v] for v in values]
