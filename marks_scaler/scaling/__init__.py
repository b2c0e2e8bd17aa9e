"""Mark scaling and rounding."""

from .engine import apply_scaling, bell_curve, linear_normalization, min_max_normalization, percentile
from .errors import ConfigurationError, NonFiniteMarkError, ScalingError, UnknownScalingMethodError
from .rounding import apply_rounding, round_half_up

__all__ = [
    "apply_scaling",
    "apply_rounding",
    "round_half_up",
    "bell_curve",
    "linear_normalization",
    "min_max_normalization",
    "percentile",
    "ScalingError",
    "ConfigurationError",
    "NonFiniteMarkError",
    "UnknownScalingMethodError",
]
