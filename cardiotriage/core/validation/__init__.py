"""
Validation Module

Hard physiological bounds on assessment input. Gates the scorers so that
out-of-range values count as "unknown" instead of as evidence.
"""
from .vital_plausibility import (
    check,
    sanitize,
    PlausibilityResult,
    PlausibilityViolation,
    ViolationType,
    HARD_LIMITS,
)

__all__ = [
    "check",
    "sanitize",
    "PlausibilityResult",
    "PlausibilityViolation",
    "ViolationType",
    "HARD_LIMITS",
]
