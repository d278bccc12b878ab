"""
Vital Sign Plausibility Validation Module

Enforces hard physiological constraints on assessment input.
Detects missing demographics, impossible values and internal contradictions.
Purely rule based.

The surrounding form validates these bounds before submission; this module
is the last line of defence. It never raises: violations are returned to
the caller, and `sanitize()` turns implausible values into "unknown" so the
scorers never see them.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Any, List, Optional, Tuple, TYPE_CHECKING
from enum import Enum

from cardiotriage.utils import get_logger

if TYPE_CHECKING:
    from cardiotriage.core.triage.base import PatientAssessmentInput

logger = get_logger(__name__)


class ViolationType(str, Enum):
    """Types of plausibility violations."""
    MISSING_REQUIRED = "missing_required"              # age or sex absent
    IMPOSSIBLE_VALUE = "impossible_value"              # outside hard physiological limits
    INTERNAL_CONTRADICTION = "internal_contradiction"  # contradicts another field


# Hard limits from the assessment form. Values outside are treated as unknown.
HARD_LIMITS: Dict[str, Tuple[float, float]] = {
    "age":                         (0, 120),
    "systolic_bp":                 (50, 300),
    "diastolic_bp":                (30, 200),
    "heart_rate":                  (30, 250),
    "oxygen_saturation":           (70, 100),
    "temperature":                 (30.0, 45.0),
    "chest_pain_duration_minutes": (0, 7 * 24 * 60),
}

REQUIRED_FIELDS = ("age", "sex")


@dataclass
class PlausibilityViolation:
    """A single plausibility violation."""
    field_name: str
    violation_type: ViolationType
    message: str
    actual_value: Optional[Any] = None
    expected_range: Optional[Tuple[float, float]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field_name,
            "type": self.violation_type.value,
            "message": self.message,
            "actual_value": self.actual_value,
            "expected_range": self.expected_range,
        }


@dataclass
class PlausibilityResult:
    """Result of input plausibility validation."""
    violations: List[PlausibilityViolation] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    @property
    def missing_required(self) -> List[str]:
        return [
            v.field_name for v in self.violations
            if v.violation_type == ViolationType.MISSING_REQUIRED
        ]

    def messages(self) -> List[str]:
        return [v.message for v in self.violations]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "violation_count": len(self.violations),
            "violations": [v.to_dict() for v in self.violations],
        }


def check(patient: PatientAssessmentInput) -> PlausibilityResult:
    """
    Validate an assessment input against hard physiological constraints.

    Returns:
        PlausibilityResult listing every violation (empty when valid).
    """
    result = PlausibilityResult()

    for name in REQUIRED_FIELDS:
        if getattr(patient, name) is None:
            result.violations.append(PlausibilityViolation(
                field_name=name,
                violation_type=ViolationType.MISSING_REQUIRED,
                message=f"Required field missing: {name}",
            ))

    for name, (low, high) in HARD_LIMITS.items():
        value = getattr(patient, name)
        if value is None:
            continue
        if not low <= value <= high:
            result.violations.append(PlausibilityViolation(
                field_name=name,
                violation_type=ViolationType.IMPOSSIBLE_VALUE,
                message=f"{name}={value} is outside the plausible range {low}–{high}",
                actual_value=value,
                expected_range=(low, high),
            ))

    sbp, dbp = patient.systolic_bp, patient.diastolic_bp
    if sbp is not None and dbp is not None and dbp >= sbp:
        result.violations.append(PlausibilityViolation(
            field_name="diastolic_bp",
            violation_type=ViolationType.INTERNAL_CONTRADICTION,
            message=f"Diastolic BP ({dbp}) is not lower than systolic BP ({sbp})",
            actual_value=dbp,
        ))

    if result.violations:
        logger.debug(f"Plausibility check: {len(result.violations)} violation(s)")
    return result


def sanitize(patient: PatientAssessmentInput) -> PatientAssessmentInput:
    """
    Return a copy with implausible values neutralised.

    Age is clamped to its hard range; any other out-of-range value becomes
    None ("unknown"). Contradictory blood pressure pairs are kept as
    reported and only flagged by `check()`.
    """
    changes: Dict[str, Any] = {}

    for name, (low, high) in HARD_LIMITS.items():
        value = getattr(patient, name)
        if value is None or low <= value <= high:
            continue
        if name == "age":
            changes[name] = int(max(low, min(high, value)))
        else:
            changes[name] = None
        logger.warning(f"Implausible {name}={value} neutralised to {changes[name]}")

    if not changes:
        return patient
    return replace(patient, **changes)
