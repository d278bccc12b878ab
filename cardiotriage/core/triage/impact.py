"""
Impact Scorer

Classifies each measured vital sign into a 1–5 severity tier and takes the
worst tier as the impact score. Vital signs that were not measured add no
severity, so an assessment without vitals stays at the baseline tier.

Tier table (1 = normal):

    systolic_bp       <90 → 5   ≥180 → 5   160–179 → 4   140–159 → 3   130–139 → 2
    diastolic_bp      ≥120 → 5  110–119 → 4   90–109 → 3    80–89 → 2
    heart_rate        <40 or >130 → 5   40–49 or 121–130 → 4   101–120 → 3   50–59 → 2
    oxygen_saturation ≥95 → 1   90–94 → 3   <90 → 5
    temperature       <35.0 → 4   ≥40.0 → 4   >38.5 → 3   ≥37.6 → 2
                      (fever >38.5 °C with chest pain or breathlessness: +1 tier)

Acute symptom tiers are applied only when requested:

    chest pain >20 min → 3   severe breathlessness → 3
    moderate breathlessness → 2   leg swelling → 2
"""
from __future__ import annotations

from typing import Dict, Optional, Tuple

from .base import BreathlessnessLevel, ImpactLevel, PatientAssessmentInput

# ── Thresholds ────────────────────────────────────────────────────────────────

# Blood pressure
SBP_HYPOTENSION   = 90     # shock range below this
SBP_STAGE1        = 130    # AHA Stage 1 hypertension
SBP_STAGE2        = 140    # AHA Stage 2
SBP_SEVERE        = 160
SBP_CRISIS        = 180    # hypertensive crisis
DBP_STAGE1        = 80
DBP_STAGE2        = 90
DBP_SEVERE        = 110
DBP_CRISIS        = 120

# Heart rate
HR_BRADY_CRITICAL = 40
HR_BRADY_SEVERE   = 50
HR_BRADY_MILD     = 60
HR_TACHY_MILD     = 100
HR_TACHY_SEVERE   = 120
HR_TACHY_CRITICAL = 130

# Oxygen saturation
SPO2_NORMAL       = 95
SPO2_SEVERE       = 90

# Temperature (°C)
TEMP_HYPOTHERMIA  = 35.0
TEMP_LOW_GRADE    = 37.6
TEMP_FEVER        = 38.5
TEMP_HYPERPYREXIA = 40.0

# Acute symptoms
PERSISTENT_PAIN_MINUTES = 20

MIN_TIER = 1
MAX_TIER = 5

# Normal range per vital (inclusive). Readings outside get a call-out in the
# recommendations and are flagged in the history trends.
NORMAL_RANGES: Dict[str, Tuple[float, float]] = {
    "systolic_bp":       (SBP_HYPOTENSION, SBP_STAGE1 - 1),
    "diastolic_bp":      (60, DBP_STAGE1 - 1),
    "heart_rate":        (HR_BRADY_MILD, HR_TACHY_MILD),
    "oxygen_saturation": (SPO2_NORMAL, 100),
    "temperature":       (TEMP_HYPOTHERMIA, 37.5),
}


def is_normal(name: str, value: float) -> bool:
    low, high = NORMAL_RANGES[name]
    return low <= value <= high


# ── Per-vital tiers ───────────────────────────────────────────────────────────

def systolic_tier(sbp: Optional[int]) -> int:
    if sbp is None:
        return MIN_TIER
    if sbp < SBP_HYPOTENSION or sbp >= SBP_CRISIS:
        return 5
    if sbp >= SBP_SEVERE:
        return 4
    if sbp >= SBP_STAGE2:
        return 3
    if sbp >= SBP_STAGE1:
        return 2
    return 1


def diastolic_tier(dbp: Optional[int]) -> int:
    if dbp is None:
        return MIN_TIER
    if dbp >= DBP_CRISIS:
        return 5
    if dbp >= DBP_SEVERE:
        return 4
    if dbp >= DBP_STAGE2:
        return 3
    if dbp >= DBP_STAGE1:
        return 2
    return 1


def heart_rate_tier(hr: Optional[int]) -> int:
    if hr is None:
        return MIN_TIER
    if hr < HR_BRADY_CRITICAL or hr > HR_TACHY_CRITICAL:
        return 5
    if hr < HR_BRADY_SEVERE or hr > HR_TACHY_SEVERE:
        return 4
    if hr > HR_TACHY_MILD:
        return 3
    if hr < HR_BRADY_MILD:
        return 2
    return 1


def oxygen_tier(spo2: Optional[int]) -> int:
    if spo2 is None:
        return MIN_TIER
    if spo2 < SPO2_SEVERE:
        return 5
    if spo2 < SPO2_NORMAL:
        return 3
    return 1


def temperature_tier(temp: Optional[float], cardiorespiratory_symptoms: bool = False) -> int:
    if temp is None:
        return MIN_TIER
    if temp < TEMP_HYPOTHERMIA or temp >= TEMP_HYPERPYREXIA:
        tier = 4
    elif temp > TEMP_FEVER:
        tier = 3
    elif temp >= TEMP_LOW_GRADE:
        tier = 2
    else:
        tier = 1

    if temp > TEMP_FEVER and cardiorespiratory_symptoms:
        tier += 1
    return min(tier, MAX_TIER)


def acute_symptom_tier(patient: PatientAssessmentInput) -> int:
    tier = MIN_TIER
    duration = patient.chest_pain_duration_minutes
    if patient.has_chest_pain and duration is not None and duration > PERSISTENT_PAIN_MINUTES:
        tier = max(tier, 3)
    if patient.shortness_of_breath_level is BreathlessnessLevel.SEVERE:
        tier = max(tier, 3)
    elif patient.shortness_of_breath_level is BreathlessnessLevel.MODERATE:
        tier = max(tier, 2)
    if patient.leg_swelling:
        tier = max(tier, 2)
    return tier


def vital_tiers(patient: PatientAssessmentInput) -> Dict[str, int]:
    """Severity tier for every measured vital sign (unmeasured ones are omitted)."""
    cardiorespiratory = (
        patient.has_chest_pain
        or patient.shortness_of_breath_level is not BreathlessnessLevel.NONE
    )
    tiers = {}
    if patient.systolic_bp is not None:
        tiers["systolic_bp"] = systolic_tier(patient.systolic_bp)
    if patient.diastolic_bp is not None:
        tiers["diastolic_bp"] = diastolic_tier(patient.diastolic_bp)
    if patient.heart_rate is not None:
        tiers["heart_rate"] = heart_rate_tier(patient.heart_rate)
    if patient.oxygen_saturation is not None:
        tiers["oxygen_saturation"] = oxygen_tier(patient.oxygen_saturation)
    if patient.temperature is not None:
        tiers["temperature"] = temperature_tier(patient.temperature, cardiorespiratory)
    return tiers


# ── Public interface ───────────────────────────────────────────────────────────

def score_impact(
    patient: PatientAssessmentInput,
    include_acute_symptoms: bool = False,
) -> Tuple[int, ImpactLevel]:
    """
    Score the physiological impact from vital signs.

    Args:
        patient: Assessment input. Absent vitals are "not measured".
        include_acute_symptoms: Also let acute symptom severity raise the score.

    Returns:
        (score, level) with score clamped to 1–5.
    """
    worst = max(vital_tiers(patient).values(), default=MIN_TIER)
    if include_acute_symptoms:
        worst = max(worst, acute_symptom_tier(patient))
    score = max(MIN_TIER, min(MAX_TIER, worst))
    return score, ImpactLevel.from_score(score)
