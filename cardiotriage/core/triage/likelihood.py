"""
Likelihood Scorer

Converts symptom and history evidence into a 1–5 likelihood of a cardiac
event. Points are accumulated from a base of 1.0 and mapped to bands:

    chest pain character   anginal +1.5, other +0.5
    chest pain features    exertional +1.0, radiating +0.5, >10 min +0.5
    breathlessness         mild +0.5, moderate +1.0, severe +2.0
    syncope / fainting     +2.0
    neurological symptoms  +2.0
    palpitations           +0.5 (+1.0 with heart rate >120 bpm)
    sweating, nausea, dizziness   +0.5 each
    >=2 major risk factors +1.0
    male >=55 / female >=65       +1.0

Every contribution is non-negative, so adding evidence never lowers the
score. An absent field contributes nothing.
"""
from __future__ import annotations

from typing import List, Tuple

from .base import BreathlessnessLevel, LikelihoodLevel, PatientAssessmentInput, Sex

# ── Points ────────────────────────────────────────────────────────────────────

BASE_POINTS = 1.0

ANGINAL_PAIN_POINTS    = 1.5
OTHER_PAIN_POINTS      = 0.5
EXERTIONAL_PAIN_POINTS = 1.0
RADIATING_PAIN_POINTS  = 0.5
PROLONGED_PAIN_POINTS  = 0.5
PROLONGED_PAIN_MINUTES = 10

BREATHLESSNESS_POINTS = {
    BreathlessnessLevel.NONE:     0.0,
    BreathlessnessLevel.MILD:     0.5,
    BreathlessnessLevel.MODERATE: 1.0,
    BreathlessnessLevel.SEVERE:   2.0,
}

SYNCOPE_POINTS       = 2.0
NEUROLOGICAL_POINTS  = 2.0
PALPITATION_POINTS   = 0.5
PALPITATION_TACHY_POINTS = 1.0
PALPITATION_TACHY_HR = 120
ASSOCIATED_SYMPTOM_POINTS = 0.5   # sweating, nausea, dizziness

MAJOR_RISK_FACTOR_THRESHOLD = 2
RISK_FACTOR_POINTS   = 1.0

MALE_RISK_AGE        = 55
FEMALE_RISK_AGE      = 65
DEMOGRAPHIC_POINTS   = 1.0

# Upper edge of each band; above the last edge is band 5
LIKELIHOOD_BANDS: List[Tuple[float, int]] = [
    (1.0, 1),   # Improbable
    (3.0, 2),   # Remote
    (5.0, 3),   # Occasional
    (7.0, 4),   # Probable
]


# ── Contributions ─────────────────────────────────────────────────────────────

def chest_pain_points(patient: PatientAssessmentInput) -> float:
    if not patient.has_chest_pain:
        return 0.0

    points = ANGINAL_PAIN_POINTS if patient.chest_pain_type.is_anginal else OTHER_PAIN_POINTS
    if patient.chest_pain_exertional:
        points += EXERTIONAL_PAIN_POINTS
    if patient.chest_pain_radiation:
        points += RADIATING_PAIN_POINTS
    duration = patient.chest_pain_duration_minutes
    if duration is not None and duration > PROLONGED_PAIN_MINUTES:
        points += PROLONGED_PAIN_POINTS
    return points


def symptom_points(patient: PatientAssessmentInput) -> float:
    points = BREATHLESSNESS_POINTS[patient.shortness_of_breath_level]

    if patient.has_syncope:
        points += SYNCOPE_POINTS
    if patient.neurological_symptoms:
        points += NEUROLOGICAL_POINTS

    if patient.palpitations:
        hr = patient.heart_rate
        if hr is not None and hr > PALPITATION_TACHY_HR:
            points += PALPITATION_TACHY_POINTS
        else:
            points += PALPITATION_POINTS

    associated = sum(1 for flag in (patient.sweating, patient.nausea, patient.dizziness) if flag)
    points += associated * ASSOCIATED_SYMPTOM_POINTS
    return points


def history_points(patient: PatientAssessmentInput) -> float:
    points = 0.0
    if patient.risk_factors.major_count() >= MAJOR_RISK_FACTOR_THRESHOLD:
        points += RISK_FACTOR_POINTS

    # Missing age or sex earns no demographic points
    age = patient.age
    if age is not None:
        if (patient.sex is Sex.MALE and age >= MALE_RISK_AGE) or \
           (patient.sex is Sex.FEMALE and age >= FEMALE_RISK_AGE):
            points += DEMOGRAPHIC_POINTS
    return points


def likelihood_points(patient: PatientAssessmentInput) -> float:
    """Raw, unbanded likelihood points (>= 1.0)."""
    return (
        BASE_POINTS
        + chest_pain_points(patient)
        + symptom_points(patient)
        + history_points(patient)
    )


def band_likelihood(points: float) -> int:
    for upper, band in LIKELIHOOD_BANDS:
        if points <= upper:
            return band
    return 5


# ── Public interface ───────────────────────────────────────────────────────────

def score_likelihood(patient: PatientAssessmentInput) -> Tuple[int, LikelihoodLevel]:
    """
    Score the likelihood of a cardiac event.

    Returns:
        (score, level) with score clamped to 1–5.
    """
    score = max(1, min(5, band_likelihood(likelihood_points(patient))))
    return score, LikelihoodLevel.from_score(score)
