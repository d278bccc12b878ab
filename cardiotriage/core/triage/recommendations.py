"""
Recommendation Generator

Turns a risk category plus the specific abnormal findings of an assessment
into a recommended action, an explanation and an ordered list of advice.

List order is fixed and never re-sorted by severity:
    1. category-level advice
    2. vital-sign call-outs  (blood pressure, heart rate, oxygen, temperature)
    3. risk-factor call-outs (in RiskFactors field order)

Text is default-language (English) content; translation belongs to the
presentation layer.
"""
from __future__ import annotations

from typing import Callable, Dict, List, Optional

from .base import BreathlessnessLevel, PatientAssessmentInput, RiskCategory
from . import impact as thresholds
from cardiotriage.utils import get_logger

logger = get_logger(__name__)

# ── Recommended actions (strictly keyed off the category) ─────────────────────

RECOMMENDED_ACTIONS: Dict[RiskCategory, str] = {
    RiskCategory.LOW:      "Self-care / monitor",
    RiskCategory.MILD:     "Monitor symptoms and follow heart-healthy habits",
    RiskCategory.MODERATE: "Consult doctor within 48 hours",
    RiskCategory.HIGH:     "Seek medical attention within 6–24 hours",
    RiskCategory.CRITICAL: "Go to emergency room immediately",
}

# ── Category-level advice ─────────────────────────────────────────────────────

CATEGORY_ADVICE: Dict[RiskCategory, List[str]] = {
    RiskCategory.CRITICAL: [
        "Your risk level is critical. Call your local emergency number or go to the nearest emergency room now.",
        "Do not drive yourself to the hospital. Stop all physical activity and rest while waiting for help.",
    ],
    RiskCategory.HIGH: [
        "Your risk level is high. Arrange an urgent clinic or emergency department visit within 6–24 hours.",
        "Avoid strenuous activity until you have been assessed, and seek emergency care if symptoms worsen.",
    ],
    RiskCategory.MODERATE: [
        "Your risk level is moderate. Book a clinic or teleconsult appointment within 24–48 hours.",
        "Keep a record of when your symptoms occur and how long they last to share with your doctor.",
    ],
    RiskCategory.MILD: [
        "Your risk level is mild. Monitor your symptoms and repeat this assessment if they change.",
        "Follow a heart-healthy diet rich in fruits, vegetables, whole grains and lean proteins, and limit salt.",
    ],
    RiskCategory.LOW: [
        "Your risk level is low. Keep up the good work and continue to maintain a healthy lifestyle.",
        "Repeat this assessment if new symptoms appear.",
    ],
}

# ── Vital-sign advice ─────────────────────────────────────────────────────────

BP_CRITICAL_ADVICE = (
    "Your blood pressure is critically high. Seek immediate medical attention "
    "and avoid activities that could raise it further."
)
BP_ELEVATED_ADVICE = (
    "Your blood pressure reading is elevated. Monitor it regularly and discuss "
    "management with your doctor, including diet, exercise and possibly medication."
)
BP_LOW_ADVICE = (
    "Your blood pressure is low. Sit or lie down if you feel dizzy and seek medical "
    "care if you feel faint or confused."
)
HR_FAST_ADVICE = (
    "Your heart rate is elevated. Avoid caffeine and stimulants, rest, and consult "
    "your doctor if a rapid heart rate persists."
)
HR_SLOW_ADVICE = (
    "Your heart rate is low. Watch for dizziness or fainting and consult your doctor "
    "if these occur."
)
SPO2_LOW_ADVICE = (
    "Your oxygen saturation is below normal. Seek medical attention, as this may "
    "indicate a serious respiratory or cardiac condition."
)
FEVER_ADVICE = (
    "Your temperature is above normal, which may indicate infection. Rest, stay hydrated "
    "and consult your doctor if it persists or worsens."
)
HYPOTHERMIA_ADVICE = (
    "Your body temperature is low. Warm up gradually and seek medical care if it "
    "does not return to normal."
)

# ── Risk-factor advice (RiskFactors field order) ──────────────────────────────

RISK_FACTOR_ADVICE: Dict[str, str] = {
    "hypertension": (
        "High blood pressure: follow your treatment plan, check your blood pressure "
        "regularly, keep a low-sodium diet and take medications as prescribed."
    ),
    "diabetes": (
        "Diabetes: manage it through diet, exercise and prescribed medication, and "
        "monitor your blood sugar regularly."
    ),
    "chronic_kidney_disease": (
        "Chronic kidney disease: keep regular follow-up with your doctor and review "
        "medications and fluid intake with your care team."
    ),
    "high_cholesterol": (
        "High cholesterol: follow a diet low in saturated fats, exercise regularly and "
        "take cholesterol medication as prescribed."
    ),
    "smoking": (
        "Smoking: quitting is the single most effective step to lower your heart risk. "
        "Ask your doctor about smoking cessation support."
    ),
    "obesity": (
        "Weight: aim for a healthy weight through a balanced diet and regular activity, "
        "and work with your doctor on a safe weight-loss plan."
    ),
    "family_history": (
        "Family history: tell your doctor about relatives with heart disease so your "
        "screening can be scheduled accordingly."
    ),
    "previous_heart_disease": (
        "Heart disease history: visit your cardiologist regularly, take prescribed "
        "medications and report any new or worsening symptoms promptly."
    ),
}


def recommended_action(category: RiskCategory) -> str:
    return RECOMMENDED_ACTIONS[category]


# ── Vital call-outs ───────────────────────────────────────────────────────────

def _range_position(name: str, value: Optional[float]) -> int:
    """-1 below the normal range, 1 above it, 0 inside or unmeasured."""
    if value is None or thresholds.is_normal(name, value):
        return 0
    low, _ = thresholds.NORMAL_RANGES[name]
    return -1 if value < low else 1


def _blood_pressure_advice(patient: PatientAssessmentInput) -> Optional[str]:
    sbp, dbp = patient.systolic_bp, patient.diastolic_bp
    if (sbp is not None and sbp >= thresholds.SBP_CRISIS) or \
       (dbp is not None and dbp >= thresholds.DBP_CRISIS):
        return BP_CRITICAL_ADVICE
    positions = (
        _range_position("systolic_bp", sbp),
        _range_position("diastolic_bp", dbp),
    )
    if -1 in positions:
        return BP_LOW_ADVICE
    if 1 in positions:
        return BP_ELEVATED_ADVICE
    return None


def _heart_rate_advice(patient: PatientAssessmentInput) -> Optional[str]:
    position = _range_position("heart_rate", patient.heart_rate)
    if position > 0:
        return HR_FAST_ADVICE
    if position < 0:
        return HR_SLOW_ADVICE
    return None


def _oxygen_advice(patient: PatientAssessmentInput) -> Optional[str]:
    if _range_position("oxygen_saturation", patient.oxygen_saturation) < 0:
        return SPO2_LOW_ADVICE
    return None


def _temperature_advice(patient: PatientAssessmentInput) -> Optional[str]:
    position = _range_position("temperature", patient.temperature)
    if position > 0:
        return FEVER_ADVICE
    if position < 0:
        return HYPOTHERMIA_ADVICE
    return None


VITAL_ADVISORS: List[Callable[[PatientAssessmentInput], Optional[str]]] = [
    _blood_pressure_advice,
    _heart_rate_advice,
    _oxygen_advice,
    _temperature_advice,
]


def vital_sign_recommendations(patient: PatientAssessmentInput) -> List[str]:
    lines = []
    for advisor in VITAL_ADVISORS:
        line = advisor(patient)
        if line is not None:
            lines.append(line)
    return lines


def risk_factor_recommendations(patient: PatientAssessmentInput) -> List[str]:
    return [RISK_FACTOR_ADVICE[name] for name in patient.risk_factors.active()]


# ── Public interface ───────────────────────────────────────────────────────────

def generate_recommendations(
    category: RiskCategory,
    final_risk_score: int,
    patient: PatientAssessmentInput,
) -> List[str]:
    """
    Build the ordered recommendation list for an assessment.

    Args:
        category: Risk category from the classifier.
        final_risk_score: 1–25 matrix score.
        patient: Original input, used for vital and risk-factor call-outs.

    Returns:
        Category advice, then vital-sign advice, then risk-factor advice.
        Absent optional fields simply produce no line.
    """
    recommendations = list(CATEGORY_ADVICE[category])
    recommendations.extend(vital_sign_recommendations(patient))
    recommendations.extend(risk_factor_recommendations(patient))
    logger.debug(
        f"Recommendations [{category.value}, score={final_risk_score}]: "
        f"{len(recommendations)} line(s)"
    )
    return recommendations


def generate_explanation(
    patient: PatientAssessmentInput,
    likelihood_score: int,
    impact_score: int,
    final_risk_score: int,
    category: RiskCategory,
) -> str:
    """Plain-language rationale for the assessed risk level."""
    factors = []

    if likelihood_score >= 4:
        factors.append("your symptom pattern suggests a cardiac condition")
    elif likelihood_score >= 3:
        factors.append("your symptom pattern may indicate a cardiac condition")

    if impact_score >= 4:
        factors.append("your vital signs show a severe physiological impact")
    elif impact_score >= 3:
        factors.append("your vital signs show concerning changes")

    if patient.chest_pain_type.is_anginal:
        factors.append("you reported typical chest pain symptoms")
    duration = patient.chest_pain_duration_minutes
    if patient.has_chest_pain and duration is not None and duration > thresholds.PERSISTENT_PAIN_MINUTES:
        factors.append(f"your chest pain has lasted over {thresholds.PERSISTENT_PAIN_MINUTES} minutes")
    if patient.shortness_of_breath_level is BreathlessnessLevel.SEVERE:
        factors.append("you have severe shortness of breath")
    if patient.has_syncope:
        factors.append("you experienced syncope or fainting")

    score_line = (
        f"Likelihood {likelihood_score} × impact {impact_score} gives a risk score of "
        f"{final_risk_score}/25 ({category.value})."
    )
    if not factors:
        return (
            "Based on your current symptoms and vital signs, your risk level has been assessed. "
            + score_line
        )
    return f"Based on your assessment: {', '.join(factors)}. {score_line}"
