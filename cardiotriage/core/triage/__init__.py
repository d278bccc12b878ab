"""
Cardiac Triage Layer

Turns a patient's age, symptoms, vital signs and risk factors into a
likelihood score, an impact score, a 5×5 risk category and recommendations.

Usage:
    from cardiotriage.core.triage import CardiacTriageEngine, PatientAssessmentInput

    engine = CardiacTriageEngine()
    result = engine.assess(PatientAssessmentInput(age=45, sex="male"))
"""
from .base import (
    AssessmentResult,
    BreathlessnessLevel,
    ChestPainType,
    HeatmapPosition,
    ImpactLevel,
    LikelihoodLevel,
    PatientAssessmentInput,
    RiskCategory,
    RiskFactors,
    Sex,
)
from .likelihood import score_likelihood
from .impact import score_impact
from .classifier import classify_risk, RiskClassification
from .recommendations import generate_recommendations, recommended_action
from .engine import CardiacTriageEngine, assess_patient

__all__ = [
    "AssessmentResult",
    "BreathlessnessLevel",
    "ChestPainType",
    "HeatmapPosition",
    "ImpactLevel",
    "LikelihoodLevel",
    "PatientAssessmentInput",
    "RiskCategory",
    "RiskFactors",
    "Sex",
    "score_likelihood",
    "score_impact",
    "classify_risk",
    "RiskClassification",
    "generate_recommendations",
    "recommended_action",
    "CardiacTriageEngine",
    "assess_patient",
]
