"""
Unit Tests for the Cardiac Triage Engine

End-to-end assessments: scores, category, action, demographics handling
and implausible input.
"""
import pytest

from cardiotriage.config import TriageConfig
from cardiotriage.core.triage import (
    AssessmentResult,
    CardiacTriageEngine,
    ImpactLevel,
    LikelihoodLevel,
    RiskCategory,
    assess_patient,
)
from cardiotriage.core.triage.base import SAFETY_MESSAGE
from cardiotriage.core.triage.recommendations import HR_SLOW_ADVICE
from cardiotriage.utils import AssessmentInputError, TriageError


class TestAssessment:
    """Tests for complete assessments."""

    def test_healthy_adult_is_low(self, engine, make_patient):
        result = engine.assess(make_patient())
        assert isinstance(result, AssessmentResult)
        assert result.likelihood_score == 1
        assert result.impact_score == 1
        assert result.final_risk_score == 1
        assert result.risk_category is RiskCategory.LOW
        assert result.recommended_action == "Self-care / monitor"
        assert result.safety_message == SAFETY_MESSAGE
        assert result.input_warnings == []

    def test_classic_presentation(self, engine, make_patient):
        patient = make_patient(
            age=60,
            chest_pain_type="typical",
            chest_pain_exertional=True,
            shortness_of_breath_level="severe",
            syncope=True,
        )
        result = engine.assess(patient)
        assert result.likelihood_score == 5
        assert result.likelihood_level is LikelihoodLevel.VERY_PROBABLE

    def test_severe_vitals(self, engine, make_patient):
        patient = make_patient(systolic_bp=190, diastolic_bp=110, heart_rate=130, oxygen_saturation=88)
        result = engine.assess(patient)
        assert result.impact_score == 5
        assert result.impact_level is ImpactLevel.CRITICAL

    def test_critical_assessment(self, engine, make_patient):
        patient = make_patient(
            age=70,
            chest_pain_type="crushing",
            chest_pain_exertional=True,
            shortness_of_breath_level="severe",
            syncope=True,
            systolic_bp=190,
            oxygen_saturation=88,
        )
        result = engine.assess(patient)
        assert result.final_risk_score == 25
        assert result.risk_category is RiskCategory.CRITICAL
        assert result.recommended_action == "Go to emergency room immediately"
        assert (result.heatmap_position.x, result.heatmap_position.y) == (4, 4)

    def test_final_score_is_product(self, engine, make_patient):
        patient = make_patient(chest_pain_type="atypical", palpitations=True, systolic_bp=145)
        result = engine.assess(patient)
        assert result.final_risk_score == result.likelihood_score * result.impact_score
        assert 1 <= result.likelihood_score <= 5
        assert 1 <= result.impact_score <= 5

    def test_deterministic(self, engine, make_patient):
        patient = make_patient(chest_pain_type="pressure", heart_rate=115)
        assert engine.assess(patient).to_dict() == engine.assess(patient).to_dict()

    def test_missing_vitals_never_raise_impact(self, engine, make_patient, normal_vitals):
        without = engine.assess(make_patient(chest_pain_type="typical"))
        for name, value in normal_vitals.items():
            with_one = engine.assess(make_patient(chest_pain_type="typical", **{name: value}))
            assert without.impact_score <= with_one.impact_score

    def test_recommendations_start_with_category_advice(self, engine, make_patient):
        result = engine.assess(make_patient(systolic_bp=150))
        assert len(result.recommendations) >= 3
        assert "Your risk level" in result.recommendations[0]

    def test_slow_heart_rate_scored_and_called_out(self, engine, make_patient):
        result = engine.assess(make_patient(heart_rate=55))
        assert result.impact_score == 2
        assert HR_SLOW_ADVICE in result.recommendations


class TestDemographics:
    """Tests for missing age/sex handling."""

    def test_missing_sex_rejected_when_strict(self, engine, make_patient):
        with pytest.raises(AssessmentInputError) as exc_info:
            engine.assess(make_patient(sex=None))
        assert exc_info.value.fields == ["sex"]
        assert exc_info.value.code == "MISSING_REQUIRED_FIELD"

    def test_missing_age_and_sex(self, engine, make_patient):
        with pytest.raises(AssessmentInputError) as exc_info:
            engine.assess(make_patient(age=None, sex=None))
        assert exc_info.value.fields == ["age", "sex"]
        assert exc_info.value.to_dict()["details"]["fields"] == ["age", "sex"]

    def test_input_error_is_value_error(self, engine, make_patient):
        with pytest.raises(ValueError):
            engine.assess(make_patient(age=None))
        with pytest.raises(TriageError):
            engine.assess(make_patient(age=None))

    def test_legacy_mode_scores_without_demographics(self, legacy_engine, make_patient):
        patient = make_patient(
            age=60,
            sex=None,
            chest_pain_type="typical",
            chest_pain_exertional=True,
            shortness_of_breath_level="severe",
            syncope=True,
        )
        result = legacy_engine.assess(patient)
        assert result.likelihood_score == 5
        assert any("sex" in warning for warning in result.input_warnings)

    def test_legacy_mode_missing_age_adds_no_risk(self, legacy_engine, make_patient):
        result = legacy_engine.assess(make_patient(age=None, sex=None))
        assert result.final_risk_score == 1
        assert result.risk_category is RiskCategory.LOW


class TestImplausibleInput:

    def test_impossible_vital_is_ignored(self, engine, make_patient):
        result = engine.assess(make_patient(systolic_bp=400))
        assert result.impact_score == 1
        assert any("systolic_bp" in warning for warning in result.input_warnings)

    def test_validate_does_not_raise(self, engine, make_patient):
        plausibility = engine.validate(make_patient(age=None, heart_rate=10))
        assert not plausibility.is_valid
        assert plausibility.missing_required == ["age"]

    def test_prepare_returns_sanitised_input(self, engine, make_patient):
        clean, plausibility = engine.prepare(make_patient(heart_rate=400, systolic_bp=150))
        assert clean.heart_rate is None
        assert clean.systolic_bp == 150
        assert not plausibility.is_valid

    def test_assess_equals_prepare_then_score(self, engine, make_patient):
        patient = make_patient(heart_rate=400, systolic_bp=150)
        assert engine.score(*engine.prepare(patient)) == engine.assess(patient)

    def test_prepare_rejects_missing_sex_when_strict(self, engine, make_patient):
        with pytest.raises(AssessmentInputError):
            engine.prepare(make_patient(sex=None))


class TestConfiguration:

    def test_acute_symptoms_raise_impact_when_enabled(self, make_patient):
        patient = make_patient(shortness_of_breath_level="severe")
        default = CardiacTriageEngine(TriageConfig(include_acute_symptoms=False)).assess(patient)
        acute = CardiacTriageEngine(TriageConfig(include_acute_symptoms=True)).assess(patient)
        assert default.impact_score == 1
        assert acute.impact_score == 3

    def test_assess_patient_shortcut(self, make_patient):
        result = assess_patient(make_patient(), TriageConfig(strict_demographics=True))
        assert result.risk_category is RiskCategory.LOW

    def test_to_dict_is_camel_case(self, engine, make_patient):
        data = engine.assess(make_patient()).to_dict()
        for key in ("likelihoodScore", "impactScore", "finalRiskScore", "riskCategory",
                    "recommendedAction", "heatmapPosition", "recommendations"):
            assert key in data
