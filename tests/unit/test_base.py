"""
Unit Tests for Triage Base Types

Parsing of form labels, camelCase payloads and result serialisation.
"""
import pytest

from cardiotriage.core.triage.base import (
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
    SAFETY_MESSAGE,
)


class TestEnumParsing:
    """Tests for label parsing."""

    def test_sex_aliases(self):
        assert Sex.parse("M") is Sex.MALE
        assert Sex.parse("Female") is Sex.FEMALE
        assert Sex.parse("") is None
        assert Sex.parse(None) is None

    def test_sex_unknown_raises(self):
        with pytest.raises(ValueError):
            Sex.parse("unknown-value")

    def test_chest_pain_form_labels(self):
        assert ChestPainType.parse("Sharp/stabbing pain") is ChestPainType.SHARP
        assert ChestPainType.parse("Crushing pressure") is ChestPainType.CRUSHING
        assert ChestPainType.parse("Tightness in chest") is ChestPainType.PRESSURE
        assert ChestPainType.parse("typical") is ChestPainType.TYPICAL
        assert ChestPainType.parse("Atypical") is ChestPainType.ATYPICAL

    def test_chest_pain_absent(self):
        assert ChestPainType.parse(None) is ChestPainType.NONE
        assert ChestPainType.parse("") is ChestPainType.NONE
        assert ChestPainType.parse("No chest pain") is ChestPainType.NONE
        assert ChestPainType.parse("None reported") is ChestPainType.NONE
        assert ChestPainType.parse("nothing") is ChestPainType.NONE

    def test_non_specific_pain_is_not_none(self):
        assert ChestPainType.parse("non-specific") is ChestPainType.OTHER

    def test_anginal_types(self):
        assert ChestPainType.TYPICAL.is_anginal
        assert ChestPainType.PRESSURE.is_anginal
        assert not ChestPainType.SHARP.is_anginal
        assert not ChestPainType.NONE.is_present

    def test_breathlessness_labels(self):
        assert BreathlessnessLevel.parse("Severe (at rest)") is BreathlessnessLevel.SEVERE
        assert BreathlessnessLevel.parse("Moderate") is BreathlessnessLevel.MODERATE
        assert BreathlessnessLevel.parse("Mild (on exertion)") is BreathlessnessLevel.MILD
        assert BreathlessnessLevel.parse(None) is BreathlessnessLevel.NONE
        assert BreathlessnessLevel.parse("None at all") is BreathlessnessLevel.NONE

    def test_breathlessness_unknown_raises(self):
        with pytest.raises(ValueError):
            BreathlessnessLevel.parse("sometimes")

    def test_level_labels(self):
        assert LikelihoodLevel.from_score(1) is LikelihoodLevel.IMPROBABLE
        assert LikelihoodLevel.from_score(5) is LikelihoodLevel.VERY_PROBABLE
        assert ImpactLevel.from_score(4) is ImpactLevel.SIGNIFICANT
        assert ImpactLevel.CRITICAL.value == "Critical"


class TestRiskFactors:

    def test_major_count_excludes_minor_factors(self):
        factors = RiskFactors(obesity=True, family_history=True)
        assert factors.major_count() == 0
        assert factors.active() == ["obesity", "family_history"]

    def test_from_dict_aliases(self):
        factors = RiskFactors.from_dict({"hasDiabetes": True, "ckd": "yes", "smoking": False})
        assert factors.diabetes
        assert factors.chronic_kidney_disease
        assert not factors.smoking


class TestPatientAssessmentInput:

    def test_defaults_are_absent(self):
        patient = PatientAssessmentInput(age=50, sex="female")
        assert patient.sex is Sex.FEMALE
        assert not patient.has_chest_pain
        assert patient.risk_factors == RiskFactors()

    def test_syncope_or_fainting(self):
        assert PatientAssessmentInput(age=50, sex="male", fainting=True).has_syncope

    def test_from_dict_camel_case(self):
        patient = PatientAssessmentInput.from_dict({
            "age": "60",
            "sex": "Male",
            "chestPainType": "typical",
            "chestPainDuration": "15",
            "shortnessOfBreath": "severe",
            "systolicBP": "150",
            "temperature": "",
            "hasDiabetes": True,
            "riskFactors": {"smoking": True},
        })
        assert patient.age == 60
        assert patient.sex is Sex.MALE
        assert patient.chest_pain_type is ChestPainType.TYPICAL
        assert patient.chest_pain_duration_minutes == 15
        assert patient.shortness_of_breath_level is BreathlessnessLevel.SEVERE
        assert patient.systolic_bp == 150
        assert patient.temperature is None
        assert patient.risk_factors.diabetes
        assert patient.risk_factors.smoking

    def test_from_dict_empty_demographics(self):
        patient = PatientAssessmentInput.from_dict({"age": "", "sex": ""})
        assert patient.age is None
        assert patient.sex is None

    @pytest.mark.parametrize("reading", ["inf", "-inf", float("inf")])
    def test_from_dict_infinite_reading_is_absent(self, reading):
        patient = PatientAssessmentInput.from_dict({"age": 50, "sex": "male", "heartRate": reading})
        assert patient.heart_rate is None

    def test_from_dict_nan_reading_is_absent(self):
        patient = PatientAssessmentInput.from_dict({"age": 50, "sex": "male", "systolicBP": "nan"})
        assert patient.systolic_bp is None


class TestAssessmentResult:

    def test_to_dict_keys(self):
        result = AssessmentResult(
            likelihood_score=2,
            likelihood_level=LikelihoodLevel.REMOTE,
            impact_score=3,
            impact_level=ImpactLevel.MODERATE,
            final_risk_score=6,
            risk_category=RiskCategory.MILD,
            heatmap_position=HeatmapPosition(x=1, y=2),
            recommended_action="Monitor symptoms and follow heart-healthy habits",
            explanation="...",
        )
        data = result.to_dict()
        assert data["finalRiskScore"] == 6
        assert data["riskCategory"] == "Mild"
        assert data["likelihoodLevel"] == "Remote"
        assert data["heatmapPosition"] == {"x": 1, "y": 2}
        assert data["safetyMessage"] == SAFETY_MESSAGE
        assert data["inputWarnings"] == []
