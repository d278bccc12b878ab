"""
Unit Tests for the Likelihood and Impact Scorers

Point table, band edges, per-vital tiers and the max rule.
"""
import pytest

from cardiotriage.core.triage import ImpactLevel, LikelihoodLevel, RiskFactors
from cardiotriage.core.triage.likelihood import (
    band_likelihood,
    history_points,
    likelihood_points,
    score_likelihood,
    symptom_points,
)
from cardiotriage.core.triage.impact import (
    acute_symptom_tier,
    diastolic_tier,
    heart_rate_tier,
    oxygen_tier,
    score_impact,
    systolic_tier,
    temperature_tier,
    vital_tiers,
)


class TestLikelihood:
    """Tests for the likelihood scorer."""

    def test_no_findings_is_improbable(self, make_patient):
        score, level = score_likelihood(make_patient())
        assert score == 1
        assert level is LikelihoodLevel.IMPROBABLE

    def test_classic_presentation_is_very_probable(self, make_patient):
        patient = make_patient(
            age=60,
            sex=None,
            chest_pain_type="typical",
            chest_pain_exertional=True,
            shortness_of_breath_level="severe",
            syncope=True,
        )
        score, level = score_likelihood(patient)
        assert score == 5
        assert level is LikelihoodLevel.VERY_PROBABLE

    def test_classic_presentation_with_sex(self, make_patient):
        for sex in ("male", "female"):
            patient = make_patient(
                age=60,
                sex=sex,
                chest_pain_type="typical",
                chest_pain_exertional=True,
                shortness_of_breath_level="severe",
                syncope=True,
            )
            assert score_likelihood(patient)[0] == 5

    @pytest.mark.parametrize("points,band", [
        (1.0, 1), (1.5, 2), (3.0, 2), (3.5, 3), (5.0, 3), (5.5, 4), (7.0, 4), (7.5, 5), (20.0, 5),
    ])
    def test_band_edges(self, points, band):
        assert band_likelihood(points) == band

    def test_exertional_flag_without_pain_scores_nothing(self, make_patient):
        patient = make_patient(chest_pain_exertional=True, chest_pain_radiation=True)
        assert likelihood_points(patient) == 1.0

    def test_palpitations_with_tachycardia(self, make_patient):
        assert symptom_points(make_patient(palpitations=True)) == 0.5
        assert symptom_points(make_patient(palpitations=True, heart_rate=130)) == 1.0

    def test_demographic_ages(self, make_patient):
        assert history_points(make_patient(age=54, sex="male")) == 0.0
        assert history_points(make_patient(age=55, sex="male")) == 1.0
        assert history_points(make_patient(age=64, sex="female")) == 0.0
        assert history_points(make_patient(age=65, sex="female")) == 1.0

    def test_missing_demographics_earn_no_points(self, make_patient):
        assert history_points(make_patient(age=None, sex="male")) == 0.0
        assert history_points(make_patient(age=80, sex=None)) == 0.0

    def test_major_risk_factors(self, make_patient):
        two_major = RiskFactors(hypertension=True, diabetes=True)
        minor_only = RiskFactors(obesity=True, family_history=True)
        assert history_points(make_patient(risk_factors=two_major)) == 1.0
        assert history_points(make_patient(risk_factors=minor_only)) == 0.0

    def test_adding_evidence_never_lowers_score(self, make_patient):
        flags = [
            "chest_pain_radiation", "chest_pain_exertional", "palpitations", "syncope",
            "fainting", "neurological_symptoms", "leg_swelling", "sweating", "dizziness", "nausea",
        ]
        base = make_patient(chest_pain_type="atypical")
        base_score = score_likelihood(base)[0]
        for flag in flags:
            patient = make_patient(chest_pain_type="atypical", **{flag: True})
            assert score_likelihood(patient)[0] >= base_score, flag

    def test_breathlessness_is_ordered(self, make_patient):
        scores = [
            likelihood_points(make_patient(shortness_of_breath_level=level))
            for level in ("none", "mild", "moderate", "severe")
        ]
        assert scores == sorted(scores)


class TestVitalTiers:
    """Tests for the per-vital impact tiers."""

    @pytest.mark.parametrize("sbp,tier", [
        (85, 5), (89, 5), (90, 1), (129, 1), (130, 2), (140, 3), (159, 3), (160, 4), (179, 4), (180, 5),
    ])
    def test_systolic(self, sbp, tier):
        assert systolic_tier(sbp) == tier

    @pytest.mark.parametrize("dbp,tier", [(75, 1), (80, 2), (90, 3), (110, 4), (120, 5)])
    def test_diastolic(self, dbp, tier):
        assert diastolic_tier(dbp) == tier

    @pytest.mark.parametrize("hr,tier", [
        (39, 5), (40, 4), (49, 4), (50, 2), (59, 2), (60, 1), (100, 1), (101, 3), (120, 3), (121, 4), (130, 4), (131, 5),
    ])
    def test_heart_rate(self, hr, tier):
        assert heart_rate_tier(hr) == tier

    @pytest.mark.parametrize("spo2,tier", [(99, 1), (95, 1), (94, 3), (90, 3), (89, 5)])
    def test_oxygen(self, spo2, tier):
        assert oxygen_tier(spo2) == tier

    def test_temperature(self):
        assert temperature_tier(34.9) == 4
        assert temperature_tier(36.8) == 1
        assert temperature_tier(37.6) == 2
        assert temperature_tier(38.5) == 2
        assert temperature_tier(38.6) == 3
        assert temperature_tier(40.0) == 4

    def test_fever_with_cardiorespiratory_symptoms(self):
        assert temperature_tier(38.6, cardiorespiratory_symptoms=True) == 4
        assert temperature_tier(40.0, cardiorespiratory_symptoms=True) == 5
        assert temperature_tier(38.0, cardiorespiratory_symptoms=True) == 2

    def test_unmeasured_vitals_are_omitted(self, make_patient):
        assert vital_tiers(make_patient()) == {}
        assert vital_tiers(make_patient(heart_rate=72)) == {"heart_rate": 1}


class TestImpact:
    """Tests for the impact scorer."""

    def test_no_vitals_is_negligible(self, make_patient):
        score, level = score_impact(make_patient())
        assert score == 1
        assert level is ImpactLevel.NEGLIGIBLE

    def test_normal_vitals_are_negligible(self, make_patient, normal_vitals):
        assert score_impact(make_patient(**normal_vitals))[0] == 1

    def test_max_rule_over_severe_vitals(self, make_patient):
        patient = make_patient(systolic_bp=190, diastolic_bp=110, heart_rate=130, oxygen_saturation=88)
        score, level = score_impact(patient)
        assert score == 5
        assert level is ImpactLevel.CRITICAL

    def test_single_worst_vital_wins(self, make_patient, normal_vitals):
        vitals = dict(normal_vitals, systolic_bp=165)
        assert score_impact(make_patient(**vitals))[0] == 4

    def test_acute_symptoms_ignored_by_default(self, make_patient):
        patient = make_patient(shortness_of_breath_level="severe", leg_swelling=True)
        assert score_impact(patient)[0] == 1

    def test_acute_symptoms_when_enabled(self, make_patient):
        patient = make_patient(shortness_of_breath_level="severe")
        assert score_impact(patient, include_acute_symptoms=True)[0] == 3

    def test_acute_symptom_tiers(self, make_patient):
        assert acute_symptom_tier(make_patient()) == 1
        assert acute_symptom_tier(make_patient(leg_swelling=True)) == 2
        assert acute_symptom_tier(make_patient(shortness_of_breath_level="moderate")) == 2
        assert acute_symptom_tier(make_patient(chest_pain_type="sharp", chest_pain_duration_minutes=30)) == 3
        assert acute_symptom_tier(make_patient(chest_pain_duration_minutes=30)) == 1
