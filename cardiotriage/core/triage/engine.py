"""
Cardiac Triage Engine

Central pipeline. Takes one PatientAssessmentInput and returns one
AssessmentResult:

    prepare: plausibility check → sanitise
    score:   likelihood + impact → risk matrix
    → recommended action, explanation and recommendations

Usage:
    from cardiotriage.core.triage import CardiacTriageEngine, PatientAssessmentInput

    engine = CardiacTriageEngine()
    result = engine.assess(PatientAssessmentInput(age=60, sex="male"))
    print(result.risk_category, result.recommended_action)
"""
from __future__ import annotations

from typing import Optional, Tuple

from cardiotriage.config import TriageConfig
from cardiotriage.core import validation
from cardiotriage.core.validation import PlausibilityResult
from cardiotriage.utils import AssessmentInputError, get_logger
from .base import AssessmentResult, PatientAssessmentInput
from .classifier import classify_risk
from .impact import score_impact
from .likelihood import score_likelihood
from .recommendations import (
    generate_explanation,
    generate_recommendations,
    recommended_action,
)

logger = get_logger(__name__)


class CardiacTriageEngine:
    """
    Transforms patient assessment input into a triage result.

    Holds no per-assessment state, so one instance can serve concurrent requests.
    Identical input always yields an identical result.
    """

    def __init__(self, config: Optional[TriageConfig] = None):
        self.config = config or TriageConfig()

    def validate(self, patient: PatientAssessmentInput) -> PlausibilityResult:
        """
        Check the input without scoring it.

        Never raises; the caller decides how to surface the violations.
        """
        return validation.check(patient)

    def prepare(
        self, patient: PatientAssessmentInput,
    ) -> Tuple[PatientAssessmentInput, PlausibilityResult]:
        """
        Check and sanitise the input ahead of scoring.

        Returns:
            (sanitised input, plausibility findings on the raw input).

        Raises:
            AssessmentInputError: age or sex is missing and the engine runs
                with strict demographics.
        """
        plausibility = validation.check(patient)
        missing = plausibility.missing_required
        if missing and self.config.strict_demographics:
            raise AssessmentInputError(
                f"Required field(s) missing: {', '.join(missing)}",
                fields=missing,
            )
        if missing:
            logger.warning(
                f"CardiacTriageEngine: missing {', '.join(missing)}; "
                "scoring without demographic risk"
            )
        return validation.sanitize(patient), plausibility

    def score(
        self,
        clean: PatientAssessmentInput,
        plausibility: PlausibilityResult,
    ) -> AssessmentResult:
        """Score an input already passed through `prepare`."""
        likelihood, likelihood_level = score_likelihood(clean)
        impact, impact_level = score_impact(
            clean, include_acute_symptoms=self.config.include_acute_symptoms
        )
        matrix = classify_risk(likelihood, impact)
        category = matrix.risk_category

        result = AssessmentResult(
            likelihood_score=likelihood,
            likelihood_level=likelihood_level,
            impact_score=impact,
            impact_level=impact_level,
            final_risk_score=matrix.final_risk_score,
            risk_category=category,
            heatmap_position=matrix.heatmap_position,
            recommended_action=recommended_action(category),
            explanation=generate_explanation(
                clean, likelihood, impact, matrix.final_risk_score, category
            ),
            recommendations=generate_recommendations(category, matrix.final_risk_score, clean),
            input_warnings=plausibility.messages(),
        )

        logger.info(
            f"CardiacTriageEngine: likelihood={likelihood} ({likelihood_level.value}), "
            f"impact={impact} ({impact_level.value}), "
            f"final={matrix.final_risk_score} ({category.value})"
        )
        return result

    def assess(self, patient: PatientAssessmentInput) -> AssessmentResult:
        """
        Run a full assessment.

        Args:
            patient: Assessment input. Optional fields may be absent.

        Returns:
            AssessmentResult with scores, category, action and advice.

        Raises:
            AssessmentInputError: age or sex is missing and the engine runs
                with strict demographics.
        """
        return self.score(*self.prepare(patient))

def assess_patient(
    patient: PatientAssessmentInput,
    config: Optional[TriageConfig] = None,
) -> AssessmentResult:
    """Functional shortcut for `CardiacTriageEngine(config).assess(patient)`."""
    return CardiacTriageEngine(config).assess(patient)
