"""
Risk Classifier

Combines the likelihood and impact scores into the 5×5 risk matrix.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .base import HeatmapPosition, RiskCategory

MIN_SCORE = 1
MAX_SCORE = 5

# Upper edge (inclusive) of each category band over likelihood × impact
CATEGORY_BANDS: List[Tuple[int, RiskCategory]] = [
    (5,  RiskCategory.LOW),
    (10, RiskCategory.MILD),
    (15, RiskCategory.MODERATE),
    (20, RiskCategory.HIGH),
    (25, RiskCategory.CRITICAL),
]


@dataclass(frozen=True)
class RiskClassification:
    final_risk_score: int
    risk_category: RiskCategory
    heatmap_position: HeatmapPosition


def categorize(final_risk_score: int) -> RiskCategory:
    """Map a 1–25 matrix score to its category band."""
    for upper, category in CATEGORY_BANDS:
        if final_risk_score <= upper:
            return category
    raise ValueError(f"Risk score {final_risk_score} is outside 1–25")


def classify_risk(likelihood_score: int, impact_score: int) -> RiskClassification:
    """
    Place an assessment on the risk matrix.

    Raises:
        ValueError: if either score is outside 1–5. The scorers never
            produce such values.
    """
    for name, value in (("likelihood", likelihood_score), ("impact", impact_score)):
        if not MIN_SCORE <= value <= MAX_SCORE:
            raise ValueError(f"{name} score must be within 1–5, got {value}")

    final = likelihood_score * impact_score
    return RiskClassification(
        final_risk_score=final,
        risk_category=categorize(final),
        heatmap_position=HeatmapPosition(x=likelihood_score - 1, y=impact_score - 1),
    )
