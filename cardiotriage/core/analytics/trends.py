"""
Assessment Trend Analytics

Summaries over the assessment history for the progress dashboard:
risk trend, vital-sign series, risk-factor contributions and the category
distribution. All functions take records oldest first and never mutate them.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from cardiotriage.core.triage.base import RiskCategory
from cardiotriage.core.triage import impact
from .history import AssessmentRecord


class TrendDirection(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    WORSENING = "worsening"


# Recent window compared against everything older
RECENT_WINDOW = 3
# Relative change (%) beyond which the trend is no longer "stable"
TREND_CHANGE_THRESHOLD = 5.0

# Series name → record attribute
_VITAL_ATTRIBUTES = {
    "systolicBP":       "systolic_bp",
    "diastolicBP":      "diastolic_bp",
    "heartRate":        "heart_rate",
    "oxygenSaturation": "oxygen_saturation",
    "temperature":      "temperature",
}

TOP_CONTRIBUTORS = 5
TOP_IMPROVED = 3
TOP_STABLE = 3


@dataclass
class RiskTrendStats:
    avg_risk_score: float
    trend_direction: TrendDirection
    change_percent: float
    total_assessments: int
    most_common_category: str
    last_assessment_date: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "avgRiskScore": round(self.avg_risk_score, 2),
            "trendDirection": self.trend_direction.value,
            "changePercent": round(self.change_percent, 2),
            "totalAssessments": self.total_assessments,
            "mostCommonCategory": self.most_common_category,
            "lastAssessmentDate": (
                self.last_assessment_date.isoformat() if self.last_assessment_date else None
            ),
        }


@dataclass
class VitalSignTrend:
    date: datetime
    value: float
    is_normal: bool

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date.isoformat(), "value": self.value, "isNormal": self.is_normal}


@dataclass
class RiskFactorContribution:
    factor_name: str
    occurrences: int
    status: str          # contributor | improved | stable
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "factorName": self.factor_name,
            "occurrences": self.occurrences,
            "status": self.status,
            "description": self.description,
        }


# ── Risk trend ────────────────────────────────────────────────────────────────

def risk_trend_stats(records: Sequence[AssessmentRecord]) -> RiskTrendStats:
    """
    Average score and direction of travel across the history.

    The mean of the last three scores is compared with the mean of all older
    ones (with two records, last vs first). With exactly three records there
    is nothing older to compare and the trend is stable.
    """
    if not records:
        return RiskTrendStats(
            avg_risk_score=0.0,
            trend_direction=TrendDirection.STABLE,
            change_percent=0.0,
            total_assessments=0,
            most_common_category="N/A",
        )

    scores = np.array([r.final_risk_score for r in records], dtype=float)
    direction = TrendDirection.STABLE
    change = 0.0

    if len(scores) >= 2:
        recent_count = 1 if len(scores) < RECENT_WINDOW else RECENT_WINDOW
        recent = scores[-recent_count:]
        older = scores[:-recent_count] if len(scores) > recent_count else recent
        older_avg = float(np.mean(older))
        if older_avg > 0:
            change = (float(np.mean(recent)) - older_avg) / older_avg * 100
            if change < -TREND_CHANGE_THRESHOLD:
                direction = TrendDirection.IMPROVING
            elif change > TREND_CHANGE_THRESHOLD:
                direction = TrendDirection.WORSENING

    # Ties go to the category seen first
    most_common = Counter(r.risk_category.value for r in records).most_common(1)[0][0]

    return RiskTrendStats(
        avg_risk_score=float(np.mean(scores)),
        trend_direction=direction,
        change_percent=abs(change),
        total_assessments=len(records),
        most_common_category=most_common,
        last_assessment_date=records[-1].date,
    )


# ── Vital signs ───────────────────────────────────────────────────────────────

def vital_sign_trends(records: Sequence[AssessmentRecord]) -> Dict[str, List[VitalSignTrend]]:
    """Per-vital time series; records without a reading are skipped."""
    trends: Dict[str, List[VitalSignTrend]] = {name: [] for name in _VITAL_ATTRIBUTES}
    for record in records:
        for name, attribute in _VITAL_ATTRIBUTES.items():
            value = getattr(record, attribute)
            if value is None:
                continue
            trends[name].append(VitalSignTrend(
                date=record.date,
                value=float(value),
                is_normal=impact.is_normal(attribute, value),
            ))
    return trends


# ── Risk factors ──────────────────────────────────────────────────────────────

def _format_factor_name(key: str) -> str:
    text = key.replace("_", " ").strip()
    return text[:1].upper() + text[1:]


def _factor_description(status: str) -> str:
    if status == "improved":
        return "Great! This risk factor has been addressed."
    if status == "contributor":
        return "Currently affecting your heart health."
    return "Well managed and stable."


def risk_factor_analysis(
    records: Sequence[AssessmentRecord],
) -> Dict[str, List[RiskFactorContribution]]:
    """
    Classify every risk factor ever reported.

    improved     – present in the second-to-last record, absent in the last
    contributor  – present in at least two of the last three records
                   (any presence when fewer than three records exist)
    stable       – everything else
    """
    analysis: Dict[str, List[RiskFactorContribution]] = {
        "contributors": [], "improved": [], "stable": [],
    }
    if not records:
        return analysis

    presence: Dict[str, List[bool]] = {}
    for record in records:
        for factor, value in record.risk_factors.items():
            presence.setdefault(factor, []).append(bool(value))

    for factor, timeline in presence.items():
        occurrences = sum(timeline)
        if occurrences == 0:
            continue

        if len(timeline) >= RECENT_WINDOW:
            recently_present = sum(timeline[-RECENT_WINDOW:]) >= 2
        else:
            recently_present = occurrences > 0
        improving = len(timeline) >= 2 and timeline[-2] and not timeline[-1]

        if improving:
            status, bucket = "improved", "improved"
        elif recently_present:
            status, bucket = "contributor", "contributors"
        else:
            status, bucket = "stable", "stable"

        analysis[bucket].append(RiskFactorContribution(
            factor_name=_format_factor_name(factor),
            occurrences=occurrences,
            status=status,
            description=_factor_description(status),
        ))

    limits = {"contributors": TOP_CONTRIBUTORS, "improved": TOP_IMPROVED, "stable": TOP_STABLE}
    for bucket, items in analysis.items():
        items.sort(key=lambda c: c.occurrences, reverse=True)
        del items[limits[bucket]:]
    return analysis


# ── Categories ────────────────────────────────────────────────────────────────

def risk_category_distribution(records: Sequence[AssessmentRecord]) -> Dict[str, int]:
    """Count of records per category, every category present (zero if unseen)."""
    distribution = {category.value: 0 for category in RiskCategory}
    for record in records:
        distribution[record.risk_category.value] += 1
    return distribution
