"""
Analytics Module

Assessment history and the trend summaries built from it.
"""
from .history import AssessmentHistory, AssessmentRecord
from .trends import (
    RiskFactorContribution,
    RiskTrendStats,
    TrendDirection,
    VitalSignTrend,
    risk_category_distribution,
    risk_factor_analysis,
    risk_trend_stats,
    vital_sign_trends,
)

__all__ = [
    "AssessmentHistory",
    "AssessmentRecord",
    "RiskFactorContribution",
    "RiskTrendStats",
    "TrendDirection",
    "VitalSignTrend",
    "risk_category_distribution",
    "risk_factor_analysis",
    "risk_trend_stats",
    "vital_sign_trends",
]
