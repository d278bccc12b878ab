from .assessment import (
    RiskFactorsInput,
    AssessmentRequest,
    HeatmapResponse,
    AssessmentResponse,
    AssessmentSummary,
    AssessmentListResponse,
    ReferenceOptionsResponse,
    HealthResponse,
)

__all__ = [
    "RiskFactorsInput",
    "AssessmentRequest",
    "HeatmapResponse",
    "AssessmentResponse",
    "AssessmentSummary",
    "AssessmentListResponse",
    "ReferenceOptionsResponse",
    "HealthResponse",
]
