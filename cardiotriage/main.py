"""
Cardiac Triage Service - FastAPI Application

API endpoints for:
- Running cardiac risk assessments
- Browsing the assessment history
- Trend analytics over past assessments
- Form reference options
"""
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import Dict, Any

from cardiotriage.config import API_VERSION, HISTORY_LIMIT, TriageConfig
from cardiotriage.core.analytics import (
    AssessmentHistory,
    AssessmentRecord,
    risk_category_distribution,
    risk_factor_analysis,
    risk_trend_stats,
    vital_sign_trends,
)
from cardiotriage.core.triage import (
    BreathlessnessLevel,
    CardiacTriageEngine,
    ChestPainType,
    RiskCategory,
    RiskFactors,
    Sex,
)
from cardiotriage.core.triage.recommendations import RECOMMENDED_ACTIONS
from cardiotriage.models import (
    AssessmentListResponse,
    AssessmentRequest,
    AssessmentResponse,
    AssessmentSummary,
    HealthResponse,
    ReferenceOptionsResponse,
)
from cardiotriage.utils import HistoryError, TriageError, get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)

# ---- Engine and history singletons ----
_config = TriageConfig()
_engine = CardiacTriageEngine(_config)
_history = AssessmentHistory(limit=HISTORY_LIMIT)
START_TIME = datetime.now()


# ---- Application Lifespan ----

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Expose the engine and history on app state: startup → yield → shutdown."""
    app.state.engine = _engine
    app.state.history = _history
    logger.info(
        f"Cardiac Triage API ready (strict_demographics={_config.strict_demographics}, "
        f"acute_symptom_impact={_config.include_acute_symptoms}, history_limit={_history.limit})"
    )
    yield
    logger.info("Cardiac Triage API shut down.")


# ---- FastAPI Application ----

app = FastAPI(
    title="Cardiac Triage API",
    description="Rule-based cardiac risk triage with a 5×5 likelihood/impact matrix",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TriageError)
async def triage_error_handler(request: Request, exc: TriageError):
    status_code = 404 if isinstance(exc, HistoryError) else 422
    logger.warning(f"{request.method} {request.url.path} failed: [{exc.code}] {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


# ---- Utility Functions ----

def _health() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        timestamp=datetime.now().isoformat(),
        uptime_seconds=(datetime.now() - START_TIME).total_seconds(),
        config={
            "strict_demographics": _config.strict_demographics,
            "acute_symptom_impact": _config.include_acute_symptoms,
            "history_limit": _history.limit,
        },
    )


def _summary(record: AssessmentRecord) -> AssessmentSummary:
    return AssessmentSummary(
        assessment_id=record.id,
        timestamp=record.date.isoformat(),
        final_risk_score=record.final_risk_score,
        risk_category=record.risk_category.value,
        recommended_action=record.recommended_action,
    )


# ---- API Endpoints ----

@app.get("/", response_model=HealthResponse, tags=["Health"])
async def root():
    """API root - health check."""
    return _health()


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return _health()


@app.post("/api/v1/assessments", response_model=AssessmentResponse, tags=["Assessments"])
async def create_assessment(request: AssessmentRequest):
    """
    Run a cardiac triage assessment and store it in the history.

    Missing age or sex is rejected with 422 when strict demographics are on.
    """
    try:
        patient = request.to_patient()
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    clean, plausibility = _engine.prepare(patient)
    result = _engine.score(clean, plausibility)
    record = _history.add(AssessmentRecord.from_result(clean, result))

    logger.info(f"Assessment {record.id}: {result.risk_category.value} ({result.final_risk_score}/25)")
    return AssessmentResponse.from_result(record.id, record.date.isoformat(), result)


@app.post("/api/v1/assessments/validate", tags=["Assessments"])
async def validate_assessment(request: AssessmentRequest) -> Dict[str, Any]:
    """Plausibility check only; nothing is scored or stored."""
    try:
        patient = request.to_patient()
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _engine.validate(patient).to_dict()


@app.get("/api/v1/assessments", response_model=AssessmentListResponse, tags=["Assessments"])
async def list_assessments():
    """List stored assessments, oldest first."""
    records = _history.records()
    return AssessmentListResponse(
        total=len(records),
        assessments=[_summary(r) for r in records],
    )


@app.get("/api/v1/assessments/{assessment_id}", tags=["Assessments"])
async def get_assessment(assessment_id: str) -> Dict[str, Any]:
    """Full stored record for one assessment."""
    return _history.get(assessment_id).to_dict()


@app.get("/api/v1/analytics/trends", tags=["Analytics"])
async def get_risk_trends() -> Dict[str, Any]:
    """Average risk and trend direction across the history."""
    return risk_trend_stats(_history.records()).to_dict()


@app.get("/api/v1/analytics/vitals", tags=["Analytics"])
async def get_vital_trends() -> Dict[str, Any]:
    """Vital-sign time series with normal-range flags."""
    trends = vital_sign_trends(_history.records())
    return {name: [point.to_dict() for point in series] for name, series in trends.items()}


@app.get("/api/v1/analytics/risk-factors", tags=["Analytics"])
async def get_risk_factor_analysis() -> Dict[str, Any]:
    """Risk factors grouped into contributors, improved and stable."""
    analysis = risk_factor_analysis(_history.records())
    return {bucket: [c.to_dict() for c in items] for bucket, items in analysis.items()}


@app.get("/api/v1/analytics/distribution", tags=["Analytics"])
async def get_category_distribution() -> Dict[str, int]:
    """Number of stored assessments per risk category."""
    return risk_category_distribution(_history.records())


@app.get("/api/v1/reference/options", response_model=ReferenceOptionsResponse, tags=["Reference"])
async def get_reference_options():
    """Enumerations used to populate the assessment form."""
    return ReferenceOptionsResponse(
        sexes=[s.value for s in Sex],
        chest_pain_types=[c.value for c in ChestPainType],
        shortness_of_breath_levels=[b.value for b in BreathlessnessLevel],
        risk_factors=list(RiskFactors().to_dict()),
        risk_categories=[c.value for c in RiskCategory],
        recommended_actions={c.value: action for c, action in RECOMMENDED_ACTIONS.items()},
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("cardiotriage.main:app", host="0.0.0.0", port=8000, reload=False)
