"""
Assessment History

Bounded in-memory store of completed assessments. Each record snapshots the
scores together with the vitals, symptoms and risk factors that produced
them, so the trend analytics never need the original input again.
"""
from __future__ import annotations

import threading
import uuid
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Optional

from cardiotriage.config import HISTORY_LIMIT
from cardiotriage.core.triage.base import (
    AssessmentResult,
    PatientAssessmentInput,
    RiskCategory,
)
from cardiotriage.utils import HistoryError, get_logger

logger = get_logger(__name__)


@dataclass
class AssessmentRecord:
    """One stored assessment."""
    id: str
    date: datetime
    likelihood_score: int
    impact_score: int
    final_risk_score: int
    likelihood_level: str
    impact_level: str
    risk_category: RiskCategory
    recommended_action: str
    age: Optional[int] = None
    sex: Optional[str] = None
    systolic_bp: Optional[int] = None
    diastolic_bp: Optional[int] = None
    heart_rate: Optional[int] = None
    oxygen_saturation: Optional[int] = None
    temperature: Optional[float] = None
    symptoms: Dict[str, Any] = field(default_factory=dict)
    risk_factors: Dict[str, bool] = field(default_factory=dict)

    @classmethod
    def from_result(
        cls,
        patient: PatientAssessmentInput,
        result: AssessmentResult,
        date: Optional[datetime] = None,
    ) -> "AssessmentRecord":
        return cls(
            id=uuid.uuid4().hex,
            date=date or datetime.now(timezone.utc),
            likelihood_score=result.likelihood_score,
            impact_score=result.impact_score,
            final_risk_score=result.final_risk_score,
            likelihood_level=result.likelihood_level.value,
            impact_level=result.impact_level.value,
            risk_category=result.risk_category,
            recommended_action=result.recommended_action,
            age=patient.age,
            sex=patient.sex.value if patient.sex else None,
            systolic_bp=patient.systolic_bp,
            diastolic_bp=patient.diastolic_bp,
            heart_rate=patient.heart_rate,
            oxygen_saturation=patient.oxygen_saturation,
            temperature=patient.temperature,
            symptoms=patient.symptoms(),
            risk_factors=patient.risk_factors.to_dict(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "likelihoodScore": self.likelihood_score,
            "impactScore": self.impact_score,
            "finalRiskScore": self.final_risk_score,
            "likelihoodLevel": self.likelihood_level,
            "impactLevel": self.impact_level,
            "riskCategory": self.risk_category.value,
            "recommendedAction": self.recommended_action,
            "age": self.age,
            "sex": self.sex,
            "systolicBP": self.systolic_bp,
            "diastolicBP": self.diastolic_bp,
            "heartRate": self.heart_rate,
            "oxygenSaturation": self.oxygen_saturation,
            "temperature": self.temperature,
            "symptoms": dict(self.symptoms),
            "riskFactors": dict(self.risk_factors),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AssessmentRecord":
        """Rebuild a record from `to_dict()` output."""
        record_id = str(data.get("id", "unknown")) if isinstance(data, dict) else "unknown"
        try:
            return cls(
                id=str(data["id"]),
                date=datetime.fromisoformat(data["date"]),
                likelihood_score=int(data["likelihoodScore"]),
                impact_score=int(data["impactScore"]),
                final_risk_score=int(data["finalRiskScore"]),
                likelihood_level=str(data["likelihoodLevel"]),
                impact_level=str(data["impactLevel"]),
                risk_category=RiskCategory(data["riskCategory"]),
                recommended_action=str(data["recommendedAction"]),
                age=data.get("age"),
                sex=data.get("sex"),
                systolic_bp=data.get("systolicBP"),
                diastolic_bp=data.get("diastolicBP"),
                heart_rate=data.get("heartRate"),
                oxygen_saturation=data.get("oxygenSaturation"),
                temperature=data.get("temperature"),
                symptoms=dict(data.get("symptoms") or {}),
                risk_factors=dict(data.get("riskFactors") or {}),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise HistoryError(f"Malformed assessment record: {e}", record_id=record_id) from e


class AssessmentHistory:
    """
    Keeps the most recent `limit` records, oldest first.

    Adding beyond the limit drops the oldest record.
    """

    def __init__(self, limit: int = HISTORY_LIMIT):
        if limit < 1:
            raise ValueError(f"History limit must be positive, got {limit}")
        self.limit = limit
        self._records: Deque[AssessmentRecord] = deque(maxlen=limit)
        self._lock = threading.Lock()

    def add(self, record: AssessmentRecord) -> AssessmentRecord:
        with self._lock:
            if len(self._records) == self.limit:
                logger.debug(f"History full ({self.limit}); dropping {self._records[0].id}")
            self._records.append(record)
        return record

    def get(self, record_id: str) -> AssessmentRecord:
        with self._lock:
            for record in self._records:
                if record.id == record_id:
                    return record
        raise HistoryError(f"Assessment not found: {record_id}", record_id=record_id)

    def records(self) -> List[AssessmentRecord]:
        with self._lock:
            return list(self._records)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        return len(self._records)
