"""
Pydantic models for the triage API.

Request bodies accept raw form values; range checks and "unknown" handling
happen in the engine so out-of-range readings are reported as warnings
instead of rejecting the whole assessment. Fields accept both snake_case and
the mobile client's camelCase names.
"""
from typing import Dict, Any, List, Optional

from pydantic import AliasChoices, BaseModel, Field

from cardiotriage.core.triage import AssessmentResult, PatientAssessmentInput


class RiskFactorsInput(BaseModel):
    """Known cardiovascular risk factors."""
    hypertension: bool = Field(False, validation_alias=AliasChoices("hypertension", "hasHighBloodPressure"))
    diabetes: bool = Field(False, validation_alias=AliasChoices("diabetes", "hasDiabetes"))
    chronic_kidney_disease: bool = Field(
        False, validation_alias=AliasChoices("chronic_kidney_disease", "chronicKidneyDisease", "ckd"))
    high_cholesterol: bool = Field(
        False, validation_alias=AliasChoices("high_cholesterol", "highCholesterol", "hasHighCholesterol"))
    smoking: bool = Field(False, validation_alias=AliasChoices("smoking", "smokes"))
    obesity: bool = False
    family_history: bool = Field(False, validation_alias=AliasChoices("family_history", "familyHistory"))
    previous_heart_disease: bool = Field(
        False, validation_alias=AliasChoices("previous_heart_disease", "previousHeartDisease", "hasHeartAttack"))


class AssessmentRequest(BaseModel):
    """Patient assessment submission. Only age and sex are required."""
    age: Optional[int] = Field(None, description="Age in years")
    sex: Optional[str] = Field(
        None, description="'male' or 'female'", validation_alias=AliasChoices("sex", "gender"))

    chest_pain_type: Optional[str] = Field(
        None, description="Chest pain character, e.g. 'typical', 'sharp'",
        validation_alias=AliasChoices("chest_pain_type", "chestPainType"))
    chest_pain_duration_minutes: Optional[int] = Field(
        None, validation_alias=AliasChoices(
            "chest_pain_duration_minutes", "chestPainDurationMinutes", "chestPainDuration"))
    chest_pain_radiation: bool = Field(
        False, validation_alias=AliasChoices("chest_pain_radiation", "chestPainRadiation"))
    chest_pain_exertional: bool = Field(
        False, validation_alias=AliasChoices("chest_pain_exertional", "chestPainExertional"))
    shortness_of_breath_level: Optional[str] = Field(
        None, description="none | mild | moderate | severe",
        validation_alias=AliasChoices(
            "shortness_of_breath_level", "shortnessOfBreathLevel", "shortnessOfBreath"))
    palpitations: bool = False
    syncope: bool = False
    fainting: bool = False
    neurological_symptoms: bool = Field(
        False, validation_alias=AliasChoices("neurological_symptoms", "neurologicalSymptoms"))
    leg_swelling: bool = Field(False, validation_alias=AliasChoices("leg_swelling", "legSwelling"))
    sweating: bool = False
    dizziness: bool = False
    nausea: bool = False

    systolic_bp: Optional[int] = Field(
        None, description="mmHg", validation_alias=AliasChoices("systolic_bp", "systolicBP"))
    diastolic_bp: Optional[int] = Field(
        None, description="mmHg", validation_alias=AliasChoices("diastolic_bp", "diastolicBP"))
    heart_rate: Optional[int] = Field(
        None, description="bpm", validation_alias=AliasChoices("heart_rate", "heartRate"))
    oxygen_saturation: Optional[int] = Field(
        None, description="SpO2 %", validation_alias=AliasChoices("oxygen_saturation", "oxygenSaturation"))
    temperature: Optional[float] = Field(None, description="°C")

    risk_factors: RiskFactorsInput = Field(
        default_factory=RiskFactorsInput, validation_alias=AliasChoices("risk_factors", "riskFactors"))

    def to_patient(self) -> PatientAssessmentInput:
        """Convert to the engine input. Raises ValueError on unknown enum labels."""
        return PatientAssessmentInput.from_dict(self.model_dump())


class HeatmapResponse(BaseModel):
    x: int
    y: int


class AssessmentResponse(BaseModel):
    """Result of one assessment."""
    assessment_id: str
    timestamp: str
    likelihood_score: int
    likelihood_level: str
    impact_score: int
    impact_level: str
    final_risk_score: int
    risk_category: str
    heatmap_position: HeatmapResponse
    recommended_action: str
    explanation: str
    recommendations: List[str] = []
    safety_message: str
    input_warnings: List[str] = []

    @classmethod
    def from_result(cls, assessment_id: str, timestamp: str, result: AssessmentResult) -> "AssessmentResponse":
        return cls(
            assessment_id=assessment_id,
            timestamp=timestamp,
            likelihood_score=result.likelihood_score,
            likelihood_level=result.likelihood_level.value,
            impact_score=result.impact_score,
            impact_level=result.impact_level.value,
            final_risk_score=result.final_risk_score,
            risk_category=result.risk_category.value,
            heatmap_position=HeatmapResponse(**result.heatmap_position.to_dict()),
            recommended_action=result.recommended_action,
            explanation=result.explanation,
            recommendations=result.recommendations,
            safety_message=result.safety_message,
            input_warnings=result.input_warnings,
        )


class AssessmentSummary(BaseModel):
    """History list entry."""
    assessment_id: str
    timestamp: str
    final_risk_score: int
    risk_category: str
    recommended_action: str


class AssessmentListResponse(BaseModel):
    total: int
    assessments: List[AssessmentSummary]


class ReferenceOptionsResponse(BaseModel):
    """Form options for clients."""
    sexes: List[str]
    chest_pain_types: List[str]
    shortness_of_breath_levels: List[str]
    risk_factors: List[str]
    risk_categories: List[str]
    recommended_actions: Dict[str, str]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    timestamp: str
    uptime_seconds: float
    config: Dict[str, Any] = {}
