"""
Cardiac Triage Base Types

Defines the data contracts shared by the scorers, the classifier and the
recommendation generator. These are plain records with no behaviour beyond
normalisation and serialisation; the presentation layer and the assessment
history consume them read-only.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

# Free-text answers meaning "symptom absent" ("No chest pain", "None reported")
_ABSENT_PREFIXES = ("no ", "none", "nothing")


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"

    @classmethod
    def parse(cls, value: Union["Sex", str, None]) -> Optional["Sex"]:
        if value is None or isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if not text:
            return None
        if text in ("m", "male", "man"):
            return cls.MALE
        if text in ("f", "female", "woman"):
            return cls.FEMALE
        raise ValueError(f"Unknown sex: {value!r}. Valid: {[s.value for s in cls]}")


class ChestPainType(str, Enum):
    """
    Character of the reported chest pain.

    TYPICAL, PRESSURE and CRUSHING describe the classic ischaemic
    (anginal) quality; the rest are non-anginal descriptions.
    """
    NONE     = "none"
    TYPICAL  = "typical"
    PRESSURE = "pressure"
    CRUSHING = "crushing"
    ATYPICAL = "atypical"
    SHARP    = "sharp"
    BURNING  = "burning"
    ACHING   = "aching"
    OTHER    = "other"

    @property
    def is_present(self) -> bool:
        return self is not ChestPainType.NONE

    @property
    def is_anginal(self) -> bool:
        return self in (ChestPainType.TYPICAL, ChestPainType.PRESSURE, ChestPainType.CRUSHING)

    @classmethod
    def parse(cls, value: Union["ChestPainType", str, None]) -> "ChestPainType":
        """Accept enum values and the mobile form labels ("Sharp/stabbing pain", ...)."""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        if text in ("", "no", "nothing") or text.startswith(_ABSENT_PREFIXES):
            return cls.NONE
        try:
            return cls(text)
        except ValueError:
            pass
        for keyword, member in _CHEST_PAIN_KEYWORDS:
            if keyword in text:
                return member
        return cls.OTHER


_CHEST_PAIN_KEYWORDS: Tuple[Tuple[str, ChestPainType], ...] = (
    ("crushing", ChestPainType.CRUSHING),
    ("pressure", ChestPainType.PRESSURE),
    ("squeez", ChestPainType.PRESSURE),
    ("tight", ChestPainType.PRESSURE),
    ("atypical", ChestPainType.ATYPICAL),
    ("typical", ChestPainType.TYPICAL),
    ("sharp", ChestPainType.SHARP),
    ("stabbing", ChestPainType.SHARP),
    ("burning", ChestPainType.BURNING),
    ("aching", ChestPainType.ACHING),
    ("ache", ChestPainType.ACHING),
)


class BreathlessnessLevel(str, Enum):
    """Shortness-of-breath severity, ordered from NONE to SEVERE."""
    NONE     = "none"
    MILD     = "mild"
    MODERATE = "moderate"
    SEVERE   = "severe"

    @classmethod
    def parse(cls, value: Union["BreathlessnessLevel", str, None]) -> "BreathlessnessLevel":
        """Accept enum values and form labels such as "Severe (at rest)"."""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        if text in ("", "no", "nothing") or text.startswith(_ABSENT_PREFIXES):
            return cls.NONE
        if "severe" in text or "at rest" in text or "cannot speak" in text:
            return cls.SEVERE
        if "moderate" in text or "normal activity" in text:
            return cls.MODERATE
        if "mild" in text or "exertion" in text:
            return cls.MILD
        raise ValueError(
            f"Unknown shortness of breath level: {value!r}. Valid: {[b.value for b in cls]}"
        )


class LikelihoodLevel(str, Enum):
    """Probability of a cardiac event, one label per 1–5 likelihood score."""
    IMPROBABLE    = "Improbable"
    REMOTE        = "Remote"
    OCCASIONAL    = "Occasional"
    PROBABLE      = "Probable"
    VERY_PROBABLE = "Very Probable"

    @classmethod
    def from_score(cls, score: int) -> "LikelihoodLevel":
        return list(cls)[score - 1]


class ImpactLevel(str, Enum):
    """Severity of physiological compromise, one label per 1–5 impact score."""
    NEGLIGIBLE  = "Negligible"
    LOW         = "Low"
    MODERATE    = "Moderate"
    SIGNIFICANT = "Significant"
    CRITICAL    = "Critical"

    @classmethod
    def from_score(cls, score: int) -> "ImpactLevel":
        return list(cls)[score - 1]


class RiskCategory(str, Enum):
    """
    Band of the 5×5 risk matrix.

    LOW      – final score 1–5
    MILD     – 6–10
    MODERATE – 11–15
    HIGH     – 16–20
    CRITICAL – 21–25
    """
    LOW      = "Low"
    MILD     = "Mild"
    MODERATE = "Moderate"
    HIGH     = "High"
    CRITICAL = "Critical"


@dataclass
class RiskFactors:
    """Known cardiovascular risk factors. Field order is the display order."""
    hypertension: bool = False
    diabetes: bool = False
    chronic_kidney_disease: bool = False
    high_cholesterol: bool = False
    smoking: bool = False
    obesity: bool = False
    family_history: bool = False
    previous_heart_disease: bool = False

    # Factors counted towards the "two or more major risk factors" rule
    MAJOR = (
        "hypertension",
        "diabetes",
        "chronic_kidney_disease",
        "high_cholesterol",
        "smoking",
        "previous_heart_disease",
    )

    def active(self) -> List[str]:
        return [f.name for f in fields(self) if getattr(self, f.name)]

    def major_count(self) -> int:
        return sum(1 for name in self.MAJOR if getattr(self, name))

    def to_dict(self) -> Dict[str, bool]:
        return {f.name: bool(getattr(self, f.name)) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "RiskFactors":
        data = data or {}
        values = {}
        for f in fields(cls):
            for key in _RISK_FACTOR_KEYS[f.name]:
                if key in data:
                    values[f.name] = _as_bool(data[key])
                    break
        return cls(**values)


_RISK_FACTOR_KEYS = {
    "hypertension":           ("hypertension", "hasHighBloodPressure"),
    "diabetes":               ("diabetes", "hasDiabetes"),
    "chronic_kidney_disease": ("chronic_kidney_disease", "chronicKidneyDisease", "ckd"),
    "high_cholesterol":       ("high_cholesterol", "highCholesterol", "hasHighCholesterol"),
    "smoking":                ("smoking", "smokes"),
    "obesity":                ("obesity",),
    "family_history":         ("family_history", "familyHistory"),
    "previous_heart_disease": ("previous_heart_disease", "previousHeartDisease", "hasHeartAttack"),
}


@dataclass
class PatientAssessmentInput:
    """
    Structured patient assessment data.

    `age` and `sex` are required but may be None, which the engine treats
    as a missing required field. Every other field is optional: an absent
    symptom means "not reported", an absent vital sign means "not measured".
    """
    age: Optional[int]
    sex: Optional[Sex]

    # ── Symptoms ──────────────────────────────────────────────────────────
    chest_pain_type: ChestPainType = ChestPainType.NONE
    chest_pain_duration_minutes: Optional[int] = None
    chest_pain_radiation: bool = False
    chest_pain_exertional: bool = False
    shortness_of_breath_level: BreathlessnessLevel = BreathlessnessLevel.NONE
    palpitations: bool = False
    syncope: bool = False
    fainting: bool = False
    neurological_symptoms: bool = False
    leg_swelling: bool = False
    sweating: bool = False
    dizziness: bool = False
    nausea: bool = False

    # ── Vital signs ───────────────────────────────────────────────────────
    systolic_bp: Optional[int] = None        # mmHg
    diastolic_bp: Optional[int] = None       # mmHg
    heart_rate: Optional[int] = None         # bpm
    oxygen_saturation: Optional[int] = None  # %
    temperature: Optional[float] = None      # °C

    # ── History ───────────────────────────────────────────────────────────
    risk_factors: RiskFactors = field(default_factory=RiskFactors)

    def __post_init__(self):
        self.sex = Sex.parse(self.sex)
        self.chest_pain_type = ChestPainType.parse(self.chest_pain_type)
        self.shortness_of_breath_level = BreathlessnessLevel.parse(self.shortness_of_breath_level)
        if isinstance(self.risk_factors, dict):
            self.risk_factors = RiskFactors.from_dict(self.risk_factors)
        elif self.risk_factors is None:
            self.risk_factors = RiskFactors()

    @property
    def has_chest_pain(self) -> bool:
        return self.chest_pain_type.is_present

    @property
    def has_syncope(self) -> bool:
        return self.syncope or self.fainting

    def symptoms(self) -> Dict[str, Any]:
        return {
            "chestPainType": self.chest_pain_type.value,
            "chestPainDuration": self.chest_pain_duration_minutes,
            "chestPainRadiation": self.chest_pain_radiation,
            "chestPainExertional": self.chest_pain_exertional,
            "shortnessOfBreath": self.shortness_of_breath_level.value,
            "palpitations": self.palpitations,
            "syncope": self.syncope,
            "fainting": self.fainting,
            "neurologicalSymptoms": self.neurological_symptoms,
            "legSwelling": self.leg_swelling,
            "sweating": self.sweating,
            "dizziness": self.dizziness,
            "nausea": self.nausea,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PatientAssessmentInput":
        """
        Build an input from the mobile client's camelCase payload.

        Numbers may arrive as strings and empty strings mean "absent".
        Risk factors are read from a nested "riskFactors" map or, as the
        app's questionnaire sends them, from the top level.
        """
        def pick(*keys: str) -> Any:
            for key in keys:
                if key in data and data[key] not in (None, ""):
                    return data[key]
            return None

        nested = data.get("riskFactors") or data.get("risk_factors")
        risk_source = dict(data)
        if isinstance(nested, dict):
            risk_source.update(nested)

        return cls(
            age=_as_int(pick("age")),
            sex=pick("sex", "gender"),
            chest_pain_type=pick("chestPainType", "chest_pain_type"),
            chest_pain_duration_minutes=_as_int(pick(
                "chestPainDurationMinutes", "chestPainDuration", "chest_pain_duration_minutes")),
            chest_pain_radiation=_as_bool(pick("chestPainRadiation", "chest_pain_radiation")),
            chest_pain_exertional=_as_bool(pick("chestPainExertional", "chest_pain_exertional")),
            shortness_of_breath_level=pick(
                "shortnessOfBreathLevel", "shortnessOfBreath", "shortness_of_breath_level"),
            palpitations=_as_bool(pick("palpitations")),
            syncope=_as_bool(pick("syncope")),
            fainting=_as_bool(pick("fainting")),
            neurological_symptoms=_as_bool(pick("neurologicalSymptoms", "neurological_symptoms")),
            leg_swelling=_as_bool(pick("legSwelling", "leg_swelling")),
            sweating=_as_bool(pick("sweating")),
            dizziness=_as_bool(pick("dizziness")),
            nausea=_as_bool(pick("nausea")),
            systolic_bp=_as_int(pick("systolicBP", "systolic_bp")),
            diastolic_bp=_as_int(pick("diastolicBP", "diastolic_bp")),
            heart_rate=_as_int(pick("heartRate", "heart_rate")),
            oxygen_saturation=_as_int(pick("oxygenSaturation", "oxygen_saturation")),
            temperature=_as_float(pick("temperature")),
            risk_factors=RiskFactors.from_dict(risk_source),
        )


@dataclass(frozen=True)
class HeatmapPosition:
    """Zero-based cell of the 5×5 display grid (x = likelihood, y = impact)."""
    x: int
    y: int

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y}


SAFETY_MESSAGE = (
    "If you experience severe chest pain, fainting, or difficulty breathing, "
    "seek emergency care immediately."
)


@dataclass
class AssessmentResult:
    """
    Output of one triage assessment.

    Built fresh per call and handed to the presentation layer and the
    assessment history; the engine keeps no reference to it.
    """
    likelihood_score: int
    likelihood_level: LikelihoodLevel
    impact_score: int
    impact_level: ImpactLevel
    final_risk_score: int
    risk_category: RiskCategory
    heatmap_position: HeatmapPosition
    recommended_action: str
    explanation: str
    recommendations: List[str] = field(default_factory=list)
    safety_message: str = SAFETY_MESSAGE
    # Plausibility findings that were neutralised before scoring
    input_warnings: List[str] = field(default_factory=list)

    # ── Serialisation ─────────────────────────────────────────────────────
    def to_dict(self) -> Dict[str, Any]:
        return {
            "likelihoodScore": self.likelihood_score,
            "likelihoodLevel": self.likelihood_level.value,
            "impactScore": self.impact_score,
            "impactLevel": self.impact_level.value,
            "finalRiskScore": self.final_risk_score,
            "riskCategory": self.risk_category.value,
            "heatmapPosition": self.heatmap_position.to_dict(),
            "recommendedAction": self.recommended_action,
            "explanation": self.explanation,
            "recommendations": list(self.recommendations),
            "safetyMessage": self.safety_message,
            "inputWarnings": list(self.input_warnings),
        }


# ── Coercion helpers ──────────────────────────────────────────────────────────

def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "y", "1")
    return bool(value)


def _as_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return None


def _as_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
