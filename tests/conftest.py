"""
Pytest Configuration and Fixtures

Shared fixtures for cardiac triage tests.
"""
import pytest
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from cardiotriage.config import TriageConfig
from cardiotriage.core.triage import CardiacTriageEngine, PatientAssessmentInput


@pytest.fixture
def make_patient():
    """Factory for assessment inputs; defaults to a 45-year-old man with nothing reported."""
    def _make(**overrides) -> PatientAssessmentInput:
        data = {"age": 45, "sex": "male"}
        data.update(overrides)
        return PatientAssessmentInput(**data)
    return _make


@pytest.fixture
def engine() -> CardiacTriageEngine:
    """Engine with strict demographics and vitals-only impact."""
    return CardiacTriageEngine(TriageConfig(strict_demographics=True, include_acute_symptoms=False))


@pytest.fixture
def legacy_engine() -> CardiacTriageEngine:
    """Engine that scores missing age/sex as no demographic risk."""
    return CardiacTriageEngine(TriageConfig(strict_demographics=False, include_acute_symptoms=False))


@pytest.fixture
def normal_vitals() -> dict:
    return {
        "systolic_bp": 118,
        "diastolic_bp": 76,
        "heart_rate": 72,
        "oxygen_saturation": 98,
        "temperature": 36.8,
    }
