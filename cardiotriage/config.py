"""
Cardiac Triage Configuration
============================
Centralised settings for logging, the scoring engine and the history store.
Loads overrides from the project-level .env file.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# ── Paths ───────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# ── Load .env ───────────────────────────────────────────────────────────
load_dotenv(PROJECT_ROOT / ".env")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# ── Logging ─────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("CARDIOTRIAGE_LOG_LEVEL", "INFO")
LOG_FILE: Optional[str] = os.getenv("CARDIOTRIAGE_LOG_FILE") or None

# ── Engine switches ─────────────────────────────────────────────────────
# Reject assessments without age/sex. Off = legacy "no demographic risk".
STRICT_DEMOGRAPHICS: bool = _env_flag("CARDIOTRIAGE_STRICT_DEMOGRAPHICS", True)
# Let acute symptoms (prolonged pain, severe dyspnoea, oedema) raise impact.
ACUTE_SYMPTOM_IMPACT: bool = _env_flag("CARDIOTRIAGE_ACUTE_SYMPTOM_IMPACT", False)

# ── History ─────────────────────────────────────────────────────────────
HISTORY_LIMIT: int = int(os.getenv("CARDIOTRIAGE_HISTORY_LIMIT", "50"))

API_VERSION = "1.0.0"


@dataclass
class TriageConfig:
    """
    Switches for a CardiacTriageEngine instance.

    Attributes:
        strict_demographics:     Missing age/sex is a precondition failure.
        include_acute_symptoms:  Acute symptom severity feeds the impact score.
    """
    strict_demographics: bool = STRICT_DEMOGRAPHICS
    include_acute_symptoms: bool = ACUTE_SYMPTOM_IMPACT
