"""
Custom Exception Hierarchy

Structured errors raised by the triage engine and the assessment history.
"""
from typing import Optional, Dict, Any, List


class TriageError(Exception):
    """Base exception for all cardiac triage errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class AssessmentInputError(TriageError, ValueError):
    """
    Precondition failure on the patient input.

    Raised when age or sex is missing and the engine runs with strict
    demographics. The caller should surface it as a form-validation error.
    """

    def __init__(
        self,
        message: str,
        fields: Optional[List[str]] = None,
        code: str = "MISSING_REQUIRED_FIELD",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code=code,
            details={"fields": list(fields or []), **(details or {})}
        )
        self.fields = list(fields or [])


class HistoryError(TriageError):
    """Errors while reading or writing assessment history records."""

    def __init__(
        self,
        message: str,
        record_id: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="HISTORY_ERROR",
            details={"record_id": record_id, **(details or {})}
        )
        self.record_id = record_id
