"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    TriageError,
    AssessmentInputError,
    HistoryError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "TriageError",
    "AssessmentInputError",
    "HistoryError",
]
