# ============================================================================
# src/questionnaire_ingestion/utils/exceptions.py
# ============================================================================
"""
Custom exceptions for the questionnaire ingestion engine.
"""

from typing import List, Optional


class QuestionnaireIngestionError(Exception):
    """Base exception for all questionnaire ingestion errors."""
    pass


class FHIRConversionError(QuestionnaireIngestionError):
    """Error converting to FHIR format."""
    pass


class UnsupportedAnswerTypeError(FHIRConversionError, TypeError):
    """Raw answer is not a string, number, boolean, or list of strings."""

    def __init__(self, value: object):
        super().__init__(
            f"Unsupported answer type: {type(value).__name__}"
        )
        self.value = value


class QuestionnaireValidationError(QuestionnaireIngestionError):
    """Questionnaire output failed pre-flight validation."""

    def __init__(self, errors: List[str], message: Optional[str] = None):
        super().__init__(
            message or f"Questionnaire output failed validation: {'; '.join(errors)}"
        )
        self.errors = list(errors)


class ConfigurationError(QuestionnaireIngestionError):
    """Invalid configuration."""
    pass
