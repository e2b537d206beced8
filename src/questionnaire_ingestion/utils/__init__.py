# src/questionnaire_ingestion/utils/__init__.py

from .exceptions import (
    QuestionnaireIngestionError,
    FHIRConversionError,
    UnsupportedAnswerTypeError,
    QuestionnaireValidationError,
    ConfigurationError,
)
from .logging import setup_logging, get_logger, JsonFormatter, conversion_context

__all__ = [
    "QuestionnaireIngestionError",
    "FHIRConversionError",
    "UnsupportedAnswerTypeError",
    "QuestionnaireValidationError",
    "ConfigurationError",
    "setup_logging",
    "get_logger",
    "JsonFormatter",
    "conversion_context",
]
