# ============================================================================
# src/questionnaire_ingestion/fhir_utils/__init__.py
# ============================================================================
"""
FHIR QuestionnaireResponse conversion

- answer_formatter: raw answer -> typed answer variants
- item_converter: generic and schema-aware item strategies
- builder: QuestionnaireResponse assembly
- validator: pre-flight check of AI questionnaire output
"""

from .answer_formatter import (
    IntegerPolicy,
    ForcedIntegerPolicy,
    CONTEXT_FREE_INTEGERS,
    format_answer,
)
from .item_converter import (
    ItemConverter,
    GenericItemConverter,
    SchemaItemConverter,
    get_item_converter,
)
from .builder import (
    QuestionnaireResponseBuilder,
    assemble_questionnaire_response,
    convert_to_questionnaire_response,
    to_fhir_resource,
)
from .validator import (
    ValidationResult,
    QuestionnaireOutputValidator,
    validate_questionnaire_output,
    validate_wegovy_output,
    get_validation_errors,
)

__all__ = [
    "IntegerPolicy",
    "ForcedIntegerPolicy",
    "CONTEXT_FREE_INTEGERS",
    "format_answer",
    "ItemConverter",
    "GenericItemConverter",
    "SchemaItemConverter",
    "get_item_converter",
    "QuestionnaireResponseBuilder",
    "assemble_questionnaire_response",
    "convert_to_questionnaire_response",
    "to_fhir_resource",
    "ValidationResult",
    "QuestionnaireOutputValidator",
    "validate_questionnaire_output",
    "validate_wegovy_output",
    "get_validation_errors",
]
