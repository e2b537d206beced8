# ============================================================================
# src/questionnaire_ingestion/__init__.py
# ============================================================================
"""
Questionnaire Ingestion Engine

Converts AI-generated question/answer sets into FHIR R4
QuestionnaireResponse resources.
"""

__version__ = "0.1.0"

from .core.models import (
    Coding,
    FhirAnswer,
    FhirQuestionnaireResponse,
    FhirResponseItem,
    QuestionAnswerItem,
    ResponseMetadata,
    ResponseStatus,
)
from .fhir_utils import (
    format_answer,
    get_item_converter,
    GenericItemConverter,
    SchemaItemConverter,
    QuestionnaireResponseBuilder,
    assemble_questionnaire_response,
    convert_to_questionnaire_response,
    validate_questionnaire_output,
    validate_wegovy_output,
)
