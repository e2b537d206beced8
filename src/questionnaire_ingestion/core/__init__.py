# src/questionnaire_ingestion/core/__init__.py

from .models import (
    RawAnswer,
    AnswerShape,
    AnswerType,
    QuestionType,
    ResponseStatus,
    classify_answer,
    Coding,
    FhirAnswer,
    QuestionAnswerItem,
    ResponseMetadata,
    FhirResponseItem,
    FhirQuestionnaireResponse,
)
from .answers import (
    round_half_up,
    is_answer_value,
    is_questionnaire_output,
    get_answer_as_string,
    get_answer_as_boolean,
    get_answer_as_number,
    get_answer_as_string_array,
)

__all__ = [
    "RawAnswer",
    "AnswerShape",
    "AnswerType",
    "QuestionType",
    "ResponseStatus",
    "classify_answer",
    "Coding",
    "FhirAnswer",
    "QuestionAnswerItem",
    "ResponseMetadata",
    "FhirResponseItem",
    "FhirQuestionnaireResponse",
    "round_half_up",
    "is_answer_value",
    "is_questionnaire_output",
    "get_answer_as_string",
    "get_answer_as_boolean",
    "get_answer_as_number",
    "get_answer_as_string_array",
]
