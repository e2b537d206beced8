# ============================================================================
# FILE: src/questionnaire_ingestion/fhir_utils/validator.py
# ============================================================================
"""
Questionnaire Output Validator

Pre-flight structural check of AI questionnaire output, run before conversion
when strict mode is wanted:
1. Output is a list
2. Output is not empty
3. Every required question id is present
4. Every item has question_id, question_text and an answer

Problems are collected and returned, never raised, so the caller can report
them all at once. The input is never modified.

An empty-string answer passes here; only a missing or None answer is an error.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence
import logging

from ..constants.questionnaires import QuestionnaireSchema, WEGOVY_PRIOR_AUTH_SCHEMA
from ..core.models import QuestionAnswerItem

logger = logging.getLogger(__name__)

_MISSING = object()

# camelCase fallbacks, as in QuestionAnswerItem.from_dict
_CAMEL_KEYS = {"question_id": "questionId", "question_text": "questionText"}


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.is_valid

    def to_dict(self):
        return {"isValid": self.is_valid, "errors": list(self.errors)}


def _field(item: Any, name: str) -> Any:
    if isinstance(item, QuestionAnswerItem):
        return getattr(item, name)
    if isinstance(item, dict):
        if name in item:
            return item[name]
        return item.get(_CAMEL_KEYS.get(name, name), _MISSING)
    return _MISSING


def validate_questionnaire_output(
    output: Any,
    required_questions: Sequence[str] = ()
) -> ValidationResult:
    """
    Validate AI questionnaire output before conversion.

    Args:
        output: list of question/answer items (dicts or QuestionAnswerItem)
        required_questions: ids that must appear, reported in this order

    Returns:
        ValidationResult(is_valid, errors)
    """
    errors: List[str] = []

    if not isinstance(output, (list, tuple)):
        errors.append("Questionnaire output must be an array")
        return ValidationResult(is_valid=False, errors=errors)

    if len(output) == 0:
        errors.append("Questionnaire output cannot be empty")
        return ValidationResult(is_valid=False, errors=errors)

    present = {
        question_id for question_id in (_field(item, "question_id") for item in output)
        if isinstance(question_id, str)
    }
    missing = [qid for qid in required_questions if qid not in present]
    if missing:
        errors.append(f"Missing required questions: {', '.join(missing)}")

    for index, item in enumerate(output):
        question_id = _field(item, "question_id")
        if question_id is _MISSING or not question_id:
            errors.append(f"Item {index}: missing question_id")

        question_text = _field(item, "question_text")
        if question_text is _MISSING or not question_text:
            errors.append(f"Item {index}: missing question_text")

        answer = _field(item, "answer")
        if answer is _MISSING or answer is None:
            errors.append(f"Item {index}: missing answer")

    is_valid = len(errors) == 0

    if errors:
        logger.warning(f"Questionnaire output validation found {len(errors)} errors")
        for error in errors:
            logger.warning(f"  - {error}")

    return ValidationResult(is_valid=is_valid, errors=errors)


class QuestionnaireOutputValidator:
    """
    Validator bound to one questionnaire schema's required questions.
    """

    def __init__(self, schema: Optional[QuestionnaireSchema] = None):
        self.schema = schema or WEGOVY_PRIOR_AUTH_SCHEMA

    @property
    def required_questions(self) -> Sequence[str]:
        return self.schema.required_questions

    def validate(self, output: Any) -> ValidationResult:
        return validate_questionnaire_output(output, self.required_questions)


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

def validate_wegovy_output(output: Any) -> ValidationResult:
    """
    Validate against the Wegovy prior-authorization required questions.
    """
    return QuestionnaireOutputValidator(WEGOVY_PRIOR_AUTH_SCHEMA).validate(output)


def get_validation_errors(output: Any, schema: Optional[QuestionnaireSchema] = None) -> List[str]:
    """
    Get list of validation errors for questionnaire output.

    Returns:
        List of error messages (empty if valid)
    """
    return QuestionnaireOutputValidator(schema).validate(output).errors
