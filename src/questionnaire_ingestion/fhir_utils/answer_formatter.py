# ============================================================================
# src/questionnaire_ingestion/fhir_utils/answer_formatter.py
# ============================================================================
"""
Answer Formatter

Maps one raw answer to an ordered list of FHIR answer variants, driven only by
the shape and literal value of the answer:

- list of strings → one variant per element, order kept
- bool            → valueBoolean
- number          → valueInteger when it has no fractional part, else valueDecimal
- string          → valueCoding for administrative gender words, else valueString

Pure and total over the four accepted shapes. An empty string gives
[valueString ""]; dropping it is the item converter's job.
"""

import math
from typing import Iterable, List, Optional, Union

from ..constants.coding_table import CodingTable
from ..core.answers import round_half_up
from ..core.models import AnswerShape, FhirAnswer, RawAnswer, classify_answer


class IntegerPolicy:
    """
    Context-free integer classification: a number is an integer when it has no
    fractional part, whatever question it answers.
    """

    def forces_integer(self, question_id: Optional[str]) -> bool:
        return False


class ForcedIntegerPolicy(IntegerPolicy):
    """
    Always emit valueInteger for the listed question ids (e.g. an age question),
    rounding any fractional part.
    """

    def __init__(self, question_ids: Iterable[str]):
        self.question_ids = frozenset(question_ids)

    def forces_integer(self, question_id: Optional[str]) -> bool:
        return question_id is not None and question_id in self.question_ids

    def __repr__(self) -> str:
        return f"ForcedIntegerPolicy({sorted(self.question_ids)!r})"


CONTEXT_FREE_INTEGERS = IntegerPolicy()


def format_answer(
    answer: RawAnswer,
    question_id: Optional[str] = None,
    integer_policy: Optional[IntegerPolicy] = None
) -> List[FhirAnswer]:
    """
    Format a raw answer as FHIR answer variants.

    Args:
        answer: string, number, boolean, or list of strings
        question_id: only consulted by the integer policy
        integer_policy: defaults to context-free classification

    Returns:
        Ordered list of FhirAnswer

    Raises:
        UnsupportedAnswerTypeError: answer has none of the accepted shapes
    """
    policy = integer_policy or CONTEXT_FREE_INTEGERS
    shape = classify_answer(answer)

    if shape is AnswerShape.STRING_LIST:
        return [format_string(value) for value in answer]

    if shape is AnswerShape.BOOLEAN:
        return [FhirAnswer.boolean(answer)]

    if shape is AnswerShape.NUMBER:
        return [format_number(answer, question_id, policy)]

    return [format_string(answer)]


def format_number(
    value: Union[int, float],
    question_id: Optional[str] = None,
    integer_policy: Optional[IntegerPolicy] = None
) -> FhirAnswer:
    policy = integer_policy or CONTEXT_FREE_INTEGERS

    if policy.forces_integer(question_id):
        return rounded_integer(value)

    if isinstance(value, int) or float(value).is_integer():
        return FhirAnswer.integer(int(value))

    return FhirAnswer.decimal(value)


def rounded_integer(value: Union[int, float]) -> FhirAnswer:
    """valueInteger rounded half up; infinities and NaN stay valueDecimal."""
    if not math.isfinite(value):
        return FhirAnswer.decimal(value)
    return FhirAnswer.integer(round_half_up(value))


def format_string(value: str) -> FhirAnswer:
    coding = CodingTable.lookup_gender(value)
    if coding is not None:
        return FhirAnswer.coding(coding)
    return FhirAnswer.string(value)
