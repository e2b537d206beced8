# ============================================================================
# src/questionnaire_ingestion/core/answers.py
# ============================================================================
"""
Raw answer coercion

AI output carries loosely typed answers. When a questionnaire declares the type
of a question, these helpers coerce whatever arrived into that type:

- get_answer_as_string: lists joined with ", ", booleans as "true"/"false"
- get_answer_as_boolean: true/yes/1 and false/no/0 strings are understood
- get_answer_as_number: numeric prefix of a string is parsed
- get_answer_as_string_array: scalars become one-element lists

is_questionnaire_output is the structural type guard for a whole AI output list.
"""

import math
import re
from typing import Any, List, Optional, Union

from .models import QuestionAnswerItem, RawAnswer

_NUMERIC_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

_TRUE_STRINGS = ("true", "yes", "1")
_FALSE_STRINGS = ("false", "no", "0")


def _raw(answer: Union[QuestionAnswerItem, RawAnswer]) -> Any:
    if isinstance(answer, QuestionAnswerItem):
        return answer.answer
    return answer


def format_number(value: Union[int, float]) -> str:
    """Natural string form of a number: 45 -> "45", 5.0 -> "5", 42.5 -> "42.5"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def round_half_up(value: Union[int, float]) -> int:
    """Nearest integer, halves rounded toward +infinity (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def is_answer_value(value: Any) -> bool:
    """True for string, number, boolean, or a list of strings."""
    if isinstance(value, (str, bool, int, float)):
        return True
    return isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value)


def is_questionnaire_output(data: Any) -> bool:
    """
    Check that data looks like AI questionnaire output.

    Every element must be a dict with a string question_id, a string
    question_text, and an answer of one of the accepted shapes.
    """
    if not isinstance(data, list):
        return False

    return all(
        isinstance(item, dict)
        and isinstance(item.get("question_id"), str)
        and isinstance(item.get("question_text"), str)
        and "answer" in item
        and is_answer_value(item["answer"])
        for item in data
    )


def get_answer_as_string(answer: Union[QuestionAnswerItem, RawAnswer]) -> str:
    value = _raw(answer)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ", ".join(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


def get_answer_as_boolean(answer: Union[QuestionAnswerItem, RawAnswer]) -> Optional[bool]:
    value = _raw(answer)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lower = value.lower()
        if lower in _TRUE_STRINGS:
            return True
        if lower in _FALSE_STRINGS:
            return False
    return None


def get_answer_as_number(answer: Union[QuestionAnswerItem, RawAnswer]) -> Optional[float]:
    """
    Numbers pass through; strings are parsed from their leading numeric part
    ("45 years" -> 45.0). Booleans and lists give None.
    """
    value = _raw(answer)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value)
        if match:
            return float(match.group(0))
    return None


def get_answer_as_string_array(answer: Union[QuestionAnswerItem, RawAnswer]) -> List[str]:
    value = _raw(answer)
    if isinstance(value, (list, tuple)):
        return list(value)
    return [get_answer_as_string(value)]
