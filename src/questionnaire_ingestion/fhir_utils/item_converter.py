# ============================================================================
# src/questionnaire_ingestion/fhir_utils/item_converter.py
# ============================================================================
"""
Item Converters

Turn one question/answer pair into one QuestionnaireResponse item.

Two interchangeable strategies:
- GenericItemConverter: answer formatted by its shape (works for any questionnaire)
- SchemaItemConverter: answer coerced to the question's declared type, choice
  answers coded through the coding table (SNOMED CT, RxNorm, gender)

linkId and text are copied from the input untouched. An item whose answer list
comes out empty carries no answer key at all.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Union
import logging

from ..constants.coding_table import CodingTable, DEFAULT_CODING_TABLE
from ..constants.questionnaires import QuestionnaireSchema, WEGOVY_PRIOR_AUTH_SCHEMA
from ..core.answers import (
    get_answer_as_boolean,
    get_answer_as_number,
    get_answer_as_string,
    get_answer_as_string_array,
)
from ..core.models import FhirAnswer, FhirResponseItem, QuestionAnswerItem, QuestionType
from ..utils.exceptions import ConfigurationError
from .answer_formatter import (
    ForcedIntegerPolicy,
    IntegerPolicy,
    format_answer,
    rounded_integer,
)

logger = logging.getLogger(__name__)

ItemInput = Union[QuestionAnswerItem, Dict[str, Any]]


def as_question_answer_item(item: ItemInput) -> QuestionAnswerItem:
    if isinstance(item, QuestionAnswerItem):
        return item
    return QuestionAnswerItem.from_dict(item)


class ItemConverter(ABC):
    """
    Base class for item conversion strategies.

    Subclasses implement convert_answer(); building the item is shared.
    """

    @property
    @abstractmethod
    def mode(self) -> str:
        """Strategy name ('generic' or 'schema')."""
        pass

    @abstractmethod
    def convert_answer(self, item: QuestionAnswerItem) -> List[FhirAnswer]:
        """Answer variants for one input item."""
        pass

    def convert(self, item: ItemInput) -> FhirResponseItem:
        item = as_question_answer_item(item)
        answers = self.convert_answer(item)
        return FhirResponseItem(
            link_id=item.question_id,
            text=item.question_text,
            answers=tuple(answers),
        )

    def convert_all(self, items: Iterable[ItemInput]) -> List[FhirResponseItem]:
        converted = [self.convert(item) for item in items]
        logger.debug(f"Converted {len(converted)} items ({self.mode} mode)")
        return converted


class GenericItemConverter(ItemConverter):
    """
    Formats answers by shape alone.

    Empty-string answers are dropped so the item ends up without an answer.
    """

    def __init__(
        self,
        integer_policy: Optional[IntegerPolicy] = None,
        suppress_empty_strings: bool = True
    ):
        self.integer_policy = integer_policy
        self.suppress_empty_strings = suppress_empty_strings

    @property
    def mode(self) -> str:
        return "generic"

    def convert_answer(self, item: QuestionAnswerItem) -> List[FhirAnswer]:
        answers = format_answer(item.answer, item.question_id, self.integer_policy)
        if self.suppress_empty_strings:
            answers = [answer for answer in answers if not answer.is_empty_string]
        return answers


class SchemaItemConverter(ItemConverter):
    """
    Coerces answers to each question's declared type.

    Values that cannot be coerced produce no answer; choice values missing from
    the coding table fall back to valueString.
    """

    def __init__(
        self,
        schema: QuestionnaireSchema = WEGOVY_PRIOR_AUTH_SCHEMA,
        coding_table: CodingTable = DEFAULT_CODING_TABLE
    ):
        self.schema = schema
        self.coding_table = coding_table

    @property
    def mode(self) -> str:
        return "schema"

    def convert_answer(self, item: QuestionAnswerItem) -> List[FhirAnswer]:
        question_type = self.schema.type_of(item.question_id)

        if question_type is QuestionType.BOOLEAN:
            value = get_answer_as_boolean(item)
            return [FhirAnswer.boolean(value)] if value is not None else []

        if question_type is QuestionType.DECIMAL:
            number = get_answer_as_number(item)
            return [FhirAnswer.decimal(number)] if number is not None else []

        if question_type is QuestionType.INTEGER:
            number = get_answer_as_number(item)
            return [rounded_integer(number)] if number is not None else []

        if question_type is QuestionType.CHOICE:
            return [
                self._code_choice(item.question_id, value)
                for value in get_answer_as_string_array(item)
            ]

        # string, text
        text = get_answer_as_string(item)
        return [FhirAnswer.string(text)] if text else []

    def _code_choice(self, question_id: str, value: str) -> FhirAnswer:
        coding = self.coding_table.lookup(question_id, value)
        if coding is None:
            logger.debug(f"No coding for '{question_id}' choice, using valueString")
            return FhirAnswer.string(value)
        return FhirAnswer.coding(coding)


def get_item_converter(
    mode: Optional[str] = None,
    schema: Optional[QuestionnaireSchema] = None,
    coding_table: Optional[CodingTable] = None,
    forced_integer_question_ids: Optional[Iterable[str]] = None,
    suppress_empty_strings: Optional[bool] = None
) -> ItemConverter:
    """
    Build the converter selected by configuration.

    Arguments left as None come from conversion_settings.

    Raises:
        ConfigurationError: unknown mode
    """
    from ..config.conversion_config import conversion_settings

    mode = mode or conversion_settings.CONVERSION_MODE

    if mode == "generic":
        question_ids = (
            conversion_settings.FORCED_INTEGER_QUESTION_IDS
            if forced_integer_question_ids is None
            else list(forced_integer_question_ids)
        )
        if suppress_empty_strings is None:
            suppress_empty_strings = conversion_settings.SUPPRESS_EMPTY_STRINGS
        return GenericItemConverter(
            integer_policy=ForcedIntegerPolicy(question_ids) if question_ids else None,
            suppress_empty_strings=suppress_empty_strings,
        )

    if mode == "schema":
        return SchemaItemConverter(
            schema=schema or WEGOVY_PRIOR_AUTH_SCHEMA,
            coding_table=coding_table or DEFAULT_CODING_TABLE,
        )

    raise ConfigurationError(f"Unknown conversion mode: {mode!r}")
