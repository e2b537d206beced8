# ============================================================================
# src/questionnaire_ingestion/core/models.py
# ============================================================================
"""
Conversion data model
- Raw question/answer input and response metadata
- Typed FHIR answer variants (exactly one value[x] each)
- QuestionnaireResponse item and envelope

Everything here is built fresh per conversion call and never mutated.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from ..utils.exceptions import UnsupportedAnswerTypeError

# string | number | boolean | list of strings
RawAnswer = Union[str, int, float, bool, Sequence[str]]


class AnswerShape(str, Enum):
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    STRING_LIST = "string_list"


class AnswerType(str, Enum):
    """value[x] key carried by a QuestionnaireResponse answer"""
    BOOLEAN = "valueBoolean"
    INTEGER = "valueInteger"
    DECIMAL = "valueDecimal"
    STRING = "valueString"
    CODING = "valueCoding"


class QuestionType(str, Enum):
    """Declared item type in a questionnaire schema"""
    BOOLEAN = "boolean"
    DECIMAL = "decimal"
    INTEGER = "integer"
    STRING = "string"
    TEXT = "text"
    CHOICE = "choice"


class ResponseStatus(str, Enum):
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    AMENDED = "amended"
    ENTERED_IN_ERROR = "entered-in-error"
    STOPPED = "stopped"


def classify_answer(value: Any) -> AnswerShape:
    """
    Tag a raw answer with its shape.

    bool is checked before numbers since bool is an int subclass.

    Raises:
        UnsupportedAnswerTypeError: value is none of the four accepted shapes
    """
    if isinstance(value, bool):
        return AnswerShape.BOOLEAN
    if isinstance(value, (int, float)):
        return AnswerShape.NUMBER
    if isinstance(value, str):
        return AnswerShape.STRING
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return AnswerShape.STRING_LIST
    raise UnsupportedAnswerTypeError(value)


@dataclass(frozen=True)
class Coding:
    system: str
    code: str
    display: str

    def to_dict(self) -> Dict[str, str]:
        return {"system": self.system, "code": self.code, "display": self.display}

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "Coding":
        return cls(system=data["system"], code=data["code"], display=data["display"])


@dataclass(frozen=True)
class FhirAnswer:
    """One QuestionnaireResponse.item.answer entry."""
    type: AnswerType
    value: Union[bool, int, float, str, Coding]

    @classmethod
    def boolean(cls, value: bool) -> "FhirAnswer":
        return cls(AnswerType.BOOLEAN, value)

    @classmethod
    def integer(cls, value: int) -> "FhirAnswer":
        return cls(AnswerType.INTEGER, value)

    @classmethod
    def decimal(cls, value: float) -> "FhirAnswer":
        return cls(AnswerType.DECIMAL, value)

    @classmethod
    def string(cls, value: str) -> "FhirAnswer":
        return cls(AnswerType.STRING, value)

    @classmethod
    def coding(cls, value: Coding) -> "FhirAnswer":
        return cls(AnswerType.CODING, value)

    @property
    def is_empty_string(self) -> bool:
        return self.type is AnswerType.STRING and self.value == ""

    def to_dict(self) -> Dict[str, Any]:
        if isinstance(self.value, Coding):
            return {self.type.value: self.value.to_dict()}
        return {self.type.value: self.value}


@dataclass(frozen=True)
class QuestionAnswerItem:
    question_id: str
    question_text: str
    answer: Any

    def __post_init__(self):
        # Multi-select answers are kept as tuples so the item stays immutable
        if isinstance(self.answer, list):
            object.__setattr__(self, "answer", tuple(self.answer))

    @property
    def shape(self) -> AnswerShape:
        return classify_answer(self.answer)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuestionAnswerItem":
        """Build from AI output (question_id/question_text) or camelCase keys."""
        return cls(
            question_id=data.get("question_id", data.get("questionId", "")),
            question_text=data.get("question_text", data.get("questionText", "")),
            answer=data.get("answer"),
        )

    def to_dict(self) -> Dict[str, Any]:
        answer = list(self.answer) if isinstance(self.answer, tuple) else self.answer
        return {
            "question_id": self.question_id,
            "question_text": self.question_text,
            "answer": answer,
        }


@dataclass(frozen=True)
class ResponseMetadata:
    form_id: str
    patient_id: str
    timestamp: str
    author_id: Optional[str] = None
    encounter_id: Optional[str] = None
    status: ResponseStatus = ResponseStatus.COMPLETED

    def __post_init__(self):
        # Accepts plain strings; anything outside the enumeration raises ValueError
        object.__setattr__(self, "status", ResponseStatus(self.status))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResponseMetadata":
        def pick(snake: str, camel: str, default=None):
            return data.get(snake, data.get(camel, default))

        return cls(
            form_id=pick("form_id", "formId"),
            patient_id=pick("patient_id", "patientId"),
            timestamp=pick("timestamp", "timestamp"),
            author_id=pick("author_id", "authorId"),
            encounter_id=pick("encounter_id", "encounterId"),
            status=pick("status", "status") or ResponseStatus.COMPLETED,
        )


@dataclass(frozen=True)
class FhirResponseItem:
    link_id: str
    text: str
    answers: Tuple[FhirAnswer, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        item: Dict[str, Any] = {"linkId": self.link_id, "text": self.text}
        # No answers means the key is left out, not an empty list
        if self.answers:
            item["answer"] = [answer.to_dict() for answer in self.answers]
        return item


@dataclass(frozen=True)
class FhirQuestionnaireResponse:
    status: ResponseStatus
    questionnaire: str
    subject_reference: str
    authored: str
    items: Tuple[FhirResponseItem, ...]
    profile: Tuple[str, ...]
    last_updated: str
    author_reference: Optional[str] = None
    encounter_reference: Optional[str] = None
    resource_type: str = field(default="QuestionnaireResponse", init=False)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready FHIR wire shape."""
        resource: Dict[str, Any] = {
            "resourceType": self.resource_type,
            "status": ResponseStatus(self.status).value,
            "questionnaire": self.questionnaire,
            "subject": {"reference": self.subject_reference},
            "authored": self.authored,
        }
        if self.author_reference:
            resource["author"] = {"reference": self.author_reference}
        if self.encounter_reference:
            resource["encounter"] = {"reference": self.encounter_reference}
        resource["item"] = [item.to_dict() for item in self.items]
        resource["meta"] = {
            "profile": list(self.profile),
            "lastUpdated": self.last_updated,
        }
        return resource

    def find_item(self, link_id: str) -> Optional[FhirResponseItem]:
        for item in self.items:
            if item.link_id == link_id:
                return item
        return None
