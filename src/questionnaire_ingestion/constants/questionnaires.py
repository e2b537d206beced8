# ============================================================================
# src/questionnaire_ingestion/constants/questionnaires.py
# ============================================================================
"""
Questionnaire Schemas
- Declared answer type per question id
- Required question ids, in declaration order

Loads from knowledge/<questionnaire>.json.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from ..core.models import QuestionType

_knowledge_dir = Path(__file__).parent.parent / "knowledge"


@dataclass(frozen=True)
class QuestionnaireSchema:
    questionnaire_id: str
    question_types: Mapping[str, QuestionType] = field(default_factory=dict)
    required_questions: Tuple[str, ...] = ()
    title: str = ""

    def __post_init__(self):
        object.__setattr__(
            self, "question_types", MappingProxyType(dict(self.question_types))
        )
        object.__setattr__(self, "required_questions", tuple(self.required_questions))

    def type_of(self, question_id: str) -> QuestionType:
        """Declared type, STRING for questions the schema does not know."""
        return self.question_types.get(question_id, QuestionType.STRING)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuestionnaireSchema":
        return cls(
            questionnaire_id=data["questionnaire_id"],
            question_types={
                question_id: QuestionType(type_name)
                for question_id, type_name in data.get("question_types", {}).items()
            },
            required_questions=tuple(data.get("required_questions", [])),
            title=data.get("title", ""),
        )


def load_questionnaire_schema(path: Path) -> QuestionnaireSchema:
    with open(path) as f:
        return QuestionnaireSchema.from_dict(json.load(f))


WEGOVY_PRIOR_AUTH_SCHEMA = load_questionnaire_schema(_knowledge_dir / "wegovy_prior_auth.json")

QUESTIONNAIRE_SCHEMAS = MappingProxyType({
    WEGOVY_PRIOR_AUTH_SCHEMA.questionnaire_id: WEGOVY_PRIOR_AUTH_SCHEMA,
})


def get_questionnaire_schema(questionnaire_id: str) -> Optional[QuestionnaireSchema]:
    return QUESTIONNAIRE_SCHEMAS.get(questionnaire_id)
