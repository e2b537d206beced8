# ============================================================================
# src/questionnaire_ingestion/constants/coding_table.py
# ============================================================================
"""
Choice Coding Table
- Administrative gender (no question context needed)
- SNOMED CT comorbidities
- RxNorm medications and doses

Loads per-question choice mappings from choice_codings.json once at import.
The table is read-only; unknown values return None and callers fall back to
valueString.
"""

import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from ..core.models import Coding
from .terminology import ADMINISTRATIVE_GENDER_CODES, ADMINISTRATIVE_GENDER_SYSTEM

_knowledge_dir = Path(__file__).parent.parent / "knowledge"


class CodingTable:
    """
    Immutable (question id, raw value) -> Coding lookup.
    """

    def __init__(self, choices: Mapping[str, Mapping[str, Coding]], version: str = ""):
        self._choices = MappingProxyType({
            question_id: MappingProxyType(dict(values))
            for question_id, values in choices.items()
        })
        # Case-insensitive fallback index, first spelling wins
        folded: Dict[str, Dict[str, Coding]] = {}
        for question_id, values in self._choices.items():
            index = folded.setdefault(question_id, {})
            for raw_value, coding in values.items():
                index.setdefault(raw_value.casefold(), coding)
        self._folded = MappingProxyType({
            question_id: MappingProxyType(index) for question_id, index in folded.items()
        })
        self.version = version

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CodingTable":
        choices = {
            question_id: {
                raw_value: Coding.from_dict(coding)
                for raw_value, coding in values.items()
            }
            for question_id, values in data.get("questions", {}).items()
        }
        return cls(choices, version=data.get("version", ""))

    @classmethod
    def load(cls, path: Path) -> "CodingTable":
        with open(path) as f:
            return cls.from_dict(json.load(f))

    @property
    def choices(self) -> Mapping[str, Mapping[str, Coding]]:
        return self._choices

    def has_question(self, question_id: str) -> bool:
        return question_id in self._choices

    def lookup(self, question_id: str, value: str) -> Optional[Coding]:
        """
        Coding for a choice answer.

        Exact value match first, then case-insensitive.
        """
        values = self._choices.get(question_id)
        if values is None:
            return None
        coding = values.get(value)
        if coding is not None:
            return coding
        return self._folded[question_id].get(value.casefold())

    @staticmethod
    def lookup_gender(value: str) -> Optional[Coding]:
        """
        Administrative gender coding for any question.

        Code is the lowercase form; display keeps the caller's casing.
        """
        code = value.lower()
        if code in ADMINISTRATIVE_GENDER_CODES:
            return Coding(system=ADMINISTRATIVE_GENDER_SYSTEM, code=code, display=value)
        return None

    def __len__(self) -> int:
        return sum(len(values) for values in self._choices.values())


DEFAULT_CODING_TABLE = CodingTable.load(_knowledge_dir / "choice_codings.json")
