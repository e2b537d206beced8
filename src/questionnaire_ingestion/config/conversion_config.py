# ============================================================================
# src/questionnaire_ingestion/config/conversion_config.py
# ============================================================================
"""
Answer Conversion Settings
- Converter strategy (generic by answer shape, or declared schema)
- Forced-integer question ids
- Empty-string suppression
- Strict pre-flight validation
"""

from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConversionSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    CONVERSION_MODE: Literal["generic", "schema"] = Field(
        default="generic",
        description="'generic' formats by answer shape; 'schema' uses declared question types and coding tables"
    )
    FORCED_INTEGER_QUESTION_IDS: List[str] = Field(
        default_factory=list,
        description="Question ids always emitted as valueInteger, e.g. [\"patient-age\"]"
    )
    SUPPRESS_EMPTY_STRINGS: bool = Field(
        default=True,
        description="Drop empty-string answers so the item carries no answer"
    )
    STRICT_VALIDATION: bool = Field(
        default=False,
        description="Reject questionnaire output that fails pre-flight validation"
    )

conversion_settings = ConversionSettings()
