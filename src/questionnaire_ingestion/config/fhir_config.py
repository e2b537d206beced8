# ============================================================================
# src/questionnaire_ingestion/config/fhir_config.py
# ============================================================================
"""
FHIR Output Settings
- Version
- Profile stamped on every QuestionnaireResponse
- Default status and questionnaire
- Shape check before persistence
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..constants.terminology import SDC_QUESTIONNAIRE_RESPONSE_PROFILE


class FHIRSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    FHIR_VERSION: str = Field(
        default="R4",
        description="FHIR specification version"
    )
    FHIR_SDC_PROFILE: str = Field(
        default=SDC_QUESTIONNAIRE_RESPONSE_PROFILE,
        description="Profile URI written to meta.profile"
    )
    FHIR_DEFAULT_STATUS: Literal[
        "in-progress", "completed", "amended", "entered-in-error", "stopped"
    ] = Field(
        default="completed",
        description="QuestionnaireResponse.status when the caller gives none"
    )
    FHIR_DEFAULT_QUESTIONNAIRE_ID: str = Field(
        default="wegovy-prior-auth",
        description="Questionnaire id used when an event carries no form id"
    )
    FHIR_VALIDATE: bool = Field(
        default=False,
        description="Build the typed fhir.resources model before handing a response to the writer"
    )

fhir_settings = FHIRSettings()
