# ============================================================================
# src/questionnaire_ingestion/constants/__init__.py
# ============================================================================
"""
Convenient imports for all constants
"""

from .terminology import (
    ADMINISTRATIVE_GENDER_SYSTEM,
    ADMINISTRATIVE_GENDER_CODES,
    SNOMED_SYSTEM,
    RXNORM_SYSTEM,
    SDC_QUESTIONNAIRE_RESPONSE_PROFILE,
    RESPONSE_STATUSES,
)
from .coding_table import CodingTable, DEFAULT_CODING_TABLE
from .questionnaires import (
    QuestionnaireSchema,
    WEGOVY_PRIOR_AUTH_SCHEMA,
    QUESTIONNAIRE_SCHEMAS,
    get_questionnaire_schema,
    load_questionnaire_schema,
)
