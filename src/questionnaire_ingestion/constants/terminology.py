# ============================================================================
# src/questionnaire_ingestion/constants/terminology.py
# ============================================================================
"""
Terminology system URIs and fixed FHIR vocabulary
- Code systems used in valueCoding answers
- SDC QuestionnaireResponse profile
- QuestionnaireResponse.status values
"""

ADMINISTRATIVE_GENDER_SYSTEM = "http://hl7.org/fhir/administrative-gender"
SNOMED_SYSTEM = "http://snomed.info/sct"
RXNORM_SYSTEM = "http://www.nlm.nih.gov/research/umls/rxnorm"

# Recognized without any question context; matched case-insensitively
ADMINISTRATIVE_GENDER_CODES = ("male", "female", "other", "unknown")

SDC_QUESTIONNAIRE_RESPONSE_PROFILE = (
    "http://hl7.org/fhir/uv/sdc/StructureDefinition/sdc-questionnaireresponse"
)

RESPONSE_STATUSES = (
    "in-progress",
    "completed",
    "amended",
    "entered-in-error",
    "stopped",
)

# Reference prefixes for QuestionnaireResponse links
QUESTIONNAIRE_REFERENCE_PREFIX = "Questionnaire/"
PATIENT_REFERENCE_PREFIX = "Patient/"
PRACTITIONER_REFERENCE_PREFIX = "Practitioner/"
ENCOUNTER_REFERENCE_PREFIX = "Encounter/"
