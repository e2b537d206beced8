# ============================================================================
# FILE: src/questionnaire_ingestion/fhir_utils/builder.py
# ============================================================================
"""
FHIR R4 QuestionnaireResponse Builder

Assembles converted items and response metadata into a complete
QuestionnaireResponse.

Key features:
- questionnaire / subject / author / encounter references from metadata
- authored carried verbatim from the source event
- meta.profile stamped with the SDC QuestionnaireResponse profile
- meta.lastUpdated set at assembly time, independent of authored
- Optional typed fhir.resources model for callers that want one
"""

from typing import Any, Dict, Iterable, Optional, Sequence, Union
from datetime import datetime, timezone
import logging

from fhir.resources.R4B.questionnaireresponse import QuestionnaireResponse

from ..config.fhir_config import fhir_settings
from ..constants.terminology import (
    ENCOUNTER_REFERENCE_PREFIX,
    PATIENT_REFERENCE_PREFIX,
    PRACTITIONER_REFERENCE_PREFIX,
    QUESTIONNAIRE_REFERENCE_PREFIX,
)
from ..core.models import (
    FhirQuestionnaireResponse,
    FhirResponseItem,
    ResponseMetadata,
    ResponseStatus,
)
from ..utils.logging import conversion_context
from .item_converter import ItemConverter, ItemInput, get_item_converter

logger = logging.getLogger(__name__)

MetadataInput = Union[ResponseMetadata, Dict[str, Any]]


def _as_metadata(metadata: MetadataInput) -> ResponseMetadata:
    if isinstance(metadata, ResponseMetadata):
        return metadata
    return ResponseMetadata.from_dict(metadata)


def assemble_questionnaire_response(
    items: Sequence[FhirResponseItem],
    metadata: MetadataInput,
    profile: Optional[str] = None
) -> FhirQuestionnaireResponse:
    """
    Wrap converted items in a QuestionnaireResponse envelope.

    No validation happens here; well-typed inputs always assemble.

    Args:
        items: Converted items, in output order
        metadata: form id, patient id, timestamp and optional author/encounter/status
        profile: meta.profile URI (defaults to the SDC profile)

    Returns:
        FhirQuestionnaireResponse
    """
    metadata = _as_metadata(metadata)

    return FhirQuestionnaireResponse(
        status=ResponseStatus(metadata.status),
        questionnaire=f"{QUESTIONNAIRE_REFERENCE_PREFIX}{metadata.form_id}",
        subject_reference=f"{PATIENT_REFERENCE_PREFIX}{metadata.patient_id}",
        authored=metadata.timestamp,
        items=tuple(items),
        profile=(profile or fhir_settings.FHIR_SDC_PROFILE,),
        last_updated=datetime.now(timezone.utc).isoformat(),
        author_reference=(
            f"{PRACTITIONER_REFERENCE_PREFIX}{metadata.author_id}"
            if metadata.author_id else None
        ),
        encounter_reference=(
            f"{ENCOUNTER_REFERENCE_PREFIX}{metadata.encounter_id}"
            if metadata.encounter_id else None
        ),
    )


def convert_to_questionnaire_response(
    output: Iterable[ItemInput],
    metadata: MetadataInput,
    converter: Optional[ItemConverter] = None
) -> FhirQuestionnaireResponse:
    """
    Convert AI questionnaire output into a QuestionnaireResponse in one call.

    Args:
        output: question/answer items (QuestionAnswerItem or raw dicts)
        metadata: ResponseMetadata or a dict with formId/patientId/timestamp
        converter: item strategy (defaults to the configured one)
    """
    converter = converter or get_item_converter()
    items = converter.convert_all(output)
    return assemble_questionnaire_response(items, metadata)


def to_fhir_resource(response: FhirQuestionnaireResponse) -> QuestionnaireResponse:
    """
    Construct the typed fhir.resources model from the wire dict.

    Raises:
        pydantic.ValidationError: the assembled shape is not a valid
            QuestionnaireResponse
    """
    return QuestionnaireResponse.model_validate(response.to_dict())


class QuestionnaireResponseBuilder:
    """
    QuestionnaireResponse builder.

    Holds one item converter and reuses it for every build.
    """

    def __init__(self, converter: Optional[ItemConverter] = None, profile: Optional[str] = None):
        self.converter = converter or get_item_converter()
        self.profile = profile
        self.logger = logging.getLogger(__name__)

    def build(
        self,
        output: Iterable[ItemInput],
        metadata: MetadataInput
    ) -> FhirQuestionnaireResponse:
        metadata = _as_metadata(metadata)
        items = self.converter.convert_all(output)
        response = assemble_questionnaire_response(items, metadata, profile=self.profile)

        answered = sum(1 for item in items if item.answers)
        with conversion_context(form_id=metadata.form_id):
            self.logger.info(
                f"Built QuestionnaireResponse for {response.questionnaire}: "
                f"{len(items)} items ({answered} answered, {self.converter.mode} mode)",
                extra={"item_count": len(items), "conversion_mode": self.converter.mode},
            )
        return response

    def build_dict(
        self,
        output: Iterable[ItemInput],
        metadata: MetadataInput
    ) -> Dict[str, Any]:
        return self.build(output, metadata).to_dict()

    def build_resource(
        self,
        output: Iterable[ItemInput],
        metadata: MetadataInput
    ) -> QuestionnaireResponse:
        return to_fhir_resource(self.build(output, metadata))
