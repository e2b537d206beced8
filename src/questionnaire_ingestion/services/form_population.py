# ============================================================================
# src/questionnaire_ingestion/services/form_population.py
# ============================================================================
"""
Form Population Service

Handles one "form population completed" event end to end:
validate (strict mode) -> convert -> hand the QuestionnaireResponse to the
FHIR writer.

The writer is an injected collaborator (any object with create_resource);
this module knows nothing about HTTP, auth or retries. Writer failures are
logged and re-raised unchanged.
"""

from typing import Any, Dict, List, Optional, Protocol, Union
import logging

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..config.conversion_config import conversion_settings
from ..config.fhir_config import fhir_settings
from ..core.models import FhirQuestionnaireResponse, ResponseMetadata, ResponseStatus
from ..fhir_utils.builder import QuestionnaireResponseBuilder, to_fhir_resource
from ..fhir_utils.validator import QuestionnaireOutputValidator
from ..utils.exceptions import FHIRConversionError, QuestionnaireValidationError
from ..utils.logging import conversion_context

logger = logging.getLogger(__name__)

QUESTIONNAIRE_RESPONSE = "QuestionnaireResponse"


class ResourceWriter(Protocol):
    """Persistence side of a FHIR client."""

    def create_resource(self, resource_type: str, resource: Dict[str, Any]) -> Dict[str, Any]:
        ...


class FormPopulationCompletedEvent(BaseModel):
    """Payload published when AI form population finishes."""

    model_config = ConfigDict(populate_by_name=True)

    form_id: str = Field(
        default_factory=lambda: fhir_settings.FHIR_DEFAULT_QUESTIONNAIRE_ID,
        validation_alias=AliasChoices("form_id", "formId"),
    )
    patient_id: str = Field(validation_alias=AliasChoices("patient_id", "patientId"))
    answers: List[Dict[str, Any]] = Field(
        validation_alias=AliasChoices("answers", "wegovyOutput", "wegovy_output"),
    )
    timestamp: str
    author_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("author_id", "authorId")
    )
    encounter_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("encounter_id", "encounterId")
    )
    status: Optional[ResponseStatus] = None

    def to_metadata(self) -> ResponseMetadata:
        return ResponseMetadata(
            form_id=self.form_id,
            patient_id=self.patient_id,
            timestamp=self.timestamp,
            author_id=self.author_id,
            encounter_id=self.encounter_id,
            status=self.status or fhir_settings.FHIR_DEFAULT_STATUS,
        )


class FormPopulationService:
    """
    Creates QuestionnaireResponse resources from AI questionnaire output.
    """

    def __init__(
        self,
        writer: ResourceWriter,
        builder: Optional[QuestionnaireResponseBuilder] = None,
        validator: Optional[QuestionnaireOutputValidator] = None,
        strict: Optional[bool] = None,
        validate_resource: Optional[bool] = None
    ):
        self.writer = writer
        self.builder = builder or QuestionnaireResponseBuilder()
        self.validator = validator or QuestionnaireOutputValidator()
        self.strict = conversion_settings.STRICT_VALIDATION if strict is None else strict
        self.validate_resource = (
            fhir_settings.FHIR_VALIDATE if validate_resource is None else validate_resource
        )

    def convert(
        self,
        event: Union[FormPopulationCompletedEvent, Dict[str, Any]]
    ) -> FhirQuestionnaireResponse:
        """
        Validate (strict mode only) and convert, without persisting.

        Raises:
            QuestionnaireValidationError: strict mode and the output is invalid
            FHIRConversionError: the assembled resource could not be constructed
                as a typed QuestionnaireResponse
        """
        if not isinstance(event, FormPopulationCompletedEvent):
            event = FormPopulationCompletedEvent.model_validate(event)

        if self.strict:
            result = self.validator.validate(event.answers)
            if not result.is_valid:
                raise QuestionnaireValidationError(result.errors)

        response = self.builder.build(event.answers, event.to_metadata())

        if self.validate_resource:
            try:
                to_fhir_resource(response)
            except PydanticValidationError as e:
                raise FHIRConversionError(
                    f"QuestionnaireResponse for form {event.form_id} is not a valid resource: "
                    f"{e.error_count()} errors"
                ) from e

        return response

    def create_questionnaire_response(
        self,
        event: Union[FormPopulationCompletedEvent, Dict[str, Any]]
    ) -> Dict[str, Any]:
        """
        Convert the event's answers and save the result through the writer.

        Returns:
            Resource as returned by the writer
        """
        if not isinstance(event, FormPopulationCompletedEvent):
            event = FormPopulationCompletedEvent.model_validate(event)

        with conversion_context(form_id=event.form_id):
            logger.info(
                f"Creating QuestionnaireResponse for form: {event.form_id}",
                extra={"item_count": len(event.answers)},
            )

            response = self.convert(event)

            try:
                saved = self.writer.create_resource(QUESTIONNAIRE_RESPONSE, response.to_dict())
            except Exception as e:
                logger.error(f"Failed to create QuestionnaireResponse: {e}")
                raise

            resource_id = saved.get("id") if isinstance(saved, dict) else None
            logger.info(
                f"Successfully created QuestionnaireResponse with ID: {resource_id}",
                extra={"resource_id": resource_id},
            )
        return saved
