# ============================================================================
# FILE: tests/unit/test_form_population_service.py
# ============================================================================
"""
Unit tests for the form population service
"""

import pytest

from questionnaire_ingestion.fhir_utils.builder import QuestionnaireResponseBuilder
from questionnaire_ingestion.fhir_utils.item_converter import (
    GenericItemConverter,
    SchemaItemConverter,
)
from questionnaire_ingestion.services import form_population
from questionnaire_ingestion.services.form_population import (
    FormPopulationCompletedEvent,
    FormPopulationService,
)
from questionnaire_ingestion.utils.exceptions import (
    FHIRConversionError,
    QuestionnaireValidationError,
)


@pytest.fixture
def event(sample_wegovy_output):
    return {
        "formId": "wegovy-prior-auth",
        "patientId": "patient-456",
        "timestamp": "2025-09-13T10:00:00Z",
        "wegovyOutput": sample_wegovy_output,
    }


@pytest.fixture
def service(recording_writer):
    return FormPopulationService(
        recording_writer,
        builder=QuestionnaireResponseBuilder(converter=GenericItemConverter()),
        strict=False,
    )


def test_creates_questionnaire_response(service, recording_writer, event):
    saved = service.create_questionnaire_response(event)

    assert len(recording_writer.calls) == 1
    resource_type, resource = recording_writer.calls[0]
    assert resource_type == "QuestionnaireResponse"
    assert resource["resourceType"] == "QuestionnaireResponse"
    assert resource["questionnaire"] == "Questionnaire/wegovy-prior-auth"
    assert resource["subject"] == {"reference": "Patient/patient-456"}
    assert len(resource["item"]) == 9
    assert saved["id"] == "qr-1"


def test_event_field_aliases(sample_wegovy_output):
    snake = FormPopulationCompletedEvent.model_validate({
        "form_id": "f1",
        "patient_id": "p1",
        "timestamp": "2025-01-01",
        "answers": sample_wegovy_output,
    })
    camel = FormPopulationCompletedEvent.model_validate({
        "formId": "f1",
        "patientId": "p1",
        "timestamp": "2025-01-01",
        "wegovyOutput": sample_wegovy_output,
    })
    assert snake == camel


def test_event_defaults(sample_wegovy_output):
    event = FormPopulationCompletedEvent(
        patient_id="p1", timestamp="2025-01-01", answers=sample_wegovy_output
    )
    metadata = event.to_metadata()

    assert metadata.form_id == "wegovy-prior-auth"
    assert metadata.status.value == "completed"
    assert metadata.author_id is None


def test_status_override(service, recording_writer, event):
    event["status"] = "in-progress"
    event["authorId"] = "dr-1"

    service.create_questionnaire_response(event)
    _, resource = recording_writer.calls[0]

    assert resource["status"] == "in-progress"
    assert resource["author"] == {"reference": "Practitioner/dr-1"}


def test_strict_mode_rejects_invalid_output(recording_writer, event):
    service = FormPopulationService(recording_writer, strict=True)
    event["wegovyOutput"] = event["wegovyOutput"][2:]

    with pytest.raises(QuestionnaireValidationError) as exc_info:
        service.create_questionnaire_response(event)

    assert exc_info.value.errors == [
        "Missing required questions: patient-age, patient-gender"
    ]
    assert recording_writer.calls == []


def test_strict_mode_accepts_valid_output(recording_writer, event):
    service = FormPopulationService(recording_writer, strict=True)
    service.create_questionnaire_response(event)
    assert len(recording_writer.calls) == 1


def test_writer_error_propagates_unchanged(writer_factory, event):
    error = ConnectionError("FHIR server unavailable")
    writer = writer_factory(error=error)
    service = FormPopulationService(writer, strict=False)

    with pytest.raises(ConnectionError) as exc_info:
        service.create_questionnaire_response(event)

    assert exc_info.value is error


def test_schema_builder_codes_choices(recording_writer, event):
    service = FormPopulationService(
        recording_writer,
        builder=QuestionnaireResponseBuilder(converter=SchemaItemConverter()),
    )
    service.create_questionnaire_response(event)
    _, resource = recording_writer.calls[0]

    comorbidities = resource["item"][4]["answer"]
    assert [a["valueCoding"]["code"] for a in comorbidities] == ["44054006", "38341003"]


def test_convert_does_not_persist(service, recording_writer, event):
    response = service.convert(event)

    assert response.find_item("patient-age") is not None
    assert recording_writer.calls == []


def test_invalid_resource_wrapped(recording_writer, event, monkeypatch):
    def reject(response):
        FormPopulationCompletedEvent.model_validate({})

    monkeypatch.setattr(form_population, "to_fhir_resource", reject)
    service = FormPopulationService(recording_writer, strict=False, validate_resource=True)

    with pytest.raises(FHIRConversionError):
        service.convert(event)


def test_resource_check_can_be_disabled(recording_writer, event, monkeypatch):
    def reject(response):
        raise AssertionError("should not be called")

    monkeypatch.setattr(form_population, "to_fhir_resource", reject)
    service = FormPopulationService(recording_writer, validate_resource=False)

    service.create_questionnaire_response(event)
    assert len(recording_writer.calls) == 1


def test_free_form_timestamp_reaches_writer(recording_writer, event):
    """Without the opt-in resource check, authored and text are persisted untouched"""
    event["timestamp"] = "2025-09-13 10:00"
    event["wegovyOutput"][0]["question_text"] = ""
    service = FormPopulationService(recording_writer, strict=False)

    service.create_questionnaire_response(event)
    _, resource = recording_writer.calls[0]

    assert service.validate_resource is False
    assert resource["authored"] == "2025-09-13 10:00"
    assert resource["item"][0]["text"] == ""


def test_resource_check_rejects_free_form_timestamp(recording_writer, event):
    event["timestamp"] = "2025-09-13 10:00"
    service = FormPopulationService(recording_writer, strict=False, validate_resource=True)

    with pytest.raises(FHIRConversionError):
        service.create_questionnaire_response(event)

    assert recording_writer.calls == []
