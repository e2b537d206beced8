# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

import pytest

from questionnaire_ingestion.core.models import ResponseMetadata


@pytest.fixture
def sample_metadata():
    """Response metadata used across converter tests"""
    return ResponseMetadata(
        form_id="test-form-123",
        patient_id="patient-456",
        timestamp="2025-09-13T10:00:00Z",
    )


@pytest.fixture
def sample_wegovy_output():
    """AI output for a Wegovy prior-authorization form"""
    return [
        {
            "question_id": "patient-age",
            "question_text": "Patient Age",
            "answer": 45,
        },
        {
            "question_id": "patient-gender",
            "question_text": "Patient Gender",
            "answer": "Female",
        },
        {
            "question_id": "current-bmi",
            "question_text": "Current BMI (kg/m²)",
            "answer": 32.5,
        },
        {
            "question_id": "bmi-criteria",
            "question_text": "BMI meets criteria (≥30 kg/m² OR ≥27 kg/m² with weight-related comorbidity)?",
            "answer": True,
        },
        {
            "question_id": "weight-related-comorbidities",
            "question_text": "Weight-related comorbidities (select all that apply)",
            "answer": ["Type 2 diabetes mellitus", "Hypertension"],
        },
        {
            "question_id": "pregnancy-status",
            "question_text": "Is the patient pregnant or planning to become pregnant?",
            "answer": False,
        },
        {
            "question_id": "lifestyle-intervention-details",
            "question_text": "Describe lifestyle interventions attempted",
            "answer": "Patient participated in supervised diet program with nutritionist for 8 months.",
        },
        {
            "question_id": "medical-necessity",
            "question_text": "I attest that Wegovy is medically necessary for this patient",
            "answer": True,
        },
        {
            "question_id": "attestation-date",
            "question_text": "Date of attestation",
            "answer": "2025-09-13",
        },
    ]


@pytest.fixture
def minimal_valid_output():
    """Only the required Wegovy questions"""
    return [
        {"question_id": "patient-age", "question_text": "Age", "answer": 45},
        {"question_id": "patient-gender", "question_text": "Gender", "answer": "Female"},
        {"question_id": "current-bmi", "question_text": "BMI", "answer": 32.5},
        {"question_id": "bmi-criteria", "question_text": "Criteria", "answer": True},
        {"question_id": "medical-necessity", "question_text": "Necessary", "answer": True},
        {"question_id": "attestation-date", "question_text": "Date", "answer": "2025-09-13"},
    ]


class RecordingWriter:
    """In-memory stand-in for a FHIR client's create call"""

    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def create_resource(self, resource_type, resource):
        self.calls.append((resource_type, resource))
        if self.error is not None:
            raise self.error
        return {**resource, "id": f"qr-{len(self.calls)}"}


@pytest.fixture
def recording_writer():
    return RecordingWriter()


@pytest.fixture
def writer_factory():
    """Build writers that fail with a given exception"""
    return RecordingWriter
