# src/questionnaire_ingestion/services/__init__.py

from .form_population import (
    FormPopulationCompletedEvent,
    FormPopulationService,
    ResourceWriter,
)

__all__ = [
    "FormPopulationCompletedEvent",
    "FormPopulationService",
    "ResourceWriter",
]
