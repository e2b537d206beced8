# ============================================================================
# FILE: tests/unit/test_logging.py
# ============================================================================
"""
Unit tests for logging setup
"""

import json
import logging

import pytest

from questionnaire_ingestion.utils.logging import (
    JsonFormatter,
    conversion_context,
    get_logger,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def _record(**extra):
    record = logging.LogRecord(
        name="questionnaire_ingestion.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="Built %s",
        args=("response",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_fields():
    data = json.loads(JsonFormatter().format(_record()))

    assert data["level"] == "INFO"
    assert data["logger"] == "questionnaire_ingestion.test"
    assert data["message"] == "Built response"
    assert data["line"] == 10
    assert "timestamp" in data
    assert "form_id" not in data


def test_json_formatter_context_fields():
    data = json.loads(JsonFormatter().format(
        _record(form_id="wegovy-prior-auth", item_count=9, unrelated="x")
    ))

    assert data["form_id"] == "wegovy-prior-auth"
    assert data["item_count"] == 9
    assert "unrelated" not in data


def test_setup_logging_writes_file(restore_root_logger, tmp_path):
    log_file = tmp_path / "logs" / "engine.log"
    setup_logging(level="DEBUG", log_file=log_file, format_json=True)

    get_logger("questionnaire_ingestion.test").debug("hello", extra={"form_id": "f1"})
    for handler in restore_root_logger.handlers:
        handler.flush()

    line = log_file.read_text().strip().splitlines()[-1]
    data = json.loads(line)
    assert data["message"] == "hello"
    assert data["form_id"] == "f1"
    assert restore_root_logger.level == logging.DEBUG


def test_setup_logging_plain_format(restore_root_logger):
    setup_logging(level="warning", format_json=False)

    assert restore_root_logger.level == logging.WARNING
    assert not isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)


def test_conversion_context_stamps_records(caplog):
    logger = get_logger("questionnaire_ingestion.test")

    with caplog.at_level(logging.INFO, logger="questionnaire_ingestion"):
        with conversion_context(form_id="wegovy-prior-auth"):
            logger.info("inside", extra={"item_count": 3})
        logger.info("outside")

    inside, outside = caplog.records
    assert inside.form_id == "wegovy-prior-auth"
    assert inside.item_count == 3
    assert not hasattr(outside, "form_id")


def test_conversion_context_restores_factory():
    factory = logging.getLogRecordFactory()

    with pytest.raises(RuntimeError):
        with conversion_context(form_id="f1"):
            raise RuntimeError("boom")

    assert logging.getLogRecordFactory() is factory


def test_service_logs_carry_form_id(caplog, recording_writer, sample_wegovy_output):
    from questionnaire_ingestion.services.form_population import FormPopulationService

    service = FormPopulationService(recording_writer, strict=False)
    with caplog.at_level(logging.INFO, logger="questionnaire_ingestion"):
        service.create_questionnaire_response({
            "formId": "wegovy-prior-auth",
            "patientId": "p1",
            "timestamp": "2025-09-13T10:00:00Z",
            "answers": sample_wegovy_output,
        })

    assert caplog.records
    assert all(record.form_id == "wegovy-prior-auth" for record in caplog.records)
    assert caplog.records[-1].resource_id == "qr-1"
