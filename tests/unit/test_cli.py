# ============================================================================
# FILE: tests/unit/test_cli.py
# ============================================================================
"""
Unit tests for the convert-questionnaire command
"""

import json
import logging

import pytest

from questionnaire_ingestion.cli import main


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def answers_file(tmp_path, sample_wegovy_output):
    path = tmp_path / "answers.json"
    path.write_text(json.dumps(sample_wegovy_output))
    return path


def test_prints_response(answers_file, capsys):
    code = main([
        str(answers_file),
        "--form-id", "wegovy-prior-auth",
        "--patient-id", "patient-456",
        "--timestamp", "2025-09-13T10:00:00Z",
        "--mode", "generic",
        "--log-level", "WARNING",
    ])
    result = json.loads(capsys.readouterr().out)

    assert code == 0
    assert result["resourceType"] == "QuestionnaireResponse"
    assert result["authored"] == "2025-09-13T10:00:00Z"
    assert result["item"][0]["answer"] == [{"valueInteger": 45}]


def test_writes_output_file(answers_file, tmp_path):
    target = tmp_path / "out" / "response.json"
    code = main([
        str(answers_file),
        "--form-id", "wegovy-prior-auth",
        "--patient-id", "patient-456",
        "--mode", "schema",
        "--author-id", "dr-1",
        "--output", str(target),
        "--log-level", "WARNING",
    ])
    result = json.loads(target.read_text())

    assert code == 0
    assert result["author"] == {"reference": "Practitioner/dr-1"}
    assert result["item"][4]["answer"][0]["valueCoding"]["code"] == "44054006"


def test_strict_failure_returns_one(tmp_path, capsys):
    path = tmp_path / "answers.json"
    path.write_text(json.dumps([
        {"question_id": "current-bmi", "question_text": "BMI", "answer": 32.5},
    ]))
    code = main([
        str(path),
        "--form-id", "wegovy-prior-auth",
        "--patient-id", "p1",
        "--strict",
        "--log-level", "WARNING",
    ])
    captured = capsys.readouterr()

    assert code == 1
    assert captured.out == ""
    assert "Missing required questions: patient-age" in captured.err


def test_strict_unknown_form_uses_structural_checks(tmp_path, capsys):
    path = tmp_path / "answers.json"
    path.write_text(json.dumps([]))
    code = main([
        str(path), "--form-id", "other-form", "--patient-id", "p1", "--strict",
        "--log-level", "WARNING",
    ])

    assert code == 1
    assert "Questionnaire output cannot be empty" in capsys.readouterr().err
