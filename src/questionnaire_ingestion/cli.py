#!/usr/bin/env python3
"""
Questionnaire Conversion Script

Converts a JSON file of AI question/answer items into a FHIR
QuestionnaireResponse.

Usage:
    convert-questionnaire answers.json --form-id wegovy-prior-auth --patient-id 123
    convert-questionnaire answers.json --form-id f1 --patient-id 123 --mode schema --strict
    convert-questionnaire answers.json --form-id f1 --patient-id 123 --output response.json
"""

import argparse
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from .constants.questionnaires import get_questionnaire_schema
from .constants.terminology import RESPONSE_STATUSES
from .core.models import ResponseMetadata
from .fhir_utils.builder import QuestionnaireResponseBuilder
from .fhir_utils.item_converter import get_item_converter
from .fhir_utils.validator import QuestionnaireOutputValidator, validate_questionnaire_output
from .utils.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert AI questionnaire output to a FHIR QuestionnaireResponse"
    )
    parser.add_argument("input", type=Path, help="JSON file with a list of question/answer items")
    parser.add_argument("--form-id", required=True, help="Questionnaire id")
    parser.add_argument("--patient-id", required=True, help="Patient id")
    parser.add_argument(
        "--timestamp",
        help="Authored timestamp (ISO-8601, defaults to now)"
    )
    parser.add_argument("--author-id", help="Practitioner id")
    parser.add_argument("--encounter-id", help="Encounter id")
    parser.add_argument("--status", choices=RESPONSE_STATUSES, default="completed")
    parser.add_argument(
        "--mode",
        choices=("generic", "schema"),
        help="Converter strategy (defaults to CONVERSION_MODE)"
    )
    parser.add_argument("--strict", action="store_true", help="Validate before converting")
    parser.add_argument("--output", type=Path, help="Write JSON here instead of stdout")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level)

    with open(args.input) as f:
        output = json.load(f)

    schema = get_questionnaire_schema(args.form_id)

    if args.strict:
        if schema is not None:
            result = QuestionnaireOutputValidator(schema).validate(output)
        else:
            result = validate_questionnaire_output(output)
        if not result.is_valid:
            print(f"ERROR: {len(result.errors)} validation errors", file=sys.stderr)
            for error in result.errors:
                print(f"  - {error}", file=sys.stderr)
            return 1

    metadata = ResponseMetadata(
        form_id=args.form_id,
        patient_id=args.patient_id,
        timestamp=args.timestamp or datetime.now(timezone.utc).isoformat(),
        author_id=args.author_id,
        encounter_id=args.encounter_id,
        status=args.status,
    )

    builder = QuestionnaireResponseBuilder(
        converter=get_item_converter(args.mode, schema=schema)
    )
    rendered = json.dumps(builder.build_dict(output, metadata), indent=2)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(rendered + "\n")
        print(f"Wrote QuestionnaireResponse to {args.output}", file=sys.stderr)
    else:
        print(rendered)

    return 0


if __name__ == "__main__":
    sys.exit(main())
