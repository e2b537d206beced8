# ============================================================================
# src/questionnaire_ingestion/utils/logging.py
# ============================================================================
"""
Logging for the questionnaire ingestion engine.

Plain text or JSON lines on stderr, optionally mirrored to a file. Conversion
context (form id, item count, strategy, saved resource id) rides on log records
either via `extra=` or via conversion_context().
"""

import json
import logging
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional, Sequence

CONTEXT_FIELDS = ("form_id", "questionnaire", "item_count", "conversion_mode", "resource_id")

TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    format_json: Optional[bool] = None
) -> None:
    """
    Configure the root logger.

    Arguments left as None are read from logging_settings.

    Args:
        level: Logging level name, case-insensitive
        log_file: Also write records here
        format_json: One JSON object per line instead of text
    """
    from ..config.logging_config import logging_settings

    level = (level or logging_settings.LOG_LEVEL).upper()
    log_file = log_file or logging_settings.LOG_FILE
    if format_json is None:
        format_json = logging_settings.LOG_JSON

    if format_json:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=getattr(logging, level), handlers=handlers, force=True)


class JsonFormatter(logging.Formatter):
    """Renders a record as one JSON object, conversion context included."""

    def __init__(self, context_fields: Sequence[str] = CONTEXT_FIELDS):
        super().__init__()
        self.context_fields = tuple(context_fields)

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        log_data.update({
            key: getattr(record, key)
            for key in self.context_fields
            if hasattr(record, key)
        })

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


@contextmanager
def conversion_context(**context) -> Iterator[None]:
    """
    Stamp every record created inside the block with the given attributes.

    Inside the block these attributes must not also be passed through
    `extra=`; logging refuses to overwrite an attribute already on the record.
    """
    previous_factory = logging.getLogRecordFactory()

    def record_factory(*args, **kwargs):
        record = previous_factory(*args, **kwargs)
        for key, value in context.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return record

    logging.setLogRecordFactory(record_factory)
    try:
        yield
    finally:
        logging.setLogRecordFactory(previous_factory)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
