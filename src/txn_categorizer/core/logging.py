"""Structured logging with PII filtering.

Transaction descriptions are free text typed by users or copied from bank
statements, so they can contain card numbers, e-mail addresses or phone
numbers. Everything that reaches a log line goes through ``filter_pii``
when the JSON formatter is active.
"""

import json
import logging
import re
import sys

from txn_categorizer.config import Settings

# PII patterns to filter from logs
PII_PATTERNS = [
    # Card numbers (13-19 digits, with or without spaces/dashes)
    (re.compile(r"\b\d{4}[\s-]?\d{4}[\s-]?\d{4}[\s-]?\d{1,7}\b"), "[CARD]"),
    # Email addresses
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "[EMAIL]"),
    # Phone numbers: international format, or Vietnamese mobile (0 + 9 digits)
    (re.compile(r"\+\d{1,3}[-.\s]?\(?\d{2,4}\)?[-.\s]?\d{3,4}[-.\s]?\d{3,5}"), "[PHONE]"),
    (re.compile(r"\b0\d{9}\b"), "[PHONE]"),
]

# Extra fields copied verbatim into JSON log lines when present.
_EXTRA_FIELDS = (
    "user_id",
    "category_id",
    "rule_id",
    "keyword_id",
    "mapping_id",
    "region",
    "error_code",
    "operation",
    "source",
    "rules_count",
    "keywords_count",
    "pending",
)


def filter_pii(text: str) -> str:
    """Remove PII from text using regex patterns.

    Args:
        text: Input text that may contain PII

    Returns:
        Text with PII replaced by placeholders
    """
    if not text:
        return text

    filtered = text
    for pattern, replacement in PII_PATTERNS:
        filtered = pattern.sub(replacement, filtered)

    return filtered


class JSONLogFormatter(logging.Formatter):
    """Format log records as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": filter_pii(record.getMessage()),
        }

        for field in _EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value if isinstance(value, (int, float, bool)) else str(value)

        if record.exc_info:
            log_data["exception"] = filter_pii(self.formatException(record.exc_info))

        return json.dumps(log_data, ensure_ascii=False)


def configure_logging(settings: Settings) -> None:
    """Install a root handler according to settings.

    JSON output is meant for shared environments; plain text is easier to
    read during development.
    """
    handler = logging.StreamHandler(sys.stderr)
    if settings.log_json:
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(settings.log_level.upper())
