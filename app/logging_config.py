"""Logging setup with PII redaction.

Customer names, phone numbers, emails and dates of birth never reach the
log stream. Log transaction/customer ids instead.
"""

import logging
import re
import sys
from typing import Any

PII_REDACT_KEYS = frozenset(
    {
        "sender_name",
        "beneficiary_name",
        "full_name",
        "first_name",
        "last_name",
        "phone",
        "email",
        "dob",
        "address",
        "account_number",
    }
)
PII_KEY_PATTERN = re.compile(
    r"(\b" + "|".join(re.escape(k) for k in sorted(PII_REDACT_KEYS)) + r")[\s=:]+[^\s,\)\]]+",
    re.IGNORECASE,
)

# Bare values logged without a key.
EMAIL_VALUE_PATTERN = re.compile(r"[\w.+'-]+@[\w-]+(\.[\w-]+)+", re.ASCII)
PHONE_VALUE_PATTERN = re.compile(r"\+\d{8,15}\b", re.ASCII)


def _redact_message(msg: Any) -> str:
    """Replace PII key=value pairs, emails and phone numbers with [REDACTED]."""
    if not isinstance(msg, str):
        msg = str(msg)
    msg = PII_KEY_PATTERN.sub(r"\1=[REDACTED]", msg)
    msg = EMAIL_VALUE_PATTERN.sub("[REDACTED]", msg)
    return PHONE_VALUE_PATTERN.sub("[REDACTED]", msg)


class PIIRedactionFilter(logging.Filter):
    """Redacts PII from the fully formatted log message."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Malformed format args are reported by Handler.handleError on emit.
            return True
        record.msg = _redact_message(message)
        record.args = ()
        return True


def setup_logging(log_level: str = "INFO") -> None:
    """Configure the root logger: stdout, PII redaction on app loggers."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
        stream=sys.stdout,
        force=True,
    )
    for handler in logging.getLogger().handlers:
        handler.addFilter(PIIRedactionFilter())
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for module `name`."""
    return logging.getLogger(name)
