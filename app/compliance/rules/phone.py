"""Phone number format rule.

Phone numbers must be in E.164 shape: an optional leading "+", a first
digit 1-9, then 7 to 14 further digits (8-15 digits in total). Local
trunk-prefixed numbers such as "0211234567" are rejected.

Absent or blank values are skipped here; whether a phone is mandatory is
decided by the required-field and enhanced AML rules.
"""

import re
from typing import Iterable, Optional

from app.compliance.rules.required import is_blank
from app.models import Violation

# re.ASCII keeps \d from matching non-Latin digits (e.g. Arabic-Indic).
E164_PATTERN = re.compile(r"\+?[1-9]\d{7,14}", re.ASCII)


def is_e164(value: str) -> bool:
    """Return True if the whole string is an E.164 phone number."""
    return E164_PATTERN.fullmatch(value) is not None


def check_phone_formats(
    phones: Iterable[tuple[str, Optional[str]]],
) -> list[Violation]:
    """Validate every present, non-empty (field, value) phone pair."""
    violations: list[Violation] = []
    for field, value in phones:
        if is_blank(value):
            continue
        if not is_e164(value):
            violations.append(
                Violation(
                    field=field,
                    kind="INVALID_PHONE_FORMAT",
                    message=(
                        f"Invalid phone (E.164): '{value}' must be digits "
                        "with an optional leading '+', 8 to 15 digits long"
                    ),
                )
            )
    return violations
