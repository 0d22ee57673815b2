"""Required-field rule.

A required field must be present and contain something other than
whitespace. Used for the beneficiary/sender names and sender phone of a
transaction, and the names and phone of a new customer.
"""

from typing import Iterable, Optional

from app.models import Violation


def is_blank(value: Optional[str]) -> bool:
    """True when a string field is missing, empty, or only whitespace."""
    return value is None or not value.strip()


def check_required(
    fields: Iterable[tuple[str, str, Optional[str]]],
) -> list[Violation]:
    """Check (field, label, value) triples, one REQUIRED violation per blank."""
    violations: list[Violation] = []
    for field, label, value in fields:
        if is_blank(value):
            violations.append(
                Violation(
                    field=field,
                    kind="REQUIRED",
                    message=f"{label} is required",
                )
            )
    return violations
