"""Email format rule.

Email is optional everywhere: None and "" both mean "not supplied" and
pass. Anything else must look like local@domain.tld.
"""

import re
from typing import Optional

from app.models import Violation

EMAIL_PATTERN = re.compile(
    r"(?!\.)(?!.*\.\.)[A-Z0-9_'+\-.]*[A-Z0-9_+\-]@([A-Z0-9][A-Z0-9\-]*\.)+[A-Z]{2,}",
    re.IGNORECASE | re.ASCII,
)


def is_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value) is not None


def check_email(field: str, value: Optional[str]) -> list[Violation]:
    """Validate an optional email field."""
    if not value:
        return []
    if is_email(value):
        return []
    return [
        Violation(
            field=field,
            kind="INVALID_EMAIL_FORMAT",
            message="Invalid email address",
        )
    ]
