"""Closed-set membership for proof-of-address type and source of funds.

Both fields are optional below the enhanced AML threshold, but a supplied
value must always be one of the known codes.
"""

from app.models import (
    PROOF_OF_ADDRESS_TYPES,
    SOURCE_OF_FUNDS_CATEGORIES,
    TransactionRequest,
    Violation,
)


def check_enum_fields(request: TransactionRequest) -> list[Violation]:
    checks = [
        ("proofOfAddressType", request.proof_of_address_type, PROOF_OF_ADDRESS_TYPES),
        ("sourceOfFunds", request.source_of_funds, SOURCE_OF_FUNDS_CATEGORIES),
    ]

    violations: list[Violation] = []
    for field, value, allowed in checks:
        if not value:
            continue
        if value not in allowed:
            violations.append(
                Violation(
                    field=field,
                    kind="INVALID_ENUM_VALUE",
                    message=f"'{value}' is not a valid {field}",
                    context={"allowed": list(allowed)},
                )
            )
    return violations
