"""Tests for the smaller field rules: required, email, amounts, currency, enums."""

import pytest

from app.compliance.rules.amounts import check_amounts
from app.compliance.rules.currency import check_currency
from app.compliance.rules.email import check_email, is_email
from app.compliance.rules.enums import check_enum_fields
from app.compliance.rules.required import check_required, is_blank
from tests.conftest import make_request


class TestRequired:
    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
    def test_blank(self, value):
        assert is_blank(value)

    def test_not_blank(self):
        assert not is_blank("Sina")

    def test_one_violation_per_blank_field(self):
        result = check_required([
            ("beneficiaryName", "Beneficiary name", ""),
            ("senderName", "Sender name", "Tavita"),
            ("senderPhone", "Sender phone", None),
        ])
        assert [v.field for v in result] == ["beneficiaryName", "senderPhone"]
        assert all(v.kind == "REQUIRED" for v in result)
        assert result[0].message == "Beneficiary name is required"


class TestEmail:
    @pytest.mark.parametrize(
        "value",
        ["tavita@example.co.nz", "first.last+tag@mail.example.com", "a_b@x.io"],
    )
    def test_valid(self, value):
        assert is_email(value)

    @pytest.mark.parametrize(
        "value",
        ["plainaddress", "@example.com", "a@b", "a..b@example.com", ".a@example.com",
         "a@example..com", "a b@example.com"],
    )
    def test_invalid(self, value):
        assert not is_email(value)

    def test_absent_and_empty_are_valid(self):
        assert check_email("senderEmail", None) == []
        assert check_email("senderEmail", "") == []

    def test_invalid_reports_field(self):
        result = check_email("senderEmail", "nope")
        assert result[0].field == "senderEmail"
        assert result[0].kind == "INVALID_EMAIL_FORMAT"


class TestAmounts:
    def test_valid_amounts(self):
        assert check_amounts(make_request()) == []

    def test_zero_amount_allowed(self):
        req = make_request(amount=0, fee=0, total_foreign_received=0.0)
        assert check_amounts(req) == []

    def test_negative_amount(self):
        result = check_amounts(
            make_request(amount=-100, total_paid_nzd_cents=400, total_foreign_received=1.0)
        )
        assert [v.field for v in result] == ["amountNzdCents"]
        assert result[0].kind == "INVALID_AMOUNT"

    def test_zero_rate_rejected(self):
        result = check_amounts(make_request(rate=0))
        assert [v.field for v in result] == ["rate"]

    def test_negative_rate_rejected(self):
        result = check_amounts(make_request(rate=-2.1))
        assert "rate" in [v.field for v in result]

    def test_every_bad_field_reported(self):
        req = make_request(
            amount=-1,
            fee=-1,
            rate=0,
            total_paid_nzd_cents=-2,
            total_foreign_received=-0.01,
        )
        assert [v.field for v in check_amounts(req)] == [
            "amountNzdCents",
            "feeNzdCents",
            "rate",
            "totalPaidNzdCents",
            "totalForeignReceived",
        ]


class TestCurrency:
    def test_allowed(self):
        for code in ("WST", "AUD", "USD"):
            assert check_currency(code) == []

    def test_rejected_lists_allowed(self):
        result = check_currency("NZD")
        assert result[0].kind == "INVALID_CURRENCY"
        assert result[0].context["allowed"] == ["WST", "AUD", "USD"]

    def test_case_sensitive(self):
        assert check_currency("usd") != []


class TestEnumFields:
    def test_absent_values_pass(self):
        assert check_enum_fields(make_request()) == []

    def test_known_values_pass(self):
        req = make_request(proof_of_address_type="IRD_LETTER", source_of_funds="SAVINGS")
        assert check_enum_fields(req) == []

    def test_unknown_proof_of_address(self):
        result = check_enum_fields(make_request(proof_of_address_type="PASSPORT"))
        assert [(v.field, v.kind) for v in result] == [
            ("proofOfAddressType", "INVALID_ENUM_VALUE")
        ]

    def test_unknown_source_of_funds(self):
        result = check_enum_fields(make_request(source_of_funds="LOTTERY"))
        assert [v.field for v in result] == ["sourceOfFunds"]
        assert "SALARY_WAGES" in result[0].context["allowed"]

    def test_both_unknown(self):
        req = make_request(proof_of_address_type="X", source_of_funds="Y")
        assert len(check_enum_fields(req)) == 2


class TestNonFiniteAmounts:
    def test_nan_rate_rejected(self):
        result = check_amounts(make_request(rate=float("nan")))
        assert [v.field for v in result] == ["rate"]
        assert result[0].message == "Rate must be a finite number"

    def test_infinite_rate_rejected(self):
        result = check_amounts(make_request(rate=float("inf")))
        assert [v.field for v in result] == ["rate"]

    def test_nan_foreign_amount_rejected(self):
        result = check_amounts(make_request(total_foreign_received=float("nan")))
        assert [v.field for v in result] == ["totalForeignReceived"]

    def test_negative_infinity_foreign_amount_rejected(self):
        result = check_amounts(make_request(total_foreign_received=float("-inf")))
        assert [v.field for v in result] == ["totalForeignReceived"]
