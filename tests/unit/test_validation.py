"""Unit tests for the validation engine."""

import pytest

from docbuilder.forms.models import VariableType
from docbuilder.forms.validation import (
    EMAIL_MESSAGE,
    NRIC_MESSAGE,
    NUMBER_MESSAGE,
    PHONE_MESSAGE,
    UEN_MESSAGE,
    validate_field,
    validate_form,
    validate_length,
    validate_pattern,
    validate_required,
    validate_type,
)
from tests.conftest import NRIC_PATTERN, UEN_PATTERN, make_variable

ALL_TYPES = [t for t in VariableType]


def _options_for(var_type: VariableType) -> dict:
    return {"select_options": ["A", "B"]} if var_type is VariableType.SELECT else {}


# =============================================================================
# Required Check Tests
# =============================================================================


class TestValidateRequired:
    """Test suite for validate_required."""

    @pytest.mark.parametrize("var_type", ALL_TYPES)
    @pytest.mark.parametrize("value", ["", "   ", "\t\n"])
    def test_required_field_rejects_empty(self, var_type, value):
        """Test that empty and whitespace-only values fail for any required type."""
        definition = make_variable(
            display_label="Company Name",
            type=var_type,
            is_required=True,
            validation_pattern=UEN_PATTERN,
            **_options_for(var_type),
        )

        error = validate_field(definition, value)

        assert error == "Company Name is required"

    def test_none_counts_as_empty(self):
        """Test that a missing value is treated as empty."""
        definition = make_variable(is_required=True)
        assert validate_required(definition, None) == "Full Name is required"

    def test_optional_field_never_requires(self):
        """Test that optional fields pass the required check when empty."""
        definition = make_variable(is_required=False)
        assert validate_required(definition, "") is None

    @pytest.mark.parametrize("var_type", ALL_TYPES)
    def test_optional_empty_field_is_valid(self, var_type):
        """Test that empty optional fields never error, whatever the type or pattern."""
        definition = make_variable(
            type=var_type,
            validation_pattern=NRIC_PATTERN,
            min_length=5,
            **_options_for(var_type),
        )

        assert validate_field(definition, "") is None


# =============================================================================
# Type Check Tests
# =============================================================================


class TestValidateType:
    """Test suite for validate_type."""

    @pytest.mark.parametrize(
        "value",
        ["ahkow@example.com", "a.b+c@mail.gov.sg"],
    )
    def test_valid_email(self, value):
        definition = make_variable(type="email")
        assert validate_type(definition, value) is None

    @pytest.mark.parametrize(
        "value",
        ["not-an-email", "missing@tld", "two words@example.com", "@example.com"],
    )
    def test_invalid_email(self, value):
        definition = make_variable(type="email")
        assert validate_type(definition, value) == EMAIL_MESSAGE

    @pytest.mark.parametrize(
        "value",
        ["91234567", "+65 9123-4567", "+65 91234567", "6591234567", "6123 4567", "(9)1234567"],
    )
    def test_valid_phone(self, value):
        """Test that phone numbers are checked on their digits, minus a 65 country code."""
        definition = make_variable(type="phone")
        assert validate_type(definition, value) is None

    @pytest.mark.parametrize(
        "value",
        ["1234567", "123456789", "+65 9123456", "+1 91234567", "+44 2071234567", "phone"],
    )
    def test_invalid_phone(self, value):
        definition = make_variable(type="phone")
        assert validate_type(definition, value) == PHONE_MESSAGE

    @pytest.mark.parametrize("value", ["2500", "-3", "2500.50", ".5", "1e3", " 42 "])
    def test_valid_number(self, value):
        definition = make_variable(type="number")
        assert validate_type(definition, value) is None

    @pytest.mark.parametrize("value", ["abc", "12abc", "nan", "inf", "1_000", "1e999", "1,000"])
    def test_invalid_number(self, value):
        """Test that non-finite and malformed numbers are rejected."""
        definition = make_variable(type="number")
        assert validate_type(definition, value) == NUMBER_MESSAGE

    @pytest.mark.parametrize(
        "var_type",
        [VariableType.TEXT, VariableType.DATE, VariableType.NRIC, VariableType.UEN, VariableType.CURRENCY],
    )
    def test_other_types_have_no_intrinsic_check(self, var_type):
        definition = make_variable(type=var_type)
        assert validate_type(definition, "anything at all") is None

    def test_empty_value_skips_type_check(self):
        definition = make_variable(type="email")
        assert validate_type(definition, "") is None


# =============================================================================
# Pattern Check Tests
# =============================================================================


class TestValidatePattern:
    """Test suite for validate_pattern."""

    def test_nric_hint_from_name(self):
        """Test that a variable named like an NRIC gets the NRIC hint."""
        definition = make_variable(
            name="nric_number", display_label="NRIC", validation_pattern=NRIC_PATTERN
        )

        error = validate_field(definition, "Z1234567A")

        assert error == NRIC_MESSAGE
        assert "valid NRIC (e.g., S1234567A)" in error

    def test_uen_hint_from_name(self):
        definition = make_variable(
            name="company_uen", display_label="UEN", validation_pattern=UEN_PATTERN
        )
        assert validate_pattern(definition, "ABC") == UEN_MESSAGE

    def test_nric_checked_before_uen(self):
        """Test that a name matching both hints gets the NRIC one."""
        definition = make_variable(
            name="nric_or_uen", display_label="ID", validation_pattern=NRIC_PATTERN
        )
        assert validate_pattern(definition, "bad") == NRIC_MESSAGE

    def test_attached_message_wins_over_name(self):
        """Test that a hint on the definition takes precedence over the name."""
        definition = make_variable(
            name="nric_or_uen",
            display_label="ID",
            validation_pattern=NRIC_PATTERN,
            validation_message="Enter an NRIC or UEN",
        )
        assert validate_pattern(definition, "bad") == "Enter an NRIC or UEN"

    def test_generic_message(self):
        definition = make_variable(
            name="postal_code", display_label="Postal Code", validation_pattern=r"[0-9]{6}"
        )
        assert validate_pattern(definition, "12345") == "Invalid format for Postal Code"

    def test_name_hint_is_case_sensitive(self):
        definition = make_variable(
            name="NRIC_number", display_label="NRIC", validation_pattern=NRIC_PATTERN
        )
        assert validate_pattern(definition, "bad") == "Invalid format for NRIC"

    def test_pattern_must_match_whole_value(self):
        """Test that a partial match is not accepted."""
        definition = make_variable(name="postal_code", validation_pattern=r"[0-9]{6}")

        assert validate_pattern(definition, "123456") is None
        assert validate_pattern(definition, "123456 extra") is not None
        assert validate_pattern(definition, "x123456") is not None

    def test_pattern_runs_on_raw_value(self):
        """Test that the pattern sees the value before any trimming or case change."""
        definition = make_variable(name="nric", validation_pattern=NRIC_PATTERN)

        assert validate_pattern(definition, "S1234567A") is None
        assert validate_pattern(definition, "s1234567a") == NRIC_MESSAGE
        assert validate_pattern(definition, " S1234567A") == NRIC_MESSAGE

    def test_no_pattern_no_error(self):
        definition = make_variable()
        assert validate_pattern(definition, "anything") is None


# =============================================================================
# Length Check Tests
# =============================================================================


class TestValidateLength:
    """Test suite for validate_length."""

    def test_min_length(self):
        definition = make_variable(min_length=3)
        assert validate_length(definition, "ab") == "Minimum 3 characters"
        assert validate_length(definition, "abc") is None

    def test_max_length(self):
        definition = make_variable(max_length=5)
        assert validate_length(definition, "abcdef") == "Maximum 5 characters"
        assert validate_length(definition, "abcde") is None

    def test_textarea_default_ceiling(self):
        definition = make_variable(type="textarea")
        assert validate_length(definition, "x" * 2000) is None
        assert validate_length(definition, "x" * 2001) == "Text too long"

    def test_explicit_max_overrides_textarea_ceiling(self):
        definition = make_variable(type="textarea", max_length=5000)
        assert validate_length(definition, "x" * 3000) is None


# =============================================================================
# Composition Tests
# =============================================================================


class TestValidateField:
    """Test suite for validate_field ordering."""

    def test_email_scenario(self):
        definition = make_variable(
            name="email", type="email", is_required=True, display_label="Email"
        )
        assert validate_field(definition, "not-an-email") == "Please enter a valid email address"

    def test_phone_scenario(self):
        definition = make_variable(name="phone", type="phone", display_label="Phone")
        assert validate_field(definition, "+65 9123-4567") is None

    def test_type_error_suppresses_pattern_error(self):
        """Test that a type failure is reported instead of a pattern failure."""
        definition = make_variable(
            name="contact_email",
            type="email",
            validation_pattern=r".*@example\.com",
        )
        assert validate_field(definition, "nope") == EMAIL_MESSAGE

    def test_pattern_error_suppresses_length_error(self):
        definition = make_variable(
            name="code", validation_pattern=r"[A-Z]+", max_length=2
        )
        assert validate_field(definition, "abc") == "Invalid format for Full Name"

    def test_valid_value_returns_none(self):
        definition = make_variable(
            name="nric_number", validation_pattern=NRIC_PATTERN, is_required=True
        )
        assert validate_field(definition, "S1234567A") is None


# =============================================================================
# Form Validation Tests
# =============================================================================


class TestValidateForm:
    """Test suite for validate_form."""

    def test_valid_form_returns_empty_map(self, definitions, valid_values):
        assert validate_form(definitions, valid_values) == {}

    def test_collects_one_error_per_failing_field(self, definitions):
        values = {
            "tenant_email": "bad",
            "tenant_phone": "123",
            "tenant_nric": "X",
            "monthly_rent": "lots",
        }

        errors = validate_form(definitions, values)

        assert errors == {
            "tenant_name": "Tenant Name is required",
            "tenant_email": EMAIL_MESSAGE,
            "tenant_phone": PHONE_MESSAGE,
            "tenant_nric": NRIC_MESSAGE,
            "monthly_rent": NUMBER_MESSAGE,
        }

    def test_missing_values_read_as_empty(self, definitions):
        errors = validate_form(definitions, {})

        assert set(errors) == {"tenant_name", "tenant_email", "monthly_rent"}

    def test_ignores_values_without_definition(self, definitions, valid_values):
        values = {**valid_values, "stale_field": ""}
        assert validate_form(definitions, values) == {}
