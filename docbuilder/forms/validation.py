"""Validation engine for template variables.

Every check takes a VariableDefinition and the raw string value held by the
form and returns either None (valid) or a single human-readable message.
Checks never raise for bad input and perform no I/O.

validate_field composes the checks in a fixed order (required, type,
pattern, length) and stops at the first failure, so an empty required field
never also reports a format problem.
"""

import math
import re
from collections.abc import Callable, Iterable, Mapping

from docbuilder.forms.models import VariableDefinition, VariableType

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_DIGITS = 8
COUNTRY_CODE = "65"
NUMBER_REGEX = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
TEXTAREA_MAX_LENGTH = 2000

EMAIL_MESSAGE = "Please enter a valid email address"
PHONE_MESSAGE = "Please enter a valid 8-digit Singapore phone number"
NUMBER_MESSAGE = "Please enter a valid number"
NRIC_MESSAGE = "Please enter a valid NRIC (e.g., S1234567A)"
UEN_MESSAGE = "Please enter a valid UEN (e.g., 201912345K)"

Check = Callable[[VariableDefinition, str], str | None]


def _is_blank(value: str | None) -> bool:
    return value is None or value.strip() == ""


def _is_number(value: str) -> bool:
    candidate = value.strip()
    if not NUMBER_REGEX.match(candidate):
        return False
    try:
        return math.isfinite(float(candidate))
    except (ValueError, OverflowError):
        return False


def validate_required(definition: VariableDefinition, value: str | None) -> str | None:
    """Fail when a required field is empty or whitespace-only."""
    if definition.is_required and _is_blank(value):
        return f"{definition.display_label} is required"
    return None


def validate_type(definition: VariableDefinition, value: str | None) -> str | None:
    """Apply the intrinsic check for the variable's type.

    Only email, phone and number carry an intrinsic check. Other types rely
    on their validation pattern.
    """
    if not value:
        return None

    match definition.type:
        case VariableType.EMAIL:
            return None if EMAIL_REGEX.match(value) else EMAIL_MESSAGE
        case VariableType.PHONE:
            digits = re.sub(r"\D", "", value)
            if len(digits) == PHONE_DIGITS + len(COUNTRY_CODE) and digits.startswith(COUNTRY_CODE):
                digits = digits[len(COUNTRY_CODE):]
            return None if len(digits) == PHONE_DIGITS else PHONE_MESSAGE
        case VariableType.NUMBER:
            return None if _is_number(value) else NUMBER_MESSAGE
        case _:
            return None


def pattern_hint(definition: VariableDefinition) -> str:
    """Return the message shown when a value misses the validation pattern.

    A hint attached to the definition wins. Rows without one fall back to
    hints inferred from the variable name, checked nric before uen. The
    match is case-sensitive, so only lowercase name parts count.
    """
    if definition.validation_message:
        return definition.validation_message
    name = definition.name
    if "nric" in name:
        return NRIC_MESSAGE
    if "uen" in name:
        return UEN_MESSAGE
    return f"Invalid format for {definition.display_label}"


def validate_pattern(definition: VariableDefinition, value: str | None) -> str | None:
    """Require a non-empty value to match the whole validation pattern."""
    pattern = definition.compiled_pattern
    if not value or pattern is None:
        return None
    if pattern.fullmatch(value):
        return None
    return pattern_hint(definition)


def validate_length(definition: VariableDefinition, value: str | None) -> str | None:
    """Enforce min_length/max_length, and the default textarea ceiling."""
    if not value:
        return None

    length = len(value)
    if definition.min_length is not None and length < definition.min_length:
        return f"Minimum {definition.min_length} characters"
    if definition.max_length is not None:
        if length > definition.max_length:
            return f"Maximum {definition.max_length} characters"
    elif definition.type is VariableType.TEXTAREA and length > TEXTAREA_MAX_LENGTH:
        return "Text too long"
    return None


CHECKS: tuple[Check, ...] = (
    validate_required,
    validate_type,
    validate_pattern,
    validate_length,
)


def validate_field(definition: VariableDefinition, value: str | None) -> str | None:
    """Run every check in order and return the first error, if any."""
    for check in CHECKS:
        error = check(definition, value)
        if error is not None:
            return error
    return None


def validate_form(
    definitions: Iterable[VariableDefinition],
    values: Mapping[str, str],
) -> dict[str, str]:
    """Validate every definition against the value map.

    Args:
        definitions: Variable definitions of the open template.
        values: Current form values keyed by variable name. Missing keys are
            treated as empty.

    Returns:
        Mapping of variable name to error message for failing fields only.
        Empty when the whole form is valid.
    """
    errors: dict[str, str] = {}
    for definition in definitions:
        error = validate_field(definition, values.get(definition.name, ""))
        if error is not None:
            errors[definition.name] = error
    return errors
