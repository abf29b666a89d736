"""Mapping from variable types to input controls.

This module decides which control a variable gets and what that control
shows. It holds no widget code, so the same descriptors drive the Streamlit
front end and the /forms/fields endpoint.
"""

import enum

from pydantic import BaseModel, Field

from docbuilder.forms.models import VariableDefinition, VariableType


class ControlKind(str, enum.Enum):
    """Concrete input controls a field can be rendered as."""

    TEXT_AREA = "text_area"
    SELECT = "select"
    NUMBER = "number"
    DATE = "date"
    EMAIL = "email"
    TEXT = "text"


def control_for(variable_type: VariableType) -> ControlKind:
    """Return the control used for a variable type.

    Raises:
        ValueError: If the type has no control.
    """
    match variable_type:
        case VariableType.TEXTAREA:
            return ControlKind.TEXT_AREA
        case VariableType.SELECT:
            return ControlKind.SELECT
        case VariableType.NUMBER:
            return ControlKind.NUMBER
        case VariableType.DATE:
            return ControlKind.DATE
        case VariableType.EMAIL:
            return ControlKind.EMAIL
        case (
            VariableType.TEXT
            | VariableType.PHONE
            | VariableType.NRIC
            | VariableType.UEN
            | VariableType.CURRENCY
        ):
            return ControlKind.TEXT
        case _:
            raise ValueError(f"No control for variable type: {variable_type!r}")


class FieldControl(BaseModel):
    """Everything a front end needs to draw one field."""

    key: str = Field(description="Variable name the control writes to")
    kind: ControlKind
    label: str
    value: str = ""
    placeholder: str | None = None
    options: list[str] = Field(default_factory=list)
    help_text: str | None = Field(
        default=None, description="Description, shown only while there is no error"
    )
    error: str | None = None
    required: bool = False


def describe_field(
    definition: VariableDefinition,
    value: str = "",
    error: str | None = None,
) -> FieldControl:
    """Build the control descriptor for a definition and its current state."""
    kind = control_for(definition.type)
    label = definition.display_label + (" *" if definition.is_required else "")

    if kind is ControlKind.SELECT:
        placeholder = f"Select {definition.display_label}"
        options = list(definition.select_options or [])
    else:
        placeholder = definition.description
        options = []

    return FieldControl(
        key=definition.name,
        kind=kind,
        label=label,
        value=value,
        placeholder=placeholder,
        options=options,
        help_text=definition.description if error is None else None,
        error=error,
        required=definition.is_required,
    )
