"""Dynamic form engine: models, validation, state, rendering and dispatch."""

from docbuilder.forms.dispatcher import DispatchState, GenerationDispatcher
from docbuilder.forms.models import (
    GeneratedDocument,
    GenerationRequest,
    OutputFormat,
    Template,
    VariableCategory,
    VariableDefinition,
    VariableType,
)
from docbuilder.forms.renderer import ControlKind, FieldControl, control_for, describe_field
from docbuilder.forms.result import Err, ErrorKind, Ok, Result
from docbuilder.forms.state import FormState
from docbuilder.forms.validation import validate_field, validate_form

__all__ = [
    "ControlKind",
    "DispatchState",
    "Err",
    "ErrorKind",
    "FieldControl",
    "FormState",
    "GeneratedDocument",
    "GenerationDispatcher",
    "GenerationRequest",
    "Ok",
    "OutputFormat",
    "Result",
    "Template",
    "VariableCategory",
    "VariableDefinition",
    "VariableType",
    "control_for",
    "describe_field",
    "validate_field",
    "validate_form",
]
