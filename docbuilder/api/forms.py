"""Form validation API routes.

Exposes the validation engine and the field mapping over HTTP so a backend
can re-check submitted values, and non-Python front ends can render fields,
with exactly the rules the form uses.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from docbuilder.api.schemas import FieldListResponse, FormValidationRequest, FormValidationResponse
from docbuilder.forms.renderer import describe_field
from docbuilder.forms.validation import validate_form

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/forms", tags=["forms"])


def _check_unique_names(request: FormValidationRequest) -> None:
    names = [v.name for v in request.variables]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise HTTPException(
            status_code=422,
            detail=f"Duplicate variable names: {', '.join(duplicates)}",
        )


@router.post(
    "/validate",
    response_model=FormValidationResponse,
    status_code=status.HTTP_200_OK,
)
async def validate_submission(request: FormValidationRequest) -> FormValidationResponse:
    """Validate submitted values against a template's variable definitions.

    Args:
        request: Definitions and the submitted values.

    Returns:
        FormValidationResponse with one error per failing variable.

    Raises:
        HTTPException: If two definitions share a name.
    """
    _check_unique_names(request)

    errors = validate_form(request.variables, request.values)
    if errors:
        logger.info(f"Submission rejected: {len(errors)} invalid fields ({sorted(errors)})")

    return FormValidationResponse(valid=not errors, errors=errors)


@router.post("/fields", response_model=FieldListResponse)
async def describe_fields(request: FormValidationRequest) -> FieldListResponse:
    """Return the control descriptor for each variable, filled with the given values."""
    _check_unique_names(request)

    return FieldListResponse(
        fields=[
            describe_field(definition, request.values.get(definition.name, ""))
            for definition in request.variables
        ]
    )
