"""Shared fixtures for the document builder tests."""

from typing import Any

import pytest

from docbuilder.forms.dispatcher import DispatchState, GenerationDispatcher
from docbuilder.forms.models import GeneratedDocument, GenerationRequest, Template, VariableDefinition
from docbuilder.interfaces.document_api import BaseDocumentAPI, DocumentAPIError

NRIC_PATTERN = "^[STFG][0-9]{7}[A-Z]$"
UEN_PATTERN = "^[0-9]{8,10}[A-Z]$"


def make_variable(**overrides: Any) -> VariableDefinition:
    """Build a VariableDefinition with sensible defaults."""
    data: dict[str, Any] = {
        "name": "full_name",
        "display_label": "Full Name",
        "type": "text",
    }
    data.update(overrides)
    return VariableDefinition(**data)


@pytest.fixture
def template() -> Template:
    return Template(
        id="tpl-001",
        title="Tenancy Agreement",
        description="Residential tenancy agreement for HDB flats",
        category="property",
        legal_review_required=True,
    )


@pytest.fixture
def definitions() -> list[VariableDefinition]:
    """A representative tenancy agreement form."""
    return [
        make_variable(name="tenant_name", display_label="Tenant Name", is_required=True),
        make_variable(
            name="tenant_email",
            display_label="Tenant Email",
            type="email",
            is_required=True,
        ),
        make_variable(name="tenant_phone", display_label="Tenant Phone", type="phone"),
        make_variable(
            name="tenant_nric",
            display_label="Tenant NRIC",
            type="nric",
            validation_pattern=NRIC_PATTERN,
        ),
        make_variable(
            name="monthly_rent",
            display_label="Monthly Rent",
            type="number",
            is_required=True,
            default_value="2500",
        ),
        make_variable(
            name="lease_term",
            display_label="Lease Term",
            type="select",
            select_options=["12 months", "24 months"],
            default_value="12 months",
        ),
        make_variable(
            name="special_terms",
            display_label="Special Terms",
            type="textarea",
            description="Any additional clauses",
        ),
    ]


@pytest.fixture
def valid_values() -> dict[str, str]:
    return {
        "tenant_name": "Tan Ah Kow",
        "tenant_email": "ahkow@example.com",
        "tenant_phone": "+65 9123-4567",
        "tenant_nric": "S1234567A",
        "monthly_rent": "2500",
        "lease_term": "12 months",
    }


class FakeDocumentAPI(BaseDocumentAPI):
    """In-memory backend that records generation requests."""

    def __init__(self, error: DocumentAPIError | None = None):
        self.requests: list[GenerationRequest] = []
        self.error = error
        self.state_during_request: DispatchState | None = None
        self.dispatcher: GenerationDispatcher | None = None

    def get_template(self, template_id):
        raise NotImplementedError

    def get_variables(self, template_id):
        raise NotImplementedError

    def health_check(self):
        return True

    def generate_document(self, request):
        self.requests.append(request)
        if self.dispatcher is not None:
            self.state_during_request = self.dispatcher.state
        if self.error is not None:
            raise self.error
        return GeneratedDocument(
            filename="server-name.bin",
            content=b"%PDF-1.7 fake",
            output_format=request.output_format,
            media_type=request.output_format.media_type,
        )
