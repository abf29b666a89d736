"""Document API interface.

Defines the abstract contract between the form engine and the backend that
owns templates, variable definitions, and document generation.
"""

from abc import ABC, abstractmethod

from docbuilder.forms.models import GeneratedDocument, GenerationRequest, Template, VariableDefinition


class BaseDocumentAPI(ABC):
    """Abstract base class for document backends."""

    @abstractmethod
    def get_template(self, template_id: str) -> Template:
        """Fetch a template descriptor.

        Args:
            template_id: ID of the template to load.

        Returns:
            The Template.

        Raises:
            DefinitionFetchError: If the template cannot be loaded.
        """

    @abstractmethod
    def get_variables(self, template_id: str) -> list[VariableDefinition]:
        """Fetch the variable definitions of a template.

        Args:
            template_id: ID of the template whose variables to load.

        Returns:
            Definitions in display order.

        Raises:
            DefinitionFetchError: If the definitions cannot be loaded or are
                malformed.
        """

    @abstractmethod
    def generate_document(self, request: GenerationRequest) -> GeneratedDocument:
        """Ask the backend to render a document.

        Args:
            request: Template ID, variable values and output format.

        Returns:
            The generated document bytes.

        Raises:
            DocumentAPIError: If the endpoint is unreachable or rejects the
                request.
        """

    @abstractmethod
    def health_check(self) -> bool:
        """Return True if the backend answers its health endpoint."""


class DocumentAPIError(Exception):
    """Exception raised when a backend call fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class DefinitionFetchError(DocumentAPIError):
    """Exception raised when a template or its variables cannot be loaded."""

    pass
