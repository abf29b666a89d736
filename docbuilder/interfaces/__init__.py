"""Abstract base classes for backend collaborators."""

from docbuilder.interfaces.document_api import BaseDocumentAPI, DefinitionFetchError, DocumentAPIError

__all__ = [
    "BaseDocumentAPI",
    "DefinitionFetchError",
    "DocumentAPIError",
]
