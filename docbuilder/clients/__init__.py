"""Concrete backend clients."""

from docbuilder.clients.http import HttpDocumentAPI

__all__ = [
    "HttpDocumentAPI",
]
