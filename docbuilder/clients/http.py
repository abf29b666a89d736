"""HTTP implementation of the document API using httpx."""

import logging
import re
from typing import Any

import httpx
from pydantic import ValidationError

from docbuilder.forms.models import GeneratedDocument, GenerationRequest, Template, VariableDefinition
from docbuilder.interfaces.document_api import BaseDocumentAPI, DefinitionFetchError, DocumentAPIError

logger = logging.getLogger(__name__)

_FILENAME_RE = re.compile(r'filename="?([^";]+)"?')


class HttpDocumentAPI(BaseDocumentAPI):
    """Client for the template, variable and generation endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        generate_timeout: float = 60.0,
        headers: dict[str, str] | None = None,
        client: httpx.Client | None = None,
    ):
        """Initialize the API client.

        Args:
            base_url: Base URL of the API, e.g. ``http://localhost:3000/api``.
            timeout: Timeout in seconds for metadata requests.
            generate_timeout: Timeout in seconds for document generation.
            headers: Extra headers sent with every request.
            client: Pre-built httpx client. Tests pass one with a mock transport.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.generate_timeout = generate_timeout
        self._client = client or httpx.Client(headers=headers or {}, timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpDocumentAPI":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def health_check(self) -> bool:
        """Check if the API is healthy.

        Returns:
            True if API is healthy, False otherwise.
        """
        try:
            response = self._client.get(f"{self.base_url}/health", timeout=5.0)
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    def get_template(self, template_id: str) -> Template:
        data = self._get_json(
            "/admin/templates", params={"id": template_id}, what="template"
        )
        templates = data.get("templates") or []
        if not templates:
            raise DefinitionFetchError(f"Template '{template_id}' not found", status_code=404)

        try:
            return Template.model_validate(templates[0])
        except ValidationError as e:
            logger.error(f"Malformed template '{template_id}': {e}")
            raise DefinitionFetchError(f"Template '{template_id}' is malformed") from e

    def get_variables(self, template_id: str) -> list[VariableDefinition]:
        data = self._get_json(
            "/admin/variables", params={"template_id": template_id}, what="variables"
        )

        definitions = []
        for row in data.get("variables") or []:
            try:
                definitions.append(VariableDefinition.model_validate(row))
            except ValidationError as e:
                logger.error(f"Malformed variable for template '{template_id}': {e}")
                raise DefinitionFetchError(
                    f"Template '{template_id}' has an invalid variable definition"
                ) from e

        logger.info(f"Loaded {len(definitions)} variables for template {template_id}")
        return definitions

    def generate_document(self, request: GenerationRequest) -> GeneratedDocument:
        url = f"{self.base_url}/admin/templates/generate"
        fmt = request.output_format

        try:
            response = self._client.post(
                url, json=request.to_payload(), timeout=self.generate_timeout
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = _error_detail(e.response)
            logger.error(f"Generation failed: {e.response.status_code} - {detail}")
            raise DocumentAPIError(detail, status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error(f"Generation error: {e}")
            raise DocumentAPIError(f"Could not reach the generation service: {e}") from e

        filename = _filename_from_headers(response.headers) or f"{request.template_id}.{fmt.value}"
        return GeneratedDocument(
            filename=filename,
            content=response.content,
            output_format=fmt,
            media_type=response.headers.get("content-type", fmt.media_type),
        )

    def _get_json(self, path: str, params: dict[str, str], what: str) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self._client.get(url, params=params)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            detail = _error_detail(e.response)
            logger.error(f"Fetching {what} failed: {e.response.status_code} - {detail}")
            raise DefinitionFetchError(
                f"Failed to load {what}: {detail}", status_code=e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Fetching {what} error: {e}")
            raise DefinitionFetchError(f"Failed to load {what}: {e}") from e
        except ValueError as e:
            logger.error(f"Fetching {what} returned invalid JSON: {e}")
            raise DefinitionFetchError(f"Failed to load {what}: invalid response") from e

        if not isinstance(body, dict):
            raise DefinitionFetchError(f"Failed to load {what}: unexpected response shape")
        return body


def _error_detail(response: httpx.Response) -> str:
    """Pull a readable message out of an error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("error", "detail", "message"):
            if isinstance(body.get(key), str):
                return body[key]
    return f"HTTP {response.status_code}"


def _filename_from_headers(headers: httpx.Headers) -> str | None:
    disposition = headers.get("content-disposition")
    if not disposition:
        return None
    match = _FILENAME_RE.search(disposition)
    return match.group(1) if match else None
