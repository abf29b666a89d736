"""Component factory.

Builds the backend client and per-template form objects from settings so
that front ends do not wire them by hand.
"""

import logging

from docbuilder.clients.http import HttpDocumentAPI
from docbuilder.core.config import Settings, get_settings
from docbuilder.forms.dispatcher import DownloadSink, GenerationDispatcher
from docbuilder.forms.models import Template
from docbuilder.forms.state import FormState
from docbuilder.interfaces.document_api import BaseDocumentAPI

logger = logging.getLogger(__name__)


class ComponentFactory:
    """Factory for creating component instances based on configuration.

    Example:
        ```python
        factory = ComponentFactory(get_settings())

        api = factory.get_document_api()
        template, form = factory.load_form("template-id")
        dispatcher = factory.get_dispatcher(template, form)
        ```
    """

    def __init__(self, settings: Settings | None = None, api: BaseDocumentAPI | None = None) -> None:
        """Initialize the factory with optional settings.

        Args:
            settings: Application settings. If None, uses global settings.
            api: Backend client to use instead of building an HTTP one.
        """
        self._settings = settings or get_settings()
        self._api_cache: BaseDocumentAPI | None = api

    @property
    def settings(self) -> Settings:
        return self._settings

    def get_document_api(self) -> BaseDocumentAPI:
        """Get the backend client, creating it on first use."""
        if self._api_cache is None:
            logger.info(f"Instantiating HTTP document API: {self._settings.api_base_url}")
            self._api_cache = HttpDocumentAPI(
                base_url=self._settings.api_base_url,
                timeout=self._settings.request_timeout,
                generate_timeout=self._settings.generate_timeout,
                headers=self._settings.request_headers,
            )
        return self._api_cache

    def load_form(self, template_id: str) -> tuple[Template, FormState]:
        """Fetch a template and its variables and build a fresh form.

        Raises:
            DefinitionFetchError: If the template or variables cannot be loaded.
        """
        api = self.get_document_api()
        template = api.get_template(template_id)
        definitions = api.get_variables(template_id)
        return template, FormState(definitions)

    def get_dispatcher(
        self,
        template: Template,
        form: FormState,
        sink: DownloadSink | None = None,
    ) -> GenerationDispatcher:
        return GenerationDispatcher(
            api=self.get_document_api(),
            form=form,
            template=template,
            user_id=self._settings.user_id,
            sink=sink,
            clear_on_success=self._settings.clear_form_after_download,
        )
