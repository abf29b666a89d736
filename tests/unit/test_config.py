"""Unit tests for settings, logging setup and the component factory."""

import logging

import pytest

from docbuilder.clients.http import HttpDocumentAPI
from docbuilder.core.config import Settings
from docbuilder.core.factory import ComponentFactory
from docbuilder.core.logging_config import setup_logging
from docbuilder.forms.models import Template
from docbuilder.forms.state import FormState
from docbuilder.interfaces.document_api import DefinitionFetchError
from tests.conftest import FakeDocumentAPI, make_variable


class TestSettings:
    """Test suite for Settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("API_BASE_URL", raising=False)
        settings = Settings(_env_file=None)

        assert settings.api_base_url == "http://localhost:3000/api"
        assert settings.clear_form_after_download is False
        assert settings.request_headers == {}

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("API_BASE_URL", "https://legal.example.sg/api/")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("CLEAR_FORM_AFTER_DOWNLOAD", "true")

        settings = Settings(_env_file=None)

        assert settings.api_base_url == "https://legal.example.sg/api"
        assert settings.log_level == "DEBUG"
        assert settings.clear_form_after_download is True

    def test_token_header(self):
        settings = Settings(_env_file=None, api_token="secret")
        assert settings.request_headers == {"Authorization": "Bearer secret"}


class TestSetupLogging:
    """Test suite for setup_logging."""

    @pytest.fixture
    def restore_root_handlers(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        for handler in handlers:
            root.addHandler(handler)
        root.setLevel(level)

    def test_creates_log_files(self, tmp_path, restore_root_handlers):
        log_dir = tmp_path / "logs"

        setup_logging(Settings(_env_file=None, log_dir=log_dir))
        logging.getLogger("docbuilder.test").error("generation failed")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "generation failed" in (log_dir / "info.log").read_text()
        assert "generation failed" in (log_dir / "error.log").read_text()

    def test_repeated_setup_does_not_stack_handlers(self, tmp_path, restore_root_handlers):
        settings = Settings(_env_file=None, log_dir=tmp_path)

        setup_logging(settings)
        setup_logging(settings)

        assert len(logging.getLogger().handlers) == 3


class TestComponentFactory:
    """Test suite for ComponentFactory."""

    def test_builds_http_api_once(self):
        factory = ComponentFactory(Settings(_env_file=None, api_base_url="http://backend/api"))

        api = factory.get_document_api()

        assert isinstance(api, HttpDocumentAPI)
        assert api.base_url == "http://backend/api"
        assert factory.get_document_api() is api
        api.close()

    def test_load_form(self):
        class LoadingAPI(FakeDocumentAPI):
            def get_template(self, template_id):
                return Template(id=template_id, title="Will")

            def get_variables(self, template_id):
                return [make_variable(name="testator", default_value="Tan")]

        factory = ComponentFactory(Settings(_env_file=None), api=LoadingAPI())

        template, form = factory.load_form("tpl-9")

        assert template.id == "tpl-9"
        assert form.values == {"testator": "Tan"}

    def test_load_form_propagates_fetch_errors(self):
        class FailingAPI(FakeDocumentAPI):
            def get_template(self, template_id):
                raise DefinitionFetchError("Template 'x' not found", status_code=404)

        factory = ComponentFactory(Settings(_env_file=None), api=FailingAPI())

        with pytest.raises(DefinitionFetchError):
            factory.load_form("x")

    def test_dispatcher_uses_settings(self, template, definitions, valid_values):
        api = FakeDocumentAPI()
        factory = ComponentFactory(
            Settings(_env_file=None, user_id="user-3", clear_form_after_download=True),
            api=api,
        )
        form = FormState(definitions)
        for name, value in valid_values.items():
            form.set_value(name, value)

        result = factory.get_dispatcher(template, form).generate("pdf")

        assert result.is_ok
        assert api.requests[0].user_id == "user-3"
        assert form.get_value("tenant_name") == ""
