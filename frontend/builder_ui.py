"""Streamlit frontend for the Document Builder.

Loads a template and its variables, renders one control per variable,
and generates DOCX/PDF documents once the form validates.
"""

import logging
import os
from datetime import date

import streamlit as st

from docbuilder.core.config import get_settings
from docbuilder.core.factory import ComponentFactory
from docbuilder.core.logging_config import setup_logging
from docbuilder.forms.dispatcher import GenerationDispatcher
from docbuilder.forms.models import GeneratedDocument, OutputFormat, Template
from docbuilder.forms.renderer import ControlKind, FieldControl, describe_field
from docbuilder.forms.result import ErrorKind
from docbuilder.forms.state import FormState
from docbuilder.interfaces.document_api import DefinitionFetchError

# Configuration
TEMPLATE_ID = os.getenv("TEMPLATE_ID", "")

# Page config
st.set_page_config(
    page_title="Document Builder",
    page_icon="📝",
    layout="wide",
    initial_sidebar_state="expanded",
)

settings = get_settings()
setup_logging(settings)
logger = logging.getLogger(__name__)


# =============================================================================
# Field Rendering
# =============================================================================


def _widget_key(name: str) -> str:
    return f"field_{name}"


def _on_change(form: FormState, name: str, kind: ControlKind) -> None:
    """Copy a widget's value into the form, clearing that field's error."""
    raw = st.session_state.get(_widget_key(name))
    if raw is None:
        value = ""
    elif kind is ControlKind.DATE and isinstance(raw, date):
        value = raw.isoformat()
    else:
        value = str(raw)
    form.set_value(name, value)


def _parse_date(value: str) -> date | None:
    try:
        return date.fromisoformat(value) if value else None
    except ValueError:
        return None


def _clear_widgets(form: FormState) -> None:
    for definition in form.definitions:
        st.session_state.pop(_widget_key(definition.name), None)


def render_field(control: FieldControl, form: FormState) -> None:
    """Draw one control and wire it to the form state.

    Args:
        control: Descriptor produced by describe_field.
        form: The form the control writes to.
    """
    key = _widget_key(control.key)
    callback_args = (form, control.key, control.kind)

    match control.kind:
        case ControlKind.TEXT_AREA:
            st.text_area(
                control.label,
                value=control.value,
                key=key,
                placeholder=control.placeholder,
                height=120,
                on_change=_on_change,
                args=callback_args,
            )
        case ControlKind.SELECT:
            index = control.options.index(control.value) if control.value in control.options else None
            st.selectbox(
                control.label,
                options=control.options,
                index=index,
                key=key,
                placeholder=control.placeholder,
                on_change=_on_change,
                args=callback_args,
            )
        case ControlKind.DATE:
            st.date_input(
                control.label,
                value=_parse_date(control.value),
                key=key,
                on_change=_on_change,
                args=callback_args,
            )
        case ControlKind.NUMBER | ControlKind.EMAIL | ControlKind.TEXT:
            st.text_input(
                control.label,
                value=control.value,
                key=key,
                placeholder=control.placeholder,
                on_change=_on_change,
                args=callback_args,
            )

    if control.error:
        st.error(control.error)
    elif control.help_text:
        st.caption(control.help_text)


# =============================================================================
# UI Components
# =============================================================================


def render_sidebar(factory: ComponentFactory) -> str:
    """Render the sidebar with connection status and template selection.

    Returns:
        The template ID entered by the user.
    """
    with st.sidebar:
        st.title("📝 Document Builder")

        st.divider()

        if factory.get_document_api().health_check():
            st.success("✅ API Connected")
        else:
            st.error("❌ API Disconnected")
            st.info(f"API URL: {settings.api_base_url}")

        st.divider()

        template_id = st.text_input("Template ID", value=TEMPLATE_ID)

        st.divider()
        st.caption(f"API: `{settings.api_base_url}`")

    return template_id.strip()


def load_template(factory: ComponentFactory, template_id: str) -> bool:
    """Fetch a template into session state.

    Returns:
        True if the template and its variables were loaded.
    """
    try:
        with st.spinner("Loading template..."):
            template, form = factory.load_form(template_id)
    except DefinitionFetchError as e:
        logger.error(f"Loading template {template_id} failed: {e.message}")
        st.session_state.load_error = e.message
        return False

    st.session_state.template = template
    st.session_state.form = form
    st.session_state.template_id = template_id
    st.session_state.load_error = None
    st.session_state.pending_download = None
    _clear_widgets(form)
    return True


def render_load_error(factory: ComponentFactory, template_id: str) -> None:
    st.error(f"Could not load this template: {st.session_state.load_error}")
    if st.button("🔄 Retry", type="primary"):
        if load_template(factory, template_id):
            st.rerun()


def render_template_header(template: Template) -> None:
    st.title(template.title)
    if template.description:
        st.markdown(template.description)

    badges = [template.category, template.difficulty_level]
    if template.singapore_compliant:
        badges.append("✅ Singapore Compliant")
    st.caption(" · ".join(b for b in badges if b))


def render_form(form: FormState) -> None:
    st.subheader("Customize Your Document")
    st.markdown("Fill in the required information to generate your legal document.")

    for definition in form.definitions:
        control = describe_field(
            definition,
            value=form.get_value(definition.name),
            error=form.error_for(definition.name),
        )
        render_field(control, form)


def _store_download(document: GeneratedDocument) -> None:
    st.session_state.pending_download = document


def render_generate_section(dispatcher: GenerationDispatcher, template: Template) -> None:
    """Render the generate buttons, the download button and the review warning."""
    st.subheader("Generate Document")
    st.markdown("Choose your preferred format and generate your document.")

    flash = st.session_state.pop("flash_error", None)
    if flash:
        st.error(flash)

    for fmt in OutputFormat:
        if st.button(f"📥 Generate {fmt.value.upper()}", key=f"generate_{fmt.value}", use_container_width=True):
            with st.spinner("Generating..."):
                result = dispatcher.generate(fmt)

            if result.is_ok:
                st.success(f"Your {fmt.value.upper()} document is ready.")
                if settings.clear_form_after_download:
                    _clear_widgets(dispatcher.form)
                    st.rerun()
            elif result.kind is ErrorKind.VALIDATION:
                st.session_state.flash_error = result.message
                st.rerun()
            else:
                st.error(result.message)

    document = st.session_state.get("pending_download")
    if document is not None:
        st.download_button(
            label=f"💾 Save {document.filename}",
            data=document.content,
            file_name=document.filename,
            mime=document.media_type,
            type="primary",
            use_container_width=True,
        )

    if template.needs_legal_review:
        st.warning(
            "**Legal Review Required**\n\n"
            "This document may require legal review before use. Consider consulting "
            "with a qualified legal professional."
        )


# =============================================================================
# Main App
# =============================================================================


def init_session_state() -> None:
    """Initialize session state variables."""
    if "factory" not in st.session_state:
        st.session_state.factory = ComponentFactory(settings)
    if "template" not in st.session_state:
        st.session_state.template = None
    if "form" not in st.session_state:
        st.session_state.form = None
    if "template_id" not in st.session_state:
        st.session_state.template_id = None
    if "load_error" not in st.session_state:
        st.session_state.load_error = None
    if "pending_download" not in st.session_state:
        st.session_state.pending_download = None


def main() -> None:
    """Main application entry point."""
    init_session_state()
    factory: ComponentFactory = st.session_state.factory

    template_id = render_sidebar(factory)
    if not template_id:
        st.title("Document Builder")
        st.info("Enter a template ID in the sidebar to start.")
        return

    if template_id != st.session_state.template_id:
        st.session_state.template_id = template_id
        load_template(factory, template_id)

    if st.session_state.load_error:
        render_load_error(factory, template_id)
        return

    template: Template = st.session_state.template
    form: FormState = st.session_state.form

    render_template_header(template)
    st.divider()

    col1, col2 = st.columns([2, 1])
    with col1:
        render_form(form)
    with col2:
        render_generate_section(
            factory.get_dispatcher(template, form, sink=_store_download),
            template,
        )


if __name__ == "__main__":
    main()
