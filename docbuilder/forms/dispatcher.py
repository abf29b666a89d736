"""Generation dispatcher.

Turns a validated form into a document request and hands the result to a
download sink. Every outcome comes back as an Ok or Err value; nothing is
raised to the caller, and the dispatcher is back in IDLE when generate
returns.

    IDLE -> VALIDATING -> IDLE              (field errors, no request made)
    IDLE -> VALIDATING -> REQUESTING -> IDLE                (request failed)
    IDLE -> VALIDATING -> REQUESTING -> DOWNLOADING -> IDLE         (success)

A failed request leaves the form values untouched so the user can retry.
"""

import dataclasses
import enum
import logging
from collections.abc import Callable

from docbuilder.forms.models import GeneratedDocument, GenerationRequest, OutputFormat, Template
from docbuilder.forms.result import Err, ErrorKind, Ok, Result
from docbuilder.forms.state import FormState
from docbuilder.interfaces.document_api import BaseDocumentAPI, DocumentAPIError

logger = logging.getLogger(__name__)

VALIDATION_FAILED_MESSAGE = "Please fix the errors in the form before generating the document."
GENERATION_FAILED_MESSAGE = "Failed to generate document. Please try again."

DownloadSink = Callable[[GeneratedDocument], None]


class DispatchState(str, enum.Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    REQUESTING = "requesting"
    DOWNLOADING = "downloading"


class GenerationDispatcher:
    """Gate document generation on form validity and deliver the result.

    Example:
        ```python
        dispatcher = GenerationDispatcher(api, form, template, user_id="u-1")
        result = dispatcher.generate("pdf")
        if not result.is_ok:
            show_error(result.message)
        ```
    """

    def __init__(
        self,
        api: BaseDocumentAPI,
        form: FormState,
        template: Template,
        user_id: str | None = None,
        sink: DownloadSink | None = None,
        clear_on_success: bool = False,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            api: Backend used for the generation request.
            form: Form state of the open template.
            template: The open template, used for the ID and download name.
            user_id: Optional ID of the signed-in user, forwarded to the backend.
            sink: Called with the finished document. If None, the document is
                only returned.
            clear_on_success: Reset the form after a successful download.
        """
        self._api = api
        self._form = form
        self._template = template
        self._user_id = user_id
        self._sink = sink
        self._clear_on_success = clear_on_success
        self._state = DispatchState.IDLE

    @property
    def state(self) -> DispatchState:
        return self._state

    @property
    def form(self) -> FormState:
        return self._form

    def generate(self, output_format: OutputFormat | str) -> Result[GeneratedDocument]:
        """Validate the form and, if valid, request and deliver a document.

        Args:
            output_format: ``docx`` or ``pdf``.

        Returns:
            Ok with the delivered document, or Err describing the failure.
        """
        if self._state is not DispatchState.IDLE:
            return Err("A document is already being generated.", ErrorKind.BUSY)

        try:
            fmt = OutputFormat(output_format)
        except ValueError:
            return Err(f"Unsupported output format: {output_format}", ErrorKind.VALIDATION)

        try:
            return self._run(fmt)
        finally:
            self._state = DispatchState.IDLE

    def _run(self, fmt: OutputFormat) -> Result[GeneratedDocument]:
        self._state = DispatchState.VALIDATING
        if not self._form.validate_all():
            return Err(VALIDATION_FAILED_MESSAGE, ErrorKind.VALIDATION, self._form.errors)

        self._state = DispatchState.REQUESTING
        request = GenerationRequest(
            template_id=self._template.id,
            variables=self._form.values,
            output_format=fmt,
            user_id=self._user_id,
        )
        try:
            generated = self._api.generate_document(request)
        except DocumentAPIError as e:
            logger.error(
                f"Document generation failed for template {self._template.id} "
                f"({fmt.value}): {e.message}"
            )
            return Err(e.message or GENERATION_FAILED_MESSAGE, ErrorKind.REQUEST)

        self._state = DispatchState.DOWNLOADING
        document = dataclasses.replace(
            generated, filename=self._template.download_filename(fmt)
        )
        if self._sink is not None:
            try:
                self._sink(document)
            except Exception as e:
                logger.error(f"Saving {document.filename} failed: {e}", exc_info=True)
                return Err(f"Could not save {document.filename}: {e}", ErrorKind.DOWNLOAD)

        logger.info(
            f"Generated {document.filename} ({document.size} bytes) "
            f"for template {self._template.id}"
        )
        if self._clear_on_success:
            self._form.reset()
        return Ok(document)
