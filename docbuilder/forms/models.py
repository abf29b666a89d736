"""Document builder domain models.

Pydantic models describing template variables, templates, and generation
requests as they travel between the backend and the form engine.
"""

import enum
import re
from dataclasses import dataclass

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

VARIABLE_NAME_PATTERN = r"^[a-zA-Z_][a-zA-Z0-9_]*$"
MAX_SELECT_OPTIONS = 20


class VariableType(str, enum.Enum):
    """Input types a template variable may declare."""

    TEXT = "text"
    TEXTAREA = "textarea"
    EMAIL = "email"
    DATE = "date"
    SELECT = "select"
    NUMBER = "number"
    PHONE = "phone"
    NRIC = "nric"
    UEN = "uen"
    CURRENCY = "currency"


class VariableCategory(str, enum.Enum):
    """Grouping for variables. Has no effect on validation."""

    PERSONAL = "personal"
    COMPANY = "company"
    FINANCIAL = "financial"
    LEGAL = "legal"


class SubscriptionTier(str, enum.Enum):
    FREE = "free"
    BASIC = "basic"
    BASIC_INDIVIDUAL = "basic_individual"
    PREMIUM = "premium"
    PREMIUM_INDIVIDUAL = "premium_individual"
    PROFESSIONAL = "professional"
    ENTERPRISE = "enterprise"


class OutputFormat(str, enum.Enum):
    """Document formats the generation endpoint can produce."""

    DOCX = "docx"
    PDF = "pdf"

    @property
    def media_type(self) -> str:
        return MEDIA_TYPES[self]


MEDIA_TYPES: dict[OutputFormat, str] = {
    OutputFormat.DOCX: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    OutputFormat.PDF: "application/pdf",
}


class VariableDefinition(BaseModel):
    """Schema for a single template input field.

    Accepts the backend's row shape (``variable_name``, ``variable_type``,
    ``display_name``) as well as the plain attribute names. Construction
    fails for select fields without options and for patterns that do not
    compile, so an invalid definition never reaches the form.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str | None = Field(default=None, description="Backend identifier")
    name: str = Field(
        validation_alias=AliasChoices("variable_name", "name"),
        pattern=VARIABLE_NAME_PATTERN,
        max_length=50,
        description="Stable key into the form value map",
    )
    display_label: str = Field(
        validation_alias=AliasChoices("display_label", "display_name", "label"),
        min_length=1,
        max_length=100,
        description="Human-readable prompt",
    )
    type: VariableType = Field(
        default=VariableType.TEXT,
        validation_alias=AliasChoices("variable_type", "type"),
    )
    category: VariableCategory = Field(default=VariableCategory.PERSONAL)
    is_required: bool = Field(default=False)
    validation_pattern: str | None = Field(
        default=None,
        description="Regular expression a non-empty value must fully match",
    )
    validation_message: str | None = Field(
        default=None,
        description="Hint shown when the value does not match validation_pattern",
    )
    select_options: list[str] | None = Field(default=None, max_length=MAX_SELECT_OPTIONS)
    description: str | None = Field(default=None, max_length=500)
    default_value: str | None = Field(default=None)
    min_length: int | None = Field(default=None, ge=0)
    max_length: int | None = Field(default=None, ge=1, le=10000)

    @field_validator("validation_pattern")
    @classmethod
    def validate_pattern_compiles(cls, v: str | None) -> str | None:
        """Reject patterns that are not valid regular expressions."""
        if v is None or v == "":
            return None
        try:
            re.compile(v)
        except re.error as exc:
            raise ValueError(f"Invalid validation pattern '{v}': {exc}") from exc
        return v

    @model_validator(mode="after")
    def check_consistency(self) -> "VariableDefinition":
        if self.type is VariableType.SELECT and not self.select_options:
            raise ValueError(
                f"Select variable '{self.name}' must define at least one option"
            )
        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            raise ValueError(
                f"Variable '{self.name}' has min_length greater than max_length"
            )
        return self

    @property
    def compiled_pattern(self) -> re.Pattern[str] | None:
        """Return the compiled validation pattern, if any."""
        if self.validation_pattern is None:
            return None
        return re.compile(self.validation_pattern)


class Template(BaseModel):
    """Read-only descriptor of a document template owned by the backend."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    title: str
    description: str = ""
    category: str = ""
    subscription_tier: SubscriptionTier = SubscriptionTier.FREE
    price_sgd: float = Field(default=0.0, ge=0)
    difficulty_level: str = "easy"
    estimated_time_minutes: int | None = None
    singapore_compliant: bool = True
    legal_review_required: bool = False

    @property
    def needs_legal_review(self) -> bool:
        """Whether the UI should warn that the output needs legal review."""
        return self.legal_review_required

    def download_filename(self, output_format: OutputFormat) -> str:
        """Return the filename used when saving a generated document."""
        title = self.title.strip() or "document"
        return f"{title}.{output_format.value}"


class GenerationRequest(BaseModel):
    """Payload sent to the document generation endpoint."""

    template_id: str = Field(min_length=1)
    variables: dict[str, str] = Field(default_factory=dict)
    output_format: OutputFormat = OutputFormat.PDF
    user_id: str | None = None

    def to_payload(self) -> dict:
        """Serialize to the JSON body, omitting an absent user_id."""
        return self.model_dump(mode="json", exclude_none=True)


@dataclass(frozen=True)
class GeneratedDocument:
    """A generated document ready to be handed to a download sink.

    Attributes:
        filename: Name the file should be saved under.
        content: Raw document bytes.
        output_format: Format that was requested.
        media_type: MIME type of the content.
    """

    filename: str
    content: bytes
    output_format: OutputFormat
    media_type: str

    @property
    def size(self) -> int:
        return len(self.content)
