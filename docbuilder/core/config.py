"""Application configuration using Pydantic v2 Settings.

Centralized configuration that loads from environment variables
and provides type-safe access throughout the application.
"""

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults and can be overridden via
    environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Backend
    api_base_url: str = Field(
        default="http://localhost:3000/api",
        description="Base URL of the template, variable and generation endpoints.",
    )
    api_token: str | None = Field(
        default=None,
        description="Optional bearer token sent with every backend request.",
    )
    user_id: str | None = Field(
        default=None,
        description="Signed-in user forwarded with generation requests.",
    )
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for template and variable requests.",
    )
    generate_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Timeout in seconds for document generation requests.",
    )

    # Form behaviour
    clear_form_after_download: bool = Field(
        default=False,
        description="Reset form values after a document is downloaded.",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR.",
    )
    log_dir: Path = Field(
        default=Path("./logs"),
        description="Directory for info.log and error.log.",
    )

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        return v.upper()

    @property
    def request_headers(self) -> dict[str, str]:
        """Headers sent with every backend request."""
        if self.api_token:
            return {"Authorization": f"Bearer {self.api_token}"}
        return {}

    def configure_logging(self) -> None:
        """Configure global logging based on settings."""
        import structlog

        level = getattr(logging, self.log_level, logging.INFO)

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        logging.basicConfig(
            format="%(message)s",
            level=level,
        )

        logger.setLevel(level)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global Settings instance.

    Returns:
        The singleton Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.configure_logging()
    return _settings
