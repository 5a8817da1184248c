"""Application configuration using Pydantic v2 Settings.

Centralized configuration that loads from environment variables
and provides type-safe access throughout the application.
"""

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


DEFAULT_TEXT_PARTS = ["word/document.xml", "word/footer1.xml"]

DEFAULT_DOWNLOAD_HEADERS = {
    "Content-Description": "File Transfer",
    "Content-Transfer-Encoding": "binary",
    "Content-Type": "application/msword",
    "Expires": "0",
}


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

    # Scratch storage
    scratch_dir: Path | None = Field(
        default=None,
        description="Directory for scratch copies of opened packages. "
        "Defaults to the platform temp directory.",
    )

    # Strategy Selection
    template_type: str = Field(
        default="docx",
        description="Template strategy to use: 'docx'.",
    )

    # Template parts
    text_parts: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TEXT_PARTS),
        description="Archive entries that receive placeholder substitution.",
    )

    # Download
    download_headers: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_DOWNLOAD_HEADERS),
        description="Headers sent with a downloaded document.",
    )
    download_filename: str = Field(
        default="document.docx",
        description="Filename suggested to HTTP clients for rendered documents.",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR.",
    )
    log_dir: Path | None = Field(
        default=None,
        description="Directory for info.log and error.log. Console only when unset.",
    )

    @field_validator("scratch_dir")
    @classmethod
    def ensure_scratch_dir(cls, v: Path | None) -> Path | None:
        """Ensure the scratch directory exists."""
        if v is None:
            return v
        if not v.is_dir():
            raise ValueError(f"Directory {v} not found")
        return v.resolve()

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        return v.upper()

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
