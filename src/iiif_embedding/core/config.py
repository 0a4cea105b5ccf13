"""Configuration management."""

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .base import ErrorLevel
from .errors import ConfigurationError


class ValidationOptions(BaseModel):
    """Knobs for a single validation run.

    The core validators only ever see this object; they never read the
    environment themselves.
    """

    model_config = ConfigDict(frozen=True)

    unknown_data_type_level: ErrorLevel = Field(
        default=ErrorLevel.WARNING,
        description="Level reported for dataType values outside the recognized set",
    )
    report_recommendations: bool = Field(
        default=False,
        description="Report absent recommended fields (e.g. dataType on json-array vectors) as warnings",
    )
    check_context_order: bool = Field(
        default=False,
        description="Check the top-level @context ordering when the document carries one",
    )
    text_media_types: tuple[str, ...] = Field(
        default=(),
        description="Additional media types treated as text for referenced vectors",
    )
    reference_timeout: float = Field(default=10.0, gt=0, description="Seconds allowed for a reference check")
    user_agent: str = Field(default="iiif-embedding", description="User-Agent sent by reference checks")

    @field_validator("unknown_data_type_level")
    @classmethod
    def _warning_or_error(cls, level: ErrorLevel) -> ErrorLevel:
        if level not in (ErrorLevel.WARNING, ErrorLevel.ERROR):
            raise ValueError("unknown_data_type_level must be 'warning' or 'error'")
        return level

    @field_validator("text_media_types")
    @classmethod
    def _normalize_media_types(cls, media_types: tuple[str, ...]) -> tuple[str, ...]:
        normalized = tuple(m.split(";", 1)[0].strip().lower() for m in media_types)
        for media_type in normalized:
            if "/" not in media_type:
                raise ValueError(f"'{media_type}' is not a media type")
        return normalized


class Settings(BaseSettings):
    """Environment-backed settings for applications embedding the validator."""

    unknown_data_type_level: ErrorLevel = ErrorLevel.WARNING
    report_recommendations: bool = False
    check_context_order: bool = False
    text_media_types: list[str] = Field(default_factory=list)
    reference_timeout: float = 10.0
    user_agent: str = "iiif-embedding"

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="IIIF_EMBEDDING_",
        env_file=".env",
        extra="ignore",  # Ignore extra fields in .env file
    )

    def validation_options(self) -> ValidationOptions:
        """Build the options object handed to the validators."""
        try:
            return ValidationOptions(
                unknown_data_type_level=self.unknown_data_type_level,
                report_recommendations=self.report_recommendations,
                check_context_order=self.check_context_order,
                text_media_types=tuple(self.text_media_types),
                reference_timeout=self.reference_timeout,
                user_agent=self.user_agent,
            )
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid validation settings: {e}",
                details={"source": "config", "operation": "validation_options"},
            ) from e


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings."""
    return Settings()


DEFAULT_OPTIONS = ValidationOptions()
