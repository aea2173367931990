"""
Configuration Schemas.

Pydantic models for the YAML files in config/settings/. AppConfig validates
each file at load time, so a bad URL, a non-positive timeout or a stray key
fails at startup with the offending path in the message.

    ApplicationSchema  → application.yaml
    LoggingSchema      → logging.yaml
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _StrictBase(BaseModel):
    """Unknown YAML keys are an error."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class ApiSchema(_StrictBase):
    """Where the notes backend lives and how this client names itself."""

    base_url: str
    frontend_id: str = Field(min_length=1)

    @field_validator("base_url")
    @classmethod
    def _http_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return value.rstrip("/")


class TimeoutsSchema(_StrictBase):
    external_api: float = Field(gt=0)


class SyncSchema(_StrictBase):
    # Send DELETE to the backend when a note is moved to Trash.
    deletes: bool = False


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    environment: str
    api: ApiSchema
    timeouts: TimeoutsSchema
    sync: SyncSchema = SyncSchema()


# =============================================================================
# logging.yaml
# =============================================================================

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int = Field(gt=0)
    backup_count: int = Field(ge=0)


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: LogLevel
    format: Literal["json", "console"]
    handlers: HandlersSchema

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value
