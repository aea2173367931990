"""
Configuration Management.

Two sources, in order of precedence:

    environment / config/.env   MASIKIP_API_URL, MASIKIP_API_TIMEOUT
    config/settings/*.yaml      application.yaml, logging.yaml

Files are located relative to the directory holding the `.project_root`
marker, so commands work from any subdirectory of the checkout.

Usage:
    from masikip.core.config import get_api_endpoint, get_app_config

    endpoint = get_api_endpoint()
    sync_deletes = get_app_config().application.sync.deletes
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, NamedTuple

import yaml
from pydantic import BaseModel, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from masikip.core.config_schema import ApplicationSchema, LoggingSchema

PROJECT_MARKER = ".project_root"


def find_project_root(start: Path | None = None) -> Path:
    """Walk up from `start` (default: cwd) to the directory holding the marker file."""
    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / PROJECT_MARKER).exists():
            return candidate
    raise RuntimeError(f"Project root not found. Ensure {PROJECT_MARKER} file exists.")


def validate_project_root() -> Path:
    """
    Entry-point guard around find_project_root.

    Raises SystemExit with a readable message instead of a traceback.
    """
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def settings_dir() -> Path:
    return find_project_root() / "config" / "settings"


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Read one file from config/settings/. An empty file reads as {}."""
    config_path = settings_dir() / filename
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    with open(config_path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _load_validated(schema_cls: type[BaseModel], filename: str) -> Any:
    raw = load_yaml_config(filename)
    try:
        return schema_cls.model_validate(raw)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {filename}:\n{e}") from e


class AppConfig:
    """Validated contents of config/settings/."""

    def __init__(self) -> None:
        self._application: ApplicationSchema = _load_validated(ApplicationSchema, "application.yaml")
        self._logging: LoggingSchema = _load_validated(LoggingSchema, "logging.yaml")

    @property
    def application(self) -> ApplicationSchema:
        return self._application

    @property
    def logging(self) -> LoggingSchema:
        return self._logging


class Settings(BaseSettings):
    """Per-machine overrides; unset fields defer to application.yaml."""

    api_url: str | None = None
    api_timeout: float | None = None

    model_config = SettingsConfigDict(
        env_prefix="MASIKIP_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    return AppConfig()


class ApiEndpoint(NamedTuple):
    """Everything the HTTP client needs to reach the backend."""

    base_url: str
    timeout: float
    frontend_id: str


def get_api_endpoint() -> ApiEndpoint:
    """Backend endpoint with environment overrides applied over application.yaml."""
    application = get_app_config().application
    overrides = get_settings()
    base_url = overrides.api_url or application.api.base_url
    timeout = (
        overrides.api_timeout
        if overrides.api_timeout is not None
        else application.timeouts.external_api
    )
    return ApiEndpoint(
        base_url=base_url.rstrip("/"),
        timeout=float(timeout),
        frontend_id=application.api.frontend_id,
    )
