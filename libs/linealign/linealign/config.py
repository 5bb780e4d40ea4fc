"""Configuration management using pydantic-settings."""

from pathlib import Path
from typing import Any
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from linealign.exceptions import ConfigurationError

_ENV_FILES = (".env", "../.env", "../../.env")

_REPO_ROOT = Path(__file__).resolve().parents[3]

_ANNOTATION_PROVIDERS = {"http", "local"}


def _resolve_repo_path(value: str) -> str:
    raw = str(value or "").strip()
    if not raw:
        return raw
    p = Path(raw)
    if p.is_absolute():
        return str(p)
    return str((_REPO_ROOT / p).resolve())


class SyncConfig(BaseSettings):
    """Editor view synchronization configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SYNC_",
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enabled: bool = True
    # Time given to the other view to render a scroll before measuring offsets.
    settle_delay_ms: int = Field(default=50, ge=0, le=5000)
    select_line: bool = Field(
        default=False,
        description="Select the full counterpart line on line-to-line sync.",
    )

    @property
    def settle_delay_s(self) -> float:
        return float(self.settle_delay_ms) / 1000.0


class AnnotationServiceConfig(BaseSettings):
    """Alignment-inference service configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ANNOTATION_",
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    provider: str = "http"
    base_url: str = "http://localhost:8000/v1"
    api_key: str = ""
    timeout: float = Field(default=30.0, gt=0)  # per request, seconds
    max_attempts: int = Field(default=3, ge=1)
    local_dir: str = "./data/annotations"

    @model_validator(mode="after")
    def _validate_provider(self) -> "AnnotationServiceConfig":
        self.provider = str(self.provider or "").strip().lower()
        if self.provider not in _ANNOTATION_PROVIDERS:
            raise ConfigurationError(
                f"ANNOTATION_PROVIDER must be one of {sorted(_ANNOTATION_PROVIDERS)} "
                f"(got {self.provider!r})"
            )
        self.local_dir = _resolve_repo_path(self.local_dir)
        return self


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
    console: bool = True
    file: str | None = None
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=0)
    backup_count: int = Field(default=5, ge=0)
    # Scroll syncs fire per frame; their DEBUG lines can be tuned separately.
    sync_level: str | None = None
    # Level for the httpx/httpcore loggers used by the annotation provider.
    http_level: str = "WARNING"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILES, env_file_encoding="utf-8", extra="ignore"
    )

    log_dir: str = "./logs"

    # View synchronization
    sync: SyncConfig = SyncConfig()

    # Alignment-inference service
    annotation_service: AnnotationServiceConfig = AnnotationServiceConfig()

    # Logging
    logging: LoggingSettings = LoggingSettings()

    @model_validator(mode="after")
    def _resolve_paths(self) -> "Settings":
        # Scripts may run from any CWD; keep paths stable.
        self.log_dir = _resolve_repo_path(self.log_dir)
        return self

    def annotation_config(self) -> dict[str, Any]:
        """Return an annotation provider config dict for the provider registry."""
        cfg = self.annotation_service.model_dump()
        cfg["base_url"] = str(cfg.get("base_url") or "").strip().rstrip("/")
        if cfg["provider"] == "http" and not cfg["base_url"]:
            raise ConfigurationError("ANNOTATION_BASE_URL is required for the http provider")
        return cfg
