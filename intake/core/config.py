"""Application configuration using pydantic-settings."""
from functools import lru_cache
from pathlib import Path
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from pydantic_settings import BaseSettings, SettingsConfigDict

from intake.core.errors import ConfigurationError


# Get the intake directory path
INTAKE_DIR = Path(__file__).parent.parent
ENV_FILE = INTAKE_DIR / ".env"

LLM_PROVIDERS = ("openai", "openai_compatible", "gemini")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Language model
    llm_provider: str = "openai"  # "openai", "openai_compatible" or "gemini"
    openai_api_key: str = ""
    gemini_api_key: str = ""
    llm_model: str = ""  # Empty means the provider default
    llm_endpoint_url: Optional[str] = None  # Required for openai_compatible
    max_output_tokens: int = 500
    llm_timeout: float = 30.0  # seconds
    llm_json_mode: bool = False

    # OCR (Google Cloud Vision service account)
    google_cloud_project_id: str = ""
    google_cloud_private_key: str = ""
    google_cloud_client_email: str = ""
    ocr_timeout: float = 30.0  # seconds

    # Browser
    headless: bool = True
    browser_timeout: int = 30000  # milliseconds
    browser_ws_endpoint: Optional[str] = None  # Remote Chromium over CDP

    # Input limits and date handling
    max_image_bytes: int = 10 * 1024 * 1024
    timezone: str = "America/Los_Angeles"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "info"
    cors_origins: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def google_private_key(self) -> str:
        """Service account key with escaped newlines restored."""
        return self.google_cloud_private_key.replace("\\n", "\n")

    def missing_required(self) -> List[str]:
        """Names of required settings that are absent for the configured providers."""
        missing = []

        if self.llm_provider not in LLM_PROVIDERS:
            missing.append(f"LLM_PROVIDER (one of {', '.join(LLM_PROVIDERS)})")
        elif self.llm_provider == "gemini":
            if not self.gemini_api_key:
                missing.append("GEMINI_API_KEY")
        else:
            if not self.openai_api_key:
                missing.append("OPENAI_API_KEY")
            if self.llm_provider == "openai_compatible" and not self.llm_endpoint_url:
                missing.append("LLM_ENDPOINT_URL")

        for name in ("google_cloud_project_id", "google_cloud_private_key", "google_cloud_client_email"):
            if not getattr(self, name):
                missing.append(name.upper())

        if self.browser_ws_endpoint and not self.browser_ws_endpoint.startswith(
            ("ws://", "wss://", "http://", "https://")
        ):
            missing.append("BROWSER_WS_ENDPOINT (must be a ws:// or http:// URL)")

        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            missing.append(f"TIMEZONE (unknown timezone {self.timezone!r})")

        return missing

    def validate_required(self) -> None:
        """Raise ConfigurationError if any required setting is missing."""
        missing = self.missing_required()
        if missing:
            raise ConfigurationError(
                f"Some required environment variables are missing: {', '.join(missing)}"
            )


@lru_cache
def get_settings() -> Settings:
    """Return cached Settings instance. Override in tests via lru_cache.cache_clear()."""
    return Settings()


settings = get_settings()
