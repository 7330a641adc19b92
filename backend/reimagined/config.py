"""Application configuration."""

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Development mode — when False, logs are emitted as JSON lines
    dev_mode: bool = True

    # CORS (the web client and the portal are served from other origins)
    cors_origins: list[str] = ["*"]

    # OpenAI-compatible provider
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"

    # Snapshot relay
    snapshot_model: str = "gpt-4o-mini"
    snapshot_temperature: float = 0.4
    snapshot_max_tokens: int = 250

    # Structured snapshot insights
    insights_temperature: float = 0.3

    # Chat-completions passthrough
    proxy_default_model: str = "gpt-5.1"
    proxy_default_temperature: float = 0.3

    # Logging
    log_level: str = "info"

    @model_validator(mode="after")
    def _strip_credentials(self) -> "Settings":
        # A whitespace-only key is treated the same as a missing one
        self.openai_api_key = self.openai_api_key.strip()
        self.openai_base_url = self.openai_base_url.rstrip("/")
        return self


settings = Settings()
