"""Client configuration."""
from typing import Optional

from pydantic_settings import BaseSettings


DEFAULT_GREETING = "Hi! Ask me any question about your notes or pick a suggested question below."


class Settings(BaseSettings):
    """Client settings, read from STUDYAI_* environment variables or .env."""

    environment: str = "production"  # "development" talks to a local backend
    api_base_url: Optional[str] = None  # Explicit override, wins over environment
    development_api_base: str = "http://localhost:3001"
    production_api_base: str = "https://studyai-express.onrender.com"

    # Request timeouts; a timeout is reported as a transport failure
    analyze_timeout_seconds: float = 300.0
    chat_timeout_seconds: float = 120.0

    log_level: str = "INFO"

    # OpenTelemetry tracing configuration
    tracing_enabled: bool = False
    otlp_endpoint: str = ""  # OTLP endpoint URL (empty = use console exporter)

    greeting: str = DEFAULT_GREETING

    @property
    def api_base(self) -> str:
        """Base URL of the StudyAI backend for the configured environment."""
        if self.api_base_url:
            base = self.api_base_url
        elif self.environment.lower() == "development":
            base = self.development_api_base
        else:
            base = self.production_api_base
        return base.rstrip("/")

    class Config:
        env_prefix = "STUDYAI_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
