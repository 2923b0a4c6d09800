from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Literal

from exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # LLM Configuration
    llm_provider: Literal["openai", "claude"] = "openai"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    claude_api_key: str = ""
    claude_model: str = "claude-sonnet-4-20250514"
    llm_timeout: int = 60

    # Per-feature LLM parameters
    resume_temperature: float = 0.15
    resume_max_tokens: int = 1200
    ats_temperature: float = 0.2
    ats_max_tokens: int = 800
    cover_letter_temperature: float = 0.7
    cover_letter_max_tokens: int = 600
    max_target_skills: int = 6

    # Transactional email (Resend)
    resend_api_key: str = ""
    resend_api_url: str = "https://api.resend.com"
    email_from: str = "Resumize <no-reply@resumize.app>"

    # Data service (Supabase)
    supabase_url: str = ""
    supabase_key: str = ""
    http_timeout: int = 20

    # Signup verification
    otp_ttl_minutes: int = 10

    # Builder sessions
    session_timeout_minutes: int = 60

    # Rendering / export
    pdf_supersample: int = 2
    ocr_resolution: int = 216

    # Server
    cors_origins: list[str] = [
        "https://resumize-pi.vercel.app",
        "https://www.resumabuilder.com",
        "http://localhost:3000",
    ]
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

    def missing_required(self) -> list[str]:
        """Names of required secrets that are not set."""
        required = {
            "resend_api_key": self.resend_api_key,
            "supabase_url": self.supabase_url,
            "supabase_key": self.supabase_key,
        }
        if self.llm_provider == "openai":
            required["openai_api_key"] = self.openai_api_key
        else:
            required["claude_api_key"] = self.claude_api_key

        return [name.upper() for name, value in required.items() if not value.strip()]


def validate_settings(settings: Settings) -> Settings:
    """Fail fast when a required secret is absent.

    Raises:
        ConfigurationError: Listing every missing environment value.
    """
    missing = settings.missing_required()
    if missing:
        raise ConfigurationError(
            f"Missing required configuration: {', '.join(missing)}",
            details={"missing": missing},
        )
    return settings


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
