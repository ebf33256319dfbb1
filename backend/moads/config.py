from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Tuple
from moads.errors import ConfigurationError


class Settings(BaseSettings):
    """
    Application configuration using Pydantic Settings.
    Environment variables are loaded from .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Supabase connection (both required for a live backend)
    supabase_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("supabase_url", "vite_supabase_url"),
    )
    supabase_anon_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("supabase_anon_key", "vite_supabase_anon_key"),
    )
    supabase_timeout_seconds: float = 10.0

    # Home page activity feed
    recent_activity_limit: int = 5

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_cors_origins: str = "http://localhost:3000,http://localhost:5173"

    log_level: str = "INFO"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.api_cors_origins.split(",") if origin.strip()]

    def supabase_credentials(self) -> Tuple[str, str]:
        """
        Return the Supabase URL and access key.

        Raises:
            ConfigurationError: If either value is missing or blank
        """
        missing = []
        if not (self.supabase_url or "").strip():
            missing.append("SUPABASE_URL")
        if not (self.supabase_anon_key or "").strip():
            missing.append("SUPABASE_ANON_KEY")

        if missing:
            raise ConfigurationError(
                f"Supabase is not configured: missing {' or '.join(missing)}"
            )

        return self.supabase_url.strip(), self.supabase_anon_key.strip()


def get_settings() -> Settings:
    """Get settings instance."""
    return Settings()
