"""Application configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "MatesRace"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./data/matesrace.db"

    # Session
    secret_key: str = "dev-secret-change-me"
    session_cookie: str = "matesrace_session"
    session_max_age: int = 14 * 24 * 60 * 60  # seconds

    # Frontend (CORS origin and post-login redirect target)
    frontend_url: str = "http://localhost:5173"

    # Strava OAuth2 / API
    strava_client_id: str = ""
    strava_client_secret: str = ""
    strava_authorize_url: str = "https://www.strava.com/oauth/authorize"
    strava_token_url: str = "https://www.strava.com/oauth/token"
    strava_api_base_url: str = "https://www.strava.com/api/v3"
    strava_redirect_uri: str = "http://localhost:8000/api/auth/callback"
    strava_scope: str = "read,activity:read_all"
    strava_timeout: float = 30.0  # seconds
    activities_per_page: int = 50

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
