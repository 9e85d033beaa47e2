"""Application configuration."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    # Data gateway: "sql" talks to the database directly, "rest" to the hosted data API
    gateway_provider: str = "sql"

    # Database (sql gateway)
    postgres_host: str = "postgres"
    postgres_port: int = 5432
    postgres_user: str = "inventory"
    postgres_password: str = "changeme"
    postgres_db: str = "inventory_db"
    database_url_override: Optional[str] = None

    # Hosted backend (rest gateway and rest auth provider)
    backend_url: str = "http://localhost:54321"
    backend_anon_key: str = ""
    backend_timeout_seconds: float = 30.0

    # Soft delete
    soft_delete_retries: int = 1

    # Auth
    auth_provider: str = "local"
    secret_key: str = "changeme-use-a-secure-random-key-in-production"
    magic_link_ttl_seconds: int = 15 * 60
    session_ttl_seconds: int = 60 * 60 * 24 * 7
    session_cookie_name: str = "console_session"
    public_base_url: str = "http://localhost:8000"
    post_login_redirect: str = "/v1/console/"

    # Mail delivery for the local auth provider (links are logged when unset)
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_from_email: str = "inventory@localhost"

    # Console
    console_timezone: str = "Asia/Manila"

    # Reports
    report_font_size: int = 8

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = True

    @property
    def database_url(self) -> str:
        """Build database URL."""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


settings = Settings()
