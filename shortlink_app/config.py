from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Application
    app_name: str = "ShortLink"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Origin used to build short URLs ("{base_url}/{short_code}")
    base_url: str = "http://127.0.0.1:8000"

    # Key-value storage settings
    storage_backend: str = "sqlite"  # Options: "sqlite", "redis", "memory"
    database_url: str = "sqlite:///./shortlink.db"
    redis_url: str = "redis://localhost:6379/0"
    redis_key_prefix: str = "shortlink:"
    storage_quota_bytes: Optional[int] = None  # In-memory backend only; None means unlimited
    urls_storage_key: str = "shortened_urls"
    logs_storage_key: str = "app_logs"
    max_logs: int = 1000  # Log buffer keeps only the newest entries

    # Short code generation
    short_code_length: int = 6
    max_code_attempts: int = 100

    # Form validation
    max_batch_size: int = 5
    min_custom_code_length: int = 3
    default_validity_minutes: int = 30
    max_validity_minutes: int = 5256000  # 10 years

    # Simulated latency before a redirect reveals the destination
    redirect_delay_ms: int = 500

    # Remote logging endpoint
    remote_log_enabled: bool = False
    remote_log_url: str = "http://127.0.0.1:8000/api/evaluation-service/logs"
    remote_log_token: Optional[str] = None
    remote_log_stack: str = "backend"
    remote_log_package: str = "service"
    remote_log_timeout: float = 5.0

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
