from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    queue_url: str = Field(min_length=1)
    table_name: str = Field(min_length=1)
    aws_region: str = Field(min_length=1)

    app_env: str = "dev"
    log_level: str = "INFO"

    aws_endpoint_url: str | None = None
    aws_connect_timeout_seconds: int = 10
    aws_read_timeout_seconds: int = 60
    aws_max_attempts: int = 3

    receive_wait_seconds: int = Field(default=10, ge=0, le=20)
    error_backoff_seconds: float = 10.0
    max_receive_count: int = Field(default=0, ge=0)
    worker_concurrency: int = Field(default=1, ge=1)

    max_extracted_chars: int = Field(default=4500, gt=0)
    sentiment_language_code: str = "en"
