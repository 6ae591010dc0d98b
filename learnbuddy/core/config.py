"""Application configuration from environment."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "Learn Buddy"
    debug: bool = False
    log_level: str = "INFO"

    # Database (async driver)
    database_url: str = "sqlite+aiosqlite:///./learn_buddy.db"

    # Content advisor (DeepSeek-compatible chat completions). No key -> local rounds only.
    deepseek_api_key: str | None = None
    deepseek_api_url: str = "https://api.deepseek.com/v1/chat/completions"
    deepseek_model: str = "deepseek-chat"
    content_advisor_timeout: float = 8.0  # seconds

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


def get_settings() -> Settings:
    return Settings()
