from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "frozen": True}

    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    UPSTREAM_TIMEOUT_SECONDS: float = 60.0

    # Retry on upstream rate limits: waits RETRY_BASE_SECONDS * 2**attempt
    MAX_RETRIES: int = 3
    RETRY_BASE_SECONDS: float = 1.0

    AUDIENCE: str = "6th grade student"

    # Inbound limiter, per client address. 0 disables it.
    RATE_LIMIT_MAX: int = 10
    RATE_LIMIT_WINDOW_SECONDS: int = 60

    CORS_ORIGINS: list[str] = ["*"]

    HOST: str = "0.0.0.0"
    PORT: int = 5000

    APP_TITLE: str = "AI Study Buddy"
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    @property
    def has_api_key(self) -> bool:
        return bool(self.GEMINI_API_KEY.strip())


@lru_cache
def get_settings() -> Settings:
    return Settings()
