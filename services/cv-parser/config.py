"""Environment-based configuration for the CV parser service."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """CV parser settings, loaded from environment variables."""

    # Server
    PORT: int = 8092
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]

    # OpenAI connection (empty key = extraction disabled)
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = ""

    # Used when the caller does not pick a model
    DEFAULT_MODEL: str = "gpt-5-mini"

    # Large PDFs at high reasoning effort can take several minutes
    OPENAI_TIMEOUT_SECONDS: int = 900
    OPENAI_CONNECT_TIMEOUT: int = 30

    # 1 = single attempt, no retry
    OPENAI_RETRY_ATTEMPTS: int = 1
    OPENAI_RETRY_DELAY: float = 5.0
    OPENAI_RETRY_BACKOFF: float = 2.0

    model_config = {"env_prefix": "", "case_sensitive": True}


settings = Settings()
