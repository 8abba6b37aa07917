"""Configuration settings for the application."""

from pydantic_settings import BaseSettings

DEFAULT_MODELS = {
    "groq": "meta-llama/llama-4-scout-17b-16e-instruct",
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-5-haiku-latest",
}


class Settings(BaseSettings):
    """Pydantic settings class for the application."""

    # Define the settings with default values and types
    # These will be loaded from environment variables or a .env file if not provided
    LOG_LEVEL: str = "warning"  # Options: debug, info, warning, error, critical

    # LLM Configuration
    BACKEND: str = "groq"  # Options: groq, openai, anthropic
    MODEL: str | None = None  # Falls back to DEFAULT_MODELS[BACKEND]
    MAX_TOKENS: int = 4096
    MAX_ITERATIONS: int = 500  # 0 disables the cap
    REQUEST_TIMEOUT: float = 60.0

    # API keys
    GROQ_API_KEY: str | None = None
    OPENAI_API_KEY: str | None = None
    ANTHROPIC_API_KEY: str | None = None

    # Organizer
    REPORT_NAME: str = "organization_report.txt"

    class Config:
        """Configuration for Pydantic settings."""

        # Load environment variables from a .env file
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    def api_key_for(self, backend: str | None = None) -> str | None:
        """Return the credential configured for *backend* (default: ``BACKEND``)."""
        target = (backend or self.BACKEND).lower()
        return getattr(self, f"{target.upper()}_API_KEY", None) or None

    def model_for(self, backend: str | None = None) -> str:
        """Return the model identifier to request from *backend*."""
        if self.MODEL:
            return self.MODEL
        target = (backend or self.BACKEND).lower()
        return DEFAULT_MODELS.get(target, DEFAULT_MODELS["groq"])


settings = Settings()
