"""Service configuration management for the Person Service API."""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_GREETING_TEXT = "Hi!"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080


class Config(BaseSettings):
    """Person Service API configuration.

    The greeting text is read from ``GREETING_TEXT`` (or the prefixed
    ``PERSON_API_GREETING_TEXT``). Host, port and log level use the
    ``PERSON_API_`` prefix.
    """

    model_config = {
        "env_prefix": "PERSON_API_",
        "env_file": ".env",
        "case_sensitive": False,
        "populate_by_name": True,
    }

    greeting_text: str = Field(
        default=DEFAULT_GREETING_TEXT,
        validation_alias=AliasChoices("GREETING_TEXT", "PERSON_API_GREETING_TEXT"),
        description="Greeting shown on the landing page",
    )
    host: str = Field(default=DEFAULT_HOST, description="API host address")
    port: int = Field(default=DEFAULT_PORT, description="API port")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase for logging compatibility."""
        return v.upper()

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables and .env files."""
        return cls()
