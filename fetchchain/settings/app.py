"""Client settings powered by Pydantic BaseSettings."""

from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fetchchain.client.url import validate_base_url
from fetchchain.core.constants import DEFAULT_TIMEOUT_SECONDS, DEFAULT_USER_AGENT


class ClientSettings(BaseSettings):
    """Environment configuration for building a client."""

    model_config = SettingsConfigDict(
        env_prefix="FETCHCHAIN_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str | None = None
    timeout_seconds: Annotated[float, Field(ge=1.0, le=300.0)] = (
        DEFAULT_TIMEOUT_SECONDS
    )
    user_agent: Annotated[str, Field(min_length=1, max_length=500)] = (
        DEFAULT_USER_AGENT
    )
    log_level: str = "INFO"
    log_json: bool = True

    @field_validator("base_url")
    @classmethod
    def validate_base_url_format(cls, v: str | None) -> str | None:
        """Apply the client's base URL rules at load time."""
        return validate_base_url(v)


def get_settings() -> ClientSettings:
    """Get a settings instance."""
    return ClientSettings()
