"""
Configuration for the conversation engine.

Defaults applied by ConversationFactory and the engine, overridable via
environment variables prefixed with CONVERSATION_.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConversationSettings(BaseSettings):
    """Conversation engine settings."""

    model_config = SettingsConfigDict(
        env_prefix="CONVERSATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Factory defaults
    modal: bool = Field(default=True, description="Default conversation modality")
    local_echo: bool = Field(default=True, description="Echo input back to the subject")
    default_timeout_seconds: Optional[int] = Field(
        default=None,
        ge=1,
        description="Inactivity timeout added to every factory, if set",
    )

    # Engine limits
    max_prompt_chain: int = Field(
        default=1000,
        ge=1,
        description="Max non-interactive prompts traversed in one output step",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="pretty", description="Log format (json, pretty, simple)")


@lru_cache
def get_settings() -> ConversationSettings:
    """Get cached settings."""
    return ConversationSettings()
