"""Settings via pydantic-settings with DIALECTIC_ env prefix.

A single .env file in the working directory can drive every field.
"""

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DIALECTIC_", env_file=".env")

    server_name: str = "dialectic-thinking-server"
    server_version: str = "0.1.0"
    log_level: str = "info"

    # Transport
    transport: Literal["stdio", "http"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000

    # Tools
    actor_critic_enabled: bool = True
    reflexion_enabled: bool = True

    # Reflexion memory capacity (most-recent-first)
    max_memory_depth: int = Field(default=3, ge=1)

    # Thought display (stderr via logging)
    display_enabled: bool = True
    display_color: bool = True

    @model_validator(mode="after")
    def _validate_tools(self) -> "Settings":
        if not self.actor_critic_enabled and not self.reflexion_enabled:
            raise ValueError("At least one of actor_critic_enabled / reflexion_enabled must be true")
        return self
