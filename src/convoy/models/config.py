"""Agent configuration models."""

from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class AgentConfig(BaseModel):
    """Agent configuration."""
    model_config = ConfigDict(extra="ignore")

    config_url: Optional[str] = Field(default=None, description="Configuration locator")
    poll_interval: int = Field(default=30, ge=1, description="Seconds between passes")
    stop_timeout: int = Field(default=30, ge=0, description="Container stop grace period in seconds")
    legacy_network_short_circuit: bool = Field(default=False)
    recreate: Literal["on_change", "always"] = Field(default="on_change")
    pull_images: bool = Field(default=True)
    watch: bool = Field(default=True)
    docker_api_version: str = Field(default="auto")
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()
