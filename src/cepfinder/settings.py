"""
Configuration module for cepfinder with environment overrides.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_TIMEOUT = 30.0


class Settings(BaseSettings):
    """
    Application settings using Pydantic for validation
    and environment variable support.
    """

    # Lookup settings
    request_timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        description="Race deadline and per-provider request timeout in seconds",
    )

    user_agent: str = Field(
        default="cepfinder/0.1", description="User-Agent sent to every provider"
    )

    providers_file: Optional[Path] = Field(
        default=None, description="YAML file overriding the packaged provider list"
    )

    # General settings
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = {
        "env_prefix": "CEPFINDER_",
        "case_sensitive": False,
    }

    @field_validator("request_timeout")
    @classmethod
    def check_timeout(cls, v):
        if v <= 0:
            raise ValueError("request_timeout must be positive")
        return v

    def client_config(self):
        """
        Build the read-only transport configuration shared by all fetchers.
        """
        from .address.models import ClientConfig

        return ClientConfig(
            timeout=self.request_timeout,
            headers={"User-Agent": self.user_agent, "Accept": "application/json"},
        )


settings = Settings()
