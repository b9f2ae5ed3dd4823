"""Client configuration loaded from DEVTOOLS_CLIENT_* environment variables."""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .models import OutputFormat

ENV_PREFIX = "DEVTOOLS_CLIENT_"


class ClientConfig(BaseModel):
    """Where the devtools server lives and what the batch queue converts to."""

    host: str = "localhost"
    port: int = Field(default=8000, ge=1, le=65535)
    base_url: Optional[str] = None
    timeout: float = Field(default=30.0, gt=0)
    target_format: OutputFormat = OutputFormat.WEBP

    @field_validator("target_format", mode="before")
    @classmethod
    def lower_format(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def api_url(self) -> str:
        if self.base_url:
            return self.base_url.rstrip("/")
        return f"http://{self.host}:{self.port}/api"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "ClientConfig":
        """Build a config from the environment, reading a .env file first if present.

        Variables already set in the environment win over the .env file.
        """
        load_dotenv(dotenv_path=dotenv_path, override=False)

        values = {}
        for field in ("host", "port", "base_url", "timeout", "target_format"):
            raw = os.getenv(f"{ENV_PREFIX}{field.upper()}")
            if raw:
                values[field] = raw
        return cls(**values)
