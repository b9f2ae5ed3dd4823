from typing import List, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from devtools.core.constants import (
    DEFAULT_ICO_SIZES,
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_OUTPUT_QUALITY,
    MAX_ICO_SIZE,
    SUPPORTED_OUTPUT_FORMATS,
)


class Settings(BaseSettings):
    # Application
    app_name: str = Field(default="DevTools", description="Application name")
    env: str = Field(
        default="development", description="Environment (development/production/testing)"
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # API Configuration
    api_host: str = Field(default="127.0.0.1", description="API host to bind to")
    api_port: int = Field(default=8000, description="API port")
    api_prefix: str = Field(default="/api", description="API route prefix")
    cors_origins: Union[str, List[str]] = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Allowed CORS origins",
    )

    # File Processing
    max_file_size: int = Field(
        default=DEFAULT_MAX_FILE_SIZE, description="Max upload size in bytes (20MB)"
    )
    allowed_upload_mime_types: Union[str, List[str]] = Field(
        default="image/png,image/jpeg,image/webp,image/gif,image/avif,image/bmp,image/tiff",
        description="MIME types accepted by the upload endpoints",
    )
    default_output_format: str = Field(
        default="webp", description="Output format when none is requested"
    )
    default_quality: int = Field(
        default=DEFAULT_OUTPUT_QUALITY, ge=1, le=100, description="Lossy output quality"
    )
    default_ico_sizes: Union[str, List[int]] = Field(
        default=",".join(str(s) for s in DEFAULT_ICO_SIZES),
        description="Icon sizes offered by default",
    )
    max_ico_size: int = Field(
        default=MAX_ICO_SIZE, description="Largest edge an ICO frame may have"
    )

    # Performance
    max_concurrent_conversions: int = Field(
        default=4, ge=1, description="Max conversions running in the thread pool"
    )

    # Logging Configuration
    json_logs: bool = Field(default=False, description="Render logs as JSON")
    logging_enabled: bool = Field(default=False, description="Enable file logging")
    log_dir: str = Field(default="./logs", description="Directory for log files")
    max_log_size_mb: int = Field(
        default=10, description="Maximum size of each log file in MB"
    )
    log_backup_count: int = Field(
        default=3, description="Number of backup log files to keep"
    )

    @field_validator("env")
    @classmethod
    def validate_env(cls, v):
        allowed = ["development", "production", "testing"]
        if v not in allowed:
            raise ValueError(f"env must be one of {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()

    @field_validator("api_port")
    @classmethod
    def validate_port(cls, v):
        if not 1 <= v <= 65535:
            raise ValueError("api_port must be between 1 and 65535")
        return v

    @field_validator("api_prefix")
    @classmethod
    def normalize_api_prefix(cls, v):
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v

    @field_validator("default_output_format")
    @classmethod
    def validate_output_format(cls, v):
        v = v.lower()
        if v not in SUPPORTED_OUTPUT_FORMATS:
            raise ValueError(
                f"default_output_format must be one of {SUPPORTED_OUTPUT_FORMATS}"
            )
        return v

    @field_validator("cors_origins", "allowed_upload_mime_types", mode="before")
    @classmethod
    def parse_comma_separated_list(cls, v):
        """Parse comma-separated string into list."""
        if isinstance(v, str):
            if not v:
                return []
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("default_ico_sizes", mode="before")
    @classmethod
    def parse_ico_sizes(cls, v):
        if isinstance(v, str):
            return [int(item) for item in v.split(",") if item.strip()]
        return v

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="DEVTOOLS_",
        extra="ignore",
        validate_default=True,
    )


settings = Settings()
