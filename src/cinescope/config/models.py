"""Configuration data models."""

import os
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

DEFAULT_GENRES = [
    "Action",
    "Comedy",
    "Drama",
    "Horror",
    "Romance",
    "Sci-Fi",
    "Thriller",
    "Crime",
    "Adventure",
]


class ApiConfig(BaseModel):
    """Movie catalog API configuration."""

    base_url: str = Field(default="http://localhost:8080/api", description="API base URL")
    timeout: int = Field(default=10, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")
    access_token: Optional[str] = Field(
        default=None, description="Bearer token used for watchlist requests"
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Strip trailing slashes so paths can be appended."""
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError("API base URL must start with http:// or https://")
        return v

    @field_validator("access_token")
    @classmethod
    def validate_access_token(cls, v: Optional[str]) -> Optional[str]:
        """Expand environment variables in the token, treating unset ones as no token."""
        if v is None:
            return None
        expanded = os.path.expandvars(v).strip()
        if not expanded or expanded.startswith("${"):
            return None
        return expanded


class SearchConfig(BaseModel):
    """Search screen configuration."""

    default_page_size: int = Field(default=20, gt=0, description="Results per page")
    max_page_size: int = Field(default=100, gt=0, description="Largest allowed page size")
    available_genres: List[str] = Field(
        default_factory=lambda: list(DEFAULT_GENRES), description="Genres offered as filters"
    )

    @field_validator("max_page_size")
    @classmethod
    def validate_max_page_size(cls, v: int, info: ValidationInfo) -> int:
        """Validate that the default page size fits under the maximum."""
        default = info.data.get("default_page_size")
        if default is not None and default > v:
            raise ValueError(f"default_page_size ({default}) exceeds max_page_size ({v})")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )
    file: Optional[str] = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, gt=0, description="Maximum log file size in MB")
    backup_count: int = Field(default=5, ge=0, description="Number of backup log files")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate logging level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Logging level must be one of: {allowed}")
        return v.upper()


class AppConfig(BaseModel):
    """Application behavior configuration."""

    retry_attempts: int = Field(default=3, ge=1, description="Attempts for idempotent requests")
    retry_wait_seconds: float = Field(
        default=0.5, ge=0.0, description="Base wait between retry attempts"
    )


class Config(BaseModel):
    """Main configuration model."""

    api: ApiConfig = Field(default_factory=ApiConfig, description="API configuration")
    search: SearchConfig = Field(default_factory=SearchConfig, description="Search configuration")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    app: AppConfig = Field(default_factory=AppConfig, description="Application configuration")

    model_config = ConfigDict(
        validate_assignment=True,
        populate_by_name=True,
    )
