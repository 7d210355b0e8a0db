"""Configuration models."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RunConfig(BaseModel):
    """Settings for a single extraction run. Immutable once built."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "extensions": ["py", "pyi"],
                "size": 1000,
                "message_len_min": 8,
                "message_len_max": 64,
                "changes_len_min": 1,
                "changes_len_max": 1024,
            }
        },
    )

    extensions: List[str] = Field(..., description="File extensions to keep, without leading dot")
    size: int = Field(..., ge=0, description="Target number of records in the dataset")
    message_len_min: int = Field(8, ge=0, description="Minimum commit subject length")
    message_len_max: int = Field(64, ge=0, description="Maximum commit subject length")
    changes_len_min: int = Field(1, ge=0, description="Minimum commit changes length")
    changes_len_max: int = Field(1024, ge=0, description="Maximum commit changes length")

    @field_validator("extensions")
    @classmethod
    def _normalize_extensions(cls, value: List[str]) -> List[str]:
        extensions: List[str] = []
        for raw in value:
            extension = raw.strip().lstrip(".")
            if extension and extension not in extensions:
                extensions.append(extension)
        if not extensions:
            raise ValueError("at least one file extension is required")
        return extensions

    @model_validator(mode="after")
    def _check_bounds(self) -> "RunConfig":
        if self.message_len_min > self.message_len_max:
            raise ValueError(
                f"message_len_min ({self.message_len_min}) exceeds message_len_max ({self.message_len_max})"
            )
        if self.changes_len_min > self.changes_len_max:
            raise ValueError(
                f"changes_len_min ({self.changes_len_min}) exceeds changes_len_max ({self.changes_len_max})"
            )
        return self

    @classmethod
    def from_extension_string(cls, extensions: str, **kwargs) -> "RunConfig":
        """Build a config from a comma-separated extension list such as ``"py,rs"``."""
        return cls(extensions=extensions.split(","), **kwargs)

    @property
    def extension_set(self) -> frozenset:
        return frozenset(self.extensions)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings are prefixed with GITDATASET_ (e.g., GITDATASET_LOG_LEVEL).
    """

    model_config = SettingsConfigDict(
        env_prefix="GITDATASET_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Length bounds used when the CLI does not override them
    message_len_min: int = 8
    message_len_max: int = 64
    changes_len_min: int = 1
    changes_len_max: int = 1024

    # Logging
    log_level: str = "INFO"
