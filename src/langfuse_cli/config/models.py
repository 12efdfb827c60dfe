"""Pydantic models for CLI configuration."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from langfuse_cli.config.constants import DEFAULT_HOST, DEFAULT_LIMIT, DEFAULT_PROFILE


class OutputFormat(str, Enum):
    """Supported output formats."""

    table = "table"
    json = "json"
    csv = "csv"
    markdown = "markdown"


class StoredProfile(BaseModel):
    """Credentials persisted under one profile name. Every field is optional."""

    host: str | None = Field(default=None, description="Langfuse host URL")
    public_key: str | None = Field(default=None, description="Langfuse public key")
    secret_key: str | None = Field(default=None, description="Langfuse secret key")


class EffectiveConfig(BaseModel):
    """The merged configuration used for one command invocation."""

    model_config = ConfigDict(frozen=True)

    host: str = DEFAULT_HOST
    public_key: str = Field(default="", repr=False)
    secret_key: str = Field(default="", repr=False)
    active_profile: str = DEFAULT_PROFILE
    output_format: OutputFormat = OutputFormat.table
    page_limit: int = Field(default=DEFAULT_LIMIT, ge=1)
    page_number: int = Field(default=1, ge=1)
    output_path: str | None = None
    verbose: bool = False

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("Host must be an absolute URL starting with http:// or https://")
        return v.rstrip("/")

    def is_valid(self) -> bool:
        return bool(self.public_key) and bool(self.secret_key)
