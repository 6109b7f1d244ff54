"""
Configuration models.

Provides Pydantic models for magekit configuration with validation.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import ConfigDict, Field, field_validator

from .base import MagekitBaseModel

LogLevel = Literal["debug", "info", "warning", "error"]


class ConfigBaseModel(MagekitBaseModel):
    """Base model for config sections with relaxed strict mode for TOML loading."""

    model_config = ConfigDict(
        strict=False,  # Allow coercion from TOML and env var strings
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "info"
    console: bool = True
    file: bool = False

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept upper-case level names (INFO, DEBUG, ...)."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


class ExecutionConfig(ConfigBaseModel):
    """Process execution configuration section."""

    # Forward child output to the logger instead of the terminal
    stream_to_log: bool = False
    # Seconds between SIGTERM and SIGKILL when a context is cancelled
    kill_grace_seconds: Annotated[float, Field(ge=0)] = 5.0
    # Default timeout for CLI invocations (None = no deadline)
    timeout: Annotated[float, Field(gt=0)] | None = None


class ToolsConfig(ConfigBaseModel):
    """Program names or paths for the wrapped tools."""

    go: str = "go"
    golangci_lint: str = "golangci-lint"
    gofmt: str = "gofmt"
    goimports: str = "goimports"
    helm: str = "helm"
    ko: str = "ko"

    @field_validator("go", "golangci_lint", "gofmt", "goimports", "helm", "ko")
    @classmethod
    def non_empty(cls, v: str) -> str:
        """Tool programs must be non-empty."""
        if not v.strip():
            raise ValueError("tool program must not be empty")
        return v.strip()


class MagekitConfig(ConfigBaseModel):
    """Complete magekit configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    tools: ToolsConfig = Field(default_factory=ToolsConfig)

    def get(self, key: str, default: Any = None) -> Any:
        """Get config value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'execution.stream_to_log')
            default: Default value if key not found

        Returns:
            Config value or default
        """
        obj: Any = self
        for part in key.split("."):
            if hasattr(obj, part):
                obj = getattr(obj, part)
            elif isinstance(obj, dict) and part in obj:
                obj = obj[part]
            else:
                return default
        return obj
