# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for gorelease.

Each config section gets its own frozen pydantic model:
  - frozen=True: immutable after construction
  - extra="forbid": unknown fields cause immediate failure
  - validate_default=True: even defaults get type-checked

A config file is optional for every command. When one is given, CLI flags
still take precedence over the values it holds.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gorelease.logging.logger import VALID_LOG_FORMATS
from gorelease.release.platforms import SUPPORTED_PLATFORMS
from gorelease.release.validation.health import DEFAULT_HEALTH_CHECK_TIMEOUT_SECONDS
from gorelease.release.validation.sizes import DEFAULT_SIZE_TOLERANCE


class GlobalConfig(BaseModel):
    """Cross-cutting settings: identity and observability."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        description="Schema version for compatibility tracking, e.g. '1.0.0'"
    )
    project_name: str = Field(
        default="gorelease", description="Human-readable project identifier"
    )
    log_level: str = Field(
        default="INFO",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_format: str = Field(
        default="github",
        description="'github' for workflow-command annotations, 'json' for structured lines",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for file-based log output",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level '{value}'")
        return upper

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        if value not in VALID_LOG_FORMATS:
            raise ValueError(f"log_format must be one of {', '.join(VALID_LOG_FORMATS)}")
        return value


class ValidationConfig(BaseModel):
    """Knobs for comparing a candidate artifact set against a baseline."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    size_tolerance: int = Field(
        default=DEFAULT_SIZE_TOLERANCE,
        ge=0,
        description="Largest allowed size difference in whole percent",
    )
    health_check: Optional[str] = Field(
        default=None,
        description="Arguments passed to the native binary, e.g. '--version'",
    )
    health_check_timeout_seconds: int = Field(
        default=DEFAULT_HEALTH_CHECK_TIMEOUT_SECONDS,
        ge=1,
        le=3600,
        description="Seconds before a hung health check is killed and reported",
    )
    strict: bool = Field(
        default=False,
        description="Treat skipped architecture checks as errors",
    )


class ChecksumConfig(BaseModel):
    """Checksum manifest settings."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    manifest_name: str = Field(
        default="checksums.txt",
        description="File name of the manifest, never hashed into itself",
    )


class ReleaseConfig(BaseModel):
    """What is being released and for which platforms."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    binary_name: str = Field(description="Base name of the built binary")
    platforms: list[str] = Field(
        default_factory=lambda: list(SUPPORTED_PLATFORMS),
        description="Platform tags to build and publish",
    )
    npm_package_name: Optional[str] = Field(
        default=None,
        description="Main npm package name; its @scope is reused for platform packages",
    )
    license: Optional[str] = Field(
        default=None,
        description="SPDX identifier; detected from the repository when unset",
    )

    @field_validator("platforms")
    @classmethod
    def _check_platforms(cls, value: list[str]) -> list[str]:
        unknown = [tag for tag in value if tag not in SUPPORTED_PLATFORMS]
        if unknown:
            raise ValueError(f"unsupported platforms: {', '.join(unknown)}")
        return value


class GoReleaseConfig(BaseModel):
    """
    Top-level config container.

    Only `global:` is required. Sections left out fall back to their defaults
    when a command asks for them.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    global_config: GlobalConfig = Field(alias="global")
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    checksums: ChecksumConfig = Field(default_factory=ChecksumConfig)
    release: Optional[ReleaseConfig] = Field(default=None)
