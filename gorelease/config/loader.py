# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Reads the optional `--config` YAML file into a frozen GoReleaseConfig.

Errors name the offending key by its dotted path (`validation.size_tolerance`)
so a workflow annotation points straight at the line to fix.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from gorelease.config.exceptions import ConfigLoadError, ConfigValidationError
from gorelease.config.schema import GoReleaseConfig


def _format_validation_error(err: ValidationError) -> str:
    """'validation.size_tolerance: Input should be ...; global: Field required'"""
    problems = []
    for detail in err.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "<root>"
        problems.append(f"{location}: {detail['msg']}")
    return "; ".join(problems)


def _read_mapping(config_path: Path) -> dict[str, Any]:
    """
    Raises:
        ConfigLoadError: Missing or unreadable file, invalid YAML, or a
            document that is empty or not a mapping.
    """
    if not config_path.is_file():
        raise ConfigLoadError(f"Config file not found: {config_path}")

    try:
        parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as err:
        raise ConfigLoadError(f"Cannot read config file {config_path}: {err}") from err
    except yaml.YAMLError as err:
        raise ConfigLoadError(f"Invalid YAML in {config_path}: {err}") from err

    if parsed is None:
        raise ConfigLoadError(
            f"Config file {config_path} is empty; at least global.config_version is required"
        )
    if not isinstance(parsed, dict):
        raise ConfigLoadError(
            f"Config file {config_path} must contain a YAML mapping, got {type(parsed).__name__}"
        )
    return parsed


def load_config(config_path: Path) -> GoReleaseConfig:
    """
    Load and validate a gorelease config file.

    Raises:
        ConfigLoadError: The file can't be read or isn't a YAML mapping.
        ConfigValidationError: Missing `global.config_version`, unknown keys,
            out-of-range values or unsupported platform tags.
    """
    raw_data = _read_mapping(config_path)

    try:
        return GoReleaseConfig.model_validate(raw_data)
    except ValidationError as err:
        raise ConfigValidationError(
            f"Invalid configuration in {config_path}: {_format_validation_error(err)}"
        ) from err
