# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Step outputs for GitHub Actions.

A step publishes outputs by appending `name=value` lines to the file named by
the GITHUB_OUTPUT environment variable. Outside a runner the variable is
unset, so the value is only logged.
"""

import os
from pathlib import Path
from typing import Optional

from gorelease.logging.logger import get_logger

_logger = get_logger(__name__)

GITHUB_OUTPUT_ENV = "GITHUB_OUTPUT"


def write_step_output(name: str, value: str, output_path: Optional[Path] = None) -> Optional[Path]:
    """
    Append `name=value` to the step output file.

    Args:
        name: Output name as referenced by `steps.<id>.outputs.<name>`.
        value: Single-line value.
        output_path: Explicit output file; defaults to $GITHUB_OUTPUT.

    Returns:
        The file written to, or None when no output file is configured.

    Raises:
        ValueError: If the value spans multiple lines.
    """
    if "\n" in value:
        raise ValueError(f"Step output '{name}' must be a single line")

    if output_path is None:
        env_value = os.environ.get(GITHUB_OUTPUT_ENV)
        if not env_value:
            _logger.info(f"{name}={value}", extra={"note": "GITHUB_OUTPUT not set"})
            return None
        output_path = Path(env_value)

    with open(output_path, "a", encoding="utf-8") as f:
        f.write(f"{name}={value}\n")

    _logger.debug("Step output written", extra={"output": name, "path": str(output_path)})
    return output_path
