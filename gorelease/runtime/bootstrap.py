# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime bootstrap for gorelease.

Every command goes through this before doing anything else:
  1. Validate the environment (Python version)
  2. Configure logging from config file values and CLI overrides
  3. Log what host we are on
"""

from pathlib import Path
from typing import Optional

from gorelease.config.schema import GlobalConfig
from gorelease.logging.logger import configure_logging, get_logger
from gorelease.runtime.environment import check_minimum_python, get_system_info


def bootstrap(
    config: Optional[GlobalConfig] = None,
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
) -> None:
    """
    Put the process into a known state.

    CLI values win over config values, which win over the defaults.

    Args:
        config: The validated global configuration, if a config file was given.
        log_level: --log-level from the command line.
        log_format: --log-format from the command line.
    """
    check_minimum_python()

    level = log_level or (config.log_level if config is not None else "INFO")
    fmt = log_format or (config.log_format if config is not None else "github")
    log_file = None
    if config is not None and config.log_file is not None:
        log_file = Path(config.log_file)

    configure_logging(log_level=level, log_format=fmt, log_file=log_file)

    logger = get_logger("gorelease.runtime")
    system_info = get_system_info()
    logger.debug(
        "gorelease bootstrap complete",
        extra={
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
            "platform_tag": system_info.platform_tag,
        },
    )
