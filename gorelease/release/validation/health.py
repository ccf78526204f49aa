# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime health check for the native artifact.

Only the binary built for the host's own platform can run here. It is
invoked with the configured arguments, stdout and stderr merged, under a
hard timeout so an unresponsive binary can't hang the whole job.
"""

import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from gorelease.logging.logger import get_logger
from gorelease.utils.filesystem import make_executable

logger = get_logger(__name__)

DEFAULT_HEALTH_CHECK_TIMEOUT_SECONDS = 30
SUCCESS_PREVIEW_LENGTH = 100
FAILURE_PREVIEW_LENGTH = 200


@dataclass(frozen=True)
class HealthCheckResult:
    """What happened when the native binary was run."""

    success: bool
    exit_code: Optional[int]
    output: str
    elapsed_seconds: float
    timed_out: bool = False
    launch_error: Optional[str] = None


def is_native_artifact(filename: str, host_platform: str) -> bool:
    """Whether the artifact was built for the host and can therefore run here."""
    return host_platform in filename


def preview(output: str, limit: int, ellipsis: bool = True) -> str:
    """First `limit` characters of output, with '...' when something was cut."""
    text = output[:limit]
    if ellipsis and len(output) > limit:
        text = f"{text}..."
    return text


def run_health_check(
    binary_path: Path,
    health_check: str,
    timeout_seconds: int = DEFAULT_HEALTH_CHECK_TIMEOUT_SECONDS,
) -> HealthCheckResult:
    """
    Make the binary executable and run it with the health-check arguments.

    The argument string is split on whitespace, e.g. "version --short"
    becomes ["version", "--short"].

    Args:
        binary_path: Native candidate binary.
        health_check: Argument string for the binary.
        timeout_seconds: Hard limit before the process is killed.

    Returns:
        HealthCheckResult; success only for exit status 0. Trailing newlines
        are stripped from the captured output.
    """
    try:
        make_executable(binary_path)
    except OSError as err:
        logger.debug(
            "chmod +x failed, continuing",
            extra={"path": str(binary_path), "error": str(err)},
        )

    command = [str(binary_path), *health_check.split()]
    start = time.monotonic()

    try:
        result = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            timeout=timeout_seconds,
            check=False,
        )
    except subprocess.TimeoutExpired as err:
        partial = err.output or ""
        if isinstance(partial, bytes):
            partial = partial.decode("utf-8", errors="replace")
        return HealthCheckResult(
            success=False,
            exit_code=None,
            output=partial.rstrip("\n"),
            elapsed_seconds=time.monotonic() - start,
            timed_out=True,
        )
    except OSError as err:
        return HealthCheckResult(
            success=False,
            exit_code=None,
            output="",
            elapsed_seconds=time.monotonic() - start,
            launch_error=str(err),
        )

    elapsed = time.monotonic() - start
    logger.debug(
        "Health check finished",
        extra={
            "exit_code": result.returncode,
            "elapsed_seconds": round(elapsed, 3),
            "path": str(binary_path),
        },
    )
    return HealthCheckResult(
        success=result.returncode == 0,
        exit_code=result.returncode,
        output=(result.stdout or "").rstrip("\n"),
        elapsed_seconds=elapsed,
    )
