# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Idempotent `npm publish`.

Re-running a release workflow must not fail because some packages went out
on the first attempt. npm refuses to overwrite a published version; that
specific refusal is downgraded to a warning and counts as done.
"""

import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from gorelease.logging.logger import get_logger
from gorelease.release.exceptions import ExternalCommandError

logger = get_logger(__name__)

NPM_COMMAND = "npm"
NPM_PUBLISH_TIMEOUT_SECONDS = 600
ALREADY_PUBLISHED_MARKER = "cannot publish over the previously published"


class PublishStatus(str, Enum):
    PUBLISHED = "published"
    ALREADY_PUBLISHED = "already_published"


@dataclass(frozen=True)
class PublishResult:
    status: PublishStatus
    output: str


def publish_package(working_dir: Path = Path(".")) -> PublishResult:
    """
    Run `npm publish --access public` in a package directory.

    Returns:
        PublishResult, PUBLISHED or ALREADY_PUBLISHED.

    Raises:
        ExternalCommandError: On any other npm failure, with npm's exit code.
    """
    command = [NPM_COMMAND, "publish", "--access", "public"]
    try:
        result = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            cwd=str(working_dir),
            timeout=NPM_PUBLISH_TIMEOUT_SECONDS,
            check=False,
        )
    except FileNotFoundError as err:
        raise ExternalCommandError("npm executable not found", command) from err
    except subprocess.TimeoutExpired as err:
        raise ExternalCommandError(
            f"npm publish timed out after {NPM_PUBLISH_TIMEOUT_SECONDS}s", command
        ) from err

    output = result.stdout or ""
    for line in output.splitlines():
        logger.info(line)

    if result.returncode == 0:
        logger.info("✓ Published package", extra={"dir": str(working_dir)})
        return PublishResult(PublishStatus.PUBLISHED, output)

    if ALREADY_PUBLISHED_MARKER in output:
        logger.warning("Package already published (skipping)")
        return PublishResult(PublishStatus.ALREADY_PUBLISHED, output)

    raise ExternalCommandError(
        f"npm publish failed (exit code {result.returncode})",
        command,
        exit_code=result.returncode,
        output=output,
    )
