# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Architecture verification via the `file` utility.

The candidate's `file -b` descriptor is matched against the signature of the
platform its filename claims. Windows runners usually have no `file` on the
PATH; there the check is skipped, which is a different outcome from failing.
"""

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from gorelease.logging.logger import get_logger
from gorelease.release.platforms import PlatformSignature, signature_for_filename
from gorelease.release.validation.models import CheckStatus

logger = get_logger(__name__)

FILE_COMMAND = "file"
FILE_COMMAND_TIMEOUT_SECONDS = 30

# Returns the descriptor, or None when introspection is unavailable on this host.
Describer = Callable[[Path], Optional[str]]


@dataclass(frozen=True)
class ArchitectureCheck:
    """Outcome of verifying one artifact's binary format."""

    status: CheckStatus
    signature: Optional[PlatformSignature]
    descriptor: Optional[str]

    @property
    def failed(self) -> bool:
        return self.status is CheckStatus.FAILED


def has_file_command() -> bool:
    return shutil.which(FILE_COMMAND) is not None


def describe_file(file_path: Path) -> Optional[str]:
    """
    Ask `file -b` what kind of file this is.

    Returns:
        The descriptor line, e.g. "ELF 64-bit LSB executable, x86-64, ...",
        or None when `file` is missing or cannot be started.
    """
    executable = shutil.which(FILE_COMMAND)
    if executable is None:
        return None

    try:
        result = subprocess.run(
            [executable, "-b", str(file_path)],
            capture_output=True,
            text=True,
            errors="replace",
            timeout=FILE_COMMAND_TIMEOUT_SECONDS,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as err:
        logger.debug(
            "file command could not run",
            extra={"path": str(file_path), "error": str(err)},
        )
        return None

    return result.stdout.strip()


def verify_architecture(
    filename: str,
    actual_path: Path,
    describe: Describer = describe_file,
) -> ArchitectureCheck:
    """
    Check that the candidate's binary format matches its filename's platform.

    Args:
        filename: Artifact basename, used to pick the platform signature.
        actual_path: Candidate file to introspect.
        describe: Introspection function; `describe_file` outside tests.

    Returns:
        ArchitectureCheck: PASSED or FAILED when a signature applies and a
        descriptor was obtained, SKIPPED when introspection is unavailable,
        NOT_APPLICABLE when no platform claims the filename.
    """
    signature = signature_for_filename(filename)
    descriptor = describe(actual_path)

    if descriptor is None:
        return ArchitectureCheck(CheckStatus.SKIPPED, signature, None)

    if signature is None:
        return ArchitectureCheck(CheckStatus.NOT_APPLICABLE, None, descriptor)

    status = CheckStatus.PASSED if signature.matches(descriptor) else CheckStatus.FAILED
    return ArchitectureCheck(status, signature, descriptor)
