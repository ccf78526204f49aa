# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The build contract between the shared workflows and a calling project.

A project opts in by providing a Makefile with one target per platform tag;
`make <platform>` must leave the binary at dist/bin/<binary>-<platform>
(plus `.exe` on Windows). Both halves are checked here so a broken contract
fails with instructions instead of a confusing upload error later.
"""

import subprocess
from dataclasses import dataclass
from pathlib import Path

from gorelease.logging.logger import get_logger
from gorelease.release.artifacts.collector import DIST_BIN_DIR
from gorelease.release.exceptions import ContractViolationError, ExternalCommandError
from gorelease.release.platforms import WINDOWS_EXTENSION

logger = get_logger(__name__)

MAKE_COMMAND = "make"
MAKE_DRY_RUN_TIMEOUT_SECONDS = 60
CONTRACT_DOCS_URL = "https://github.com/bennypowers/go-release-workflows#makefile-contract"


@dataclass(frozen=True)
class BuildOutput:
    path: Path
    size: int


def has_make_target(target: str, cwd: Path = Path(".")) -> bool:
    """
    Whether `make -n <target>` succeeds, i.e. the Makefile knows the target.

    Raises:
        ExternalCommandError: If make itself isn't installed.
    """
    command = [MAKE_COMMAND, "-n", target]
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            cwd=str(cwd),
            timeout=MAKE_DRY_RUN_TIMEOUT_SECONDS,
            check=False,
        )
    except FileNotFoundError as err:
        raise ExternalCommandError("make executable not found", command) from err
    except subprocess.TimeoutExpired:
        return False
    return result.returncode == 0


def missing_make_targets(platforms: list[str], cwd: Path = Path(".")) -> list[str]:
    return [tag for tag in platforms if not has_make_target(tag, cwd)]


def makefile_stub(missing: list[str], binary_name: str) -> str:
    """Makefile snippet the user can paste to satisfy the contract."""
    lines = []
    for tag in missing:
        lines.append(f"  {tag}:")
        lines.append(f"      # build logic producing {DIST_BIN_DIR}/{binary_name}-{tag}")
    return "\n".join(lines)


def validate_makefile(platforms: list[str], binary_name: str, cwd: Path = Path(".")) -> None:
    """
    Require a Makefile target for every requested platform.

    Raises:
        ContractViolationError: Listing every missing target.
    """
    missing = missing_make_targets(platforms, cwd)
    if missing:
        logger.info("Your Makefile must include these targets:")
        for line in makefile_stub(missing, binary_name).splitlines():
            logger.info(line)
        logger.info(f"See: {CONTRACT_DOCS_URL}")
        raise ContractViolationError(
            f"Makefile contract violation: missing targets: {' '.join(missing)}"
        )

    logger.info("✓ All required Makefile targets present")


def expected_output_path(
    binary_name: str,
    platform_tag: str,
    windows: bool = False,
    root: Path = Path("."),
) -> Path:
    extension = WINDOWS_EXTENSION if windows else ""
    return root / DIST_BIN_DIR / f"{binary_name}-{platform_tag}{extension}"


def validate_output(
    binary_name: str,
    platform_tag: str,
    windows: bool = False,
    root: Path = Path("."),
) -> BuildOutput:
    """
    Require that `make <platform>` produced the binary where the workflow expects it.

    Raises:
        ContractViolationError: If the binary isn't there.
    """
    expected = expected_output_path(binary_name, platform_tag, windows, root)
    if not expected.is_file():
        logger.info(f"Your 'make {platform_tag}' target must produce:")
        logger.info(f"  {expected}")
        raise ContractViolationError(
            f"Contract violation: expected '{expected}' but file not found"
        )

    size = expected.stat().st_size
    logger.info(f"✓ Built: {expected} ({size} bytes)")
    return BuildOutput(path=expected, size=size)
