# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
GitHub release store access through the `gh` CLI.

`gh` picks up GH_TOKEN / GITHUB_TOKEN from the environment the workflow
provides; nothing here handles credentials.
"""

import subprocess
from pathlib import Path
from typing import Optional

from gorelease.logging.logger import get_logger
from gorelease.release.exceptions import ExternalCommandError
from gorelease.release.npm.package import platform_package_dir
from gorelease.release.platforms import binary_filename

logger = get_logger(__name__)

GH_COMMAND = "gh"
GH_TIMEOUT_SECONDS = 300
DEFAULT_LICENSE = "MIT"


def _run_gh(args: list[str]) -> str:
    """
    Run `gh` with the given arguments and return its stdout.

    Raises:
        ExternalCommandError: If gh is missing, times out, or exits non-zero.
    """
    command = [GH_COMMAND, *args]
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=GH_TIMEOUT_SECONDS,
            check=False,
        )
    except FileNotFoundError as err:
        raise ExternalCommandError("gh executable not found", command) from err
    except subprocess.TimeoutExpired as err:
        raise ExternalCommandError(
            f"gh timed out after {GH_TIMEOUT_SECONDS}s", command
        ) from err

    if result.returncode != 0:
        raise ExternalCommandError(
            f"gh {args[0]} failed (exit code {result.returncode}): {result.stderr.strip()}",
            command,
            exit_code=result.returncode,
            output=result.stdout + result.stderr,
        )
    return result.stdout


def upload_release_asset(release_tag: str, asset_path: Path, clobber: bool = True) -> None:
    """Attach a file to an existing release, replacing a same-named asset by default."""
    args = ["release", "upload", release_tag, str(asset_path)]
    if clobber:
        args.append("--clobber")
    logger.info(f"Uploading {asset_path.name} to release: {release_tag}")
    _run_gh(args)
    logger.info(f"✓ Uploaded {asset_path.name} to release")


def download_binary(
    binary_name: str,
    platform_tag: str,
    release_tag: str,
    root: Path = Path("."),
) -> Path:
    """
    Download one platform's binary from a release into its package directory.

    Returns:
        Path of the downloaded binary.

    Raises:
        ExternalCommandError: If the download fails.
    """
    target_dir = platform_package_dir(binary_name, platform_tag, root)
    target_dir.mkdir(parents=True, exist_ok=True)

    asset_name = binary_filename(binary_name, platform_tag)
    _run_gh(
        [
            "release",
            "download",
            release_tag,
            "--pattern",
            asset_name,
            "--dir",
            str(target_dir),
        ]
    )
    logger.info(
        f"✓ Downloaded {asset_name}",
        extra={"release_tag": release_tag, "dir": str(target_dir)},
    )
    return target_dir / asset_name


def detect_license(repository: str, explicit_license: Optional[str] = None) -> str:
    """
    Resolve the SPDX license identifier for a repository.

    An explicitly configured license wins. Otherwise GitHub's license
    detection is asked, falling back to MIT when it found none.
    """
    if explicit_license:
        return explicit_license

    output = _run_gh(
        ["api", f"repos/{repository}", "--jq", f'.license.spdx_id // "{DEFAULT_LICENSE}"']
    )
    return output.strip() or DEFAULT_LICENSE
