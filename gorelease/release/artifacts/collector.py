# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Artifact listing for the upload matrix.

The build job hands the list to later jobs as a step output; each entry
names the platform, the artifact to upload it as, and where `make` put it.
"""

import json
from dataclasses import dataclass

from gorelease.logging.logger import get_logger
from gorelease.release.platforms import SUPPORTED_PLATFORMS, binary_filename

logger = get_logger(__name__)

DIST_BIN_DIR = "dist/bin"


@dataclass(frozen=True)
class ArtifactEntry:
    platform: str
    artifact_name: str
    path: str

    def to_dict(self) -> dict[str, str]:
        return {
            "platform": self.platform,
            "artifact-name": self.artifact_name,
            "path": self.path,
        }


def parse_platforms(platforms_json: str) -> list[str]:
    """
    Parse a JSON array of platform tags, e.g. '["linux-x64", "win32-arm64"]'.

    Unknown tags are kept, with a warning, so a newer workflow can try a
    platform this tool doesn't know yet.

    Raises:
        ValueError: If the text isn't a JSON array of strings.
    """
    try:
        parsed = json.loads(platforms_json)
    except json.JSONDecodeError as err:
        raise ValueError(f"Platforms must be a JSON array: {err}") from err

    if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
        raise ValueError("Platforms must be a JSON array of strings")

    for tag in parsed:
        if tag not in SUPPORTED_PLATFORMS:
            logger.warning(f"Unknown platform: {tag}")
    return parsed


def collect_artifacts(platforms: list[str], binary_name: str) -> list[ArtifactEntry]:
    return [
        ArtifactEntry(
            platform=tag,
            artifact_name=f"{binary_name}-{tag}",
            path=f"{DIST_BIN_DIR}/{binary_filename(binary_name, tag)}",
        )
        for tag in platforms
    ]


def artifacts_to_json(entries: list[ArtifactEntry]) -> str:
    """Compact single-line JSON, as step outputs require."""
    return json.dumps([entry.to_dict() for entry in entries], separators=(",", ":"))
