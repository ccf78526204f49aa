# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Per-platform npm package manifests.

The main npm package depends optionally on one small package per platform,
each holding a single binary and restricted by `os`/`cpu` so npm installs
only the matching one. Platform packages reuse the main package's @scope.
"""

import json
import re
from pathlib import Path
from typing import Any, Optional

from gorelease.logging.logger import get_logger
from gorelease.utils.filesystem import atomic_write

logger = get_logger(__name__)

_SCOPE_PATTERN = re.compile(r"^@[^/]+")


def platform_package_dir(binary_name: str, platform_tag: str, root: Path = Path(".")) -> Path:
    """`platforms/<binary>-<platform>`, the staging directory of one platform package."""
    return root / "platforms" / f"{binary_name}-{platform_tag}"


def npm_scope(npm_package_name: str) -> Optional[str]:
    """'@scope' of a scoped package name, None for unscoped names."""
    match = _SCOPE_PATTERN.match(npm_package_name)
    return match.group(0) if match else None


def platform_package_name(binary_name: str, platform_tag: str, npm_package_name: str) -> str:
    scope = npm_scope(npm_package_name)
    base = f"{binary_name}-{platform_tag}"
    return f"{scope}/{base}" if scope else base


def version_from_tag(release_tag: str) -> str:
    """'v1.2.3' -> '1.2.3'; tags without the prefix pass through."""
    return release_tag[1:] if release_tag.startswith("v") else release_tag


def build_platform_manifest(
    binary_name: str,
    platform_tag: str,
    npm_package_name: str,
    release_tag: str,
    license_id: str,
    platform_os: str,
    platform_cpu: str,
) -> dict[str, Any]:
    return {
        "name": platform_package_name(binary_name, platform_tag, npm_package_name),
        "version": version_from_tag(release_tag),
        "os": [platform_os],
        "cpu": [platform_cpu],
        "type": "module",
        "files": [f"{binary_name}*"],
        "license": license_id,
    }


def generate_platform_package(
    binary_name: str,
    platform_tag: str,
    npm_package_name: str,
    release_tag: str,
    license_id: str,
    platform_os: str,
    platform_cpu: str,
    root: Path = Path("."),
) -> Path:
    """
    Write package.json into the platform's staging directory.

    Returns:
        Path to the written package.json.
    """
    manifest = build_platform_manifest(
        binary_name,
        platform_tag,
        npm_package_name,
        release_tag,
        license_id,
        platform_os,
        platform_cpu,
    )
    package_json = platform_package_dir(binary_name, platform_tag, root) / "package.json"
    atomic_write(package_json, json.dumps(manifest, indent=2) + "\n")

    logger.info(
        f"✓ Generated package.json for {binary_name}-{platform_tag}",
        extra={"package": manifest["name"], "version": manifest["version"]},
    )
    return package_json
