# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Release checksum manifest generation and verification.

Manifest format:
    # SHA256 Checksums
    # Generated: 2026-10-18T12:00:00Z

    <sha256hex>  <filename>
    <sha256hex>  <filename>

Entry lines follow GNU coreutils sha256sum output (two spaces), so users can
check downloads with `sha256sum -c`. Entries are sorted by filename.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from gorelease.logging.logger import get_logger
from gorelease.release.exceptions import ArtifactDirectoryError
from gorelease.utils.filesystem import atomic_write, list_regular_files
from gorelease.utils.hashing import compute_sha256, verify_checksum

_logger: logging.Logger = get_logger(__name__)

MANIFEST_TITLE = "# SHA256 Checksums"
_SHA256_PATTERN = re.compile(r"^[0-9a-fA-F]{64}$")


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of a checksum verification run."""

    is_valid: bool
    checked_count: int
    mismatches: list[str] = field(default_factory=list)
    missing_files: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def generate_checksums(
    artifacts_dir: Path,
    exclude: Optional[set[str]] = None,
) -> dict[str, str]:
    """
    Compute SHA256 checksums for every regular file directly in a directory.

    Args:
        artifacts_dir: Directory holding the release binaries.
        exclude: File names to leave out, typically the manifest itself.

    Returns:
        Dict of {filename: sha256_hex}, in filename order.

    Raises:
        ArtifactDirectoryError: If artifacts_dir doesn't exist.
    """
    if not artifacts_dir.is_dir():
        raise ArtifactDirectoryError(f"Artifacts directory not found: {artifacts_dir}")

    excluded = exclude or set()
    checksums: dict[str, str] = {}
    for file_path in list_regular_files(artifacts_dir):
        if file_path.name in excluded:
            continue
        digest = compute_sha256(file_path)
        checksums[file_path.name] = digest
        _logger.info(
            f"{file_path.name}: {file_path.stat().st_size} bytes",
            extra={"sha256": digest[:16] + "..."},
        )

    _logger.info(
        "Checksums generated",
        extra={"file_count": len(checksums), "artifacts_dir": str(artifacts_dir)},
    )
    return checksums


def render_checksum_manifest(
    checksums: dict[str, str],
    generated_at: Optional[datetime] = None,
) -> str:
    """Render the manifest text, header included."""
    if generated_at is None:
        generated_at = datetime.now(tz=timezone.utc)
    timestamp = generated_at.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")

    lines = [MANIFEST_TITLE, f"# Generated: {timestamp}", ""]
    for filename in sorted(checksums):
        lines.append(f"{checksums[filename]}  {filename}")
    return "\n".join(lines) + "\n"


def write_checksum_file(
    output_path: Path,
    checksums: dict[str, str],
    generated_at: Optional[datetime] = None,
) -> Path:
    """
    Write the manifest atomically.

    Returns:
        Path to the written manifest.
    """
    atomic_write(output_path, render_checksum_manifest(checksums, generated_at))
    _logger.info(
        f"Checksums written to: {output_path}",
        extra={"entries": len(checksums)},
    )
    return output_path


def parse_checksum_file(checksum_path: Path) -> dict[str, str]:
    """
    Parse a manifest into {filename: sha256_hex}.

    Blank lines and `#` comment lines are ignored.

    Raises:
        FileNotFoundError: If the manifest doesn't exist.
        ValueError: If an entry line is malformed.
    """
    if not checksum_path.is_file():
        raise FileNotFoundError(f"Checksum file not found: {checksum_path}")

    checksums: dict[str, str] = {}
    content = checksum_path.read_text(encoding="utf-8")

    for line_num, line in enumerate(content.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split("  ", maxsplit=1)
        if len(parts) != 2:
            raise ValueError(
                f"Invalid checksum format at line {line_num}: expected "
                f"'<sha256>  <filename>', got: {line!r}"
            )
        sha256_hex, filename = parts
        if not _SHA256_PATTERN.match(sha256_hex):
            raise ValueError(
                f"Invalid SHA256 digest at line {line_num}: {sha256_hex!r}"
            )
        checksums[filename] = sha256_hex.lower()

    return checksums


def verify_checksums(artifacts_dir: Path, checksum_path: Path) -> VerificationResult:
    """
    Verify every manifest entry against the files in a directory.

    Reports all mismatches and missing files, not just the first.
    """
    try:
        expected = parse_checksum_file(checksum_path)
    except FileNotFoundError as err:
        return VerificationResult(is_valid=False, checked_count=0, errors=[str(err)])
    except ValueError as err:
        return VerificationResult(
            is_valid=False,
            checked_count=0,
            errors=[f"Failed to parse {checksum_path.name}: {err}"],
        )

    mismatches: list[str] = []
    missing_files: list[str] = []
    checked = 0

    for filename, expected_hash in sorted(expected.items()):
        file_path = artifacts_dir / filename
        if not file_path.is_file():
            missing_files.append(filename)
            _logger.error(f"Missing file: {filename}")
            continue

        checked += 1

        if not verify_checksum(file_path, expected_hash):
            mismatches.append(filename)
            _logger.error(f"Checksum mismatch: {filename}")
        else:
            _logger.debug("Checksum verified", extra={"file": filename})

    is_valid = not mismatches and not missing_files

    if is_valid:
        _logger.info("All checksums verified", extra={"checked_count": checked})
    else:
        _logger.info(
            "Checksum verification failed",
            extra={"mismatches": len(mismatches), "missing": len(missing_files)},
        )

    return VerificationResult(
        is_valid=is_valid,
        checked_count=checked,
        mismatches=mismatches,
        missing_files=missing_files,
    )
