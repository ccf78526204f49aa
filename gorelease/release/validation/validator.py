# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Build-output validation: compare a candidate artifact set against a baseline.

Typical use is checking that a new cross-compilation toolchain produces the
same release as the old one. Hashes are deliberately not compared: different
toolchains, timestamps and build metadata give different bytes for
functionally equivalent binaries.

For every file in the expected directory, in name order:
  1. the same-named file must exist in the actual directory
  2. its size must be within tolerance of the expected size
  3. its `file` descriptor must match the platform in its name
  4. if it is the host's native artifact and a health check is configured,
     it must run and exit 0 (skipped when step 3 failed)

Then every file only present in the actual directory is a warning.

Per-artifact problems are recorded and the run moves on. The only way out
early is a missing input directory.
"""

from pathlib import Path
from typing import Optional

from gorelease.config.schema import ValidationConfig
from gorelease.logging.logger import get_logger
from gorelease.release.exceptions import ArtifactDirectoryError
from gorelease.release.validation.architecture import Describer, describe_file, verify_architecture
from gorelease.release.validation.health import (
    FAILURE_PREVIEW_LENGTH,
    SUCCESS_PREVIEW_LENGTH,
    is_native_artifact,
    preview,
    run_health_check,
)
from gorelease.release.validation.models import ArtifactPair, CheckStatus, ValidationReport
from gorelease.release.validation.report import log_summary
from gorelease.release.validation.sizes import compare_sizes
from gorelease.runtime.environment import detect_host_platform
from gorelease.utils.filesystem import list_regular_files

logger = get_logger(__name__)


def _record_error(report: ValidationReport, message: str) -> None:
    report.add_error(message)
    logger.error(message)


def _record_warning(report: ValidationReport, message: str) -> None:
    report.add_warning(message)
    logger.warning(message)


def _check_size(pair: ArtifactPair, tolerance: int, report: ValidationReport) -> None:
    comparison = compare_sizes(pair.expected_size, pair.actual_size, tolerance)
    pair.size_difference_pct = comparison.difference_pct

    if comparison.exact_match:
        pair.size_status = CheckStatus.PASSED
        logger.info(f"  Size: {pair.actual_size} bytes (exact match)")
        return

    if comparison.difference_pct is None:
        pair.size_status = CheckStatus.FAILED
        _record_error(
            report,
            f"{pair.filename}: baseline is empty (expected 0 bytes, got {pair.actual_size} bytes)",
        )
        return

    if comparison.within_tolerance:
        pair.size_status = CheckStatus.PASSED
        logger.info(
            f"  Size: {pair.actual_size} bytes "
            f"({comparison.difference_label} difference, within tolerance)"
        )
        return

    pair.size_status = CheckStatus.FAILED
    _record_error(
        report,
        f"{pair.filename}: size differs by {comparison.difference_label} "
        f"(exceeds {tolerance}% tolerance; expected {pair.expected_size} bytes, "
        f"got {pair.actual_size} bytes)",
    )


def _check_architecture(
    pair: ArtifactPair,
    strict: bool,
    describe: Describer,
    report: ValidationReport,
) -> None:
    check = verify_architecture(pair.filename, pair.actual_path, describe)
    pair.architecture_status = check.status
    pair.descriptor = check.descriptor
    if check.signature is not None:
        pair.platform = check.signature.platform

    if check.status is CheckStatus.SKIPPED:
        if strict and check.signature is not None:
            # A skip is only a failure when the caller asked for one.
            pair.architecture_status = CheckStatus.FAILED
            _record_error(
                report,
                f"{pair.filename}: architecture check skipped "
                f"('file' command not available) in strict mode",
            )
        else:
            logger.info("  Architecture: (skipped - 'file' command not available)")
        return

    if check.status is CheckStatus.FAILED and check.signature is not None:
        _record_error(
            report,
            f"{pair.filename}: expected {check.signature.label}, got: {check.descriptor}",
        )
        return

    logger.info(f"  Architecture: {check.descriptor} ✓")


def _check_health(
    pair: ArtifactPair,
    health_check: str,
    timeout_seconds: int,
    report: ValidationReport,
) -> None:
    logger.info(f"  Running health check: {pair.actual_path} {health_check}")
    result = run_health_check(pair.actual_path, health_check, timeout_seconds)

    if result.success:
        pair.health_status = CheckStatus.PASSED
        logger.info("  Health check: ✓")
        logger.info(f"    Output: {preview(result.output, SUCCESS_PREVIEW_LENGTH)}")
        return

    pair.health_status = CheckStatus.FAILED
    if result.timed_out:
        _record_error(
            report,
            f"{pair.filename}: health check timed out after {timeout_seconds}s",
        )
    elif result.launch_error is not None:
        _record_error(
            report,
            f"{pair.filename}: health check could not start: {result.launch_error}",
        )
    else:
        _record_error(
            report,
            f"{pair.filename}: health check failed (exit code {result.exit_code})",
        )

    if result.output:
        logger.info(
            f"    Output: {preview(result.output, FAILURE_PREVIEW_LENGTH, ellipsis=False)}"
        )


def _validate_pair(
    pair: ArtifactPair,
    config: ValidationConfig,
    host_platform: str,
    describe: Describer,
    report: ValidationReport,
) -> None:
    pair.expected_size = pair.expected_path.stat().st_size
    pair.actual_size = pair.actual_path.stat().st_size

    _check_size(pair, config.size_tolerance, report)
    _check_architecture(pair, config.strict, describe, report)

    if not config.health_check or pair.architecture_status is CheckStatus.FAILED:
        return
    if not is_native_artifact(pair.filename, host_platform):
        return

    _check_health(pair, config.health_check, config.health_check_timeout_seconds, report)


def _require_directory(path: Path, role: str) -> None:
    if not path.is_dir():
        raise ArtifactDirectoryError(f"{role} directory not found: {path}")


def validate_build(
    expected_dir: Path,
    actual_dir: Path,
    config: Optional[ValidationConfig] = None,
    host_platform: Optional[str] = None,
    describe: Describer = describe_file,
) -> ValidationReport:
    """
    Compare every artifact in `actual_dir` against its baseline in `expected_dir`.

    Args:
        expected_dir: Baseline artifacts.
        actual_dir: Candidate artifacts.
        config: Tolerance, health check and strictness. Defaults apply when None.
        host_platform: Platform tag of this host. Detected when None.
        describe: `file`-style introspection function.

    Returns:
        The finished ValidationReport. The summary has already been logged.

    Raises:
        ArtifactDirectoryError: If either directory doesn't exist.
    """
    if config is None:
        config = ValidationConfig()
    if host_platform is None:
        host_platform = detect_host_platform()

    logger.info(f"Current platform: {host_platform}")
    logger.info(f"Size tolerance: {config.size_tolerance}%")
    if config.health_check:
        logger.info(f"Health check: {config.health_check}")

    _require_directory(expected_dir, "Expected")
    _require_directory(actual_dir, "Actual")

    report = ValidationReport(
        expected_dir=str(expected_dir),
        actual_dir=str(actual_dir),
        host_platform=host_platform,
    )

    expected_files = list_regular_files(expected_dir)
    expected_names = {path.name for path in expected_files}

    for expected_path in expected_files:
        filename = expected_path.name
        actual_path = actual_dir / filename
        logger.info(f"Validating: {filename}")

        if not actual_path.is_file():
            _record_error(report, f"Missing file: {filename}")
            continue

        pair = ArtifactPair(
            filename=filename,
            expected_path=expected_path,
            actual_path=actual_path,
        )
        report.artifacts.append(pair)
        _validate_pair(pair, config, host_platform, describe, report)

    for actual_path in list_regular_files(actual_dir):
        if actual_path.name not in expected_names:
            _record_warning(report, f"Extra file: {actual_path.name}")

    log_summary(report, logger)
    return report
