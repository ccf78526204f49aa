# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the gorelease CLI.

Each function here corresponds to one CLI subcommand and returns an exit
code. Findings are reported through the logger, which in the default
`github` format turns errors and warnings into workflow annotations.
"""

import argparse
import logging
from pathlib import Path
from typing import Callable, Optional

from gorelease.cli.exit_codes import (
    CONFIG_ERROR,
    RUNTIME_ERROR,
    SUCCESS,
    USER_ERROR,
    VALIDATION_ERROR,
)
from gorelease.config.exceptions import ConfigError
from gorelease.config.loader import load_config
from gorelease.config.schema import GoReleaseConfig, ValidationConfig
from gorelease.logging.logger import get_logger
from gorelease.release.exceptions import ExternalCommandError, ReleaseError
from gorelease.runtime.bootstrap import bootstrap


def _load_and_bootstrap(
    args: argparse.Namespace,
    command_name: str,
) -> tuple[int, Optional[GoReleaseConfig], logging.Logger]:
    """
    The shared setup every command needs: load config, run bootstrap.

    Returns a tuple of (exit_code, config, logger). If exit_code is not SUCCESS,
    the caller should return it immediately.
    """
    config = None
    config_error = None
    if args.config is not None:
        try:
            config = load_config(Path(args.config))
        except ConfigError as err:
            config_error = err

    bootstrap(
        config.global_config if config is not None else None,
        log_level=args.log_level,
        log_format=args.log_format,
    )
    logger = get_logger(f"gorelease.cli.{command_name}")

    if config_error is not None:
        logger.error(f"Configuration error: {config_error}")
        return CONFIG_ERROR, None, logger

    return SUCCESS, config, logger


def _run_guarded(logger: logging.Logger, command_name: str, func: Callable[[], int]) -> int:
    """Map release failures to VALIDATION_ERROR and anything unexpected to RUNTIME_ERROR."""
    try:
        return func()
    except ExternalCommandError as err:
        logger.error(str(err))
        for line in err.output.strip().splitlines():
            logger.info(f"  {line}")
        if err.exit_code is not None and err.exit_code > 0:
            return err.exit_code
        return VALIDATION_ERROR
    except ReleaseError as err:
        logger.error(str(err))
        return VALIDATION_ERROR
    except Exception as err:
        logger.error(
            f"{command_name} failed: {err}",
            exc_info=True,
        )
        return RUNTIME_ERROR


def _validation_settings(
    args: argparse.Namespace,
    config: Optional[GoReleaseConfig],
) -> ValidationConfig:
    """Config file values overlaid with whatever was given on the command line."""
    base = config.validation if config is not None else ValidationConfig()
    overrides: dict[str, object] = {}
    if args.size_tolerance is not None:
        overrides["size_tolerance"] = args.size_tolerance
    if args.health_check is not None:
        overrides["health_check"] = args.health_check
    if args.health_check_timeout is not None:
        overrides["health_check_timeout_seconds"] = args.health_check_timeout
    if args.strict:
        overrides["strict"] = True
    return ValidationConfig.model_validate({**base.model_dump(), **overrides})


def handle_validate_build(args: argparse.Namespace) -> int:
    """Compare a candidate artifact directory against a baseline."""
    exit_code, config, logger = _load_and_bootstrap(args, "validate_build")
    if exit_code != SUCCESS:
        return exit_code

    try:
        settings = _validation_settings(args, config)
    except ValueError as err:
        logger.error(f"Invalid validation options: {err}")
        return USER_ERROR

    def run() -> int:
        from gorelease.release.validation.validator import validate_build

        report = validate_build(Path(args.expected_dir), Path(args.actual_dir), settings)
        return SUCCESS if report.is_valid else VALIDATION_ERROR

    return _run_guarded(logger, "validate-build", run)


def handle_checksums(args: argparse.Namespace) -> int:
    """Write a SHA256 manifest for an artifacts directory, optionally uploading it."""
    exit_code, config, logger = _load_and_bootstrap(args, "checksums")
    if exit_code != SUCCESS:
        return exit_code

    def run() -> int:
        from gorelease.release.checksums.integrity import generate_checksums, write_checksum_file

        artifacts_dir = Path(args.artifacts_dir)
        output_file = Path(args.output_file)
        logger.info(f"Generating checksums for files in {artifacts_dir}")

        exclude: set[str] = set()
        if output_file.resolve().parent == artifacts_dir.resolve():
            exclude.add(output_file.name)
            if config is not None:
                exclude.add(config.checksums.manifest_name)
        checksums = generate_checksums(artifacts_dir, exclude=exclude)
        write_checksum_file(output_file, checksums)

        if args.upload_to_release:
            from gorelease.release.github import upload_release_asset

            upload_release_asset(args.upload_to_release, output_file)

        logger.info("✓ Checksums generated successfully")
        return SUCCESS

    return _run_guarded(logger, "checksums", run)


def handle_verify_checksums(args: argparse.Namespace) -> int:
    """Check artifacts against a previously written manifest."""
    exit_code, _config, logger = _load_and_bootstrap(args, "verify_checksums")
    if exit_code != SUCCESS:
        return exit_code

    def run() -> int:
        from gorelease.release.checksums.integrity import verify_checksums

        result = verify_checksums(Path(args.artifacts_dir), Path(args.manifest))
        for message in result.errors:
            logger.error(message)
        return SUCCESS if result.is_valid else VALIDATION_ERROR

    return _run_guarded(logger, "verify-checksums", run)


def handle_collect_artifacts(args: argparse.Namespace) -> int:
    """Publish the artifact list for the upload matrix as a step output."""
    exit_code, _config, logger = _load_and_bootstrap(args, "collect_artifacts")
    if exit_code != SUCCESS:
        return exit_code

    try:
        from gorelease.release.artifacts.collector import parse_platforms

        platforms = parse_platforms(args.platforms_json)
    except ValueError as err:
        logger.error(str(err))
        return USER_ERROR

    def run() -> int:
        from gorelease.release.artifacts.collector import artifacts_to_json, collect_artifacts
        from gorelease.utils.github_output import write_step_output

        entries = collect_artifacts(platforms, args.binary_name)
        write_step_output("artifacts", artifacts_to_json(entries))
        return SUCCESS

    return _run_guarded(logger, "collect-artifacts", run)


def handle_validate_makefile(args: argparse.Namespace) -> int:
    """Require one Makefile target per requested platform."""
    exit_code, _config, logger = _load_and_bootstrap(args, "validate_makefile")
    if exit_code != SUCCESS:
        return exit_code

    try:
        from gorelease.release.artifacts.collector import parse_platforms

        platforms = parse_platforms(args.platforms_json)
    except ValueError as err:
        logger.error(str(err))
        return USER_ERROR

    def run() -> int:
        from gorelease.release.contract.build import validate_makefile

        validate_makefile(platforms, args.binary_name)
        return SUCCESS

    return _run_guarded(logger, "validate-makefile", run)


def handle_validate_output(args: argparse.Namespace) -> int:
    """Require that the build left the binary where the workflow expects it."""
    exit_code, _config, logger = _load_and_bootstrap(args, "validate_output")
    if exit_code != SUCCESS:
        return exit_code

    def run() -> int:
        from gorelease.release.contract.build import validate_output

        validate_output(args.binary_name, args.platform, windows=args.windows)
        return SUCCESS

    return _run_guarded(logger, "validate-output", run)


def handle_generate_platform_pkg(args: argparse.Namespace) -> int:
    """Write package.json for one platform's npm package."""
    exit_code, _config, logger = _load_and_bootstrap(args, "generate_platform_pkg")
    if exit_code != SUCCESS:
        return exit_code

    platform_os, platform_cpu = args.os, args.cpu
    if platform_os is None or platform_cpu is None:
        from gorelease.release.platforms import split_platform

        try:
            default_os, default_cpu = split_platform(args.platform)
        except ValueError as err:
            logger.error(str(err))
            return USER_ERROR
        platform_os = platform_os or default_os
        platform_cpu = platform_cpu or default_cpu

    def run() -> int:
        from gorelease.release.npm.package import generate_platform_package

        generate_platform_package(
            binary_name=args.binary_name,
            platform_tag=args.platform,
            npm_package_name=args.npm_package_name,
            release_tag=args.release_tag,
            license_id=args.license,
            platform_os=platform_os,
            platform_cpu=platform_cpu,
        )
        return SUCCESS

    return _run_guarded(logger, "generate-platform-pkg", run)


def handle_npm_publish(args: argparse.Namespace) -> int:
    """Publish a package, treating an already-published version as done."""
    exit_code, _config, logger = _load_and_bootstrap(args, "npm_publish")
    if exit_code != SUCCESS:
        return exit_code

    def run() -> int:
        from gorelease.release.npm.publish import publish_package

        publish_package(Path(args.working_dir))
        return SUCCESS

    return _run_guarded(logger, "npm-publish", run)


def handle_download_binary(args: argparse.Namespace) -> int:
    """Fetch one platform's binary from a release."""
    exit_code, _config, logger = _load_and_bootstrap(args, "download_binary")
    if exit_code != SUCCESS:
        return exit_code

    def run() -> int:
        from gorelease.release.github import download_binary

        download_binary(args.binary_name, args.platform, args.release_tag)
        return SUCCESS

    return _run_guarded(logger, "download-binary", run)


def handle_detect_license(args: argparse.Namespace) -> int:
    """Resolve the repository's SPDX license and publish it as a step output."""
    exit_code, config, logger = _load_and_bootstrap(args, "detect_license")
    if exit_code != SUCCESS:
        return exit_code

    def run() -> int:
        from gorelease.release.github import detect_license
        from gorelease.utils.github_output import write_step_output

        explicit = args.explicit_license
        if not explicit and config is not None and config.release is not None:
            explicit = config.release.license
        write_step_output("license", detect_license(args.repository, explicit))
        return SUCCESS

    return _run_guarded(logger, "detect-license", run)


def handle_info(args: argparse.Namespace) -> int:
    """Display environment and configuration information."""
    exit_code, _config, logger = _load_and_bootstrap(args, "info")
    if exit_code != SUCCESS:
        return exit_code

    from gorelease import __version__
    from gorelease.release.validation.architecture import has_file_command
    from gorelease.runtime.environment import get_system_info

    system_info = get_system_info()
    logger.info(f"gorelease {__version__}")
    logger.info(f"Python: {system_info.python_version}")
    logger.info(f"System: {system_info.platform} ({system_info.architecture})")
    logger.info(f"Current platform: {system_info.platform_tag}")
    logger.info(f"file command: {'available' if has_file_command() else 'not found'}")
    return SUCCESS
