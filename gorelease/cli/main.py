# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for gorelease.

This is the single root command; every workflow step calls one subcommand.
No interactive prompts, ever: these run on CI runners.

The global options (--config, --log-level, --log-format) are inherited by
every subcommand through argparse's parent parser mechanism.

Usage:
    gorelease <subcommand> [options]
    gorelease validate-build artifacts-old artifacts-new --size-tolerance=10 --health-check=version
    gorelease checksums dist/bin checksums.txt --upload-to-release v1.0.0
    gorelease info
"""

import argparse
import sys
from typing import Optional

from gorelease.cli.commands import (
    handle_checksums,
    handle_collect_artifacts,
    handle_detect_license,
    handle_download_binary,
    handle_generate_platform_pkg,
    handle_info,
    handle_npm_publish,
    handle_validate_build,
    handle_validate_makefile,
    handle_validate_output,
    handle_verify_checksums,
)
from gorelease.cli.exit_codes import USER_ERROR
from gorelease.logging.logger import VALID_LOG_FORMATS


def _build_global_parser() -> argparse.ArgumentParser:
    """
    Build the parent parser with global options.

    A separate parent parser (add_help=False) keeps help text from colliding
    between the parent and the subcommand parsers. Defaults are None so a
    config file value can apply when the flag isn't given.
    """
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file.",
    )
    parent.add_argument(
        "--log-level",
        type=str,
        default=None,
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging verbosity level (default INFO).",
    )
    parent.add_argument(
        "--log-format",
        type=str,
        default=None,
        dest="log_format",
        choices=list(VALID_LOG_FORMATS),
        help="'github' for workflow annotations (default), 'json' for structured lines.",
    )
    return parent


def _add_validate_build_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("expected_dir", help="Baseline artifacts directory.")
    parser.add_argument("actual_dir", help="Candidate artifacts directory.")
    parser.add_argument(
        "--size-tolerance",
        type=int,
        default=None,
        dest="size_tolerance",
        metavar="N",
        help="Max size difference in whole percent (default 10).",
    )
    parser.add_argument(
        "--health-check",
        type=str,
        default=None,
        dest="health_check",
        metavar="CMD",
        help="Arguments to run the native binary with, e.g. --health-check=--version.",
    )
    parser.add_argument(
        "--health-check-timeout",
        type=int,
        default=None,
        dest="health_check_timeout",
        metavar="SECONDS",
        help="Kill the health check after this many seconds (default 30).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=False,
        help="Fail when an architecture check is skipped.",
    )


def _register_subcommands(
    subparsers: argparse._SubParsersAction,  # type: ignore[type-arg]
    parent: argparse.ArgumentParser,
) -> None:
    """
    Register all subcommands with their handler functions.

    Each subcommand gets the global options from the parent parser and sets
    its handler via set_defaults(func=...).
    """
    validate_build = subparsers.add_parser(
        "validate-build",
        parents=[parent],
        help="Compare build outputs against a baseline.",
    )
    _add_validate_build_arguments(validate_build)
    validate_build.set_defaults(func=handle_validate_build)

    checksums = subparsers.add_parser(
        "checksums", parents=[parent], help="Generate a SHA256 checksum manifest."
    )
    checksums.add_argument("artifacts_dir", help="Directory of release binaries.")
    checksums.add_argument("output_file", help="Manifest path to write.")
    checksums.add_argument(
        "--upload-to-release",
        type=str,
        default=None,
        dest="upload_to_release",
        metavar="TAG",
        help="Attach the manifest to this release.",
    )
    checksums.set_defaults(func=handle_checksums)

    verify = subparsers.add_parser(
        "verify-checksums", parents=[parent], help="Verify artifacts against a manifest."
    )
    verify.add_argument("artifacts_dir", help="Directory of release binaries.")
    verify.add_argument("manifest", help="Checksum manifest to verify against.")
    verify.set_defaults(func=handle_verify_checksums)

    collect = subparsers.add_parser(
        "collect-artifacts", parents=[parent], help="Emit the artifact list as a step output."
    )
    collect.add_argument("platforms_json", help='JSON array, e.g. \'["linux-x64"]\'.')
    collect.add_argument("binary_name", help="Base name of the binary.")
    collect.set_defaults(func=handle_collect_artifacts)

    makefile = subparsers.add_parser(
        "validate-makefile", parents=[parent], help="Check Makefile targets for each platform."
    )
    makefile.add_argument("platforms_json", help='JSON array, e.g. \'["linux-x64"]\'.')
    makefile.add_argument("binary_name", help="Base name of the binary.")
    makefile.set_defaults(func=handle_validate_makefile)

    output = subparsers.add_parser(
        "validate-output", parents=[parent], help="Check that the build produced its binary."
    )
    output.add_argument("binary_name", help="Base name of the binary.")
    output.add_argument("platform", help="Platform tag, e.g. linux-x64.")
    output.add_argument(
        "--windows",
        action="store_true",
        default=False,
        help="Expect a .exe suffix.",
    )
    output.set_defaults(func=handle_validate_output)

    pkg = subparsers.add_parser(
        "generate-platform-pkg", parents=[parent], help="Write a platform npm package.json."
    )
    pkg.add_argument("binary_name")
    pkg.add_argument("platform")
    pkg.add_argument("npm_package_name")
    pkg.add_argument("release_tag")
    pkg.add_argument("license")
    pkg.add_argument("os", nargs="?", default=None, help="npm os value; derived from the platform when omitted.")
    pkg.add_argument("cpu", nargs="?", default=None, help="npm cpu value; derived from the platform when omitted.")
    pkg.set_defaults(func=handle_generate_platform_pkg)

    publish = subparsers.add_parser(
        "npm-publish", parents=[parent], help="Publish an npm package idempotently."
    )
    publish.add_argument("working_dir", nargs="?", default=".", help="Package directory.")
    publish.set_defaults(func=handle_npm_publish)

    download = subparsers.add_parser(
        "download-binary", parents=[parent], help="Download a platform binary from a release."
    )
    download.add_argument("binary_name")
    download.add_argument("platform")
    download.add_argument("release_tag")
    download.set_defaults(func=handle_download_binary)

    license_parser = subparsers.add_parser(
        "detect-license", parents=[parent], help="Resolve the repository license."
    )
    license_parser.add_argument("repository", help="owner/repo")
    license_parser.add_argument(
        "explicit_license", nargs="?", default=None, help="Use this instead of detecting."
    )
    license_parser.set_defaults(func=handle_detect_license)

    info = subparsers.add_parser(
        "info", parents=[parent], help="Display environment and platform info."
    )
    info.set_defaults(func=handle_info)


def build_parser() -> argparse.ArgumentParser:
    parent = _build_global_parser()
    root_parser = argparse.ArgumentParser(
        prog="gorelease",
        description="CI glue for cross-compiled Go releases.",
        parents=[parent],
    )
    subparsers = root_parser.add_subparsers(dest="command")
    _register_subcommands(subparsers, parent)
    return root_parser


def main(argv: Optional[list[str]] = None) -> None:
    """
    Main CLI entrypoint. This is what pyproject.toml's [project.scripts] points to.

    If no subcommand is given, we show help and exit with USER_ERROR.
    """
    root_parser = build_parser()
    args = root_parser.parse_args(argv)

    if not hasattr(args, "func") or args.func is None:
        root_parser.print_help()
        sys.exit(USER_ERROR)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
