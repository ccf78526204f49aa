# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Exceptions raised by the release subsystem.

Per-artifact findings are never raised; they are collected into reports.
These exceptions cover the cases where a command cannot continue at all.
"""

from typing import Optional


class ReleaseError(Exception):
    """Base for all release subsystem errors."""


class ArtifactDirectoryError(ReleaseError):
    """Raised when an input artifact directory does not exist."""


class ContractViolationError(ReleaseError):
    """Raised when the project's Makefile or build output breaks the build contract."""


class ExternalCommandError(ReleaseError):
    """
    Raised when an external tool (gh, npm, make) can't be run or exits non-zero.

    Carries the command line, the exit code (None when the tool never started)
    and whatever the tool printed, so the CLI can surface it.
    """

    def __init__(
        self,
        message: str,
        command: list[str],
        exit_code: Optional[int] = None,
        output: str = "",
    ) -> None:
        super().__init__(message)
        self.command = command
        self.exit_code = exit_code
        self.output = output
