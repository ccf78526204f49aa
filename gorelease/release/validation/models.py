# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Result types for build-output validation.

A ValidationReport is created at the start of a run, filled in artifact by
artifact, and handed back to the caller. It is never persisted.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class CheckStatus(str, Enum):
    """Outcome of a single check on a single artifact."""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"
    NOT_APPLICABLE = "not_applicable"


@dataclass
class ArtifactPair:
    """A baseline file and its same-named candidate, plus what we learned about them."""

    filename: str
    expected_path: Path
    actual_path: Path
    expected_size: int = 0
    actual_size: int = 0
    size_difference_pct: Optional[float] = None
    platform: Optional[str] = None
    descriptor: Optional[str] = None
    size_status: CheckStatus = CheckStatus.NOT_APPLICABLE
    architecture_status: CheckStatus = CheckStatus.NOT_APPLICABLE
    health_status: CheckStatus = CheckStatus.NOT_APPLICABLE


@dataclass
class ValidationReport:
    """Errors, warnings and per-artifact details of one validation run."""

    expected_dir: str
    actual_dir: str
    host_platform: str
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    artifacts: list[ArtifactPair] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Warnings never block a pass."""
        return not self.errors

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)
