# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
End-of-run summary for a validation report.

Individual errors and warnings were already emitted as annotations while
the run progressed; the summary repeats them as a plain itemized list so the
step log reads top to bottom.
"""

import logging

from gorelease.release.validation.models import ValidationReport

SUMMARY_HEADER = "=== Validation Summary ==="
PASSED_LINE = "Validation passed"
FAILED_LINE = "Validation failed"


def summary_lines(report: ValidationReport) -> list[str]:
    lines = [
        SUMMARY_HEADER,
        f"Errors: {len(report.errors)}",
        f"Warnings: {len(report.warnings)}",
    ]

    if report.errors:
        lines.append("Errors:")
        lines.extend(f"  - {message}" for message in report.errors)

    if report.warnings:
        lines.append("Warnings:")
        lines.extend(f"  - {message}" for message in report.warnings)

    lines.append(PASSED_LINE if report.is_valid else FAILED_LINE)
    return lines


def log_summary(report: ValidationReport, logger: logging.Logger) -> None:
    """Write the summary as plain INFO lines."""
    for line in summary_lines(report):
        logger.info(line)
