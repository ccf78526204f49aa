# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Size comparison with a percentage tolerance.

Functionally identical binaries from two toolchains rarely have the same
length: timestamps, build IDs and linker padding drift. A size difference is
therefore only an error once it exceeds the tolerance.

The percentage is rounded to two decimals and then its integer part is
compared against the tolerance. So at a 10% tolerance, 10.99% passes while
10.999% (which rounds to 11.00) fails.
"""

from dataclasses import dataclass
from typing import Optional

DEFAULT_SIZE_TOLERANCE: int = 10


@dataclass(frozen=True)
class SizeComparison:
    """Outcome of comparing one pair of file sizes."""

    expected_size: int
    actual_size: int
    difference_pct: Optional[float]
    within_tolerance: bool

    @property
    def exact_match(self) -> bool:
        return self.expected_size == self.actual_size

    @property
    def difference_label(self) -> str:
        """The percentage as it appears in messages, e.g. '5.00%'."""
        if self.difference_pct is None:
            return "n/a"
        return f"{self.difference_pct:.2f}%"


def size_difference_pct(expected_size: int, actual_size: int) -> float:
    """
    Absolute difference relative to the expected size, in percent, to two decimals.

    Raises:
        ZeroDivisionError: If expected_size is 0. Callers handle empty baselines.
    """
    if expected_size == 0:
        raise ZeroDivisionError("cannot compute a relative size difference from an empty baseline")
    return round(abs(actual_size - expected_size) / expected_size * 100, 2)


def compare_sizes(
    expected_size: int,
    actual_size: int,
    tolerance: int = DEFAULT_SIZE_TOLERANCE,
) -> SizeComparison:
    """
    Compare two byte lengths against a whole-percent tolerance.

    An empty baseline paired with a non-empty candidate has no meaningful
    relative difference and is reported as out of tolerance.

    Args:
        expected_size: Baseline length in bytes.
        actual_size: Candidate length in bytes.
        tolerance: Largest allowed difference in whole percent.

    Returns:
        SizeComparison with the two-decimal percentage (None for an empty
        baseline) and the verdict.
    """
    if expected_size == actual_size:
        return SizeComparison(expected_size, actual_size, 0.0, True)

    if expected_size == 0:
        return SizeComparison(expected_size, actual_size, None, False)

    pct = size_difference_pct(expected_size, actual_size)
    return SizeComparison(
        expected_size=expected_size,
        actual_size=actual_size,
        difference_pct=pct,
        within_tolerance=int(pct) <= tolerance,
    )
