# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Platform vocabulary for the release pipeline.

A platform tag is `{os}-{arch}` with os in {linux, darwin, win32} and arch in
{x64, arm64}. Artifacts are named `<binary>-<tag>` (plus `.exe` on Windows),
and that naming convention is the only link between a file and the platform
it was built for.

Each supported tag has exactly one PlatformSignature: the filename glob that
claims a file for the platform, the pattern its `file -b` descriptor must
match, and the label used when reporting a mismatch. Descriptors are matched
by pattern rather than equality because build IDs, interpreter paths and
stripping notes vary between toolchains.
"""

import fnmatch
import re
from dataclasses import dataclass
from typing import Optional

SUPPORTED_OS: tuple[str, ...] = ("linux", "darwin", "win32")
SUPPORTED_ARCH: tuple[str, ...] = ("x64", "arm64")
UNKNOWN: str = "unknown"

SUPPORTED_PLATFORMS: tuple[str, ...] = tuple(
    f"{os_name}-{arch}" for os_name in SUPPORTED_OS for arch in SUPPORTED_ARCH
)

WINDOWS_EXTENSION: str = ".exe"


@dataclass(frozen=True)
class PlatformSignature:
    """Expected binary format for one platform tag."""

    platform: str
    filename_glob: str
    descriptor_pattern: str
    label: str

    def claims(self, filename: str) -> bool:
        """Whether a filename belongs to this platform."""
        return fnmatch.fnmatchcase(filename, self.filename_glob)

    def matches(self, descriptor: str) -> bool:
        """Whether a `file -b` descriptor fits this platform."""
        return re.search(self.descriptor_pattern, descriptor) is not None


# Order matters: the first signature whose glob claims a filename wins.
PLATFORM_SIGNATURES: tuple[PlatformSignature, ...] = (
    PlatformSignature("linux-x64", "*linux-x64*", r"ELF 64-bit.*x86-64", "ELF x86-64"),
    PlatformSignature("linux-arm64", "*linux-arm64*", r"ELF 64-bit.*ARM aarch64", "ELF ARM aarch64"),
    PlatformSignature("darwin-x64", "*darwin-x64*", r"Mach-O.*x86_64", "Mach-O x86_64"),
    PlatformSignature("darwin-arm64", "*darwin-arm64*", r"Mach-O.*arm64", "Mach-O arm64"),
    PlatformSignature("win32-x64", "*win32-x64*.exe", r"PE32\+.*x86-64", "PE32+ x86-64"),
    PlatformSignature("win32-arm64", "*win32-arm64*.exe", r"PE32\+.*Aarch64", "PE32+ Aarch64"),
)


def signature_for_filename(filename: str) -> Optional[PlatformSignature]:
    """Return the signature claiming `filename`, or None when no platform does."""
    for signature in PLATFORM_SIGNATURES:
        if signature.claims(filename):
            return signature
    return None


def is_windows_platform(platform_tag: str) -> bool:
    return platform_tag.startswith("win32-")


def binary_filename(binary_name: str, platform_tag: str) -> str:
    """`<binary>-<platform>`, with `.exe` appended for Windows targets."""
    extension = WINDOWS_EXTENSION if is_windows_platform(platform_tag) else ""
    return f"{binary_name}-{platform_tag}{extension}"


def split_platform(platform_tag: str) -> tuple[str, str]:
    """
    Split a tag into (os, arch).

    Raises:
        ValueError: If the tag is not one of SUPPORTED_PLATFORMS.
    """
    if platform_tag not in SUPPORTED_PLATFORMS:
        raise ValueError(
            f"Unsupported platform '{platform_tag}'. "
            f"Must be one of: {', '.join(SUPPORTED_PLATFORMS)}"
        )
    os_name, arch = platform_tag.split("-", maxsplit=1)
    return os_name, arch
