# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Environment inspection for gorelease.

The one question that matters here is which platform tag the current host
has: only the artifact built for that tag can be executed for a health
check. Detection never fails; anything outside the supported vocabulary
comes back as `unknown`, which matches no artifact.
"""

import os
import platform
import sys
from collections.abc import Mapping
from typing import NamedTuple, Optional

from gorelease.release.platforms import UNKNOWN

MINIMUM_PYTHON_MAJOR = 3
MINIMUM_PYTHON_MINOR = 11

_WINDOWS_SYS_PLATFORMS = frozenset({"win32", "cygwin", "msys"})
_WINDOWS_SYSTEM_PREFIXES = ("windows", "cygwin", "msys", "mingw")

_OS_ALIASES = {
    "linux": "linux",
    "darwin": "darwin",
}

_ARCH_ALIASES = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
}

_WINDOWS_ARCH_ALIASES = {
    "AMD64": "x64",
    "ARM64": "arm64",
}


class SystemInfo(NamedTuple):
    """Snapshot of the current system environment."""

    python_version: str
    platform: str
    architecture: str
    hostname: str
    platform_tag: str


def _is_windows(system: str) -> bool:
    return system.lower().startswith(_WINDOWS_SYSTEM_PREFIXES)


def detect_host_platform(
    system: Optional[str] = None,
    machine: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Normalize the host's OS and CPU into a `{os}-{arch}` platform tag.

    Windows reports its CPU through PROCESSOR_ARCHITECTURE; an unrecognized
    value there defaults to x64, the overwhelmingly common runner. Elsewhere
    the machine name from uname is mapped, and unrecognized values become
    `unknown`.

    Args:
        system: OS name as platform.system() reports it. Detected when None.
        machine: CPU name as platform.machine() reports it. Detected when None.
        env: Environment mapping for the Windows lookup. os.environ when None.

    Returns:
        A tag like "linux-x64", "darwin-arm64", "win32-x64" or "linux-unknown".
    """
    if env is None:
        env = os.environ

    if system is None:
        if sys.platform in _WINDOWS_SYS_PLATFORMS:
            system = "Windows"
        else:
            system = platform.system()

    if _is_windows(system):
        arch = _WINDOWS_ARCH_ALIASES.get(env.get("PROCESSOR_ARCHITECTURE", ""), "x64")
        return f"win32-{arch}"

    if machine is None:
        machine = platform.machine()

    os_name = _OS_ALIASES.get(system.lower(), UNKNOWN)
    arch = _ARCH_ALIASES.get(machine.lower(), UNKNOWN)
    return f"{os_name}-{arch}"


def get_python_version() -> tuple[int, int, int]:
    """Return the current Python version as a (major, minor, micro) tuple."""
    major, minor, micro = sys.version_info[:3]
    return major, minor, micro


def check_minimum_python() -> None:
    """
    Verify we're running Python 3.11+.

    Raises:
        RuntimeError: If Python version is below 3.11.
    """
    major, minor, _ = get_python_version()
    if major < MINIMUM_PYTHON_MAJOR or (
        major == MINIMUM_PYTHON_MAJOR and minor < MINIMUM_PYTHON_MINOR
    ):
        raise RuntimeError(
            f"gorelease requires Python >= {MINIMUM_PYTHON_MAJOR}.{MINIMUM_PYTHON_MINOR}, "
            f"but you're running {major}.{minor}. Please upgrade."
        )


def get_system_info() -> SystemInfo:
    """Collect basic system information for logging and diagnostics."""
    return SystemInfo(
        python_version=platform.python_version(),
        platform=platform.system(),
        architecture=platform.machine(),
        hostname=platform.node(),
        platform_tag=detect_host_platform(),
    )
