# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the native health check.

Shell scripts stand in for Go binaries; they need a POSIX shell.
"""

import sys
from pathlib import Path

import pytest

from gorelease.release.validation.health import (
    is_native_artifact,
    preview,
    run_health_check,
)

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="needs /bin/sh")


def _script(path: Path, body: str) -> Path:
    path.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
    return path


def test_native_artifact_matches_host_tag() -> None:
    assert is_native_artifact("myapp-linux-x64", "linux-x64")
    assert is_native_artifact("myapp-win32-x64.exe", "win32-x64")
    assert not is_native_artifact("myapp-linux-arm64", "linux-x64")
    assert not is_native_artifact("myapp-linux-x64", "unknown")


def test_preview_truncates_with_ellipsis() -> None:
    assert preview("abc", 5) == "abc"
    assert preview("abcdefgh", 5) == "abcde..."
    assert preview("abcdefgh", 5, ellipsis=False) == "abcde"


@posix_only
def test_zero_exit_is_success(tmp_path: Path) -> None:
    binary = _script(tmp_path / "myapp-linux-x64", 'echo "myapp v1.0.0"')
    result = run_health_check(binary, "version")
    assert result.success
    assert result.exit_code == 0
    assert "v1.0.0" in result.output
    assert not result.timed_out


@posix_only
def test_arguments_are_split_on_whitespace(tmp_path: Path) -> None:
    binary = _script(tmp_path / "myapp-linux-x64", 'echo "$#:$1:$2"')
    result = run_health_check(binary, "version   --short")
    assert result.output.strip() == "2:version:--short"


@posix_only
def test_stderr_is_merged_into_output(tmp_path: Path) -> None:
    binary = _script(tmp_path / "myapp-linux-x64", 'echo "broken" >&2\nexit 3')
    result = run_health_check(binary, "--version")
    assert not result.success
    assert result.exit_code == 3
    assert "broken" in result.output


@posix_only
def test_timeout_kills_the_process(tmp_path: Path) -> None:
    binary = _script(tmp_path / "myapp-linux-x64", "exec sleep 10")
    result = run_health_check(binary, "version", timeout_seconds=1)
    assert not result.success
    assert result.timed_out
    assert result.exit_code is None
    assert result.elapsed_seconds < 10


def test_missing_binary_reports_launch_error(tmp_path: Path) -> None:
    result = run_health_check(tmp_path / "does-not-exist", "version")
    assert not result.success
    assert result.launch_error is not None
    assert result.exit_code is None


@posix_only
def test_trailing_newlines_are_stripped(tmp_path: Path) -> None:
    binary = _script(tmp_path / "myapp-linux-x64", 'echo "v1.0.0"\necho')
    result = run_health_check(binary, "version")
    assert result.output == "v1.0.0"


@posix_only
def test_output_of_exactly_preview_length_is_not_cut(tmp_path: Path) -> None:
    binary = _script(tmp_path / "myapp-linux-x64", "printf '%0100d\\n' 0")
    result = run_health_check(binary, "version")
    assert len(result.output) == 100
    assert preview(result.output, 100) == "0" * 100
