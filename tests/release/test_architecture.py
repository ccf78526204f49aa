# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Tests for `file`-based architecture verification."""

import subprocess
from pathlib import Path
from typing import Optional

import pytest

from gorelease.release.validation import architecture
from gorelease.release.validation.architecture import describe_file, verify_architecture
from gorelease.release.validation.models import CheckStatus

LINUX_X64 = "ELF 64-bit LSB executable, x86-64, version 1 (SYSV), statically linked"
LINUX_ARM64 = "ELF 64-bit LSB executable, ARM aarch64, version 1 (SYSV), statically linked"


def _fixed(descriptor: Optional[str]):
    return lambda _path: descriptor


class TestVerifyArchitecture:
    def test_matching_descriptor_passes(self, tmp_path: Path) -> None:
        check = verify_architecture("myapp-linux-x64", tmp_path / "x", _fixed(LINUX_X64))
        assert check.status is CheckStatus.PASSED
        assert check.signature is not None
        assert check.signature.platform == "linux-x64"
        assert not check.failed

    def test_wrong_descriptor_fails(self, tmp_path: Path) -> None:
        check = verify_architecture("myapp-linux-x64", tmp_path / "x", _fixed(LINUX_ARM64))
        assert check.status is CheckStatus.FAILED
        assert check.descriptor == LINUX_ARM64
        assert check.failed

    def test_missing_introspection_is_skipped(self, tmp_path: Path) -> None:
        check = verify_architecture("myapp-linux-x64", tmp_path / "x", _fixed(None))
        assert check.status is CheckStatus.SKIPPED
        assert check.signature is not None
        assert not check.failed

    def test_unclaimed_filename_is_not_applicable(self, tmp_path: Path) -> None:
        check = verify_architecture("README.md", tmp_path / "x", _fixed("ASCII text"))
        assert check.status is CheckStatus.NOT_APPLICABLE
        assert check.signature is None


class TestDescribeFile:
    def test_none_when_file_command_missing(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(architecture.shutil, "which", lambda _name: None)
        assert describe_file(tmp_path / "anything") is None
        assert not architecture.has_file_command()

    def test_returns_stripped_brief_output(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: list[list[str]] = []

        def fake_run(command, **kwargs):
            calls.append(command)
            return subprocess.CompletedProcess(command, 0, stdout=LINUX_X64 + "\n", stderr="")

        monkeypatch.setattr(architecture.shutil, "which", lambda _name: "/usr/bin/file")
        monkeypatch.setattr(architecture.subprocess, "run", fake_run)

        target = tmp_path / "myapp-linux-x64"
        assert describe_file(target) == LINUX_X64
        assert calls == [["/usr/bin/file", "-b", str(target)]]

    def test_none_when_file_command_cannot_start(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def broken_run(command, **kwargs):
            raise PermissionError("not executable")

        monkeypatch.setattr(architecture.shutil, "which", lambda _name: "/usr/bin/file")
        monkeypatch.setattr(architecture.subprocess, "run", broken_run)
        assert describe_file(tmp_path / "x") is None
