# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Tests for the `gh` wrappers. No network: subprocess.run is replaced."""

import subprocess
from pathlib import Path

import pytest

from gorelease.release import github
from gorelease.release.exceptions import ExternalCommandError


class FakeGh:
    def __init__(self, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.calls: list[list[str]] = []
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr

    def __call__(self, command, **kwargs):
        self.calls.append(command)
        return subprocess.CompletedProcess(command, self.returncode, self.stdout, self.stderr)


def test_upload_uses_clobber(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    fake = FakeGh()
    monkeypatch.setattr(github.subprocess, "run", fake)

    github.upload_release_asset("v1.0.0", tmp_path / "checksums.txt")

    assert fake.calls == [
        ["gh", "release", "upload", "v1.0.0", str(tmp_path / "checksums.txt"), "--clobber"]
    ]


def test_download_targets_platform_package(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    fake = FakeGh()
    monkeypatch.setattr(github.subprocess, "run", fake)

    path = github.download_binary("app", "win32-x64", "v1.0.0", root=tmp_path)

    target_dir = tmp_path / "platforms" / "app-win32-x64"
    assert target_dir.is_dir()
    assert path == target_dir / "app-win32-x64.exe"
    assert fake.calls[0][:4] == ["gh", "release", "download", "v1.0.0"]
    assert "app-win32-x64.exe" in fake.calls[0]


def test_download_failure_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(github.subprocess, "run", FakeGh(1, stderr="release not found"))

    with pytest.raises(ExternalCommandError) as exc_info:
        github.download_binary("app", "linux-x64", "v9.9.9", root=tmp_path)

    assert exc_info.value.exit_code == 1
    assert "release not found" in str(exc_info.value)


def test_missing_gh_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    def no_gh(command, **kwargs):
        raise FileNotFoundError("gh")

    monkeypatch.setattr(github.subprocess, "run", no_gh)
    with pytest.raises(ExternalCommandError, match="gh executable not found"):
        github.detect_license("acme/app")


def test_explicit_license_skips_lookup(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = FakeGh()
    monkeypatch.setattr(github.subprocess, "run", fake)

    assert github.detect_license("acme/app", "GPL-3.0-only") == "GPL-3.0-only"
    assert fake.calls == []


def test_detected_license(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(github.subprocess, "run", FakeGh(stdout="Apache-2.0\n"))
    assert github.detect_license("acme/app") == "Apache-2.0"


def test_empty_detection_falls_back_to_mit(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(github.subprocess, "run", FakeGh(stdout="\n"))
    assert github.detect_license("acme/app") == "MIT"
