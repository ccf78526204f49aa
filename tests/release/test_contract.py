# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Tests for the Makefile and build-output contract checks."""

import subprocess
from pathlib import Path

import pytest

from gorelease.release.contract import build
from gorelease.release.contract.build import (
    expected_output_path,
    validate_makefile,
    validate_output,
)
from gorelease.release.exceptions import ContractViolationError, ExternalCommandError


def _fake_make(known_targets: set[str]):
    def fake_run(command, **kwargs):
        code = 0 if command[-1] in known_targets else 2
        return subprocess.CompletedProcess(command, code, stdout="", stderr="")

    return fake_run


def test_all_targets_present(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(build.subprocess, "run", _fake_make({"linux-x64", "darwin-arm64"}))
    validate_makefile(["linux-x64", "darwin-arm64"], "app")


def test_missing_targets_are_listed(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(build.subprocess, "run", _fake_make({"linux-x64"}))

    with pytest.raises(ContractViolationError) as exc_info:
        validate_makefile(["linux-x64", "darwin-arm64", "win32-x64"], "app")

    assert str(exc_info.value) == (
        "Makefile contract violation: missing targets: darwin-arm64 win32-x64"
    )
    out = capsys.readouterr().out
    assert "dist/bin/app-darwin-arm64" in out
    assert build.CONTRACT_DOCS_URL in out


def test_missing_make_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    def no_make(command, **kwargs):
        raise FileNotFoundError("make")

    monkeypatch.setattr(build.subprocess, "run", no_make)
    with pytest.raises(ExternalCommandError, match="make executable not found"):
        validate_makefile(["linux-x64"], "app")


def test_expected_output_path(tmp_path: Path) -> None:
    assert expected_output_path("app", "linux-x64", root=tmp_path) == (
        tmp_path / "dist" / "bin" / "app-linux-x64"
    )
    assert expected_output_path("app", "win32-x64", windows=True, root=tmp_path).name == (
        "app-win32-x64.exe"
    )


def test_output_present(tmp_path: Path) -> None:
    binary = tmp_path / "dist" / "bin" / "app-linux-x64"
    binary.parent.mkdir(parents=True)
    binary.write_bytes(b"1234")

    output = validate_output("app", "linux-x64", root=tmp_path)

    assert output.path == binary
    assert output.size == 4


def test_output_missing(tmp_path: Path) -> None:
    with pytest.raises(ContractViolationError, match="but file not found"):
        validate_output("app", "win32-x64", windows=True, root=tmp_path)
