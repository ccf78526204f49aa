# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""In-process tests for subcommand handlers and their exit codes."""

import json
import textwrap
from pathlib import Path

import pytest

from gorelease.cli.exit_codes import CONFIG_ERROR, SUCCESS, USER_ERROR, VALIDATION_ERROR
from gorelease.cli.main import build_parser, main
from gorelease.release.npm import publish


def _exit_code(*argv: str) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(list(argv))
    return int(exc_info.value.code)


def test_parser_defaults_leave_room_for_config() -> None:
    args = build_parser().parse_args(["validate-build", "a", "b"])
    assert args.size_tolerance is None
    assert args.health_check is None
    assert args.strict is False


def test_config_sets_tolerance(expected_dir: Path, actual_dir: Path, tmp_path: Path) -> None:
    (expected_dir / "README").write_bytes(b"x" * 100)
    (actual_dir / "README").write_bytes(b"x" * 140)
    config = tmp_path / "gorelease.yaml"
    config.write_text(
        textwrap.dedent("""\
            global:
              config_version: "1.0.0"
            validation:
              size_tolerance: 50
        """),
        encoding="utf-8",
    )

    assert _exit_code("validate-build", str(expected_dir), str(actual_dir)) == VALIDATION_ERROR
    assert (
        _exit_code("validate-build", str(expected_dir), str(actual_dir), "--config", str(config))
        == SUCCESS
    )


def test_negative_tolerance_is_a_user_error(expected_dir: Path, actual_dir: Path) -> None:
    code = _exit_code("validate-build", str(expected_dir), str(actual_dir), "--size-tolerance=-1")
    assert code == USER_ERROR


def test_broken_config_is_a_config_error(
    expected_dir: Path, actual_dir: Path, broken_yaml_file: Path
) -> None:
    code = _exit_code(
        "validate-build", str(expected_dir), str(actual_dir), "--config", str(broken_yaml_file)
    )
    assert code == CONFIG_ERROR


def test_checksums_writes_manifest(tmp_path: Path) -> None:
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    (bin_dir / "app-linux-x64").write_bytes(b"elf")
    manifest = bin_dir / "checksums.txt"
    manifest.write_text("stale", encoding="utf-8")

    assert _exit_code("checksums", str(bin_dir), str(manifest)) == SUCCESS

    text = manifest.read_text(encoding="utf-8")
    assert text.startswith("# SHA256 Checksums\n")
    assert "  app-linux-x64" in text
    assert "  checksums.txt" not in text
    assert _exit_code("verify-checksums", str(bin_dir), str(manifest)) == SUCCESS


def test_checksums_outside_artifacts_dir_keeps_same_named_file(tmp_path: Path) -> None:
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    (bin_dir / "app-linux-x64").write_bytes(b"elf")
    (bin_dir / "checksums.txt").write_text("shipped as an artifact", encoding="utf-8")
    manifest = tmp_path / "out" / "checksums.txt"

    assert _exit_code("checksums", str(bin_dir), str(manifest)) == SUCCESS

    text = manifest.read_text(encoding="utf-8")
    assert "  app-linux-x64" in text
    assert "  checksums.txt" in text


def test_collect_artifacts_writes_step_output(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    output_file = tmp_path / "github_output"
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))

    assert _exit_code("collect-artifacts", '["linux-x64"]', "app") == SUCCESS

    name, _, value = output_file.read_text(encoding="utf-8").strip().partition("=")
    assert name == "artifacts"
    assert json.loads(value)[0]["path"] == "dist/bin/app-linux-x64"


def test_collect_artifacts_rejects_bad_json() -> None:
    assert _exit_code("collect-artifacts", "linux-x64", "app") == USER_ERROR


def test_validate_output_exit_codes(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert _exit_code("validate-output", "app", "linux-x64") == VALIDATION_ERROR

    binary = tmp_path / "dist" / "bin" / "app-linux-x64"
    binary.parent.mkdir(parents=True)
    binary.write_bytes(b"elf")
    assert _exit_code("validate-output", "app", "linux-x64") == SUCCESS


def test_npm_failure_propagates_tool_exit_code(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import subprocess

    def failing_npm(command, **kwargs):
        return subprocess.CompletedProcess(command, 7, stdout="npm ERR! code E401\n")

    monkeypatch.setattr(publish.subprocess, "run", failing_npm)
    assert _exit_code("npm-publish", str(tmp_path)) == 7


def test_detect_license_prefers_explicit(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    output_file = tmp_path / "github_output"
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))

    assert _exit_code("detect-license", "acme/app", "BSD-3-Clause") == SUCCESS
    assert output_file.read_text(encoding="utf-8") == "license=BSD-3-Clause\n"


def test_platform_package_derives_os_and_cpu(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)

    code = _exit_code("generate-platform-pkg", "app", "win32-arm64", "@acme/app", "v2.0.0", "MIT")

    assert code == SUCCESS
    manifest = json.loads(
        (tmp_path / "platforms" / "app-win32-arm64" / "package.json").read_text(encoding="utf-8")
    )
    assert manifest["os"] == ["win32"]
    assert manifest["cpu"] == ["arm64"]
    assert manifest["name"] == "@acme/app-win32-arm64"


def test_platform_package_rejects_unknown_platform_without_os_cpu(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    code = _exit_code("generate-platform-pkg", "app", "plan9-x64", "app", "v1.0.0", "MIT")
    assert code == USER_ERROR
