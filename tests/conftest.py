# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for gorelease tests.

Fixtures here are available to every test file automatically.
"""

import textwrap
from pathlib import Path
from typing import Callable, Iterator

import pytest

from gorelease.logging.logger import configure_logging


@pytest.fixture(autouse=True)
def _fresh_logging() -> Iterator[None]:
    """
    Run every test at DEBUG in github format, then restore the defaults.

    Handlers write to sys.stdout as it is at emit time, so capsys sees log
    output from module-level loggers too.
    """
    configure_logging(log_level="DEBUG", log_format="github")
    yield
    configure_logging(log_level="INFO", log_format="github")


@pytest.fixture()
def expected_dir(tmp_path: Path) -> Path:
    path = tmp_path / "expected"
    path.mkdir()
    return path


@pytest.fixture()
def actual_dir(tmp_path: Path) -> Path:
    path = tmp_path / "actual"
    path.mkdir()
    return path


@pytest.fixture()
def write_artifact() -> Callable[[Path, str, int], Path]:
    """Factory writing a file of exactly `size` bytes."""

    def _write(directory: Path, name: str, size: int) -> Path:
        path = directory / name
        path.write_bytes(b"\x7f" * size)
        return path

    return _write


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """The smallest config that passes schema validation."""
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          project_name: "gorelease-test"
          log_level: "DEBUG"
    """)
    config_file = tmp_path / "test_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """Valid YAML that fails schema validation (missing config_version)."""
    config_content = textwrap.dedent("""\
        global:
          project_name: "gorelease-test"
    """)
    config_file = tmp_path / "invalid_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    """A file that isn't valid YAML at all."""
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file
