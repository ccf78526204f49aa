# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

import pytest
from pydantic import ValidationError

from gorelease.config.schema import GlobalConfig, ReleaseConfig, ValidationConfig
from gorelease.release.platforms import SUPPORTED_PLATFORMS


class TestGlobalConfig:
    def test_log_level_is_normalized_to_upper_case(self) -> None:
        assert GlobalConfig(config_version="1", log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GlobalConfig(config_version="1", log_level="chatty")

    def test_unknown_log_format_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GlobalConfig(config_version="1", log_format="xml")


class TestValidationConfig:
    def test_defaults(self) -> None:
        config = ValidationConfig()
        assert config.size_tolerance == 10
        assert config.health_check_timeout_seconds == 30

    def test_negative_tolerance_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ValidationConfig(size_tolerance=-1)

    def test_zero_timeout_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ValidationConfig(health_check_timeout_seconds=0)


class TestReleaseConfig:
    def test_defaults_to_all_supported_platforms(self) -> None:
        assert ReleaseConfig(binary_name="myapp").platforms == list(SUPPORTED_PLATFORMS)

    def test_unsupported_platform_is_rejected(self) -> None:
        with pytest.raises(ValidationError, match="freebsd-x64"):
            ReleaseConfig(binary_name="myapp", platforms=["linux-x64", "freebsd-x64"])
