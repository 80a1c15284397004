# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Schema-level validation tests.

These focus on the pydantic models themselves — defaults, constraint
enforcement and version validation.
"""

import pytest
from pydantic import ValidationError

from envgate.config.schema import FrameworkConfig, GlobalConfig, RequirementsConfig


class TestGlobalConfigSchema:
    def test_config_version_is_required(self) -> None:
        with pytest.raises(ValidationError):
            GlobalConfig()  # type: ignore[call-arg]

    def test_defaults(self) -> None:
        config = GlobalConfig(config_version="1.0.0")
        assert config.extension_name == "extension"
        assert config.log_level == "INFO"
        assert config.log_file is None

    def test_log_level_is_normalized(self) -> None:
        assert GlobalConfig(config_version="1.0.0", log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GlobalConfig(config_version="1.0.0", log_level="LOUD")

    def test_empty_extension_name_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GlobalConfig(config_version="1.0.0", extension_name="")


class TestRequirementsConfigSchema:
    def test_both_floors_are_required(self) -> None:
        with pytest.raises(ValidationError):
            RequirementsConfig(runtime="3.10")  # type: ignore[call-arg]

    def test_versions_are_stripped(self) -> None:
        config = RequirementsConfig(runtime=" 3.10 ", framework="5.6")
        assert config.runtime == "3.10"

    @pytest.mark.parametrize("bad", ["", "latest", "3.x"])
    def test_unparseable_floor_is_rejected(self, bad: str) -> None:
        with pytest.raises(ValidationError):
            RequirementsConfig(runtime=bad, framework="5.6")

    def test_unknown_field_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RequirementsConfig(runtime="3.10", framework="5.6", php="7.4")  # type: ignore[call-arg]

    def test_strict_equality_policy_can_be_selected(self) -> None:
        config = RequirementsConfig(runtime="3.10", framework="5.6", equal_satisfies=False)
        assert config.equal_satisfies is False


class TestFrameworkConfigSchema:
    def test_defaults(self) -> None:
        config = FrameworkConfig()
        assert config.name == "Host"
        assert config.distribution is None
        assert config.version is None

    def test_bad_explicit_version_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FrameworkConfig(version="six point three")
