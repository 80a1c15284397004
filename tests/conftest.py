# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for envgate tests.

Fixtures here are available to every test file automatically.
We keep them minimal — just the stuff that multiple test modules need.
"""

import textwrap
from pathlib import Path

import pytest

from envgate.config.schema import RequirementsConfig
from envgate.gate.notify import Severity
from envgate.requirements.hooks import HookRegistry
from envgate.requirements.registry import RequirementRegistry


class RecordingNotifier:
    """Notifier that remembers every notice instead of showing it."""

    def __init__(self) -> None:
        self.notices: list[tuple[str, Severity]] = []

    def notify(self, message: str, severity: Severity) -> None:
        self.notices.append((message, severity))


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def hooks() -> HookRegistry:
    """A fresh hook registry, so tests never leak hooks into default_hooks."""
    return HookRegistry()


@pytest.fixture()
def make_registry(hooks: HookRegistry):  # type: ignore[no-untyped-def]
    """
    Factory for a registry with fixed versions.

    Defaults are the pass case: Python 8.1.0 against 7.4, framework 6.3
    against 5.6.
    """

    def _make(
        runtime_current: str = "8.1.0",
        runtime_required: str = "7.4",
        framework_current: str = "6.3",
        framework_required: str = "5.6",
        framework_name: str = "Host",
    ) -> RequirementRegistry:
        provider = RequirementsConfig(runtime=runtime_required, framework=framework_required)
        return RequirementRegistry(
            provider,
            lambda: framework_current,
            framework_name=framework_name,
            hooks=hooks,
            runtime_version=lambda: runtime_current,
            extension_name="test-extension",
        )

    return _make


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """
    A minimal valid config whose floors the test interpreter always meets.

    The framework version is given explicitly so no distribution lookup happens.
    """
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          extension_name: "envgate-test"
          log_level: "DEBUG"
        requirements:
          runtime: "3.0"
          framework: "5.6"
        framework:
          name: "Host"
          version: "6.3"
    """)
    config_file = tmp_path / "test_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def unmet_config_file(tmp_path: Path) -> Path:
    """A valid config whose framework floor is above the framework version."""
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          extension_name: "envgate-test"
        requirements:
          runtime: "3.0"
          framework: "7.0"
        framework:
          name: "Host"
          version: "6.3"
    """)
    config_file = tmp_path / "unmet_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """A config file that's valid YAML but fails schema validation (missing required field)."""
    config_content = textwrap.dedent("""\
        global:
          extension_name: "envgate-test"
        requirements:
          runtime: "3.0"
          framework: "5.6"
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
