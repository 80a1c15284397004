# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for envgate.

Every config section gets its own frozen pydantic model. Frozen means once you
create it, you cannot mutate it. The gate reads its floors from these objects,
so one validated config value is built at startup and passed down explicitly
instead of living in a global singleton.

The models use pydantic v2's ConfigDict with:
  - frozen=True: immutability after construction
  - extra="forbid": unknown fields cause immediate failure
  - validate_default=True: even defaults get type-checked

Version fields are parsed at load time, so a typo like "3.1x" fails when the
config loads, not halfway through a check.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from envgate.config.exceptions import InvalidVersionError
from envgate.logging.logger import resolve_log_level
from envgate.versioning.comparator import parse_version


def _validate_version_string(value: Optional[str]) -> Optional[str]:
    """Shared validator: reject strings packaging cannot parse."""
    if value is None:
        return value
    try:
        parse_version(value)
    except InvalidVersionError as err:
        raise ValueError(str(err)) from err
    return value.strip()


class GlobalConfig(BaseModel):
    """
    Cross-cutting settings: which extension is being gated and how loudly
    we log about it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        description="Schema version for compatibility tracking, e.g. '1.0.0'"
    )
    extension_name: str = Field(
        default="extension",
        min_length=1,
        description="Name of the gated extension, used as the origin of failures",
    )
    log_level: str = Field(
        default="INFO",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for file-based log output",
    )

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        resolve_log_level(value)
        return value.upper()


class RequirementsConfig(BaseModel):
    """
    Minimum versions the extension needs. This is the configuration provider
    the requirement registry queries on every check.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    runtime: str = Field(description="Minimum Python version, e.g. '3.10'")
    framework: str = Field(description="Minimum host-framework version, e.g. '5.6'")
    equal_satisfies: bool = Field(
        default=True,
        description="Whether running exactly the minimum version counts as meeting it",
    )
    hook_modules: list[str] = Field(
        default_factory=list,
        description="Modules whose REQUIREMENT_HOOKS get registered before checking",
    )

    @field_validator("runtime", "framework")
    @classmethod
    def check_versions(cls, value: str) -> str:
        return _validate_version_string(value)

    def required_runtime_version(self) -> str:
        return self.runtime

    def required_framework_version(self) -> str:
        return self.framework


class FrameworkConfig(BaseModel):
    """
    How to find the host framework's running version.

    An explicit `version` wins. Otherwise `distribution` is looked up with
    importlib.metadata at check time.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    name: str = Field(
        default="Host",
        min_length=1,
        description="Human-readable framework name used in diagnostics",
    )
    distribution: Optional[str] = Field(
        default=None,
        description="Installed distribution to read the framework version from",
    )
    version: Optional[str] = Field(
        default=None,
        description="Explicit framework version, skips the distribution lookup",
    )

    @field_validator("version")
    @classmethod
    def check_version(cls, value: Optional[str]) -> Optional[str]:
        return _validate_version_string(value)


class EnvGateConfig(BaseModel):
    """
    Top-level config container.

    `global` and `requirements` are mandatory. `framework` falls back to
    defaults, in which case the host has to supply the framework version
    when it builds the registry.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    global_config: GlobalConfig = Field(alias="global")
    requirements: RequirementsConfig
    framework: FrameworkConfig = Field(default_factory=FrameworkConfig)
