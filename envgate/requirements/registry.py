# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Requirement registry — builds the list of descriptors the gate checks.

Two built-in dimensions, always in this order:
  1. "python"    — the running interpreter vs the configured runtime floor
  2. "framework" — the host framework vs the configured framework floor

The base list then goes through the extension hook on every call, without
exception, so third-party additions are never skipped. Nothing is cached: each
call reads the provider and the environment again, which is what lets a hook
registered late still take part in the next check.
"""

import logging
from collections.abc import Callable
from typing import Optional, Protocol

from envgate.config.exceptions import RequirementConfigError
from envgate.config.schema import EnvGateConfig
from envgate.requirements.descriptor import RequirementDescriptor
from envgate.requirements.hooks import HookContext, HookRegistry, default_hooks
from envgate.runtime.environment import get_framework_version, get_python_version

logger = logging.getLogger(__name__)

RUNTIME_KEY = "python"
FRAMEWORK_KEY = "framework"


class RequirementProvider(Protocol):
    """Where minimum versions come from. RequirementsConfig satisfies this."""

    def required_runtime_version(self) -> str: ...

    def required_framework_version(self) -> str: ...


class RequirementRegistry:
    """
    Produces the descriptor list for one check.

    Args:
        provider: Source of the minimum versions, queried on every call.
        framework_version: Zero-argument callable returning the running
            framework version.
        framework_name: Label used in the framework descriptor's wording.
        hooks: Hook registry to apply. Defaults to the shared default_hooks.
        runtime_version: Zero-argument callable returning the running
            interpreter version. Tests substitute a fixed value here.
        extension_name: Used to build the hook context when the caller
            doesn't pass one.
    """

    def __init__(
        self,
        provider: RequirementProvider,
        framework_version: Callable[[], str],
        *,
        framework_name: str = "Host",
        hooks: Optional[HookRegistry] = None,
        runtime_version: Callable[[], str] = get_python_version,
        extension_name: str = "extension",
    ) -> None:
        self._provider = provider
        self._framework_version = framework_version
        self._framework_name = framework_name
        self._hooks = hooks if hooks is not None else default_hooks
        self._runtime_version = runtime_version
        self._extension_name = extension_name

    @property
    def hooks(self) -> HookRegistry:
        return self._hooks

    def _base_specifications(self) -> list[RequirementDescriptor]:
        return [
            RequirementDescriptor.for_version(
                key=RUNTIME_KEY,
                label="Python",
                current=self._runtime_version(),
                required=self._provider.required_runtime_version(),
            ),
            RequirementDescriptor.for_version(
                key=FRAMEWORK_KEY,
                label=self._framework_name,
                current=self._framework_version(),
                required=self._provider.required_framework_version(),
            ),
        ]

    def specifications(self, context: Optional[HookContext] = None) -> list[RequirementDescriptor]:
        """
        Build the descriptor list, built-ins first, then run the hooks over it.

        Args:
            context: Hook context for this check. Defaults to one naming the
                registry's extension as both extension and origin.

        Raises:
            RequirementConfigError: If a built-in value is missing.
            TypeError: If a hook returns something other than a descriptor list.
        """
        if context is None:
            context = HookContext(extension_name=self._extension_name, origin=self._extension_name)

        descriptors = self._hooks.apply(self._base_specifications(), context)
        logger.debug(
            "requirement_specifications",
            extra={
                "extension": context.extension_name,
                "keys": [descriptor.key for descriptor in descriptors],
            },
        )
        return descriptors


def _framework_version_source(config: EnvGateConfig) -> Callable[[], str]:
    """Pick how the framework version is observed: explicit value, or installed distribution."""
    framework = config.framework
    if framework.version is not None:
        explicit = framework.version
        return lambda: explicit
    if framework.distribution is not None:
        distribution = framework.distribution
        return lambda: get_framework_version(distribution)
    raise RequirementConfigError(
        "No way to determine the framework version: set framework.version or "
        "framework.distribution in the config, or pass framework_version explicitly"
    )


def build_registry(
    config: EnvGateConfig,
    *,
    hooks: Optional[HookRegistry] = None,
    framework_version: Optional[Callable[[], str]] = None,
) -> RequirementRegistry:
    """
    Build a registry from a loaded config.

    Every module listed in requirements.hook_modules is discovered first.
    Without an explicit `hooks`, discovery goes into a private registry that
    chains to default_hooks, so config-driven hooks stay local to this
    registry while hooks added to default_hooks later are still honored.

    Args:
        config: The validated config.
        hooks: Registry to use and to discover into. Defaults to a child of
            default_hooks.
        framework_version: Overrides the framework version source from config.

    Raises:
        RequirementConfigError: If no framework version source is available
            or a hook module can't be loaded.
    """
    registry_hooks = hooks if hooks is not None else HookRegistry(parent=default_hooks)
    for module_name in config.requirements.hook_modules:
        registry_hooks.discover(module_name)

    if framework_version is None:
        framework_version = _framework_version_source(config)

    return RequirementRegistry(
        config.requirements,
        framework_version,
        framework_name=config.framework.name,
        hooks=registry_hooks,
        extension_name=config.global_config.extension_name,
    )
