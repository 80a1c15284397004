# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Gate lifecycle and the host bootstrap seam.

The sequence a host runs once, early in startup:
  1. Build the descriptor list (registry + hooks)
  2. Check it, fail-fast
  3. Passed   -> initialize the extension
     Rejected -> notify the user, raise ExtensionHalted, skip initialization

CompatibilityGate tracks the two-state outcome. Both outcomes are final for
the life of the gate object: a rejected gate keeps raising, a passed gate
keeps passing, and neither runs the check again.
"""

import logging
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Optional

from envgate.config.schema import EnvGateConfig
from envgate.gate.abort import reject
from envgate.gate.checker import check
from envgate.gate.errors import CompatibilityError, ExtensionHalted
from envgate.gate.notify import LogNotifier, Notifier
from envgate.requirements.hooks import HookContext, HookRegistry
from envgate.requirements.registry import RequirementRegistry, build_registry

logger = logging.getLogger(__name__)


class GateState(str, Enum):
    UNCHECKED = "unchecked"
    PASSED = "passed"
    REJECTED = "rejected"


class CompatibilityGate:
    """
    Runs the compatibility check for one extension.

    Args:
        registry: Produces the descriptors to check.
        notifier: Where the rejection notice goes.
        origin: Reported as the origin of a failure. Usually the extension name.
        inclusive: Whether running exactly the minimum version is enough.
    """

    def __init__(
        self,
        registry: RequirementRegistry,
        notifier: Notifier,
        *,
        origin: str = "extension",
        inclusive: bool = True,
    ) -> None:
        self._registry = registry
        self._notifier = notifier
        self._origin = origin
        self._inclusive = inclusive
        self._state = GateState.UNCHECKED
        self._error: Optional[CompatibilityError] = None

    @classmethod
    def from_config(
        cls,
        config: EnvGateConfig,
        *,
        notifier: Optional[Notifier] = None,
        hooks: Optional[HookRegistry] = None,
        framework_version: Optional[Callable[[], str]] = None,
    ) -> "CompatibilityGate":
        """Wire a gate from a loaded config. Notices go to the log unless a notifier is given."""
        registry = build_registry(config, hooks=hooks, framework_version=framework_version)
        if notifier is None:
            global_config = config.global_config
            notifier = LogNotifier(
                log_level=global_config.log_level,
                log_file=Path(global_config.log_file) if global_config.log_file else None,
            )
        return cls(
            registry,
            notifier,
            origin=config.global_config.extension_name,
            inclusive=config.requirements.equal_satisfies,
        )

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def error(self) -> Optional[CompatibilityError]:
        return self._error

    def run(self) -> GateState:
        """
        Check requirements once.

        Returns:
            GateState.PASSED when every requirement is met.

        Raises:
            ExtensionHalted: On the first unmet requirement, and on every call
                after that. The user is notified only the first time.
            RequirementConfigError: If a requirement can't be evaluated. The
                gate stays UNCHECKED in that case.
        """
        if self._state is GateState.REJECTED and self._error is not None:
            raise ExtensionHalted(self._error)
        if self._state is GateState.PASSED:
            return self._state

        context = HookContext(extension_name=self._origin, origin=self._origin)
        descriptors = self._registry.specifications(context)
        error = check(descriptors, origin=self._origin, inclusive=self._inclusive)

        if error is None:
            self._state = GateState.PASSED
            logger.info(
                "Requirements met",
                extra={"origin": self._origin, "checked": [d.key for d in descriptors]},
            )
            return self._state

        self._state = GateState.REJECTED
        self._error = error
        logger.debug(
            "Requirement unmet, halting extension",
            extra={"origin": error.origin, "key": error.key, "title": error.title},
        )
        reject(error, self._notifier)


def load_extension(gate: CompatibilityGate, initialize: Callable[[], object]) -> GateState:
    """
    Host-side bootstrap: run the gate and initialize the extension only if it passes.

    ExtensionHalted is caught here, the one place it is meant to be caught.
    Configuration errors are not: a gate that can't evaluate its requirements
    is the host's problem and propagates.

    Args:
        gate: The extension's gate.
        initialize: Called with no arguments after the gate passes.

    Returns:
        GateState.PASSED if the extension was initialized, GateState.REJECTED
        if it was halted.
    """
    try:
        gate.run()
    except ExtensionHalted as halted:
        logger.warning(
            "Extension not initialized",
            extra={"origin": halted.error.origin, "key": halted.error.key},
        )
        return GateState.REJECTED

    initialize()
    return GateState.PASSED
