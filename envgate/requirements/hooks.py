# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Extension hook for the requirement list.

This is the only place third-party code can influence what the gate checks.
A hook is a plain callable:

    def hook(descriptors: list[RequirementDescriptor], context: HookContext)
        -> list[RequirementDescriptor]

Hooks run in registration order, each one receiving the previous hook's
output. They may add, remove or replace entries (the helpers at the bottom of
this module do that by dimension key) and must return a list of descriptors.

Hooks are registered by name on a HookRegistry. `default_hooks` is the shared
registry that `register_requirement_hook` writes to; hosts that want isolation
build their own registry and pass it to RequirementRegistry.
"""

import importlib
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Optional

from envgate.config.exceptions import RequirementConfigError
from envgate.requirements.descriptor import RequirementDescriptor

logger = logging.getLogger(__name__)

REQUIREMENTS_HOOK = "envgate/extension_requirements"


@dataclass(frozen=True)
class HookContext:
    """What a hook knows about the check it is taking part in."""

    extension_name: str
    origin: str
    hook_point: str = REQUIREMENTS_HOOK


RequirementHook = Callable[[list[RequirementDescriptor], HookContext], list[RequirementDescriptor]]


class HookRegistry:
    """
    Ordered, named collection of requirement hooks.

    A registry built with a `parent` runs the parent's hooks first, then its
    own. Hooks registered on the child never reach the parent, while hooks
    added to the parent later are still picked up by the child.
    """

    def __init__(self, parent: Optional["HookRegistry"] = None) -> None:
        self._hooks: dict[str, RequirementHook] = {}
        self._parent = parent

    def _lookup(self, name: str) -> Optional[RequirementHook]:
        if name in self._hooks:
            return self._hooks[name]
        if self._parent is not None:
            return self._parent._lookup(name)
        return None

    def register(self, name: str, hook: RequirementHook) -> None:
        """
        Register a hook under a unique name.

        Registering the exact same callable under the same name again is a
        no-op, so discovery can safely run more than once.

        Raises:
            TypeError: If `hook` is not callable.
            ValueError: If a different hook is already registered under `name`.
        """
        if not callable(hook):
            raise TypeError(f"Requirement hook '{name}' must be callable, got {type(hook).__name__}")
        existing = self._lookup(name)
        if existing is not None:
            if existing is hook:
                return
            raise ValueError(f"Requirement hook '{name}' is already registered")
        self._hooks[name] = hook
        logger.debug("registered_requirement_hook", extra={"hook": name})

    def unregister(self, name: str) -> None:
        """
        Remove a hook registered on this registry (not on its parent).

        Raises:
            KeyError: If no hook is registered under `name`.
        """
        if name not in self._hooks:
            raise KeyError(f"Unknown requirement hook '{name}'. Registered: {self.names()}")
        del self._hooks[name]

    def names(self) -> list[str]:
        """Registered hook names, parent's first, in the order they will run."""
        inherited = self._parent.names() if self._parent is not None else []
        return inherited + list(self._hooks)

    def clear(self) -> None:
        self._hooks.clear()

    def __len__(self) -> int:
        return len(self.names())

    def apply(
        self,
        descriptors: list[RequirementDescriptor],
        context: HookContext,
    ) -> list[RequirementDescriptor]:
        """
        Run every hook over the descriptor list: the parent's hooks first,
        then this registry's, each in registration order.

        Each hook gets its own copy of the list, so a hook that mutates its
        argument in place cannot corrupt the caller's list.

        Raises:
            TypeError: If a hook returns anything but a list of descriptors.
        """
        result = list(descriptors)
        if self._parent is not None:
            result = self._parent.apply(result, context)
        for name, hook in list(self._hooks.items()):
            returned = hook(list(result), context)
            if not isinstance(returned, list) or not all(
                isinstance(item, RequirementDescriptor) for item in returned
            ):
                raise TypeError(
                    f"Requirement hook '{name}' must return a list of RequirementDescriptor"
                )
            result = returned
            logger.debug(
                "applied_requirement_hook",
                extra={"hook": name, "keys": [item.key for item in result]},
            )
        return result

    def discover(self, module_name: str) -> list[str]:
        """
        Import a module and register every hook in its REQUIREMENT_HOOKS mapping.

        Args:
            module_name: Dotted module path, e.g. "my_extension.requirements".

        Returns:
            Names of the hooks registered from that module.

        Raises:
            RequirementConfigError: If the module can't be imported or doesn't
                define REQUIREMENT_HOOKS.
            TypeError: If REQUIREMENT_HOOKS isn't a mapping of name to callable.
        """
        try:
            module = importlib.import_module(module_name)
        except ImportError as err:
            raise RequirementConfigError(
                f"Cannot import requirement hook module '{module_name}': {err}"
            ) from err

        hooks = getattr(module, "REQUIREMENT_HOOKS", None)
        if hooks is None:
            raise RequirementConfigError(
                f"Module '{module_name}' does not define REQUIREMENT_HOOKS"
            )
        if not isinstance(hooks, dict):
            raise TypeError(f"{module_name}.REQUIREMENT_HOOKS must be a dict of name -> hook")

        for name, hook in hooks.items():
            self.register(name, hook)
        return list(hooks)


default_hooks = HookRegistry()


def register_requirement_hook(
    name: str,
    registry: Optional[HookRegistry] = None,
) -> Callable[[RequirementHook], RequirementHook]:
    """
    Decorator form of HookRegistry.register.

        @register_requirement_hook("needs-sqlite")
        def needs_sqlite(descriptors, context):
            return upsert(descriptors, RequirementDescriptor.for_version(...))
    """
    target = registry if registry is not None else default_hooks

    def decorator(hook: RequirementHook) -> RequirementHook:
        target.register(name, hook)
        return hook

    return decorator


# ── List helpers for hook authors ──────────────────────────────────────────


def find(descriptors: Iterable[RequirementDescriptor], key: str) -> Optional[RequirementDescriptor]:
    """Return the descriptor for `key`, or None."""
    for descriptor in descriptors:
        if descriptor.key == key:
            return descriptor
    return None


def upsert(
    descriptors: list[RequirementDescriptor],
    descriptor: RequirementDescriptor,
) -> list[RequirementDescriptor]:
    """Replace the entry with the same key in place, or append it. Returns a new list."""
    result = list(descriptors)
    for index, existing in enumerate(result):
        if existing.key == descriptor.key:
            result[index] = descriptor
            return result
    result.append(descriptor)
    return result


def remove(descriptors: list[RequirementDescriptor], key: str) -> list[RequirementDescriptor]:
    """Drop every entry with `key`. Returns a new list."""
    return [descriptor for descriptor in descriptors if descriptor.key != key]
