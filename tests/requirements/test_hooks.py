# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the requirement hook registry and the list helpers hook authors use.
"""

import sys
import textwrap
from pathlib import Path

import pytest

from envgate.config.exceptions import RequirementConfigError
from envgate.requirements.descriptor import RequirementDescriptor
from envgate.requirements.hooks import (
    REQUIREMENTS_HOOK,
    HookContext,
    HookRegistry,
    find,
    register_requirement_hook,
    remove,
    upsert,
)

CONTEXT = HookContext(extension_name="ext", origin="ext")


def _descriptor(key: str, current: str = "2.0", required: str = "1.0") -> RequirementDescriptor:
    return RequirementDescriptor.for_version(key, key.title(), current, required)


class TestRegistration:
    def test_names_follow_registration_order(self, hooks: HookRegistry) -> None:
        hooks.register("b", lambda d, c: d)
        hooks.register("a", lambda d, c: d)
        assert hooks.names() == ["b", "a"]
        assert len(hooks) == 2

    def test_duplicate_name_raises(self, hooks: HookRegistry) -> None:
        hooks.register("dup", lambda d, c: d)
        with pytest.raises(ValueError, match="already registered"):
            hooks.register("dup", lambda d, c: d)

    def test_same_hook_twice_is_a_no_op(self, hooks: HookRegistry) -> None:
        def hook(descriptors, context):  # type: ignore[no-untyped-def]
            return descriptors

        hooks.register("same", hook)
        hooks.register("same", hook)
        assert hooks.names() == ["same"]

    def test_non_callable_raises(self, hooks: HookRegistry) -> None:
        with pytest.raises(TypeError):
            hooks.register("nope", "not a function")  # type: ignore[arg-type]

    def test_unregister_removes(self, hooks: HookRegistry) -> None:
        hooks.register("gone", lambda d, c: d)
        hooks.unregister("gone")
        assert hooks.names() == []

    def test_unregister_unknown_raises(self, hooks: HookRegistry) -> None:
        with pytest.raises(KeyError):
            hooks.unregister("missing")

    def test_decorator_registers_into_given_registry(self, hooks: HookRegistry) -> None:
        @register_requirement_hook("decorated", registry=hooks)
        def decorated(descriptors, context):  # type: ignore[no-untyped-def]
            return descriptors

        assert hooks.names() == ["decorated"]
        assert decorated([], CONTEXT) == []


class TestApply:
    def test_hooks_chain_in_order(self, hooks: HookRegistry) -> None:
        hooks.register("first", lambda d, c: d + [_descriptor("first")])
        hooks.register("second", lambda d, c: d + [_descriptor("second")])
        result = hooks.apply([_descriptor("base")], CONTEXT)
        assert [d.key for d in result] == ["base", "first", "second"]

    def test_hook_receives_context(self, hooks: HookRegistry) -> None:
        seen: list[HookContext] = []

        def spy(descriptors, context):  # type: ignore[no-untyped-def]
            seen.append(context)
            return descriptors

        hooks.register("spy", spy)
        hooks.apply([], CONTEXT)
        assert seen == [CONTEXT]
        assert seen[0].hook_point == REQUIREMENTS_HOOK

    def test_in_place_mutation_does_not_leak(self, hooks: HookRegistry) -> None:
        def clobber(descriptors, context):  # type: ignore[no-untyped-def]
            descriptors.clear()
            return descriptors

        hooks.register("clobber", clobber)
        original = [_descriptor("base")]
        assert hooks.apply(original, CONTEXT) == []
        assert [d.key for d in original] == ["base"]

    def test_non_list_return_raises(self, hooks: HookRegistry) -> None:
        hooks.register("bad", lambda d, c: None)
        with pytest.raises(TypeError, match="bad"):
            hooks.apply([], CONTEXT)

    def test_wrong_item_type_raises(self, hooks: HookRegistry) -> None:
        hooks.register("bad_items", lambda d, c: [{"key": "php"}])
        with pytest.raises(TypeError):
            hooks.apply([], CONTEXT)

    def test_empty_registry_returns_copy(self, hooks: HookRegistry) -> None:
        original = [_descriptor("base")]
        result = hooks.apply(original, CONTEXT)
        assert result == original
        assert result is not original


class TestParentRegistry:
    def test_parent_hooks_run_first(self, hooks: HookRegistry) -> None:
        hooks.register("parent", lambda d, c: [*d, _descriptor("parent")])
        child = HookRegistry(parent=hooks)
        child.register("child", lambda d, c: [*d, _descriptor("child")])
        keys = [d.key for d in child.apply([_descriptor("base")], CONTEXT)]
        assert keys == ["base", "parent", "child"]
        assert child.names() == ["parent", "child"]
        assert len(child) == 2

    def test_child_registrations_do_not_reach_parent(self, hooks: HookRegistry) -> None:
        child = HookRegistry(parent=hooks)
        child.register("local", lambda d, c: d)
        assert hooks.names() == []

    def test_name_taken_by_parent_is_a_duplicate(self, hooks: HookRegistry) -> None:
        hooks.register("shared", lambda d, c: d)
        with pytest.raises(ValueError, match="already registered"):
            HookRegistry(parent=hooks).register("shared", lambda d, c: d)

    def test_unregister_only_touches_own_hooks(self, hooks: HookRegistry) -> None:
        hooks.register("inherited", lambda d, c: d)
        with pytest.raises(KeyError):
            HookRegistry(parent=hooks).unregister("inherited")
        assert hooks.names() == ["inherited"]


class TestDiscover:
    def test_registers_module_hooks(
        self, hooks: HookRegistry, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        module = tmp_path / "envgate_test_hooks_ok.py"
        module.write_text(
            textwrap.dedent("""\
                from envgate.requirements.descriptor import RequirementDescriptor
                from envgate.requirements.hooks import upsert


                def needs_sqlite(descriptors, context):
                    return upsert(
                        descriptors,
                        RequirementDescriptor.for_version("sqlite", "SQLite", "3.31.1", "3.35"),
                    )


                REQUIREMENT_HOOKS = {"needs-sqlite": needs_sqlite}
            """),
            encoding="utf-8",
        )
        monkeypatch.syspath_prepend(str(tmp_path))
        monkeypatch.delitem(sys.modules, "envgate_test_hooks_ok", raising=False)

        assert hooks.discover("envgate_test_hooks_ok") == ["needs-sqlite"]
        result = hooks.apply([], CONTEXT)
        assert [d.key for d in result] == ["sqlite"]

    def test_discovering_twice_is_idempotent(
        self, hooks: HookRegistry, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        module = tmp_path / "envgate_test_hooks_twice.py"
        module.write_text(
            "REQUIREMENT_HOOKS = {'noop': lambda descriptors, context: descriptors}\n",
            encoding="utf-8",
        )
        monkeypatch.syspath_prepend(str(tmp_path))
        monkeypatch.delitem(sys.modules, "envgate_test_hooks_twice", raising=False)

        hooks.discover("envgate_test_hooks_twice")
        hooks.discover("envgate_test_hooks_twice")
        assert hooks.names() == ["noop"]

    def test_missing_module_is_config_error(self, hooks: HookRegistry) -> None:
        with pytest.raises(RequirementConfigError, match="Cannot import"):
            hooks.discover("envgate_no_such_module_anywhere")

    def test_module_without_hooks_is_config_error(self, hooks: HookRegistry) -> None:
        with pytest.raises(RequirementConfigError, match="REQUIREMENT_HOOKS"):
            hooks.discover("envgate.versioning.comparator")


class TestListHelpers:
    def test_find_returns_match(self) -> None:
        descriptors = [_descriptor("python"), _descriptor("framework")]
        found = find(descriptors, "framework")
        assert found is not None and found.key == "framework"

    def test_find_returns_none_when_absent(self) -> None:
        assert find([_descriptor("python")], "php") is None

    def test_upsert_replaces_in_place(self) -> None:
        descriptors = [_descriptor("python"), _descriptor("framework")]
        raised = _descriptor("python", required="9.0")
        result = upsert(descriptors, raised)
        assert [d.key for d in result] == ["python", "framework"]
        assert result[0].required_value == "9.0"
        assert descriptors[0].required_value == "1.0"

    def test_upsert_appends_new_key(self) -> None:
        result = upsert([_descriptor("python")], _descriptor("sqlite"))
        assert [d.key for d in result] == ["python", "sqlite"]

    def test_remove_drops_key(self) -> None:
        result = remove([_descriptor("python"), _descriptor("framework")], "python")
        assert [d.key for d in result] == ["framework"]
