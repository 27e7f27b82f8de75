"""Tests for the hook registry and dispatch."""

from types import ModuleType

import pytest

from catlingo.hooks import (
    HookRegistry,
    collect_hooks,
    dispatch,
    get_global_registry,
    register_hooks,
)

# =============================================================================
# Host classes
# =============================================================================


class Widget:
    def __init__(self, label: str = "widget"):
        self.label = label

    def greeting(self) -> str:
        return dispatch(self, "uhook_greeting")

    def uhook_greeting(self) -> str:
        return f"hello {self.label}"


class FancyWidget(Widget):
    pass


class Gadget:
    pass


def make_hook_module(name: str, **hooks: object) -> ModuleType:
    module = ModuleType(name)
    for hook_name, func in hooks.items():
        setattr(module, hook_name, func)
    return module


# =============================================================================
# Registration
# =============================================================================


def test_register_requires_prefix() -> None:
    registry = HookRegistry()
    with pytest.raises(ValueError, match="uhook_"):
        registry.register(Widget, "greeting", lambda w: "hi")


def test_collect_hooks_only_prefixed_callables() -> None:
    module = make_hook_module(
        "collect",
        uhook_one=lambda s: 1,
        uhook_two=lambda s: 2,
        helper=lambda s: 3,
    )
    module.uhook_constant = 42  # type: ignore[attr-defined]

    assert set(collect_hooks(module)) == {"uhook_one", "uhook_two"}


def test_collect_hooks_from_class_namespace() -> None:
    class Hooks:
        def uhook_greeting(self) -> str:
            return "from class"

    assert list(collect_hooks(Hooks)) == ["uhook_greeting"]


def test_register_hooks_is_idempotent() -> None:
    registry = HookRegistry()
    module = make_hook_module("greet", uhook_greeting=lambda w: "hi")

    registry.register_hooks(Widget, module)
    registry.register_hooks(Widget, module)

    assert len(registry) == 1
    assert registry.hooks_for(Widget)["uhook_greeting"].source == "greet"


def test_last_registration_wins() -> None:
    registry = HookRegistry()
    registry.register_hooks(Widget, make_hook_module("first", uhook_greeting=lambda w: "first"))
    registry.register_hooks(Widget, make_hook_module("second", uhook_greeting=lambda w: "second"))

    assert registry.dispatch(Widget(), "uhook_greeting") == "second"
    assert len(registry) == 1


def test_unregister_hooks_by_module() -> None:
    registry = HookRegistry()
    first = make_hook_module("first", uhook_a=lambda w: "a")
    second = make_hook_module("second", uhook_b=lambda w: "b")
    registry.register_hooks(Widget, first)
    registry.register_hooks(Widget, second)

    assert registry.unregister_hooks(Widget, first) == 1
    assert (Widget, "uhook_a") not in registry
    assert (Widget, "uhook_b") in registry


def test_unregister_all_hooks_for_target() -> None:
    registry = HookRegistry()
    registry.register_hooks(Widget, make_hook_module("w", uhook_a=lambda w: 1, uhook_b=lambda w: 2))
    registry.register_hooks(Gadget, make_hook_module("g", uhook_a=lambda g: 3))

    assert registry.unregister_hooks(Widget) == 2
    assert len(registry) == 1


def test_registrations_in_install_order() -> None:
    registry = HookRegistry()
    registry.register(Gadget, "uhook_b", lambda g: None)
    registry.register(Widget, "uhook_a", lambda w: None)

    assert [(r.target, r.name) for r in registry.registrations()] == [
        (Gadget, "uhook_b"),
        (Widget, "uhook_a"),
    ]


def test_get_stats() -> None:
    registry = HookRegistry(name="stats")
    registry.register(Widget, "uhook_a", lambda w: None)
    registry.register(Widget, "uhook_b", lambda w: None)
    registry.register(Gadget, "uhook_a", lambda g: None)

    stats = registry.get_stats()

    assert stats["name"] == "stats"
    assert stats["total_hooks"] == 3
    assert stats["targets"] == {"Widget": 2, "Gadget": 1}


# =============================================================================
# Dispatch
# =============================================================================


def test_dispatch_passes_subject_and_arguments() -> None:
    registry = HookRegistry()
    registry.register(
        Widget, "uhook_join", lambda widget, sep, *, suffix="": f"{widget.label}{sep}{suffix}"
    )

    assert registry.dispatch(Widget("w"), "uhook_join", "-", suffix="x") == "w-x"


def test_dispatch_falls_back_to_host_default() -> None:
    registry = HookRegistry()
    assert registry.dispatch(Widget("w"), "uhook_greeting") == "hello w"


def test_dispatch_without_implementation_is_noop() -> None:
    registry = HookRegistry()
    assert registry.dispatch(Gadget(), "uhook_missing", 1, 2) is None


def test_dispatch_resolves_through_class_hierarchy() -> None:
    registry = HookRegistry()
    registry.register(Widget, "uhook_greeting", lambda w: "from base")

    assert registry.dispatch(FancyWidget(), "uhook_greeting") == "from base"


def test_subclass_registration_shadows_base() -> None:
    registry = HookRegistry()
    registry.register(Widget, "uhook_greeting", lambda w: "base")
    registry.register(FancyWidget, "uhook_greeting", lambda w: "fancy")

    assert registry.dispatch(Widget(), "uhook_greeting") == "base"
    assert registry.dispatch(FancyWidget(), "uhook_greeting") == "fancy"


def test_dispatch_on_class_passes_class() -> None:
    registry = HookRegistry()
    registry.register(Widget, "uhook_kind", lambda cls: cls.__name__)

    assert registry.dispatch(FancyWidget, "uhook_kind") == "FancyWidget"


def test_global_registry_dispatch() -> None:
    register_hooks(Widget, make_hook_module("global", uhook_greeting=lambda w: "hooked"))

    assert Widget().greeting() == "hooked"
    assert get_global_registry() is get_global_registry("default")


def test_global_registry_cleared_between_tests() -> None:
    assert len(get_global_registry()) == 0
    assert Widget("clean").greeting() == "hello clean"
