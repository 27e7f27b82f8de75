"""
Hook registry for catlingo.

Connectors supply named ``uhook_*`` operations for host classes. The registry
maps (host class, hook name) to the connector's function; the host asks the
registry through ``dispatch`` and falls back to its own default when nothing
is registered.
"""

import inspect
import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from types import ModuleType
from typing import Any

logger = logging.getLogger(__name__)

HOOK_PREFIX = "uhook_"


@dataclass(frozen=True)
class HookRegistration:
    """A hook function bound to a host class."""

    target: type
    name: str
    func: Callable[..., Any]
    source: str
    sequence: int


def _source_name(hook_module: ModuleType | type) -> str:
    if isinstance(hook_module, ModuleType):
        return hook_module.__name__
    return f"{hook_module.__module__}.{hook_module.__qualname__}"


def collect_hooks(hook_module: ModuleType | type) -> dict[str, Callable[..., Any]]:
    """Return the ``uhook_*`` callables defined on a module or class namespace."""
    return {
        name: member
        for name, member in inspect.getmembers(hook_module)
        if name.startswith(HOOK_PREFIX) and callable(member)
    }


class HookRegistry:
    """Registry of hook implementations keyed by host class and hook name."""

    def __init__(self, name: str = "default"):
        self.name = name
        self._hooks: dict[tuple[type, str], HookRegistration] = {}
        self._sequence = itertools.count(1)

    def register(
        self,
        target: type,
        name: str,
        func: Callable[..., Any],
        source: str | None = None,
    ) -> HookRegistration:
        """
        Bind a single hook to a host class.

        A previous binding for the same (target, name) is replaced.

        Args:
            target: Host class the hook extends
            name: Hook name, must start with ``uhook_``
            func: Implementation, called as ``func(subject, *args, **kwargs)``
            source: Name of the capability module supplying it

        Returns:
            The new registration
        """
        if not name.startswith(HOOK_PREFIX):
            raise ValueError(f"Hook name must start with '{HOOK_PREFIX}': {name}")

        registration = HookRegistration(
            target=target,
            name=name,
            func=func,
            source=source or getattr(func, "__module__", "?"),
            sequence=next(self._sequence),
        )
        previous = self._hooks.get((target, name))
        if previous is not None and previous.source != registration.source:
            logger.debug(
                "Hook %s.%s from %s overrides %s",
                target.__name__,
                name,
                registration.source,
                previous.source,
            )
        self._hooks[(target, name)] = registration
        return registration

    def register_hooks(
        self, target: type, hook_module: ModuleType | type
    ) -> list[HookRegistration]:
        """
        Install every ``uhook_*`` callable of ``hook_module`` for ``target``.

        Registering the same module twice leaves the registry in the same
        state as registering it once.
        """
        source = _source_name(hook_module)
        registrations = [
            self.register(target, name, func, source=source)
            for name, func in collect_hooks(hook_module).items()
        ]
        logger.debug(
            "Registered %d hooks from %s on %s",
            len(registrations),
            source,
            target.__name__,
        )
        return registrations

    def unregister_hooks(
        self, target: type, hook_module: ModuleType | type | None = None
    ) -> int:
        """
        Remove bindings for a host class.

        Args:
            target: Host class
            hook_module: Only remove bindings installed from this module

        Returns:
            Number of bindings removed
        """
        source = _source_name(hook_module) if hook_module is not None else None
        keys = [
            key
            for key, registration in self._hooks.items()
            if key[0] is target and (source is None or registration.source == source)
        ]
        for key in keys:
            del self._hooks[key]
        return len(keys)

    def resolve(self, target: type, name: str) -> HookRegistration | None:
        """Find the registration for ``name``, walking the class hierarchy."""
        for klass in target.__mro__:
            registration = self._hooks.get((klass, name))
            if registration is not None:
                return registration
        return None

    def dispatch(self, subject: Any, name: str, *args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
        """
        Invoke a hook on a host class or instance.

        Resolution order: registered implementation, then the host's own
        ``uhook_*`` attribute, then a no-op returning None.
        """
        target = subject if isinstance(subject, type) else type(subject)
        registration = self.resolve(target, name)
        if registration is not None:
            return registration.func(subject, *args, **kwargs)

        default = getattr(subject, name, None)
        if default is not None:
            return default(*args, **kwargs)
        return None

    def hooks_for(self, target: type) -> dict[str, HookRegistration]:
        """Get the bindings installed directly on ``target``."""
        return {
            name: registration
            for (klass, name), registration in self._hooks.items()
            if klass is target
        }

    def registrations(self) -> list[HookRegistration]:
        """All bindings in install order."""
        return sorted(self._hooks.values(), key=lambda r: r.sequence)

    def clear(self) -> None:
        """Remove all bindings."""
        self._hooks.clear()

    def get_stats(self) -> dict[str, Any]:
        """Get registry statistics."""
        targets: dict[str, int] = {}
        for klass, _ in self._hooks:
            targets[klass.__name__] = targets.get(klass.__name__, 0) + 1
        return {
            "name": self.name,
            "total_hooks": len(self._hooks),
            "targets": targets,
        }

    def __contains__(self, key: tuple[type, str]) -> bool:
        return key in self._hooks

    def __len__(self) -> int:
        return len(self._hooks)


# Global registry instances
_registries: dict[str, HookRegistry] = {}


def get_global_registry(name: str = "default") -> HookRegistry:
    """
    Get or create a global hook registry.

    Args:
        name: Registry identifier

    Returns:
        Hook registry instance
    """
    if name not in _registries:
        _registries[name] = HookRegistry(name=name)
        logger.info("Created global hook registry: %s", name)

    return _registries[name]


def clear_global_registry(name: str | None = None) -> None:
    """
    Clear hook registry.

    Args:
        name: Registry to clear, or None for all registries
    """
    if name:
        if name in _registries:
            _registries[name].clear()
    else:
        for registry in _registries.values():
            registry.clear()


def register_hooks(target: type, hook_module: ModuleType | type) -> list[HookRegistration]:
    """Install hooks into the default global registry."""
    return get_global_registry().register_hooks(target, hook_module)


def dispatch(subject: Any, name: str, *args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
    """Dispatch a hook through the default global registry."""
    return get_global_registry().dispatch(subject, name, *args, **kwargs)
