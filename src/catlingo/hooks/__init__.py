"""Hooks for catlingo host classes.

Host classes call ``dispatch(subject, "uhook_<name>", ...)``. A connector
registers a capability module (any namespace defining ``uhook_*`` callables)
for a host class; its functions receive the subject as first argument.
Unregistered hooks fall through to the host's own ``uhook_*`` default.
"""

from catlingo.hooks.registry import (
    HOOK_PREFIX,
    HookRegistration,
    HookRegistry,
    clear_global_registry,
    collect_hooks,
    dispatch,
    get_global_registry,
    register_hooks,
)

__all__ = [
    "HOOK_PREFIX",
    "HookRegistration",
    "HookRegistry",
    "clear_global_registry",
    "collect_hooks",
    "dispatch",
    "get_global_registry",
    "register_hooks",
]
