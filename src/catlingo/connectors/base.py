"""Connector lifecycle.

A connector bundles capability modules (namespaces of ``uhook_*`` functions)
for host classes. Activation validates the connector's requirements, applies
its global side effects and installs the modules into the hook registry;
deactivation reverses all three.
"""

import logging
from contextlib import AbstractContextManager
from enum import Enum
from types import ModuleType
from typing import Any, ClassVar
from unittest.mock import MagicMock, patch

from sqlalchemy.engine import Engine

from catlingo.config import Settings, get_settings
from catlingo.db.engine import engine as default_engine
from catlingo.hooks import HookRegistry, get_global_registry
from catlingo.plugins import PluginRegistry
from catlingo.plugins import plugins as default_plugins

logger = logging.getLogger(__name__)

# (host class, capability module)
Capability = tuple[type, ModuleType]


class ConnectorError(Exception):
    """Base exception for connector operations."""

    pass


class ConnectorRequirementError(ConnectorError):
    """The connector's prerequisites are not met; it must not be activated."""

    pass


RequirementError = ConnectorRequirementError


class ConnectorState(Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"


class Connector:
    """Base connector: no requirements, no capabilities.

    Args:
        bind: Engine used to inspect and (in tests) alter the schema
        registry: Hook registry to install into (default global registry)
        plugins: Host extension table
        settings: Settings (defaults to the cached application settings)
    """

    name: ClassVar[str] = "base"

    # Host helper name -> stub return value, for prepare_mocks()
    mock_helper_stubs: ClassVar[dict[str, Any]] = {}

    def __init__(
        self,
        *,
        bind: Engine | None = None,
        registry: HookRegistry | None = None,
        plugins: PluginRegistry | None = None,
        settings: Settings | None = None,
    ):
        self.bind = bind if bind is not None else default_engine
        self.registry = registry if registry is not None else get_global_registry()
        self.plugins = plugins if plugins is not None else default_plugins
        self.settings = settings if settings is not None else get_settings()
        self.state = ConnectorState.INACTIVE
        self._installed: list[Capability] = []

    @property
    def is_active(self) -> bool:
        return self.state is ConnectorState.ACTIVE

    def validate_requirements(self) -> None:
        """Raise ConnectorRequirementError if the connector cannot be loaded."""
        return None

    def capabilities(self) -> list[Capability]:
        """Capability modules to install, per host class."""
        return []

    def prepare(self) -> None:
        """Apply global side effects ahead of hook installation."""
        return None

    def unload(self) -> None:
        """Reverse the global side effects of ``prepare``.

        Safe to call when nothing was prepared.
        """
        return None

    def install(self) -> None:
        """Register every capability module without validating requirements."""
        for target, hook_module in self.capabilities():
            self.registry.register_hooks(target, hook_module)
            if (target, hook_module) not in self._installed:
                self._installed.append((target, hook_module))

    def uninstall(self) -> None:
        for target, hook_module in self._installed:
            self.registry.unregister_hooks(target, hook_module)
        self._installed.clear()

    def activate(self) -> "Connector":
        """Validate, prepare and install. Activating twice is a no-op."""
        if self.is_active:
            return self

        self.validate_requirements()
        self.prepare()
        self.install()
        self.state = ConnectorState.ACTIVE
        logger.info("Activated connector %s (%d capabilities)", self.name, len(self._installed))
        return self

    def deactivate(self) -> None:
        self.uninstall()
        self.unload()
        self.state = ConnectorState.INACTIVE
        logger.info("Deactivated connector %s", self.name)

    def prepare_mocks(self, target: Any) -> AbstractContextManager[Any]:  # noqa: ANN401
        """Stub the host helpers the presentation hooks call.

        Returns a ``patch.multiple`` context manager over ``target``: callable
        helpers return their declared stub value, plain attributes are set to it.

        Raises:
            ConnectorError: In the production environment
        """
        if self.settings.environment == "production":
            raise ConnectorError("Helper mocks are not available in production")

        stubs: dict[str, Any] = {}
        for name, value in self.mock_helper_stubs.items():
            current = getattr(target, name, None)
            stubs[name] = MagicMock(return_value=value) if callable(current) else value
        return patch.multiple(target, create=True, **stubs)
