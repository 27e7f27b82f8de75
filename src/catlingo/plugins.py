"""Host extension table.

Extensions register themselves here at import/setup time; connectors look
them up before activating.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PluginInfo:
    """A registered host extension."""

    name: str
    version: str | None = None
    options: dict[str, Any] = field(default_factory=dict)


class PluginRegistry:
    """Registered extensions, by name."""

    def __init__(self) -> None:
        self._plugins: dict[str, PluginInfo] = {}

    def register(self, name: str, *, version: str | None = None, **options: Any) -> PluginInfo:
        info = PluginInfo(name=name, version=version, options=options)
        self._plugins[name] = info
        logger.debug("Registered plugin %s", name)
        return info

    def unregister(self, name: str) -> bool:
        return self._plugins.pop(name, None) is not None

    def is_registered(self, name: str) -> bool:
        return name in self._plugins

    def get(self, name: str) -> PluginInfo | None:
        return self._plugins.get(name)

    @property
    def registered(self) -> dict[str, PluginInfo]:
        return dict(self._plugins)

    def __contains__(self, name: object) -> bool:
        return name in self._plugins


# Process-wide extension table
plugins = PluginRegistry()
