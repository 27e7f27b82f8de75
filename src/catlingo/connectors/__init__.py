"""Connectors for the category plugin.

One connector is active per process. ``activate_connector()`` loads the one
named by ``CATLINGO_CATEGORIES_CONNECTOR`` unless told otherwise.
"""

import logging
from typing import Any

from catlingo.config import get_settings
from catlingo.connectors.base import (
    Connector,
    ConnectorError,
    ConnectorRequirementError,
    ConnectorState,
    RequirementError,
)
from catlingo.connectors.i18n import I18nConnector
from catlingo.connectors.standard import StandardConnector

logger = logging.getLogger(__name__)

CONNECTORS: dict[str, type[Connector]] = {
    StandardConnector.name: StandardConnector,
    I18nConnector.name: I18nConnector,
}

_active: Connector | None = None


def load_connector(name: str, **kwargs: Any) -> Connector:
    """Instantiate a connector by name without activating it.

    Raises:
        ConnectorError: If no connector has that name
    """
    try:
        connector_class = CONNECTORS[name]
    except KeyError:
        raise ConnectorError(
            f"Unknown connector '{name}' (available: {', '.join(sorted(CONNECTORS))})"
        ) from None
    return connector_class(**kwargs)


def activate_connector(name: str | None = None, **kwargs: Any) -> Connector:
    """Activate a connector, deactivating the current one first.

    Raises:
        ConnectorRequirementError: If the connector's requirements are not met
    """
    global _active
    connector = load_connector(name or get_settings().categories_connector, **kwargs)
    if _active is not None:
        _active.deactivate()
        _active = None
    _active = connector.activate()
    return _active


def deactivate_connector() -> None:
    global _active
    if _active is not None:
        _active.deactivate()
        _active = None


def get_active_connector() -> Connector | None:
    return _active


__all__ = [
    "CONNECTORS",
    "Connector",
    "ConnectorError",
    "ConnectorRequirementError",
    "ConnectorState",
    "I18nConnector",
    "RequirementError",
    "StandardConnector",
    "activate_connector",
    "deactivate_connector",
    "get_active_connector",
    "load_connector",
]
