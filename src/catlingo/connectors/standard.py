"""Standard connector: the category plugin without extensions."""

from catlingo.connectors.base import Connector


class StandardConnector(Connector):
    """Leaves every hook to the host defaults."""

    name = "standard"
