"""Multilingual content extension.

Provides the translatable model trait, the matching table trait for
migrations, and registers itself in the host extension table on import.
"""

from catlingo.i18n.schema import TRANSLATABLE_FIELDS, change_table, translatable_columns
from catlingo.i18n.translatable import (
    ANY_LOCALE,
    TranslatableMixin,
    TranslationError,
    assign_content_ids,
    is_translatable,
)
from catlingo.plugins import PluginRegistry, plugins

PLUGIN_NAME = "i18n"
__version__ = "0.1.0"


def setup(registry: PluginRegistry | None = None) -> None:
    """Register the extension in the host extension table."""
    (registry or plugins).register(PLUGIN_NAME, version=__version__)


setup()


__all__ = [
    "ANY_LOCALE",
    "PLUGIN_NAME",
    "TRANSLATABLE_FIELDS",
    "TranslatableMixin",
    "TranslationError",
    "assign_content_ids",
    "change_table",
    "is_translatable",
    "setup",
    "translatable_columns",
]
