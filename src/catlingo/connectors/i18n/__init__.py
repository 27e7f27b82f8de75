"""Connector between the category plugin and the i18n extension.

Once active, categories become translatable on ``name`` and ``description``,
listings show one variant per category in the request's locale, and the admin
screens offer translation actions.
"""

import logging

from sqlalchemy.exc import NoSuchTableError

from catlingo.admin.controller import CategoriesController
from catlingo.admin.helpers import CategoryViewHelper
from catlingo.categories.migration import CategoriesMigration
from catlingo.categories.orm import Categorized
from catlingo.connectors.base import Capability, Connector, ConnectorRequirementError
from catlingo.connectors.i18n import category, category_set, controller, helpers, migration, orm
from catlingo.db.models import Category, CategorySet
from catlingo.i18n import PLUGIN_NAME
from catlingo.i18n.schema import change_table, missing_translatable_fields

logger = logging.getLogger(__name__)

TRANSLATABLE_CATEGORY_FIELDS = ("name", "description")


class I18nConnector(Connector):
    """Makes categories multilingual."""

    name = "i18n"

    mock_helper_stubs = {
        "show_translations": "",
        "categories_url": "",
        "category_url": "",
        "new_category_url": "",
        "content_tag": "",
        "hidden_field_tag": "",
        "current_locale": "",
    }

    _saved_flags: tuple[bool, tuple[str, ...]] | None = None

    def validate_requirements(self) -> None:
        """Check the i18n extension and the categories table.

        In the test environment missing table columns are added on the fly;
        anywhere else they must come from a migration.

        Raises:
            ConnectorRequirementError: If the extension is not registered or
                the table lacks the translatable fields
        """
        if not self.plugins.is_registered(PLUGIN_NAME):
            raise ConnectorRequirementError(
                f"You need the {PLUGIN_NAME} plugin to load {type(self).__name__}"
            )

        try:
            missing = missing_translatable_fields(self.bind, Category.__tablename__)
        except NoSuchTableError as e:
            raise ConnectorRequirementError(
                f"The {Category.__tablename__} table does not exist"
            ) from e
        if not missing:
            return

        if self.settings.is_ephemeral:
            logger.warning(
                "Adding missing i18n fields %s to %s", missing, Category.__tablename__
            )
            change_table(self.bind, Category.__tablename__, translatable=True)
            return

        raise ConnectorRequirementError(
            f"The {Category.__tablename__} table does not have the i18n fields "
            f"({', '.join(missing)}); run the migrations first"
        )

    def capabilities(self) -> list[Capability]:
        return [
            (Category, category),
            (CategorySet, category_set),
            (CategoriesController, controller),
            (CategoryViewHelper, helpers),
            (CategoriesMigration, migration),
            (Categorized, orm),
        ]

    def prepare(self) -> None:
        """Switch on the translatable trait for categories."""
        if self._saved_flags is None:
            self._saved_flags = (Category.__translatable__, Category.__translatable_fields__)
        Category.translatable(*TRANSLATABLE_CATEGORY_FIELDS)

    def unload(self) -> None:
        if self._saved_flags is None:
            return
        Category.__translatable__, Category.__translatable_fields__ = self._saved_flags
        self._saved_flags = None


__all__ = ["TRANSLATABLE_CATEGORY_FIELDS", "I18nConnector"]
