"""Locale-aware hooks for ``CategorySet``."""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from catlingo.db.models import Category, CategorySet
from catlingo.i18n import TranslationError

logger = logging.getLogger(__name__)


def uhook_category_identifier_for_name(category_set: CategorySet, name: str) -> int:
    """``content_id`` of the category called ``name``, or 0 if it cannot be resolved."""
    try:
        category = category_set.select_fittest(name)
    except (LookupError, SQLAlchemyError, TranslationError) as e:
        logger.debug("No identifier for '%s' in set '%s': %s", name, category_set.key, e)
        return 0

    if category is None or category.content_id is None:
        logger.debug("No identifier for '%s' in set '%s'", name, category_set.key)
        return 0
    return category.content_id


def uhook_select_fittest(
    category_set: CategorySet, category: Category, options: dict[str, Any]
) -> Category | None:
    """The variant of ``category`` in ``options["locale"]``, or ``category`` itself."""
    locale = options.get("locale")
    return category.in_locale(locale) if locale else category
