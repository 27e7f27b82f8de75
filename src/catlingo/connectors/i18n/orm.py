"""Locale-aware association hooks for ``Categorized`` models."""

from typing import Any

from sqlalchemy.orm import object_session

from catlingo.categories.errors import CategoryError
from catlingo.categories.orm import Categorized
from catlingo.categories.services import (
    add_categories_to_set,
    as_category_list,
    is_blank,
    unique_categories,
)
from catlingo.db.models import Category, CategorySet
from catlingo.i18n import is_translatable


def uhook_assign_to_set(
    model: type[Categorized],
    category_set: CategorySet,
    categories: Any,  # noqa: ANN401
    obj: Categorized,
) -> list[Category]:
    """Add ``categories`` to the set in the locale of ``obj``.

    Returns the variants to link to ``obj``: one per input, in the object's
    locale when it is translatable, without blanks or repeats.
    """
    session = object_session(category_set)
    if session is None:
        raise CategoryError(f"Category set '{category_set.key}' is not attached to a session")

    locale = getattr(obj, "locale", None) if is_translatable(type(obj)) else None
    add_categories_to_set(session, category_set, categories, locale=locale)

    inputs = [
        item.strip() if isinstance(item, str) else item
        for item in as_category_list(categories)
        if not is_blank(item)
    ]
    return unique_categories(category_set.select_fittest(item, locale=locale) for item in inputs)


def uhook_categorized_with(model: type[Categorized], field: str, options: dict[str, Any]) -> None:
    """Share the association across all translations of a translatable model."""
    if is_translatable(model):
        model.category_association(field).options["translation_shared"] = True
