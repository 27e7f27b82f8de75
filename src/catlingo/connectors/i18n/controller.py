"""Locale-aware request hooks for ``CategoriesController``."""

from typing import Any

from sqlalchemy import Select

from catlingo.admin.controller import PROCEED, CategoriesController, Outcome, Redirect
from catlingo.db.models import Category


def uhook_index_filters(controller: CategoriesController) -> dict[str, Any]:
    return {"locale": controller.params.get("filter_locale")}


def uhook_index_search_subject(controller: CategoriesController) -> Select[Any]:
    """One variant per category: current locale first, then "any", then others."""
    return Category.locale_scope(controller.current_locale, all_locales=True)


def uhook_new_category(controller: CategoriesController) -> Category | None:
    """Draft translation of ``from`` into the current locale, copying its fields."""
    content_id = controller.params.get("from")
    if content_id is None or content_id == "":
        return None
    return Category.translate(
        controller.session, int(content_id), controller.current_locale, copy_all=True
    )


def _same_locale_only(controller: CategoriesController, category: Category) -> Outcome:
    if category.is_locale(controller.current_locale):
        return PROCEED
    return Redirect(controller.categories_url())


def uhook_show_category(controller: CategoriesController, category: Category) -> Outcome:
    return _same_locale_only(controller, category)


def uhook_edit_category(controller: CategoriesController, category: Category) -> Outcome:
    return _same_locale_only(controller, category)


def uhook_create_category(controller: CategoriesController) -> Category:
    """New category in the current locale; a submitted locale is ignored."""
    values = controller.category_params()
    values.pop("locale", None)
    category = Category(**values)
    category.locale = controller.current_locale
    return category


def uhook_destroy_category(controller: CategoriesController, category: Category) -> bool:
    if controller.params.get("destroy_content"):
        return category.destroy_content()
    return category.destroy()
