"""Locale-aware presentation hooks for ``CategoryViewHelper``."""

import logging
from typing import Any

from sqlalchemy import select

from catlingo.admin.helpers import CategoryForm, CategoryViewHelper
from catlingo.db.models import Category, CategorySet, Locale
from catlingo.i18n import is_translatable
from catlingo.schemas.api import (
    ActionLink,
    FilterControl,
    FilterInfo,
    HiddenField,
    TranslationsPanel,
    ViewFragment,
)

logger = logging.getLogger(__name__)


def uhook_category_filters(helper: CategoryViewHelper, url_options: dict[str, Any]) -> list[FilterControl]:
    """Locale filter, one link per active locale."""
    locales = helper.session.scalars(
        select(Locale).where(Locale.is_active.is_(True)).order_by(Locale.id)
    ).all()
    return [
        helper.render_filter(
            "links",
            url_options,
            caption=helper.human_attribute_name("locale"),
            field="filter_locale",
            collection=list(locales),
            id_field="iso_code",
            name_field="native_name",
        )
    ]


def uhook_category_filters_info(helper: CategoryViewHelper) -> list[FilterInfo]:
    return [
        helper.filter_info(
            "string",
            helper.params,
            field="filter_locale",
            caption=helper.human_attribute_name("locale"),
        )
    ]


def uhook_edit_category_sidebar(helper: CategoryViewHelper, category: Category) -> TranslationsPanel:
    return helper.show_translations(category, hide_preview_link=True)


def uhook_new_category_sidebar(helper: CategoryViewHelper, category: Category) -> TranslationsPanel:
    return helper.show_translations(category, hide_preview_link=True)


def uhook_category_index_actions(
    helper: CategoryViewHelper, category_set: CategorySet, category: Category
) -> list[ActionLink]:
    """Row actions for a listing in the current locale.

    Variants from another locale can only be translated. "Remove" drops every
    translation; "Remove translation" drops just this variant and is offered
    only when siblings exist.
    """
    current = helper.current_locale
    actions: list[ActionLink] = []
    if category.is_locale(current):
        actions.append(helper.link_to(helper.t("view"), helper.category_url(category)))
        actions.append(helper.link_to(helper.t("edit"), helper.edit_category_url(category)))
    else:
        actions.append(
            helper.link_to(
                helper.t("translate"),
                helper.new_category_url(**{"from": category.content_id}),
            )
        )

    actions.append(
        helper.link_to(
            helper.t("remove"),
            helper.category_url(category, destroy_content=True),
            method="delete",
            confirm=helper.t("category.index.confirm_removal"),
        )
    )
    if category.is_locale(current, skip_any=True) and category.translations():
        actions.append(
            helper.link_to(
                helper.t("remove_translation"),
                helper.category_url(category),
                method="delete",
                confirm=helper.t("category.index.confirm_removal"),
            )
        )
    return actions


def uhook_category_form(helper: CategoryViewHelper, form: CategoryForm) -> list[HiddenField]:
    return [
        form.hidden_field("content_id"),
        helper.hidden_field_tag("from", helper.params.get("from")),
    ]


def uhook_category_partial(helper: CategoryViewHelper, category: Category) -> list[ViewFragment]:
    locale = helper.session.scalars(
        select(Locale).where(Locale.iso_code == category.locale)
    ).first()
    if locale is None:
        logger.debug("Category %s has no known locale (%s)", category.id, category.locale)
        label = helper.t("category.any")
    else:
        label = locale.native_name

    return [
        helper.content_tag("dt", f"{helper.human_attribute_name('locale')}:"),
        helper.content_tag("dd", label),
    ]


def uhook_categories_for_set(
    helper: CategoryViewHelper,
    category_set: CategorySet,
    obj: Any = None,  # noqa: ANN401
) -> list[Category]:
    """One variant per category of the set, in the locale of ``obj``.

    Objects that are not translatable use the request's locale.
    """
    if obj is not None and is_translatable(type(obj)) and getattr(obj, "locale", None):
        locale = obj.locale
    else:
        locale = helper.current_locale

    stmt = (
        Category.locale_scope(locale, all_locales=True)
        .where(Category.category_set_id == category_set.id)
        .order_by(Category.name, Category.id)
    )
    return list(helper.session.scalars(stmt).all())
