"""View helpers for the category admin screens.

Presentation hooks build pydantic view fragments (links, filters, hidden
fields) from the primitives here. They never write to the database.
"""

from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from catlingo.admin.controller import categories_path, with_query
from catlingo.db.models import Category, CategorySet
from catlingo.hooks import dispatch
from catlingo.schemas.api import (
    ActionLink,
    FilterControl,
    FilterInfo,
    FilterOption,
    HiddenField,
    TranslationEntry,
    TranslationsPanel,
    ViewFragment,
)

MESSAGES = {
    "view": "View",
    "edit": "Edit",
    "translate": "Translate",
    "remove": "Remove",
    "remove_translation": "Remove translation",
    "category.any": "Any",
    "category.index.confirm_removal": "Are you sure you want to remove this category?",
    "category.attributes.locale": "Locale",
    "category.attributes.name": "Name",
    "category.attributes.description": "Description",
}


def _as_list(value: Any) -> list[Any]:  # noqa: ANN401
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


class CategoryForm:
    """Form builder bound to one category."""

    def __init__(self, category: Category):
        self.category = category

    def hidden_field(self, attr: str) -> HiddenField:
        value = getattr(self.category, attr)
        return HiddenField(name=f"category[{attr}]", value=None if value is None else str(value))


class CategoryViewHelper:
    """Rendering context for one admin request."""

    def __init__(
        self,
        session: Session,
        category_set: CategorySet,
        *,
        params: Mapping[str, Any] | None = None,
        current_locale: str,
    ):
        self.session = session
        self.category_set = category_set
        self.params: Mapping[str, Any] = params or {}
        self.current_locale = current_locale

    def t(self, key: str) -> str:
        return MESSAGES.get(key, key)

    def human_attribute_name(self, attr: str) -> str:
        return self.t(f"category.attributes.{attr}")

    # URLs

    def categories_url(self, **query: Any) -> str:
        return categories_path(self.category_set, **query)

    def category_url(self, category: Category, **query: Any) -> str:
        return with_query(f"{categories_path(self.category_set)}/{category.id}", **query)

    def edit_category_url(self, category: Category) -> str:
        return f"{self.category_url(category)}/edit"

    def new_category_url(self, **query: Any) -> str:
        return with_query(f"{categories_path(self.category_set)}/new", **query)

    # Fragment primitives

    def link_to(
        self,
        label: str,
        href: str,
        *,
        method: str = "get",
        confirm: str | None = None,
    ) -> ActionLink:
        return ActionLink(label=label, href=href, method=method, confirm=confirm)

    def render_filter(
        self,
        kind: str,
        url_options: Mapping[str, Any],
        *,
        caption: str,
        field: str,
        collection: list[Any],
        id_field: str,
        name_field: str,
    ) -> FilterControl:
        return FilterControl(
            kind=kind,
            field=field,
            caption=caption,
            url=self.categories_url(**dict(url_options)),
            options=[
                FilterOption(value=str(getattr(item, id_field)), label=str(getattr(item, name_field)))
                for item in collection
            ],
        )

    def filter_info(
        self,
        kind: str,
        params: Mapping[str, Any],
        *,
        field: str,
        caption: str,
    ) -> FilterInfo:
        value = params.get(field)
        return FilterInfo(kind=kind, field=field, caption=caption, value=value)

    def show_translations(self, category: Category, *, hide_preview_link: bool = False) -> TranslationsPanel:
        """Panel listing the other variants of ``category``.

        Unsaved drafts list every stored variant of their ``content_id``.
        """
        if category.id is not None:
            translations = category.translations()
        elif category.content_id is not None:
            stmt = (
                select(Category)
                .where(Category.content_id == category.content_id)
                .order_by(Category.id)
            )
            translations = list(self.session.scalars(stmt).all())
        else:
            translations = []

        return TranslationsPanel(
            content_id=category.content_id,
            translations=[
                TranslationEntry(
                    locale=record.locale,
                    category_id=record.id,
                    href=self.category_url(record),
                )
                for record in translations
            ],
            hide_preview_link=hide_preview_link,
        )

    def hidden_field_tag(self, name: str, value: Any) -> HiddenField:  # noqa: ANN401
        return HiddenField(name=name, value=None if value is None else str(value))

    def content_tag(self, tag: str, content: str) -> ViewFragment:
        return ViewFragment(tag=tag, content=content)

    # Hook entry points

    def category_filters(self, url_options: Mapping[str, Any] | None = None) -> list[FilterControl]:
        return _as_list(dispatch(self, "uhook_category_filters", dict(url_options or {})))

    def category_filters_info(self) -> list[FilterInfo]:
        return _as_list(dispatch(self, "uhook_category_filters_info"))

    def edit_category_sidebar(self, category: Category) -> TranslationsPanel | None:
        return dispatch(self, "uhook_edit_category_sidebar", category)

    def new_category_sidebar(self, category: Category) -> TranslationsPanel | None:
        return dispatch(self, "uhook_new_category_sidebar", category)

    def category_index_actions(self, category: Category) -> list[ActionLink]:
        return _as_list(dispatch(self, "uhook_category_index_actions", self.category_set, category))

    def category_form(self, form: CategoryForm) -> list[HiddenField]:
        return _as_list(dispatch(self, "uhook_category_form", form))

    def category_partial(self, category: Category) -> list[ViewFragment]:
        return _as_list(dispatch(self, "uhook_category_partial", category))

    def categories_for_set(self, category_set: CategorySet, obj: Any = None) -> list[Category]:  # noqa: ANN401
        return _as_list(dispatch(self, "uhook_categories_for_set", category_set, obj))

    # Host defaults

    def uhook_category_filters(self, url_options: dict[str, Any]) -> list[FilterControl]:
        return []

    def uhook_category_filters_info(self) -> list[FilterInfo]:
        return []

    def uhook_edit_category_sidebar(self, category: Category) -> TranslationsPanel | None:
        return None

    def uhook_new_category_sidebar(self, category: Category) -> TranslationsPanel | None:
        return None

    def uhook_category_index_actions(
        self, category_set: CategorySet, category: Category
    ) -> list[ActionLink]:
        return [
            self.link_to(self.t("view"), self.category_url(category)),
            self.link_to(self.t("edit"), self.edit_category_url(category)),
            self.link_to(
                self.t("remove"),
                self.category_url(category),
                method="delete",
                confirm=self.t("category.index.confirm_removal"),
            ),
        ]

    def uhook_category_form(self, form: CategoryForm) -> list[HiddenField]:
        return []

    def uhook_category_partial(self, category: Category) -> list[ViewFragment]:
        return []

    def uhook_categories_for_set(self, category_set: CategorySet, obj: Any = None) -> list[Category]:  # noqa: ANN401
        return list(category_set.categories)
