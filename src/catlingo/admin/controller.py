"""Admin controller for the categories of one set.

Each action hands the locale-sensitive decisions to ``uhook_*`` operations;
the defaults below are used when no connector overrides them.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from catlingo.categories.services import create_category, filtered_search, update_category
from catlingo.db.models import Category, CategorySet
from catlingo.hooks import dispatch

logger = logging.getLogger(__name__)

# Submitted category fields a controller may assign
CATEGORY_FIELDS = ("name", "description", "locale", "content_id")


class Proceed:
    """Guard outcome: carry on with the action."""

    def __repr__(self) -> str:
        return "PROCEED"


PROCEED = Proceed()


@dataclass(frozen=True)
class Redirect:
    """Guard outcome: stop and send the client to ``location``."""

    location: str


Outcome = Proceed | Redirect


def with_query(path: str, **query: Any) -> str:
    """Append the non-None ``query`` values to ``path``."""
    values = {
        key: str(value).lower() if isinstance(value, bool) else value
        for key, value in query.items()
        if value is not None
    }
    return f"{path}?{urlencode(values)}" if values else path


def categories_path(category_set: CategorySet, **query: Any) -> str:
    return with_query(f"/category_sets/{category_set.key}/categories", **query)


class CategoriesController:
    """Handles one request against the categories of ``category_set``.

    Args:
        session: Database session
        category_set: Set the request is scoped to
        params: Request parameters (``filter_locale``, ``from``,
            ``destroy_content``, ``category`` and so on)
        current_locale: Display locale of the request
    """

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

    def categories_url(self) -> str:
        return categories_path(self.category_set)

    def category_params(self) -> dict[str, Any]:
        """Submitted category fields, restricted to the assignable ones."""
        submitted = self.params.get("category") or {}
        return {key: submitted[key] for key in CATEGORY_FIELDS if key in submitted}

    # Actions

    def index(self, *, limit: int | None = None, offset: int = 0) -> list[Category]:
        filters = {"text": self.params.get("filter_text")}
        filters.update(dispatch(self, "uhook_index_filters") or {})
        subject = dispatch(self, "uhook_index_search_subject")
        return filtered_search(
            self.session,
            filters,
            subject=subject,
            category_set=self.category_set,
            limit=limit,
            offset=offset,
        )

    def show(self, category: Category) -> Outcome:
        return self._guard("uhook_show_category", category)

    def edit(self, category: Category) -> Outcome:
        return self._guard("uhook_edit_category", category)

    def new(self) -> Category:
        """Build an unsaved category for the new-category form."""
        category = dispatch(self, "uhook_new_category")
        if category is None:
            category = Category()
        category.category_set_id = self.category_set.id
        return category

    def create(self) -> Category:
        category = dispatch(self, "uhook_create_category")
        return create_category(self.session, self.category_set, category)

    def update(self, category: Category) -> Category:
        values = self.category_params()
        return update_category(
            self.session,
            category,
            name=values.get("name"),
            description=values.get("description"),
        )

    def destroy(self, category: Category) -> bool:
        destroyed = dispatch(self, "uhook_destroy_category", category)
        logger.info("Destroy category %s in set '%s': %s", category.id, self.category_set.key, destroyed)
        return destroyed

    def _guard(self, hook: str, category: Category) -> Outcome:
        outcome = dispatch(self, hook, category)
        return PROCEED if outcome is None else outcome

    # Host defaults

    def uhook_index_filters(self) -> dict[str, Any]:
        return {}

    def uhook_index_search_subject(self) -> Select[Any]:
        return select(Category)

    def uhook_new_category(self) -> Category | None:
        return None

    def uhook_show_category(self, category: Category) -> Outcome:
        return PROCEED

    def uhook_edit_category(self, category: Category) -> Outcome:
        return PROCEED

    def uhook_create_category(self) -> Category:
        return Category(**self.category_params())

    def uhook_destroy_category(self, category: Category) -> bool:
        return category.destroy()
