"""Category management service."""

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from catlingo.categories.errors import (
    CategoryNotFoundError,
    CategorySetNotEditableError,
    CategorySetNotFoundError,
)
from catlingo.db.models import Category, CategorySet

logger = logging.getLogger(__name__)


def as_category_list(categories: Any) -> list[Any]:  # noqa: ANN401
    """Normalize a single category input or an iterable of them to a list."""
    if categories is None:
        return []
    if isinstance(categories, (str, Category)):
        return [categories]
    return list(categories)


def is_blank(item: Any) -> bool:  # noqa: ANN401
    return item is None or (isinstance(item, str) and not item.strip())


def unique_categories(categories: Iterable[Category | None]) -> list[Category]:
    """Drop None and repeated categories, keeping first-seen order."""
    seen: set[int] = set()
    result: list[Category] = []
    for category in categories:
        if category is None or id(category) in seen:
            continue
        seen.add(id(category))
        result.append(category)
    return result


# =============================================================================
# Category sets
# =============================================================================


def get_category_set(session: Session, key: str) -> CategorySet | None:
    """Get a category set by key."""
    return session.scalars(select(CategorySet).where(CategorySet.key == key)).one_or_none()


def require_category_set(session: Session, key: str) -> CategorySet:
    """Get a category set by key.

    Raises:
        CategorySetNotFoundError: If no set has that key
    """
    category_set = get_category_set(session, key)
    if category_set is None:
        raise CategorySetNotFoundError(f"Category set '{key}' not found")
    return category_set


def create_category_set(
    session: Session,
    key: str,
    name: str,
    *,
    is_editable: bool = True,
) -> CategorySet:
    """Create a new category set.

    Raises:
        ValueError: If a set with this key already exists
    """
    if get_category_set(session, key) is not None:
        raise ValueError(f"Category set '{key}' already exists")

    category_set = CategorySet(key=key, name=name, is_editable=is_editable)
    session.add(category_set)
    session.flush()
    return category_set


def list_category_sets(session: Session) -> list[CategorySet]:
    result = session.scalars(select(CategorySet).order_by(CategorySet.key))
    return list(result.all())


# =============================================================================
# Categories
# =============================================================================


def get_category(session: Session, category_set: CategorySet, category_id: int) -> Category:
    """Get a category of a set by ID.

    Raises:
        CategoryNotFoundError: If the set has no such category
    """
    category = session.scalars(
        select(Category).where(
            Category.id == category_id, Category.category_set_id == category_set.id
        )
    ).one_or_none()
    if category is None:
        raise CategoryNotFoundError(f"Category {category_id} not found in set '{category_set.key}'")
    return category


def find_by_identifiers(session: Session, identifiers: Iterable[int]) -> list[Category]:
    """Get every category behind the given identifiers.

    Without a connector identifiers are row IDs; connectors may redefine them.
    """
    stmt = (
        select(Category)
        .where(Category.identifier_condition(list(identifiers)))
        .order_by(Category.id)
    )
    return list(session.scalars(stmt).all())


def filtered_search(
    session: Session,
    filters: dict[str, Any],
    *,
    subject: Select[Any] | None = None,
    category_set: CategorySet | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> list[Category]:
    """Search categories.

    Args:
        session: Database session
        filters: Filter name to value. ``text`` matches names; other filters
            are translated into conditions by the installed hooks.
        subject: Base select to apply filters to (defaults to all categories)
        category_set: Restrict to one set
        limit: Maximum number of results
        offset: Offset for pagination

    Returns:
        List of categories ordered by name
    """
    stmt = subject if subject is not None else select(Category)

    if category_set is not None:
        stmt = stmt.where(Category.category_set_id == category_set.id)

    text = filters.get("text")
    if not is_blank(text):
        stmt = stmt.where(Category.name.ilike(f"%{text.strip()}%"))

    conditions = Category.search_conditions(filters)
    if conditions:
        stmt = stmt.where(*conditions)

    stmt = stmt.order_by(Category.name, Category.id).offset(offset)
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(session.scalars(stmt).all())


def add_categories_to_set(
    session: Session,
    category_set: CategorySet,
    categories: Any,  # noqa: ANN401
    *,
    locale: str | None = None,
) -> list[Category]:
    """Add categories to a set, creating the ones given by a new name.

    Args:
        session: Database session
        category_set: Target set
        categories: Category records and/or names; blank names are skipped
        locale: Locale new categories are created in, and names are looked up in

    Returns:
        The categories, in input order

    Raises:
        CategorySetNotEditableError: If a name is new and the set is not editable
    """
    result: list[Category] = []
    for item in as_category_list(categories):
        if is_blank(item):
            continue

        if isinstance(item, Category):
            if item.category_set_id != category_set.id:
                item.category_set = category_set
            result.append(item)
            continue

        name = str(item).strip()
        try:
            category = category_set.find_category(name, locale=locale)
        except CategoryNotFoundError:
            if not category_set.is_editable:
                raise CategorySetNotEditableError(
                    f"Cannot add '{name}' to non-editable set '{category_set.key}'"
                ) from None
            category = Category.new_from_name(name, locale=locale)
            category.category_set = category_set
            session.add(category)
            logger.debug("Created category '%s' in set '%s'", name, category_set.key)
        result.append(category)

    session.flush()
    return result


def create_category(session: Session, category_set: CategorySet, category: Category) -> Category:
    """Persist a new category in a set.

    Raises:
        CategorySetNotEditableError: If the set does not accept new categories
    """
    if not category_set.is_editable:
        raise CategorySetNotEditableError(f"Category set '{category_set.key}' is not editable")
    category.category_set = category_set
    session.add(category)
    session.flush()
    return category


def update_category(
    session: Session,
    category: Category,
    *,
    name: str | None = None,
    description: str | None = None,
) -> Category:
    """Update a category's name and/or description."""
    if name is not None:
        category.name = name
    if description is not None:
        category.description = description
    session.flush()
    return category
