"""Locale-aware hooks for ``Category``."""

from typing import Any

from catlingo.db.models import Category
from catlingo.i18n import ANY_LOCALE


def uhook_category_identifier_condition(cls: type[Category], identifiers: list[int]) -> Any:  # noqa: ANN401
    """Condition selecting every locale variant of the given content IDs."""
    return cls.content_id.in_(identifiers)


def uhook_filtered_search(cls: type[Category], filters: dict[str, Any]) -> list[Any]:
    """Conditions for the filters this connector understands.

    Blank values and unknown filter names are left to the host.
    """
    conditions = []
    for name, value in filters.items():
        if value is None or value == "":
            continue
        if name == "locale":
            conditions.append(cls.locale == value)
    return conditions


def uhook_new_from_name(cls: type[Category], name: str, options: dict[str, Any]) -> Category:
    return cls(name=name, locale=str(options.get("locale") or ANY_LOCALE))
