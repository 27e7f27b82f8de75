"""Categorized models.

A model mixing in ``Categorized`` declares category associations with
``categorized_with``; each association draws its categories from one set and
stores links as ``CategoryRelation`` rows.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, object_session

from catlingo.categories.errors import CategoryError
from catlingo.categories.services import (
    add_categories_to_set,
    require_category_set,
    unique_categories,
)
from catlingo.db.models import Category, CategoryRelation, CategorySet
from catlingo.hooks import dispatch
from catlingo.i18n.translatable import TranslatableMixin

logger = logging.getLogger(__name__)


@dataclass
class CategoryAssociation:
    """Declared link between a categorized model and a category set.

    ``options`` is open for connectors to annotate (e.g. ``translation_shared``).
    """

    name: str
    set_key: str
    size: int | None = None
    options: dict[str, Any] = field(default_factory=dict)


class Categorized:
    """Mixin for models whose rows can be categorized.

    The model must have an integer ``id`` primary key.
    """

    __category_associations__: ClassVar[dict[str, CategoryAssociation]] = {}

    @classmethod
    def categorized_with(
        cls,
        field: str,
        *,
        from_set: str | None = None,
        size: int | None = None,
        **options: Any,
    ) -> CategoryAssociation:
        """Declare a category association named ``field``.

        Args:
            field: Association name
            from_set: Key of the category set (defaults to ``field``)
            size: Maximum number of categories per object
            options: Extra association options

        Returns:
            The association, after hooks have annotated it
        """
        association = CategoryAssociation(
            name=field, set_key=from_set or field, size=size, options=dict(options)
        )
        associations = dict(cls.__dict__.get("__category_associations__", {}))
        associations[field] = association
        cls.__category_associations__ = associations

        dispatch(cls, "uhook_categorized_with", field, association.options)
        return association

    @classmethod
    def category_association(cls, field: str) -> CategoryAssociation:
        for klass in cls.__mro__:
            association = klass.__dict__.get("__category_associations__", {}).get(field)
            if association is not None:
                return association
        raise CategoryError(f"{cls.__name__} is not categorized with '{field}'")

    @classmethod
    def assign_to_set(
        cls,
        category_set: CategorySet,
        categories: Any,  # noqa: ANN401
        obj: "Categorized",
    ) -> list[Category]:
        """Add ``categories`` to the set; returns those to link to ``obj``."""
        return dispatch(cls, "uhook_assign_to_set", category_set, categories, obj)

    def _categorized_session(self) -> Session:
        session = object_session(self)
        if session is None:
            raise CategoryError(f"{type(self).__name__} is not attached to a session")
        return session

    def _category_owner_ids(self, association: CategoryAssociation) -> list[int]:
        if association.options.get("translation_shared") and isinstance(self, TranslatableMixin):
            return [self.id, *(record.id for record in self.translations())]  # type: ignore[attr-defined]
        return [self.id]  # type: ignore[attr-defined]

    def set_categories(self, field: str, categories: Any) -> list[Category]:  # noqa: ANN401
        """Replace the categories linked through association ``field``.

        Raises:
            CategoryError: If more categories than the association allows
        """
        session = self._categorized_session()
        association = type(self).category_association(field)
        category_set = require_category_set(session, association.set_key)

        assigned = type(self).assign_to_set(category_set, categories, self)
        if association.size is not None and len(assigned) > association.size:
            raise CategoryError(
                f"'{field}' accepts at most {association.size} categories, got {len(assigned)}"
            )

        session.execute(
            delete(CategoryRelation).where(
                CategoryRelation.related_object_type == type(self).__name__,
                CategoryRelation.related_object_id.in_(self._category_owner_ids(association)),
                CategoryRelation.attr_name == field,
            )
        )
        for position, category in enumerate(assigned):
            session.add(
                CategoryRelation(
                    category=category,
                    related_object_type=type(self).__name__,
                    related_object_id=self.id,  # type: ignore[attr-defined]
                    attr_name=field,
                    position=position,
                    locale=getattr(self, "locale", None),
                )
            )
        session.flush()
        return assigned

    def get_categories(self, field: str) -> list[Category]:
        """Categories linked through association ``field``."""
        session = self._categorized_session()
        association = type(self).category_association(field)
        stmt = (
            select(Category)
            .join(CategoryRelation, CategoryRelation.category_id == Category.id)
            .where(
                CategoryRelation.related_object_type == type(self).__name__,
                CategoryRelation.related_object_id.in_(self._category_owner_ids(association)),
                CategoryRelation.attr_name == field,
            )
            .order_by(CategoryRelation.position, CategoryRelation.id)
        )
        return unique_categories(session.scalars(stmt).all())

    # Host defaults

    @classmethod
    def uhook_assign_to_set(
        cls,
        category_set: CategorySet,
        categories: Any,  # noqa: ANN401
        obj: "Categorized",
    ) -> list[Category]:
        session = object_session(category_set)
        if session is None:
            raise CategoryError(f"Category set '{category_set.key}' is not attached to a session")
        return unique_categories(add_categories_to_set(session, category_set, categories))

    @classmethod
    def uhook_categorized_with(cls, field: str, options: dict[str, Any]) -> None:
        return None
