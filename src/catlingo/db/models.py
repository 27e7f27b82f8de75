"""SQLAlchemy models for catlingo."""

from datetime import datetime
from typing import Any

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    select,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, object_session, relationship
from sqlalchemy.sql import func

from catlingo.categories.errors import CategoryError, CategoryNotFoundError
from catlingo.hooks import dispatch
from catlingo.i18n.translatable import ANY_LOCALE, TranslatableMixin


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Locale(Base):
    """A content locale managed by the i18n extension."""

    __tablename__ = "locales"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    iso_code: Mapped[str] = mapped_column(String(16), nullable=False, unique=True)
    native_name: Mapped[str] = mapped_column(String(64), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class CategorySet(Base):
    """A named group of categories, e.g. "tags" or "sections"."""

    __tablename__ = "category_sets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    key: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_editable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    # Relationships
    categories: Mapped[list["Category"]] = relationship(
        "Category",
        back_populates="category_set",
        order_by="Category.name",
        cascade="all, delete-orphan",
    )

    def find_category(self, name: str, *, locale: str | None = None) -> "Category":
        """Find a category of this set by name.

        With ``locale`` only variants in that locale or ``"any"`` match.

        Raises:
            CategoryNotFoundError: If no category has that name
        """
        session = object_session(self)
        if session is None:
            raise CategoryError(f"Category set '{self.key}' is not attached to a session")

        stmt = select(Category).where(Category.category_set_id == self.id, Category.name == name)
        if locale is not None:
            stmt = stmt.where(Category.locale.in_([locale, ANY_LOCALE]))
        category = session.scalars(stmt.order_by(Category.id)).first()
        if category is None:
            raise CategoryNotFoundError(f"Category '{name}' not found in set '{self.key}'")
        return category

    def select_fittest(self, category: "Category | str", **options: Any) -> "Category | None":
        """Pick the variant of ``category`` to show (options: ``locale``)."""
        if isinstance(category, str):
            category = self.find_category(category, locale=options.get("locale"))
        return dispatch(self, "uhook_select_fittest", category, options)

    def category_identifier_for_name(self, name: str) -> int:
        return dispatch(self, "uhook_category_identifier_for_name", name)

    # Host defaults

    def uhook_select_fittest(self, category: "Category", options: dict[str, Any]) -> "Category":
        return category

    def uhook_category_identifier_for_name(self, name: str) -> int:
        try:
            return self.select_fittest(name).id
        except CategoryNotFoundError:
            return 0


class Category(TranslatableMixin, Base):
    """A taggable term belonging to a category set."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    category_set_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("category_sets.id", ondelete="CASCADE"), nullable=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    # Relationships
    category_set: Mapped["CategorySet | None"] = relationship(
        "CategorySet", back_populates="categories"
    )
    relations: Mapped[list["CategoryRelation"]] = relationship(
        "CategoryRelation", back_populates="category", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("idx_categories_content_locale", "content_id", "locale", unique=True),
        Index("idx_categories_set", "category_set_id"),
    )

    @classmethod
    def identifier_condition(cls, identifiers: list[int]) -> Any:  # noqa: ANN401
        """SQL condition matching the categories behind ``identifiers``."""
        return dispatch(cls, "uhook_category_identifier_condition", list(identifiers))

    @classmethod
    def search_conditions(cls, filters: dict[str, Any]) -> list[Any]:
        """Extra SQL conditions contributed for ``filters``."""
        return dispatch(cls, "uhook_filtered_search", filters) or []

    @classmethod
    def new_from_name(cls, name: str, **options: Any) -> "Category":
        return dispatch(cls, "uhook_new_from_name", name, options)

    def destroy(self) -> bool:
        """Delete this row only."""
        session = object_session(self)
        if session is None:
            raise CategoryError(f"Category {self.id} is not attached to a session")
        session.delete(self)
        session.flush()
        return True

    # Host defaults

    @classmethod
    def uhook_category_identifier_condition(cls, identifiers: list[int]) -> Any:  # noqa: ANN401
        return cls.id.in_(identifiers)

    @classmethod
    def uhook_filtered_search(cls, filters: dict[str, Any]) -> list[Any]:
        return []

    @classmethod
    def uhook_new_from_name(cls, name: str, options: dict[str, Any]) -> "Category":
        return cls(name=name)


class CategoryRelation(Base):
    """Links a category to an object of any categorized model."""

    __tablename__ = "category_relations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False
    )
    related_object_type: Mapped[str] = mapped_column(String(64), nullable=False)
    related_object_id: Mapped[int] = mapped_column(Integer, nullable=False)
    attr_name: Mapped[str] = mapped_column(String(64), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    locale: Mapped[str | None] = mapped_column(String(16), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    # Relationships
    category: Mapped["Category"] = relationship("Category", back_populates="relations")

    __table_args__ = (
        Index(
            "idx_category_relations_object",
            "related_object_type",
            "related_object_id",
            "attr_name",
        ),
    )
